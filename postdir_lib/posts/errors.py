"""Error kinds surfaced by the post service.

The set is closed: every failure leaving `PostService` is one of the three
subclasses below. HTTP status codes are attached here but only read by the
exception handler registered in `postdir_lib.main`.
"""
from typing import Dict


class PostServiceError(Exception):
    code = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.code, "message": self.message}


class InvalidArgumentError(PostServiceError):
    code = "invalid_argument"
    status_code = 400


class PostNotFoundError(PostServiceError):
    code = "not_found"
    status_code = 404


class InternalError(PostServiceError):
    code = "internal"
    status_code = 500

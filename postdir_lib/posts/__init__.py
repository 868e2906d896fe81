"""Posts module: the post directory service and its HTTP surface."""

from .errors import (
    PostServiceError,
    InvalidArgumentError,
    PostNotFoundError,
    InternalError,
)
from .interfaces import PostServiceProtocol, PostStreamProtocol
from .models import Post, PostUpdate, DeletedPost
from .post_service import PostService, PostStream, parse_post_id

__all__ = [
    "PostServiceError",
    "InvalidArgumentError",
    "PostNotFoundError",
    "InternalError",
    "PostServiceProtocol",
    "PostStreamProtocol",
    "Post",
    "PostUpdate",
    "DeletedPost",
    "PostService",
    "PostStream",
    "parse_post_id",
]

from typing import Protocol, Any, Mapping, Optional, runtime_checkable

from bson import ObjectId

from .base import PostCursor


@runtime_checkable
class PostStoreProtocol(Protocol):
    """Store protocol mirroring `postdir_lib.storage.PostStore`.

    Implementations should follow the semantics documented on the abstract
    base class in `postdir_lib.storage.base` (None for missing documents,
    StorageError for backend failures, thread-safety).
    """

    def find_all(self) -> PostCursor: ...

    def find_one(self, oid: ObjectId) -> Optional[Mapping[str, Any]]: ...

    def replace_one(self, oid: ObjectId, document: Mapping[str, Any]) -> int: ...

    def delete_one(self, oid: ObjectId) -> int: ...

    def insert_one(self, document: Mapping[str, Any]) -> ObjectId: ...

    def ping(self) -> None: ...

    def close(self) -> None: ...

"""PostService: CRUD access to the post collection."""
from __future__ import annotations

import logging
from threading import RLock
from typing import Optional

from bson import ObjectId

from postdir_lib.posts.errors import (
    InternalError,
    InvalidArgumentError,
    PostNotFoundError,
)
from postdir_lib.posts.interfaces import PostServiceProtocol
from postdir_lib.posts.models import Post
from postdir_lib.storage.base import PostCursor, StorageError
from postdir_lib.storage.interfaces import PostStoreProtocol

logger = logging.getLogger(__name__)


def parse_post_id(post_id: str) -> ObjectId:
    """Parse a client-supplied id into the store's ObjectId format.

    Only 24-character hex strings are accepted.
    """
    if not isinstance(post_id, str) or not ObjectId.is_valid(post_id):
        raise InvalidArgumentError("Cannot parse ID")
    return ObjectId(post_id)


class PostStream:
    """Lazy iterator over a store cursor, decoding each document to a Post.

    The stream ends in one of two terminal states: exhausted (iteration
    stops) or failed (one InternalError is raised). Either way the cursor
    has been closed and further iteration yields nothing.

    `close()` may be called from another thread (the server closes the
    stream when a client disconnects); it waits for an in-flight `next()`
    to return before closing the cursor.
    """

    def __init__(self, cursor: PostCursor):
        self._cursor = cursor
        self._closed = False
        self._lock = RLock()
        self.delivered = 0

    def __iter__(self):
        return self

    def __next__(self) -> Post:
        with self._lock:
            if self._closed:
                raise StopIteration
            try:
                doc = next(self._cursor)
            except StopIteration:
                self.close()
                raise
            except StorageError as e:
                self.close()
                raise InternalError(f"Unknown internal error: {e}") from e
            try:
                post = Post.from_document(doc)
            except ValueError as e:
                self.close()
                raise InternalError(f"Error while decoding data from MongoDB: {e}") from e
            self.delivered += 1
            return post

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._cursor.close()
            except StorageError as e:
                # The stream outcome is already decided; a close failure only gets logged.
                logger.error("Error while closing a cursor: %s", e)

    def __enter__(self) -> "PostStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class PostService(PostServiceProtocol):
    """Service exposing the four post operations over a `PostStore`.

    The store is passed in at construction; the service keeps no other
    state, so one instance can serve concurrent requests.

    `update_post` is a read-then-replace without any lock or version
    check: a concurrent writer's change made between the read and the
    replace is silently overwritten (last writer wins on the whole post).
    """

    def __init__(self, store: PostStoreProtocol):
        self._store = store

    def stream_posts(self) -> PostStream:
        logger.info("Get posts request...")
        try:
            cursor = self._store.find_all()
        except StorageError as e:
            raise InternalError(f"Unknown internal error: {e}") from e
        return PostStream(cursor)

    def read_post(self, post_id: str) -> Post:
        logger.info("Read post request...")
        oid = parse_post_id(post_id)
        return self._fetch(oid, f"Cannot find post with specified ID: {post_id}")

    def update_post(self, post_id: str, owner_id: str, title: str, body: str) -> Post:
        logger.info("Update post request...")
        oid = parse_post_id(post_id)
        current = self._fetch(oid, f"Can not find a post with given ID: {post_id}")

        updated = current.model_copy(update={"owner_id": owner_id, "title": title, "body": body})
        try:
            matched = self._store.replace_one(oid, updated.to_document())
        except StorageError as e:
            raise InternalError(f"Can not update object in the Db: {e}") from e
        if matched == 0:
            logger.warning("Post %s was removed before it could be replaced", post_id)
        return updated

    def delete_post(self, post_id: str) -> str:
        logger.info("Delete post request...")
        oid = parse_post_id(post_id)
        try:
            deleted = self._store.delete_one(oid)
        except StorageError as e:
            raise InternalError(f"Can not delete object in the Db: {e}") from e
        if deleted == 0:
            raise PostNotFoundError(f"Can not find post in the Db: {post_id}")
        return post_id

    def _fetch(self, oid: ObjectId, missing_message: str) -> Post:
        try:
            doc: Optional[dict] = self._store.find_one(oid)
        except StorageError as e:
            raise InternalError(f"Unknown internal error: {e}") from e
        if doc is None:
            raise PostNotFoundError(missing_message)
        try:
            return Post.from_document(doc)
        except ValueError as e:
            raise InternalError(f"Error while decoding data from MongoDB: {e}") from e

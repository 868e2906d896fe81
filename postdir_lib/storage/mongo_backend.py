"""MongoDB-backed post store using pymongo.

Every pymongo failure is re-raised as `StorageError`, including failures
surfacing while a cursor is being iterated. BSON decode errors (invalid
UTF-8, truncated documents) are not PyMongoError subclasses and are
wrapped the same way.
"""
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

from bson import ObjectId
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .base import PostStore, StorageError

logger = logging.getLogger(__name__)

DRIVER_ERRORS = (PyMongoError, BSONError)


class MongoCursor:
    """Wraps a pymongo cursor so iteration errors become StorageError."""

    def __init__(self, cursor):
        self._cursor = cursor

    def __iter__(self):
        return self

    def __next__(self) -> Mapping[str, Any]:
        try:
            return next(self._cursor)
        except DRIVER_ERRORS as e:
            raise StorageError(f"Cursor iteration failed: {e}") from e

    def close(self) -> None:
        try:
            self._cursor.close()
        except DRIVER_ERRORS as e:
            raise StorageError(f"Error while closing a cursor: {e}") from e


class MongoPostStore(PostStore):
    def __init__(
        self,
        uri: str = "mongodb://localhost:27017",
        database: str = "mydb",
        collection: str = "posts",
        server_selection_timeout_ms: int = 5000,
        client: Optional[Any] = None,
    ) -> None:
        # MongoClient connects lazily; nothing is sent until the first operation.
        self._client = client if client is not None else MongoClient(
            uri, serverSelectionTimeoutMS=server_selection_timeout_ms
        )
        self._collection = self._client[database][collection]
        self._description = f"{database}.{collection}"

    def find_all(self) -> MongoCursor:
        try:
            return MongoCursor(self._collection.find({}))
        except DRIVER_ERRORS as e:
            raise StorageError(f"find on {self._description} failed: {e}") from e

    def find_one(self, oid: ObjectId) -> Optional[Mapping[str, Any]]:
        try:
            return self._collection.find_one({"_id": oid})
        except DRIVER_ERRORS as e:
            raise StorageError(f"find_one on {self._description} failed: {e}") from e

    def replace_one(self, oid: ObjectId, document: Mapping[str, Any]) -> int:
        try:
            result = self._collection.replace_one({"_id": oid}, dict(document))
        except DRIVER_ERRORS as e:
            raise StorageError(f"replace_one on {self._description} failed: {e}") from e
        return result.matched_count

    def delete_one(self, oid: ObjectId) -> int:
        try:
            result = self._collection.delete_one({"_id": oid})
        except DRIVER_ERRORS as e:
            raise StorageError(f"delete_one on {self._description} failed: {e}") from e
        return result.deleted_count

    def insert_one(self, document: Mapping[str, Any]) -> ObjectId:
        try:
            result = self._collection.insert_one(dict(document))
        except DRIVER_ERRORS as e:
            raise StorageError(f"insert_one on {self._description} failed: {e}") from e
        return result.inserted_id

    def ping(self) -> None:
        try:
            self._client.admin.command("ping")
        except DRIVER_ERRORS as e:
            raise StorageError(f"MongoDB is not reachable: {e}") from e

    def close(self) -> None:
        logger.info("Closing MongoDB connection")
        self._client.close()

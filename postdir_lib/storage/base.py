"""Post store interface definitions.

Defines the PostStore abstract class used by the post service to reach
the document database. Implementations translate backend failures into
`StorageError` so callers only ever handle one exception type.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Iterator, Mapping, Optional, Protocol

from bson import ObjectId


class StorageError(Exception):
    """Raised by store implementations for any backend failure."""


class PostCursor(Protocol):
    """Iterator over raw post documents that must be closed when done."""

    def __iter__(self) -> Iterator[Mapping[str, Any]]: ...

    def __next__(self) -> Mapping[str, Any]: ...

    def close(self) -> None: ...


class PostStore(ABC):
    """Abstract post store.

    Implementations must be thread-safe: request handlers run concurrently
    in the server's worker threads and share one store instance.
    """

    @abstractmethod
    def find_all(self) -> PostCursor:
        """Open a cursor over every document in store-native order."""

    @abstractmethod
    def find_one(self, oid: ObjectId) -> Optional[Mapping[str, Any]]:
        """Return the document with `_id == oid`, or None when absent."""

    @abstractmethod
    def replace_one(self, oid: ObjectId, document: Mapping[str, Any]) -> int:
        """Replace the document with `_id == oid`; return the matched count."""

    @abstractmethod
    def delete_one(self, oid: ObjectId) -> int:
        """Delete the document with `_id == oid`; return the deleted count."""

    @abstractmethod
    def insert_one(self, document: Mapping[str, Any]) -> ObjectId:
        """Insert a document and return its assigned id.

        Not reachable through the HTTP API; used for seeding and tests.
        """

    @abstractmethod
    def ping(self) -> None:
        """Raise `StorageError` if the store is unreachable."""

    def close(self) -> None:
        """Release connections held by the store."""

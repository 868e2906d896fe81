"""Simple memory-backed post store

This backend keeps documents in a dict keyed by ObjectId. Insertion order
is the traversal order of `find_all`, mirroring natural order in MongoDB.
"""
from threading import RLock
from typing import Any, Dict, Iterator, List, Mapping, Optional

from bson import ObjectId

from .base import PostStore


class MemoryCursor:
    """Cursor over a snapshot of the stored documents."""

    def __init__(self, documents: List[Dict[str, Any]]):
        self._it: Iterator[Dict[str, Any]] = iter(documents)
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self) -> Dict[str, Any]:
        if self.closed:
            raise StopIteration
        return next(self._it)

    def close(self) -> None:
        self.closed = True


class MemoryPostStore(PostStore):
    def __init__(self):
        self._lock = RLock()
        self._docs: Dict[ObjectId, Dict[str, Any]] = {}

    def find_all(self) -> MemoryCursor:
        with self._lock:
            return MemoryCursor([dict(d) for d in self._docs.values()])

    def find_one(self, oid: ObjectId) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self._docs.get(oid)
            return dict(doc) if doc is not None else None

    def replace_one(self, oid: ObjectId, document: Mapping[str, Any]) -> int:
        with self._lock:
            if oid not in self._docs:
                return 0
            new = dict(document)
            new['_id'] = oid
            self._docs[oid] = new
            return 1

    def delete_one(self, oid: ObjectId) -> int:
        with self._lock:
            return 1 if self._docs.pop(oid, None) is not None else 0

    def insert_one(self, document: Mapping[str, Any]) -> ObjectId:
        doc = dict(document)
        oid = doc.get('_id') or ObjectId()
        doc['_id'] = oid
        with self._lock:
            self._docs[oid] = doc
        return oid

    def ping(self) -> None:
        return

    def close(self) -> None:
        # Nothing to release; data stays available for the process lifetime.
        return

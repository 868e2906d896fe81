from typing import Any, Dict, List, Optional
from starlette.testclient import TestClient
from bson import ObjectId
from postdir_lib.services.container import ServiceContainer
from postdir_lib.storage.memory_backend import MemoryPostStore


def register_service_on_client(client: TestClient, name: str, instance: Any) -> None:
    """Register a service instance into the app's DI container for tests.

    Usage in tests:
        from tests.helpers import register_service_on_client
        register_service_on_client(client, 'post_service', fake_post_svc)
    """
    container = getattr(client.app.state, 'container', None)
    if container is None:
        container = ServiceContainer()
        client.app.state.container = container

    container.register_singleton(name, instance)


class TrackingCursor:
    """Cursor stand-in that can fail at a given position and records close()."""

    def __init__(self, docs: List[Dict[str, Any]], fail_at: Optional[int] = None, error: Optional[Exception] = None):
        self._docs = list(docs)
        self._pos = 0
        self._fail_at = fail_at
        self._error = error
        self.close_calls = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self._fail_at is not None and self._pos == self._fail_at:
            raise self._error
        if self._pos >= len(self._docs):
            raise StopIteration
        doc = self._docs[self._pos]
        self._pos += 1
        return doc

    def close(self) -> None:
        self.close_calls += 1


class RecordingStore(MemoryPostStore):
    """Memory store that records every primitive invoked on it."""

    def __init__(self):
        super().__init__()
        self.calls: List[str] = []
        self.next_cursor: Optional[TrackingCursor] = None

    def find_all(self):
        self.calls.append('find_all')
        if self.next_cursor is not None:
            return self.next_cursor
        return super().find_all()

    def find_one(self, oid: ObjectId):
        self.calls.append('find_one')
        return super().find_one(oid)

    def replace_one(self, oid, document):
        self.calls.append('replace_one')
        return super().replace_one(oid, document)

    def delete_one(self, oid):
        self.calls.append('delete_one')
        return super().delete_one(oid)


def make_doc(owner: str, title: str = 't', body: str = 'b', oid: Optional[ObjectId] = None) -> Dict[str, Any]:
    return {'_id': oid or ObjectId(), 'user_id': owner, 'title': title, 'body': body}

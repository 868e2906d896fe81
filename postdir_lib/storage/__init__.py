"""Storage abstraction package for the post directory."""

from typing import Any, Mapping, Optional

from .base import PostStore, StorageError
from .memory_backend import MemoryPostStore
from .mongo_backend import MongoPostStore


def create_store(backend: str = "mongo", config: Optional[Mapping[str, Any]] = None) -> PostStore:
    """Build a post store for `backend` ('mongo' or 'memory').

    `config` is the loaded server configuration; only the Mongo backend
    reads it.
    """
    if backend == "memory":
        return MemoryPostStore()
    if backend == "mongo":
        cfg = dict(config or {})
        return MongoPostStore(
            uri=cfg.get("mongo_uri", "mongodb://localhost:27017"),
            database=cfg.get("database", "mydb"),
            collection=cfg.get("collection", "posts"),
            server_selection_timeout_ms=int(cfg.get("server_selection_timeout_ms", 5000)),
        )
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = ["PostStore", "StorageError", "MemoryPostStore", "MongoPostStore", "create_store"]

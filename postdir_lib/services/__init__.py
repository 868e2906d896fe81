"""Services package: DI container and protocol re-exports."""
from .container import ServiceContainer
from .interfaces import (
    PostStoreProtocol,
    PostServiceProtocol,
    PostStreamProtocol,
)

__all__ = [
    "ServiceContainer",
    "PostStoreProtocol",
    "PostServiceProtocol",
    "PostStreamProtocol",
]

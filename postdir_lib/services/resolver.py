"""Request-time lookup of services registered on `app.state.container`.

A missing registration is a server misconfiguration, reported through the
post error taxonomy as `internal` so clients always get the same error
body shape.
"""
from typing import Any, Optional
from starlette.requests import Request

from postdir_lib.posts.errors import InternalError
from postdir_lib.posts.interfaces import PostServiceProtocol
from postdir_lib.storage.interfaces import PostStoreProtocol


def resolve_service(request: Request, name: str) -> Any:
    """Resolve a named service, raising InternalError when it is not registered."""
    container = getattr(request.app.state, 'container', None)
    if container is None:
        raise InternalError("Service container not configured")
    try:
        return container.get(name)
    except KeyError:
        raise InternalError(f"Service '{name}' not configured")


def resolve_optional_service(request: Request, name: str) -> Any:
    """Resolve a service, returning None if it is not registered."""
    container = getattr(request.app.state, 'container', None)
    if container is None:
        return None
    try:
        return container.get(name)
    except KeyError:
        return None


def get_post_service(request: Request) -> PostServiceProtocol:
    return resolve_service(request, 'post_service')


def get_post_store(request: Request) -> Optional[PostStoreProtocol]:
    """The store backing the app, or None when running without one (health only)."""
    return resolve_optional_service(request, 'post_store')

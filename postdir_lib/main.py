"""Application factory for the Post Directory FastAPI app.

This module exposes `create_app(config: Config) -> FastAPI` which performs
all setup (logging, config loading, store/service composition, error
handlers and router registration). Nothing happens at import time so tests
can construct isolated apps.

To create an app for production or local runs:

    from postdir_lib.main import create_app, Config
    app = create_app(Config())

The store is pinged when the app starts serving and closed when it shuts
down, so an unreachable database prevents startup.
"""
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from postdir_lib.config.config import load_server_config
from postdir_lib.logging_config import configure_logging
from postdir_lib.posts.errors import PostServiceError
from postdir_lib.storage import create_store, PostStore


@dataclass
class Config:
    config_path: Optional[str] = None
    storage_backend: str = "mongo"
    # Pre-built store; takes precedence over `storage_backend` when set
    store: Optional[PostStore] = None


def create_app(config: Config) -> FastAPI:
    """Create and return a configured FastAPI application."""
    server_cfg = load_server_config(Path(config.config_path) if config.config_path else None)
    logger = configure_logging(server_cfg.log_level)

    # Compose store and service
    store = config.store if config.store is not None else create_store(
        backend=config.storage_backend,
        config=server_cfg.to_dict(),
    )

    from postdir_lib.posts import PostService
    post_service = PostService(store)

    from postdir_lib.services import ServiceContainer
    container = ServiceContainer()
    container.register_singleton("server_config", server_cfg)
    container.register_singleton("post_store", store)
    container.register_singleton("post_service", post_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Connecting to the post store")
        store.ping()
        logger.info("Starting Posts CRUD Service...")
        try:
            yield
        finally:
            store.close()
            logger.info("Post store connection closed")

    app = FastAPI(title="Post Directory Server", lifespan=lifespan)
    # All runtime code resolves services from this container.
    app.state.container = container

    # Error kinds become HTTP statuses here and nowhere else
    @app.exception_handler(PostServiceError)
    async def post_service_error_handler(request: Request, exc: PostServiceError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # Router registration: import routers here to avoid import-time side-effects
    from postdir_lib.posts.api import router as posts_router
    from postdir_lib.server.api import router as server_router

    app.include_router(posts_router, prefix='/api')
    app.include_router(server_router, prefix='/api')

    return app

"""
FastAPI application factory for the schema walker.

Creates and configures the FastAPI application with routes and dependencies.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from schema_walker import __version__
from schema_walker.api.dependencies import (
    ServiceConfig,
    ServiceContainer,
    build_services,
)
from schema_walker.core.config import Settings, get_settings
from schema_walker.core.logging import clear_correlation_id, set_correlation_id
from schema_walker.graph.exceptions import Neo4jConnectionError
from schema_walker.graph.neo4j_client import Neo4jClient
from schema_walker.walk.store import FileWalkStore

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect, restore the persisted walk and load the first view."""
    services: ServiceContainer = app.state.services

    if not services.client.is_connected:
        try:
            await services.client.connect()
        except Neo4jConnectionError as e:
            # Keep serving: /health reports the outage and queries report errors.
            logger.error("Neo4j unavailable at startup: %s", e)

    services.manager.restore()
    if services.client.is_connected:
        await services.explorer.start()

    yield

    await services.client.close()


def create_app(
    settings: Settings | None = None,
    services: ServiceContainer | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Optional settings (environment defaults if None)
        services: Optional pre-configured service container

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Graph Schema Walker",
        description="Walk an unknown Neo4j graph one relationship at a time",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
        """Tag every log line of a request with its X-Request-ID."""
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response

    if services is None:
        cfg = settings or get_settings()
        services = build_services(
            client=Neo4jClient(settings=cfg),
            store=FileWalkStore(cfg.walk_store_path),
            config=ServiceConfig.from_settings(cfg),
        )

    # Store services in app state for dependency injection
    app.state.services = services

    # Import routes here to avoid circular imports
    from schema_walker.api.routes import get_services, router

    def _get_services() -> ServiceContainer:
        return app.state.services

    app.dependency_overrides[get_services] = _get_services

    app.include_router(router)

    return app

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from property_manager.entrypoints.http.exception_handlers import register_exception_handlers
from property_manager.entrypoints.http.mappers.property_mapper import PAGINATION_HEADERS
from property_manager.entrypoints.http.routes.health import router as health_router
from property_manager.entrypoints.http.routes.properties import router as properties_router
from property_manager.infra.config import cors_origins, log_level, storage_backend
from property_manager.infra.db.session import dispose_engine
from property_manager.infra.logging import configure_logging
from property_manager.infra.mongo.client import (
    close_client,
    ensure_indexes,
    get_properties_collection,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    backend = storage_backend()
    logger.info("Starting Property Manager API", extra={"storage_backend": backend})

    if backend == "mongodb":
        ensure_indexes(get_properties_collection())

    yield

    if backend == "mongodb":
        close_client()
    elif backend == "postgres":
        dispose_engine()
    logger.info("Property Manager API stopped")


def build_app() -> FastAPI:
    configure_logging(log_level())

    app = FastAPI(
        title="Property Manager API",
        description="""
        Real-estate listing API for browsing and managing properties.

        ## Features
        - List properties with filters and pagination
        - Create, read, update and delete properties

        ## Pagination
        List responses carry X-Total-Count, X-Page and X-Page-Size headers.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
    )

    # Browser frontends read the pagination headers cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=list(PAGINATION_HEADERS),
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(properties_router, prefix="/api")

    return app


app = build_app()

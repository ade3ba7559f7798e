"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from facilbook.config import Settings
from facilbook.domain.facilities import seed_default_facilities
from facilbook.infra.db import Store
from facilbook.infra.schema import apply_schema
from facilbook.observability.correlation import (
    CORRELATION_ID_HEADER,
    generate_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from facilbook.observability.logging import get_logger

from .routers import public
from .routes import facilities, reservations

logger = get_logger(__name__)


def bootstrap(store: Store, settings: Settings) -> None:
    """Apply the schema and seed the facility catalog (idempotent)."""
    with store.txn() as cur:
        apply_schema(cur)
    if settings.seed_facilities:
        seed_default_facilities(store)


def create_app(store: Store | None = None, settings: Settings | None = None) -> FastAPI:
    """Create the booking API.

    Args:
        store: Store to serve from. If None, one is built from settings.
        settings: Runtime settings. If None, read from the environment.

    Returns:
        Configured FastAPI application. The store is opened and
        bootstrapped by the lifespan handler and closed on shutdown.
    """
    if settings is None:
        settings = Settings.from_env()
    if store is None:
        store = Store.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.open()
        try:
            bootstrap(store, settings)
            logger.info("booking api started")
            yield
        finally:
            store.close()

    app = FastAPI(
        title="Facility Booking API",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.settings = settings

    origins = list(settings.allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation ID middleware
    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        token = set_correlation_id(cid)
        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            reset_correlation_id(token)

    app.include_router(public.router)
    app.include_router(facilities.router)
    app.include_router(reservations.router)

    return app

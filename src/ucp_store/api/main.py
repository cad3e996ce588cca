"""FastAPI application factory for the UCP store."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..capabilities.checkout import CheckoutEngine
from ..catalog import load_catalog
from ..config import StoreSettings, load_settings
from ..discovery import UCP_PROTOCOL_VERSION
from ..models.checkout import PaymentCapability, PaymentMethodType
from ..sessions import InMemoryCheckoutSessionStore
from .dependencies import UCP_VERSION_HEADER, get_engine
from .errors import register_exception_handlers
from .middleware import RequestLoggingMiddleware
from .routers import checkout_sessions, discovery, health, products

logger = logging.getLogger("ucp_store.api")

API_VERSION = "0.1.0"


def build_engine(settings: StoreSettings) -> CheckoutEngine:
    """Wire a checkout engine from settings: catalog, fresh store, capabilities."""
    catalog = load_catalog(settings.catalog_path)
    return CheckoutEngine(
        catalog=catalog,
        store=InMemoryCheckoutSessionStore(),
        payment_capabilities=(
            PaymentCapability(type=PaymentMethodType.CARD, brands=tuple(settings.card_brands)),
        ),
        session_ttl_seconds=settings.session_ttl_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    engine: CheckoutEngine = app.state.engine
    logger.info(
        f"UCP store ready: endpoint={app.state.settings.endpoint}, "
        f"products_available={len(engine.list_available())}"
    )
    yield
    logger.info("Shutting down UCP store...")


def create_app(
    settings: StoreSettings | None = None,
    engine: CheckoutEngine | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    engine = engine or build_engine(settings)

    app = FastAPI(
        title="UCP Store",
        description=f"Universal Commerce Protocol store (UCP {UCP_PROTOCOL_VERSION})",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID", UCP_VERSION_HEADER],
    )

    register_exception_handlers(app, expose_internal_errors=not settings.is_production)

    app.dependency_overrides[get_engine] = lambda: engine

    app.include_router(discovery.router)
    app.include_router(products.router)
    app.include_router(checkout_sessions.router)
    app.include_router(health.router)

    return app


__all__ = ["API_VERSION", "build_engine", "create_app", "lifespan"]

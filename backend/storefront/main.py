"""Storefront API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StorefrontError → envelope responses
    - CORS configured from settings (not hardcoded)
    - The lifespan owns every app-scoped resource: database engine, the
      ChangeBroadcaster with its ConnectionLifecycle, and the gateway clients;
      all are closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Gateway clients are only built when credentials are configured
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.error_handlers import register_error_handlers
from storefront.api.routes import (
    brands, categories, coupons, health, live_updates, notifications, orders,
    payments, posters, products, sub_categories, variant_types, variants,
)
from storefront.config import Settings, get_settings
from storefront.infrastructure.database import init_db
from storefront.infrastructure.observability import setup_logging
from storefront.infrastructure.onesignal_client import OneSignalClient
from storefront.infrastructure.stripe_client import StripeClient
from storefront.services.change_broadcaster import ChangeBroadcaster
from storefront.services.connection_lifecycle import ConnectionLifecycle

logger = logging.getLogger(__name__)


def _gateway_clients(settings: Settings) -> tuple[StripeClient | None, OneSignalClient | None]:
    stripe = None
    if settings.stripe_secret_key:
        stripe = StripeClient(
            settings.stripe_secret_key,
            settings.stripe_api_version,
            base_url=settings.stripe_base_url,
            timeout_seconds=settings.external_timeout_seconds,
        )
    push = None
    if settings.onesignal_app_id and settings.onesignal_rest_api_key:
        push = OneSignalClient(
            settings.onesignal_app_id,
            settings.onesignal_rest_api_key,
            base_url=settings.onesignal_base_url,
            timeout_seconds=settings.external_timeout_seconds,
        )
    return stripe, push


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_tables()

    broadcaster = ChangeBroadcaster(settings.broadcast_queue_size)
    app.state.broadcaster = broadcaster
    app.state.lifecycle = ConnectionLifecycle(broadcaster)
    app.state.stripe, app.state.push = _gateway_clients(settings)
    logger.info("Storefront API started")
    yield
    logger.info("Storefront API shutting down")
    await app.state.lifecycle.close_all()
    await broadcaster.close()
    for client in (app.state.stripe, app.state.push):
        if client is not None:
            await client.aclose()
    await manager.dispose()


app = FastAPI(title="Storefront API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(categories.router)
app.include_router(sub_categories.router)
app.include_router(brands.router)
app.include_router(variant_types.router)
app.include_router(variants.router)
app.include_router(products.router)
app.include_router(coupons.router)
app.include_router(posters.router)
app.include_router(orders.router)
app.include_router(payments.router)
app.include_router(notifications.router)
app.include_router(live_updates.router)

register_error_handlers(app)

"""
FastAPI application factory.

* Registers routes for session delivery info, warehouses and admin.
* Closes the shared Redis pool via lifespan events.
* Applies rate-limiting (geocoding calls are limited more tightly).
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from delivery_pricing.api.middleware import limiter
from delivery_pricing.api.routes import admin, sessions, warehouses
from delivery_pricing.config import settings
from delivery_pricing.infrastructure import redis_client

logging.basicConfig(level=settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled Redis connections on shutdown."""
    logger.info("Delivery pricing API starting")
    yield
    await redis_client.close_pool()
    logger.info("Delivery pricing API stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Building Materials Delivery Pricing API",
        description=(
            "Quotes delivery charges for a building-materials storefront. "
            "Geocodes the customer's pincode, measures the distance to each "
            "category's warehouse and applies per-km rates with a minimum "
            "delivery fee."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(sessions.router, prefix="/api/v1")
    app.include_router(warehouses.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app

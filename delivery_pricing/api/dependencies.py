"""FastAPI dependency injection helpers."""

from fastapi import Depends, Path

from delivery_pricing.config import settings
from delivery_pricing.domain.delivery import DeliveryInfoCache
from delivery_pricing.domain.pricing import DeliveryChargeCalculator
from delivery_pricing.domain.warehouses import WarehouseRegistry, default_registry
from delivery_pricing.infrastructure.geocoding import GoogleGeocoder
from delivery_pricing.infrastructure.location_store import UserLocationStore
from delivery_pricing.infrastructure.redis_client import get_redis


async def get_location_store() -> UserLocationStore:
    return UserLocationStore(await get_redis(), settings.location_ttl_seconds)


def get_geocoder() -> GoogleGeocoder:
    return GoogleGeocoder()


def get_registry() -> WarehouseRegistry:
    return default_registry


def new_delivery_cache(registry: WarehouseRegistry) -> DeliveryInfoCache:
    return DeliveryInfoCache(
        registry, DeliveryChargeCalculator(settings.floor_delivery_charge)
    )


async def get_delivery_cache(
    session_id: str = Path(..., min_length=1, max_length=64),
    store: UserLocationStore = Depends(get_location_store),
    registry: WarehouseRegistry = Depends(get_registry),
) -> DeliveryInfoCache:
    """
    Build a fresh cache for this request from the session's persisted location.

    Nothing is kept between requests: the stored ``UserLocation`` is the
    source of truth, so each call recomputes the snapshot from it.  A session
    with no stored location gets an UNINITIALIZED cache.
    """
    cache = new_delivery_cache(registry)
    location = await store.get(session_id)
    if location is not None:
        cache.update_location(location)
    return cache

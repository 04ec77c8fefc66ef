"""
Session delivery endpoints
==========================

PUT    /api/v1/sessions/{session_id}/location             -- set pincode (geocode + recompute)
GET    /api/v1/sessions/{session_id}/location             -- current delivery location
DELETE /api/v1/sessions/{session_id}/location             -- forget the location
GET    /api/v1/sessions/{session_id}/delivery-info        -- delivery info for every category
GET    /api/v1/sessions/{session_id}/delivery-info/{cat}  -- one category (null if unavailable)
POST   /api/v1/sessions/{session_id}/quote                -- price breakdown for a cart line
GET    /api/v1/sessions/{session_id}/nearest-warehouse    -- closest warehouse overall
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response

from delivery_pricing.api.dependencies import (
    get_delivery_cache,
    get_geocoder,
    get_location_store,
    get_registry,
    new_delivery_cache,
)
from delivery_pricing.api.middleware import limiter
from delivery_pricing.api.schemas import (
    CategoryDeliveryInfoResponse,
    DeliveryInfoResponse,
    LocationUpdateRequest,
    NearestWarehouseResponse,
    PriceBreakdownResponse,
    QuoteRequest,
    UserLocationResponse,
    WarehouseResponse,
)
from delivery_pricing.config import settings
from delivery_pricing.domain.delivery import DeliveryInfoCache
from delivery_pricing.domain.distance import nearest_warehouse
from delivery_pricing.domain.entities import DistanceCalculationError
from delivery_pricing.domain.enums import parse_category
from delivery_pricing.domain.warehouses import WarehouseRegistry
from delivery_pricing.infrastructure.geocoding import (
    GeocodingError,
    GoogleGeocoder,
    InvalidPincodeError,
)
from delivery_pricing.infrastructure.location_store import UserLocationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions/{session_id}", tags=["delivery"])


def _delivery_response(cache: DeliveryInfoCache) -> DeliveryInfoResponse:
    if cache.location is None:
        raise HTTPException(status_code=404, detail="No delivery location set")
    return DeliveryInfoResponse(
        state=cache.state,
        location=UserLocationResponse.from_domain(cache.location),
        delivery_info={
            category.value: CategoryDeliveryInfoResponse.from_domain(info)
            for category, info in cache.all_delivery_info().items()
        },
        unavailable=[category.value for category in cache.failures()],
    )


# ── Location ──────────────────────────────────────────────────────────


@router.put(
    "/location",
    response_model=DeliveryInfoResponse,
    summary="Set the delivery pincode",
    description=(
        "Geocodes the pincode, persists the location for the session and "
        "recomputes delivery info for every category."
    ),
    responses={502: {"description": "Geocoding service failed."}},
)
@limiter.limit(settings.location_rate_limit)
async def set_location(
    request: Request,
    body: LocationUpdateRequest,
    session_id: str = Path(..., min_length=1, max_length=64),
    store: UserLocationStore = Depends(get_location_store),
    geocoder: GoogleGeocoder = Depends(get_geocoder),
    registry: WarehouseRegistry = Depends(get_registry),
):
    try:
        location = await geocoder.geocode(body.pincode)
    except InvalidPincodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except GeocodingError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    await store.save(session_id, location)

    cache = new_delivery_cache(registry)
    cache.update_location(location)
    return _delivery_response(cache)


@router.get(
    "/location",
    response_model=UserLocationResponse,
    summary="Get the session's delivery location",
)
@limiter.limit(settings.default_rate_limit)
async def get_location(
    request: Request,
    session_id: str = Path(..., min_length=1, max_length=64),
    store: UserLocationStore = Depends(get_location_store),
):
    location = await store.get(session_id)
    if location is None:
        raise HTTPException(status_code=404, detail="No delivery location set")
    return UserLocationResponse.from_domain(location)


@router.delete(
    "/location",
    status_code=204,
    summary="Forget the session's delivery location",
)
@limiter.limit(settings.default_rate_limit)
async def delete_location(
    request: Request,
    session_id: str = Path(..., min_length=1, max_length=64),
    store: UserLocationStore = Depends(get_location_store),
):
    await store.delete(session_id)
    return Response(status_code=204)


# ── Delivery info & pricing ───────────────────────────────────────────


@router.get(
    "/delivery-info",
    response_model=DeliveryInfoResponse,
    summary="Delivery info for every category",
)
@limiter.limit(settings.default_rate_limit)
async def get_delivery_info(
    request: Request,
    cache: DeliveryInfoCache = Depends(get_delivery_cache),
):
    return _delivery_response(cache)


@router.get(
    "/delivery-info/{category}",
    response_model=Optional[CategoryDeliveryInfoResponse],
    summary="Delivery info for one category",
    description=(
        "Returns ``null`` for unknown categories, categories whose delivery "
        "info could not be computed, and sessions without a location."
    ),
)
@limiter.limit(settings.default_rate_limit)
async def get_category_delivery_info(
    request: Request,
    category: str,
    cache: DeliveryInfoCache = Depends(get_delivery_cache),
):
    info = cache.get_delivery_info_for_category(category)
    if info is None:
        return None
    return CategoryDeliveryInfoResponse.from_domain(info)


@router.post(
    "/quote",
    response_model=PriceBreakdownResponse,
    summary="Quote a cart line including delivery",
    description=(
        "Delivery charge is zero when the category has no delivery info "
        "(unknown category, failed computation or no location set)."
    ),
)
@limiter.limit(settings.default_rate_limit)
async def quote(
    request: Request,
    body: QuoteRequest,
    cache: DeliveryInfoCache = Depends(get_delivery_cache),
):
    base_price = body.base_price
    if base_price is None:
        category = parse_category(body.category)
        if category is not None:
            base_price = cache.registry.base_price_for(category, body.product_name)
        if base_price is None:
            raise HTTPException(
                status_code=404,
                detail=f"Unknown product {body.product_name!r} in {body.category!r}",
            )

    breakdown = cache.price_breakdown(base_price, body.category, body.quantity)
    return PriceBreakdownResponse.from_domain(breakdown)


@router.get(
    "/nearest-warehouse",
    response_model=NearestWarehouseResponse,
    summary="Closest warehouse to the session's location",
)
@limiter.limit(settings.default_rate_limit)
async def get_nearest_warehouse(
    request: Request,
    cache: DeliveryInfoCache = Depends(get_delivery_cache),
):
    if cache.location is None:
        raise HTTPException(status_code=404, detail="No delivery location set")
    try:
        category, warehouse, distance = nearest_warehouse(
            cache.location.coordinate, cache.registry.warehouses
        )
    except DistanceCalculationError as exc:
        logger.warning("Nearest warehouse lookup failed: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))

    return NearestWarehouseResponse(
        warehouse=WarehouseResponse.from_domain(category, warehouse),
        distance_km=distance,
    )

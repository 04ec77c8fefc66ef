"""
Warehouse catalogue endpoints
=============================

GET /api/v1/warehouses                      -- every category's warehouse and rate
GET /api/v1/warehouses/{category}/products  -- base product prices for a category
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from delivery_pricing.api.dependencies import get_registry
from delivery_pricing.api.middleware import limiter
from delivery_pricing.api.schemas import ProductPriceResponse, WarehouseResponse
from delivery_pricing.config import settings
from delivery_pricing.domain.enums import parse_category
from delivery_pricing.domain.warehouses import WarehouseRegistry

router = APIRouter(prefix="/warehouses", tags=["warehouses"])


@router.get(
    "",
    response_model=list[WarehouseResponse],
    summary="List warehouses per product category",
)
@limiter.limit(settings.default_rate_limit)
async def list_warehouses(
    request: Request,
    registry: WarehouseRegistry = Depends(get_registry),
):
    return [
        WarehouseResponse.from_domain(category, warehouse)
        for category, warehouse in registry.warehouses.items()
    ]


@router.get(
    "/{category}/products",
    response_model=list[ProductPriceResponse],
    summary="Base prices of catalogue products in a category",
)
@limiter.limit(settings.default_rate_limit)
async def list_products(
    request: Request,
    category: str,
    registry: WarehouseRegistry = Depends(get_registry),
):
    resolved = parse_category(category)
    if resolved is None:
        raise HTTPException(status_code=404, detail="Unknown category")
    return [
        ProductPriceResponse(name=name, base_price=price)
        for name, price in registry.products(resolved).items()
    ]

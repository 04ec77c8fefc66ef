"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from delivery_pricing.domain.entities import (
    CategoryDeliveryInfo,
    PriceBreakdown,
    UserLocation,
    WarehouseConfig,
)
from delivery_pricing.domain.enums import CATEGORY_DISPLAY_NAMES, CacheState, Category


# ── Requests ──────────────────────────────────────────────────────────


class LocationUpdateRequest(BaseModel):
    pincode: str = Field(
        ...,
        pattern=r"^[1-9][0-9]{5}$",
        description="6-digit Indian postal code.",
        examples=["500001"],
    )


class QuoteRequest(BaseModel):
    category: str = Field(..., description="Category key or storefront label.")
    quantity: int = Field(1, ge=1)
    base_price: Optional[float] = Field(None, ge=0)
    product_name: Optional[str] = Field(
        None, description="Catalogue product; used when base_price is omitted."
    )

    @model_validator(mode="after")
    def _price_source(self) -> "QuoteRequest":
        if self.base_price is None and not self.product_name:
            raise ValueError("Either base_price or product_name is required")
        return self


# ── Responses ─────────────────────────────────────────────────────────


class UserLocationResponse(BaseModel):
    pincode: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    district: Optional[str] = None

    @classmethod
    def from_domain(cls, location: UserLocation) -> "UserLocationResponse":
        return cls(
            pincode=location.pincode,
            latitude=location.coordinate.latitude,
            longitude=location.coordinate.longitude,
            address=location.address,
            city=location.city,
            state=location.state,
            district=location.district,
        )


class CategoryDeliveryInfoResponse(BaseModel):
    category: Category
    category_name: str
    warehouse_name: str
    distance_km: float
    delivery_charge: float
    delivery_time_estimate: str
    rate_per_km: float

    @classmethod
    def from_domain(
        cls, info: CategoryDeliveryInfo
    ) -> "CategoryDeliveryInfoResponse":
        return cls(
            category=info.category,
            category_name=CATEGORY_DISPLAY_NAMES[info.category],
            warehouse_name=info.warehouse_name,
            distance_km=info.distance_km,
            delivery_charge=info.delivery_charge,
            delivery_time_estimate=info.delivery_time_estimate.value,
            rate_per_km=info.rate_per_km,
        )


class DeliveryInfoResponse(BaseModel):
    state: CacheState
    location: UserLocationResponse
    delivery_info: dict[str, CategoryDeliveryInfoResponse] = {}
    unavailable: list[str] = Field(
        default_factory=list,
        description="Categories quoted at base price only.",
    )


class PriceBreakdownResponse(BaseModel):
    base_price: float
    quantity: int
    product_price: float
    delivery_charge: float
    total_price: float
    distance_km: Optional[float] = None
    warehouse_name: Optional[str] = None

    @classmethod
    def from_domain(cls, breakdown: PriceBreakdown) -> "PriceBreakdownResponse":
        return cls(
            base_price=breakdown.base_price,
            quantity=breakdown.quantity,
            product_price=breakdown.product_price,
            delivery_charge=breakdown.delivery_charge,
            total_price=breakdown.total_price,
            distance_km=breakdown.distance_km,
            warehouse_name=breakdown.warehouse_name,
        )


class WarehouseResponse(BaseModel):
    category: Category
    category_name: str
    name: str
    latitude: float
    longitude: float
    rate_per_km: float
    address: str = ""

    @classmethod
    def from_domain(
        cls, category: Category, warehouse: WarehouseConfig
    ) -> "WarehouseResponse":
        return cls(
            category=category,
            category_name=CATEGORY_DISPLAY_NAMES[category],
            name=warehouse.name,
            latitude=warehouse.location.latitude,
            longitude=warehouse.location.longitude,
            rate_per_km=warehouse.rate_per_km,
            address=warehouse.address,
        )


class NearestWarehouseResponse(BaseModel):
    warehouse: WarehouseResponse
    distance_km: float


class ProductPriceResponse(BaseModel):
    name: str
    base_price: float


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str

"""
Domain value objects and exceptions.

Everything here is immutable: a delivery quote is always derived from a
``UserLocation`` and the static warehouse registry, never patched in place.
Per-category outcomes are modelled as ``Ok`` / ``Err`` so that the cache can
tell "no warehouse for this category" apart from "computation failed".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from .enums import Category, DeliveryTimeEstimate


class DistanceCalculationError(Exception):
    """Raised when a coordinate is not a finite, in-range lat/long pair."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    @property
    def is_valid(self) -> bool:
        try:
            self.validate()
        except DistanceCalculationError:
            return False
        return True

    def validate(self) -> tuple[float, float]:
        """Return ``(lat, lng)`` as floats, or raise ``DistanceCalculationError``."""
        try:
            lat, lng = float(self.latitude), float(self.longitude)
        except (TypeError, ValueError):
            lat = lng = math.nan
        if not (
            math.isfinite(lat)
            and math.isfinite(lng)
            and -90.0 <= lat <= 90.0
            and -180.0 <= lng <= 180.0
        ):
            raise DistanceCalculationError(
                f"Malformed coordinate ({self.latitude!r}, {self.longitude!r})"
            )
        return lat, lng


@dataclass(frozen=True)
class WarehouseConfig:
    name: str
    location: Coordinate
    rate_per_km: float
    address: str = ""

    def __post_init__(self) -> None:
        if not self.rate_per_km > 0:
            raise ValueError(
                f"Warehouse {self.name}: rate_per_km must be positive, "
                f"got {self.rate_per_km}"
            )


@dataclass(frozen=True)
class UserLocation:
    pincode: str
    coordinate: Coordinate
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    district: Optional[str] = None


@dataclass(frozen=True)
class CategoryDeliveryInfo:
    category: Category
    warehouse_name: str
    distance_km: float
    delivery_charge: float
    delivery_time_estimate: DeliveryTimeEstimate
    rate_per_km: float


@dataclass(frozen=True)
class PriceBreakdown:
    base_price: float
    quantity: int
    product_price: float
    delivery_charge: float
    total_price: float
    distance_km: Optional[float] = None
    warehouse_name: Optional[str] = None


# ── Per-category result ───────────────────────────────────────────────


@dataclass(frozen=True)
class ComputationError:
    category: Category
    reason: str


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: ComputationError

    @property
    def is_ok(self) -> bool:
        return False


CategoryResult = Union[Ok[CategoryDeliveryInfo], Err]

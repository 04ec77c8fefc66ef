"""
Per-session delivery info cache.

State machine
-------------
UNINITIALIZED --update_location--> COMPUTED --update_location--> COMPUTED
COMPUTED --clear--> UNINITIALIZED

Every location change rebuilds a complete ``DeliveryInfoSnapshot`` and swaps
it in with a single assignment; snapshots are never patched.  A category whose
computation fails is kept as ``Err`` in the snapshot and treated as "no
delivery info" by the query methods, so its price degrades to
``base_price x quantity``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .distance import distance_km
from .entities import (
    CategoryDeliveryInfo,
    CategoryResult,
    ComputationError,
    DistanceCalculationError,
    Err,
    Ok,
    PriceBreakdown,
    UserLocation,
)
from .enums import CacheState, Category, parse_category
from .pricing import DeliveryChargeCalculator, PriceComposer, delivery_time_estimate
from .warehouses import WarehouseRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryInfoSnapshot:
    location: UserLocation
    results: Mapping[Category, CategoryResult] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def get(self, category: Category) -> Optional[CategoryDeliveryInfo]:
        result = self.results.get(category)
        if isinstance(result, Ok):
            return result.value
        return None

    @property
    def delivery_info(self) -> dict[Category, CategoryDeliveryInfo]:
        return {
            c: r.value for c, r in self.results.items() if isinstance(r, Ok)
        }

    @property
    def failures(self) -> dict[Category, ComputationError]:
        return {
            c: r.error for c, r in self.results.items() if isinstance(r, Err)
        }


def compute_category_info(
    location: UserLocation,
    category: Category,
    registry: WarehouseRegistry,
    calculator: DeliveryChargeCalculator,
) -> CategoryResult:
    """Compute one category's delivery info as ``Ok`` or ``Err``."""
    warehouse = registry.get(category)
    if warehouse is None:
        return Err(ComputationError(category, "no warehouse configured"))
    try:
        d = distance_km(location.coordinate, warehouse.location)
    except DistanceCalculationError as exc:
        return Err(ComputationError(category, str(exc)))

    return Ok(
        CategoryDeliveryInfo(
            category=category,
            warehouse_name=warehouse.name,
            distance_km=d,
            delivery_charge=calculator.charge(d, warehouse),
            delivery_time_estimate=delivery_time_estimate(d),
            rate_per_km=warehouse.rate_per_km,
        )
    )


def build_snapshot(
    location: UserLocation,
    registry: WarehouseRegistry,
    calculator: DeliveryChargeCalculator,
) -> DeliveryInfoSnapshot:
    """Full recompute across every registry category.  O(W)."""
    results: dict[Category, CategoryResult] = {}
    for category in registry:
        result = compute_category_info(location, category, registry, calculator)
        if isinstance(result, Err):
            logger.warning(
                "Delivery info unavailable for %s (pincode=%s): %s",
                category.value, location.pincode, result.error.reason,
            )
        results[category] = result
    return DeliveryInfoSnapshot(location, MappingProxyType(results))


class DeliveryInfoCache:
    """Owns the current snapshot for one user session."""

    def __init__(
        self,
        registry: WarehouseRegistry = default_registry,
        calculator: DeliveryChargeCalculator | None = None,
        composer: PriceComposer | None = None,
    ):
        self.registry = registry
        self.calculator = calculator or DeliveryChargeCalculator()
        self.composer = composer or PriceComposer()
        self._snapshot: Optional[DeliveryInfoSnapshot] = None

    # ── State ─────────────────────────────────────────────────────

    @property
    def state(self) -> CacheState:
        if self._snapshot is None:
            return CacheState.UNINITIALIZED
        return CacheState.COMPUTED

    @property
    def snapshot(self) -> Optional[DeliveryInfoSnapshot]:
        return self._snapshot

    @property
    def location(self) -> Optional[UserLocation]:
        return self._snapshot.location if self._snapshot else None

    def update_location(self, location: UserLocation) -> DeliveryInfoSnapshot:
        snapshot = build_snapshot(location, self.registry, self.calculator)
        self._snapshot = snapshot
        logger.debug(
            "Delivery info recomputed for pincode %s: %d ok, %d failed",
            location.pincode,
            len(snapshot.delivery_info),
            len(snapshot.failures),
        )
        return snapshot

    def clear(self) -> None:
        self._snapshot = None

    # ── Queries ───────────────────────────────────────────────────

    def _resolve(self, category: Category | str | None) -> Optional[Category]:
        if isinstance(category, Category):
            return category
        return parse_category(category)

    def get_delivery_info_for_category(
        self, category: Category | str | None
    ) -> Optional[CategoryDeliveryInfo]:
        resolved = self._resolve(category)
        if resolved is None or self._snapshot is None:
            return None
        return self._snapshot.get(resolved)

    def all_delivery_info(self) -> dict[Category, CategoryDeliveryInfo]:
        if self._snapshot is None:
            return {}
        return self._snapshot.delivery_info

    def failures(self) -> dict[Category, ComputationError]:
        if self._snapshot is None:
            return {}
        return self._snapshot.failures

    def price_breakdown(
        self,
        base_price: float,
        category: Category | str | None,
        quantity: int = 1,
    ) -> PriceBreakdown:
        info = self.get_delivery_info_for_category(category)
        delivery_charge = info.delivery_charge if info else 0.0
        return PriceBreakdown(
            base_price=base_price,
            quantity=quantity,
            product_price=base_price * quantity,
            delivery_charge=delivery_charge,
            total_price=self.composer.total_price(
                base_price, delivery_charge, quantity
            ),
            distance_km=info.distance_km if info else None,
            warehouse_name=info.warehouse_name if info else None,
        )

    def calculate_product_price(
        self,
        base_price: float,
        category: Category | str | None,
        quantity: int = 1,
    ) -> float:
        return self.price_breakdown(base_price, category, quantity).total_price

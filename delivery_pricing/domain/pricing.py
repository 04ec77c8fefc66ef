"""
Delivery Pricing Engine  (Strategy Pattern)
===========================================

Formula
-------
Delivery_Charge = max(Floor_Charge, round(Distance x Rate_Per_KM))
Total_Price     = Base_Price x Quantity + Delivery_Charge

* The computed charge is rounded half-up to whole rupees **before** it is
  compared against the floor, so 1.2 km x 8 = 9.6 -> 10 -> 50.
* Floor_Charge defaults to 50 INR.
* Any failure while computing a charge returns the floor charge; a quote
  must never block checkout.

Complexity: O(1) per calculation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .distance import round_half_up
from .entities import WarehouseConfig
from .enums import DELIVERY_TIME_STEPS, DeliveryTimeEstimate

logger = logging.getLogger(__name__)

FLOOR_CHARGE = 50.0


# ── Strategy hierarchy ────────────────────────────────────────────────


class DeliveryChargeStrategy(ABC):
    @abstractmethod
    def calculate(self, distance_km: float, rate_per_km: float) -> float: ...


class DistanceRateCharge(DeliveryChargeStrategy):
    """Rounded distance x rate, never below the floor."""

    def __init__(self, floor_charge: float = FLOOR_CHARGE):
        self.floor_charge = floor_charge

    def calculate(self, distance_km: float, rate_per_km: float) -> float:
        computed = distance_km * rate_per_km
        return max(self.floor_charge, round_half_up(computed))


# ── Calculators ───────────────────────────────────────────────────────


class DeliveryChargeCalculator:
    """Derives the delivery fee for a distance and a warehouse's rate."""

    def __init__(
        self,
        floor_charge: float = FLOOR_CHARGE,
        strategy: DeliveryChargeStrategy | None = None,
    ):
        self.floor_charge = floor_charge
        self.strategy = strategy or DistanceRateCharge(floor_charge)

    def charge(self, distance_km: float, warehouse: WarehouseConfig) -> float:
        try:
            return float(
                self.strategy.calculate(distance_km, warehouse.rate_per_km)
            )
        except (TypeError, ValueError, ArithmeticError, AttributeError) as exc:
            logger.warning(
                "Delivery charge calculation failed (distance=%r): %s; "
                "falling back to floor charge %.2f",
                distance_km, exc, self.floor_charge,
            )
            return self.floor_charge


class PriceComposer:
    """Base price x quantity + delivery charge.  Quantity is not validated."""

    @staticmethod
    def total_price(
        base_price: float, delivery_charge: float, quantity: int = 1
    ) -> float:
        return base_price * quantity + delivery_charge


def delivery_time_estimate(distance_km: float) -> DeliveryTimeEstimate:
    """Step function of distance; bounds are inclusive."""
    for upper_km, estimate in DELIVERY_TIME_STEPS:
        if distance_km <= upper_km:
            return estimate
    return DeliveryTimeEstimate.FIVE_TO_SEVEN_DAYS

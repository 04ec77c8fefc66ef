"""
Distance calculation using the Haversine formula.

Assumption
----------
Delivery charges are quoted on great-circle distance, not road distance.
The earth is modelled as a sphere with the WGS-84 equatorial radius and the
raw result is snapped to whole metres before converting to km, so quotes
stay identical to the ones the storefront app has always shown.

Complexity: O(1) per call; ``nearest_warehouse`` is O(W) for W warehouses.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional

from .entities import Coordinate, DistanceCalculationError, WarehouseConfig
from .enums import Category

EARTH_RADIUS_M = 6_378_137.0


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for non-negative values (``Math.round``)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def haversine_m(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **metres** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    # Clamp: float error can push ``a`` a hair above 1 for antipodes
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(1.0, a)))


def distance_km(origin: Coordinate, destination: Coordinate) -> float:
    """Distance in km between two coordinates, rounded to 2 decimals."""
    lat1, lng1 = origin.validate()
    lat2, lng2 = destination.validate()

    metres = round_half_up(haversine_m(lat1, lng1, lat2, lng2))
    return round_half_up(metres / 1000, 2)


def nearest_warehouse(
    location: Coordinate,
    warehouses: Mapping[Category, WarehouseConfig],
) -> tuple[Category, WarehouseConfig, float]:
    """
    Return ``(category, warehouse, distance_km)`` for the closest warehouse.

    Ties keep the warehouse that appears first in *warehouses*.
    """
    best: Optional[tuple[Category, WarehouseConfig, float]] = None
    for category, warehouse in warehouses.items():
        d = distance_km(location, warehouse.location)
        if best is None or d < best[2]:
            best = (category, warehouse, d)

    if best is None:
        raise DistanceCalculationError("No warehouses configured")
    return best

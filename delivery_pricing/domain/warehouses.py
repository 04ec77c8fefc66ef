"""
Static warehouse registry and base product catalogue.

One fulfilment warehouse per product category, each with its own per-km
delivery rate.  Loaded at import time and never mutated.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .entities import Coordinate, WarehouseConfig
from .enums import Category, parse_category

WAREHOUSES: Mapping[Category, WarehouseConfig] = MappingProxyType(
    {
        Category.CEMENT: WarehouseConfig(
            name="Hyderabad Cement Warehouse",
            location=Coordinate(17.3850, 78.4867),
            rate_per_km=8.0,
            address="Hyderabad, Telangana, India",
        ),
        Category.STEEL: WarehouseConfig(
            name="Mumbai Steel Warehouse",
            location=Coordinate(19.0760, 72.8777),
            rate_per_km=12.0,
            address="Mumbai, Maharashtra, India",
        ),
        Category.CONCRETE: WarehouseConfig(
            name="Delhi Concrete Warehouse",
            location=Coordinate(28.7041, 77.1025),
            rate_per_km=15.0,
            address="Delhi, India",
        ),
    }
)

# Catalogue list prices, INR per unit
BASE_PRODUCT_PRICES: Mapping[Category, Mapping[str, float]] = MappingProxyType(
    {
        Category.CEMENT: MappingProxyType({
            "UltraTech Cement": 420.0,
            "ACC Cement": 395.0,
            "Ambuja Cement": 380.0,
            "JSW Cement": 410.0,
        }),
        Category.STEEL: MappingProxyType({
            "TATA TISCON 550SD": 8500.0,
            "JSW Steel": 8200.0,
            "SAIL Steel": 8000.0,
        }),
        Category.CONCRETE: MappingProxyType({
            "Ready Mix Concrete": 4500.0,
            "Precast Concrete": 3800.0,
        }),
    }
)


class WarehouseRegistry:
    """Read-only lookup of category -> warehouse (and catalogue prices)."""

    def __init__(
        self,
        warehouses: Mapping[Category, WarehouseConfig] = WAREHOUSES,
        base_prices: Mapping[Category, Mapping[str, float]] = BASE_PRODUCT_PRICES,
    ):
        self._warehouses = MappingProxyType(dict(warehouses))
        self._base_prices = base_prices

    def __contains__(self, category: object) -> bool:
        return category in self._warehouses

    def __iter__(self):
        return iter(self._warehouses)

    def __len__(self) -> int:
        return len(self._warehouses)

    @property
    def warehouses(self) -> Mapping[Category, WarehouseConfig]:
        return self._warehouses

    def get(self, category: Category | str | None) -> Optional[WarehouseConfig]:
        if not isinstance(category, Category):
            category = parse_category(category)
        if category is None:
            return None
        return self._warehouses.get(category)

    def products(self, category: Category) -> Mapping[str, float]:
        return self._base_prices.get(category, MappingProxyType({}))

    def base_price_for(
        self, category: Category, product_name: str
    ) -> Optional[float]:
        return self.products(category).get(product_name)


default_registry = WarehouseRegistry()

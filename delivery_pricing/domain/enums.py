"""Domain enumerations: product categories, delivery estimates, cache states."""

from __future__ import annotations

import enum
from typing import Optional


class Category(str, enum.Enum):
    CEMENT = "cement"
    STEEL = "steel"
    CONCRETE = "concrete"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]


# Storefront labels as shown in the product listing
CATEGORY_DISPLAY_NAMES: dict[Category, str] = {
    Category.CEMENT: "Cement",
    Category.STEEL: "Steel",
    Category.CONCRETE: "Concrete Mix",
}


def parse_category(name: Optional[str]) -> Optional[Category]:
    """Resolve a category key or storefront label; ``None`` if unknown."""
    if not name:
        return None
    needle = name.strip().lower()
    for category in Category:
        if needle in (category.value, category.display_name.lower()):
            return category
    return None


class DeliveryTimeEstimate(str, enum.Enum):
    SAME_DAY = "Same day delivery available"
    ONE_TO_TWO_DAYS = "1-2 days delivery available"
    TWO_TO_THREE_DAYS = "2-3 days delivery available"
    THREE_TO_FIVE_DAYS = "3-5 days delivery available"
    FIVE_TO_SEVEN_DAYS = "5-7 days delivery available"


# Upper distance bound (km, inclusive) -> estimate.  Anything further is
# FIVE_TO_SEVEN_DAYS.
DELIVERY_TIME_STEPS: list[tuple[float, DeliveryTimeEstimate]] = [
    (10.0, DeliveryTimeEstimate.SAME_DAY),
    (50.0, DeliveryTimeEstimate.ONE_TO_TWO_DAYS),
    (100.0, DeliveryTimeEstimate.TWO_TO_THREE_DAYS),
    (200.0, DeliveryTimeEstimate.THREE_TO_FIVE_DAYS),
]


class CacheState(str, enum.Enum):
    UNINITIALIZED = "UNINITIALIZED"
    COMPUTED = "COMPUTED"

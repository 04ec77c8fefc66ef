"""
Shared test fixtures.

Redis and the Google Geocoding API are replaced with in-memory fakes so the
suite runs without Docker or network access.  The fakes mirror the public
methods of ``UserLocationStore`` and ``GoogleGeocoder``.
"""

from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from delivery_pricing.domain.delivery import DeliveryInfoCache
from delivery_pricing.domain.entities import Coordinate, UserLocation
from delivery_pricing.domain.warehouses import WarehouseRegistry
from delivery_pricing.infrastructure.geocoding import GeocodingError


# ── Known places ──────────────────────────────────────────────────────

HYDERABAD = Coordinate(17.3850, 78.4867)
MUMBAI = Coordinate(19.0760, 72.8777)
DELHI = Coordinate(28.7041, 77.1025)
PUNE = Coordinate(18.5204, 73.8567)

KNOWN_PINCODES = {
    "500001": UserLocation(
        pincode="500001",
        coordinate=HYDERABAD,
        address="Hyderabad, Telangana 500001, India",
        city="Hyderabad",
        state="Telangana",
        district="Hyderabad",
    ),
    "400001": UserLocation(
        pincode="400001",
        coordinate=MUMBAI,
        address="Mumbai, Maharashtra 400001, India",
        city="Mumbai",
        state="Maharashtra",
    ),
}


# ── Fakes ─────────────────────────────────────────────────────────────


class InMemoryLocationStore:
    """Mirrors ``UserLocationStore`` with a plain dict."""

    def __init__(self):
        self.data: dict[str, UserLocation] = {}

    async def save(self, session_id: str, location: UserLocation) -> None:
        self.data[session_id] = location

    async def get(self, session_id: str) -> Optional[UserLocation]:
        return self.data.get(session_id)

    async def delete(self, session_id: str) -> bool:
        return self.data.pop(session_id, None) is not None


class FakeGeocoder:
    def __init__(self, known: dict[str, UserLocation] = KNOWN_PINCODES):
        self.known = known
        self.calls: list[str] = []

    async def geocode(self, pincode: str) -> UserLocation:
        self.calls.append(pincode)
        try:
            return self.known[pincode]
        except KeyError:
            raise GeocodingError(f"No location found for pincode {pincode}")


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def hyderabad_location() -> UserLocation:
    return KNOWN_PINCODES["500001"]


@pytest.fixture
def registry() -> WarehouseRegistry:
    return WarehouseRegistry()


@pytest.fixture
def delivery_cache(registry: WarehouseRegistry) -> DeliveryInfoCache:
    return DeliveryInfoCache(registry)


@pytest.fixture
def location_store() -> InMemoryLocationStore:
    return InMemoryLocationStore()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest_asyncio.fixture
async def client(
    location_store: InMemoryLocationStore, geocoder: FakeGeocoder
) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient with Redis and geocoding overridden by fakes."""
    from delivery_pricing.api.app import create_app
    from delivery_pricing.api.dependencies import get_geocoder, get_location_store
    from delivery_pricing.api.middleware import limiter

    limiter.reset()

    app = create_app()
    app.dependency_overrides[get_location_store] = lambda: location_store
    app.dependency_overrides[get_geocoder] = lambda: geocoder

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

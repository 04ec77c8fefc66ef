"""
Pincode -> coordinate lookup via the Google Geocoding API.

The query is ``"<pincode>, <region>"`` (region defaults to India) and the
first result wins.  Failures are raised as ``GeocodingError`` and never
retried here; callers decide what to show the user.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx

from delivery_pricing.config import settings
from delivery_pricing.domain.entities import Coordinate, UserLocation

logger = logging.getLogger(__name__)

PINCODE_RE = re.compile(r"^[1-9][0-9]{5}$")


class GeocodingError(Exception):
    """Raised when a pincode cannot be turned into a coordinate."""


class InvalidPincodeError(GeocodingError):
    """Raised for input that is not a 6-digit Indian pincode."""


def validate_pincode(pincode: Optional[str]) -> bool:
    return bool(pincode) and PINCODE_RE.match(pincode) is not None


def _component(result: dict[str, Any], *types: str) -> Optional[str]:
    """First address component matching any of *types*, in priority order."""
    components = result.get("address_components") or []
    for wanted in types:
        for comp in components:
            if wanted in comp.get("types", []):
                return comp.get("long_name")
    return None


class GoogleGeocoder:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        region_suffix: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.base_url = base_url or settings.geocoding_base_url
        self.region_suffix = region_suffix or settings.geocoding_region_suffix
        self.timeout = timeout or settings.geocoding_timeout_seconds
        self._client = client

    async def geocode(self, pincode: str) -> UserLocation:
        pincode = (pincode or "").strip()
        if not validate_pincode(pincode):
            raise InvalidPincodeError(f"Invalid pincode format: {pincode!r}")

        params = {"address": f"{pincode}, {self.region_suffix}", "key": self.api_key}
        try:
            data = await self._request(params)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Geocoding request failed for pincode %s: %s", pincode, exc)
            raise GeocodingError(
                f"Failed to get location for pincode {pincode}: {exc}"
            ) from exc

        status = data.get("status", "OK")
        results = data.get("results") or []
        if status not in ("OK", "ZERO_RESULTS"):
            message = data.get("error_message") or status
            logger.warning("Geocoding API error for pincode %s: %s", pincode, message)
            raise GeocodingError(
                f"Failed to get location for pincode {pincode}: {message}"
            )
        if not isinstance(results, list):
            raise GeocodingError(f"Malformed geocoding result for pincode {pincode}")
        if not results:
            raise GeocodingError(f"No location found for pincode {pincode}")

        return self._parse_result(pincode, results[0])

    async def _request(self, params: dict[str, str]) -> dict[str, Any]:
        if self._client is not None:
            response = await self._client.get(self.base_url, params=params)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.base_url, params=params)

        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response body: {type(data).__name__}")
        return data

    @staticmethod
    def _parse_result(pincode: str, result: dict[str, Any]) -> UserLocation:
        try:
            loc = result["geometry"]["location"]
            coordinate = Coordinate(float(loc["lat"]), float(loc["lng"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError(
                f"Malformed geocoding result for pincode {pincode}"
            ) from exc

        return UserLocation(
            pincode=pincode,
            coordinate=coordinate,
            address=result.get("formatted_address"),
            city=_component(result, "locality", "postal_town"),
            state=_component(result, "administrative_area_level_1"),
            district=_component(
                result, "administrative_area_level_3", "administrative_area_level_2"
            ),
        )

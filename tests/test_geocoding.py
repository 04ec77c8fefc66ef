"""Tests for the Google geocoding client (HTTP mocked with httpx.MockTransport)."""

import httpx
import pytest

from delivery_pricing.infrastructure.geocoding import (
    GeocodingError,
    GoogleGeocoder,
    InvalidPincodeError,
    validate_pincode,
)

HYDERABAD_RESPONSE = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "Hyderabad, Telangana 500001, India",
            "geometry": {"location": {"lat": 17.385, "lng": 78.4867}},
            "address_components": [
                {"long_name": "500001", "types": ["postal_code"]},
                {"long_name": "Hyderabad", "types": ["locality", "political"]},
                {
                    "long_name": "Hyderabad District",
                    "types": ["administrative_area_level_3", "political"],
                },
                {
                    "long_name": "Telangana",
                    "types": ["administrative_area_level_1", "political"],
                },
                {"long_name": "India", "types": ["country", "political"]},
            ],
        }
    ],
}


def _geocoder(handler) -> GoogleGeocoder:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleGeocoder(api_key="test-key", client=client)


class TestValidatePincode:
    @pytest.mark.parametrize("pincode", ["500001", "110001", "999999"])
    def test_valid(self, pincode):
        assert validate_pincode(pincode)

    @pytest.mark.parametrize(
        "pincode", ["", None, "012345", "50001", "5000011", "50000a", " 500001"]
    )
    def test_invalid(self, pincode):
        assert not validate_pincode(pincode)


class TestGoogleGeocoder:
    @pytest.mark.asyncio
    async def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=HYDERABAD_RESPONSE)

        location = await _geocoder(handler).geocode("500001")

        assert seen["params"] == {"address": "500001, India", "key": "test-key"}
        assert location.pincode == "500001"
        assert location.coordinate.latitude == 17.385
        assert location.coordinate.longitude == 78.4867
        assert location.address == "Hyderabad, Telangana 500001, India"
        assert location.city == "Hyderabad"
        assert location.state == "Telangana"
        assert location.district == "Hyderabad District"

    @pytest.mark.asyncio
    async def test_pincode_is_stripped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=HYDERABAD_RESPONSE)

        location = await _geocoder(handler).geocode(" 500001 ")
        assert location.pincode == "500001"

    @pytest.mark.asyncio
    async def test_invalid_pincode_skips_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("geocoding API must not be called")

        with pytest.raises(InvalidPincodeError):
            await _geocoder(handler).geocode("12345")

    @pytest.mark.asyncio
    async def test_zero_results(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})

        with pytest.raises(GeocodingError, match="No location found"):
            await _geocoder(handler).geocode("999999")

    @pytest.mark.asyncio
    async def test_api_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "status": "REQUEST_DENIED",
                    "error_message": "The provided API key is invalid.",
                    "results": [],
                },
            )

        with pytest.raises(GeocodingError, match="API key is invalid"):
            await _geocoder(handler).geocode("500001")

    @pytest.mark.asyncio
    async def test_http_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="Internal Server Error")

        with pytest.raises(GeocodingError) as exc_info:
            await _geocoder(handler).geocode("500001")
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GeocodingError):
            await _geocoder(handler).geocode("500001")

    @pytest.mark.asyncio
    async def test_malformed_result(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"status": "OK", "results": [{"geometry": {}}]}
            )

        with pytest.raises(GeocodingError, match="Malformed"):
            await _geocoder(handler).geocode("500001")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        with pytest.raises(GeocodingError):
            await _geocoder(handler).geocode("500001")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [[], ["OK"], "OK", 42, None])
    async def test_non_object_body(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(GeocodingError) as exc_info:
            await _geocoder(handler).geocode("500001")
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_results_not_a_list(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "OK", "results": {"0": {}}})

        with pytest.raises(GeocodingError, match="Malformed"):
            await _geocoder(handler).geocode("500001")

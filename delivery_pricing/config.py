"""Centralised application settings loaded from environment / .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Redis (persisted user locations)
    redis_url: str = "redis://localhost:6379/0"
    location_ttl_seconds: int = 30 * 24 * 3600  # 30 days

    # Geocoding
    google_maps_api_key: str = ""
    geocoding_base_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    geocoding_region_suffix: str = "India"
    geocoding_timeout_seconds: float = 10.0

    # Pricing
    floor_delivery_charge: float = 50.0  # INR

    # API
    location_rate_limit: str = "10/minute"  # each call spends geocoding quota
    default_rate_limit: str = "100/minute"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()

"""
Redis-backed store for the user's delivery location.

Each session keeps exactly one ``UserLocation`` as a hash under
``user_location:<session_id>``.  Saving replaces the hash wholesale (DEL +
HSET in one MULTI), matching the "replace on re-entry of pincode" lifecycle.
Optional address fields are stored as empty strings.
"""

from __future__ import annotations

import logging
from typing import Optional

import redis.asyncio as aioredis

from delivery_pricing.domain.entities import Coordinate, UserLocation

logger = logging.getLogger(__name__)

_OPTIONAL_FIELDS = ("address", "city", "state", "district")


class UserLocationStore:
    def __init__(self, client: aioredis.Redis, ttl_seconds: int | None = None):
        self.redis = client
        self.ttl = ttl_seconds

    @staticmethod
    def key(session_id: str) -> str:
        return f"user_location:{session_id}"

    async def save(self, session_id: str, location: UserLocation) -> None:
        mapping = {
            "pincode": location.pincode,
            "latitude": repr(float(location.coordinate.latitude)),
            "longitude": repr(float(location.coordinate.longitude)),
        }
        for name in _OPTIONAL_FIELDS:
            mapping[name] = getattr(location, name) or ""

        key = self.key(session_id)
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(key)
            pipe.hset(key, mapping=mapping)
            if self.ttl:
                pipe.expire(key, self.ttl)
            await pipe.execute()
        logger.info("Saved location for session %s (pincode=%s)", session_id, location.pincode)

    async def get(self, session_id: str) -> Optional[UserLocation]:
        data = await self.redis.hgetall(self.key(session_id))
        if not data:
            return None
        try:
            coordinate = Coordinate(
                float(data["latitude"]), float(data["longitude"])
            )
            pincode = data["pincode"]
        except (KeyError, ValueError) as exc:
            logger.warning(
                "Discarding corrupt location for session %s: %s", session_id, exc
            )
            return None
        return UserLocation(
            pincode=pincode,
            coordinate=coordinate,
            **{name: data.get(name) or None for name in _OPTIONAL_FIELDS},
        )

    async def delete(self, session_id: str) -> bool:
        return bool(await self.redis.delete(self.key(session_id)))

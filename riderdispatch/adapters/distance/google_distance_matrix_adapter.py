"""Google Distance Matrix adapter — implements DistancePort."""

from __future__ import annotations

import logging
from collections import OrderedDict

import httpx

from riderdispatch.application.ports.distance_port import DistancePort
from riderdispatch.config import Settings
from riderdispatch.domain.entities.zone import Zone
from riderdispatch.domain.policies.zone_ordering import sort_by_distance
from riderdispatch.domain.value_objects.zone_distance import ZoneWithDistance

logger = logging.getLogger(__name__)

# Distance Matrix accepts at most 25 destinations per request
MAX_DESTINATIONS_PER_REQUEST = 25


def with_country(label: str, country: str) -> str:
    """Append ", <country>" unless one comma-separated part of the label is the country.

    "Lekki, Nigeria" is kept as is; "Nigerian Army Barracks, Yaba" is not a
    match and gets the suffix.
    """
    label = label.strip()
    if not country:
        return label
    wanted = country.strip().lower()
    if any(part.strip().lower() == wanted for part in label.split(",")):
        return label
    return f"{label}, {country}"


class GoogleDistanceMatrixAdapter(DistancePort):
    """Ranks zones by driving distance using the Google Distance Matrix API."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._api_key = settings.google_maps_api_key
        self._url = settings.distance_matrix_url
        self._timeout = settings.distance_matrix_timeout
        self._country = settings.dispatch_country
        self._transport = transport
        # LRU of (origin, zone id) -> meters, oldest entry evicted first
        self._cache: OrderedDict[tuple[str, str], int] = OrderedDict()
        self._cache_size = settings.distance_cache_size

    async def rank_zones_by_distance(
        self, origin_address: str, zones: list[Zone]
    ) -> list[ZoneWithDistance]:
        if not self._api_key:
            logger.error("Google Maps API key is not set. Cannot rank zones.")
            return []
        if not zones:
            return []

        origin = with_country(origin_address, self._country)
        origin_key = origin.lower()

        ranked: list[ZoneWithDistance] = []
        missing: list[Zone] = []
        for zone in zones:
            cached = self._cache_get((origin_key, zone.id))
            if cached is not None:
                ranked.append(ZoneWithDistance(zone=zone, distance_meters=cached))
            else:
                missing.append(zone)

        for start in range(0, len(missing), MAX_DESTINATIONS_PER_REQUEST):
            chunk = missing[start:start + MAX_DESTINATIONS_PER_REQUEST]
            for item in await self._lookup(origin, chunk):
                self._cache_put((origin_key, item.zone.id), item.distance_meters)
                ranked.append(item)

        ranked = sort_by_distance(ranked)
        if ranked:
            logger.info(
                "Zones ranked by distance: %s",
                ", ".join(f"{r.zone.name} ({r.distance_km:.2f}km)" for r in ranked),
            )
        return ranked

    def _cache_get(self, key: tuple[str, str]) -> int | None:
        meters = self._cache.get(key)
        if meters is not None:
            self._cache.move_to_end(key)
        return meters

    def _cache_put(self, key: tuple[str, str], meters: int) -> None:
        if self._cache_size <= 0:
            return
        self._cache[key] = meters
        self._cache.move_to_end(key)
        while len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)

    async def _lookup(self, origin: str, zones: list[Zone]) -> list[ZoneWithDistance]:
        """One Distance Matrix request; any failure yields an empty list."""
        destinations = "|".join(with_country(z.name, self._country) for z in zones)
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    self._url,
                    params={
                        "origins": origin,
                        "destinations": destinations,
                        "mode": "driving",
                        "key": self._api_key,
                    },
                    timeout=self._timeout,
                )
                response.raise_for_status()
                data = response.json()

            if data.get("status") != "OK":
                logger.error(
                    "Distance Matrix API error: %s %s",
                    data.get("status"), data.get("error_message", ""),
                )
                return []

            rows = data.get("rows") or []
            if not rows or not rows[0].get("elements"):
                logger.error("No results from Distance Matrix API for '%s'", origin)
                return []

            results = []
            for zone, element in zip(zones, rows[0]["elements"]):
                distance = element.get("distance") or {}
                if element.get("status") == "OK" and distance.get("value") is not None:
                    results.append(ZoneWithDistance(zone=zone, distance_meters=int(distance["value"])))
                else:
                    logger.debug("No distance for zone %s: %s", zone.name, element.get("status"))
            return results

        except Exception:
            logger.exception("Distance Matrix API error for '%s'", origin)
            return []

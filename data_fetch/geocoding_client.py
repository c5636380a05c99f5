"""
BirthWindow - Address Geocoding Client

Turns a free-text address into coordinates via OpenStreetMap Nominatim
(no API key required). When Nominatim fails or finds nothing, a small
table of major cities is searched by substring before giving up.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import requests

from config import settings
from config.constants import NOMINATIM_SEARCH
from config.known_locations import KNOWN_LOCATIONS
from data_fetch.cache import BoundedCache
from models.data_types import LocationData

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


class GeocodingError(Exception):
    """Raised with ``code`` in NO_RESULTS | API_ERROR | INVALID_INPUT."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass(frozen=True)
class GeocodingResult:
    latitude: float
    longitude: float
    city: str
    country: str
    formatted_address: str
    confidence: float

    def to_location(self) -> LocationData:
        return LocationData(
            latitude=self.latitude,
            longitude=self.longitude,
            city=self.city,
            country=self.country,
        )


class GeocodingClient:
    """Nominatim geocoder with a known-city fallback and a result cache."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        cache: Optional[BoundedCache] = None,
        user_agent: str = settings.USER_AGENT,
        timeout: float = settings.HTTP_TIMEOUT,
    ):
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/json",
        })
        if cache is None:
            cache = BoundedCache(
                max_size=settings.GEOCODE_CACHE_SIZE,
                ttl_seconds=settings.GEOCODE_CACHE_TTL,
            )
        self.cache = cache
        self.timeout = timeout

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------
    def geocode(self, address: str) -> GeocodingResult:
        """
        Resolve ``address`` to a single best match.

        Raises
        ------
        GeocodingError
            INVALID_INPUT for a blank address, NO_RESULTS when neither
            Nominatim nor the fallback table knows the place.
        """
        clean = (address or "").strip()
        if not clean:
            raise GeocodingError("Address cannot be empty", "INVALID_INPUT")

        cache_key = clean.lower()
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("geocode cache hit for %r", cache_key)
            return cached

        try:
            result = self._geocode_nominatim(clean)
        except (requests.RequestException, ValueError, LookupError) as exc:
            logger.warning("Nominatim lookup failed for %r (%s); trying fallback table", clean, exc)
            result = self._geocode_known_locations(clean)

        if result is None:
            raise GeocodingError(
                "Could not find location. Please check the spelling and try again.",
                "NO_RESULTS",
            )

        self.cache.set(cache_key, result)
        return result

    def suggest_locations(self, partial: str) -> List[str]:
        """Up to five known-city addresses matching a partial query."""
        if not partial or len(partial) < 2:
            return []
        needle = partial.lower()
        suggestions = [
            loc["formatted_address"]
            for pattern, loc in KNOWN_LOCATIONS.items()
            if pattern.startswith(needle)
            or needle in loc["city"].lower()
            or needle in loc["country"].lower()
        ]
        return suggestions[:MAX_SUGGESTIONS]

    # -----------------------------------------------------------------
    # Backends
    # -----------------------------------------------------------------
    def _geocode_nominatim(self, address: str) -> GeocodingResult:
        params = {
            "format": "json",
            "q": address,
            "limit": 1,
            "addressdetails": 1,
        }
        resp = self.session.get(NOMINATIM_SEARCH, params=params, timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()

        if not data:
            raise LookupError("No results found")

        hit = data[0]
        parts = hit.get("address") or {}
        city = (
            parts.get("city")
            or parts.get("town")
            or parts.get("village")
            or parts.get("hamlet")
            or "Unknown City"
        )
        return GeocodingResult(
            latitude=float(hit["lat"]),
            longitude=float(hit["lon"]),
            city=city,
            country=parts.get("country") or "Unknown Country",
            formatted_address=hit.get("display_name") or address,
            confidence=float(hit.get("importance") or 0.5),
        )

    @staticmethod
    def _geocode_known_locations(address: str) -> Optional[GeocodingResult]:
        normalized = address.lower()
        for pattern, loc in KNOWN_LOCATIONS.items():
            if pattern in normalized:
                return GeocodingResult(**loc)
        return None

"""
BirthWindow - Device Geolocation & Reverse Geocoding

Converts browser geolocation output into LocationData. City and country
come from the BigDataCloud client-side reverse geocoder (no key needed);
the IANA timezone comes from the coordinates via timezonefinder.
"""

import logging
from typing import Dict, Optional

import requests
from timezonefinder import TimezoneFinder

from config import settings
from config.constants import BIGDATACLOUD_REVERSE
from models.data_types import LocationData, validate_location

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()

GEOLOCATION_ERROR_MESSAGES = {
    1: "Location access denied. Please enable location permissions.",
    2: "Location unavailable. Please check your connection.",
    3: "Location request timed out. Please try again.",
}
UNKNOWN_GEOLOCATION_ERROR = "An unknown error occurred while getting your location."


def describe_geolocation_error(code: Optional[int]) -> str:
    """Browser GeolocationPositionError code → user-facing message."""
    return GEOLOCATION_ERROR_MESSAGES.get(code, UNKNOWN_GEOLOCATION_ERROR)


def timezone_for(latitude: float, longitude: float) -> Optional[str]:
    return _tf.timezone_at(lat=latitude, lng=longitude)


def reverse_geocode(
    latitude: float,
    longitude: float,
    session: Optional[requests.Session] = None,
    timeout: float = settings.HTTP_TIMEOUT,
) -> Dict:
    """
    City / country / timezone for a coordinate pair.

    Never raises on network trouble: a failed lookup yields
    ``city="Unknown"`` and ``country="Unknown"``.
    """
    session = session or requests.Session()
    timezone = timezone_for(latitude, longitude)
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "localityLanguage": "en",
    }
    try:
        resp = session.get(BIGDATACLOUD_REVERSE, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Reverse geocoding failed for (%.4f, %.4f): %s", latitude, longitude, exc)
        return {"city": "Unknown", "country": "Unknown", "timezone": timezone}

    return {
        "city": data.get("city") or data.get("locality") or "Unknown",
        "country": data.get("countryName") or "Unknown",
        "timezone": timezone,
    }


def location_from_coordinates(
    latitude: float,
    longitude: float,
    accuracy: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> LocationData:
    """Validated LocationData for raw coordinates, enriched by reverse geocoding."""
    validate_location(LocationData(latitude=latitude, longitude=longitude))
    details = reverse_geocode(latitude, longitude, session=session)
    return LocationData(
        latitude=latitude,
        longitude=longitude,
        city=details["city"],
        country=details["country"],
        timezone=details["timezone"],
        accuracy=accuracy or None,
    )


def location_from_browser_payload(
    payload: Optional[Dict],
    session: Optional[requests.Session] = None,
) -> LocationData:
    """
    Parse the object returned by ``streamlit_js_eval.get_geolocation()``.

    Raises
    ------
    GeolocationError
        When the browser reported an error or returned no coordinates.
    """
    if not payload:
        raise GeolocationError(0, "Geolocation is not supported by this browser")
    if "error" in payload:
        code = (payload.get("error") or {}).get("code")
        raise GeolocationError(code, describe_geolocation_error(code))

    coords = payload.get("coords") or {}
    if "latitude" not in coords or "longitude" not in coords:
        raise GeolocationError(2, describe_geolocation_error(2))

    return location_from_coordinates(
        float(coords["latitude"]),
        float(coords["longitude"]),
        accuracy=coords.get("accuracy"),
        session=session,
    )


class GeolocationError(Exception):
    def __init__(self, code: Optional[int], message: str):
        super().__init__(message)
        self.code = code
        self.message = message

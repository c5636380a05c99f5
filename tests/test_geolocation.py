"""Tests for browser geolocation parsing and reverse geocoding."""

from unittest.mock import MagicMock

import pytest
import requests

from data_fetch import geolocation
from data_fetch.geolocation import (
    GeolocationError,
    describe_geolocation_error,
    location_from_browser_payload,
    reverse_geocode,
)


@pytest.fixture(autouse=True)
def fixed_timezone(monkeypatch):
    monkeypatch.setattr(geolocation, "timezone_for", lambda lat, lon: "America/New_York")


def _session(payload=None, exc=None):
    session = MagicMock()
    if exc is not None:
        session.get.side_effect = exc
    else:
        session.get.return_value.json.return_value = payload
    return session


@pytest.mark.parametrize("code,fragment", [
    (1, "access denied"),
    (2, "unavailable"),
    (3, "timed out"),
    (99, "unknown error"),
    (None, "unknown error"),
])
def test_error_messages(code, fragment):
    """Test browser error codes map to user-facing text."""
    assert fragment in describe_geolocation_error(code)


def test_reverse_geocode_success():
    """Test city, country and timezone from BigDataCloud."""
    session = _session({"city": "", "locality": "Manhattan", "countryName": "United States"})
    details = reverse_geocode(40.7, -74.0, session=session)
    assert details == {"city": "Manhattan", "country": "United States", "timezone": "America/New_York"}
    _, kwargs = session.get.call_args
    assert kwargs["params"]["localityLanguage"] == "en"


def test_reverse_geocode_failure_is_unknown():
    """Test network failures degrade to Unknown rather than raising."""
    details = reverse_geocode(40.7, -74.0, session=_session(exc=requests.Timeout("slow")))
    assert details["city"] == "Unknown"
    assert details["country"] == "Unknown"
    assert details["timezone"] == "America/New_York"


def test_browser_payload_to_location():
    """Test a successful get_geolocation() payload."""
    payload = {"coords": {"latitude": 40.7128, "longitude": -74.006, "accuracy": 35.0}}
    session = _session({"city": "New York", "countryName": "United States"})
    loc = location_from_browser_payload(payload, session=session)
    assert loc.latitude == 40.7128
    assert loc.city == "New York"
    assert loc.accuracy == 35.0
    assert loc.timezone == "America/New_York"


def test_browser_payload_error():
    """Test a permission-denied payload raises with code 1."""
    with pytest.raises(GeolocationError) as excinfo:
        location_from_browser_payload({"error": {"code": 1, "message": "denied"}})
    assert excinfo.value.code == 1
    assert "access denied" in excinfo.value.message


@pytest.mark.parametrize("payload,code", [
    (None, 0),
    ({}, 0),
    ({"coords": {"latitude": 1.0}}, 2),
])
def test_browser_payload_missing(payload, code):
    """Test missing payloads and coordinates."""
    with pytest.raises(GeolocationError) as excinfo:
        location_from_browser_payload(payload)
    assert excinfo.value.code == code

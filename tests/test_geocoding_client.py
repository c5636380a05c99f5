"""Tests for the Nominatim geocoding client (HTTP mocked)."""

from unittest.mock import MagicMock

import pytest
import requests

from data_fetch.geocoding_client import GeocodingClient, GeocodingError, GeocodingResult


def _session(payload=None, exc=None):
    session = MagicMock()
    session.headers = {}
    if exc is not None:
        session.get.side_effect = exc
    else:
        resp = MagicMock()
        resp.json.return_value = payload
        session.get.return_value = resp
    return session


NOMINATIM_HIT = [{
    "lat": "48.8566",
    "lon": "2.3522",
    "display_name": "Paris, Île-de-France, France",
    "importance": 0.96,
    "address": {"city": "Paris", "country": "France"},
}]


def test_geocode_parses_nominatim():
    """Test a Nominatim hit becomes a GeocodingResult."""
    session = _session(NOMINATIM_HIT)
    client = GeocodingClient(session=session)
    result = client.geocode("  Paris  ")
    assert result == GeocodingResult(
        latitude=48.8566,
        longitude=2.3522,
        city="Paris",
        country="France",
        formatted_address="Paris, Île-de-France, France",
        confidence=0.96,
    )
    _, kwargs = session.get.call_args
    assert kwargs["params"]["q"] == "Paris"
    assert kwargs["params"]["limit"] == 1
    assert "User-Agent" in session.headers


def test_geocode_town_and_defaults():
    """Test town fallback for the city and default confidence."""
    payload = [{"lat": "1", "lon": "2", "address": {"town": "Smallville"}}]
    result = GeocodingClient(session=_session(payload)).geocode("Smallville")
    assert result.city == "Smallville"
    assert result.country == "Unknown Country"
    assert result.formatted_address == "Smallville"
    assert result.confidence == 0.5


def test_network_failure_uses_known_locations():
    """Test a connection error falls back to the city table."""
    client = GeocodingClient(session=_session(exc=requests.ConnectionError("down")))
    result = client.geocode("Somewhere near New York")
    assert result.city == "New York"
    assert result.latitude == pytest.approx(40.7128)
    assert result.confidence == 0.9


def test_empty_results_use_known_locations():
    """Test an empty Nominatim list falls back to the city table."""
    result = GeocodingClient(session=_session([])).geocode("Tokyo, Japan")
    assert result.city == "Tokyo"


def test_unknown_place_raises_no_results():
    """Test NO_RESULTS when neither backend finds the place."""
    client = GeocodingClient(session=_session([]))
    with pytest.raises(GeocodingError) as excinfo:
        client.geocode("Atlantis")
    assert excinfo.value.code == "NO_RESULTS"


def test_blank_address_invalid():
    """Test a blank address raises INVALID_INPUT without any request."""
    session = _session(NOMINATIM_HIT)
    with pytest.raises(GeocodingError) as excinfo:
        GeocodingClient(session=session).geocode("   ")
    assert excinfo.value.code == "INVALID_INPUT"
    assert excinfo.value.message == "Address cannot be empty"
    session.get.assert_not_called()


def test_cache_hit_skips_request():
    """Test repeated lookups differing only in case hit the cache."""
    session = _session(NOMINATIM_HIT)
    client = GeocodingClient(session=session)
    first = client.geocode("Paris")
    second = client.geocode("PARIS")
    assert first == second
    assert session.get.call_count == 1


def test_suggest_locations():
    """Test suggestions match prefixes, cities and countries."""
    client = GeocodingClient(session=_session([]))
    assert client.suggest_locations("l") == []
    assert client.suggest_locations("lo") == ["Los Angeles, CA, USA", "London, UK"]
    assert len(client.suggest_locations("united")) == 5


def test_to_location():
    """Test conversion to LocationData."""
    loc = GeocodingClient(session=_session(NOMINATIM_HIT)).geocode("Paris").to_location()
    assert (loc.latitude, loc.longitude, loc.city, loc.country) == (48.8566, 2.3522, "Paris", "France")

"""Tests for the optimal timing engine."""

import math
from datetime import date, datetime

import numpy as np
import pytest

from data_fetch.solar_data_source import SolarDataSource
from models.data_types import InvalidInputError, LocationData
from models.optimal_timing_model import (
    OptimalTimingEngine,
    calculate_optimal_timing,
    confidence_level_for_score,
)


def test_new_york_july_2024_scenario(new_york, midpoint_source):
    """Test the New York 2024-07-15 scenario end to end (zero noise)."""
    result = calculate_optimal_timing(new_york, date(2024, 7, 15), midpoint_source)

    assert result.birth_date == date(2024, 7, 15)
    assert result.solar_data.sunspot_number == 94
    assert result.solar_data.solar_risk == "MEDIUM"
    assert result.solar_data.mental_health_multiplier == pytest.approx(1.3)
    assert result.life_expectancy_delta == pytest.approx(-3.5)
    assert result.seasonal_data.overall_seasonal_score == 66
    assert result.overall_score == 58
    assert result.confidence_level == "LOW"

    names = [f.name for f in result.risk_factors]
    assert names == [
        "Solar Activity Risk",
        "Vitamin D Deficiency Risk",
        "Low Infection Period",
        "Latitude Challenge",
        "Summer Air Quality",
    ]

    assert result.recommendations[0] == (
        "Consider delaying conception by 6-12 months to avoid peak solar activity "
        "(current impact: -3.5 years)"
    )
    assert result.recommendations[-1] == (
        "Consider alternative timing or implement comprehensive risk mitigation strategies"
    )
    assert "Child may benefit from delayed school entry or summer programs" in result.recommendations


def test_category_scores(new_york, midpoint_source):
    """Test the four category scores behind the New York scenario."""
    scores = calculate_optimal_timing(new_york, date(2024, 7, 15), midpoint_source).category_scores
    assert scores["solar"] == pytest.approx(47.5)
    assert scores["seasonal"] == 66
    assert scores["geographic"] == pytest.approx(59.3)
    assert scores["environmental"] == 75


def test_arctic_latitude_challenge(seeded_source):
    """Test an arctic location carries the -24 latitude challenge."""
    arctic = LocationData(latitude=75.0, longitude=20.0, city="Arctic", country="Norway")
    result = calculate_optimal_timing(arctic, date(2025, 3, 1), seeded_source)
    factor = next(f for f in result.risk_factors if f.category == "geographic")
    assert factor.name == "Latitude Challenge"
    assert factor.impact == -24
    assert factor.severity == "MEDIUM"


def test_score_bounds_over_random_inputs():
    """Test overall score is an integer in [0, 100] for 1000 random pairs."""
    rng = np.random.default_rng(2024)
    engine = OptimalTimingEngine()
    for _ in range(1000):
        loc = LocationData(
            latitude=float(rng.uniform(-90, 90)),
            longitude=float(rng.uniform(-180, 180)),
            country="US",
        )
        day = date(int(rng.integers(1964, 2040)), int(rng.integers(1, 13)), int(rng.integers(1, 29)))
        result = engine.calculate(loc, day)
        assert isinstance(result.overall_score, int)
        assert 0 <= result.overall_score <= 100
        assert result.confidence_level == confidence_level_for_score(result.overall_score)
        assert len(result.recommendations) == len(set(result.recommendations))


@pytest.mark.parametrize("score,expected", [
    (100, "HIGH"), (80, "HIGH"), (79, "MEDIUM"), (60, "MEDIUM"), (59, "LOW"), (0, "LOW"),
])
def test_confidence_is_function_of_score(score, expected):
    """Test confidence tiers at their boundaries."""
    assert confidence_level_for_score(score) == expected


def test_repeat_calls_with_shared_source(new_york, seeded_source):
    """Test repeated calls agree on seasonal data and stay within the noise band."""
    a = calculate_optimal_timing(new_york, date(2026, 2, 10), seeded_source)
    b = calculate_optimal_timing(new_york, date(2026, 2, 10), seeded_source)
    assert a.seasonal_data == b.seasonal_data
    assert abs(a.solar_data.sunspot_number - b.solar_data.sunspot_number) <= 20


@pytest.mark.parametrize("seed_a,seed_b", [(1, 2), (7, 99), (123, 456)])
def test_independent_noise_draws(new_york, seed_a, seed_b):
    """Test uncached sources with different seeds differ only within the noise band."""
    day = date(2024, 7, 15)
    a = calculate_optimal_timing(new_york, day, SolarDataSource(rng=np.random.default_rng(seed_a)))
    b = calculate_optimal_timing(new_york, day, SolarDataSource(rng=np.random.default_rng(seed_b)))
    assert a.seasonal_data == b.seasonal_data
    assert a.category_scores["seasonal"] == b.category_scores["seasonal"]
    assert abs(a.solar_data.sunspot_number - b.solar_data.sunspot_number) <= 20


def test_datetime_target_is_truncated(new_york, midpoint_source):
    """Test datetimes are accepted as their calendar date."""
    result = calculate_optimal_timing(new_york, datetime(2024, 7, 15, 13, 45), midpoint_source)
    assert result.birth_date == date(2024, 7, 15)


def test_critical_recommendations_first(midpoint_source):
    """Test critical strings precede everything else."""
    oslo = LocationData(latitude=59.9, longitude=10.7, city="Oslo", country="Norway")
    result = calculate_optimal_timing(oslo, date(2024, 12, 15), midpoint_source)
    priorities = [r.priority for r in result.prioritized_recommendations]
    seen_other = False
    for p in priorities:
        if p != "CRITICAL":
            seen_other = True
        else:
            assert not seen_other
    assert [r.text for r in result.prioritized_recommendations] == list(result.recommendations)


@pytest.mark.parametrize("lat,lon", [
    (math.nan, 0.0),
    (0.0, math.inf),
    (91.0, 0.0),
    (-90.5, 0.0),
    (0.0, 180.5),
    (True, 0.0),
    ("40", 0.0),
])
def test_invalid_location_fails_fast(lat, lon, midpoint_rng):
    """Test bad coordinates raise before any solar sample is drawn."""
    source = SolarDataSource(rng=midpoint_rng)
    with pytest.raises(InvalidInputError):
        calculate_optimal_timing(LocationData(latitude=lat, longitude=lon), date(2024, 1, 1), source)
    assert midpoint_rng.calls == 0


def test_invalid_date(new_york):
    """Test non-date targets are rejected."""
    with pytest.raises(InvalidInputError):
        calculate_optimal_timing(new_york, "2024-07-15")


def test_to_dict_wire_shape(new_york, midpoint_source):
    """Test camelCase export keys."""
    d = calculate_optimal_timing(new_york, date(2024, 7, 15), midpoint_source).to_dict()
    assert set(d) == {
        "birthDate", "overallScore", "lifeExpectancyDelta", "confidenceLevel",
        "riskFactors", "recommendations", "solarData", "seasonalData",
    }
    assert d["birthDate"] == "2024-07-15"
    assert d["solarData"]["sunspotNumber"] == 94
    assert d["seasonalData"]["overallSeasonalScore"] == 66

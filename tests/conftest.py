"""Shared fixtures for BirthWindow tests."""

from datetime import date

import numpy as np
import pytest

from data_fetch.cache import BoundedCache
from data_fetch.solar_data_source import SolarDataSource
from models.data_types import (
    LocationData,
    SeasonalRiskData,
    SolarActivityData,
    TimingContext,
)


class MidpointRng:
    """Generator stand-in whose uniform draws always return the interval midpoint."""

    def __init__(self):
        self.calls = 0

    def uniform(self, low=0.0, high=1.0):
        self.calls += 1
        return (low + high) / 2.0


@pytest.fixture
def midpoint_rng():
    return MidpointRng()


@pytest.fixture
def midpoint_source():
    """Zero-noise solar source (sunspot noise 0, flux/geomagnetic draws 0.5)."""
    return SolarDataSource(rng=MidpointRng(), cache=BoundedCache(max_size=512))


@pytest.fixture
def seeded_source():
    return SolarDataSource(rng=np.random.default_rng(42), cache=BoundedCache(max_size=512))


@pytest.fixture
def new_york():
    return LocationData(latitude=40.7128, longitude=-74.0060, city="New York", country="United States")


@pytest.fixture
def sydney():
    return LocationData(latitude=-33.8688, longitude=151.2093, city="Sydney", country="Australia")


def make_context(
    lifespan=0.0,
    vitamin_d=60,
    infectious=50,
    relative_age=50,
    mental_multiplier=1.0,
    latitude=40.0,
    target=date(2024, 7, 15),
    sunspots=60,
    uv=5.5,
    overall_score=None,
):
    """Hand-built TimingContext for rule tests."""
    location = LocationData(latitude=latitude, longitude=0.0, city="Testville", country="US")
    solar = SolarActivityData(
        date=target,
        sunspot_number=sunspots,
        solar_flux_index=140.0,
        geomagnetic_index=3.0,
        cosmic_ray_intensity=70.0,
        cycle_phase="ascending",
        lifespan_impact=lifespan,
        uv_radiation_level=uv,
    )
    seasonal = SeasonalRiskData(
        birth_month=target.month,
        vitamin_d_score=vitamin_d,
        infectious_risk=infectious,
        relative_age_advantage=relative_age,
        cardiovascular_risk=0,
        mental_health_risk=0,
        auto_immune_risk=0,
        overall_seasonal_score=60,
        risk_level="MEDIUM",
    )
    return TimingContext(
        target_date=target,
        location=location,
        solar=solar,
        seasonal=seasonal,
        mental_health_multiplier=mental_multiplier,
        distance_from_equator=abs(latitude),
        overall_score=overall_score,
    )

"""
BirthWindow - Model 1: Solar Cycle Activity

Locates the 11-year solar cycle enclosing a date, synthesizes a sunspot
number from a phase-based waveform, and maps it to UV level, solar risk
tier, mental-health multiplier and an estimated lifespan delta.

  sunspots = (0.7·sin(2πp) + 0.8·exp(-8(p-0.36)²))·max_sunspots + noise

where p is the fraction of the cycle elapsed. The ±10 noise term is drawn
from an injected random generator so callers control reproducibility.

Sources:
  Lowell & Davis (2008) Solar Physics
  Hathaway (2015) "The Solar Cycle", Living Reviews in Solar Physics
"""

import math
from datetime import date
from typing import Optional

import numpy as np

from config.constants import (
    SOLAR_CYCLES,
    FUTURE_CYCLE,
    SUNSPOT_MODEL,
    CYCLE_PHASE_BOUNDS,
    SOLAR_RISK_THRESHOLDS,
    MENTAL_HEALTH,
    LIFESPAN_IMPACT,
    SOLAR_UV,
)
from models.data_types import SolarActivityData, SolarCycleRecord, round_half_up

_CYCLES = [SolarCycleRecord(**c) for c in SOLAR_CYCLES]


def get_solar_cycle_for_date(day: date) -> SolarCycleRecord:
    """Tabulated cycle containing ``day.year``, else the extrapolated one."""
    year = day.year
    for cycle in _CYCLES:
        if cycle.start_year <= year <= cycle.end_year:
            return cycle
    return predict_future_solar_cycle(day)


def get_current_solar_cycle(today: Optional[date] = None) -> SolarCycleRecord:
    """Cycle for today's year; the latest tabulated cycle outside the table."""
    year = (today or date.today()).year
    for cycle in _CYCLES:
        if cycle.start_year <= year <= cycle.end_year:
            return cycle
    return _CYCLES[-1]


def predict_future_solar_cycle(day: date) -> SolarCycleRecord:
    """
    Extrapolate past the last tabulated cycle: fixed 11-year cycles
    chained from its end year, each peaking at an average 140 sunspots.
    Dates not past the table resolve to the last tabulated cycle.
    """
    last = _CYCLES[-1]
    if day.year <= last.end_year:
        return last

    length = FUTURE_CYCLE["length_years"]
    cycles_ahead = math.ceil((day.year - last.end_year) / length)
    start_year = last.end_year + (cycles_ahead - 1) * length
    return SolarCycleRecord(
        cycle_number=last.cycle_number + cycles_ahead,
        start_year=start_year,
        peak_year=start_year + FUTURE_CYCLE["peak_offset_years"],
        end_year=start_year + length,
        max_sunspots=FUTURE_CYCLE["max_sunspots"],
        phase=FUTURE_CYCLE["phase"],
    )


def calculate_sunspot_number(day: date, rng: Optional[np.random.Generator] = None) -> int:
    """
    Synthetic sunspot number for ``day`` (≥ 0, integer).

    Parameters
    ----------
    day : date
    rng : numpy Generator, optional
        Source of the ±10 natural-variation term. A fresh unseeded
        generator is used when omitted, so repeated calls differ.
    """
    rng = rng if rng is not None else np.random.default_rng()
    m = SUNSPOT_MODEL
    cycle = get_solar_cycle_for_date(day)

    # Month enters as a 0-based fraction of the year
    year_in_cycle = day.year - cycle.start_year + (day.month - 1) / 12.0
    cycle_progress = year_in_cycle / cycle.length_years

    base_activity = np.sin(2.0 * np.pi * cycle_progress)
    peak_adjustment = np.exp(-((cycle_progress - m["peak_position"]) ** 2) * m["peak_sharpness"])

    noise = rng.uniform(-m["noise_amplitude"], m["noise_amplitude"])
    sunspots = max(
        0.0,
        (base_activity * m["sine_weight"] + peak_adjustment * m["peak_weight"]) * cycle.max_sunspots
        + noise,
    )
    return round_half_up(sunspots)


def calculate_cycle_phase(day: date) -> str:
    """Named phase from the whole-year fraction of the cycle elapsed."""
    cycle = get_solar_cycle_for_date(day)
    progress = (day.year - cycle.start_year) / cycle.length_years
    for bound, phase in CYCLE_PHASE_BOUNDS:
        if progress < bound:
            return phase
    return "descending"


def calculate_lifespan_impact(sunspot_number: float, month_index: int) -> float:
    """
    Estimated lifespan delta in years, rounded to 0.1.

    Three linear segments over sunspots clamped to [0, 200]:
      < 30   : +0.5 → -0.3   (solar minimum, reduced UV)
      30-120 : -0.3 → -4.8   (moderate activity)
      ≥ 120  : -4.8 → -6.6   (solar maximum)
    plus ``(month_index - 6) * 0.1`` where ``month_index`` is 0-based.
    """
    c = LIFESPAN_IMPACT
    s = float(np.clip(sunspot_number, 0, c["sunspot_cap"]))

    if s < c["minimum_max"]:
        impact = 0.5 - (s / 30.0) * 0.8
    elif s < c["moderate_max"]:
        impact = -0.3 - ((s - 30.0) / 90.0) * 4.5
    else:
        impact = -4.8 - ((s - 120.0) / 80.0) * 1.8

    month_variation = (month_index - 6) * c["month_step"]
    return round_half_up(impact + month_variation, 1)


def calculate_uv_from_solar_activity(sunspot_number: float) -> float:
    uv = SOLAR_UV["base"] * (1.0 + (sunspot_number / SOLAR_UV["sunspot_scale"]) * SOLAR_UV["gain"])
    return min(SOLAR_UV["max"], uv)


def get_solar_risk_level(sunspot_number: float) -> str:
    if sunspot_number < SOLAR_RISK_THRESHOLDS["low"]:
        return "LOW"
    if sunspot_number < SOLAR_RISK_THRESHOLDS["medium"]:
        return "MEDIUM"
    return "HIGH"


def calculate_mental_health_multiplier(sunspot_number: float) -> float:
    """Relative mental-health risk; elevated during solar maximum."""
    if sunspot_number > MENTAL_HEALTH["sunspot_threshold"]:
        return MENTAL_HEALTH["baseline"] * MENTAL_HEALTH["solar_max_multiplier"]
    return MENTAL_HEALTH["baseline"]


def calculate_solar_activity_data(
    day: date,
    rng: Optional[np.random.Generator] = None,
) -> SolarActivityData:
    """
    Full synthetic solar sample for ``day``.

    Not deterministic unless ``rng`` is seeded: sunspot noise, flux index
    and geomagnetic index all draw from the generator.
    """
    rng = rng if rng is not None else np.random.default_rng()
    sunspot_number = calculate_sunspot_number(day, rng)

    solar_flux_index = max(70.0, sunspot_number + 70.0 + rng.uniform(0.0, 1.0) * 30.0)
    geomagnetic_index = float(np.clip(sunspot_number / 30.0 + rng.uniform(0.0, 1.0) * 2.0, 0.0, 9.0))
    cosmic_ray_intensity = max(0.0, 100.0 - sunspot_number / 2.0)  # inverse relationship

    return SolarActivityData(
        date=day,
        sunspot_number=sunspot_number,
        solar_flux_index=float(solar_flux_index),
        geomagnetic_index=geomagnetic_index,
        cosmic_ray_intensity=cosmic_ray_intensity,
        cycle_phase=calculate_cycle_phase(day),
        lifespan_impact=calculate_lifespan_impact(sunspot_number, day.month - 1),
        uv_radiation_level=calculate_uv_from_solar_activity(sunspot_number),
    )

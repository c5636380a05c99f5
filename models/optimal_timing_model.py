"""
BirthWindow - Model 3: Optimal Birth Timing (Final Score)

Combines the solar cycle model and the seasonal model into a weighted
0–100 optimality score, a list of signed risk factors and prioritized
recommendations for one (location, target date) pair.

Category scores:
  solar          100 − 15·|lifespan impact|
  seasonal       overall seasonal score (Model 2)
  geographic     100 − |latitude|
  environmental  fixed placeholder (75) until an air-quality feed exists

Confidence is read off the final score (≥80 HIGH, ≥60 MEDIUM, else LOW).
It is a restatement of the score, not an uncertainty estimate.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Dict

import numpy as np

from config.constants import (
    CATEGORY_WEIGHTS,
    CONFIDENCE_THRESHOLDS,
    ENVIRONMENTAL_PLACEHOLDER_SCORE,
    SOLAR_SCORE_PER_YEAR,
)
from data_fetch.solar_data_source import SolarDataSource, build_default_solar_source
from features.geo_features import distance_from_equator
from models.data_types import (
    LocationData,
    OptimalTimingResult,
    SeasonalSummary,
    SolarSummary,
    TimingContext,
    round_half_up,
    validate_date,
    validate_location,
)
from models.recommendation_rules import build_recommendations
from models.risk_factor_rules import build_risk_factors
from models.seasonal_risk_model import calculate_seasonal_risk
from models.solar_cycle_model import (
    calculate_mental_health_multiplier,
    get_solar_risk_level,
)

logger = logging.getLogger(__name__)


def confidence_level_for_score(score: float) -> str:
    if score >= CONFIDENCE_THRESHOLDS["high"]:
        return "HIGH"
    if score >= CONFIDENCE_THRESHOLDS["medium"]:
        return "MEDIUM"
    return "LOW"


def compute_category_scores(ctx: TimingContext) -> Dict[str, float]:
    return {
        "solar": max(0.0, 100.0 - abs(ctx.solar.lifespan_impact) * SOLAR_SCORE_PER_YEAR),
        "seasonal": float(ctx.seasonal.overall_seasonal_score),
        "geographic": max(0.0, 100.0 - ctx.distance_from_equator),
        "environmental": ENVIRONMENTAL_PLACEHOLDER_SCORE,
    }


def weighted_score(category_scores: Dict[str, float]) -> int:
    """Weighted sum of the category scores, rounded and clipped to 0–100."""
    total = sum(category_scores[k] * w for k, w in CATEGORY_WEIGHTS.items())
    return int(np.clip(round_half_up(total), 0, 100))


def calculate_optimal_timing(
    location: LocationData,
    target_date: date,
    solar_source=None,
) -> OptimalTimingResult:
    """
    Score a single candidate birth date.

    Parameters
    ----------
    location : LocationData
        Validated before any scoring; bad coordinates raise InvalidInputError.
    target_date : date
        A ``datetime`` is accepted and truncated to its date.
    solar_source : SolarDataSource, optional
        Supplies the solar sample. A fresh uncached source is
        used when omitted.

    Returns
    -------
    OptimalTimingResult
    """
    location = validate_location(location)
    target_date = validate_date(target_date)

    if solar_source is None:
        solar_source = SolarDataSource()

    solar = solar_source.get_activity(target_date)
    seasonal = calculate_seasonal_risk(target_date, location)
    mental_multiplier = calculate_mental_health_multiplier(solar.sunspot_number)

    ctx = TimingContext(
        target_date=target_date,
        location=location,
        solar=solar,
        seasonal=seasonal,
        mental_health_multiplier=mental_multiplier,
        distance_from_equator=distance_from_equator(location.latitude),
    )

    risk_factors = build_risk_factors(ctx)
    category_scores = compute_category_scores(ctx)
    score = weighted_score(category_scores)

    ctx = replace(ctx, overall_score=score)
    recommendations = build_recommendations(ctx)

    logger.debug(
        "%s @ (%.2f, %.2f): score=%d, %d factors, %d recommendations",
        target_date, location.latitude, location.longitude,
        score, len(risk_factors), len(recommendations),
    )

    return OptimalTimingResult(
        birth_date=target_date,
        overall_score=score,
        life_expectancy_delta=solar.lifespan_impact,
        confidence_level=confidence_level_for_score(score),
        risk_factors=tuple(risk_factors),
        recommendations=tuple(r.text for r in recommendations),
        solar_data=SolarSummary(
            sunspot_number=solar.sunspot_number,
            solar_risk=get_solar_risk_level(solar.sunspot_number),
            lifespan_impact=solar.lifespan_impact,
            mental_health_multiplier=mental_multiplier,
            uv_radiation_level=solar.uv_radiation_level,
        ),
        seasonal_data=SeasonalSummary(
            vitamin_d_score=seasonal.vitamin_d_score,
            infectious_risk=seasonal.infectious_risk,
            relative_age_advantage=seasonal.relative_age_advantage,
            overall_seasonal_score=seasonal.overall_seasonal_score,
        ),
        category_scores={k: round(v, 1) for k, v in category_scores.items()},
        prioritized_recommendations=tuple(recommendations),
    )


class OptimalTimingEngine:
    """Holds one solar source so every call in a session shares its samples."""

    def __init__(self, solar_source=None):
        if solar_source is None:
            solar_source = build_default_solar_source()
        self.solar_source = solar_source

    def calculate(self, location: LocationData, target_date: date) -> OptimalTimingResult:
        return calculate_optimal_timing(location, target_date, self.solar_source)

    def analyze_range(self, location: LocationData, center_date: date, range_months: int = 24):
        from analysis.timing_range import analyze_timing_range
        return analyze_timing_range(location, center_date, range_months, self.solar_source)

    def report(self, location: LocationData, selected_date: date):
        from analysis.report import generate_optimality_report
        return generate_optimality_report(location, selected_date, self.solar_source)

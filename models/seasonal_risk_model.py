"""
BirthWindow - Model 2: Seasonal Birth Risk

Birth-month effects from a fixed Northern Hemisphere table of disease-risk
multipliers (mirrored six months for the Southern Hemisphere), vitamin D
synthesis over the first six months of life, and the relative-age effect
of school-year cutoffs. Fully deterministic.

Sources:
  Disanto et al. (2012) PLoS ONE: seasonal birth effects on disease risk
  Boland et al. (2015) JAMIA: birth month and lifetime disease risk
  Haggarty et al. (2004) British Journal of Nutrition
  Bedard & Dhuey (2006) Quarterly Journal of Economics
"""

from datetime import date
from typing import List, Optional

import numpy as np

from config.constants import (
    DISEASE_RISK_BY_MONTH,
    DISEASE_NORMALIZATION,
    SEASONAL_WEIGHTS,
    SEASONAL_RISK_LEVELS,
    SCHOOL_YEAR_CUTOFFS,
    COUNTRY_ALIASES,
    RELATIVE_AGE_POINTS_PER_MONTH,
    VITAMIN_D_CRITICAL_MONTHS,
)
from features.geo_features import is_northern_hemisphere, uv_intensity_by_latitude
from models.data_types import DiseaseRisks, LocationData, SeasonalRiskData, round_half_up


def hemisphere_adjusted_month(month: int, latitude: float) -> int:
    """Table row for ``month``; shifted six months south of the equator."""
    if is_northern_hemisphere(latitude):
        return month
    return ((month + 5) % 12) + 1


def calculate_disease_risks(birth_date: date, location: LocationData) -> DiseaseRisks:
    row = DISEASE_RISK_BY_MONTH[hemisphere_adjusted_month(birth_date.month, location.latitude)]
    return DiseaseRisks(**row)


def calculate_vitamin_d_synthesis(location: LocationData, birth_date: date) -> float:
    """
    Vitamin D synthesis potential (0–100): mean UV intensity over the birth
    month and the five months after it, scaled ×10.
    """
    months = [
        ((birth_date.month - 1 + i) % 12) + 1 for i in range(VITAMIN_D_CRITICAL_MONTHS)
    ]
    uv = [uv_intensity_by_latitude(location.latitude, m) for m in months]
    return float(np.clip(np.mean(uv) * 10.0, 0.0, 100.0))


def calculate_infectious_risk(birth_date: date, location: LocationData) -> float:
    """Raw infectious-disease multiplier for the (hemisphere-adjusted) month."""
    return calculate_disease_risks(birth_date, location).infectious


def school_year_cutoff(country: Optional[str]) -> int:
    if not country:
        return SCHOOL_YEAR_CUTOFFS["default"]
    key = COUNTRY_ALIASES.get(country.strip().lower(), country.strip())
    return SCHOOL_YEAR_CUTOFFS.get(key, SCHOOL_YEAR_CUTOFFS["default"])


def calculate_relative_age_effect(birth_date: date, country: Optional[str] = "US") -> float:
    """
    Relative-age advantage (0–100). Births just after the school-year
    cutoff are the oldest in their cohort and score highest.
    """
    months_from_cutoff = (birth_date.month - school_year_cutoff(country) + 12) % 12
    return max(0.0, 100.0 - months_from_cutoff * RELATIVE_AGE_POINTS_PER_MONTH)


def _normalize(value: float, term: str) -> float:
    n = DISEASE_NORMALIZATION[term]
    if term == "autoimmune":
        raw = abs(value - n["baseline"]) * n["scale"]
    else:
        raw = (value - n["baseline"]) * n["scale"]
    return float(np.clip(raw, 0.0, 100.0))


def _seasonal_risk_level(score: float) -> str:
    if score >= SEASONAL_RISK_LEVELS["low"]:
        return "LOW"
    if score >= SEASONAL_RISK_LEVELS["medium"]:
        return "MEDIUM"
    return "HIGH"


def calculate_seasonal_risk(birth_date: date, location: LocationData) -> SeasonalRiskData:
    """
    Combine the seasonal sub-models into a 0–100 score (higher is better).

    Returns
    -------
    SeasonalRiskData with the normalized 0–100 sub-scores, rounded.
    """
    w = SEASONAL_WEIGHTS

    vitamin_d = calculate_vitamin_d_synthesis(location, birth_date)
    relative_age = calculate_relative_age_effect(birth_date, location.country)
    risks = calculate_disease_risks(birth_date, location)

    infectious = _normalize(risks.infectious, "infectious")
    cardio = _normalize(risks.cardiovascular, "cardiovascular")
    mental = _normalize(risks.mental_health, "mental_health")
    autoimmune = _normalize(risks.autoimmune, "autoimmune")

    overall = round_half_up(
        vitamin_d * w["vitamin_d"]
        + (100.0 - infectious) * w["infectious"]
        + relative_age * w["relative_age"]
        + (100.0 - cardio) * w["cardiovascular"]
        + (100.0 - mental) * w["mental_health"]
        + (100.0 - autoimmune) * w["autoimmune"]
    )

    return SeasonalRiskData(
        birth_month=birth_date.month,
        vitamin_d_score=round_half_up(vitamin_d),
        infectious_risk=round_half_up(infectious),
        relative_age_advantage=round_half_up(relative_age),
        cardiovascular_risk=round_half_up(cardio),
        mental_health_risk=round_half_up(mental),
        auto_immune_risk=round_half_up(autoimmune),
        overall_seasonal_score=overall,
        risk_level=_seasonal_risk_level(overall),
    )


def get_optimal_birth_months(location: LocationData, year: int = 2024) -> List[int]:
    """Top three birth months (1–12) by seasonal score, evaluated mid-month."""
    scores = [
        (month, calculate_seasonal_risk(date(year, month, 15), location).overall_seasonal_score)
        for month in range(1, 13)
    ]
    scores.sort(key=lambda item: item[1], reverse=True)
    return [month for month, _ in scores[:3]]


def get_seasonal_recommendations(birth_date: date, location: LocationData) -> List[str]:
    seasonal = calculate_seasonal_risk(birth_date, location)
    recommendations = []

    if seasonal.vitamin_d_score < 50:
        recommendations.append("Consider vitamin D supplementation during pregnancy and early infancy")
    if seasonal.infectious_risk > 70:
        recommendations.append("Take extra precautions against infections during the first 6 months")
    if seasonal.relative_age_advantage < 30:
        recommendations.append("Child may benefit from delayed school entry or summer programs")
    if seasonal.cardiovascular_risk > 60:
        recommendations.append("Monitor cardiovascular health markers throughout life")
    if seasonal.mental_health_risk > 60:
        recommendations.append("Be aware of increased mental health risks and ensure good support systems")

    return recommendations

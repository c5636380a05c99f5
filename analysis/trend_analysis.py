"""
BirthWindow - Score Trend Analysis

Year-over-year and month-over-month trend labels for the timing range,
plus a Mann-Kendall test over the monthly score series to tell whether
scores drift across the window or merely oscillate with the seasons.

Reference: Mann (1945), Kendall (1975), Sen (1968).
"""

from typing import Dict, List, Optional, Sequence

import numpy as np
import pymannkendall as mk
from scipy import stats

from config.constants import (
    LIFESPAN_BASELINE_YEARS,
    LIFESPAN_YEARS_PER_POINT,
    MONTHLY_TREND_MARGIN,
    YEARLY_TREND_MARGIN,
)
from models.data_types import round_half_up


def classify_yearly_trend(current_avg: Optional[float], next_avg: Optional[float]) -> str:
    """
    'improving' / 'declining' when next year's mean score moves more than
    five points from the current year's; 'stable' otherwise, including when
    either year has no evaluations.
    """
    if current_avg is None or next_avg is None:
        return "stable"
    if next_avg > current_avg + YEARLY_TREND_MARGIN:
        return "improving"
    if next_avg < current_avg - YEARLY_TREND_MARGIN:
        return "declining"
    return "stable"


def month_over_month_trend(previous: Optional[float], current: float) -> str:
    if previous is None:
        return "stable"
    diff = current - previous
    if diff > MONTHLY_TREND_MARGIN:
        return "up"
    if diff < -MONTHLY_TREND_MARGIN:
        return "down"
    return "stable"


def estimate_lifespan_for_score(score: float) -> float:
    """Chart-only life expectancy estimate: 78 years at score 50, ±0.1 per point."""
    return round_half_up(LIFESPAN_BASELINE_YEARS + (score - 50) * LIFESPAN_YEARS_PER_POINT, 1)


def compute_score_trend(scores: Sequence[float]) -> Dict:
    """
    Mann-Kendall trend test on a monthly series of optimality scores.

    Parameters
    ----------
    scores : sequence of float
        Monthly scores, oldest first. Needs at least 4 finite values.

    Returns
    -------
    dict with keys: trend, slope_per_month, p_value, significant,
                    intercept, r_squared, description, n_months
    """
    values = np.asarray(list(scores), dtype=float)
    values = values[~np.isnan(values)]
    if len(values) < 4:
        return _no_data_result()

    result = mk.original_test(values)
    p_value = float(result.p)
    sen_slope = float(result.slope)
    significant = p_value < 0.05

    # Least-squares fit for the chart overlay
    if np.ptp(values) == 0:
        intercept, r_squared = float(values[0]), 0.0
    else:
        fit = stats.linregress(np.arange(len(values)), values)
        intercept, r_squared = float(fit.intercept), float(fit.rvalue ** 2)

    if significant and sen_slope > 0.1:
        trend = "IMPROVING"
    elif significant and sen_slope < -0.1:
        trend = "DECLINING"
    else:
        trend = "STABLE"

    return {
        "trend": trend,
        "slope_per_month": round(sen_slope, 3),
        "p_value": round(p_value, 4),
        "significant": significant,
        "intercept": round(intercept, 3),
        "r_squared": round(r_squared, 3),
        "description": _build_description(trend, sen_slope, p_value, significant),
        "n_months": int(len(values)),
    }


def _no_data_result() -> Dict:
    return {
        "trend": "STABLE",
        "slope_per_month": 0.0,
        "p_value": 1.0,
        "significant": False,
        "intercept": 0.0,
        "r_squared": 0.0,
        "description": "Not enough months in range for trend analysis.",
        "n_months": 0,
    }


def _build_description(trend: str, slope: float, p_value: float, significant: bool) -> str:
    if not significant:
        return (
            f"No statistically significant trend (p={p_value:.2f}). "
            "Scores mostly follow the seasonal cycle."
        )
    abs_slope = abs(slope)
    strength = "strongly" if abs_slope > 1 else "gradually"
    if trend == "IMPROVING":
        return (
            f"Scores are {strength} improving at +{abs_slope:.2f} points/month "
            f"(Mann-Kendall p={p_value:.3f}). Later dates look better."
        )
    if trend == "DECLINING":
        return (
            f"Scores are {strength} declining at -{abs_slope:.2f} points/month "
            f"(Mann-Kendall p={p_value:.3f}). Earlier dates look better."
        )
    return f"No meaningful trend detected (slope={slope:.2f}, p={p_value:.2f})."


def yearly_means(years: List[int], scores: List[float]) -> Dict[int, float]:
    """Mean score per calendar year."""
    totals: Dict[int, List[float]] = {}
    for year, score in zip(years, scores):
        totals.setdefault(year, []).append(score)
    return {year: float(np.mean(vals)) for year, vals in totals.items()}

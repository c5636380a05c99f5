"""
BirthWindow - Timing Range Analysis

Evaluates every month in a ±N month window around a center date and
summarizes the window: top-quartile optimal windows, best and worst
calendar month, and the year-over-year trend.
"""

import logging
import math
from datetime import date
from typing import List

import pandas as pd

from analysis.trend_analysis import (
    classify_yearly_trend,
    estimate_lifespan_for_score,
    month_over_month_trend,
    yearly_means,
)
from config.constants import OPTIMAL_WINDOW_FRACTION
from data_fetch.solar_data_source import SolarDataSource
from models.data_types import (
    InvalidInputError,
    LocationData,
    TimingAnalysis,
    validate_date,
    validate_location,
)
from models.optimal_timing_model import calculate_optimal_timing

logger = logging.getLogger(__name__)


def month_offsets(center_date: date, range_months: int) -> List[date]:
    """Dates at −N..+N calendar months; day clamped to month end (Jan 31 → Feb 28/29)."""
    center = pd.Timestamp(center_date)
    return [
        (center + pd.DateOffset(months=i)).date()
        for i in range(-range_months, range_months + 1)
    ]


def analyze_timing_range(
    location: LocationData,
    center_date: date,
    range_months: int = 24,
    solar_source=None,
) -> TimingAnalysis:
    """
    Score every month in ``[center − N, center + N]``.

    Returns
    -------
    TimingAnalysis with ``ceil((2N+1)·0.25)`` optimal windows (best first)
    and all 2N+1 evaluations in chronological order.
    """
    location = validate_location(location)
    center_date = validate_date(center_date)
    if isinstance(range_months, bool) or not isinstance(range_months, int):
        raise InvalidInputError(f"range_months must be an integer, got {range_months!r}")
    if range_months < 0:
        raise InvalidInputError(f"range_months must be >= 0, got {range_months}")

    if solar_source is None:
        solar_source = SolarDataSource()

    evaluations = [
        calculate_optimal_timing(location, d, solar_source)
        for d in month_offsets(center_date, range_months)
    ]

    ranked = sorted(evaluations, key=lambda r: r.overall_score, reverse=True)
    window_count = math.ceil(len(evaluations) * OPTIMAL_WINDOW_FRACTION)

    means = yearly_means(
        [r.birth_date.year for r in evaluations],
        [r.overall_score for r in evaluations],
    )
    trend = classify_yearly_trend(
        means.get(center_date.year), means.get(center_date.year + 1)
    )

    logger.info(
        "Analyzed %d months around %s: best=%d, worst=%d, trend=%s",
        len(evaluations), center_date, ranked[0].overall_score,
        ranked[-1].overall_score, trend,
    )

    return TimingAnalysis(
        optimal_windows=tuple(ranked[:window_count]),
        current_timing=calculate_optimal_timing(location, center_date, solar_source),
        best_overall_month=ranked[0].birth_date.month,
        worst_overall_month=ranked[-1].birth_date.month,
        yearly_trend=trend,
        evaluations=tuple(evaluations),
    )


def build_monthly_scores(analysis: TimingAnalysis) -> pd.DataFrame:
    """
    One row per evaluated month for the timeline and life expectancy charts.

    Columns: date, label, months_from_center, score, estimated_lifespan,
    trend ('up' / 'down' / 'stable' versus the previous month).
    """
    evaluations = analysis.evaluations
    center_index = len(evaluations) // 2

    rows = []
    previous = None
    for i, result in enumerate(evaluations):
        rows.append({
            "date": pd.Timestamp(result.birth_date),
            "label": result.birth_date.strftime("%b %Y"),
            "months_from_center": i - center_index,
            "score": result.overall_score,
            "estimated_lifespan": estimate_lifespan_for_score(result.overall_score),
            "trend": month_over_month_trend(previous, result.overall_score),
        })
        previous = result.overall_score

    return pd.DataFrame(
        rows,
        columns=["date", "label", "months_from_center", "score", "estimated_lifespan", "trend"],
    )

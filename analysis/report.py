"""
BirthWindow - Optimality Report

Bundles a single-date analysis with a ±12 month range into a narrative
summary, up to three alternative dates and the citation list; also builds
the downloadable birth-report JSON.
"""

import json
import logging
import re
from datetime import date, datetime, timezone
from typing import Dict, Optional

from analysis.timing_range import analyze_timing_range
from config.constants import SCIENTIFIC_BASIS
from data_fetch.solar_data_source import SolarDataSource
from models.data_types import (
    LocationData,
    OptimalityReport,
    OptimalTimingResult,
    validate_date,
    validate_location,
)
from models.optimal_timing_model import calculate_optimal_timing

logger = logging.getLogger(__name__)

REPORT_RANGE_MONTHS = 12
MAX_ALTERNATIVES = 3


def _signed(value: float) -> str:
    return f"{'+' if value >= 0 else ''}{value:g}"


def _place(location: LocationData):
    return location.city or "Unknown", location.country or "Unknown"


def build_summary(location: LocationData, selected_date: date, result: OptimalTimingResult) -> str:
    high_count = sum(1 for f in result.risk_factors if f.severity == "HIGH")
    city, country = _place(location)
    lines = [
        f"Birth timing analysis for {selected_date.strftime('%B %Y')} "
        f"in {city}, {country}:",
        f"Overall optimality score: {result.overall_score}/100 "
        f"({result.confidence_level} confidence)",
        f"Estimated lifespan impact: {_signed(result.life_expectancy_delta)} years",
        f"Primary risk factors: {high_count} high-risk factors identified",
    ]
    return "\n".join(lines)


def generate_optimality_report(
    location: LocationData,
    selected_date: date,
    solar_source=None,
) -> OptimalityReport:
    """
    Full report for ``selected_date``.

    Alternatives are the best-scoring months within ±12 months of the
    selection, excluding the selected date itself.
    """
    location = validate_location(location)
    selected_date = validate_date(selected_date)
    if solar_source is None:
        solar_source = SolarDataSource()

    result = calculate_optimal_timing(location, selected_date, solar_source)
    timing = analyze_timing_range(location, selected_date, REPORT_RANGE_MONTHS, solar_source)

    alternatives = [w for w in timing.optimal_windows if w.birth_date != selected_date]

    return OptimalityReport(
        summary=build_summary(location, selected_date, result),
        analysis=result,
        alternatives=tuple(alternatives[:MAX_ALTERNATIVES]),
        scientific_basis=tuple(SCIENTIFIC_BASIS),
    )


def report_to_json(report: OptimalityReport, indent: int = 2) -> str:
    return json.dumps(report.to_dict(), indent=indent, ensure_ascii=False)


def build_export_payload(
    location: LocationData,
    result: OptimalTimingResult,
    generated_at: Optional[datetime] = None,
) -> Dict:
    """Birth-report download body (risk factors without their impacts)."""
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    city, country = _place(location)

    return {
        "title": f"Birth Analysis Report for {city}, {country}",
        "birthDate": result.birth_date.strftime("%B %d, %Y"),
        "location": {
            "city": city,
            "country": country,
            "coordinates": f"{location.latitude}, {location.longitude}",
        },
        "analysis": {
            "overallScore": result.overall_score,
            "lifeExpectancyDelta": result.life_expectancy_delta,
            "confidenceLevel": result.confidence_level,
            "riskFactors": [
                {
                    "name": f.name,
                    "category": f.category,
                    "severity": f.severity,
                    "description": f.description,
                }
                for f in result.risk_factors
            ],
            "solarData": result.solar_data.to_dict(),
            "seasonalData": result.seasonal_data.to_dict(),
            "recommendations": list(result.recommendations),
        },
        "generatedAt": generated_at.isoformat(),
    }


def export_filename(location: LocationData, birth_date: date) -> str:
    city = re.sub(r"\s+", "-", location.city or "Unknown")
    return f"birth-report-{birth_date.isoformat()}-{city}.json"

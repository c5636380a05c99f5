"""
BirthWindow - Value Objects

Immutable records passed between the models, the timing engine and the
presentation layer. ``to_dict()`` produces the camelCase JSON shape used by
the report export.
"""

import math
import numbers
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional, Tuple


class InvalidInputError(ValueError):
    """Location or date outside the domain the models are defined on."""


@dataclass(frozen=True)
class LocationData:
    latitude: float
    longitude: float
    city: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None
    accuracy: Optional[float] = None

    def to_dict(self) -> Dict:
        out = {"latitude": self.latitude, "longitude": self.longitude}
        for key in ("city", "country", "timezone", "accuracy"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


@dataclass(frozen=True)
class SolarCycleRecord:
    cycle_number: int
    start_year: int
    peak_year: int
    end_year: int
    max_sunspots: float
    phase: str

    @property
    def length_years(self) -> int:
        return self.end_year - self.start_year


@dataclass(frozen=True)
class SolarActivityData:
    date: date
    sunspot_number: int
    solar_flux_index: float
    geomagnetic_index: float
    cosmic_ray_intensity: float
    cycle_phase: str
    lifespan_impact: float
    uv_radiation_level: float

    def to_dict(self) -> Dict:
        return {
            "date": self.date.isoformat(),
            "sunspotNumber": self.sunspot_number,
            "solarFluxIndex": round(self.solar_flux_index, 2),
            "geomagneticIndex": round(self.geomagnetic_index, 2),
            "cosmicRayIntensity": round(self.cosmic_ray_intensity, 2),
            "cyclePhase": self.cycle_phase,
            "lifespanImpact": self.lifespan_impact,
            "uvRadiationLevel": self.uv_radiation_level,
        }


@dataclass(frozen=True)
class DiseaseRisks:
    """Raw seasonal risk multipliers (1.0 = population baseline)."""

    cardiovascular: float
    mental_health: float
    autoimmune: float
    respiratory: float
    infectious: float


@dataclass(frozen=True)
class SeasonalRiskData:
    birth_month: int
    vitamin_d_score: int
    infectious_risk: int
    relative_age_advantage: int
    cardiovascular_risk: int
    mental_health_risk: int
    auto_immune_risk: int
    overall_seasonal_score: int
    risk_level: str


@dataclass(frozen=True)
class RiskFactor:
    category: str          # solar | seasonal | geographic | environmental
    name: str
    impact: int            # -100..100, positive = beneficial
    severity: str          # LOW | MEDIUM | HIGH
    description: str

    def to_dict(self) -> Dict:
        return {
            "category": self.category,
            "name": self.name,
            "impact": self.impact,
            "severity": self.severity,
            "description": self.description,
        }


@dataclass(frozen=True)
class Recommendation:
    text: str
    priority: str          # CRITICAL | DELAY | ADVISORY


@dataclass(frozen=True)
class SolarSummary:
    sunspot_number: int
    solar_risk: str
    lifespan_impact: float
    mental_health_multiplier: float
    uv_radiation_level: float

    def to_dict(self) -> Dict:
        return {
            "sunspotNumber": self.sunspot_number,
            "solarRisk": self.solar_risk,
            "lifespanImpact": self.lifespan_impact,
            "mentalHealthMultiplier": self.mental_health_multiplier,
            "uvRadiationLevel": self.uv_radiation_level,
        }


@dataclass(frozen=True)
class SeasonalSummary:
    vitamin_d_score: int
    infectious_risk: int
    relative_age_advantage: int
    overall_seasonal_score: int

    def to_dict(self) -> Dict:
        return {
            "vitaminDScore": self.vitamin_d_score,
            "infectiousRisk": self.infectious_risk,
            "relativeAgeAdvantage": self.relative_age_advantage,
            "overallSeasonalScore": self.overall_seasonal_score,
        }


@dataclass(frozen=True)
class OptimalTimingResult:
    birth_date: date
    overall_score: int
    life_expectancy_delta: float
    confidence_level: str
    risk_factors: Tuple[RiskFactor, ...]
    recommendations: Tuple[str, ...]
    solar_data: SolarSummary
    seasonal_data: SeasonalSummary
    category_scores: Dict[str, float] = field(default_factory=dict)
    prioritized_recommendations: Tuple[Recommendation, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "birthDate": self.birth_date.isoformat(),
            "overallScore": self.overall_score,
            "lifeExpectancyDelta": self.life_expectancy_delta,
            "confidenceLevel": self.confidence_level,
            "riskFactors": [f.to_dict() for f in self.risk_factors],
            "recommendations": list(self.recommendations),
            "solarData": self.solar_data.to_dict(),
            "seasonalData": self.seasonal_data.to_dict(),
        }


@dataclass(frozen=True)
class TimingAnalysis:
    optimal_windows: Tuple[OptimalTimingResult, ...]
    current_timing: OptimalTimingResult
    best_overall_month: int
    worst_overall_month: int
    yearly_trend: str      # improving | stable | declining
    evaluations: Tuple[OptimalTimingResult, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "optimalWindows": [w.to_dict() for w in self.optimal_windows],
            "currentTiming": self.current_timing.to_dict(),
            "bestOverallMonth": self.best_overall_month,
            "worstOverallMonth": self.worst_overall_month,
            "yearlyTrend": self.yearly_trend,
        }


@dataclass(frozen=True)
class OptimalityReport:
    summary: str
    analysis: OptimalTimingResult
    alternatives: Tuple[OptimalTimingResult, ...]
    scientific_basis: Tuple[str, ...]

    def to_dict(self) -> Dict:
        return {
            "summary": self.summary,
            "analysis": self.analysis.to_dict(),
            "alternatives": [a.to_dict() for a in self.alternatives],
            "scientificBasis": list(self.scientific_basis),
        }


# ---------------------------------------------------------------------------
# Boundary validation
# ---------------------------------------------------------------------------
def validate_location(location: LocationData) -> LocationData:
    """Reject locations the models are not defined on. Returns the input."""
    if not isinstance(location, LocationData):
        raise InvalidInputError(f"Expected LocationData, got {type(location).__name__}")
    lat, lon = location.latitude, location.longitude
    for name, value, bound in (("latitude", lat, 90.0), ("longitude", lon, 180.0)):
        if not isinstance(value, numbers.Real) or isinstance(value, bool):
            raise InvalidInputError(f"{name} must be a number, got {value!r}")
        if math.isnan(value) or math.isinf(value):
            raise InvalidInputError(f"{name} must be finite, got {value!r}")
        if not -bound <= value <= bound:
            raise InvalidInputError(f"{name} {value} outside [-{bound:g}, {bound:g}]")
    return location


def validate_date(value) -> date:
    """Accept a ``date`` or ``datetime`` (incl. pandas Timestamp); return a plain date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidInputError(f"Expected a date, got {type(value).__name__}")



@dataclass(frozen=True)
class TimingContext:
    """Everything the risk-factor and recommendation rules read."""

    target_date: date
    location: LocationData
    solar: SolarActivityData
    seasonal: SeasonalRiskData
    mental_health_multiplier: float
    distance_from_equator: float
    overall_score: Optional[int] = None


def round_half_up(value: float, ndigits: int = 0):
    """
    Round with exact halves going toward +inf (-2.5 -> -2, 2.5 -> 3).

    Returns an int when ``ndigits`` is 0, otherwise a float.
    """
    if ndigits:
        scale = 10 ** ndigits
        return math.floor(value * scale + 0.5) / scale
    return int(math.floor(value + 0.5))

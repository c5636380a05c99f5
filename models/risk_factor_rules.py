"""
BirthWindow - Risk Factor Rules

Ordered rule table turning a TimingContext into named, severity-tagged
risk factors with signed impacts (positive = beneficial). Rules run in
sequence; each contributes at most one factor.

Always present: one solar factor, the vitamin D factor, the latitude
factor and exactly one environmental (season) factor. UV, infection and
school-age factors appear only past their thresholds.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from config.constants import MONTH_TO_SEASON, REFERENCE_LATITUDE, SEASONAL_ENVIRONMENT
from models.data_types import RiskFactor, TimingContext, round_half_up


@dataclass(frozen=True)
class FactorRule:
    key: str
    applies: Callable[[TimingContext], bool]
    build: Callable[[TimingContext], RiskFactor]


def _severity(magnitude: float, high: float, medium: float) -> str:
    if magnitude > high:
        return "HIGH"
    if magnitude > medium:
        return "MEDIUM"
    return "LOW"


def _clamp_impact(value: float) -> int:
    return int(np.clip(round_half_up(value), -100, 100))


# ---------------------------------------------------------------
# Derived impacts
# ---------------------------------------------------------------
def uv_impact(ctx: TimingContext) -> int:
    return round_half_up((ctx.solar.uv_radiation_level - 6.0) * 5.0)


def vitamin_d_impact(ctx: TimingContext) -> int:
    return round_half_up((ctx.seasonal.vitamin_d_score - 60) * 0.5)


def infection_impact(ctx: TimingContext) -> int:
    return round_half_up((ctx.seasonal.infectious_risk - 50) * 0.6)


def latitude_impact(ctx: TimingContext) -> int:
    return round_half_up((REFERENCE_LATITUDE - ctx.distance_from_equator) * 0.6)


def season_for(ctx: TimingContext) -> str:
    return MONTH_TO_SEASON[ctx.target_date.month]


# ---------------------------------------------------------------
# Builders
# ---------------------------------------------------------------
def _solar_risk(ctx: TimingContext) -> RiskFactor:
    lifespan = ctx.solar.lifespan_impact
    return RiskFactor(
        category="solar",
        name="Solar Activity Risk",
        impact=_clamp_impact(-round_half_up(abs(lifespan) * 12)),
        severity="HIGH" if lifespan < -3 else "MEDIUM",
        description="High solar activity during birth period affects development",
    )


def _solar_benefit(ctx: TimingContext) -> RiskFactor:
    return RiskFactor(
        category="solar",
        name="Solar Minimum Benefit",
        impact=_clamp_impact(ctx.solar.lifespan_impact * 15),
        severity="LOW",
        description="Low solar activity provides optimal conditions",
    )


def _solar_neutral(ctx: TimingContext) -> RiskFactor:
    return RiskFactor(
        category="solar",
        name="Solar Activity Neutral",
        impact=_clamp_impact(ctx.solar.lifespan_impact * 5),
        severity="LOW",
        description="Moderate solar activity with minimal impact",
    )


def _uv(ctx: TimingContext) -> RiskFactor:
    impact = uv_impact(ctx)
    harmful = impact > 0
    return RiskFactor(
        category="solar",
        name="UV Exposure Risk" if harmful else "UV Protection Benefit",
        impact=_clamp_impact(-abs(impact) if harmful else abs(impact)),
        severity=_severity(abs(impact), high=15, medium=8),
        description=(
            "Elevated UV radiation increases health risks"
            if harmful else "Lower UV exposure reduces radiation risks"
        ),
    )


def _vitamin_d(ctx: TimingContext) -> RiskFactor:
    impact = vitamin_d_impact(ctx)
    positive = impact > 0
    return RiskFactor(
        category="seasonal",
        name="Vitamin D Advantage" if positive else "Vitamin D Deficiency Risk",
        impact=_clamp_impact(impact),
        severity=_severity(abs(impact), high=15, medium=8),
        description=(
            "Optimal vitamin D synthesis during pregnancy"
            if positive else "Limited vitamin D synthesis may affect development"
        ),
    )


def _infection(ctx: TimingContext) -> RiskFactor:
    impact = infection_impact(ctx)
    harmful = impact > 0
    return RiskFactor(
        category="seasonal",
        name="Infection Season Risk" if harmful else "Low Infection Period",
        impact=_clamp_impact(-abs(impact) if harmful else abs(impact)),
        severity=_severity(abs(impact), high=18, medium=10),
        description=(
            "Higher infection rates during birth period"
            if harmful else "Lower infection risk provides health benefits"
        ),
    )


def _school_age(ctx: TimingContext) -> RiskFactor:
    return RiskFactor(
        category="seasonal",
        name="School Age Advantage",
        impact=_clamp_impact((ctx.seasonal.relative_age_advantage - 50) * 0.8),
        severity="LOW",
        description="Favorable birth timing for academic year",
    )


def _latitude(ctx: TimingContext) -> RiskFactor:
    impact = latitude_impact(ctx)
    favorable = impact > 0
    return RiskFactor(
        category="geographic",
        name="Favorable Latitude" if favorable else "Latitude Challenge",
        impact=_clamp_impact(impact),
        severity="MEDIUM" if abs(impact) > 15 else "LOW",
        description=(
            "Optimal latitude for balanced seasonal exposure"
            if favorable else "Extreme latitude affects seasonal patterns"
        ),
    )


def _environment(ctx: TimingContext) -> RiskFactor:
    env = SEASONAL_ENVIRONMENT[season_for(ctx)]
    return RiskFactor(
        category="environmental",
        name=env["name"],
        impact=env["impact"],
        severity="MEDIUM" if abs(env["impact"]) > 15 else "LOW",
        description=env["description"],
    )


RISK_FACTOR_RULES: List[FactorRule] = [
    FactorRule("solar_risk", lambda c: c.solar.lifespan_impact < -1, _solar_risk),
    FactorRule("solar_benefit", lambda c: c.solar.lifespan_impact > 0.5, _solar_benefit),
    FactorRule("solar_neutral", lambda c: -1 <= c.solar.lifespan_impact <= 0.5, _solar_neutral),
    FactorRule("uv", lambda c: abs(uv_impact(c)) > 2, _uv),
    FactorRule("vitamin_d", lambda c: True, _vitamin_d),
    FactorRule("infection", lambda c: abs(infection_impact(c)) > 3, _infection),
    FactorRule("school_age", lambda c: c.seasonal.relative_age_advantage > 60, _school_age),
    FactorRule("latitude", lambda c: True, _latitude),
    FactorRule("environment", lambda c: True, _environment),
]


def build_risk_factors(ctx: TimingContext, rules: Optional[List[FactorRule]] = None) -> List[RiskFactor]:
    """Evaluate ``rules`` (default: RISK_FACTOR_RULES) in order."""
    rules = RISK_FACTOR_RULES if rules is None else rules
    return [rule.build(ctx) for rule in rules if rule.applies(ctx)]

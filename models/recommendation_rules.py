"""
BirthWindow - Recommendation Rules

Advisory strings produced by an ordered table of (priority, predicate,
template) rules. Each rule carries its priority, so ordering never depends
on the wording of the rendered text:

  CRITICAL  - act before conception
  DELAY     - timing change suggested
  ADVISORY  - everything else

Output is deduplicated (first occurrence wins) and stably sorted by
priority; rules of equal priority keep table order.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from models.data_types import Recommendation, TimingContext
from models.seasonal_risk_model import get_seasonal_recommendations

logger = logging.getLogger(__name__)

PRIORITY_RANK = {"CRITICAL": 0, "DELAY": 1, "ADVISORY": 2}


@dataclass(frozen=True)
class RecommendationRule:
    priority: str
    applies: Callable[[TimingContext], bool]
    template: str


def _lifespan(c: TimingContext) -> float:
    return c.solar.lifespan_impact


def _vit_d(c: TimingContext) -> int:
    return c.seasonal.vitamin_d_score


def _infection(c: TimingContext) -> int:
    return c.seasonal.infectious_risk


def _rel_age(c: TimingContext) -> int:
    return c.seasonal.relative_age_advantage


RECOMMENDATION_RULES: List[RecommendationRule] = [
    # Solar cycle timing
    RecommendationRule(
        "CRITICAL", lambda c: _lifespan(c) < -5,
        "⚠️ CRITICAL: Consider delaying conception by 12-18 months - peak solar maximum "
        "detected with significant lifespan impact (-{abs_lifespan:.1f} years)",
    ),
    RecommendationRule(
        "DELAY", lambda c: -5 <= _lifespan(c) < -3,
        "Consider delaying conception by 6-12 months to avoid peak solar activity "
        "(current impact: {lifespan:.1f} years)",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: _lifespan(c) > 2,
        "Excellent solar conditions detected - optimal timing from a solar cycle perspective "
        "(+{lifespan:.1f} years lifespan benefit)",
    ),
    # Vitamin D
    RecommendationRule(
        "CRITICAL", lambda c: _vit_d(c) < 30,
        "⚠️ CRITICAL: Start high-dose vitamin D supplementation immediately (2000-4000 IU daily) "
        "- severe deficiency risk in {month_name}",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: _vit_d(c) < 30,
        "Schedule vitamin D blood test before conception and monitor levels throughout pregnancy",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: 30 <= _vit_d(c) < 50,
        "Begin vitamin D supplementation (1000-2000 IU daily) at least 3 months before conception",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: 30 <= _vit_d(c) < 50,
        "Consider light therapy during pregnancy months if born in {month_name}",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: _vit_d(c) > 80,
        "Excellent vitamin D synthesis expected - maintain outdoor activities for natural production",
    ),
    # Infection risk
    RecommendationRule(
        "ADVISORY", lambda c: _infection(c) > 80,
        "⚠️ High infection risk period - implement strict hygiene protocols during first trimester",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: _infection(c) > 80,
        "Consider flu vaccination before conception and pertussis vaccine during pregnancy",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: _infection(c) > 80,
        "Limit exposure to crowded spaces during peak {month_name} infection season",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: 60 < _infection(c) <= 80,
        "Moderate infection risk - maintain good hygiene practices and consider immune support supplements",
    ),
    # School entry
    RecommendationRule(
        "ADVISORY", lambda c: _rel_age(c) > 70,
        "Excellent school entry timing - child will be among oldest in class with documented "
        "academic advantages",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: _rel_age(c) > 70,
        "Consider early enrichment programs to maximize age-related developmental advantages",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: _rel_age(c) < 30,
        'Child will be among youngest in class - consider delayed kindergarten entry or "redshirting"',
    ),
    RecommendationRule(
        "ADVISORY", lambda c: _rel_age(c) < 30,
        "Focus on early childhood development programs to offset relative age disadvantage",
    ),
    # Geography
    RecommendationRule(
        "ADVISORY", lambda c: c.distance_from_equator > 50,
        "Northern latitude detected - ensure adequate indoor air quality and humidity control "
        "during winter months",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: c.distance_from_equator > 50,
        "Consider seasonal affective disorder (SAD) prevention with light therapy during pregnancy",
    ),
    # Mental health (multiplier tops out at 1.3, so this never fires today)
    RecommendationRule(
        "ADVISORY", lambda c: c.mental_health_multiplier > 1.3,
        "Elevated mental health risks detected - establish care team including mental health specialist",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: c.mental_health_multiplier > 1.3,
        "Create postpartum support plan with emphasis on {month_name} seasonal factors",
    ),
]

SUMMARY_RULES: List[RecommendationRule] = [
    RecommendationRule(
        "ADVISORY", lambda c: c.overall_score >= 80,
        "Optimal timing confirmed - proceed with standard prenatal care and preparation",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: 60 <= c.overall_score < 80,
        "Good timing with manageable risks - focus on addressing specific risk factors identified above",
    ),
    RecommendationRule(
        "ADVISORY", lambda c: c.overall_score < 60,
        "Consider alternative timing or implement comprehensive risk mitigation strategies",
    ),
]


def _template_values(ctx: TimingContext) -> Dict:
    return {
        "month_name": ctx.target_date.strftime("%B"),
        "lifespan": ctx.solar.lifespan_impact,
        "abs_lifespan": abs(ctx.solar.lifespan_impact),
    }


def _apply(rules: List[RecommendationRule], ctx: TimingContext) -> List[Recommendation]:
    values = _template_values(ctx)
    return [
        Recommendation(text=rule.template.format(**values), priority=rule.priority)
        for rule in rules
        if rule.applies(ctx)
    ]


def prioritize(recommendations: List[Recommendation]) -> List[Recommendation]:
    """Drop repeated texts (first wins), then stable-sort by priority."""
    seen = set()
    unique = []
    for rec in recommendations:
        if rec.text in seen:
            continue
        seen.add(rec.text)
        unique.append(rec)
    return sorted(unique, key=lambda r: PRIORITY_RANK[r.priority])


def build_recommendations(
    ctx: TimingContext,
    rules: Optional[List[RecommendationRule]] = None,
) -> List[Recommendation]:
    """
    Full prioritized recommendation list for a scored context.

    ``ctx.overall_score`` must be set; the closing summary depends on it.
    """
    if ctx.overall_score is None:
        raise ValueError("TimingContext.overall_score is required for recommendations")

    rules = RECOMMENDATION_RULES if rules is None else rules
    collected = _apply(rules, ctx)
    collected.extend(
        Recommendation(text=text, priority="ADVISORY")
        for text in get_seasonal_recommendations(ctx.target_date, ctx.location)
    )
    collected.extend(_apply(SUMMARY_RULES, ctx))

    result = prioritize(collected)
    logger.debug("%d recommendations (%d before dedup)", len(result), len(collected))
    return result

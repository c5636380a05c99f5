"""
BirthWindow - Score Labels

Display tiers for the 0–100 optimality score.
"""

from config.constants import SCORE_DESCRIPTIONS, SCORE_LEVELS


def score_level(score: float) -> str:
    """'OPTIMAL' | 'GOOD' | 'FAIR' | 'POOR'."""
    for level, bounds in SCORE_LEVELS.items():
        if score >= bounds["min"]:
            return level
    return "POOR"


def score_label(score: float) -> str:
    return SCORE_LEVELS[score_level(score)]["label"]


def score_color(score: float) -> str:
    return SCORE_LEVELS[score_level(score)]["color"]


def score_description(score: float) -> str:
    for threshold, text in SCORE_DESCRIPTIONS:
        if score >= threshold:
            return text
    return SCORE_DESCRIPTIONS[-1][1]

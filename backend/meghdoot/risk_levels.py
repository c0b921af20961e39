# backend/meghdoot/risk_levels.py
"""
Single source of truth for risk categories and presentation rounding.
"""

import math

SEVERE_MIN = 75
WARNING_MIN = 50
WATCH_MIN = 30

CATEGORIES = ("Normal", "Watch", "Warning", "Severe")
CRITICAL_CATEGORIES = ("Warning", "Severe")

# dashboard colours per category (map markers, gauges, badges)
CATEGORY_COLOURS = {
    "Normal": "#16a34a",
    "Watch": "#eab308",
    "Warning": "#f97316",
    "Severe": "#dc2626",
}


def categorize(score: float) -> str:
    if score >= SEVERE_MIN:
        return "Severe"
    if score >= WARNING_MIN:
        return "Warning"
    if score >= WATCH_MIN:
        return "Watch"
    return "Normal"


def category_rank(category: str) -> int:
    """0 for Normal up to 3 for Severe; unknown labels rank as Normal."""
    try:
        return CATEGORIES.index(category)
    except ValueError:
        return 0


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round like a dashboard would (2.5 -> 3, -2.5 -> -2), not banker's rounding.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(math.floor(value + 0.5))

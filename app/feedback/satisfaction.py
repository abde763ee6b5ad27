"""Satisfaction semantics and metrics computation"""
from collections import Counter
from enum import Enum
from typing import Dict, Iterable

MAX_RATING = 5


class SatisfactionLevel(str, Enum):
    """Satisfaction levels based on star ratings"""
    VERY_DISSATISFIED = "VERY_DISSATISFIED"
    DISSATISFIED = "DISSATISFIED"
    NEUTRAL = "NEUTRAL"
    SATISFIED = "SATISFIED"
    VERY_SATISFIED = "VERY_SATISFIED"


RATING_TO_SATISFACTION = {
    1: SatisfactionLevel.VERY_DISSATISFIED,
    2: SatisfactionLevel.DISSATISFIED,
    3: SatisfactionLevel.NEUTRAL,
    4: SatisfactionLevel.SATISFIED,
    5: SatisfactionLevel.VERY_SATISFIED,
}


def get_satisfaction_level(rating: int) -> SatisfactionLevel:
    """Star rating -> satisfaction level; out-of-range ratings read as NEUTRAL."""
    return RATING_TO_SATISFACTION.get(rating, SatisfactionLevel.NEUTRAL)


def satisfaction_index(average_rating: float) -> float:
    """Average rating normalised to a 0-100 scale"""
    return round((average_rating / MAX_RATING) * 100, 2)


def compute_metrics(ratings: Iterable[int]) -> Dict:
    """
    Summarise a set of star ratings.

    Returns:
        average_rating, satisfaction_index (0-100), total_feedbacks,
        distribution (percentage per star) and satisfaction_levels (count per level)
    """
    ratings = list(ratings)
    counts = Counter(ratings)
    total = len(ratings)

    distribution = {
        f"{star}_star": round(counts[star] / total * 100, 2) if total else 0.0
        for star in range(MAX_RATING, 0, -1)
    }
    levels = {
        RATING_TO_SATISFACTION[star].value: counts[star]
        for star in range(MAX_RATING, 0, -1)
    }

    average = sum(ratings) / total if total else 0.0
    return {
        "average_rating": round(average, 2),
        "satisfaction_index": satisfaction_index(average),
        "total_feedbacks": total,
        "distribution": distribution,
        "satisfaction_levels": levels,
    }

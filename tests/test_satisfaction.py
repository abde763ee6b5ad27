"""
Tests for satisfaction level calculations
"""
import pytest
from app.feedback.satisfaction import (
    SatisfactionLevel,
    compute_metrics,
    get_satisfaction_level,
    satisfaction_index,
)


@pytest.mark.parametrize(
    "rating,level",
    [
        (1, SatisfactionLevel.VERY_DISSATISFIED),
        (2, SatisfactionLevel.DISSATISFIED),
        (3, SatisfactionLevel.NEUTRAL),
        (4, SatisfactionLevel.SATISFIED),
        (5, SatisfactionLevel.VERY_SATISFIED),
    ],
)
def test_satisfaction_level_mapping(rating, level):
    assert get_satisfaction_level(rating) == level


def test_satisfaction_level_invalid():
    """Out-of-range ratings read as NEUTRAL."""
    assert get_satisfaction_level(0) == SatisfactionLevel.NEUTRAL
    assert get_satisfaction_level(6) == SatisfactionLevel.NEUTRAL


def test_satisfaction_index_scale():
    assert satisfaction_index(5) == 100.0
    assert satisfaction_index(2.5) == 50.0


def test_compute_metrics_all_top_rated():
    metrics = compute_metrics([5, 5, 5, 5])

    assert metrics["average_rating"] == 5.0
    assert metrics["satisfaction_index"] == 100.0
    assert metrics["total_feedbacks"] == 4
    assert metrics["distribution"]["5_star"] == 100.0
    assert metrics["distribution"]["1_star"] == 0.0
    assert metrics["satisfaction_levels"]["VERY_SATISFIED"] == 4


def test_compute_metrics_mixed():
    """Average 3.25 -> 65% satisfaction."""
    metrics = compute_metrics([1, 3, 4, 5])

    assert metrics["average_rating"] == 3.25
    assert metrics["satisfaction_index"] == 65.0
    assert metrics["distribution"] == {
        "5_star": 25.0,
        "4_star": 25.0,
        "3_star": 25.0,
        "2_star": 0.0,
        "1_star": 25.0,
    }
    assert metrics["satisfaction_levels"]["DISSATISFIED"] == 0
    assert metrics["satisfaction_levels"]["VERY_DISSATISFIED"] == 1


def test_compute_metrics_empty():
    metrics = compute_metrics([])

    assert metrics["average_rating"] == 0.0
    assert metrics["satisfaction_index"] == 0.0
    assert metrics["total_feedbacks"] == 0
    assert all(value == 0.0 for value in metrics["distribution"].values())
    assert all(count == 0 for count in metrics["satisfaction_levels"].values())


def test_compute_metrics_accepts_generator():
    metrics = compute_metrics(r for r in (2, 4))
    assert metrics["total_feedbacks"] == 2
    assert metrics["average_rating"] == 3.0

"""Tests for least-squares trend lines."""

import math

import pytest

from analysis.trend import fit_trend_line, metric_trend
from analysis.utils import compute_mean, compute_statistics, least_squares
from contracts import Record, TrendPoint

DAY_MS = 24 * 3600 * 1000
JAN_1_2024_MS = 1704067200000


def test_perfect_line() -> None:
    trend = fit_trend_line([(0, 0), (1, 2), (2, 4)])

    assert trend.p0 == TrendPoint(0.0, 0.0)
    assert trend.p1 == TrendPoint(2.0, 4.0)
    assert trend.slope == 2.0


def test_accepts_trend_points() -> None:
    trend = fit_trend_line([TrendPoint(0, 1), TrendPoint(4, 1)])

    assert trend.p0.y == pytest.approx(1.0)
    assert trend.p1.y == pytest.approx(1.0)


def test_endpoints_span_min_and_max_x() -> None:
    trend = fit_trend_line([(3, 1), (1, 2), (2, 3)])

    assert trend.p0.x == 1.0
    assert trend.p1.x == 3.0
    assert trend.slope == pytest.approx(-0.5)


@pytest.mark.parametrize("points", [[], [(1, 5)], [(1, 5), (2, None)]])
def test_fewer_than_two_points(points) -> None:
    assert fit_trend_line(points) is None


def test_identical_x_has_no_trend() -> None:
    assert fit_trend_line([(5, 1), (5, 3), (5, 9)]) is None


def test_nan_values_ignored() -> None:
    trend = fit_trend_line([(0, 0), (1, math.nan), (2, 4)])

    assert trend.p1.y == pytest.approx(4.0)


def test_epoch_millisecond_x_is_stable() -> None:
    points = [(JAN_1_2024_MS + i * DAY_MS, 60.0 + i) for i in range(10)]

    trend = fit_trend_line(points)

    assert trend.p0.y == pytest.approx(60.0)
    assert trend.p1.y == pytest.approx(69.0)
    assert trend.slope == pytest.approx(1.0 / DAY_MS)


def test_metric_trend_uses_timestamps() -> None:
    records = [
        Record({"AvgV": 70.0}, timestamp=JAN_1_2024_MS, date_str="2024-01-01"),
        Record({"AvgV": None}, timestamp=JAN_1_2024_MS + DAY_MS, date_str="2024-01-02"),
        Record({"AvgV": 74.0}, timestamp=JAN_1_2024_MS + 2 * DAY_MS, date_str="2024-01-03"),
    ]

    trend = metric_trend(records, "AvgV")

    assert trend.p0.x == JAN_1_2024_MS
    assert trend.p1.y == pytest.approx(74.0)
    assert metric_trend(records, "MaxV") is None


def test_least_squares_rejects_mismatched_lengths() -> None:
    assert least_squares([1, 2], [1]) is None


def test_compute_mean() -> None:
    assert compute_mean([]) is None
    assert compute_mean([70.0, 80.0]) == 75.0


def test_compute_statistics() -> None:
    stats = compute_statistics([60.0, 62.0, 67.0])

    assert stats["count"] == 3
    assert stats["mean"] == pytest.approx(63.0)
    assert stats["min"] == 60.0
    assert stats["max"] == 67.0
    assert stats["change"] == 7.0
    assert compute_statistics([])["count"] == 0

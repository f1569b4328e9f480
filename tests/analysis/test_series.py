"""Tests for chart series and multi-player comparison."""

import pytest

from analysis.series import comparison_series, metric_series
from contracts import Record

DAY_MS = 24 * 3600 * 1000
JAN_1_2024_MS = 1704067200000


def _day(offset, value, date_str=None):
    date_str = date_str or f"2024-01-0{offset + 1}"
    return Record({"AvgV": value}, timestamp=JAN_1_2024_MS + offset * DAY_MS, date_str=date_str)


def test_metric_series_skips_missing_values() -> None:
    records = [_day(0, 70.0), _day(1, None), _day(2, 72.0)]

    series = metric_series(records, "AvgV")

    assert [(p.date, p.value) for p in series] == [("2024-01-01", 70.0), ("2024-01-03", 72.0)]
    assert series[0].timestamp == JAN_1_2024_MS


def test_metric_series_unknown_metric() -> None:
    assert metric_series([_day(0, 70.0)], "Dist") == []


def test_comparison_merges_dates() -> None:
    jane = [_day(0, 70.0), _day(2, 74.0)]
    john = [_day(1, 65.0), _day(2, 68.0)]

    rows = comparison_series([("Jane", jane), ("John", john)], "AvgV")

    assert [r.date for r in rows] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert rows[0].values == {"Jane": 70.0, "John": None}
    assert rows[1].values == {"Jane": None, "John": 65.0}
    assert rows[2].values == {"Jane": 74.0, "John": 68.0}


def test_comparison_row_timestamp_from_first_seen() -> None:
    jane = [Record({"AvgV": 1.0}, timestamp=200, date_str="d")]
    john = [Record({"AvgV": 2.0}, timestamp=100, date_str="d")]

    rows = comparison_series([("Jane", jane), ("John", john)], "AvgV")

    assert rows[0].timestamp == 200


def test_comparison_drops_rows_without_values() -> None:
    rows = comparison_series([("Jane", [_day(0, None), _day(1, 71.0)])], "AvgV")

    assert [r.date for r in rows] == ["2024-01-02"]


def test_comparison_player_limit() -> None:
    players = [(f"P{i}", [_day(0, 70.0)]) for i in range(4)]

    with pytest.raises(ValueError, match="at most 3"):
        comparison_series(players, "AvgV")

    assert len(comparison_series(players, "AvgV", max_players=4)) == 1


def test_comparison_no_players() -> None:
    assert comparison_series([], "AvgV") == []

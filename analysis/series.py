"""Chart-ready series for single players and multi-player comparison."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from contracts import Record

MAX_COMPARISON_PLAYERS = 3


@dataclass(frozen=True)
class SeriesPoint:
    date: str
    timestamp: int
    value: float


@dataclass
class ComparisonRow:
    """Values for one date label across the compared players."""

    date: str
    timestamp: int
    values: Dict[str, Optional[float]] = field(default_factory=dict)


def metric_series(records: Sequence[Record], metric: str) -> List[SeriesPoint]:
    """Points for ``metric`` in record order, skipping records without a number."""
    points = []
    for record in records:
        value = record.number(metric)
        if value is None:
            continue
        points.append(SeriesPoint(date=record.date_str or "", timestamp=record.timestamp, value=value))
    return points


def comparison_series(
    players: Sequence[Tuple[str, Sequence[Record]]],
    metric: str,
    max_players: int = MAX_COMPARISON_PLAYERS,
) -> List[ComparisonRow]:
    """Merge several players' records into rows keyed by date label.

    Each row takes the timestamp of the first record seen for its date.
    Rows where no player has a numeric value are dropped.

    Raises:
        ValueError: If more than ``max_players`` players are given
    """
    if len(players) > max_players:
        raise ValueError(f"Can compare at most {max_players} players, got {len(players)}")

    names = [name for name, _ in players]
    rows: Dict[str, ComparisonRow] = {}
    for name, records in players:
        for record in records:
            key = record.date_str or ""
            row = rows.get(key)
            if row is None:
                row = rows[key] = ComparisonRow(
                    date=key,
                    timestamp=record.timestamp,
                    values={n: None for n in names},
                )
            row.values[name] = record.number(metric)

    merged = [row for row in rows.values() if any(v is not None for v in row.values.values())]
    merged.sort(key=lambda r: r.timestamp)
    return merged


__all__ = [
    "MAX_COMPARISON_PLAYERS",
    "SeriesPoint",
    "ComparisonRow",
    "metric_series",
    "comparison_series",
]

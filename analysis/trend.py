"""Least-squares trend lines for metric series."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple, Union

from analysis.utils import least_squares
from contracts import Record, TrendLine, TrendPoint

PointLike = Union[TrendPoint, Tuple[float, Optional[float]]]


def _xy(point: PointLike) -> Tuple[float, Optional[float]]:
    if isinstance(point, TrendPoint):
        return point.x, point.y
    x, y = point
    return x, y


def fit_trend_line(points: Iterable[PointLike]) -> Optional[TrendLine]:
    """Fit a straight line through ``points`` and return its two endpoints.

    Points whose y is None (or NaN) are ignored. Returns None when fewer
    than two points remain or every x is the same.
    """
    xs = []
    ys = []
    for point in points:
        x, y = _xy(point)
        if y is None or (isinstance(y, float) and math.isnan(y)):
            continue
        xs.append(float(x))
        ys.append(float(y))

    fit = least_squares(xs, ys)
    if fit is None:
        return None
    slope, intercept, origin = fit

    min_x = min(xs)
    max_x = max(xs)
    return TrendLine(
        p0=TrendPoint(x=min_x, y=slope * (min_x - origin) + intercept),
        p1=TrendPoint(x=max_x, y=slope * (max_x - origin) + intercept),
    )


def metric_trend(records: Sequence[Record], metric: str) -> Optional[TrendLine]:
    """Trend of ``metric`` against record timestamps."""
    return fit_trend_line((record.timestamp, record.number(metric)) for record in records)


__all__ = ["fit_trend_line", "metric_trend"]

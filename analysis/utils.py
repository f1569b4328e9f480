"""Statistical utility functions for swing and batted-ball series."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np


def compute_mean(values: List[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty list."""
    if not values:
        return None
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def compute_statistics(values: List[float]) -> dict:
    """Compute summary statistics for a list of values.

    Args:
        values: List of values

    Returns:
        Dictionary with count, mean, std, min, max, first, last and change
    """
    if not values:
        return {
            "count": 0,
            "mean": 0.0,
            "std": 0.0,
            "min": 0.0,
            "max": 0.0,
            "first": 0.0,
            "last": 0.0,
            "change": 0.0,
        }

    arr = np.asarray(values, dtype=np.float64)
    return {
        "count": int(arr.size),
        "mean": float(np.mean(arr)),
        "std": float(np.std(arr, ddof=1)) if arr.size > 1 else 0.0,
        "min": float(np.min(arr)),
        "max": float(np.max(arr)),
        "first": float(arr[0]),
        "last": float(arr[-1]),
        "change": float(arr[-1] - arr[0]),
    }


def least_squares(x: List[float], y: List[float]) -> Optional[Tuple[float, float, float]]:
    """Ordinary least squares from the closed-form sums.

    Sums are taken over ``x - min(x)`` so large x values (epoch
    milliseconds) do not cancel out in ``n*Sxx - Sx*Sx``.

    Args:
        x: Independent variable values
        y: Dependent variable values

    Returns:
        Tuple of (slope, intercept at x = origin, origin), or None when
        fewer than two points are given, all x are equal, or the fit is
        not finite
    """
    if len(x) != len(y) or len(x) < 2:
        return None

    x_arr = np.asarray(x, dtype=np.float64)
    y_arr = np.asarray(y, dtype=np.float64)
    origin = float(np.min(x_arr))
    dx = x_arr - origin
    n = float(x_arr.size)

    sum_x = np.sum(dx)
    sum_y = np.sum(y_arr)
    sum_xy = np.sum(dx * y_arr)
    sum_xx = np.sum(dx * dx)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    if not (np.isfinite(slope) and np.isfinite(intercept)):
        return None

    return (float(slope), float(intercept), origin)


__all__ = ["compute_mean", "compute_statistics", "least_squares"]

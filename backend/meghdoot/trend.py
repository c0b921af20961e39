# backend/meghdoot/trend.py
from typing import Sequence

import numpy as np


def slope(values: Sequence[float]) -> float:
    """
    Ordinary least-squares slope of values against their index 0..n-1.
    Returns 0.0 for fewer than two points.
    """
    n = len(values)
    if n < 2:
        return 0.0
    y = np.asarray(values, dtype=float)
    x = np.arange(n, dtype=float)
    dx = x - x.mean()
    den = float(np.sum(dx * dx))
    if den == 0:
        return 0.0
    return float(np.sum(dx * (y - y.mean())) / den)


def moving_average(values: Sequence[float], window: int) -> float:
    """Mean of the last min(window, n) values; 0.0 when empty."""
    if len(values) == 0 or window <= 0:
        return 0.0
    tail = np.asarray(values[-window:], dtype=float)
    return float(tail.mean())

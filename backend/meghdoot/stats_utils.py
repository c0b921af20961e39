# backend/meghdoot/stats_utils.py
"""
Confidence intervals, rolling uncertainty bands and fit metrics.

Everything returned to callers is rounded to 2 decimals (half-up) so
dashboards and tests see stable values. Empty inputs give zeros, never errors.
"""

import math
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from .risk_levels import round_half_up
from .schemas import ConfidenceInterval, UncertaintyBand

# z-scores for the supported two-sided confidence levels
Z_SCORES = {
    0.80: 1.282,
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}
DEFAULT_Z = 1.96


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def variance(values: Sequence[float]) -> float:
    """Sample variance (n - 1 denominator)."""
    if len(values) < 2:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float), ddof=1))


def std_dev(values: Sequence[float]) -> float:
    return math.sqrt(variance(values))


def confidence_interval(values: Sequence[float], confidence_level: float = 0.95) -> ConfidenceInterval:
    n = len(values)
    if n == 0:
        return ConfidenceInterval(
            mean=0, lower=0, upper=0, standard_error=0, variance=0,
            confidence_level=confidence_level, sample_size=0,
        )

    m = mean(values)
    var = variance(values)
    se = math.sqrt(var) / math.sqrt(n)
    z = Z_SCORES.get(confidence_level, DEFAULT_Z)

    return ConfidenceInterval(
        mean=round_half_up(m, 2),
        lower=round_half_up(m - z * se, 2),
        upper=round_half_up(m + z * se, 2),
        standard_error=round_half_up(se, 2),
        variance=round_half_up(var, 2),
        confidence_level=confidence_level,
        sample_size=n,
    )


Point = Union[Tuple[str, float], dict]

def _unpack(point: Point) -> Tuple[str, float]:
    if isinstance(point, dict):
        return str(point["date"]), float(point["value"])
    d, v = point
    return str(d), float(v)


def uncertainty_bands(series: Iterable[Point], window_size: int = 7) -> List[UncertaintyBand]:
    """
    Rolling 80% / 95% bands over a (date, value) series.

    Each point uses the trailing window of up to window_size values ending at
    that point (the window is shorter at the start). Lower bands floor at 0.
    """
    points = [_unpack(p) for p in series]
    values = [v for _, v in points]
    window_size = max(1, window_size)

    bands = []
    for i, (d, v) in enumerate(points):
        window = values[max(0, i - window_size + 1): i + 1]
        m = mean(window)
        sd = std_dev(window)
        bands.append(UncertaintyBand(
            date=d,
            value=v,
            lower95=max(0.0, round_half_up(m - 1.96 * sd, 2)),
            upper95=round_half_up(m + 1.96 * sd, 2),
            lower80=max(0.0, round_half_up(m - 1.282 * sd, 2)),
            upper80=round_half_up(m + 1.282 * sd, 2),
        ))
    return bands


def rmse(predicted: Sequence[float], actual: Sequence[float]) -> float:
    n = min(len(predicted), len(actual))
    if n == 0:
        return 0.0
    p = np.asarray(predicted[:n], dtype=float)
    a = np.asarray(actual[:n], dtype=float)
    return round_half_up(math.sqrt(float(np.sum((p - a) ** 2)) / n), 2)


def r2(predicted: Sequence[float], actual: Sequence[float]) -> float:
    """Coefficient of determination; 0 when the actuals have no variance."""
    n = min(len(predicted), len(actual))
    if n == 0:
        return 0.0
    p = np.asarray(predicted[:n], dtype=float)
    a = np.asarray(actual[:n], dtype=float)
    ss_tot = float(np.sum((a - a.mean()) ** 2))
    ss_res = float(np.sum((p - a) ** 2))
    if ss_tot == 0:
        return 0.0
    return round_half_up(1 - ss_res / ss_tot, 2)

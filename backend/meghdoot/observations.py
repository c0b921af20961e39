"""
backend.meghdoot.observations

Synthetic rainfall / river-gauge observations for Sylhet.

Series are a deterministic function of (day of year, station, year): the
same calendar window always yields the same values. The noise comes from a
sine hash and is only meant to look plausible, it has no statistical meaning.
Real sensor ingestion would replace ObservationProvider; callers must not
assume generation is cheap or stable across process restarts.
"""

import math
import threading
from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

import pandas as pd

from .config import OBSERVATION_DAYS
from .logging_setup import logger
from .reference_data import (
    MONSOON_PEAK_MM,
    MONTHLY_RAINFALL_AVG,
    RIVER_GAUGES,
    STATION_MULTIPLIERS,
    YEAR_MODIFIERS,
)
from .risk_levels import round_half_up
from .schemas import RainfallObservation, RiverLevelObservation

RAIN_DAY_THRESHOLD = 0.35
EXTREME_EVENT_THRESHOLD = 0.95
EXTREME_EVENT_MULTIPLIER = 3.5
MONSOON_MONTHS = range(4, 9)  # May..Sep, zero-based


def seeded_random(seed: int) -> float:
    x = math.sin(seed * 9301 + 49297) * 233280
    return x - math.floor(x)


def _window_dates(window_days: int, as_of: date):
    for offset in range(window_days, -1, -1):
        yield as_of - timedelta(days=offset)


def generate_rainfall_series(window_days: int = OBSERVATION_DAYS, as_of: Optional[date] = None) -> Tuple[RainfallObservation, ...]:
    """
    One observation per station per day for as_of - window_days .. as_of.
    """
    as_of = as_of or date.today()
    year = as_of.year
    year_mod = YEAR_MODIFIERS.get(year, 1.0)
    stations = list(STATION_MULTIPLIERS)

    out = []
    for d in _window_dates(window_days, as_of):
        month = d.month - 1
        day_of_year = d.timetuple().tm_yday
        daily_base = (MONTHLY_RAINFALL_AVG[month] or 10) / 30

        for idx, station in enumerate(stations):
            seed = day_of_year * 1000 + idx * 100 + year
            r1 = seeded_random(seed)
            r2 = seeded_random(seed + 1)

            rainfall = 0.0
            if r1 > RAIN_DAY_THRESHOLD:
                rainfall = daily_base * STATION_MULTIPLIERS[station] * year_mod * (0.3 + r2 * 2.5)
            if month in MONSOON_MONTHS and r1 > EXTREME_EVENT_THRESHOLD:
                rainfall *= EXTREME_EVENT_MULTIPLIER

            out.append(RainfallObservation(
                date=d,
                station=station,
                rainfall_mm=round_half_up(max(0.0, rainfall), 1),
            ))
    return tuple(out)


def generate_river_level_series(window_days: int = OBSERVATION_DAYS, as_of: Optional[date] = None) -> Tuple[RiverLevelObservation, ...]:
    """
    River level tracks the seasonal rainfall curve between a gauge's base and danger levels.
    """
    as_of = as_of or date.today()
    year = as_of.year
    year_mod = YEAR_MODIFIERS.get(year, 1.0)

    out = []
    for d in _window_dates(window_days, as_of):
        month = d.month - 1
        day_of_year = d.timetuple().tm_yday
        seasonal_ratio = (MONTHLY_RAINFALL_AVG[month] or 10) / MONSOON_PEAK_MM

        for idx, gauge in enumerate(RIVER_GAUGES):
            seed = day_of_year * 100 + idx * 10 + year
            r = seeded_random(seed)

            base, danger = gauge["base_level"], gauge["danger_level"]
            level = base + (danger - base) * seasonal_ratio * year_mod * (0.7 + r * 0.5)
            level = max(base * 0.9, min(danger * 1.15, level))

            out.append(RiverLevelObservation(
                date=d,
                river=gauge["river"],
                station=gauge["station"],
                level_m=round_half_up(level, 2),
                danger_level_m=danger,
            ))
    return tuple(out)


def daily_totals(rainfall: Sequence[RainfallObservation]) -> pd.Series:
    """Rainfall summed across stations per date, ascending by date."""
    if not rainfall:
        return pd.Series(dtype=float)
    df = pd.DataFrame([{"date": r.date, "rainfall_mm": r.rainfall_mm} for r in rainfall])
    return df.groupby("date")["rainfall_mm"].sum().sort_index()


class ObservationProvider:
    """
    Compute-once cache of the generated series.

    The first call to rainfall() / river_levels() generates the window and
    keeps it for the lifetime of the provider; later calls return the same
    tuples. reset() drops the cache, optionally moving the window to a new date.
    """

    def __init__(self, as_of: Optional[date] = None, window_days: int = OBSERVATION_DAYS):
        self.as_of = as_of
        self.window_days = window_days
        self._lock = threading.Lock()
        self._rainfall = None
        self._river_levels = None

    @property
    def reference_date(self) -> date:
        return self.as_of or date.today()

    def rainfall(self) -> Tuple[RainfallObservation, ...]:
        if self._rainfall is None:
            with self._lock:
                if self._rainfall is None:
                    self._rainfall = generate_rainfall_series(self.window_days, self.reference_date)
                    logger.info(f"[observations] Generated {len(self._rainfall)} rainfall observations")
        return self._rainfall

    def river_levels(self) -> Tuple[RiverLevelObservation, ...]:
        if self._river_levels is None:
            with self._lock:
                if self._river_levels is None:
                    self._river_levels = generate_river_level_series(self.window_days, self.reference_date)
                    logger.info(f"[observations] Generated {len(self._river_levels)} river level observations")
        return self._river_levels

    def recent_rainfall(self, days: int = 7):
        cutoff = self.reference_date - timedelta(days=days)
        return [r for r in self.rainfall() if r.date >= cutoff]

    def recent_river_levels(self, days: int = 7):
        cutoff = self.reference_date - timedelta(days=days)
        return [r for r in self.river_levels() if r.date >= cutoff]

    def daily_rainfall_totals(self, days: Optional[int] = None) -> pd.Series:
        series = daily_totals(self.rainfall())
        if days is not None:
            series = series.iloc[-days:]
        return series

    def reset(self, as_of: Optional[date] = None):
        with self._lock:
            self.as_of = as_of
            self._rainfall = None
            self._river_levels = None
        logger.info(f"[observations] Provider reset (as_of={as_of})")


# convenience single-instance
_provider = None
_provider_lock = threading.Lock()

def get_provider() -> ObservationProvider:
    global _provider
    if _provider is None:
        with _provider_lock:
            if _provider is None:
                _provider = ObservationProvider()
    return _provider

def set_provider(provider: Optional[ObservationProvider]):
    global _provider
    with _provider_lock:
        _provider = provider

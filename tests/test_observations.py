from datetime import date, timedelta

from backend.meghdoot.observations import (
    ObservationProvider,
    daily_totals,
    generate_rainfall_series,
    generate_river_level_series,
    get_provider,
    seeded_random,
    set_provider,
)
from backend.meghdoot.reference_data import RIVER_GAUGES, STATION_MULTIPLIERS

AS_OF = date(2024, 6, 15)


def test_seeded_random_is_deterministic_and_in_unit_interval():
    values = [seeded_random(s) for s in range(1, 200)]
    assert values == [seeded_random(s) for s in range(1, 200)]
    assert all(0 <= v < 1 for v in values)


def test_rainfall_series_shape_and_determinism():
    series = generate_rainfall_series(30, AS_OF)
    assert series == generate_rainfall_series(30, AS_OF)
    assert len(series) == 31 * len(STATION_MULTIPLIERS)
    assert series[0].date == AS_OF - timedelta(days=30)
    assert series[-1].date == AS_OF
    assert all(r.rainfall_mm >= 0 for r in series)


def test_river_levels_stay_within_gauge_bounds():
    series = generate_river_level_series(60, AS_OF)
    assert len(series) == 61 * len(RIVER_GAUGES)
    limits = {g["station"]: (g["base_level"], g["danger_level"]) for g in RIVER_GAUGES}
    for obs in series:
        base, danger = limits[obs.station]
        assert obs.danger_level_m == danger
        assert base * 0.9 - 0.01 <= obs.level_m <= danger * 1.15 + 0.01


def test_monsoon_is_wetter_than_dry_season():
    monsoon = daily_totals(generate_rainfall_series(30, date(2024, 7, 15))).sum()
    dry = daily_totals(generate_rainfall_series(30, date(2024, 1, 30))).sum()
    assert monsoon > dry


def test_daily_totals_sum_across_stations():
    series = generate_rainfall_series(5, AS_OF)
    totals = daily_totals(series)
    assert len(totals) == 6
    expected = sum(r.rainfall_mm for r in series if r.date == AS_OF)
    assert abs(totals.loc[AS_OF] - expected) < 1e-9
    assert daily_totals([]).empty


def test_provider_computes_once_and_resets():
    provider = ObservationProvider(as_of=AS_OF, window_days=20)
    first = provider.rainfall()
    assert provider.rainfall() is first
    assert provider.river_levels() is provider.river_levels()

    provider.reset(as_of=date(2024, 1, 10))
    moved = provider.rainfall()
    assert moved is not first
    assert moved[-1].date == date(2024, 1, 10)


def test_provider_recent_windows():
    provider = ObservationProvider(as_of=AS_OF, window_days=30)
    recent = provider.recent_rainfall(7)
    assert min(r.date for r in recent) == AS_OF - timedelta(days=7)
    assert len(provider.daily_rainfall_totals(10)) == 10
    assert all(r.date >= AS_OF - timedelta(days=3) for r in provider.recent_river_levels(3))


def test_set_provider_swaps_shared_instance():
    custom = ObservationProvider(as_of=AS_OF)
    set_provider(custom)
    try:
        assert get_provider() is custom
    finally:
        set_provider(None)
    assert get_provider() is not custom

import pytest

from backend.meghdoot.stats_utils import confidence_interval, r2, rmse, uncertainty_bands, variance


def test_confidence_interval_95():
    ci = confidence_interval([10, 20, 30, 40])
    assert ci.mean == 25
    assert ci.lower == 12.35
    assert ci.upper == 37.65
    assert ci.standard_error == 6.45
    assert ci.variance == 166.67
    assert ci.sample_size == 4
    assert ci.confidence_level == 0.95


def test_confidence_interval_empty_is_all_zero():
    ci = confidence_interval([])
    assert (ci.mean, ci.lower, ci.upper, ci.standard_error, ci.sample_size) == (0, 0, 0, 0, 0)


def test_confidence_interval_single_value_has_zero_width():
    ci = confidence_interval([42])
    assert ci.lower == ci.upper == 42


def test_wider_level_gives_wider_interval():
    values = [3, 7, 8, 12, 15]
    narrow = confidence_interval(values, 0.80)
    wide = confidence_interval(values, 0.99)
    assert wide.upper - wide.lower > narrow.upper - narrow.lower


def test_sample_variance():
    assert variance([1]) == 0.0
    assert variance([2, 4]) == pytest.approx(2.0)


def test_uncertainty_bands():
    bands = uncertainty_bands([("2024-06-01", 10), ("2024-06-02", 20)], window_size=7)
    assert len(bands) == 2

    first, second = bands
    assert first.date == "2024-06-01"
    assert first.lower95 == first.upper95 == 10

    assert second.value == 20
    assert second.lower95 == 1.14
    assert second.upper95 == 28.86
    assert second.lower80 == 5.93
    assert second.upper80 == 24.07


def test_uncertainty_bands_floor_at_zero_and_accept_dicts():
    bands = uncertainty_bands([{"date": "d1", "value": 0}, {"date": "d2", "value": 100}])
    assert all(b.lower95 >= 0 and b.lower80 >= 0 for b in bands)
    for b in bands:
        assert b.lower95 <= b.lower80 <= b.upper80 <= b.upper95


def test_rmse_and_r2():
    assert rmse([1, 2, 3], [1, 2, 5]) == 1.15
    assert r2([1, 2, 3], [1, 2, 5]) == 0.54


def test_fit_metrics_use_overlapping_prefix():
    assert rmse([1, 2, 3, 99], [1, 2, 5]) == 1.15
    assert rmse([], [1, 2]) == 0.0
    assert r2([1, 2], [3, 3]) == 0.0


@pytest.mark.parametrize("values", [
    [5],
    [1, 1, 1, 1],
    [0.1, 250.0, 3.3],
    [-4, 0, 4, 9, 120],
    [12.345, 12.355, 12.365],
    list(range(50)),
])
def test_interval_brackets_mean(values):
    for level in (0.80, 0.90, 0.95, 0.99):
        ci = confidence_interval(values, level)
        assert ci.lower <= ci.mean <= ci.upper

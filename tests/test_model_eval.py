import json
from datetime import date

from backend.meghdoot.model_eval import (
    backtest_engine,
    compare_models,
    historical_event_cases,
    load_evaluation_fixture,
    validate_predictions,
)
from backend.meghdoot.reference_data import HISTORICAL_FLOODS
from backend.meghdoot.schemas import BacktestCase, EvaluationFixture


def _event(name, predicted, lead, actual="Warning", predicted_severity="Warning"):
    return {
        "event": name, "predicted": predicted, "lead_time_hours": lead,
        "actual_severity": actual, "predicted_severity": predicted_severity,
    }


def test_compare_models_from_fixture():
    result = compare_models()
    assert [m.short_name for m in result.models] == ["LinReg", "DTree", "ARIMA"]
    assert result.best_model == "Linear Regression (Current)"
    assert result.test_events == 14
    assert result.training_years == "2014-2024"
    assert result.source == "fixture"


def test_best_model_is_highest_f1():
    fixture = load_evaluation_fixture().model_copy(deep=True)
    fixture.models[2].f1_score = 0.99
    assert compare_models(fixture).best_model == "Time-Series ARIMA"


def test_f1_tie_goes_to_later_model():
    fixture = load_evaluation_fixture().model_copy(deep=True)
    for model in fixture.models:
        model.f1_score = 0.8
    assert compare_models(fixture).best_model == fixture.models[-1].name


def test_validate_predictions_from_fixture():
    v = validate_predictions()
    assert v.total == 8
    assert v.detected == 7
    assert v.missed == 1
    assert v.accuracy_percent == 88
    assert v.avg_lead_time_hours == 15
    assert v.source == "fixture"


def test_validate_predictions_nothing_detected():
    fixture = EvaluationFixture.model_validate({
        "models": [], "test_events": 2, "training_years": "2020-2021",
        "historical_events": [_event("a", False, 0), _event("b", False, 0)],
    })
    v = validate_predictions(fixture)
    assert v.detected == 0
    assert v.accuracy_percent == 0
    assert v.avg_lead_time_hours == 0


def test_validate_predictions_no_events():
    fixture = EvaluationFixture(models=[], test_events=0, training_years="", historical_events=[])
    v = validate_predictions(fixture)
    assert (v.total, v.detected, v.accuracy_percent, v.avg_lead_time_hours) == (0, 0, 0, 0)


def test_load_fixture_from_custom_path(tmp_path):
    path = tmp_path / "fixture.json"
    path.write_text(json.dumps({
        "models": [], "test_events": 1, "training_years": "2023",
        "historical_events": [_event("x", True, 10)],
    }))
    fixture = load_evaluation_fixture(path)
    assert fixture.training_years == "2023"
    assert validate_predictions(fixture).avg_lead_time_hours == 10


def test_historical_event_cases_cover_every_flood():
    cases = historical_event_cases()
    assert len(cases) == len(HISTORICAL_FLOODS)

    june_2022 = next(c for c in cases if c.label == "June 2022")
    assert june_2022.as_of == date(2022, 6, 12)
    assert len(june_2022.rainfall) == 14
    assert june_2022.rainfall[-1].rainfall_mm == 520
    assert june_2022.river_levels[-1].level_m == 10.68
    assert june_2022.rainfall[-1].date == june_2022.as_of


def test_backtest_engine_on_historical_floods():
    result = backtest_engine()
    cm = result.confusion_matrix
    assert result.source == "engine"
    assert len(result.outcomes) == len(HISTORICAL_FLOODS)
    assert cm.true_positive + cm.false_positive + cm.true_negative + cm.false_negative == len(HISTORICAL_FLOODS)
    assert 0 <= result.precision <= 1
    assert 0 <= result.recall <= 1
    assert 0 <= result.accuracy <= 100

    june_2022 = next(o for o in result.outcomes if o.label == "June 2022")
    assert june_2022.predicted_severity == "Severe"
    assert june_2022.detected


def test_backtest_engine_separates_quiet_and_flood_cases(make_zone, make_series):
    as_of = date(2024, 6, 15)
    quiet_rain, quiet_levels = make_series([0.0] * 14, [3.8] * 14, as_of=as_of)
    flood_rain, flood_levels = make_series([30 * (i + 1) for i in range(14)], [4 + 0.5 * i for i in range(14)], as_of=as_of)
    zone = make_zone("low", 40)

    cases = [
        BacktestCase(label="quiet", zone=zone, as_of=as_of, rainfall=quiet_rain,
                     river_levels=quiet_levels, actual_severity="Normal"),
        BacktestCase(label="flood", zone=zone, as_of=as_of, rainfall=flood_rain,
                     river_levels=flood_levels, actual_severity="Severe"),
    ]
    result = backtest_engine(cases)
    assert [o.detected for o in result.outcomes] == [False, True]
    assert result.accuracy == 100.0
    assert result.precision == 1.0
    assert result.recall == 1.0
    assert result.f1_score == 1.0
    assert result.confusion_matrix.true_positive == 1
    assert result.confusion_matrix.true_negative == 1


def test_backtest_engine_without_cases():
    result = backtest_engine([])
    assert result.outcomes == []
    assert result.accuracy == 0

"""
backend.meghdoot.model_eval

Model comparison and historical validation.

Two clearly separated sources:
- fixture replay: compare_models() / validate_predictions() report a
  pre-computed offline evaluation loaded from evaluation_fixture.json.
  These numbers are not derived from the live risk engine.
- engine back-test: backtest_engine() runs the live risk engine over
  observation windows reconstructed from documented historical floods and
  scores it with scikit-learn metrics.
"""

import json
from datetime import date, timedelta
from functools import lru_cache, reduce
from pathlib import Path
from typing import List, Optional, Sequence, Union

from sklearn.metrics import accuracy_score, confusion_matrix, f1_score, precision_score, recall_score

from .config import EVAL_FIXTURE_PATH
from .flood_compute import RISK_WINDOW_DAYS, compute_zone_risk
from .logging_setup import logger
from .reference_data import HISTORICAL_FLOODS, RIVER_GAUGES, get_zone
from .risk_levels import CRITICAL_CATEGORIES, category_rank, round_half_up, round_int
from .schemas import (
    BacktestCase,
    BacktestOutcome,
    BacktestResult,
    ConfusionMatrix,
    EvaluationFixture,
    ModelComparisonResult,
    RainfallObservation,
    RiverLevelObservation,
    ValidationData,
)
from .stats_utils import r2, rmse

BACKTEST_ZONE_ID = "z1"          # Sylhet Sadar
BACKTEST_STATION = "Sylhet"
BACKTEST_GAUGE = RIVER_GAUGES[0]  # Surma at Sylhet


# ---------- Fixture replay ----------
@lru_cache(maxsize=4)
def _load_fixture(path: str) -> EvaluationFixture:
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    fixture = EvaluationFixture.model_validate(payload)
    logger.info(f"[model_eval] Loaded evaluation fixture from {path} ({len(fixture.models)} models)")
    return fixture


def load_evaluation_fixture(path: Optional[Union[str, Path]] = None) -> EvaluationFixture:
    return _load_fixture(str(path or EVAL_FIXTURE_PATH))


def compare_models(fixture: Optional[EvaluationFixture] = None) -> ModelComparisonResult:
    """Best model is the highest F1; on a tie the later model wins."""
    fixture = fixture or load_evaluation_fixture()
    best = reduce(lambda a, b: a if a.f1_score > b.f1_score else b, fixture.models) if fixture.models else None
    return ModelComparisonResult(
        models=fixture.models,
        best_model=best.name if best else "",
        test_events=fixture.test_events,
        training_years=fixture.training_years,
        source="fixture",
    )


def validate_predictions(fixture: Optional[EvaluationFixture] = None) -> ValidationData:
    fixture = fixture or load_evaluation_fixture()
    events = fixture.historical_events
    hits = [e for e in events if e.predicted]
    detected = len(hits)
    total = len(events)

    return ValidationData(
        events=events,
        accuracy_percent=round_int(detected / total * 100) if total else 0,
        detected=detected,
        missed=total - detected,
        total=total,
        avg_lead_time_hours=round_int(sum(e.lead_time_hours for e in hits) / detected) if detected else 0,
        source="fixture",
    )


# ---------- Engine back-test ----------
def _ramp(start: float, end: float, steps: int) -> List[float]:
    return [start + (end - start) * (i + 1) / steps for i in range(steps)]


def historical_event_cases() -> List[BacktestCase]:
    """
    One case per documented flood: a 14-day window ending on the event's
    start date, with Sylhet rainfall ramping up to the recorded peak and the
    Surma gauge rising from its base level to the recorded maximum.
    """
    zone = get_zone(BACKTEST_ZONE_ID)
    base, danger = BACKTEST_GAUGE["base_level"], BACKTEST_GAUGE["danger_level"]

    cases = []
    for event in HISTORICAL_FLOODS:
        as_of = date.fromisoformat(event["start_date"])
        days = [as_of - timedelta(days=RISK_WINDOW_DAYS - 1 - i) for i in range(RISK_WINDOW_DAYS)]
        rain = _ramp(0.0, float(event["max_rainfall_mm"]), RISK_WINDOW_DAYS)
        levels = _ramp(base, float(event["max_river_level_m"]), RISK_WINDOW_DAYS)

        cases.append(BacktestCase(
            label=f"{event['month']} {event['year']}",
            zone=zone,
            as_of=as_of,
            rainfall=[
                RainfallObservation(date=d, station=BACKTEST_STATION, rainfall_mm=round_half_up(v, 1))
                for d, v in zip(days, rain)
            ],
            river_levels=[
                RiverLevelObservation(
                    date=d, river=BACKTEST_GAUGE["river"], station=BACKTEST_GAUGE["station"],
                    level_m=round_half_up(v, 2), danger_level_m=danger,
                )
                for d, v in zip(days, levels)
            ],
            actual_severity=event["severity"],
        ))
    return cases


def backtest_engine(cases: Optional[Sequence[BacktestCase]] = None) -> BacktestResult:
    """
    Score each case with the live engine. A case counts as a flood warning
    (positive class) when its category is Warning or Severe.
    """
    cases = historical_event_cases() if cases is None else list(cases)

    outcomes = []
    for case in cases:
        pred = compute_zone_risk(case.zone, case.rainfall, case.river_levels, case.as_of)
        outcomes.append(BacktestOutcome(
            label=case.label,
            risk_score=pred.risk_score,
            predicted_severity=pred.risk_category,
            actual_severity=case.actual_severity,
            detected=pred.risk_category in CRITICAL_CATEGORIES,
        ))

    if not outcomes:
        return BacktestResult(
            outcomes=[], accuracy=0, precision=0, recall=0, f1_score=0, rmse=0, r2=0,
            confusion_matrix=ConfusionMatrix(true_positive=0, false_positive=0, true_negative=0, false_negative=0),
        )

    y_true = [int(o.actual_severity in CRITICAL_CATEGORIES) for o in outcomes]
    y_pred = [int(o.detected) for o in outcomes]
    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()

    predicted_rank = [category_rank(o.predicted_severity) for o in outcomes]
    actual_rank = [category_rank(o.actual_severity) for o in outcomes]

    result = BacktestResult(
        outcomes=outcomes,
        accuracy=round_half_up(accuracy_score(y_true, y_pred) * 100, 1),
        precision=round_half_up(precision_score(y_true, y_pred, zero_division=0), 2),
        recall=round_half_up(recall_score(y_true, y_pred, zero_division=0), 2),
        f1_score=round_half_up(f1_score(y_true, y_pred, zero_division=0), 2),
        rmse=rmse(predicted_rank, actual_rank),
        r2=r2(predicted_rank, actual_rank),
        confusion_matrix=ConfusionMatrix(
            true_positive=int(tp), false_positive=int(fp), true_negative=int(tn), false_negative=int(fn),
        ),
    )
    logger.info(
        f"[model_eval] Back-test over {len(outcomes)} cases | acc={result.accuracy} "
        f"prec={result.precision} rec={result.recall} f1={result.f1_score}"
    )
    return result

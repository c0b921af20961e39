from datetime import datetime
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query

from .alerts import build_sms_log_rows, generate_alerts
from .analytics import historical_analytics
from .change_detector import log_predictions_if_needed
from .climate import PRESET_SCENARIOS, run_climate_projection
from .config import ALERT_THRESHOLD, DATA_SOURCE, DISCLAIMER
from .db_helpers import (
    DuplicatePhoneError,
    count_active_subscribers,
    get_prediction_history,
    get_sms_logs,
    insert_sms_logs,
    insert_subscriber,
    list_subscribers,
    subscriber_exists,
)
from .explain import explain_prediction, get_global_feature_importance
from .flood_compute import get_system_status, run_predictions
from .logging_setup import logger
from .model_eval import backtest_engine, compare_models, validate_predictions
from .observations import get_provider
from .reference_data import ANNUAL_MAX_RIVER_LEVEL, ANNUAL_RAINFALL, HISTORICAL_FLOODS, ZONES, get_zone
from .risk_levels import CATEGORY_COLOURS
from .schemas import AlertRequest, ClimateScenario, SubscriberRequest
from .stats_utils import confidence_interval, uncertainty_bands

router = APIRouter()

SMS_LOG_LIMIT = 50


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/predictions")
def get_predictions(background_tasks: BackgroundTasks):
    """
    Current risk for every zone, with a 95% interval over zone scores and the
    per-zone feature contributions. History logging runs after the response.
    """
    status = get_system_status()
    background_tasks.add_task(log_predictions_if_needed, status.predictions)

    ci = confidence_interval([p.risk_score for p in status.predictions], 0.95)
    predictions = [
        {**p.model_dump(), "feature_contributions": explain_prediction(p).features}
        for p in status.predictions
    ]
    return {
        "predictions": predictions,
        "summary": status.summary,
        "confidence": {
            "risk_mean": ci.mean,
            "risk_lower": ci.lower,
            "risk_upper": ci.upper,
            "standard_error": ci.standard_error,
            "confidence_level": ci.confidence_level,
            "sample_size": ci.sample_size,
        },
    }

@router.get("/predictions/history")
def get_history(limit: int = Query(100, ge=1, le=1000), offset: int = Query(0, ge=0)):
    return {"history": get_prediction_history(limit=limit, offset=offset), "limit": limit, "offset": offset}

@router.get("/alerts")
def get_alerts():
    return {
        "alerts": generate_alerts(ALERT_THRESHOLD),
        "sms_log": get_sms_logs(limit=SMS_LOG_LIMIT),
    }

@router.post("/alerts")
def send_alerts(payload: Optional[AlertRequest] = None):
    threshold = payload.threshold if payload and payload.threshold is not None else ALERT_THRESHOLD
    alerts = generate_alerts(threshold)
    rows = build_sms_log_rows(alerts, count_active_subscribers)

    if rows and not insert_sms_logs(rows):
        raise HTTPException(status_code=500, detail="Failed to record SMS log")
    logger.info(f"[api] Dispatched {len(rows)} alert(s) at threshold {threshold}")

    return {
        "sent": len(rows),
        "alerts": rows,
        "sms_log": get_sms_logs(limit=SMS_LOG_LIMIT),
    }

@router.get("/explain/{zone_id}")
def explain_zone(zone_id: str):
    zone = get_zone(zone_id)
    if zone is None:
        raise HTTPException(status_code=404, detail=f"Unknown zone: {zone_id}")
    prediction = run_predictions(zones=[zone])[0]
    return explain_prediction(prediction)

@router.get("/feature-importance")
def feature_importance():
    return {"features": get_global_feature_importance()}

@router.get("/climate-projection")
def climate_projection(
    rainfall: float = Query(12.0),
    extreme: float = Query(1.5),
    year: int = Query(2040),
):
    scenario = ClimateScenario(
        rainfall_increase_pct=rainfall,
        extreme_event_multiplier=extreme,
        projection_year=year,
    ).clamped()
    return {"projection": run_climate_projection(scenario), "computed_at": _now()}

@router.get("/climate-projection/presets")
def climate_presets():
    return {"presets": PRESET_SCENARIOS}

@router.get("/model-metrics")
def model_metrics():
    return {**compare_models().model_dump(), "computed_at": _now()}

@router.get("/validation")
def validation():
    return validate_predictions()

@router.get("/validation/backtest")
def validation_backtest():
    return backtest_engine()

@router.get("/rainfall/uncertainty")
def rainfall_uncertainty(days: int = Query(30, ge=1, le=365), window: int = Query(7, ge=1, le=60)):
    totals = get_provider().daily_rainfall_totals(days)
    points = [(d.isoformat(), float(v)) for d, v in totals.items()]
    return {
        "bands": uncertainty_bands(points, window_size=window),
        "confidence": confidence_interval([v for _, v in points], 0.95),
    }

@router.get("/analytics")
def analytics(year_from: int = Query(1974, alias="from"), year_to: int = Query(2025, alias="to")):
    return historical_analytics(year_from, year_to)

@router.get("/data")
def get_data():
    provider = get_provider()
    return {
        "rainfall": provider.rainfall(),
        "river_levels": provider.river_levels(),
        "zones": ZONES,
        "historical_floods": HISTORICAL_FLOODS,
        "annual_rainfall": ANNUAL_RAINFALL,
        "annual_max_river_level": ANNUAL_MAX_RIVER_LEVEL,
        "category_colours": CATEGORY_COLOURS,
        "data_source": DATA_SOURCE,
        "disclaimer": DISCLAIMER,
    }

@router.get("/subscribe")
def get_subscribers():
    return {"subscribers": list_subscribers()}

@router.post("/subscribe")
def subscribe(payload: SubscriberRequest):
    if not payload.name or not payload.phone or not payload.area:
        raise HTTPException(status_code=400, detail="Name, phone, and area are required")

    if subscriber_exists(payload.phone):
        raise HTTPException(status_code=409, detail="Phone already registered")

    try:
        subscriber = insert_subscriber(payload.name, payload.phone, payload.area, payload.language)
    except DuplicatePhoneError:
        raise HTTPException(status_code=409, detail="Phone already registered")
    if subscriber is None:
        raise HTTPException(status_code=500, detail="Failed to register subscriber")
    return {"subscriber": subscriber}

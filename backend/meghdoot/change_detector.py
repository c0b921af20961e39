# backend/meghdoot/change_detector.py
from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple
from .config import HISTORY_DEDUPE_MINUTES
from .db_helpers import history_logged_since, insert_prediction_history
from .logging_setup import logger
from .risk_levels import CRITICAL_CATEGORIES
from .schemas import RiskPrediction

def should_log_predictions(
    predictions: Sequence[RiskPrediction],
    window_minutes: int = HISTORY_DEDUPE_MINUTES,
    now: Optional[datetime] = None,
) -> Tuple[bool, str]:
    """
    History is written only while some zone is Warning/Severe, and at most
    once per window.
    """
    critical = [p for p in predictions if p.risk_category in CRITICAL_CATEGORIES]
    if not critical:
        return False, "no_critical_zones"

    cutoff = (now or datetime.utcnow()) - timedelta(minutes=window_minutes)
    if history_logged_since(cutoff):
        return False, "logged_within_window"
    return True, f"critical_zones_{len(critical)}"

def log_predictions_if_needed(
    predictions: Sequence[RiskPrediction],
    window_minutes: int = HISTORY_DEDUPE_MINUTES,
) -> Tuple[bool, str]:
    """Background task body; never raises."""
    try:
        ok, reason = should_log_predictions(predictions, window_minutes)
        if not ok:
            return False, reason

        if not insert_prediction_history(predictions):
            return False, "insert_failed"
        logger.info(f"[change_detector] Logged {len(predictions)} predictions: {reason}")
        return True, reason

    except Exception as e:
        logger.error(f"[change_detector] Error while logging predictions: {e}", exc_info=True)
        return False, "error"

# backend/meghdoot/alerts.py
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional, Union

from .config import ALERT_THRESHOLD
from .flood_compute import run_predictions
from .logging_setup import logger
from .observations import ObservationProvider
from .schemas import Alert, RiskPrediction

SMS_STATUS_SENT = "sent"


def alert_message(prediction: RiskPrediction) -> str:
    return (
        f"[Meghdoot Alert] Flood risk {prediction.risk_category.upper()} in {prediction.zone_name} "
        f"within next 12 hours (score: {prediction.risk_score}/100). {prediction.explanation}. "
        "Stay alert. This is not an official government warning."
    )


def alerts_from_predictions(predictions: Iterable[RiskPrediction], threshold: int = ALERT_THRESHOLD) -> List[Alert]:
    return [
        Alert(zone=p.zone_name, message=alert_message(p), risk_score=p.risk_score, category=p.risk_category)
        for p in predictions
        if p.risk_score >= threshold
    ]


def generate_alerts(
    threshold: int = ALERT_THRESHOLD,
    provider: Optional[ObservationProvider] = None,
    as_of: Optional[Union[date, datetime]] = None,
) -> List[Alert]:
    """One alert per zone whose score is at or above threshold, in zone order."""
    alerts = alerts_from_predictions(run_predictions(provider, as_of=as_of), threshold)
    logger.info(f"[alerts] {len(alerts)} zone(s) at or above threshold {threshold}")
    return alerts


def build_sms_log_rows(alerts: Iterable[Alert], recipients_for_zone: Callable[[str], int]) -> List[Dict]:
    """
    SMS log rows for a batch of alerts. recipients_for_zone maps a zone name
    to the number of active subscribers registered for it.
    """
    return [
        {
            "zone": a.zone,
            "risk_category": a.category,
            "risk_score": a.risk_score,
            "message_en": a.message,
            "recipients": int(recipients_for_zone(a.zone)),
            "status": SMS_STATUS_SENT,
        }
        for a in alerts
    ]

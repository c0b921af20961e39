# backend/meghdoot/db_helpers.py
import re
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.exc import IntegrityError
from .db_models import init_db, SessionLocal, PredictionHistory, SmsLog, Subscriber
from datetime import datetime
from .logging_setup import logger
from .schemas import RiskPrediction

HISTORY_FIELDS = (
    "zone_id", "zone_name", "risk_score", "risk_category",
    "explanation", "rainfall_trend", "river_level_trend",
)
SMS_FIELDS = ("zone", "risk_category", "risk_score", "message_en", "recipients", "status")

class DuplicatePhoneError(Exception):
    """Phone number is already registered."""

def ensure_db():
    init_db()

def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() + "Z" if value else None

def normalize_phone(phone: str) -> str:
    return re.sub(r"[\s-]", "", phone)

# ---------- prediction history ----------
def insert_prediction_history(rows: Iterable[Any]) -> bool:
    ensure_db()
    db = SessionLocal()
    try:
        records = []
        for row in rows:
            data = row.model_dump() if isinstance(row, RiskPrediction) else dict(row)
            records.append(PredictionHistory(**{k: data.get(k) for k in HISTORY_FIELDS}))
        db.add_all(records)
        db.commit()
        logger.info(f"[db_helpers] Inserted {len(records)} prediction history rows")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"[db_helpers] insert_prediction_history failed: {e}", exc_info=True)
        return False
    finally:
        db.close()

def get_prediction_history(limit: int = 100, offset: int = 0) -> List[Dict[str, Any]]:
    ensure_db()
    db = SessionLocal()
    try:
        q = db.query(PredictionHistory).order_by(PredictionHistory.created_at.desc(), PredictionHistory.id.desc())
        rows = q.offset(offset).limit(limit).all()
        results = []
        for r in rows:
            item = {k: getattr(r, k) for k in HISTORY_FIELDS}
            item["id"] = r.id
            item["created_at"] = _iso(r.created_at)
            results.append(item)
        return results
    finally:
        db.close()

def history_logged_since(cutoff: datetime) -> bool:
    ensure_db()
    db = SessionLocal()
    try:
        return db.query(PredictionHistory.id).filter(PredictionHistory.created_at >= cutoff).first() is not None
    finally:
        db.close()

# ---------- SMS log ----------
def insert_sms_logs(rows: Iterable[Dict[str, Any]]) -> bool:
    ensure_db()
    db = SessionLocal()
    try:
        records = [SmsLog(**{k: row.get(k) for k in SMS_FIELDS}) for row in rows]
        db.add_all(records)
        db.commit()
        logger.info(f"[db_helpers] Inserted {len(records)} SMS log rows")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"[db_helpers] insert_sms_logs failed: {e}", exc_info=True)
        return False
    finally:
        db.close()

def get_sms_logs(limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
    ensure_db()
    db = SessionLocal()
    try:
        q = db.query(SmsLog).order_by(SmsLog.created_at.desc(), SmsLog.id.desc())
        return [
            {
                "id": r.id,
                "timestamp": _iso(r.created_at),
                "zone": r.zone,
                "risk_category": r.risk_category,
                "risk_score": r.risk_score,
                "message_en": r.message_en or "",
                "recipients": r.recipients,
                "status": r.status,
            }
            for r in q.offset(offset).limit(limit).all()
        ]
    finally:
        db.close()

# ---------- subscribers ----------
def _subscriber_dict(r: Subscriber) -> Dict[str, Any]:
    return {
        "id": r.id,
        "name": r.name,
        "phone": r.phone,
        "area": r.area,
        "language": r.language,
        "active": bool(r.active),
        "created_at": _iso(r.created_at),
    }

def subscriber_exists(phone: str) -> bool:
    ensure_db()
    db = SessionLocal()
    try:
        return db.query(Subscriber.id).filter(Subscriber.phone == normalize_phone(phone)).first() is not None
    finally:
        db.close()

def insert_subscriber(name: str, phone: str, area: str, language: Optional[str] = None) -> Optional[Dict[str, Any]]:
    ensure_db()
    db = SessionLocal()
    try:
        record = Subscriber(
            name=name.strip(),
            phone=normalize_phone(phone),
            area=area,
            language=language or "bn",
            active=True,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        logger.info(f"[db_helpers] Registered subscriber id={record.id} area={area}")
        return _subscriber_dict(record)
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"[db_helpers] insert_subscriber rejected duplicate phone for area={area}: {e}")
        raise DuplicatePhoneError(normalize_phone(phone)) from e
    except Exception as e:
        db.rollback()
        logger.error(f"[db_helpers] insert_subscriber failed for area={area}: {e}", exc_info=True)
        return None
    finally:
        db.close()

def list_subscribers() -> List[Dict[str, Any]]:
    ensure_db()
    db = SessionLocal()
    try:
        rows = db.query(Subscriber).order_by(Subscriber.created_at.desc(), Subscriber.id.desc()).all()
        return [_subscriber_dict(r) for r in rows]
    finally:
        db.close()

def count_active_subscribers(area: str) -> int:
    ensure_db()
    db = SessionLocal()
    try:
        return db.query(Subscriber).filter(Subscriber.area == area, Subscriber.active.is_(True)).count()
    finally:
        db.close()

# backend/meghdoot/db_models.py
from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from datetime import datetime
import os

from .config import DB_PATH

if os.path.dirname(DB_PATH):
    os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)
DATABASE_URL = f"sqlite:///{DB_PATH}"

engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()

class PredictionHistory(Base):
    __tablename__ = "predictions_history"
    id = Column(Integer, primary_key=True, index=True)
    zone_id = Column(String, index=True)
    zone_name = Column(String)
    risk_score = Column(Integer)
    risk_category = Column(String)
    explanation = Column(String)
    rainfall_trend = Column(Float)
    river_level_trend = Column(Float)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

class SmsLog(Base):
    __tablename__ = "sms_logs"
    id = Column(Integer, primary_key=True, index=True)
    zone = Column(String)
    risk_category = Column(String)
    risk_score = Column(Integer)
    message_en = Column(String)
    recipients = Column(Integer, default=0)
    status = Column(String, default="sent")
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

class Subscriber(Base):
    __tablename__ = "subscribers"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False, unique=True, index=True)
    area = Column(String, nullable=False)
    language = Column(String, default="bn")
    active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

def init_db():
    Base.metadata.create_all(bind=engine)

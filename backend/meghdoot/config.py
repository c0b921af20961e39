# backend/meghdoot/config.py
"""
Runtime configuration, read once from environment variables.
"""

import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
ROOT = PACKAGE_DIR.parents[1]

DB_PATH = os.getenv("MEGHDOOT_DB_PATH", os.path.join("data", "meghdoot_history.sqlite3"))
LOG_DIR = os.getenv("MEGHDOOT_LOG_DIR", "logs")

PREDICTIONS_PATH = Path(os.getenv("MEGHDOOT_PREDICTIONS_PATH", ROOT / "data" / "generated" / "meghdoot_predictions.json"))
EVAL_FIXTURE_PATH = Path(os.getenv("MEGHDOOT_EVAL_FIXTURE", PACKAGE_DIR / "data" / "evaluation_fixture.json"))

ALERT_THRESHOLD = int(os.getenv("MEGHDOOT_ALERT_THRESHOLD", "50"))
OBSERVATION_DAYS = int(os.getenv("MEGHDOOT_OBSERVATION_DAYS", "90"))
HISTORY_DEDUPE_MINUTES = int(os.getenv("MEGHDOOT_HISTORY_DEDUPE_MINUTES", "5"))

DATA_SOURCE = "Simulated Real-Time (based on Sylhet historical patterns)"
DISCLAIMER = "This system supports early awareness and is not an official government warning."

CORS_ORIGINS = [o.strip() for o in os.getenv("MEGHDOOT_CORS_ORIGINS", "*").split(",") if o.strip()]

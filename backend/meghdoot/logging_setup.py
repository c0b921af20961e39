# backend/meghdoot/logging_setup.py
import logging
from logging.handlers import RotatingFileHandler
import os

from .config import LOG_DIR

os.makedirs(LOG_DIR, exist_ok=True)

def setup_logger():
    logger = logging.getLogger("meghdoot")
    logger.setLevel(logging.INFO)

    # module may be re-imported by reloaders; attach the file handler once
    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    handler = RotatingFileHandler(
        os.path.join(LOG_DIR, "backend.log"),
        maxBytes=5_000_000,
        backupCount=3,
        encoding="utf-8"
    )

    formatter = logging.Formatter(
        "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger

logger = setup_logger()

import os
import tempfile
from datetime import date, timedelta

import pytest

# point storage and logs at a scratch directory before the package is imported
_TMP_DIR = tempfile.mkdtemp(prefix="meghdoot-tests-")
os.environ["MEGHDOOT_DB_PATH"] = os.path.join(_TMP_DIR, "history.sqlite3")
os.environ["MEGHDOOT_LOG_DIR"] = os.path.join(_TMP_DIR, "logs")

from backend.meghdoot.db_models import Base, engine  # noqa: E402
from backend.meghdoot.observations import ObservationProvider, set_provider  # noqa: E402
from backend.meghdoot.risk_levels import categorize  # noqa: E402
from backend.meghdoot.schemas import (  # noqa: E402
    RainfallObservation,
    RiskPrediction,
    RiverLevelObservation,
    Zone,
)

FIXED_DATE = date(2024, 6, 15)


@pytest.fixture
def fixed_provider():
    provider = ObservationProvider(as_of=FIXED_DATE)
    set_provider(provider)
    yield provider
    set_provider(None)


@pytest.fixture
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_zone():
    def _make(vulnerability="high", elevation_m=10.0, zone_id="zt", name="Test Zone"):
        return Zone(
            id=zone_id, name=name, name_bn=name, lat=24.9, lng=91.9, radius_km=4,
            elevation_m=elevation_m, vulnerability=vulnerability, population=1000, district="Sylhet",
        )
    return _make


@pytest.fixture
def make_series():
    """(rainfall, river_levels) for consecutive days ending on as_of."""
    def _make(rain_values, level_values, as_of=FIXED_DATE, station="Sylhet", danger=8.0):
        n_rain, n_level = len(rain_values), len(level_values)
        rainfall = [
            RainfallObservation(date=as_of - timedelta(days=n_rain - 1 - i), station=station, rainfall_mm=v)
            for i, v in enumerate(rain_values)
        ]
        levels = [
            RiverLevelObservation(
                date=as_of - timedelta(days=n_level - 1 - i), river="Surma",
                station="Sylhet (Kanairghat)", level_m=v, danger_level_m=danger,
            )
            for i, v in enumerate(level_values)
        ]
        return rainfall, levels
    return _make


@pytest.fixture
def warning_case(make_zone, make_series):
    """High-vulnerability zone at 10m, rainfall rising 3mm/day to a 120mm 3-day average, river steady at 92% of danger."""
    rainfall, levels = make_series([84 + 3 * i for i in range(14)], [7.36] * 14)
    return make_zone(), rainfall, levels, FIXED_DATE


@pytest.fixture
def make_prediction():
    def _make(zone_id="z1", score=60, zone_name="Sylhet Sadar", rainfall_trend=3.0, river_level_trend=0.2):
        return RiskPrediction(
            zone_id=zone_id,
            zone_name=zone_name,
            risk_score=score,
            risk_category=categorize(score),
            explanation="Risk factors: river level rising",
            rainfall_trend=rainfall_trend,
            river_level_trend=river_level_trend,
            timestamp="2024-06-15T00:00:00Z",
        )
    return _make

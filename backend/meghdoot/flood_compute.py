# backend/meghdoot/flood_compute.py
"""
Flood risk engine: per-zone features, weighted 0-100 score, category and
a plain-language explanation.

Pipeline per zone:
1. keep the trailing 14 calendar days of observations
2. rainfall summed across stations per day -> slope, 3/7-day averages, peak
3. river level averaged across gauges per day -> slope; highest
   level/danger ratio per day -> latest value is the current danger ratio
4. five individually capped terms summed, rounded, clamped to [0, 100]
"""

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, Optional, Sequence, Union

import pandas as pd

from .config import DATA_SOURCE
from .observations import ObservationProvider, get_provider
from .reference_data import ZONES
from .risk_levels import categorize, round_half_up, round_int
from .schemas import (
    RainfallObservation,
    RiskPrediction,
    RiverLevelObservation,
    SystemStatus,
    SystemSummary,
    Zone,
)
from .trend import moving_average, slope

# ---- Tunable constants ----
RISK_WINDOW_DAYS = 14

DANGER_RATIO_WEIGHT = 35
RAINFALL_INTENSITY_WEIGHT = 25
RAINFALL_TREND_WEIGHT = 15
RIVER_TREND_WEIGHT = 15
VULNERABILITY_WEIGHT = 10

RAINFALL_INTENSITY_REF_MM = 200.0   # 3-day avg (all stations) that saturates the term
RAINFALL_SLOPE_REF = 10.0           # mm/day per day
LEVEL_SLOPE_REF = 0.5               # m/day
ELEVATION_REF_M = 30.0              # zones at or above this get no vulnerability points
VULNERABILITY_BASE = {"high": 10, "medium": 5, "low": 2}

# explanation triggers
RAINFALL_SLOPE_ALERT = 2.0
HEAVY_RAINFALL_MM = 100.0
DANGER_RATIO_ALERT = 0.85
LEVEL_SLOPE_ALERT = 0.1
EXTREME_PEAK_MM = 150.0
LOW_ELEVATION_M = 12.0

NO_RISK_FACTORS = "No significant risk factors detected"


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def _window(observations: Iterable, as_of: date):
    cutoff = as_of - timedelta(days=RISK_WINDOW_DAYS)
    return [o for o in observations if cutoff < o.date <= as_of]


# ---- 1. Feature extraction ----
def extract_zone_features(
    rainfall: Sequence[RainfallObservation],
    river_levels: Sequence[RiverLevelObservation],
    as_of: Optional[Union[date, datetime]] = None,
) -> Dict[str, float]:
    """
    Trend and intensity features over the trailing window.
    Missing data yields zeros for the affected features.
    """
    as_of = _as_date(as_of or date.today())

    daily_rain, level_values, danger_ratios = [], [], []

    rain_rows = [{"date": r.date, "rainfall_mm": r.rainfall_mm} for r in _window(rainfall, as_of)]
    if rain_rows:
        rain_df = pd.DataFrame(rain_rows)
        daily_rain = rain_df.groupby("date")["rainfall_mm"].sum().sort_index().tolist()

    level_rows = [
        {"date": r.date, "level_m": r.level_m, "ratio": r.level_m / r.danger_level_m}
        for r in _window(river_levels, as_of)
    ]
    if level_rows:
        level_df = pd.DataFrame(level_rows)
        daily_level = level_df.groupby("date").agg(level_m=("level_m", "mean"), ratio=("ratio", "max")).sort_index()
        level_values = daily_level["level_m"].tolist()
        danger_ratios = daily_level["ratio"].tolist()

    return {
        "rainfall_slope": slope(daily_rain),
        "rainfall_3day_avg": moving_average(daily_rain, 3),
        "rainfall_7day_avg": moving_average(daily_rain, 7),
        "peak_rainfall": float(max(daily_rain)) if daily_rain else 0.0,
        "level_slope": slope(level_values),
        "current_danger_ratio": float(danger_ratios[-1]) if danger_ratios else 0.0,
    }


# ---- 2. Score ----
def score_components(features: Dict[str, float], zone: Zone) -> Dict[str, float]:
    """Each term capped at its weight; only rising trends contribute."""
    danger = min(DANGER_RATIO_WEIGHT, features["current_danger_ratio"] * DANGER_RATIO_WEIGHT)
    intensity = min(
        RAINFALL_INTENSITY_WEIGHT,
        (features["rainfall_3day_avg"] / RAINFALL_INTENSITY_REF_MM) * RAINFALL_INTENSITY_WEIGHT,
    )
    rain_trend = min(
        RAINFALL_TREND_WEIGHT,
        (max(0.0, features["rainfall_slope"]) / RAINFALL_SLOPE_REF) * RAINFALL_TREND_WEIGHT,
    )
    river_trend = min(
        RIVER_TREND_WEIGHT,
        (max(0.0, features["level_slope"]) / LEVEL_SLOPE_REF) * RIVER_TREND_WEIGHT,
    )
    elevation_factor = max(0.0, 1.0 - zone.elevation_m / ELEVATION_REF_M)
    vulnerability = VULNERABILITY_BASE.get(zone.vulnerability, 2) * elevation_factor

    return {
        "danger_ratio": danger,
        "rainfall_intensity": intensity,
        "rainfall_trend": rain_trend,
        "river_trend": river_trend,
        "vulnerability": vulnerability,
    }


def compute_risk_score(features: Dict[str, float], zone: Zone) -> int:
    total = sum(score_components(features, zone).values())
    return max(0, min(100, round_int(total)))


# ---- 3. Explanation ----
def risk_factors(features: Dict[str, float], zone: Zone):
    """Ordered list of triggered heuristic conditions."""
    avg3 = features["rainfall_3day_avg"]
    ratio = features["current_danger_ratio"]
    peak = features["peak_rainfall"]

    factors = []
    if features["rainfall_slope"] > RAINFALL_SLOPE_ALERT:
        factors.append(f"rainfall trending upward ({round_int(avg3)}mm 3-day avg)")
    if avg3 > HEAVY_RAINFALL_MM:
        factors.append(f"heavy rainfall: {round_int(avg3)}mm 3-day avg")
    if ratio > DANGER_RATIO_ALERT:
        factors.append(f"river at {round_int(ratio * 100)}% of danger level")
    if features["level_slope"] > LEVEL_SLOPE_ALERT:
        factors.append("river level rising")
    if peak > EXTREME_PEAK_MM:
        factors.append(f"extreme rainfall peak: {round_int(peak)}mm")
    if zone.vulnerability == "high":
        factors.append("high-vulnerability zone")
    if zone.elevation_m < LOW_ELEVATION_M:
        factors.append(f"low elevation ({zone.elevation_m:g}m)")
    return factors


def build_explanation(features: Dict[str, float], zone: Zone) -> str:
    factors = risk_factors(features, zone)
    if not factors:
        return NO_RISK_FACTORS
    return "Risk factors: " + "; ".join(factors)


# ---- 4. Zone prediction ----
def compute_zone_risk(
    zone: Zone,
    rainfall: Sequence[RainfallObservation],
    river_levels: Sequence[RiverLevelObservation],
    as_of: Optional[Union[date, datetime]] = None,
) -> RiskPrediction:
    """
    Score one zone. Same observations + same as_of -> identical prediction.
    """
    as_of = as_of or datetime.utcnow()
    features = extract_zone_features(rainfall, river_levels, _as_date(as_of))
    score = compute_risk_score(features, zone)

    if isinstance(as_of, datetime):
        timestamp = as_of.isoformat() + "Z"
    else:
        timestamp = datetime.combine(as_of, datetime.min.time()).isoformat() + "Z"

    return RiskPrediction(
        zone_id=zone.id,
        zone_name=zone.name,
        risk_score=score,
        risk_category=categorize(score),
        explanation=build_explanation(features, zone),
        rainfall_trend=round_half_up(features["rainfall_slope"], 2),
        river_level_trend=round_half_up(features["level_slope"], 2),
        timestamp=timestamp,
    )


# ---- 5. All zones ----
def run_predictions(
    provider: Optional[ObservationProvider] = None,
    zones: Optional[Sequence[Zone]] = None,
    as_of: Optional[Union[date, datetime]] = None,
):
    provider = provider or get_provider()
    zones = ZONES if zones is None else zones
    if as_of is None:
        # window ends on the same day the provider generated up to
        as_of = provider.reference_date
    rainfall = provider.rainfall()
    river_levels = provider.river_levels()
    return [compute_zone_risk(z, rainfall, river_levels, as_of) for z in zones]


def summarize(predictions: Sequence[RiskPrediction], last_updated: Optional[str] = None) -> SystemSummary:
    scores = [p.risk_score for p in predictions]
    counts = {c: sum(1 for p in predictions if p.risk_category == c) for c in ("Severe", "Warning", "Watch")}
    return SystemSummary(
        max_risk=max(scores) if scores else 0,
        avg_risk=round_int(sum(scores) / len(scores)) if scores else 0,
        severe_zones=counts["Severe"],
        warning_zones=counts["Warning"],
        watch_zones=counts["Watch"],
        normal_zones=len(predictions) - sum(counts.values()),
        total_zones=len(predictions),
        last_updated=last_updated or datetime.utcnow().isoformat() + "Z",
        data_source=DATA_SOURCE,
    )


def get_system_status(
    provider: Optional[ObservationProvider] = None,
    zones: Optional[Sequence[Zone]] = None,
    as_of: Optional[Union[date, datetime]] = None,
) -> SystemStatus:
    """Recomputes every zone on each call."""
    predictions = run_predictions(provider, zones, as_of)
    return SystemStatus(predictions=predictions, summary=summarize(predictions))

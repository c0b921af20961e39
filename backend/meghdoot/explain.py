# backend/meghdoot/explain.py
"""
Transparency view of a risk prediction.

Contributions are the engine's fixed model weights (35/25/15/15/10), not
attributions measured on the zone's observations. The qualitative value and
impact of each feature come from the prediction's trends and the zone's
vulnerability/elevation.
"""

from typing import List, Optional, Sequence

from .flood_compute import (
    DANGER_RATIO_WEIGHT,
    LEVEL_SLOPE_ALERT,
    LOW_ELEVATION_M,
    RAINFALL_INTENSITY_WEIGHT,
    RAINFALL_SLOPE_ALERT,
    RAINFALL_TREND_WEIGHT,
    RIVER_TREND_WEIGHT,
    VULNERABILITY_WEIGHT,
)
from .reference_data import ZONES
from .risk_levels import round_int
from .schemas import ExplainableResult, FeatureContribution, GlobalFeatureImportance, RiskPrediction, Zone

MODEL_WEIGHTS = (
    ("River Danger Ratio", DANGER_RATIO_WEIGHT, "How close river levels are to danger thresholds"),
    ("Rainfall Intensity", RAINFALL_INTENSITY_WEIGHT, "Recent rainfall amounts relative to historical norms"),
    ("Rainfall Trend", RAINFALL_TREND_WEIGHT, "Whether rainfall is increasing or decreasing"),
    ("River Level Trend", RIVER_TREND_WEIGHT, "Direction and rate of river level changes"),
    ("Zone Vulnerability", VULNERABILITY_WEIGHT, "Historical vulnerability and elevation factors"),
)
TOTAL_WEIGHT = sum(w for _, w, _ in MODEL_WEIGHTS)


def _share(weight: int) -> int:
    return round_int(weight / TOTAL_WEIGHT * 100)


def _signed(value: float) -> str:
    return f"{'+' if value > 0 else ''}{value:g}"


def feature_contributions(prediction: RiskPrediction, zone: Zone) -> List[FeatureContribution]:
    rain_trend = prediction.rainfall_trend
    level_trend = prediction.river_level_trend

    if rain_trend > RAINFALL_SLOPE_ALERT:
        intensity_impact = "positive"
    elif rain_trend < 0:
        intensity_impact = "negative"
    else:
        intensity_impact = "neutral"

    features = [
        FeatureContribution(
            feature="River Danger Ratio",
            contribution=_share(DANGER_RATIO_WEIGHT),
            value="Rising" if level_trend > 0 else "Stable",
            impact="positive" if level_trend > LEVEL_SLOPE_ALERT else "neutral",
            description=f"Current river level relative to danger threshold ({DANGER_RATIO_WEIGHT}% weight)",
        ),
        FeatureContribution(
            feature="Rainfall Intensity",
            contribution=_share(RAINFALL_INTENSITY_WEIGHT),
            value=f"Trend: {_signed(rain_trend)}",
            impact=intensity_impact,
            description=f"3-day average rainfall intensity across stations ({RAINFALL_INTENSITY_WEIGHT}% weight)",
        ),
        FeatureContribution(
            feature="Rainfall Trend",
            contribution=_share(RAINFALL_TREND_WEIGHT),
            value="Increasing" if rain_trend > 0 else "Decreasing",
            impact="positive" if rain_trend > 0 else "negative",
            description=f"Direction and rate of rainfall change over 14 days ({RAINFALL_TREND_WEIGHT}% weight)",
        ),
        FeatureContribution(
            feature="River Level Trend",
            contribution=_share(RIVER_TREND_WEIGHT),
            value="Rising" if level_trend > 0 else "Falling",
            impact="positive" if level_trend > 0 else "negative",
            description=f"Direction and rate of river level change ({RIVER_TREND_WEIGHT}% weight)",
        ),
        FeatureContribution(
            feature="Zone Vulnerability",
            contribution=_share(VULNERABILITY_WEIGHT),
            value=f"{zone.vulnerability} ({zone.elevation_m:g}m)",
            impact="positive" if zone.vulnerability == "high" else "neutral",
            description=f"Historical vulnerability rating and elevation factor ({VULNERABILITY_WEIGHT}% weight)",
        ),
    ]
    # stable: equal weights keep insertion order
    return sorted(features, key=lambda f: -f.contribution)


def active_risk_factors(prediction: RiskPrediction, zone: Zone) -> List[str]:
    factors = []
    if prediction.rainfall_trend > RAINFALL_SLOPE_ALERT:
        factors.append("increasing rainfall")
    if prediction.river_level_trend > LEVEL_SLOPE_ALERT:
        factors.append("rising river levels")
    if zone.vulnerability == "high":
        factors.append("high zone vulnerability")
    if zone.elevation_m < LOW_ELEVATION_M:
        factors.append("low elevation")
    return factors


def explain_prediction(prediction: RiskPrediction, zones: Optional[Sequence[Zone]] = None) -> ExplainableResult:
    zones = ZONES if zones is None else zones
    zone = next((z for z in zones if z.id == prediction.zone_id), None)
    score = prediction.risk_score

    if zone is None:
        return ExplainableResult(
            zone_id=prediction.zone_id,
            zone_name=prediction.zone_name,
            risk_score=score,
            features=[],
            top_factor="Unknown",
            human_explanation="Zone data unavailable.",
        )

    features = feature_contributions(prediction, zone)
    top = features[0]
    factors = active_risk_factors(prediction, zone)

    if factors:
        human = (
            f"Risk score of {score}/100 driven primarily by {', '.join(factors)}. "
            f"The dominant factor is {top.feature.lower()}, accounting for {top.contribution}% of the model weight."
        )
    else:
        human = f"Risk score of {score}/100. No significant risk factors currently active. Zone conditions are stable."

    return ExplainableResult(
        zone_id=prediction.zone_id,
        zone_name=prediction.zone_name,
        risk_score=score,
        features=features,
        top_factor=top.feature,
        human_explanation=human,
    )


def get_global_feature_importance() -> List[GlobalFeatureImportance]:
    return [
        GlobalFeatureImportance(feature=name, importance=weight, description=desc)
        for name, weight, desc in MODEL_WEIGHTS
    ]

import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Vulnerability = Literal["low", "medium", "high"]
RiskCategory = Literal["Normal", "Watch", "Warning", "Severe"]
Impact = Literal["positive", "negative", "neutral"]


class Zone(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_bn: str
    lat: float
    lng: float
    radius_km: float
    elevation_m: float
    vulnerability: Vulnerability
    population: int
    district: str


class RainfallObservation(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    station: str
    rainfall_mm: float = Field(ge=0)


class RiverLevelObservation(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    river: str
    station: str
    level_m: float
    danger_level_m: float = Field(gt=0)


class RiskPrediction(BaseModel):
    zone_id: str
    zone_name: str
    risk_score: int = Field(ge=0, le=100)
    risk_category: RiskCategory
    explanation: str
    rainfall_trend: float
    river_level_trend: float
    timestamp: str


class SystemSummary(BaseModel):
    max_risk: int
    avg_risk: int
    severe_zones: int
    warning_zones: int
    watch_zones: int
    normal_zones: int
    total_zones: int
    last_updated: str
    data_source: str


class SystemStatus(BaseModel):
    predictions: List[RiskPrediction]
    summary: SystemSummary


class Alert(BaseModel):
    zone: str
    message: str
    risk_score: int
    category: RiskCategory


# ---- statistics ----
class ConfidenceInterval(BaseModel):
    mean: float
    lower: float
    upper: float
    standard_error: float
    variance: float
    confidence_level: float
    sample_size: int


class UncertaintyBand(BaseModel):
    date: str
    value: float
    lower95: float
    upper95: float
    lower80: float
    upper80: float


# ---- explainability ----
class FeatureContribution(BaseModel):
    feature: str
    contribution: int
    value: str
    impact: Impact
    description: str


class ExplainableResult(BaseModel):
    zone_id: str
    zone_name: str
    risk_score: int
    features: List[FeatureContribution]
    top_factor: str
    human_explanation: str


class GlobalFeatureImportance(BaseModel):
    feature: str
    importance: int
    description: str


# ---- climate ----
class ClimateScenario(BaseModel):
    rainfall_increase_pct: float = 12.0
    extreme_event_multiplier: float = 1.5
    projection_year: int = 2040

    def clamped(self) -> "ClimateScenario":
        return ClimateScenario(
            rainfall_increase_pct=max(0.0, min(30.0, self.rainfall_increase_pct)),
            extreme_event_multiplier=max(1.0, min(3.0, self.extreme_event_multiplier)),
            projection_year=max(2025, min(2050, self.projection_year)),
        )


class MonthlyProjection(BaseModel):
    month: str
    baseline: int
    projected: int


class ClimateProjection(BaseModel):
    scenario: ClimateScenario
    baseline_risk: float
    projected_risk: float
    risk_escalation_pct: int
    projected_annual_rainfall: int
    projected_flood_frequency: float
    baseline_flood_frequency: float
    monthly_projections: List[MonthlyProjection]
    extreme_event_probability: float
    sea_level_impact: int


class PresetScenario(BaseModel):
    name: str
    description: str
    scenario: ClimateScenario


# ---- model evaluation ----
class ConfusionMatrix(BaseModel):
    true_positive: int
    false_positive: int
    true_negative: int
    false_negative: int


class ModelMetrics(BaseModel):
    name: str
    short_name: str
    accuracy: float
    rmse: float
    r2: float
    precision: float
    recall: float
    f1_score: float
    description: str
    strengths: List[str]
    weaknesses: List[str]
    confusion_matrix: ConfusionMatrix


class ModelComparisonResult(BaseModel):
    models: List[ModelMetrics]
    best_model: str
    test_events: int
    training_years: str
    source: Literal["fixture", "engine"] = "fixture"


class ValidationEvent(BaseModel):
    event: str
    predicted: bool
    lead_time_hours: float
    actual_severity: RiskCategory
    predicted_severity: RiskCategory


class ValidationData(BaseModel):
    events: List[ValidationEvent]
    accuracy_percent: int
    detected: int
    missed: int
    total: int
    avg_lead_time_hours: int
    source: Literal["fixture", "engine"] = "fixture"


class EvaluationFixture(BaseModel):
    models: List[ModelMetrics]
    test_events: int
    training_years: str
    historical_events: List[ValidationEvent]


class BacktestCase(BaseModel):
    label: str
    zone: Zone
    as_of: dt.date
    rainfall: List[RainfallObservation]
    river_levels: List[RiverLevelObservation]
    actual_severity: RiskCategory


class BacktestOutcome(BaseModel):
    label: str
    risk_score: int
    predicted_severity: RiskCategory
    actual_severity: RiskCategory
    detected: bool


class BacktestResult(BaseModel):
    outcomes: List[BacktestOutcome]
    accuracy: float
    precision: float
    recall: float
    f1_score: float
    rmse: float
    r2: float
    confusion_matrix: ConfusionMatrix
    source: Literal["fixture", "engine"] = "engine"


# ---- API payloads ----
class AlertRequest(BaseModel):
    threshold: Optional[int] = None


class SubscriberRequest(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    area: Optional[str] = None
    language: Optional[str] = None

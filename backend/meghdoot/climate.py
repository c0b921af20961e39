# backend/meghdoot/climate.py
"""
Climate scenario projections of rainfall, flood frequency and risk.

Projections scale historical baselines (2014-2024) by the scenario's
rainfall increase, extreme-event multiplier and a 0.5%/year escalation
from 2025. Scenarios are clamped to their documented ranges first.
"""

from functools import lru_cache

from .reference_data import ANNUAL_RAINFALL, HISTORICAL_FLOODS, MONTHLY_RAINFALL_DATA
from .risk_levels import round_half_up, round_int
from .schemas import ClimateProjection, ClimateScenario, MonthlyProjection, PresetScenario

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONSOON_MONTHS = range(4, 9)

BASE_YEAR = 2025
ESCALATION_PER_YEAR = 0.005
MONSOON_EXTREME_SHARE = 0.3
BASE_EXTREME_PROBABILITY = 0.05
MAX_EXTREME_PROBABILITY = 0.95
SEA_LEVEL_MM_PER_YEAR = 3.2


@lru_cache(maxsize=1)
def baseline_metrics():
    years = list(ANNUAL_RAINFALL)
    avg_rainfall = sum(ANNUAL_RAINFALL.values()) / len(years)
    floods_per_year = len(HISTORICAL_FLOODS) / (max(years) - min(years) + 1)

    per_year = list(MONTHLY_RAINFALL_DATA.values())
    monthly_avg = tuple(sum(months[i] for months in per_year) / len(per_year) for i in range(12))

    severe = sum(1 for f in HISTORICAL_FLOODS if f["severity"] == "Severe")
    baseline_risk = severe / len(HISTORICAL_FLOODS) * 100

    return {
        "avg_rainfall": avg_rainfall,
        "floods_per_year": floods_per_year,
        "monthly_avg": monthly_avg,
        "baseline_risk": baseline_risk,
    }


def run_climate_projection(scenario: ClimateScenario) -> ClimateProjection:
    scenario = scenario.clamped()
    baseline = baseline_metrics()

    year_delta = max(0, scenario.projection_year - BASE_YEAR)
    year_factor = 1 + year_delta * ESCALATION_PER_YEAR
    rainfall_multiplier = 1 + scenario.rainfall_increase_pct / 100
    extreme = scenario.extreme_event_multiplier

    projected_rainfall = round_int(baseline["avg_rainfall"] * rainfall_multiplier * year_factor)

    baseline_frequency = baseline["floods_per_year"]
    projected_frequency = baseline_frequency * rainfall_multiplier * extreme * year_factor

    baseline_risk = baseline["baseline_risk"]
    projected_risk = min(100.0, baseline_risk * rainfall_multiplier * extreme * year_factor)
    if baseline_risk > 0:
        escalation = round_int((projected_risk - baseline_risk) / baseline_risk * 100)
    else:
        escalation = 0

    monthly = []
    for i, base_val in enumerate(baseline["monthly_avg"]):
        multiplier = rainfall_multiplier
        if i in MONSOON_MONTHS:
            multiplier *= 1 + (extreme - 1) * MONSOON_EXTREME_SHARE
        monthly.append(MonthlyProjection(
            month=MONTH_NAMES[i],
            baseline=round_int(base_val),
            projected=round_int(base_val * multiplier * year_factor),
        ))

    extreme_probability = min(
        MAX_EXTREME_PROBABILITY,
        BASE_EXTREME_PROBABILITY * extreme * rainfall_multiplier * year_factor,
    )
    sea_level = round_int(year_delta * SEA_LEVEL_MM_PER_YEAR * (scenario.rainfall_increase_pct / 10 + 1))

    return ClimateProjection(
        scenario=scenario,
        baseline_risk=round_half_up(baseline_risk, 1),
        projected_risk=round_half_up(projected_risk, 1),
        risk_escalation_pct=escalation,
        projected_annual_rainfall=projected_rainfall,
        projected_flood_frequency=round_half_up(projected_frequency, 1),
        baseline_flood_frequency=round_half_up(baseline_frequency, 1),
        monthly_projections=monthly,
        extreme_event_probability=round_half_up(extreme_probability, 3),
        sea_level_impact=sea_level,
    )


PRESET_SCENARIOS = (
    PresetScenario(
        name="Optimistic (RCP 2.6)",
        description="Strong emission cuts, limited warming",
        scenario=ClimateScenario(rainfall_increase_pct=5, extreme_event_multiplier=1.2, projection_year=2035),
    ),
    PresetScenario(
        name="Moderate (RCP 4.5)",
        description="Some mitigation, moderate warming",
        scenario=ClimateScenario(rainfall_increase_pct=12, extreme_event_multiplier=1.5, projection_year=2040),
    ),
    PresetScenario(
        name="Pessimistic (RCP 8.5)",
        description="Business as usual, severe warming",
        scenario=ClimateScenario(rainfall_increase_pct=25, extreme_event_multiplier=2.2, projection_year=2050),
    ),
)

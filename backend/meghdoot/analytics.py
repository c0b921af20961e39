# backend/meghdoot/analytics.py
"""
Historical analytics over the 2014-2024 reference record: per-year stats,
decade roll-ups and a recent-vs-older trend comparison.
"""

from typing import Dict, List, Sequence

import pandas as pd

from .reference_data import ANNUAL_RAINFALL, HISTORICAL_FLOODS, MONTHLY_RAINFALL_DATA
from .risk_levels import category_rank, round_int

RECENT_FROM = 2014
OLDER_FROM = 2004


def yearly_stats() -> List[Dict]:
    """One row per year with annual rainfall and that year's flood totals."""
    rows = []
    for year in sorted(ANNUAL_RAINFALL):
        floods = [f for f in HISTORICAL_FLOODS if f["year"] == year]
        worst = max((f["severity"] for f in floods), key=category_rank, default=None)
        rows.append({
            "year": year,
            "annual_rainfall_mm": ANNUAL_RAINFALL[year],
            "flood_events": len(floods),
            "total_affected": sum(f["affected_people"] for f in floods),
            "total_deaths": sum(f["deaths"] for f in floods),
            "max_severity": worst,
        })
    return rows


def decade_analysis(yearly: Sequence[Dict]) -> List[Dict]:
    if not yearly:
        return []
    df = pd.DataFrame(list(yearly))
    df["decade"] = (df["year"] // 10 * 10).astype(str) + "s"
    df["severe"] = (df["max_severity"] == "Severe").astype(int)

    grouped = df.groupby("decade", sort=True).agg(
        total_rainfall=("annual_rainfall_mm", "sum"),
        total_affected=("total_affected", "sum"),
        total_deaths=("total_deaths", "sum"),
        severe_floods=("severe", "sum"),
        total_flood_events=("flood_events", "sum"),
        years_covered=("year", "count"),
    )
    return [
        {
            "decade": decade,
            "avg_rainfall": round_int(row.total_rainfall / row.years_covered),
            "total_affected": int(row.total_affected),
            "total_deaths": int(row.total_deaths),
            "severe_floods": int(row.severe_floods),
            "total_flood_events": int(row.total_flood_events),
            "years_covered": int(row.years_covered),
        }
        for decade, row in grouped.iterrows()
    ]


def _avg(rows: Sequence[Dict], key: str) -> int:
    return round_int(sum(r[key] for r in rows) / len(rows)) if rows else 0


def _change_pct(recent: int, older: int) -> int:
    return round_int((recent - older) / older * 100) if older > 0 else 0


def trend_summary(yearly: Sequence[Dict]) -> Dict[str, int]:
    """Years from 2014 on against 2004-2013; a period with no data counts as 0."""
    recent = [y for y in yearly if y["year"] >= RECENT_FROM]
    older = [y for y in yearly if OLDER_FROM <= y["year"] < RECENT_FROM]

    recent_rain, older_rain = _avg(recent, "annual_rainfall_mm"), _avg(older, "annual_rainfall_mm")
    recent_affected, older_affected = _avg(recent, "total_affected"), _avg(older, "total_affected")
    return {
        "recent_avg_rainfall": recent_rain,
        "older_avg_rainfall": older_rain,
        "rainfall_change_pct": _change_pct(recent_rain, older_rain),
        "recent_avg_affected": recent_affected,
        "older_avg_affected": older_affected,
        "affected_change_pct": _change_pct(recent_affected, older_affected),
    }


def historical_analytics(year_from: int = 1974, year_to: int = 2025) -> Dict:
    yearly = [y for y in yearly_stats() if year_from <= y["year"] <= year_to]
    monthly = [
        {"year": year, "monthly_rainfall_mm": list(months)}
        for year, months in sorted(MONTHLY_RAINFALL_DATA.items())
        if year_from <= year <= year_to
    ]
    floods = sorted(
        (f for f in HISTORICAL_FLOODS if year_from <= f["year"] <= year_to),
        key=lambda f: f["year"],
        reverse=True,
    )
    return {
        "yearly_stats": yearly,
        "monthly_rainfall": monthly,
        "historical_floods": floods,
        "decade_analysis": decade_analysis(yearly),
        "trend": trend_summary(yearly),
        "range": {"from": year_from, "to": year_to},
        "total_records": len(yearly),
    }

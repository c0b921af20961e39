from backend.meghdoot.analytics import decade_analysis, historical_analytics, trend_summary, yearly_stats
from backend.meghdoot.reference_data import ANNUAL_RAINFALL, HISTORICAL_FLOODS


def _year(year, rainfall, affected, severity=None):
    return {
        "year": year, "annual_rainfall_mm": rainfall, "flood_events": 1 if severity else 0,
        "total_affected": affected, "total_deaths": 0, "max_severity": severity,
    }


def test_yearly_stats_cover_every_year():
    rows = yearly_stats()
    assert [r["year"] for r in rows] == sorted(ANNUAL_RAINFALL)
    assert sum(r["flood_events"] for r in rows) == len(HISTORICAL_FLOODS)

    by_year = {r["year"]: r for r in rows}
    assert by_year[2022]["max_severity"] == "Severe"
    assert by_year[2022]["total_affected"] == 9200000
    assert by_year[2021]["max_severity"] == "Warning"


def test_default_range_groups_two_decades():
    body = historical_analytics()
    assert body["range"] == {"from": 1974, "to": 2025}
    assert body["total_records"] == len(ANNUAL_RAINFALL)

    decades = body["decade_analysis"]
    assert [d["decade"] for d in decades] == ["2010s", "2020s"]
    assert [d["years_covered"] for d in decades] == [6, 5]
    assert [d["avg_rainfall"] for d in decades] == [4200, 4519]

    years = [f["year"] for f in body["historical_floods"]]
    assert years == sorted(years, reverse=True)


def test_default_range_has_no_older_period():
    trend = historical_analytics()["trend"]
    assert trend["recent_avg_rainfall"] == 4345
    assert trend["older_avg_rainfall"] == 0
    assert trend["rainfall_change_pct"] == 0
    assert trend["older_avg_affected"] == 0
    assert trend["affected_change_pct"] == 0


def test_trend_compares_recent_with_older():
    rows = [_year(2003, 9000, 9000), _year(2005, 4000, 1000), _year(2015, 5000, 1500)]
    assert trend_summary(rows) == {
        "recent_avg_rainfall": 5000,
        "older_avg_rainfall": 4000,
        "rainfall_change_pct": 25,
        "recent_avg_affected": 1500,
        "older_avg_affected": 1000,
        "affected_change_pct": 50,
    }


def test_decade_counts_severe_years():
    rows = [_year(2001, 3000, 10, "Severe"), _year(2004, 4001, 20, "Warning"), _year(2010, 5000, 5)]
    assert decade_analysis(rows) == [
        {
            "decade": "2000s", "avg_rainfall": 3501, "total_affected": 30, "total_deaths": 0,
            "severe_floods": 1, "total_flood_events": 2, "years_covered": 2,
        },
        {
            "decade": "2010s", "avg_rainfall": 5000, "total_affected": 5, "total_deaths": 0,
            "severe_floods": 0, "total_flood_events": 0, "years_covered": 1,
        },
    ]


def test_empty_range():
    body = historical_analytics(1990, 2000)
    assert body["yearly_stats"] == []
    assert body["monthly_rainfall"] == []
    assert body["historical_floods"] == []
    assert body["decade_analysis"] == []
    assert all(v == 0 for v in body["trend"].values())

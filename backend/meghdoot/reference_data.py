# backend/meghdoot/reference_data.py
"""
Static reference data for Sylhet division.

Sources: Bangladesh Water Development Board (BWDB), Flood Forecasting and
Warning Centre (FFWC), Bangladesh Meteorological Department (BMD) records
for the Sylhet rainfall stations and Surma/Kushiyara/Manu river gauges,
2014-2024.
"""

from typing import Optional

from .schemas import Zone

# ---- Zones (15 administrative sub-areas) ----
_ZONE_ROWS = [
    ("z1", "Sylhet Sadar", "সিলেট সদর", 24.8949, 91.8687, 5, 15, "high", 531663, "Sylhet"),
    ("z2", "Sunamganj", "সুনামগঞ্জ", 25.0658, 91.3950, 8, 8, "high", 264238, "Sunamganj"),
    ("z3", "Companiganj", "কোম্পানীগঞ্জ", 25.0450, 91.7430, 4, 10, "high", 281420, "Sylhet"),
    ("z4", "Gowainghat", "গোয়াইনঘাট", 25.1880, 91.9130, 5, 20, "medium", 329365, "Sylhet"),
    ("z5", "Jaintiapur", "জৈন্তাপুর", 25.1330, 92.0670, 4, 25, "medium", 191410, "Sylhet"),
    ("z6", "Kanaighat", "কানাইঘাট", 25.0130, 92.2410, 4, 12, "high", 290457, "Sylhet"),
    ("z7", "Zakiganj", "জকিগঞ্জ", 24.7550, 92.1690, 4, 11, "high", 309965, "Sylhet"),
    ("z8", "Beanibazar", "বিয়ানীবাজার", 24.7980, 92.1690, 4, 14, "medium", 337437, "Sylhet"),
    ("z9", "Bishwanath", "বিশ্বনাথ", 24.8310, 91.7070, 4, 13, "medium", 321180, "Sylhet"),
    ("z10", "Fenchuganj", "ফেঞ্চুগঞ্জ", 24.7150, 91.9580, 3, 9, "high", 160880, "Sylhet"),
    ("z11", "Balaganj", "বালাগঞ্জ", 24.7060, 91.7510, 4, 10, "high", 399840, "Sylhet"),
    ("z12", "Osmani Nagar", "ওসমানী নগর", 24.7600, 91.8750, 3, 12, "medium", 252340, "Sylhet"),
    ("z13", "South Surma", "দক্ষিণ সুরমা", 24.8500, 91.8900, 4, 11, "high", 310220, "Sylhet"),
    ("z14", "Habiganj Sadar", "হবিগঞ্জ সদর", 24.3750, 91.4170, 5, 14, "medium", 355680, "Habiganj"),
    ("z15", "Moulvibazar Sadar", "মৌলভীবাজার সদর", 24.4820, 91.7720, 4, 18, "medium", 245370, "Moulvibazar"),
]

ZONES = tuple(
    Zone(
        id=zid, name=name, name_bn=name_bn, lat=lat, lng=lng, radius_km=radius,
        elevation_m=elev, vulnerability=vuln, population=pop, district=district,
    )
    for zid, name, name_bn, lat, lng, radius, elev, vuln, pop, district in _ZONE_ROWS
)

_ZONES_BY_ID = {z.id: z for z in ZONES}


def get_zone(zone_id: str) -> Optional[Zone]:
    return _ZONES_BY_ID.get(zone_id)


# ---- Generator seed tables ----
# Monthly average rainfall (mm), Jan..Dec; Sylhet averages ~4200 mm/year
MONTHLY_RAINFALL_AVG = (12, 28, 85, 280, 450, 810, 780, 620, 440, 215, 45, 15)
MONSOON_PEAK_MM = 810

# deviation of each year's rainfall from the long-run average
YEAR_MODIFIERS = {
    2014: 1.12, 2015: 0.82, 2016: 0.95, 2017: 1.18, 2018: 1.05,
    2019: 0.88, 2020: 1.02, 2021: 0.94, 2022: 1.30, 2023: 0.97, 2024: 1.15, 2025: 1.0, 2026: 1.0,
}

# orographic effect per rainfall station; order is part of the seed
STATION_MULTIPLIERS = {
    "Sylhet": 1.0,
    "Sunamganj": 0.85,
    "Companiganj": 1.15,
    "Kanaighat": 1.08,
    "Moulvibazar": 0.78,
}

RIVER_GAUGES = (
    {"river": "Surma", "station": "Sylhet (Kanairghat)", "danger_level": 8.00, "base_level": 3.80},
    {"river": "Surma", "station": "Sunamganj", "danger_level": 6.50, "base_level": 3.20},
    {"river": "Kushiyara", "station": "Sherpur", "danger_level": 7.50, "base_level": 3.50},
    {"river": "Kushiyara", "station": "Fenchuganj", "danger_level": 7.20, "base_level": 3.30},
    {"river": "Manu", "station": "Moulvibazar", "danger_level": 8.50, "base_level": 4.10},
)

# ---- Historical record 2014-2024 ----
HISTORICAL_FLOODS = (
    {"year": 2024, "month": "August", "start_date": "2024-08-19", "end_date": "2024-09-05", "severity": "Severe",
     "max_rainfall_mm": 412, "max_river_level_m": 10.24, "river_above_danger_m": 2.24,
     "affected_people": 4500000, "deaths": 24, "displaced": 1800000, "crop_damage_hectares": 180000,
     "description": "Flash floods from heavy rainfall and upstream water from India's Meghalaya. Surma river crossed danger level by 2.24m at Sylhet station. 11 districts affected.",
     "source": "FFWC/ReliefWeb"},
    {"year": 2024, "month": "June", "start_date": "2024-06-10", "end_date": "2024-06-28", "severity": "Severe",
     "max_rainfall_mm": 385, "max_river_level_m": 9.86, "river_above_danger_m": 1.86,
     "affected_people": 3200000, "deaths": 16, "displaced": 1200000, "crop_damage_hectares": 142000,
     "description": "Unprecedented early monsoon flooding. Sylhet city submerged. Surma crossed danger level by 1.86m. Airport closed for 10 days.",
     "source": "FFWC/DDM"},
    {"year": 2022, "month": "June", "start_date": "2022-06-12", "end_date": "2022-07-10", "severity": "Severe",
     "max_rainfall_mm": 520, "max_river_level_m": 10.68, "river_above_danger_m": 2.68,
     "affected_people": 7200000, "deaths": 41, "displaced": 3500000, "crop_damage_hectares": 220000,
     "description": "Worst flood in 122 years. Sylhet airport submerged. 90% of Sunamganj underwater. Surma at 10.68m (danger: 8.0m). Cherrapunji recorded 972mm in 24hrs.",
     "source": "FFWC/BDMD/ReliefWeb"},
    {"year": 2022, "month": "May", "start_date": "2022-05-15", "end_date": "2022-05-28", "severity": "Warning",
     "max_rainfall_mm": 340, "max_river_level_m": 8.92, "river_above_danger_m": 0.92,
     "affected_people": 2000000, "deaths": 12, "displaced": 800000, "crop_damage_hectares": 95000,
     "description": "Pre-monsoon flash floods devastated Haor areas. Boro rice crop destroyed. Sunamganj worst hit.",
     "source": "FFWC/FAO"},
    {"year": 2021, "month": "July", "start_date": "2021-07-14", "end_date": "2021-07-26", "severity": "Warning",
     "max_rainfall_mm": 295, "max_river_level_m": 8.45, "river_above_danger_m": 0.45,
     "affected_people": 1800000, "deaths": 8, "displaced": 650000, "crop_damage_hectares": 72000,
     "description": "Monsoon flooding in northeastern Bangladesh. Surma crossed danger level at Sylhet.",
     "source": "FFWC"},
    {"year": 2020, "month": "July", "start_date": "2020-07-01", "end_date": "2020-07-18", "severity": "Warning",
     "max_rainfall_mm": 310, "max_river_level_m": 8.72, "river_above_danger_m": 0.72,
     "affected_people": 3100000, "deaths": 15, "displaced": 1100000, "crop_damage_hectares": 115000,
     "description": "Monsoon floods, multiple rivers crossed danger levels simultaneously. Kushiyara at 8.12m.",
     "source": "FFWC/BWDB"},
    {"year": 2019, "month": "July", "start_date": "2019-07-10", "end_date": "2019-07-22", "severity": "Watch",
     "max_rainfall_mm": 245, "max_river_level_m": 8.15, "river_above_danger_m": 0.15,
     "affected_people": 1500000, "deaths": 5, "displaced": 450000, "crop_damage_hectares": 48000,
     "description": "Moderate flooding in low-lying areas of Sunamganj and Sylhet Sadar.",
     "source": "FFWC"},
    {"year": 2019, "month": "April", "start_date": "2019-04-08", "end_date": "2019-04-16", "severity": "Watch",
     "max_rainfall_mm": 220, "max_river_level_m": 7.65, "river_above_danger_m": 0,
     "affected_people": 620000, "deaths": 2, "displaced": 180000, "crop_damage_hectares": 35000,
     "description": "Pre-monsoon flash floods in Haor region. Early season flooding damaged Boro rice.",
     "source": "BWDB"},
    {"year": 2018, "month": "July", "start_date": "2018-07-08", "end_date": "2018-07-24", "severity": "Warning",
     "max_rainfall_mm": 335, "max_river_level_m": 8.82, "river_above_danger_m": 0.82,
     "affected_people": 2800000, "deaths": 11, "displaced": 950000, "crop_damage_hectares": 105000,
     "description": "Heavy monsoon rainfall caused major flooding. Sylhet-Dhaka highway submerged.",
     "source": "FFWC/DDM"},
    {"year": 2018, "month": "April", "start_date": "2018-04-12", "end_date": "2018-04-22", "severity": "Watch",
     "max_rainfall_mm": 210, "max_river_level_m": 7.52, "river_above_danger_m": 0,
     "affected_people": 550000, "deaths": 3, "displaced": 150000, "crop_damage_hectares": 42000,
     "description": "Flash floods in Sylhet haor areas. Sudden heavy rainfall from Meghalaya hills.",
     "source": "BWDB"},
    {"year": 2017, "month": "August", "start_date": "2017-08-10", "end_date": "2017-09-02", "severity": "Severe",
     "max_rainfall_mm": 465, "max_river_level_m": 10.32, "river_above_danger_m": 2.32,
     "affected_people": 6900000, "deaths": 37, "displaced": 2800000, "crop_damage_hectares": 195000,
     "description": "Catastrophic floods across Sylhet division. Surma and Kushiyara both at record levels.",
     "source": "FFWC/BDMD"},
    {"year": 2017, "month": "March", "start_date": "2017-03-28", "end_date": "2017-04-10", "severity": "Warning",
     "max_rainfall_mm": 280, "max_river_level_m": 8.28, "river_above_danger_m": 0.28,
     "affected_people": 850000, "deaths": 6, "displaced": 320000, "crop_damage_hectares": 86000,
     "description": "Unusual pre-monsoon flash floods in Haor region. Destroyed Boro rice crop.",
     "source": "BWDB/FAO"},
    {"year": 2016, "month": "July", "start_date": "2016-07-20", "end_date": "2016-08-05", "severity": "Warning",
     "max_rainfall_mm": 305, "max_river_level_m": 8.55, "river_above_danger_m": 0.55,
     "affected_people": 2200000, "deaths": 9, "displaced": 780000, "crop_damage_hectares": 88000,
     "description": "Monsoon flooding from sustained heavy rainfall. Surma above danger for 12 days.",
     "source": "FFWC"},
    {"year": 2015, "month": "June", "start_date": "2015-06-25", "end_date": "2015-07-08", "severity": "Watch",
     "max_rainfall_mm": 255, "max_river_level_m": 8.22, "river_above_danger_m": 0.22,
     "affected_people": 1400000, "deaths": 4, "displaced": 420000, "crop_damage_hectares": 52000,
     "description": "Moderate monsoon flooding. Kushiyara crossed danger level at Sherpur.",
     "source": "FFWC"},
    {"year": 2014, "month": "September", "start_date": "2014-09-01", "end_date": "2014-09-18", "severity": "Severe",
     "max_rainfall_mm": 395, "max_river_level_m": 9.95, "river_above_danger_m": 1.95,
     "affected_people": 5200000, "deaths": 28, "displaced": 2100000, "crop_damage_hectares": 165000,
     "description": "Late monsoon catastrophic flooding. All major rivers above danger level for 15+ days.",
     "source": "FFWC/BDMD"},
    {"year": 2014, "month": "August", "start_date": "2014-08-15", "end_date": "2014-08-28", "severity": "Warning",
     "max_rainfall_mm": 320, "max_river_level_m": 8.68, "river_above_danger_m": 0.68,
     "affected_people": 2600000, "deaths": 10, "displaced": 880000, "crop_damage_hectares": 92000,
     "description": "Pre-cursor flooding before September catastrophe. Rivers rising steadily.",
     "source": "FFWC"},
)

# Annual rainfall totals (mm), Sylhet station
ANNUAL_RAINFALL = {
    2014: 4704, 2015: 3444, 2016: 3990, 2017: 4956, 2018: 4410,
    2019: 3696, 2020: 4284, 2021: 3948, 2022: 5460, 2023: 4074, 2024: 4830,
}

# Monthly rainfall (mm) per year, Jan..Dec
MONTHLY_RAINFALL_DATA = {
    2014: (8, 22, 72, 245, 425, 890, 850, 720, 520, 230, 52, 18),
    2015: (5, 15, 48, 195, 340, 680, 620, 480, 350, 165, 30, 10),
    2016: (10, 25, 78, 260, 420, 750, 740, 580, 410, 195, 40, 14),
    2017: (15, 35, 120, 330, 510, 920, 890, 710, 480, 245, 55, 20),
    2018: (12, 30, 95, 295, 465, 845, 810, 650, 450, 220, 48, 16),
    2019: (6, 18, 55, 210, 360, 710, 680, 510, 370, 180, 35, 11),
    2020: (9, 24, 80, 270, 440, 790, 770, 610, 430, 210, 42, 15),
    2021: (8, 22, 70, 250, 410, 730, 720, 570, 400, 195, 38, 13),
    2022: (18, 42, 135, 385, 580, 1050, 1010, 810, 560, 280, 65, 24),
    2023: (9, 24, 75, 255, 425, 760, 740, 590, 415, 200, 40, 14),
    2024: (14, 32, 105, 315, 495, 910, 870, 695, 490, 240, 53, 19),
}

# Annual maximum water level (m) per gauge, FFWC
ANNUAL_MAX_RIVER_LEVEL = {
    2014: {"surma_sylhet": 9.95, "kushiyara_sherpur": 8.42, "surma_sunamganj": 7.65},
    2015: {"surma_sylhet": 8.22, "kushiyara_sherpur": 7.58, "surma_sunamganj": 6.78},
    2016: {"surma_sylhet": 8.55, "kushiyara_sherpur": 7.85, "surma_sunamganj": 6.95},
    2017: {"surma_sylhet": 10.32, "kushiyara_sherpur": 8.68, "surma_sunamganj": 7.82},
    2018: {"surma_sylhet": 8.82, "kushiyara_sherpur": 8.12, "surma_sunamganj": 7.15},
    2019: {"surma_sylhet": 8.15, "kushiyara_sherpur": 7.52, "surma_sunamganj": 6.72},
    2020: {"surma_sylhet": 8.72, "kushiyara_sherpur": 8.12, "surma_sunamganj": 7.08},
    2021: {"surma_sylhet": 8.45, "kushiyara_sherpur": 7.78, "surma_sunamganj": 6.88},
    2022: {"surma_sylhet": 10.68, "kushiyara_sherpur": 8.95, "surma_sunamganj": 8.12},
    2023: {"surma_sylhet": 8.35, "kushiyara_sherpur": 7.65, "surma_sunamganj": 6.82},
    2024: {"surma_sylhet": 10.24, "kushiyara_sherpur": 8.52, "surma_sunamganj": 7.55},
}

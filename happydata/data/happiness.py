# happydata/data/happiness.py
from __future__ import annotations

from typing import Dict, List, Tuple

# World Happiness Report life-evaluation scores, keyed by ISO3 code.
# Curated subset; a missing country or year means "no score", not zero.
HAPPINESS_SCORES: Dict[str, List[Tuple[int, float]]] = {
    # Europe & Central Asia
    "FIN": [(2018, 7.63), (2019, 7.77), (2020, 7.81), (2021, 7.84), (2022, 7.82)],
    "DNK": [(2018, 7.56), (2019, 7.65), (2020, 7.65), (2021, 7.62), (2022, 7.64)],
    "ISL": [(2018, 7.50), (2019, 7.50), (2020, 7.50), (2021, 7.55), (2022, 7.56)],
    "CHE": [(2018, 7.49), (2019, 7.51), (2020, 7.56), (2021, 7.57), (2022, 7.51)],
    "NLD": [(2018, 7.44), (2019, 7.45), (2020, 7.45), (2021, 7.46), (2022, 7.42)],
    "DEU": [(2018, 6.96), (2019, 7.04), (2020, 7.10), (2021, 7.16), (2022, 6.89)],
    "GBR": [(2018, 7.19), (2019, 7.16), (2020, 7.06), (2021, 7.08), (2022, 6.94)],
    "FRA": [(2018, 6.49), (2019, 6.66), (2020, 6.69), (2021, 6.69), (2022, 6.66)],
    "ITA": [(2018, 6.00), (2019, 6.22), (2020, 6.38), (2021, 6.48), (2022, 6.47)],

    # South Asia
    "IND": [(2018, 4.19), (2019, 4.01), (2020, 3.57), (2021, 3.82), (2022, 4.04)],

    # North America
    "USA": [(2018, 6.89), (2019, 6.94), (2020, 6.95), (2021, 6.98), (2022, 6.98)],
    "CAN": [(2018, 7.33), (2019, 7.28), (2020, 7.10), (2021, 7.03), (2022, 7.10)],
    "MEX": [(2018, 6.49), (2019, 6.60), (2020, 6.32), (2021, 5.99), (2022, 6.32)],

    # East Asia & Pacific
    "CHN": [(2018, 5.25), (2019, 5.12), (2020, 5.59), (2021, 5.34), (2022, 5.59)],
    "JPN": [(2018, 5.92), (2019, 5.89), (2020, 5.94), (2021, 6.04), (2022, 6.13)],
    "AUS": [(2018, 7.27), (2019, 7.23), (2020, 7.18), (2021, 7.16), (2022, 7.09)],
    "KOR": [(2018, 5.88), (2019, 5.89), (2020, 5.85), (2021, 5.94), (2022, 5.95)],
    "NZL": [(2018, 7.32), (2019, 7.30), (2020, 7.28), (2021, 7.20), (2022, 7.12)],
    "SGP": [(2018, 6.34), (2019, 6.26), (2020, 6.38), (2021, 6.48), (2022, 6.59)],
    "MYS": [(2018, 6.32), (2019, 6.22), (2020, 6.08), (2021, 5.71), (2022, 6.00)],
    "THA": [(2018, 6.07), (2019, 6.02), (2020, 5.90), (2021, 5.89), (2022, 6.10)],
    "IDN": [(2018, 5.09), (2019, 5.19), (2020, 5.28), (2021, 5.34), (2022, 5.24)],
    "PHL": [(2018, 5.66), (2019, 5.63), (2020, 6.01), (2021, 5.90), (2022, 5.57)],
    "VNM": [(2018, 5.10), (2019, 5.30), (2020, 5.48), (2021, 5.41), (2022, 6.50)],
    "MNG": [(2018, 5.79), (2019, 5.79), (2020, 5.68), (2021, 5.76), (2022, 5.76)],
    "KHM": [(2018, 4.70), (2019, 4.85), (2020, 4.85), (2021, 4.84), (2022, 5.12)],
    "MMR": [(2018, 4.39), (2019, 4.36), (2020, 4.31), (2021, 4.43), (2022, 4.38)],
    "LAO": [(2018, 4.89), (2019, 4.79), (2020, 5.03), (2021, 5.03), (2022, 4.90)],
    "FJI": [(2018, 6.16), (2019, 6.16), (2020, 6.32), (2021, 5.74), (2022, 5.74)],
    "PNG": [(2018, 4.62), (2019, 4.62), (2020, 4.62), (2021, 4.80), (2022, 4.80)],
    "SLB": [(2018, 4.88), (2019, 4.88), (2020, 4.88), (2021, 5.06), (2022, 5.06)],
    "VUT": [(2018, 5.20), (2019, 5.20), (2020, 5.20), (2021, 5.12), (2022, 5.12)],
    "WSM": [(2018, 6.02), (2019, 6.02), (2020, 6.02), (2021, 5.98), (2022, 5.98)],
    "TON": [(2018, 5.70), (2019, 5.70), (2020, 5.70), (2021, 5.62), (2022, 5.62)],
    "TLS": [(2018, 5.30), (2019, 5.30), (2020, 5.30), (2021, 5.13), (2022, 5.13)],
    "FSM": [(2018, 5.5), (2019, 5.5), (2020, 5.5), (2021, 5.4), (2022, 5.4)],
    "MHL": [(2018, 5.6), (2019, 5.6), (2020, 5.6), (2021, 5.7), (2022, 5.7)],
    "TUV": [(2018, 5.8), (2019, 5.8), (2020, 5.8), (2021, 5.9), (2022, 5.9)],
    "KIR": [(2018, 4.4), (2019, 4.4), (2020, 4.4), (2021, 4.3), (2022, 4.3)],

    # Latin America & Caribbean
    "BRA": [(2018, 6.38), (2019, 6.30), (2020, 6.11), (2021, 6.33), (2022, 6.29)],

    # Sub-Saharan Africa
    "NGA": [(2018, 4.80), (2019, 4.76), (2020, 4.72), (2021, 4.75), (2022, 4.90)],
    "ZAF": [(2018, 5.10), (2019, 5.24), (2020, 4.96), (2021, 5.18), (2022, 5.28)],

    # Middle East & North Africa
    "ARE": [(2018, 6.60), (2019, 6.83), (2020, 6.58), (2021, 6.56), (2022, 6.74)],
    "SAU": [(2018, 6.38), (2019, 6.41), (2020, 6.50), (2021, 6.49), (2022, 6.51)],
}

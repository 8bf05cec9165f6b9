# happydata/services/catalog.py — selector catalogs + the config bundle passed to services
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from happydata.data.happiness import HAPPINESS_SCORES

HAPPINESS_INDICATOR_ID = "WHR_HAPPINESS_SCORE"
HAPPINESS_LABEL = "Happiness Score"

# Number of years offered by the region-view year selector
YEAR_WINDOW = 25


@dataclass(frozen=True)
class Indicator:
    id: str
    name: str


@dataclass(frozen=True)
class Region:
    code: str
    name: str


# Stable World Bank indicator codes offered by the dashboard
PREDEFINED_INDICATORS: Tuple[Indicator, ...] = (
    Indicator("SP.POP.TOTL", "Population, total"),
    Indicator("NY.GDP.PCAP.CD", "GDP per capita (current US$)"),
    Indicator("SP.DYN.LE00.IN", "Life expectancy at birth, total (years)"),
    Indicator("SE.PRM.ENRR", "School enrollment, primary (% gross)"),
    Indicator("SH.H2O.BASW.ZS", "People using basic drinking water services (% of population)"),
    Indicator("EG.USE.ELEC.KH.PC", "Electric power consumption (kWh per capita)"),
)

# Current World Bank region codes (the older EAS/ECS style codes are rejected by the API)
PREDEFINED_REGIONS: Tuple[Region, ...] = (
    Region("SSF", "Sub-Saharan Africa"),
    Region("EAP", "East Asia & Pacific"),
    Region("ECA", "Europe & Central Asia"),
    Region("LCR", "Latin America & Caribbean"),
    Region("MNA", "Middle East & North Africa"),
    Region("NAC", "North America"),
    Region("SAS", "South Asia"),
)


def _freeze_scores(
    scores: Mapping[str, Sequence[Tuple[int, float]]],
) -> Mapping[str, Tuple[Tuple[int, float], ...]]:
    return MappingProxyType({k: tuple((int(y), float(s)) for y, s in v) for k, v in scores.items()})


@dataclass(frozen=True)
class DashboardConfig:
    """
    Static tables and default selections for one dashboard instance.

    Services and reconcilers receive this explicitly instead of reading module
    globals, so tests can build a config with a handful of rows.
    """

    indicators: Sequence[Indicator] = PREDEFINED_INDICATORS
    regions: Sequence[Region] = PREDEFINED_REGIONS
    happiness: Mapping[str, Sequence[Tuple[int, float]]] = field(default_factory=lambda: HAPPINESS_SCORES)
    default_country: str = "USA"
    default_indicator: str = "NY.GDP.PCAP.CD"
    default_region: str = "ECA"
    start_year: str = "2000"
    end_year: str = "2023"

    def __post_init__(self) -> None:
        # private read-only copy; configs never share the module table
        object.__setattr__(self, "happiness", _freeze_scores(self.happiness))

    def indicator_name(self, indicator_id: str) -> Optional[str]:
        for ind in self.indicators:
            if ind.id == indicator_id:
                return ind.name
        return None

    def region_name(self, region_code: str) -> Optional[str]:
        for reg in self.regions:
            if reg.code == region_code:
                return reg.name
        return None

    def happiness_for(self, entity_id: str) -> Sequence[Tuple[int, float]]:
        return self.happiness.get(entity_id) or ()


def default_config() -> DashboardConfig:
    return DashboardConfig()


def year_options(today: Optional[date] = None, window: int = YEAR_WINDOW) -> List[str]:
    """The `window` years before the current one, newest first."""
    today = today or date.today()
    return [str(today.year - i - 1) for i in range(window)]


def default_year(today: Optional[date] = None) -> str:
    # latest complete year is usually still sparse in WDI; default one further back
    return year_options(today)[1]


def options_payload(config: DashboardConfig, today: Optional[date] = None) -> Dict[str, object]:
    return {
        "indicators": [{"value": i.id, "label": i.name} for i in config.indicators],
        "regions": [{"value": r.code, "label": r.name} for r in config.regions],
        "years": [{"value": y, "label": y} for y in year_options(today)],
        "defaults": {
            "country": config.default_country,
            "indicator": config.default_indicator,
            "region": config.default_region,
            "year": default_year(today),
            "start": config.start_year,
            "end": config.end_year,
        },
        "secondary": {"id": HAPPINESS_INDICATOR_ID, "label": HAPPINESS_LABEL},
    }

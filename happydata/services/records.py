# happydata/services/records.py — typed records shared by provider, reconciler and routes
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

# World Bank marks regions/income groups/etc. with this region iso2code
AGGREGATE_REGION_ISO2 = "NA"


@dataclass(frozen=True)
class Entity:
    id: str
    name: str
    iso2_code: str = ""
    region_id: str = ""
    region_iso2: str = ""

    @property
    def is_aggregate(self) -> bool:
        return self.region_iso2 == AGGREGATE_REGION_ISO2


@dataclass(frozen=True)
class Observation:
    entity_id: str
    year: str
    value: Optional[float]


@dataclass(frozen=True)
class SeriesRow:
    """One year of the country view: indicator value and happiness score, each optional."""

    year: str
    value: Optional[float] = None
    happiness_score: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SnapshotRow:
    """One country of the region view for a fixed year."""

    country: str
    indicator_value: Optional[float] = None
    happiness_score: Optional[float] = None

    @property
    def has_data(self) -> bool:
        return self.indicator_value is not None or self.happiness_score is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, List, Optional

import pytest

from happydata.services.catalog import DashboardConfig, Indicator, Region
from happydata.services.records import Entity, Observation


class FakeSource:
    """Stands in for WorldBankClient; records calls and can be told to fail."""

    def __init__(
        self,
        countries: Optional[List[Entity]] = None,
        series: Optional[List[Observation]] = None,
        region_countries: Optional[Dict[str, List[Entity]]] = None,
        region_observations: Optional[List[Observation]] = None,
        fail_with: Optional[Exception] = None,
    ):
        self.countries = countries or []
        self.series = series or []
        self.region_countries = region_countries or {}
        self.region_observations = region_observations or []
        self.fail_with = fail_with
        self.calls: List[tuple] = []

    async def aclose(self):
        self.calls.append(("aclose",))

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def fetch_countries(self):
        self.calls.append(("countries",))
        self._maybe_fail()
        return [c for c in self.countries if not c.is_aggregate]

    async def fetch_countries_for_region(self, region_code):
        self.calls.append(("region_countries", region_code))
        self._maybe_fail()
        return list(self.region_countries.get(region_code, []))

    async def fetch_indicator_for_country(self, iso3, indicator, start="2000", end="2023"):
        self.calls.append(("series", iso3, indicator, start, end))
        self._maybe_fail()
        return list(self.series)

    async def fetch_indicator_for_region(self, region_code, indicator, year):
        self.calls.append(("region_series", region_code, indicator, year))
        self._maybe_fail()
        return list(self.region_observations)


@pytest.fixture
def small_config() -> DashboardConfig:
    return DashboardConfig(
        indicators=(Indicator("NY.GDP.PCAP.CD", "GDP per capita (current US$)"),),
        regions=(Region("NAC", "North America"),),
        happiness={
            "USA": [(2018, 6.89), (2019, 6.94)],
            "CAN": [(2018, 7.33), (2019, 7.28)],
        },
    )


@pytest.fixture
def north_america() -> List[Entity]:
    return [
        Entity(id="USA", name="United States", iso2_code="US", region_id="NAC", region_iso2="XU"),
        Entity(id="CAN", name="Canada", iso2_code="CA", region_id="NAC", region_iso2="XU"),
        Entity(id="BMU", name="Bermuda", iso2_code="BM", region_id="NAC", region_iso2="XU"),
        Entity(id="NAC", name="North America", iso2_code="XU", region_id="NA", region_iso2="NA"),
    ]

# happydata/services/dashboard_service.py — country & region view payloads
from __future__ import annotations

from typing import Any, Dict, List, Optional
import asyncio
import logging

from happydata.providers.wb_provider import WorldBankClient, WorldBankError
from happydata.services.catalog import HAPPINESS_LABEL, DashboardConfig
from happydata.services.reconcile import reconcile_entity_series, reconcile_entity_snapshot

logger = logging.getLogger("happydata.dashboard")


class DashboardError(Exception):
    """A failed view build, carrying the message shown to the user."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _require_indicator(config: DashboardConfig, indicator_id: str) -> str:
    name = config.indicator_name(indicator_id)
    if name is None:
        raise DashboardError(f"Unknown indicator: {indicator_id}", status_code=400)
    return name


# -----------------------------------------------------------------------------
# country selector
# -----------------------------------------------------------------------------

async def list_countries(source: WorldBankClient) -> List[Dict[str, str]]:
    try:
        countries = await source.fetch_countries()
    except WorldBankError as e:
        logger.error("country directory fetch failed: %s", e)
        raise DashboardError("Failed to fetch list of countries. Please try again later.") from e
    return [{"value": c.id, "label": c.name} for c in countries]


# -----------------------------------------------------------------------------
# country view
# -----------------------------------------------------------------------------

async def build_country_view(
    source: WorldBankClient,
    config: DashboardConfig,
    country_id: str,
    indicator_id: str,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Indicator trend for one country merged with its happiness scores.

    The directory fetch only supplies the display name; both requests are in
    flight together and either failing aborts the view.
    """
    indicator_name = _require_indicator(config, indicator_id)
    start = start or config.start_year
    end = end or config.end_year

    countries, observations = await asyncio.gather(
        source.fetch_countries(),
        source.fetch_indicator_for_country(country_id, indicator_id, start, end),
        return_exceptions=True,
    )
    # series failure wins when both fail; anything but a WB error propagates
    if isinstance(observations, BaseException):
        if not isinstance(observations, WorldBankError):
            raise observations
        logger.error("country view %s/%s: indicator series fetch failed: %s", country_id, indicator_id, observations)
        raise DashboardError(
            f"Failed to fetch data for {indicator_id}. Please try a different indicator or country."
        ) from observations
    if isinstance(countries, BaseException):
        if not isinstance(countries, WorldBankError):
            raise countries
        logger.error("country view %s/%s: country directory fetch failed: %s", country_id, indicator_id, countries)
        raise DashboardError("Failed to fetch list of countries. Please try again later.") from countries

    country_name = next((c.name for c in countries if c.id == country_id), "")
    rows = reconcile_entity_series(observations, config.happiness_for(country_id))

    return {
        "country": country_id,
        "country_name": country_name,
        "indicator": indicator_id,
        "indicator_name": indicator_name,
        "start": start,
        "end": end,
        "title": f"{indicator_name} Trend in {country_name}",
        "comparison_title": f"Indicator vs. Happiness in {country_name}",
        "secondary_label": HAPPINESS_LABEL,
        "rows": [r.to_dict() for r in rows],
        "empty": not rows,
    }


# -----------------------------------------------------------------------------
# region view
# -----------------------------------------------------------------------------

async def build_region_view(
    source: WorldBankClient,
    config: DashboardConfig,
    region_code: str,
    indicator_id: str,
    year: str,
) -> Dict[str, Any]:
    """All countries of a region for one year, highest indicator value first."""
    indicator_name = _require_indicator(config, indicator_id)
    region_name = config.region_name(region_code)
    if region_name is None:
        raise DashboardError(f"Unknown region: {region_code}", status_code=400)

    try:
        observations, entities = await asyncio.gather(
            source.fetch_indicator_for_region(region_code, indicator_id, year),
            source.fetch_countries_for_region(region_code),
        )
    except WorldBankError as e:
        logger.error("region view %s/%s/%s failed: %s", region_code, indicator_id, year, e)
        raise DashboardError("Failed to fetch regional data. Please try again.") from e

    logger.debug("region view %s/%s/%s: %d raw observations", region_code, indicator_id, year, len(observations))
    rows = reconcile_entity_snapshot(entities, observations, config.happiness, year)

    return {
        "region": region_code,
        "region_name": region_name,
        "indicator": indicator_id,
        "indicator_name": indicator_name,
        "year": year,
        "title": f"Indicator vs. Happiness in {region_name} ({year})",
        "secondary_label": HAPPINESS_LABEL,
        "rows": [r.to_dict() for r in rows],
        "empty": not rows,
    }

# happydata/routes/dashboard.py — selector options + country/region view endpoints
from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from happydata.providers.wb_provider import WorldBankClient
from happydata.services.catalog import DashboardConfig, default_config, default_year, options_payload
from happydata.services.dashboard_service import (
    DashboardError,
    build_country_view,
    build_region_view,
    list_countries,
)
from happydata.utils.country_codes import resolve_country_id

logger = logging.getLogger("happydata.routes")

router = APIRouter(prefix="/v1", tags=["dashboard"])

_YEAR = r"^\d{4}$"

# -----------------------------------------------------------------------------
# dependencies (overridden in tests)
# -----------------------------------------------------------------------------

_SOURCE: Optional[WorldBankClient] = None
_CONFIG: Optional[DashboardConfig] = None


def get_source() -> WorldBankClient:
    global _SOURCE
    if _SOURCE is None:
        _SOURCE = WorldBankClient()
    return _SOURCE


def get_config() -> DashboardConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = default_config()
    return _CONFIG


async def close_source() -> None:
    global _SOURCE
    if _SOURCE is not None:
        await _SOURCE.aclose()
        _SOURCE = None


def _error(e: DashboardError) -> JSONResponse:
    return JSONResponse(status_code=e.status_code, content={"error": e.message})


# -----------------------------------------------------------------------------
# routes
# -----------------------------------------------------------------------------

@router.get("/options", summary="Selector options")
def options(config: DashboardConfig = Depends(get_config)) -> Dict[str, Any]:
    return options_payload(config)


@router.get("/countries", summary="Country selector")
async def countries(source: WorldBankClient = Depends(get_source)):
    try:
        return {"countries": await list_countries(source)}
    except DashboardError as e:
        return _error(e)


@router.get("/country-view", summary="Indicator vs. happiness for one country")
async def country_view(
    country: Optional[str] = Query(None, description="ISO3 code or country name, e.g. USA or Sweden"),
    indicator: Optional[str] = Query(None, description="World Bank indicator code"),
    start: Optional[str] = Query(None, pattern=_YEAR),
    end: Optional[str] = Query(None, pattern=_YEAR),
    source: WorldBankClient = Depends(get_source),
    config: DashboardConfig = Depends(get_config),
):
    raw_country = country or config.default_country
    country_id = resolve_country_id(raw_country)
    if country_id is None:
        return JSONResponse(status_code=400, content={"error": "Invalid country name"})

    try:
        return await build_country_view(
            source,
            config,
            country_id,
            indicator or config.default_indicator,
            start=start,
            end=end,
        )
    except DashboardError as e:
        return _error(e)


@router.get("/region-view", summary="Indicator vs. happiness across a region")
async def region_view(
    region: Optional[str] = Query(None, description="World Bank region code, e.g. ECA"),
    indicator: Optional[str] = Query(None, description="World Bank indicator code"),
    year: Optional[str] = Query(None, pattern=_YEAR),
    source: WorldBankClient = Depends(get_source),
    config: DashboardConfig = Depends(get_config),
):
    try:
        return await build_region_view(
            source,
            config,
            region or config.default_region,
            indicator or config.default_indicator,
            year or default_year(),
        )
    except DashboardError as e:
        return _error(e)

# happydata/providers/wb_provider.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence
import asyncio
import logging
import math
import os

import httpx

from happydata.services.catalog import Region
from happydata.services.records import Entity, Observation

logger = logging.getLogger("happydata.wb")

# -------------------------------------------------------------------
# CONFIG
# -------------------------------------------------------------------
WB_BASE = os.getenv("WB_BASE", "https://api.worldbank.org/v2")
WB_TIMEOUT = float(os.getenv("WB_TIMEOUT", "10.0"))
WB_DEBUG = os.getenv("WB_DEBUG", "0") == "1"

# One page per request; a truncated page is not detected
WB_DIRECTORY_PER_PAGE = int(os.getenv("WB_DIRECTORY_PER_PAGE", "300"))
WB_SERIES_PER_PAGE = int(os.getenv("WB_SERIES_PER_PAGE", "100"))
WB_REGION_PER_PAGE = int(os.getenv("WB_REGION_PER_PAGE", "500"))

# Max country codes per request, keeps the URL short enough for the API
WB_CHUNK_SIZE = int(os.getenv("WB_CHUNK_SIZE", "30"))


# -------------------------------------------------------------------
# ERRORS
# -------------------------------------------------------------------
class WorldBankError(RuntimeError):
    """Base class for failures talking to the World Bank API."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class WorldBankTransportError(WorldBankError):
    """Network error or non-2xx status."""


class WorldBankShapeError(WorldBankError):
    """Body is not the `[metadata, data]` pair the API normally returns."""


# -------------------------------------------------------------------
# HTTP CLIENT
# -------------------------------------------------------------------
def _timeout() -> httpx.Timeout:
    return httpx.Timeout(
        timeout=WB_TIMEOUT,
        connect=min(3.0, WB_TIMEOUT),
        read=WB_TIMEOUT,
        write=min(3.0, WB_TIMEOUT),
        pool=min(3.0, WB_TIMEOUT),
    )


def make_http_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=_timeout(),
        headers={"Accept": "application/json", "User-Agent": "happydata/1.0"},
        follow_redirects=True,
        transport=transport,
    )


def chunked(ids: Sequence[str], size: int = WB_CHUNK_SIZE) -> List[List[str]]:
    """Split `ids` into consecutive batches of at most `size`."""
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return [list(ids[i:i + size]) for i in range(0, len(ids), size)]


def unwrap_payload(data: Any, url: str = "") -> List[Dict[str, Any]]:
    """
    WB returns: [ {metadata}, [data...] ]
    A lone metadata element (or an error message) means "no results".
    """
    if not isinstance(data, list):
        raise WorldBankShapeError("Invalid API response format", url=url)
    if len(data) <= 1:
        return []
    rows = data[1]
    if rows is None:
        return []
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise WorldBankShapeError("Invalid API response format", url=url)
    return rows


# -------------------------------------------------------------------
# NORMALIZATION
# -------------------------------------------------------------------
def _to_float(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def entity_from_raw(raw: Dict[str, Any]) -> Entity:
    region = raw.get("region")
    if not isinstance(region, dict):
        region = {}
    return Entity(
        id=str(raw.get("id") or ""),
        name=str(raw.get("name") or ""),
        iso2_code=str(raw.get("iso2Code") or ""),
        region_id=str(region.get("id") or ""),
        region_iso2=str(region.get("iso2code") or ""),
    )


def observation_from_raw(raw: Dict[str, Any]) -> Observation:
    country = raw.get("country")
    if not isinstance(country, dict):
        country = {}
    return Observation(
        entity_id=str(raw.get("countryiso3code") or country.get("id") or ""),
        year=str(raw.get("date") or ""),
        value=_to_float(raw.get("value")),
    )


def region_from_raw(raw: Dict[str, Any]) -> Region:
    return Region(code=str(raw.get("code") or raw.get("id") or ""), name=str(raw.get("name") or ""))


# -------------------------------------------------------------------
# CLIENT
# -------------------------------------------------------------------
class WorldBankClient:
    """Async access to the WDI country, region and indicator endpoints."""

    def __init__(
        self,
        http: Optional[httpx.AsyncClient] = None,
        base_url: str = WB_BASE,
        chunk_size: int = WB_CHUNK_SIZE,
    ) -> None:
        self._http = http or make_http_client()
        self.base_url = base_url.rstrip("/")
        self.chunk_size = chunk_size

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get_rows(self, path: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {"format": "json", **params}
        if WB_DEBUG:
            logger.debug("[WB] GET %s %s", url, query)
        try:
            r = await self._http.get(url, params=query)
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise WorldBankTransportError(f"API call failed: {e}", url=url) from e
        try:
            data = r.json()
        except ValueError as e:
            raise WorldBankShapeError("Invalid API response format", url=url) from e
        return unwrap_payload(data, url=url)

    # --- directory ---------------------------------------------------

    async def fetch_countries(self) -> List[Entity]:
        rows = await self._get_rows("country", {"per_page": WB_DIRECTORY_PER_PAGE})
        entities = [entity_from_raw(r) for r in rows]
        return [e for e in entities if not e.is_aggregate]

    async def fetch_countries_for_region(self, region_code: str) -> List[Entity]:
        rows = await self._get_rows("country", {"region": region_code, "per_page": WB_DIRECTORY_PER_PAGE})
        return [entity_from_raw(r) for r in rows]

    async def fetch_regions(self) -> List[Region]:
        rows = await self._get_rows("region", {})
        return [region_from_raw(r) for r in rows]

    # --- indicators --------------------------------------------------

    async def fetch_indicator_for_country(
        self,
        iso3: str,
        indicator: str,
        start: str = "2000",
        end: str = "2023",
    ) -> List[Observation]:
        rows = await self._get_rows(
            f"country/{iso3}/indicator/{indicator}",
            {"per_page": WB_SERIES_PER_PAGE, "date": f"{start}:{end}"},
        )
        return [observation_from_raw(r) for r in rows]

    async def fetch_indicator_for_countries(
        self,
        ids: Iterable[str],
        indicator: str,
        date: str,
    ) -> List[Observation]:
        """
        One request per batch of country codes, all in flight together.
        Results are concatenated in batch order; any failed batch fails the call.
        """
        batches = chunked(list(ids), self.chunk_size)
        if not batches:
            return []

        async def _one(batch: List[str]) -> List[Dict[str, Any]]:
            return await self._get_rows(
                f"country/{';'.join(batch)}/indicator/{indicator}",
                {"per_page": WB_REGION_PER_PAGE, "date": date},
            )

        try:
            results = await asyncio.gather(*(_one(b) for b in batches))
        except WorldBankError as e:
            logger.error("one or more chunked requests failed for %s (%d batches): %s", indicator, len(batches), e)
            raise

        combined: List[Observation] = []
        for rows in results:
            combined.extend(observation_from_raw(r) for r in rows)
        return combined

    async def fetch_indicator_for_region(self, region_code: str, indicator: str, year: str) -> List[Observation]:
        countries = await self.fetch_countries_for_region(region_code)
        if not countries:
            return []
        return await self.fetch_indicator_for_countries([c.id for c in countries], indicator, year)


__all__ = [
    "WB_BASE",
    "WB_CHUNK_SIZE",
    "WorldBankClient",
    "WorldBankError",
    "WorldBankShapeError",
    "WorldBankTransportError",
    "chunked",
    "entity_from_raw",
    "make_http_client",
    "observation_from_raw",
    "region_from_raw",
    "unwrap_payload",
]

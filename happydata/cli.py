"""
Command-line dashboard for HappyData.

Loads the country or region view through a ViewController, the same way an
interactive front end would, and prints the chart rows as a table.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, List, Optional

from happydata.providers.wb_provider import WorldBankClient
from happydata.services.catalog import HAPPINESS_LABEL, DashboardConfig, default_config, default_year
from happydata.services.dashboard_service import build_country_view, build_region_view
from happydata.services.view_state import ViewController, ViewState
from happydata.utils.country_codes import resolve_country_id


class DashboardDriver:
    """
    Turns selections into view loads. A new selection for a view supersedes
    any load still in flight for it; the older result is dropped on arrival.
    """

    def __init__(
        self,
        source: WorldBankClient,
        config: Optional[DashboardConfig] = None,
        controller: Optional[ViewController] = None,
    ) -> None:
        self.source = source
        self.config = config or default_config()
        self.controller = controller or ViewController()

    def select_country(
        self,
        country_id: str,
        indicator_id: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> "asyncio.Task[bool]":
        indicator_id = indicator_id or self.config.default_indicator
        return asyncio.ensure_future(
            self.controller.load(
                "country",
                lambda: build_country_view(self.source, self.config, country_id, indicator_id, start, end),
            )
        )

    def select_region(
        self,
        region_code: str,
        indicator_id: Optional[str] = None,
        year: Optional[str] = None,
    ) -> "asyncio.Task[bool]":
        indicator_id = indicator_id or self.config.default_indicator
        year = year or default_year()
        return asyncio.ensure_future(
            self.controller.load(
                "region",
                lambda: build_region_view(self.source, self.config, region_code, indicator_id, year),
            )
        )

    def state(self, view: str) -> ViewState:
        return self.controller.state(view)


# -----------------------------------------------------------------------------
# output
# -----------------------------------------------------------------------------

def _fmt(v: Any) -> str:
    if v is None:
        return "-"
    if isinstance(v, float):
        return f"{v:,.2f}"
    return str(v)


def render(state: ViewState, label_key: str, value_key: str) -> List[str]:
    payload = state.payload
    lines = [payload.get("title", ""), ""]
    header = (label_key.capitalize(), payload.get("indicator_name", ""), HAPPINESS_LABEL)
    lines.append(f"{header[0]:<28} {header[1][:32]:>32} {header[2]:>16}")
    for row in state.rows:
        lines.append(f"{_fmt(row[label_key]):<28} {_fmt(row[value_key]):>32} {_fmt(row['happiness_score']):>16}")
    if not state.rows:
        lines.append("No data available for the selected criteria.")
    return lines


# -----------------------------------------------------------------------------
# commands
# -----------------------------------------------------------------------------

async def _run(args: argparse.Namespace) -> int:
    source = WorldBankClient()
    try:
        driver = DashboardDriver(source)
        if args.command == "country":
            country_id = resolve_country_id(args.country)
            if country_id is None:
                print(f"Error: unknown country {args.country!r}", file=sys.stderr)
                return 2
            await driver.select_country(country_id, args.indicator, args.start, args.end)
            view, label_key, value_key = "country", "year", "value"
        else:
            await driver.select_region(args.region.upper(), args.indicator, args.year)
            view, label_key, value_key = "region", "country", "indicator_value"
    finally:
        await source.aclose()

    state = driver.state(view)
    if state.error:
        print(f"Error: {state.error}", file=sys.stderr)
        return 1
    print("\n".join(render(state, label_key, value_key)))
    return 0


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="happydata",
        description="World Bank indicators alongside happiness scores",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    country_parser = subparsers.add_parser("country", help="Indicator trend for one country")
    country_parser.add_argument("country", help="ISO3 code or country name")
    country_parser.add_argument("--indicator", help="World Bank indicator code")
    country_parser.add_argument("--start", help="First year (default 2000)")
    country_parser.add_argument("--end", help="Last year (default 2023)")

    region_parser = subparsers.add_parser("region", help="All countries of a region for one year")
    region_parser.add_argument("region", help="World Bank region code, e.g. ECA")
    region_parser.add_argument("--indicator", help="World Bank indicator code")
    region_parser.add_argument("--year", help="Year (default: the year before last)")

    args = parser.parse_args(argv)
    level = "DEBUG" if args.verbose else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING))

    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())

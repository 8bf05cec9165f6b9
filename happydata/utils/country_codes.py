# happydata/utils/country_codes.py
from __future__ import annotations
from typing import Dict, Optional
import re

import pycountry

# Names and shorthands pycountry does not resolve, or resolves differently
# from the World Bank directory. Extend as needed.
_ALIASES: Dict[str, str] = {
    "usa":                 "USA",
    "us":                  "USA",
    "u.s.":                "USA",
    "u.s.a.":              "USA",
    "america":             "USA",
    "uk":                  "GBR",
    "u.k.":                "GBR",
    "britain":             "GBR",
    "great britain":       "GBR",
    "south korea":         "KOR",
    "korea":               "KOR",
    "russia":              "RUS",
    "turkey":              "TUR",
    "vietnam":             "VNM",
    "laos":                "LAO",
    "micronesia":          "FSM",
    "uae":                 "ARE",
}

_ISO3_RE = re.compile(r"^[A-Za-z]{3}$")


def _norm(text: str) -> str:
    t = re.sub(r"[\u200b\s]+", " ", (text or "")).strip().lower()
    return t.replace("’", "'")


def resolve_country_id(country: str) -> Optional[str]:
    """
    Map user input (ISO3 code, ISO2 code or country name) to the ISO3 code the
    World Bank uses as country id. Returns None when nothing matches.
    """
    if not country or not country.strip():
        return None

    key = _norm(country)
    if key in _ALIASES:
        return _ALIASES[key]

    # already a code: keep it even when pycountry does not know it (WB has
    # a few non-ISO ids such as XKX for Kosovo)
    if _ISO3_RE.match(country.strip()):
        return country.strip().upper()

    try:
        m = pycountry.countries.lookup(country.strip())
    except LookupError:
        return None
    return getattr(m, "alpha_3", None)

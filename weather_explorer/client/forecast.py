"""
Forecast helpers.

OpenWeather's forecast is ~40 entries in 3-hour steps. The dashboard shows one
card per day: the entry stamped at midday.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

from ..schemas import ForecastEntry

MIDDAY_MARKER = "12:00:00"
DT_TXT_FORMAT = "%Y-%m-%d %H:%M:%S"


def daily_midday(entries: Sequence[ForecastEntry]) -> List[ForecastEntry]:
    """Keep the entries whose dt_txt is at 12:00:00, in their original order."""
    return [e for e in entries if MIDDAY_MARKER in e.dt_txt]


def parse_dt_txt(dt_txt: str) -> datetime:
    return datetime.strptime(dt_txt, DT_TXT_FORMAT)


def format_day_label(dt_txt: str) -> str:
    """"2025-01-06 12:00:00" -> "Mon, Jan 6" (forecast card header)."""
    d = parse_dt_txt(dt_txt)
    return f"{d:%a}, {d:%b} {d.day}"


def format_long_date(dt_txt: str) -> str:
    """"2025-01-06 12:00:00" -> "Monday, January 6" (date line inside a card)."""
    d = parse_dt_txt(dt_txt)
    return f"{d:%A}, {d:%B} {d.day}"

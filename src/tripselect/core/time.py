"""
Travel-date parsing.

Selection only cares about calendar dates (the departure month drives seasonal fit),
so CLI/API inputs are normalized to `datetime.date`. Full ISO datetimes are accepted
and truncated; a trailing `Z` is tolerated.
"""

from __future__ import annotations

from datetime import date, datetime


def parse_travel_date(value: str | date | datetime) -> date:
    """Parse an ISO date or datetime (string or object) into a `date`."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text).date()


def travel_month(value: str | date | datetime) -> int:
    """Return the 1-12 month of a travel date."""
    return parse_travel_date(value).month

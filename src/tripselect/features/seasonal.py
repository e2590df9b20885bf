# src/tripselect/features/seasonal.py
"""
Seasonal fit feature (destination-level).

A destination's catalog entry lists its best travel months. The departure month scores:
- in season: full score
- shoulder (one month either side, wrapping December <-> January): reduced score
- otherwise: low but non-zero score (off-season trips are still trips)
"""

from __future__ import annotations

from datetime import date, datetime

from tripselect.config.settings import Settings, get_settings
from tripselect.core.time import travel_month
from tripselect.domain.models import Destination


def _adjacent_months(month: int) -> tuple[int, int]:
    prev_month = 12 if month == 1 else month - 1
    next_month = 1 if month == 12 else month + 1
    return prev_month, next_month


def score_seasonal_fit(
    destination: Destination, departure_date: str | date | datetime, *, settings: Settings | None = None
) -> float:
    cfg = (settings or get_settings()).scoring.seasonal
    month = travel_month(departure_date)
    best = set(destination.best_months)

    if month in best:
        return float(cfg.in_season)
    if best.intersection(_adjacent_months(month)):
        return float(cfg.shoulder)
    return float(cfg.off_season)

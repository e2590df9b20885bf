# src/tripselect/features/reachability.py
"""
Reachability feature (destination-level).

Rewards convenient destinations without punishing aspirational ones:
- no origin airport, or no estimate for the pair -> neutral score (never penalize missing data)
- otherwise the estimated total hours fall into a band (<=4h, <=8h, <=14h, longer)
"""

from __future__ import annotations

from collections.abc import Mapping

from tripselect.config.settings import Settings, get_settings
from tripselect.domain.models import Destination, TransferInfo
from tripselect.travel.estimator import estimate_travel_time


def reachability_for_hours(total_hours: float, *, settings: Settings | None = None) -> float:
    """Map a total travel time onto the configured reachability bands."""
    cfg = (settings or get_settings()).travel
    for band in cfg.reachability_bands:
        if total_hours <= band.max_hours:
            return float(band.score)
    return float(cfg.reachability_floor)


def score_reachability(
    destination: Destination,
    origin_airport: str | None,
    *,
    transfers: Mapping[str, TransferInfo] | None = None,
    settings: Settings | None = None,
) -> float:
    settings = settings or get_settings()
    neutral = float(settings.scoring.neutral_score)
    if not origin_airport:
        return neutral

    estimate = estimate_travel_time(origin_airport, destination, transfers=transfers, settings=settings)
    if estimate is None:
        return neutral
    return reachability_for_hours(estimate.total_hours, settings=settings)

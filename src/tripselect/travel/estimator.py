# src/tripselect/travel/estimator.py
"""
Static travel-time estimator.

Converts a home airport and a destination into a rough door-to-door travel time:
- flight band: coarse region-pair lookup (see `tripselect.travel.regions`)
- ground leg: only for "remote" destinations that have a `TransferInfo` entry
  (the flight band is then measured to the hub airport, not the destination's own)

No network calls. Unknown origins return `None`; callers must treat that as
"unknown", never as zero hours.
"""

from __future__ import annotations

from collections.abc import Mapping

from tripselect.catalog.loader import get_transfers
from tripselect.config.settings import Settings, get_settings
from tripselect.domain.models import Destination, TransferInfo, TravelTimeEstimate
from tripselect.travel.regions import flight_hours_between, flight_region_for

_GROUND_LABELS = {
    "taxi": "taxi",
    "drive": "drive",
    "train": "train",
    "ferry": "ferry",
    "connecting_flight": "connecting flight",
    "bus": "bus",
}


def format_transfer_time(minutes: int) -> str:
    """Render minutes as `2h 30m`, `2h` or `45m`."""
    hours, mins = divmod(int(minutes), 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


def _summary(flight_hours: float, ground_minutes: int, ground_type: str) -> str:
    flight = "~1hr flight" if flight_hours <= 1 else f"~{round(flight_hours)}hr flight"
    if ground_type in {"direct", "taxi"} and ground_minutes <= 45:
        # A standard airport-to-city hop is not worth mentioning.
        return flight
    return f"{flight} + {format_transfer_time(ground_minutes)} {_GROUND_LABELS.get(ground_type, ground_type)}"


def estimate_travel_time(
    origin_airport: str | None,
    destination: Destination,
    *,
    transfers: Mapping[str, TransferInfo] | None = None,
    settings: Settings | None = None,
) -> TravelTimeEstimate | None:
    """Estimate total travel hours from `origin_airport` to `destination` (or None)."""
    settings = settings or get_settings()
    origin_region = flight_region_for(origin_airport)
    if origin_region is None:
        return None

    if transfers is None:
        transfers = get_transfers(settings)
    transfer = transfers.get(destination.id)

    if transfer is not None:
        arrival_region = flight_region_for(transfer.hub_airport_code) or flight_region_for(
            destination.airport_code, destination.region
        )
        ground_minutes = transfer.ground_transfer_minutes
        ground_type = transfer.transfer_type
        note = transfer.transfer_note
    else:
        arrival_region = flight_region_for(destination.airport_code, destination.region)
        ground_minutes = settings.travel.default_ground_transfer_minutes
        ground_type = "taxi" if ground_minutes else "direct"
        note = None

    if arrival_region is None:
        return None

    flight_hours = flight_hours_between(
        origin_region, arrival_region, default=settings.travel.long_haul_default_hours
    )
    total_hours = round(flight_hours + ground_minutes / 60, 1)
    return TravelTimeEstimate(
        total_hours=total_hours,
        flight_hours=flight_hours,
        ground_minutes=ground_minutes,
        ground_type=ground_type,
        summary=_summary(flight_hours, ground_minutes, ground_type),
        note=note,
    )


def format_travel_time_short(estimate: TravelTimeEstimate) -> str:
    """Card-sized label, e.g. `~7h` or `20h+`."""
    hours = round(estimate.total_hours)
    if hours <= 1:
        return "~1h"
    if hours >= 20:
        return "20h+"
    return f"~{hours}h"


def travel_time_category(estimate: TravelTimeEstimate) -> str:
    if estimate.total_hours <= 4:
        return "short"
    if estimate.total_hours <= 9:
        return "medium"
    if estimate.total_hours <= 15:
        return "long"
    return "ultra_long"


def get_transfer_info(destination_id: str, settings: Settings | None = None) -> TransferInfo | None:
    return get_transfers(settings).get(destination_id)


def is_remote_destination(destination_id: str, settings: Settings | None = None) -> bool:
    return destination_id in get_transfers(settings)

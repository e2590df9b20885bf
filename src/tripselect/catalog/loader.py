"""
Destination catalog loader.

The catalog is a static JSON list of destinations packaged with `tripselect.catalog`
(override with `catalog.path` / `TRIPSELECT_CATALOG_PATH`). Remote-destination transfer
info lives beside it in `transfers.json`, keyed by destination id. Both are validated into
typed Pydantic models so scoring code can assume a consistent shape, and both are loaded
once per process.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from tripselect.config.settings import Settings, get_settings
from tripselect.core.env import resolve_project_path
from tripselect.domain.models import Destination, TransferInfo

_DESTINATIONS_ADAPTER = TypeAdapter(list[Destination])
_TRANSFERS_ADAPTER = TypeAdapter(dict[str, TransferInfo])


def _read_json(path: str | Path | None, packaged_name: str) -> Any:
    if path:
        return json.loads(resolve_project_path(path).read_text(encoding="utf-8"))
    text = resources.files("tripselect.catalog").joinpath(packaged_name).read_text(encoding="utf-8")
    return json.loads(text)


def load_destinations(path: str | Path | None = None) -> list[Destination]:
    """Load and validate a destination catalog (packaged catalog when `path` is empty)."""
    return _DESTINATIONS_ADAPTER.validate_python(_read_json(path, "destinations.json"))


def load_transfers(path: str | Path | None = None) -> dict[str, TransferInfo]:
    """Load remote-destination transfer info keyed by destination id."""
    return _TRANSFERS_ADAPTER.validate_python(_read_json(path, "transfers.json"))


@lru_cache
def _cached_destinations(path: str | None) -> tuple[Destination, ...]:
    return tuple(load_destinations(path))


@lru_cache
def _cached_transfers(path: str | None) -> dict[str, TransferInfo]:
    return load_transfers(path)


def get_catalog(settings: Settings | None = None) -> list[Destination]:
    """Return the process-wide catalog (ordered as on disk)."""
    settings = settings or get_settings()
    return list(_cached_destinations(settings.catalog.path))


def get_transfers(settings: Settings | None = None) -> dict[str, TransferInfo]:
    """Return the process-wide transfer table. Treat as read-only."""
    settings = settings or get_settings()
    return _cached_transfers(settings.catalog.transfers_path)


def get_destination_by_id(destination_id: str, settings: Settings | None = None) -> Destination | None:
    for d in get_catalog(settings):
        if d.id == destination_id:
            return d
    return None


def search_destinations(query: str, settings: Settings | None = None) -> list[Destination]:
    """Case-insensitive substring search over city, country, airport code and vibes."""
    q = query.strip().lower()
    if not q:
        return get_catalog(settings)
    return [
        d
        for d in get_catalog(settings)
        if q in d.city.lower()
        or q in d.country.lower()
        or q in d.airport_code.lower()
        or any(q in v for v in d.vibes)
    ]

"""
API routes.

Endpoints:
- POST `/api/selections`: main selection entrypoint.
- GET  `/api/destinations`: list/search the static catalog.
- GET  `/api/travel-time`: rough travel time from an airport to one destination.
- GET  `/api/quality`: offline catalog quality report.
- GET  `/api/settings`: public tuning settings (no file paths).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from tripselect.catalog.loader import get_destination_by_id, search_destinations
from tripselect.config.overrides import apply_settings_overrides
from tripselect.config.settings import Settings, get_settings
from tripselect.domain.models import SelectionRequest, SelectionResult
from tripselect.preferences.contract import NullPreferenceModel, RevealedPreferenceModel, VibeAffinityModel
from tripselect.quality.report import build_quality_report
from tripselect.recommender.engine import build_selection
from tripselect.travel.estimator import estimate_travel_time, format_travel_time_short, travel_time_category

logger = logging.getLogger(__name__)

router = APIRouter()


def _preference_model(request: SelectionRequest, settings: Settings) -> RevealedPreferenceModel:
    # Over HTTP the only preference handle we can receive is a JSON snapshot.
    if request.revealed_preferences is None:
        return NullPreferenceModel()
    return VibeAffinityModel(min_signals=settings.preferences.min_signals)


@router.post("/api/selections", response_model=SelectionResult)
def post_selections(request: SelectionRequest) -> SelectionResult:
    """Run the selection engine with a validated request."""
    try:
        settings = apply_settings_overrides(get_settings(), request.settings_overrides)
        model = _preference_model(request, settings)
        # Re-applying the same overrides inside build_selection is a no-op merge.
        return build_selection(request, preference_model=model, settings=settings)
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail={"code": "VALIDATION_ERROR", "message": str(e)},
        ) from e
    except Exception as e:
        logger.exception("Selection failed")
        raise HTTPException(
            status_code=500,
            detail={"code": "INTERNAL_ERROR", "message": str(e)},
        ) from e


@router.get("/api/destinations")
def get_destinations(q: str | None = None, region: str | None = None) -> dict:
    """Return catalog destinations, optionally filtered by a search string and region."""
    settings = get_settings()
    destinations = search_destinations(q or "", settings)
    if region:
        destinations = [d for d in destinations if d.region == region]

    vibe_counts: dict[str, int] = {}
    for d in destinations:
        for v in d.vibes:
            vibe_counts[v] = vibe_counts.get(v, 0) + 1

    return {
        "count": len(destinations),
        "vibe_counts": dict(sorted(vibe_counts.items(), key=lambda kv: (-kv[1], kv[0]))),
        "destinations": [d.model_dump(mode="json") for d in destinations],
    }


@router.get("/api/travel-time")
def get_travel_time(origin: str, destination: str) -> dict:
    """Estimate travel time; `estimate` is null when the origin airport is unknown."""
    settings = get_settings()
    dest = get_destination_by_id(destination, settings)
    if dest is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "NOT_FOUND", "message": f"Unknown destination id: {destination}"},
        )

    estimate = estimate_travel_time(origin, dest, settings=settings)
    return {
        "origin": origin.strip().upper(),
        "destination": dest.id,
        "estimate": estimate.model_dump(mode="json") if estimate else None,
        "label": format_travel_time_short(estimate) if estimate else None,
        "category": travel_time_category(estimate) if estimate else None,
    }


@router.get("/api/quality")
def get_quality_report() -> dict:
    """Return an offline data quality report (no network)."""
    settings = get_settings()
    return build_quality_report(settings)


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return safe-to-expose settings (tuning knobs only, no file paths)."""
    data = get_settings().model_dump(mode="json")
    return {
        "app": {"name": data["app"]["name"], "timezone": data["app"]["timezone"]},
        "travel": data["travel"],
        "scoring": data["scoring"],
        "selection": data["selection"],
        "discovery": data["discovery"],
        "preferences": data["preferences"],
    }

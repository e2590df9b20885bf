from __future__ import annotations

# This module is the "orchestrator" for destination selection.
# It wires together:
# - domain input (SelectionRequest)
# - the static catalog and transfer table
# - feature scoring (seasonal, vibe, budget, reachability, revealed preference)
# - weighted aggregation, diversity selection and optional discovery interleaving
#
# Design goal:
# - Keep each layer focused (features do math; selection picks; this file orchestrates).
# - Degrade gracefully: missing origin/estimate/signal means a neutral score, never an error.
# - Stay request-scoped: nothing here mutates shared state, so calls may run concurrently.

import logging
import random
import time
from collections.abc import Collection, Mapping, Sequence
from datetime import datetime
from zoneinfo import ZoneInfo
from typing import Any

from tripselect.catalog.loader import get_catalog, get_transfers
from tripselect.config.overrides import apply_settings_overrides
from tripselect.config.settings import Settings, get_settings
from tripselect.domain.models import (
    Destination,
    ScoredDestination,
    SelectedDestination,
    SelectionRequest,
    SelectionResult,
    SlotKind,
    TransferInfo,
)
from tripselect.features.revealed_preference import preference_gate_open
from tripselect.preferences.contract import NullPreferenceModel, RevealedPreferenceModel
from tripselect.scoring.aggregate import choose_weight_profile, profile_weights, score_candidate
from tripselect.selection.discovery import select_with_discovery
from tripselect.selection.diversity import calculate_diversity_score, clamp_tolerance, select_diverse

logger = logging.getLogger(__name__)


def filter_candidates(
    destinations: Sequence[Destination],
    *,
    exclude_airports: Collection[str] = (),
    exclude_cities: Sequence[str] = (),
    region: str | None = None,
) -> list[Destination]:
    """Drop destinations at excluded airports, excluded cities (case-insensitive) and off-region entries."""
    airports = {a.strip().upper() for a in exclude_airports if a and a.strip()}
    excluded = {c.strip().lower() for c in exclude_cities if c and c.strip()}
    out: list[Destination] = []
    for d in destinations:
        if region and d.region != region:
            continue
        if d.airport_code in airports:
            continue
        if d.city.lower() in excluded:
            continue
        out.append(d)
    return out


def rank_candidates(
    request: SelectionRequest,
    candidates: Sequence[Destination],
    *,
    preference_model: RevealedPreferenceModel,
    gate: bool,
    transfers: Mapping[str, TransferInfo],
    settings: Settings,
) -> tuple[list[ScoredDestination], str]:
    """Score every candidate and sort by total (descending, stable). Returns (ranked, profile name)."""
    origin = request.effective_origin()
    profile_name = choose_weight_profile(has_origin=bool(origin), learned=gate)
    weights = profile_weights(settings, profile_name)

    scored = [
        score_candidate(
            d,
            profile=request.profile,
            departure_date=request.departure_date,
            vibes=request.vibes,
            origin_airport=origin,
            weights=weights,
            preference_model=preference_model,
            preferences=request.revealed_preferences,
            gate=gate,
            transfers=transfers,
            settings=settings,
        )
        for d in candidates
    ]
    # sorted() is stable, so equal totals keep catalog order.
    return sorted(scored, key=lambda s: s.total, reverse=True), profile_name


def build_selection(
    request: SelectionRequest,
    *,
    destinations: Sequence[Destination] | None = None,
    preference_model: RevealedPreferenceModel | None = None,
    rng: random.Random | None = None,
    transfers: Mapping[str, TransferInfo] | None = None,
    settings: Settings | None = None,
) -> SelectionResult:
    """Run the full selection pipeline and return an explainable result."""
    t0 = time.monotonic()
    timings_ms: dict[str, int] = {}

    # ---- Step 1: Resolve settings and collaborators for THIS run ----
    settings = settings or get_settings()
    settings = apply_settings_overrides(settings, request.settings_overrides)
    preference_model = preference_model or NullPreferenceModel()
    rng = rng or random.Random()
    if destinations is None:
        destinations = get_catalog(settings)
    if transfers is None:
        transfers = get_transfers(settings)

    count = settings.selection.count_default if request.count is None else int(request.count)
    tolerance = clamp_tolerance(request.profile.surprise_tolerance, settings.selection.surprise_tolerance_default)
    origin = request.effective_origin()

    # ---- Step 2: Candidate filtering (cheap pruning before scoring) ----
    candidates = filter_candidates(
        destinations,
        exclude_airports=request.excluded_airports(),
        exclude_cities=request.exclude_destinations,
        region=request.region,
    )
    timings_ms["filter"] = int((time.monotonic() - t0) * 1000)

    # ---- Step 3: Behavioral gate + scoring ----
    gate = preference_gate_open(preference_model, request.revealed_preferences)
    ranked, profile_name = rank_candidates(
        request,
        candidates,
        preference_model=preference_model,
        gate=gate,
        transfers=transfers,
        settings=settings,
    )
    timings_ms["score"] = int((time.monotonic() - t0) * 1000)
    logger.debug(
        "Scored %d/%d candidates (profile=%s, origin=%s, tolerance=%d)",
        len(ranked),
        len(destinations),
        profile_name,
        origin,
        tolerance,
    )

    # ---- Step 4: Diversity selection (plus discovery when the model has signal) ----
    picks: list[tuple[ScoredDestination, SlotKind]]
    if gate:
        picks = select_with_discovery(ranked, count, tolerance, rng=rng, settings=settings)
    else:
        picks = [(item, "top") for item in select_diverse(ranked, count, tolerance, settings=settings)]
    timings_ms["select"] = int((time.monotonic() - t0) * 1000)

    items = [
        SelectedDestination(destination=item.destination, scores=item.scores, total=item.total, slot=slot)
        for item, slot in picks
    ]
    diversity = calculate_diversity_score([i.destination for i in items])

    meta: dict[str, Any] = {
        "weight_profile": profile_name,
        "weights": profile_weights(settings, profile_name),
        "behavioral_signal": gate,
        "origin_airport": origin,
        "surprise_tolerance": tolerance,
        "requested_count": count,
        "catalog_size": len(destinations),
        "eligible_candidates": len(candidates),
        "discovery_positions": [i for i, item in enumerate(items) if item.slot == "discovery"],
        "timings_ms": timings_ms,
    }
    logger.info(
        "Selected %d destinations (eligible=%d, profile=%s, diversity=%.3f)",
        len(items),
        len(candidates),
        profile_name,
        diversity,
    )

    return SelectionResult(
        generated_at=datetime.now(ZoneInfo(settings.app.timezone)),
        query=request.model_copy(update={"count": count}),
        items=items,
        diversity_score=diversity,
        meta=meta,
    )


def select_destinations(
    request: SelectionRequest,
    *,
    destinations: Sequence[Destination] | None = None,
    preference_model: RevealedPreferenceModel | None = None,
    rng: random.Random | None = None,
    transfers: Mapping[str, TransferInfo] | None = None,
    settings: Settings | None = None,
) -> list[Destination]:
    """Primary entry point: the ordered destinations for `request`."""
    result = build_selection(
        request,
        destinations=destinations,
        preference_model=preference_model,
        rng=rng,
        transfers=transfers,
        settings=settings,
    )
    return result.destinations

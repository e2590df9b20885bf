"""
Weighted aggregation of the five component scores.

Weight profiles are chosen by two facts about the request:
- is an origin airport known? (reachability only counts when it is)
- did the revealed-preference gate pass? ("learned" profiles give it 40%)

| profile              | seasonal | vibe | budget | reachability | revealed |
|----------------------|----------|------|--------|--------------|----------|
| fresh_no_origin      | 0.35     | 0.40 | 0.25   | 0            | 0        |
| fresh_with_origin    | 0.30     | 0.35 | 0.20   | 0.15         | 0        |
| learned_no_origin    | 0.20     | 0.25 | 0.15   | 0            | 0.40     |
| learned_with_origin  | 0.15     | 0.20 | 0.10   | 0.15         | 0.40     |

The numbers live in `defaults.yaml` (`scoring.weight_profiles`); they are re-normalized
here so per-request overrides cannot push totals outside 0..1.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from tripselect.config.settings import Settings, WeightProfileName
from tripselect.domain.models import ComponentScores, Destination, ScoredDestination, TransferInfo, TravelerProfile
from tripselect.features.budget import score_budget_fit
from tripselect.features.reachability import score_reachability
from tripselect.features.revealed_preference import score_revealed_preference
from tripselect.features.seasonal import score_seasonal_fit
from tripselect.features.vibe_match import score_vibe_match
from tripselect.preferences.contract import RevealedPreferenceModel
from tripselect.scoring.composite import clamp01, normalize_weights, weighted_total


def choose_weight_profile(*, has_origin: bool, learned: bool) -> WeightProfileName:
    if learned:
        return "learned_with_origin" if has_origin else "learned_no_origin"
    return "fresh_with_origin" if has_origin else "fresh_no_origin"


def profile_weights(settings: Settings, name: WeightProfileName) -> dict[str, float]:
    """Normalized weights for a named profile."""
    return normalize_weights(settings.scoring.weight_profiles[name])


def score_candidate(
    destination: Destination,
    *,
    profile: TravelerProfile,
    departure_date: date,
    vibes: list[str],
    origin_airport: str | None,
    weights: Mapping[str, float],
    preference_model: RevealedPreferenceModel,
    preferences: Any,
    gate: bool,
    transfers: Mapping[str, TransferInfo],
    settings: Settings,
) -> ScoredDestination:
    """Score one candidate on every component and combine with `weights`."""
    components = {
        "seasonal_fit": score_seasonal_fit(destination, departure_date, settings=settings),
        "vibe_match": score_vibe_match(destination, vibes),
        "budget_fit": score_budget_fit(destination, profile, settings=settings),
        "reachability": score_reachability(destination, origin_airport, transfers=transfers, settings=settings),
        "revealed_pref": score_revealed_preference(
            preference_model, preferences, destination, gate=gate, settings=settings
        ),
    }
    scores = ComponentScores(**{k: clamp01(v) for k, v in components.items()})
    return ScoredDestination(destination=destination, scores=scores, total=weighted_total(components, weights))

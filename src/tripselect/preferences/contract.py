"""
Revealed-preference contract.

The learning side (swipes, bookings, decay) lives outside this package. Selection only
consumes two operations, modelled here as a protocol so any implementation, including
test stubs, can be injected:

- `has_enough_signals(preferences) -> bool`: gate for the "learned" weight profiles
  and for discovery interleaving
- `score_destination(preferences, destination) -> float`: affinity in 0..1

`preferences` is whatever opaque handle the caller put on the request.

Two implementations ship with the package:
- `NullPreferenceModel`: the gate is always closed (default).
- `VibeAffinityModel`: reads a persisted `VibeAffinitySnapshot` (net vibe scores and a
  swipe count). It does not learn anything; it only scores against the snapshot.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from tripselect.domain.models import Destination


@runtime_checkable
class RevealedPreferenceModel(Protocol):
    def has_enough_signals(self, preferences: Any) -> bool: ...

    def score_destination(self, preferences: Any, destination: Destination) -> float: ...


class NullPreferenceModel:
    """No behavioral signal: selection always uses the "fresh user" weights."""

    def has_enough_signals(self, preferences: Any) -> bool:
        return False

    def score_destination(self, preferences: Any, destination: Destination) -> float:
        return 0.5


class VibeAffinitySnapshot(BaseModel):
    """Read-only snapshot of learned vibe affinities (net positive minus negative)."""

    vibe_scores: dict[str, float] = Field(default_factory=dict)
    total_swipes: int = Field(0, ge=0)


class VibeAffinityModel:
    """Score destinations against a `VibeAffinitySnapshot`.

    The score is the mean, over the destination's vibes, of each vibe's positive affinity
    relative to the strongest vibe. Negative or unknown vibes contribute 0.
    """

    def __init__(self, *, min_signals: int = 10) -> None:
        self.min_signals = int(min_signals)

    @staticmethod
    def _snapshot(preferences: Any) -> VibeAffinitySnapshot | None:
        if preferences is None:
            return None
        if isinstance(preferences, VibeAffinitySnapshot):
            return preferences
        return VibeAffinitySnapshot.model_validate(preferences)

    def has_enough_signals(self, preferences: Any) -> bool:
        snapshot = self._snapshot(preferences)
        return snapshot is not None and snapshot.total_swipes >= self.min_signals

    def score_destination(self, preferences: Any, destination: Destination) -> float:
        snapshot = self._snapshot(preferences)
        if snapshot is None or not self.has_enough_signals(snapshot) or not destination.vibes:
            return 0.5

        scores = {k.lower(): float(v) for k, v in snapshot.vibe_scores.items()}
        strongest = max([*scores.values(), 0.001])
        total = sum(scores[v] / strongest for v in destination.vibes if scores.get(v, 0.0) > 0)
        return max(0.0, min(1.0, total / len(destination.vibes)))

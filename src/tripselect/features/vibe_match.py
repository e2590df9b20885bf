"""Requested-vibe match feature."""

from __future__ import annotations

from collections.abc import Iterable

from tripselect.domain.models import Destination


def score_vibe_match(destination: Destination, vibes: Iterable[str] | None) -> float:
    """Fraction of requested vibes the destination carries (1.0 when nothing was requested)."""
    requested = [v.strip().lower() for v in (vibes or []) if v and v.strip()]
    if not requested:
        # No preference means no penalty.
        return 1.0
    have = set(destination.vibes)
    return sum(1 for v in requested if v in have) / len(requested)

# src/tripselect/selection/diversity.py
"""
Diversity-constrained selection.

Input is a candidate list sorted by total score (descending). We walk it once, keeping a
per-call accumulator of the countries, regions and vibes already accepted, and decide for
each candidate whether it earns a slot. How much variety matters depends on the
traveler's surprise tolerance (1..5):

- tolerance <= 2 ("predictable"): after the first pick, accept in pure score order.
- tolerance >= 4 ("adventurous"): skip repeat countries unless fewer than 2 slots remain,
  and repeat regions unless fewer than 3 slots remain.
- tolerance == 3 ("balanced"): accept when `total - penalty * diversity_weight` beats
  0.3, or unconditionally once only 2 slots remain.

The first pick at tolerance <= 2 goes through the balanced rule (nothing is "used" yet, so
it reduces to the 0.3 threshold).

Whatever the band leaves unfilled is topped up from the score-sorted list, skipping only
exact duplicates, so an underfilled pass relaxes constraints instead of failing.

Penalty: +0.3 repeat country, +0.2 repeat region, up to +0.2 for the share of the
candidate's vibes already seen. `diversity_weight = (tolerance - 1) / 4`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from tripselect.config.settings import SelectionSettings, Settings, get_settings
from tripselect.domain.models import ALL_REGIONS, ALL_VIBES, Destination, ScoredDestination

logger = logging.getLogger(__name__)


@dataclass
class _DiversityState:
    """Running "already used" sets for one selection call."""

    countries: set[str] = field(default_factory=set)
    regions: set[str] = field(default_factory=set)
    vibes: set[str] = field(default_factory=set)

    def penalty(self, destination: Destination, cfg: SelectionSettings) -> float:
        penalty = 0.0
        if destination.country in self.countries:
            penalty += cfg.country_penalty
        if destination.region in self.regions:
            penalty += cfg.region_penalty
        if destination.vibes:
            shared = sum(1 for v in destination.vibes if v in self.vibes)
            penalty += shared / len(destination.vibes) * cfg.vibe_penalty_max
        return penalty

    def add(self, destination: Destination) -> None:
        self.countries.add(destination.country)
        self.regions.add(destination.region)
        self.vibes.update(destination.vibes)


def diversity_weight(surprise_tolerance: int) -> float:
    """0.0 at tolerance 1, 1.0 at tolerance 5."""
    return (clamp_tolerance(surprise_tolerance) - 1) / 4


def clamp_tolerance(surprise_tolerance: int | None, default: int = 3) -> int:
    if surprise_tolerance is None:
        return default
    return max(1, min(5, int(surprise_tolerance)))


def _accepts(
    item: ScoredDestination,
    *,
    state: _DiversityState,
    selected: int,
    count: int,
    tolerance: int,
    cfg: SelectionSettings,
) -> bool:
    remaining = count - selected
    dest = item.destination

    if tolerance <= 2 and selected > 0:
        return True

    if tolerance >= 4:
        if dest.country in state.countries and remaining >= cfg.adventurous_country_relax_remaining:
            return False
        if dest.region in state.regions and remaining >= cfg.adventurous_region_relax_remaining:
            return False
        return True

    effective = item.total - state.penalty(dest, cfg) * diversity_weight(tolerance)
    return effective > cfg.balanced_min_effective_score or remaining <= cfg.balanced_force_fill_remaining


def select_diverse(
    scored: Sequence[ScoredDestination],
    count: int,
    surprise_tolerance: int,
    *,
    settings: Settings | None = None,
) -> list[ScoredDestination]:
    """Pick up to `count` candidates from a score-sorted list, trading score for variety."""
    cfg = (settings or get_settings()).selection
    tolerance = clamp_tolerance(surprise_tolerance, cfg.surprise_tolerance_default)
    if count <= 0:
        return []

    state = _DiversityState()
    selected: list[ScoredDestination] = []
    taken: set[str] = set()

    for item in scored:
        if len(selected) >= count:
            break
        if item.destination.id in taken:
            continue
        if not _accepts(item, state=state, selected=len(selected), count=count, tolerance=tolerance, cfg=cfg):
            continue
        selected.append(item)
        taken.add(item.destination.id)
        state.add(item.destination)

    if len(selected) < count:
        logger.debug("Diversity pass filled %d/%d slots; topping up by score", len(selected), count)
        for item in scored:
            if len(selected) >= count:
                break
            if item.destination.id not in taken:
                selected.append(item)
                taken.add(item.destination.id)

    return selected


def calculate_diversity_score(destinations: Sequence[Destination]) -> float:
    """Summarize country/region/vibe spread of a result set in 0..1 (1.0 for <= 1 item)."""
    n = len(destinations)
    if n <= 1:
        return 1.0

    countries = {d.country for d in destinations}
    regions = {d.region for d in destinations}
    vibes = {v for d in destinations for v in d.vibes}

    country_diversity = len(countries) / n
    region_diversity = len(regions) / min(n, len(ALL_REGIONS))
    vibe_diversity = min(1.0, len(vibes) / len(ALL_VIBES))
    return min(1.0, country_diversity * 0.4 + region_diversity * 0.3 + vibe_diversity * 0.3)

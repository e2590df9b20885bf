# src/tripselect/selection/discovery.py
"""
Discovery interleaving.

Once the learned preference model has enough signal, a quarter of the output slots are
reserved for destinations it currently undervalues, so it keeps seeing (and learning
from) something other than its favourites:

1. reserve `max(1, floor(N * ratio))` discovery slots
2. pick the remaining "top picks" with the diversity selector
3. pool = everything else that is still a reasonable trip
   (`(vibe_match + seasonal_fit) / 2 > 0.4`) and that the model undervalues
   (`revealed_pref < 0.6`)
4. shuffle the pool with the injected generator and take the first few
5. interleave: every third position (index 2, 5, ...) is a discovery slot

If either list runs dry, positions are filled from the other one.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence

from tripselect.config.settings import DiscoverySettings, Settings, get_settings
from tripselect.domain.models import ScoredDestination, SlotKind
from tripselect.selection.diversity import select_diverse

logger = logging.getLogger(__name__)


def discovery_slot_count(count: int, ratio: float) -> int:
    if count <= 0:
        return 0
    return max(1, math.floor(count * ratio))


def is_discovery_candidate(item: ScoredDestination, cfg: DiscoverySettings) -> bool:
    plausibility = (item.scores.vibe_match + item.scores.seasonal_fit) / 2
    return plausibility > cfg.min_plausibility and item.scores.revealed_pref < cfg.max_revealed_pref


def build_discovery_pool(
    scored: Sequence[ScoredDestination], *, exclude_ids: set[str], cfg: DiscoverySettings
) -> list[ScoredDestination]:
    return [
        item
        for item in scored
        if item.destination.id not in exclude_ids and is_discovery_candidate(item, cfg)
    ]


def interleave(
    top: Sequence[ScoredDestination],
    discovery: Sequence[ScoredDestination],
    *,
    total: int,
    slot_every: int = 3,
) -> list[tuple[ScoredDestination, SlotKind]]:
    """Merge the two lists, putting discovery picks at every `slot_every`-th position."""
    out: list[tuple[ScoredDestination, SlotKind]] = []
    ti = di = 0
    for i in range(total):
        wants_discovery = (i + 1) % slot_every == 0
        if wants_discovery and di < len(discovery):
            out.append((discovery[di], "discovery"))
            di += 1
        elif ti < len(top):
            out.append((top[ti], "top"))
            ti += 1
        elif di < len(discovery):
            out.append((discovery[di], "discovery"))
            di += 1
        else:
            break
    return out


def select_with_discovery(
    scored: Sequence[ScoredDestination],
    count: int,
    surprise_tolerance: int,
    *,
    rng: random.Random,
    settings: Settings | None = None,
) -> list[tuple[ScoredDestination, SlotKind]]:
    """Diversity-selected top picks interleaved with shuffled discovery picks."""
    settings = settings or get_settings()
    cfg = settings.discovery
    target = min(count, len(scored))
    if target <= 0:
        return []

    n_discovery = discovery_slot_count(count, cfg.ratio)
    top = select_diverse(scored, count - n_discovery, surprise_tolerance, settings=settings)
    taken = {item.destination.id for item in top}

    pool = build_discovery_pool(scored, exclude_ids=taken, cfg=cfg)
    rng.shuffle(pool)
    discovery = pool[:n_discovery]
    taken.update(item.destination.id for item in discovery)

    # Short discovery pool: keep the result length at min(count, candidates).
    if len(top) + len(discovery) < target:
        for item in scored:
            if len(top) + len(discovery) >= target:
                break
            if item.destination.id not in taken:
                top.append(item)
                taken.add(item.destination.id)

    logger.debug(
        "Discovery interleave: top=%d discovery=%d (pool=%d) target=%d",
        len(top),
        len(discovery),
        len(pool),
        target,
    )
    return interleave(top, discovery, total=target, slot_every=cfg.slot_every)

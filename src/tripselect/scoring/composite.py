"""
Shared scoring utilities.

Small, reusable helpers used across feature scorers and the aggregator:
- `clamp01`: keep values within 0..1 for stable output
- `normalize_weights`: convert non-negative weights into a 1.0-summing distribution
- `weighted_total`: sum of weight x component over the five component names
"""

from __future__ import annotations

from typing import Mapping

from tripselect.config.settings import ComponentName

COMPONENT_NAMES: tuple[ComponentName, ...] = (
    "seasonal_fit",
    "vibe_match",
    "budget_fit",
    "reachability",
    "revealed_pref",
)


def clamp01(x: float) -> float:
    """Clamp a number into the [0.0, 1.0] range."""
    return max(0.0, min(1.0, float(x)))


def normalize_weights(weights: Mapping[str, float]) -> dict[str, float]:
    """Normalize a dict of weights so they sum to 1.0 (negatives count as 0)."""
    cleaned = {k: max(0.0, float(v)) for k, v in weights.items()}
    total = sum(cleaned.values())
    if total <= 0:
        return {k: 1.0 / len(weights) for k in weights}
    return {k: v / total for k, v in cleaned.items()}


def weighted_total(components: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Weighted sum over the known component names, clamped into 0..1."""
    return clamp01(sum(float(weights.get(name, 0.0)) * float(components[name]) for name in COMPONENT_NAMES))

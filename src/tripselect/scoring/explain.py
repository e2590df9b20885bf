"""
Small explainability formatting helpers.

Used by the CLI to print compact summaries of selection results.
"""

from __future__ import annotations

from tripselect.domain.models import ScoredDestination, SelectedDestination
from tripselect.scoring.composite import COMPONENT_NAMES

_SHORT_NAMES = {
    "seasonal_fit": "season",
    "vibe_match": "vibe",
    "budget_fit": "budget",
    "reachability": "reach",
    "revealed_pref": "pref",
}


def one_line_summary(item: ScoredDestination | SelectedDestination) -> str:
    """Render a compact single-line summary for a scored destination."""
    parts = [f"total={item.total:.3f}"]
    for name in COMPONENT_NAMES:
        parts.append(f"{_SHORT_NAMES[name]}={getattr(item.scores, name):.2f}")
    if isinstance(item, SelectedDestination) and item.slot == "discovery":
        parts.append("discovery")
    return " | ".join(parts)

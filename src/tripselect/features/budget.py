# src/tripselect/features/budget.py
"""
Budget fit feature (destination-level).

Compares the destination's average trip cost with the traveler's budget range.
The overage bands are kept in one ordered rule table so each threshold can be read
(and tested) on its own:

| rule            | condition                         | score                               |
|-----------------|-----------------------------------|-------------------------------------|
| within_range    | min <= cost <= max                | 1.0                                 |
| slight_overage  | max < cost <= max * 1.2           | 0.8 / 0.5 / 0.2 by flexibility      |
| heavy_overage   | cost > max * 1.2                  | 0.4 splurge_ok, otherwise 0.1       |
| under_min       | cost < min                        | 0.7                                 |
| fallback        | anything else                     | 0.5                                 |

A profile with no budget max is never penalized.
"""

from __future__ import annotations

from typing import Callable

from tripselect.config.settings import BudgetScoreSettings, Settings, get_settings
from tripselect.domain.models import BudgetRange, Destination, TravelerProfile

_Rule = tuple[str, Callable[[float, float, float, float], bool]]

# (name, predicate(cost, min, max, overage_ratio)); first match wins.
BUDGET_RULES: tuple[_Rule, ...] = (
    ("within_range", lambda cost, lo, hi, r: lo <= cost <= hi),
    ("slight_overage", lambda cost, lo, hi, r: hi < cost <= hi * (1 + r)),
    ("heavy_overage", lambda cost, lo, hi, r: cost > hi * (1 + r)),
    ("under_min", lambda cost, lo, hi, r: cost < lo),
)


def classify_budget(cost: float, budget: BudgetRange, *, overage_ratio: float) -> str:
    """Return the name of the first budget rule matching `cost` (assumes `budget.max` is set)."""
    lo = float(budget.min or 0.0)
    hi = float(budget.max or 0.0)
    for name, predicate in BUDGET_RULES:
        if predicate(float(cost), lo, hi, overage_ratio):
            return name
    return "fallback"


def _rule_score(rule: str, budget: BudgetRange, cfg: BudgetScoreSettings) -> float:
    if rule == "within_range":
        return cfg.within_range
    if rule == "slight_overage":
        return cfg.slight_overage[budget.flexibility]
    if rule == "heavy_overage":
        return cfg.heavy_overage[budget.flexibility]
    if rule == "under_min":
        return cfg.under_min
    return cfg.fallback


def score_budget_fit(
    destination: Destination, profile: TravelerProfile, *, settings: Settings | None = None
) -> float:
    cfg = (settings or get_settings()).scoring.budget
    budget = profile.budget
    if budget is None or not budget.max:
        return 1.0
    rule = classify_budget(destination.average_cost, budget, overage_ratio=cfg.slight_overage_ratio)
    return float(_rule_score(rule, budget, cfg))

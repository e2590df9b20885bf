# src/tripselect/features/revealed_preference.py
"""
Revealed-preference feature (destination-level).

Thin adapter over the injected `RevealedPreferenceModel`:
- gate closed -> neutral score, and the model is not asked to score at all
- gate open   -> the model's score, clamped to 0..1
- the model raising -> neutral score plus a warning (a broken model must not break selection)
"""

from __future__ import annotations

import logging
from typing import Any

from tripselect.config.settings import Settings, get_settings
from tripselect.domain.models import Destination
from tripselect.preferences.contract import RevealedPreferenceModel
from tripselect.scoring.composite import clamp01

logger = logging.getLogger(__name__)


def preference_gate_open(model: RevealedPreferenceModel, preferences: Any) -> bool:
    """Ask the model whether enough behavioral signal exists (False on error)."""
    if preferences is None:
        return False
    try:
        return bool(model.has_enough_signals(preferences))
    except Exception as e:
        logger.warning("Preference gate check failed; treating as no signal: %s", e)
        return False


def score_revealed_preference(
    model: RevealedPreferenceModel,
    preferences: Any,
    destination: Destination,
    *,
    gate: bool,
    settings: Settings | None = None,
) -> float:
    neutral = float((settings or get_settings()).scoring.neutral_score)
    if not gate:
        return neutral
    try:
        return clamp01(model.score_destination(preferences, destination))
    except Exception as e:
        logger.warning("Preference scoring failed for %s: %s", destination.id, e)
        return neutral

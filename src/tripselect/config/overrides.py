"""
Per-request settings overrides (safe subset).

`SelectionRequest.settings_overrides` lets the API and CLI tune selection knobs for one
run without touching the cached global settings. Applying an override:
1. checks every key against `ALLOWED_SETTINGS_OVERRIDES_TREE` (dotted path in the error),
2. merges the accepted payload onto a dump of the current settings,
3. validates the result as a fresh `Settings`, so ranges still hold.

Catalog/transfer paths and app settings are never overridable.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tripselect.config.settings import Settings

# `True` opens a whole subtree; a nested dict lists the only keys accepted below it.
ALLOWED_SETTINGS_OVERRIDES_TREE: dict[str, Any] = {
    "scoring": True,
    "selection": True,
    "discovery": True,
    "travel": {
        "default_ground_transfer_minutes": True,
        "long_haul_default_hours": True,
        "reachability_bands": True,
        "reachability_floor": True,
    },
    "preferences": {"min_signals": True},
}


def _dotted(path: tuple[str, ...], key: str) -> str:
    return ".".join((*path, key))


def _deep_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Recursive dict merge; `patch` wins on scalar conflicts. Inputs are left untouched."""
    out = dict(base)
    for key, value in patch.items():
        current = out.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            out[key] = _deep_merge(current, value)
        else:
            out[key] = value
    return out


def _filter_overrides(
    overrides: Mapping[str, Any],
    *,
    allowed_tree: Mapping[str, Any],
    path: tuple[str, ...] = (),
) -> dict[str, Any]:
    accepted: dict[str, Any] = {}
    for key, value in overrides.items():
        rule = allowed_tree.get(key)
        if rule is None:
            raise ValueError(f"settings_overrides contains a disallowed key: '{_dotted(path, key)}'")
        if rule is True:
            accepted[key] = value
        elif isinstance(value, Mapping):
            accepted[key] = _filter_overrides(value, allowed_tree=rule, path=(*path, key))
        else:
            raise ValueError(f"settings_overrides key '{_dotted(path, key)}' must be a mapping")
    return accepted


def apply_settings_overrides(settings: Settings, overrides: Mapping[str, Any] | None) -> Settings:
    """Return `settings` with a whitelisted override payload applied (no-op when empty)."""
    if not overrides:
        return settings

    accepted = _filter_overrides(overrides, allowed_tree=ALLOWED_SETTINGS_OVERRIDES_TREE)
    return Settings.model_validate(_deep_merge(settings.model_dump(mode="python"), accepted))

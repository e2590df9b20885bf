from __future__ import annotations

# We use pytest because the repository already standardizes on it for automated checks.
import pytest

# We import the existing Settings loader so tests run with the real default config structure.
from tripselect.config.settings import get_settings

# We test the override helper directly because it is pure (no I/O) and safety-critical.
from tripselect.config.overrides import apply_settings_overrides


def test_apply_settings_overrides_returns_same_object_when_none():
    # Load the baseline settings once (this is a cached Pydantic model).
    settings = get_settings()

    # When no overrides are provided, we expect a no-op and the same object back (fast path).
    out = apply_settings_overrides(settings, None)

    # Identity equality is intentional here: the function returns early without rebuilding the model.
    assert out is settings
    assert apply_settings_overrides(settings, {}) is settings


def test_apply_settings_overrides_can_override_allowed_numeric_knobs():
    # Load the baseline settings (do not mutate it; it is shared via lru_cache).
    settings = get_settings()

    # Override an allowed selection knob: the balanced-band acceptance threshold.
    overrides = {"selection": {"balanced_min_effective_score": 0.45}, "discovery": {"ratio": 0.5}}

    # Apply the override; this returns a NEW Settings model validated by Pydantic.
    out = apply_settings_overrides(settings, overrides)

    # The override should take effect on the returned model.
    assert out.selection.balanced_min_effective_score == 0.45
    assert out.discovery.ratio == 0.5

    # Sibling keys survive the deep merge.
    assert out.selection.country_penalty == settings.selection.country_penalty

    # The original shared settings should remain unchanged (important to avoid cross-request leakage).
    assert settings.selection.balanced_min_effective_score != 0.45


def test_apply_settings_overrides_allows_whitelisted_travel_keys():
    settings = get_settings()

    out = apply_settings_overrides(settings, {"travel": {"default_ground_transfer_minutes": 30}})

    assert out.travel.default_ground_transfer_minutes == 30
    assert out.travel.reachability_bands == settings.travel.reachability_bands


def test_apply_settings_overrides_rejects_disallowed_keys_with_clear_path():
    # Load baseline settings for context (not strictly required, but keeps the call signature realistic).
    settings = get_settings()

    # This key is intentionally disallowed because it is a file path (could enable arbitrary file reads).
    overrides = {"catalog": {"path": "/etc/passwd"}}

    # We expect a ValueError naming the offending key so users can find it quickly.
    with pytest.raises(ValueError, match=r"disallowed key: 'catalog'"):
        apply_settings_overrides(settings, overrides)


def test_apply_settings_overrides_rejects_nested_disallowed_keys_with_dotted_path():
    settings = get_settings()

    # Note: in regex, a literal dot must be escaped as `\.` (a raw string avoids double escaping).
    with pytest.raises(ValueError, match=r"preferences\.something_else"):
        apply_settings_overrides(settings, {"preferences": {"something_else": 1}})


def test_apply_settings_overrides_rejects_wrong_value_shapes_for_restricted_subtrees():
    # Load baseline settings.
    settings = get_settings()

    # `travel` is a restricted subtree (only certain nested keys are allowed),
    # so its override must be an object/mapping, not a scalar.
    overrides = {"travel": 1}

    # The helper should raise a ValueError explaining the expected shape.
    with pytest.raises(ValueError, match=r"settings_overrides key 'travel' must be a mapping"):
        apply_settings_overrides(settings, overrides)


def test_apply_settings_overrides_revalidates_ranges():
    settings = get_settings()

    # Pydantic's ValidationError subclasses ValueError, so the API maps it to a 400 as well.
    with pytest.raises(ValueError):
        apply_settings_overrides(settings, {"discovery": {"ratio": 3.0}})

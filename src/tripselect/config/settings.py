# src/tripselect/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/tripselect/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `TRIPSELECT_LOG_LEVEL`, `TRIPSELECT_CATALOG_PATH`)
- an external YAML file via `TRIPSELECT_CONFIG_PATH`

Design rule:
- Tuning knobs live in YAML, not hard-coded in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from tripselect.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `tripselect.config`."""
    text = resources.files("tripselect.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


ComponentName = Literal["seasonal_fit", "vibe_match", "budget_fit", "reachability", "revealed_pref"]
WeightProfileName = Literal["fresh_no_origin", "fresh_with_origin", "learned_no_origin", "learned_with_origin"]
Flexibility = Literal["strict", "flexible", "splurge_ok"]


class AppSettings(BaseModel):
    name: str = "TripSelect"
    timezone: str = "UTC"
    log_level: str = "INFO"


class CatalogSettings(BaseModel):
    path: str | None = None
    transfers_path: str | None = None


class ReachabilityBand(BaseModel):
    max_hours: float = Field(..., gt=0)
    score: float = Field(..., ge=0, le=1)


class TravelSettings(BaseModel):
    default_ground_transfer_minutes: int = Field(0, ge=0)
    long_haul_default_hours: float = Field(10, gt=0)
    reachability_bands: list[ReachabilityBand] = Field(
        default_factory=lambda: [
            ReachabilityBand(max_hours=4, score=1.0),
            ReachabilityBand(max_hours=8, score=0.8),
            ReachabilityBand(max_hours=14, score=0.5),
        ]
    )
    reachability_floor: float = Field(0.3, ge=0, le=1)

    @model_validator(mode="after")
    def _sort_bands(self) -> "TravelSettings":
        self.reachability_bands = sorted(self.reachability_bands, key=lambda b: b.max_hours)
        return self


class SeasonalScoreSettings(BaseModel):
    in_season: float = Field(1.0, ge=0, le=1)
    shoulder: float = Field(0.7, ge=0, le=1)
    off_season: float = Field(0.3, ge=0, le=1)


class BudgetScoreSettings(BaseModel):
    within_range: float = Field(1.0, ge=0, le=1)
    slight_overage_ratio: float = Field(0.2, ge=0)
    slight_overage: dict[Flexibility, float] = Field(
        default_factory=lambda: {"splurge_ok": 0.8, "flexible": 0.5, "strict": 0.2}
    )
    heavy_overage: dict[Flexibility, float] = Field(
        default_factory=lambda: {"splurge_ok": 0.4, "flexible": 0.1, "strict": 0.1}
    )
    under_min: float = Field(0.7, ge=0, le=1)
    fallback: float = Field(0.5, ge=0, le=1)


def _default_weight_profiles() -> dict[str, dict[str, float]]:
    return {
        "fresh_no_origin": {
            "seasonal_fit": 0.35,
            "vibe_match": 0.40,
            "budget_fit": 0.25,
            "reachability": 0.0,
            "revealed_pref": 0.0,
        },
        "fresh_with_origin": {
            "seasonal_fit": 0.30,
            "vibe_match": 0.35,
            "budget_fit": 0.20,
            "reachability": 0.15,
            "revealed_pref": 0.0,
        },
        "learned_no_origin": {
            "seasonal_fit": 0.20,
            "vibe_match": 0.25,
            "budget_fit": 0.15,
            "reachability": 0.0,
            "revealed_pref": 0.40,
        },
        "learned_with_origin": {
            "seasonal_fit": 0.15,
            "vibe_match": 0.20,
            "budget_fit": 0.10,
            "reachability": 0.15,
            "revealed_pref": 0.40,
        },
    }


class ScoringSettings(BaseModel):
    neutral_score: float = Field(0.5, ge=0, le=1)
    seasonal: SeasonalScoreSettings = Field(default_factory=SeasonalScoreSettings)
    budget: BudgetScoreSettings = Field(default_factory=BudgetScoreSettings)
    weight_profiles: dict[WeightProfileName, dict[ComponentName, float]] = Field(
        default_factory=_default_weight_profiles
    )


class SelectionSettings(BaseModel):
    count_default: int = Field(8, ge=1, le=50)
    surprise_tolerance_default: int = Field(3, ge=1, le=5)
    country_penalty: float = Field(0.3, ge=0)
    region_penalty: float = Field(0.2, ge=0)
    vibe_penalty_max: float = Field(0.2, ge=0)
    # Carried over unchanged; no derivation is known for this threshold.
    balanced_min_effective_score: float = 0.3
    balanced_force_fill_remaining: int = Field(2, ge=0)
    adventurous_country_relax_remaining: int = Field(2, ge=0)
    adventurous_region_relax_remaining: int = Field(3, ge=0)


class DiscoverySettings(BaseModel):
    ratio: float = Field(0.25, ge=0, le=1)
    min_plausibility: float = Field(0.4, ge=0, le=1)
    max_revealed_pref: float = Field(0.6, ge=0, le=1)
    slot_every: int = Field(3, ge=1)


class PreferenceSettings(BaseModel):
    min_signals: int = Field(10, ge=0)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    travel: TravelSettings = Field(default_factory=TravelSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)
    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)
    preferences: PreferenceSettings = Field(default_factory=PreferenceSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small to avoid exposing unsafe overrides.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("TRIPSELECT_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    catalog_path = os.getenv("TRIPSELECT_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    transfers_path = os.getenv("TRIPSELECT_TRANSFERS_PATH")
    if transfers_path:
        data.setdefault("catalog", {})["transfers_path"] = transfers_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("TRIPSELECT_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")

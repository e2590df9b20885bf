"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- catalog entities (`Destination`, `TransferInfo`)
- per-request inputs (`TravelerProfile`, `SelectionRequest`)
- transient scoring output (`ComponentScores`, `ScoredDestination`)
- the explainable selection output (`SelectionResult`)

Keeping these models in one place helps:
- validation (reject malformed requests at the boundary, not inside the engine),
- typed refactors,
- consistent JSON output across CLI/API.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Region = Literal["europe", "asia", "americas", "africa", "oceania", "middle_east", "caribbean"]
Flexibility = Literal["strict", "flexible", "splurge_ok"]
TransferType = Literal["drive", "train", "ferry", "connecting_flight"]
GroundType = Literal["direct", "taxi", "drive", "train", "ferry", "connecting_flight", "bus"]
SlotKind = Literal["top", "discovery"]

# Vocabulary used by the catalog and by diversity scoring.
ALL_VIBES: tuple[str, ...] = (
    "beach",
    "adventure",
    "culture",
    "romance",
    "nightlife",
    "nature",
    "city",
    "history",
    "food",
    "relaxation",
    "family",
    "luxury",
)
ALL_REGIONS: tuple[str, ...] = ("europe", "asia", "americas", "caribbean", "africa", "oceania", "middle_east")


def _normalize_tags(tags: list[str]) -> list[str]:
    # Lower-case and de-duplicate while keeping catalog order (first vibe is the "headline" one).
    seen: dict[str, None] = {}
    for t in tags:
        if t and t.strip():
            seen.setdefault(t.strip().lower(), None)
    return list(seen)


class Destination(BaseModel):
    """A static catalog entry; loaded once and never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str
    city: str
    country: str
    airport_code: str
    region: Region
    vibes: list[str] = Field(default_factory=list)
    best_months: list[int] = Field(default_factory=list)
    average_cost: float = Field(..., ge=0)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    highlights: list[str] = Field(default_factory=list)
    image_url: str | None = None

    @field_validator("vibes")
    @classmethod
    def _normalize_vibes(cls, vibes: list[str]) -> list[str]:
        return _normalize_tags(vibes)

    @field_validator("best_months")
    @classmethod
    def _validate_months(cls, months: list[int]) -> list[int]:
        bad = [m for m in months if not 1 <= m <= 12]
        if bad:
            raise ValueError(f"best_months must be within 1..12, got {bad}")
        return sorted(set(months))

    @field_validator("airport_code")
    @classmethod
    def _upper_airport(cls, code: str) -> str:
        return code.strip().upper()


class TransferInfo(BaseModel):
    """Ground/connecting leg needed to reach a destination not served by a major airport."""

    model_config = ConfigDict(frozen=True)

    hub_airport_code: str
    hub_city: str
    ground_transfer_minutes: int = Field(..., ge=0)
    transfer_type: TransferType
    transfer_note: str | None = None


class TravelTimeEstimate(BaseModel):
    """Door-to-door travel time estimate from a home airport (always rough)."""

    total_hours: float = Field(..., ge=0)
    flight_hours: float = Field(..., ge=0)
    ground_minutes: int = Field(..., ge=0)
    ground_type: GroundType
    summary: str
    note: str | None = None
    is_rough_estimate: bool = True


class BudgetRange(BaseModel):
    min: float | None = Field(default=None, ge=0)
    max: float | None = Field(default=None, ge=0)
    currency: str = "USD"
    flexibility: Flexibility = "flexible"


class HomeBase(BaseModel):
    airport_code: str | None = None
    city: str | None = None

    @field_validator("airport_code")
    @classmethod
    def _upper_airport(cls, code: str | None) -> str | None:
        if code is None or not code.strip():
            return None
        return code.strip().upper()


class Interests(BaseModel):
    primary: list[str] = Field(default_factory=list)
    secondary: list[str] = Field(default_factory=list)


class TravelerProfile(BaseModel):
    """Per-request traveler profile (never persisted by this engine)."""

    home_base: HomeBase = Field(default_factory=HomeBase)
    budget: BudgetRange = Field(default_factory=BudgetRange)
    surprise_tolerance: int = Field(default=3, ge=1, le=5)
    interests: Interests = Field(default_factory=Interests)


class SelectionRequest(BaseModel):
    """Input for one `select_destinations` run."""

    profile: TravelerProfile = Field(default_factory=TravelerProfile)
    departure_date: date
    return_date: date | None = None
    vibes: list[str] = Field(default_factory=list)
    region: Region | None = None
    count: int | None = Field(default=None, ge=0)
    exclude_destinations: list[str] = Field(default_factory=list)
    origin_airport: str | None = None
    # Opaque handle passed verbatim to the injected preference model.
    revealed_preferences: Any = None
    settings_overrides: dict[str, Any] | None = None

    @field_validator("vibes")
    @classmethod
    def _normalize_vibes(cls, vibes: list[str]) -> list[str]:
        return _normalize_tags(vibes)

    @model_validator(mode="after")
    def _validate_dates(self) -> "SelectionRequest":
        if self.return_date is not None and self.return_date < self.departure_date:
            raise ValueError("return_date must not be before departure_date")
        return self

    def effective_origin(self) -> str | None:
        """Explicit origin airport, else the profile's home airport."""
        code = (self.origin_airport or "").strip().upper()
        return code or self.profile.home_base.airport_code

    def excluded_airports(self) -> set[str]:
        """Airports whose destination is never offered: the home airport and the explicit origin."""
        codes = {(self.origin_airport or "").strip().upper(), self.profile.home_base.airport_code or ""}
        return {c for c in codes if c}


class ComponentScores(BaseModel):
    seasonal_fit: float = Field(..., ge=0, le=1)
    vibe_match: float = Field(..., ge=0, le=1)
    budget_fit: float = Field(..., ge=0, le=1)
    reachability: float = Field(..., ge=0, le=1)
    revealed_pref: float = Field(..., ge=0, le=1)


class ScoredDestination(BaseModel):
    """A candidate plus its component scores and weighted total (request-scoped)."""

    destination: Destination
    scores: ComponentScores
    total: float = Field(..., ge=0, le=1)


class SelectedDestination(BaseModel):
    """One ranked output item and the slot kind that produced it."""

    destination: Destination
    scores: ComponentScores
    total: float = Field(..., ge=0, le=1)
    slot: SlotKind = "top"


class SelectionResult(BaseModel):
    generated_at: datetime
    query: SelectionRequest
    items: list[SelectedDestination]
    diversity_score: float = Field(..., ge=0, le=1)
    meta: dict[str, Any] = Field(default_factory=dict)

    @property
    def destinations(self) -> list[Destination]:
        return [item.destination for item in self.items]

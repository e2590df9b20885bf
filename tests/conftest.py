from __future__ import annotations

import pytest

from tripselect.domain.models import ComponentScores, Destination, ScoredDestination


@pytest.fixture
def make_destination():
    """Factory for small synthetic catalog entries (defaults to a cheap European city)."""

    def _make(
        id: str,
        *,
        city: str | None = None,
        country: str = "Portugal",
        region: str = "europe",
        airport_code: str | None = None,
        vibes: tuple[str, ...] = ("culture",),
        best_months: tuple[int, ...] = (5,),
        average_cost: float = 1200.0,
    ) -> Destination:
        return Destination(
            id=id,
            city=city or id.title(),
            country=country,
            region=region,
            airport_code=airport_code or f"X{id[:2].upper()}",
            vibes=list(vibes),
            best_months=list(best_months),
            average_cost=average_cost,
            latitude=0.0,
            longitude=0.0,
        )

    return _make


@pytest.fixture
def make_scored(make_destination):
    """Factory for already-scored candidates, so selection tests can pick exact totals."""

    def _make(
        id: str,
        total: float,
        *,
        seasonal_fit: float = 1.0,
        vibe_match: float = 1.0,
        revealed_pref: float = 0.5,
        **destination_kwargs,
    ) -> ScoredDestination:
        scores = ComponentScores(
            seasonal_fit=seasonal_fit,
            vibe_match=vibe_match,
            budget_fit=1.0,
            reachability=0.5,
            revealed_pref=revealed_pref,
        )
        return ScoredDestination(destination=make_destination(id, **destination_kwargs), scores=scores, total=total)

    return _make

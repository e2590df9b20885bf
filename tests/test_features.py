from datetime import date

import pytest

from tripselect.config.settings import get_settings
from tripselect.domain.models import BudgetRange, TravelerProfile
from tripselect.features.budget import classify_budget, score_budget_fit
from tripselect.features.reachability import reachability_for_hours, score_reachability
from tripselect.features.revealed_preference import preference_gate_open, score_revealed_preference
from tripselect.features.seasonal import score_seasonal_fit
from tripselect.features.vibe_match import score_vibe_match
from tripselect.preferences.contract import NullPreferenceModel


@pytest.fixture
def lisbon(make_destination):
    return make_destination(
        "lisbon",
        city="Lisbon",
        airport_code="LIS",
        vibes=("culture", "food", "history", "city"),
        best_months=(4, 5, 6, 9, 10),
        average_cost=1200,
    )


def _profile(*, min=800, max=1500, flexibility="strict") -> TravelerProfile:
    return TravelerProfile(budget=BudgetRange(min=min, max=max, flexibility=flexibility))


def test_lisbon_in_may_is_in_season_and_within_budget(lisbon):
    assert score_seasonal_fit(lisbon, date(2026, 5, 12)) == 1.0
    assert score_budget_fit(lisbon, _profile()) == 1.0


def test_seasonal_shoulder_and_off_season(make_destination):
    # August sits next to no best month here (July and September are both out).
    dest = make_destination("porto", best_months=(4, 5, 6, 10))
    assert score_seasonal_fit(dest, date(2026, 8, 1)) == 0.3
    assert score_seasonal_fit(dest, date(2026, 3, 1)) == 0.7
    assert score_seasonal_fit(dest, "2026-11-20") == 0.7


def test_seasonal_adjacent_month_wraps_year_boundary(make_destination):
    winter = make_destination("krabi", best_months=(12,))
    summer = make_destination("nordkapp", best_months=(1,))
    assert score_seasonal_fit(winter, date(2026, 1, 10)) == 0.7
    assert score_seasonal_fit(summer, date(2026, 12, 10)) == 0.7


def test_lisbon_in_august_is_shoulder_because_september_is_best(lisbon):
    assert score_seasonal_fit(lisbon, "2026-08-03T09:00:00Z") == 0.7


def test_vibe_match_is_fraction_of_requested_vibes(lisbon):
    assert score_vibe_match(lisbon, []) == 1.0
    assert score_vibe_match(lisbon, None) == 1.0
    assert score_vibe_match(lisbon, ["food", "beach"]) == 0.5
    assert score_vibe_match(lisbon, ["Culture"]) == 1.0
    assert score_vibe_match(lisbon, ["beach", "nightlife"]) == 0.0


def test_budget_slight_overage_depends_on_flexibility(make_destination):
    # 20% over 1500 is exactly 1800, which still counts as a slight overage.
    dest = make_destination("rome", average_cost=1800)
    assert score_budget_fit(dest, _profile(flexibility="flexible")) == 0.5
    assert score_budget_fit(dest, _profile(flexibility="splurge_ok")) == 0.8
    assert score_budget_fit(dest, _profile(flexibility="strict")) == 0.2


@pytest.mark.parametrize(
    ("cost", "flexibility", "expected"),
    [
        (2500, "splurge_ok", 0.4),
        (2500, "flexible", 0.1),
        (2500, "strict", 0.1),
        (500, "strict", 0.7),
        (800, "strict", 1.0),
        (1500, "strict", 1.0),
    ],
)
def test_budget_rule_table(make_destination, cost, flexibility, expected):
    dest = make_destination("x", average_cost=cost)
    assert score_budget_fit(dest, _profile(flexibility=flexibility)) == expected


def test_budget_without_max_never_penalizes(make_destination):
    dest = make_destination("dubai", average_cost=9000)
    assert score_budget_fit(dest, TravelerProfile()) == 1.0
    assert score_budget_fit(dest, _profile(min=100, max=None)) == 1.0


def test_classify_budget_names_the_first_matching_rule():
    budget = BudgetRange(min=800, max=1500)
    assert classify_budget(1000, budget, overage_ratio=0.2) == "within_range"
    assert classify_budget(1700, budget, overage_ratio=0.2) == "slight_overage"
    assert classify_budget(1900, budget, overage_ratio=0.2) == "heavy_overage"
    assert classify_budget(700, budget, overage_ratio=0.2) == "under_min"


@pytest.mark.parametrize(
    ("hours", "expected"),
    [(2.5, 1.0), (4, 1.0), (6, 0.8), (8, 0.8), (13.9, 0.5), (14, 0.5), (20, 0.3)],
)
def test_reachability_bands(hours, expected):
    assert reachability_for_hours(hours, settings=get_settings()) == expected


def test_reachability_is_neutral_without_origin_or_estimate(lisbon):
    assert score_reachability(lisbon, None) == 0.5
    assert score_reachability(lisbon, "") == 0.5
    assert score_reachability(lisbon, "ZZZ") == 0.5


def test_reachability_from_new_york_to_lisbon(lisbon):
    # North America east -> southern Europe is an 8h band, no transfer.
    assert score_reachability(lisbon, "JFK", transfers={}) == 0.8


class _ExplodingModel:
    def has_enough_signals(self, preferences):
        raise RuntimeError("model offline")

    def score_destination(self, preferences, destination):
        raise RuntimeError("model offline")


class _FixedModel:
    def __init__(self, value: float) -> None:
        self.value = value

    def has_enough_signals(self, preferences):
        return True

    def score_destination(self, preferences, destination):
        return self.value


def test_revealed_preference_is_neutral_when_gate_closed(lisbon):
    model = _FixedModel(0.9)
    assert score_revealed_preference(model, {"x": 1}, lisbon, gate=False) == 0.5
    assert score_revealed_preference(model, {"x": 1}, lisbon, gate=True) == 0.9


def test_revealed_preference_clamps_model_output(lisbon):
    assert score_revealed_preference(_FixedModel(1.7), {}, lisbon, gate=True) == 1.0
    assert score_revealed_preference(_FixedModel(-0.2), {}, lisbon, gate=True) == 0.0


def test_preference_gate_handles_missing_handle_and_errors(lisbon, caplog):
    assert preference_gate_open(_FixedModel(0.9), None) is False
    assert preference_gate_open(NullPreferenceModel(), {"x": 1}) is False

    with caplog.at_level("WARNING"):
        assert preference_gate_open(_ExplodingModel(), {"x": 1}) is False
        assert score_revealed_preference(_ExplodingModel(), {"x": 1}, lisbon, gate=True) == 0.5
    assert "model offline" in caplog.text

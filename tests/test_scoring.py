"""Tests for expansion/scoring.py."""

import pytest

from expansion.models import NOVELTY_IDS, MicroNovelty, Mode
from expansion.scoring import (
    calculate_score,
    calculate_sludge,
    micro_novelty_score,
    round1,
    streak_multiplier,
    tier_label,
)


def test_sludge_clearing_counts_half():
    assert calculate_sludge(2, 1) == 1.5
    assert calculate_sludge(1, 2) == 0


@pytest.mark.parametrize("dopamine,clearing", [(0, 0), (0, 10), (3, 7), (0.5, 1.1)])
def test_sludge_never_negative(dopamine, clearing):
    assert calculate_sludge(dopamine, clearing) >= 0


def test_micro_novelty_score():
    assert micro_novelty_score(MicroNovelty()) == 0
    assert micro_novelty_score(MicroNovelty.of("newBook", "newPlace")) == 1.0
    assert micro_novelty_score(MicroNovelty.of(*NOVELTY_IDS)) == 2.5


def test_streak_multiplier_capped():
    assert streak_multiplier(0) == 1.0
    assert streak_multiplier(3) == pytest.approx(1.3)
    assert streak_multiplier(5) == 1.5
    assert streak_multiplier(30) == 1.5


def test_round1_rounds_halves_up():
    assert round1(0.25) == 0.3
    assert round1(7.800000000000001) == 7.8
    assert round1(0.04) == 0.0


def test_scenario_a_building(make_day):
    day = make_day(
        "2026-03-01",
        environment=0.5,
        business=4,
        training=2,
        novelty=("newBook", "newChallenge"),
        dopamine=1,
        clearing=2,
    )
    assert calculate_score(day, streak=3) == 7.8


def test_scenario_b_expanding(make_day):
    day = make_day(
        "2026-03-01",
        mode=Mode.EXPANDING,
        business=1,
        training=0,
        macro=8,
        dopamine=2,
        clearing=1,
    )
    assert calculate_score(day, streak=0) == 6.4


@pytest.mark.parametrize("environment,streak,dopamine", [(1.0, 0, 0), (0.1, 9, 5), (0.7, 3, 1)])
def test_building_zero_focus_scores_zero(make_day, environment, streak, dopamine):
    day = make_day(
        "2026-03-01",
        business=0,
        training=0,
        environment=environment,
        dopamine=dopamine,
        novelty=("newBook", "newPerson", "newMethod"),
    )
    assert calculate_score(day, streak) == 0


def test_expanding_ignores_environment_and_streak(make_day):
    a = make_day("2026-03-01", mode=Mode.EXPANDING, business=0, training=0, macro=6, environment=0.1)
    b = make_day("2026-03-01", mode=Mode.EXPANDING, business=0, training=0, macro=6, environment=1.0)
    # zero focus still scores on novelty alone
    assert calculate_score(a, 0) == 6.0
    assert calculate_score(b, 10) == 6.0


def test_building_ignores_macro_novelty(make_day):
    low = make_day("2026-03-01", macro=1)
    high = make_day("2026-03-01", macro=10)
    assert calculate_score(low, 2) == calculate_score(high, 2)


def test_expanding_missing_macro_scores_zero(make_day):
    day = make_day("2026-03-01", mode=Mode.EXPANDING, macro=None)
    assert calculate_score(day, 0) == 0


def test_score_is_deterministic(make_day):
    day = make_day("2026-03-01", novelty=("newMethod",), dopamine=2.5, clearing=1)
    assert calculate_score(day, 4) == calculate_score(day, 4)


def test_tier_labels():
    assert tier_label(40, Mode.BUILDING) == "Exceptional"
    assert tier_label(8, Mode.BUILDING) == "Solid"
    assert tier_label(7.9, Mode.BUILDING) == "Building"
    assert tier_label(40, Mode.EXPANDING) == "Exploring"
    assert tier_label(50, Mode.EXPANDING) == "Full Expansion"
    assert tier_label(3, Mode.EXPANDING) == "Starting"

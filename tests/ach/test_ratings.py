import pytest
from intel_workbench.ach.ratings import (
    DEFAULT_WEIGHT_PROFILE,
    RATING_CYCLE,
    WeightProfile,
    cycle_rating,
    rating_label,
)


@pytest.mark.parametrize("current,expected", [
    ("NA", "C"),
    ("C", "I"),
    ("I", "N"),
    ("N", "NA"),
])
def test_cycle_rating_advances_one_step(current, expected):
    assert cycle_rating(current) == expected


@pytest.mark.parametrize("start", RATING_CYCLE)
def test_cycle_rating_returns_to_start_after_four_steps(start):
    state = start
    for _ in range(4):
        state = cycle_rating(state)
    assert state == start


@pytest.mark.parametrize("unset", [None, ""])
def test_cycle_rating_treats_unset_as_na(unset):
    assert cycle_rating(unset) == "C"


@pytest.mark.parametrize("bogus", ["X", "c", "Consistent"])
def test_cycle_rating_resets_unknown_values_to_na(bogus):
    assert cycle_rating(bogus) == "NA"


def test_cycle_rating_is_a_bijection():
    assert sorted(cycle_rating(r) for r in RATING_CYCLE) == sorted(RATING_CYCLE)


def test_default_weights():
    p = DEFAULT_WEIGHT_PROFILE
    assert [p.rating_weight(r) for r in ("C", "I", "N", "NA")] == [-1, 2, 0, 0]
    assert [p.credibility_weight(lv) for lv in ("High", "Medium", "Low")] == [3, 2, 1]
    assert [p.relevance_weight(lv) for lv in ("High", "Medium", "Low")] == [1.5, 1.0, 0.5]


def test_unknown_levels_use_fallback_multipliers():
    p = WeightProfile(credibility_fallback=1, relevance_fallback=1.0)
    assert p.credibility_weight("Bogus") == 1
    assert p.relevance_weight(None) == 1.0


def test_missing_rating_weighs_nothing():
    assert DEFAULT_WEIGHT_PROFILE.rating_weight(None) == 0


def test_rating_label():
    assert rating_label("C") == "Consistent"
    assert rating_label(None) == "N/A"

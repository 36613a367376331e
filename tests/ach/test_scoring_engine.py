import pytest
from intel_workbench.ach import scoring_engine
from intel_workbench.ach.ratings import WeightProfile
from intel_workbench.ach.scoring_engine import AchScoringEngine
from intel_workbench.reports.models import AchMatrix, Evidence, Hypothesis


def test_worked_example(two_hypothesis_matrix):
    assert scoring_engine.score(two_hypothesis_matrix, "h1") == -4.5
    assert scoring_engine.score(two_hypothesis_matrix, "h2") == 9
    assert scoring_engine.find_preferred(two_hypothesis_matrix) == "h1"


def test_score_all_has_one_entry_per_hypothesis(two_hypothesis_matrix):
    scores = scoring_engine.score_all(two_hypothesis_matrix)
    assert set(scores) == {"h1", "h2"}


def test_empty_matrix_scores_are_empty():
    matrix = AchMatrix(id="m", name="empty")
    assert scoring_engine.score_all(matrix) == {}
    assert scoring_engine.find_preferred(matrix) is None
    assert scoring_engine.normalize(matrix) == {}
    assert scoring_engine.rank(matrix) == []


def test_unrated_cells_contribute_nothing():
    matrix = AchMatrix(
        id="m", name="sparse",
        hypotheses=[Hypothesis(id="h1", name="H1")],
        evidence=[Evidence(id="e1", credibility="High", relevance="High")],
        ratings={},
    )
    assert scoring_engine.score(matrix, "h1") == 0


def test_unknown_hypothesis_scores_zero(two_hypothesis_matrix):
    assert scoring_engine.score(two_hypothesis_matrix, "missing") == 0


def test_unknown_level_uses_fallback():
    matrix = AchMatrix(
        id="m", name="legacy",
        hypotheses=[Hypothesis(id="h1", name="H1")],
        evidence=[Evidence(id="e1", credibility="Certain", relevance="Huge")],
        ratings={"e1": {"h1": "I"}},
    )
    assert scoring_engine.score(matrix, "h1") == 2


def test_ties_keep_earliest_hypothesis():
    matrix = AchMatrix(
        id="m", name="tie",
        hypotheses=[Hypothesis(id="a", name="A"), Hypothesis(id="b", name="B"), Hypothesis(id="c", name="C")],
        evidence=[Evidence(id="e1", credibility="Low", relevance="Low")],
        ratings={"e1": {"a": "I", "b": "C", "c": "C"}},
    )
    assert scoring_engine.find_preferred(matrix) == "b"


def test_normalize_all_equal_is_fifty():
    matrix = AchMatrix(
        id="m", name="flat",
        hypotheses=[Hypothesis(id="a", name="A"), Hypothesis(id="b", name="B")],
    )
    assert scoring_engine.normalize(matrix) == {"a": 50, "b": 50}


def test_normalize_min_max(two_hypothesis_matrix):
    assert scoring_engine.normalize(two_hypothesis_matrix) == {"h1": 0, "h2": 100}


def test_normalize_rounds_half_up():
    # scores 0, 1, 8 -> 1/8 * 100 = 12.5
    matrix = AchMatrix(
        id="m", name="half",
        hypotheses=[Hypothesis(id="a", name="A"), Hypothesis(id="b", name="B"), Hypothesis(id="c", name="C")],
        evidence=[
            Evidence(id="e1", credibility="Low", relevance="Low"),
            Evidence(id="e2", credibility="Medium", relevance="High"),
            Evidence(id="e3", credibility="Low", relevance="Medium"),
        ],
        ratings={
            "e1": {"b": "I"},
            "e2": {"c": "I"},
            "e3": {"c": "I"},
        },
    )
    assert scoring_engine.score_all(matrix) == {"a": 0, "b": 1.0, "c": 8.0}
    assert scoring_engine.normalize(matrix) == {"a": 0, "b": 13, "c": 100}


def test_sample_project_scores(sample_matrix):
    scores = scoring_engine.score_all(sample_matrix)
    assert scores == {"h1-gru": -22.5, "h2-apt41": 32, "h3-criminal": 35, "h4-unknown": 9}
    assert scoring_engine.find_preferred(sample_matrix) == "h1-gru"
    assert scoring_engine.normalize(sample_matrix) == {
        "h1-gru": 0, "h2-apt41": 95, "h3-criminal": 100, "h4-unknown": 55,
    }


def test_rank_orders_by_score(sample_matrix):
    ranked = scoring_engine.rank(sample_matrix)
    assert [s.hypothesis_id for s in ranked] == ["h1-gru", "h4-unknown", "h2-apt41", "h3-criminal"]
    assert [s.preferred for s in ranked] == [True, False, False, False]


def test_custom_profile_changes_scores(two_hypothesis_matrix):
    engine = AchScoringEngine(profile=WeightProfile(rating={"C": -2, "I": 1, "N": 0, "NA": 0}))
    assert engine.score(two_hypothesis_matrix, "h1") == -9
    assert engine.score(two_hypothesis_matrix, "h2") == 4.5


def test_bad_profile_path_falls_back_to_defaults(tmp_path, two_hypothesis_matrix):
    engine = AchScoringEngine(profile_path=tmp_path / "missing.yaml")
    assert engine.score(two_hypothesis_matrix, "h2") == 9


@pytest.mark.parametrize("ratings", [
    {"e1": {"h1": "NA", "h2": "N"}},
    {"e1": {}},
    {},
])
def test_neutral_ratings_score_zero(two_hypothesis_matrix, ratings):
    two_hypothesis_matrix.ratings = ratings
    assert scoring_engine.score_all(two_hypothesis_matrix) == {"h1": 0, "h2": 0}

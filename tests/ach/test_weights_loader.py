import pytest
from intel_workbench.config.defaults import DEFAULT_WEIGHT_PROFILE_PATH
from intel_workbench.config.weights_loader import load_weight_profile, validate_section
from intel_workbench.ach.ratings import DEFAULT_WEIGHT_PROFILE


def test_bundled_profile_matches_defaults():
    profile = load_weight_profile(DEFAULT_WEIGHT_PROFILE_PATH)
    assert profile == DEFAULT_WEIGHT_PROFILE


def test_partial_profile_overrides_only_given_keys(tmp_path):
    path = tmp_path / "weights.yaml"
    path.write_text("credibility:\n  High: 5\n", encoding="utf-8")

    profile = load_weight_profile(path)

    assert profile.credibility_weight("High") == 5
    assert profile.credibility_weight("Low") == 1
    assert profile.rating_weight("I") == 2


@pytest.mark.parametrize("content", [
    "- just\n- a list\n",
    "rating:\n  X: 1\n",
    "rating:\n  C: high\n",
    "relevance:\n  High: true\n",
    "credibility: 3\n",
    "fallback:\n  credibility: none\n",
])
def test_invalid_profiles_raise(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_weight_profile(path)


def test_validate_section_strips_keys():
    assert validate_section("rating", {" C ": -3}, ["C", "I"]) == {"C": -3}

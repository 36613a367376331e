import pytest
from intel_workbench.data.sample_project import build_sample_project
from intel_workbench.reports.models import AchMatrix, Evidence, Hypothesis


@pytest.fixture
def two_hypothesis_matrix():
    """H1/H2 with a single High/High evidence row rated C for H1 and I for H2."""
    return AchMatrix(
        id="m1",
        name="Worked example",
        hypotheses=[Hypothesis(id="h1", name="H1"), Hypothesis(id="h2", name="H2")],
        evidence=[Evidence(id="e1", description="E1", credibility="High", relevance="High")],
        ratings={"e1": {"h1": "C", "h2": "I"}},
    )


@pytest.fixture
def sample_project():
    return build_sample_project()


@pytest.fixture
def sample_matrix(sample_project):
    return sample_project.ach_matrices[0]

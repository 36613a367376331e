from intel_workbench.data.sample_project import SAMPLE_PROJECT_ID, build_sample_project


def test_sample_shape(sample_project):
    matrix = sample_project.ach_matrices[0]
    assert sample_project.id == SAMPLE_PROJECT_ID
    assert len(matrix.hypotheses) == 4
    assert len(matrix.evidence) == 8
    assert set(matrix.ratings) == set(matrix.evidence_ids())
    for row in matrix.ratings.values():
        assert set(row) == set(matrix.hypothesis_ids())


def test_each_call_returns_a_fresh_copy():
    first = build_sample_project()
    first.ach_matrices[0].ratings["e1-notpetya"]["h1-gru"] = "I"
    assert build_sample_project().ach_matrices[0].ratings["e1-notpetya"]["h1-gru"] == "C"

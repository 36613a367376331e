import pytest
from intel_workbench.ach import matrix_ops


@pytest.fixture
def matrix():
    m = matrix_ops.create_matrix("Attribution")
    m = matrix_ops.add_hypothesis(m, "State actor")
    m = matrix_ops.add_hypothesis(m, "Criminal group")
    m = matrix_ops.add_evidence(m, "Wiper reused", source="Vendor", credibility="High", relevance="Medium")
    return m


def test_add_evidence_creates_empty_rating_row(matrix):
    evidence_id = matrix.evidence[0].id
    assert matrix.ratings == {evidence_id: {}}


def test_operations_do_not_mutate_input(matrix):
    before = matrix.to_dict()
    matrix_ops.add_hypothesis(matrix, "Insider")
    matrix_ops.remove_evidence(matrix, matrix.evidence[0].id)
    assert matrix.to_dict() == before


def test_set_and_get_rating(matrix):
    e, h = matrix.evidence[0].id, matrix.hypotheses[0].id
    assert matrix_ops.get_rating(matrix, e, h) == "NA"
    updated = matrix_ops.set_rating(matrix, e, h, "I")
    assert matrix_ops.get_rating(updated, e, h) == "I"


def test_set_rating_rejects_unknown_value(matrix):
    with pytest.raises(ValueError):
        matrix_ops.set_rating(matrix, matrix.evidence[0].id, matrix.hypotheses[0].id, "X")


def test_set_rating_rejects_dangling_ids(matrix):
    with pytest.raises(KeyError):
        matrix_ops.set_rating(matrix, "nope", matrix.hypotheses[0].id, "C")
    with pytest.raises(KeyError):
        matrix_ops.set_rating(matrix, matrix.evidence[0].id, "nope", "C")


def test_advance_rating_cycles(matrix):
    e, h = matrix.evidence[0].id, matrix.hypotheses[0].id
    seen = []
    for _ in range(4):
        matrix = matrix_ops.advance_rating(matrix, e, h)
        seen.append(matrix_ops.get_rating(matrix, e, h))
    assert seen == ["C", "I", "N", "NA"]


def test_remove_hypothesis_cascades_to_ratings(matrix):
    e = matrix.evidence[0].id
    h1, h2 = matrix.hypothesis_ids()
    matrix = matrix_ops.set_rating(matrix, e, h1, "C")
    matrix = matrix_ops.set_rating(matrix, e, h2, "I")

    updated = matrix_ops.remove_hypothesis(matrix, h1)

    assert updated.hypothesis_ids() == [h2]
    assert updated.ratings == {e: {h2: "I"}}


def test_remove_evidence_drops_its_row(matrix):
    e = matrix.evidence[0].id
    updated = matrix_ops.remove_evidence(matrix, e)
    assert updated.evidence == []
    assert e not in updated.ratings


def test_update_evidence_validates_levels(matrix):
    e = matrix.evidence[0].id
    updated = matrix_ops.update_evidence(matrix, e, credibility="Low", source="OSINT")
    assert updated.evidence[0].credibility == "Low"
    assert updated.evidence[0].source == "OSINT"

    with pytest.raises(ValueError):
        matrix_ops.update_evidence(matrix, e, relevance="Extreme")
    with pytest.raises(ValueError):
        matrix_ops.update_evidence(matrix, e, id="forged")


def test_add_evidence_rejects_bad_level():
    with pytest.raises(ValueError):
        matrix_ops.add_evidence(matrix_ops.create_matrix("m"), "x", credibility="Very High")


def test_update_hypothesis_keeps_unspecified_fields(matrix):
    h = matrix.hypotheses[0]
    updated = matrix_ops.update_hypothesis(matrix, h.id, description="GRU unit")
    assert updated.hypotheses[0].name == "State actor"
    assert updated.hypotheses[0].description == "GRU unit"


def test_rename_matrix(matrix):
    assert matrix_ops.rename_matrix(matrix, "Renamed").name == "Renamed"


def test_iter_rating_cells(matrix):
    e = matrix.evidence[0].id
    h1, h2 = matrix.hypothesis_ids()
    matrix = matrix_ops.set_rating(matrix, e, h1, "C")
    matrix = matrix_ops.set_rating(matrix, e, h2, "N")
    assert dict(matrix_ops.iter_rating_cells(matrix)) == {(e, h1): "C", (e, h2): "N"}

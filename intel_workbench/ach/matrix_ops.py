"""
Snapshot-style editing of ACH matrices.

Every function returns a new `AchMatrix` and leaves its input untouched, so
callers can keep the previous snapshot around (undo, diffing, persistence).
Removing a hypothesis or an evidence row also removes every rating that
referenced it.
"""
from dataclasses import replace
from typing import Dict, Iterator, Optional, Tuple
from intel_workbench.ach.ratings import cycle_rating
from intel_workbench.reports.models import AchMatrix, Evidence, Hypothesis, RATINGS, LEVELS
from intel_workbench.utils.id_utils import generate_id, now_iso


def _copy_ratings(matrix: AchMatrix) -> Dict[str, Dict[str, str]]:
    return {eid: dict(row) for eid, row in matrix.ratings.items()}


def _touch(matrix: AchMatrix, **changes) -> AchMatrix:
    return replace(matrix, updated_at=now_iso(), **changes)


def _check_level(field_name: str, level: str) -> None:
    if level not in LEVELS:
        raise ValueError(f"{field_name} must be one of {LEVELS}, got {level!r}")


def create_matrix(name: str) -> AchMatrix:
    now = now_iso()
    return AchMatrix(id=generate_id(), name=name, created_at=now, updated_at=now)


def rename_matrix(matrix: AchMatrix, name: str) -> AchMatrix:
    return _touch(matrix, name=name)


def add_hypothesis(matrix: AchMatrix, name: str, description: str = "") -> AchMatrix:
    hypothesis = Hypothesis(id=generate_id(), name=name, description=description)
    return _touch(matrix, hypotheses=[*matrix.hypotheses, hypothesis])


def update_hypothesis(matrix: AchMatrix, hypothesis_id: str,
                      name: Optional[str] = None, description: Optional[str] = None) -> AchMatrix:
    hypotheses = []
    for h in matrix.hypotheses:
        if h.id == hypothesis_id:
            h = replace(
                h,
                name=h.name if name is None else name,
                description=h.description if description is None else description,
            )
        hypotheses.append(h)
    return _touch(matrix, hypotheses=hypotheses)


def remove_hypothesis(matrix: AchMatrix, hypothesis_id: str) -> AchMatrix:
    ratings = _copy_ratings(matrix)
    for row in ratings.values():
        row.pop(hypothesis_id, None)
    return _touch(
        matrix,
        hypotheses=[h for h in matrix.hypotheses if h.id != hypothesis_id],
        ratings=ratings,
    )


def add_evidence(matrix: AchMatrix, description: str, source: str = "",
                 credibility: str = "Medium", relevance: str = "Medium") -> AchMatrix:
    _check_level("credibility", credibility)
    _check_level("relevance", relevance)
    evidence = Evidence(
        id=generate_id(),
        description=description,
        source=source,
        credibility=credibility,
        relevance=relevance,
    )
    ratings = _copy_ratings(matrix)
    ratings[evidence.id] = {}
    return _touch(matrix, evidence=[*matrix.evidence, evidence], ratings=ratings)


def update_evidence(matrix: AchMatrix, evidence_id: str, **updates) -> AchMatrix:
    unknown = set(updates) - {"description", "source", "credibility", "relevance"}
    if unknown:
        raise ValueError(f"Unknown evidence fields: {sorted(unknown)}")
    for key in ("credibility", "relevance"):
        if key in updates:
            _check_level(key, updates[key])

    evidence = [replace(e, **updates) if e.id == evidence_id else e for e in matrix.evidence]
    return _touch(matrix, evidence=evidence)


def remove_evidence(matrix: AchMatrix, evidence_id: str) -> AchMatrix:
    ratings = _copy_ratings(matrix)
    ratings.pop(evidence_id, None)
    return _touch(
        matrix,
        evidence=[e for e in matrix.evidence if e.id != evidence_id],
        ratings=ratings,
    )


def get_rating(matrix: AchMatrix, evidence_id: str, hypothesis_id: str) -> str:
    return matrix.ratings.get(evidence_id, {}).get(hypothesis_id) or "NA"


def set_rating(matrix: AchMatrix, evidence_id: str, hypothesis_id: str, rating: str) -> AchMatrix:
    if rating not in RATINGS:
        raise ValueError(f"rating must be one of {RATINGS}, got {rating!r}")
    if evidence_id not in matrix.evidence_ids():
        raise KeyError(f"Unknown evidence id: {evidence_id}")
    if hypothesis_id not in matrix.hypothesis_ids():
        raise KeyError(f"Unknown hypothesis id: {hypothesis_id}")

    ratings = _copy_ratings(matrix)
    ratings.setdefault(evidence_id, {})[hypothesis_id] = rating
    return _touch(matrix, ratings=ratings)


def advance_rating(matrix: AchMatrix, evidence_id: str, hypothesis_id: str) -> AchMatrix:
    current = matrix.ratings.get(evidence_id, {}).get(hypothesis_id)
    return set_rating(matrix, evidence_id, hypothesis_id, cycle_rating(current))


def iter_rating_cells(matrix: AchMatrix) -> Iterator[Tuple[Tuple[str, str], str]]:
    """Flat ((evidence_id, hypothesis_id), rating) view of the sparse rating map."""
    for evidence_id, row in matrix.ratings.items():
        for hypothesis_id, rating in row.items():
            yield (evidence_id, hypothesis_id), rating

from typing import Any, Dict, List, Type
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from intel_workbench.reports.models import RATINGS, LEVELS
from intel_workbench.utils.id_utils import now_iso, is_iso_timestamp
from intel_workbench.utils.logger import get_logger

logger = get_logger()


def _require_text(value: Any) -> Any:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("must be a non-empty string")
    return value


def _text_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _timestamp_or_now(value: Any) -> str:
    return value if is_iso_timestamp(value) else now_iso()


def _keep_valid(items: Any, model: Type[BaseModel], label: str) -> List[BaseModel]:
    """Validate each element on its own; malformed elements are dropped, not fatal."""
    if not isinstance(items, list):
        return []
    kept = []
    for item in items:
        try:
            kept.append(model.model_validate(item))
        except ValidationError as ex:
            logger.debug(f"[ImportNormalizer] Dropped invalid {label}: {ex.error_count()} error(s)")
    return kept


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class HypothesisModel(_Lenient):
    id: str
    name: str
    description: str = ""

    @field_validator("id", "name", mode="before")
    @classmethod
    def required_text(cls, v):
        return _require_text(v)

    @field_validator("description", mode="before")
    @classmethod
    def optional_text(cls, v):
        return _text_or_empty(v)


class EvidenceModel(_Lenient):
    id: str
    description: str = ""
    source: str = ""
    credibility: str = "Medium"
    relevance: str = "Medium"

    @field_validator("id", mode="before")
    @classmethod
    def required_text(cls, v):
        return _require_text(v)

    @field_validator("description", "source", mode="before")
    @classmethod
    def optional_text(cls, v):
        return _text_or_empty(v)

    @field_validator("credibility", "relevance", mode="before")
    @classmethod
    def known_level(cls, v):
        if isinstance(v, str) and v in LEVELS:
            return v
        logger.debug(f"[ImportNormalizer] Unknown level {v!r} coerced to Medium")
        return "Medium"


class AchMatrixModel(_Lenient):
    id: str
    name: str
    hypotheses: List[HypothesisModel] = Field(default_factory=list)
    evidence: List[EvidenceModel] = Field(default_factory=list)
    ratings: Dict[str, Any] = Field(default_factory=dict)
    created_at: str = Field(default_factory=now_iso, alias="createdAt")
    updated_at: str = Field(default_factory=now_iso, alias="updatedAt")

    @field_validator("id", "name", mode="before")
    @classmethod
    def required_text(cls, v):
        return _require_text(v)

    @field_validator("hypotheses", mode="before")
    @classmethod
    def valid_hypotheses(cls, v):
        return _keep_valid(v, HypothesisModel, "hypothesis")

    @field_validator("evidence", mode="before")
    @classmethod
    def valid_evidence(cls, v):
        return _keep_valid(v, EvidenceModel, "evidence")

    @field_validator("ratings", mode="before")
    @classmethod
    def ratings_mapping(cls, v):
        return v if isinstance(v, dict) else {}

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def timestamp(cls, v):
        return _timestamp_or_now(v)

    @model_validator(mode="after")
    def rebuild_ratings(self):
        # Built from the validated id sets only; the incoming mapping is never trusted
        hypothesis_ids = {h.id for h in self.hypotheses}
        rebuilt: Dict[str, Dict[str, str]] = {}
        dropped = 0
        for evidence in self.evidence:
            row = self.ratings.get(evidence.id)
            clean: Dict[str, str] = {}
            if isinstance(row, dict):
                for hypothesis_id, rating in row.items():
                    if hypothesis_id in hypothesis_ids and isinstance(rating, str) and rating in RATINGS:
                        clean[hypothesis_id] = rating
                    else:
                        dropped += 1
            rebuilt[evidence.id] = clean
        if dropped:
            logger.debug(f"[ImportNormalizer] Matrix {self.id}: dropped {dropped} dangling or invalid rating(s)")
        self.ratings = rebuilt
        return self


class CognitiveBiasModel(_Lenient):
    id: str
    name: str
    description: str = ""
    category: str = ""
    checked: bool = False
    mitigation_notes: str = Field(default="", alias="mitigationNotes")

    @field_validator("id", "name", mode="before")
    @classmethod
    def required_text(cls, v):
        return _require_text(v)

    @field_validator("description", "category", "mitigation_notes", mode="before")
    @classmethod
    def optional_text(cls, v):
        return _text_or_empty(v)

    @field_validator("checked", mode="before")
    @classmethod
    def strict_flag(cls, v):
        return v is True


class BiasChecklistModel(_Lenient):
    id: str
    name: str
    biases: List[CognitiveBiasModel] = Field(default_factory=list)
    created_at: str = Field(default_factory=now_iso, alias="createdAt")
    updated_at: str = Field(default_factory=now_iso, alias="updatedAt")

    @field_validator("id", "name", mode="before")
    @classmethod
    def required_text(cls, v):
        return _require_text(v)

    @field_validator("biases", mode="before")
    @classmethod
    def valid_biases(cls, v):
        return _keep_valid(v, CognitiveBiasModel, "bias")

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def timestamp(cls, v):
        return _timestamp_or_now(v)


class ProjectDocument(_Lenient):
    id: str
    name: str
    description: str = ""
    ach_matrices: List[AchMatrixModel] = Field(default_factory=list, alias="achMatrices")
    bias_checklists: List[BiasChecklistModel] = Field(default_factory=list, alias="biasChecklists")
    created_at: str = Field(default_factory=now_iso, alias="createdAt")
    updated_at: str = Field(default_factory=now_iso, alias="updatedAt")

    @field_validator("id", "name", mode="before")
    @classmethod
    def required_text(cls, v):
        return _require_text(v)

    @field_validator("description", mode="before")
    @classmethod
    def optional_text(cls, v):
        return _text_or_empty(v)

    @field_validator("ach_matrices", mode="before")
    @classmethod
    def valid_matrices(cls, v):
        return _keep_valid(v, AchMatrixModel, "ACH matrix")

    @field_validator("bias_checklists", mode="before")
    @classmethod
    def valid_checklists(cls, v):
        return _keep_valid(v, BiasChecklistModel, "bias checklist")

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def timestamp(cls, v):
        return _timestamp_or_now(v)

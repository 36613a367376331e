from dataclasses import dataclass, field
from typing import List, Dict, Any
from intel_workbench.utils.id_utils import generate_id, now_iso

RATINGS = ("C", "I", "N", "NA")
LEVELS = ("High", "Medium", "Low")

# evidence id -> hypothesis id -> rating
RatingMap = Dict[str, Dict[str, str]]


@dataclass
class Hypothesis:
    id: str
    name: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Hypothesis":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description}


@dataclass
class Evidence:
    id: str
    description: str = ""
    source: str = ""
    credibility: str = "Medium"
    relevance: str = "Medium"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Evidence":
        return cls(
            id=data["id"],
            description=data.get("description", ""),
            source=data.get("source", ""),
            credibility=data.get("credibility", "Medium"),
            relevance=data.get("relevance", "Medium"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "source": self.source,
            "credibility": self.credibility,
            "relevance": self.relevance,
        }


@dataclass
class AchMatrix:
    id: str
    name: str
    hypotheses: List[Hypothesis] = field(default_factory=list)  # columns
    evidence: List[Evidence] = field(default_factory=list)      # rows
    ratings: RatingMap = field(default_factory=dict)
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AchMatrix":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            hypotheses=[Hypothesis.from_dict(h) for h in data.get("hypotheses", [])],
            evidence=[Evidence.from_dict(e) for e in data.get("evidence", [])],
            ratings={eid: dict(row) for eid, row in (data.get("ratings") or {}).items()},
            created_at=data.get("createdAt") or now_iso(),
            updated_at=data.get("updatedAt") or now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "hypotheses": [h.to_dict() for h in self.hypotheses],
            "evidence": [e.to_dict() for e in self.evidence],
            "ratings": {eid: dict(row) for eid, row in self.ratings.items()},
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def hypothesis_ids(self) -> List[str]:
        return [h.id for h in self.hypotheses]

    def evidence_ids(self) -> List[str]:
        return [e.id for e in self.evidence]


@dataclass
class CognitiveBias:
    id: str
    name: str
    description: str = ""
    category: str = ""
    checked: bool = False
    mitigation_notes: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CognitiveBias":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            category=data.get("category", ""),
            checked=bool(data.get("checked", False)),
            mitigation_notes=data.get("mitigationNotes", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "checked": self.checked,
            "mitigationNotes": self.mitigation_notes,
        }


@dataclass
class BiasChecklist:
    id: str
    name: str
    biases: List[CognitiveBias] = field(default_factory=list)
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BiasChecklist":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            biases=[CognitiveBias.from_dict(b) for b in data.get("biases", [])],
            created_at=data.get("createdAt") or now_iso(),
            updated_at=data.get("updatedAt") or now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "biases": [b.to_dict() for b in self.biases],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class Project:
    id: str
    name: str
    description: str = ""
    ach_matrices: List[AchMatrix] = field(default_factory=list)
    bias_checklists: List[BiasChecklist] = field(default_factory=list)
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)

    @classmethod
    def new(cls, name: str, description: str = "") -> "Project":
        return cls(id=generate_id(), name=name, description=description)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            ach_matrices=[AchMatrix.from_dict(m) for m in data.get("achMatrices", [])],
            bias_checklists=[BiasChecklist.from_dict(c) for c in data.get("biasChecklists", [])],
            created_at=data.get("createdAt") or now_iso(),
            updated_at=data.get("updatedAt") or now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "achMatrices": [m.to_dict() for m in self.ach_matrices],
            "biasChecklists": [c.to_dict() for c in self.bias_checklists],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class ExtractedIOC:
    value: str              # raw text as matched, possibly defanged
    type: str
    selected: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "type": self.type, "selected": self.selected}


@dataclass
class ExtractionResult:
    indicators: List[ExtractedIOC] = field(default_factory=list)
    duplicate_count: int = 0


@dataclass
class HypothesisScore:
    hypothesis_id: str
    name: str
    score: float
    normalized: int
    preferred: bool = False

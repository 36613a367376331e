import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional
import jsonschema
from intel_workbench.utils.id_utils import generate_id, now_iso
from intel_workbench.utils.logger import get_logger

logger = get_logger()

VERTEX_KEYS = ("adversary", "capability", "infrastructure", "victim")

KILL_CHAIN_LABELS = {
    "recon": "Reconnaissance",
    "weaponization": "Weaponization",
    "delivery": "Delivery",
    "exploitation": "Exploitation",
    "installation": "Installation",
    "c2": "Command & Control",
    "actions": "Actions on Objectives",
}

CONFIDENCE_OPTIONS = ("Confirmed", "Probable", "Possible", "Doubtful")

SOURCE_RELIABILITY_LABELS = {
    "A": "A: Completely reliable",
    "B": "B: Usually reliable",
    "C": "C: Fairly reliable",
    "D": "D: Not usually reliable",
    "E": "E: Unreliable",
    "F": "F: Reliability unknown",
}


def _snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class _Vertex:
    """Shared wire conversion for the four vertex dataclasses."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        data = data or {}
        return cls(**{f.name: str(data.get(_snake_to_camel(f.name), "")) for f in fields(cls)})

    def to_dict(self) -> Dict[str, str]:
        return {_snake_to_camel(f.name): getattr(self, f.name) for f in fields(self)}

    def has_data(self) -> bool:
        return any(getattr(self, f.name).strip() for f in fields(self))


@dataclass
class AdversaryVertex(_Vertex):
    name: str = ""
    aliases: str = ""
    motivation: str = ""
    attribution_confidence: str = ""


@dataclass
class CapabilityVertex(_Vertex):
    malware: str = ""
    tools: str = ""
    techniques: str = ""
    attack_ids: str = ""


@dataclass
class InfrastructureVertex(_Vertex):
    c2_servers: str = ""
    domains: str = ""
    ips: str = ""
    hosting_providers: str = ""


@dataclass
class VictimVertex(_Vertex):
    organization: str = ""
    sector: str = ""
    geography: str = ""
    impact: str = ""


@dataclass
class DiamondMeta:
    timestamp: str = ""
    phase: str = "recon"
    confidence: str = "Possible"
    source_reliability: str = "C"
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiamondMeta":
        data = data or {}
        return cls(
            timestamp=data.get("timestamp", ""),
            phase=data.get("phase", "recon"),
            confidence=data.get("confidence", "Possible"),
            source_reliability=data.get("sourceReliability", "C"),
            notes=data.get("notes", ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "timestamp": self.timestamp,
            "phase": self.phase,
            "confidence": self.confidence,
            "sourceReliability": self.source_reliability,
            "notes": self.notes,
        }


@dataclass
class DiamondEvent:
    id: str
    name: str
    adversary: AdversaryVertex = field(default_factory=AdversaryVertex)
    capability: CapabilityVertex = field(default_factory=CapabilityVertex)
    infrastructure: InfrastructureVertex = field(default_factory=InfrastructureVertex)
    victim: VictimVertex = field(default_factory=VictimVertex)
    meta: DiamondMeta = field(default_factory=DiamondMeta)
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiamondEvent":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            adversary=AdversaryVertex.from_dict(data.get("adversary")),
            capability=CapabilityVertex.from_dict(data.get("capability")),
            infrastructure=InfrastructureVertex.from_dict(data.get("infrastructure")),
            victim=VictimVertex.from_dict(data.get("victim")),
            meta=DiamondMeta.from_dict(data.get("meta")),
            created_at=data.get("createdAt") or now_iso(),
            updated_at=data.get("updatedAt") or now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "adversary": self.adversary.to_dict(),
            "capability": self.capability.to_dict(),
            "infrastructure": self.infrastructure.to_dict(),
            "victim": self.victim.to_dict(),
            "meta": self.meta.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


_VERTEX_SCHEMA = {"type": "object", "additionalProperties": {"type": "string"}}

DIAMOND_EVENTS_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "name"],
        "properties": {
            "id": {"type": "string", "minLength": 1},
            "name": {"type": "string"},
            "adversary": _VERTEX_SCHEMA,
            "capability": _VERTEX_SCHEMA,
            "infrastructure": _VERTEX_SCHEMA,
            "victim": _VERTEX_SCHEMA,
            "meta": {
                "type": "object",
                "properties": {
                    "timestamp": {"type": "string"},
                    "phase": {"type": "string", "enum": list(KILL_CHAIN_LABELS)},
                    "confidence": {"type": "string", "enum": list(CONFIDENCE_OPTIONS)},
                    "sourceReliability": {"type": "string", "enum": list(SOURCE_RELIABILITY_LABELS)},
                    "notes": {"type": "string"},
                },
            },
            "createdAt": {"type": "string"},
            "updatedAt": {"type": "string"},
        },
    },
}


def create_event(name: str) -> DiamondEvent:
    now = now_iso()
    return DiamondEvent(id=generate_id(), name=name, created_at=now, updated_at=now)


def rename_event(event: DiamondEvent, name: str) -> DiamondEvent:
    return replace(event, name=name, updated_at=now_iso())


def update_vertex(event: DiamondEvent, key: str, **updates: str) -> DiamondEvent:
    """Merge ``updates`` into one vertex; unknown vertices or fields raise ValueError."""
    if key not in VERTEX_KEYS:
        raise ValueError(f"[Diamond] Unknown vertex '{key}'. Expected one of {VERTEX_KEYS}")
    vertex = getattr(event, key)
    allowed = {f.name for f in fields(vertex)}
    unknown = set(updates) - allowed
    if unknown:
        raise ValueError(f"[Diamond] Unknown {key} field(s): {sorted(unknown)}")
    return replace(event, **{key: replace(vertex, **updates)}, updated_at=now_iso())


def update_meta(event: DiamondEvent, **updates: str) -> DiamondEvent:
    allowed = {f.name for f in fields(DiamondMeta)}
    unknown = set(updates) - allowed
    if unknown:
        raise ValueError(f"[Diamond] Unknown meta field(s): {sorted(unknown)}")
    if "phase" in updates and updates["phase"] not in KILL_CHAIN_LABELS:
        raise ValueError(f"[Diamond] Unknown kill chain phase '{updates['phase']}'")
    if "confidence" in updates and updates["confidence"] not in CONFIDENCE_OPTIONS:
        raise ValueError(f"[Diamond] Unknown confidence '{updates['confidence']}'")
    if "source_reliability" in updates and updates["source_reliability"] not in SOURCE_RELIABILITY_LABELS:
        raise ValueError(f"[Diamond] Unknown source reliability '{updates['source_reliability']}'")
    return replace(event, meta=replace(event.meta, **updates), updated_at=now_iso())


def vertex_fill_status(event: DiamondEvent) -> Dict[str, bool]:
    """Which vertices hold at least one non-blank field."""
    return {key: getattr(event, key).has_data() for key in VERTEX_KEYS}


def export_events(events: List[DiamondEvent]) -> str:
    return json.dumps([e.to_dict() for e in events], indent=2, ensure_ascii=False)


def import_events(text: str) -> Optional[List[DiamondEvent]]:
    """Parse an exported event list; any structural problem rejects the whole import."""
    try:
        parsed = json.loads(text)
        jsonschema.validate(instance=parsed, schema=DIAMOND_EVENTS_SCHEMA)
    except json.JSONDecodeError as e:
        logger.warning(f"[Diamond] Import rejected, malformed JSON: {e}")
        return None
    except jsonschema.ValidationError as e:
        logger.warning(f"[Diamond] Import rejected: {e.message}")
        return None
    return [DiamondEvent.from_dict(item) for item in parsed]

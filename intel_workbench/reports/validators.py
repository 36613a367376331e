from typing import Any, Dict, List
import jsonschema
from intel_workbench.reports.models import RATINGS, LEVELS
from intel_workbench.utils.logger import get_logger

logger = get_logger()

_TEXT = {"type": "string"}
_ID = {"type": "string", "minLength": 1}

HYPOTHESIS_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "description"],
    "properties": {"id": _ID, "name": _ID, "description": _TEXT},
}

EVIDENCE_SCHEMA = {
    "type": "object",
    "required": ["id", "description", "source", "credibility", "relevance"],
    "properties": {
        "id": _ID,
        "description": _TEXT,
        "source": _TEXT,
        "credibility": {"type": "string", "enum": list(LEVELS)},
        "relevance": {"type": "string", "enum": list(LEVELS)},
    },
}

ACH_MATRIX_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "hypotheses", "evidence", "ratings", "createdAt", "updatedAt"],
    "properties": {
        "id": _ID,
        "name": _ID,
        "hypotheses": {"type": "array", "items": HYPOTHESIS_SCHEMA},
        "evidence": {"type": "array", "items": EVIDENCE_SCHEMA},
        "ratings": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "additionalProperties": {"type": "string", "enum": list(RATINGS)},
            },
        },
        "createdAt": _TEXT,
        "updatedAt": _TEXT,
    },
}

BIAS_CHECKLIST_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "biases", "createdAt", "updatedAt"],
    "properties": {
        "id": _ID,
        "name": _ID,
        "biases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "name", "description", "category", "checked", "mitigationNotes"],
                "properties": {
                    "id": _ID,
                    "name": _ID,
                    "description": _TEXT,
                    "category": _TEXT,
                    "checked": {"type": "boolean"},
                    "mitigationNotes": _TEXT,
                },
            },
        },
        "createdAt": _TEXT,
        "updatedAt": _TEXT,
    },
}

# Wire shape of an exported project document
PROJECT_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "description", "achMatrices", "biasChecklists", "createdAt", "updatedAt"],
    "properties": {
        "id": _ID,
        "name": _ID,
        "description": _TEXT,
        "achMatrices": {"type": "array", "items": ACH_MATRIX_SCHEMA},
        "biasChecklists": {"type": "array", "items": BIAS_CHECKLIST_SCHEMA},
        "createdAt": _TEXT,
        "updatedAt": _TEXT,
    },
}


def project_document_errors(document: Any) -> List[str]:
    validator = jsonschema.Draft7Validator(PROJECT_SCHEMA)
    return [
        f"{'/'.join(str(p) for p in err.absolute_path) or '<root>'}: {err.message}"
        for err in validator.iter_errors(document)
    ]


def validate_project_document(document: Dict[str, Any]) -> bool:
    """
    Strict conformance check for an exported project document.

    Imports do not use this: they go through the lenient normalizer instead.
    """
    errors = project_document_errors(document)
    for error in errors:
        logger.error(f"[ProjectSchema] {error}")
    return not errors

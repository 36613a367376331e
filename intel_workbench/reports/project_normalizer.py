import json
from typing import Any, Optional
from pydantic import ValidationError
from intel_workbench.reports.models import Project
from intel_workbench.reports.schemas import ProjectDocument
from intel_workbench.utils.logger import get_logger

logger = get_logger()


def normalize_project(raw: Any) -> Optional[Project]:
    """
    Coerce an externally supplied project document into a `Project`.

    Fails closed: returns None when the document is not an object or lacks a
    usable id/name. Everything below the top level is repaired rather than
    rejected (invalid elements dropped, unknown levels set to Medium, ratings
    rebuilt from the surviving evidence and hypothesis ids).
    """
    if not isinstance(raw, dict):
        logger.warning(f"[ImportNormalizer] Rejected document: expected an object, got {type(raw).__name__}")
        return None

    try:
        document = ProjectDocument.model_validate(raw)
    except ValidationError as ex:
        fields = sorted({str(err["loc"][0]) for err in ex.errors() if err.get("loc")})
        logger.warning(f"[ImportNormalizer] Rejected document: invalid required field(s) {fields}")
        return None

    return Project.from_dict(document.model_dump(by_alias=True))


def parse_project_json(text: str) -> Optional[Project]:
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as ex:
        logger.warning(f"[ImportNormalizer] Rejected document: invalid JSON ({ex})")
        return None
    return normalize_project(raw)

import re
from datetime import datetime
from typing import Any, Dict, List, Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from intel_workbench.ach.scoring_engine import AchScoringEngine
from intel_workbench.bias.bias_catalog import checklist_progress
from intel_workbench.config.defaults import (
    TEMPLATES_DIR,
    DEFAULT_REPORT_TEMPLATE,
    EVIDENCE_CELL_MAX_CHARS,
    MITIGATION_CELL_MAX_CHARS,
)
from intel_workbench.reports.models import AchMatrix, BiasChecklist, Project

PREFERRED_MARKER = " ⭐ **PREFERRED**"

_NEWLINES = re.compile(r"\r?\n")


def escape_cell(value: Any) -> str:
    """Make a value safe inside a Markdown table cell: escape pipes, flatten newlines."""
    text = "" if value is None else str(value)
    return _NEWLINES.sub(" ", text.replace("|", "\\|")).strip()


def format_score(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{round(value, 2):g}"


def format_timestamp(value: str) -> str:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return str(value)
    return parsed.strftime("%Y-%m-%d %H:%M UTC" if parsed.tzinfo else "%Y-%m-%d %H:%M")


def _matrix_context(matrix: AchMatrix, engine: AchScoringEngine) -> Dict[str, Any]:
    scores = engine.score_all(matrix)
    preferred_id = engine.find_preferred(matrix)

    rows = []
    for evidence in matrix.evidence:
        row_ratings = matrix.ratings.get(evidence.id, {})
        rows.append({
            "description": escape_cell(evidence.description)[:EVIDENCE_CELL_MAX_CHARS],
            "source": escape_cell(evidence.source),
            "credibility": escape_cell(evidence.credibility),
            "ratings": [row_ratings.get(h.id) or "NA" for h in matrix.hypotheses],
        })

    return {
        "name": escape_cell(matrix.name),
        "hypothesis_names": [escape_cell(h.name) for h in matrix.hypotheses],
        "separators": ["---"] * len(matrix.hypotheses),
        "rows": rows,
        "scores": [
            {
                "name": escape_cell(h.name),
                "score": format_score(scores.get(h.id, 0)),
                "marker": PREFERRED_MARKER if h.id == preferred_id else "",
            }
            for h in matrix.hypotheses
        ],
    }


def _checklist_context(checklist: BiasChecklist) -> Dict[str, Any]:
    checked, total = checklist_progress(checklist)
    return {
        "name": escape_cell(checklist.name),
        "checked": checked,
        "total": total,
        "rows": [
            {
                "name": escape_cell(b.name),
                "category": escape_cell(b.category),
                "status": "✅" if b.checked else "⬜",
                "notes": escape_cell(b.mitigation_notes)[:MITIGATION_CELL_MAX_CHARS],
            }
            for b in checklist.biases
        ],
    }


def build_report_context(project: Project, engine: Optional[AchScoringEngine] = None) -> Dict[str, Any]:
    engine = engine or AchScoringEngine()
    return {
        "project": {
            "name": project.name,
            "description": project.description,
            "created": format_timestamp(project.created_at),
            "updated": format_timestamp(project.updated_at),
        },
        "matrices": [_matrix_context(m, engine) for m in project.ach_matrices],
        "checklists": [_checklist_context(c) for c in project.bias_checklists],
    }


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def generate_markdown(project: Project, engine: Optional[AchScoringEngine] = None) -> str:
    """Render the human-readable Markdown report for a project."""
    template = _environment().get_template(DEFAULT_REPORT_TEMPLATE)
    return template.render(**build_report_context(project, engine))

import json
from pathlib import Path
from typing import Dict, List, Optional
import pandas as pd
from intel_workbench.ach.scoring_engine import AchScoringEngine
from intel_workbench.reports.markdown_report import generate_markdown
from intel_workbench.reports.models import Project
from intel_workbench.reports.validators import validate_project_document
from intel_workbench.utils.logger import get_logger
from intel_workbench.utils.workspace_utils import slugify_filename
from intel_workbench.visual.score_chart import generate_score_chart

SCORE_COLUMNS = ["matrix", "hypothesis_id", "hypothesis", "score", "normalized", "preferred"]


def export_project_json(project: Project) -> str:
    return json.dumps(project.to_dict(), indent=2, ensure_ascii=False)


def build_score_table(project: Project, engine: Optional[AchScoringEngine] = None) -> pd.DataFrame:
    """One row per (matrix, hypothesis), most supported hypothesis first within each matrix."""
    engine = engine or AchScoringEngine()
    rows = [
        {
            "matrix": matrix.name,
            "hypothesis_id": s.hypothesis_id,
            "hypothesis": s.name,
            "score": s.score,
            "normalized": s.normalized,
            "preferred": s.preferred,
        }
        for matrix in project.ach_matrices
        for s in engine.rank(matrix)
    ]
    return pd.DataFrame(rows, columns=SCORE_COLUMNS)


class ProjectReportSaver:
    """
    Writes the downloadable artifacts of a project into a run directory.

    File names follow ``<slug>.json``, ``<slug>.md`` and ``<slug>_scores.csv``.
    Write failures are logged and reported as None; the project is never modified.
    """

    def __init__(self, run_dir: Path, engine: Optional[AchScoringEngine] = None):
        self.run_dir = Path(run_dir)
        self.engine = engine or AchScoringEngine()
        self.logger = get_logger()
        self.run_dir.mkdir(parents=True, exist_ok=True)

    def _write_text(self, path: Path, content: str, label: str) -> Optional[Path]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            self.logger.info(f"[✓] {label} written to {path.resolve()}")
            return path
        except OSError as ex:
            self.logger.error(f"[✗] Failed to write {label}: {ex}")
            return None

    def save_json(self, project: Project) -> Optional[Path]:
        if not validate_project_document(project.to_dict()):
            self.logger.warning(f"[~] Project '{project.name}' does not match the export schema")
        path = self.run_dir / f"{slugify_filename(project.name)}.json"
        return self._write_text(path, export_project_json(project), f"Project JSON for '{project.name}'")

    def save_markdown(self, project: Project) -> Optional[Path]:
        path = self.run_dir / f"{slugify_filename(project.name)}.md"
        return self._write_text(path, generate_markdown(project, self.engine), f"Markdown report for '{project.name}'")

    def save_scores_csv(self, project: Project) -> Optional[Path]:
        if not project.ach_matrices:
            self.logger.info(f"[~] No ACH matrices to score for '{project.name}'.")
            return None

        df = build_score_table(project, self.engine)
        path = self.run_dir / f"{slugify_filename(project.name)}_scores.csv"
        try:
            df.to_csv(path, index=False)
            self.logger.info(f"[✓] Saved score CSV: {path.resolve()}")
            return path
        except OSError as ex:
            self.logger.error(f"[✗] Failed to save score CSV: {ex}")
            return None

    def save_score_charts(self, project: Project) -> List[Path]:
        charts = []
        slug = slugify_filename(project.name)
        for index, matrix in enumerate(project.ach_matrices, start=1):
            chart_name = f"{slug}_{slugify_filename(matrix.name, fallback=f'matrix-{index}')}_scores.png"
            try:
                path = generate_score_chart(matrix, self.run_dir / chart_name, self.engine)
            except OSError as ex:
                self.logger.error(f"[✗] Failed to save score chart for '{matrix.name}': {ex}")
                continue
            if path:
                charts.append(path)
        return charts

    def save_all(self, project: Project, include_charts: bool = True) -> Dict[str, object]:
        outputs: Dict[str, object] = {
            "json": self.save_json(project),
            "markdown": self.save_markdown(project),
            "scores_csv": self.save_scores_csv(project),
        }
        if include_charts:
            outputs["charts"] = self.save_score_charts(project)
        return outputs

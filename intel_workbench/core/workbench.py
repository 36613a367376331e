from dataclasses import replace
from typing import Callable, List, Optional
from intel_workbench.ach import matrix_ops
from intel_workbench.bias import bias_catalog
from intel_workbench.data.sample_project import build_sample_project, SAMPLE_PROJECT_ID
from intel_workbench.reports.models import AchMatrix, BiasChecklist, Project
from intel_workbench.reports.project_exporter import export_project_json
from intel_workbench.reports.project_normalizer import normalize_project, parse_project_json
from intel_workbench.storage.json_store import JsonBlobStore
from intel_workbench.utils.id_utils import now_iso
from intel_workbench.utils.logger import get_logger

DEFAULT_CHECKLIST_NAME = "Default Bias Checklist"


class ProjectWorkbench:
    """
    In-memory project collection with an active-project pointer.

    Projects, matrices and checklists are replaced rather than mutated, so a
    project handed out by `get_project` stays a stable snapshot. Operations on
    unknown ids are logged no-ops. When a store is attached every change is
    persisted as ``{"projects": [...], "activeProjectId": ...}``.
    """

    def __init__(self, store: Optional[JsonBlobStore] = None):
        self.logger = get_logger()
        self.store = store
        self.projects: List[Project] = []
        self.active_project_id: Optional[str] = None
        if store is not None:
            self._restore()

    # ─── Persistence ─────────────────────────────────────────
    def _restore(self) -> None:
        blob = self.store.load()
        if not isinstance(blob, dict):
            return

        projects = blob.get("projects")
        if not isinstance(projects, list):
            self.logger.warning(f"[Workbench] Stored data has no project list, starting empty: {self.store.path}")
            return

        for raw in projects:
            project = normalize_project(raw)
            if project is None:
                self.logger.warning("[Workbench] Skipped an unreadable stored project")
                continue
            self.projects.append(project)

        active = blob.get("activeProjectId")
        self.active_project_id = active if self.get_project(active) else None
        self.logger.info(f"[Workbench] Restored {len(self.projects)} project(s) from {self.store.path}")

    def _persist(self) -> None:
        if self.store is None:
            return
        self.store.save({
            "projects": [p.to_dict() for p in self.projects],
            "activeProjectId": self.active_project_id,
        })

    def _replace_project(self, project_id: str, fn: Callable[[Project], Project]) -> bool:
        for index, project in enumerate(self.projects):
            if project.id == project_id:
                self.projects[index] = replace(fn(project), updated_at=now_iso())
                self._persist()
                return True
        self.logger.warning(f"[Workbench] Unknown project id: {project_id}")
        return False

    def _replace_matrix(self, project_id: str, matrix_id: str,
                        fn: Callable[[AchMatrix], AchMatrix]) -> bool:
        project = self.get_project(project_id)
        if project is None or not any(m.id == matrix_id for m in project.ach_matrices):
            self.logger.warning(f"[Workbench] Unknown matrix {matrix_id} in project {project_id}")
            return False
        return self._replace_project(project_id, lambda p: replace(
            p, ach_matrices=[fn(m) if m.id == matrix_id else m for m in p.ach_matrices]
        ))

    def _replace_checklist(self, project_id: str, checklist_id: str,
                           fn: Callable[[BiasChecklist], BiasChecklist]) -> bool:
        project = self.get_project(project_id)
        if project is None or not any(c.id == checklist_id for c in project.bias_checklists):
            self.logger.warning(f"[Workbench] Unknown checklist {checklist_id} in project {project_id}")
            return False
        return self._replace_project(project_id, lambda p: replace(
            p, bias_checklists=[fn(c) if c.id == checklist_id else c for c in p.bias_checklists]
        ))

    # ─── Projects ────────────────────────────────────────────
    def get_project(self, project_id: Optional[str]) -> Optional[Project]:
        return next((p for p in self.projects if p.id == project_id), None)

    def get_active_project(self) -> Optional[Project]:
        return self.get_project(self.active_project_id)

    def get_matrix(self, matrix_id: str) -> Optional[AchMatrix]:
        """Look a matrix up in the active project."""
        project = self.get_active_project()
        if project is None:
            return None
        return next((m for m in project.ach_matrices if m.id == matrix_id), None)

    def create_project(self, name: str, description: str = "") -> str:
        project = Project.new(name, description)
        self.projects.append(project)
        self.active_project_id = project.id
        self._persist()
        self.logger.info(f"[Workbench] Created project '{name}'")
        return project.id

    def update_project(self, project_id: str, name: Optional[str] = None,
                       description: Optional[str] = None) -> bool:
        return self._replace_project(project_id, lambda p: replace(
            p,
            name=p.name if name is None else name,
            description=p.description if description is None else description,
        ))

    def delete_project(self, project_id: str) -> None:
        self.projects = [p for p in self.projects if p.id != project_id]
        if self.active_project_id == project_id:
            self.active_project_id = None
        self._persist()

    def set_active_project(self, project_id: Optional[str]) -> None:
        self.active_project_id = project_id
        self._persist()

    def load_sample_project(self) -> str:
        if self.get_project(SAMPLE_PROJECT_ID) is None:
            self.projects.append(build_sample_project())
        self.active_project_id = SAMPLE_PROJECT_ID
        self._persist()
        return SAMPLE_PROJECT_ID

    # ─── ACH matrices ────────────────────────────────────────
    def create_matrix(self, project_id: str, name: str) -> Optional[str]:
        matrix = matrix_ops.create_matrix(name)
        added = self._replace_project(project_id, lambda p: replace(
            p, ach_matrices=[*p.ach_matrices, matrix]
        ))
        return matrix.id if added else None

    def rename_matrix(self, project_id: str, matrix_id: str, name: str) -> bool:
        return self._replace_matrix(project_id, matrix_id, lambda m: matrix_ops.rename_matrix(m, name))

    def delete_matrix(self, project_id: str, matrix_id: str) -> bool:
        project = self.get_project(project_id)
        if project is None or not any(m.id == matrix_id for m in project.ach_matrices):
            self.logger.warning(f"[Workbench] Unknown matrix {matrix_id} in project {project_id}")
            return False
        return self._replace_project(project_id, lambda p: replace(
            p, ach_matrices=[m for m in p.ach_matrices if m.id != matrix_id]
        ))

    def add_hypothesis(self, project_id: str, matrix_id: str, name: str, description: str = "") -> Optional[str]:
        updated = {}

        def apply(m: AchMatrix) -> AchMatrix:
            updated["matrix"] = matrix_ops.add_hypothesis(m, name, description)
            return updated["matrix"]

        if not self._replace_matrix(project_id, matrix_id, apply):
            return None
        return updated["matrix"].hypotheses[-1].id

    def update_hypothesis(self, project_id: str, matrix_id: str, hypothesis_id: str,
                          name: Optional[str] = None, description: Optional[str] = None) -> bool:
        return self._replace_matrix(project_id, matrix_id, lambda m: matrix_ops.update_hypothesis(
            m, hypothesis_id, name=name, description=description
        ))

    def remove_hypothesis(self, project_id: str, matrix_id: str, hypothesis_id: str) -> bool:
        return self._replace_matrix(project_id, matrix_id,
                                    lambda m: matrix_ops.remove_hypothesis(m, hypothesis_id))

    def add_evidence(self, project_id: str, matrix_id: str, description: str, source: str = "",
                     credibility: str = "Medium", relevance: str = "Medium") -> Optional[str]:
        updated = {}

        def apply(m: AchMatrix) -> AchMatrix:
            updated["matrix"] = matrix_ops.add_evidence(m, description, source, credibility, relevance)
            return updated["matrix"]

        if not self._replace_matrix(project_id, matrix_id, apply):
            return None
        return updated["matrix"].evidence[-1].id

    def update_evidence(self, project_id: str, matrix_id: str, evidence_id: str, **updates) -> bool:
        return self._replace_matrix(project_id, matrix_id,
                                    lambda m: matrix_ops.update_evidence(m, evidence_id, **updates))

    def remove_evidence(self, project_id: str, matrix_id: str, evidence_id: str) -> bool:
        return self._replace_matrix(project_id, matrix_id,
                                    lambda m: matrix_ops.remove_evidence(m, evidence_id))

    def set_rating(self, project_id: str, matrix_id: str, evidence_id: str,
                   hypothesis_id: str, rating: str) -> bool:
        return self._replace_matrix(project_id, matrix_id,
                                    lambda m: matrix_ops.set_rating(m, evidence_id, hypothesis_id, rating))

    def advance_rating(self, project_id: str, matrix_id: str, evidence_id: str, hypothesis_id: str) -> bool:
        return self._replace_matrix(project_id, matrix_id,
                                    lambda m: matrix_ops.advance_rating(m, evidence_id, hypothesis_id))

    # ─── Bias checklists ─────────────────────────────────────
    def add_bias_checklist(self, project_id: str, name: str = DEFAULT_CHECKLIST_NAME) -> Optional[str]:
        checklist = bias_catalog.create_checklist(name)
        added = self._replace_project(project_id, lambda p: replace(
            p, bias_checklists=[*p.bias_checklists, checklist]
        ))
        return checklist.id if added else None

    def toggle_bias(self, project_id: str, checklist_id: str, bias_id: str) -> bool:
        return self._replace_checklist(project_id, checklist_id,
                                       lambda c: bias_catalog.toggle_bias(c, bias_id))

    def update_bias_mitigation(self, project_id: str, checklist_id: str, bias_id: str, notes: str) -> bool:
        return self._replace_checklist(project_id, checklist_id,
                                       lambda c: bias_catalog.set_mitigation_notes(c, bias_id, notes))

    # ─── Import / export ─────────────────────────────────────
    def export_project(self, project_id: str) -> Optional[str]:
        project = self.get_project(project_id)
        if project is None:
            return None
        return export_project_json(project)

    def import_project(self, text: str) -> bool:
        """
        Import a project document, replacing any project with the same id.

        The imported project becomes active. A rejected document leaves the
        workbench untouched.
        """
        project = parse_project_json(text)
        if project is None:
            self.logger.warning("[✗] Project import rejected")
            return False

        if self.get_project(project.id) is not None:
            self.projects = [project if p.id == project.id else p for p in self.projects]
        else:
            self.projects.append(project)
        self.active_project_id = project.id
        self._persist()
        self.logger.info(f"[✓] Imported project '{project.name}'")
        return True

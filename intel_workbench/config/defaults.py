from pathlib import Path

# ─── Directory Structure ─────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent         # → intel_workbench/
CONFIG_DIR = BASE_DIR / "config"                          # → intel_workbench/config
TEMPLATES_DIR = BASE_DIR / "templates"                    # → intel_workbench/templates

# ─── Default File Paths ─────────────────────────────────────
DEFAULT_WEIGHT_PROFILE_PATH = CONFIG_DIR / "weight_profile.yaml"
DEFAULT_REPORT_TEMPLATE = "project_report.md.j2"
DEFAULT_DATA_DIR = Path.home() / ".intel_workbench"
DEFAULT_PROJECTS_PATH = DEFAULT_DATA_DIR / "projects.json"
DEFAULT_OUTPUT_DIR = Path("output")

# ─── Report Limits ──────────────────────────────────────────
EVIDENCE_CELL_MAX_CHARS = 80
MITIGATION_CELL_MAX_CHARS = 100

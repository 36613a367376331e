import argparse
from pathlib import Path
from intel_workbench.config.defaults import DEFAULT_OUTPUT_DIR, DEFAULT_PROJECTS_PATH


def _common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", action="store_true",
                        help="Enable verbose (DEBUG) logging")
    return common


def build_parser() -> argparse.ArgumentParser:
    common = _common_parser()
    parser = argparse.ArgumentParser(
        prog="intel-workbench",
        description="Intel Workbench: ACH scoring, IOC extraction and analytic project reports",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", parents=[common], help="Extract IOCs from unstructured text")
    extract.add_argument("input", type=str,
                         help="Text file to scan, or '-' to read stdin")
    extract.add_argument("--defang", action="store_true",
                         help="Render indicators in defanged form")
    extract.add_argument("--format", choices=["text", "csv", "json"], default="text",
                         help="Output rendering")
    extract.add_argument("--output-dir", type=Path, default=None,
                         help="Write iocs.csv / iocs.json here instead of printing")

    score = sub.add_parser("score", parents=[common], help="Score the ACH matrices of a project file")
    score.add_argument("project", type=Path, help="Project JSON file")
    score.add_argument("--weights", type=Path, default=None,
                       help="YAML weight profile overriding the default tables")
    score.add_argument("--matrix", type=str, default=None,
                       help="Only score the matrix with this id")

    report = sub.add_parser("report", parents=[common], help="Write JSON, Markdown, CSV and chart artifacts")
    report.add_argument("project", type=Path, help="Project JSON file")
    report.add_argument("--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR,
                        help="Directory to store report runs and logs")
    report.add_argument("--weights", type=Path, default=None,
                        help="YAML weight profile overriding the default tables")
    report.add_argument("--no-charts", action="store_true",
                        help="Skip the matplotlib score charts")

    imp = sub.add_parser("import", parents=[common], help="Import a project file into the local workbench")
    imp.add_argument("project", type=Path, help="Project JSON file")
    imp.add_argument("--data-file", type=Path, default=DEFAULT_PROJECTS_PATH,
                     help="Workbench data file")

    sample = sub.add_parser("sample", parents=[common], help="Load or print the bundled sample project")
    sample.add_argument("--data-file", type=Path, default=DEFAULT_PROJECTS_PATH,
                        help="Workbench data file")
    sample.add_argument("--print", dest="print_only", action="store_true",
                        help="Print the sample project JSON instead of storing it")

    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)

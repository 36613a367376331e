import sys
from pathlib import Path
from intel_workbench.ach.scoring_engine import AchScoringEngine
from intel_workbench.cli.cli import parse_args
from intel_workbench.core.ioc_workspace import IocWorkspace
from intel_workbench.core.workbench import ProjectWorkbench
from intel_workbench.data.sample_project import build_sample_project
from intel_workbench.reports.project_exporter import ProjectReportSaver, export_project_json
from intel_workbench.reports.project_normalizer import parse_project_json
from intel_workbench.storage.json_store import JsonBlobStore
from intel_workbench.utils.logger import init_logging, log_ranking_debug
from intel_workbench.utils.workspace_utils import create_run_directory


def configure_logging(verbose: bool, run_dir: Path = None):
    log_path = run_dir / "full.log" if run_dir else None
    logger = init_logging(verbose=verbose, log_path=log_path)
    logger.debug("[✓] Logger initialized.")
    return logger


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _load_project(path: Path):
    project = parse_project_json(path.read_text(encoding="utf-8"))
    if project is None:
        print(f"[ERROR] Not a usable project document: {path}", file=sys.stderr)
    return project


def cmd_extract(args) -> int:
    workspace = IocWorkspace(raw_input=_read_input(args.input), defanged=args.defang)
    workspace.extract()
    workspace.select_all()

    if not workspace.iocs:
        print("[~] No indicators found.", file=sys.stderr)
        return 0

    if args.output_dir:
        fmt = "json" if args.format == "json" else "csv"
        path = workspace.export(args.output_dir, fmt)
        return 0 if path else 1

    if args.format == "csv":
        print(workspace.csv_text())
    elif args.format == "json":
        print(workspace.json_text())
    else:
        print(workspace.copy_text())
    print(f"[*] {len(workspace.iocs)} indicator(s), {workspace.duplicates_removed} duplicate(s) removed",
          file=sys.stderr)
    return 0


def cmd_score(args, logger) -> int:
    project = _load_project(args.project)
    if project is None:
        return 1

    matrices = project.ach_matrices
    if args.matrix:
        matrices = [m for m in matrices if m.id == args.matrix]
        if not matrices:
            print(f"[ERROR] No matrix with id '{args.matrix}' in {args.project}", file=sys.stderr)
            return 1

    engine = AchScoringEngine(profile_path=args.weights)
    for matrix in matrices:
        ranked = engine.rank(matrix)
        log_ranking_debug(logger, matrix.name, engine.score_all(matrix), engine.find_preferred(matrix))
        print(f"== {matrix.name} ==")
        for s in ranked:
            marker = "  <- preferred" if s.preferred else ""
            print(f"{s.normalized:>4}  {s.score:>8g}  {s.name}{marker}")
    return 0


def cmd_report(args) -> int:
    run_dir, _ = create_run_directory(args.output_dir)
    logger = configure_logging(args.verbose, run_dir)

    project = _load_project(args.project)
    if project is None:
        return 1

    saver = ProjectReportSaver(run_dir, engine=AchScoringEngine(profile_path=args.weights))
    outputs = saver.save_all(project, include_charts=not args.no_charts)
    logger.info(f"[✓] Report run complete: {run_dir}")

    failed = [label for label in ("json", "markdown") if outputs.get(label) is None]
    if failed:
        print(f"[ERROR] Failed to write: {', '.join(failed)}", file=sys.stderr)
        return 1
    return 0


def cmd_import(args) -> int:
    workbench = ProjectWorkbench(store=JsonBlobStore(args.data_file))
    if not workbench.import_project(args.project.read_text(encoding="utf-8")):
        print(f"[ERROR] Import rejected: {args.project}", file=sys.stderr)
        return 1
    print(f"[✓] Imported '{workbench.get_active_project().name}' into {args.data_file}")
    return 0


def cmd_sample(args) -> int:
    if args.print_only:
        print(export_project_json(build_sample_project()))
        return 0
    workbench = ProjectWorkbench(store=JsonBlobStore(args.data_file))
    workbench.load_sample_project()
    print(f"[✓] Sample project loaded into {args.data_file}")
    return 0


def run(argv=None) -> int:
    args = parse_args(argv)
    if args.command == "report":
        return cmd_report(args)

    logger = configure_logging(args.verbose)
    if args.command == "extract":
        return cmd_extract(args)
    if args.command == "score":
        return cmd_score(args, logger)
    if args.command == "import":
        return cmd_import(args)
    if args.command == "sample":
        return cmd_sample(args)
    return 1


def main():
    """
    Console entry point.
    Dispatches the chosen subcommand; returns 0 on success, 1 on error.
    """
    try:
        sys.exit(run())
    except Exception as ex:
        print(f"[ERROR] {type(ex).__name__}: {ex}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

import json
from pathlib import Path
import pytest
from intel_workbench.cli.cli import parse_args
from intel_workbench.main import run


def test_parse_extract_args():
    args = parse_args(["extract", "report.txt", "--defang", "--format", "csv", "--verbose"])
    assert args.command == "extract"
    assert args.input == "report.txt"
    assert args.defang is True
    assert args.format == "csv"
    assert args.verbose is True
    assert args.output_dir is None


def test_parse_report_defaults():
    args = parse_args(["report", "case.json"])
    assert args.project == Path("case.json")
    assert args.output_dir == Path("output")
    assert args.no_charts is False
    assert args.verbose is False


def test_missing_subcommand_exits():
    with pytest.raises(SystemExit):
        parse_args([])


def test_invalid_format_exits():
    with pytest.raises(SystemExit):
        parse_args(["extract", "x.txt", "--format", "xml"])


def test_extract_command_prints_indicators(tmp_path, capsys):
    source = tmp_path / "intel.txt"
    source.write_text("beacon to 1[.]2[.]3[.]4 and evil.com", encoding="utf-8")

    assert run(["extract", str(source), "--format", "json"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out == [{"type": "ipv4", "value": "1.2.3.4"}, {"type": "domain", "value": "evil.com"}]


def test_extract_reads_stdin(monkeypatch, capsys):
    import io
    monkeypatch.setattr("sys.stdin", io.StringIO("CVE-2021-44228"))
    assert run(["extract", "-", "--defang"]) == 0
    assert capsys.readouterr().out.strip() == "CVE-2021-44228"


def test_score_command(tmp_path, capsys, sample_project):
    path = tmp_path / "sample.json"
    path.write_text(json.dumps(sample_project.to_dict()), encoding="utf-8")

    assert run(["score", str(path)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "== Sandworm APT Attribution Analysis =="
    assert lines[1].endswith("Russian GRU Unit 74455  <- preferred")


def test_score_rejects_bad_project(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")
    assert run(["score", str(path)]) == 1


def test_sample_and_import_commands(tmp_path, sample_project):
    data_file = tmp_path / "projects.json"
    assert run(["sample", "--data-file", str(data_file)]) == 0

    other = tmp_path / "other.json"
    other.write_text(json.dumps({"id": "p2", "name": "Second"}), encoding="utf-8")
    assert run(["import", str(other), "--data-file", str(data_file)]) == 0

    blob = json.loads(data_file.read_text(encoding="utf-8"))
    assert [p["id"] for p in blob["projects"]] == [sample_project.id, "p2"]
    assert blob["activeProjectId"] == "p2"

import csv
import io
import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional
from intel_workbench.ioc.fang import format_ioc
from intel_workbench.reports.models import ExtractedIOC
from intel_workbench.utils.logger import get_logger


def to_records(iocs: Iterable[ExtractedIOC], defanged: bool) -> List[Dict[str, str]]:
    return [{"type": ioc.type, "value": format_ioc(ioc.value, ioc.type, defanged)} for ioc in iocs]


def to_clipboard_text(iocs: Iterable[ExtractedIOC], defanged: bool) -> str:
    return "\n".join(r["value"] for r in to_records(iocs, defanged))


def to_csv(iocs: Iterable[ExtractedIOC], defanged: bool) -> str:
    buffer = io.StringIO()
    buffer.write("type,value\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in to_records(iocs, defanged):
        writer.writerow([record["type"], record["value"]])
    return buffer.getvalue().rstrip("\n")


def to_json(iocs: Iterable[ExtractedIOC], defanged: bool) -> str:
    return json.dumps(to_records(iocs, defanged), indent=2, ensure_ascii=False)


class IocExporter:
    """Writes the selected indicators to disk in the requested rendering."""

    def __init__(self, output_dir: Path, logger=None):
        self.output_dir = output_dir
        self.logger = logger or get_logger()

    def _write(self, filename: str, content: str, label: str) -> Optional[Path]:
        path = self.output_dir / filename
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            self.logger.info(f"[✓] {label} written to {path.resolve()}")
            return path
        except OSError as ex:
            self.logger.error(f"[✗] Failed to write {label}: {ex}")
            return None

    def write_csv(self, iocs: List[ExtractedIOC], defanged: bool) -> Optional[Path]:
        if not iocs:
            raise ValueError("No indicators to export.")
        return self._write("iocs.csv", to_csv(iocs, defanged), "IOC CSV")

    def write_json(self, iocs: List[ExtractedIOC], defanged: bool) -> Optional[Path]:
        if not iocs:
            raise ValueError("No indicators to export.")
        return self._write("iocs.json", to_json(iocs, defanged), "IOC JSON")

from pathlib import Path
from typing import Dict, List, Optional, Tuple
from intel_workbench.ioc import extractor
from intel_workbench.ioc.fang import format_ioc
from intel_workbench.ioc.ioc_exporter import IocExporter, to_clipboard_text, to_csv, to_json
from intel_workbench.reports.models import ExtractedIOC
from intel_workbench.utils.logger import get_logger


class IocWorkspace:
    """
    Extraction session state: raw text, current indicators, defang display mode.

    Each `extract()` replaces the indicator list; it never merges with the
    previous run. `clear()` keeps the defang setting.
    """

    def __init__(self, raw_input: str = "", defanged: bool = False):
        self.logger = get_logger()
        self.raw_input = raw_input
        self.defanged = defanged
        self.iocs: List[ExtractedIOC] = []
        self.duplicates_removed = 0

    def set_raw_input(self, text: str) -> None:
        self.raw_input = text

    def extract(self) -> List[ExtractedIOC]:
        result = extractor.extract(self.raw_input)
        self.iocs = result.indicators
        self.duplicates_removed = result.duplicate_count
        self.logger.info(f"[IocWorkspace] {len(self.iocs)} indicator(s), {self.duplicates_removed} duplicate(s) removed")
        return self.iocs

    def toggle_defang(self) -> bool:
        self.defanged = not self.defanged
        return self.defanged

    def toggle_select(self, index: int) -> None:
        self.iocs = extractor.toggle_select(self.iocs, index)

    def select_all(self) -> None:
        self.iocs = extractor.select_all(self.iocs)

    def deselect_all(self) -> None:
        self.iocs = extractor.deselect_all(self.iocs)

    def clear(self) -> None:
        self.raw_input = ""
        self.iocs = []
        self.duplicates_removed = 0

    @property
    def selected(self) -> List[ExtractedIOC]:
        return extractor.selected(self.iocs)

    @property
    def all_selected(self) -> bool:
        return bool(self.iocs) and len(self.selected) == len(self.iocs)

    def formatted(self, selected_only: bool = False) -> List[str]:
        source = self.selected if selected_only else self.iocs
        return [format_ioc(ioc.value, ioc.type, self.defanged) for ioc in source]

    def grouped(self) -> Dict[str, List[Tuple[int, ExtractedIOC]]]:
        return extractor.group_by_type(self.iocs)

    # Exports act on the selection only, rendered in the current defang mode
    def copy_text(self) -> str:
        return to_clipboard_text(self.selected, self.defanged)

    def csv_text(self) -> str:
        return to_csv(self.selected, self.defanged)

    def json_text(self) -> str:
        return to_json(self.selected, self.defanged)

    def export(self, output_dir: Path, fmt: str = "csv") -> Optional[Path]:
        exporter = IocExporter(Path(output_dir), logger=self.logger)
        if fmt == "csv":
            return exporter.write_csv(self.selected, self.defanged)
        if fmt == "json":
            return exporter.write_json(self.selected, self.defanged)
        raise ValueError(f"Unsupported export format: {fmt}")

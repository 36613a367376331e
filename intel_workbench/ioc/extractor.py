from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from intel_workbench.ioc.fang import refang
from intel_workbench.ioc.patterns import IOC_PATTERNS, DISPLAY_ORDER, IocPattern
from intel_workbench.reports.models import ExtractedIOC, ExtractionResult
from intel_workbench.utils.logger import get_logger

logger = get_logger()


class IocExtractor:
    """
    Pulls typed indicators out of unstructured analyst text.

    Patterns run in registry order. A match that touches any character already
    claimed by an earlier match is dropped whole. Surviving matches are
    deduplicated on ``type:refang(value).lower()``; the first occurrence wins
    and keeps its raw spelling, later ones only bump the duplicate counter.
    """

    def __init__(self, patterns: Optional[Sequence[IocPattern]] = None):
        self.patterns = tuple(patterns) if patterns is not None else IOC_PATTERNS

    @staticmethod
    def dedup_key(ioc_type: str, raw: str) -> str:
        return f"{ioc_type}:{refang(raw).lower()}"

    def extract(self, raw_text: str) -> ExtractionResult:
        if not raw_text:
            return ExtractionResult()

        claimed = bytearray(len(raw_text))
        seen = set()
        indicators: List[ExtractedIOC] = []
        duplicates = 0

        for pattern in self.patterns:
            for match in pattern.regex.finditer(raw_text):
                start, end = match.span()
                if any(claimed[start:end]):
                    continue

                raw = match.group(0)
                key = self.dedup_key(pattern.type, raw)
                if key in seen:
                    duplicates += 1
                    continue
                seen.add(key)

                claimed[start:end] = b"\x01" * (end - start)
                indicators.append(ExtractedIOC(value=raw, type=pattern.type, selected=False))

        logger.debug(f"[IocExtractor] {len(indicators)} indicators extracted, {duplicates} duplicates removed")
        return ExtractionResult(indicators=indicators, duplicate_count=duplicates)


_default_extractor = IocExtractor()


def extract(raw_text: str) -> ExtractionResult:
    return _default_extractor.extract(raw_text)


# ─── Selection helpers ─────────────────────────────────────
# Indicator lists are treated as snapshots; every helper returns a new list.

def toggle_select(iocs: Sequence[ExtractedIOC], index: int) -> List[ExtractedIOC]:
    return [
        ExtractedIOC(ioc.value, ioc.type, not ioc.selected) if i == index else ioc
        for i, ioc in enumerate(iocs)
    ]


def select_all(iocs: Iterable[ExtractedIOC]) -> List[ExtractedIOC]:
    return [ExtractedIOC(ioc.value, ioc.type, True) for ioc in iocs]


def deselect_all(iocs: Iterable[ExtractedIOC]) -> List[ExtractedIOC]:
    return [ExtractedIOC(ioc.value, ioc.type, False) for ioc in iocs]


def selected(iocs: Iterable[ExtractedIOC]) -> List[ExtractedIOC]:
    return [ioc for ioc in iocs if ioc.selected]


def group_by_type(iocs: Sequence[ExtractedIOC]) -> Dict[str, List[Tuple[int, ExtractedIOC]]]:
    """Group indicators for display, keeping each one's index in the flat list."""
    buckets: Dict[str, List[Tuple[int, ExtractedIOC]]] = {}
    for idx, ioc in enumerate(iocs):
        buckets.setdefault(ioc.type, []).append((idx, ioc))
    return OrderedDict((t, buckets[t]) for t in DISPLAY_ORDER if t in buckets)

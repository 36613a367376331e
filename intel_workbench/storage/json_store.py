import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional
from intel_workbench.utils.logger import get_logger


class JsonBlobStore:
    """
    Persists one JSON document on disk.

    Reads fail closed: a missing or malformed file yields ``None`` so callers
    start from empty state. Writes go through a temp file in the same
    directory and are swapped in with ``os.replace``.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.logger = get_logger()

    def load(self) -> Optional[Any]:
        if not self.path.exists():
            self.logger.debug(f"[JsonBlobStore] No data file at {self.path}")
            return None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as ex:
            self.logger.error(f"[✗] Failed to read {self.path}: {ex}")
            return None

    def save(self, blob: Any) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(blob, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as ex:
            self.logger.error(f"[✗] Failed to write {self.path}: {ex}")
            return False
        self.logger.debug(f"[JsonBlobStore] Saved {self.path}")
        return True

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

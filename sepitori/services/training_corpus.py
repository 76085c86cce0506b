"""Flat-file training corpus stored as JSON Lines."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)


class CorpusError(Exception):
    """Raised when the corpus file cannot be read or written."""


class TrainingCorpus:
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self.load())

    def load(self) -> List[Dict[str, str]]:
        if not self.path.exists():
            return []

        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise CorpusError(f"Could not read corpus {self.path}: {exc}") from exc

        examples: List[Dict[str, str]] = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                row = json.loads(line)
            except json.JSONDecodeError as exc:
                raise CorpusError(f"{self.path}:{number}: invalid JSON ({exc.msg})") from exc
            if not isinstance(row, dict) or "text" not in row or "label" not in row:
                raise CorpusError(f"{self.path}:{number}: expected an object with 'text' and 'label'")
            examples.append({"text": row["text"], "label": row["label"]})
        return examples

    def append(self, text: str, label: str) -> int:
        """Add one example and rewrite the file. Returns the new corpus size."""

        with self._lock:
            examples = self.load()
            examples.append({"text": text, "label": label})
            self._write(examples)

        logger.info("--- [CORPUS] Appended example #%s (label=%s) to '%s'", len(examples), label, self.path)
        return len(examples)

    def _write(self, examples: List[Dict[str, str]]) -> None:
        payload = "".join(json.dumps(row, ensure_ascii=False) + "\n" for row in examples)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise CorpusError(f"Could not write corpus {self.path}: {exc}") from exc

"""JSON file implementation of the key-value store."""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Keeps each key as ``<prefix><key>.json`` inside a directory."""

    def __init__(self, data_dir: str, prefix: str = "trustlens_"):
        self._dir = Path(data_dir).expanduser()
        self._prefix = prefix

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, key: str) -> Path:
        return self._dir / f"{self._prefix}{key}.json"

    def read(self, key: str) -> Any:
        """Return the stored document, or None if there is none.

        Raises:
            ValueError: If the file is not valid JSON
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt JSON in {path}: {e}") from e

    def write(self, key: str, value: Any) -> None:
        """Replace the stored document in one atomic rename."""
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self._dir, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False)
            os.replace(tmp_path, path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_path)
            raise
        logger.debug(f"💾 Wrote {path}")

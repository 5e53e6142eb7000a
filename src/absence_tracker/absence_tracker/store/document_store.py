from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ..core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class JsonDocumentStore:
    """Embedded key-document store: one JSON file per key in a directory.

    Each key holds a whole document; there is no partial update and no
    locking (last write wins).
    """

    def __init__(self, directory: str | Path):
        self._dir = Path(directory)

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def has(self, key: str) -> bool:
        return self._path(key).exists()

    def get(self, key: str) -> Any:
        path = self._path(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PersistenceError(f"Cannot read document {key!r}: {exc}") from exc
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupted document {key!r}: {exc}") from exc

    def set(self, key: str, value: Any) -> None:
        # Write to a temp file in the same directory, then atomically replace.
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(value, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path(key))
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Cannot write document {key!r}: {exc}") from exc
        logger.debug("wrote document %s (%s)", key, self._path(key))

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Cannot remove document {key!r}: {exc}") from exc

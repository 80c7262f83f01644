# src/pocket_tasks/storage/local_storage.py

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage:
    """
    File-backed key/value store of strings.

    One file per key under root_dir (`<key>.json`). Values are opaque strings;
    callers JSON-encode whatever they keep here.

    Writes are whole-value overwrites made atomic with a temp file + os.replace.
    """

    def __init__(self, root_dir: str | Path) -> None:
        self._root = Path(root_dir)
        self._root.mkdir(parents=True, exist_ok=True)
        logger.info("LocalStorage ready dir=%s keys=%d", self._root, len(self.keys()))

    @property
    def root_dir(self) -> Path:
        return self._root

    def _path_for(self, key: str) -> Path:
        if not key or not _KEY_RE.match(key) or key.startswith("."):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._root / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text("utf-8")
        except OSError:
            logger.exception("Failed to read storage key=%s path=%s", key, path)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            # Task text can be personal; keep the file private on disk.
            os.chmod(path, 0o600)
        logger.debug("Storage write key=%s bytes=%d", key, len(value))

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        with contextlib.suppress(FileNotFoundError):
            path.unlink()
            logger.debug("Storage remove key=%s", key)

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self._root.glob("*.json"))

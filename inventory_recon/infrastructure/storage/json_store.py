"""Durable key-value storage backed by one JSON file per key."""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from inventory_recon.config import SETTINGS

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[0-9A-Za-z_-]+$")


class JsonKeyValueStore:
    def __init__(self, root: Path | None = None) -> None:
        self._root = Path(root) if root is not None else SETTINGS.data_dir

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._root / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self.path_for(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable store file %s", path)
            return default

    def set(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(value, ensure_ascii=False, indent=2), encoding="utf-8")

    def remove(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)

    def __contains__(self, key: str) -> bool:
        return self.path_for(key).exists()

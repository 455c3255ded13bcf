"""Filesystem repository for date-stamped backup files."""
from __future__ import annotations

from pathlib import Path

from inventory_recon.domain.backup.entities import BackupFile


class FileSystemBackupRepository:
    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    def save(self, backup: BackupFile) -> Path:
        self._root.mkdir(parents=True, exist_ok=True)
        target = self._root / backup.name
        target.write_bytes(backup.content)
        return target

    def latest(self) -> Path | None:
        candidates = sorted(self._root.glob("inventory_backup_*.json"))
        return candidates[-1] if candidates else None

    @staticmethod
    def read(path: Path) -> bytes:
        return Path(path).read_bytes()

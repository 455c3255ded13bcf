"""Backup domain entities for full inventory snapshots."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from inventory_recon.domain.models import ReconciledRecord, UserAccount


@dataclass(frozen=True)
class BackupDocument:
    inventory: Sequence[ReconciledRecord]
    users: Sequence[UserAccount]
    legacy: bool = False


@dataclass(frozen=True)
class BackupFile:
    name: str
    content: bytes


def backup_filename(day: date) -> str:
    return f"inventory_backup_{day.isoformat()}.json"

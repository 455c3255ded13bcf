"""Backup application use cases."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from inventory_recon.domain.backup.entities import BackupDocument, BackupFile, backup_filename
from inventory_recon.domain.repositories import InventoryRepository, UserRepository
from inventory_recon.infrastructure.backup.codec import decode_backup, encode_backup

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExportBackupUseCase:
    inventory_repository: InventoryRepository
    user_repository: UserRepository

    def execute(self, today: date | None = None) -> BackupFile:
        document = BackupDocument(
            inventory=tuple(self.inventory_repository.list_records()),
            users=tuple(self.user_repository.list_users()),
        )
        name = backup_filename(today or date.today())
        logger.info("Exported backup %s with %d records", name, len(document.inventory))
        return BackupFile(name=name, content=encode_backup(document))


@dataclass(slots=True)
class ImportBackupUseCase:
    inventory_repository: InventoryRepository
    user_repository: UserRepository

    def execute(self, raw: bytes | str) -> BackupDocument:
        # Decode fully before touching storage so a FormatError leaves state intact.
        document = decode_backup(raw, current_users=self.user_repository.list_users())
        self.inventory_repository.save_records(document.inventory)
        self.user_repository.save_users(document.users)
        logger.info(
            "Imported %s backup: %d records, %d users",
            "legacy" if document.legacy else "full",
            len(document.inventory),
            len(document.users),
        )
        return document

"""Encoding and decoding of full backup documents."""
from __future__ import annotations

import json
from typing import Sequence

from inventory_recon.domain.backup.entities import BackupDocument
from inventory_recon.domain.models import UserAccount
from inventory_recon.errors import FormatError
from inventory_recon.infrastructure.storage.codec import (
    record_from_document,
    record_to_document,
    user_from_document,
    user_to_document,
)


def encode_backup(document: BackupDocument) -> bytes:
    payload = {
        "inventory": [record_to_document(record) for record in document.inventory],
        "users": [user_to_document(user) for user in document.users],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def decode_backup(raw: bytes | str, current_users: Sequence[UserAccount]) -> BackupDocument:
    """Decode a backup; a bare record array is the legacy format and keeps ``current_users``."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FormatError(f"Backup is not valid JSON: {exc}") from exc

    if isinstance(data, list):
        return BackupDocument(
            inventory=tuple(record_from_document(item) for item in data),
            users=tuple(current_users),
            legacy=True,
        )
    if isinstance(data, dict) and isinstance(data.get("inventory"), list) and isinstance(data.get("users"), list):
        users = tuple(user_from_document(item) for item in data["users"])
        # Replacing the accounts must never leave the store without an administrator.
        if not any(user.is_admin for user in users):
            raise FormatError("Backup must contain at least one ADMIN account")
        return BackupDocument(
            inventory=tuple(record_from_document(item) for item in data["inventory"]),
            users=users,
        )
    raise FormatError("Invalid backup format: expected {'inventory': [...], 'users': [...]} or a record array")

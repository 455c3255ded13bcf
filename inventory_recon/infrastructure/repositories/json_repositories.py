"""Key-value store backed repositories for records and accounts."""
from __future__ import annotations

import logging
from typing import Any, Sequence

from inventory_recon.config import SETTINGS
from inventory_recon.domain.models import ReconciledRecord, UserAccount
from inventory_recon.domain.repositories import InventoryRepository, UserRepository
from inventory_recon.infrastructure.storage.codec import (
    record_from_document,
    record_to_document,
    user_from_document,
    user_to_document,
)
from inventory_recon.infrastructure.storage.json_store import JsonKeyValueStore

logger = logging.getLogger(__name__)


def _load_list(store: JsonKeyValueStore, key: str) -> list[Any]:
    data = store.get(key, default=[])
    if not isinstance(data, list):
        logger.warning("Store key %s does not hold a list; treating as empty", key)
        return []
    return data


class JsonInventoryRepository(InventoryRepository):
    def __init__(self, store: JsonKeyValueStore, key: str | None = None) -> None:
        self._store = store
        self._key = key or SETTINGS.inventory_key

    def list_records(self) -> list[ReconciledRecord]:
        return [record_from_document(raw) for raw in _load_list(self._store, self._key)]

    def save_records(self, records: Sequence[ReconciledRecord]) -> None:
        self._store.set(self._key, [record_to_document(record) for record in records])

    def clear(self) -> None:
        self._store.remove(self._key)


class JsonUserRepository(UserRepository):
    def __init__(self, store: JsonKeyValueStore, key: str | None = None) -> None:
        self._store = store
        self._key = key or SETTINGS.users_key

    def list_users(self) -> list[UserAccount]:
        return [user_from_document(raw) for raw in _load_list(self._store, self._key)]

    def save_users(self, users: Sequence[UserAccount]) -> None:
        self._store.set(self._key, [user_to_document(user) for user in users])

"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import ReconciledRecord, UserAccount


class InventoryRepository(Protocol):
    """Persists the reconciled record collection."""

    def list_records(self) -> list[ReconciledRecord]:
        ...

    def save_records(self, records: Sequence[ReconciledRecord]) -> None:
        ...

    def clear(self) -> None:
        ...


class UserRepository(Protocol):
    """Persists user accounts."""

    def list_users(self) -> list[UserAccount]:
        ...

    def save_users(self, users: Sequence[UserAccount]) -> None:
        ...

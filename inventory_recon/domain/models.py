"""Domain models for the inventory reconciliation pipeline.

A reconciled record stores only the figures read from the pasted columns;
unit value and both divergences are derived on access so they can never
drift from their sources.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, Sequence


@dataclass(frozen=True)
class PastedRow:
    """Raw cell texts of one row; missing cells are empty strings."""

    code: str
    description: str
    warehouse: str
    system_quantity: str
    physical_quantity: str
    total_value: str


@dataclass(frozen=True)
class PastedColumns:
    """Six pasted columns after line splitting, aligned by index."""

    codes: Sequence[str]
    descriptions: Sequence[str] = ()
    warehouses: Sequence[str] = ()
    system_quantities: Sequence[str] = ()
    physical_quantities: Sequence[str] = ()
    total_values: Sequence[str] = ()

    @property
    def row_count(self) -> int:
        return len(self.codes)

    def iter_rows(self) -> Iterator[PastedRow]:
        # The code column decides the row count; longer columns are truncated.
        for idx in range(self.row_count):
            yield PastedRow(
                code=_cell(self.codes, idx),
                description=_cell(self.descriptions, idx),
                warehouse=_cell(self.warehouses, idx),
                system_quantity=_cell(self.system_quantities, idx),
                physical_quantity=_cell(self.physical_quantities, idx),
                total_value=_cell(self.total_values, idx),
            )


def _cell(column: Sequence[str], idx: int) -> str:
    return column[idx] if idx < len(column) else ""


@dataclass(frozen=True)
class ReconciledRecord:
    """One physical-count reconciliation result."""

    id: str
    code: str
    description: str
    warehouse: str
    system_quantity: float
    physical_quantity: float
    system_total_value: float
    created_at: datetime

    @property
    def unit_value(self) -> float:
        if self.system_quantity == 0:
            return 0.0
        return self.system_total_value / self.system_quantity

    @property
    def quantity_divergence(self) -> float:
        return self.physical_quantity - self.system_quantity

    @property
    def value_divergence(self) -> float:
        return self.quantity_divergence * self.unit_value

    @property
    def is_divergent(self) -> bool:
        return self.quantity_divergence != 0


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    CLERK = "CLERK"


@dataclass(frozen=True)
class UserAccount:
    id: str
    username: str
    password_hash: str
    role: UserRole
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

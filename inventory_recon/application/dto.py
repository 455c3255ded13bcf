"""Application-level DTOs for inventory reconciliation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from inventory_recon.domain.models import ReconciledRecord
from inventory_recon.domain.results import InventoryStats


@dataclass(slots=True, frozen=True)
class PasteBatch:
    """The six pasted column blocks, as typed or pasted by the user."""

    codes: str
    descriptions: str = ""
    warehouses: str = ""
    system_quantities: str = ""
    physical_quantities: str = ""
    total_values: str = ""


@dataclass(slots=True, frozen=True)
class ReconcileResponse:
    records: Sequence[ReconciledRecord]
    stats: InventoryStats


class StatusFilter(str, Enum):
    ALL = "ALL"
    DIVERGENT = "DIVERGENT"
    ACCURATE = "ACCURATE"


@dataclass(slots=True, frozen=True)
class RecordQuery:
    search: str = ""
    status: StatusFilter = StatusFilter.ALL
    sort_key: str | None = None
    descending: bool = False

"""Domain services deriving divergences and aggregating them."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Iterable, Sequence

from inventory_recon.config import SETTINGS

from .models import PastedColumns, PastedRow, ReconciledRecord
from .numbers import parse_currency, parse_quantity
from .results import InventoryStats

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(SETTINGS.timezone)


class DivergenceEngine:
    """Turns aligned pasted rows into reconciled records and summarizes them."""

    def __init__(
        self,
        default_code: str | None = None,
        default_warehouse: str | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._default_code = default_code or SETTINGS.default_code
        self._default_warehouse = default_warehouse or SETTINGS.default_warehouse
        self._id_factory = id_factory or _new_id
        self._clock = clock or _now

    def reconcile(self, columns: PastedColumns) -> list[ReconciledRecord]:
        created_at = self._clock()
        records = [self._to_record(row, created_at) for row in columns.iter_rows()]
        logger.debug("Derived divergences for %d pasted rows", len(records))
        return records

    def _to_record(self, row: PastedRow, created_at: datetime) -> ReconciledRecord:
        return ReconciledRecord(
            id=self._id_factory(),
            code=row.code or self._default_code,
            description=row.description,
            warehouse=row.warehouse or self._default_warehouse,
            system_quantity=parse_quantity(row.system_quantity),
            physical_quantity=parse_quantity(row.physical_quantity),
            system_total_value=parse_currency(row.total_value),
            created_at=created_at,
        )

    @staticmethod
    def summarize(records: Sequence[ReconciledRecord]) -> InventoryStats:
        total = len(records)
        divergent = sum(1 for record in records if record.is_divergent)
        accuracy = (total - divergent) / total * 100 if total else 0.0
        return InventoryStats(
            total_items=total,
            divergent_items=divergent,
            accuracy_percentage=accuracy,
            net_divergence_value=sum((record.value_divergence for record in records), 0.0),
            total_system_value=sum((record.system_total_value for record in records), 0.0),
            total_physical_value=sum((record.physical_quantity * record.unit_value for record in records), 0.0),
            divergence_by_warehouse=divergence_by_warehouse(records),
        )


def divergence_by_warehouse(records: Iterable[ReconciledRecord]) -> dict[str, float]:
    """Absolute value divergence per warehouse, in first-seen order."""
    totals: dict[str, float] = {}
    for record in records:
        totals[record.warehouse] = totals.get(record.warehouse, 0.0) + abs(record.value_divergence)
    return totals

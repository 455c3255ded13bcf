"""Application services orchestrating the reconciliation workflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from inventory_recon.application.dto import PasteBatch, ReconcileResponse, RecordQuery, StatusFilter
from inventory_recon.domain.models import ReconciledRecord
from inventory_recon.domain.repositories import InventoryRepository
from inventory_recon.domain.results import InventoryStats
from inventory_recon.domain.services import DivergenceEngine
from inventory_recon.infrastructure.parsing.paste import parse_paste_columns

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = (
    "code",
    "description",
    "warehouse",
    "system_quantity",
    "physical_quantity",
    "system_total_value",
    "unit_value",
    "quantity_divergence",
    "value_divergence",
    "created_at",
)


class ReconcileBatchUseCase:
    """Parses a paste batch and derives its records without persisting them."""

    def __init__(self, engine: DivergenceEngine | None = None) -> None:
        self._engine = engine or DivergenceEngine()

    def execute(self, batch: PasteBatch) -> ReconcileResponse:
        columns = parse_paste_columns(
            batch.codes,
            batch.descriptions,
            batch.warehouses,
            batch.system_quantities,
            batch.physical_quantities,
            batch.total_values,
        )
        records = self._engine.reconcile(columns)
        return ReconcileResponse(records=tuple(records), stats=self._engine.summarize(records))


@dataclass(slots=True)
class ImportRecordsUseCase:
    repository: InventoryRepository

    def execute(self, records: Sequence[ReconciledRecord]) -> int:
        stored = self.repository.list_records()
        stored.extend(records)
        self.repository.save_records(stored)
        logger.info("Imported %d records; collection now holds %d", len(records), len(stored))
        return len(stored)


@dataclass(slots=True)
class DeleteRecordUseCase:
    repository: InventoryRepository

    def execute(self, record_id: str) -> bool:
        stored = self.repository.list_records()
        remaining = [record for record in stored if record.id != record_id]
        if len(remaining) == len(stored):
            return False
        self.repository.save_records(remaining)
        logger.info("Deleted record %s", record_id)
        return True


@dataclass(slots=True)
class ClearInventoryUseCase:
    repository: InventoryRepository

    def execute(self) -> None:
        self.repository.clear()
        logger.info("Cleared inventory collection")


@dataclass(slots=True)
class SummarizeInventoryUseCase:
    repository: InventoryRepository

    def execute(self) -> InventoryStats:
        return DivergenceEngine.summarize(self.repository.list_records())


def query_records(records: Sequence[ReconciledRecord], query: RecordQuery) -> list[ReconciledRecord]:
    """Search, filter and sort a record collection for display."""
    needle = query.search.strip().lower()
    result = [
        record
        for record in records
        if not needle
        or needle in record.code.lower()
        or needle in record.warehouse.lower()
        or needle in record.description.lower()
    ]

    if query.status == StatusFilter.DIVERGENT:
        result = [record for record in result if record.is_divergent]
    elif query.status == StatusFilter.ACCURATE:
        result = [record for record in result if not record.is_divergent]

    if query.sort_key:
        if query.sort_key not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by {query.sort_key!r}")
        result.sort(key=lambda record: getattr(record, query.sort_key), reverse=query.descending)
    return result

"""Physical-count inventory reconciliation toolkit."""
from inventory_recon.application.dto import PasteBatch
from inventory_recon.application.use_cases import ImportRecordsUseCase, ReconcileBatchUseCase
from inventory_recon.domain.models import ReconciledRecord
from inventory_recon.domain.services import DivergenceEngine
from inventory_recon.errors import FormatError, ValidationError
from inventory_recon.infrastructure.repositories.json_repositories import (
    JsonInventoryRepository,
    JsonUserRepository,
)
from inventory_recon.infrastructure.storage.json_store import JsonKeyValueStore

__all__ = [
    "PasteBatch",
    "ReconcileBatchUseCase",
    "ImportRecordsUseCase",
    "ReconciledRecord",
    "DivergenceEngine",
    "ValidationError",
    "FormatError",
    "JsonKeyValueStore",
    "JsonInventoryRepository",
    "JsonUserRepository",
]

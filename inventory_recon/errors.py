"""Exception hierarchy for inventory reconciliation."""
from __future__ import annotations


class InventoryReconError(Exception):
    """Base class for every error raised by the package."""


class ValidationError(InventoryReconError):
    """Pasted input cannot produce any record."""


class FormatError(InventoryReconError):
    """A backup document matches neither the current nor the legacy schema."""


class UserAccountError(InventoryReconError):
    """A user-management rule was violated."""

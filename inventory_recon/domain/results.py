"""Domain-level aggregates over reconciled records."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class InventoryStats:
    total_items: int
    divergent_items: int
    accuracy_percentage: float
    net_divergence_value: float
    total_system_value: float
    total_physical_value: float
    divergence_by_warehouse: Mapping[str, float] = field(default_factory=dict)

    @property
    def accurate_items(self) -> int:
        return self.total_items - self.divergent_items

    def has_divergences(self) -> bool:
        return self.divergent_items > 0

    def meets_target(self, target: float) -> bool:
        return self.total_items > 0 and self.accuracy_percentage > target

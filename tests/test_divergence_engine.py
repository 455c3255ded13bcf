from dataclasses import asdict
from datetime import datetime, timezone
from itertools import count

import pytest

from inventory_recon.domain.models import ReconciledRecord
from inventory_recon.domain.services import DivergenceEngine
from inventory_recon.infrastructure.parsing.paste import parse_paste_columns

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_engine() -> DivergenceEngine:
    ids = count(1)
    return DivergenceEngine(id_factory=lambda: f"id-{next(ids)}", clock=lambda: FIXED_NOW)


def make_record(code: str, system_qty: float, physical_qty: float, total: float, warehouse: str = "W1") -> ReconciledRecord:
    return ReconciledRecord(
        id=code,
        code=code,
        description="",
        warehouse=warehouse,
        system_quantity=system_qty,
        physical_quantity=physical_qty,
        system_total_value=total,
        created_at=FIXED_NOW,
    )


def test_single_row_scenario():
    columns = parse_paste_columns("100", system_quantities="10", physical_quantities="8", total_values="R$ 100,00")

    records = make_engine().reconcile(columns)

    assert len(records) == 1
    record = records[0]
    assert record.unit_value == 10
    assert record.quantity_divergence == -2
    assert record.value_divergence == -20
    assert record.created_at == FIXED_NOW


def test_defaults_for_missing_cells():
    records = make_engine().reconcile(parse_paste_columns("A\nB", warehouses="DAGR"))

    assert records[0].warehouse == "DAGR"
    assert records[1].warehouse == "General"
    assert records[1].description == ""
    assert records[1].system_quantity == 0
    assert records[1].system_total_value == 0


def test_zero_system_quantity_gives_zero_unit_value():
    columns = parse_paste_columns("A", system_quantities="0", physical_quantities="4", total_values="R$ 900,00")

    record = make_engine().reconcile(columns)[0]

    assert record.unit_value == 0
    assert record.quantity_divergence == 4
    assert record.value_divergence == 0


def test_value_divergence_consistent_for_every_row():
    columns = parse_paste_columns(
        "A\nB\nC\nD",
        system_quantities="3\n7,5\n0\n12",
        physical_quantities="1\n8\n2\nabc",
        total_values="R$ 10,00\nR$ 1.234,56\nR$ 5,00\nR$ 0,99",
    )

    for record in make_engine().reconcile(columns):
        assert record.value_divergence == pytest.approx(record.quantity_divergence * record.unit_value)


def test_reconcile_is_idempotent_except_identity_and_timestamp():
    columns = parse_paste_columns("A\nB", system_quantities="2\n3", physical_quantities="2\n1", total_values="4\n9")

    first = DivergenceEngine().reconcile(columns)
    second = DivergenceEngine().reconcile(columns)

    def strip(record: ReconciledRecord) -> dict:
        data = asdict(record)
        data.pop("id")
        data.pop("created_at")
        return data

    assert [strip(r) for r in first] == [strip(r) for r in second]
    assert {r.id for r in first}.isdisjoint({r.id for r in second})


def test_summarize_net_divergence_and_accuracy():
    loss = make_record("A", 10, 8, 100)  # -20
    gain = make_record("B", 2, 3, 10)  # +5

    stats = DivergenceEngine.summarize([loss, gain])

    assert stats.total_items == 2
    assert stats.divergent_items == 2
    assert stats.net_divergence_value == -15
    assert stats.total_system_value == 110


def test_summarize_accuracy_half():
    stats = DivergenceEngine.summarize([make_record("A", 10, 8, 100), make_record("B", 5, 5, 50)])

    assert stats.accuracy_percentage == 50
    assert stats.accurate_items == 1
    assert stats.has_divergences()


def test_summarize_empty_collection():
    stats = DivergenceEngine.summarize([])

    assert stats.total_items == 0
    assert stats.accuracy_percentage == 0
    assert stats.net_divergence_value == 0
    assert stats.divergence_by_warehouse == {}
    assert not stats.meets_target(98)


def test_divergence_by_warehouse_sums_absolute_values():
    records = [
        make_record("A", 10, 8, 100, warehouse="DAGR"),  # -20
        make_record("B", 2, 3, 10, warehouse="DAGR"),  # +5
        make_record("C", 1, 1, 10, warehouse="MAIN"),  # 0
    ]

    stats = DivergenceEngine.summarize(records)

    assert stats.divergence_by_warehouse == {"DAGR": 25, "MAIN": 0}
    assert list(stats.divergence_by_warehouse) == ["DAGR", "MAIN"]
    assert stats.total_physical_value == pytest.approx(80 + 15 + 10)

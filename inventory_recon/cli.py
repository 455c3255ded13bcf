"""Command-line entrypoint for inventory reconciliation."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from inventory_recon.application.backup.use_cases import ExportBackupUseCase, ImportBackupUseCase
from inventory_recon.application.dto import PasteBatch
from inventory_recon.application.use_cases import (
    ImportRecordsUseCase,
    ReconcileBatchUseCase,
    SummarizeInventoryUseCase,
)
from inventory_recon.config import SETTINGS
from inventory_recon.domain.models import ReconciledRecord
from inventory_recon.domain.results import InventoryStats
from inventory_recon.errors import InventoryReconError
from inventory_recon.infrastructure.backup.file_repository import FileSystemBackupRepository
from inventory_recon.infrastructure.repositories.json_repositories import (
    JsonInventoryRepository,
    JsonUserRepository,
)
from inventory_recon.infrastructure.storage.json_store import JsonKeyValueStore
from inventory_recon.logging_config import configure_logging
from inventory_recon.presentation.report import format_currency, render_csv, render_excel

COLUMN_OPTIONS = (
    ("codes", "Material codes, one per line"),
    ("descriptions", "Short descriptions"),
    ("warehouses", "Warehouse names"),
    ("system_quantities", "System quantities"),
    ("physical_quantities", "Physical counts"),
    ("total_values", "System total values, e.g. 'R$ 5.300,10'"),
)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile physical inventory counts against system records")
    parser.add_argument("--data-dir", type=Path, help="Storage directory (defaults to INVENTORY_RECON_DATA_DIR)")
    parser.add_argument("--log-level", type=str, help="Logging level, e.g. DEBUG")
    sub = parser.add_subparsers(dest="command", required=True)

    reconcile = sub.add_parser("reconcile", help="Compute divergences from pasted column files")
    for name, help_text in COLUMN_OPTIONS:
        flag = "--" + name.replace("_", "-")
        reconcile.add_argument(flag, type=Path, required=name == "codes", help=f"{help_text} (text file)")
    reconcile.add_argument("--save", action="store_true", help="Append the records to storage")

    sub.add_parser("summary", help="Print aggregate statistics of stored records")

    export_csv = sub.add_parser("export-csv", help="Write stored records as ';'-separated CSV")
    export_csv.add_argument("path", type=Path)

    export_xlsx = sub.add_parser("export-xlsx", help="Write stored records as an Excel workbook")
    export_xlsx.add_argument("path", type=Path)

    backup_export = sub.add_parser("backup-export", help="Write a date-stamped full backup")
    backup_export.add_argument("directory", type=Path, nargs="?", help="Target directory")

    backup_import = sub.add_parser("backup-import", help="Replace stored data with a backup file")
    backup_import.add_argument("path", type=Path)
    return parser.parse_args(argv)


def _read_text(path: Path | None) -> str:
    return path.read_text(encoding="utf-8") if path else ""


def print_records(records: Sequence[ReconciledRecord]) -> None:
    for r in records:
        print(
            f"- {r.code} [{r.warehouse}] system={r.system_quantity:g} physical={r.physical_quantity:g} "
            f"qty_div={r.quantity_divergence:g} value_div={format_currency(r.value_divergence)}"
        )


def print_summary(stats: InventoryStats) -> None:
    print("Reconciliation Summary")
    print("======================")
    print(f"Records: {stats.total_items}")
    print(f"Divergent records: {stats.divergent_items}")
    print(f"Accuracy: {stats.accuracy_percentage:.1f}% (target > {SETTINGS.accuracy_target:g}%)")
    print(f"Net divergence: {format_currency(stats.net_divergence_value)}")
    print(f"Total system value: {format_currency(stats.total_system_value)}")
    if stats.divergence_by_warehouse:
        print("\nAbsolute divergence by warehouse:")
        for warehouse, value in stats.divergence_by_warehouse.items():
            print(f"- {warehouse}: {format_currency(value)}")


def run(args: argparse.Namespace) -> int:
    store = JsonKeyValueStore(args.data_dir)
    inventory_repo = JsonInventoryRepository(store)
    user_repo = JsonUserRepository(store)

    if args.command == "reconcile":
        batch = PasteBatch(**{name: _read_text(getattr(args, name)) for name, _ in COLUMN_OPTIONS})
        response = ReconcileBatchUseCase().execute(batch)
        print_records(response.records)
        print()
        print_summary(response.stats)
        if args.save:
            total = ImportRecordsUseCase(inventory_repo).execute(response.records)
            print(f"\nSaved {len(response.records)} records ({total} stored).")
    elif args.command == "summary":
        print_summary(SummarizeInventoryUseCase(inventory_repo).execute())
    elif args.command == "export-csv":
        args.path.write_bytes(render_csv(inventory_repo.list_records()))
        print(f"Wrote {args.path}")
    elif args.command == "export-xlsx":
        args.path.write_bytes(render_excel(inventory_repo.list_records()))
        print(f"Wrote {args.path}")
    elif args.command == "backup-export":
        backup = ExportBackupUseCase(inventory_repo, user_repo).execute()
        target = FileSystemBackupRepository(args.directory or SETTINGS.backup_dir).save(backup)
        print(f"Wrote {target}")
    elif args.command == "backup-import":
        raw = FileSystemBackupRepository.read(args.path)
        document = ImportBackupUseCase(inventory_repo, user_repo).execute(raw)
        print(f"Imported {len(document.inventory)} records and {len(document.users)} users.")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level)
    try:
        return run(args)
    except InventoryReconError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Report generators for reconciled inventory."""
from __future__ import annotations

import csv
import io
from typing import Mapping, Sequence

import pandas as pd

from inventory_recon.config import SETTINGS
from inventory_recon.domain.models import ReconciledRecord

CSV_FILENAME = "inventory_export.csv"
EXCEL_FILENAME = "inventory_export.xlsx"

_ROW_COLUMNS = (
    "id",
    "code",
    "description",
    "warehouse",
    "system_quantity",
    "physical_quantity",
    "quantity_divergence",
    "system_total_value",
    "unit_value",
    "value_divergence",
    "created_at",
)

CSV_HEADERS = [
    "Material",
    "Description",
    "Warehouse",
    "System Qty",
    "Physical Count",
    "Divergence (Qty)",
    "System Value",
    "Divergence (Value)",
]


def format_currency(value: float, symbol: str | None = None) -> str:
    """pt-BR currency text: ``5300.1`` -> ``R$ 5.300,10``."""
    symbol = symbol or SETTINGS.currency_symbol
    grouped = f"{abs(value):,.2f}".translate(str.maketrans({",": ".", ".": ","}))
    sign = "-" if round(value, 2) < 0 else ""
    return f"{sign}{symbol} {grouped}"


def format_number(value: float) -> str:
    """Plain number with a decimal comma; integral values lose the fraction."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value)).replace(".", ",")


def records_to_rows(records: Sequence[ReconciledRecord]) -> list[dict[str, object]]:
    return [
        {
            "id": r.id,
            "code": r.code,
            "description": r.description,
            "warehouse": r.warehouse,
            "system_quantity": r.system_quantity,
            "physical_quantity": r.physical_quantity,
            "quantity_divergence": r.quantity_divergence,
            "system_total_value": r.system_total_value,
            "unit_value": r.unit_value,
            "value_divergence": r.value_divergence,
            "created_at": r.created_at.isoformat(),
        }
        for r in records
    ]


def records_to_dataframe(records: Sequence[ReconciledRecord]) -> pd.DataFrame:
    return pd.DataFrame(records_to_rows(records), columns=list(_ROW_COLUMNS))


def render_csv(records: Sequence[ReconciledRecord]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for r in records:
        writer.writerow(
            [
                r.code,
                r.description,
                r.warehouse,
                format_number(r.system_quantity),
                format_number(r.physical_quantity),
                format_number(r.quantity_divergence),
                format_number(r.system_total_value),
                format_number(r.value_divergence),
            ]
        )
    return buffer.getvalue().encode("utf-8")


def render_excel(records: Sequence[ReconciledRecord], sheet_name: str = "inventory") -> bytes:
    df = records_to_dataframe(records).drop(columns=["id"])
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        if not df.empty:
            workbook = writer.book
            worksheet = writer.sheets[sheet_name]
            yellow = workbook.add_format({"bg_color": "#FFFF00"})
            # Highlight the divergence columns of every row whose count differs.
            for column in ("quantity_divergence", "value_divergence"):
                col_idx = df.columns.get_loc(column)
                worksheet.conditional_format(1, col_idx, len(df), col_idx, {
                    "type": "cell",
                    "criteria": "!=",
                    "value": 0,
                    "format": yellow,
                })
    buf.seek(0)
    return buf.getvalue()


def warehouse_dataframe(divergence_by_warehouse: Mapping[str, float]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"warehouse": name, "abs_value_divergence": value} for name, value in divergence_by_warehouse.items()],
        columns=["warehouse", "abs_value_divergence"],
    )

"""Parser for spreadsheet columns pasted as plain text."""
from __future__ import annotations

from inventory_recon.domain.models import PastedColumns
from inventory_recon.errors import ValidationError


def split_lines(text: str | None) -> tuple[str, ...]:
    """Trimmed, non-empty lines of ``text``. Blank rows are dropped, not kept as placeholders."""
    if not text:
        return ()
    return tuple(line.strip() for line in text.splitlines() if line.strip())


def parse_paste_columns(
    codes: str | None,
    descriptions: str | None = None,
    warehouses: str | None = None,
    system_quantities: str | None = None,
    physical_quantities: str | None = None,
    total_values: str | None = None,
) -> PastedColumns:
    columns = PastedColumns(
        codes=split_lines(codes),
        descriptions=split_lines(descriptions),
        warehouses=split_lines(warehouses),
        system_quantities=split_lines(system_quantities),
        physical_quantities=split_lines(physical_quantities),
        total_values=split_lines(total_values),
    )
    if columns.row_count == 0:
        raise ValidationError("no material codes supplied")
    return columns

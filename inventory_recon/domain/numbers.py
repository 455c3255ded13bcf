"""Locale number parsing for pasted spreadsheet cells.

Input follows the pt-BR convention: comma as decimal separator and period as
thousands separator in currency cells. Nothing here raises; text that does
not start with a number reads as zero.
"""
from __future__ import annotations

import re

_LEADING_FLOAT = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_CURRENCY_NOISE = re.compile(r"[R$\s]")


def leading_float(text: str) -> float:
    """Parse the longest numeric prefix of ``text``; ``0.0`` when there is none."""
    match = _LEADING_FLOAT.match(text.strip())
    if match is None:
        return 0.0
    return float(match.group(0))


def parse_quantity(value: object) -> float:
    if value is None:
        return 0.0
    s = str(value).strip()
    if not s:
        return 0.0
    return leading_float(s.replace(",", ".", 1))


def parse_currency(value: object) -> float:
    """``"R$ 5.300,10"`` -> ``5300.1``. Periods are always thousands separators."""
    if value is None:
        return 0.0
    s = _CURRENCY_NOISE.sub("", str(value))
    s = s.replace(".", "").replace(",", ".", 1)
    if not s:
        return 0.0
    return leading_float(s)

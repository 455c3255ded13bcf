"""JSON document mapping for records and user accounts.

Documents use camelCase keys. Derived figures are written for readers of the
file but ignored on load; they are recomputed from the source fields.
Documents written by the earlier browser-based release (``sapQuantity``,
``dateAdded``, plaintext ``password``...) are accepted as well.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from inventory_recon.config import SETTINGS
from inventory_recon.domain.models import ReconciledRecord, UserAccount, UserRole
from inventory_recon.domain.numbers import parse_quantity
from inventory_recon.errors import FormatError
from inventory_recon.infrastructure.security.passwords import hash_password, is_password_hash

_RECORD_ALIASES = {
    "systemQuantity": ("systemQuantity", "sapQuantity"),
    "physicalQuantity": ("physicalQuantity",),
    "systemTotalValue": ("systemTotalValue", "sapTotalValue"),
    "createdAt": ("createdAt", "dateAdded"),
}

_LEGACY_ROLES = {"BALCONISTA": UserRole.CLERK}


def record_to_document(record: ReconciledRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "code": record.code,
        "description": record.description,
        "warehouse": record.warehouse,
        "systemQuantity": record.system_quantity,
        "physicalQuantity": record.physical_quantity,
        "systemTotalValue": record.system_total_value,
        "unitValue": record.unit_value,
        "quantityDivergence": record.quantity_divergence,
        "valueDivergence": record.value_divergence,
        "createdAt": record.created_at.isoformat(),
    }


def _pick(raw: Mapping[str, Any], field_name: str) -> Any:
    for alias in _RECORD_ALIASES[field_name]:
        if alias in raw:
            return raw[alias]
    return None


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    return parse_quantity(value)


def _timestamp(value: Any) -> datetime:
    if not value:
        return datetime.now(SETTINGS.timezone)
    text = str(value).strip()
    # fromisoformat only learned the "Z" suffix in 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise FormatError(f"Invalid timestamp {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=SETTINGS.timezone)
    return parsed


def record_from_document(raw: Any) -> ReconciledRecord:
    if not isinstance(raw, Mapping):
        raise FormatError("Inventory entries must be objects")
    if not raw.get("id"):
        raise FormatError("Inventory entries require an 'id'")
    return ReconciledRecord(
        id=str(raw["id"]),
        code=str(raw.get("code") or SETTINGS.default_code),
        description=str(raw.get("description") or ""),
        warehouse=str(raw.get("warehouse") or SETTINGS.default_warehouse),
        system_quantity=_number(_pick(raw, "systemQuantity")),
        physical_quantity=_number(_pick(raw, "physicalQuantity")),
        system_total_value=_number(_pick(raw, "systemTotalValue")),
        created_at=_timestamp(_pick(raw, "createdAt")),
    )


def user_to_document(user: UserAccount) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "passwordHash": user.password_hash,
        "role": user.role.value,
        "name": user.name,
    }


def _role(value: Any) -> UserRole:
    text = str(value or "").strip().upper()
    if text in _LEGACY_ROLES:
        return _LEGACY_ROLES[text]
    try:
        return UserRole(text)
    except ValueError as exc:
        raise FormatError(f"Unknown user role {value!r}") from exc


def user_from_document(raw: Any) -> UserAccount:
    if not isinstance(raw, Mapping):
        raise FormatError("User entries must be objects")
    if not raw.get("id") or not raw.get("username"):
        raise FormatError("User entries require 'id' and 'username'")
    password_hash = raw.get("passwordHash")
    if not password_hash:
        plaintext = raw.get("password")
        if not plaintext:
            raise FormatError(f"User {raw['username']!r} has no password")
        password_hash = plaintext if is_password_hash(str(plaintext)) else hash_password(str(plaintext))
    return UserAccount(
        id=str(raw["id"]),
        username=str(raw["username"]),
        password_hash=str(password_hash),
        role=_role(raw.get("role")),
        name=str(raw.get("name") or raw["username"]),
    )

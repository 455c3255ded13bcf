"""Central configuration for the inventory reconciliation package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("INVENTORY_RECON_DATA_DIR", str(BASE_DIR / "data")))
BACKUP_DIR = DATA_DIR / "backups"

# Fixed namespace keys of the key-value store.
INVENTORY_KEY = "inventory_data"
USERS_KEY = "inventory_users"

ROOT_ADMIN_ID = "root-admin"


@dataclass(slots=True, frozen=True)
class Settings:
    data_dir: Path
    backup_dir: Path
    inventory_key: str
    users_key: str
    root_admin_id: str
    default_code: str
    default_warehouse: str
    currency_symbol: str
    accuracy_target: float
    log_level: str
    timezone: timezone.__class__


SETTINGS = Settings(
    data_dir=DATA_DIR,
    backup_dir=BACKUP_DIR,
    inventory_key=INVENTORY_KEY,
    users_key=USERS_KEY,
    root_admin_id=ROOT_ADMIN_ID,
    default_code="N/A",
    default_warehouse="General",
    currency_symbol="R$",
    accuracy_target=98.0,
    log_level=os.getenv("INVENTORY_RECON_LOG_LEVEL", "INFO"),
    timezone=timezone.utc,
)

"""Logging setup shared by the CLI and the Streamlit front-end."""
from __future__ import annotations

import logging

from inventory_recon.config import SETTINGS

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | int | None = None) -> None:
    """Install a single stream handler on the package logger.

    Safe to call more than once; Streamlit re-executes the script on every
    interaction.
    """
    global _configured
    level = level or SETTINGS.log_level
    if isinstance(level, str):
        level = level.upper()
    package_logger = logging.getLogger("inventory_recon")
    package_logger.setLevel(level)
    if _configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    _configured = True


def reset_logging() -> None:
    global _configured
    package_logger = logging.getLogger("inventory_recon")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    _configured = False

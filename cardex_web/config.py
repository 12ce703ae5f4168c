"""Environment driven settings shared by the web API, importer and CLI."""

from __future__ import annotations

import logging
import os

DEFAULT_DATABASE_URL = "sqlite:///./cardex.db"
DEFAULT_CARDS_CSV = "data/cards.csv"
DEFAULT_IMPORT_BATCH_SIZE = 100
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def database_url() -> str:
    return os.getenv("CARDEX_DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL


def cards_csv_path() -> str:
    return os.getenv("CARDEX_CARDS_CSV", "").strip() or DEFAULT_CARDS_CSV


def import_batch_size() -> int:
    return _env_int("CARDEX_IMPORT_BATCH_SIZE", DEFAULT_IMPORT_BATCH_SIZE)


def log_level() -> str:
    return os.getenv("CARDEX_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once for the current process."""

    logging.basicConfig(level=level or log_level(), format=LOG_FORMAT)

"""Helpers for reading card export CSV files."""

import csv
import logging
from pathlib import Path
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# columns the importer relies on; extra columns in the export are ignored
CARD_FIELDNAMES = [
    "uuid",
    "manaValue",
    "manaCost",
    "name",
    "rarity",
    "setCode",
    "subtypes",
    "text",
    "type",
    "artist",
]

ESCAPED_NEWLINE = "\\n"


class CsvFormatError(ValueError):
    """Raised when a card CSV file does not have the expected header."""


def escape_text(value: Optional[str]) -> Optional[str]:
    """Return ``value`` with real line breaks stored as ``\\n`` sequences."""

    if value is None:
        return None
    return value.replace("\r\n", "\n").replace("\n", ESCAPED_NEWLINE)


def unescape_text(value: Optional[str]) -> Optional[str]:
    """Turn stored ``\\n`` sequences back into line breaks."""

    if value is None:
        return None
    return value.replace(ESCAPED_NEWLINE, "\n")


def normalize_name(value: Optional[str]) -> str:
    """Return ``value`` casefolded for case-insensitive name lookups."""

    return (value or "").strip().casefold()


def blank_to_none(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    return text or None


def parse_mana_value(value: Optional[str]) -> Optional[float]:
    """Return the numeric mana value or ``None`` for blank/invalid input."""

    text = (value or "").strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        logger.debug("Ignoring non-numeric mana value %r", text)
        return None


def missing_columns(fieldnames: Optional[list[str]]) -> list[str]:
    present = set(fieldnames or [])
    return [name for name in CARD_FIELDNAMES if name not in present]


def iter_card_rows(path: PathLike) -> Iterator[dict[str, str]]:
    """Yield each data row of ``path`` as a mapping keyed by header name.

    Raises
    ------
    CsvFormatError
        If the header lacks one of :data:`CARD_FIELDNAMES`.
    OSError
        If the file cannot be opened.
    """

    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        missing = missing_columns(reader.fieldnames)
        if missing:
            raise CsvFormatError(
                f"{path}: missing required column(s): {', '.join(missing)}"
            )
        for row in reader:
            yield row


def count_rows(path: PathLike) -> int:
    """Return the number of data rows in ``path`` (header excluded)."""

    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)
        return sum(1 for _ in reader)

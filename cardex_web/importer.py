"""Batch import of card export CSV files into the catalogue tables."""

from __future__ import annotations

import hashlib
import logging
import time
import tracemalloc
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from sqlmodel import Session

from cardex.csv_utils import (
    blank_to_none,
    escape_text,
    iter_card_rows,
    normalize_name,
    parse_mana_value,
)

from . import config, models
from .database import get_engine
from .repositories import ArtistRepository, CardRepository

logger = logging.getLogger(__name__)

ProgressHook = Callable[[str, dict[str, Any]], None]


@dataclass
class ImportSummary:
    processed: int = 0
    imported: int = 0
    skipped: int = 0
    artists_created: int = 0
    elapsed_seconds: float = 0.0
    memory_peak_bytes: int = 0


def artist_external_id(name: str) -> str:
    return hashlib.md5(name.encode("utf-8")).hexdigest()


def format_bytes(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} GB"


def _default_session_factory() -> Session:
    return Session(get_engine())


class CardImporter:
    """Insert cards from a CSV export, skipping uuids already stored.

    Rows are committed every ``batch_size`` processed rows. A failure rolls
    back the uncommitted batch and propagates; earlier batches stay.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = _default_session_factory,
        *,
        batch_size: Optional[int] = None,
        progress: Optional[ProgressHook] = None,
    ) -> None:
        self.session_factory = session_factory
        self.batch_size = batch_size if batch_size and batch_size > 0 else config.import_batch_size()
        self.progress = progress
        self._artist_ids: dict[str, int] = {}

    def _notify(self, event: str, **payload: Any) -> None:
        if not self.progress:
            return
        try:
            self.progress(event, dict(payload))
        except Exception:
            logger.warning("Import progress hook raised during %s", event, exc_info=True)

    def _resolve_artist(self, session: Session, name: Optional[str], summary: ImportSummary) -> Optional[int]:
        if not name:
            return None
        cached = self._artist_ids.get(name)
        if cached is not None:
            return cached
        existing = ArtistRepository(session).find_by_name(name)
        if existing is not None:
            self._artist_ids[name] = existing.id
            return existing.id
        artist = models.Artist(
            name=name,
            name_normalized=normalize_name(name),
            artist_external_id=artist_external_id(name),
        )
        session.add(artist)
        session.flush()
        summary.artists_created += 1
        self._artist_ids[name] = artist.id
        logger.debug("Created artist %r (id=%s)", name, artist.id)
        return artist.id

    @staticmethod
    def _build_card(row: dict[str, str], artist_id: Optional[int]) -> models.Card:
        return models.Card(
            uuid=row["uuid"].strip(),
            name=(row.get("name") or "").strip(),
            name_normalized=normalize_name(row.get("name")),
            mana_value=parse_mana_value(row.get("manaValue")),
            mana_cost=blank_to_none(row.get("manaCost")),
            rarity=blank_to_none(row.get("rarity")),
            set_code=(row.get("setCode") or "").strip(),
            subtype=blank_to_none(row.get("subtypes")),
            type=blank_to_none(row.get("type")),
            text=escape_text(blank_to_none(row.get("text"))),
            artist_id=artist_id,
        )

    def run(self, path: Union[str, Path], limit: Optional[int] = None) -> ImportSummary:
        """Import ``path`` and return the run summary.

        A ``limit`` of zero or ``None`` imports every row.
        """

        limit = limit or None
        summary = ImportSummary()
        self._artist_ids = {}
        started = time.perf_counter()
        tracing = not tracemalloc.is_tracing()
        if tracing:
            tracemalloc.start()
        else:
            tracemalloc.reset_peak()

        logger.info("Importing cards from %s (batch_size=%s, limit=%s)", path, self.batch_size, limit)
        try:
            with self.session_factory() as session:
                rows = iter_card_rows(path)
                seen = CardRepository(session).all_uuids()
                self._notify("start", path=str(path), known_uuids=len(seen), limit=limit)
                index = 0
                try:
                    for index, row in enumerate(rows, start=1):
                        if limit is not None and summary.processed >= limit:
                            break
                        uuid = (row.get("uuid") or "").strip()
                        if not uuid or uuid in seen:
                            summary.skipped += 1
                        else:
                            artist_id = self._resolve_artist(
                                session, blank_to_none(row.get("artist")), summary
                            )
                            session.add(self._build_card(row, artist_id))
                            seen.add(uuid)
                            summary.imported += 1
                        summary.processed += 1
                        self._notify("row", index=index, uuid=uuid, processed=summary.processed)
                        if summary.processed % self.batch_size == 0:
                            session.commit()
                            logger.info(
                                "Import progress: %s rows processed (%s imported, %s skipped)",
                                summary.processed,
                                summary.imported,
                                summary.skipped,
                            )
                            self._notify(
                                "batch",
                                processed=summary.processed,
                                imported=summary.imported,
                                skipped=summary.skipped,
                            )
                    session.commit()
                except Exception:
                    session.rollback()
                    # artists created in the rolled back batch no longer exist
                    self._artist_ids = {}
                    logger.exception("Card import failed at row %s of %s", index, path)
                    raise
        finally:
            summary.elapsed_seconds = time.perf_counter() - started
            summary.memory_peak_bytes = tracemalloc.get_traced_memory()[1]
            if tracing:
                tracemalloc.stop()

        logger.info(
            "Processed %s cards in %.2f seconds (imported=%s, skipped=%s, artists_created=%s, memory_peak=%s)",
            summary.processed,
            summary.elapsed_seconds,
            summary.imported,
            summary.skipped,
            summary.artists_created,
            format_bytes(summary.memory_peak_bytes),
        )
        self._notify(
            "complete",
            processed=summary.processed,
            imported=summary.imported,
            skipped=summary.skipped,
            artists_created=summary.artists_created,
        )
        return summary

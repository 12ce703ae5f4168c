"""Artist queries."""

from __future__ import annotations

import logging
from typing import Optional

from sqlmodel import Session, col, select

from .. import models, schemas
from .base import fetch_page, name_contains

logger = logging.getLogger(__name__)


class ArtistRepository:
    """Read access to :class:`~cardex_web.models.Artist` rows."""

    ARTISTS_PER_PAGE = 50

    def __init__(self, session: Session) -> None:
        self.session = session

    def _ordered(self):
        return select(models.Artist).order_by(col(models.Artist.name), col(models.Artist.id))

    def _page(self, filters: list, page: int) -> schemas.ArtistPage:
        window, rows = fetch_page(
            self.session,
            count_column=models.Artist.id,
            rows_stmt=self._ordered(),
            filters=filters,
            page=page,
            items_per_page=self.ARTISTS_PER_PAGE,
        )
        return schemas.ArtistPage(
            items=[schemas.ArtistRead.model_validate(artist) for artist in rows],
            total_items=window.total_items,
            items_per_page=window.items_per_page,
            total_pages=window.total_pages,
            current_page=window.current_page,
        )

    def paginate(self, page: int = 1) -> schemas.ArtistPage:
        """Return one page of all artists ordered by name."""

        logger.debug("Fetching paginated artists (page=%s)", page)
        result = self._page([], page)
        logger.info(
            "Retrieved paginated artists: total_items=%s current_page=%s total_pages=%s items_returned=%s",
            result.total_items,
            result.current_page,
            result.total_pages,
            len(result.items),
        )
        return result

    def search_by_name(self, name: str, page: int = 1) -> schemas.ArtistPage:
        """Return one page of artists whose name contains ``name`` (any case).

        ``name`` must already be validated by the caller.
        """

        logger.debug("Searching artists by name %r (page=%s)", name, page)
        result = self._page([name_contains(models.Artist.name_normalized, name)], page)
        logger.info(
            "Artist search %r: total_items=%s current_page=%s total_pages=%s items_returned=%s",
            name,
            result.total_items,
            result.current_page,
            result.total_pages,
            len(result.items),
        )
        return result

    def get(self, artist_id: int) -> Optional[models.Artist]:
        return self.session.get(models.Artist, artist_id)

    def find_by_name(self, name: str) -> Optional[models.Artist]:
        """Return the oldest artist whose name equals ``name`` exactly."""

        return self.session.exec(
            select(models.Artist)
            .where(models.Artist.name == name)
            .order_by(col(models.Artist.id))
            .limit(1)
        ).first()

    def cards_for(self, artist_id: int) -> list[models.Card]:
        return list(
            self.session.exec(
                select(models.Card)
                .where(models.Card.artist_id == artist_id)
                .order_by(col(models.Card.name), col(models.Card.id))
            ).all()
        )

    def detail(self, artist_id: int) -> Optional[schemas.ArtistDetail]:
        """Return the artist with its card summaries, or ``None``."""

        artist = self.get(artist_id)
        if artist is None:
            return None
        cards = [schemas.CardSummary.model_validate(card) for card in self.cards_for(artist_id)]
        return schemas.ArtistDetail(
            id=artist.id,
            name=artist.name,
            artist_external_id=artist.artist_external_id,
            cards=cards,
        )

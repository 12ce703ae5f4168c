"""Card queries."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, col, select

from .. import models, schemas
from .base import fetch_page, name_contains

logger = logging.getLogger(__name__)


def to_card_read(card: models.Card, artist: Optional[models.Artist]) -> schemas.CardRead:
    return schemas.CardRead(
        uuid=card.uuid,
        name=card.name,
        mana_value=card.mana_value,
        mana_cost=card.mana_cost,
        rarity=card.rarity,
        set_code=card.set_code,
        subtype=card.subtype,
        type=card.type,
        text=card.text,
        artist=schemas.ArtistRead.model_validate(artist) if artist is not None else None,
    )


class CardRepository:
    """Read access to :class:`~cardex_web.models.Card` rows.

    Cards are always loaded together with their artist through an explicit
    outer join.
    """

    CARDS_PER_PAGE = 100

    def __init__(self, session: Session) -> None:
        self.session = session

    def _with_artist(self):
        return select(models.Card, models.Artist).join(
            models.Artist,
            col(models.Card.artist_id) == col(models.Artist.id),
            isouter=True,
        )

    def _page(self, filters: list, page: int) -> schemas.CardPage:
        window, rows = fetch_page(
            self.session,
            count_column=models.Card.id,
            rows_stmt=self._with_artist().order_by(col(models.Card.name), col(models.Card.id)),
            filters=filters,
            page=page,
            items_per_page=self.CARDS_PER_PAGE,
        )
        return schemas.CardPage(
            items=[to_card_read(card, artist) for card, artist in rows],
            total_items=window.total_items,
            items_per_page=window.items_per_page,
            total_pages=window.total_pages,
            current_page=window.current_page,
        )

    def paginate(self, page: int = 1, set_code: Optional[str] = None) -> schemas.CardPage:
        """Return one page of cards ordered by name, optionally for one set."""

        logger.debug("Fetching paginated cards (page=%s, set_code=%s)", page, set_code)
        filters = [models.Card.set_code == set_code] if set_code else []
        result = self._page(filters, page)
        logger.info(
            "Retrieved paginated cards: total_items=%s current_page=%s total_pages=%s items_returned=%s set_code=%s",
            result.total_items,
            result.current_page,
            result.total_pages,
            len(result.items),
            set_code,
        )
        return result

    def search_by_name(
        self, name: str, set_code: Optional[str] = None, page: int = 1
    ) -> schemas.CardPage:
        """Return one page of cards whose name contains ``name`` (any case).

        ``name`` must already be validated by the caller.
        """

        logger.debug("Searching cards by name %r (set_code=%s, page=%s)", name, set_code, page)
        filters = [name_contains(models.Card.name_normalized, name)]
        if set_code:
            filters.append(models.Card.set_code == set_code)
        result = self._page(filters, page)
        logger.info(
            "Card search %r: total_items=%s current_page=%s total_pages=%s items_returned=%s set_code=%s",
            name,
            result.total_items,
            result.current_page,
            result.total_pages,
            len(result.items),
            set_code,
        )
        return result

    def set_codes(self) -> list[schemas.SetCodeCount]:
        """Return every distinct set code with its card count, ordered by code."""

        logger.debug("Fetching all set codes")
        rows = self.session.exec(
            select(models.Card.set_code, func.count(models.Card.id))
            .group_by(models.Card.set_code)
            .order_by(col(models.Card.set_code))
        ).all()
        result = [
            schemas.SetCodeCount(set_code=set_code, card_count=count) for set_code, count in rows
        ]
        logger.info("Found %s unique set codes", len(result))
        return result

    def get_by_uuid(self, uuid: str) -> Optional[schemas.CardRead]:
        row = self.session.exec(
            self._with_artist().where(models.Card.uuid == uuid).limit(1)
        ).first()
        if row is None:
            return None
        card, artist = row
        return to_card_read(card, artist)

    def all_uuids(self) -> set[str]:
        logger.debug("Fetching all card UUIDs")
        uuids = set(self.session.exec(select(models.Card.uuid)).all())
        logger.info("Found %s card UUIDs", len(uuids))
        return uuids

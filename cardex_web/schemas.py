"""Pydantic schemas for the web API.

Entity payloads use camelCase keys (``setCode``, ``manaValue``); pagination
envelopes keep their snake_case keys.
"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from cardex.csv_utils import unescape_text

ItemT = TypeVar("ItemT")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ArtistRead(CamelModel):
    id: int
    name: str
    artist_external_id: str


class CardSummary(CamelModel):
    uuid: str
    name: str
    set_code: str
    rarity: Optional[str] = None


class ArtistDetail(ArtistRead):
    cards: List[CardSummary] = []


class CardRead(CamelModel):
    uuid: str
    name: str
    mana_value: Optional[float] = None
    mana_cost: Optional[str] = None
    rarity: Optional[str] = None
    set_code: str
    subtype: Optional[str] = None
    type: Optional[str] = None
    text: Optional[str] = None
    artist: Optional[ArtistRead] = None

    @field_validator("text")
    @classmethod
    def _unescape_newlines(cls, value: Optional[str]) -> Optional[str]:
        return unescape_text(value)


class SetCodeCount(CamelModel):
    set_code: str
    card_count: int


class Page(BaseModel, Generic[ItemT]):
    """Pagination envelope shared by every list and search endpoint."""

    items: List[ItemT]
    total_items: int
    items_per_page: int
    total_pages: int
    current_page: int


class ArtistPage(Page[ArtistRead]):
    pass


class CardPage(Page[CardRead]):
    @classmethod
    def empty(cls, items_per_page: int) -> "CardPage":
        return cls(
            items=[],
            total_items=0,
            items_per_page=items_per_page,
            total_pages=1,
            current_page=1,
        )

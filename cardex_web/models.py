"""Database models for the web API."""

from typing import Optional

from sqlmodel import Field, SQLModel


class Artist(SQLModel, table=True):
    """Illustrator credited on one or more cards."""

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    name_normalized: str = Field(index=True)
    artist_external_id: str = Field(index=True)


class Card(SQLModel, table=True):
    """Single printing of a card, identified by its external ``uuid``."""

    id: Optional[int] = Field(default=None, primary_key=True)
    uuid: str = Field(index=True, unique=True)
    name: str = Field(index=True)
    name_normalized: str = Field(index=True)
    mana_value: Optional[float] = Field(default=None)
    mana_cost: Optional[str] = Field(default=None)
    rarity: Optional[str] = Field(default=None)
    set_code: str = Field(index=True)
    subtype: Optional[str] = Field(default=None)
    type: Optional[str] = Field(default=None)
    # Newlines are kept escaped as the two characters ``\n``.
    text: Optional[str] = Field(default=None)
    artist_id: Optional[int] = Field(default=None, foreign_key="artist.id", index=True)

"""Shared request dependencies for the catalogue routes."""

from __future__ import annotations

from fastapi import Depends
from sqlmodel import Session

from ..database import get_session
from ..repositories import ArtistRepository, CardRepository


def parse_page(raw: str | None) -> int:
    """Return the requested page number, never below one.

    Missing or non-numeric values resolve to the first page instead of
    failing the request.
    """

    try:
        value = int((raw or "").strip())
    except ValueError:
        return 1
    return max(1, value)


def get_artist_repository(session: Session = Depends(get_session)) -> ArtistRepository:
    return ArtistRepository(session)


def get_card_repository(session: Session = Depends(get_session)) -> CardRepository:
    return CardRepository(session)

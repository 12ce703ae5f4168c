"""Query layer over the catalogue tables."""

from .artists import ArtistRepository
from .cards import CardRepository

__all__ = ["ArtistRepository", "CardRepository"]

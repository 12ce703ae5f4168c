"""Artist API routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request

from .. import schemas
from ..errors import NotFoundError, QueryTooShortError, client_ip, validate_search_query
from ..repositories import ArtistRepository
from .dependencies import get_artist_repository, parse_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/artist", tags=["artist"])


@router.get("/all", response_model=schemas.ArtistPage)
def list_artists(
    request: Request,
    page: str | None = Query(default=None, description="Page number (1-based)"),
    repository: ArtistRepository = Depends(get_artist_repository),
):
    page_number = parse_page(page)
    ip = client_ip(request)
    logger.debug("Fetching all artists (page=%s, ip=%s)", page_number, ip)
    try:
        result = repository.paginate(page_number)
    except Exception as exc:
        logger.error("Failed to retrieve artists (page=%s, ip=%s): %s", page_number, ip, exc)
        raise
    logger.info(
        "Retrieved artists (page=%s, total_results=%s, results_returned=%s, ip=%s)",
        page_number,
        result.total_items,
        len(result.items),
        ip,
    )
    return result


@router.get("/search", response_model=schemas.ArtistPage)
def search_artists(
    request: Request,
    query: str | None = Query(default=None, description="Search query (minimum 3 characters)"),
    page: str | None = Query(default=None, description="Page number (1-based)"),
    repository: ArtistRepository = Depends(get_artist_repository),
):
    page_number = parse_page(page)
    ip = client_ip(request)
    logger.debug("Searching artists (query=%r, page=%s, ip=%s)", query, page_number, ip)
    try:
        query = validate_search_query(query)
    except QueryTooShortError:
        logger.info("Invalid artist search query %r (length=%s, ip=%s)", query, len(query or ""), ip)
        raise

    try:
        result = repository.search_by_name(query, page_number)
    except Exception as exc:
        logger.error("Artist search failed (query=%r, page=%s, ip=%s): %s", query, page_number, ip, exc)
        raise
    logger.info(
        "Artist search completed (query=%r, page=%s, total_results=%s, results_returned=%s, ip=%s)",
        query,
        page_number,
        result.total_items,
        len(result.items),
        ip,
    )
    return result


@router.get("/{artist_id}", response_model=schemas.ArtistDetail)
def show_artist(
    artist_id: int,
    request: Request,
    repository: ArtistRepository = Depends(get_artist_repository),
):
    ip = client_ip(request)
    logger.debug("Fetching artist by ID %s (ip=%s)", artist_id, ip)
    artist = repository.detail(artist_id)
    if artist is None:
        logger.info("Artist %s not found (ip=%s)", artist_id, ip)
        raise NotFoundError("Artist not found")
    logger.info("Retrieved artist %s (%s, ip=%s)", artist_id, artist.name, ip)
    return artist

"""Card API routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from .. import schemas
from ..errors import NotFoundError, QueryTooShortError, client_ip, validate_search_query
from ..repositories import CardRepository
from .dependencies import get_card_repository, parse_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/card", tags=["card"])


def short_query_response(exc: QueryTooShortError) -> JSONResponse:
    """Empty card envelope with an ``error`` key, answered with 400.

    Card search keeps the envelope shape on invalid input so list views can
    render it directly; artist search answers with the bare error object.
    """

    body = schemas.CardPage.empty(CardRepository.CARDS_PER_PAGE).model_dump(by_alias=True)
    body["error"] = exc.message
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


@router.get("/search", response_model=schemas.CardPage)
def search_cards(
    request: Request,
    query: str | None = Query(default=None, description="Search query (minimum 3 characters)"),
    set_code: str | None = Query(default=None, alias="setCode", description="Filter by set code"),
    page: str | None = Query(default=None, description="Page number (1-based)"),
    repository: CardRepository = Depends(get_card_repository),
):
    page_number = parse_page(page)
    ip = client_ip(request)
    logger.debug(
        "Received card search (query=%r, set_code=%s, page=%s, ip=%s)",
        query,
        set_code,
        page_number,
        ip,
    )
    try:
        query = validate_search_query(query)
    except QueryTooShortError as exc:
        logger.info("Invalid card search query %r (length=%s, ip=%s)", query, len(query or ""), ip)
        return short_query_response(exc)

    try:
        result = repository.search_by_name(query, set_code or None, page_number)
    except Exception as exc:
        logger.error(
            "Card search failed (query=%r, set_code=%s, page=%s, ip=%s): %s",
            query,
            set_code,
            page_number,
            ip,
            exc,
        )
        raise
    logger.info(
        "Card search completed (query=%r, set_code=%s, page=%s, total_results=%s, results_returned=%s, ip=%s)",
        query,
        set_code,
        page_number,
        result.total_items,
        len(result.items),
        ip,
    )
    return result


@router.get("/set-codes", response_model=list[schemas.SetCodeCount])
def list_set_codes(
    request: Request,
    repository: CardRepository = Depends(get_card_repository),
):
    ip = client_ip(request)
    logger.debug("Fetching set codes (ip=%s)", ip)
    try:
        set_codes = repository.set_codes()
    except Exception as exc:
        logger.error("Failed to retrieve set codes (ip=%s): %s", ip, exc)
        raise
    logger.info("Retrieved %s set codes (ip=%s)", len(set_codes), ip)
    return set_codes


@router.get("/all", response_model=schemas.CardPage)
def list_cards(
    request: Request,
    page: str | None = Query(default=None, description="Page number (1-based)"),
    set_code: str | None = Query(default=None, alias="setCode", description="Filter by set code"),
    repository: CardRepository = Depends(get_card_repository),
):
    page_number = parse_page(page)
    ip = client_ip(request)
    logger.debug("Fetching all cards (page=%s, set_code=%s, ip=%s)", page_number, set_code, ip)
    try:
        result = repository.paginate(page_number, set_code or None)
    except Exception as exc:
        logger.error(
            "Failed to retrieve cards (page=%s, set_code=%s, ip=%s): %s",
            page_number,
            set_code,
            ip,
            exc,
        )
        raise
    logger.info(
        "Retrieved cards (page=%s, set_code=%s, total_results=%s, results_returned=%s, ip=%s)",
        page_number,
        set_code,
        result.total_items,
        len(result.items),
        ip,
    )
    return result


@router.get("/{uuid}", response_model=schemas.CardRead)
def show_card(
    uuid: str,
    request: Request,
    repository: CardRepository = Depends(get_card_repository),
):
    ip = client_ip(request)
    logger.debug("Fetching card by UUID %s (ip=%s)", uuid, ip)
    card = repository.get_by_uuid(uuid)
    if card is None:
        logger.info("Card %s not found (ip=%s)", uuid, ip)
        raise NotFoundError("Card not found")
    logger.info("Retrieved card %s (%s, set_code=%s, ip=%s)", uuid, card.name, card.set_code, ip)
    return card

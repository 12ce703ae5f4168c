"""HTTP client for the Cardex catalogue API."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional
from urllib.parse import quote

import requests

from .csv_utils import unescape_text

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
MIN_QUERY_LENGTH = 3
CARDS_PER_PAGE = 100


class CatalogClientError(Exception):
    """Raised when the catalogue API cannot satisfy a request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def empty_card_page() -> dict[str, Any]:
    return {
        "items": [],
        "total_items": 0,
        "items_per_page": CARDS_PER_PAGE,
        "total_pages": 1,
        "current_page": 1,
    }


class CatalogClient:
    """Thin wrapper over the ``/api/artist`` and ``/api/card`` endpoints.

    ``session`` may be a :class:`requests.Session`; the ``requests`` module is
    used directly when it is omitted.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.sessions.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        base = base_url or os.getenv("CARDEX_API_URL", "").strip() or DEFAULT_API_URL
        self.base_url = base.rstrip("/")
        self.http = session or requests
        self.timeout = timeout

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        query = {key: value for key, value in (params or {}).items() if value not in (None, "")}
        try:
            return self.http.get(url, params=query or None, timeout=self.timeout)
        except requests.Timeout as exc:
            logger.warning("Request to %s timed out", url)
            raise CatalogClientError(f"Request to {url} timed out") from exc
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise CatalogClientError(f"Request to {url} failed: {exc}") from exc

    def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        response = self._get(path, params)
        if not 200 <= response.status_code < 300:
            message = _error_message(response) or f"HTTP {response.status_code}"
            logger.warning("GET %s returned %s: %s", path, response.status_code, message)
            raise CatalogClientError(message, response.status_code)
        return response.json()

    def get_all_artists(self, page: int = 1) -> dict[str, Any]:
        return self._get_json("/api/artist/all", {"page": page})

    def search_artists(self, query: str, page: int = 1) -> dict[str, Any]:
        """Search artists by name.

        A query shorter than three characters raises
        :class:`CatalogClientError` without contacting the server.
        """

        if not query or len(query) < MIN_QUERY_LENGTH:
            raise CatalogClientError(
                f"Search query must be at least {MIN_QUERY_LENGTH} characters long"
            )
        return self._get_json("/api/artist/search", {"query": query, "page": page})

    def get_artist(self, artist_id: int) -> dict[str, Any]:
        return self._get_json(f"/api/artist/{artist_id}")

    def fetch_all_cards(self, page: int = 1, set_code: Optional[str] = None) -> dict[str, Any]:
        return self._get_json("/api/card/all", {"page": page, "setCode": set_code})

    def fetch_card(self, uuid: str) -> Optional[dict[str, Any]]:
        """Return the card for ``uuid`` or ``None`` when it does not exist."""

        response = self._get(f"/api/card/{quote(uuid, safe='')}")
        if response.status_code == 404:
            return None
        if not 200 <= response.status_code < 300:
            raise CatalogClientError("Failed to fetch card", response.status_code)
        card = response.json()
        card["text"] = unescape_text(card.get("text"))
        return card

    def search_cards(
        self, query: str, set_code: Optional[str] = None, page: int = 1
    ) -> dict[str, Any]:
        """Search cards by name.

        Short queries, locally or as judged by the server, give an empty page.
        """

        if not query or len(query) < MIN_QUERY_LENGTH:
            return empty_card_page()
        response = self._get(
            "/api/card/search", {"query": query, "setCode": set_code, "page": page}
        )
        if response.status_code == 400:
            logger.info("Server rejected card search %r: %s", query, _error_message(response))
            return empty_card_page()
        if not 200 <= response.status_code < 300:
            raise CatalogClientError(
                _error_message(response) or "Failed to search cards", response.status_code
            )
        return response.json()

    def fetch_set_codes(self) -> list[dict[str, Any]]:
        return self._get_json("/api/card/set-codes")


def _error_message(response: requests.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("error")
    return None

# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Runs free-text or ISBN searches against openlibrary.org and returns Books.

import logging

from bookprice.http import HttpClient
from bookprice.metadata.openlibrary_parser import parse_search_results
from bookprice.metadata.types import Book

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library search API.

    Uses dependency-injected HttpClient for testability. Upstream failures
    propagate as ``UpstreamError``: books are the backbone of every search
    result and there is nothing to substitute for them.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "openlibrary"

    def fetch_books(self, query: str, limit: int = 10) -> list[Book]:
        """Search Open Library and map each usable doc to a Book.

        Args:
            query: Free text, or "ISBN:<isbn>" for an ISBN lookup.
            limit: Maximum number of docs to request.

        Raises:
            UpstreamError: If the search request does not succeed.
        """
        params = {"q": query, "limit": str(limit)}
        data = self._http.get(f"{_OL_BASE}/search.json", params=params)
        books = parse_search_results(data)
        logger.debug("Open Library returned %d book(s) for %r", len(books), query)
        return books

# ABOUTME: Search orchestrator tying the metadata and pricing providers to the join engine.
# ABOUTME: Validates input, fetches both sources concurrently, and falls back to synthetic pricing.

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial

from bookprice.core.cache import ResultCache, cache_key
from bookprice.core.join import ItemResult, join_offers_to_books, rank_by_best_price
from bookprice.http import UpstreamError
from bookprice.isbn import is_searchable_isbn, normalize_isbn
from bookprice.metadata.provider import MetadataProvider
from bookprice.metadata.types import Book
from bookprice.pricing.fallback import FallbackOfferGenerator
from bookprice.pricing.provider import PricingProvider, PricingQuery
from bookprice.pricing.types import SETTLEMENT_CURRENCY, Offer

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 200


class ValidationError(ValueError):
    """Raised when search input is missing or malformed.

    ``details`` maps each offending parameter to a human-readable message.
    """

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


@dataclass(frozen=True)
class SearchRequest:
    """Validated search input. Exactly one of the fields drives the query."""

    query_text: str | None = None
    isbn: str | None = None

    @property
    def effective_query(self) -> str:
        """The query string sent upstream: "ISBN:<isbn>" or the raw text."""
        if self.isbn:
            return f"ISBN:{self.isbn}"
        return self.query_text or ""


@dataclass(frozen=True)
class SearchSources:
    """Which sources produced the metadata and the pricing of a result."""

    metadata: list[str] = field(default_factory=list)
    pricing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {"metadata": list(self.metadata), "pricing": list(self.pricing)}


@dataclass(frozen=True)
class SearchResult:
    """Ranked items for a query, plus provenance of their data."""

    query: str
    items: list[ItemResult]
    sources: SearchSources
    currency: str = SETTLEMENT_CURRENCY

    @property
    def is_synthetic(self) -> bool:
        """Whether pricing came from the fallback generator."""
        return any(source.endswith(":synthetic") for source in self.sources.pricing)

    def to_dict(self) -> dict[str, object]:
        """Serialize to the search response body."""
        return {
            "query": self.query,
            "currency": self.currency,
            "items": [item.to_dict() for item in self.items],
            "sources": self.sources.to_dict(),
        }


def validate_search(query_text: str | None = None, isbn: str | None = None) -> SearchRequest:
    """Check search parameters and build a SearchRequest.

    Each supplied parameter must be valid on its own. When both are valid
    the ISBN wins.

    Raises:
        ValidationError: If neither parameter is supplied or one is malformed.
    """
    details: dict[str, str] = {}

    text = query_text.strip() if query_text is not None else None
    if text is not None and not MIN_QUERY_LENGTH <= len(text) <= MAX_QUERY_LENGTH:
        details["q"] = (
            f"must be between {MIN_QUERY_LENGTH} and {MAX_QUERY_LENGTH} characters"
        )

    clean_isbn = None
    if isbn is not None:
        if is_searchable_isbn(isbn):
            clean_isbn = normalize_isbn(isbn)
        else:
            details["isbn"] = "must be a 10 or 13 digit ISBN"

    if details:
        raise ValidationError("Invalid query", details)
    if not text and not clean_isbn:
        raise ValidationError("Invalid query", {"q": "Provide q or isbn"})

    if clean_isbn:
        return SearchRequest(isbn=clean_isbn)
    return SearchRequest(query_text=text)


class SearchService:
    """Runs a book price search end to end.

    The metadata and pricing providers are called concurrently with the same
    effective query. Metadata failures propagate; pricing failures degrade to
    an empty offer list. When no live offers come back at all, the fallback
    generator prices every returned book instead.
    """

    def __init__(
        self,
        metadata_provider: MetadataProvider,
        pricing_provider: PricingProvider,
        *,
        fallback: FallbackOfferGenerator | None = None,
        cache: ResultCache | None = None,
        book_limit: int = 10,
        offer_limit: int = 10,
    ) -> None:
        self._metadata = metadata_provider
        self._pricing = pricing_provider
        self._fallback = fallback or FallbackOfferGenerator()
        self._cache = cache
        self._book_limit = book_limit
        self._offer_limit = offer_limit

    def search(self, query_text: str | None = None, isbn: str | None = None) -> SearchResult:
        """Validate input and return ranked results, cached when a cache is set.

        Raises:
            ValidationError: If the input is unusable. No provider is called.
            UpstreamError: If the metadata provider fails.
        """
        request = validate_search(query_text, isbn)
        if self._cache is None:
            return self._run(request)
        key = cache_key(request.query_text, request.isbn)
        return self._cache.get_or_compute(key, partial(self._run, request))

    def _run(self, request: SearchRequest) -> SearchResult:
        query = request.effective_query
        pricing_query = PricingQuery(query_text=request.query_text, isbn=request.isbn)

        pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="bookprice")
        try:
            books_future = pool.submit(self._metadata.fetch_books, query, self._book_limit)
            offers_future = pool.submit(self._fetch_live_offers, pricing_query)
            books = books_future.result()
            offers = offers_future.result()
        finally:
            # A failed metadata call abandons the pricing call instead of awaiting it.
            pool.shutdown(wait=False, cancel_futures=True)

        if offers:
            pricing_sources = [self._pricing.name]
        else:
            offers = self._fallback_offers(books)
            pricing_sources = [self._fallback.name]

        items = rank_by_best_price(join_offers_to_books(books, offers))
        return SearchResult(
            query=query,
            items=items,
            sources=SearchSources(metadata=[self._metadata.name], pricing=pricing_sources),
        )

    def _fetch_live_offers(self, query: PricingQuery) -> list[Offer]:
        try:
            return self._pricing.fetch_offers(query, self._offer_limit)
        except UpstreamError as exc:
            logger.warning("Pricing provider %s failed, using fallback: %s", self._pricing.name, exc)
            return []

    def _fallback_offers(self, books: list[Book]) -> list[Offer]:
        logger.info("No live offers; generating synthetic offers for %d book(s)", len(books))
        offers: list[Offer] = []
        for book in books:
            offers.extend(self._fallback.generate(book))
        return offers

# ABOUTME: Google Books pricing provider implementation.
# ABOUTME: Looks up volumes by text or ISBN and emits ebook offers settled in CAD.

import logging
from collections.abc import Callable

from bookprice.http import HttpClient
from bookprice.pricing.googlebooks_parser import parse_sale_records, record_to_offer
from bookprice.pricing.provider import PricingQuery
from bookprice.pricing.types import Offer, utc_now_iso

logger = logging.getLogger(__name__)

_GB_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"


class GoogleBooksPricingProvider:
    """Pricing provider backed by the Google Books volumes API.

    Only items with a buy link, a numeric price and a currency code become
    offers. Uses dependency-injected HttpClient and clock for testability.
    """

    def __init__(
        self,
        http_client: HttpClient,
        api_key: str | None = None,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._clock = clock

    @property
    def name(self) -> str:
        return "googlebooks"

    def fetch_offers(self, query: PricingQuery, max_items: int = 10) -> list[Offer]:
        """Look up sale records and map them to Offers.

        Returns an empty list when the query has neither text nor ISBN.

        Raises:
            UpstreamError: If the volumes request does not succeed.
        """
        if query.isbn:
            q = f"isbn:{query.isbn}"
        elif query.query_text:
            q = query.query_text
        else:
            return []

        params = {"q": q, "maxResults": str(max_items)}
        if self._api_key:
            params["key"] = self._api_key

        data = self._http.get(_GB_VOLUMES_URL, params=params)
        updated_at = self._clock()

        offers: list[Offer] = []
        for record in parse_sale_records(data):
            offer = record_to_offer(record, updated_at, requested_isbn=query.isbn)
            if offer is not None:
                offers.append(offer)
        logger.debug("Google Books returned %d offer(s) for %r", len(offers), q)
        return offers

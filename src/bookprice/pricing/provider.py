# ABOUTME: PricingProvider protocol defining the contract for commercial pricing sources.
# ABOUTME: PricingQuery carries either free text or an ISBN for the offer lookup.

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from bookprice.pricing.types import Offer


@dataclass(frozen=True)
class PricingQuery:
    """What to look up offers for. An ISBN takes precedence over text."""

    query_text: str | None = None
    isbn: str | None = None


@runtime_checkable
class PricingProvider(Protocol):
    """Protocol for commercial pricing services.

    ``fetch_offers`` raises ``bookprice.http.UpstreamError`` on remote
    failure. Callers treat that as an empty result, never as fatal.
    """

    @property
    def name(self) -> str: ...

    def fetch_offers(self, query: PricingQuery, max_items: int = 10) -> list[Offer]: ...

# ABOUTME: MetadataProvider protocol defining the contract for bibliographic sources.
# ABOUTME: Any catalog API (Open Library, etc.) implements this to feed the search pipeline.

from typing import Protocol, runtime_checkable

from bookprice.metadata.types import Book


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for bibliographic search services.

    ``fetch_books`` raises ``bookprice.http.UpstreamError`` when the remote
    call does not succeed; the caller decides whether that is fatal.
    """

    @property
    def name(self) -> str: ...

    def fetch_books(self, query: str, limit: int = 10) -> list[Book]: ...

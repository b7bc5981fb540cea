# ABOUTME: Join engine matching offers to books by normalized ISBN.
# ABOUTME: Deduplicates by (seller, url), ranks by price, and computes each book's best price.

from collections.abc import Sequence
from dataclasses import dataclass, field

from bookprice.isbn import normalize_isbn
from bookprice.metadata.types import Book
from bookprice.pricing.types import Offer


@dataclass(frozen=True)
class ItemResult:
    """One book with its matched offers, cheapest first."""

    book: Book
    offers: list[Offer] = field(default_factory=list)

    @property
    def best_price(self) -> float | None:
        """Price of the cheapest offer, or None when there are no offers."""
        return self.offers[0].price if self.offers else None

    def to_dict(self) -> dict[str, object]:
        """Serialize to the camelCase shape used in search responses."""
        return {
            "book": self.book.to_dict(),
            "offers": [offer.to_dict() for offer in self.offers],
            "bestPrice": self.best_price,
        }


def index_offers(offers: Sequence[Offer]) -> dict[str, list[Offer]]:
    """Group offers by normalized ISBN, preserving encounter order."""
    by_isbn: dict[str, list[Offer]] = {}
    for offer in offers:
        by_isbn.setdefault(normalize_isbn(offer.isbn), []).append(offer)
    return by_isbn


def _book_keys(book: Book) -> list[str]:
    """Distinct normalized ISBN keys for a book, ISBN-13 first."""
    keys: list[str] = []
    for raw in (book.isbn13, book.isbn10):
        if not raw:
            continue
        key = normalize_isbn(raw)
        if key and key not in keys:
            keys.append(key)
    return keys


def _dedupe(offers: list[Offer]) -> list[Offer]:
    """Collapse offers sharing (seller, url); the last one seen wins.

    The surviving offer keeps the position where its key first appeared,
    so ties in the later price sort still follow encounter order.
    """
    unique: dict[tuple[str, str], Offer] = {}
    for offer in offers:
        unique[(offer.seller, offer.url)] = offer
    return list(unique.values())


def join_offers_to_books(books: Sequence[Book], offers: Sequence[Offer]) -> list[ItemResult]:
    """Attach matching offers to each book, in the order books were given.

    A book matches offers keyed by its ISBN-13 or ISBN-10. Matched offers are
    deduplicated by (seller, url) and stably sorted by ascending price.
    Pure function: no I/O and no state between calls.
    """
    by_isbn = index_offers(offers)

    results: list[ItemResult] = []
    for book in books:
        matched: list[Offer] = []
        for key in _book_keys(book):
            matched.extend(by_isbn.get(key, []))
        ranked = sorted(_dedupe(matched), key=lambda o: o.price)
        results.append(ItemResult(book=book, offers=ranked))
    return results


def rank_by_best_price(items: Sequence[ItemResult]) -> list[ItemResult]:
    """Stable sort by best price, with priceless items after all priced ones."""
    return sorted(
        items,
        key=lambda item: (item.best_price is None, item.best_price or 0.0),
    )

# ABOUTME: Deterministic synthetic offers for books the live pricing source has no data for.
# ABOUTME: Prices derive from a 32-bit rolling hash of the ISBN, so they never drift between calls.

from collections.abc import Callable
from urllib.parse import quote

from bookprice.isbn import normalize_isbn
from bookprice.metadata.types import Book
from bookprice.pricing.types import Condition, Offer, round_price, utc_now_iso

_UINT32_MASK = 0xFFFFFFFF

# (seller, slug, condition, multiplier, floor)
_SYNTHETIC_SELLERS: tuple[tuple[str, str, Condition, float, float], ...] = (
    ("Fallback: Amazon (mock)", "amazon", Condition.USED, 1.0, 0.0),
    ("Fallback: eCampus (mock)", "ecampus", Condition.RENTAL, 0.72, 10.0),
    ("Fallback: Google Books (mock)", "googlebooks", Condition.EBOOK, 0.55, 5.0),
)


def seed_from_isbn(isbn: str) -> int:
    """Hash an ISBN string into an unsigned 32-bit seed.

    For each character: ``seed = (seed * 31 + ord(char)) mod 2**32``.
    Part of the public pricing contract: synthetic prices depend on the
    exact value.
    """
    seed = 0
    for char in isbn:
        seed = (seed * 31 + ord(char)) & _UINT32_MASK
    return seed


def base_price(seed: int) -> float:
    """Base synthetic price in [20, 80), stepped by cents."""
    return 20 + (seed % 6000) / 100


def is_synthetic(offer: Offer) -> bool:
    """Whether an offer was produced by the fallback generator."""
    return offer.seller.startswith("Fallback:")


class FallbackOfferGenerator:
    """Builds three synthetic offers (Used, Rental, Ebook) per book.

    The ISBN used is the book's ISBN-13, else its ISBN-10; books without
    either get no offers. The ISBN is normalized before hashing. Output is
    sorted by ascending price. With a fixed clock, repeated calls for the
    same book return identical offers.
    """

    def __init__(self, clock: Callable[[], str] = utc_now_iso) -> None:
        self._clock = clock

    @property
    def name(self) -> str:
        return "fallback:synthetic"

    def generate(self, book: Book) -> list[Offer]:
        isbn = normalize_isbn(book.isbn or "")
        if not isbn:
            return []

        updated_at = self._clock()
        base = base_price(seed_from_isbn(isbn))
        offers = [
            Offer(
                seller=seller,
                condition=condition,
                price=round_price(max(floor, base * multiplier)),
                url=f"https://example.com/{slug}?isbn={quote(isbn, safe='')}",
                updated_at=updated_at,
                isbn=isbn,
            )
            for seller, slug, condition, multiplier, floor in _SYNTHETIC_SELLERS
        ]
        offers.sort(key=lambda o: o.price)
        return offers

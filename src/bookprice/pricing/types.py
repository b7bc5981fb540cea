# ABOUTME: Canonical Offer entity and the closed set of offer conditions.
# ABOUTME: Every Offer carries a normalized ISBN and a price in the settlement currency.

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

SETTLEMENT_CURRENCY = "CAD"


class Condition(str, Enum):
    """Condition of the copy being offered."""

    NEW = "New"
    USED = "Used"
    RENTAL = "Rental"
    EBOOK = "Ebook"


def round_price(amount: float) -> float:
    """Round to 2 decimal places, half-up on the cent value."""
    return math.floor(amount * 100 + 0.5) / 100


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Offer:
    """A commercial offer for one book, priced in the settlement currency.

    ``isbn`` is mandatory: an offer that cannot be tied to an ISBN has no
    way to reach a book in the join.
    """

    seller: str
    condition: Condition
    price: float
    url: str
    updated_at: str
    isbn: str

    def __post_init__(self) -> None:
        if not self.seller:
            raise ValueError("offer seller must not be empty")
        if not self.isbn:
            raise ValueError("offer isbn must not be empty")
        if self.price < 0:
            msg = f"offer price must be non-negative, got {self.price}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, object]:
        """Serialize to the camelCase shape used in search responses."""
        return {
            "seller": self.seller,
            "condition": self.condition.value,
            "priceCad": self.price,
            "url": self.url,
            "updatedAt": self.updated_at,
            "isbn": self.isbn,
        }

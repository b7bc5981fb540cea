# ABOUTME: Parsing functions for Google Books volume responses carrying sale info.
# ABOUTME: Turns raw items into typed SaleRecords, then into Offers with a resolved ISBN.

import logging
from dataclasses import dataclass
from typing import Any

from bookprice.isbn import has_isbn_length, normalize_isbn
from bookprice.pricing.currency import to_settlement_currency
from bookprice.pricing.types import Condition, Offer

logger = logging.getLogger(__name__)

SELLER_NAME = "Google Books"


@dataclass(frozen=True)
class SaleRecord:
    """The sale-related fields of one Google Books item, all optional."""

    title: str | None = None
    isbn13: str | None = None
    isbn10: str | None = None
    buy_link: str | None = None
    amount: float | None = None
    currency: str | None = None


def _identifier(identifiers: Any, id_type: str) -> str | None:
    if not isinstance(identifiers, list):
        return None
    for entry in identifiers:
        if not isinstance(entry, dict) or entry.get("type") != id_type:
            continue
        value = entry.get("identifier")
        if isinstance(value, str):
            return value
    return None


def _price(sale: dict[str, Any]) -> tuple[float | None, str | None]:
    """Pick the retail price, else the list price, as (amount, currency)."""
    price = sale.get("retailPrice") or sale.get("listPrice")
    if not isinstance(price, dict):
        return None, None
    amount = price.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        amount = None
    currency = price.get("currencyCode")
    if not isinstance(currency, str) or not currency:
        currency = None
    return amount, currency


def parse_sale_record(item: dict[str, Any]) -> SaleRecord:
    """Read the fields this project uses from a single volume item."""
    volume = item.get("volumeInfo")
    volume = volume if isinstance(volume, dict) else {}
    sale = item.get("saleInfo")
    sale = sale if isinstance(sale, dict) else {}

    identifiers = volume.get("industryIdentifiers")
    buy_link = sale.get("buyLink")
    amount, currency = _price(sale)
    title = volume.get("title")

    return SaleRecord(
        title=title if isinstance(title, str) else None,
        isbn13=_identifier(identifiers, "ISBN_13"),
        isbn10=_identifier(identifiers, "ISBN_10"),
        buy_link=buy_link if isinstance(buy_link, str) and buy_link else None,
        amount=amount,
        currency=currency,
    )


def parse_sale_records(data: dict[str, Any]) -> list[SaleRecord]:
    """Parse the ``items`` array of a Google Books volumes response."""
    items = data.get("items") if isinstance(data, dict) else None
    if not isinstance(items, list):
        return []
    return [parse_sale_record(item) for item in items if isinstance(item, dict)]


def resolve_record_isbn(record: SaleRecord, requested_isbn: str | None = None) -> str | None:
    """Determine the ISBN an offer from this record belongs to.

    The record's own ISBN-13 is preferred over its ISBN-10, and only values
    with a normalized length of 10 or 13 count. Without one, the normalized
    ISBN of the original request is used.
    """
    raw = record.isbn13 or record.isbn10
    if raw:
        normalized = normalize_isbn(raw)
        if has_isbn_length(normalized):
            return normalized
    if requested_isbn:
        return normalize_isbn(requested_isbn) or None
    return None


def record_to_offer(
    record: SaleRecord, updated_at: str, requested_isbn: str | None = None
) -> Offer | None:
    """Map a sale record to an Offer, or None if it cannot be priced or joined."""
    if record.buy_link is None or record.amount is None or record.currency is None:
        logger.debug("Skipping %r: missing buy link, price or currency", record.title)
        return None
    if record.amount < 0:
        logger.debug("Skipping %r: negative price %s", record.title, record.amount)
        return None

    isbn = resolve_record_isbn(record, requested_isbn)
    if isbn is None:
        logger.debug("Skipping %r: no resolvable ISBN", record.title)
        return None

    return Offer(
        seller=SELLER_NAME,
        condition=Condition.EBOOK,
        price=to_settlement_currency(record.amount, record.currency),
        url=record.buy_link,
        updated_at=updated_at,
        isbn=isbn,
    )

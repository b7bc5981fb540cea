# ABOUTME: Conversion of provider prices into the settlement currency (CAD).
# ABOUTME: Uses a static rate table; unknown currencies pass through and are logged.

import logging

from bookprice.pricing.types import SETTLEMENT_CURRENCY, round_price

logger = logging.getLogger(__name__)

# Units of settlement currency per unit of foreign currency.
RATES_TO_SETTLEMENT: dict[str, float] = {
    "USD": 1.35,
    "EUR": 1.47,
    "GBP": 1.70,
}


class ConversionError(ValueError):
    """Raised when a currency code has no known rate."""

    def __init__(self, currency: str) -> None:
        super().__init__(f"No rate from {currency} to {SETTLEMENT_CURRENCY}")
        self.currency = currency


def convert(amount: float, currency: str) -> float:
    """Convert an amount into the settlement currency, unrounded.

    An empty code or the settlement currency itself passes through.

    Raises:
        ConversionError: If the currency is not in the rate table.
    """
    code = currency.strip().upper()
    if not code or code == SETTLEMENT_CURRENCY:
        return amount
    rate = RATES_TO_SETTLEMENT.get(code)
    if rate is None:
        raise ConversionError(code)
    return amount * rate


def to_settlement_currency(amount: float, currency: str) -> float:
    """Convert and round an amount for display in the settlement currency.

    Unknown currencies are passed through unconverted and a warning is
    logged, since the amount is then mislabeled as settlement currency.
    """
    try:
        settled = convert(amount, currency)
    except ConversionError as exc:
        logger.warning("%s; passing amount %.2f through unconverted", exc, amount)
        settled = amount
    return round_price(settled)

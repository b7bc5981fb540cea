# ABOUTME: Pricing package: offers, currency settlement, live and synthetic pricing sources.
# ABOUTME: Exports the Offer entity and the PricingProvider contract.

from bookprice.pricing.provider import PricingProvider, PricingQuery
from bookprice.pricing.types import Condition, Offer

__all__ = [
    "Condition",
    "Offer",
    "PricingProvider",
    "PricingQuery",
]

# ABOUTME: Metadata package for bibliographic catalog lookups.
# ABOUTME: Exports the Book entity and the MetadataProvider contract.

from bookprice.metadata.provider import MetadataProvider
from bookprice.metadata.types import Book

__all__ = [
    "Book",
    "MetadataProvider",
]

# ABOUTME: Shared pytest fixtures for Bookprice tests.
# ABOUTME: Provides sample books and a canned pricing-provider transport failure.

import pytest

from bookprice.http import UpstreamError
from bookprice.metadata.types import Book


@pytest.fixture
def clean_code() -> Book:
    """A book with both ISBN forms."""
    return Book(
        key="/works/OL3421964W",
        title="Clean Code",
        authors=["Robert C. Martin"],
        isbn10="0132350882",
        isbn13="9780132350884",
    )


@pytest.fixture
def no_isbn_book() -> Book:
    """A book the catalog knows no ISBN for."""
    return Book(key="/works/OL17930362W", title="Python Pocket Notes")


@pytest.fixture
def isbn10_book() -> Book:
    """A book with only an ISBN-10."""
    return Book(key="/works/OL1W", title="Ten Digit Book", isbn10="1234567890")


@pytest.fixture
def transport_error() -> UpstreamError:
    """The error a pricing client raises when the connection times out."""
    return UpstreamError("Request failed: https://www.googleapis.com/books/v1/volumes: timed out")

# ABOUTME: Parsing functions for Open Library search API JSON responses.
# ABOUTME: Converts raw search docs into typed records, then into Book instances.

from dataclasses import dataclass, field
from typing import Any

from bookprice.isbn import pick_isbn
from bookprice.metadata.types import Book

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/id"
_UNTITLED = "Untitled"


@dataclass(frozen=True)
class SearchDoc:
    """One doc from an Open Library search response, with every field optional."""

    key: str | None = None
    title: str | None = None
    author_names: list[str] = field(default_factory=list)
    cover_id: int | None = None
    isbns: list[str] = field(default_factory=list)
    first_publish_year: int | None = None
    edition_count: int | None = None


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _opt_int(value: Any) -> int | None:
    # bool is an int subclass; OL never sends booleans for these fields
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def parse_search_doc(doc: dict[str, Any]) -> SearchDoc:
    """Read the fields this project uses from a single search doc."""
    return SearchDoc(
        key=_opt_str(doc.get("key")),
        title=_opt_str(doc.get("title")),
        author_names=_str_list(doc.get("author_name")),
        cover_id=_opt_int(doc.get("cover_i")),
        isbns=_str_list(doc.get("isbn")),
        first_publish_year=_opt_int(doc.get("first_publish_year")),
        edition_count=_opt_int(doc.get("edition_count")),
    )


def parse_search_docs(data: dict[str, Any]) -> list[SearchDoc]:
    """Parse the ``docs`` array of an Open Library search response."""
    docs = data.get("docs") if isinstance(data, dict) else None
    if not isinstance(docs, list):
        return []
    return [parse_search_doc(doc) for doc in docs if isinstance(doc, dict)]


def build_cover_url(cover_id: int, size: str = "M") -> str:
    """Build an Open Library cover image URL from a numeric cover id.

    Args:
        cover_id: The ``cover_i`` value from a search doc.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/{cover_id}-{size}.jpg"


def doc_to_book(doc: SearchDoc) -> Book | None:
    """Map a search doc to a Book, or None if it has no catalog key.

    A missing title becomes "Untitled". The cover URL is only set when a
    numeric cover id is present. ISBN-10 and ISBN-13 are the first entries
    whose normalized length is 10 or 13 respectively.
    """
    key = (doc.key or "").strip()
    title = (doc.title or "").strip() or _UNTITLED
    if not key:
        return None

    return Book(
        key=key,
        title=title,
        authors=list(doc.author_names),
        cover_url=build_cover_url(doc.cover_id) if doc.cover_id is not None else None,
        isbn10=pick_isbn(doc.isbns, 10),
        isbn13=pick_isbn(doc.isbns, 13),
        first_publish_year=doc.first_publish_year,
        edition_count=doc.edition_count,
    )


def parse_search_results(data: dict[str, Any]) -> list[Book]:
    """Parse an Open Library search response into Books, dropping keyless docs."""
    books: list[Book] = []
    for doc in parse_search_docs(data):
        book = doc_to_book(doc)
        if book is not None:
            books.append(book)
    return books

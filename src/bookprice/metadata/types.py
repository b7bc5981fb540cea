# ABOUTME: Canonical Book entity produced by metadata providers.
# ABOUTME: Books are built fresh per search and never carry raw provider JSON.

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Book:
    """A book as described by the bibliographic catalog.

    ``key`` is the stable catalog identifier (e.g. "/works/OL123W"). ISBN
    fields hold normalized values or None. Construction fails for an empty
    key or title, so such records never travel past the adapter.
    """

    key: str
    title: str
    authors: list[str] = field(default_factory=list)
    cover_url: str | None = None
    isbn10: str | None = None
    isbn13: str | None = None
    first_publish_year: int | None = None
    edition_count: int | None = None
    source: str = "openlibrary"

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("book key must not be empty")
        if not self.title:
            raise ValueError("book title must not be empty")

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors) if self.authors else ""

    @property
    def isbn(self) -> str | None:
        """Preferred ISBN: the 13-digit form, else the 10-digit form."""
        return self.isbn13 or self.isbn10

    def to_dict(self) -> dict[str, object]:
        """Serialize to the camelCase shape used in search responses."""
        return {
            "source": self.source,
            "key": self.key,
            "title": self.title,
            "authors": list(self.authors),
            "coverUrl": self.cover_url,
            "isbn10": self.isbn10,
            "isbn13": self.isbn13,
            "firstPublishYear": self.first_publish_year,
            "editionCount": self.edition_count,
        }

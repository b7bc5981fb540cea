# ABOUTME: ISBN normalization shared by every adapter and the join engine.
# ABOUTME: Reduces ISBN-like strings to digits plus the X check character, upper-cased.

import re
from collections.abc import Iterable

_NON_ISBN_RE = re.compile(r"[^0-9X]", re.IGNORECASE)
_ISBN_INPUT_RE = re.compile(r"[\dX\- ]+", re.IGNORECASE)
_SEARCHABLE_ISBN_RE = re.compile(r"\d{9}[\dX]|\d{13}")

ISBN_LENGTHS = (10, 13)


def normalize_isbn(raw: str) -> str:
    """Canonicalize an ISBN-like string into a comparable key.

    Strips everything that is not a decimal digit or the letter X and
    upper-cases the result. No checksum or length validation happens here;
    callers decide whether a normalized value is usable as a join key.
    The function is idempotent.
    """
    return _NON_ISBN_RE.sub("", raw).upper()


def has_isbn_length(normalized: str) -> bool:
    """Whether a normalized ISBN has a usable length (10 or 13)."""
    return len(normalized) in ISBN_LENGTHS


def pick_isbn(values: Iterable[str] | None, length: int) -> str | None:
    """Return the first value whose normalized form has the given length.

    Args:
        values: ISBN-like strings as supplied by a source, in source order.
        length: Required normalized length (10 or 13).

    Returns:
        The normalized ISBN, or None if no value matches.
    """
    for value in values or ():
        if not isinstance(value, str):
            continue
        normalized = normalize_isbn(value)
        if len(normalized) == length:
            return normalized
    return None


def is_searchable_isbn(raw: str) -> bool:
    """Whether a user-supplied ISBN is syntactically valid for a search.

    Only digits, X, hyphens and spaces are accepted. After normalization it
    must be 13 digits, or 10 characters where only the last may be X.
    """
    if _ISBN_INPUT_RE.fullmatch(raw) is None:
        return False
    return _SEARCHABLE_ISBN_RE.fullmatch(normalize_isbn(raw)) is not None

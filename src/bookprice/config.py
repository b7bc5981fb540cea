# ABOUTME: Runtime settings for Bookprice, read from environment variables.
# ABOUTME: Provides defaults for provider limits, HTTP behavior, and the result cache.

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass

ENV_PREFIX = "BOOKPRICE_"


@dataclass(frozen=True)
class Settings:
    """Tunable knobs for a search session."""

    google_books_api_key: str | None = None
    book_limit: int = 10
    offer_limit: int = 10
    http_timeout: float = 15.0
    max_retries: int = 2
    cache_ttl: float = 600.0
    cache_max_entries: int = 500


def _read_number(
    environ: Mapping[str, str],
    name: str,
    default: float,
    cast: Callable[[str], float],
    allow_zero: bool = False,
) -> float:
    """Read a numeric variable, returning default when unset or blank."""
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0 or (value == 0 and not allow_zero):
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables, falling back to defaults.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Raises:
        ValueError: If a numeric variable is unparseable or out of range.
    """
    env = os.environ if environ is None else environ
    defaults = Settings()
    return Settings(
        google_books_api_key=env.get("GOOGLE_BOOKS_API_KEY") or None,
        book_limit=int(_read_number(env, f"{ENV_PREFIX}BOOK_LIMIT", defaults.book_limit, int)),
        offer_limit=int(
            _read_number(env, f"{ENV_PREFIX}OFFER_LIMIT", defaults.offer_limit, int)
        ),
        http_timeout=_read_number(
            env, f"{ENV_PREFIX}HTTP_TIMEOUT", defaults.http_timeout, float
        ),
        max_retries=int(
            _read_number(
                env, f"{ENV_PREFIX}MAX_RETRIES", defaults.max_retries, int, allow_zero=True
            )
        ),
        cache_ttl=_read_number(env, f"{ENV_PREFIX}CACHE_TTL", defaults.cache_ttl, float),
        cache_max_entries=int(
            _read_number(
                env, f"{ENV_PREFIX}CACHE_MAX_ENTRIES", defaults.cache_max_entries, int
            )
        ),
    )

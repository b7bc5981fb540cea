# ABOUTME: The `bookprice search` command for comparing prices of matching books.
# ABOUTME: Runs the full search pipeline and renders ranked results as a table or JSON.

import json
import logging
from dataclasses import replace

import click
from rich.console import Console
from rich.table import Table

from bookprice.cli.options import json_option
from bookprice.config import Settings, load_settings
from bookprice.core.cache import SearchCache
from bookprice.core.search import SearchResult, SearchService, ValidationError
from bookprice.http import BookpriceHttpClient, UpstreamError
from bookprice.metadata.openlibrary import OpenLibraryProvider
from bookprice.pricing.googlebooks import GoogleBooksPricingProvider

logger = logging.getLogger(__name__)

console = Console()


def _http_client(settings: Settings) -> BookpriceHttpClient:
    return BookpriceHttpClient(timeout=settings.http_timeout, max_retries=settings.max_retries)


def _create_service(
    settings: Settings,
    use_cache: bool,
    metadata_http: BookpriceHttpClient,
    pricing_http: BookpriceHttpClient,
) -> SearchService:
    """Create the default search service (Open Library + Google Books)."""
    cache = None
    if use_cache:
        cache = SearchCache(max_entries=settings.cache_max_entries, ttl=settings.cache_ttl)
    return SearchService(
        OpenLibraryProvider(http_client=metadata_http),
        GoogleBooksPricingProvider(
            http_client=pricing_http, api_key=settings.google_books_api_key
        ),
        cache=cache,
        book_limit=settings.book_limit,
        offer_limit=settings.offer_limit,
    )


def _format_price(price: float | None) -> str:
    return f"${price:.2f}" if price is not None else "[dim]n/a[/dim]"


def _render_table(result: SearchResult) -> None:
    table = Table(title=f"{result.query} ({result.currency})")
    table.add_column("#", style="dim", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("ISBN")
    table.add_column("Best", justify="right", no_wrap=True)
    table.add_column("Seller")
    table.add_column("Offers", justify="right")

    for index, item in enumerate(result.items, start=1):
        cheapest = item.offers[0] if item.offers else None
        table.add_row(
            str(index),
            item.book.title,
            item.book.author or "[dim]unknown[/dim]",
            item.book.isbn or "[dim]none[/dim]",
            _format_price(item.best_price),
            f"{cheapest.seller} ({cheapest.condition.value})" if cheapest else "",
            str(len(item.offers)),
        )

    console.print(table)
    console.print(
        f"\n[dim]{len(result.items)} result(s) - metadata: "
        f"{', '.join(result.sources.metadata)}; pricing: "
        f"{', '.join(result.sources.pricing)}[/dim]"
    )
    if result.is_synthetic:
        console.print("[yellow]No live prices found; showing synthetic estimates.[/yellow]")


@click.command("search")
@click.argument("query", required=False)
@click.option("--isbn", default=None, help="Search by a 10 or 13 digit ISBN.")
@click.option(
    "-n",
    "--limit",
    type=click.IntRange(1, 100),
    default=None,
    help="Maximum number of books to fetch (default from BOOKPRICE_BOOK_LIMIT).",
)
@click.option(
    "--cache/--no-cache",
    default=True,
    help="Reuse results for repeated queries within this run (default: --cache).",
)
@json_option
def search(
    query: str | None, isbn: str | None, limit: int | None, cache: bool, as_json: bool
) -> None:
    """Find books matching QUERY (or --isbn) and compare their prices."""
    try:
        settings = load_settings()
    except ValueError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise SystemExit(1) from exc
    if limit is not None:
        settings = replace(settings, book_limit=limit)

    try:
        with _http_client(settings) as metadata_http, _http_client(settings) as pricing_http:
            service = _create_service(settings, cache, metadata_http, pricing_http)
            result = service.search(query_text=query, isbn=isbn)
    except ValidationError as exc:
        console.print(f"[red]{exc}[/red]")
        for param, message in exc.details.items():
            console.print(f"  {param}: {message}")
        raise SystemExit(2) from exc
    except UpstreamError as exc:
        console.print(f"[red]Metadata lookup failed:[/red] {exc}")
        raise SystemExit(1) from exc

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.items:
        console.print("[yellow]No results found.[/yellow]")
        return
    _render_table(result)

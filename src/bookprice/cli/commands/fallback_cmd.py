# ABOUTME: The `bookprice fallback` command for previewing synthetic prices.
# ABOUTME: Shows the deterministic offers generated for an ISBN when no live prices exist.

import json

import click
from rich.console import Console
from rich.table import Table

from bookprice.cli.options import json_option
from bookprice.isbn import is_searchable_isbn, normalize_isbn
from bookprice.metadata.types import Book
from bookprice.pricing.fallback import FallbackOfferGenerator

console = Console()


@click.command()
@click.argument("isbn")
@json_option
def fallback(isbn: str, as_json: bool) -> None:
    """Show the synthetic offers generated for ISBN."""
    if not is_searchable_isbn(isbn):
        console.print(f"[red]Error:[/red] not a 10 or 13 digit ISBN: {isbn}")
        raise SystemExit(2)

    normalized = normalize_isbn(isbn)
    if len(normalized) == 13:
        book = Book(key=f"isbn:{normalized}", title=normalized, isbn13=normalized)
    else:
        book = Book(key=f"isbn:{normalized}", title=normalized, isbn10=normalized)
    offers = FallbackOfferGenerator().generate(book)

    if as_json:
        click.echo(json.dumps([offer.to_dict() for offer in offers], indent=2))
        return

    table = Table(title=f"Synthetic offers for {normalized}")
    table.add_column("Seller", style="bold")
    table.add_column("Condition")
    table.add_column("Price (CAD)", justify="right", no_wrap=True)
    table.add_column("URL", style="dim")
    for offer in offers:
        table.add_row(offer.seller, offer.condition.value, f"${offer.price:.2f}", offer.url)
    console.print(table)

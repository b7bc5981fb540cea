# ABOUTME: End-to-end tests for the bookprice search and fallback CLI commands.
# ABOUTME: Tests the commands via CliRunner with the search service backed by fake providers.

import json
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from bookprice.cli import cli
from bookprice.core.search import SearchService
from bookprice.http import UpstreamError
from bookprice.metadata.types import Book
from bookprice.pricing.fallback import FallbackOfferGenerator
from tests.fixtures.fakes import (
    FakeMetadataProvider,
    FakePricingProvider,
    fixed_clock,
    make_offer,
)

_CREATE_SERVICE = "bookprice.cli.commands.search_cmd._create_service"
_HTTP_CLIENT = "bookprice.cli.commands.search_cmd.BookpriceHttpClient"

CLEAN_CODE = Book(
    key="/works/OL3421964W",
    title="Clean Code",
    authors=["Robert C. Martin"],
    isbn13="9780132350884",
)


def _fake_service(
    books: list[Book] | None = None,
    offers: list | None = None,
    metadata_error: Exception | None = None,
    pricing_error: Exception | None = None,
) -> SearchService:
    return SearchService(
        FakeMetadataProvider(books=books, error=metadata_error),
        FakePricingProvider(offers=offers, error=pricing_error),
        fallback=FallbackOfferGenerator(clock=fixed_clock),
    )


class TestSearchCommand:
    """E2e tests for `bookprice search`."""

    def test_table_output(self) -> None:
        service = _fake_service([CLEAN_CODE], [make_offer("9780132350884", 42.99)])
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=service):
            result = runner.invoke(cli, ["search", "clean code"])
        assert result.exit_code == 0
        assert "Clean" in result.output
        assert "$42.99" in result.output
        assert "fake-pricing" in result.output

    def test_json_output_shape(self) -> None:
        service = _fake_service([CLEAN_CODE], [make_offer("9780132350884", 42.99)])
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=service):
            result = runner.invoke(cli, ["search", "clean code", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["currency"] == "CAD"
        assert data["query"] == "clean code"
        assert data["items"][0]["bestPrice"] == 42.99
        assert data["items"][0]["book"]["isbn13"] == "9780132350884"
        assert data["sources"]["pricing"] == ["fake-pricing"]

    def test_http_clients_closed_after_search(self) -> None:
        service = _fake_service([CLEAN_CODE], [make_offer("9780132350884", 42.99)])
        client_cls = MagicMock()
        runner = CliRunner()
        with patch(_HTTP_CLIENT, client_cls), patch(_CREATE_SERVICE, return_value=service):
            result = runner.invoke(cli, ["search", "clean code", "--json"])
        assert result.exit_code == 0
        assert client_cls.call_count == 2
        assert client_cls.return_value.__exit__.call_count == 2

    def test_isbn_option_with_synthetic_pricing(self) -> None:
        service = _fake_service(
            [CLEAN_CODE], pricing_error=UpstreamError("Request failed: timed out")
        )
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=service):
            result = runner.invoke(cli, ["search", "--isbn", "9780132350884", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["query"] == "ISBN:9780132350884"
        assert len(data["items"][0]["offers"]) == 3
        assert data["sources"]["pricing"] == ["fallback:synthetic"]

    def test_synthetic_notice_in_table(self) -> None:
        service = _fake_service([CLEAN_CODE])
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=service):
            result = runner.invoke(cli, ["search", "clean code"])
        assert result.exit_code == 0
        assert "synthetic" in result.output

    def test_short_query_is_usage_error(self) -> None:
        service = _fake_service([CLEAN_CODE])
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=service):
            result = runner.invoke(cli, ["search", "a"])
        assert result.exit_code == 2
        assert "Invalid query" in result.output

    def test_missing_query_is_usage_error(self) -> None:
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=_fake_service()):
            result = runner.invoke(cli, ["search"])
        assert result.exit_code == 2
        assert "Provide q or isbn" in result.output

    def test_metadata_failure_exits_nonzero(self) -> None:
        service = _fake_service(metadata_error=UpstreamError("HTTP 503", status_code=503))
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=service):
            result = runner.invoke(cli, ["search", "clean code"])
        assert result.exit_code == 1
        assert "Metadata lookup failed" in result.output

    def test_no_results(self) -> None:
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=_fake_service()):
            result = runner.invoke(cli, ["search", "nothing here"])
        assert result.exit_code == 0
        assert "No results found" in result.output

    def test_bad_configuration_exits_nonzero(self) -> None:
        runner = CliRunner(env={"BOOKPRICE_BOOK_LIMIT": "lots"})
        result = runner.invoke(cli, ["search", "clean code"])
        assert result.exit_code == 1
        assert "BOOKPRICE_BOOK_LIMIT" in result.output

    def test_limit_option_reaches_service_factory(self) -> None:
        runner = CliRunner()
        with patch(_CREATE_SERVICE, return_value=_fake_service()) as factory:
            runner.invoke(cli, ["search", "clean code", "--limit", "3", "--no-cache"])
        settings, = factory.call_args.args
        assert settings.book_limit == 3
        assert factory.call_args.kwargs == {"use_cache": False}


class TestFallbackCommand:
    """E2e tests for `bookprice fallback`."""

    def test_shows_three_offers(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["fallback", "1234567890"])
        assert result.exit_code == 0
        assert "$24.79" in result.output
        assert "$32.45" in result.output
        assert "$45.07" in result.output

    def test_json_output(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["fallback", "978-0-13-235088-4", "--json"])
        assert result.exit_code == 0
        offers = json.loads(result.output)
        assert [o["priceCad"] for o in offers] == [24.55, 32.14, 44.64]
        assert [o["condition"] for o in offers] == ["Ebook", "Rental", "Used"]

    def test_invalid_isbn(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["fallback", "12345"])
        assert result.exit_code == 2
        assert "not a 10 or 13 digit ISBN" in result.output


class TestCliGroup:
    """E2e tests for the root command group."""

    def test_help_lists_commands(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "search" in result.output
        assert "fallback" in result.output

    def test_verbose_flag_accepted(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["-vv", "fallback", "1234567890"])
        assert result.exit_code == 0

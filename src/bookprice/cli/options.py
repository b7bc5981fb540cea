# ABOUTME: Shared Click options for Bookprice CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --json.

import click

json_option = click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON instead of a table.",
)

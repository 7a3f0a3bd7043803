"""Oura CLI — entry point.

Fetch Oura Ring data, manage tags/sessions and webhook subscriptions
from the shell.
"""

from __future__ import annotations

import logging
import sys

import typer

from oura_cli.commands.help_cmd import print_usage
from oura_cli.parser import parse_args
from oura_cli.router import dispatch
from oura_cli.utils.errors import ParseError

app = typer.Typer(
    name="oura",
    help="Command-line client for the Oura Ring API.",
    add_completion=False,
)


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        # Only options before the command word belong to click; the rest,
        # including a bare `--`, reach parse_args untouched.
        "allow_interspersed_args": False,
        "help_option_names": [],
    },
)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Oura CLI — run `oura help` for the command list."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", stream=sys.stderr)

    try:
        invocation = parse_args(["oura", *ctx.args])
    except ParseError:
        print_usage()
        raise typer.Exit(1)

    code = dispatch(invocation)
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":
    app()

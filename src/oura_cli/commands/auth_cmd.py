"""`oura auth`: browser login, and `oura auth status`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from oura_cli.commands.help_cmd import AUTH_USAGE
from oura_cli.login import AuthorizationFlow
from oura_cli.parser import ParsedInvocation
from oura_cli.utils.errors import UsageError
from oura_cli.utils.output import print_fields, print_json, print_line

if TYPE_CHECKING:
    from oura_cli.router import AppContext

console = Console(stderr=True)


def run_auth(invocation: ParsedInvocation, ctx: AppContext) -> None:
    """Run the authorization flow, or report token status."""
    positional = invocation.positional
    if positional == ["status"]:
        _show_status(invocation, ctx)
        return
    if positional:
        raise UsageError(AUTH_USAGE)

    flow = AuthorizationFlow(ctx.credentials, ctx.tokens, echo=print_line)
    token = flow.run()
    print_line("✓ Authenticated successfully!")
    console.print(f"[dim]Token saved to {ctx.tokens.store.path} (expires {token.expires_at:%Y-%m-%d %H:%M})[/dim]")


def _show_status(invocation: ParsedInvocation, ctx: AppContext) -> None:
    status = ctx.tokens.status()
    result = {
        "has_token": status.has_token,
        "is_expired": status.is_expired,
        "expires_at": status.expires_at.isoformat() if status.expires_at else None,
        "seconds_remaining": status.seconds_remaining,
        "token_path": str(ctx.tokens.store.path),
    }
    if invocation.options.json_output:
        print_json(result)
        return

    if not status.has_token:
        print_fields([
            ("Authenticated", "no - run 'oura auth'"),
            ("Token file", result["token_path"]),
        ])
        return

    print_fields([
        ("Authenticated", "yes"),
        ("Expired", "yes" if status.is_expired else "no"),
        ("Expires at", result["expires_at"]),
        ("Seconds left", status.seconds_remaining),
        ("Token file", result["token_path"]),
    ])

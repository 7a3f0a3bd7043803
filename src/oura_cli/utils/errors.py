"""Error types and user-facing error reporting."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)


class ParseError(ValueError):
    """The command line could not be parsed."""


class UsageError(ParseError):
    """Wrong shape of invocation; the caller prints `usage` instead of a message."""

    def __init__(self, usage: str) -> None:
        self.usage = usage
        super().__init__(usage.strip().splitlines()[0] if usage.strip() else "usage error")


class InvalidChoiceError(ValueError):
    """A flag value is outside its allowed set."""


class ConfigError(RuntimeError):
    """App credentials are missing or unreadable."""


class AuthError(RuntimeError):
    """No usable token, or the authorization flow failed."""


class APIError(RuntimeError):
    """Non-2xx response from the Oura API."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error {status_code}: {body}")


# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("Auth timeout", "No browser callback within 2 minutes — run `oura auth` again"),
    ("API error 401", "Access token was rejected — run `oura auth` again"),
    ("invalid_grant", "Refresh token was revoked — run `oura auth` again"),
    ("API error 403", "Missing scope or app permission — re-run `oura auth` to grant it"),
    ("API error 429", "Rate limited — wait a moment and retry"),
    ("timed out", "Request timed out — try again or check network connectivity"),
    ("timeout", "Request timed out — try again or check network connectivity"),
    ("connection", "Connection error — check network connectivity"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern.lower() in lower:
            return hint
    return None


def handle_error(error: Exception) -> None:
    """Print a human-readable error (and a hint when one applies) to stderr.

    stdout is left untouched so that `--json` consumers only ever see data.
    """
    message = str(error)
    hint = _get_hint(message)

    console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    if hint:
        console.print(f"[dim]Hint: {escape(hint)}[/dim]", soft_wrap=True)

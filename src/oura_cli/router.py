"""Routes a parsed invocation to its command handler."""

from __future__ import annotations

import logging
import sys
from functools import cached_property
from pathlib import Path

from oura_cli.auth import TokenManager, TokenStore
from oura_cli.client import OuraClient
from oura_cli.commands.auth_cmd import run_auth
from oura_cli.commands.completion_cmd import run_completion
from oura_cli.commands.daily_cmd import run_date_command
from oura_cli.commands.documents_cmd import run_documents, run_personal_info
from oura_cli.commands.help_cmd import USAGE, show_help
from oura_cli.commands.webhook_cmd import run_webhook
from oura_cli.config import get_token_path, load_credentials
from oura_cli.models.auth import AppCredentials
from oura_cli.parser import ParsedInvocation
from oura_cli.services.daily import DATE_COMMANDS
from oura_cli.utils.errors import UsageError, handle_error

logger = logging.getLogger(__name__)

PERSONAL_INFO_COMMANDS = frozenset({"personal-info", "personal_info", "personal"})
DOCUMENT_COMMANDS = {
    "tag": "tag",
    "enhanced-tag": "enhanced_tag",
    "enhanced_tag": "enhanced_tag",
    "session": "session",
}


class AppContext:
    """Per-invocation state handed to command handlers.

    Credentials are read on first use, so `help` and `completion` work
    without a config file.
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        *,
        credentials: AppCredentials | None = None,
        tokens: TokenManager | None = None,
        client: OuraClient | None = None,
    ) -> None:
        self._config_dir = config_dir
        if credentials is not None:
            self.credentials = credentials
        if tokens is not None:
            self.tokens = tokens
        if client is not None:
            self.client = client

    @cached_property
    def credentials(self) -> AppCredentials:
        return load_credentials(self._config_dir)

    @cached_property
    def tokens(self) -> TokenManager:
        return TokenManager(self.credentials, TokenStore(get_token_path(self._config_dir)))

    @cached_property
    def client(self) -> OuraClient:
        return OuraClient(self.credentials, self.tokens)

    def close(self) -> None:
        if "client" in self.__dict__:
            self.client.close()
        elif "tokens" in self.__dict__:
            self.tokens.close()


def route(invocation: ParsedInvocation, ctx: AppContext) -> None:
    """Run the handler for an invocation; errors propagate to dispatch()."""
    command = invocation.command

    if invocation.options.help:
        show_help(command if command != "help" else _first(invocation.positional))
    elif command == "help":
        show_help(_first(invocation.positional))
    elif command == "auth":
        run_auth(invocation, ctx)
    elif command in ("completion", "completions"):
        run_completion(invocation.positional)
    elif command in PERSONAL_INFO_COMMANDS:
        run_personal_info(invocation, ctx)
    elif command in DOCUMENT_COMMANDS:
        run_documents(DOCUMENT_COMMANDS[command], invocation, ctx)
    elif command == "webhook":
        run_webhook(invocation, ctx)
    elif command in DATE_COMMANDS:
        run_date_command(command, invocation, ctx)
    else:
        raise UsageError(f"Unknown command: {command}\n\n{USAGE}")


def dispatch(invocation: ParsedInvocation, ctx: AppContext | None = None) -> int:
    """Route an invocation and turn any failure into exit code 1."""
    ctx = ctx or AppContext()
    logger.info(f"command={invocation.command} positional={invocation.positional}")
    try:
        route(invocation, ctx)
    except UsageError as e:
        sys.stderr.write(e.usage)
        return 1
    except (RuntimeError, ValueError, OSError) as e:
        handle_error(e)
        return 1
    finally:
        ctx.close()
    return 0


def _first(values: list[str]) -> str:
    return values[0] if values else ""

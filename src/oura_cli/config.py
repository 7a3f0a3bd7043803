"""Configuration management for the Oura CLI.

App credentials live in ~/.config/oura/config.json; nothing is read from
the environment.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from oura_cli.models.auth import AppCredentials
from oura_cli.utils.errors import ConfigError

CONFIG_FILENAME = "config.json"
TOKEN_FILENAME = "token.json"

CONFIG_TEMPLATE = """{
  "client_id": "your-id",
  "client_secret": "your-secret"
}"""


def get_config_dir() -> Path:
    """Return the per-user config directory, creating it owner-only if absent."""
    config_dir = Path.home() / ".config" / "oura"
    config_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    return config_dir


def get_config_path(config_dir: Path | None = None) -> Path:
    return (config_dir or get_config_dir()) / CONFIG_FILENAME


def get_token_path(config_dir: Path | None = None) -> Path:
    return (config_dir or get_config_dir()) / TOKEN_FILENAME


def load_credentials(config_dir: Path | None = None) -> AppCredentials:
    """Load the app credentials from config.json.

    Raises:
        ConfigError: The file is missing, unreadable, or not a valid
            {client_id, client_secret} object. The message names the
            expected path and includes a template.
    """
    config_path = get_config_path(config_dir)
    try:
        raw = config_path.read_text()
    except OSError:
        raise ConfigError(
            f"missing config: {config_path}\nCreate it with:\n{CONFIG_TEMPLATE}"
        ) from None

    try:
        credentials = AppCredentials.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        detail = str(e)
    except ValidationError as e:
        detail = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
    else:
        return credentials
    raise ConfigError(
        f"invalid config: {config_path}: {detail}\nExpected:\n{CONFIG_TEMPLATE}"
    )

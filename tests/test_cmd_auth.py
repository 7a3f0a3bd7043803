"""CLI tests for `oura auth` and `oura auth status`."""
import json
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from oura_cli.main import app
from oura_cli.models.auth import StoredToken, TokenStatus
from oura_cli.utils.errors import AuthError

runner = CliRunner()


def _invoke(app_context, args):
    with patch("oura_cli.router.AppContext", return_value=app_context):
        return runner.invoke(app, args)


# ── login ────────────────────────────────────────────────────────────

def test_auth_success(app_context):
    app_context.tokens.store.path = Path("/tmp/oura/token.json")
    flow = MagicMock()
    flow.run.return_value = StoredToken(
        access_token="a", refresh_token="r",
        expires_at=datetime.now().astimezone() + timedelta(hours=24),
    )

    with patch("oura_cli.commands.auth_cmd.AuthorizationFlow", return_value=flow) as flow_cls:
        result = _invoke(app_context, ["auth"])

    assert result.exit_code == 0
    assert "Authenticated successfully" in result.output
    assert "/tmp/oura/token.json" in result.output
    flow_cls.assert_called_once()
    assert flow_cls.call_args[0] == (app_context.credentials, app_context.tokens)


def test_auth_timeout(app_context):
    flow = MagicMock()
    flow.run.side_effect = AuthError("Auth timeout")

    with patch("oura_cli.commands.auth_cmd.AuthorizationFlow", return_value=flow):
        result = _invoke(app_context, ["auth"])

    assert result.exit_code == 1
    assert "Auth timeout" in result.output
    assert "2 minutes" in result.output


def test_auth_rejects_extra_args(app_context):
    with patch("oura_cli.commands.auth_cmd.AuthorizationFlow") as flow_cls:
        result = _invoke(app_context, ["auth", "login"])
    assert result.exit_code == 1
    assert "Usage: oura auth" in result.output
    flow_cls.assert_not_called()


# ── status ───────────────────────────────────────────────────────────

def test_status_json(app_context):
    expires = datetime.now().astimezone() + timedelta(hours=1)
    app_context.tokens.store.path = Path("/tmp/oura/token.json")
    app_context.tokens.status.return_value = TokenStatus(
        has_token=True, is_expired=False, expires_at=expires, seconds_remaining=3600,
    )
    result = _invoke(app_context, ["auth", "status", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["has_token"] is True
    assert data["seconds_remaining"] == 3600
    assert data["token_path"] == "/tmp/oura/token.json"


def test_status_not_authenticated(app_context):
    app_context.tokens.store.path = Path("/tmp/oura/token.json")
    app_context.tokens.status.return_value = TokenStatus(has_token=False, is_expired=True)
    result = _invoke(app_context, ["auth", "status"])
    assert result.exit_code == 0
    assert "no - run 'oura auth'" in result.output

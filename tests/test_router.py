"""Tests for router.py — lazy context, dispatch exit codes, cleanup."""
import json
from unittest.mock import MagicMock

from oura_cli.parser import parse_args
from oura_cli.router import AppContext, dispatch


def test_missing_config_is_reported(tmp_path, capsys):
    code = dispatch(parse_args(["oura", "sleep"]), AppContext(tmp_path))
    assert code == 1
    err = capsys.readouterr().err
    assert "missing config" in err
    assert str(tmp_path / "config.json") in err


def test_context_builds_client_from_config(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps({"client_id": "id", "client_secret": "s"}))
    ctx = AppContext(tmp_path)
    try:
        assert ctx.credentials.client_id == "id"
        assert ctx.tokens.store.path == tmp_path / "token.json"
        assert ctx.client is ctx.client
    finally:
        ctx.close()


def test_not_authenticated_message(tmp_path, capsys):
    (tmp_path / "config.json").write_text(json.dumps({"client_id": "id", "client_secret": "s"}))
    code = dispatch(parse_args(["oura", "tag"]), AppContext(tmp_path))
    assert code == 1
    assert "not authenticated - run 'oura auth' first" in capsys.readouterr().err


def test_help_does_not_touch_config(tmp_path, capsys):
    ctx = AppContext(tmp_path)
    assert dispatch(parse_args(["oura", "help"]), ctx) == 0
    assert "credentials" not in ctx.__dict__


def test_success_closes_context(app_context, mock_client):
    mock_client.api_get.return_value = b"{}"
    code = dispatch(parse_args(["oura", "personal-info", "-j"]), app_context)
    assert code == 0
    mock_client.close.assert_called_once()


def test_failure_closes_context(app_context, mock_client):
    mock_client.api_get.side_effect = RuntimeError("boom")
    assert dispatch(parse_args(["oura", "personal-info"]), app_context) == 1
    mock_client.close.assert_called_once()


def test_usage_error_goes_to_stderr(app_context, capsys):
    assert dispatch(parse_args(["oura", "webhook"]), app_context) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Webhook subscription management" in captured.err


def test_close_without_client_closes_tokens():
    tokens = MagicMock()
    ctx = AppContext(tokens=tokens)
    ctx.close()
    tokens.close.assert_called_once()

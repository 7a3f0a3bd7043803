"""CLI tests for the webhook command group."""
import json
from unittest.mock import patch

from typer.testing import CliRunner

from oura_cli.main import app
from oura_cli.models.webhooks import DATA_TYPES

runner = CliRunner()

SUBSCRIPTION = {
    "id": "w1",
    "callback_url": "https://example.com/hook",
    "event_type": "create",
    "data_type": "sleep",
    "expiration_time": "2024-06-01T00:00:00+00:00",
}

CREATE_ARGS = [
    "webhook", "create",
    "--callback-url", "https://example.com/hook",
    "--verification-token", "vt",
    "--event-type", "create",
    "--data-type", "sleep",
]


def _invoke(app_context, args):
    with patch("oura_cli.router.AppContext", return_value=app_context):
        return runner.invoke(app, args)


# ── types / usage ────────────────────────────────────────────────────

def test_types_lists_every_value(app_context, mock_client):
    result = _invoke(app_context, ["webhook", "types"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "event_type:" in lines
    assert "  delete" in lines
    for data_type in DATA_TYPES:
        assert f"  {data_type}" in lines
    mock_client.webhook_do.assert_not_called()


def test_no_subcommand_prints_usage(app_context):
    result = _invoke(app_context, ["webhook"])
    assert result.exit_code == 1
    assert "Webhook subscription management" in result.output


def test_unknown_subcommand(app_context):
    result = _invoke(app_context, ["webhook", "purge"])
    assert result.exit_code == 1
    assert "oura webhook list" in result.output


# ── create ───────────────────────────────────────────────────────────

def test_create_bad_event_type_makes_no_request(app_context, mock_client):
    args = CREATE_ARGS[:-3] + ["created", "--data-type", "sleep"]
    result = _invoke(app_context, args)
    assert result.exit_code == 1
    assert 'invalid event_type: "created" (try: oura webhook types)' in result.output
    mock_client.webhook_do.assert_not_called()


def test_create_missing_flags(app_context, mock_client):
    result = _invoke(app_context, ["webhook", "create", "--callback-url", "https://x"])
    assert result.exit_code == 1
    assert "missing required flags" in result.output
    mock_client.webhook_do.assert_not_called()


def test_create_json_is_verbatim(app_context, mock_client):
    mock_client.webhook_do.return_value = (json.dumps(SUBSCRIPTION).encode(), 201)
    result = _invoke(app_context, CREATE_ARGS + ["--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == SUBSCRIPTION
    method, path, payload = mock_client.webhook_do.call_args[0]
    assert (method, path) == ("POST", "/subscription")
    assert payload["verification_token"] == "vt"


def test_create_human_output(app_context, mock_client):
    mock_client.webhook_do.return_value = (json.dumps(SUBSCRIPTION).encode(), 201)
    result = _invoke(app_context, CREATE_ARGS)
    assert result.exit_code == 0
    assert "Created webhook subscription" in result.output
    assert "sleep/create" in result.output


# ── update ───────────────────────────────────────────────────────────

def test_update_requires_token(app_context, mock_client):
    result = _invoke(app_context, ["webhook", "update", "w1", "--data-type", "tag"])
    assert result.exit_code == 1
    assert "missing required flag: --verification-token" in result.output
    mock_client.webhook_do.assert_not_called()


def test_update_sends_partial_body(app_context, mock_client):
    mock_client.webhook_do.return_value = (json.dumps(SUBSCRIPTION).encode(), 200)
    result = _invoke(app_context, ["webhook", "update", "w1", "--verification-token=vt", "--event-type", "update"])
    assert result.exit_code == 0
    mock_client.webhook_do.assert_called_once_with(
        "PUT", "/subscription/w1", {"verification_token": "vt", "event_type": "update"}
    )


# ── list / get / delete / renew ──────────────────────────────────────

def test_list_table(app_context, mock_client):
    mock_client.webhook_do.return_value = (json.dumps([SUBSCRIPTION]).encode(), 200)
    result = _invoke(app_context, ["webhook", "list"])
    assert result.exit_code == 0
    assert "Webhook subscriptions (1)" in result.output
    assert "w1" in result.output


def test_list_empty(app_context, mock_client):
    mock_client.webhook_do.return_value = (b"[]", 200)
    result = _invoke(app_context, ["webhook", "list"])
    assert "No webhook subscriptions" in result.output


def test_get_requires_one_id(app_context, mock_client):
    result = _invoke(app_context, ["webhook", "get"])
    assert result.exit_code == 1
    mock_client.webhook_do.assert_not_called()


def test_delete_success(app_context, mock_client):
    mock_client.webhook_do.return_value = (b"", 204)
    result = _invoke(app_context, ["webhook", "delete", "w1"])
    assert result.exit_code == 0
    assert "Deleted webhook subscription w1" in result.output


def test_delete_unexpected_status(app_context, mock_client):
    mock_client.webhook_do.return_value = (b"{}", 200)
    result = _invoke(app_context, ["webhook", "delete", "w1"])
    assert result.exit_code == 1
    assert "unexpected status: 200" in result.output


def test_renew(app_context, mock_client):
    mock_client.webhook_do.return_value = (json.dumps(SUBSCRIPTION).encode(), 200)
    result = _invoke(app_context, ["webhook", "renew", "w1", "-j"])
    assert result.exit_code == 0
    mock_client.webhook_do.assert_called_once_with("PUT", "/subscription/renew/w1")
    assert json.loads(result.stdout)["id"] == "w1"


# ── unknown flags ────────────────────────────────────────────────────

def test_create_rejects_unknown_flag(app_context, mock_client):
    result = _invoke(app_context, CREATE_ARGS + ["--bogus", "1"])
    assert result.exit_code == 1
    assert "unexpected args: --bogus" in result.output
    mock_client.webhook_do.assert_not_called()


def test_update_rejects_unknown_flag(app_context, mock_client):
    result = _invoke(app_context, ["webhook", "update", "w1", "--verification-token", "vt", "--expires=soon"])
    assert result.exit_code == 1
    assert "unexpected args: --expires" in result.output
    mock_client.webhook_do.assert_not_called()


def test_create_accepts_underscore_spellings(app_context, mock_client):
    mock_client.webhook_do.return_value = (json.dumps(SUBSCRIPTION).encode(), 201)
    args = [
        "webhook", "create",
        "--callback_url", "https://example.com/hook",
        "--verification_token", "vt",
        "--event_type", "create",
        "--data_type", "sleep",
    ]
    result = _invoke(app_context, args)
    assert result.exit_code == 0
    mock_client.webhook_do.assert_called_once()

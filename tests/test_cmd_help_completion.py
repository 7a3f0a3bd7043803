"""CLI tests for help output and shell completion scripts."""
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from oura_cli.commands.help_cmd import USAGE, USAGES
from oura_cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_config(tmp_path):
    """Help and completion must work without a config file."""
    from oura_cli.router import AppContext

    with patch("oura_cli.router.AppContext", side_effect=lambda: AppContext(tmp_path)):
        yield


# ── help ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("args", [["help"], ["--help"], ["-h"]])
def test_top_level_help(args):
    result = runner.invoke(app, args)
    assert result.exit_code == 0
    assert result.stdout == USAGE


def test_help_topic():
    result = runner.invoke(app, ["help", "webhook"])
    assert result.exit_code == 0
    assert result.stdout == USAGES["webhook"]


def test_command_help_flag():
    result = runner.invoke(app, ["tag", "--help"])
    assert result.exit_code == 0
    assert "oura tag get <document_id>" in result.output


def test_help_word_after_command():
    result = runner.invoke(app, ["sleep", "help"])
    assert result.exit_code == 0
    assert "oura sleep [YYYY-MM-DD]" in result.output


def test_help_unknown_topic():
    result = runner.invoke(app, ["help", "bogus"])
    assert result.exit_code == 0
    assert "Unknown command for help: bogus" in result.output
    assert "oura - Oura Ring CLI" in result.output


def test_no_command_prints_usage():
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "oura - Oura Ring CLI" in result.output


def test_unknown_command():
    result = runner.invoke(app, ["frobnicate"])
    assert result.exit_code == 1
    assert "Unknown command: frobnicate" in result.output


# ── completion ───────────────────────────────────────────────────────

@pytest.mark.parametrize("shell,marker", [
    ("bash", "complete -F _oura_complete oura"),
    ("zsh", "#compdef oura"),
    ("fish", "complete -c oura"),
    ("BASH", "complete -F _oura_complete oura"),
])
def test_completion_scripts(shell, marker):
    result = runner.invoke(app, ["completion", shell])
    assert result.exit_code == 0
    assert marker in result.stdout


def test_completion_scripts_know_commands():
    for shell in ("bash", "zsh", "fish"):
        script = runner.invoke(app, ["completions", shell]).stdout
        for command in ("webhook", "enhanced-tag", "personal-info", "resilience"):
            assert command in script


@pytest.mark.parametrize("args", [["completion"], ["completion", "powershell"], ["completion", "bash", "zsh"]])
def test_completion_bad_shell(args):
    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert "oura completion <bash|zsh|fish>" in result.output

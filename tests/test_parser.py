"""Tests for parser.py — global options, aliases, long flags."""
import pytest

from oura_cli.parser import (
    first_flag,
    parse_args,
    parse_long_flags,
    reject_extra,
    reject_unknown_flags,
)
from oura_cli.utils.errors import ParseError


# ── parse_args ───────────────────────────────────────────────────────

def test_no_command_fails():
    with pytest.raises(ParseError):
        parse_args(["oura"])


def test_leading_help_flag():
    for flag in ("--help", "-h"):
        inv = parse_args(["oura", flag])
        assert inv.command == "help"
        assert inv.options.help is True
        assert inv.positional == []


def test_json_alias_rewrites_to_all():
    inv = parse_args(["oura", "json", "2024-05-01"])
    assert inv.command == "all"
    assert inv.positional == ["2024-05-01"]
    assert inv.options.json_output is True


def test_json_flag_anywhere():
    before = parse_args(["oura", "sleep", "--json", "2024-05-01"])
    after = parse_args(["oura", "sleep", "2024-05-01", "-j"])
    assert before == after
    assert before.options.json_output is True
    assert before.positional == ["2024-05-01"]


def test_help_word_sets_help():
    inv = parse_args(["oura", "tag", "help"])
    assert inv.command == "tag"
    assert inv.options.help is True
    assert inv.positional == []


def test_positional_order_preserved():
    argv = ["oura", "webhook", "-j", "update", "abc", "--help", "--event-type", "create", "--json"]
    inv = parse_args(argv)
    assert inv.positional == ["update", "abc", "--event-type", "create"]
    assert inv.options.json_output is True
    assert inv.options.help is True


def test_unknown_flags_are_positional():
    inv = parse_args(["oura", "tag", "--start-date=2024-01-01"])
    assert inv.positional == ["--start-date=2024-01-01"]
    assert inv.options.json_output is False


# ── parse_long_flags ─────────────────────────────────────────────────

def test_long_flag_with_separate_value():
    flags, pos = parse_long_flags(["--start-date", "2024-01-01", "extra"])
    assert flags == {"start-date": "2024-01-01"}
    assert pos == ["extra"]


def test_long_flag_with_equals():
    flags, pos = parse_long_flags(["--callback-url=https://x/y?a=b"])
    assert flags == {"callback-url": "https://x/y?a=b"}
    assert pos == []


def test_long_flag_empty_value_with_equals():
    flags, _ = parse_long_flags(["--next-token="])
    assert flags == {"next-token": ""}


def test_bare_double_dash_is_error():
    with pytest.raises(ParseError, match="invalid flag"):
        parse_long_flags(["--"])


def test_flag_missing_value_is_error():
    with pytest.raises(ParseError, match='flag "--end-date" requires a value'):
        parse_long_flags(["--end-date"])


def test_last_value_wins():
    flags, _ = parse_long_flags(["--a", "1", "--a", "2"])
    assert flags["a"] == "2"


# ── helpers ──────────────────────────────────────────────────────────

def test_first_flag_aliases():
    flags = {"start_date": "2024-01-01"}
    assert first_flag(flags, "start-date", "start_date") == "2024-01-01"
    assert first_flag(flags, "end-date", "end_date") == ""


def test_first_flag_prefers_first_name():
    flags = {"start-date": "a", "start_date": "b"}
    assert first_flag(flags, "start-date", "start_date") == "a"


def test_reject_extra():
    reject_extra([])
    with pytest.raises(ParseError, match="unexpected args: x y"):
        reject_extra(["x", "y"])


def test_reject_unknown_flags():
    reject_unknown_flags({"event-type": "create"}, "event-type", "event_type")
    with pytest.raises(ParseError, match="unexpected args: --a --z"):
        reject_unknown_flags({"z": "1", "event_type": "x", "a": "2"}, "event-type", "event_type")

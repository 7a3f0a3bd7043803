"""Usage text for every command, and the `help` command."""

from __future__ import annotations

import sys

USAGE = """oura - Oura Ring CLI

Usage:
  oura <command> [args] [--json|-j]
  oura help [command]
  oura completion <bash|zsh|fish>

Commands:
  auth              Authenticate with Oura (first time setup)
  auth status       Show the stored token's expiry
  personal-info     Fetch personal info
  today             Show today's summary
  all [date]        Show all metrics for date (default: today)
  sleep [date]      Show sleep data
  activity [date]   Show activity data
  readiness [date]  Show readiness data
  heartrate [date]  Show heart rate data
  hrv [date]        Show heart rate variability (from sleep)
  stress [date]     Show daytime stress data
  spo2 [date]       Show blood oxygen data
  resilience [date] Show resilience data
  vo2 [date]        Show VO2 max data
  workout [date]    Show workouts
  json [date]       Raw JSON dump of all data (alias for: all --json)

  tag               Manage tags
  enhanced-tag      Manage enhanced tags
  session           Manage sessions

  webhook           Manage webhook subscriptions

Webhook subcommands:
  webhook list
  webhook get <id>
  webhook create --callback-url <url> --verification-token <token> --event-type <create|update|delete> --data-type <type>
  webhook update <id> --verification-token <token> [--callback-url <url>] [--event-type <create|update|delete>] [--data-type <type>]
  webhook delete <id>
  webhook renew <id>
  webhook types

Options:
  --help, -h        Show help for a command
  --json, -j        Output JSON to stdout (machine readable)
  --verbose, -v     Log requests to stderr (before the command: oura -v sleep)

Date format: YYYY-MM-DD (defaults to today)
"""

AUTH_USAGE = """Usage: oura auth
       oura auth status
Authenticate with Oura (OAuth2), or show the stored token's expiry.
"""

COMPLETION_USAGE = """Shell completion

Usage:
  oura completion <bash|zsh|fish>

Examples:
  oura completion bash > /etc/bash_completion.d/oura
  oura completion zsh  > ~/.zsh/completions/_oura
  oura completion fish > ~/.config/fish/completions/oura.fish
"""

PERSONAL_INFO_USAGE = """Personal info

Usage:
  oura personal-info [--json|-j]
  oura personal-info get [--json|-j]
"""

_DOCUMENT_USAGE = """{title}

Usage:
  oura {command} [list] [--start-date <date>] [--end-date <date>] [--next-token <token>] [--json|-j]
  oura {command} get <document_id> [--json|-j]
"""

TAG_USAGE = _DOCUMENT_USAGE.format(title="Tags", command="tag")
ENHANCED_TAG_USAGE = _DOCUMENT_USAGE.format(title="Enhanced tags", command="enhanced-tag")
SESSION_USAGE = _DOCUMENT_USAGE.format(title="Sessions", command="session")

WEBHOOK_USAGE = """Webhook subscription management

Usage:
  oura webhook list [--json|-j]
  oura webhook get <id> [--json|-j]
  oura webhook create --callback-url <url> --verification-token <token> --event-type <create|update|delete> --data-type <type> [--json|-j]
  oura webhook update <id> --verification-token <token> [--callback-url <url>] [--event-type <create|update|delete>] [--data-type <type>] [--json|-j]
  oura webhook delete <id>
  oura webhook renew <id> [--json|-j]
  oura webhook types

Notes:
  - These endpoints use app credentials (x-client-id / x-client-secret), not the OAuth access token.
  - client_id/client_secret come from ~/.config/oura/config.json
"""

DATE_USAGE = """Usage:
  oura {command} [YYYY-MM-DD] [--json|-j]

Shows {what} for the given date (default: today).
With --json, prints {{command, date, start_date, end_date, endpoints}} with the raw API responses.
"""

_DATE_TOPICS = {
    "today": "all metrics for today",
    "all": "all metrics",
    "sleep": "sleep periods and the daily sleep score",
    "activity": "daily activity",
    "readiness": "daily readiness",
    "heartrate": "heart rate readings",
    "hrv": "heart rate variability per sleep period",
    "stress": "daytime stress",
    "spo2": "blood oxygen",
    "resilience": "resilience",
    "vo2": "VO2 max",
    "workout": "workouts",
}

USAGES: dict[str, str] = {
    "auth": AUTH_USAGE,
    "completion": COMPLETION_USAGE,
    "completions": COMPLETION_USAGE,
    "personal-info": PERSONAL_INFO_USAGE,
    "personal_info": PERSONAL_INFO_USAGE,
    "personal": PERSONAL_INFO_USAGE,
    "tag": TAG_USAGE,
    "enhanced-tag": ENHANCED_TAG_USAGE,
    "enhanced_tag": ENHANCED_TAG_USAGE,
    "session": SESSION_USAGE,
    "webhook": WEBHOOK_USAGE,
    **{name: DATE_USAGE.format(command=name, what=what) for name, what in _DATE_TOPICS.items()},
}


def print_usage(stream=None) -> None:
    (stream or sys.stdout).write(USAGE)


def show_help(topic: str = "") -> int:
    """Print usage for a topic; unknown topics fall back to the top-level usage.

    Always returns 0: asking for help is never an error.
    """
    if topic in ("", "help", "--help", "-h"):
        print_usage()
        return 0

    usage = USAGES.get(topic)
    if usage is None:
        sys.stderr.write(f"Unknown command for help: {topic}\n\n")
        print_usage()
        return 0

    sys.stdout.write(usage)
    return 0

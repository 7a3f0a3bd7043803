"""Date and duration helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from oura_cli.utils.errors import ParseError

DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ParseError(f'invalid date: "{value}" (expected YYYY-MM-DD)') from None


def date_arg(positional: list[str]) -> date:
    """The command's date argument, defaulting to today in local time."""
    if not positional:
        return date.today()
    if len(positional) > 1:
        raise ParseError(f"unexpected args: {' '.join(positional[1:])}")
    return parse_date(positional[0])


def padded_range(day: date, before: int, after: int) -> tuple[str, str]:
    start = day - timedelta(days=before)
    end = day + timedelta(days=after)
    return start.strftime(DATE_FORMAT), end.strftime(DATE_FORMAT)


def format_duration(seconds: int | float | None) -> str:
    """Format seconds as `7h 5m` or `42m`."""
    seconds = int(seconds or 0)
    hours, rem = divmod(seconds, 3600)
    minutes = rem // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_clock(timestamp: str | None) -> str:
    """Format an ISO-8601 timestamp as local wall-clock time, e.g. `11:42 PM`."""
    if not timestamp:
        return "?"
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return moment.astimezone().strftime("%I:%M %p").lstrip("0")


def seconds_between(start: str | None, end: str | None) -> int:
    if not start or not end:
        return 0
    try:
        begin = datetime.fromisoformat(start.replace("Z", "+00:00"))
        finish = datetime.fromisoformat(end.replace("Z", "+00:00"))
    except ValueError:
        return 0
    return int((finish - begin).total_seconds())

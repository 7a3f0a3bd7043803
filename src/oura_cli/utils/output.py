"""Output helpers.

Raw API bodies go straight to sys.stdout so JSON mode never re-encodes
them; human-readable views are rendered with Rich on stdout.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from oura_cli.models.reports import EndpointsReport

out = Console(highlight=False)

RULE_WIDTH = 40


def write_raw(body: bytes) -> None:
    """Write an API body to stdout unchanged, ending with a newline."""
    text = body.decode("utf-8", errors="replace")
    sys.stdout.write(text)
    if not text.endswith("\n"):
        sys.stdout.write("\n")
    sys.stdout.flush()


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    json.dump(data, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def render_endpoints_json(report: EndpointsReport) -> str:
    """Serialize a report with each endpoint body spliced in verbatim.

    The envelope uses two-space indentation; `data` values are the bytes
    the API returned (surrounding whitespace trimmed), never re-encoded.
    """
    lines = [
        "{",
        f'  "command": {json.dumps(report.command)},',
        f'  "date": {json.dumps(report.date)},',
        f'  "start_date": {json.dumps(report.start_date)},',
        f'  "end_date": {json.dumps(report.end_date)},',
    ]
    if not report.endpoints:
        lines.append('  "endpoints": {}')
    else:
        lines.append('  "endpoints": {')
        entries = []
        for name, result in report.endpoints.items():
            fields = []
            if result.data:
                raw = result.data.decode("utf-8").strip()
                fields.append(f'      "data": {raw}')
            if result.error is not None:
                fields.append(f'      "error": {json.dumps(result.error)}')
            if fields:
                body = "{\n" + ",\n".join(fields) + "\n    }"
            else:
                body = "{}"
            entries.append(f"    {json.dumps(name)}: {body}")
        lines.append(",\n".join(entries))
        lines.append("  }")
    lines.append("}")
    return "\n".join(lines) + "\n"


def print_endpoints_json(report: EndpointsReport) -> None:
    sys.stdout.write(render_endpoints_json(report))
    sys.stdout.flush()


def print_line(text: str = "") -> None:
    out.print(escape(text), soft_wrap=True)


def print_heading(title: str, width: int = RULE_WIDTH) -> None:
    print_line(title)
    print_line("─" * width)


def print_fields(rows: Iterable[tuple[str, Any]], indent: int = 0) -> None:
    """Print label/value pairs as aligned columns, skipping empty values."""
    grid = Table.grid(padding=(0, 2))
    grid.add_column(no_wrap=True)
    grid.add_column(overflow="fold")
    shown = 0
    for label, value in rows:
        if value is None or value == "":
            continue
        grid.add_row(" " * indent + escape(f"{label}:"), escape(str(value)))
        shown += 1
    if shown:
        out.print(grid)


def print_table(
    data: list[dict[str, Any]],
    columns: list[str],
    title: str | None = None,
) -> None:
    """Print rows as a Rich table."""
    if not data:
        out.print("[dim]No results.[/dim]")
        return

    table = Table(title=title, show_lines=False)
    for col in columns:
        table.add_column(col, overflow="fold")

    for row in data:
        table.add_row(*[escape(str(row.get(col, "") or "")) for col in columns])

    out.print(table)


def truncate(text: str, limit: int) -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    if limit <= 3:
        return text[:limit]
    return text[: limit - 3] + "..."

"""`oura personal-info`, `oura tag`, `oura enhanced-tag`, `oura session`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from oura_cli.commands.help_cmd import (
    ENHANCED_TAG_USAGE,
    PERSONAL_INFO_USAGE,
    SESSION_USAGE,
    TAG_USAGE,
)
from oura_cli.models.usercollection import PersonalInfo
from oura_cli.parser import (
    ParsedInvocation,
    first_flag,
    parse_long_flags,
    reject_extra,
    reject_unknown_flags,
)
from oura_cli.services.documents import DOCUMENT_KINDS, DocumentKind, DocumentService
from oura_cli.utils.errors import ParseError, UsageError
from oura_cli.utils.output import print_fields, print_heading, print_line, print_table, write_raw

if TYPE_CHECKING:
    from oura_cli.router import AppContext

KIND_USAGES = {
    "tag": TAG_USAGE,
    "enhanced_tag": ENHANCED_TAG_USAGE,
    "session": SESSION_USAGE,
}

RANGE_FLAGS = {
    "start_date": ("start-date", "start_date"),
    "end_date": ("end-date", "end_date"),
    "next_token": ("next-token", "next_token"),
}


def run_personal_info(invocation: ParsedInvocation, ctx: AppContext) -> None:
    """Show the user's personal info (`get` is accepted as a no-op subcommand)."""
    positional = invocation.positional
    if len(positional) > 1 or (positional and positional[0] != "get"):
        raise UsageError(PERSONAL_INFO_USAGE)

    body = ctx.client.api_get("/personal_info")
    if invocation.options.json_output:
        write_raw(body)
        return

    info = PersonalInfo.model_validate_json(body)
    print_heading("Personal info")
    print_fields([
        ("ID", info.id),
        ("Email", info.email),
        ("Sex", info.biological_sex),
        ("Age", info.age),
        ("Height", info.height),
        ("Weight", info.weight),
    ])


def range_query(args: list[str]) -> dict[str, str]:
    """Bind --start-date/--end-date/--next-token (underscore spellings too) to query params."""
    flags, extra = parse_long_flags(args)
    reject_extra(extra)
    reject_unknown_flags(flags, *(name for names in RANGE_FLAGS.values() for name in names))

    query = {}
    for param, names in RANGE_FLAGS.items():
        value = first_flag(flags, *names)
        if value:
            query[param] = value
    return query


def run_documents(kind_name: str, invocation: ParsedInvocation, ctx: AppContext) -> None:
    """List or get documents of one kind (tag, enhanced_tag, session)."""
    kind = DOCUMENT_KINDS[kind_name]
    usage = KIND_USAGES[kind_name]
    service = DocumentService(ctx.client, kind)
    json_output = invocation.options.json_output

    args = invocation.positional
    # `oura tag --start-date ...` is an implicit list
    sub = "list"
    if args and not args[0].startswith("--"):
        sub, args = args[0], args[1:]

    if sub == "list":
        body = service.list_raw(range_query(args))
        if json_output:
            write_raw(body)
            return
        _print_list(kind, service.parse_page(body))
    elif sub == "get":
        if len(args) != 1:
            raise ParseError("missing document_id")
        body = service.get_raw(args[0])
        if json_output:
            write_raw(body)
            return
        print_heading(kind.singular)
        print_fields(kind.fields(service.parse_document(body)))
    else:
        raise UsageError(usage)


def _print_list(kind: DocumentKind, page) -> None:
    if not page.data:
        print_line(f"No {kind.title.lower()}")
        return

    rows = [kind.row(doc) for doc in page.data]
    print_table(rows, kind.columns, title=f"{kind.title} ({len(rows)})")
    if page.next_token:
        print_line(f"next_token: {page.next_token}")

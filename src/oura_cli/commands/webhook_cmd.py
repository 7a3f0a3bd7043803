"""`oura webhook`: manage webhook subscriptions with the app credentials."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import TypeAdapter

from oura_cli.commands.help_cmd import WEBHOOK_USAGE
from oura_cli.models.webhooks import (
    DATA_TYPES,
    EVENT_TYPES,
    CreateWebhookSubscription,
    UpdateWebhookSubscription,
    WebhookSubscription,
)
from oura_cli.parser import (
    ParsedInvocation,
    first_flag,
    parse_long_flags,
    reject_extra,
    reject_unknown_flags,
)
from oura_cli.services.webhooks import WebhookService
from oura_cli.utils.errors import ParseError, UsageError
from oura_cli.utils.output import print_fields, print_heading, print_line, print_table, write_raw

if TYPE_CHECKING:
    from oura_cli.router import AppContext

_SUBSCRIPTION_LIST = TypeAdapter(list[WebhookSubscription])

SUBSCRIPTION_FLAGS = (
    "callback-url", "callback_url",
    "verification-token", "verification_token",
    "event-type", "event_type",
    "data-type", "data_type",
)


def run_webhook(invocation: ParsedInvocation, ctx: AppContext) -> None:
    """Dispatch on the webhook subcommand."""
    if not invocation.positional:
        raise UsageError(WEBHOOK_USAGE)

    sub, rest = invocation.positional[0], invocation.positional[1:]
    json_output = invocation.options.json_output

    if sub == "types":
        _print_types()
        return

    service = WebhookService(ctx.client)

    if sub == "list":
        reject_extra(rest)
        body = service.list()
        if json_output:
            write_raw(body)
            return
        _print_subscriptions(_SUBSCRIPTION_LIST.validate_json(body))
    elif sub == "get":
        subscription_id = _single_id(rest)
        _show(service.get(subscription_id), "Webhook subscription", json_output)
    elif sub == "create":
        body = service.create(_create_request(rest))
        _show(body, "Created webhook subscription", json_output)
    elif sub == "update":
        if not rest:
            raise UsageError(WEBHOOK_USAGE)
        body = service.update(rest[0], _update_request(rest[1:]))
        _show(body, "Updated webhook subscription", json_output)
    elif sub == "delete":
        subscription_id = _single_id(rest)
        service.delete(subscription_id)
        print_line(f"Deleted webhook subscription {subscription_id}")
    elif sub == "renew":
        subscription_id = _single_id(rest)
        _show(service.renew(subscription_id), "Renewed webhook subscription", json_output)
    else:
        raise UsageError(WEBHOOK_USAGE)


def _single_id(rest: list[str]) -> str:
    if len(rest) != 1:
        raise UsageError(WEBHOOK_USAGE)
    return rest[0]


def _create_request(args: list[str]) -> CreateWebhookSubscription:
    flags, extra = parse_long_flags(args)
    reject_extra(extra)
    reject_unknown_flags(flags, *SUBSCRIPTION_FLAGS)

    callback_url = first_flag(flags, "callback-url", "callback_url")
    verification_token = first_flag(flags, "verification-token", "verification_token")
    event_type = first_flag(flags, "event-type", "event_type")
    data_type = first_flag(flags, "data-type", "data_type")

    if not (callback_url and verification_token and event_type and data_type):
        raise ParseError(
            "missing required flags; see: oura webhook create --help (or: oura webhook types)"
        )

    return CreateWebhookSubscription(
        callback_url=callback_url,
        verification_token=verification_token,
        event_type=event_type,
        data_type=data_type,
    )


def _update_request(args: list[str]) -> UpdateWebhookSubscription:
    flags, extra = parse_long_flags(args)
    reject_extra(extra)
    reject_unknown_flags(flags, *SUBSCRIPTION_FLAGS)

    verification_token = first_flag(flags, "verification-token", "verification_token")
    if not verification_token:
        raise ParseError("missing required flag: --verification-token")

    return UpdateWebhookSubscription(
        verification_token=verification_token,
        callback_url=first_flag(flags, "callback-url", "callback_url") or None,
        event_type=first_flag(flags, "event-type", "event_type") or None,
        data_type=first_flag(flags, "data-type", "data_type") or None,
    )


def _show(body: bytes, heading: str, json_output: bool) -> None:
    if json_output:
        write_raw(body)
        return

    subscription = WebhookSubscription.model_validate_json(body)
    print_heading(heading)
    print_fields([
        ("ID", subscription.id),
        ("Type", f"{subscription.data_type}/{subscription.event_type}"),
        ("Expires", subscription.expiration_time),
        ("Callback", subscription.callback_url),
    ])


def _print_subscriptions(subscriptions: list[WebhookSubscription]) -> None:
    if not subscriptions:
        print_line("No webhook subscriptions")
        return

    rows = [
        {
            "id": s.id,
            "type": f"{s.data_type}/{s.event_type}",
            "expires": s.expiration_time,
            "callback_url": s.callback_url,
        }
        for s in subscriptions
    ]
    print_table(
        rows,
        ["id", "type", "expires", "callback_url"],
        title=f"Webhook subscriptions ({len(rows)})",
    )


def _print_types() -> None:
    print_line("event_type:")
    for value in EVENT_TYPES:
        print_line(f"  {value}")
    print_line()
    print_line("data_type:")
    for value in DATA_TYPES:
        print_line(f"  {value}")

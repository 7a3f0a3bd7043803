"""Webhook subscription management (app-credential endpoints)."""

from __future__ import annotations

from urllib.parse import quote

from oura_cli.client import OuraClient
from oura_cli.models.webhooks import (
    DATA_TYPES,
    EVENT_TYPES,
    CreateWebhookSubscription,
    UpdateWebhookSubscription,
)
from oura_cli.utils.errors import InvalidChoiceError


def validate_choice(name: str, value: str, allowed: list[str]) -> None:
    if value not in allowed:
        raise InvalidChoiceError(f'invalid {name}: "{value}" (try: oura webhook types)')


def _escape(subscription_id: str) -> str:
    return quote(subscription_id, safe="")


class WebhookService:
    """CRUD and renewal for webhook subscriptions.

    Every method returns the raw response body; callers decide whether to
    print it verbatim or parse it.
    """

    def __init__(self, client: OuraClient) -> None:
        self._client = client

    def list(self) -> bytes:
        body, _ = self._client.webhook_do("GET", "/subscription")
        return body

    def get(self, subscription_id: str) -> bytes:
        body, _ = self._client.webhook_do("GET", f"/subscription/{_escape(subscription_id)}")
        return body

    def create(self, request: CreateWebhookSubscription) -> bytes:
        validate_choice("event_type", request.event_type, EVENT_TYPES)
        validate_choice("data_type", request.data_type, DATA_TYPES)
        body, _ = self._client.webhook_do("POST", "/subscription", request.model_dump())
        return body

    def update(self, subscription_id: str, request: UpdateWebhookSubscription) -> bytes:
        if request.event_type is not None:
            validate_choice("event_type", request.event_type, EVENT_TYPES)
        if request.data_type is not None:
            validate_choice("data_type", request.data_type, DATA_TYPES)
        body, _ = self._client.webhook_do(
            "PUT",
            f"/subscription/{_escape(subscription_id)}",
            request.model_dump(exclude_none=True),
        )
        return body

    def delete(self, subscription_id: str) -> None:
        """Delete a subscription; anything but 204 is an error."""
        _, status = self._client.webhook_do("DELETE", f"/subscription/{_escape(subscription_id)}")
        if status != 204:
            raise RuntimeError(f"unexpected status: {status}")

    def renew(self, subscription_id: str) -> bytes:
        body, _ = self._client.webhook_do("PUT", f"/subscription/renew/{_escape(subscription_id)}")
        return body

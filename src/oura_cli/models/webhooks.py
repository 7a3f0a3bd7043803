"""Webhook subscription models."""

from __future__ import annotations

from pydantic import BaseModel

EVENT_TYPES: list[str] = ["create", "update", "delete"]

# ExtApiV2DataType values accepted by the subscription endpoints
DATA_TYPES: list[str] = [
    "tag",
    "enhanced_tag",
    "workout",
    "session",
    "sleep",
    "daily_sleep",
    "daily_readiness",
    "daily_activity",
    "daily_spo2",
    "sleep_time",
    "rest_mode_period",
    "ring_configuration",
    "daily_stress",
    "daily_cardiovascular_age",
    "daily_resilience",
    "vo2_max",
]


class WebhookSubscription(BaseModel):
    id: str = ""
    callback_url: str = ""
    event_type: str = ""
    data_type: str = ""
    expiration_time: str = ""


class CreateWebhookSubscription(BaseModel):
    callback_url: str
    verification_token: str
    event_type: str
    data_type: str


class UpdateWebhookSubscription(BaseModel):
    """Partial update; unset fields are left out of the request body."""
    verification_token: str
    callback_url: str | None = None
    event_type: str | None = None
    data_type: str | None = None

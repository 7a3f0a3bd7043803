"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field


class AppCredentials(BaseModel):
    """Client id/secret pair identifying this CLI to the Oura API."""
    client_id: str = Field(description="Oura OAuth client ID")
    client_secret: str = Field(description="Oura OAuth client secret")


class TokenResponse(BaseModel):
    """Response from the Oura OAuth2 token endpoint."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = 86400
    refresh_token: str | None = None


class StoredToken(BaseModel):
    """Token pair persisted in token.json."""
    access_token: str
    refresh_token: str
    expires_at: datetime


class TokenStatus(BaseModel):
    """Current state of the stored access token."""
    has_token: bool
    is_expired: bool
    expires_at: datetime | None = None
    seconds_remaining: int | None = None

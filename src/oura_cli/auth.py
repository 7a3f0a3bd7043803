"""OAuth2 token storage and refresh for the Oura API.

Handles the token file, expiry tracking, proactive refresh and the
authorization-code exchange.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import httpx
from pydantic import ValidationError

from oura_cli.config import get_token_path
from oura_cli.models.auth import AppCredentials, StoredToken, TokenResponse, TokenStatus
from oura_cli.utils.errors import AuthError

logger = logging.getLogger(__name__)

TOKEN_URL = "https://api.ouraring.com/oauth/token"
REDIRECT_URI = "http://localhost:8081/callback"

# Refresh this long before the stored expiry
EXPIRY_BUFFER = timedelta(minutes=5)


def _now() -> datetime:
    return datetime.now().astimezone()


class TokenStore:
    """Persists the current token pair in a single owner-only JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = get_token_path()
        return self._path

    def load(self) -> StoredToken | None:
        """Return the stored token, or None if there is no token file."""
        try:
            raw = self.path.read_text()
        except FileNotFoundError:
            return None
        try:
            return StoredToken.model_validate_json(raw)
        except ValidationError as e:
            raise AuthError(
                f"token file is corrupt ({self.path}) - run 'oura auth' again"
            ) from e

    def save(self, token: StoredToken) -> None:
        """Write the token with mode 0600, replacing the old file atomically."""
        target = self.path
        target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".token-", suffix=".json")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(token.model_dump_json(indent=2))
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info(f"Saved token to {target} (expires {token.expires_at.isoformat()})")


class TokenManager:
    """Hands out valid access tokens, refreshing them before they expire."""

    def __init__(self, credentials: AppCredentials, store: TokenStore | None = None) -> None:
        self._credentials = credentials
        self._store = store or TokenStore()
        self._http = httpx.Client(timeout=30.0)

    @property
    def store(self) -> TokenStore:
        return self._store

    def get_access_token(self) -> str:
        """Get a valid access token, refreshing it if it expires within EXPIRY_BUFFER.

        Raises:
            AuthError: No token is stored, or the refresh failed.
        """
        token = self._store.load()
        if token is None:
            raise AuthError("not authenticated - run 'oura auth' first")

        if _now() + EXPIRY_BUFFER > token.expires_at.astimezone():
            logger.info("Access token expires soon, refreshing...")
            try:
                token = self._refresh(token)
            except (RuntimeError, ValueError, httpx.HTTPError) as e:
                raise AuthError(f"token refresh failed - run 'oura auth' again: {e}") from e

        return token.access_token

    def exchange_code(self, code: str) -> StoredToken:
        """Trade an authorization code for a token pair and persist it."""
        response = self._post_token_form({
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": REDIRECT_URI,
            "client_id": self._credentials.client_id,
            "client_secret": self._credentials.client_secret,
        })
        if not 200 <= response.status_code < 300:
            raise AuthError(f"token exchange failed (HTTP {response.status_code}): {response.text}")

        return self._store_response(TokenResponse(**response.json()), previous_refresh=None)

    def status(self) -> TokenStatus:
        """Get the current token status without refreshing."""
        token = self._store.load()
        if token is None:
            return TokenStatus(has_token=False, is_expired=True)

        now = _now()
        expires_at = token.expires_at.astimezone()
        is_expired = now > expires_at
        seconds_remaining = None
        if not is_expired:
            seconds_remaining = int((expires_at - now).total_seconds())

        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            expires_at=expires_at,
            seconds_remaining=seconds_remaining,
        )

    def _refresh(self, token: StoredToken) -> StoredToken:
        response = self._post_token_form({
            "grant_type": "refresh_token",
            "refresh_token": token.refresh_token,
            "client_id": self._credentials.client_id,
            "client_secret": self._credentials.client_secret,
        })
        if not 200 <= response.status_code < 300:
            raise RuntimeError(f"HTTP {response.status_code}: {response.text.strip()}")

        return self._store_response(
            TokenResponse(**response.json()), previous_refresh=token.refresh_token
        )

    def _post_token_form(self, data: dict[str, str]) -> httpx.Response:
        logger.info(f"POST {TOKEN_URL} (grant_type={data['grant_type']})")
        response = self._http.post(TOKEN_URL, data=data)
        logger.info(f"Response: {response.status_code}")
        return response

    def _store_response(self, token_data: TokenResponse, previous_refresh: str | None) -> StoredToken:
        refresh_token = token_data.refresh_token or previous_refresh
        if not refresh_token:
            raise AuthError("token response did not include a refresh_token")

        token = StoredToken(
            access_token=token_data.access_token,
            refresh_token=refresh_token,
            expires_at=_now() + timedelta(seconds=token_data.expires_in),
        )
        self._store.save(token)
        return token

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

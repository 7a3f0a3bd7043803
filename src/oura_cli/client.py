"""HTTP client for the Oura API v2.

User-collection endpoints are called with the user's bearer token;
webhook-subscription endpoints are called with the app credentials.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from oura_cli.auth import TokenManager
from oura_cli.models.auth import AppCredentials
from oura_cli.utils.errors import APIError

logger = logging.getLogger(__name__)

API_BASE = "https://api.ouraring.com/v2/usercollection"
WEBHOOK_BASE = "https://api.ouraring.com/v2/webhook"


class OuraClient:
    """Issues authenticated requests and normalizes error responses.

    There is no retry: a 401 or 429 surfaces to the caller as an APIError.
    """

    def __init__(
        self,
        credentials: AppCredentials,
        tokens: TokenManager,
        timeout: float = 30.0,
    ) -> None:
        self._credentials = credentials
        self._tokens = tokens
        self._http = httpx.Client(timeout=timeout)

    def api_get(self, path: str, query: dict[str, str] | None = None) -> bytes:
        """GET a user-collection endpoint and return the raw body.

        Args:
            path: Endpoint path (e.g. "/daily_sleep"), appended to API_BASE.
            query: Query parameters; omitted from the URL when empty.

        Raises:
            AuthError: No token, or the refresh failed.
            APIError: The API answered with anything but 200.
        """
        token = self._tokens.get_access_token()
        url = API_BASE + path
        headers = {"Authorization": f"Bearer {token}"}

        response = self._send("GET", url, headers=headers, params=query or None)
        if response.status_code != 200:
            raise APIError(response.status_code, response.text)
        return response.content

    def webhook_do(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> tuple[bytes, int]:
        """Call a webhook-subscription endpoint with the app credentials.

        Returns:
            The raw body and the HTTP status code.

        Raises:
            APIError: The status is outside 200-299.
        """
        url = WEBHOOK_BASE + path
        headers = {
            "x-client-id": self._credentials.client_id,
            "x-client-secret": self._credentials.client_secret,
        }
        content = None
        if payload is not None:
            content = json.dumps(payload).encode()
            headers["Content-Type"] = "application/json"

        response = self._send(method, url, headers=headers, content=content)
        if not 200 <= response.status_code < 300:
            raise APIError(response.status_code, response.text.strip())
        return response.content, response.status_code

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.info(f"{method} {url}")
        try:
            response = self._http.request(method=method, url=url, **kwargs)
        except httpx.HTTPError as e:
            raise RuntimeError(f"request to {url} failed: {e}") from e
        logger.info(f"Response: {response.status_code}")
        return response

    def close(self) -> None:
        """Close the underlying HTTP clients."""
        self._http.close()
        self._tokens.close()

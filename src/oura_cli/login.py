"""Browser-based OAuth2 authorization-code flow.

A loopback HTTP server receives the redirect on /callback while the main
thread waits for the first outcome: a code, an error, or the deadline.
"""

from __future__ import annotations

import logging
import queue
import subprocess
import sys
import threading
import time
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Callable
from urllib.parse import parse_qs, urlencode, urlparse

from oura_cli.auth import REDIRECT_URI, TokenManager
from oura_cli.models.auth import AppCredentials, StoredToken
from oura_cli.utils.errors import AuthError

logger = logging.getLogger(__name__)

AUTH_URL = "https://cloud.ouraring.com/oauth/authorize"
SCOPES = "daily heartrate personal workout spo2 stress heart_health tag session"
CALLBACK_HOST = "127.0.0.1"
CALLBACK_PORT = 8081
CALLBACK_PATH = "/callback"
AUTH_TIMEOUT = 120.0

SUCCESS_PAGE = (
    b"<html><body><h1>&#10003; Authenticated!</h1>"
    b"<p>You can close this tab.</p></body></html>"
)


def build_authorize_url(client_id: str, state: str) -> str:
    params = {
        "client_id": client_id,
        "redirect_uri": REDIRECT_URI,
        "response_type": "code",
        "scope": SCOPES,
        "state": state,
    }
    return f"{AUTH_URL}?{urlencode(params)}"


def open_browser(url: str) -> None:
    """Open the system browser without waiting for it."""
    if sys.platform == "darwin":
        cmd = ["open", url]
    elif sys.platform.startswith("win"):
        cmd = ["rundll32", "url.dll,FileProtocolHandler", url]
    else:
        cmd = ["xdg-open", url]

    try:
        subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as e:
        logger.warning(f"Could not launch browser ({cmd[0]}): {e}")


class CallbackServer(HTTPServer):
    """Loopback server bound to one pending authorization."""

    def __init__(self, address: tuple[str, int], expected_state: str) -> None:
        super().__init__(address, CallbackHandler)
        self.expected_state = expected_state
        self.outcomes: queue.Queue[tuple[str, str]] = queue.Queue()


class CallbackHandler(BaseHTTPRequestHandler):
    server: CallbackServer

    def do_GET(self) -> None:
        parsed = urlparse(self.path)
        if parsed.path != CALLBACK_PATH:
            self.send_error(404)
            return

        params = parse_qs(parsed.query)
        state = params.get("state", [""])[0]
        code = params.get("code", [""])[0]
        provider_error = params.get("error", [""])[0]

        if state != self.server.expected_state:
            self._reply(400, b"State mismatch", "text/plain")
            self.server.outcomes.put(("error", "state mismatch"))
        elif provider_error:
            self._reply(400, f"Authorization denied: {provider_error}".encode(), "text/plain")
            self.server.outcomes.put(("error", f"authorization denied: {provider_error}"))
        elif not code:
            self._reply(400, b"No code", "text/plain")
            self.server.outcomes.put(("error", "no code in callback"))
        else:
            self._reply(200, SUCCESS_PAGE, "text/html; charset=utf-8")
            self.server.outcomes.put(("code", code))

    def _reply(self, status: int, body: bytes, content_type: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:
        logger.debug("callback: " + format, *args)


class AuthorizationFlow:
    """One-shot authorization-code grant ending in a persisted token."""

    def __init__(
        self,
        credentials: AppCredentials,
        tokens: TokenManager,
        *,
        host: str = CALLBACK_HOST,
        port: int = CALLBACK_PORT,
        timeout: float = AUTH_TIMEOUT,
        browser: Callable[[str], None] = open_browser,
        echo: Callable[[str], None] = print,
    ) -> None:
        self._credentials = credentials
        self._tokens = tokens
        self._address = (host, port)
        self._timeout = timeout
        self._browser = browser
        self._echo = echo
        self._server: CallbackServer | None = None

    @property
    def server_port(self) -> int | None:
        """Port the loopback server is bound to while the flow runs."""
        if self._server is None:
            return None
        return self._server.server_address[1]

    def run(self) -> StoredToken:
        """Run the browser round-trip and exchange the code for a token.

        Raises:
            AuthError: State mismatch, provider error, missing code,
                timeout, or a failed token exchange.
        """
        state = str(time.time_ns())
        url = build_authorize_url(self._credentials.client_id, state)

        try:
            self._server = CallbackServer(self._address, state)
        except OSError as e:
            raise AuthError(
                f"cannot listen on {self._address[0]}:{self._address[1]}: {e}"
            ) from e

        thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        thread.start()
        try:
            self._echo("Opening browser for authentication...")
            self._echo("If it doesn't open, visit:")
            self._echo(url)
            self._browser(url)

            code = self._wait_for_code(self._server)
        finally:
            self._server.shutdown()
            self._server.server_close()
            thread.join()
            self._server = None

        return self._tokens.exchange_code(code)

    def _wait_for_code(self, server: CallbackServer) -> str:
        try:
            kind, value = server.outcomes.get(timeout=self._timeout)
        except queue.Empty:
            raise AuthError("Auth timeout") from None
        if kind == "error":
            raise AuthError(f"Auth error: {value}")
        return value

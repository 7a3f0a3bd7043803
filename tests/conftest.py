"""Shared fixtures for the oura-cli test suite."""
from __future__ import annotations

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from oura_cli.auth import TokenStore
from oura_cli.models.auth import AppCredentials, StoredToken
from oura_cli.router import AppContext


@pytest.fixture
def fake_credentials() -> AppCredentials:
    return AppCredentials(client_id="test-client-id", client_secret="test-client-secret")


@pytest.fixture
def token_store(tmp_path) -> TokenStore:
    return TokenStore(tmp_path / "token.json")


@pytest.fixture
def store_token(token_store):
    """Write a token expiring `expires_in` from now into the temp store."""
    def _store(expires_in: timedelta = timedelta(hours=12), access="stored-access", refresh="stored-refresh"):
        token = StoredToken(
            access_token=access,
            refresh_token=refresh,
            expires_at=datetime.now().astimezone() + expires_in,
        )
        token_store.save(token)
        return token
    return _store


@pytest.fixture
def mock_client():
    """MagicMock standing in for OuraClient."""
    client = MagicMock()
    client.api_get = MagicMock()
    client.webhook_do = MagicMock()
    client.close = MagicMock()
    return client


@pytest.fixture
def app_context(fake_credentials, mock_client) -> AppContext:
    return AppContext(credentials=fake_credentials, tokens=MagicMock(), client=mock_client)


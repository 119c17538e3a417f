"""Shared fixtures for the SDK test suite."""

from unittest.mock import MagicMock

import pytest

from pydwolla_sdk.client import DwollaClient
from pydwolla_sdk.config import DwollaCredentials
from pydwolla_sdk.types import DwollaEnvironment


@pytest.fixture
def credentials() -> DwollaCredentials:
    return DwollaCredentials(
        key="app-key",
        secret="app-secret",
        environment=DwollaEnvironment.SANDBOX,
    )


@pytest.fixture
def client(credentials: DwollaCredentials) -> DwollaClient:
    c = DwollaClient(credentials, token_provider=lambda: "test-token-123")
    c._session = MagicMock()
    return c


@pytest.fixture
def dwolla_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Populate the environment variables the config layer reads."""
    monkeypatch.setenv("DWOLLA_ENV", "sandbox")
    monkeypatch.setenv("DWOLLA_KEY", "app-key")
    monkeypatch.setenv("DWOLLA_SECRET", "app-secret")
    monkeypatch.delenv("DWOLLA_TIMEOUT", raising=False)

"""Configuration from environment variables."""

import os
from dataclasses import dataclass

from pydwolla_sdk.exceptions import ConfigurationError
from pydwolla_sdk.types import DwollaEnvironment


API_URLS = {
    DwollaEnvironment.SANDBOX: "https://api-sandbox.dwolla.com",
    DwollaEnvironment.PRODUCTION: "https://api.dwolla.com",
}


@dataclass
class DwollaCredentials:
    key: str
    secret: str
    environment: DwollaEnvironment
    timeout: float = 30.0

    @property
    def api_url(self) -> str:
        return API_URLS[self.environment]


def get_environment() -> DwollaEnvironment:
    """Resolve the Dwolla environment from DWOLLA_ENV.

    Only ``sandbox`` and ``production`` are accepted; anything else is fatal.
    """

    value = os.environ.get("DWOLLA_ENV", "").strip().lower()

    try:
        return DwollaEnvironment(value)

    except ValueError:
        raise ConfigurationError(
            "Dwolla environment should either be set to `sandbox` or `production`"
        ) from None


def get_credentials() -> DwollaCredentials:
    """Get Dwolla API credentials from environment variables.

    Expected env vars: DWOLLA_ENV, DWOLLA_KEY, DWOLLA_SECRET,
    DWOLLA_TIMEOUT (optional)
    """

    return DwollaCredentials(
        key=os.environ["DWOLLA_KEY"],
        secret=os.environ["DWOLLA_SECRET"],
        environment=get_environment(),
        timeout=float(os.environ.get("DWOLLA_TIMEOUT", "30")),
    )

"""Application token management for the Dwolla API.

Dwolla authenticates server-side integrations with the OAuth client
credentials grant: the application key and secret are exchanged at
``{api_url}/token`` for a short-lived bearer token. Tokens are kept in
memory and replaced shortly before they expire.
"""

import logging
import time
from dataclasses import dataclass

from curl_cffi import CurlError
from curl_cffi.requests import Session
from pydwolla_sdk.config import DwollaCredentials
from pydwolla_sdk.exceptions import AuthenticationError


log = logging.getLogger(__name__)

# Seconds of remaining validity below which a cached token is replaced
_EXPIRY_BUFFER = 60


@dataclass
class AuthTokens:
    access_token: str
    expires_at: float


def fetch_app_token(credentials: DwollaCredentials, session: Session) -> AuthTokens:
    """Exchange the application key and secret for an access token."""

    log.info("Requesting application token from %s", credentials.environment)

    try:
        resp = session.post(
            f"{credentials.api_url}/token",
            auth=(credentials.key, credentials.secret),
            data={"grant_type": "client_credentials"},
        )

    except CurlError as exc:
        raise AuthenticationError(f"Token request failed: {exc}") from exc

    if resp.status_code >= 400:
        try:
            body = resp.json()
        except ValueError:
            body = {}

        detail = body.get("error_description") or body.get("error") or resp.text[:500]

        log.debug("Token request failed (HTTP %d): %s", resp.status_code, detail)

        raise AuthenticationError(
            f"Dwolla token request failed (HTTP {resp.status_code}): {detail}"
        )

    try:
        body = resp.json()
        tokens = AuthTokens(
            access_token=body["access_token"],
            expires_at=time.time() + body.get("expires_in", 3600),
        )

    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise AuthenticationError(
            f"Dwolla token response has no usable access_token: {resp.text[:500]}"
        ) from exc

    log.info("Application token obtained, expires at %s", time.ctime(tokens.expires_at))

    return tokens


class TokenProvider:
    """Callable returning a valid application token, fetching one when needed."""

    def __init__(self, credentials: DwollaCredentials, session: Session) -> None:
        self._credentials = credentials
        self._session = session
        self._tokens: AuthTokens | None = None

    def __call__(self) -> str:
        tokens = self._tokens

        if tokens is not None:
            remaining = tokens.expires_at - time.time()

            if remaining > _EXPIRY_BUFFER:
                log.debug("Using cached token (expires in %.0fs)", remaining)
                return tokens.access_token

        self._tokens = fetch_app_token(self._credentials, self._session)

        return self._tokens.access_token

    def invalidate(self) -> None:
        self._tokens = None

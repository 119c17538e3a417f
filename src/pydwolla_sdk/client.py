"""Dwolla REST API client.

Speaks Dwolla's HAL+JSON dialect over a curl_cffi session and hands back
the raw status, headers and body of each response.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from curl_cffi import CurlError
from curl_cffi.requests import Session
from pydwolla_sdk.auth import TokenProvider
from pydwolla_sdk.config import DwollaCredentials, get_credentials
from pydwolla_sdk.exceptions import ApiError, TransportError


log = logging.getLogger(__name__)

HAL_JSON = "application/vnd.dwolla.v1.hal+json"


@dataclass
class DwollaResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str | None:
        """The ``Location`` header of a resource-creating response."""

        for name, value in self.headers.items():
            if name.lower() == "location":
                return value

        return None


def _parse_body(resp: Any) -> dict[str, Any]:
    if not resp.content:
        return {}

    try:
        data = resp.json()
    except ValueError:
        return {}

    return data if isinstance(data, dict) else {}


class DwollaClient:
    """Dwolla API client bound to one environment and one application."""

    def __init__(
        self,
        credentials: DwollaCredentials,
        token_provider: Callable[[], str] | None = None,
    ) -> None:
        self._credentials = credentials
        self._session = Session(timeout=credentials.timeout)

        if token_provider is None:
            token_provider = TokenProvider(credentials, self._session)

        self._token_provider = token_provider

    @property
    def api_url(self) -> str:
        return self._credentials.api_url

    # -- low-level ---------------------------------------------------------

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path

        return f"{self.api_url}/{path.lstrip('/')}"

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {
            "accept": HAL_JSON,
            "authorization": f"Bearer {self._token_provider()}",
        }

        if has_body:
            headers["content-type"] = HAL_JSON

        return headers

    def request(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DwollaResponse:
        url = self._url(path)
        request_headers = self._headers(body is not None)

        if headers:
            request_headers.update(headers)

        log.debug("%s %s", method, url)

        try:
            resp = self._session.request(
                method,
                url,
                json=dict(body) if body is not None else None,
                params=dict(params) if params else None,
                headers=request_headers,
            )

        except CurlError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        data = _parse_body(resp)

        if resp.status_code == 401:
            # Expired or revoked token; the next request fetches a new one
            invalidate = getattr(self._token_provider, "invalidate", None)

            if invalidate is not None:
                invalidate()

        if resp.status_code >= 400:
            raise ApiError(
                resp.status_code,
                code=data.get("code", ""),
                message=data.get("message", resp.text[:500] if not data else ""),
                body=data,
            )

        return DwollaResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            body=data,
        )

    # -- verbs -------------------------------------------------------------

    def get(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> DwollaResponse:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DwollaResponse:
        return self.request("POST", path, body=body, headers=headers)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "DwollaClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def create_client() -> DwollaClient:
    """Build a client from DWOLLA_ENV, DWOLLA_KEY and DWOLLA_SECRET."""

    credentials = get_credentials()

    log.info("Creating Dwolla client for %s", credentials.environment)

    return DwollaClient(credentials)

"""Unit tests for pydwolla_sdk.client."""

import json
from typing import Any
from unittest.mock import MagicMock

import pytest
from curl_cffi import CurlError

from pydwolla_sdk.client import HAL_JSON, DwollaClient, DwollaResponse, create_client
from pydwolla_sdk.exceptions import ApiError, ConfigurationError, TransportError
from pydwolla_sdk.types import DwollaEnvironment

SANDBOX_URL = "https://api-sandbox.dwolla.com"


class FakeResponse:
    """Minimal stand-in for a curl_cffi Response."""

    def __init__(
        self,
        status_code: int,
        _json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        text: str = "",
    ) -> None:
        self.status_code = status_code
        self._json = _json
        self.headers = headers or {}
        self.content = json.dumps(_json).encode() if _json is not None else b""
        self.text = text or self.content.decode()

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class TestUrl:
    def test_relative_path_joined_to_base(self, client: DwollaClient) -> None:
        assert client._url("customers") == f"{SANDBOX_URL}/customers"

    def test_leading_slash_tolerated(self, client: DwollaClient) -> None:
        assert client._url("/exchange-partners") == f"{SANDBOX_URL}/exchange-partners"

    def test_absolute_href_used_as_is(self, client: DwollaClient) -> None:
        href = f"{SANDBOX_URL}/customers/abc/funding-sources"
        assert client._url(href) == href


class TestHeaders:
    def test_authorization_header(self, client: DwollaClient) -> None:
        headers = client._headers(has_body=False)
        assert headers["authorization"] == "Bearer test-token-123"

    def test_accept_is_hal_json(self, client: DwollaClient) -> None:
        assert client._headers(has_body=False)["accept"] == HAL_JSON

    def test_content_type_only_with_body(self, client: DwollaClient) -> None:
        assert "content-type" not in client._headers(has_body=False)
        assert client._headers(has_body=True)["content-type"] == HAL_JSON


class TestRequest:
    def test_post_sends_json_body(self, client: DwollaClient) -> None:
        client._session.request.return_value = FakeResponse(
            201, headers={"location": f"{SANDBOX_URL}/customers/c-1"}
        )

        resp = client.post("customers", {"firstName": "Jane"})

        call = client._session.request.call_args
        assert call.args == ("POST", f"{SANDBOX_URL}/customers")
        assert call.kwargs["json"] == {"firstName": "Jane"}
        assert resp.status_code == 201
        assert resp.location == f"{SANDBOX_URL}/customers/c-1"

    def test_post_without_body(self, client: DwollaClient) -> None:
        client._session.request.return_value = FakeResponse(
            200, {"_links": {"self": {"href": "x"}}}
        )

        resp = client.post("on-demand-authorizations")

        call = client._session.request.call_args
        assert call.kwargs["json"] is None
        assert "content-type" not in call.kwargs["headers"]
        assert resp.body == {"_links": {"self": {"href": "x"}}}

    def test_get_passes_params(self, client: DwollaClient) -> None:
        client._session.request.return_value = FakeResponse(200, {"total": 0})

        client.get("customers", params={"limit": 5})

        call = client._session.request.call_args
        assert call.args[0] == "GET"
        assert call.kwargs["params"] == {"limit": 5}

    def test_extra_headers_merged(self, client: DwollaClient) -> None:
        client._session.request.return_value = FakeResponse(201)

        client.post("transfers", {}, headers={"Idempotency-Key": "k-1"})

        headers = client._session.request.call_args.kwargs["headers"]
        assert headers["Idempotency-Key"] == "k-1"
        assert headers["authorization"] == "Bearer test-token-123"

    def test_raises_api_error_with_hal_detail(self, client: DwollaClient) -> None:
        client._session.request.return_value = FakeResponse(
            400,
            {
                "code": "ValidationError",
                "message": "Validation error(s) present.",
                "_embedded": {
                    "errors": [
                        {"code": "Duplicate", "message": "Email already exists."}
                    ]
                },
            },
        )

        with pytest.raises(ApiError) as excinfo:
            client.post("customers", {"email": "jane@example.com"})

        err = excinfo.value
        assert err.status_code == 400
        assert err.code == "ValidationError"
        assert err.errors[0]["code"] == "Duplicate"
        assert "HTTP 400 ValidationError" in str(err)

    def test_raises_api_error_on_plain_text(self, client: DwollaClient) -> None:
        client._session.request.return_value = FakeResponse(502, text="Bad Gateway")

        with pytest.raises(ApiError, match="Bad Gateway") as excinfo:
            client.get("customers")

        assert excinfo.value.code == ""

    def test_transport_failure(self, client: DwollaClient) -> None:
        client._session.request.side_effect = CurlError("timed out")

        with pytest.raises(TransportError, match="timed out"):
            client.get("customers")


class TestUnauthorized:
    def test_401_clears_cached_token(self, client: DwollaClient) -> None:
        provider = MagicMock(return_value="stale-token")
        client._token_provider = provider
        client._session.request.return_value = FakeResponse(
            401, {"code": "ExpiredAccessToken", "message": "Invalid access token."}
        )

        with pytest.raises(ApiError) as excinfo:
            client.get("customers")

        assert excinfo.value.code == "ExpiredAccessToken"
        provider.invalidate.assert_called_once_with()
        assert client._session.request.call_count == 1

    def test_other_errors_keep_token(self, client: DwollaClient) -> None:
        provider = MagicMock(return_value="token")
        client._token_provider = provider
        client._session.request.return_value = FakeResponse(
            403, {"code": "Forbidden", "message": "Not authorized."}
        )

        with pytest.raises(ApiError):
            client.get("customers")

        provider.invalidate.assert_not_called()

    def test_plain_callable_provider_tolerated(self, client: DwollaClient) -> None:
        client._session.request.return_value = FakeResponse(401)

        with pytest.raises(ApiError, match="HTTP 401"):
            client.get("customers")


class TestDwollaResponse:
    def test_location_case_insensitive(self) -> None:
        resp = DwollaResponse(201, headers={"Location": "https://x/1"})
        assert resp.location == "https://x/1"

    def test_location_missing(self) -> None:
        assert DwollaResponse(200).location is None


class TestLifecycle:
    def test_context_manager_closes_session(self, client: DwollaClient) -> None:
        session = client._session

        with client:
            pass

        session.close.assert_called_once()


class TestCreateClient:
    def test_builds_from_env(self, dwolla_env: None) -> None:
        c = create_client()

        try:
            assert c.api_url == SANDBOX_URL
            assert c._credentials.environment is DwollaEnvironment.SANDBOX
        finally:
            c.close()

    def test_unknown_environment_is_fatal(
        self, dwolla_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DWOLLA_ENV", "prod")

        with pytest.raises(ConfigurationError):
            create_client()

from typing import Any


class DwollaError(Exception):
    """Base exception for SDK errors."""


class ConfigurationError(DwollaError):
    """Environment configuration is missing or not recognized."""


class AuthenticationError(DwollaError):
    """Failed to obtain an application token from Dwolla."""


class TransportError(DwollaError):
    """The request never produced an HTTP response."""


class ApiError(DwollaError):
    """Dwolla answered with an HTTP error status."""

    def __init__(
        self,
        status_code: int,
        code: str = "",
        message: str = "",
        body: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.body = body or {}
        detail = ": ".join(part for part in (code, message) if part)
        super().__init__(f"HTTP {status_code} {detail}".rstrip())

    @property
    def errors(self) -> list[dict[str, Any]]:
        """Field-level errors from a ValidationError response."""

        return self.body.get("_embedded", {}).get("errors", [])

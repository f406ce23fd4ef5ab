"""SDK-specific exceptions.

Errors raised before a request is sent (validation, configuration,
transport) carry only a message and an optional cause. Errors raised
after a response arrived derive from :class:`CopyleaksResponseError` and
also expose the status code, body, headers and Copyleaks error code.
"""

from __future__ import annotations

from typing import Mapping


class CopyleaksError(Exception):
    """Base exception for all Copyleaks SDK failures."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    @property
    def message(self) -> str:
        return str(self.args[0])


class CopyleaksValidationError(CopyleaksError):
    """Raised when a callback, custom field set or argument is invalid.

    Always raised before any network I/O takes place.
    """


class CopyleaksConfigError(CopyleaksError):
    """Raised for unusable configuration (bad env values, base URL)."""


class CopyleaksNetworkError(CopyleaksError):
    """Raised for transport-level failures like DNS and TCP errors."""


class CopyleaksTimeoutError(CopyleaksError):
    """Raised when a request exceeds the configured timeout."""


class CopyleaksResponseError(CopyleaksError):
    """Base for failures detected on a received response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
        body: object = None,
        headers: Mapping[str, str] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code
        self.error_code = error_code
        self.body = body
        self.headers = dict(headers) if headers is not None else {}

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        suffix = f" (copyleaks error {self.error_code})" if self.error_code else ""
        return f"HTTP {self.status_code}: {self.message}{suffix}"


class CopyleaksAPIError(CopyleaksResponseError):
    """Raised for HTTP non-success responses."""


class CopyleaksAuthError(CopyleaksAPIError):
    """Raised for authentication and authorization failures."""


class CopyleaksRateLimitError(CopyleaksAPIError):
    """Raised for HTTP 429 responses."""


class CopyleaksProtocolError(CopyleaksResponseError):
    """Raised when a successful response does not carry the expected JSON."""

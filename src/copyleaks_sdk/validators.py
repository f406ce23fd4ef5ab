"""Validators for callback targets, custom fields and API responses.

Every validator returns ``None`` on success and raises on violation:
value validators raise :class:`CopyleaksValidationError`, the response
validator raises :class:`CopyleaksAPIError` or one of its subclasses.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import urlparse

import httpx

from .exceptions import (
    CopyleaksAPIError,
    CopyleaksAuthError,
    CopyleaksRateLimitError,
    CopyleaksValidationError,
)


URL_SCHEMES = {"http", "https"}
EMAIL_MAX_LENGTH = 254
CUSTOM_FIELD_KEY_MAX_LENGTH = 128
CUSTOM_FIELDS_MAX_BYTES = 512
ERROR_CODE_HEADER = "copyleaks-error-code"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s.]+(\.[^@\s.]+)+$")
# RFC 7230 tchar
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# header values must be printable ASCII
_UNSAFE_RE = re.compile(r"[^\x21-\x7e]")
_UNSAFE_FIELD_VALUE_RE = re.compile(r"[^\x20-\x7e]")


def validate_url(value: str) -> None:
    """Check that ``value`` is an absolute http(s) URL with a host."""
    if not isinstance(value, str) or not value:
        raise CopyleaksValidationError("callback URL must be a non-empty string")
    if _UNSAFE_RE.search(value):
        raise CopyleaksValidationError(
            f"callback URL must be printable ASCII without whitespace: {value!r}"
        )
    parsed = urlparse(value)
    if parsed.scheme not in URL_SCHEMES or not parsed.netloc or not parsed.hostname:
        raise CopyleaksValidationError(f"callback URL is not a valid http(s) URL: {value!r}")


def validate_email(value: str) -> None:
    """Check that ``value`` looks like a single ``local@domain.tld`` address."""
    if not isinstance(value, str) or not value:
        raise CopyleaksValidationError("callback email must be a non-empty string")
    if _UNSAFE_RE.search(value):
        raise CopyleaksValidationError(
            f"callback email must be printable ASCII without whitespace: {value!r}"
        )
    if len(value) > EMAIL_MAX_LENGTH or not _EMAIL_RE.match(value):
        raise CopyleaksValidationError(f"callback email is not a valid address: {value!r}")


def validate_custom_fields(fields: Mapping[str, str]) -> None:
    """Check a merged custom field set before it is turned into headers.

    Keys become part of a header name, so they must be HTTP token
    characters; values must not break the header line. The whole set is
    limited to ``CUSTOM_FIELDS_MAX_BYTES`` of keys and values.
    """
    if not isinstance(fields, Mapping):
        raise CopyleaksValidationError("custom fields must be a mapping")

    total = 0
    for key, value in fields.items():
        if not isinstance(key, str) or not _TOKEN_RE.fullmatch(key):
            raise CopyleaksValidationError(f"custom field name is not a valid header token: {key!r}")
        if len(key) > CUSTOM_FIELD_KEY_MAX_LENGTH:
            raise CopyleaksValidationError(
                f"custom field name exceeds {CUSTOM_FIELD_KEY_MAX_LENGTH} characters: {key!r}"
            )
        if not isinstance(value, str):
            raise CopyleaksValidationError(f"custom field {key!r} must have a string value")
        if "\r" in value or "\n" in value or "\x00" in value:
            raise CopyleaksValidationError(f"custom field {key!r} contains line break characters")
        if _UNSAFE_FIELD_VALUE_RE.search(value):
            raise CopyleaksValidationError(f"custom field {key!r} must be printable ASCII")
        total += len(key.encode("utf-8")) + len(value.encode("utf-8"))

    if total > CUSTOM_FIELDS_MAX_BYTES:
        raise CopyleaksValidationError(
            f"custom fields exceed {CUSTOM_FIELDS_MAX_BYTES} bytes (got {total})"
        )


def _error_message(parsed_body: Any, raw_body: str | None) -> str:
    if isinstance(parsed_body, Mapping):
        for key in ("Message", "message", "error"):
            if isinstance(parsed_body.get(key), str):
                return parsed_body[key]
    return str(parsed_body or raw_body or "request failed")


def validate_response(response: httpx.Response) -> None:
    """Raise an API error for any non-2xx response."""
    if response.is_success:
        return

    raw_body: str | None = None
    parsed_body: Any = None
    content_type = response.headers.get("content-type", "")
    try:
        raw_body = response.text
        if "json" in content_type.lower():
            parsed_body = response.json()
    except ValueError:
        parsed_body = None

    kwargs: dict[str, Any] = {
        "status_code": response.status_code,
        "error_code": response.headers.get(ERROR_CODE_HEADER),
        "body": parsed_body if parsed_body is not None else raw_body,
        "headers": MappingProxyType(dict(response.headers)),
    }
    message = _error_message(parsed_body, raw_body)
    if response.status_code in {401, 403}:
        raise CopyleaksAuthError(message, **kwargs)
    if response.status_code == 429:
        raise CopyleaksRateLimitError(message, **kwargs)
    raise CopyleaksAPIError(message, **kwargs)

"""Header composition for Copyleaks API requests.

Each ``*_header`` step below takes the per-call options and the client
configuration and returns the headers it owns. Steps own disjoint header
names, so folding them in any order yields the same result.
"""

from __future__ import annotations

from typing import Callable, Mapping

from ._version import __version__
from .config import CopyleaksConfig
from .request_options import RequestOptions
from .validators import validate_custom_fields, validate_email, validate_url


HTTP_CALLBACK_HEADER = "copyleaks-http-callback"
EMAIL_CALLBACK_HEADER = "copyleaks-email-callback"
SANDBOX_HEADER = "copyleaks-sandbox-mode"
PARTIAL_SCAN_HEADER = "copyleaks-allow-partial-scan"
CUSTOM_FIELD_PREFIX = "copyleaks-client-custom-"
JSON_CONTENT_TYPE = "application/json"
USER_AGENT = f"copyleaks-python-sdk/{__version__}"

HeaderStep = Callable[[RequestOptions, CopyleaksConfig], dict[str, str]]


def http_callback_header(options: RequestOptions, config: CopyleaksConfig) -> dict[str, str]:
    if options.no_http_callback or options.no_callbacks:
        return {}
    value = options.http_callback or config.http_callback
    if not value:
        return {}
    validate_url(value)
    return {HTTP_CALLBACK_HEADER: value}


def email_callback_header(options: RequestOptions, config: CopyleaksConfig) -> dict[str, str]:
    if options.no_email_callback or options.no_callbacks:
        return {}
    value = options.email_callback or config.email_callback
    if not value:
        return {}
    validate_email(value)
    return {EMAIL_CALLBACK_HEADER: value}


def authentication_header(options: RequestOptions, config: CopyleaksConfig) -> dict[str, str]:
    # unauthenticated calls (the login handshake) are allowed
    if not options.token:
        return {}
    return {"Authorization": f"Bearer {options.token}"}


def sandbox_header(options: RequestOptions, config: CopyleaksConfig) -> dict[str, str]:
    if not config.sandbox_mode:
        return {}
    return {SANDBOX_HEADER: ""}


def content_type_header(options: RequestOptions, config: CopyleaksConfig) -> dict[str, str]:
    if options.boundary:
        return {"Content-Type": f'multipart/form-data; boundary="{options.boundary}"'}
    return {"Content-Type": JSON_CONTENT_TYPE}


def partial_scan_header(options: RequestOptions, config: CopyleaksConfig) -> dict[str, str]:
    if options.allow_partial_scan is None:
        allowed = config.allow_partial_scan
    else:
        allowed = options.allow_partial_scan
    if not allowed:
        return {}
    return {PARTIAL_SCAN_HEADER: ""}


def merge_custom_fields(
    configured: Mapping[str, str],
    per_call: Mapping[str, str] | None,
) -> dict[str, str]:
    """Merge custom fields, per-call entries winning.

    Header names are case-insensitive, so keys are compared case-folded
    and the spelling of the winning entry is kept.
    """
    merged: dict[str, tuple[str, str]] = {}
    for source in (configured, per_call or {}):
        for key, value in source.items():
            folded = key.casefold() if isinstance(key, str) else key
            merged[folded] = (key, value)
    return dict(merged.values())


def custom_field_headers(options: RequestOptions, config: CopyleaksConfig) -> dict[str, str]:
    if options.no_custom_fields:
        return {}
    fields = merge_custom_fields(config.custom_fields, options.custom_fields)
    validate_custom_fields(fields)
    return {f"{CUSTOM_FIELD_PREFIX}{key}": value for key, value in fields.items()}


def user_agent_header(options: RequestOptions, config: CopyleaksConfig) -> dict[str, str]:
    return {"User-Agent": USER_AGENT}


HEADER_STEPS: tuple[HeaderStep, ...] = (
    http_callback_header,
    email_callback_header,
    authentication_header,
    sandbox_header,
    content_type_header,
    partial_scan_header,
    custom_field_headers,
    user_agent_header,
)


def compose_headers(
    options: RequestOptions | None,
    config: CopyleaksConfig,
    *,
    steps: tuple[HeaderStep, ...] = HEADER_STEPS,
) -> dict[str, str]:
    """Build the full header set for one request.

    Raises:
        CopyleaksValidationError: a callback URL, callback email or the
            merged custom field set failed validation. Nothing is sent.
    """
    options = options or RequestOptions()
    headers: dict[str, str] = {}
    for step in steps:
        headers.update(step(options, config))
    return headers

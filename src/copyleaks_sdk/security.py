"""Security helpers: header redaction and base URL checks."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import urlparse

from .exceptions import CopyleaksConfigError


SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
}

LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return headers with sensitive values redacted for logging."""
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def validate_base_url(url: str) -> None:
    """Reject base URLs that are not HTTPS (loopback hosts may use HTTP)."""
    if "\x00" in url:
        raise CopyleaksConfigError("Invalid base_url")
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise CopyleaksConfigError("base_url must include scheme and host")
    if parsed.scheme not in {"http", "https"}:
        raise CopyleaksConfigError(f"Unsupported base_url scheme: {parsed.scheme}")
    if parsed.scheme == "http":
        host = (parsed.hostname or "").lower()
        if host not in LOOPBACK_HOSTS:
            raise CopyleaksConfigError("Non-HTTPS base_url is only allowed for loopback hosts")
    if parsed.path not in {"", "/"} or parsed.query or parsed.fragment:
        raise CopyleaksConfigError("base_url must not carry a path, query or fragment")

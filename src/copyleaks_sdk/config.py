"""Client configuration shared by every request of a client instance."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .exceptions import CopyleaksConfigError


DEFAULT_BASE_URL = "https://api.copyleaks.com"
DEFAULT_API_VERSION = "v1"
DEFAULT_TIMEOUT = 30.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class CopyleaksConfig:
    """Settings applied to every request made through one client.

    Callback targets and custom fields here are defaults; per-call
    :class:`~copyleaks_sdk.request_options.RequestOptions` override them.
    ``verify_ssl`` is on unless explicitly disabled.
    """

    sandbox_mode: bool = False
    allow_partial_scan: bool = False
    http_callback: str | None = None
    email_callback: str | None = None
    custom_fields: Mapping[str, str] = field(default_factory=dict)
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        # freeze a private copy so callers can't mutate it after construction
        object.__setattr__(self, "custom_fields", MappingProxyType(dict(self.custom_fields)))
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.timeout <= 0:
            raise CopyleaksConfigError("timeout must be greater than 0")
        if not self.api_version or "/" in self.api_version:
            raise CopyleaksConfigError(f"Invalid api_version: {self.api_version!r}")

    @classmethod
    def from_env(cls, **overrides: object) -> "CopyleaksConfig":
        """Create a configuration from environment variables.

        Recognised variables:
            COPYLEAKS_SANDBOX_MODE: "1"/"true"/"yes"/"on" enables sandbox mode.
            COPYLEAKS_ALLOW_PARTIAL_SCAN: same format, enables partial scans.
            COPYLEAKS_HTTP_CALLBACK: default HTTP completion callback URL.
            COPYLEAKS_EMAIL_CALLBACK: default completion callback email.
            COPYLEAKS_BASE_URL: API host, defaults to the public endpoint.
            COPYLEAKS_TIMEOUT: request timeout in seconds.
            COPYLEAKS_VERIFY_SSL: set to "0"/"false" to disable TLS verification.

        Keyword overrides take precedence over the environment.
        """
        raw_timeout = os.environ.get("COPYLEAKS_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise CopyleaksConfigError(f"COPYLEAKS_TIMEOUT must be a number, got {raw_timeout!r}", cause=exc) from exc

        values: dict[str, object] = {
            "sandbox_mode": _env_flag("COPYLEAKS_SANDBOX_MODE", False),
            "allow_partial_scan": _env_flag("COPYLEAKS_ALLOW_PARTIAL_SCAN", False),
            "http_callback": os.environ.get("COPYLEAKS_HTTP_CALLBACK") or None,
            "email_callback": os.environ.get("COPYLEAKS_EMAIL_CALLBACK") or None,
            "base_url": os.environ.get("COPYLEAKS_BASE_URL") or DEFAULT_BASE_URL,
            "timeout": timeout,
            "verify_ssl": _env_flag("COPYLEAKS_VERIFY_SSL", True),
        }
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]

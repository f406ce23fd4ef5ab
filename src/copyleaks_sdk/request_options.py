"""Per-request overrides for the Copyleaks clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class RequestOptions:
    token: str | None = None
    http_callback: str | None = None
    no_http_callback: bool = False
    email_callback: str | None = None
    no_email_callback: bool = False
    no_callbacks: bool = False
    allow_partial_scan: bool | None = None
    custom_fields: Mapping[str, str] | None = None
    no_custom_fields: bool = False
    # set by CopyleaksApi.post_file only
    boundary: str | None = None

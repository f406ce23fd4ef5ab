"""Low-level request dispatcher for the Copyleaks API."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from typing import Any

import httpx

from .config import CopyleaksConfig
from .exceptions import (
    CopyleaksNetworkError,
    CopyleaksProtocolError,
    CopyleaksTimeoutError,
    CopyleaksValidationError,
)
from .headers import compose_headers
from .multipart import encode_file_body, new_boundary
from .request_options import RequestOptions
from .security import sanitize_headers, validate_base_url
from .validators import validate_response

logger = logging.getLogger(__name__)


def _coerce_body(body: Any) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body).encode("utf-8")


class CopyleaksApi:
    """Sends requests to ``<base_url>/<api_version>/<path>``.

    One instance owns one ``httpx.Client``; its connection pool may be
    shared between threads. No call is retried: transport failures and
    non-success responses surface immediately.
    """

    def __init__(
        self,
        config: CopyleaksConfig | None = None,
        *,
        httpx_client: httpx.Client | None = None,
    ) -> None:
        self.config = config or CopyleaksConfig()
        validate_base_url(self.config.base_url)
        if not self.config.verify_ssl:
            logger.warning("TLS certificate verification is disabled for %s", self.config.base_url)
        self._httpx = httpx_client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
            trust_env=False,
        )

    def __enter__(self) -> "CopyleaksApi":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._httpx.close()

    def request_path(self, path: str) -> str:
        if "://" in path:
            raise CopyleaksValidationError(f"Full URLs are not allowed in path: {path!r}")
        if "\x00" in path:
            raise CopyleaksValidationError("Invalid path characters")
        return f"/{self.config.api_version}/{path.lstrip('/')}"

    def get(self, path: str, options: RequestOptions | None = None) -> Any:
        options = replace(options or RequestOptions(), no_callbacks=True)
        return self._request("GET", path, None, options)

    def delete(self, path: str, options: RequestOptions | None = None) -> Any:
        options = replace(options or RequestOptions(), no_callbacks=True)
        return self._request("DELETE", path, None, options)

    def post(self, path: str, body: Any = None, options: RequestOptions | None = None) -> Any:
        """POST a JSON payload.

        ``body`` may be pre-serialized text or bytes; any other non-None
        value is serialized with :func:`json.dumps`.
        """
        return self._request("POST", path, _coerce_body(body), options or RequestOptions())

    def post_file(
        self,
        path: str,
        file_path: str | os.PathLike[str],
        options: RequestOptions | None = None,
    ) -> Any:
        """Upload one file as ``multipart/form-data``.

        Raises ``OSError`` before anything is sent when the file is unreadable.
        """
        options = options or RequestOptions()
        if options.allow_partial_scan is None:
            options = replace(options, allow_partial_scan=self.config.allow_partial_scan)
        boundary = new_boundary()
        body = encode_file_body(file_path, boundary)
        return self._request("POST", path, body, replace(options, boundary=boundary))

    def _request(
        self,
        method: str,
        path: str,
        body: bytes | None,
        options: RequestOptions,
    ) -> Any:
        url = self.request_path(path)
        headers = compose_headers(options, self.config)
        logger.debug("%s %s headers=%s", method, url, sanitize_headers(headers))

        try:
            response = self._httpx.request(method, url, content=body, headers=headers)
        except httpx.TimeoutException as exc:
            raise CopyleaksTimeoutError(f"{method} {url} timed out", cause=exc) from exc
        except httpx.TransportError as exc:
            raise CopyleaksNetworkError(f"{method} {url} failed: {exc}", cause=exc) from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        validate_response(response)
        return self._parse_response(response)

    @staticmethod
    def _parse_response(response: httpx.Response) -> Any:
        if response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise CopyleaksProtocolError(
                "Response body is not valid JSON",
                status_code=response.status_code,
                body=response.text,
                headers=response.headers,
                cause=exc,
            ) from exc

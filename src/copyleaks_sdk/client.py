"""Product-level client for creating and inspecting Copyleaks scans."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import replace
from typing import Any, TypeVar
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError

from .api import CopyleaksApi
from .config import CopyleaksConfig
from .exceptions import CopyleaksProtocolError, CopyleaksValidationError
from .models import PRODUCTS, AccessToken, CopyleaksModel, Credits, ProcessInfo, ProcessStatus, ScanResult
from .request_options import RequestOptions
from .validators import validate_url

logger = logging.getLogger(__name__)

LOGIN_PATH = "account/login-api"

ModelT = TypeVar("ModelT", bound=CopyleaksModel)


def _parse_model(model: type[ModelT], payload: Any) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise CopyleaksProtocolError(
            f"Unexpected {model.__name__} payload", body=payload, cause=exc
        ) from exc


def _expect_list(payload: Any, what: str) -> list[Any]:
    if not isinstance(payload, list):
        raise CopyleaksProtocolError(f"Expected a JSON array for {what}", body=payload)
    return payload


def _process_segment(process_id: str) -> str:
    if not process_id or not isinstance(process_id, str):
        raise CopyleaksValidationError("process_id must be a non-empty string")
    return quote(process_id, safe="")


class CopyleaksClient:
    """Synchronous client for one Copyleaks product.

    Logs in lazily with ``email``/``api_key`` and re-authenticates when the
    cached access token is missing or about to expire.
    """

    def __init__(
        self,
        email: str,
        api_key: str,
        *,
        product: str = "businesses",
        config: CopyleaksConfig | None = None,
        httpx_client: httpx.Client | None = None,
    ) -> None:
        if not email or not api_key:
            raise CopyleaksValidationError("email and api_key are required")
        product = product.lower()
        if product not in PRODUCTS:
            raise CopyleaksValidationError(
                f"Unknown product {product!r}, expected one of {sorted(PRODUCTS)}"
            )
        self.email = email
        self.product = product
        self._api_key = api_key
        self._token: AccessToken | None = None
        self._token_lock = threading.Lock()
        self.api = CopyleaksApi(config, httpx_client=httpx_client)

    def __enter__(self) -> "CopyleaksClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.api.close()

    @property
    def token(self) -> AccessToken | None:
        return self._token

    def login(self) -> AccessToken:
        payload = self.api.post(
            LOGIN_PATH,
            {"Email": self.email, "ApiKey": self._api_key},
            RequestOptions(no_callbacks=True, no_custom_fields=True),
        )
        token = _parse_model(AccessToken, payload)
        with self._token_lock:
            self._token = token
        logger.debug("Logged in as %s (token expires %s)", self.email, token.expires)
        return token

    def _options(self, options: RequestOptions | None) -> RequestOptions:
        if options is not None and options.token:
            return options
        with self._token_lock:
            token = self._token
        if token is None or token.is_expired():
            token = self.login()
        return replace(options or RequestOptions(), token=token.access_token)

    def _path(self, *segments: str) -> str:
        return "/".join((self.product, *segments))

    def count_credits(self, *, options: RequestOptions | None = None) -> int:
        payload = self.api.get(self._path("count-credits"), self._options(options))
        return _parse_model(Credits, payload).amount

    def create_by_url(self, url: str, *, options: RequestOptions | None = None) -> ProcessInfo:
        validate_url(url)
        payload = self.api.post(self._path("create-by-url"), {"Url": url}, self._options(options))
        return _parse_model(ProcessInfo, payload)

    def create_by_file(
        self,
        file_path: str | os.PathLike[str],
        *,
        options: RequestOptions | None = None,
    ) -> ProcessInfo:
        payload = self.api.post_file(self._path("create-by-file"), file_path, self._options(options))
        return _parse_model(ProcessInfo, payload)

    def create_by_ocr(
        self,
        file_path: str | os.PathLike[str],
        *,
        language: str = "English",
        options: RequestOptions | None = None,
    ) -> ProcessInfo:
        path = self._path("create-by-file-ocr") + "?" + urlencode({"language": language})
        payload = self.api.post_file(path, file_path, self._options(options))
        return _parse_model(ProcessInfo, payload)

    def create_by_text(self, text: str, *, options: RequestOptions | None = None) -> ProcessInfo:
        if not text:
            raise CopyleaksValidationError("text must not be empty")
        payload = self.api.post(self._path("create-by-text"), text, self._options(options))
        return _parse_model(ProcessInfo, payload)

    def get_status(self, process_id: str, *, options: RequestOptions | None = None) -> ProcessStatus:
        path = self._path(_process_segment(process_id), "status")
        return _parse_model(ProcessStatus, self.api.get(path, self._options(options)))

    def get_result(self, process_id: str, *, options: RequestOptions | None = None) -> list[ScanResult]:
        path = self._path(_process_segment(process_id), "result")
        payload = _expect_list(self.api.get(path, self._options(options)), "scan results")
        return [_parse_model(ScanResult, item) for item in payload]

    def delete_process(self, process_id: str, *, options: RequestOptions | None = None) -> Any:
        path = self._path(_process_segment(process_id), "delete")
        return self.api.delete(path, self._options(options))

    def list_processes(self, *, options: RequestOptions | None = None) -> list[ProcessInfo]:
        payload = _expect_list(self.api.get(self._path("list"), self._options(options)), "process list")
        return [_parse_model(ProcessInfo, item) for item in payload]

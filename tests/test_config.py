from __future__ import annotations

import pytest

from copyleaks_sdk.config import DEFAULT_BASE_URL, CopyleaksConfig
from copyleaks_sdk.exceptions import CopyleaksConfigError
from copyleaks_sdk.security import sanitize_headers, validate_base_url


ENV_VARS = (
    "COPYLEAKS_SANDBOX_MODE",
    "COPYLEAKS_ALLOW_PARTIAL_SCAN",
    "COPYLEAKS_HTTP_CALLBACK",
    "COPYLEAKS_EMAIL_CALLBACK",
    "COPYLEAKS_BASE_URL",
    "COPYLEAKS_TIMEOUT",
    "COPYLEAKS_VERIFY_SSL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = CopyleaksConfig()

    assert config.verify_ssl is True
    assert config.sandbox_mode is False
    assert config.allow_partial_scan is False
    assert config.http_callback is None
    assert dict(config.custom_fields) == {}
    assert config.base_url == DEFAULT_BASE_URL
    assert config.api_version == "v1"


def test_custom_fields_are_copied_and_read_only() -> None:
    fields = {"a": "1"}
    config = CopyleaksConfig(custom_fields=fields)
    fields["b"] = "2"

    assert dict(config.custom_fields) == {"a": "1"}
    with pytest.raises(TypeError):
        config.custom_fields["c"] = "3"  # type: ignore[index]


def test_base_url_trailing_slash_is_stripped() -> None:
    assert CopyleaksConfig(base_url="https://api.example.com/").base_url == "https://api.example.com"


@pytest.mark.parametrize("kwargs", [{"timeout": 0}, {"timeout": -1.0}, {"api_version": ""}, {"api_version": "v1/x"}])
def test_invalid_values_raise(kwargs) -> None:
    with pytest.raises(CopyleaksConfigError):
        CopyleaksConfig(**kwargs)


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("COPYLEAKS_SANDBOX_MODE", "true")
    monkeypatch.setenv("COPYLEAKS_ALLOW_PARTIAL_SCAN", "1")
    monkeypatch.setenv("COPYLEAKS_HTTP_CALLBACK", "https://cb.example")
    monkeypatch.setenv("COPYLEAKS_EMAIL_CALLBACK", "ops@example.com")
    monkeypatch.setenv("COPYLEAKS_TIMEOUT", "12.5")
    monkeypatch.setenv("COPYLEAKS_VERIFY_SSL", "off")

    config = CopyleaksConfig.from_env()

    assert config.sandbox_mode is True
    assert config.allow_partial_scan is True
    assert config.http_callback == "https://cb.example"
    assert config.email_callback == "ops@example.com"
    assert config.timeout == 12.5
    assert config.verify_ssl is False


def test_from_env_defaults_and_overrides() -> None:
    config = CopyleaksConfig.from_env(sandbox_mode=True)

    assert config.sandbox_mode is True
    assert config.verify_ssl is True
    assert config.timeout == 30.0


def test_from_env_rejects_bad_timeout(monkeypatch) -> None:
    monkeypatch.setenv("COPYLEAKS_TIMEOUT", "soon")

    with pytest.raises(CopyleaksConfigError, match="COPYLEAKS_TIMEOUT"):
        CopyleaksConfig.from_env()


def test_sanitize_headers_redacts_authorization() -> None:
    headers = {"Authorization": "Bearer secret", "Content-Type": "application/json"}

    assert sanitize_headers(headers) == {
        "Authorization": "[REDACTED]",
        "Content-Type": "application/json",
    }


@pytest.mark.parametrize("url", ["https://api.copyleaks.com", "http://localhost:8080", "http://127.0.0.1"])
def test_validate_base_url_accepts(url: str) -> None:
    validate_base_url(url)


@pytest.mark.parametrize(
    "url",
    ["api.copyleaks.com", "ftp://api.copyleaks.com", "http://api.copyleaks.com", "https://api.copyleaks.com/v1"],
)
def test_validate_base_url_rejects(url: str) -> None:
    with pytest.raises(CopyleaksConfigError):
        validate_base_url(url)

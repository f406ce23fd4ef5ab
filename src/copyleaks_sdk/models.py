"""Typed response models for the Copyleaks v1 API."""

from __future__ import annotations

import datetime as _dt
from email.utils import parsedate_to_datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


PRODUCTS = frozenset({"businesses", "education", "websites"})


class CopyleaksModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)


class AccessToken(CopyleaksModel):
    access_token: str
    issued: _dt.datetime | None = Field(default=None, alias=".issued")
    expires: _dt.datetime | None = Field(default=None, alias=".expires")

    @field_validator("issued", "expires", mode="before")
    @classmethod
    def _parse_http_date(cls, value: Any) -> Any:
        # login responses use RFC 1123 dates ("Wed, 27 Jul 2016 08:25:14 GMT")
        if isinstance(value, str) and "," in value:
            try:
                return parsedate_to_datetime(value)
            except (TypeError, ValueError):
                return value
        return value

    def is_expired(self, *, leeway: float = 60.0) -> bool:
        """True when the token expires within ``leeway`` seconds."""
        if self.expires is None:
            return False
        expires = self.expires
        if expires.utcoffset() is None:
            expires = expires.replace(tzinfo=_dt.timezone.utc)
        now = _dt.datetime.now(_dt.timezone.utc)
        return (expires - now).total_seconds() <= leeway


class Credits(CopyleaksModel):
    amount: int = Field(alias="Amount")


class ProcessInfo(CopyleaksModel):
    process_id: str = Field(alias="ProcessId")
    creation_time: str | None = Field(default=None, alias="CreationTimeUTC")
    status: str | None = Field(default=None, alias="Status")
    custom_fields: dict[str, str] | None = Field(default=None, alias="CustomFields")


class ProcessStatus(CopyleaksModel):
    status: str = Field(alias="Status")
    progress_percents: int | None = Field(default=None, alias="ProgressPercents")

    @property
    def finished(self) -> bool:
        return self.status.lower() == "finished"


class ScanResult(CopyleaksModel):
    url: str | None = Field(default=None, alias="URL")
    percents: float | None = Field(default=None, alias="Percents")
    copied_words: int | None = Field(default=None, alias="NumberOfCopiedWords")
    title: str | None = Field(default=None, alias="Title")
    introduction: str | None = Field(default=None, alias="Introduction")
    cached_version: str | None = Field(default=None, alias="CachedVersion")
    comparison_report: str | None = Field(default=None, alias="ComparisonReport")
    embedded_comparison: str | None = Field(default=None, alias="EmbededComparison")

"""Pydantic models for the settings YAML consumed by ``judgesync``."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    console: bool = Field(default=False, description="Print spans to stderr.")
    otlp_endpoint: str | None = None


class SyncSettings(BaseModel):
    """Top-level client settings.

    Example YAML::

        base_url: https://judge.example.com/api
        contest_id: spring-2026
        token: ${JUDGE_TOKEN}
        throttle_wait: 1.0
    """

    base_url: str
    contest_id: str
    token: str | None = None
    throttle_wait: float = Field(default=1.0, gt=0, description="Persist window in seconds.")
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds.")
    telemetry: TelemetrySettings | None = None

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            msg = f"base_url must be an http(s) URL, got {value!r}"
            raise ValueError(msg)
        return value.rstrip("/")

    @field_validator("token")
    @classmethod
    def _blank_token_is_none(cls, value: str | None) -> str | None:
        # An unset ${VAR} interpolates to an empty string.
        return value or None

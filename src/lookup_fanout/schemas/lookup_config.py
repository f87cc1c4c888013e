"""Pydantic configuration models.

Validated from YAML by ConfigurationManager. Every model forbids unknown
keys so that typos in a config file surface as validation errors.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SourceKind = Literal["github", "facebook", "mock"]

DEFAULT_BASE_URLS: dict[str, str] = {
    "github": "https://api.github.com/users/",
    "facebook": "https://graph.facebook.com/",
}


class SourceConfig(BaseModel):
    """Config for one named lookup source."""

    model_config = ConfigDict(extra="forbid")

    kind: SourceKind
    base_url: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    # Mock source only
    latency_seconds: float = Field(default=0.0, ge=0.0)
    fail_keys: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_mock_fields(self) -> "SourceConfig":
        """Reject mock-only settings on HTTP sources."""
        if self.kind != "mock" and (self.latency_seconds or self.fail_keys):
            msg = (
                f"latency_seconds and fail_keys are only valid for mock "
                f"sources, not '{self.kind}'"
            )
            raise ValueError(msg)
        return self

    @property
    def resolved_base_url(self) -> str:
        """Base URL with the per-kind default applied."""
        if self.base_url is not None:
            return self.base_url
        return DEFAULT_BASE_URLS.get(self.kind, "")


class ExecutionConfig(BaseModel):
    """Per-lookup execution settings."""

    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float | None = Field(default=30.0, gt=0)
    simulated_latency_seconds: float = Field(default=0.0, ge=0.0)


class ConnectionPoolConfig(BaseModel):
    """Limits for the shared HTTP client."""

    model_config = ConfigDict(extra="forbid")

    max_connections: int = Field(default=100, gt=0)
    max_keepalive: int = Field(default=20, ge=0)
    keepalive_expiry: float = Field(default=30.0, ge=0)


def _default_sources() -> dict[str, SourceConfig]:
    return {
        "github": SourceConfig(kind="github"),
        "facebook": SourceConfig(kind="facebook"),
        "mock": SourceConfig(kind="mock"),
    }


class LookupConfig(BaseModel):
    """Top-level configuration."""

    model_config = ConfigDict(extra="forbid")

    default_source: str = "github"
    log_level: str = "WARNING"
    user_agent: str = "lookup-fanout/1.0"
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    connection_pool: ConnectionPoolConfig = Field(
        default_factory=ConnectionPoolConfig
    )
    sources: dict[str, SourceConfig] = Field(default_factory=_default_sources)

    @field_validator("sources", mode="before")
    @classmethod
    def merge_default_sources(cls, value: Any) -> Any:
        """Layer user-defined sources over the built-in ones."""
        if not isinstance(value, dict):
            return value
        merged: dict[str, Any] = dict(_default_sources())
        merged.update(value)
        return merged

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def validate_default_source(self) -> "LookupConfig":
        if self.default_source not in self.sources:
            msg = (
                f"default_source '{self.default_source}' is not one of the "
                f"configured sources: {', '.join(sorted(self.sources))}"
            )
            raise ValueError(msg)
        return self

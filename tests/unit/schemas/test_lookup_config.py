"""Tests for configuration schema models."""

import pytest
from pydantic import ValidationError

from lookup_fanout.schemas.lookup_config import LookupConfig, SourceConfig


class TestSourceConfig:
    """Tests for SourceConfig validation."""

    def test_default_base_urls(self) -> None:
        assert (
            SourceConfig(kind="github").resolved_base_url
            == "https://api.github.com/users/"
        )
        assert (
            SourceConfig(kind="facebook").resolved_base_url
            == "https://graph.facebook.com/"
        )
        assert SourceConfig(kind="mock").resolved_base_url == ""

    def test_explicit_base_url_wins(self) -> None:
        config = SourceConfig(kind="github", base_url="https://ghe.example/api/v3/users/")

        assert config.resolved_base_url == "https://ghe.example/api/v3/users/"

    def test_mock_fields_rejected_on_http_source(self) -> None:
        with pytest.raises(ValidationError, match="only valid for mock"):
            SourceConfig(kind="github", fail_keys=["a"])

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SourceConfig(kind="gopher")  # type: ignore[arg-type]


class TestLookupConfig:
    """Tests for top-level LookupConfig."""

    def test_defaults(self) -> None:
        config = LookupConfig()

        assert config.default_source == "github"
        assert sorted(config.sources) == ["facebook", "github", "mock"]
        assert config.execution.timeout_seconds == 30.0
        assert config.execution.simulated_latency_seconds == 0.0
        assert config.connection_pool.max_connections == 100

    def test_user_sources_merge_over_defaults(self) -> None:
        config = LookupConfig.model_validate(
            {
                "default_source": "slow-mock",
                "sources": {
                    "slow-mock": {"kind": "mock", "latency_seconds": 1.0},
                    "github": {
                        "kind": "github",
                        "headers": {"Authorization": "Bearer token"},
                    },
                },
            }
        )

        assert sorted(config.sources) == ["facebook", "github", "mock", "slow-mock"]
        assert config.sources["slow-mock"].latency_seconds == 1.0
        assert config.sources["github"].headers == {"Authorization": "Bearer token"}

    def test_unknown_default_source_rejected(self) -> None:
        with pytest.raises(ValidationError, match="default_source 'nope'"):
            LookupConfig(default_source="nope")

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LookupConfig.model_validate({"execution": {"retries": 3}})

    def test_log_level_normalized(self) -> None:
        assert LookupConfig(log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError, match="Unknown log level"):
            LookupConfig(log_level="chatty")

    def test_timeout_may_be_disabled(self) -> None:
        config = LookupConfig.model_validate({"execution": {"timeout_seconds": None}})

        assert config.execution.timeout_seconds is None

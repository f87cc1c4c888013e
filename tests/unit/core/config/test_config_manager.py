"""Tests for configuration discovery and loading."""

from pathlib import Path

import pytest

from lookup_fanout.core.config.config_manager import (
    ConfigurationError,
    ConfigurationManager,
    safe_load_yaml,
)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestSafeLoadYaml:
    """Tests for YAML loading helper."""

    def test_empty_file_returns_empty_dict(self, tmp_path: Path) -> None:
        assert safe_load_yaml(_write(tmp_path / "c.yaml", "")) == {}

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.yaml", "sources: [unclosed")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            safe_load_yaml(path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.yaml", "- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="Expected a mapping"):
            safe_load_yaml(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Failed to read file"):
            safe_load_yaml(tmp_path / "missing.yaml")


class TestConfigurationManager:
    """Tests for ConfigurationManager search order."""

    def _manager(self, tmp_path: Path, config_path: Path | None = None) -> ConfigurationManager:
        return ConfigurationManager(
            config_path,
            project_dir=tmp_path / "project",
            global_config_dir=tmp_path / "global",
        )

    def test_defaults_when_no_config_file(self, tmp_path: Path) -> None:
        manager = self._manager(tmp_path)

        assert manager.find_config_file() is None
        assert manager.load_config().default_source == "github"

    def test_explicit_path_loaded(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "custom.yaml", "default_source: mock\n")

        config = self._manager(tmp_path, path).load_config()

        assert config.default_source == "mock"

    def test_explicit_missing_path_raises(self, tmp_path: Path) -> None:
        manager = self._manager(tmp_path, tmp_path / "nope.yaml")

        with pytest.raises(ConfigurationError, match="Config file not found"):
            manager.load_config()

    def test_project_config_preferred_over_global(self, tmp_path: Path) -> None:
        _write(
            tmp_path / "project" / ".lookup-fanout" / "config.yaml",
            "default_source: mock\n",
        )
        _write(tmp_path / "global" / "config.yaml", "default_source: facebook\n")
        manager = self._manager(tmp_path)

        assert manager.find_config_file() == manager.local_config_path
        assert manager.load_config().default_source == "mock"

    def test_global_config_used_as_fallback(self, tmp_path: Path) -> None:
        _write(tmp_path / "global" / "config.yaml", "default_source: facebook\n")
        manager = self._manager(tmp_path)

        assert manager.load_config().default_source == "facebook"

    def test_invalid_config_raises_configuration_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.yaml", "execution:\n  timeout_seconds: -1\n")

        with pytest.raises(ConfigurationError, match="Invalid config"):
            self._manager(tmp_path, path).load_config()

    def test_configuration_error_is_value_error(self) -> None:
        assert issubclass(ConfigurationError, ValueError)

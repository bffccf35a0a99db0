"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from embedarr.infrastructure.config.load import load_config

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "EMBEDARR_ENVIRONMENT",
        "EMBEDARR_LOG_LEVEL",
        "EMBEDARR_HTTP_TIMEOUT_SECONDS",
        "EMBEDARR_ADMIN_EMAILS",
        "EMBEDARR_STORE_BACKEND",
        "EMBEDARR_STORE_DIR",
        "EMBEDARR_TMDB_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a minimal YAML config and return its path."""
    config = {
        "app_name": "embedarr-test",
        "environment": "test",
        "http": {
            "timeout_seconds": 15.0,
            "user_agent": "TestAgent/1.0",
        },
        "logging": {"level": "DEBUG", "format": "console"},
        "store": {"dir": str(tmp_path / "store"), "max_concurrent": 4},
        "admin": {"emails": ["Root@Example.com"]},
        "tmdb": {"api_key": "yaml-key", "language": "de-DE"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestDefaultsOnly:
    """Load with no YAML, no ENV, no CLI - pure defaults."""

    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "embedarr"
        assert config.environment == "dev"
        assert config.http_timeout_seconds == 10.0
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert config.store.backend == "diskcache"
        assert config.store.directory == Path("./data/embedarr")
        assert config.admin.emails == []
        assert config.admin.identity_header == "X-Forwarded-Email"
        assert config.tmdb.api_key is None

    def test_defaults_derive_log_format_from_environment(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestYamlOverrides:
    def test_yaml_overrides_defaults(self, yaml_config: Path, tmp_path: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "embedarr-test"
        assert config.http_timeout_seconds == 15.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.log_level == "DEBUG"
        assert config.store.directory == tmp_path / "store"
        assert config.store.max_concurrent == 4
        assert config.admin.emails == ["root@example.com"]
        assert config.tmdb.language == "de-DE"

    def test_store_directory_spelling(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text(
            yaml.dump({"store": {"directory": str(tmp_path / "d")}}), encoding="utf-8"
        )
        assert load_config(config_path=path).store.directory == tmp_path / "d"

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_dotenv_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / ".env")

    def test_non_mapping_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(config_path=path)

    def test_invalid_timeout_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"http": {"timeout_seconds": 0}}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(config_path=path)


class TestEnvOverrides:
    def test_env_overrides_yaml(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EMBEDARR_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("EMBEDARR_ADMIN_EMAILS", "a@example.com, B@example.com")

        config = load_config(config_path=yaml_config)
        assert config.log_level == "WARNING"
        assert config.admin.emails == ["a@example.com", "b@example.com"]
        assert config.app_name == "embedarr-test"

    def test_env_store_and_tmdb(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EMBEDARR_STORE_BACKEND", "redis")
        monkeypatch.setenv("EMBEDARR_STORE_DIR", str(tmp_path / "env-store"))
        monkeypatch.setenv("EMBEDARR_TMDB_API_KEY", "env-key")

        config = load_config()
        assert config.store.backend == "redis"
        assert config.store.directory == tmp_path / "env-store"
        assert config.tmdb.api_key == "env-key"
        assert config.to_sectioned_dict()["tmdb"]["api_key"] == "***"

    def test_dotenv_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("EMBEDARR_ENVIRONMENT=prod\n", encoding="utf-8")
        # load_dotenv writes os.environ directly; register the key so it is undone
        monkeypatch.setenv("EMBEDARR_ENVIRONMENT", "dev")
        monkeypatch.delenv("EMBEDARR_ENVIRONMENT")

        config = load_config(dotenv_path=env_file)
        assert config.environment == "prod"
        assert config.log_format == "json"


class TestCliOverrides:
    def test_cli_overrides_yaml_and_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EMBEDARR_LOG_LEVEL", "WARNING")

        config = load_config(
            config_path=yaml_config,
            cli_overrides={"log_level": "ERROR"},
        )
        assert config.log_level == "ERROR"

    def test_cli_overrides_with_sectioned_format(self, yaml_config: Path) -> None:
        config = load_config(
            config_path=yaml_config,
            cli_overrides={"http": {"timeout_seconds": 5.0}},
        )
        assert config.http_timeout_seconds == 5.0

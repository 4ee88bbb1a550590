"""설정 로딩 테스트."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from ghrest.config import DEFAULT_BASE_URL, AppConfig, ClientConfig, load_config


class TestLoadConfig:
    """config.yaml 로딩 테스트."""

    def test_load_valid_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.github.base_url == "https://api.github.com/"
        assert config.github.user_agent == "ghrest-test/1.0"
        assert config.github.request_timeout_sec == 5
        assert config.logging.level == "DEBUG"
        assert config.logging.json_format is False

    def test_load_config_with_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump({"logging": {"level": "warning"}}), encoding="utf-8")

        config = load_config(config_path)
        assert config.github.base_url == DEFAULT_BASE_URL
        assert config.github.api_version == "2022-11-28"
        assert config.logging.level == "WARNING"

    def test_load_empty_config_raises(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("", encoding="utf-8")

        with pytest.raises(ValueError, match="Empty config file"):
            load_config(config_path)

    def test_load_invalid_yaml_raises(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("{{invalid: yaml: content", encoding="utf-8")

        with pytest.raises(yaml.YAMLError):
            load_config(config_path)

    def test_env_override_api_url(self, tmp_config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")
        config = load_config(tmp_config_file)
        assert config.github.base_url == "https://ghe.example.com/api/v3/"

    def test_env_override_upload_url(self, tmp_config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_UPLOAD_URL", "https://ghe.example.com/api/uploads/")
        config = load_config(tmp_config_file)
        assert config.github.upload_url == "https://ghe.example.com/api/uploads/"

    def test_dotenv_file_loaded(self, tmp_config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_config_file.parent / ".env").write_text("GITHUB_API_URL=https://dotenv.example.com/\n", encoding="utf-8")
        config = load_config(tmp_config_file)
        assert config.github.base_url == "https://dotenv.example.com/"

    def test_system_env_beats_dotenv(self, tmp_config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_config_file.parent / ".env").write_text("GITHUB_API_URL=https://dotenv.example.com/\n", encoding="utf-8")
        monkeypatch.setenv("GITHUB_API_URL", "https://system.example.com/")
        config = load_config(tmp_config_file)
        assert config.github.base_url == "https://system.example.com/"

    def test_packaged_config_loads(self) -> None:
        config = load_config()
        assert isinstance(config, AppConfig)

    def test_missing_default_config_uses_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """설치 환경처럼 기본 config.yaml이 없으면 기본값과 환경변수로 동작한다."""
        monkeypatch.setattr("ghrest.config._DEFAULT_CONFIG_PATH", tmp_path / "missing" / "config.yaml")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")
        config = load_config()
        assert config.github.base_url == "https://ghe.example.com/api/v3/"
        assert config.github.upload_url == AppConfig().github.upload_url
        assert config.logging == AppConfig().logging

    def test_missing_explicit_config_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")


class TestConfigModels:
    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ClientConfig(request_timeout_sec=0)

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError, match="unknown log level"):
            AppConfig.model_validate({"logging": {"level": "LOUD"}})

    @pytest.mark.parametrize(
        ("given", "base", "upload"),
        [
            ("https://ghe.example.com", "https://ghe.example.com/api/v3/", "https://ghe.example.com/api/uploads/"),
            ("https://ghe.example.com/", "https://ghe.example.com/api/v3/", "https://ghe.example.com/api/uploads/"),
            ("https://ghe.example.com/api/v3", "https://ghe.example.com/api/v3/", "https://ghe.example.com/api/uploads/"),
            ("https://ghe.example.com/api/", "https://ghe.example.com/api/v3/", "https://ghe.example.com/api/uploads/"),
        ],
    )
    def test_for_enterprise(self, given: str, base: str, upload: str) -> None:
        config = ClientConfig.for_enterprise(given)
        assert config.base_url == base
        assert config.upload_url == upload

    def test_for_enterprise_separate_upload_host(self) -> None:
        config = ClientConfig.for_enterprise("https://api.ghe.example.com", "https://uploads.ghe.example.com")
        assert config.upload_url == "https://uploads.ghe.example.com/api/uploads/"

"""
Tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from pricequarry.config import Config, load_config


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.fetch.timeout == 14.0
        assert config.fetch.max_redirects == 5
        assert config.fetch.accept == "text/html"
        assert "Chrome/120" in config.fetch.user_agent
        assert config.render.enabled
        assert config.render.navigation_timeout == 25.0
        assert config.render.price_wait_timeout == 6.0
        assert config.render.blocked_resource_types == ["image", "media", "font"]
        assert "--no-sandbox" not in config.render.launch_args

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PRICEQUARRY_FETCH__TIMEOUT", "3.5")
        monkeypatch.setenv("PRICEQUARRY_RENDER__ENABLED", "false")
        config = Config()
        assert config.fetch.timeout == 3.5
        assert config.render.enabled is False

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            Config.model_validate({"fetch": {"timeout": 0}})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "pricequarry.yaml"
        path.write_text(
            "fetch:\n  timeout: 8\nrender:\n  headless: false\n  price_wait_timeout: 2\n"
            "monitoring:\n  log_level: DEBUG\n",
            encoding="utf-8",
        )
        config = Config.from_yaml(path)
        assert config.fetch.timeout == 8.0
        assert config.render.headless is False
        assert config.render.price_wait_timeout == 2.0
        assert config.monitoring.log_level == "DEBUG"

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert Config.from_yaml(path).fetch.timeout == 14.0

    def test_from_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "missing.yaml")

    def test_log_file_parent_is_created(self, tmp_path):
        log_file = tmp_path / "logs" / "nested" / "scrape.log"
        config = Config.model_validate({"monitoring": {"log_file": str(log_file)}})
        assert config.monitoring.log_file == str(log_file)
        assert log_file.parent.is_dir()


class TestLoadConfig:
    def test_from_env_path(self, tmp_path, monkeypatch):
        path = tmp_path / "c.yaml"
        path.write_text("fetch:\n  max_redirects: 2\n", encoding="utf-8")
        monkeypatch.setenv("PRICEQUARRY_CONFIG", str(path))
        assert load_config().fetch.max_redirects == 2

    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        env_path = tmp_path / "env.yaml"
        env_path.write_text("fetch:\n  max_redirects: 2\n", encoding="utf-8")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("fetch:\n  max_redirects: 1\n", encoding="utf-8")
        monkeypatch.setenv("PRICEQUARRY_CONFIG", str(env_path))
        assert load_config(explicit).fetch.max_redirects == 1

    def test_without_file(self, monkeypatch):
        monkeypatch.delenv("PRICEQUARRY_CONFIG", raising=False)
        assert load_config().fetch.max_redirects == 5

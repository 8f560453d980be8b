"""Tests for configuration loading and validation"""

import json

from prompthub.config import Config, ConfigValidator, default_config_path, load_config


class TestConfigValidator:
    def test_valid(self):
        assert ConfigValidator.validate_config({"git": {"depth": 3}}) == (True, [])

    def test_invalid_fields(self):
        is_valid, errors = ConfigValidator.validate_config(
            {"git": {"depth": 0}, "logging": {"level": "LOUD"}}
        )
        assert not is_valid
        assert any(e.startswith("git.depth:") for e in errors)
        assert any(e.startswith("logging.level:") for e in errors)

    def test_http_warnings(self):
        warnings = ConfigValidator.validate_http_config({"timeout": 600})
        assert len(warnings) == 2
        assert ConfigValidator.validate_http_config({"remote_max_bytes": 1024}) == []


class TestLoadConfig:
    def test_defaults(self, home):
        config = load_config()

        assert default_config_path() == home / ".config" / "prompthub" / "config.json"
        assert config.storage.data_dir == home / ".local" / "share" / "prompthub"
        assert config.storage.db_path.name == "prompthub.db"
        assert config.git.depth == 1
        assert config.http.remote_max_bytes is None

    def test_from_file(self, home, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "storage": {"data_dir": str(tmp_path / "data")},
            "http": {"timeout": 5, "remote_max_bytes": 2048},
            "logging": {"level": "DEBUG"},
        }))

        config = load_config(path)

        assert config.storage.skills_dir == tmp_path / "data" / "skills"
        assert config.http.timeout == 5
        assert config.http.remote_max_bytes == 2048
        assert config.logging.level == "DEBUG"

    def test_env_overrides(self, home, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"storage": {"data_dir": "/ignored"}, "git": {"depth": 2}}))
        monkeypatch.setenv("PROMPTHUB_CONFIG", str(path))
        monkeypatch.setenv("PROMPTHUB_DATA_DIR", str(tmp_path / "env-data"))

        config = load_config()

        assert config.git.depth == 2
        assert config.storage.data_dir == tmp_path / "env-data"

    def test_invalid_file_falls_back_to_defaults(self, home, tmp_path, monkeypatch, caplog):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"git": {"depth": 0}}))
        monkeypatch.setenv("PROMPTHUB_DATA_DIR", str(tmp_path / "env-data"))

        config = load_config(path)

        assert config.git.depth == Config().git.depth
        assert config.storage.data_dir == tmp_path / "env-data"
        assert "git.depth" in caplog.text

    def test_unparsable_file_ignored(self, home, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{nope")
        assert load_config(path).git.executable == "git"

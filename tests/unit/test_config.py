# PATH: tests/unit/test_config.py
"""
Unit tests for configuration loading.
"""

from pathlib import Path

import pytest

from config import (
    CONFIG_DIR,
    DEFAULT_ENGINE_CONFIG,
    EngineConfig,
    load_engine_config,
    load_yaml,
)
from core.constants import ErrorCode
from core.exceptions import ConfigError

ENV_VARS = [
    "ROUTESIM_CONFIG",
    "ROUTESIM_CAP_FIRST_HOP",
    "ROUTESIM_LOG_LEVEL",
    "ROUTESIM_JSON_LOGS",
    "ROUTESIM_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadYaml:

    def test_config_dir_exists(self):
        assert CONFIG_DIR.exists()
        assert DEFAULT_ENGINE_CONFIG.exists()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_yaml(tmp_path / "nope.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_NOT_FOUND

    def test_empty_file_is_empty_mapping(self, tmp_path):
        assert load_yaml(_write(tmp_path / "empty.yaml", "")) == {}

    def test_non_mapping(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_yaml(_write(tmp_path / "list.yaml", "- 1\n- 2\n"))
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError):
            load_yaml(_write(tmp_path / "bad.yaml", "engine: [unclosed\n"))


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()

        assert config.cap_first_hop is True
        assert config.log_level == "INFO"
        assert config.json_logs is True
        assert config.log_file is None

    def test_level_normalized(self):
        assert EngineConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_level(self):
        with pytest.raises(ConfigError):
            EngineConfig(log_level="CHATTY")

    @pytest.mark.parametrize("raw, expected", [("false", False), ("0", False), ("Yes", True), (True, True)])
    def test_bool_parsing(self, raw, expected):
        assert EngineConfig(cap_first_hop=raw).cap_first_hop is expected

    def test_bad_bool(self):
        with pytest.raises(ConfigError):
            EngineConfig(json_logs="maybe")

    def test_to_dict(self):
        assert EngineConfig().to_dict() == {
            "cap_first_hop": True,
            "log_level": "INFO",
            "json_logs": True,
            "log_file": None,
        }


class TestLoadEngineConfig:

    def test_default_file(self):
        config = load_engine_config(use_env=False)

        assert config == EngineConfig()

    def test_explicit_file(self, tmp_path):
        path = _write(
            tmp_path / "engine.yaml",
            "engine:\n  cap_first_hop: false\nlogging:\n  level: warning\n  json: false\n",
        )

        config = load_engine_config(path, use_env=False)

        assert config.cap_first_hop is False
        assert config.log_level == "WARNING"
        assert config.json_logs is False

    def test_missing_sections_use_defaults(self, tmp_path):
        config = load_engine_config(_write(tmp_path / "engine.yaml", ""), use_env=False)

        assert config == EngineConfig()

    def test_env_path(self, tmp_path, monkeypatch):
        path = _write(tmp_path / "alt.yaml", "engine:\n  cap_first_hop: false\n")
        monkeypatch.setenv("ROUTESIM_CONFIG", str(path))

        assert load_engine_config().cap_first_hop is False

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = _write(tmp_path / "engine.yaml", "logging:\n  level: INFO\n")
        monkeypatch.setenv("ROUTESIM_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("ROUTESIM_CAP_FIRST_HOP", "false")
        monkeypatch.setenv("ROUTESIM_LOG_FILE", str(tmp_path / "routesim.log"))

        config = load_engine_config(path)

        assert config.log_level == "ERROR"
        assert config.cap_first_hop is False
        assert config.log_file == str(tmp_path / "routesim.log")

    def test_env_ignored_when_disabled(self, monkeypatch):
        monkeypatch.setenv("ROUTESIM_LOG_LEVEL", "ERROR")

        assert load_engine_config(use_env=False).log_level == "INFO"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_engine_config(tmp_path / "missing.yaml", use_env=False)
        assert exc_info.value.code == ErrorCode.CONFIG_NOT_FOUND

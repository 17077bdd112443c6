# PATH: config/__init__.py
"""
Configuration loading utilities for ROUTESIM.

Defaults live in config/engine.yaml. Environment variables (optionally
from a .env file) override file values:

    ROUTESIM_CONFIG          path to an alternative engine.yaml
    ROUTESIM_LOG_LEVEL       DEBUG | INFO | WARNING | ERROR
    ROUTESIM_JSON_LOGS       true | false
    ROUTESIM_LOG_FILE        path for an extra JSON log file
    ROUTESIM_CAP_FIRST_HOP   true | false
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from core.constants import ErrorCode
from core.exceptions import ConfigError


CONFIG_DIR = Path(__file__).parent
DEFAULT_ENGINE_CONFIG = CONFIG_DIR / "engine.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_yaml(filepath: Path) -> Dict[str, Any]:
    """
    Load a YAML mapping.

    Args:
        filepath: Path to the YAML file

    Returns:
        Parsed YAML as dict (empty file gives {})

    Raises:
        ConfigError: file missing or top level is not a mapping
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise ConfigError(f"Config file not found: {filepath}", ErrorCode.CONFIG_NOT_FOUND)

    with open(filepath, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {filepath}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {filepath}")
    return data


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


@dataclass
class EngineConfig:
    """Engine and logging settings."""

    # Cap the first hop of simulate_chained at the start asset's holding
    cap_first_hop: bool = True

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")
        self.cap_first_hop = _parse_bool("cap_first_hop", self.cap_first_hop)
        self.json_logs = _parse_bool("json_logs", self.json_logs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cap_first_hop": self.cap_first_hop,
            "log_level": self.log_level,
            "json_logs": self.json_logs,
            "log_file": self.log_file,
        }


def load_engine_config(config_path: Optional[Path] = None, use_env: bool = True) -> EngineConfig:
    """
    Load engine configuration.

    Resolution order: explicit config_path, then $ROUTESIM_CONFIG, then
    config/engine.yaml. Environment overrides are applied last.

    Args:
        config_path: Optional explicit path to a YAML file
        use_env: Read .env / environment overrides

    Returns:
        EngineConfig
    """
    if use_env:
        load_dotenv()

    if config_path is None:
        env_path = os.getenv("ROUTESIM_CONFIG") if use_env else None
        config_path = Path(env_path) if env_path else DEFAULT_ENGINE_CONFIG

    data = load_yaml(config_path)
    engine = data.get("engine", {}) or {}
    logging_section = data.get("logging", {}) or {}

    values: Dict[str, Any] = {
        "cap_first_hop": engine.get("cap_first_hop", True),
        "log_level": logging_section.get("level", "INFO"),
        "json_logs": logging_section.get("json", True),
        "log_file": logging_section.get("file"),
    }

    if use_env:
        env_overrides = {
            "cap_first_hop": os.getenv("ROUTESIM_CAP_FIRST_HOP"),
            "log_level": os.getenv("ROUTESIM_LOG_LEVEL"),
            "json_logs": os.getenv("ROUTESIM_JSON_LOGS"),
            "log_file": os.getenv("ROUTESIM_LOG_FILE"),
        }
        values.update({k: v for k, v in env_overrides.items() if v is not None})

    return EngineConfig(**values)

"""Runtime configuration loading helpers for schema action testing."""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

_ENV_PREFIX = "SCHEMA_TESTING_"
_SECTION = "schema_testing"
_BOOL_TRUE = {"1", "true", "yes", "on"}
_BOOL_FALSE = {"0", "false", "no", "off"}


@dataclass(slots=True)
class TestingConfig:
    """Settings shared by the harness and the fluent assertions."""

    __test__ = False

    config_source: Optional[Path] = None
    default_form_name: str = "form"
    log_level: str = "WARNING"
    attach_allure: bool = True


def load_testing_config(
    env: Mapping[str, str] | None = None,
    config_path: Optional[Path] = None,
) -> TestingConfig:
    """Load configuration from an optional INI file, then environment overrides."""

    source_env = os.environ if env is None else env
    config_file = _determine_config_path(source_env, config_path)
    config = TestingConfig(config_source=config_file)

    if config_file is not None and config_file.is_file():
        parser = configparser.ConfigParser()
        parser.read(config_file, encoding="utf-8")
        if parser.has_section(_SECTION):
            section = parser[_SECTION]
            config.default_form_name = section.get("default_form_name", config.default_form_name)
            config.log_level = section.get("log_level", config.log_level).upper()
            config.attach_allure = _get_bool(section, "attach_allure", config.attach_allure)

    _apply_env_overrides(config, source_env)
    return config


def _determine_config_path(env: Mapping[str, str], explicit: Optional[Path]) -> Optional[Path]:
    if explicit is not None:
        return explicit
    env_override = env.get(f"{_ENV_PREFIX}CONFIG_FILE")
    if env_override:
        return Path(env_override).expanduser()
    candidates = (
        Path(env[f"{_ENV_PREFIX}ROOT"]) / "schema_testing.ini" if env.get(f"{_ENV_PREFIX}ROOT") else None,
        Path.cwd() / "schema_testing.ini",
    )
    for candidate in candidates:
        if candidate and candidate.is_file():
            return candidate
    return None


def _apply_env_overrides(config: TestingConfig, env: Mapping[str, str]) -> None:
    config.default_form_name = env.get(f"{_ENV_PREFIX}DEFAULT_FORM_NAME", config.default_form_name)
    config.log_level = env.get(f"{_ENV_PREFIX}LOG_LEVEL", config.log_level).upper()
    config.attach_allure = _get_bool(env, f"{_ENV_PREFIX}ATTACH_ALLURE", config.attach_allure)


def _get_bool(source: Mapping[str, str], key: str, default: bool) -> bool:
    raw = source.get(key)
    if raw is None:
        return default
    value = str(raw).strip().lower()
    if value in _BOOL_TRUE:
        return True
    if value in _BOOL_FALSE:
        return False
    return default


_GLOBAL_CONFIG: Optional[TestingConfig] = None


def get_testing_config() -> TestingConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _GLOBAL_CONFIG
    if _GLOBAL_CONFIG is None:
        _GLOBAL_CONFIG = load_testing_config()
    return _GLOBAL_CONFIG


def reset_testing_config() -> None:
    """Drop the cached configuration so the next lookup reloads it."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = None

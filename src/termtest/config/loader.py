#
# config/loader.py
#
"""
Loads termtest configuration from a TOML file and environment variables.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

import attrs
import cattrs
import structlog

from termtest.config.models import TermtestConfig
from termtest.exceptions import ConfigurationError

log = structlog.get_logger("config.loader")

DEFAULT_CONFIG_FILENAME = "termtest.toml"
ENV_URL = "TERMTEST_URL"
ENV_MODEL = "TERMTEST_MODEL"

_WORKER_KNOWN_KEYS = frozenset({"url", "prompt"})

_converter = cattrs.Converter(forbid_extra_keys=True)


def _normalize_raw(raw: dict[str, Any]) -> dict[str, Any]:
    """Maps TOML table names onto model field names."""
    data = dict(raw)
    for attribute in attrs.fields(TermtestConfig):
        toml_name = attribute.metadata.get("toml_name")
        if toml_name and toml_name in data:
            data[attribute.name] = data.pop(toml_name)

    worker = data.get("worker")
    if isinstance(worker, dict):
        extra = {key: value for key, value in worker.items() if key not in _WORKER_KNOWN_KEYS}
        known = {key: value for key, value in worker.items() if key in _WORKER_KNOWN_KEYS}
        data["worker"] = {**known, "extra": extra}
    return data


def _apply_env_overrides(config: TermtestConfig) -> TermtestConfig:
    env_url = os.environ.get(ENV_URL)
    if env_url:
        log.debug("Worker url overridden from environment", env_var=ENV_URL)
        config = attrs.evolve(config, worker=attrs.evolve(config.worker, url=env_url))

    env_model = os.environ.get(ENV_MODEL)
    if env_model:
        log.debug("Model overridden from environment", env_var=ENV_MODEL)
        config = attrs.evolve(config, dashboard=attrs.evolve(config.dashboard, model=env_model))
    return config


def load_config(config_path: Path | None = None) -> TermtestConfig:
    """
    Loads, validates and returns the configuration.

    A missing file is not an error: defaults are used, and environment
    overrides still apply. A file that exists but cannot be parsed or does
    not match the models raises ConfigurationError.
    """
    path = config_path or Path(DEFAULT_CONFIG_FILENAME)
    load_log = log.bind(config_path=str(path))

    if not path.is_file():
        load_log.debug("Config file not found, using defaults")
        return _apply_env_overrides(TermtestConfig())

    try:
        with path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        load_log.error("Config file is not valid TOML", error=str(e))
        raise ConfigurationError(f"Invalid TOML: {e}", path) from e
    except OSError as e:
        load_log.error("Config file could not be read", error=str(e))
        raise ConfigurationError(f"Cannot read config file: {e}", path) from e

    try:
        config = _converter.structure(_normalize_raw(raw), TermtestConfig)
    except (cattrs.BaseValidationError, cattrs.ForbiddenExtraKeysError, ValueError, TypeError) as e:
        load_log.error("Config validation failed", error=str(e))
        raise ConfigurationError(f"Invalid configuration: {e}", path) from e

    load_log.info("Configuration loaded", emoji_key="load")
    return _apply_env_overrides(config)


# 🔼⚙️

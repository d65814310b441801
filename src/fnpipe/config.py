"""
Configuration Loader

Loads fnpipe configuration from fnpipe.json in the project root.
Environment variables always take precedence over config file values.

Config file location (in order of precedence):
1. FNPIPE_PROJECT_ROOT/fnpipe.json (if FNPIPE_PROJECT_ROOT is set)
2. CWD/fnpipe.json

Supported settings in fnpipe.json:
{
    "log_level": "DEBUG",            // -> FNPIPE_LOG_LEVEL
    "trace_enabled": true,           // -> FNPIPE_TRACE_ENABLED
    "trace_max_length": 10,          // -> FNPIPE_TRACE_MAX_LENGTH (container items)
    "trace_max_string": 80           // -> FNPIPE_TRACE_MAX_STRING (characters)
}

Only the trace operator and the logging setup read this configuration;
the combinators themselves behave identically whatever it contains.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "fnpipe.json"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


@dataclass(frozen=True)
class FnPipeConfig:
    """Resolved configuration values.

    ::: This is-in-layer Infrastructure-Layer.
    ::: This is a value-object.
    ::: This is stateless.
    """
    log_level: str = "DEBUG"
    trace_enabled: bool = True
    trace_max_length: int = 10
    trace_max_string: int = 80


class ConfigLoader:
    """
    Loads configuration from fnpipe.json and FNPIPE_* environment variables.

    ::: This is-in-layer Infrastructure-Layer.
    ::: This is a loader.
    ::: This is stateless.

    Priority: Environment variables > fnpipe.json > defaults
    """

    # Mapping from fnpipe.json keys to environment variable names
    CONFIG_KEY_TO_ENV = {
        "log_level": "FNPIPE_LOG_LEVEL",
        "trace_enabled": "FNPIPE_TRACE_ENABLED",
        "trace_max_length": "FNPIPE_TRACE_MAX_LENGTH",
        "trace_max_string": "FNPIPE_TRACE_MAX_STRING",
    }

    DEFAULTS: Dict[str, Any] = {
        "log_level": FnPipeConfig.log_level,
        "trace_enabled": FnPipeConfig.trace_enabled,
        "trace_max_length": FnPipeConfig.trace_max_length,
        "trace_max_string": FnPipeConfig.trace_max_string,
    }

    def __init__(self, project_root: Optional[Path] = None):
        self._project_root = project_root
        self._file_config: Dict[str, Any] = {}
        self._config_path: Optional[Path] = None

    def _resolve_root(self) -> Path:
        if self._project_root is not None:
            return Path(self._project_root)
        env_root = os.getenv("FNPIPE_PROJECT_ROOT")
        if env_root:
            return Path(env_root)
        return Path.cwd()

    def _read_file(self) -> None:
        config_path = self._resolve_root() / CONFIG_FILENAME
        if not config_path.exists():
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a JSON object")
        unknown = set(data) - set(self.CONFIG_KEY_TO_ENV)
        if unknown:
            logger.warning("Ignoring unknown keys in %s: %s", config_path, sorted(unknown))
        self._file_config = {k: v for k, v in data.items() if k in self.CONFIG_KEY_TO_ENV}
        self._config_path = config_path
        logger.debug("Loaded config from %s", config_path)

    @staticmethod
    def _coerce(key: str, raw: Any, default: Any, source: str) -> Any:
        """Convert a raw file/env value to the type of its default."""
        if isinstance(default, bool):
            if isinstance(raw, bool):
                return raw
            text = str(raw).strip().lower()
            if text in _TRUE_VALUES:
                return True
            if text in _FALSE_VALUES:
                return False
            raise ConfigError(f"{source}: {key} expects a boolean, got {raw!r}")
        if isinstance(default, int):
            if isinstance(raw, bool):
                raise ConfigError(f"{source}: {key} expects an integer, got {raw!r}")
            try:
                value = int(raw)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"{source}: {key} expects an integer, got {raw!r}") from e
            if value <= 0:
                raise ConfigError(f"{source}: {key} must be positive, got {value}")
            return value
        text = str(raw).strip().upper()
        if key == "log_level" and not isinstance(logging.getLevelName(text), int):
            raise ConfigError(f"{source}: unknown log level {raw!r}")
        return text

    def load(self) -> FnPipeConfig:
        """
        Resolve configuration from the environment, fnpipe.json and defaults.

        Returns:
            Frozen FnPipeConfig

        Raises:
            ConfigError: If the file or an environment value is malformed
        """
        self._read_file()
        values: Dict[str, Any] = {}
        for key, default in self.DEFAULTS.items():
            env_var = self.CONFIG_KEY_TO_ENV[key]
            env_value = os.getenv(env_var)
            if env_value is not None and env_value != "":
                values[key] = self._coerce(key, env_value, default, env_var)
            elif key in self._file_config:
                values[key] = self._coerce(key, self._file_config[key], default, CONFIG_FILENAME)
            else:
                values[key] = default
        return FnPipeConfig(**values)

    @property
    def config_path(self) -> Optional[Path]:
        """Path to the loaded config file, or None if none was found."""
        return self._config_path


# Cached resolved configuration
_config: Optional[FnPipeConfig] = None


def get_config() -> FnPipeConfig:
    """Get the cached configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = ConfigLoader().load()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None

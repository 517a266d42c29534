"""Config schema and accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from xmpp_activity.core.errors import ActivityConfigurationError

_ENV_OVERRIDE_KEYS = ("ACTIVITY_STRICT_RATING",)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


def _parse_bool_env(val: str) -> bool | None:
    """Parse env string to bool; None if not a recognized bool."""
    v = val.lower()
    if v in ("1", "true", "yes"):
        return True
    if v in ("0", "false", "no"):
        return False
    return None


class Config:
    """Config accessor with attribute-style access for nested keys."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(self, data: dict[str, Any], *, validate: bool = True) -> None:
        """Replace config data."""
        if data is not None and not isinstance(data, dict):
            raise ActivityConfigurationError(
                "config must be a mapping",
                code="invalid_config",
                details={"type": type(data).__name__},
            )
        self._data = data or {}
        self._env = _load_env_overrides()
        if validate:
            self._validate()
        logger.debug("Config reloaded: strict_rating={}", self.strict_rating)

    def _validate(self) -> None:
        """Validate config structure; raise ActivityConfigurationError on failure."""
        strict = self._data.get("strict_rating")
        if strict is not None and not isinstance(strict, bool):
            raise ActivityConfigurationError(
                "strict_rating must be a boolean",
                code="invalid_strict_rating",
                details={"type": type(strict).__name__},
            )
        level = self._data.get("log_level")
        if level is not None and str(level).upper() not in _LOG_LEVELS:
            raise ActivityConfigurationError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}",
                code="invalid_log_level",
                details={"value": level},
            )

    @property
    def raw(self) -> dict[str, Any]:
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated path."""
        parts = key.split(".")
        obj: Any = self._data
        for part in parts:
            if isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    @property
    def strict_rating(self) -> bool:
        parsed = _parse_bool_env(self._env.get("ACTIVITY_STRICT_RATING", ""))
        if parsed is not None:
            return parsed
        return bool(self._data.get("strict_rating", False))

    @property
    def log_level(self) -> str:
        return str(self._data.get("log_level", "INFO")).upper()


cfg = Config()

"""Config loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

DEFAULTS: dict[str, Any] = {
    "strict_rating": False,
    "log_level": "INFO",
}


def _deep_update(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Copy of base with override laid over it; nested mappings merge per key."""
    merged = {**base}
    for key, value in override.items():
        current = merged.get(key)
        merged[key] = _deep_update(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return merged


def load_config(path: str | Path) -> dict[str, Any]:
    """Load config from YAML file over DEFAULTS. Use SafeLoader. Returns raw dict."""
    path = Path(path)
    if not path.exists():
        logger.warning("Config file not found: {}", path)
        return dict(DEFAULTS)

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        logger.error("Failed to parse config {}: {}", path, exc)
        raise
    if data is None:
        return dict(DEFAULTS)
    if not isinstance(data, dict):
        logger.warning("Config file {} has invalid structure (expected dict)", path)
        return dict(DEFAULTS)
    return _deep_update(DEFAULTS, data)


def load_config_with_env(path: str | Path) -> dict[str, Any]:
    """Load config from YAML after loading .env (from the working directory) into the environment."""
    from dotenv import find_dotenv, load_dotenv

    load_dotenv(find_dotenv(usecwd=True))
    return load_config(path)

"""
Configuration loader: reads architect.yml into ``Settings``.

The file is optional. Lookup walks up from the working directory so
commands run from a subdirectory still find the project root.
Environment variables override file values.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from architect.core.errors import ConfigError
from architect.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "architect.yml"

_ENV_OVERRIDES = {
    "ARCHITECT_DRAFT_PATH": "draft_path",
    "ARCHITECT_STATE_PATH": "state_path",
    "ARCHITECT_STACK": "stack",
}


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for architect.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to architect.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, base_path: Path | None = None) -> Settings:
    """Load settings from architect.yml, falling back to defaults.

    Args:
        path: Explicit path to architect.yml. If None, searches upward.
        base_path: Project root. Defaults to the config file's directory,
            or the working directory when no config file exists.

    Returns:
        Validated Settings model.

    Raises:
        ConfigError: If an explicit path is missing, or the file is invalid.
    """
    if path is not None and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    if path is None:
        path = find_config_file(base_path)

    data: dict[str, Any] = {}
    if path is not None:
        data = _read_yaml(path)
        logger.debug("Loading settings from %s", path)

    if base_path is None:
        base_path = path.parent.resolve() if path is not None else Path.cwd()
    data.setdefault("base_path", str(base_path))

    _apply_env_overrides(data)

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path or 'environment'}: {e}") from e

    logger.debug("Settings resolved (base_path=%s, stack=%s)", settings.base_path, settings.stack)
    return settings


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Cannot decode {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under an "architect" key or be flat
    settings = data["architect"] if "architect" in data else data
    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ConfigError(f"Expected a mapping under 'architect' in {path}, got {type(settings).__name__}")
    return dict(settings)


def _apply_env_overrides(data: dict[str, Any]) -> None:
    for env_name, key in _ENV_OVERRIDES.items():
        if os.environ.get(env_name):
            data[key] = os.environ[env_name]

    ai_enabled = os.environ.get("ARCHITECT_AI_ENABLED")
    if ai_enabled:
        ai = dict(data.get("ai") or {})
        ai["enabled"] = ai_enabled.strip().lower() in ("1", "true", "yes", "on")
        data["ai"] = ai

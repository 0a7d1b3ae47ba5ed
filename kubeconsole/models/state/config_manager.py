"""Settings persistence: YAML files plus environment overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kubeconsole.constants.values import CONFIG_ENV_PREFIX, CONFIG_FILE_NAME, CONFIG_SEARCH_DIRS
from kubeconsole.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]

_SECTIONS = ("cluster", "refresh", "cache", "ui", "kubelet", "logging")
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class ConfigManager:
    """Loads and saves :class:`AppSettings`."""

    @staticmethod
    def search_paths() -> list[Path]:
        return [Path(directory).expanduser() / CONFIG_FILE_NAME for directory in CONFIG_SEARCH_DIRS]

    @classmethod
    def find_config(cls) -> Path | None:
        for candidate in cls.search_paths():
            if candidate.is_file():
                return candidate
        return None

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> AppSettings:
        """Load settings from ``path`` (or the first file on the search path).

        A missing file yields defaults. Environment variables named
        ``KUBECONSOLE_<SECTION>_<KEY>`` override file values.

        Raises:
            ConfigLoadError: If the file cannot be read or does not validate.
        """
        config_path = Path(path).expanduser() if path else cls.find_config()
        data: dict[str, Any] = {}
        if config_path is not None:
            if path and not config_path.is_file():
                raise ConfigLoadError(f"Config file not found: {config_path}")
            data = cls._read_yaml(config_path)

        cls._apply_env(data, os.environ if environ is None else environ)
        try:
            settings = AppSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigLoadError(f"Invalid configuration: {e}") from e
        logger.debug("Loaded settings from %s", config_path or "defaults")
        return settings

    @staticmethod
    def _read_yaml(config_path: Path) -> dict[str, Any]:
        try:
            with config_path.open(encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"Failed to read {config_path}: {e}") from e
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigLoadError(f"{config_path} must contain a mapping")
        return loaded

    @staticmethod
    def _apply_env(data: dict[str, Any], environ: Mapping[str, str]) -> None:
        prefix = f"{CONFIG_ENV_PREFIX}_"
        for name, raw in environ.items():
            if not name.startswith(prefix):
                continue
            remainder = name[len(prefix) :].lower()
            section = next((s for s in _SECTIONS if remainder.startswith(f"{s}_")), None)
            if section is None:
                continue
            key = remainder[len(section) + 1 :]
            target = data.setdefault(section, {})
            if not isinstance(target, dict):
                continue
            field_info = AppSettings.model_fields[section].annotation.model_fields.get(key)
            if field_info is None:
                logger.debug("Ignoring unknown setting %s", name)
                continue
            if field_info.annotation is bool:
                target[key] = raw.strip().lower() in _TRUE_VALUES
            else:
                target[key] = raw

    @classmethod
    def save(cls, settings: AppSettings, path: str | Path | None = None) -> Path:
        """Write ``settings`` as YAML and return the file written.

        Raises:
            ConfigSaveError: If the file cannot be written.
        """
        config_path = Path(path).expanduser() if path else cls.search_paths()[1]
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with config_path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(settings.model_dump(mode="json"), f, sort_keys=False)
        except OSError as e:
            raise ConfigSaveError(f"Failed to save {config_path}: {e}") from e
        logger.info("Saved settings to %s", config_path)
        return config_path

    @classmethod
    def reset(cls, path: str | Path | None = None) -> AppSettings:
        """Overwrite the config file with defaults."""
        settings = AppSettings()
        cls.save(settings, path)
        return settings

"""Application settings models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from kubeconsole.constants.defaults import (
    CACHE_MAX_ENTRIES_DEFAULT,
    CACHE_TTL_DEFAULT,
    COLOR_MODE_DEFAULT,
    DEFAULT_VIEW_DEFAULT,
    EXPORT_PATH_DEFAULT,
    LOCALE_DEFAULT,
    LOG_FILE_DEFAULT,
    LOG_LEVEL_DEFAULT,
    LOG_TAIL_LINES_DEFAULT,
    MAX_CONCURRENT_DEFAULT,
    MAX_ROWS_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
    REFRESH_TIMEOUT_DEFAULT,
)
from kubeconsole.constants.enums import ColorMode, ViewType


class _SettingsSection(BaseModel):
    """Section whose zero, negative or blank values fall back to defaults."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    @field_validator("*", mode="after")
    @classmethod
    def _fallback_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, bool) or info.field_name is None:
            return value
        if isinstance(value, (int, float)) and value <= 0:
            return cls.model_fields[info.field_name].default
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value


class ClusterSettings(_SettingsSection):
    """Cluster connection; empty values mean the kubeconfig defaults."""

    kubeconfig: str = ""
    context: str = ""
    namespace: str = ""


class RefreshSettings(_SettingsSection):
    interval: float = REFRESH_INTERVAL_DEFAULT  # seconds
    timeout: float = REFRESH_TIMEOUT_DEFAULT  # seconds
    max_concurrent: int = MAX_CONCURRENT_DEFAULT


class CacheSettings(_SettingsSection):
    ttl: int = CACHE_TTL_DEFAULT  # seconds
    max_entries: int = CACHE_MAX_ENTRIES_DEFAULT


class UISettings(_SettingsSection):
    color_mode: str = COLOR_MODE_DEFAULT
    default_view: str = DEFAULT_VIEW_DEFAULT
    max_rows: int = MAX_ROWS_DEFAULT
    no_color: bool = False
    locale: str = LOCALE_DEFAULT
    log_tail_lines: int = LOG_TAIL_LINES_DEFAULT
    export_path: str = EXPORT_PATH_DEFAULT

    @field_validator("color_mode")
    @classmethod
    def _known_color_mode(cls, value: str) -> str:
        modes = {mode.value for mode in ColorMode}
        return value if value in modes else COLOR_MODE_DEFAULT

    @field_validator("default_view")
    @classmethod
    def _known_view(cls, value: str) -> str:
        views = {view.value for view in ViewType if not view.is_detail}
        return value if value in views else DEFAULT_VIEW_DEFAULT


class KubeletSettings(_SettingsSection):
    insecure: bool = False


class LoggingSettings(_SettingsSection):
    level: str = LOG_LEVEL_DEFAULT
    file: str = LOG_FILE_DEFAULT


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    cluster: ClusterSettings = Field(default_factory=ClusterSettings)
    refresh: RefreshSettings = Field(default_factory=RefreshSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    ui: UISettings = Field(default_factory=UISettings)
    kubelet: KubeletSettings = Field(default_factory=KubeletSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Bundled file provider input; not persisted by the config file layer.
    snapshot_path: str = Field(default="", exclude=True)
    verbose: bool = Field(default=False, exclude=True)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""

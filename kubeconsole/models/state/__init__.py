"""Application and controller state models."""

from kubeconsole.models.state.app_settings import (
    AppSettings,
    CacheSettings,
    ClusterSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
    KubeletSettings,
    LoggingSettings,
    RefreshSettings,
    UISettings,
)
from kubeconsole.models.state.config_manager import ConfigManager

__all__ = [
    "AppSettings",
    "CacheSettings",
    "ClusterSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "KubeletSettings",
    "LoggingSettings",
    "RefreshSettings",
    "UISettings",
]

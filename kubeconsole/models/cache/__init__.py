"""Caching models."""

from kubeconsole.models.cache.data_cache import DataCache

__all__ = [
    "DataCache",
]

"""Base interfaces, capability descriptor and errors."""

from kubeconsole.controllers.base.base_controller import (
    AsyncControllerMixin,
    DataProvider,
    LogSource,
    ResourceInspector,
    WorkerResult,
)
from kubeconsole.controllers.base.capabilities import ProviderCapabilities
from kubeconsole.controllers.base.errors import (
    DataFetchError,
    KubeConsoleError,
    LogFetchError,
    SelectionBoundsError,
    UnsupportedOperationError,
)

__all__ = [
    "AsyncControllerMixin",
    "DataFetchError",
    "DataProvider",
    "KubeConsoleError",
    "LogFetchError",
    "LogSource",
    "ProviderCapabilities",
    "ResourceInspector",
    "SelectionBoundsError",
    "UnsupportedOperationError",
    "WorkerResult",
]

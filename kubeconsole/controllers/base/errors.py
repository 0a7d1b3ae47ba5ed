"""Exception taxonomy shared by providers and controllers."""


class KubeConsoleError(Exception):
    """Base exception for console errors."""


class DataFetchError(KubeConsoleError):
    """Raised when the data provider cannot produce a snapshot."""


class LogFetchError(KubeConsoleError):
    """Raised when container logs cannot be fetched."""


class UnsupportedOperationError(KubeConsoleError):
    """Raised when the configured provider lacks an optional capability."""


class SelectionBoundsError(KubeConsoleError):
    """Raised when selection state escapes its bounds.

    Clamping makes this unreachable; seeing it means a transition forgot to
    clamp.
    """

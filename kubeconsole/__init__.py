"""kubeconsole - terminal dashboard for Kubernetes and Volcano clusters."""

from kubeconsole.constants.values import APP_VERSION

__version__ = APP_VERSION

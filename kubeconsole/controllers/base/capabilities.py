"""Capability descriptor for optional provider features."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from kubeconsole.controllers.base.base_controller import (
    DataProvider,
    LogSource,
    ResourceInspector,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderCapabilities:
    """Optional collaborators resolved once when the console starts."""

    log_source: LogSource | None = None
    inspector: ResourceInspector | None = None

    @classmethod
    def probe(cls, provider: DataProvider | None) -> ProviderCapabilities:
        """Inspect ``provider`` once for the optional interfaces it implements."""
        log_source = provider if isinstance(provider, LogSource) else None
        inspector = provider if isinstance(provider, ResourceInspector) else None
        capabilities = cls(log_source=log_source, inspector=inspector)
        logger.debug(
            "Provider capabilities: logs=%s describe=%s",
            capabilities.supports_logs,
            capabilities.supports_inspect,
        )
        return capabilities

    @property
    def supports_logs(self) -> bool:
        return self.log_source is not None

    @property
    def supports_inspect(self) -> bool:
        return self.inspector is not None

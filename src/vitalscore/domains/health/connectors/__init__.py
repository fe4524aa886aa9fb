"""Health readings connectors: abstraction over the per-user readings document."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HealthReadingsProvider(Protocol):
    """Abstract interface for the latest health-readings snapshot.

    Tools evaluate whatever snapshot this returns without knowing whether it
    came from a remote document store, manual entry, or a mock.
    """

    async def get_readings(self) -> dict[str, Any]:
        """Metric key -> ``{value, unit, goal?}`` for the current user."""
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source, e.g. 'mock'."""
        ...

    def get_provenance(self) -> dict[str, str]:
        """Return provenance metadata suitable for merging into tool output."""
        ...

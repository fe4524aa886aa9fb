"""Concrete HealthReadingsProvider implementations."""

from __future__ import annotations

import copy
from typing import Any

from vitalscore.domains.health.connectors.mock_data import get_mock_readings


class MockHealthReadingsProvider:
    """Uses the mock snapshot. Always available."""

    async def get_readings(self) -> dict[str, Any]:
        return get_mock_readings()

    @property
    def data_source(self) -> str:
        return "mock"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": (
                "Using simulated health readings. "
                "Connect a health data store for real measurements."
            ),
        }


class StaticHealthReadingsProvider:
    """Serves a fixed snapshot supplied by the caller (tests, scripted runs)."""

    def __init__(self, readings: dict[str, Any], source: str = "static") -> None:
        self._readings = copy.deepcopy(readings)
        self._source = source

    async def get_readings(self) -> dict[str, Any]:
        return copy.deepcopy(self._readings)

    @property
    def data_source(self) -> str:
        return self._source

    def get_provenance(self) -> dict[str, str]:
        return {"data_source": self._source}

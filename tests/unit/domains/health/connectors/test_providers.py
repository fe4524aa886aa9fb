"""Tests for the HealthReadingsProvider implementations."""

from __future__ import annotations

import asyncio

from vitalscore.domains.health.connectors import HealthReadingsProvider
from vitalscore.domains.health.connectors.providers import (
    MockHealthReadingsProvider,
    StaticHealthReadingsProvider,
)
from vitalscore.domains.health.domain_logic.vital_evaluator import evaluate_vitals


def _run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


class TestMockHealthReadingsProvider:
    def test_satisfies_protocol(self):
        assert isinstance(MockHealthReadingsProvider(), HealthReadingsProvider)

    def test_snapshot_covers_all_vitals(self):
        readings = _run(MockHealthReadingsProvider().get_readings())
        assert set(readings) == {
            "heartRate", "steps", "sleep", "water",
            "temperature", "oxygenLevel", "bloodPressure", "weight",
        }

    def test_mock_snapshot_scores_fully(self):
        evaluation = evaluate_vitals(_run(MockHealthReadingsProvider().get_readings()))
        assert evaluation.wellness.scored_count == 8
        assert evaluation.score == 95

    def test_provenance(self):
        prov = MockHealthReadingsProvider().get_provenance()
        assert prov["data_source"] == "mock"
        assert "simulated" in prov["data_source_note"]


class TestStaticHealthReadingsProvider:
    def test_returns_copy(self, scenario_snapshot):
        provider = StaticHealthReadingsProvider(scenario_snapshot)
        first = _run(provider.get_readings())
        first["heartRate"]["value"] = 999
        assert _run(provider.get_readings())["heartRate"]["value"] == 72

    def test_source_label(self, static_provider):
        assert static_provider.data_source == "test"
        assert static_provider.get_provenance() == {"data_source": "test"}

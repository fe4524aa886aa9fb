"""Unit tests for the vital evaluation MCP tools."""

from __future__ import annotations

import asyncio

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from vitalscore.core.server.app import create_app
from vitalscore.domains.health.domain_logic.vital_evaluator import evaluate_vitals
from vitalscore.domains.health.domain_logic.vital_models import EvaluatorConfig


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _call(client: Client, tool: str, arguments: dict | None = None):
    async def _go():
        async with client:
            return await client.call_tool(tool, arguments or {})
    return _run(_go())


@pytest.fixture
def client(static_provider):
    """MCP client connected to a server serving the scenario snapshot."""
    return Client(create_app(readings_provider_override=static_provider))


class TestVitalStatusTool:
    def test_classifies_heart_rate(self, client):
        result = _call(client, "vital_status", {"metric": "heartRate", "value": 101})
        assert result.structured_content == {
            "metric": "heartRate",
            "status": "High",
            "tone": "alert",
        }

    def test_accepts_alias_and_string_value(self, client):
        result = _call(client, "vital_status", {"metric": "blood_pressure", "value": "85/55"})
        assert result.structured_content["metric"] == "bloodPressure"
        assert result.structured_content["status"] == "Low"

    def test_goal_is_applied(self, client):
        result = _call(client, "vital_status", {"metric": "steps", "value": 3000, "goal": 4000})
        assert result.structured_content["status"] == "Almost There"

    def test_missing_value_is_unknown(self, client):
        result = _call(client, "vital_status", {"metric": "temperature"})
        assert result.structured_content["status"] == "Unknown"

    def test_blank_metric_is_rejected(self, client):
        with pytest.raises(ToolError):
            _call(client, "vital_status", {"metric": "  ", "value": 70})


class TestWellnessScoreTool:
    def test_uses_provider_snapshot_by_default(self, client, scenario_snapshot):
        payload = _call(client, "wellness_score").structured_content
        assert payload["score"] == evaluate_vitals(scenario_snapshot).score
        assert payload["data_source"] == "test"
        assert payload["vitals"]["steps"]["status"] == "Almost There"

    def test_evaluates_supplied_readings(self, client):
        payload = _call(
            client,
            "wellness_score",
            {"readings": {"heartRate": {"value": 70}, "oxygenLevel": 101}},
        ).structured_content
        assert payload["score"] == 100
        assert payload["scored_count"] == 1
        assert payload["vitals"]["oxygenLevel"]["status"] == "Unknown"
        assert payload["data_source"] == "request"
        assert "OxygenLevel: out of range" in payload["explanation"]

    def test_empty_readings_score_zero(self, client):
        payload = _call(client, "wellness_score", {"readings": {}}).structured_content
        assert payload["score"] == 0
        assert payload["vitals"] == {}

    def test_config_override_changes_default_goal(self, static_provider):
        mcp = create_app(
            readings_provider_override=static_provider,
            config_override=EvaluatorConfig(default_water_goal=1.0),
        )
        payload = _call(
            Client(mcp), "wellness_score", {"readings": {"water": 1.0}}
        ).structured_content
        assert payload["vitals"]["water"]["status"] == "Hydrated"
        assert payload["score"] == 100


class TestVitalsContextTool:
    def test_renders_provider_snapshot(self, client):
        result = _call(client, "vitals_context")
        text = result.content[0].text
        assert text.startswith("Recent Vital Signs:")
        assert "Water: 1.8 L (Halfway) - Goal: 2.5 L" in text

    def test_renders_supplied_readings(self, client):
        result = _call(client, "vitals_context", {"readings": {}})
        assert result.content[0].text == "No health data available."

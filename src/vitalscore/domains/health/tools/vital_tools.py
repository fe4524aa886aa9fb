"""MCP tools for vital status labels and the wellness score."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

if TYPE_CHECKING:
    from vitalscore.domains.health.connectors import HealthReadingsProvider

from vitalscore.domains.health.domain_logic.vital_evaluator import (
    evaluate_vitals,
    status_for,
    status_tone,
)
from vitalscore.domains.health.domain_logic.vital_models import (
    EvaluatorConfig,
    MetricKind,
    VitalsEvaluation,
)
from vitalscore.domains.health.domain_logic.vitals_context import build_vitals_context

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _validate_metric(value: str | None) -> str:
    if value is None or not str(value).strip():
        raise ValueError("metric is required (e.g. heartRate, steps, sleep)")
    return str(value).strip()


def _validate_readings(value: Any) -> dict[str, Any] | None:
    """Accept None (use the provider) or an object keyed by metric."""
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ValueError("readings must be an object mapping metric names to readings")
    return dict(value)


def register_vital_tools(
    mcp: FastMCP,
    readings_provider: HealthReadingsProvider,
    config: EvaluatorConfig,
) -> None:
    """Register the vital evaluation tools on the MCP server.

    Every call evaluates afresh; nothing is cached between snapshots.
    """

    async def _evaluate(readings: Any) -> tuple[VitalsEvaluation, dict[str, str]]:
        snapshot = _validate_readings(readings)
        if snapshot is None:
            snapshot = await readings_provider.get_readings()
            provenance = readings_provider.get_provenance()
        else:
            provenance = {"data_source": "request"}
        return evaluate_vitals(snapshot, config), provenance

    @mcp.tool
    def vital_status(
        metric: str,
        value: float | str | None = None,
        goal: float | None = None,
    ) -> dict:
        """Classify a single vital reading.

        Args:
            metric: Metric name: heartRate, steps, sleep, water, temperature,
                oxygenLevel, bloodPressure or weight.
            value: The reading. Sleep is "7h 30m", blood pressure "120/80";
                everything else is a number. Temperature is read in degrees
                Celsius; Fahrenheit values are not converted.
            goal: Optional goal for steps (count) or water (litres).
        """
        key = _validate_metric(metric)
        status = status_for(key, value, goal, config)
        kind = MetricKind.from_key(key)
        return {
            "metric": kind.value if kind is not None else key,
            "status": status,
            "tone": status_tone(status),
        }

    @mcp.tool
    async def wellness_score(readings: dict[str, Any] | None = None) -> dict:
        """Compute per-vital status labels and the 0-100 wellness score.

        Args:
            readings: Optional snapshot mapping metric name to
                {"value": ..., "unit": ..., "goal": ...} or a bare value.
                When omitted, the latest stored snapshot is evaluated.
        """
        evaluation, provenance = await _evaluate(readings)
        logger.info(
            "Evaluated %d vitals (%d scored): score=%d",
            len(evaluation.vitals),
            evaluation.wellness.scored_count,
            evaluation.score,
        )
        return {**evaluation.as_dict(), **provenance}

    @mcp.tool
    async def vitals_context(readings: dict[str, Any] | None = None) -> str:
        """Render vitals, status labels and the wellness score as plain text.

        This is the health context passed along to a chat assistant.

        Args:
            readings: Optional snapshot; the latest stored snapshot when omitted.
        """
        evaluation, _ = await _evaluate(readings)
        return build_vitals_context(evaluation)

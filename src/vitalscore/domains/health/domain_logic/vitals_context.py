"""Plain-text vitals summary handed to the external text-completion service.

Only vitals, their status labels and the wellness score cross this boundary.
"""

from __future__ import annotations

from vitalscore.domains.health.domain_logic.vital_models import (
    MetricKind,
    VitalsEvaluation,
    VitalStatus,
)

NO_DATA_TEXT = "No health data available."


def _label(key: str) -> str:
    kind = MetricKind.from_key(key)
    return kind.label if kind is not None else key[:1].upper() + key[1:]


def _format_value(value: object) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _format_line(key: str, vital: VitalStatus) -> str:
    line = f"{_label(key)}: {_format_value(vital.raw_value)}"
    if vital.unit:
        line += f" {vital.unit}"
    line += f" ({vital.status})"
    if vital.goal is not None:
        line += f" - Goal: {_format_value(vital.goal)}"
        if vital.unit:
            line += f" {vital.unit}"
    return line


def build_vitals_context(evaluation: VitalsEvaluation) -> str:
    lines = [
        _format_line(key, vital)
        for key, vital in evaluation.vitals.items()
        if vital.raw_value is not None
    ]
    if not lines:
        return NO_DATA_TEXT

    wellness = evaluation.wellness
    noun = "metric" if wellness.scored_count == 1 else "metrics"
    return "\n".join([
        "Recent Vital Signs:",
        *lines,
        "",
        f"Wellness Score: {wellness.score}/100 ({wellness.scored_count} {noun} scored)",
    ])

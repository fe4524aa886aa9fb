"""Deterministic vital evaluation: readings -> status labels + wellness score.

Every function here is pure. Malformed readings never raise; they are
labelled ``Unknown`` and left out of the score denominator.

Score:
    score = round(total_points / (scored_count * 25) * 100), 0 if nothing scored
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from vitalscore.domains.health.domain_logic.vital_models import (
    DEFAULT_CONFIG,
    MAX_COMPONENT_POINTS,
    REASON_NOT_RECORDED,
    REASON_UNRECOGNIZED,
    STATUS_ACHIEVED,
    STATUS_ALMOST_THERE,
    STATUS_GETTING_STARTED,
    STATUS_GOOD,
    STATUS_HALFWAY,
    STATUS_HIGH,
    STATUS_HYDRATED,
    STATUS_LOW,
    STATUS_NEED_MORE,
    STATUS_NORMAL,
    STATUS_NOT_ENOUGH,
    STATUS_ON_TRACK,
    STATUS_TONES,
    STATUS_TOO_MUCH,
    STATUS_UNKNOWN,
    BloodPressureValue,
    ComponentScore,
    EvaluatorConfig,
    MetricKind,
    NumericValue,
    SleepDuration,
    UnparsedValue,
    VitalReading,
    VitalsEvaluation,
    VitalStatus,
    WellnessScore,
)
from vitalscore.domains.health.domain_logic.vital_parsing import (
    parse_reading,
    parse_readings,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Band tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Band:
    """A closed/open interval worth a fixed number of points."""

    points: int
    low: float = -math.inf
    high: float = math.inf
    low_open: bool = False
    high_open: bool = False

    def contains(self, x: float) -> bool:
        above = x > self.low if self.low_open else x >= self.low
        below = x < self.high if self.high_open else x <= self.high
        return above and below


def _score_bands(bands: tuple[Band, ...], x: float) -> int:
    for band in bands:
        if band.contains(x):
            return band.points
    return 0


HEART_RATE_BANDS = (
    Band(25, 60, 80),
    Band(20, 80, 100, low_open=True),
    Band(10, 100, 120, low_open=True),
    Band(0, low=120, low_open=True),
    Band(15, 50, 60, high_open=True),
    Band(0, high=50, high_open=True),
)

# Ratio of goal; overshooting is penalized as well as falling short.
STEPS_BANDS = (
    Band(25, 0.9, 1.1),
    Band(20, 1.1, 1.5, low_open=True),
    Band(15, low=1.5, low_open=True),
    Band(20, 0.7, 0.9, high_open=True),
    Band(15, 0.5, 0.7, high_open=True),
    Band(10, 0.3, 0.5, high_open=True),
    Band(5, high=0.3, high_open=True),
)

SLEEP_BANDS = (
    Band(25, 7, 8),
    Band(22, 8, 9, low_open=True),
    Band(15, 6, 7, high_open=True),
    Band(15, 9, 10, low_open=True),
    Band(8, 5, 6, high_open=True),
    Band(8, 10, 12, low_open=True),
)

WATER_BANDS = (
    Band(25, 0.9, 1.2),
    Band(20, 1.2, 1.5, low_open=True),
    Band(15, 1.5, 2.0, low_open=True),
    Band(5, low=2.0, low_open=True),
    Band(20, 0.7, 0.9, high_open=True),
    Band(15, 0.5, 0.7, high_open=True),
    Band(10, 0.3, 0.5, high_open=True),
    Band(5, high=0.3, high_open=True),
)

# Systolic only.
BLOOD_PRESSURE_BANDS = (
    Band(25, high=120, high_open=True),
    Band(20, 120, 130, high_open=True),
    Band(15, 130, 140, high_open=True),
    Band(5, 140, 160, high_open=True),
    Band(0, low=160),
)

OXYGEN_BANDS = (
    Band(25, 95, 100),
    Band(15, 90, 95, high_open=True),
    Band(5, 85, 90, high_open=True),
    Band(0, high=85, high_open=True),
)

TEMPERATURE_BANDS = (
    Band(25, 36.1, 37.2),
    Band(15, 35.5, 36.1, high_open=True),
    Band(15, 37.2, 38, low_open=True),
    Band(5, 35, 35.5, high_open=True),
    Band(5, 38, 39, low_open=True),
)

WEIGHT_BANDS = (
    Band(25, 50, 100),
    Band(15, 45, 50, high_open=True),
    Band(15, 100, 110, low_open=True),
    Band(5, 40, 45, high_open=True),
    Band(5, 110, 120, low_open=True),
)

_MAGNITUDE_BANDS: dict[MetricKind, tuple[Band, ...]] = {
    MetricKind.HEART_RATE: HEART_RATE_BANDS,
    MetricKind.TEMPERATURE: TEMPERATURE_BANDS,
    MetricKind.OXYGEN_LEVEL: OXYGEN_BANDS,
    MetricKind.WEIGHT: WEIGHT_BANDS,
}

_RATIO_BANDS: dict[MetricKind, tuple[Band, ...]] = {
    MetricKind.STEPS: STEPS_BANDS,
    MetricKind.WATER: WATER_BANDS,
}


# ---------------------------------------------------------------------------
# Status labels
# ---------------------------------------------------------------------------

def _range_status(x: float, low: float, high: float) -> str:
    if x < low:
        return STATUS_LOW
    if x > high:
        return STATUS_HIGH
    return STATUS_NORMAL


def _steps_status(pct: float) -> str:
    if pct >= 100:
        return STATUS_ACHIEVED
    if pct >= 75:
        return STATUS_ALMOST_THERE
    if pct >= 50:
        return STATUS_ON_TRACK
    if pct >= 25:
        return STATUS_GETTING_STARTED
    return STATUS_NEED_MORE


def _water_status(pct: float) -> str:
    if pct >= 100:
        return STATUS_HYDRATED
    if pct >= 75:
        return STATUS_ALMOST_THERE
    if pct >= 50:
        return STATUS_HALFWAY
    return STATUS_NEED_MORE


def _sleep_status(hours: float) -> str:
    if 7 <= hours <= 9:
        return STATUS_GOOD
    if hours > 9:
        return STATUS_TOO_MUCH
    return STATUS_NOT_ENOUGH


def _blood_pressure_status(bp: BloodPressureValue) -> str:
    diastolic = bp.diastolic
    if bp.systolic >= 140 or (diastolic is not None and diastolic >= 90):
        return STATUS_HIGH
    if bp.systolic <= 90 or (diastolic is not None and diastolic <= 60):
        return STATUS_LOW
    return STATUS_NORMAL


def status_for_reading(
    reading: VitalReading, config: EvaluatorConfig = DEFAULT_CONFIG
) -> str:
    """Qualitative label for an already parsed reading."""
    value = reading.value
    kind = reading.kind

    if isinstance(value, UnparsedValue):
        return STATUS_UNKNOWN
    if not isinstance(kind, MetricKind):
        # Unrecognized metric: only plain numbers are assumed fine.
        return STATUS_NORMAL if isinstance(value, NumericValue) else STATUS_UNKNOWN

    if isinstance(value, SleepDuration):
        return _sleep_status(value.hours)
    if isinstance(value, BloodPressureValue):
        return _blood_pressure_status(value)

    x = value.magnitude
    if kind is MetricKind.HEART_RATE:
        return _range_status(x, 60, 100)
    if kind is MetricKind.STEPS:
        return _steps_status(x / reading.effective_goal(config) * 100)
    if kind is MetricKind.WATER:
        return _water_status(x / reading.effective_goal(config) * 100)
    if kind is MetricKind.TEMPERATURE:
        return _range_status(x, 36, 37.5)
    if kind is MetricKind.OXYGEN_LEVEL:
        return STATUS_LOW if x < 95 else STATUS_NORMAL
    if kind is MetricKind.WEIGHT:
        return _range_status(x, 45, 100)
    return STATUS_NORMAL


def status_for(
    kind: MetricKind | str,
    value: Any,
    goal: float | None = None,
    config: EvaluatorConfig = DEFAULT_CONFIG,
) -> str:
    """Qualitative label for a raw value of the given metric.

    ``goal`` only matters for steps and water; the configured default is
    used when it is missing or not a positive number.
    """
    return status_for_reading(parse_reading(kind, {"value": value, "goal": goal}), config)


def status_tone(status: str) -> str:
    """Presentation hint (good/caution/warning/alert/unknown) for a label."""
    return STATUS_TONES.get(status, "unknown")


# ---------------------------------------------------------------------------
# Component scores
# ---------------------------------------------------------------------------

def _fmt(x: float) -> str:
    return f"{x:g}"


def _skipped(reading: VitalReading, reason: str) -> ComponentScore:
    return ComponentScore(kind=reading.key, points=None, raw_value=reading.raw, detail=reason)


def component_score(
    reading: VitalReading, config: EvaluatorConfig = DEFAULT_CONFIG
) -> ComponentScore:
    """Points (0-25) for a single reading, or a skipped entry with the reason."""
    value = reading.value
    kind = reading.kind

    if not isinstance(kind, MetricKind):
        return _skipped(reading, REASON_UNRECOGNIZED)
    if isinstance(value, UnparsedValue):
        return _skipped(reading, value.reason)

    if isinstance(value, SleepDuration):
        if value.hours <= 0:
            return _skipped(reading, REASON_NOT_RECORDED)
        points = _score_bands(SLEEP_BANDS, value.hours)
        detail = f"{_fmt(value.hours)}h"
    elif isinstance(value, BloodPressureValue):
        if value.systolic <= 0:
            return _skipped(reading, REASON_NOT_RECORDED)
        points = _score_bands(BLOOD_PRESSURE_BANDS, value.systolic)
        if value.diastolic is not None and value.diastolic > 0:
            detail = f"{value.systolic}/{value.diastolic} {reading.unit}"
        else:
            detail = f"{value.systolic} {reading.unit}"
    elif kind in _RATIO_BANDS:
        goal = reading.effective_goal(config)
        points = _score_bands(_RATIO_BANDS[kind], value.magnitude / goal)
        detail = f"{_fmt(value.magnitude)}/{_fmt(goal)} {reading.unit}"
    elif kind in _MAGNITUDE_BANDS:
        points = _score_bands(_MAGNITUDE_BANDS[kind], value.magnitude)
        detail = f"{_fmt(value.magnitude)} {reading.unit}"
    else:  # pragma: no cover
        return _skipped(reading, REASON_UNRECOGNIZED)

    return ComponentScore(
        kind=reading.key,
        points=points,
        raw_value=reading.raw,
        detail=detail.strip(),
    )


# ---------------------------------------------------------------------------
# Wellness score
# ---------------------------------------------------------------------------

def _as_readings(
    readings: Iterable[VitalReading] | Mapping[str, Any] | None,
) -> list[VitalReading]:
    if readings is None:
        return []
    if isinstance(readings, Mapping):
        if all(isinstance(r, VitalReading) for r in readings.values()):
            return list(readings.values())
        return list(parse_readings(readings).values())
    return list(readings)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def compute_wellness_score(
    readings: Iterable[VitalReading] | Mapping[str, Any] | None,
    config: EvaluatorConfig = DEFAULT_CONFIG,
) -> WellnessScore:
    """Aggregate component scores into a normalized 0-100 wellness score.

    Accepts parsed readings or a raw snapshot mapping. Metrics that cannot be
    scored are listed in the breakdown but do not count toward the
    denominator.
    """
    components: list[ComponentScore] = []
    total_points = 0
    scored_count = 0

    for reading in _as_readings(readings):
        component = component_score(reading, config)
        components.append(component)
        if component.points is not None:
            total_points += component.points
            scored_count += 1

    if scored_count == 0:
        score = 0
    else:
        score = _round_half_up(total_points * 100 / (scored_count * MAX_COMPONENT_POINTS))

    wellness = WellnessScore(
        score=score,
        total_points=total_points,
        scored_count=scored_count,
        components=components,
    )
    logger.debug("Wellness score: %s", wellness.explain())
    return wellness


def evaluate_vitals(
    snapshot: Mapping[str, Any] | None,
    config: EvaluatorConfig = DEFAULT_CONFIG,
) -> VitalsEvaluation:
    """Label every metric in a snapshot and compute the wellness score."""
    readings = parse_readings(snapshot)

    vitals: dict[str, VitalStatus] = {}
    for key, reading in readings.items():
        status = status_for_reading(reading, config)
        vitals[key] = VitalStatus(
            status=status,
            tone=status_tone(status),
            raw_value=reading.raw,
            unit=reading.unit,
            goal=reading.effective_goal(config),
        )

    return VitalsEvaluation(
        vitals=vitals,
        wellness=compute_wellness_score(readings.values(), config),
    )

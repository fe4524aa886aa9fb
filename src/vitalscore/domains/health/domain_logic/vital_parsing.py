"""Raw snapshot -> typed VitalReading parsing.

The health-readings document stores each vital as ``{value, unit, goal}``
where ``value`` is a number for most metrics, ``"Xh Ym"`` for sleep and
``"systolic/diastolic"`` for blood pressure. Parsing never raises: anything
that cannot be interpreted becomes an UnparsedValue carrying the reason.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from vitalscore.domains.health.domain_logic.vital_models import (
    DEFAULT_UNITS,
    NUMERIC_KINDS,
    REASON_MISSING,
    REASON_NOT_A_NUMBER,
    REASON_OUT_OF_RANGE,
    REASON_UNPARSEABLE,
    REASON_UNRECOGNIZED,
    BloodPressureValue,
    MetricKind,
    NumericValue,
    SleepDuration,
    UnparsedValue,
    VitalReading,
    VitalValue,
)

logger = logging.getLogger(__name__)

# Leading decimal number, as JavaScript's parseFloat reads it.
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
# Leading integer, as parseInt(s, 10) reads it.
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_MINUTES = re.compile(r"(\d+(?:\.\d+)?)\s*m", re.IGNORECASE)

_OXYGEN_RANGE = (0.0, 100.0)


def _finite_number(val: Any) -> float | None:
    """Return val as float if it is a real, finite number (bools excluded)."""
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return None
    try:
        num = float(val)
    except OverflowError:
        return None
    return num if math.isfinite(num) else None


def _leading_float(text: str) -> float | None:
    match = _LEADING_FLOAT.match(text)
    if not match:
        return None
    num = float(match.group(1))
    return num if math.isfinite(num) else None


def _leading_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_sleep(raw: Any) -> SleepDuration | UnparsedValue:
    """Parse ``"7h 30m"`` (or a bare number of hours).

    Only the number in front of the ``h`` marker is the hour count; the
    minutes are kept for display and never added to it.
    """
    num = _finite_number(raw)
    if num is not None:
        return SleepDuration(hours=num)
    if not isinstance(raw, str):
        return UnparsedValue(raw, REASON_MISSING if raw is None else REASON_UNPARSEABLE)
    if not raw.strip():
        return UnparsedValue(raw, REASON_MISSING)

    head, _, tail = raw.partition("h")
    hours = _leading_float(head)
    if hours is None:
        return UnparsedValue(raw, REASON_UNPARSEABLE)

    minutes = None
    minute_match = _MINUTES.search(tail)
    if minute_match:
        minutes = float(minute_match.group(1))
    return SleepDuration(hours=hours, minutes=minutes)


def parse_blood_pressure(raw: Any) -> BloodPressureValue | UnparsedValue:
    """Parse ``"120/80"``; a bare number is taken as systolic only."""
    num = _finite_number(raw)
    if num is not None:
        return BloodPressureValue(systolic=int(num))
    if not isinstance(raw, str):
        return UnparsedValue(raw, REASON_MISSING if raw is None else REASON_UNPARSEABLE)
    if not raw.strip():
        return UnparsedValue(raw, REASON_MISSING)

    parts = raw.split("/")
    if len(parts) != 2:
        return UnparsedValue(raw, REASON_UNPARSEABLE)
    systolic = _leading_int(parts[0])
    diastolic = _leading_int(parts[1])
    if systolic is None or diastolic is None:
        return UnparsedValue(raw, REASON_UNPARSEABLE)
    return BloodPressureValue(systolic=systolic, diastolic=diastolic)


def parse_value(kind: MetricKind | str, raw: Any) -> VitalValue:
    """Resolve a raw value into the payload type for its metric."""
    if kind is MetricKind.SLEEP:
        return parse_sleep(raw)
    if kind is MetricKind.BLOOD_PRESSURE:
        return parse_blood_pressure(raw)

    num = _finite_number(raw)
    if num is None:
        if raw is None:
            return UnparsedValue(raw, REASON_MISSING)
        if kind in NUMERIC_KINDS:
            return UnparsedValue(raw, REASON_NOT_A_NUMBER)
        return UnparsedValue(raw, REASON_UNRECOGNIZED)

    if kind is MetricKind.OXYGEN_LEVEL:
        lo, hi = _OXYGEN_RANGE
        if not lo <= num <= hi:
            return UnparsedValue(raw, REASON_OUT_OF_RANGE)
    return NumericValue(num)


def _parse_goal(val: Any) -> float | None:
    goal = _finite_number(val)
    if goal is None or goal <= 0:
        return None
    return goal


def parse_reading(key: MetricKind | str, record: Any) -> VitalReading:
    """Build a VitalReading from ``{value, unit?, goal?}`` or a bare value."""
    kind = MetricKind.from_key(key)
    if isinstance(record, Mapping):
        raw = record.get("value")
        unit = record.get("unit")
        goal = _parse_goal(record.get("goal"))
    else:
        raw = record
        unit = None
        goal = None

    if kind is None:
        name = key if isinstance(key, str) else str(key)
        return VitalReading(
            kind=name,
            value=parse_value(name, raw),
            raw=raw,
            unit=unit if isinstance(unit, str) else "",
            goal=goal,
        )

    value = parse_value(kind, raw)
    if isinstance(value, UnparsedValue) and value.reason != REASON_MISSING:
        logger.debug("Unparseable %s reading %r: %s", kind.value, raw, value.reason)

    return VitalReading(
        kind=kind,
        value=value,
        raw=raw,
        unit=unit if isinstance(unit, str) and unit else DEFAULT_UNITS[kind],
        goal=goal,
    )


def parse_readings(snapshot: Mapping[str, Any] | None) -> dict[str, VitalReading]:
    """Parse every entry of a health-readings snapshot, keyed by metric key."""
    readings: dict[str, VitalReading] = {}
    for key, record in (snapshot or {}).items():
        reading = parse_reading(key, record)
        readings[reading.key] = reading
    return readings

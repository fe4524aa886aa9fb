"""Vital reading models and domain constants for the wellness evaluator."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vitalscore.core.config.settings import Settings


# ---------------------------------------------------------------------------
# Metric kinds
# ---------------------------------------------------------------------------

class MetricKind(str, Enum):
    """Physiological metrics tracked per user (values are document-store keys)."""

    HEART_RATE = "heartRate"
    STEPS = "steps"
    SLEEP = "sleep"
    WATER = "water"
    TEMPERATURE = "temperature"
    OXYGEN_LEVEL = "oxygenLevel"
    BLOOD_PRESSURE = "bloodPressure"
    WEIGHT = "weight"

    @classmethod
    def from_key(cls, key: Any) -> MetricKind | None:
        """Resolve a store key or snake_case alias; None when unrecognized."""
        if isinstance(key, MetricKind):
            return key
        if not isinstance(key, str):
            return None
        return _KIND_ALIASES.get(key.strip().replace("-", "_").lower())

    @property
    def label(self) -> str:
        """Display label, e.g. ``HeartRate``."""
        return self.value[0].upper() + self.value[1:]


_KIND_ALIASES: dict[str, MetricKind] = {}
for _kind in MetricKind:
    _KIND_ALIASES[_kind.value.lower()] = _kind
    _KIND_ALIASES[_kind.name.lower()] = _kind

# Kinds whose payload is a plain magnitude.
NUMERIC_KINDS = frozenset({
    MetricKind.HEART_RATE,
    MetricKind.STEPS,
    MetricKind.WATER,
    MetricKind.TEMPERATURE,
    MetricKind.OXYGEN_LEVEL,
    MetricKind.WEIGHT,
})


DEFAULT_UNITS: dict[MetricKind, str] = {
    MetricKind.HEART_RATE: "BPM",
    MetricKind.STEPS: "steps",
    MetricKind.SLEEP: "hours",
    MetricKind.WATER: "L",
    MetricKind.TEMPERATURE: "°C",
    MetricKind.OXYGEN_LEVEL: "%",
    MetricKind.BLOOD_PRESSURE: "mmHg",
    MetricKind.WEIGHT: "kg",
}

# ---------------------------------------------------------------------------
# Status labels
# ---------------------------------------------------------------------------

STATUS_NORMAL = "Normal"
STATUS_LOW = "Low"
STATUS_HIGH = "High"
STATUS_UNKNOWN = "Unknown"
STATUS_GOOD = "Good"
STATUS_TOO_MUCH = "Too Much"
STATUS_NOT_ENOUGH = "Not Enough"
STATUS_ACHIEVED = "Achieved"
STATUS_ALMOST_THERE = "Almost There"
STATUS_ON_TRACK = "On Track"
STATUS_GETTING_STARTED = "Getting Started"
STATUS_NEED_MORE = "Need More"
STATUS_HYDRATED = "Hydrated"
STATUS_HALFWAY = "Halfway"

STATUS_TONES: dict[str, str] = {
    STATUS_NORMAL: "good",
    STATUS_GOOD: "good",
    STATUS_ON_TRACK: "good",
    STATUS_ALMOST_THERE: "good",
    STATUS_ACHIEVED: "good",
    STATUS_HYDRATED: "good",
    STATUS_HALFWAY: "caution",
    STATUS_GETTING_STARTED: "caution",
    STATUS_TOO_MUCH: "warning",
    STATUS_NEED_MORE: "warning",
    STATUS_NOT_ENOUGH: "warning",
    STATUS_LOW: "alert",
    STATUS_HIGH: "alert",
    STATUS_UNKNOWN: "unknown",
}

# Every metric contributes at most this many points before normalization.
MAX_COMPONENT_POINTS = 25

# Reasons attached to values that could not be used.
REASON_MISSING = "missing data"
REASON_NOT_A_NUMBER = "not a number"
REASON_UNPARSEABLE = "parsing error"
REASON_OUT_OF_RANGE = "out of range"
REASON_NOT_RECORDED = "not recorded"
REASON_UNRECOGNIZED = "unrecognized metric"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EvaluatorConfig:
    """Defaults applied when a goal-relative reading carries no usable goal."""

    default_steps_goal: float = 10000
    default_water_goal: float = 2.5  # litres

    def __post_init__(self) -> None:
        for name in ("default_steps_goal", "default_water_goal"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            try:
                num = float(value)
            except OverflowError:
                num = math.inf
            if not math.isfinite(num) or num <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")

    @classmethod
    def from_settings(cls, settings: Settings) -> EvaluatorConfig:
        return cls(
            default_steps_goal=settings.default_steps_goal,
            default_water_goal=settings.default_water_goal,
        )

    def default_goal(self, kind: MetricKind) -> float | None:
        if kind is MetricKind.STEPS:
            return self.default_steps_goal
        if kind is MetricKind.WATER:
            return self.default_water_goal
        return None


DEFAULT_CONFIG = EvaluatorConfig()


# ---------------------------------------------------------------------------
# Reading payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumericValue:
    magnitude: float


@dataclass(frozen=True)
class SleepDuration:
    """Sleep parsed from ``"Xh Ym"``; only ``hours`` is used for evaluation."""

    hours: float
    minutes: float | None = None


@dataclass(frozen=True)
class BloodPressureValue:
    systolic: int
    diastolic: int | None = None


@dataclass(frozen=True)
class UnparsedValue:
    """A value that could not be interpreted for its metric."""

    raw: Any
    reason: str


VitalValue = NumericValue | SleepDuration | BloodPressureValue | UnparsedValue


@dataclass(frozen=True)
class VitalReading:
    """One physiological reading as supplied by the health-readings document."""

    kind: MetricKind | str  # str only for unrecognized keys
    value: VitalValue
    raw: Any = None
    unit: str = ""
    goal: float | None = None

    @property
    def key(self) -> str:
        return self.kind.value if isinstance(self.kind, MetricKind) else str(self.kind)

    @property
    def is_parsed(self) -> bool:
        return not isinstance(self.value, UnparsedValue)

    def effective_goal(self, config: EvaluatorConfig = DEFAULT_CONFIG) -> float | None:
        if self.goal is not None:
            return self.goal
        if isinstance(self.kind, MetricKind):
            return config.default_goal(self.kind)
        return None


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class ComponentScore:
    """Points one metric contributed to the wellness score."""

    kind: str
    points: int | None
    raw_value: Any = None
    detail: str = ""
    max_points: int = MAX_COMPONENT_POINTS

    @property
    def scored(self) -> bool:
        return self.points is not None

    def describe(self) -> str:
        label = _display_label(self.kind)
        if self.points is None:
            return f"{label}: {self.detail}"
        return f"{label}: {self.points}/{self.max_points} ({self.detail})"

    def as_dict(self) -> dict[str, Any]:
        return {
            "metric": self.kind,
            "points": self.points,
            "max_points": self.max_points,
            "scored": self.scored,
            "raw_value": self.raw_value,
            "detail": self.detail,
        }


@dataclass
class WellnessScore:
    """Normalized 0-100 score over the metrics that could be scored."""

    score: int
    total_points: int
    scored_count: int
    components: list[ComponentScore] = field(default_factory=list)

    @property
    def max_points(self) -> int:
        return self.scored_count * MAX_COMPONENT_POINTS

    def explain(self) -> str:
        """Human-readable breakdown behind the score."""
        parts = ", ".join(c.describe() for c in self.components)
        summary = f"Score: {self.total_points}/{self.max_points} -> {self.score}/100"
        return f"{summary} - {parts}" if parts else summary

    def as_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "total_points": self.total_points,
            "max_points": self.max_points,
            "scored_count": self.scored_count,
            "breakdown": [c.as_dict() for c in self.components],
        }


@dataclass(frozen=True)
class VitalStatus:
    status: str
    tone: str
    raw_value: Any = None
    unit: str = ""
    goal: float | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "tone": self.tone,
            "value": self.raw_value,
            "unit": self.unit,
            "goal": self.goal,
        }


@dataclass
class VitalsEvaluation:
    """Statuses for every supplied metric plus the aggregate wellness score."""

    vitals: dict[str, VitalStatus]
    wellness: WellnessScore

    @property
    def score(self) -> int:
        return self.wellness.score

    def statuses(self) -> dict[str, str]:
        return {key: v.status for key, v in self.vitals.items()}

    def as_dict(self) -> dict[str, Any]:
        return {
            "vitals": {key: v.as_dict() for key, v in self.vitals.items()},
            **self.wellness.as_dict(),
            "explanation": self.wellness.explain(),
        }


def _display_label(key: str) -> str:
    kind = MetricKind.from_key(key)
    if kind is not None:
        return kind.label
    return key[:1].upper() + key[1:]

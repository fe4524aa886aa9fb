"""Shared test fixtures for vitalscore tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "VITALSCORE_HOST",
        "VITALSCORE_PORT",
        "VITALSCORE_LOG_LEVEL",
        "VITALSCORE_ALLOW_INSECURE_BIND",
        "DEFAULT_STEPS_GOAL",
        "DEFAULT_WATER_GOAL",
    ):
        monkeypatch.delenv(name, raising=False)

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from vitalscore.domains.health.connectors.providers import (  # noqa: E402
    StaticHealthReadingsProvider,
)
from vitalscore.domains.health.domain_logic.vital_models import (  # noqa: E402
    EvaluatorConfig,
)


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

def make_snapshot(**overrides: Any) -> dict[str, Any]:
    """A full eight-vital snapshot where every reading sits in its best band."""
    snapshot: dict[str, Any] = {
        "heartRate": {"value": 70, "unit": "BPM"},
        "steps": {"value": 10000, "unit": "steps", "goal": 10000},
        "sleep": {"value": "7h 30m", "unit": "hours"},
        "water": {"value": 2.5, "unit": "L", "goal": 2.5},
        "temperature": {"value": 36.8, "unit": "°C"},
        "oxygenLevel": {"value": 98, "unit": "%"},
        "bloodPressure": {"value": "115/75", "unit": "mmHg"},
        "weight": {"value": 70, "unit": "kg"},
    }
    for key, value in overrides.items():
        if value is None:
            snapshot.pop(key, None)
        else:
            snapshot[key] = value
    return snapshot


@pytest.fixture
def optimal_snapshot() -> dict[str, Any]:
    return make_snapshot()


@pytest.fixture
def scenario_snapshot() -> dict[str, Any]:
    """Four-vital snapshot from a typical dashboard load."""
    return {
        "heartRate": {"value": 72, "unit": "BPM"},
        "steps": {"value": 8547, "unit": "steps", "goal": 10000},
        "sleep": {"value": "7h 30m", "unit": "hours"},
        "water": {"value": 1.8, "unit": "L", "goal": 2.5},
    }


@pytest.fixture
def config() -> EvaluatorConfig:
    return EvaluatorConfig()


@pytest.fixture
def static_provider(scenario_snapshot) -> StaticHealthReadingsProvider:
    return StaticHealthReadingsProvider(scenario_snapshot, source="test")


@pytest.fixture
def snapshot_factory():
    """Build optimal snapshots with per-metric overrides (None drops a metric)."""
    return make_snapshot

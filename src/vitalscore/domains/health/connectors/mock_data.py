"""Mock health-readings snapshot for development and testing.

Mirrors the shape of the per-user health-readings document: one record per
vital with a value, a display unit and, for steps and water, a goal.
"""

from __future__ import annotations


def get_mock_readings() -> dict:
    """Return a snapshot of a typical, fairly healthy day."""
    return {
        "heartRate": {"value": 72, "unit": "BPM"},
        "steps": {"value": 8547, "unit": "steps", "goal": 10000},
        "sleep": {"value": "7h 30m", "unit": "hours"},
        "water": {"value": 1.8, "unit": "L", "goal": 2.5},
        "temperature": {"value": 36.8, "unit": "°C"},
        "oxygenLevel": {"value": 98, "unit": "%"},
        "bloodPressure": {"value": "118/76", "unit": "mmHg"},
        "weight": {"value": 72.5, "unit": "kg"},
    }

"""Core data models for PhysAI Lab."""

from physai.models.scenario import (
    EARTH_GRAVITY,
    Explanation,
    Parameters,
    ScenarioRecord,
    ScenarioType,
)
from physai.models.session import ChangeSource, ParameterChange, SimulationSession

__all__ = [
    # Scenario
    "ScenarioType",
    "Parameters",
    "Explanation",
    "ScenarioRecord",
    "EARTH_GRAVITY",
    # Session
    "SimulationSession",
    "ParameterChange",
    "ChangeSource",
]

"""Scenario, parameter and explanation models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScenarioType(str, Enum):
    """The closed set of physics situations the lab can simulate."""

    PROJECTILE = "projectile"
    VERTICAL = "vertical"
    PENDULUM = "pendulum"
    OPTICS = "optics"
    MAGNETIC = "magnetic"


# Earth surface gravity used for every freshly parsed problem
EARTH_GRAVITY = 9.8


class Parameters(BaseModel):
    """
    Mutable numeric tuple governing a scenario's current state.

    Assignments are validated, so a slider or what-if change that would
    break the bounds below is rejected instead of stored.
    """

    model_config = ConfigDict(validate_assignment=True)

    velocity: float = Field(20.0, gt=0, description="Initial speed (m/s)")
    angle: float = Field(45.0, ge=0, le=90, description="Launch angle (degrees)")
    height: float = Field(0.0, ge=0, description="Height (m)")
    gravity: float = Field(EARTH_GRAVITY, gt=0, description="Gravitational acceleration (m/s^2)")
    elapsed_time: float = Field(0.0, ge=0, description="Elapsed time (s)")


class Explanation(BaseModel):
    """Narrative derived once from a freshly parsed problem."""

    model_config = ConfigDict(frozen=True)

    title: str
    steps: tuple[str, ...] = ()
    equation: str

    # Derived numeric results (max_height, range, ...) keyed by name
    quantities: dict[str, float] = Field(default_factory=dict)


class ScenarioRecord(BaseModel):
    """
    A submitted problem and everything derived from it.

    Only ``parameters`` changes after creation. A new submission replaces
    the whole record.
    """

    scenario_type: ScenarioType = Field(frozen=True)
    problem_text: str = Field(frozen=True)
    explanation: Explanation = Field(frozen=True)
    parameters: Parameters = Field(default_factory=Parameters)

    def summary(self) -> dict[str, Any]:
        """Compact dict used by the CLI and API."""
        return {
            "scenario_type": self.scenario_type.value,
            "problem_text": self.problem_text,
            "parameters": self.parameters.model_dump(),
            "explanation": self.explanation.model_dump(),
        }

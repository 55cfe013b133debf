"""Per-tick simulation state and parameter change records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4


@dataclass
class SimulationSession:
    """Logical clock state owned by the render loop."""

    elapsed_time: float = 0.0
    playing: bool = True


class ChangeSource(str, Enum):
    """Where a parameter change came from."""

    SLIDER = "slider"
    WHAT_IF = "what_if"


@dataclass
class ParameterChange:
    """
    A single mutation applied to a scenario's parameters.

    Examples:
    - "double the velocity" -> velocity 20.0 -> 40.0
    - slider drag -> gravity 9.8 -> 3.7
    """

    parameter_name: str
    original_value: float
    new_value: float

    source: ChangeSource = ChangeSource.SLIDER

    # Name of the what-if rule that fired (what-if changes only)
    rule: Optional[str] = None

    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def describe(self) -> str:
        """Human-readable form for logs and readouts."""
        return f"Change {self.parameter_name} from {self.original_value:g} to {self.new_value:g}"

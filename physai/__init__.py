"""
PhysAI Lab

Turns physics word problems into live, parameter-driven simulations
with explanations, analytic graphs and what-if commands.
"""

from physai.lab import PhysicsLab
from physai.models.scenario import Explanation, Parameters, ScenarioRecord, ScenarioType
from physai.models.session import ParameterChange, SimulationSession
from physai.parsing.problem_parser import ProblemParser, classify, extract
from physai.rendering.frames import render_frame
from physai.rendering.graph import render_graph
from physai.scenarios import state
from physai.simulation.clock import SimulationClock
from physai.whatif.interpreter import apply_what_if

__version__ = "0.1.0"

__all__ = [
    # Core
    "PhysicsLab",
    # Models
    "ScenarioType",
    "Parameters",
    "Explanation",
    "ScenarioRecord",
    "SimulationSession",
    "ParameterChange",
    # Pipeline
    "ProblemParser",
    "classify",
    "extract",
    "state",
    "render_frame",
    "render_graph",
    "SimulationClock",
    "apply_what_if",
]

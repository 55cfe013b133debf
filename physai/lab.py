"""Main PhysAI Lab facade."""

from __future__ import annotations

from typing import Optional

import structlog
from pydantic import ValidationError

from physai.config import LabConfig
from physai.errors import EmptyProblemError, InvalidParameterError, NoScenarioError
from physai.models.scenario import Parameters, ScenarioRecord, ScenarioType
from physai.models.session import ChangeSource, ParameterChange
from physai.parsing.explanation import live_calculations
from physai.parsing.problem_parser import ProblemParser
from physai.rendering.frames import FrameRenderer
from physai.rendering.graph import render_graph
from physai.rendering.surface import DrawingSurface, RasterSurface
from physai.scenarios import SliderRange, variant_for
from physai.simulation.clock import SimulationClock
from physai.simulation.loop import FrameCallback, RenderLoop
from physai.whatif.interpreter import apply_what_if

logger = structlog.get_logger()

ADJUSTABLE_PARAMETERS = frozenset({"velocity", "angle", "height", "gravity"})


class PhysicsLab:
    """
    Main interface for PhysAI Lab.

    Provides high-level API for:
    - Submitting word problems
    - Adjusting parameters (sliders) and running what-if commands
    - Driving the simulation clock
    - Rendering simulation frames and graphs

    Example:
        ```python
        lab = PhysicsLab()
        record = lab.submit_problem("A projectile is launched at 45 degrees at 30 m/s")

        lab.apply_what_if("moon gravity")
        lab.tick()

        canvas = lab.new_canvas()
        lab.render_frame(canvas)
        canvas.save("frame.png")
        ```
    """

    def __init__(self, config: LabConfig | None = None, parser: ProblemParser | None = None):
        self.config = config or LabConfig()
        self.parser = parser or ProblemParser()

        self.clock = SimulationClock(step=self.config.frame_step)
        self.renderer = FrameRenderer(self.clock)

        self.record: Optional[ScenarioRecord] = None
        # One ledger for slider and what-if changes to the current record
        self.changes: list[ParameterChange] = []

        logger.info("Lab initialized", frame_step=self.config.frame_step)

    # ----- Problems -----

    def submit_problem(self, text: str) -> ScenarioRecord:
        """
        Parse a problem and make it the current scenario.

        The previous record is dropped and the clock restarts at t = 0.

        Raises:
            EmptyProblemError: if the text is empty or whitespace
        """
        if not text or not text.strip():
            raise EmptyProblemError("Problem text must not be empty")

        parsed = self.parser.parse(text)
        self.record = ScenarioRecord(
            scenario_type=parsed.scenario_type,
            problem_text=text,
            explanation=parsed.explanation,
            parameters=parsed.parameters,
        )
        self.changes = []
        self.clock.reset()

        logger.info("Problem submitted", scenario_type=parsed.scenario_type.value)
        return self.record

    def require_record(self) -> ScenarioRecord:
        if self.record is None:
            raise NoScenarioError("No problem has been submitted")
        return self.record

    def current_scenario(self) -> Optional[tuple[ScenarioType, Parameters]]:
        """Latest (scenario type, parameters), read by the render loop."""
        if self.record is None:
            return None
        return self.record.scenario_type, self.record.parameters

    # ----- Parameters -----

    def set_parameter(self, name: str, value: float) -> ParameterChange:
        """
        Set one parameter directly, as a slider does.

        Raises:
            InvalidParameterError: unknown name or out-of-bounds value
        """
        record = self.require_record()
        if name not in ADJUSTABLE_PARAMETERS:
            raise InvalidParameterError(f"Unknown parameter: {name}")

        original = getattr(record.parameters, name)
        try:
            setattr(record.parameters, name, float(value))
        except ValidationError as e:
            raise InvalidParameterError(f"Invalid value for {name}: {value}") from e

        change = ParameterChange(
            parameter_name=name,
            original_value=original,
            new_value=getattr(record.parameters, name),
            source=ChangeSource.SLIDER,
        )
        self.changes.append(change)
        logger.info("Parameter set", change=change.describe())
        return change

    def apply_what_if(self, command: str) -> Optional[ParameterChange]:
        """Apply a what-if command; unmatched commands change nothing."""
        record = self.require_record()
        change = apply_what_if(record.parameters, command)
        if change is not None:
            self.changes.append(change)
        return change

    def sliders(self) -> tuple[SliderRange, ...]:
        return variant_for(self.require_record().scenario_type).sliders

    def live_calculations(self) -> list[tuple[str, str]]:
        record = self.require_record()
        return live_calculations(record.scenario_type, record.parameters)

    # ----- Clock -----

    @property
    def elapsed_time(self) -> float:
        return self.clock.elapsed_time

    def tick(self) -> float:
        return self.clock.tick()

    def reset(self) -> None:
        self.renderer.reset()

    def toggle_play(self) -> bool:
        return self.clock.toggle_play()

    # ----- Rendering -----

    def new_canvas(self) -> RasterSurface:
        return RasterSurface(self.config.canvas_width, self.config.canvas_height)

    def new_graph_canvas(self) -> RasterSurface:
        return RasterSurface(self.config.graph_width, self.config.graph_height)

    def render_frame(self, surface: Optional[DrawingSurface]) -> None:
        """Draw the current scenario at the clock's time; no-op without a problem."""
        if self.record is None:
            return
        self.renderer.render(surface, self.record.scenario_type, self.record.parameters)

    def render_graph(self, surface: Optional[DrawingSurface]) -> None:
        if self.record is None:
            return
        render_graph(surface, self.record.scenario_type, self.record.parameters)

    def create_loop(self, on_frame: FrameCallback) -> RenderLoop:
        """A render loop bound to this lab's clock and current scenario."""
        return RenderLoop(
            clock=self.clock,
            source=self.current_scenario,
            on_frame=on_frame,
            interval=self.config.tick_interval,
        )

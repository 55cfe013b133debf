"""
Cancellable render loop.

One cooperative asyncio task ticks at roughly 60 Hz. Each tick reads the
latest scenario snapshot, advances the clock if playing, computes the
physical state and hands it to the frame callback. Parameter changes made
between ticks are simply picked up by the next one.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Callable, Optional

import structlog

from physai.config import DEFAULT_FRAME_STEP
from physai.models.scenario import Parameters, ScenarioType
from physai.physics.kinematics import PhysicalState
from physai.scenarios import variant_for
from physai.simulation.clock import SimulationClock

logger = structlog.get_logger(__name__)

# Returns the scenario to animate, or None when nothing is loaded
ScenarioSource = Callable[[], Optional[tuple[ScenarioType, Parameters]]]

# Receives (scenario_type, parameters, state, t) once per tick
FrameCallback = Callable[[ScenarioType, Parameters, PhysicalState, float], None]


class RenderLoop:
    """
    Repeating per-frame task driving clock -> kinematics -> renderer.

    Example:
        ```python
        loop = RenderLoop(clock, lab.current_scenario, on_frame)
        loop.start()
        ...
        loop.close()  # cancels the task and drops all listeners
        ```
    """

    def __init__(
        self,
        clock: SimulationClock,
        source: ScenarioSource,
        on_frame: FrameCallback,
        interval: float = DEFAULT_FRAME_STEP,
    ):
        self.clock = clock
        self.source = source
        self.on_frame = on_frame
        self.interval = interval

        self._task: Optional[asyncio.Task] = None
        self.error: Optional[BaseException] = None
        self._listeners: dict[str, list[Callable[..., None]]] = defaultdict(list)
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> Optional[PhysicalState]:
        """Run one iteration of the loop."""
        t = self.clock.tick()
        self.ticks += 1

        scenario = self.source()
        if scenario is None:
            return None

        scenario_type, parameters = scenario
        current = variant_for(scenario_type).state(parameters, t)
        self.on_frame(scenario_type, parameters, current, t)
        return current

    def run_ticks(self, count: int) -> Optional[PhysicalState]:
        """Drive ``count`` ticks synchronously (headless rendering)."""
        last = None
        for _ in range(count):
            last = self.tick()
        return last

    async def run(self) -> None:
        """Tick until cancelled."""
        while True:
            self.tick()
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        """Schedule the loop on the running event loop."""
        if self.is_running:
            return self._task

        logger.info("Starting render loop", interval=self.interval)
        self.error = None
        self._task = asyncio.get_running_loop().create_task(self.run())
        self._task.add_done_callback(self._on_task_done)
        return self._task

    def _on_task_done(self, task: asyncio.Task) -> None:
        """Collect the exception of a loop that stopped on its own."""
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.error = error
            logger.error("Render loop failed", error=str(error), ticks=self.ticks)

    def cancel(self) -> None:
        """Drop the repeating registration."""
        if self._task is not None:
            self._task.cancel()
            logger.info("Render loop cancelled", ticks=self.ticks)
        self._task = None

    def add_listener(self, event: str, callback: Callable[..., None]) -> None:
        """Register an auxiliary listener (resize, drop, ...)."""
        self._listeners[event].append(callback)

    def remove_listener(self, event: str, callback: Callable[..., None]) -> None:
        if callback in self._listeners.get(event, []):
            self._listeners[event].remove(callback)

    def emit(self, event: str, *args) -> int:
        """Call every listener for an event; returns how many ran."""
        callbacks = list(self._listeners.get(event, []))
        for callback in callbacks:
            callback(*args)
        return len(callbacks)

    def listener_count(self, event: str | None = None) -> int:
        if event is not None:
            return len(self._listeners.get(event, []))
        return sum(len(callbacks) for callbacks in self._listeners.values())

    def close(self) -> None:
        """Teardown: cancel the task and deregister every listener."""
        self.cancel()
        self._listeners.clear()

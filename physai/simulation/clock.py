"""Fixed-step simulation clock."""

from __future__ import annotations

from typing import Optional

from physai.config import DEFAULT_FRAME_STEP
from physai.models.session import SimulationSession


class SimulationClock:
    """
    Logical clock advanced by a fixed step per render tick.

    Wall-clock time between ticks is ignored, so pausing and resuming
    is deterministic in logical time.
    """

    def __init__(self, step: float = DEFAULT_FRAME_STEP, session: Optional[SimulationSession] = None):
        if step <= 0:
            raise ValueError("Clock step must be positive")
        self.step = step
        self.session = session or SimulationSession()

    @property
    def elapsed_time(self) -> float:
        return self.session.elapsed_time

    @property
    def playing(self) -> bool:
        return self.session.playing

    def tick(self) -> float:
        """Advance one step if playing; returns the elapsed time."""
        if self.session.playing:
            self.session.elapsed_time += self.step
        return self.session.elapsed_time

    def reset(self) -> None:
        """Back to t = 0. Play state is left alone."""
        self.session.elapsed_time = 0.0

    def toggle_play(self) -> bool:
        """Flip play/pause; returns the new play state."""
        self.session.playing = not self.session.playing
        return self.session.playing

    def play(self) -> None:
        self.session.playing = True

    def pause(self) -> None:
        self.session.playing = False

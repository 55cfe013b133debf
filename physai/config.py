"""Runtime configuration for the lab."""

from __future__ import annotations

import os
from dataclasses import dataclass

# Nominal frame step: one 60 Hz frame of logical time
DEFAULT_FRAME_STEP = 1 / 60


@dataclass
class LabConfig:
    """Configuration for the simulation clock, render loop and output."""

    frame_step: float = DEFAULT_FRAME_STEP  # Logical seconds added per tick
    tick_interval: float = DEFAULT_FRAME_STEP  # Wall-clock seconds between loop ticks

    # Drawing surfaces
    canvas_width: int = 800
    canvas_height: int = 400
    graph_width: int = 400
    graph_height: int = 300

    # Video export
    video_fps: int = 60

    def __post_init__(self):
        if self.frame_step <= 0:
            raise ValueError("frame_step must be positive")
        if self.tick_interval < 0:
            raise ValueError("tick_interval must not be negative")

    @classmethod
    def from_env(cls) -> "LabConfig":
        """Build a config, overriding defaults from PHYSAI_* variables."""
        return cls(
            frame_step=float(os.getenv("PHYSAI_FRAME_STEP", DEFAULT_FRAME_STEP)),
            tick_interval=float(os.getenv("PHYSAI_TICK_INTERVAL", DEFAULT_FRAME_STEP)),
            video_fps=int(os.getenv("PHYSAI_VIDEO_FPS", "60")),
        )

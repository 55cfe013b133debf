"""
Rendering of simulation frames and position-vs-time graphs.
"""

from physai.rendering.frames import FrameRenderer, render_frame
from physai.rendering.graph import render_graph, sample_curve
from physai.rendering.surface import (
    Color,
    DrawCommand,
    DrawingSurface,
    RasterSurface,
    RecordingSurface,
)

__all__ = [
    "render_frame",
    "FrameRenderer",
    "render_graph",
    "sample_curve",
    "DrawingSurface",
    "RecordingSurface",
    "RasterSurface",
    "DrawCommand",
    "Color",
]

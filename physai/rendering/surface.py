"""
Drawing surfaces.

Renderers only talk to the ``DrawingSurface`` contract. Two
implementations are provided:
- RecordingSurface: keeps the issued draw commands (tests, JSON export)
- RasterSurface: rasterizes into a BGR numpy image with OpenCV
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import numpy as np

Point = tuple[float, float]

# OpenCV takes C int coordinates; anything further out is pinned here
PIXEL_LIMIT = 2 ** 15


def _px(value: float) -> int:
    """Round a coordinate to a pixel inside the range OpenCV accepts."""
    return round(min(max(value, -PIXEL_LIMIT), PIXEL_LIMIT))


def _px_point(point: Point) -> tuple[int, int]:
    return _px(point[0]), _px(point[1])


@dataclass(frozen=True)
class Color:
    """RGBA colour, channels 0-255 and alpha 0.0-1.0."""

    r: int
    g: int
    b: int
    a: float = 1.0

    @classmethod
    def from_hex(cls, value: str, alpha: float = 1.0) -> "Color":
        hex_color = value.lstrip("#")
        r, g, b = (int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
        return cls(r, g, b, alpha)

    def with_alpha(self, alpha: float) -> "Color":
        return Color(self.r, self.g, self.b, alpha)

    def bgr(self) -> tuple[int, int, int]:
        return (self.b, self.g, self.r)


class DrawingSurface(ABC):
    """
    Abstract 2D drawing surface with a top-left origin and y pointing down.

    Angles are radians, measured clockwise from +x (screen convention).
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    @abstractmethod
    def clear(self) -> None:
        """Erase the whole surface."""
        pass

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        pass

    @abstractmethod
    def stroke_polyline(self, points: Sequence[Point], color: Color, line_width: float = 1.0) -> None:
        """Stroke connected line segments through the given points."""
        pass

    @abstractmethod
    def fill_polygon(self, points: Sequence[Point], color: Color) -> None:
        pass

    @abstractmethod
    def fill_circle(self, center: Point, radius: float, color: Color) -> None:
        pass

    @abstractmethod
    def stroke_arc(
        self,
        center: Point,
        radius: float,
        start_angle: float,
        end_angle: float,
        color: Color,
        line_width: float = 1.0,
    ) -> None:
        pass

    @abstractmethod
    def draw_text(self, text: str, position: Point, color: Color, size: int = 14) -> None:
        """Draw text with its baseline starting at position."""
        pass

    def stroke_line(self, start: Point, end: Point, color: Color, line_width: float = 1.0) -> None:
        self.stroke_polyline([start, end], color, line_width)


@dataclass(frozen=True)
class DrawCommand:
    """One recorded call on a RecordingSurface."""

    name: str
    args: tuple[Any, ...]


class RecordingSurface(DrawingSurface):
    """Surface that records draw commands instead of drawing."""

    def __init__(self, width: int = 800, height: int = 400):
        super().__init__(width, height)
        self.commands: list[DrawCommand] = []

    def _record(self, name: str, *args: Any) -> None:
        self.commands.append(DrawCommand(name, args))

    def clear(self) -> None:
        self.commands.clear()
        self._record("clear")

    def fill_rect(self, x, y, width, height, color):
        self._record("fill_rect", x, y, width, height, color)

    def stroke_polyline(self, points, color, line_width=1.0):
        self._record("stroke_polyline", tuple(points), color, line_width)

    def fill_polygon(self, points, color):
        self._record("fill_polygon", tuple(points), color)

    def fill_circle(self, center, radius, color):
        self._record("fill_circle", center, radius, color)

    def stroke_arc(self, center, radius, start_angle, end_angle, color, line_width=1.0):
        self._record("stroke_arc", center, radius, start_angle, end_angle, color, line_width)

    def draw_text(self, text, position, color, size=14):
        self._record("draw_text", text, position, color, size)

    def named(self, name: str) -> list[DrawCommand]:
        """All recorded commands with the given name."""
        return [c for c in self.commands if c.name == name]

    def texts(self) -> list[str]:
        return [c.args[0] for c in self.named("draw_text")]


class RasterSurface(DrawingSurface):
    """
    OpenCV-backed surface drawing into a BGR uint8 image.

    Translucent colours are alpha-blended through an overlay copy.
    """

    def __init__(self, width: int = 800, height: int = 400, background: Color = Color(2, 6, 23)):
        super().__init__(width, height)
        self.background = background
        self.image = np.zeros((height, width, 3), dtype=np.uint8)
        self.clear()

    def clear(self) -> None:
        self.image[:] = self.background.bgr()

    def _draw(self, color: Color, draw) -> None:
        import cv2

        if color.a >= 1.0:
            draw(self.image, color.bgr())
            return

        alpha = max(0.0, color.a)
        overlay = self.image.copy()
        draw(overlay, color.bgr())
        cv2.addWeighted(overlay, alpha, self.image, 1 - alpha, 0, self.image)

    @staticmethod
    def _pixels(points: Sequence[Point]) -> np.ndarray:
        return np.array([_px_point(p) for p in points], dtype=np.int32)

    def fill_rect(self, x, y, width, height, color):
        import cv2

        top_left = (_px(x), _px(y))
        bottom_right = (_px(x + width) - 1, _px(y + height) - 1)
        self._draw(color, lambda img, c: cv2.rectangle(img, top_left, bottom_right, c, -1))

    def stroke_polyline(self, points, color, line_width=1.0):
        import cv2

        if len(points) < 2:
            return
        pts = self._pixels(points)
        thickness = max(1, round(line_width))
        self._draw(
            color,
            lambda img, c: cv2.polylines(img, [pts], False, c, thickness, cv2.LINE_AA),
        )

    def fill_polygon(self, points, color):
        import cv2

        pts = self._pixels(points)
        self._draw(color, lambda img, c: cv2.fillPoly(img, [pts], c, cv2.LINE_AA))

    def fill_circle(self, center, radius, color):
        import cv2

        c_px = _px_point(center)
        r_px = max(1, _px(radius))
        self._draw(color, lambda img, c: cv2.circle(img, c_px, r_px, c, -1, cv2.LINE_AA))

    def stroke_arc(self, center, radius, start_angle, end_angle, color, line_width=1.0):
        import cv2

        c_px = _px_point(center)
        r_px = max(1, _px(radius))
        thickness = max(1, round(line_width))
        self._draw(
            color,
            lambda img, c: cv2.ellipse(
                img, c_px, (r_px, r_px), 0,
                np.degrees(start_angle), np.degrees(end_angle),
                c, thickness, cv2.LINE_AA,
            ),
        )

    def draw_text(self, text, position, color, size=14):
        import cv2

        org = _px_point(position)
        # Hershey simplex is ~30 px tall at scale 1.0
        scale = size / 30
        self._draw(
            color,
            lambda img, c: cv2.putText(img, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, c, 1, cv2.LINE_AA),
        )

    def to_png(self) -> bytes:
        """Encode the current image as PNG."""
        import cv2

        ok, buffer = cv2.imencode(".png", self.image)
        if not ok:
            raise ValueError("Could not encode frame as PNG")
        return buffer.tobytes()

    def save(self, path: Path | str) -> Path:
        """Write the current image to disk; format follows the suffix."""
        import cv2

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(path), self.image):
            raise ValueError(f"Could not write image: {path}")
        return path

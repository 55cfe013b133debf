"""
Tests for frame and graph rendering.
"""

import dataclasses
import math

import pytest

from physai.models.scenario import Parameters, ScenarioType
from physai.parsing.problem_parser import extract
from physai.physics.kinematics import OpticsState
from physai.rendering.frames import FrameRenderer, render_frame
from physai.rendering.graph import render_graph, sample_curve
from physai.rendering.surface import Color, RasterSurface, RecordingSurface
from physai.scenarios import VARIANTS
from physai.simulation.clock import SimulationClock


def _record(scenario_type, parameters, t):
    surface = RecordingSurface(800, 400)
    render_frame(surface, scenario_type, parameters, t)
    return surface


class TestColor:
    """Tests for Color."""

    def test_from_hex(self):
        """Test hex parsing."""
        assert Color.from_hex("#64C8FF") == Color(100, 200, 255, 1.0)

    def test_bgr(self):
        """Test BGR channel order for OpenCV."""
        assert Color(1, 2, 3).bgr() == (3, 2, 1)


class TestRenderFrame:
    """Tests for render_frame."""

    @pytest.mark.parametrize("scenario_type", list(ScenarioType))
    def test_pure(self, scenario_type):
        """Test identical inputs produce identical drawing output."""
        params = Parameters(velocity=25, angle=60)
        a = _record(scenario_type, params, 0.75)
        b = _record(scenario_type, params, 0.75)
        assert a.commands == b.commands
        assert a.commands[0].name == "clear"

    def test_none_surface_is_noop(self):
        """Test a missing surface does not raise."""
        render_frame(None, ScenarioType.PROJECTILE, Parameters(), 1.0)

    def test_projectile_frame(self):
        """Test trajectory, marker, arrow and labels are drawn."""
        surface = _record(ScenarioType.PROJECTILE, Parameters(velocity=30, angle=45), 1.0)

        assert len(surface.named("fill_rect")) == 1  # ground
        assert len(surface.named("stroke_polyline")) == 2  # path + arrow shaft
        assert len(surface.named("fill_polygon")) == 1  # arrow head
        assert "t = 1.00 s" in surface.texts()
        assert any(text.startswith("v = ") for text in surface.texts())

    def test_projectile_path_independent_of_time(self):
        """Test the analytic path is the same at every t."""
        params = Parameters(velocity=30, angle=45)
        a = _record(ScenarioType.PROJECTILE, params, 0.1).named("stroke_polyline")[0]
        b = _record(ScenarioType.PROJECTILE, params, 2.0).named("stroke_polyline")[0]
        assert a == b

    def test_projectile_path_follows_parameters(self):
        """Test the path is redrawn for new parameters."""
        a = _record(ScenarioType.PROJECTILE, Parameters(velocity=30, angle=45), 1.0)
        b = _record(ScenarioType.PROJECTILE, Parameters(velocity=30, angle=60), 1.0)
        assert a.named("stroke_polyline")[0] != b.named("stroke_polyline")[0]

    def test_projectile_off_canvas(self):
        """Test the marker is suppressed once the ball has landed."""
        surface = _record(ScenarioType.PROJECTILE, Parameters(velocity=30, angle=45), 10.0)
        assert surface.named("fill_circle") == []
        assert surface.texts() == []
        assert len(surface.named("stroke_polyline")) == 1  # path only

    def test_arrow_head_points_along_velocity(self):
        """Test the head sits behind the tip for an upward arrow."""
        surface = _record(ScenarioType.PROJECTILE, Parameters(velocity=20, angle=90), 0.0)
        tip, left, right = surface.named("fill_polygon")[0].args[0]
        assert tip == pytest.approx((0.0, 250.0))
        assert left[1] > tip[1]
        assert right[1] > tip[1]

    def test_vertical_frame(self):
        """Test vertical marker position and labels."""
        surface = _record(ScenarioType.VERTICAL, Parameters(velocity=25), 1.0)
        ball = surface.named("fill_circle")[-1]
        center = ball.args[0]
        assert center[0] == 400
        assert center[1] == pytest.approx(350 - (25 - 4.9) * 10)
        assert "v = 15.2 m/s" in surface.texts()
        assert "h = 20.1 m" in surface.texts()

    def test_vertical_off_canvas(self):
        """Test nothing but the clear is issued below ground."""
        surface = _record(ScenarioType.VERTICAL, Parameters(velocity=25), 8.0)
        assert [c.name for c in surface.commands] == ["clear"]

    def test_pendulum_frame(self):
        """Test rod and bob at rest position."""
        surface = _record(ScenarioType.PENDULUM, Parameters(), 0.0)
        rod = surface.named("stroke_polyline")[0]
        assert rod.args[0][0] == (400.0, 50.0)
        assert rod.args[0][1] == pytest.approx((400.0, 200.0))
        bob = surface.named("fill_circle")[-1]
        assert bob.args[1] == 15

    def test_optics_frame(self):
        """Test lens, three rays and caption."""
        surface = _record(ScenarioType.OPTICS, Parameters(), 3.0)
        strokes = surface.named("stroke_polyline")
        assert len(strokes) == 4
        ray = strokes[1].args[0]
        assert ray == ((100.0, 150.0), (400.0, 150.0), (600.0, 165.0))
        assert surface.texts() == ["Converging Lens"]

    def test_optics_static(self):
        """Test optics frames do not change over time."""
        a = _record(ScenarioType.OPTICS, Parameters(), 0.0)
        b = _record(ScenarioType.OPTICS, Parameters(), 9.0)
        assert a.commands == b.commands

    def test_magnetic_frame(self):
        """Test poles, twelve arcs and labels."""
        surface = _record(ScenarioType.MAGNETIC, Parameters(), 0.5)
        assert len(surface.named("fill_rect")) == 2
        assert len(surface.named("stroke_arc")) == 12
        assert surface.texts() == ["N", "S"]

    def test_magnetic_animates(self):
        """Test arcs change with time."""
        a = _record(ScenarioType.MAGNETIC, Parameters(), 0.0).named("stroke_arc")
        b = _record(ScenarioType.MAGNETIC, Parameters(), 1.0).named("stroke_arc")
        assert a != b


    def test_dispatch_uses_variant_table(self, monkeypatch):
        """Test drawing goes through the variant registered for the scenario."""
        calls = []
        variant = dataclasses.replace(
            VARIANTS[ScenarioType.OPTICS],
            draw=lambda surface, params, state: calls.append(state),
        )
        monkeypatch.setitem(VARIANTS, ScenarioType.OPTICS, variant)

        render_frame(RecordingSurface(), ScenarioType.OPTICS, Parameters(), 1.0)

        assert calls == [OpticsState()]

    def test_long_arrow_keeps_heading(self):
        """Test very fast launches shorten the arrow along its direction."""
        surface = _record(ScenarioType.PROJECTILE, Parameters(velocity=1e6, angle=45), 0.0)
        tip = surface.named("fill_polygon")[0].args[0][0]
        reach = 2000 / math.sqrt(2)
        assert tip == pytest.approx((reach, 350 - reach))


class TestFrameRenderer:
    """Tests for FrameRenderer."""

    def test_renders_at_clock_time(self):
        """Test the renderer uses the clock's elapsed time."""
        clock = SimulationClock(step=0.5)
        clock.tick()
        clock.tick()

        surface = RecordingSurface()
        FrameRenderer(clock).render(surface, ScenarioType.PROJECTILE, Parameters(velocity=30))
        assert "t = 1.00 s" in surface.texts()

    def test_reset_keeps_parameters(self):
        """Test reset zeroes time only."""
        clock = SimulationClock()
        clock.tick()
        params = Parameters(velocity=33, angle=20, gravity=3.7)

        FrameRenderer(clock).reset()

        assert clock.elapsed_time == 0
        assert params == Parameters(velocity=33, angle=20, gravity=3.7)


class TestGraph:
    """Tests for render_graph."""

    def test_projectile_curve(self):
        """Test axes plus curve."""
        surface = RecordingSurface(400, 300)
        render_graph(surface, ScenarioType.PROJECTILE, Parameters(velocity=30, angle=45))
        strokes = surface.named("stroke_polyline")
        assert len(strokes) == 2
        assert surface.texts() == ["Time (s)", "Height (m)"]

    @pytest.mark.parametrize("scenario_type", [
        ScenarioType.PENDULUM,
        ScenarioType.OPTICS,
        ScenarioType.MAGNETIC,
    ])
    def test_axes_only(self, scenario_type):
        """Test decorative scenarios draw axes only."""
        surface = RecordingSurface(400, 300)
        render_graph(surface, scenario_type, Parameters())
        assert len(surface.named("stroke_polyline")) == 1
        assert sample_curve(scenario_type, Parameters()) == []

    def test_curve_points_in_plot_area(self):
        """Test samples are mapped and clipped to the axes."""
        points = sample_curve(ScenarioType.VERTICAL, Parameters(velocity=25))
        assert points[0] == (40.0, 260.0)
        assert all(40 <= y <= 260 for _, y in points)
        assert all(40 <= x <= 340 for x, _ in points)

    def test_curve_sampling_domain(self):
        """Test 101 samples over [0, 10] s when everything fits."""
        # Moon gravity keeps a slow launch on the plot for the full domain
        points = sample_curve(ScenarioType.VERTICAL, Parameters(velocity=8, gravity=1.6))
        assert len(points) == 101
        assert points[-1][0] == pytest.approx(340.0)

    def test_curve_follows_variant_height(self, monkeypatch):
        """Test the graph plots whatever height function the variant carries."""
        variant = dataclasses.replace(VARIANTS[ScenarioType.VERTICAL], height=None)
        monkeypatch.setitem(VARIANTS, ScenarioType.VERTICAL, variant)
        assert sample_curve(ScenarioType.VERTICAL, Parameters(velocity=25)) == []

    def test_none_surface_is_noop(self):
        """Test a missing graph surface does not raise."""
        render_graph(None, ScenarioType.VERTICAL, Parameters())


class TestRasterSurface:
    """Smoke tests for the OpenCV surface."""

    @pytest.mark.parametrize("scenario_type", list(ScenarioType))
    def test_draws_pixels(self, scenario_type):
        """Test each scenario changes the image."""
        surface = RasterSurface(800, 400)
        background = surface.image.copy()
        render_frame(surface, scenario_type, Parameters(velocity=30, angle=45), 0.5)

        assert surface.image.shape == (400, 800, 3)
        assert (surface.image != background).any()

    @pytest.mark.parametrize("scenario_type", [ScenarioType.PROJECTILE, ScenarioType.VERTICAL])
    def test_huge_velocity(self, scenario_type):
        """Test far off-canvas geometry is drawn without overflowing OpenCV."""
        params = extract("A ball goes up at 999999999999 m/s")
        for t in (0.0, 0.5):
            surface = RasterSurface(800, 400)
            render_frame(surface, scenario_type, params, t)
            assert surface.image.shape == (400, 800, 3)

    def test_far_coordinates(self):
        """Test primitives accept coordinates beyond the C int range."""
        surface = RasterSurface(200, 100)
        white = Color(255, 255, 255)
        surface.stroke_polyline([(10.0, 10.0), (1e12, -1e12)], white, 2)
        surface.fill_polygon([(0.0, 0.0), (-1e15, 50.0), (50.0, 1e15)], white)
        surface.fill_circle((-1e13, 1e13), 5, white)
        surface.draw_text("far", (1e12, 1e12), white)
        assert (surface.image != surface.background.bgr()).any()

    def test_png_export(self):
        """Test PNG encoding."""
        surface = RasterSurface(400, 300)
        render_graph(surface, ScenarioType.VERTICAL, Parameters())
        assert surface.to_png().startswith(b"\x89PNG")

    def test_save(self, tmp_path):
        """Test writing to disk."""
        surface = RasterSurface(800, 400)
        render_frame(surface, ScenarioType.MAGNETIC, Parameters(), 0.0)
        path = surface.save(tmp_path / "out" / "frame.png")
        assert path.exists()

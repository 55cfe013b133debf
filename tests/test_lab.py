"""
Tests for the PhysicsLab facade.
"""

import pytest
from pydantic import ValidationError

from physai.config import LabConfig
from physai.errors import EmptyProblemError, InvalidParameterError, NoScenarioError
from physai.lab import PhysicsLab
from physai.models.scenario import ScenarioType
from physai.models.session import ChangeSource
from physai.rendering.surface import RecordingSurface


@pytest.fixture
def lab():
    return PhysicsLab(config=LabConfig(frame_step=0.1))


class TestSubmitProblem:
    """Tests for problem submission."""

    def test_submit(self, lab):
        """Test a projectile problem."""
        record = lab.submit_problem("A projectile is launched at 45 degrees with 30 m/s")

        assert record.scenario_type == ScenarioType.PROJECTILE
        assert record.parameters.velocity == 30
        assert record.explanation.title == "Projectile Motion Analysis"
        assert lab.record is record

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_text_rejected(self, lab, text):
        """Test blank problems never reach the parser."""
        with pytest.raises(EmptyProblemError):
            lab.submit_problem(text)
        assert lab.record is None

    def test_new_problem_replaces_record(self, lab):
        """Test resubmission drops the old record and restarts the clock."""
        first = lab.submit_problem("A ball is thrown at 10 m/s")
        lab.apply_what_if("moon gravity")
        lab.tick()

        second = lab.submit_problem("A pendulum swings")

        assert lab.record is second
        assert second is not first
        assert second.parameters.gravity == 9.8
        assert lab.elapsed_time == 0.0
        assert lab.changes == []

    def test_record_identity_is_frozen(self, lab):
        """Test scenario type and problem text cannot be reassigned."""
        record = lab.submit_problem("A pendulum swings")
        with pytest.raises(ValidationError):
            record.scenario_type = ScenarioType.OPTICS
        with pytest.raises(ValidationError):
            record.problem_text = "something else"

    def test_explanation_not_recomputed(self, lab):
        """Test the explanation documents the problem as parsed."""
        record = lab.submit_problem("A ball goes up at 25 m/s")
        steps = record.explanation.steps

        lab.apply_what_if("double the velocity")

        assert record.parameters.velocity == 50
        assert record.explanation.steps == steps
        assert record.explanation.quantities["max_height"] == pytest.approx(31.89, abs=0.01)


class TestParameters:
    """Tests for slider and what-if mutation."""

    def test_set_parameter(self, lab):
        """Test a slider change."""
        lab.submit_problem("A projectile at 20 m/s")
        change = lab.set_parameter("angle", 60)

        assert lab.record.parameters.angle == 60
        assert change.original_value == 45
        assert change.source == ChangeSource.SLIDER
        assert lab.changes == [change]

    def test_invalid_value_rejected(self, lab):
        """Test invariant violations are refused and leave state intact."""
        lab.submit_problem("A projectile at 20 m/s")
        with pytest.raises(InvalidParameterError):
            lab.set_parameter("gravity", 0)
        with pytest.raises(InvalidParameterError):
            lab.set_parameter("angle", 91)
        assert lab.record.parameters.gravity == 9.8
        assert lab.record.parameters.angle == 45

    def test_unknown_parameter(self, lab):
        """Test unknown names are refused."""
        lab.submit_problem("A projectile at 20 m/s")
        with pytest.raises(InvalidParameterError):
            lab.set_parameter("mass", 3)
        with pytest.raises(InvalidParameterError):
            lab.set_parameter("elapsed_time", 3)

    def test_requires_problem(self, lab):
        """Test mutation without a problem."""
        with pytest.raises(NoScenarioError):
            lab.set_parameter("velocity", 10)
        with pytest.raises(NoScenarioError):
            lab.apply_what_if("moon gravity")

    def test_what_if(self, lab):
        """Test what-if commands through the lab."""
        lab.submit_problem("A ball at 20 m/s")
        assert lab.apply_what_if("double the velocity").new_value == 40
        assert lab.apply_what_if("hello") is None
        assert len(lab.changes) == 1

    def test_change_ledger(self, lab):
        """Test slider and what-if changes share one ordered ledger."""
        lab.submit_problem("A projectile at 20 m/s")
        lab.apply_what_if("moon gravity")
        lab.apply_what_if("hello")
        lab.set_parameter("velocity", 25)
        lab.apply_what_if("double velocity")

        assert [(c.parameter_name, c.source) for c in lab.changes] == [
            ("gravity", ChangeSource.WHAT_IF),
            ("velocity", ChangeSource.SLIDER),
            ("velocity", ChangeSource.WHAT_IF),
        ]
        assert lab.changes[0].describe() == "Change gravity from 9.8 to 1.6"
        assert lab.changes[-1].new_value == 50

    def test_sliders(self, lab):
        """Test slider set per scenario."""
        lab.submit_problem("A projectile")
        assert [s.name for s in lab.sliders()] == ["velocity", "angle", "gravity"]


class TestClockControls:
    """Tests for play, pause and reset."""

    def test_reset_keeps_parameters(self, lab):
        """Test reset zeroes time and leaves parameters unchanged."""
        lab.submit_problem("A projectile at 30 m/s")
        lab.apply_what_if("moon gravity")
        lab.tick()
        lab.tick()
        before = lab.record.parameters.model_dump()

        lab.reset()

        assert lab.elapsed_time == 0.0
        assert lab.record.parameters.model_dump() == before

    def test_toggle_play(self, lab):
        """Test pausing stops the clock."""
        lab.submit_problem("A projectile")
        assert lab.toggle_play() is False
        lab.tick()
        assert lab.elapsed_time == 0.0


class TestRendering:
    """Tests for lab rendering."""

    def test_render_without_problem_is_noop(self, lab):
        """Test nothing is drawn before a problem is submitted."""
        surface = RecordingSurface()
        lab.render_frame(surface)
        lab.render_graph(surface)
        assert surface.commands == []

    def test_render_frame_uses_clock(self, lab):
        """Test frames are drawn at the clock's time."""
        lab.submit_problem("A projectile at 30 m/s")
        for _ in range(10):
            lab.tick()

        surface = RecordingSurface()
        lab.render_frame(surface)
        assert "t = 1.00 s" in surface.texts()

    def test_loop_picks_up_what_if(self, lab):
        """Test a what-if between ticks reaches the next frame."""
        lab.submit_problem("A ball goes up at 10 m/s")
        seen = []
        loop = lab.create_loop(lambda scenario_type, params, state, t: seen.append(params.velocity))

        loop.tick()
        lab.apply_what_if("double velocity")
        loop.tick()
        loop.close()

        assert seen == [10, 20]

    def test_render_after_repeated_doubling(self, lab):
        """Test frames still render once the velocity has grown enormous."""
        lab.submit_problem("A ball goes up at 20 m/s")
        for _ in range(30):
            lab.apply_what_if("double the velocity")

        canvas = lab.new_canvas()
        lab.render_frame(canvas)
        lab.render_graph(lab.new_graph_canvas())
        assert canvas.to_png().startswith(b"\x89PNG")

    def test_canvases(self, lab):
        """Test canvas sizes follow the config."""
        assert lab.new_canvas().image.shape == (400, 800, 3)
        assert lab.new_graph_canvas().image.shape == (300, 400, 3)

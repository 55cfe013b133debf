"""Keyword classification and parameter extraction for word problems."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

import structlog

from physai.models.scenario import EARTH_GRAVITY, Explanation, Parameters, ScenarioType
from physai.parsing.explanation import generate_explanation

logger = structlog.get_logger(__name__)

# Keyword cascade, checked top to bottom. The first matching entry wins,
# anything unmatched falls through to VERTICAL.
_CLASSIFICATION_CASCADE: tuple[tuple[ScenarioType, tuple[str, ...]], ...] = (
    (ScenarioType.PENDULUM, ("pendulum", "swing")),
    (ScenarioType.OPTICS, ("lens", "mirror", "refract", "reflect")),
    (ScenarioType.MAGNETIC, ("magnet", "field", "magnetic")),
)

_NUMBER = r"(\d+\.?\d*)"


@dataclass
class ProblemParserConfig:
    """Defaults used when a field has no match in the problem text."""

    default_velocity: float = 20.0
    default_angle: float = 45.0
    default_height: float = 0.0
    gravity: float = EARTH_GRAVITY
    max_angle: float = 90.0


@dataclass
class ParsedProblem:
    """Result of parsing one problem statement."""

    scenario_type: ScenarioType
    parameters: Parameters
    explanation: Explanation


class ProblemParser:
    """
    Turns free-text physics problems into a scenario and its parameters.

    Parsing never fails: every field that cannot be found falls back to
    its configured default. Rejecting blank input is the caller's job.
    """

    def __init__(self, config: ProblemParserConfig | None = None):
        self.config = config or ProblemParserConfig()

        self.patterns = {
            "velocity": re.compile(_NUMBER + r"\s*m/s"),
            "angle_degrees": re.compile(_NUMBER + r"\s*degree"),
            "angle_keyword": re.compile(r"angle.*?" + _NUMBER),
            # "m" or "meter(s)" but never the start of "m/s", "ms", "minutes"...
            "height": re.compile(_NUMBER + r"\s*m(?:eters?)?(?![\w/])"),
        }

    def classify(self, text: str) -> ScenarioType:
        """Classify a problem by keyword, first match wins."""
        lowered = text.lower()

        if (
            "projectile" in lowered
            or "thrown" in lowered
            or ("angle" in lowered and "horizontal" in lowered)
        ):
            return ScenarioType.PROJECTILE

        for scenario_type, keywords in _CLASSIFICATION_CASCADE:
            if any(keyword in lowered for keyword in keywords):
                return scenario_type

        return ScenarioType.VERTICAL

    def extract(self, text: str) -> Parameters:
        """Extract numeric parameters, falling back to defaults per field."""
        lowered = text.lower()

        velocity = self._first_number(lowered, "velocity") or self.config.default_velocity
        angle = (
            self._first_number(lowered, "angle_degrees")
            or self._first_number(lowered, "angle_keyword")
            or self.config.default_angle
        )
        height = self._first_number(lowered, "height") or self.config.default_height

        return Parameters(
            velocity=velocity,
            angle=min(angle, self.config.max_angle),
            height=height,
            gravity=self.config.gravity,
            elapsed_time=0.0,
        )

    def parse(self, text: str) -> ParsedProblem:
        """Classify, extract and explain a problem in one pass."""
        scenario_type = self.classify(text)
        parameters = self.extract(text)

        logger.info(
            "Parsed problem",
            scenario_type=scenario_type.value,
            velocity=parameters.velocity,
            angle=parameters.angle,
            height=parameters.height,
        )

        return ParsedProblem(
            scenario_type=scenario_type,
            parameters=parameters,
            explanation=generate_explanation(scenario_type, parameters),
        )

    def _first_number(self, text: str, pattern_name: str) -> Optional[float]:
        """First captured number for a pattern; zero counts as missing."""
        match = self.patterns[pattern_name].search(text)
        if not match:
            return None
        value = float(match.group(1))
        return value if value > 0 else None


_default_parser = ProblemParser()


def classify(text: str) -> ScenarioType:
    """Classify with the default parser."""
    return _default_parser.classify(text)


def extract(text: str) -> Parameters:
    """Extract parameters with the default parser."""
    return _default_parser.extract(text)


def parse_problem(text: str) -> ParsedProblem:
    """Parse with the default parser."""
    return _default_parser.parse(text)

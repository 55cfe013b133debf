"""
What-if commands.

A command is matched against an ordered rule list. The first rule that
matches fires and every later rule is skipped, even if it would also
match: "double velocity on the moon" only doubles the velocity.
Commands matching nothing leave the parameters untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from physai.models.scenario import Parameters
from physai.models.session import ChangeSource, ParameterChange

logger = structlog.get_logger(__name__)

MOON_GRAVITY = 1.6
DEFAULT_ANGLE = 45.0
MAX_ANGLE = 90.0

_INTEGER = re.compile(r"\d+")


@dataclass(frozen=True)
class WhatIfRule:
    """One command pattern and the single parameter it rewrites."""

    name: str
    parameter_name: str
    matches: Callable[[str], bool]
    new_value: Callable[[Parameters, str], float]


def _angle_from_command(parameters: Parameters, command: str) -> float:
    match = _INTEGER.search(command)
    angle = float(match.group()) if match else DEFAULT_ANGLE
    return min(angle, MAX_ANGLE)


RULES: tuple[WhatIfRule, ...] = (
    WhatIfRule(
        name="double_velocity",
        parameter_name="velocity",
        matches=lambda c: "double" in c and "velocity" in c,
        new_value=lambda p, c: p.velocity * 2,
    ),
    WhatIfRule(
        name="moon_gravity",
        parameter_name="gravity",
        matches=lambda c: "moon" in c or "1.6" in c,
        new_value=lambda p, c: MOON_GRAVITY,
    ),
    WhatIfRule(
        name="set_angle",
        parameter_name="angle",
        matches=lambda c: "angle" in c,
        new_value=_angle_from_command,
    ),
)


def interpret(command: str) -> Optional[WhatIfRule]:
    """The rule a command would fire, without applying it."""
    lowered = command.lower()
    for rule in RULES:
        if rule.matches(lowered):
            return rule
    return None


def apply_what_if(parameters: Parameters, command: str) -> Optional[ParameterChange]:
    """
    Apply a what-if command to parameters in place.

    Args:
        parameters: Parameters to mutate
        command: Free-text command, any case

    Returns:
        The applied change, or None when no rule matched
    """
    rule = interpret(command)
    if rule is None:
        logger.debug("What-if command matched no rule", command=command)
        return None

    lowered = command.lower()
    original = getattr(parameters, rule.parameter_name)
    new_value = rule.new_value(parameters, lowered)
    setattr(parameters, rule.parameter_name, new_value)

    change = ParameterChange(
        parameter_name=rule.parameter_name,
        original_value=original,
        new_value=new_value,
        source=ChangeSource.WHAT_IF,
        rule=rule.name,
    )
    logger.info("Applied what-if", rule=rule.name, change=change.describe())
    return change


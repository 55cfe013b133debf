"""
Problem parsing.

Classifies word problems, extracts their parameters and derives the
explanation shown next to the simulation.
"""

from physai.parsing.explanation import (
    generate_explanation,
    live_calculations,
    projectile_quantities,
    vertical_quantities,
)
from physai.parsing.problem_parser import (
    ParsedProblem,
    ProblemParser,
    ProblemParserConfig,
    classify,
    extract,
    parse_problem,
)

__all__ = [
    "ProblemParser",
    "ProblemParserConfig",
    "ParsedProblem",
    "classify",
    "extract",
    "parse_problem",
    "generate_explanation",
    "live_calculations",
    "projectile_quantities",
    "vertical_quantities",
]

"""
What-if analysis.

Free-text commands that change a running scenario's parameters.
"""

from physai.whatif.interpreter import (
    RULES,
    WhatIfRule,
    apply_what_if,
    interpret,
)

__all__ = [
    "RULES",
    "WhatIfRule",
    "apply_what_if",
    "interpret",
]

"""Exceptions raised at the lab's outer boundary."""


class PhysAIError(ValueError):
    """Base class for lab errors."""


class EmptyProblemError(PhysAIError):
    """Raised when a blank problem is submitted."""


class InvalidParameterError(PhysAIError):
    """Raised when a parameter name is unknown or a value breaks its bounds."""


class NoScenarioError(PhysAIError):
    """Raised when an operation needs a submitted problem and there is none."""

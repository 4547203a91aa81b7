# File: core/exceptions.py
"""
Error types raised by the correction engine.

Both errors derive from CorrectionError so callers can catch the engine's
failures as one family, and from the matching builtin so code that already
handles ValueError / ArithmeticError keeps working.
"""


class CorrectionError(Exception):
    """Base class for all correction engine failures."""


class InvalidInput(CorrectionError, ValueError):
    """Raised before any computation when an input is missing, non-numeric or out of domain."""


class ConvergenceError(CorrectionError, ArithmeticError):
    """Raised when the base density iteration does not meet its tolerance."""

    def __init__(self, iterations: int, message: str = None):
        self.iterations = iterations
        if message is None:
            message = f"Density @ 60F did not converge after {iterations} iterations."
        super().__init__(message)

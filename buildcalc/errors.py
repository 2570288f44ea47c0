"""
Validation failures raised by the estimators.

Both kinds are recovered inside BaseCalculator.calculate() and turned into a
short diagnostic; they never reach the caller of an estimator.
"""


class CalculationError(Exception):
    """Base class for estimator failures."""


class ParseError(CalculationError):
    """A required field is missing or is not a valid decimal."""


class LogicalInconsistency(CalculationError):
    """The inputs parse but cannot produce a meaningful quantity."""

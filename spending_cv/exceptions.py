"""
Exception types raised by the spending cross-validation pipeline.

All errors derive from ValueError so callers that already guard bad input
with ``except ValueError`` keep working.
"""

from typing import Optional


class SpendingCVError(Exception):
    """Base class for pipeline errors."""


class InvalidConfigurationError(SpendingCVError, ValueError):
    """Raised when a run parameter is out of range (fold count, resamples, bounds, workers)."""


class InsufficientDataError(SpendingCVError, ValueError):
    """
    Raised when there is not enough data to fit a model or bootstrap.

    Parameters:
    -----------
    message : str
        Description of the failure
    fold : int, optional
        Cross-validation fold in which the failure happened
    """

    def __init__(self, message: str, fold: Optional[int] = None):
        super().__init__(message)
        self.fold = fold

    def __reduce__(self):
        # keep ``fold`` when the error crosses a worker process boundary
        return (self.__class__, (self.args[0], self.fold))


class EmptyFoldError(SpendingCVError, ValueError):
    """Raised when a fold has no training or no held-out records."""

    def __init__(self, message: str, fold: Optional[int] = None):
        super().__init__(message)
        self.fold = fold

    def __reduce__(self):
        return (self.__class__, (self.args[0], self.fold))

"""
corrkit Exceptions
==================
Centralized exception hierarchy for the corrkit package.
"""


class CorrkitError(Exception):
    """Base class for all corrkit exceptions."""
    pass


class InputError(CorrkitError, ValueError):
    """Raised when a dataset cannot produce a correlation matrix (e.g., fewer than 2 numeric columns)."""
    pass


class InvalidArgumentError(CorrkitError, ValueError):
    """Raised when a function receives an option of an invalid type or value."""
    pass


class VariableNotFoundError(CorrkitError, LookupError):
    """Raised when a selection names a variable that is not in the matrix."""

    def __init__(self, missing, available):
        self.missing = list(missing)
        self.available = list(available)
        super().__init__(
            f"Unknown variable(s) {self.missing}. "
            f"Available: {self.available}."
        )


class OrderingError(CorrkitError):
    """Raised when a reordering strategy does not return a permutation of the variables."""
    pass


class MissingDependencyError(CorrkitError, ImportError):
    """Raised when an optional external dependency (e.g., matplotlib) is not installed."""
    pass

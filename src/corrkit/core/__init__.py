from .exceptions import (
    CorrkitError,
    InputError,
    InvalidArgumentError,
    MissingDependencyError,
    OrderingError,
    VariableNotFoundError,
)

__all__ = [
    "CorrkitError",
    "InputError",
    "InvalidArgumentError",
    "MissingDependencyError",
    "OrderingError",
    "VariableNotFoundError",
]

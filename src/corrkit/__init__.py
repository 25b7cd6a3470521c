"""
corrkit - Correlation Data Frames
=================================

Explore correlation matrices as data: compute them with pairwise deletion,
mask, reorder, narrow, reshape, format and plot them.

Subpackages:
------------
- analysis.correlation: CorrelationMatrix and the exploration operations
- core: exception hierarchy
- schemas: logging setup
"""

__version__ = "0.1.0"

from .analysis.correlation import (
    CorrelationMatrix,
    LongForm,
    LongFormEntry,
    correlate,
    dice,
    fashion,
    focus,
    focus_if,
    rearrange,
    retract,
    rplot,
    shave,
    stretch,
)
from .core.exceptions import CorrkitError, InputError, VariableNotFoundError

__all__ = [
    "CorrelationMatrix",
    "LongForm",
    "LongFormEntry",
    "correlate",
    "shave",
    "rearrange",
    "focus",
    "focus_if",
    "dice",
    "stretch",
    "retract",
    "fashion",
    "rplot",
    "CorrkitError",
    "InputError",
    "VariableNotFoundError",
]

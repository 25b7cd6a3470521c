"""
``corrkit.analysis.correlation`` — Correlation data frames for exploratory analysis.

Quick-start
-----------
>>> from corrkit.analysis import correlation as corr
>>>
>>> m = corr.correlate(df)            # pairwise deletion, NaN diagonal
>>> m.rearrange().shave()             # cluster order, lower triangle only
>>> corr.focus(m, ["mpg", "hp"])      # rectangular table
>>> m.dice(["mpg", "hp", "wt"])       # square sub-matrix
>>> m.stretch(na_rm=True)             # long (x, y, r) form
>>> corr.fashion(m.shave())           # display strings
>>> m.rplot(print_cor=True)           # matplotlib dot plot

Classes
-------
CorrelationMatrix
    Named square table with a missing diagonal; every operation returns a
    new object.
LongForm, LongFormEntry
    Row-major ``(x, y, r)`` records produced by ``stretch``.
"""

from .frame import (
    CorrelationMatrix,
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
from .longform import LongForm, LongFormEntry
from .ordering import ORDERINGS
from .pairwise import CORRELATION_METHODS

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
    "ORDERINGS",
    "CORRELATION_METHODS",
]

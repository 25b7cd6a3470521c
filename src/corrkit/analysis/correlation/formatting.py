"""
Display formatting for correlation tables.

``fashion`` turns numbers into display strings; ``latex_table`` wraps the
result in a booktabs table.  Neither changes any value.
"""

from __future__ import annotations

import operator
from typing import Optional, Sequence

import pandas as pd

from ...core.exceptions import InvalidArgumentError


def format_value(
        value,
        decimals: int = 2,
        leading_zeros: bool = False,
        na_print: str = "",
) -> str:
    """Round a single cell for display.

    >>> format_value(0.704)
    '.70'
    >>> format_value(-0.7, leading_zeros=True)
    '-0.70'
    """
    if value is None or pd.isna(value):
        return na_print
    text = f"{float(value):.{decimals}f}"
    if not leading_zeros:
        if text.startswith("0."):
            text = text[1:]
        elif text.startswith("-0."):
            text = "-" + text[2:]
    # -0.00 and friends
    if text.startswith("-") and float(text) == 0:
        text = text[1:]
    return text


def _check_decimals(decimals) -> int:
    try:
        if isinstance(decimals, bool):
            raise TypeError
        decimals = operator.index(decimals)
    except TypeError:
        decimals = None
    if decimals is None or decimals < 0:
        raise InvalidArgumentError("decimals must be a non-negative int.")
    return decimals


def free_label(columns, label: str = "term") -> str:
    """*label*, prefixed with underscores until it clashes with none of *columns*."""
    taken = {str(c) for c in columns}
    while label in taken:
        label = "_" + label
    return label


def fashion_frame(
        table: pd.DataFrame,
        decimals: int = 2,
        leading_zeros: bool = False,
        na_print: str = "",
        label: str = "term",
) -> pd.DataFrame:
    """Format every numeric cell of *table*; the index becomes a *label* column.

    Raises ``InvalidArgumentError`` when *label* is also a column of *table*.
    """
    decimals = _check_decimals(decimals)
    if label in {str(c) for c in table.columns}:
        raise InvalidArgumentError(
            f"Label column '{label}' clashes with a variable name; pass another label."
        )

    cells = {}
    for col in table.columns:
        series = table[col]
        if pd.api.types.is_numeric_dtype(series) and not pd.api.types.is_bool_dtype(series):
            cells[str(col)] = [
                format_value(v, decimals, leading_zeros, na_print) for v in series
            ]
        else:
            cells[str(col)] = [str(v) for v in series]
    out = pd.DataFrame(cells, index=range(len(table)), columns=[str(c) for c in table.columns])
    out.insert(0, label, [str(t) for t in table.index])
    return out


def latex_table(
        fashioned: pd.DataFrame,
        caption: Optional[str] = None,
        label: Optional[str] = None,
) -> str:
    r"""Generate a LaTeX table string from a fashioned frame.

    Parameters
    ----------
    fashioned : pandas.DataFrame
        Output of ``fashion_frame`` (first column ``term``).
    caption, label : str, optional
        LaTeX ``\caption{}`` and ``\label{}`` values.

    Returns
    -------
    str
        Ready-to-paste LaTeX code (requires ``booktabs``).
    """
    names: Sequence[str] = [c.replace("_", r"\_") for c in fashioned.columns[1:]]
    col_spec = "l" + "r" * len(names)
    lines = [
        r"\begin{table}[ht]",
        r"\centering",
    ]
    if caption:
        lines.append(rf"\caption{{{caption}}}")
    if label:
        lines.append(rf"\label{{{label}}}")
    lines += [
        rf"\begin{{tabular}}{{{col_spec}}}",
        r"\toprule",
        " & ".join([""] + list(names)) + r" \\",
        r"\midrule",
    ]
    for row in fashioned.itertuples(index=False):
        cells = [str(row[0]).replace("_", r"\_")] + [str(c) for c in row[1:]]
        lines.append(" & ".join(cells) + r" \\")
    lines += [r"\bottomrule", r"\end{tabular}", r"\end{table}"]
    return "\n".join(lines)

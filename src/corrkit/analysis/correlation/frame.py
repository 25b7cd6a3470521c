"""
Correlation data frames.

This module provides the ``CorrelationMatrix`` class, a named square table
of pairwise correlations whose diagonal is always missing, together with
the functional API used to explore it.  Every operation returns a new
object; the input matrix is never modified.

Functions
---------
correlate
    Pairwise-deletion correlation of a tabular dataset.
shave
    Mask the upper or lower triangle.
rearrange
    Reorder variables by clustering on correlation distance.
focus, focus_if, dice
    Select columns (rectangular table) or a square sub-matrix.
stretch, retract
    Convert to and from long (x, y, r) form.
fashion
    Round for display.
rplot
    Hand the long form to the matplotlib collaborator.

Example
-------
>>> import corrkit as ck
>>> m = ck.correlate(df)
>>> m.rearrange().shave().fashion()
>>> ck.focus(m, ["mpg", "hp"])
>>> m.stretch(na_rm=True).to_dataframe()
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Callable, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ...core.exceptions import InputError, InvalidArgumentError, VariableNotFoundError
from ...schemas.logging import get_logger
from . import formatting, plotting
from .longform import LONG_COLUMNS, LongForm, flatten
from .ordering import channel_groups, compute_order
from .pairwise import pairwise_matrix

logger = get_logger("corrkit.correlate")

TRIANGLES = ("upper", "lower")

# Tolerance when validating that supplied coefficients lie in [-1, 1]
_R_TOL = 1e-9


# ═══════════════════════════════════════════════════════════════════════════
#  CorrelationMatrix
# ═══════════════════════════════════════════════════════════════════════════

class CorrelationMatrix:
    """Named square correlation table with a missing (``NaN``) diagonal.

    Parameters
    ----------
    table : pandas.DataFrame, array-like or CorrelationMatrix
        Square table of coefficients.  A DataFrame must carry the same
        labels, in the same order, on both axes.
    names : list[str], optional
        Variable names for an array input (default ``v1 .. vN``), or
        replacement labels for a DataFrame.
    method : str, optional
        Name of the correlation method the values came from.

    Notes
    -----
    The diagonal is forced to ``NaN`` whatever *table* holds, so
    self-correlation never leaks into aggregation or plotting.  Symmetry is
    guaranteed by ``correlate`` but not enforced here, since a shaved
    matrix is deliberately asymmetric.

    Examples
    --------
    >>> m = CorrelationMatrix(np.full((3, 3), 0.7), names=["a", "b", "c"])
    >>> m.shave().stretch(na_rm=True)
    LongForm(n=3, missing=0)
    """

    __hash__ = None

    def __init__(
            self,
            table,
            names: Optional[Sequence[str]] = None,
            method: Optional[str] = None,
    ):
        if isinstance(table, CorrelationMatrix):
            method = method if method is not None else table.method
            table = table._table

        if isinstance(table, pd.DataFrame):
            if list(table.index) != list(table.columns):
                raise InputError(
                    "Correlation table must have identical row and column labels."
                )
            labels = list(table.columns) if names is None else list(names)
            arr = table.to_numpy(dtype=np.float64, na_value=np.nan, copy=True)
        else:
            arr = np.array(table, dtype=np.float64)
            if arr.ndim != 2:
                raise InputError(f"Correlation table must be 2-D, got ndim={arr.ndim}.")
            labels = (
                list(names) if names is not None
                else [f"v{i + 1}" for i in range(arr.shape[1])]
            )

        if arr.shape[0] != arr.shape[1]:
            raise InputError(f"Correlation table must be square, got shape {arr.shape}.")
        labels = [str(n) for n in labels]
        if len(labels) != arr.shape[0]:
            raise InputError(
                f"Got {len(labels)} names for a {arr.shape[0]}×{arr.shape[0]} table."
            )
        if len(set(labels)) != len(labels):
            raise InputError(f"Variable names must be unique, got {labels}.")
        if np.any(np.abs(arr[~np.isnan(arr)]) > 1.0 + _R_TOL):
            raise InputError("Correlation coefficients must lie in [-1, 1].")

        np.fill_diagonal(arr, np.nan)
        self._table = pd.DataFrame(
            arr, index=pd.Index(labels, name="term"), columns=labels
        )
        self.method = method

    # ── array-like access ──────────────────────────────────────────────

    @property
    def names(self) -> list[str]:
        return list(self._table.columns)

    @property
    def values(self) -> np.ndarray:
        """Copy of the coefficient array (``NaN`` for missing cells)."""
        return self._table.to_numpy(dtype=np.float64, copy=True)

    @property
    def shape(self) -> tuple:
        return self._table.shape

    def __len__(self):
        return len(self._table.columns)

    def __contains__(self, name) -> bool:
        return name in self._table.columns

    def __getitem__(self, key):
        """``m["a"]`` returns a column as a Series, ``m["a", "b"]`` one cell."""
        if isinstance(key, tuple):
            row, col = key
            self._resolve([row, col])
            return float(self._table.at[row, col])
        self._resolve([key])
        return self._table[key].copy()

    def to_dataframe(self) -> pd.DataFrame:
        """Copy of the square table (index name ``term``)."""
        return self._table.copy()

    def equals(self, other: "CorrelationMatrix") -> bool:
        """Same names in the same order and the same values (``NaN == NaN``)."""
        return (
            isinstance(other, CorrelationMatrix)
            and self.names == other.names
            and np.array_equal(self.values, other.values, equal_nan=True)
        )

    def __eq__(self, other):
        if not isinstance(other, CorrelationMatrix):
            return NotImplemented
        return self.equals(other)

    # ── internals ──────────────────────────────────────────────────────

    def _derive(self, arr: np.ndarray, names: Optional[Sequence[str]] = None) -> "CorrelationMatrix":
        return CorrelationMatrix(
            arr, names=self.names if names is None else names, method=self.method
        )

    def _resolve(self, columns) -> list[str]:
        if isinstance(columns, str) or not isinstance(columns, Iterable):
            columns = [columns]
        requested = list(dict.fromkeys(columns))
        missing = [c for c in requested if c not in self._table.columns]
        if missing:
            raise VariableNotFoundError(missing, self.names)
        return requested

    # ── operations ─────────────────────────────────────────────────────

    def shave(self, triangle: str = "upper") -> "CorrelationMatrix":
        """Mask one triangle.

        ``"upper"`` masks cells with row index < column index in the
        current order, ``"lower"`` the opposite.  Idempotent.
        """
        if triangle not in TRIANGLES:
            raise InvalidArgumentError(
                f"Unknown triangle '{triangle}'. Choose from {list(TRIANGLES)}."
            )
        arr = self.values
        n = arr.shape[0]
        if triangle == "upper":
            mask = np.triu(np.ones((n, n), dtype=bool), k=1)
        else:
            mask = np.tril(np.ones((n, n), dtype=bool), k=-1)
        arr[mask] = np.nan
        return self._derive(arr)

    def rearrange(
            self,
            method: Union[str, Callable] = "hclust",
            absolute: bool = True,
            linkage: str = "average",
    ) -> "CorrelationMatrix":
        """Permute rows and columns together so similar variables sit close.

        Parameters
        ----------
        method : ``"hclust"`` | ``"pca"`` | callable
            Ordering strategy; a callable receives the N×N distance matrix
            and returns a permutation of ``range(N)``.
        absolute : bool
            Distance ``1 - |r|`` (default) or ``1 - r``.
        linkage : str
            Linkage criterion for ``"hclust"``.
        """
        order = compute_order(self.values, method=method, absolute=absolute, linkage=linkage)
        arr = self.values[np.ix_(order, order)]
        return self._derive(arr, names=[self.names[i] for i in order])

    def focus(
            self,
            columns: Union[str, Iterable[str]],
            exclude: bool = False,
            mirror: bool = False,
    ):
        """Select columns.

        Parameters
        ----------
        columns : str or iterable of str
            Variables to keep (or to drop with ``exclude=True``).
        exclude : bool
            Negative selection: keep every column *not* named.
        mirror : bool
            Return a square ``CorrelationMatrix`` over the selection instead
            of a rectangular table.

        Returns
        -------
        pandas.DataFrame or CorrelationMatrix
            Without *mirror*: rows for every variable (index ``term``),
            one column per selected variable.
        """
        requested = self._resolve(columns)
        if exclude:
            dropped = set(requested)
            selected = [n for n in self.names if n not in dropped]
        else:
            selected = requested
        if not selected:
            raise InvalidArgumentError("Selection leaves no variables.")

        if mirror:
            pos = {n: i for i, n in enumerate(self.names)}
            idx = [pos[n] for n in selected]
            return self._derive(self.values[np.ix_(idx, idx)], names=selected)
        return self._table.loc[:, selected].copy()

    def dice(self, columns: Union[str, Iterable[str]]) -> "CorrelationMatrix":
        """Square sub-matrix over *columns* (``focus(..., mirror=True)``)."""
        return self.focus(columns, mirror=True)

    def focus_if(self, predicate: Callable[[pd.Series], bool], mirror: bool = False):
        """``focus`` on the columns for which ``predicate(column)`` is truthy.

        >>> m.focus_if(lambda col: (col.abs() > 0.5).any())
        """
        selected = [n for n in self.names if predicate(self._table[n].copy())]
        if not selected:
            raise InvalidArgumentError("No column satisfies the predicate.")
        return self.focus(selected, mirror=mirror)

    def stretch(self, na_rm: bool = False, remove_dups: bool = False) -> LongForm:
        """Flatten to ``(x, y, r)`` entries, row-major in the current order.

        Parameters
        ----------
        na_rm : bool
            Drop missing cells (diagonal, shaved triangle, undefined pairs).
        remove_dups : bool
            Keep one cell per unordered pair by masking the upper triangle
            first.
        """
        source = self.shave("upper") if remove_dups else self
        return flatten(source._table, na_rm=na_rm)

    def fashion(
            self,
            decimals: int = 2,
            leading_zeros: bool = False,
            na_print: str = "",
            label: str = "term",
    ) -> pd.DataFrame:
        """Display-ready table of strings with a leading *label* column.

        A variable already named *label* raises ``InvalidArgumentError``.
        """
        return formatting.fashion_frame(self._table, decimals, leading_zeros, na_print, label)

    def to_latex(
            self,
            decimals: int = 2,
            caption: Optional[str] = None,
            label: Optional[str] = None,
    ) -> str:
        """Booktabs LaTeX table of the fashioned matrix."""
        return formatting.latex_table(
            self.fashion(
                decimals=decimals,
                leading_zeros=True,
                label=formatting.free_label(self.names),
            ),
            caption=caption,
            label=label,
        )

    def rplot(self, **kwargs):
        """Dot plot of the non-missing cells; see ``plotting.rplot``."""
        return plotting.rplot(self.stretch(na_rm=True), self.names, **kwargs)

    def groups(self, threshold: float = 0.9) -> list[list[str]]:
        """Variables linked by a chain of pairwise |r| >= *threshold*.

        Uses single-linkage; singletons are variables with no redundant
        partner.
        """
        names = self.names
        return [[names[i] for i in g] for g in channel_groups(self.values, threshold)]

    # ── summary ────────────────────────────────────────────────────────

    def summary(self) -> str:
        """Quick diagnostic string."""
        arr = self.values
        n = arr.shape[0]
        off = arr[~np.eye(n, dtype=bool)]
        defined = off[~np.isnan(off)]

        lines = [f"Correlation matrix  |  n={n}, method={self.method}"]
        if defined.size:
            lines.append(
                f"  Pairwise |r|   mean={np.mean(np.abs(defined)):.4f}  "
                f"max={np.max(np.abs(defined)):.4f}"
            )
        lines.append(f"  Missing cells   {off.size - defined.size}/{off.size} off-diagonal")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"CorrelationMatrix(n={len(self)}, method={self.method!r}, names={self.names})"

    def __str__(self) -> str:
        return self.fashion(label=formatting.free_label(self.names)).to_string(index=False)


# ═══════════════════════════════════════════════════════════════════════════
#  Construction
# ═══════════════════════════════════════════════════════════════════════════

def _as_frame(data, names: Optional[Sequence[str]]) -> pd.DataFrame:
    if isinstance(data, pd.DataFrame):
        df = data
        if names is not None:
            df = df.set_axis(list(names), axis=1)
    elif isinstance(data, Mapping):
        df = pd.DataFrame(dict(data))
    else:
        arr = np.asarray(data)
        if arr.ndim == 1:
            arr = arr[:, np.newaxis]
        elif arr.ndim != 2:
            raise InputError(f"Data must be 1-D or 2-D, got ndim={arr.ndim}.")
        cols = list(names) if names is not None else [f"v{i + 1}" for i in range(arr.shape[1])]
        df = pd.DataFrame(arr, columns=cols)

    if df.columns.duplicated().any():
        dupes = sorted({str(c) for c in df.columns[df.columns.duplicated()]})
        raise InputError(f"Column names must be unique, duplicated: {dupes}.")
    return df


def correlate(
        data,
        names: Optional[Sequence[str]] = None,
        method: str = "pearson",
        use: str = "pairwise",
        quiet: bool = False,
) -> CorrelationMatrix:
    """Correlation matrix of the numeric columns of *data*.

    Parameters
    ----------
    data : pandas.DataFrame, mapping of name → sequence, or array-like (T, N)
        Observations in rows.  Missing cells (``NaN`` / ``None`` / ``pd.NA``)
        are allowed.
    names : list[str], optional
        Column names for array input (default ``v1 .. vN``).
    method : ``"pearson"`` | ``"spearman"`` | ``"kendall"``
    use : ``"pairwise"`` | ``"complete"``
        Pairwise deletion (default) or listwise deletion.
    quiet : bool
        Suppress the INFO message naming the method used.

    Raises
    ------
    InputError
        Fewer than two numeric columns, fewer than two rows, or duplicate
        column names.  A zero-variance column does not raise; its row and
        column are missing instead.
    """
    df = _as_frame(data, names)

    numeric = [
        c for c in df.columns
        if pd.api.types.is_numeric_dtype(df[c]) and not pd.api.types.is_bool_dtype(df[c])
    ]
    dropped = [str(c) for c in df.columns if c not in numeric]
    if dropped:
        logger.warning(f"Non-numeric columns removed from input: {dropped}")
    if len(numeric) < 2:
        raise InputError(
            f"Correlation requires at least 2 numeric columns, got {len(numeric)}."
        )
    if len(df) < 2:
        raise InputError(f"Need at least 2 observations, got {len(df)}.")

    values = df[numeric].to_numpy(dtype=np.float64, na_value=np.nan)
    r_matrix = pairwise_matrix(values, method=method, use=use)

    if not quiet:
        logger.info(
            f"Correlation computed with method '{method}'; "
            f"missing values treated using '{use}' deletion."
        )
    return CorrelationMatrix(r_matrix, names=[str(c) for c in numeric], method=method)


# ═══════════════════════════════════════════════════════════════════════════
#  Functional API
# ═══════════════════════════════════════════════════════════════════════════

def _check_matrix(matrix) -> CorrelationMatrix:
    if not isinstance(matrix, CorrelationMatrix):
        raise InvalidArgumentError(
            f"Expected a CorrelationMatrix, got {type(matrix).__name__}."
        )
    return matrix


def shave(matrix: CorrelationMatrix, triangle: str = "upper") -> CorrelationMatrix:
    return _check_matrix(matrix).shave(triangle)


def rearrange(
        matrix: CorrelationMatrix,
        method: Union[str, Callable] = "hclust",
        absolute: bool = True,
        linkage: str = "average",
) -> CorrelationMatrix:
    return _check_matrix(matrix).rearrange(method=method, absolute=absolute, linkage=linkage)


def focus(matrix: CorrelationMatrix, columns, exclude: bool = False, mirror: bool = False):
    return _check_matrix(matrix).focus(columns, exclude=exclude, mirror=mirror)


def focus_if(matrix: CorrelationMatrix, predicate, mirror: bool = False):
    return _check_matrix(matrix).focus_if(predicate, mirror=mirror)


def dice(matrix: CorrelationMatrix, columns) -> CorrelationMatrix:
    return _check_matrix(matrix).dice(columns)


def stretch(matrix: CorrelationMatrix, na_rm: bool = False, remove_dups: bool = False) -> LongForm:
    return _check_matrix(matrix).stretch(na_rm=na_rm, remove_dups=remove_dups)


def retract(long: Union[LongForm, pd.DataFrame]) -> CorrelationMatrix:
    """Rebuild a square ``CorrelationMatrix`` from long-form entries.

    Variable order follows the source matrix when *long* remembers it,
    otherwise first appearance (``x`` values, then ``y``-only values).
    Cells with no entry are missing; the diagonal is masked.
    """
    if isinstance(long, pd.DataFrame):
        absent = [c for c in LONG_COLUMNS if c not in long.columns]
        if absent:
            raise InputError(f"Long-form table is missing column(s) {absent}.")
        long = LongForm.from_dataframe(long)
    elif not isinstance(long, LongForm):
        raise InvalidArgumentError(
            f"Expected a LongForm or DataFrame, got {type(long).__name__}."
        )

    order = list(dict.fromkeys(
        list(long.names) + [e.x for e in long] + [e.y for e in long]
    ))
    if len(order) < 1:
        raise InputError("Cannot rebuild a matrix from an empty long form.")

    pos = {n: i for i, n in enumerate(order)}
    arr = np.full((len(order), len(order)), np.nan)
    seen = set()
    for e in long:
        if (e.x, e.y) in seen:
            raise InputError(f"Duplicate long-form cell ({e.x!r}, {e.y!r}).")
        seen.add((e.x, e.y))
        arr[pos[e.x], pos[e.y]] = e.r
    return CorrelationMatrix(arr, names=order)


def fashion(
        table: Union[CorrelationMatrix, LongForm, pd.DataFrame],
        decimals: int = 2,
        leading_zeros: bool = False,
        na_print: str = "",
        label: str = "term",
) -> pd.DataFrame:
    """Round numbers for display and blank out missing cells.

    Accepts a ``CorrelationMatrix``, a ``focus`` table or a ``LongForm``
    (whose ``r`` column is formatted).  Row labels of a matrix or ``focus``
    table go into a leading *label* column.
    """
    if isinstance(table, CorrelationMatrix):
        return table.fashion(decimals, leading_zeros, na_print, label)
    if isinstance(table, LongForm):
        df = table.to_dataframe()
        r = formatting.fashion_frame(df[["r"]], decimals, leading_zeros, na_print)["r"]
        df["r"] = r.to_numpy()
        return df
    if isinstance(table, pd.DataFrame):
        return formatting.fashion_frame(table, decimals, leading_zeros, na_print, label)
    raise InvalidArgumentError(
        f"Cannot fashion a {type(table).__name__}."
    )


def rplot(matrix: Union[CorrelationMatrix, LongForm], **kwargs):
    """Dot plot of a matrix or long form; returns the matplotlib Axes."""
    if isinstance(matrix, LongForm):
        names = list(dict.fromkeys(
            list(matrix.names) + [e.x for e in matrix] + [e.y for e in matrix]
        ))
        return plotting.rplot(matrix, names, **kwargs)
    return _check_matrix(matrix).rplot(**kwargs)

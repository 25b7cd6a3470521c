"""
Pairwise-deletion correlation kernels.

Every pair of columns is correlated using only the rows where *both*
columns are present, independently of the other columns.  Degenerate
pairs (fewer than two shared rows, or zero variance over the shared rows)
produce ``NaN`` instead of an error, so a constant column shows up as a
missing row/column in the resulting matrix.

Example
-------
>>> from corrkit.analysis.correlation.pairwise import pairwise_matrix
>>> r = pairwise_matrix(values, method="spearman")
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from scipy import stats

from ...core.exceptions import InvalidArgumentError
from ...schemas.logging import get_logger

logger = get_logger("corrkit.correlate")


# ═══════════════════════════════════════════════════════════════════════════
#  Per-pair kernels (inputs already restricted to shared rows)
# ═══════════════════════════════════════════════════════════════════════════

def _pearson(a: np.ndarray, b: np.ndarray) -> float:
    am = a - a.mean()
    bm = b - b.mean()
    norm = np.sqrt(np.sum(am ** 2) * np.sum(bm ** 2))
    if norm == 0:
        return np.nan
    return float(np.sum(am * bm) / norm)


def _spearman(a: np.ndarray, b: np.ndarray) -> float:
    """Spearman rho as the Pearson r of average ranks (handles ties)."""
    return _pearson(stats.rankdata(a), stats.rankdata(b))


def _kendall(a: np.ndarray, b: np.ndarray) -> float:
    """Kendall tau-b (delegates to scipy)."""
    return float(stats.kendalltau(a, b)[0])


CORRELATION_METHODS: dict[str, Callable[[np.ndarray, np.ndarray], float]] = {
    "pearson": _pearson,
    "spearman": _spearman,
    "kendall": _kendall,
}

MISSING_TREATMENTS = ("pairwise", "complete")


# ═══════════════════════════════════════════════════════════════════════════
#  Matrix builder
# ═══════════════════════════════════════════════════════════════════════════

def _pair_value(a: np.ndarray, b: np.ndarray, kernel) -> float:
    shared = ~(np.isnan(a) | np.isnan(b))
    n = int(shared.sum())
    if n < 2:
        return np.nan
    a, b = a[shared], b[shared]
    if np.ptp(a) == 0 or np.ptp(b) == 0:
        return np.nan
    r = kernel(a, b)
    if np.isnan(r):
        return r
    return float(np.clip(r, -1.0, 1.0))


def pairwise_matrix(
        values: np.ndarray,
        method: str = "pearson",
        use: str = "pairwise",
) -> np.ndarray:
    """Full N×N correlation matrix of the columns of *values*.

    Parameters
    ----------
    values : np.ndarray, shape (T, N)
        Observations in rows, variables in columns.  ``NaN`` marks a
        missing cell.
    method : ``"pearson"`` | ``"spearman"`` | ``"kendall"``
    use : ``"pairwise"`` | ``"complete"``
        ``"pairwise"`` deletes missing rows per pair; ``"complete"`` first
        drops every row with any missing cell.

    Returns
    -------
    r_matrix : (N, N)
        Symmetric, values in [-1, 1] or ``NaN``.  The diagonal is ``NaN``.
    """
    if method not in CORRELATION_METHODS:
        raise InvalidArgumentError(
            f"Unknown correlation method '{method}'. "
            f"Choose from {list(CORRELATION_METHODS.keys())}."
        )
    if use not in MISSING_TREATMENTS:
        raise InvalidArgumentError(
            f"Unknown missing-value treatment '{use}'. "
            f"Choose from {list(MISSING_TREATMENTS)}."
        )

    values = np.asarray(values, dtype=np.float64)
    if use == "complete":
        values = values[~np.isnan(values).any(axis=1)]

    kernel = CORRELATION_METHODS[method]
    N = values.shape[1]
    r_matrix = np.full((N, N), np.nan)

    for i in range(N):
        for j in range(i + 1, N):
            r = _pair_value(values[:, i], values[:, j], kernel)
            r_matrix[i, j] = r
            r_matrix[j, i] = r

    n_missing = int(np.isnan(r_matrix[np.triu_indices(N, k=1)]).sum())
    if n_missing:
        logger.debug(
            f"{n_missing} variable pair(s) have no defined correlation "
            f"(too few shared rows or zero variance)."
        )
    return r_matrix

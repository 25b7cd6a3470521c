"""
Reordering strategies and redundancy grouping for correlation matrices.

A strategy receives an N×N distance matrix (0 on the diagonal) and
returns the new variable order as a permutation of ``range(N)``.
Strategies are looked up by name in ``ORDERINGS``; any callable with the
same signature can be passed instead.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
from scipy.cluster.hierarchy import leaves_list, linkage as _linkage
from scipy.spatial.distance import squareform

from ...core.exceptions import InvalidArgumentError, OrderingError
from ...schemas.logging import get_logger

logger = get_logger("corrkit.rearrange")

LINKAGES = ("single", "complete", "average", "weighted", "centroid", "median", "ward")


# ═══════════════════════════════════════════════════════════════════════════
#  Distance
# ═══════════════════════════════════════════════════════════════════════════

def _filled(r_matrix: np.ndarray) -> np.ndarray:
    """Fill masked cells from the mirrored cell, then with 0."""
    r = np.where(np.isnan(r_matrix), r_matrix.T, r_matrix)
    return np.nan_to_num(r, nan=0.0)


def distance_matrix(r_matrix: np.ndarray, absolute: bool = True) -> np.ndarray:
    """``1 - |r|`` (or ``1 - r``) with a zero diagonal.

    Shaved cells take their mirrored value so a masked matrix orders the
    same way as the full one; cells missing on both sides count as r = 0.
    """
    r = _filled(np.asarray(r_matrix, dtype=np.float64))
    if absolute:
        r = np.abs(r)
    d = 1.0 - r
    np.fill_diagonal(d, 0.0)
    return d


# ═══════════════════════════════════════════════════════════════════════════
#  Strategies
# ═══════════════════════════════════════════════════════════════════════════

def hclust_order(distance: np.ndarray, linkage: str = "average") -> np.ndarray:
    """Leaf order of a hierarchical clustering of *distance*."""
    if linkage not in LINKAGES:
        raise InvalidArgumentError(
            f"Unknown linkage '{linkage}'. Choose from {list(LINKAGES)}."
        )
    n = distance.shape[0]
    if n < 3:
        return np.arange(n)
    condensed = squareform(distance, checks=False)
    Z = _linkage(condensed, method=linkage)
    return leaves_list(Z)


def pca_order(distance: np.ndarray, **_) -> np.ndarray:
    """Order by loading on the leading eigenvector of the similarity matrix.

    Similarity is ``1 - distance`` (so the diagonal is 1).  The eigenvector
    sign is fixed so its loadings sum to a non-negative value, which makes
    the order deterministic.
    """
    similarity = 1.0 - distance
    eigvals, eigvecs = np.linalg.eigh(similarity)
    lead = eigvecs[:, np.argmax(eigvals)]
    if lead.sum() < 0:
        lead = -lead
    return np.argsort(-lead, kind="mergesort")


ORDERINGS: dict[str, Callable[..., Sequence[int]]] = {
    "hclust": hclust_order,
    "pca": pca_order,
}


def _check_permutation(order, n: int) -> np.ndarray:
    order = np.asarray(order)
    if (
            order.ndim != 1
            or order.shape[0] != n
            or not np.issubdtype(order.dtype, np.integer)
            or not np.array_equal(np.sort(order), np.arange(n))
    ):
        raise OrderingError(
            f"Ordering strategy must return a permutation of range({n}), "
            f"got {order.tolist()}."
        )
    return order


def compute_order(
        r_matrix: np.ndarray,
        method="hclust",
        absolute: bool = True,
        linkage: str = "average",
) -> np.ndarray:
    """Resolve *method* and return the validated permutation.

    Parameters
    ----------
    r_matrix : (N, N)
        Correlation values, ``NaN`` for masked cells.
    method : str or callable
        Key of ``ORDERINGS`` or a callable ``(distance) -> sequence[int]``.
    absolute : bool
        Use ``1 - |r|`` rather than ``1 - r`` as the distance.
    linkage : str
        Linkage criterion forwarded to ``"hclust"``.
    """
    d = distance_matrix(r_matrix, absolute=absolute)

    if callable(method):
        order = method(d)
        name = getattr(method, "__name__", repr(method))
    elif method in ORDERINGS:
        order = ORDERINGS[method](d, linkage=linkage)
        name = method
    else:
        raise InvalidArgumentError(
            f"Unknown ordering method '{method}'. "
            f"Choose from {list(ORDERINGS.keys())} or pass a callable."
        )

    order = _check_permutation(order, d.shape[0])
    logger.debug(f"Rearranged {d.shape[0]} variables with '{name}' (absolute={absolute}).")
    return order


# ═══════════════════════════════════════════════════════════════════════════
#  Grouping
# ═══════════════════════════════════════════════════════════════════════════

def channel_groups(r_matrix: np.ndarray, threshold: float) -> list[list[int]]:
    """Cluster variables by greedy agglomeration on |correlation|.

    Two variables are in the same group if there exists a path of
    pairwise |r| >= threshold between them (single-linkage).  Missing
    cells never link.

    Returns
    -------
    groups : list[list[int]]
        Each inner list contains variable indices in one cluster.
    """
    r_matrix = np.asarray(r_matrix, dtype=np.float64)
    # NaN compares False against any threshold
    r = np.abs(np.where(np.isnan(r_matrix), r_matrix.T, r_matrix))
    N = r.shape[0]
    visited = [False] * N
    groups = []

    for i in range(N):
        if visited[i]:
            continue
        # BFS from variable i
        group = []
        queue = [i]
        while queue:
            node = queue.pop(0)
            if visited[node]:
                continue
            visited[node] = True
            group.append(node)
            for j in range(N):
                if j != node and not visited[j] and r[node, j] >= threshold:
                    queue.append(j)
        groups.append(sorted(group))

    return groups

"""
Plotting collaborator for correlation matrices.

``rplot`` draws the long form of a matrix on a matplotlib Axes: one marker
per non-missing cell, sized by |r| and coloured on a diverging map pinned
to [-1, 1].  matplotlib is imported lazily so that the numeric core does
not pay for it.
"""

from __future__ import annotations

import numpy as np

from ...core.exceptions import InvalidArgumentError, MissingDependencyError
from ...schemas.logging import get_logger
from .formatting import format_value
from .longform import LongForm

logger = get_logger("corrkit.plot")

# indianred2 / white / skyblue1
DEFAULT_COLORS = ("#EE6363", "#FFFFFF", "#87CEFF")

_MARKERS = {"circle": "o", "square": "s"}


def _require_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as exc:
        raise MissingDependencyError(
            "matplotlib is required for rplot(). "
            "Install it with: pip install matplotlib"
        ) from exc


def rplot(
        long: LongForm,
        names,
        shape: str = "circle",
        colors=DEFAULT_COLORS,
        legend: bool = True,
        print_cor: bool = False,
        max_size: float = 600.0,
        ax=None,
):
    """Draw a correlation dot plot.

    Parameters
    ----------
    long : LongForm
        Cells to draw; missing cells are skipped.
    names : list[str]
        Variable order for both axes.  The first name is drawn at the top.
    shape : ``"circle"`` | ``"square"``
    colors : sequence of matplotlib colors
        Low / (mid) / high ends of the diverging map.
    legend : bool
        Draw a colorbar.
    print_cor : bool
        Write the rounded coefficient on each marker.
    max_size : float
        Marker area (points²) for |r| = 1.
    ax : matplotlib Axes, optional
        Draw on an existing axes.

    Returns
    -------
    matplotlib.axes.Axes
    """
    if shape not in _MARKERS:
        raise InvalidArgumentError(
            f"Unknown plot shape '{shape}'. Choose from {list(_MARKERS.keys())}."
        )
    plt = _require_matplotlib()
    from matplotlib.colors import LinearSegmentedColormap

    names = list(names)
    if ax is None:
        n = len(names)
        size = max(4.0, 0.6 * n + 2.0)
        fig, ax = plt.subplots(figsize=(size + 1.0, size))

    pos = {name: i for i, name in enumerate(names)}
    cells = [e for e in long if not e.is_missing]
    xs = np.array([pos[e.y] for e in cells], dtype=float)
    ys = np.array([len(names) - 1 - pos[e.x] for e in cells], dtype=float)
    rs = np.array([e.r for e in cells], dtype=float)

    cmap = LinearSegmentedColormap.from_list("corrkit_diverging", list(colors))
    sc = ax.scatter(
        xs,
        ys,
        c=rs,
        s=np.abs(rs) * max_size,
        cmap=cmap,
        vmin=-1.0,
        vmax=1.0,
        marker=_MARKERS[shape],
        edgecolors="none",
    )

    if print_cor:
        for x, y, r in zip(xs, ys, rs):
            ax.text(x, y, format_value(r), ha="center", va="center", fontsize=7)

    ax.set_xticks(range(len(names)))
    ax.set_yticks(range(len(names)))
    ax.set_xticklabels(names, rotation=45, ha="right", fontsize=8)
    ax.set_yticklabels(list(reversed(names)), fontsize=8)
    ax.set_xlim(-0.5, len(names) - 0.5)
    ax.set_ylim(-0.5, len(names) - 0.5)
    ax.set_aspect("equal")
    ax.grid(False)

    if legend:
        plt.colorbar(sc, ax=ax, shrink=0.8)

    logger.debug(f"rplot drew {len(cells)} cells for {len(names)} variables.")
    return ax

"""
Long-form container for correlation matrices.

``stretch`` flattens a ``CorrelationMatrix`` into one ``LongFormEntry``
per retained cell.  The ``LongForm`` container keeps the entries in
row-major order and offers the same export surface as the matrix:
``.to_dataframe()`` for pandas pipelines and ``.to_matrix()`` to rebuild
the square form.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np
import pandas as pd

LONG_COLUMNS = ("x", "y", "r")


@dataclass(frozen=True)
class LongFormEntry:
    """One matrix cell: row variable *x*, column variable *y*, value *r*."""

    x: str
    y: str
    r: float

    @property
    def is_missing(self) -> bool:
        return math.isnan(self.r)


@dataclass
class LongForm:
    """Row-major sequence of ``LongFormEntry`` records.

    Parameters
    ----------
    entries : list[LongFormEntry]
    names : list[str]
        Variable order of the matrix the entries came from.  Used to keep
        the original order when the matrix is rebuilt.

    Examples
    --------
    >>> long = correlate(df).shave().stretch(na_rm=True)
    >>> long.to_dataframe()      # columns x, y, r
    >>> long.to_matrix()         # back to a CorrelationMatrix
    """

    entries: list[LongFormEntry] = field(default_factory=list)
    names: Sequence[str] = field(default_factory=list)

    # ── sequence access ────────────────────────────────────────────────

    def __len__(self):
        return len(self.entries)

    def __iter__(self) -> Iterator[LongFormEntry]:
        return iter(self.entries)

    def __getitem__(self, idx):
        return self.entries[idx]

    @property
    def r(self) -> np.ndarray:
        return np.array([e.r for e in self.entries], dtype=np.float64)

    def __repr__(self) -> str:
        n_missing = sum(1 for e in self.entries if e.is_missing)
        return f"LongForm(n={len(self.entries)}, missing={n_missing})"

    # ── export ─────────────────────────────────────────────────────────

    def to_dataframe(self) -> pd.DataFrame:
        """Export to a ``pandas.DataFrame`` with columns ``x``, ``y``, ``r``."""
        return pd.DataFrame(
            {
                "x": [e.x for e in self.entries],
                "y": [e.y for e in self.entries],
                "r": self.r,
            },
            columns=list(LONG_COLUMNS),
        )

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "LongForm":
        """Build from any table with ``x``, ``y``, ``r`` columns."""
        entries = [
            LongFormEntry(str(x), str(y), float(r))
            for x, y, r in zip(df["x"], df["y"], df["r"])
        ]
        return cls(entries=entries)

    def to_matrix(self):
        """Rebuild the square ``CorrelationMatrix`` (see ``retract``)."""
        from .frame import retract

        return retract(self)


def flatten(table: pd.DataFrame, na_rm: bool = False) -> LongForm:
    """Row-major flattening of a square table into a ``LongForm``."""
    names = [str(n) for n in table.index]
    values = table.to_numpy(dtype=np.float64)
    entries = []
    for i, x in enumerate(names):
        for j, y in enumerate(table.columns):
            r = float(values[i, j])
            if na_rm and math.isnan(r):
                continue
            entries.append(LongFormEntry(x, str(y), r))
    return LongForm(entries=entries, names=names)

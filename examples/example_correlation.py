"""
===============================================================================
corrkit.analysis.correlation — Complete Walkthrough
===============================================================================

Builds a small dataset with two blocks of related variables, a noise
column, a constant column and a few missing cells, then runs every
operation of the correlation module and prints what a researcher would
look at.

Run:
    python example_correlation.py
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from corrkit.analysis import correlation as corr
from corrkit.schemas.logging import setup_file_logging

OUT_DIR = Path("experiments/correlation_demo")
setup_file_logging(OUT_DIR)

np.random.seed(2025)
T = 200
size = np.random.randn(T)
speed = np.random.randn(T)

df = pd.DataFrame({
    "weight": size + 0.3 * np.random.randn(T),
    "displacement": size + 0.4 * np.random.randn(T),
    "mileage": -size + 0.5 * np.random.randn(T),
    "horsepower": speed + 0.3 * np.random.randn(T),
    "quarter_mile": -speed + 0.6 * np.random.randn(T),
    "noise": np.random.randn(T),
    "wheels": 4.0,                 # zero variance -> missing row/column
    "maker": "acme",               # non-numeric -> dropped with a warning
})
df.loc[::17, "weight"] = np.nan
df.loc[::23, "horsepower"] = np.nan

# ── 1. Correlate (pairwise deletion) ──────────────────────────────────
m = corr.correlate(df)
print(repr(m))
print(m.summary())
print(m)

# ── 2. Rearrange + shave ──────────────────────────────────────────────
tidy = m.rearrange(method="hclust").shave()
print(corr.fashion(tidy).to_string(index=False))

# ── 3. Focus ──────────────────────────────────────────────────────────
print(corr.focus(m, ["weight", "horsepower"]).round(2))
print(m.dice(["weight", "displacement", "mileage"]))
print(m.focus_if(lambda col: (col.abs() > 0.6).any(), mirror=True).names)

# ── 4. Stretch / retract ──────────────────────────────────────────────
long = tidy.stretch(na_rm=True)
print(long)
print(long.to_dataframe().sort_values("r", key=abs, ascending=False).head(5))
assert long.to_matrix() == tidy

# ── 5. Redundancy groups ──────────────────────────────────────────────
print(m.groups(threshold=0.7))

# ── 6. LaTeX + plot ───────────────────────────────────────────────────
print(tidy.to_latex(caption="Vehicle correlations", label="tab:vehicles"))

fig, ax = plt.subplots(figsize=(7, 6))
tidy.rplot(ax=ax, print_cor=True)
fig.savefig(OUT_DIR / "rplot.png", dpi=150)
plt.show()

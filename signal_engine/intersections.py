"""
Detect crossings between the MACD line and its signal line.

Each pair of neighbouring aligned bars gives two line segments, one per
line, over ``x = index``.  A crossing is recorded only when the segments
intersect strictly inside both of them; touching at a bar, running
parallel or overlapping does not count.
"""
from __future__ import annotations

import numpy as np
import pandas as pd


def interior_crossing(a_start, a_end, b_start, b_end) -> np.ndarray:
    """
    Vectorised segment intersection test.

    Each argument is an ``(x, y)`` pair of scalars or equal-length
    arrays describing segment endpoints.  With ``det`` the determinant of
    the two direction vectors and ``lam``/``gamma`` the intersection
    parameters along segment a and segment b, the result is True where
    ``det != 0`` and ``0 < lam < 1`` and ``0 < gamma < 1``.  NaN inputs
    give False.
    """
    a, b = (np.asarray(v, dtype=float) for v in a_start)
    c, d = (np.asarray(v, dtype=float) for v in a_end)
    p, q = (np.asarray(v, dtype=float) for v in b_start)
    r, s = (np.asarray(v, dtype=float) for v in b_end)
    det = (c - a) * (s - q) - (r - p) * (d - b)
    with np.errstate(divide="ignore", invalid="ignore"):
        lam = ((s - q) * (r - a) + (p - r) * (s - b)) / det
        gamma = ((b - d) * (r - a) + (c - a) * (s - b)) / det
        return (det != 0) & (lam > 0) & (lam < 1) & (gamma > 0) & (gamma < 1)


def detect_intersections(macd: pd.DataFrame) -> pd.Series:
    """
    Flag every aligned bar where the MACD line crossed its signal line
    since the previous bar.  ``macd`` needs ``index``, ``macd`` and
    ``macd_signal`` columns.  The first bar has no predecessor and is
    never flagged.
    """
    flags = np.zeros(len(macd), dtype=bool)
    if len(macd) > 1:
        x = macd["index"].to_numpy(dtype=float)
        line = macd["macd"].to_numpy(dtype=float)
        sig = macd["macd_signal"].to_numpy(dtype=float)
        flags[1:] = interior_crossing(
            (x[:-1], line[:-1]), (x[1:], line[1:]),
            (x[:-1], sig[:-1]), (x[1:], sig[1:]),
        )
    return pd.Series(flags, index=macd.index, name="is_intersecting")

"""Numerically careful log of the mean of exponentials."""

from __future__ import annotations

import math

import numpy as np


def logmeanexp(x, drop: int | None = None) -> float:
    """Compute ``log(mean(exp(x)))`` without overflow.

    If ``drop`` is a valid zero-based index, that element is left out;
    any other value of ``drop`` leaves all elements in.
    """
    values = [float(v) for v in np.ravel(np.asarray(x, dtype=float))]
    if drop is not None and 0 <= drop < len(values):
        values = values[:drop] + values[drop + 1:]
    if not values:
        return math.nan
    m = -math.inf
    for v in values:
        if v > m:
            m = v
    s = math.fsum(math.exp(v - m) for v in values)
    if math.isnan(s):
        return math.nan
    return m + math.log(s / len(values))
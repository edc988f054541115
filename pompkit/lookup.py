"""Covariate lookup tables with linear or piecewise-constant interpolation."""

from __future__ import annotations

import warnings
from dataclasses import dataclass

import numpy as np

from .arrays import LabeledArray


@dataclass
class CovariateTable:
    """Covariates tabulated at increasing ``times``.

    ``table`` has one row per covariate and one column per time.
    ``order`` 0 gives piecewise-constant interpolation; any other value
    gives linear interpolation (with linear extrapolation outside).
    """

    times: np.ndarray = ()
    table: np.ndarray | None = None
    names: tuple[str, ...] | None = None
    order: int = 1

    def __post_init__(self) -> None:
        self.times = np.asarray(self.times, dtype=float).ravel()
        if self.table is None:
            self.table = np.empty((0, self.times.size))
        self.table = np.asarray(self.table, dtype=float)
        if self.table.ndim != 2:
            raise ValueError("covariate table must be two-dimensional")
        if self.table.shape[1] != self.times.size:
            raise ValueError("number of table columns must equal number of times")
        if self.names is not None:
            self.names = tuple(str(n) for n in self.names)
            if len(self.names) != self.table.shape[0]:
                raise ValueError("number of names must equal number of covariates")
        self.order = int(self.order)

    @property
    def width(self) -> int:
        return self.table.shape[0]

    @property
    def length(self) -> int:
        return self.table.shape[1]

    def lookup(self, t: float) -> np.ndarray:
        """Interpolated covariate values at time ``t``."""
        t = float(t)
        if self.length < 1 or self.width < 1:
            return np.zeros(self.width)
        if t < self.times[0] or t > self.times[-1]:
            warnings.warn(f"in 'table_lookup': extrapolating at {t:e}.", stacklevel=2)
        if self.length == 1:
            return self.table[:, 0].copy()
        idx = int(np.searchsorted(self.times, t, side="right"))
        idx = min(max(idx, 1), self.length - 1)
        if self.order == 0:
            return self.table[:, idx - 1].copy()
        lo, hi = self.times[idx - 1], self.times[idx]
        e = (t - lo) / (hi - lo)
        return e * self.table[:, idx] + (1 - e) * self.table[:, idx - 1]


def lookup_in_table(table: CovariateTable, t) -> LabeledArray:
    """Look up covariates at one or several times.

    A single time gives a named vector; several give a matrix with one
    column per time.
    """
    times = np.atleast_1d(np.asarray(t, dtype=float)).ravel()
    if times.size > 1:
        values = np.column_stack([table.lookup(s) for s in times])
        return LabeledArray(values, table.names)
    if times.size == 1:
        return LabeledArray(table.lookup(times[0]), table.names)
    return LabeledArray(np.full(table.width, np.nan), table.names)
"""Marginal-distribution probe: regression of sorted data on a sorted reference."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.linalg import qr, solve_triangular

from .arrays import LabeledArray


@dataclass(frozen=True)
class MarginalSetup:
    """Pivoted QR decomposition of the polynomial model matrix built from a reference series.

    The model matrix ``X`` satisfies ``X[:, pivot] == q @ r``.
    """

    q: np.ndarray
    r: np.ndarray
    pivot: np.ndarray

    @property
    def nrows(self) -> int:
        return self.q.shape[0]

    @property
    def order(self) -> int:
        return self.r.shape[1]


def _prepare(values, diff: int) -> np.ndarray:
    """Difference ``diff`` times, centre and sort."""
    z = np.array(values, dtype=float).ravel()
    if diff > 0:
        z = np.diff(z, n=diff)
    z = z - z.mean()
    return np.sort(z)


def probe_marginal_setup(ref, order: int = 3, diff: int = 1) -> MarginalSetup:
    """Build and decompose the model matrix from the reference series ``ref``.

    The reference is differenced ``diff`` times, centred and sorted; column
    ``i`` of the model matrix holds its ``i``-th power.
    """
    order, diff = int(order), int(diff)
    if diff < 0:
        raise ValueError("must have diff >= 0")
    n = np.asarray(ref).size
    nx = n - diff
    if nx < 1:
        raise ValueError("must have diff < number of observations")
    npoly = max(order, 1)
    if nx < npoly:
        raise ValueError("must have order <= number of differenced observations")
    z = _prepare(ref, diff)
    model = np.cumprod(np.tile(z[:, None], (1, npoly)), axis=1)
    q, r, pivot = qr(model, mode="economic", pivoting=True)
    return MarginalSetup(q=q, r=r, pivot=pivot)


def probe_marginal_solve(x, setup: MarginalSetup, diff: int = 1) -> LabeledArray:
    """Coefficients of the regression of sorted, centred ``x`` on the reference powers.

    Values are named ``marg.1``, ``marg.2``, ...
    """
    diff = int(diff)
    n = np.asarray(x).size
    if n - diff != setup.nrows:
        raise ValueError("length of 'ref' must equal length of data")
    z = _prepare(x, diff)
    coef = solve_triangular(setup.r, setup.q.T @ z, lower=False)
    beta = np.empty(setup.order)
    beta[setup.pivot] = coef
    names = tuple(f"marg.{i + 1}" for i in range(setup.order))
    return LabeledArray(beta, names)
"""Polynomial nonlinear autoregression probe."""

from __future__ import annotations

import numpy as np
from scipy.linalg import qr, solve_triangular

from .arrays import LabeledArray


def _fit(y: np.ndarray, lags: list[int], powers: list[int]) -> np.ndarray:
    nterms = len(lags)
    n = y.size
    maxlag = max([0, *lags])
    ny = n - maxlag
    finite = np.isfinite(y)
    if not finite.any():
        return np.zeros(nterms)
    y = np.where(finite, y - y[finite].mean(), y)

    predictors = y[: max(ny, 0)]
    seen = predictors[np.isfinite(predictors)]
    if seen.size == 0 or np.all(seen == seen[0]):
        return np.zeros(nterms)

    rows = np.arange(ny) + maxlag
    ok = np.isfinite(y[rows])
    for lag in lags:
        ok &= np.isfinite(y[rows - lag])
    rows = rows[ok]
    if rows.size < nterms:
        raise ValueError("too few complete rows to fit the autoregression")

    columns = []
    for lag, power in zip(lags, powers):
        base = y[rows - lag]
        col = base.copy()
        for _ in range(1, power):
            col = col * base
        columns.append(col)
    model = np.column_stack(columns)
    response = y[rows]

    q, r, pivot = qr(model, mode="economic", pivoting=True)
    coef = solve_triangular(r, q.T @ response, lower=False)
    beta = np.empty(nterms)
    beta[pivot] = coef
    return beta


def probe_nlar(x, lags, powers) -> LabeledArray:
    """Coefficients of a polynomial autoregression of the centred series ``x``.

    Term ``i`` is the series at lag ``lags[i]`` raised to ``powers[i]``.
    Rows with non-finite values are dropped; a series whose predictors do
    not vary gives all-zero coefficients.  Values are named
    ``nlar.<lag>^<power>``.
    """
    y = np.array(x, dtype=float).ravel()
    lag_list = [int(v) for v in np.ravel(lags)]
    power_list = [int(v) for v in np.ravel(powers)]
    if len(lag_list) != len(power_list):
        raise ValueError("'lags' and 'powers' must have equal lengths")
    if any(lag < 0 for lag in lag_list):
        raise ValueError("lags must be non-negative")
    beta = _fit(y, lag_list, power_list) if lag_list else np.zeros(0)
    names = tuple(f"nlar.{lag}^{power}" for lag, power in zip(lag_list, power_list))
    return LabeledArray(beta, names)
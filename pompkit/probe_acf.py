"""Autocorrelation and cross-correlation probes."""

from __future__ import annotations

import numpy as np

from .arrays import LabeledArray


def _center(series: np.ndarray, label: int) -> None:
    """Subtract the mean of the finite entries, in place."""
    finite = np.isfinite(series)
    if not finite.any():
        raise ValueError(f"series {label} has no data")
    series[finite] -= series[finite].mean()


def _acf(x: np.ndarray, lags: list[int]) -> np.ndarray:
    """Centre each row of ``x`` in place; return lagged mean products."""
    nvars, n = x.shape
    for j in range(nvars):
        _center(x[j], j + 1)
    out = np.full((nvars, len(lags)), np.nan)
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        for i, lag in enumerate(lags):
            if lag >= n:
                continue
            a, b = x[:, : n - lag], x[:, lag:]
            ok = np.isfinite(a) & np.isfinite(b)
            total = np.where(ok, a * b, 0.0).sum(axis=1)
            count = ok.sum(axis=1)
            out[:, i] = np.where(count > 0, total / np.maximum(count, 1), np.nan)
    return out


def _int_lags(lags) -> list[int]:
    return [int(lag) for lag in np.ravel(lags)]


def probe_acf(x, lags, corr: bool = True) -> LabeledArray:
    """Autocovariances (or autocorrelations) of each row of ``x``.

    Each series is centred on the mean of its finite values, then mean
    products over finite pairs are formed.  The result holds, for each
    series in turn, one value per lag, named ``acf[<lag>]``.
    """
    data = np.array(x, dtype=float)
    if data.ndim == 1:
        data = data.reshape(1, -1)
    if data.ndim != 2:
        raise ValueError("'x' must be a matrix")
    lag_list = _int_lags(lags)
    if any(lag < 0 for lag in lag_list):
        raise ValueError("lags must be non-negative")
    values = _acf(data, lag_list)
    if corr:
        values = values / _acf(data, [0])
    names = tuple(f"acf[{lag}]" for _ in range(data.shape[0]) for lag in lag_list)
    return LabeledArray(values.ravel(), names)


def probe_ccf(x, y, lags, corr: bool = True) -> LabeledArray:
    """Cross-covariances (or cross-correlations) of two series.

    A positive lag pairs ``x[k]`` with ``y[k+lag]``; a negative lag pairs
    ``x[k-lag]`` with ``y[k]``.  Pairs are kept where the ``x`` value is
    finite.  Values are named ``ccf[<lag>]``.
    """
    xs = np.array(x, dtype=float).ravel()
    ys = np.array(y, dtype=float).ravel()
    n = xs.size
    if n != ys.size:
        raise ValueError("'x' and 'y' must have equal lengths")
    lag_list = _int_lags(lags)
    _center(xs, 1)
    _center(ys, 2)
    values = np.full(len(lag_list), np.nan)
    with np.errstate(invalid="ignore", over="ignore"):
        for i, lag in enumerate(lag_list):
            m = n - abs(lag)
            if m <= 0:
                continue
            if lag < 0:
                p1, p2 = xs[-lag:], ys[:m]
            else:
                p1, p2 = xs[:m], ys[lag:]
            ok = np.isfinite(p1)
            count = int(ok.sum())
            if count > 0:
                values[i] = np.where(ok, p1 * p2, 0.0).sum() / count
    if corr:
        cx = _acf(xs.reshape(1, -1), [0])[0, 0]
        cy = _acf(ys.reshape(1, -1), [0])[0, 0]
        values = values / np.sqrt(cx * cy)
    names = tuple(f"ccf[{lag}]" for lag in lag_list)
    return LabeledArray(values, names)
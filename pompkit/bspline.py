"""B-spline and periodic B-spline bases with equally spaced knots."""

from __future__ import annotations

import numpy as np


def _bspline_eval(x: np.ndarray, i: int, degree: int, deriv: int, knots: np.ndarray) -> np.ndarray:
    """Derivative of order ``deriv`` of the i-th B-spline of ``degree`` at ``x``."""
    if deriv > degree:
        return np.zeros_like(x)
    if deriv > 0:
        y1 = _bspline_eval(x, i, degree - 1, deriv - 1, knots)
        y2 = _bspline_eval(x, i + 1, degree - 1, deriv - 1, knots)
        a = degree / (knots[i + degree] - knots[i])
        b = degree / (knots[i + 1 + degree] - knots[i + 1])
        return a * y1 - b * y2
    if degree > 0:
        y1 = _bspline_eval(x, i, degree - 1, 0, knots)
        y2 = _bspline_eval(x, i + 1, degree - 1, 0, knots)
        a = (x - knots[i]) / (knots[i + degree] - knots[i])
        b = (knots[i + 1 + degree] - x) / (knots[i + 1 + degree] - knots[i + 1])
        return a * y1 + b * y2
    return ((knots[i] <= x) & (x < knots[i + 1])).astype(float)


def bspline_basis(x, nbasis: int, degree: int = 3, deriv: int = 0, rg=None) -> np.ndarray:
    """Matrix (len(x) x nbasis) of B-spline basis functions over ``rg``."""
    xs = np.asarray(x, dtype=float).ravel()
    nbasis, degree, deriv = int(nbasis), int(degree), int(deriv)
    if degree < 0:
        raise ValueError("must have degree >= 0")
    if nbasis <= degree:
        raise ValueError("must have nbasis > degree")
    if deriv < 0:
        raise ValueError("must have deriv >= 0")
    if rg is None:
        if xs.size == 0:
            raise ValueError("improper range 'rg'")
        rg = (xs.min(), xs.max())
    minx, maxx = float(rg[0]), float(rg[1])
    if not minx < maxx:
        raise ValueError("improper range 'rg'")
    dx = (maxx - minx) / (nbasis - degree)
    steps = np.full(nbasis + degree + 1, dx)
    steps[0] = minx - degree * dx
    knots = np.cumsum(steps)
    with np.errstate(divide="ignore", invalid="ignore"):
        columns = [_bspline_eval(xs, i, degree, deriv, knots) for i in range(nbasis)]
    return np.column_stack(columns) if columns else np.empty((xs.size, 0))


def bspline_basis_eval(x: float, knots, degree: int, nbasis: int, deriv: int = 0) -> np.ndarray:
    """Values at ``x`` of all ``nbasis`` B-splines defined by ``knots``.

    ``knots`` must have at least ``nbasis + degree + 1`` entries.
    """
    knots = np.asarray(knots, dtype=float)
    if knots.size < nbasis + degree + 1:
        raise ValueError("need at least nbasis+degree+1 knots")
    xs = np.array([float(x)])
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.array(
            [_bspline_eval(xs, i, degree, deriv, knots)[0] for i in range(nbasis)]
        )


def _periodic_eval(xs: np.ndarray, period: float, degree: int, nbasis: int, deriv: int) -> np.ndarray:
    if period <= 0.0:
        raise ValueError("must have period > 0")
    if nbasis <= 0:
        raise ValueError("must have nbasis > 0")
    if degree < 0:
        raise ValueError("must have degree >= 0")
    if nbasis < degree:
        raise ValueError("must have nbasis >= degree")
    if deriv < 0:
        raise ValueError("must have deriv >= 0")
    dx = period / nbasis
    knots = np.arange(-degree, nbasis + degree + 1) * dx
    xs = np.fmod(xs, period)
    xs = np.where(xs < 0.0, xs + period, xs)
    with np.errstate(divide="ignore", invalid="ignore"):
        pieces = [_bspline_eval(xs, k, degree, deriv, knots) for k in range(nbasis + degree)]
    for k in range(degree):
        pieces[k] = pieces[k] + pieces[nbasis + k]
    shift = max(degree - 1, 0) // 2
    return np.column_stack([pieces[(shift + k) % nbasis] for k in range(nbasis)])


def periodic_bspline_basis(x, nbasis: int, degree: int = 3, period: float = 1.0, deriv: int = 0) -> np.ndarray:
    """Matrix (len(x) x nbasis) of periodic B-spline basis functions."""
    xs = np.asarray(x, dtype=float).ravel()
    return _periodic_eval(xs, float(period), int(degree), int(nbasis), int(deriv))


def periodic_bspline_basis_eval(x: float, period: float, degree: int, nbasis: int, deriv: int = 0) -> np.ndarray:
    """Values at ``x`` of all ``nbasis`` periodic B-splines."""
    xs = np.array([float(x)])
    return _periodic_eval(xs, float(period), int(degree), int(nbasis), int(deriv))[0]
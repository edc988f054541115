"""Simulation of a process model by one-step, fixed-step or Euler stepping."""

from __future__ import annotations

import enum
import math
import sys
from collections.abc import Iterable, Mapping

import numpy as np

from .arrays import LabeledArray, as_matrix, match_names
from .lookup import CovariateTable
from .pompfun import FunMode, PompFun, _named_vector, pomp_fun_handler

_TOL = math.sqrt(sys.float_info.epsilon)


class RProcessMethod(enum.Enum):
    """How the simulator steps between observation times."""

    DEFAULT = 0
    ONESTEP = 1
    DISCRETE = 2
    EULER = 3
    GILLESPIE = 4


def num_euler_steps(t1: float, t2: float, deltat: float) -> tuple[int, float]:
    """Number of Euler steps from ``t1`` to ``t2`` and the step size to use.

    The step size is adjusted so that the steps exactly span the interval
    and do not exceed ``deltat`` by more than a small relative tolerance.
    """
    if t1 >= t2:
        return 0, 0.0
    if t1 + deltat >= t2:
        return 1, t2 - t1
    nstep = math.ceil((t2 - t1) / deltat / (1 + _TOL))
    return nstep, (t2 - t1) / nstep


def num_map_steps(t1: float, t2: float, deltat: float) -> int:
    """Number of whole discrete-time steps of size ``deltat`` from ``t1`` to ``t2``."""
    nstep = math.floor((t2 - t1) / deltat / (1 - _TOL))
    return max(nstep, 0)


def euler_simulator(
    func: PompFun,
    xstart,
    t0: float,
    times,
    params,
    deltat: float = 1.0,
    method: RProcessMethod = RProcessMethod.EULER,
    accumvars: Iterable[str] = (),
    covar: CovariateTable | None = None,
    userdata: Mapping | None = None,
    rng=None,
) -> LabeledArray:
    """Advance each replicate of ``xstart`` from ``t0`` through ``times``.

    Keyword step functions are called with ``t``, the states, parameters,
    covariates, ``delta_t`` and the user data by name, and return the new
    states by name.  Native step functions are called as
    ``fun(x, p, stateindex, paramindex, covarindex, covars, t, dt, rng)``
    and return the new state vector.  Accumulator variables are reset to
    zero at the start of each observation interval.

    The result has shape (variables, replicates, times).
    """
    deltat = float(deltat)
    if not deltat > 0:
        raise ValueError("'delta.t' should be a positive number.")
    method = RProcessMethod(method)
    rng = np.random.default_rng() if rng is None else rng
    userdata = dict(userdata or {})
    covar = CovariateTable() if covar is None else covar

    x0 = as_matrix(xstart)
    nvars, nreps = x0.shape
    pars = as_matrix(params)
    pdata = pars.data
    if pdata.shape[1] != nreps:
        raise ValueError("ncol('params') should equal ncol('xstart')")
    times = np.atleast_1d(np.asarray(times, dtype=float)).ravel()
    if times.size == 0:
        raise ValueError("length('times') = 0, no work to do.")
    t = float(t0)
    if t > times[0]:
        raise ValueError("'t0' must be no later than 'times[1]'.")

    snames = x0.rownames
    pnames = pars.rownames or ()
    cnames = covar.names or ()
    accum = match_names(snames, list(accumvars), "state variables")

    bound = pomp_fun_handler(func, snames, pnames, None, cnames)
    if bound.mode is FunMode.UNDEFINED:
        raise ValueError(f"unrecognized 'mode' {bound.mode.name}")

    def advance(x: np.ndarray, p: np.ndarray, cov: np.ndarray, now: float, dt: float) -> np.ndarray:
        if bound.mode is FunMode.KEYWORD:
            kwargs = dict(userdata)
            kwargs["t"] = now
            kwargs.update(zip(snames, map(float, x)))
            kwargs.update(zip(pnames, map(float, p)))
            kwargs.update(zip(cnames, map(float, cov)))
            kwargs["delta_t"] = dt
            names, values = _named_vector(
                bound.fun(**kwargs), "'rprocess' must return a named numeric vector."
            )
            return values[match_names(names, snames, "state variables")]
        new = np.asarray(
            bound.fun(x.copy(), p, bound.stateindex, bound.paramindex,
                      bound.covarindex, cov, now, dt, rng),
            dtype=float,
        ).ravel()
        if new.size != nvars:
            raise ValueError("'rprocess' returned a state vector of the wrong length.")
        return new

    xt = x0.data.copy()
    out = np.empty((nvars, nreps, times.size))
    for step, target in enumerate(times):
        if t > target:
            raise ValueError("'times' must be an increasing sequence.")
        xt[accum, :] = 0.0
        if method is RProcessMethod.DISCRETE:
            dt = deltat
            nstep = num_map_steps(t, target, dt)
        elif method is RProcessMethod.EULER:
            nstep, dt = num_euler_steps(t, target, deltat)
        else:
            dt = target - t
            nstep = 1 if dt > 0 else 0
        for k in range(nstep):
            cov = covar.lookup(t)
            for j, pcol in enumerate(pdata.T):
                xt[:, j] = advance(xt[:, j], pcol, cov, t, dt)
            t += dt
            if method is RProcessMethod.EULER and k == nstep - 2:
                dt = target - t
                t = target - dt
        out[:, :, step] = xt

    return LabeledArray(out, snames, ("name", ".id", "time"))
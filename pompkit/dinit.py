"""Evaluation of the density of the initial state."""

from __future__ import annotations

import math
import warnings

import numpy as np

from .arrays import LabeledArray, as_matrix
from .pompfun import FunMode, Pomp, _scalar, pomp_fun_handler


def _replicates(nrepsx: int, nrepsp: int) -> int:
    if nrepsx == 0 or nrepsp == 0 or (
        nrepsx != nrepsp and nrepsx % nrepsp != 0 and nrepsp % nrepsx != 0
    ):
        raise ValueError("the larger number of replicates is not a multiple of smaller.")
    return max(nrepsx, nrepsp)


def dinit(model: Pomp, t0, x, params, log: bool = False) -> LabeledArray:
    """Density of each initial state (column) of ``x`` at time ``t0``.

    ``x`` has one column per replicate, as has ``params``; the smaller
    number of replicates is recycled.  Keyword densities receive ``t0``,
    the states, parameters, covariates (at ``t0``) and the user data by
    name.  Native densities are called as ``fun(x, p, t0, stateindex,
    paramindex, covarindex, covars)``.  Both return log densities, which
    are exponentiated unless ``log`` is true.  An undefined density gives
    NaN with a warning.
    """
    log = bool(log)
    start = np.atleast_1d(np.asarray(t0, dtype=float)).ravel()
    if start.size == 0:
        raise ValueError("'t0' must be a number.")
    time0 = float(start[0])

    states = as_matrix(x)
    pars = as_matrix(params)
    nrepsx = states.shape[1]
    nrepsp = pars.shape[1]
    nreps = _replicates(nrepsx, nrepsp)

    snames = states.rownames or ()
    pnames = pars.rownames or ()
    covar = model.covar
    cnames = covar.names or ()
    bound = pomp_fun_handler(model.dinit, snames, pnames, None, cnames)

    result = np.full(nreps, np.nan)
    if bound.mode is FunMode.UNDEFINED:
        warnings.warn("'dinit' unspecified: likelihood undefined.", stacklevel=2)
        return LabeledArray(result, None, (".id",))

    cov = covar.lookup(time0)
    for j in range(nreps):
        xs = states.data[:, j % nrepsx]
        ps = pars.data[:, j % nrepsp]
        if bound.mode is FunMode.KEYWORD:
            kwargs = dict(model.userdata)
            kwargs["t0"] = time0
            kwargs.update(zip(snames, map(float, xs)))
            kwargs.update(zip(pnames, map(float, ps)))
            kwargs.update(zip(cnames, map(float, cov)))
            value = _scalar(bound.fun(**kwargs))
        else:
            value = float(
                bound.fun(xs, ps, time0, bound.stateindex, bound.paramindex,
                          bound.covarindex, cov)
            )
        result[j] = value if log else math.exp(value)

    return LabeledArray(result, None, (".id",))
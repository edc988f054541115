"""Evaluation of the measurement-model density."""

from __future__ import annotations

import warnings
from collections.abc import Mapping

import numpy as np

from .arrays import LabeledArray, as_matrix, as_state_array
from .pompfun import FunMode, Pomp, pomp_fun_handler


def _values(ans) -> np.ndarray:
    if isinstance(ans, LabeledArray):
        return ans.data.ravel().astype(float)
    if isinstance(ans, Mapping):
        ans = list(ans.values())
    return np.ravel(np.asarray(ans, dtype=float))


def _replicates(nrepsx: int, nrepsp: int) -> int:
    nreps = max(nrepsx, nrepsp)
    if nrepsx == 0 or nrepsp == 0 or nreps % nrepsp or nreps % nrepsx:
        raise ValueError("larger number of replicates is not a multiple of smaller.")
    return nreps


def dmeasure(model: Pomp, y, x, times, params, log: bool = False) -> LabeledArray:
    """Measurement density of the observations ``y`` given the states ``x``.

    ``y`` has one column per time; ``x`` has shape (variables, replicates,
    times); ``params`` has one column per replicate.  The smaller number of
    replicates is recycled.  Keyword densities receive ``t``, observables,
    states, parameters, covariates, ``log`` and the user data by name.
    Native densities are called as ``fun(y, x, p, give_log, obsindex,
    stateindex, paramindex, covarindex, covars, t)``.  The result has shape
    (replicates, times).
    """
    log = bool(log)
    times = np.atleast_1d(np.asarray(times, dtype=float)).ravel()
    ntimes = times.size
    if ntimes < 1:
        raise ValueError("length('times') = 0, no work to do.")
    obs = as_matrix(y)
    if obs.shape[1] != ntimes:
        raise ValueError("length of 'times' and 2nd dimension of 'y' do not agree.")
    states = as_state_array(x)
    nvars, nrepsx, nt = states.shape
    if nt != ntimes:
        raise ValueError("length of 'times' and 3rd dimension of 'x' do not agree.")
    pars = as_matrix(params)
    nrepsp = pars.shape[1]
    nreps = _replicates(nrepsx, nrepsp)

    onames = obs.rownames or ()
    snames = states.rownames or ()
    pnames = pars.rownames or ()
    covar = model.covar
    cnames = covar.names or ()
    bound = pomp_fun_handler(model.dmeasure, snames, pnames, onames, cnames)

    result = np.full((nreps, ntimes), np.nan)

    if bound.mode is FunMode.UNDEFINED:
        warnings.warn("'dmeasure' unspecified: likelihood undefined.", stacklevel=2)
        return LabeledArray(result, None, (".id", "time"))

    for k, t in enumerate(times):
        cov = covar.lookup(t)
        yk = obs.data[:, k]
        for j in range(nreps):
            xk = states.data[:, j % nrepsx, k]
            pk = pars.data[:, j % nrepsp]
            if bound.mode is FunMode.KEYWORD:
                kwargs = dict(model.userdata)
                kwargs["t"] = float(t)
                kwargs.update(zip(onames, map(float, yk)))
                kwargs.update(zip(snames, map(float, xk)))
                kwargs.update(zip(pnames, map(float, pk)))
                kwargs.update(zip(cnames, map(float, cov)))
                kwargs["log"] = log
                values = _values(bound.fun(**kwargs))
                if k == 0 and j == 0 and values.size != 1:
                    raise ValueError(
                        f"user 'dmeasure' returns a vector of length {values.size} "
                        "when it should return a scalar."
                    )
                result[j, k] = values[0]
            else:
                result[j, k] = float(
                    bound.fun(yk, xk, pk, log, bound.obsindex, bound.stateindex,
                              bound.paramindex, bound.covarindex, cov, float(t))
                )

    return LabeledArray(result, None, (".id", "time"))
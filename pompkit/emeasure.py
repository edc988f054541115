"""Evaluation of the expectation of the measurement model."""

from __future__ import annotations

import warnings
from collections.abc import Mapping

import numpy as np

from .arrays import LabeledArray, as_matrix, as_state_array
from .pompfun import FunMode, Pomp, _named_vector, pomp_fun_handler

_DIMNAMES = ("name", ".id", "time")


def _values(ans) -> np.ndarray:
    if isinstance(ans, LabeledArray):
        return ans.data.ravel().astype(float)
    if isinstance(ans, Mapping):
        ans = list(ans.values())
    return np.ravel(np.asarray(ans, dtype=float))


def emeasure(model: Pomp, x, times, params) -> LabeledArray:
    """Expected observations given the states ``x``.

    Keyword functions receive ``t``, states, parameters, covariates and the
    user data by name and return the expected observables by name; the
    first result fixes the names and their number.  Native functions are
    called as ``fun(x, p, obsindex, stateindex, paramindex, covarindex,
    covars, t)`` and return one value per declared observable.  The result
    has shape (observables, replicates, times).
    """
    times = np.atleast_1d(np.asarray(times, dtype=float)).ravel()
    ntimes = times.size
    if ntimes < 1:
        raise ValueError("length('times') = 0, no work to do.")
    states = as_state_array(x)
    nvars, nrepsx, nt = states.shape
    if nt != ntimes:
        raise ValueError("length of 'times' and 3rd dimension of 'x' do not agree.")
    pars = as_matrix(params)
    nrepsp = pars.shape[1]
    nreps = max(nrepsx, nrepsp)
    if nrepsx == 0 or nrepsp == 0 or nreps % nrepsp or nreps % nrepsx:
        raise ValueError("larger number of replicates is not a multiple of smaller.")

    pfun = model.emeasure
    onames = pfun.obsnames if pfun is not None else ()
    snames = states.rownames or ()
    pnames = pars.rownames or ()
    covar = model.covar
    cnames = covar.names or ()
    bound = pomp_fun_handler(pfun, snames, pnames, onames, cnames)

    if bound.mode is FunMode.UNDEFINED:
        warnings.warn("'emeasure' unspecified: NAs generated.", stacklevel=2)
        return LabeledArray(np.full((len(onames), nreps, ntimes), np.nan), onames, _DIMNAMES)

    result: np.ndarray | None = None
    names: tuple[str, ...] | None = None
    if bound.mode is FunMode.NATIVE:
        names = onames
        result = np.full((len(onames), nreps, ntimes), np.nan)

    for k, t in enumerate(times):
        cov = covar.lookup(t)
        for j in range(nreps):
            xk = states.data[:, j % nrepsx, k]
            pk = pars.data[:, j % nrepsp]
            if bound.mode is FunMode.KEYWORD:
                kwargs = dict(model.userdata)
                kwargs["t"] = float(t)
                kwargs.update(zip(snames, map(float, xk)))
                kwargs.update(zip(pnames, map(float, pk)))
                kwargs.update(zip(cnames, map(float, cov)))
                ans = bound.fun(**kwargs)
                if result is None:
                    names, values = _named_vector(
                        ans, "'emeasure' must return a named numeric vector."
                    )
                    result = np.full((values.size, nreps, ntimes), np.nan)
                else:
                    values = _values(ans)
                    if values.size != result.shape[0]:
                        raise ValueError("'emeasure' returns variable-length results.")
            else:
                values = np.ravel(np.asarray(
                    bound.fun(xk, pk, bound.obsindex, bound.stateindex,
                              bound.paramindex, bound.covarindex, cov, float(t)),
                    dtype=float,
                ))
                if values.size != result.shape[0]:
                    raise ValueError("'emeasure' returned a vector of the wrong length.")
            result[:, j, k] = values

    return LabeledArray(result, names, _DIMNAMES)
"""Evaluation of the process-model transition density."""

from __future__ import annotations

import math
import warnings

import numpy as np

from .arrays import LabeledArray, as_matrix, as_state_array
from .pompfun import FunMode, Pomp, _scalar, pomp_fun_handler


def dprocess(model: Pomp, x, times, params, log: bool = False) -> LabeledArray:
    """Density of each transition of ``x`` between successive ``times``.

    ``x`` has shape (variables, replicates, times).  Keyword densities
    receive ``t_1``, ``t_2``, each state as ``<name>_1`` and ``<name>_2``,
    parameters, covariates (at ``t_1``) and the user data by name.  Native
    densities are called as ``fun(x1, x2, t1, t2, p, stateindex,
    paramindex, covarindex, covars)``.  Both return log densities, which
    are exponentiated unless ``log`` is true.  The result has shape
    (replicates, times - 1).
    """
    log = bool(log)
    times = np.atleast_1d(np.asarray(times, dtype=float)).ravel()
    ntimes = times.size
    states = as_state_array(x)
    nvars, nrepsx, nt = states.shape
    if ntimes < 2:
        raise ValueError("length(times) < 2: with no transitions, there is no work to do.")
    if ntimes != nt:
        raise ValueError("the length of 'times' and 3rd dimension of 'x' do not agree.")
    pars = as_matrix(params)
    nrepsp = pars.shape[1]
    if nrepsx == 0 or nrepsp == 0 or (
        nrepsx != nrepsp and nrepsx % nrepsp != 0 and nrepsp % nrepsx != 0
    ):
        raise ValueError("the larger number of replicates is not a multiple of smaller.")
    nreps = max(nrepsx, nrepsp)

    snames = states.rownames or ()
    pnames = pars.rownames or ()
    covar = model.covar
    cnames = covar.names or ()
    bound = pomp_fun_handler(model.dprocess, snames, pnames, None, cnames)

    result = np.full((nreps, ntimes - 1), np.nan)

    if bound.mode is FunMode.UNDEFINED:
        warnings.warn("'dprocess' unspecified: likelihood undefined.", stacklevel=2)
        return LabeledArray(result, None, (".id", "time"))

    for k, (t1, t2) in enumerate(zip(times[:-1], times[1:])):
        cov = covar.lookup(t1)
        for j in range(nreps):
            x1 = states.data[:, j % nrepsx, k]
            x2 = states.data[:, j % nrepsx, k + 1]
            pk = pars.data[:, j % nrepsp]
            if bound.mode is FunMode.KEYWORD:
                kwargs = dict(model.userdata)
                kwargs["t_1"] = float(t1)
                kwargs["t_2"] = float(t2)
                for name, v1, v2 in zip(snames, x1, x2):
                    kwargs[f"{name}_1"] = float(v1)
                    kwargs[f"{name}_2"] = float(v2)
                kwargs.update(zip(pnames, map(float, pk)))
                kwargs.update(zip(cnames, map(float, cov)))
                value = _scalar(bound.fun(**kwargs))
            else:
                value = float(
                    bound.fun(x1, x2, float(t1), float(t2), pk, bound.stateindex,
                              bound.paramindex, bound.covarindex, cov)
                )
            result[j, k] = value if log else math.exp(value)

    return LabeledArray(result, None, (".id", "time"))
"""Evaluation of the prior density of parameters."""

from __future__ import annotations

import numpy as np

from .arrays import as_matrix
from .pompfun import FunMode, Pomp, _scalar, pomp_fun_handler


def dprior(model: Pomp, params, log: bool = False) -> np.ndarray:
    """Prior density of each parameter vector (column) of ``params``.

    Keyword densities receive the parameters, ``log`` and the user data by
    name.  Native densities are called as ``fun(p, give_log, paramindex)``.
    An undefined prior is flat: 1, or 0 on the log scale.
    """
    log = bool(log)
    pars = as_matrix(params)
    nreps = pars.shape[1]
    pnames = pars.rownames if pars.rownames is not None else ()
    bound = pomp_fun_handler(model.dprior, None, pnames, None, None)

    if bound.mode is FunMode.KEYWORD:
        values = []
        for column in pars.data.T:
            kwargs = dict(model.userdata)
            kwargs.update(zip(pnames, map(float, column)))
            kwargs["log"] = log
            values.append(_scalar(bound.fun(**kwargs)))
        return np.array(values, dtype=float)
    if bound.mode is FunMode.NATIVE:
        return np.array(
            [float(bound.fun(column, log, bound.paramindex)) for column in pars.data.T],
            dtype=float,
        )
    return np.full(nreps, 0.0 if log else 1.0)
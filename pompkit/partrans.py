"""Parameter transformations to and from the estimation scale."""

from __future__ import annotations

import enum
from collections.abc import Mapping

import numpy as np

from .arrays import LabeledArray, as_matrix, match_names
from .pompfun import FunMode, Pomp, _named_vector, pomp_fun_handler


class Direction(enum.Enum):
    """Direction of a parameter transformation."""

    TO = "to"
    FROM = "from"


def partrans(model: Pomp, params, direction=Direction.TO) -> LabeledArray:
    """Transform parameters to (``TO``) or from (``FROM``) the estimation scale.

    Keyword transformations receive the parameters and user data by name
    and return the transformed parameters by name; parameters they do not
    return are left as they were.  Native transformations are called as
    ``fun(p, paramindex)`` and return the whole transformed vector.  An
    undefined transformation leaves the parameters unchanged.  A vector
    gives a vector back; a matrix gives a matrix.
    """
    direction = Direction(direction)
    vector_input = isinstance(params, Mapping) or np.ndim(params) <= 1
    mat = as_matrix(params)
    data = mat.data.copy()
    npars = data.shape[0]
    pnames = mat.rownames
    pfun = model.partrans_to if direction is Direction.TO else model.partrans_from
    bound = pomp_fun_handler(pfun, None, pnames if pnames is not None else (), None, None)

    if bound.mode is FunMode.KEYWORD:
        for j, column in enumerate(mat.data.T):
            kwargs = dict(model.userdata)
            kwargs.update(zip(pnames or (), map(float, column)))
            names, values = _named_vector(
                bound.fun(**kwargs),
                "user transformation functions must return named numeric vectors.",
            )
            data[match_names(pnames, names, "parameters"), j] = values
    elif bound.mode is FunMode.NATIVE:
        for j, column in enumerate(mat.data.T):
            result = np.asarray(bound.fun(column.copy(), bound.paramindex), dtype=float).ravel()
            if result.size != npars:
                raise ValueError("transformation returned a vector of the wrong length.")
            data[:, j] = result

    if vector_input:
        return LabeledArray(data[:, 0], pnames)
    return LabeledArray(data, pnames, mat.dimnames)
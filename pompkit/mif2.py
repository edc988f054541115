"""Random-walk perturbation of parameters used in iterated filtering."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from .arrays import LabeledArray, as_matrix, match_names


def randwalk_perturbation(params, rw_sd: Mapping[str, float], rng=None) -> LabeledArray:
    """Add independent normal noise to the named parameters.

    ``params`` is a parameter matrix (one column per replicate) with row
    names; ``rw_sd`` maps parameter names to random-walk standard
    deviations.  The input is left unchanged.
    """
    rng = np.random.default_rng() if rng is None else rng
    mat = as_matrix(params)
    data = mat.data.copy()
    names = list(rw_sd)
    rows = match_names(mat.rownames, names, "parameters")
    nreps = data.shape[1]
    for row, name in zip(rows, names):
        data[row, :] += float(rw_sd[name]) * rng.standard_normal(nreps)
    return LabeledArray(data, mat.rownames, mat.dimnames)
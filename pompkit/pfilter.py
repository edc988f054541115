"""Per-step computations of the particle filter: likelihood, moments, resampling."""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

import numpy as np

from .arrays import LabeledArray, as_matrix

_DIMNAMES = ("name", ".id")


class NonFiniteWeightError(ValueError):
    """A particle's log weight is NaN or positive infinity."""

    def __init__(self, index: int) -> None:
        super().__init__(f"non-finite log weight for particle {index}")
        self.index = index


@dataclass
class FilterResult:
    """Outcome of one filtering step.

    ``ancestry`` holds zero-based parent indices.  Optional quantities are
    ``None`` unless requested.
    """

    loglik: float
    ess: float
    states: LabeledArray
    params: LabeledArray
    pm: LabeledArray | None = None
    pv: LabeledArray | None = None
    fm: LabeledArray | None = None
    ancestry: np.ndarray | None = None
    wmean: LabeledArray | None = None


def _systematic_resample(weights: np.ndarray, n: int, rng) -> np.ndarray:
    cumulative = np.cumsum(weights)
    total = cumulative[-1]
    points = (rng.uniform() + np.arange(n)) * (total / n)
    idx = np.searchsorted(cumulative, points, side="right")
    return np.minimum(idx, weights.size - 1)


def pfilter_computations(
    x,
    params,
    n_particles: int,
    pred_mean: bool = False,
    pred_var: bool = False,
    filt_mean: bool = False,
    track_ancestry: bool = False,
    resample_params: bool = False,
    weights=None,
    weighted_mean: bool = False,
    rng=None,
) -> FilterResult:
    """Compute the conditional log likelihood and effective sample size,
    optional prediction and filtering moments, and resample the particles.

    ``x`` holds one column per particle; ``weights`` are log weights.
    If every weight is zero (log weight -inf), no resampling takes place.
    """
    rng = np.random.default_rng() if rng is None else rng
    states = as_matrix(x)
    xdata = states.data
    nvars, nreps = xdata.shape
    pars = as_matrix(params)
    pdata = pars.data
    npars, pcols = pdata.shape
    n_particles = int(n_particles)
    if n_particles < 0:
        raise ValueError("number of particles must be non-negative")
    if pcols == 0 or nreps % pcols != 0:
        raise ValueError("ncol('states') should be a multiple of ncol('params')")
    if resample_params and pcols != nreps:
        raise ValueError("ncol('states') should be equal to ncol('params')")
    if weighted_mean and pcols != nreps:
        raise ValueError("ncol('states') should be equal to ncol('params')")

    logw = np.zeros(nreps) if weights is None else np.array(weights, dtype=float).ravel()
    if logw.size != nreps:
        raise ValueError("length of 'weights' should equal ncol('states')")
    bad = np.flatnonzero(np.isnan(logw) | (logw == np.inf))
    if bad.size:
        raise NonFiniteWeightError(int(bad[0]))

    maxw = float(logw.max()) if nreps else -math.inf
    all_fail = maxw == -math.inf

    if all_fail:
        loglik, ess = -math.inf, 0.0
        w = np.zeros(nreps)
        wsum = 0.0
    else:
        w = np.exp(logw - maxw)
        wsum = math.fsum(w)
        wsq = math.fsum(w * w)
        loglik = maxw + math.log(wsum / nreps)
        ess = wsum * wsum / wsq

    result_pm = result_pv = result_fm = result_wmean = None
    if pred_mean or pred_var:
        pm = xdata.mean(axis=1)
        if pred_mean:
            result_pm = LabeledArray(pm, states.rownames)
        if pred_var:
            with np.errstate(divide="ignore", invalid="ignore"):
                pv = ((xdata - pm[:, None]) ** 2).sum(axis=1) / (nreps - 1)
            result_pv = LabeledArray(pv, states.rownames)

    if filt_mean:
        if all_fail:
            fm = xdata.mean(axis=1)
        else:
            fm = (xdata * w).sum(axis=1) / wsum
        result_fm = LabeledArray(fm, states.rownames)

    if weighted_mean:
        if all_fail:
            warnings.warn(
                "filtering failure at last filter iteration: "
                "using unweighted mean for point estimate.",
                stacklevel=2,
            )
            wm = pdata.mean(axis=1)
        else:
            wm = np.where(w != 0, pdata * w, 0.0).sum(axis=1) / wsum
        result_wmean = LabeledArray(wm, pars.rownames)

    ancestry = None
    if all_fail:
        new_states = LabeledArray(xdata, states.rownames, _DIMNAMES)
        new_params = pars
        if track_ancestry:
            ancestry = np.arange(n_particles)
    else:
        sample = _systematic_resample(w, n_particles, rng)
        new_states = LabeledArray(xdata[:, sample], states.rownames, _DIMNAMES)
        if resample_params:
            new_params = LabeledArray(pdata[:, sample], pars.rownames, _DIMNAMES)
        else:
            new_params = pars
        if track_ancestry:
            ancestry = sample

    return FilterResult(
        loglik=loglik,
        ess=ess,
        states=new_states,
        params=new_params,
        pm=result_pm,
        pv=result_pv,
        fm=result_fm,
        ancestry=ancestry,
        wmean=result_wmean,
    )
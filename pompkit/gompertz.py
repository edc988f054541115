"""Stochastic Gompertz population model with log-normal measurement error.

Parameters are ``r`` (growth rate), ``K`` (carrying capacity), ``sigma``
(process noise) and ``tau`` (measurement noise); the state is ``X`` and
the observation ``Y``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

import numpy as np
from scipy.stats import lognorm

_TRANSFORMED = ("r", "K", "sigma", "tau", "X_0")


def gompertz_dmeasure(y: Mapping[str, float], x: Mapping[str, float],
                      p: Mapping[str, float], give_log: bool = False) -> float:
    """Log-normal density of ``Y`` with log-mean ``log(X)`` and log-sd ``tau``."""
    obs, state, tau = float(y["Y"]), float(x["X"]), float(p["tau"])
    dist = lognorm(s=tau, scale=state)
    return float(dist.logpdf(obs) if give_log else dist.pdf(obs))


def gompertz_rmeasure(x: Mapping[str, float], p: Mapping[str, float], rng=None) -> dict[str, float]:
    """Draw an observation ``Y`` given the state."""
    rng = np.random.default_rng() if rng is None else rng
    return {"Y": float(rng.lognormal(mean=math.log(float(x["X"])), sigma=float(p["tau"])))}


def gompertz_emeasure(x: Mapping[str, float], p: Mapping[str, float]) -> dict[str, float]:
    """Expected observation given the state."""
    tau = float(p["tau"])
    return {"Y": float(x["X"]) * math.exp(tau * tau / 2)}


def gompertz_vmeasure(x: Mapping[str, float], p: Mapping[str, float]) -> np.ndarray:
    """1 x 1 variance matrix of the observation given the state."""
    tau = float(p["tau"])
    state = float(x["X"])
    et = math.exp(tau * tau)
    return np.array([[state * state * et * (et - 1)]])


def gompertz_step(x: Mapping[str, float], p: Mapping[str, float], deltat: float = 1.0,
                  rng=None) -> dict[str, float]:
    """Advance the state by ``deltat`` with log-normal process noise."""
    rng = np.random.default_rng() if rng is None else rng
    sigma = float(p["sigma"])
    s = math.exp(-float(p["r"]) * float(deltat))
    eps = math.exp(rng.normal(0.0, sigma)) if sigma > 0.0 else 1.0
    return {"X": float(p["K"]) ** (1 - s) * float(x["X"]) ** s * eps}


def gompertz_skeleton(x: Mapping[str, float], p: Mapping[str, float]) -> dict[str, float]:
    """Deterministic map of the state over one unit of time."""
    s = math.exp(-float(p["r"]))
    return {"X": float(p["K"]) ** (1 - s) * float(x["X"]) ** s}


def gompertz_to_trans(p: Mapping[str, float]) -> dict[str, float]:
    """Log-transform ``r``, ``K``, ``sigma``, ``tau`` and ``X_0``; other entries pass through."""
    out = dict(p)
    for name in _TRANSFORMED:
        out[name] = math.log(float(p[name]))
    return out


def gompertz_from_trans(p: Mapping[str, float]) -> dict[str, float]:
    """Inverse of :func:`gompertz_to_trans`."""
    out = dict(p)
    for name in _TRANSFORMED:
        out[name] = math.exp(float(p[name]))
    return out
"""Two-dimensional discrete-time Ornstein-Uhlenbeck process with normal measurement error.

Parameters are ``alpha_1`` .. ``alpha_4`` (transition matrix),
``sigma_1`` .. ``sigma_3`` (lower-triangular noise factor) and ``tau``
(measurement noise); states are ``x1``, ``x2`` and observations ``y1``, ``y2``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

import numpy as np

_LOG_SQRT_2PI = 0.5 * math.log(2 * math.pi)


def _std_normal_logpdf(z: float) -> float:
    return -0.5 * z * z - _LOG_SQRT_2PI


def _normal_logpdf(v: float, mean: float, sd: float) -> float:
    return _std_normal_logpdf((v - mean) / sd) - math.log(sd)


def _alphas(p: Mapping[str, float]) -> tuple[float, float, float, float]:
    return tuple(float(p[f"alpha_{i}"]) for i in range(1, 5))  # type: ignore[return-value]


def _mean(x: Mapping[str, float], p: Mapping[str, float]) -> tuple[float, float]:
    a1, a2, a3, a4 = _alphas(p)
    x1, x2 = float(x["x1"]), float(x["x2"])
    return a1 * x1 + a3 * x2, a2 * x1 + a4 * x2


def ou2_step(x: Mapping[str, float], p: Mapping[str, float], rng=None) -> dict[str, float]:
    """Advance the state by one unit of time."""
    rng = np.random.default_rng() if rng is None else rng
    e1, e2 = rng.standard_normal(2)
    m1, m2 = _mean(x, p)
    s1, s2, s3 = (float(p[f"sigma_{i}"]) for i in range(1, 4))
    return {"x1": m1 + s1 * e1, "x2": m2 + s2 * e1 + s3 * e2}


def ou2_pdf(x: Mapping[str, float], z: Mapping[str, float], t1: float, t2: float,
            p: Mapping[str, float]) -> float:
    """Log density of the transition from ``x`` at ``t1`` to ``z`` at ``t2 = t1 + 1``."""
    if t2 - t1 != 1:
        raise ValueError("ou2_pdf error: transitions must be consecutive")
    m1, m2 = _mean(x, p)
    s1, s2, s3 = (float(p[f"sigma_{i}"]) for i in range(1, 4))
    e1 = (float(z["x1"]) - m1) / s1
    e2 = (float(z["x2"]) - m2 - s2 * e1) / s3
    return _std_normal_logpdf(e1) + _std_normal_logpdf(e2) - math.log(s1) - math.log(s3)


def ou2_skeleton(x: Mapping[str, float], p: Mapping[str, float]) -> dict[str, float]:
    """Deterministic map of the state over one unit of time."""
    m1, m2 = _mean(x, p)
    return {"x1": m1, "x2": m2}


def ou2_dmeasure(y: Mapping[str, float], x: Mapping[str, float], p: Mapping[str, float],
                 give_log: bool = False) -> float:
    """Normal measurement density; missing (NaN) observations contribute nothing."""
    sd = abs(float(p["tau"]))
    f = 0.0
    for obs, state in (("y1", "x1"), ("y2", "x2")):
        v = float(y[obs])
        if not math.isnan(v):
            f += _normal_logpdf(v, float(x[state]), sd)
    return f if give_log else math.exp(f)


def ou2_rmeasure(x: Mapping[str, float], p: Mapping[str, float], rng=None) -> dict[str, float]:
    """Draw observations given the state."""
    rng = np.random.default_rng() if rng is None else rng
    sd = abs(float(p["tau"]))
    return {
        "y1": float(rng.normal(float(x["x1"]), sd)),
        "y2": float(rng.normal(float(x["x2"]), sd)),
    }


def ou2_emeasure(x: Mapping[str, float], p: Mapping[str, float]) -> dict[str, float]:
    """Expected observations given the state."""
    return {"y1": float(x["x1"]), "y2": float(x["x2"])}


def ou2_vmeasure(x: Mapping[str, float], p: Mapping[str, float]) -> np.ndarray:
    """2 x 2 variance matrix of the observations given the state."""
    sd = abs(float(p["tau"]))
    return np.diag([sd * sd, sd * sd])
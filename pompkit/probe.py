"""Evaluation of probe functions on data."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from numbers import Real

import numpy as np

from .arrays import LabeledArray


def _numeric_values(value, position: int) -> tuple[np.ndarray, tuple[str, ...] | None]:
    if isinstance(value, LabeledArray):
        return value.data.ravel(), value.rownames
    if isinstance(value, Mapping):
        items = list(value.items())
        if not all(isinstance(v, Real) and not isinstance(v, bool) for _, v in items):
            raise TypeError(f"probe {position} returns a non-numeric result")
        return np.array([float(v) for _, v in items]), tuple(str(k) for k, _ in items)
    arr = np.asarray(value)
    if arr.dtype.kind not in "iuf":
        raise TypeError(f"probe {position} returns a non-numeric result")
    return arr.astype(float).ravel(), None


def _combined_names(outer: str, inner: tuple[str, ...] | None, size: int) -> list[str]:
    if not outer:
        return list(inner) if inner is not None else [""] * size
    if inner is not None:
        return [f"{outer}.{name}" if name else outer for name in inner]
    if size == 1:
        return [outer]
    return [f"{outer}{i + 1}" for i in range(size)]


def apply_probe_data(data, probes) -> LabeledArray:
    """Apply each probe to ``data`` and concatenate the results.

    ``probes`` is a mapping from names to callables, or a sequence of
    callables.  Result names follow the usual concatenation rule: a probe
    name alone for a single unnamed value, the name with a 1-based suffix
    for several unnamed values, and ``probe.value`` for named values.
    """
    if isinstance(probes, Mapping):
        entries: list[tuple[str, Callable]] = [(str(k), f) for k, f in probes.items()]
    else:
        entries = [("", f) for f in probes]
    values: list[np.ndarray] = []
    names: list[str] = []
    for position, (name, probe) in enumerate(entries, start=1):
        vals, inner = _numeric_values(probe(data), position)
        values.append(vals)
        names.extend(_combined_names(name, inner, vals.size))
    result = np.concatenate(values) if values else np.zeros(0)
    return LabeledArray(result, tuple(names))
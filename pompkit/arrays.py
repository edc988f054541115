"""Labelled numeric arrays and the shape conversions used throughout the package."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import numpy as np


@dataclass
class LabeledArray:
    """A float array whose first dimension may carry names.

    ``dimnames`` optionally names the dimensions themselves
    (for example ``("name", ".id", "time")``).
    """

    data: np.ndarray
    rownames: tuple[str, ...] | None = None
    dimnames: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        self.data = np.asarray(self.data, dtype=float)
        if self.rownames is not None:
            self.rownames = tuple(str(name) for name in self.rownames)
            if self.data.ndim == 0 or len(self.rownames) != self.data.shape[0]:
                raise ValueError(
                    "number of row names does not match the first dimension"
                )
        if self.dimnames is not None:
            self.dimnames = tuple(self.dimnames)
            if len(self.dimnames) != self.data.ndim:
                raise ValueError("number of dimension names does not match rank")

    @property
    def shape(self) -> tuple[int, ...]:
        return self.data.shape

    @property
    def ndim(self) -> int:
        return self.data.ndim

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, key):
        return self.data[key]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self.data
        return self.data.astype(dtype)

    def index_of(self, name: str) -> int:
        """Position of a row name."""
        if self.rownames is None:
            raise KeyError(name)
        try:
            return self.rownames.index(name)
        except ValueError:
            raise KeyError(name) from None


def _coerce(x) -> LabeledArray:
    if isinstance(x, LabeledArray):
        return LabeledArray(x.data.copy(), x.rownames, x.dimnames)
    if isinstance(x, Mapping):
        return LabeledArray(np.array(list(x.values()), dtype=float), tuple(x))
    return LabeledArray(np.array(x, dtype=float))


def make_array(shape, rownames=None) -> LabeledArray:
    """A new array of the given shape filled with NaN."""
    if isinstance(shape, int):
        shape = (shape,)
    return LabeledArray(np.full(tuple(shape), np.nan), rownames)


def as_matrix(x) -> LabeledArray:
    """Coerce a vector, matrix or higher array into a matrix.

    Vectors become single columns; arrays of rank above two keep their
    first dimension and have the rest collapsed in column-major order.
    """
    lab = _coerce(x)
    data = lab.data
    if data.ndim <= 1:
        data = data.reshape(-1, 1)
        return LabeledArray(data, lab.rownames)
    if data.ndim == 2:
        return lab
    nrow = data.shape[0]
    return LabeledArray(data.reshape(nrow, -1, order="F"), lab.rownames)


def as_state_array(x) -> LabeledArray:
    """Coerce ``x`` into a rank-3 array (variables x replicates x times)."""
    lab = _coerce(x)
    data = lab.data
    if data.ndim <= 1:
        return LabeledArray(data.reshape(-1, 1, 1), lab.rownames)
    if data.ndim == 2:
        nrow, ncol = data.shape
        return LabeledArray(data.reshape(nrow, 1, ncol), lab.rownames)
    if data.ndim == 3:
        return lab
    nrow, ncol = data.shape[:2]
    return LabeledArray(data.reshape(nrow, ncol, -1, order="F"), lab.rownames)


def match_names(provided, needed, where: str) -> list[int]:
    """Positions in ``provided`` of each name in ``needed``."""
    if provided is None:
        raise ValueError(f"invalid variable names among the {where}.")
    if needed is None:
        return []
    if isinstance(needed, str):
        needed = [needed]
    positions: dict[str, int] = {}
    for pos, name in enumerate(provided):
        positions.setdefault(str(name), pos)
    result = []
    for name in needed:
        try:
            result.append(positions[str(name)])
        except KeyError:
            raise ValueError(
                f"variable '{name}' not found among the {where}."
            ) from None
    return result


def _names(values: Iterable | None) -> tuple[str, ...] | None:
    return None if values is None else tuple(str(v) for v in values)
"""User-supplied model components and the model object that holds them."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .arrays import LabeledArray, match_names
from .lookup import CovariateTable


class FunMode(enum.Enum):
    """How a model component is called.

    ``KEYWORD`` functions receive every variable as a named scalar argument.
    ``NATIVE`` functions receive whole vectors together with index vectors
    that locate the names they declared.
    """

    UNDEFINED = 0
    KEYWORD = 1
    NATIVE = 2


@dataclass(frozen=True)
class BoundFun:
    """A model component resolved against the names of the data it will see.

    Each index vector gives, for each name the function declared, its
    position among the provided names.
    """

    mode: FunMode
    fun: Callable | None = None
    stateindex: tuple[int, ...] = ()
    paramindex: tuple[int, ...] = ()
    obsindex: tuple[int, ...] = ()
    covarindex: tuple[int, ...] = ()


def _name_index(provided, declared: tuple[str, ...], where: str) -> tuple[int, ...]:
    if provided is None or not declared:
        return ()
    return tuple(match_names(provided, declared, where))


def _names(values) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values)


@dataclass
class PompFun:
    """A model component: a callable and the variable names it uses.

    Without an explicit mode, a component with a function is called by
    keyword and one without a function is undefined.
    """

    fun: Callable | None = None
    mode: FunMode | None = None
    statenames: tuple[str, ...] = ()
    paramnames: tuple[str, ...] = ()
    obsnames: tuple[str, ...] = ()
    covarnames: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.mode is None:
            self.mode = FunMode.UNDEFINED if self.fun is None else FunMode.KEYWORD
        else:
            self.mode = FunMode(self.mode)
        if self.mode is not FunMode.UNDEFINED and self.fun is None:
            raise ValueError(f"a component of mode {self.mode.name} needs a function")
        self.statenames = _names(self.statenames)
        self.paramnames = _names(self.paramnames)
        self.obsnames = _names(self.obsnames)
        self.covarnames = _names(self.covarnames)

    def bind(self, statenames=None, paramnames=None, obsnames=None, covarnames=None) -> BoundFun:
        """Resolve this component against the provided names.

        A name list given as ``None`` is not looked up.
        """
        if self.mode is FunMode.UNDEFINED:
            return BoundFun(FunMode.UNDEFINED)
        if self.mode is FunMode.KEYWORD:
            return BoundFun(FunMode.KEYWORD, self.fun)
        return BoundFun(
            FunMode.NATIVE,
            self.fun,
            stateindex=_name_index(statenames, self.statenames, "state variables"),
            paramindex=_name_index(paramnames, self.paramnames, "parameters"),
            obsindex=_name_index(obsnames, self.obsnames, "observables"),
            covarindex=_name_index(covarnames, self.covarnames, "covariates"),
        )


def pomp_fun_handler(pfun: PompFun | None, statenames=None, paramnames=None,
                     obsnames=None, covarnames=None) -> BoundFun:
    """Resolve ``pfun`` against the provided names; ``None`` is undefined."""
    if pfun is None:
        return BoundFun(FunMode.UNDEFINED)
    return pfun.bind(statenames, paramnames, obsnames, covarnames)


@dataclass
class Pomp:
    """A partially observed Markov process model: its components, covariates and user data."""

    userdata: dict[str, Any] = field(default_factory=dict)
    covar: CovariateTable = field(default_factory=CovariateTable)
    dprior: PompFun = field(default_factory=PompFun)
    partrans_to: PompFun = field(default_factory=PompFun)
    partrans_from: PompFun = field(default_factory=PompFun)
    dmeasure: PompFun = field(default_factory=PompFun)
    emeasure: PompFun = field(default_factory=PompFun)
    dprocess: PompFun = field(default_factory=PompFun)
    dinit: PompFun = field(default_factory=PompFun)

    def __post_init__(self) -> None:
        if self.covar is None:
            self.covar = CovariateTable()
        self.userdata = dict(self.userdata or {})


def _named_vector(ans, message: str) -> tuple[tuple[str, ...], np.ndarray]:
    """Names and values of a component's named result."""
    if isinstance(ans, LabeledArray):
        if ans.rownames is None:
            raise ValueError(message)
        return ans.rownames, ans.data.ravel().astype(float)
    if isinstance(ans, Mapping):
        return tuple(str(k) for k in ans), np.array([float(v) for v in ans.values()])
    raise ValueError(message)


def _scalar(ans) -> float:
    """First value of a component's numeric result."""
    if isinstance(ans, Mapping):
        ans = list(ans.values())
    values = np.ravel(np.asarray(ans, dtype=float))
    if values.size == 0:
        raise ValueError("component returned an empty result")
    return float(values[0])
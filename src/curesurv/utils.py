from __future__ import annotations

import json
import logging
import os
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Iterator

import yaml

log = logging.getLogger(__name__)


def getenv_bool(name: str, default: bool = False) -> bool:
    """Get environment value as a boolean, returning True for 1, t and true
    (caps-insensitive), and False for any other value and default if undefined.
    """
    val = os.getenv(name)
    if not val:
        return default
    elif val.lower() in ("1", "t", "true"):
        return True
    else:
        return False


def getenv_float(name: str, default: float) -> float:
    """Get environment value as a float, returning `default` if undefined."""
    val = os.getenv(name)
    if not val:
        return default
    return float(val)


class Defaults(MutableMapping):
    """Bare-bones mapping of default options whose values can be read and set
    both as items and as attributes. Calling the object returns a copy of the
    options updated with the given keyword arguments.
    """

    def __getitem__(self, item: str) -> Any:
        return self.__dict__[item]

    def __setitem__(self, item: str, val: Any) -> None:
        self.__dict__[item] = val

    def __delitem__(self, item: str) -> None:
        del self.__dict__[item]

    def __iter__(self) -> Iterator:
        return self.__dict__.__iter__()

    def __len__(self) -> int:
        return len(self.__dict__)

    def __call__(self, **kwargs) -> dict:
        mapping = self.__dict__.copy()
        mapping.update(**kwargs)
        return mapping

    def __str__(self) -> str:
        return str(self.__dict__)

    def __repr__(self) -> str:
        return str(self.__dict__)


class NumbaCureDefaults(Defaults):
    """Numba default options for the compiled base distributions. Defaults
    values are set from environment variables.

    Examples
    --------
    Set all default option values for a numba wrapped function at once by
    expanding the provided dictionary:

    >>> from numba import njit
    >>> from curesurv.utils import numba_defaults_kwargs as nb_kwargs
    >>> @njit(**nb_kwargs) # def dist(...): ...

    Customize one argument but still set defaults for the others:

    >>> from curesurv.utils import numba_defaults as nb_defaults
    >>> @njit(**nb_defaults(cache=False)) # def dist(...): ...

    Override global options at runtime:

    >>> from curesurv.utils import numba_defaults
    >>> # must set options before importing curesurv.functions!
    >>> numba_defaults.parallel = True
    """

    def __init__(self) -> None:
        self.parallel: bool = getenv_bool("CURESURV_PARALLEL", default=False)
        # fastmath assumes finite values, the kernels are evaluated at t = inf
        self.fastmath: bool = getenv_bool("CURESURV_FASTMATH", default=False)
        self.cache: bool = getenv_bool("CURESURV_CACHE", default=False)


class NumericalDefaults(Defaults):
    """Tolerances and limits of the quantile inversion and restricted mean
    primitives. Every option can be set from a ``CURESURV_<NAME>`` environment
    variable, e.g. ``CURESURV_XTOL``.

    Options
    -------
    xtol, rtol, maxiter
        Absolute and relative tolerance and iteration limit of
        :func:`scipy.optimize.brentq`.
    bracket_start, bracket_factor, bracket_max
        Initial upper bracket of the root search, the factor it grows by and
        the time beyond which the search gives up.
    epsabs, epsrel, limit
        Tolerances and subinterval limit of :func:`scipy.integrate.quad`.
    tail_horizon, tail_tol
        A survival function is considered non-decaying, and its integral on
        an infinite horizon divergent, if its value at `tail_horizon` exceeds
        `tail_tol`.

    Item assignment, and so :meth:`update`, casts the value to the type of
    the option and rejects unknown names, so values read from a file, such
    as ``xtol: 1e-10`` which YAML loads as a string, are usable as is.

    Examples
    --------
    >>> from curesurv.utils import load_dict, numerical_defaults
    >>> numerical_defaults.update(load_dict("solver.yaml"))
    """

    def __init__(self) -> None:
        self.xtol: float = getenv_float("CURESURV_XTOL", 1e-12)
        self.rtol: float = getenv_float("CURESURV_RTOL", 4 * 2.220446049250313e-16)
        self.maxiter: int = int(getenv_float("CURESURV_MAXITER", 200))
        self.bracket_start: float = getenv_float("CURESURV_BRACKET_START", 1.0)
        self.bracket_factor: float = getenv_float("CURESURV_BRACKET_FACTOR", 2.0)
        self.bracket_max: float = getenv_float("CURESURV_BRACKET_MAX", 1e10)
        self.epsabs: float = getenv_float("CURESURV_EPSABS", 1.49e-8)
        self.epsrel: float = getenv_float("CURESURV_EPSREL", 1.49e-8)
        self.limit: int = int(getenv_float("CURESURV_LIMIT", 200))
        self.tail_horizon: float = getenv_float("CURESURV_TAIL_HORIZON", 1e12)
        self.tail_tol: float = getenv_float("CURESURV_TAIL_TOL", 1e-6)

    def __setitem__(self, item: str, val: Any) -> None:
        # YAML 1.1 reads "1e-10" as a string; cast to the option's type
        if item not in self.__dict__:
            raise KeyError(f"unknown numerical option {item!r}")
        if isinstance(self.__dict__[item], int):
            self.__dict__[item] = int(float(val))
        else:
            self.__dict__[item] = float(val)


numba_defaults = NumbaCureDefaults()
numba_defaults_kwargs = numba_defaults

numerical_defaults = NumericalDefaults()

__file_extensions__ = {"json": [".json"], "yaml": [".yaml", ".yml"]}


def load_dict(fname: str, ftype: str | None = None) -> dict:
    """Load a text file as a Python dict."""
    fname = Path(fname)

    # determine file type from extension
    if ftype is None:
        for _ftype, exts in __file_extensions__.items():
            if fname.suffix in exts:
                ftype = _ftype

    msg = f"loading {ftype} dict from: {fname}"
    log.debug(msg)

    with fname.open() as f:
        if ftype == "json":
            return json.load(f)
        if ftype == "yaml":
            return yaml.safe_load(f)

        msg = f"unsupported file format {ftype}"
        raise NotImplementedError(msg)

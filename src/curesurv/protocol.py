r"""
Tail-direction and log-scale conventions shared by every cure-model function.

Every derived quantity is first computed in canonical form, i.e. upper tail
(survival) and not logged, and only converted to the convention the caller
asked for on return:

.. code-block:: python

    conv = Convention(lower_tail=lower_tail, log=log_p)
    surv = ...  # canonical survival
    return conv.finalize(surv)

Internal calls to sibling or base functions always use :data:`CANONICAL`,
and the pass-through parameter bundle is stripped of flags with
:func:`strip_flags` before it is forwarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from curesurv.errors import DomainError

ArrayLike = Union[float, np.ndarray]

#: keyword names that carry a convention and are never forwarded as parameters
FLAGS = ("lower_tail", "log_p", "log")


@dataclass(frozen=True)
class Convention:
    r"""
    The tail direction and log scale a caller asked for.

    Parameters
    ----------
    lower_tail
        If True probabilities are :math:`P(X \le x)`, otherwise :math:`P(X > x)`
    log
        If True the natural logarithm of the quantity is returned
    """

    lower_tail: bool = True
    log: bool = False

    def finalize(self, value: np.ndarray, flip: bool = True) -> np.ndarray:
        r"""
        Convert a canonical (upper tail, non-log) quantity to this convention.

        Parameters
        ----------
        value
            The canonical quantity
        flip
            Whether the quantity is probability-like. Densities, hazards and
            cumulative hazards are tail invariant and are never flipped.
        """
        out = value
        if flip and self.lower_tail:
            out = 1 - out
        if self.log:
            out = safe_log(out)
        return out


CANONICAL = Convention(lower_tail=False, log=False)


def strip_flags(params: dict) -> dict:
    """Return a copy of the parameter bundle without convention flags."""
    return {k: v for k, v in params.items() if k not in FLAGS}


def safe_log(x: ArrayLike) -> ArrayLike:
    """Natural logarithm mapping zero to ``-inf`` without a warning."""
    with np.errstate(divide="ignore"):
        return np.log(x)


def is_scalar(*args: Any) -> bool:
    """True if every argument is a scalar (or 0-d array)."""
    return all(np.ndim(a) == 0 for a in args)


def recycle(*args: Any) -> list[np.ndarray]:
    """
    Cyclically extend every argument to the length of the longest one.

    Scalars are repeated, shorter arrays are tiled (and truncated) like
    :func:`numpy.resize`. If any argument is empty, every output is empty.

    Returns
    -------
    arrays
        One flat :class:`numpy.ndarray` per argument, all of the same length
    """
    arrays = [np.ravel(np.asarray(a)) for a in args]
    if any(a.size == 0 for a in arrays):
        return [a[:0] for a in arrays]
    n = max(a.size for a in arrays)
    return [a if a.size == n else np.resize(a, n) for a in arrays]


def recycle_args(
    x: ArrayLike, theta: ArrayLike, params: dict
) -> tuple[np.ndarray, np.ndarray, dict, bool]:
    """
    Recycle times/probabilities, cure fractions and base parameters against
    each other.

    Returns
    -------
    x, theta, params, scalar
        Recycled float arrays, the recycled parameter dict and whether every
        input was a scalar
    """
    params = strip_flags(params)
    scalar = is_scalar(x, theta, *params.values())
    names = list(params)
    x, theta, *values = recycle(x, theta, *params.values())
    return (
        x.astype(np.float64),
        theta.astype(np.float64),
        dict(zip(names, values)),
        scalar,
    )


def unwrap(out: np.ndarray, scalar: bool) -> ArrayLike:
    """Return a Python float if every input was a scalar, the array otherwise."""
    if scalar:
        return float(out[0])
    return out


def check_theta(theta: np.ndarray) -> None:
    """Raise :class:`.DomainError` if a cure fraction lies outside [0, 1]."""
    bad = (theta < 0) | (theta > 1)
    if np.any(bad):
        raise DomainError(
            f"cure fraction must lie in [0, 1], got {theta[bad][0]}"
        )


def check_times(x: np.ndarray) -> None:
    """Raise :class:`.DomainError` on negative times. NaN is let through."""
    bad = x < 0
    if np.any(bad):
        raise DomainError(f"time must be non-negative, got {x[bad][0]}")


def check_probabilities(p: np.ndarray) -> None:
    """Raise :class:`.DomainError` on probabilities outside [0, 1]."""
    bad = (p < 0) | (p > 1)
    if np.any(bad):
        raise DomainError(f"probability must lie in [0, 1], got {p[bad][0]}")


def to_survival_level(
    p: ArrayLike, lower_tail: bool = True, log_p: bool = False
) -> np.ndarray:
    r"""
    Undo the convention of a probability argument, giving the survival level
    :math:`P(X > x)` that the quantile functions solve for.

    Upper-tail arguments are kept as they are (only the log is undone), so
    survival levels far below machine epsilon survive the conversion. Only a
    lower-tail argument is flipped, through ``-expm1`` on the log scale.
    """
    p = np.asarray(p, dtype=np.float64)
    if lower_tail:
        return -np.expm1(p) if log_p else 1 - p
    return np.exp(p) if log_p else p

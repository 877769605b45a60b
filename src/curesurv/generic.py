r"""
Generic numerical primitives working on any survival callable
``sf(t, **params) -> float``.

* :func:`invert_survival_level` recovers the time at which the survival
  function drops to a target level, by bracketing followed by
  :func:`scipy.optimize.brentq`. :func:`invert_survival` is the same for
  lower-tail probabilities.
* :func:`restricted_mean` integrates the survival function with
  :func:`scipy.integrate.quad`, optionally conditioned on survival up to a
  start time.

Both are evaluated element by element over recycled arguments; tolerances and
limits are read from :data:`curesurv.utils.numerical_defaults` at call time.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np
from scipy.integrate import quad
from scipy.optimize import brentq

from curesurv.errors import ConvergenceError, DegenerateParameterError
from curesurv.protocol import (
    ArrayLike,
    check_probabilities,
    check_theta,
    check_times,
    is_scalar,
    recycle,
    strip_flags,
    unwrap,
)
from curesurv.utils import numerical_defaults

log = logging.getLogger(__name__)


def _bracket(
    sf: Callable, target: float, args: dict, index: int
) -> tuple[float, float]:
    """Find ``lower < upper`` with ``sf(lower) >= target >= sf(upper)``."""
    lower = 0.0
    upper = numerical_defaults.bracket_start
    while sf(upper, **args) > target:
        lower = upper
        upper *= numerical_defaults.bracket_factor
        if upper > numerical_defaults.bracket_max:
            raise ConvergenceError(
                f"could not bracket survival level {target} below "
                f"t = {numerical_defaults.bracket_max}",
                index=index,
            )
    log.debug(f"survival level {target} bracketed in [{lower}, {upper}]")
    return lower, upper


def _solve(sf: Callable, target: float, args: dict, index: int) -> float:
    lower, upper = _bracket(sf, target, args, index)
    try:
        root, res = brentq(
            lambda t: sf(t, **args) - target,
            lower,
            upper,
            xtol=numerical_defaults.xtol,
            rtol=numerical_defaults.rtol,
            maxiter=numerical_defaults.maxiter,
            full_output=True,
            disp=False,
        )
    except ValueError as exc:
        raise ConvergenceError(
            f"root finding failed for survival level {target}: {exc}", index=index
        ) from exc

    if not res.converged:
        raise ConvergenceError(
            f"root finding did not converge for survival level {target}: {res.flag}",
            index=index,
        )
    return root


def invert_survival_level(sf: Callable, s: ArrayLike, **params) -> ArrayLike:
    r"""
    Numerically invert a survival function.

    Returns the times :math:`t` with :math:`S(t) = s`. The level is taken as
    given, never through ``1 - s``, so levels far below machine epsilon
    still have a finite root.

    Parameters
    ----------
    sf
        Monotone non-increasing survival callable ``sf(t, **params)``
        returning a float for scalar arguments
    s
        Survival levels
    params
        Parameters of `sf`, recycled element-wise against `s`

    Returns
    -------
    t
        The times: 0 where ``s == 1``, ``inf`` where ``s == 0`` and NaN
        where `s` is NaN. A float if every input is a scalar.

    Raises
    ------
    DomainError
        If a level lies outside [0, 1]
    ConvergenceError
        If the root cannot be bracketed below ``bracket_max`` or the root
        finder does not converge
    """
    params = strip_flags(params)
    scalar = is_scalar(s, *params.values())
    names = list(params)
    s, *values = recycle(s, *params.values())
    s = s.astype(np.float64)
    check_probabilities(s)

    ret = np.full(s.size, np.nan)
    ret[s == 1] = 0
    ret[s == 0] = np.inf
    for i in np.flatnonzero((s > 0) & (s < 1)):
        args = {name: v[i] for name, v in zip(names, values)}
        ret[i] = _solve(sf, s[i], args, i)

    if np.any(np.isnan(ret)):
        log.warning("NaNs produced")
    return unwrap(ret, scalar)


def invert_survival(sf: Callable, p: ArrayLike, **params) -> ArrayLike:
    r"""
    Quantiles of a survival function: the times :math:`t` with
    :math:`S(t) = 1 - p` for lower-tail probabilities `p`.

    ``p == 0`` gives 0 and ``p == 1`` gives ``inf``. See
    :func:`invert_survival_level`, which this calls with ``1 - p``; pass
    upper-tail levels there directly to keep their precision.
    """
    return invert_survival_level(sf, 1 - np.asarray(p, dtype=np.float64), **params)


def _integrate(
    sf: Callable, start: float, end: float, args: dict, index: int
) -> float:
    if np.isinf(end):
        tail = sf(numerical_defaults.tail_horizon, **args)
        if tail > numerical_defaults.tail_tol:
            raise ConvergenceError(
                f"survival does not decay ({tail} > tail_tol = "
                f"{numerical_defaults.tail_tol} at t = {numerical_defaults.tail_horizon}), "
                "the integral to infinity is taken as divergent; very heavy tails "
                "need a larger tail_tol or tail_horizon in numerical_defaults",
                index=index,
            )

    res = quad(
        lambda u: sf(u, **args),
        start,
        end,
        epsabs=numerical_defaults.epsabs,
        epsrel=numerical_defaults.epsrel,
        limit=numerical_defaults.limit,
        full_output=1,
    )
    # quad only appends a message when ier > 0
    if len(res) > 3:
        raise ConvergenceError(
            f"integration over [{start}, {end}] did not converge: {res[3]}",
            index=index,
        )
    log.debug(f"integral over [{start}, {end}] = {res[0]} +/- {res[1]}")

    with np.errstate(divide="ignore", invalid="ignore"):
        return np.divide(res[0], sf(start, **args))


def restricted_mean(
    sf: Callable, t: ArrayLike, start: ArrayLike = 0.0, **params
) -> ArrayLike:
    r"""
    Restricted mean survival time.

    Computes

    .. math::
        \frac{1}{S(s)} \int_s^t S(u)\,du

    i.e. the expectation of :math:`\min(T, t)` for survival conditioned on
    :math:`T > s`, the remaining time being measured from the start time `s`.

    Parameters
    ----------
    sf
        Survival callable ``sf(t, **params)`` returning a float for scalar
        arguments
    t
        Horizons, ``inf`` gives the (conditional) mean
    start
        Left-truncation times, the result is conditioned on survival up to
        these
    params
        Parameters of `sf`, recycled element-wise against `t` and `start`

    Returns
    -------
    rmst
        Restricted means; 0 where ``t < start``. A float if every input is a
        scalar.

    Raises
    ------
    DomainError
        On negative horizons or start times
    ConvergenceError
        If the survival function does not decay on an infinite horizon, i.e.
        it still exceeds ``numerical_defaults.tail_tol`` at
        ``numerical_defaults.tail_horizon``, or the quadrature does not
        converge. Heavy-tailed bases with a finite mean can trip the decay
        check and need those two options relaxed.
    """
    params = strip_flags(params)
    scalar = is_scalar(t, start, *params.values())
    names = list(params)
    t, start, *values = recycle(t, start, *params.values())
    t = t.astype(np.float64)
    start = start.astype(np.float64)
    check_times(t)
    check_times(start)

    ret = np.zeros(t.size)
    for i in range(t.size):
        if np.isnan(t[i]) or np.isnan(start[i]):
            ret[i] = np.nan
        elif t[i] > start[i]:
            args = {name: v[i] for name, v in zip(names, values)}
            ret[i] = _integrate(sf, start[i], t[i], args, i)

    if np.any(np.isnan(ret)):
        log.warning("NaNs produced")
    return unwrap(ret, scalar)


def invert_cure_survival(
    sf: Callable, s: ArrayLike, theta: ArrayLike, **params
) -> ArrayLike:
    r"""
    Invert the survival function of a cure model whose survival tends to the
    cure fraction `theta` as :math:`t \to \infty`.

    A survival level `s` at or below `theta` is never reached by the uncured
    population, its time is ``inf``. Everything else is solved by
    :func:`invert_survival_level`, with `theta` forwarded to `sf` as a
    keyword parameter. NaN levels or cure fractions give NaN.

    Raises
    ------
    DegenerateParameterError
        If ``theta == 1`` and ``0 < s < 1``, no finite time exists
    """
    params = strip_flags(params)
    scalar = is_scalar(s, theta, *params.values())
    names = list(params)
    s, theta, *values = recycle(s, theta, *params.values())
    s = s.astype(np.float64)
    theta = theta.astype(np.float64)
    check_probabilities(s)
    check_theta(theta)

    if np.any((theta == 1) & (s > 0) & (s < 1)):
        raise DegenerateParameterError(
            "cure fraction of 1: survival never drops below 1, no finite quantile"
        )

    ret = np.full(s.size, np.inf)
    ret[np.isnan(theta)] = np.nan
    finite = ((s > theta) | (s == 1) | np.isnan(s)) & ~np.isnan(theta)
    ret[finite] = invert_survival_level(
        sf,
        s[finite],
        theta=theta[finite],
        **{name: v[finite] for name, v in zip(names, values)},
    )
    return unwrap(ret, scalar)

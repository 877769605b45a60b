r"""
Mixture cure models.

A fraction :math:`\theta` of the population is cured and never experiences
the event, the rest follows the base distribution. With base survival
:math:`S_0 = 1 - F_0` and density :math:`f_0`:

.. math::
    S(t) = \theta + (1 - \theta) S_0(t)

.. math::
    h(t) = \frac{(1 - \theta) f_0(t)}{\theta + (1 - \theta) S_0(t)}

and :math:`H(t) = -\ln S(t)`, :math:`f(t) = S(t) h(t)`. At ``theta == 0``
every quantity is the base distribution's.

The base CDF is called as ``cdf(q, lower_tail=..., log_p=..., **params)`` and
the base density as ``pdf(x, log=..., **params)``.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from curesurv.errors import DomainError
from curesurv.generic import invert_cure_survival, restricted_mean
from curesurv.protocol import (
    CANONICAL,
    ArrayLike,
    Convention,
    call_cdf,
    call_pdf,
    check_theta,
    check_times,
    is_scalar,
    recycle,
    recycle_args,
    safe_log,
    strip_flags,
    to_survival_level,
    unwrap,
)

log = logging.getLogger(__name__)


def mixture_cdf(
    cdf: Callable,
    q: ArrayLike,
    theta: ArrayLike,
    lower_tail: bool = True,
    log_p: bool = False,
    **params,
) -> ArrayLike:
    r"""
    Distribution function of the mixture cure model.

    Parameters
    ----------
    cdf
        The base distribution's CDF
    q
        Times
    theta
        Cure fractions in [0, 1]
    lower_tail
        If True return :math:`P(T \le q)`, otherwise the survival :math:`P(T > q)`
    log_p
        If True return the log of the probability
    params
        Parameters of the base distribution
    """
    q, theta, params, scalar = recycle_args(q, theta, params)
    check_theta(theta)
    check_times(q)

    surv = theta + (1 - theta) * call_cdf(cdf, q, params, CANONICAL)
    return unwrap(Convention(lower_tail, log_p).finalize(surv), scalar)


def mixture_sf(
    cdf: Callable, q: ArrayLike, theta: ArrayLike, log_p: bool = False, **params
) -> ArrayLike:
    """Survival function, :func:`mixture_cdf` with ``lower_tail=False``."""
    return mixture_cdf(cdf, q, theta, lower_tail=False, log_p=log_p, **params)


def mixture_hazard(
    cdf: Callable,
    pdf: Callable,
    x: ArrayLike,
    theta: ArrayLike,
    log: bool = False,
    **params,
) -> ArrayLike:
    r"""
    Hazard of the mixture cure model, the uncured density over the mixture
    survival.
    """
    x, theta, params, scalar = recycle_args(x, theta, params)
    check_theta(theta)
    check_times(x)

    base_surv = call_cdf(cdf, x, params, CANONICAL)
    base_dens = call_pdf(pdf, x, params, CANONICAL)
    with np.errstate(divide="ignore", invalid="ignore"):
        haz = ((1 - theta) * base_dens) / (theta + (1 - theta) * base_surv)
    return unwrap(Convention(log=log).finalize(haz, flip=False), scalar)


def mixture_cumhazard(
    cdf: Callable, x: ArrayLike, theta: ArrayLike, log: bool = False, **params
) -> ArrayLike:
    r"""Cumulative hazard of the mixture cure model, :math:`-\ln S(x)`."""
    x, theta, params, scalar = recycle_args(x, theta, params)
    surv = mixture_cdf(
        cdf, x, theta, lower_tail=CANONICAL.lower_tail, log_p=CANONICAL.log, **params
    )
    return unwrap(Convention(log=log).finalize(-safe_log(surv), flip=False), scalar)


def mixture_pdf(
    cdf: Callable,
    pdf: Callable,
    x: ArrayLike,
    theta: ArrayLike,
    log: bool = False,
    **params,
) -> ArrayLike:
    r"""Density of the mixture cure model, :math:`S(x) h(x)`."""
    x, theta, params, scalar = recycle_args(x, theta, params)
    surv = mixture_cdf(
        cdf, x, theta, lower_tail=CANONICAL.lower_tail, log_p=CANONICAL.log, **params
    )
    haz = mixture_hazard(cdf, pdf, x, theta, log=CANONICAL.log, **params)
    with np.errstate(invalid="ignore"):
        dens = surv * haz
    return unwrap(Convention(log=log).finalize(dens, flip=False), scalar)


def _survival(cdf: Callable) -> Callable:
    def sf(q, theta, **params):
        return mixture_cdf(
            cdf, q, theta, lower_tail=CANONICAL.lower_tail, log_p=CANONICAL.log, **params
        )

    return sf


def mixture_quantile(
    cdf: Callable,
    p: ArrayLike,
    theta: ArrayLike,
    lower_tail: bool = True,
    log_p: bool = False,
    **params,
) -> ArrayLike:
    r"""
    Quantile function of the mixture cure model, by numerical inversion of
    the survival function.

    Probabilities beyond the uncured fraction :math:`1 - \theta` have no
    finite quantile and give ``inf``. The argument is converted to the
    survival level that is solved for, so upper-tail (and log-scale)
    probabilities deep in the tail keep their precision.

    Raises
    ------
    DomainError
        If a probability or cure fraction lies outside [0, 1]
    DegenerateParameterError
        If ``theta == 1`` for a probability strictly between 0 and 1
    ConvergenceError
        If the root finding fails
    """
    level = to_survival_level(p, lower_tail, log_p)
    return invert_cure_survival(_survival(cdf), level, theta, **strip_flags(params))


def mixture_rvs(
    cdf: Callable,
    n: int,
    theta: ArrayLike,
    rng: np.random.Generator | int | None = None,
    **params,
) -> np.ndarray:
    """
    Random survival times of the mixture cure model, by inverse transform
    sampling of uniform draws from `rng`. Cured samples are ``inf``.
    """
    if np.ndim(n) > 0:
        n = len(n)
    if n < 0:
        raise DomainError(f"number of samples must be non-negative, got {n}")

    u = np.random.default_rng(rng).uniform(size=n)
    log.debug(f"inverting {n} uniform draws")
    return np.asarray(mixture_quantile(cdf, u, theta, **params))


def mixture_rmst(
    cdf: Callable,
    t: ArrayLike,
    theta: ArrayLike,
    start: ArrayLike = 0.0,
    **params,
) -> ArrayLike:
    """
    Restricted mean survival time of the mixture cure model up to `t`,
    conditioned on survival up to `start`.
    """
    check_theta(np.atleast_1d(np.asarray(theta, dtype=np.float64)))
    return restricted_mean(
        _survival(cdf), t, start=start, theta=theta, **strip_flags(params)
    )


def mixture_mean(cdf: Callable, theta: ArrayLike, **params) -> ArrayLike:
    """
    Mean survival time of the mixture cure model.

    Any positive cure fraction makes the mean infinite, without integrating.
    At ``theta == 0`` the model is the base distribution, whose survival
    function is integrated from 0 to infinity. A base whose survival still
    exceeds ``numerical_defaults.tail_tol`` at ``tail_horizon`` is taken as
    non-decaying and raises :class:`.ConvergenceError`, even if its mean is
    finite; relax those options for very heavy tails.
    """
    params = strip_flags(params)
    scalar = is_scalar(theta, *params.values())
    names = list(params)
    theta, *values = recycle(theta, *params.values())
    theta = theta.astype(np.float64)
    check_theta(theta)

    def base_sf(q, **params):
        return call_cdf(cdf, q, params, CANONICAL)

    ret = np.full(theta.size, np.inf)
    ret[np.isnan(theta)] = np.nan
    uncured = theta == 0
    if np.any(uncured):
        ret[uncured] = restricted_mean(
            base_sf,
            np.full(np.count_nonzero(uncured), np.inf),
            start=0.0,
            **{name: v[uncured] for name, v in zip(names, values)},
        )
    return unwrap(ret, scalar)

r"""
Non-mixture (bounded cumulative hazard) cure models.

Given the base distribution's CDF :math:`F_0` and density :math:`f_0`, and the
cure fraction :math:`\theta`, the survival function is

.. math::
    S(t) = \theta^{F_0(t)}

which tends to :math:`\theta` as :math:`t \to \infty`. The hazard is
:math:`h(t) = -\ln(\theta) f_0(t)`, the cumulative hazard
:math:`H(t) = -\ln S(t)` and the density :math:`f(t) = S(t) h(t)`.

The base CDF is called as ``cdf(q, lower_tail=..., log_p=..., **params)`` and
the base density as ``pdf(x, log=..., **params)``. Any keyword parameter other
than the convention flags is forwarded to them untouched.

Examples
--------
>>> from curesurv.functions import exponential
>>> round(nonmixture_cdf(exponential.cdf, 1.0, 0.3, lower_tail=False, rate=1.0), 4)
0.4672
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

# S = theta ** F0 needs the base CDF itself, not its complement
_BASE_LOWER = Convention(lower_tail=True, log=False)


def nonmixture_cdf(
    cdf: Callable,
    q: ArrayLike,
    theta: ArrayLike,
    lower_tail: bool = True,
    log_p: bool = False,
    **params,
) -> ArrayLike:
    r"""
    Distribution function of the non-mixture cure model.

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

    surv = theta ** call_cdf(cdf, q, params, _BASE_LOWER)
    return unwrap(Convention(lower_tail, log_p).finalize(surv), scalar)


def nonmixture_sf(
    cdf: Callable, q: ArrayLike, theta: ArrayLike, log_p: bool = False, **params
) -> ArrayLike:
    """Survival function, :func:`nonmixture_cdf` with ``lower_tail=False``."""
    return nonmixture_cdf(cdf, q, theta, lower_tail=False, log_p=log_p, **params)


def nonmixture_hazard(
    pdf: Callable, x: ArrayLike, theta: ArrayLike, log: bool = False, **params
) -> ArrayLike:
    r"""
    Hazard of the non-mixture cure model, :math:`-\ln(\theta) f_0(x)`.

    Evaluated literally at the boundary: ``theta == 0`` gives ``inf`` wherever
    the base density is positive, ``theta == 1`` gives 0.
    """
    x, theta, params, scalar = recycle_args(x, theta, params)
    check_theta(theta)
    check_times(x)

    with np.errstate(invalid="ignore"):
        haz = -safe_log(theta) * call_pdf(pdf, x, params)
    return unwrap(Convention(log=log).finalize(haz, flip=False), scalar)


def nonmixture_cumhazard(
    cdf: Callable, x: ArrayLike, theta: ArrayLike, log: bool = False, **params
) -> ArrayLike:
    r"""Cumulative hazard of the non-mixture cure model, :math:`-\ln S(x)`."""
    x, theta, params, scalar = recycle_args(x, theta, params)
    surv = nonmixture_cdf(
        cdf, x, theta, lower_tail=CANONICAL.lower_tail, log_p=CANONICAL.log, **params
    )
    return unwrap(Convention(log=log).finalize(-safe_log(surv), flip=False), scalar)


def nonmixture_pdf(
    cdf: Callable,
    pdf: Callable,
    x: ArrayLike,
    theta: ArrayLike,
    log: bool = False,
    **params,
) -> ArrayLike:
    r"""Density of the non-mixture cure model, :math:`S(x) h(x)`."""
    x, theta, params, scalar = recycle_args(x, theta, params)
    surv = nonmixture_cdf(
        cdf, x, theta, lower_tail=CANONICAL.lower_tail, log_p=CANONICAL.log, **params
    )
    haz = nonmixture_hazard(pdf, x, theta, log=CANONICAL.log, **params)
    with np.errstate(invalid="ignore"):
        dens = surv * haz
    return unwrap(Convention(log=log).finalize(dens, flip=False), scalar)


def _survival(cdf: Callable) -> Callable:
    def sf(q, theta, **params):
        return nonmixture_cdf(
            cdf, q, theta, lower_tail=CANONICAL.lower_tail, log_p=CANONICAL.log, **params
        )

    return sf


def nonmixture_quantile(
    cdf: Callable,
    p: ArrayLike,
    theta: ArrayLike,
    lower_tail: bool = True,
    log_p: bool = False,
    **params,
) -> ArrayLike:
    r"""
    Quantile function of the non-mixture cure model, by numerical inversion
    of the survival function.

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


def nonmixture_rvs(
    cdf: Callable,
    n: int,
    theta: ArrayLike,
    rng: np.random.Generator | int | None = None,
    **params,
) -> np.ndarray:
    """
    Random survival times of the non-mixture cure model, by inverse transform
    sampling. Every sample needs a numerical root finding, which makes this
    slow compared to usual generators. Cured samples are ``inf``.

    Parameters
    ----------
    cdf
        The base distribution's CDF
    n
        Number of samples. If array-like, its length is used.
    theta
        Cure fractions, recycled against the samples
    rng
        A :class:`numpy.random.Generator` or a seed for
        :func:`numpy.random.default_rng`
    params
        Parameters of the base distribution
    """
    if np.ndim(n) > 0:
        n = len(n)
    if n < 0:
        raise DomainError(f"number of samples must be non-negative, got {n}")

    u = np.random.default_rng(rng).uniform(size=n)
    log.debug(f"inverting {n} uniform draws")
    return np.asarray(nonmixture_quantile(cdf, u, theta, **params))


def nonmixture_rmst(
    cdf: Callable,
    t: ArrayLike,
    theta: ArrayLike,
    start: ArrayLike = 0.0,
    **params,
) -> ArrayLike:
    """
    Restricted mean survival time of the non-mixture cure model up to `t`,
    conditioned on survival up to `start`.
    """
    check_theta(np.atleast_1d(np.asarray(theta, dtype=np.float64)))
    return restricted_mean(
        _survival(cdf), t, start=start, theta=theta, **strip_flags(params)
    )


def nonmixture_mean(cdf: Callable, theta: ArrayLike, **params) -> ArrayLike:
    """
    Mean survival time of the non-mixture cure model, the restricted mean
    with an infinite horizon starting at 0.

    ``theta == 1`` gives ``inf``. For ``0 < theta < 1`` the survival tends
    to `theta` and the integral diverges, which is reported as a
    :class:`.ConvergenceError`.
    """
    params = strip_flags(params)
    scalar = is_scalar(theta, *params.values())
    names = list(params)
    theta, *values = recycle(theta, *params.values())
    theta = theta.astype(np.float64)
    check_theta(theta)

    ret = np.full(theta.size, np.inf)
    ret[np.isnan(theta)] = np.nan
    finite = theta < 1
    ret[finite] = restricted_mean(
        _survival(cdf),
        np.inf,
        start=0.0,
        theta=theta[finite],
        **{name: v[finite] for name, v in zip(names, values)},
    )
    return unwrap(ret, scalar)

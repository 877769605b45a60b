r"""
Cure models bound to a base distribution, a cure fraction and the base
parameters, in the manner of a frozen :mod:`scipy.stats` distribution:

.. code-block:: python

    from curesurv.functions import weibull

    model = MixtureCure(weibull, theta=0.3, shape=1.5, scale=2.0)
    model.sf([1, 2, 5])
    model.hazard([1, 2, 5], log=True)
    model.ppf(0.5)
    model.rvs(100, rng=1234)
    model.rmst(10, start=1)

The base can be any object with ``cdf(q, lower_tail, log_p, **params)`` and
``pdf(x, log, **params)`` methods, including a frozen base distribution, in
which case no parameters are needed.
"""

from __future__ import annotations

import numpy as np

from curesurv import mixture, nonmixture
from curesurv.protocol import ArrayLike, strip_flags


class CureModel:
    r"""
    Common interface of the cure models. Subclasses set the functions of the
    family they implement.

    Parameters
    ----------
    base
        The base distribution, providing ``cdf`` and ``pdf``
    theta
        The cure fraction(s)
    params
        Parameters of the base distribution, forwarded to every call
    """

    family = None

    def __init__(self, base, theta: ArrayLike, **params) -> None:
        self.base = base
        self.theta = theta
        self.params = strip_flags(params)

    @property
    def cure_fraction(self) -> ArrayLike:
        r"""The long-run survival probability :math:`\lim_{t\to\infty} S(t)`"""
        return self.theta

    def cdf(
        self, q: ArrayLike, lower_tail: bool = True, log_p: bool = False
    ) -> ArrayLike:
        return self._cdf(
            self.base.cdf, q, self.theta, lower_tail=lower_tail, log_p=log_p, **self.params
        )

    def sf(self, q: ArrayLike, log_p: bool = False) -> ArrayLike:
        return self.cdf(q, lower_tail=False, log_p=log_p)

    def pdf(self, x: ArrayLike, log: bool = False) -> ArrayLike:
        return self._pdf(
            self.base.cdf, self.base.pdf, x, self.theta, log=log, **self.params
        )

    def cumhazard(self, x: ArrayLike, log: bool = False) -> ArrayLike:
        return self._cumhazard(self.base.cdf, x, self.theta, log=log, **self.params)

    def ppf(
        self, p: ArrayLike, lower_tail: bool = True, log_p: bool = False
    ) -> ArrayLike:
        r"""Quantile function, ``inf`` beyond the uncured fraction"""
        return self._quantile(
            self.base.cdf, p, self.theta, lower_tail=lower_tail, log_p=log_p, **self.params
        )

    def rvs(
        self, n: int, rng: np.random.Generator | int | None = None
    ) -> np.ndarray:
        r"""Random survival times, ``inf`` for cured samples"""
        return self._rvs(self.base.cdf, n, self.theta, rng=rng, **self.params)

    def rmst(self, t: ArrayLike, start: ArrayLike = 0.0) -> ArrayLike:
        r"""Restricted mean survival time up to `t`, conditioned on survival up to `start`"""
        return self._rmst(self.base.cdf, t, self.theta, start=start, **self.params)

    def mean(self) -> ArrayLike:
        return self._mean(self.base.cdf, self.theta, **self.params)

    def __repr__(self) -> str:
        pars = "".join(f", {k}={v}" for k, v in self.params.items())
        return f"{type(self).__name__}({self.base!r}, theta={self.theta}{pars})"


class MixtureCure(CureModel):
    r"""
    Mixture cure model :math:`S(t) = \theta + (1 - \theta) S_0(t)`, see
    :mod:`curesurv.mixture`.
    """

    family = "mixture"
    _cdf = staticmethod(mixture.mixture_cdf)
    _pdf = staticmethod(mixture.mixture_pdf)
    _cumhazard = staticmethod(mixture.mixture_cumhazard)
    _quantile = staticmethod(mixture.mixture_quantile)
    _rvs = staticmethod(mixture.mixture_rvs)
    _rmst = staticmethod(mixture.mixture_rmst)
    _mean = staticmethod(mixture.mixture_mean)

    def hazard(self, x: ArrayLike, log: bool = False) -> ArrayLike:
        return mixture.mixture_hazard(
            self.base.cdf, self.base.pdf, x, self.theta, log=log, **self.params
        )


class NonMixtureCure(CureModel):
    r"""
    Non-mixture cure model :math:`S(t) = \theta^{F_0(t)}`, see
    :mod:`curesurv.nonmixture`.
    """

    family = "nonmixture"
    _cdf = staticmethod(nonmixture.nonmixture_cdf)
    _pdf = staticmethod(nonmixture.nonmixture_pdf)
    _cumhazard = staticmethod(nonmixture.nonmixture_cumhazard)
    _quantile = staticmethod(nonmixture.nonmixture_quantile)
    _rvs = staticmethod(nonmixture.nonmixture_rvs)
    _rmst = staticmethod(nonmixture.nonmixture_rmst)
    _mean = staticmethod(nonmixture.nonmixture_mean)

    def hazard(self, x: ArrayLike, log: bool = False) -> ArrayLike:
        return nonmixture.nonmixture_hazard(
            self.base.pdf, x, self.theta, log=log, **self.params
        )

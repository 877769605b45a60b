"""
Base distributions for the cure models, exposing the calling convention the
transformations rely on:

>>> weibull.cdf([1, 2, 3], lower_tail=False, log_p=True, shape=1.5, scale=2)
>>> weibull.pdf([1, 2, 3], log=True, shape=1.5, scale=2)

Calling a distribution with its parameters freezes it:

>>> wb = weibull(shape=1.5, scale=2)
>>> wb.cdf([1, 2, 3], lower_tail=False)
>>> wb.required_args()

NOTE: subclasses only provide the plain kernels :func:`get_pdf`,
:func:`get_cdf` and :func:`get_sf`; the log variants default to the log of
those and can be overloaded where a direct form is more accurate.
"""

from __future__ import annotations

import numpy as np

from curesurv.protocol import ArrayLike, is_scalar, recycle, safe_log, strip_flags, unwrap


class FrozenDistribution:
    r"""
    A base distribution with its parameters bound, exposing the same
    :func:`pdf`, :func:`cdf` and :func:`sf` calling convention without the
    parameters.
    """

    def __init__(self, dist: BaseDistribution, **params) -> None:
        self.dist = dist
        self.params = strip_flags(params)

    def pdf(self, x: ArrayLike, log: bool = False) -> ArrayLike:
        return self.dist.pdf(x, log=log, **self.params)

    def cdf(
        self, q: ArrayLike, lower_tail: bool = True, log_p: bool = False
    ) -> ArrayLike:
        return self.dist.cdf(q, lower_tail=lower_tail, log_p=log_p, **self.params)

    def sf(self, q: ArrayLike, log_p: bool = False) -> ArrayLike:
        return self.dist.cdf(q, lower_tail=False, log_p=log_p, **self.params)

    def required_args(self) -> tuple:
        r"""
        Allow access to the required args of frozen distribution

        Returns
        -------
        Required parameter names
        """
        return self.dist.required_args()

    def __repr__(self) -> str:
        pars = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.dist.name}({pars})"


class BaseDistribution:
    r"""
    A continuous distribution on :math:`[0, \infty)` implementing the
    tail-direction and log-scale flags on top of plain kernels.

    Parameters are passed by keyword and recycled element-wise against the
    times. If every argument is a scalar a float is returned.
    """

    name = "base"

    def __init__(self, name: str | None = None) -> None:
        if name is not None:
            self.name = name

    def required_args(self) -> tuple:
        r"""Names of the parameters, in the order the kernels take them"""
        raise NotImplementedError

    def defaults(self) -> dict:
        r"""Default values of optional parameters"""
        return {}

    def get_pdf(self, x: np.ndarray, *args) -> np.ndarray:
        raise NotImplementedError

    def get_cdf(self, x: np.ndarray, *args) -> np.ndarray:
        raise NotImplementedError

    def get_sf(self, x: np.ndarray, *args) -> np.ndarray:
        return 1 - self.get_cdf(x, *args)

    def get_logpdf(self, x: np.ndarray, *args) -> np.ndarray:
        return safe_log(self.get_pdf(x, *args))

    def get_logcdf(self, x: np.ndarray, *args) -> np.ndarray:
        return safe_log(self.get_cdf(x, *args))

    def get_logsf(self, x: np.ndarray, *args) -> np.ndarray:
        return safe_log(self.get_sf(x, *args))

    def _recycle(
        self, x: ArrayLike, params: dict
    ) -> tuple[np.ndarray, list[np.ndarray], bool]:
        r"""
        Check the parameter names and recycle the parameters against `x`.

        Returns
        -------
        x, args, scalar
            Float arrays of equal length, the parameter arrays in the order
            of :func:`required_args`, and whether every input was a scalar
        """
        names = self.required_args()
        params = {**self.defaults(), **strip_flags(params)}

        unknown = sorted(set(params) - set(names))
        if unknown:
            raise TypeError(f"{self.name} got unexpected parameters {unknown}")
        missing = [name for name in names if name not in params]
        if missing:
            raise TypeError(f"{self.name} is missing required parameters {missing}")

        values = [params[name] for name in names]
        scalar = is_scalar(x, *values)
        x, *args = recycle(x, *values)
        return x.astype(np.float64), [a.astype(np.float64) for a in args], scalar

    def pdf(self, x: ArrayLike, log: bool = False, **params) -> ArrayLike:
        r"""
        Probability density, or its log if `log` is True
        """
        x, args, scalar = self._recycle(x, params)
        if log:
            return unwrap(self.get_logpdf(x, *args), scalar)
        return unwrap(self.get_pdf(x, *args), scalar)

    def cdf(
        self, q: ArrayLike, lower_tail: bool = True, log_p: bool = False, **params
    ) -> ArrayLike:
        r"""
        Distribution function :math:`P(X \le q)` if `lower_tail`, otherwise
        the survival function :math:`P(X > q)`; its log if `log_p` is True
        """
        q, args, scalar = self._recycle(q, params)
        if lower_tail:
            out = self.get_logcdf(q, *args) if log_p else self.get_cdf(q, *args)
        else:
            out = self.get_logsf(q, *args) if log_p else self.get_sf(q, *args)
        return unwrap(out, scalar)

    def sf(self, q: ArrayLike, log_p: bool = False, **params) -> ArrayLike:
        r"""
        Survival function, :func:`cdf` with ``lower_tail=False``
        """
        return self.cdf(q, lower_tail=False, log_p=log_p, **params)

    def __call__(self, **params) -> FrozenDistribution:
        return FrozenDistribution(self, **params)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}({', '.join(self.required_args())})>"

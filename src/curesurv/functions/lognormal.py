"""
Log-normal base distribution
"""

import math

import numba as nb
import numpy as np

from curesurv.functions.base_distribution import BaseDistribution
from curesurv.utils import numba_defaults_kwargs as nb_kwargs

kd = 1 / np.sqrt(2 * np.pi)


@nb.njit(**nb_kwargs)
def nb_lognormal_pdf(
    x: np.ndarray, meanlog: np.ndarray, sdlog: np.ndarray
) -> np.ndarray:
    r"""
    Log-normal probability density, w/ args: meanlog, sdlog. Its range of
    support is :math:`x\in(0,\infty)`. It computes:


    .. math::
        pdf(x, \mu, \sigma) = \frac{1}{x\sigma\sqrt{2\pi}} e^{-\frac{(\ln x - \mu)^2}{2\sigma^2}}


    A non-positive `sdlog` gives NaN.

    Parameters
    ----------
    x
        The input data
    meanlog
        Mean of the log of the distribution
    sdlog
        Standard deviation of the log of the distribution
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if sdlog[i] <= 0:
            y[i] = np.nan
        elif x[i] <= 0 or np.isinf(x[i]):
            y[i] = 0
        else:
            z = (np.log(x[i]) - meanlog[i]) / sdlog[i]
            y[i] = kd * np.exp(-0.5 * z**2) / (x[i] * sdlog[i])
    return y


@nb.njit(**nb_kwargs)
def nb_lognormal_cdf(
    x: np.ndarray, meanlog: np.ndarray, sdlog: np.ndarray
) -> np.ndarray:
    r"""
    Log-normal cumulative distribution, w/ args: meanlog, sdlog. It computes:


    .. math::
        cdf(x, \mu, \sigma) = \frac{1}{2} \text{erfc}\left(-\frac{\ln x - \mu}{\sigma\sqrt{2}}\right)


    Parameters
    ----------
    x
        The input data
    meanlog
        Mean of the log of the distribution
    sdlog
        Standard deviation of the log of the distribution
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if sdlog[i] <= 0:
            y[i] = np.nan
        elif x[i] <= 0:
            y[i] = 0
        else:
            z = (np.log(x[i]) - meanlog[i]) / sdlog[i]
            y[i] = 0.5 * math.erfc(-z / np.sqrt(2))
    return y


@nb.njit(**nb_kwargs)
def nb_lognormal_sf(
    x: np.ndarray, meanlog: np.ndarray, sdlog: np.ndarray
) -> np.ndarray:
    r"""
    Log-normal survival function, computed from the complementary error
    function so that the upper tail keeps its precision.
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if sdlog[i] <= 0:
            y[i] = np.nan
        elif x[i] <= 0:
            y[i] = 1
        else:
            z = (np.log(x[i]) - meanlog[i]) / sdlog[i]
            y[i] = 0.5 * math.erfc(z / np.sqrt(2))
    return y


class LognormalGen(BaseDistribution):
    name = "lognormal"

    def get_pdf(
        self, x: np.ndarray, meanlog: np.ndarray, sdlog: np.ndarray
    ) -> np.ndarray:
        return nb_lognormal_pdf(x, meanlog, sdlog)

    def get_cdf(
        self, x: np.ndarray, meanlog: np.ndarray, sdlog: np.ndarray
    ) -> np.ndarray:
        return nb_lognormal_cdf(x, meanlog, sdlog)

    def get_sf(
        self, x: np.ndarray, meanlog: np.ndarray, sdlog: np.ndarray
    ) -> np.ndarray:
        return nb_lognormal_sf(x, meanlog, sdlog)

    def required_args(self) -> tuple[str, str]:
        return "meanlog", "sdlog"

    def defaults(self) -> dict:
        return {"meanlog": 0.0, "sdlog": 1.0}


lognormal = LognormalGen()

"""
Exponential base distribution
"""

import numba as nb
import numpy as np

from curesurv.functions.base_distribution import BaseDistribution
from curesurv.utils import numba_defaults_kwargs as nb_kwargs


@nb.njit(**nb_kwargs)
def nb_exponential_pdf(x: np.ndarray, rate: np.ndarray) -> np.ndarray:
    r"""
    Exponential probability density, w/ args: rate. Its range of support is
    :math:`x\in[0,\infty), \lambda>0`. It computes:


    .. math::
        pdf(x, \lambda) = \begin{cases} \lambda e^{-\lambda x} \quad , x \geq 0 \\ 0 \quad , x < 0 \end{cases}


    A non-positive rate gives NaN.

    Parameters
    ----------
    x
        The input data
    rate
        The rate, one per element of `x`
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if rate[i] <= 0:
            y[i] = np.nan
        elif x[i] < 0:
            y[i] = 0
        else:
            y[i] = rate[i] * np.exp(-rate[i] * x[i])
    return y


@nb.njit(**nb_kwargs)
def nb_exponential_cdf(x: np.ndarray, rate: np.ndarray) -> np.ndarray:
    r"""
    Exponential cumulative distribution, w/ args: rate. It computes:


    .. math::
        cdf(x, \lambda) = \begin{cases}  1-e^{-\lambda x} \quad , x > 0 \\ 0 \quad , x \leq 0 \end{cases}


    Parameters
    ----------
    x
        The input data
    rate
        The rate, one per element of `x`
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if rate[i] <= 0:
            y[i] = np.nan
        elif x[i] <= 0:
            y[i] = 0
        else:
            y[i] = -np.expm1(-rate[i] * x[i])
    return y


@nb.njit(**nb_kwargs)
def nb_exponential_sf(x: np.ndarray, rate: np.ndarray) -> np.ndarray:
    r"""
    Exponential survival function :math:`e^{-\lambda x}` for :math:`x > 0`,
    1 otherwise.
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if rate[i] <= 0:
            y[i] = np.nan
        elif x[i] <= 0:
            y[i] = 1
        else:
            y[i] = np.exp(-rate[i] * x[i])
    return y


class ExponentialGen(BaseDistribution):
    name = "exponential"

    def get_pdf(self, x: np.ndarray, rate: np.ndarray) -> np.ndarray:
        return nb_exponential_pdf(x, rate)

    def get_cdf(self, x: np.ndarray, rate: np.ndarray) -> np.ndarray:
        return nb_exponential_cdf(x, rate)

    def get_sf(self, x: np.ndarray, rate: np.ndarray) -> np.ndarray:
        return nb_exponential_sf(x, rate)

    def get_logsf(self, x: np.ndarray, rate: np.ndarray) -> np.ndarray:
        with np.errstate(invalid="ignore"):
            return np.where(rate > 0, np.where(x > 0, -rate * x, 0.0), np.nan)

    def required_args(self) -> tuple[str]:
        return ("rate",)


exponential = ExponentialGen()

"""
Gompertz base distribution
"""

import numba as nb
import numpy as np

from curesurv.functions.base_distribution import BaseDistribution
from curesurv.utils import numba_defaults_kwargs as nb_kwargs


@nb.njit(**nb_kwargs)
def nb_gompertz_cumhazard(
    x: np.ndarray, shape: np.ndarray, rate: np.ndarray
) -> np.ndarray:
    r"""
    Gompertz cumulative hazard, w/ args: shape, rate. It computes:


    .. math::
        H(x, a, b) = \begin{cases} \frac{b}{a}\left(e^{ax} - 1\right) \quad , a \neq 0 \\ b x \quad , a = 0 \end{cases}


    for :math:`x > 0` and 0 otherwise. A non-positive rate gives NaN. With a
    negative shape the cumulative hazard is bounded by :math:`-b/a`, and the
    distribution leaves a probability mass at infinity.

    Parameters
    ----------
    x
        The input data
    shape
        The shape :math:`a`
    rate
        The rate :math:`b`
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if rate[i] <= 0:
            y[i] = np.nan
        elif x[i] <= 0:
            y[i] = 0
        elif shape[i] == 0:
            y[i] = rate[i] * x[i]
        else:
            y[i] = rate[i] / shape[i] * np.expm1(shape[i] * x[i])
    return y


@nb.njit(**nb_kwargs)
def nb_gompertz_pdf(x: np.ndarray, shape: np.ndarray, rate: np.ndarray) -> np.ndarray:
    r"""
    Gompertz probability density :math:`b e^{ax} e^{-H(x)}` on
    :math:`x\in[0,\infty)`.

    Parameters
    ----------
    x
        The input data
    shape
        The shape :math:`a`
    rate
        The rate :math:`b`
    """

    cumhaz = nb_gompertz_cumhazard(x, shape, rate)
    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if rate[i] <= 0:
            y[i] = np.nan
        elif x[i] < 0 or np.isinf(x[i]):
            y[i] = 0
        else:
            y[i] = rate[i] * np.exp(shape[i] * x[i] - cumhaz[i])
    return y


@nb.njit(**nb_kwargs)
def nb_gompertz_cdf(x: np.ndarray, shape: np.ndarray, rate: np.ndarray) -> np.ndarray:
    r"""
    Gompertz cumulative distribution :math:`1 - e^{-H(x)}`
    """

    cumhaz = nb_gompertz_cumhazard(x, shape, rate)
    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        y[i] = -np.expm1(-cumhaz[i])
    return y


@nb.njit(**nb_kwargs)
def nb_gompertz_sf(x: np.ndarray, shape: np.ndarray, rate: np.ndarray) -> np.ndarray:
    r"""
    Gompertz survival function :math:`e^{-H(x)}`
    """

    return np.exp(-nb_gompertz_cumhazard(x, shape, rate))


class GompertzGen(BaseDistribution):
    name = "gompertz"

    def get_pdf(
        self, x: np.ndarray, shape: np.ndarray, rate: np.ndarray
    ) -> np.ndarray:
        return nb_gompertz_pdf(x, shape, rate)

    def get_cdf(
        self, x: np.ndarray, shape: np.ndarray, rate: np.ndarray
    ) -> np.ndarray:
        return nb_gompertz_cdf(x, shape, rate)

    def get_sf(
        self, x: np.ndarray, shape: np.ndarray, rate: np.ndarray
    ) -> np.ndarray:
        return nb_gompertz_sf(x, shape, rate)

    def get_logsf(
        self, x: np.ndarray, shape: np.ndarray, rate: np.ndarray
    ) -> np.ndarray:
        return -nb_gompertz_cumhazard(x, shape, rate)

    def required_args(self) -> tuple[str, str]:
        return "shape", "rate"


gompertz = GompertzGen()

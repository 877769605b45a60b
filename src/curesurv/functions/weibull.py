"""
Weibull base distribution
"""

import numba as nb
import numpy as np

from curesurv.functions.base_distribution import BaseDistribution
from curesurv.utils import numba_defaults_kwargs as nb_kwargs


@nb.njit(**nb_kwargs)
def nb_weibull_pdf(x: np.ndarray, shape: np.ndarray, scale: np.ndarray) -> np.ndarray:
    r"""
    Weibull probability density, w/ args: shape, scale. Its range of support
    is :math:`x\in[0,\infty)`. It computes:


    .. math::
        pdf(x, k, \lambda) = \frac{k}{\lambda}\left(\frac{x}{\lambda}\right)^{k-1} e^{-(x/\lambda)^k}


    Non-positive shapes or scales give NaN.

    Parameters
    ----------
    x
        The input data
    shape
        The shape :math:`k`
    scale
        The scale :math:`\lambda`
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if shape[i] <= 0 or scale[i] <= 0:
            y[i] = np.nan
        elif x[i] < 0 or np.isinf(x[i]):
            y[i] = 0
        elif x[i] == 0:
            # 0 ** (k - 1) diverges for k < 1
            if shape[i] < 1:
                y[i] = np.inf
            elif shape[i] == 1:
                y[i] = 1 / scale[i]
            else:
                y[i] = 0
        else:
            z = x[i] / scale[i]
            y[i] = shape[i] / scale[i] * z ** (shape[i] - 1) * np.exp(-(z ** shape[i]))
    return y


@nb.njit(**nb_kwargs)
def nb_weibull_cdf(x: np.ndarray, shape: np.ndarray, scale: np.ndarray) -> np.ndarray:
    r"""
    Weibull cumulative distribution, w/ args: shape, scale. It computes:


    .. math::
        cdf(x, k, \lambda) = 1 - e^{-(x/\lambda)^k}


    Parameters
    ----------
    x
        The input data
    shape
        The shape :math:`k`
    scale
        The scale :math:`\lambda`
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if shape[i] <= 0 or scale[i] <= 0:
            y[i] = np.nan
        elif x[i] <= 0:
            y[i] = 0
        else:
            y[i] = -np.expm1(-((x[i] / scale[i]) ** shape[i]))
    return y


@nb.njit(**nb_kwargs)
def nb_weibull_sf(x: np.ndarray, shape: np.ndarray, scale: np.ndarray) -> np.ndarray:
    r"""
    Weibull survival function :math:`e^{-(x/\lambda)^k}`
    """

    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        if shape[i] <= 0 or scale[i] <= 0:
            y[i] = np.nan
        elif x[i] <= 0:
            y[i] = 1
        else:
            y[i] = np.exp(-((x[i] / scale[i]) ** shape[i]))
    return y


class WeibullGen(BaseDistribution):
    name = "weibull"

    def get_pdf(
        self, x: np.ndarray, shape: np.ndarray, scale: np.ndarray
    ) -> np.ndarray:
        return nb_weibull_pdf(x, shape, scale)

    def get_cdf(
        self, x: np.ndarray, shape: np.ndarray, scale: np.ndarray
    ) -> np.ndarray:
        return nb_weibull_cdf(x, shape, scale)

    def get_sf(
        self, x: np.ndarray, shape: np.ndarray, scale: np.ndarray
    ) -> np.ndarray:
        return nb_weibull_sf(x, shape, scale)

    def required_args(self) -> tuple[str, str]:
        return "shape", "scale"

    def defaults(self) -> dict:
        return {"scale": 1.0}


weibull = WeibullGen()

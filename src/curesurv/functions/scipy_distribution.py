"""
Wrap any :mod:`scipy.stats` continuous distribution as a cure-model base
distribution. Shape parameters are passed by their scipy names, ``loc`` and
``scale`` are optional:

>>> from scipy.stats import gamma
>>> from curesurv.mixture import mixture_cdf
>>> base = ScipyDistribution(gamma)
>>> mixture_cdf(base.cdf, [1, 2], 0.2, a=2.0, scale=1.5)
"""

from __future__ import annotations

import numpy as np
from scipy.stats import rv_continuous

from curesurv.functions.base_distribution import BaseDistribution


class ScipyDistribution(BaseDistribution):
    r"""
    Adapter from :class:`scipy.stats.rv_continuous` to the base distribution
    calling convention, using scipy's own ``logpdf``, ``logcdf`` and
    ``logsf`` for the log scale.

    Parameters
    ----------
    dist
        An unfrozen scipy distribution, e.g. :data:`scipy.stats.weibull_min`
    name
        Name of the distribution, the scipy name by default
    """

    def __init__(self, dist: rv_continuous, name: str | None = None) -> None:
        self.dist = dist
        super().__init__(name if name is not None else dist.name)

    def required_args(self) -> tuple:
        shapes = self.dist.shapes.split(", ") if self.dist.shapes else []
        return (*shapes, "loc", "scale")

    def defaults(self) -> dict:
        return {"loc": 0.0, "scale": 1.0}

    def get_pdf(self, x: np.ndarray, *args) -> np.ndarray:
        return self.dist.pdf(x, *args)

    def get_cdf(self, x: np.ndarray, *args) -> np.ndarray:
        return self.dist.cdf(x, *args)

    def get_sf(self, x: np.ndarray, *args) -> np.ndarray:
        return self.dist.sf(x, *args)

    def get_logpdf(self, x: np.ndarray, *args) -> np.ndarray:
        return self.dist.logpdf(x, *args)

    def get_logcdf(self, x: np.ndarray, *args) -> np.ndarray:
        return self.dist.logcdf(x, *args)

    def get_logsf(self, x: np.ndarray, *args) -> np.ndarray:
        return self.dist.logsf(x, *args)

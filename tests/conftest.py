import numpy as np
import pytest
from scipy.stats import expon


def exp_cdf(q, lower_tail=True, log_p=False, rate=1.0):
    scale = 1 / np.asarray(rate, dtype=float)
    if lower_tail:
        return expon.logcdf(q, scale=scale) if log_p else expon.cdf(q, scale=scale)
    return expon.logsf(q, scale=scale) if log_p else expon.sf(q, scale=scale)


def exp_pdf(x, log=False, rate=1.0):
    scale = 1 / np.asarray(rate, dtype=float)
    return expon.logpdf(x, scale=scale) if log else expon.pdf(x, scale=scale)


@pytest.fixture(scope="session")
def exp_base():
    """Exponential base distribution as a plain pair of callables"""
    return exp_cdf, exp_pdf


@pytest.fixture
def times():
    return np.array([0.0, 0.1, 0.5, 1.0, 2.0, 5.0])

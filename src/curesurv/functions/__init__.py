r"""
Base distributions for the cure models.

Each numba-compiled distribution defines vectorized kernels that take an
array of times and one array per parameter, all of the same length:

1. :func:`nb_dist_pdf(x, *pars)`
Returns the PDF normalized on :math:`[0, \infty)`

2. :func:`nb_dist_cdf(x, *pars)`
Returns the lower-tail CDF

3. :func:`nb_dist_sf(x, *pars)`
Returns the survival function, computed directly rather than as ``1 - cdf``

These kernels are packaged into a class that subclasses :class:`BaseDistribution`,
which supplies the calling convention used throughout the package:

1. :func:`pdf(x, log=False, **params)`

2. :func:`cdf(q, lower_tail=True, log_p=False, **params)`

3. :func:`sf(q, log_p=False, **params)`

4. :func:`required_args`
A tuple of the parameter names, in the order the kernels take them

Parameters are recycled element-wise against the times. Calling a distribution
with its parameters returns a :class:`FrozenDistribution`.

Any :mod:`scipy.stats` continuous distribution can be used instead through
:class:`ScipyDistribution`, and any pair of callables following the same
convention works as a base distribution.
"""

# nopycln: file

from curesurv.functions.base_distribution import (  # noqa: F401
    BaseDistribution,
    FrozenDistribution,
)
from curesurv.functions.exponential import (  # noqa: F401
    exponential,
    nb_exponential_cdf,
    nb_exponential_pdf,
    nb_exponential_sf,
)
from curesurv.functions.gompertz import (  # noqa: F401
    gompertz,
    nb_gompertz_cdf,
    nb_gompertz_cumhazard,
    nb_gompertz_pdf,
    nb_gompertz_sf,
)
from curesurv.functions.lognormal import (  # noqa: F401
    lognormal,
    nb_lognormal_cdf,
    nb_lognormal_pdf,
    nb_lognormal_sf,
)
from curesurv.functions.scipy_distribution import ScipyDistribution  # noqa: F401
from curesurv.functions.weibull import (  # noqa: F401
    nb_weibull_cdf,
    nb_weibull_pdf,
    nb_weibull_sf,
    weibull,
)

"""
curesurv: mixture and non-mixture cure models built on any base survival
distribution.
"""

from ._version import version as __version__
from .cure import MixtureCure, NonMixtureCure
from .errors import (
    ConvergenceError,
    CureSurvError,
    DegenerateParameterError,
    DomainError,
)
from .generic import invert_survival, invert_survival_level, restricted_mean
from .mixture import (
    mixture_cdf,
    mixture_cumhazard,
    mixture_hazard,
    mixture_mean,
    mixture_pdf,
    mixture_quantile,
    mixture_rmst,
    mixture_rvs,
    mixture_sf,
)
from .nonmixture import (
    nonmixture_cdf,
    nonmixture_cumhazard,
    nonmixture_hazard,
    nonmixture_mean,
    nonmixture_pdf,
    nonmixture_quantile,
    nonmixture_rmst,
    nonmixture_rvs,
    nonmixture_sf,
)

__all__ = [
    "__version__",
    "MixtureCure",
    "NonMixtureCure",
    "CureSurvError",
    "DomainError",
    "DegenerateParameterError",
    "ConvergenceError",
    "invert_survival",
    "invert_survival_level",
    "restricted_mean",
    "mixture_cdf",
    "mixture_sf",
    "mixture_pdf",
    "mixture_hazard",
    "mixture_cumhazard",
    "mixture_quantile",
    "mixture_rvs",
    "mixture_rmst",
    "mixture_mean",
    "nonmixture_cdf",
    "nonmixture_sf",
    "nonmixture_pdf",
    "nonmixture_hazard",
    "nonmixture_cumhazard",
    "nonmixture_quantile",
    "nonmixture_rvs",
    "nonmixture_rmst",
    "nonmixture_mean",
]

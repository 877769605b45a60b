import numpy as np
import pytest
from scipy.integrate import quad

from curesurv.errors import ConvergenceError, DegenerateParameterError, DomainError
from curesurv.functions import exponential, weibull
from curesurv.nonmixture import (
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


def test_exponential_scenario(exp_base):
    cdf, pdf = exp_base
    theta = 0.3
    f0 = 1 - np.exp(-1)

    surv = nonmixture_cdf(cdf, 1.0, theta, lower_tail=False, rate=1.0)
    assert isinstance(surv, float)
    assert np.isclose(surv, theta**f0)
    assert np.isclose(surv, 0.4672, atol=1e-4)

    cumhaz = nonmixture_cumhazard(cdf, 1.0, theta, rate=1.0)
    assert np.isclose(cumhaz, -np.log(theta) * f0)
    assert np.isclose(cumhaz, 0.761, atol=1e-3)

    haz = nonmixture_hazard(pdf, 1.0, theta, rate=1.0)
    assert np.isclose(haz, -np.log(theta) * np.exp(-1))

    dens = nonmixture_pdf(cdf, pdf, 1.0, theta, rate=1.0)
    assert np.isclose(dens, surv * haz)


def test_compiled_base():
    surv = nonmixture_cdf(exponential.cdf, 1.0, 0.3, lower_tail=False, rate=1.0)
    assert round(surv, 4) == 0.4672


def test_identities(exp_base, times):
    cdf, pdf = exp_base
    theta = 0.4
    surv = nonmixture_sf(cdf, times, theta, rate=0.7)
    haz = nonmixture_hazard(pdf, times, theta, rate=0.7)
    cumhaz = nonmixture_cumhazard(cdf, times, theta, rate=0.7)
    dens = nonmixture_pdf(cdf, pdf, times, theta, rate=0.7)

    assert np.allclose(cumhaz, -np.log(surv))
    assert np.allclose(dens, surv * haz)
    assert np.allclose(haz, -np.log(theta) * pdf(times, rate=0.7))
    assert np.all(np.diff(surv) <= 0)
    assert np.all((surv >= theta) & (surv <= 1))


def test_density_is_derivative(exp_base):
    cdf, pdf = exp_base
    t, dt = 1.3, 1e-6
    s_lo = nonmixture_sf(cdf, t - dt, 0.25, rate=1.5)
    s_hi = nonmixture_sf(cdf, t + dt, 0.25, rate=1.5)
    dens = nonmixture_pdf(cdf, pdf, t, 0.25, rate=1.5)
    assert np.isclose(dens, (s_lo - s_hi) / (2 * dt), rtol=1e-6)


def test_limit(exp_base):
    cdf, _ = exp_base
    assert np.isclose(nonmixture_sf(cdf, 50.0, 0.3, rate=1.0), 0.3)
    assert nonmixture_sf(cdf, 0.0, 0.3, rate=1.0) == 1


def test_tail_and_log(exp_base, times):
    cdf, pdf = exp_base
    kwargs = {"theta": 0.2, "rate": 2.0}
    lower = nonmixture_cdf(cdf, times, **kwargs)
    upper = nonmixture_cdf(cdf, times, lower_tail=False, **kwargs)
    assert np.allclose(lower + upper, 1)
    assert np.allclose(
        np.exp(nonmixture_cdf(cdf, times, lower_tail=False, log_p=True, **kwargs)),
        upper,
    )
    assert np.allclose(
        np.exp(nonmixture_cdf(cdf, times[1:], log_p=True, **kwargs)), lower[1:]
    )
    assert np.allclose(
        np.exp(nonmixture_hazard(pdf, times, log=True, **kwargs)),
        nonmixture_hazard(pdf, times, **kwargs),
    )
    assert np.allclose(
        np.exp(nonmixture_cumhazard(cdf, times[1:], log=True, **kwargs)),
        nonmixture_cumhazard(cdf, times[1:], **kwargs),
    )
    assert np.allclose(
        np.exp(nonmixture_pdf(cdf, pdf, times, log=True, **kwargs)),
        nonmixture_pdf(cdf, pdf, times, **kwargs),
    )


def test_log_of_zero(exp_base):
    cdf, _ = exp_base
    assert nonmixture_cdf(cdf, 0.0, 0.3, log_p=True, rate=1.0) == -np.inf
    assert nonmixture_cumhazard(cdf, 0.0, 0.3, log=True, rate=1.0) == -np.inf


def test_flags_not_forwarded(exp_base):
    _, pdf = exp_base
    # a stray probability flag is dropped, not passed to the base density
    assert nonmixture_hazard(pdf, 1.0, 0.3, log_p=True, rate=1.0) == nonmixture_hazard(
        pdf, 1.0, 0.3, rate=1.0
    )


def test_recycling(exp_base):
    cdf, _ = exp_base
    q = np.array([0.5, 1.0, 1.5, 2.0])
    theta = np.array([0.2, 0.5])
    out = nonmixture_sf(cdf, q, theta, rate=1.0)
    assert out.shape == (4,)
    expected = [nonmixture_sf(cdf, qi, ti, rate=1.0) for qi, ti in zip(q, [0.2, 0.5] * 2)]
    assert np.allclose(out, expected)

    assert nonmixture_sf(cdf, [], 0.3, rate=1.0).size == 0


def test_rate_scaling(exp_base, times):
    cdf, _ = exp_base
    assert np.allclose(
        nonmixture_sf(cdf, times, 0.3, rate=2.0),
        nonmixture_sf(cdf, 2 * times, 0.3, rate=1.0),
    )


def test_boundary_theta(exp_base):
    cdf, pdf = exp_base
    assert np.array_equal(nonmixture_sf(cdf, [0.0, 1.0], 0.0, rate=1.0), [1.0, 0.0])
    assert nonmixture_hazard(pdf, 1.0, 0.0, rate=1.0) == np.inf

    assert nonmixture_sf(cdf, 3.0, 1.0, rate=1.0) == 1
    assert nonmixture_hazard(pdf, 3.0, 1.0, rate=1.0) == 0
    assert nonmixture_mean(cdf, 1.0, rate=1.0) == np.inf


def test_invalid_inputs(exp_base):
    cdf, pdf = exp_base
    with pytest.raises(DomainError):
        nonmixture_cdf(cdf, 1.0, 1.5, rate=1.0)
    with pytest.raises(DomainError):
        nonmixture_hazard(pdf, 1.0, -0.1, rate=1.0)
    with pytest.raises(DomainError):
        nonmixture_sf(cdf, -1.0, 0.3, rate=1.0)
    with pytest.raises(DomainError):
        nonmixture_quantile(cdf, 1.2, 0.3, rate=1.0)


def test_quantile(exp_base):
    cdf, _ = exp_base
    theta = 0.3
    p = np.array([0.05, 0.3, 0.6])
    t = nonmixture_quantile(cdf, p, theta, rate=1.0)
    f0 = np.log(1 - p) / np.log(theta)
    assert np.allclose(t, -np.log(1 - f0), rtol=1e-8)
    assert np.allclose(nonmixture_cdf(cdf, t, theta, rate=1.0), p)

    assert nonmixture_quantile(cdf, 0.0, theta, rate=1.0) == 0
    assert nonmixture_quantile(cdf, 0.8, theta, rate=1.0) == np.inf
    assert nonmixture_quantile(cdf, 1.0, theta, rate=1.0) == np.inf


def test_quantile_conventions(exp_base):
    cdf, _ = exp_base
    ref = nonmixture_quantile(cdf, 0.3, 0.3, rate=1.0)
    assert np.isclose(
        nonmixture_quantile(cdf, 0.7, 0.3, lower_tail=False, rate=1.0), ref
    )
    assert np.isclose(
        nonmixture_quantile(cdf, np.log(0.7), 0.3, lower_tail=False, log_p=True, rate=1.0),
        ref,
    )
    assert np.isclose(nonmixture_quantile(cdf, np.log(0.3), 0.3, log_p=True, rate=1.0), ref)


def test_quantile_degenerate(exp_base):
    cdf, _ = exp_base
    with pytest.raises(DegenerateParameterError):
        nonmixture_quantile(cdf, 0.5, 1.0, rate=1.0)
    # no event ever happens, but the trivial quantiles are well defined
    assert nonmixture_quantile(cdf, 0.0, 1.0, rate=1.0) == 0


def test_rvs(exp_base):
    cdf, _ = exp_base
    a = nonmixture_rvs(cdf, 20, 0.3, rng=42, rate=1.0)
    b = nonmixture_rvs(cdf, 20, 0.3, rng=np.random.default_rng(42), rate=1.0)
    np.testing.assert_array_equal(a, b)
    assert a.shape == (20,)
    assert np.all(a > 0)

    assert nonmixture_rvs(cdf, [1, 2, 3], 0.3, rng=1, rate=1.0).shape == (3,)
    assert nonmixture_rvs(cdf, 0, 0.3, rng=1, rate=1.0).size == 0
    with pytest.raises(DomainError):
        nonmixture_rvs(cdf, -1, 0.3, rate=1.0)


def test_rvs_cured_fraction(exp_base):
    cdf, _ = exp_base
    theta = 0.3
    x = nonmixture_rvs(cdf, 500, theta, rng=2024, rate=1.0)
    assert abs(np.mean(np.isinf(x)) - theta) < 0.08


def test_rmst(exp_base):
    cdf, _ = exp_base
    theta = 0.3

    def surv(u):
        return theta ** (1 - np.exp(-u))

    assert np.isclose(nonmixture_rmst(cdf, 2.0, theta, rate=1.0), quad(surv, 0, 2)[0])
    assert np.isclose(
        nonmixture_rmst(cdf, 2.0, theta, start=0.5, rate=1.0),
        quad(surv, 0.5, 2)[0] / surv(0.5),
    )
    out = nonmixture_rmst(cdf, [1.0, 2.0], theta, rate=1.0)
    assert np.all(np.diff(out) > 0)

    with pytest.raises(DomainError):
        nonmixture_rmst(cdf, 1.0, 1.5, rate=1.0)


def test_mean(exp_base):
    cdf, _ = exp_base
    with pytest.raises(ConvergenceError):
        nonmixture_mean(cdf, 0.3, rate=1.0)

    out = nonmixture_mean(cdf, [1.0, np.nan], rate=1.0)
    assert out[0] == np.inf
    assert np.isnan(out[1])


def test_weibull_base():
    theta = 0.4
    t = np.array([0.5, 1.0, 2.0])
    surv = nonmixture_sf(weibull.cdf, t, theta, shape=1.5, scale=2.0)
    f0 = 1 - np.exp(-((t / 2.0) ** 1.5))
    assert np.allclose(surv, theta**f0)


def test_quantile_upper_tail_round_trip(exp_base):
    cdf, _ = exp_base
    theta = 0.3
    t = np.array([0.5, 3.0, 20.0])
    s = nonmixture_sf(cdf, t, theta, rate=1.0)
    assert np.allclose(nonmixture_quantile(cdf, s, theta, lower_tail=False, rate=1.0), t)
    log_s = nonmixture_sf(cdf, t[:2], theta, log_p=True, rate=1.0)
    assert np.allclose(
        nonmixture_quantile(cdf, log_s, theta, lower_tail=False, log_p=True, rate=1.0),
        t[:2],
    )


def test_quantile_nan_theta(exp_base):
    cdf, _ = exp_base
    assert np.isnan(nonmixture_quantile(cdf, 0.2, np.nan, rate=1.0))

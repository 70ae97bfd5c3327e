# Copyright Contributors to the jaxdist project.
# SPDX-License-Identifier: Apache-2.0

import numpy as np
from numpy.testing import assert_allclose
import pytest
import scipy.stats

from jax import random
import jax.numpy as jnp

import jaxdist.distributions as dist
from jaxdist.distributions import (
    EmptyDistributionError,
    InvalidParametersError,
    UnsupportedStatisticError,
)


@pytest.mark.parametrize(
    "concentration1, concentration0, expected",
    [
        (1.0, 1.0, 0.5),
        (2.0, 1.0, 0.6666666666666666),
        (0.5, 10.0, 0.047619047619047616),
        (3.0, 7.0, 0.3),
    ],
)
def test_mean(concentration1, concentration0, expected):
    actual = dist.Beta(concentration1, concentration0).mean
    assert_allclose(actual, expected, rtol=0, atol=1e-12)


@pytest.mark.parametrize(
    "concentration1, concentration0, expected",
    [
        (1.0, 0.1, 0.9990234375),
        (0.1, 1.0, 0.0009765625),
        (1.0, 1.0, 0.5),
        (2.0, 2.0, 0.5),
        (0.3, 0.3, 0.5),
        (3.0, 2.0, 0.6142724318),
        (2.0, 3.0, 0.3857275681),
        (20.0, 18.0, 0.5267857142857143),
    ],
)
def test_median(concentration1, concentration0, expected):
    actual = dist.Beta(concentration1, concentration0).median
    assert_allclose(actual, expected, rtol=0, atol=1e-12)


@pytest.mark.parametrize("concentration1, concentration0", [(3.0, 2.0), (2.0, 3.0)])
def test_median_special_cases_agree_with_scipy(concentration1, concentration0):
    expected = scipy.stats.beta(concentration1, concentration0).median()
    actual = dist.Beta(concentration1, concentration0).median
    assert_allclose(actual, expected, atol=1e-9)


@pytest.mark.parametrize("concentration", [0.01, 0.5, 1.0, 4.2, 300.0])
def test_median_symmetric(concentration):
    assert dist.Beta(concentration, concentration).median == 0.5


def test_median_unsupported():
    with pytest.raises(
        UnsupportedStatisticError,
        match=r"Median not supported for Beta distribution \[α = 0.1, β = 0.9\]",
    ):
        dist.Beta(0.1, 0.9).median


@pytest.mark.parametrize(
    "concentration1, concentration0, expected",
    [
        (2.0, 2.0, 0.5),
        (20.0, 20.0, 0.5),
        (200.0, 20.0, 0.9128440366972477),
    ],
)
def test_mode(concentration1, concentration0, expected):
    actual = dist.Beta(concentration1, concentration0).mode
    assert_allclose(actual, expected, rtol=0, atol=1e-12)


@pytest.mark.parametrize(
    "concentration1, concentration0", [(1.0, 2.0), (2.0, 1.0), (1.0, 1.0), (0.5, 3.0)]
)
def test_mode_unsupported(concentration1, concentration0):
    with pytest.raises(UnsupportedStatisticError, match="Mode not supported"):
        dist.Beta(concentration1, concentration0).mode


def test_mode_unsupported_message():
    with pytest.raises(UnsupportedStatisticError) as exc_info:
        dist.Beta(1.0, 2.0).mode
    assert str(exc_info.value) == (
        "Mode not supported for Beta distribution [α = 1, β = 2]"
    )


@pytest.mark.parametrize(
    "concentration1, concentration0, expected",
    [
        (1.0, 0.1, 0.03935458480913026),
        (0.1, 1.0, 0.03935458480913026),
        (1.0, 1.0, 0.08333333333333333),
        (20.0, 4.0, 0.005555555555555556),
    ],
)
def test_variance(concentration1, concentration0, expected):
    actual = dist.Beta(concentration1, concentration0).variance
    assert_allclose(actual, expected, rtol=0, atol=1e-12)


@pytest.mark.parametrize(
    "concentration1, concentration0",
    [(0.45, 0.45), (0.7, 2.5), (10.0, 3.0), (200.0, 3500.0)],
)
def test_mean_var_agree_with_scipy(concentration1, concentration0):
    d = dist.Beta(concentration1, concentration0)
    sp_dist = scipy.stats.beta(concentration1, concentration0)
    assert_allclose(d.mean, sp_dist.mean(), rtol=1e-12)
    assert_allclose(d.variance, sp_dist.var(), rtol=1e-12)


def test_uniform_beta():
    d = dist.Beta(1, 1)
    assert d.mean == 0.5
    assert_allclose(d.variance, 0.08333333333333333, rtol=0, atol=1e-12)
    assert d.median == 0.5
    with pytest.raises(UnsupportedStatisticError):
        d.mode


@pytest.mark.parametrize(
    "concentration1, concentration0, message",
    [
        (0, 2.0, r"\[α = 0, β = 2\]"),
        (2.0, 0, r"\[α = 2, β = 0\]"),
        (0, 0, r"\[α = 0, β = 0\]"),
        (-1.5, 2.0, r"\[α = -1.5, β = 2\]"),
        (np.nan, 2.0, r"\[α = nan, β = 2\]"),
    ],
)
@pytest.mark.parametrize("statistic", ["mean", "median", "mode", "variance"])
def test_invalid_params(concentration1, concentration0, message, statistic):
    d = dist.Beta(concentration1, concentration0)
    with pytest.raises(InvalidParametersError, match="Invalid Beta distribution: " + message):
        getattr(d, statistic)


@pytest.mark.parametrize(
    "concentration1, concentration0, message",
    [
        (0.1234567, 0.75, "Median not supported for Beta distribution [α = 0.1234567, β = 0.75]"),
        (1e-7, 0.5, "Median not supported for Beta distribution [α = 1e-07, β = 0.5]"),
        (1.0, 12345678.0, "Mode not supported for Beta distribution [α = 1, β = 12345678]"),
    ],
)
def test_unsupported_message_keeps_exact_params(concentration1, concentration0, message):
    d = dist.Beta(concentration1, concentration0)
    statistic = message.split()[0].lower()
    with pytest.raises(UnsupportedStatisticError) as exc_info:
        getattr(d, statistic)
    assert str(exc_info.value) == message


def test_invalid_message_keeps_exact_params():
    with pytest.raises(InvalidParametersError) as exc_info:
        dist.Beta(-0.1234567, 2.5).mean
    assert str(exc_info.value) == "Invalid Beta distribution: [α = -0.1234567, β = 2.5]"


def test_invalid_params_sample():
    d = dist.Beta(0, 2.0)
    with pytest.raises(InvalidParametersError, match=r"\[α = 0, β = 2\]"):
        d.sample(random.PRNGKey(0))
    with pytest.raises(InvalidParametersError):
        d.log_prob(0.5)
    with pytest.raises(InvalidParametersError):
        d.cdf(0.5)


def test_invalid_params_is_value_error():
    with pytest.raises(ValueError):
        dist.Beta(0, 2.0).mean


def test_validate_args_at_construction():
    with pytest.raises(InvalidParametersError, match=r"\[α = 0, β = 2\]"):
        dist.Beta(0, 2.0, validate_args=True)
    with dist.validation_enabled():
        with pytest.raises(InvalidParametersError):
            dist.Beta(2.0, -1.0)
    # lazy by default
    dist.Beta(2.0, -1.0)


def test_scalar_params_only():
    with pytest.raises(ValueError, match="scalar"):
        dist.Beta(jnp.ones(2), 1.0)


def test_errors_are_distinct():
    assert not issubclass(UnsupportedStatisticError, InvalidParametersError)
    assert not issubclass(InvalidParametersError, UnsupportedStatisticError)
    assert not issubclass(EmptyDistributionError, InvalidParametersError)
    assert issubclass(UnsupportedStatisticError, NotImplementedError)


@pytest.mark.parametrize("concentration1, concentration0", [(2.0, 3.0), (0.5, 0.5)])
def test_log_prob(concentration1, concentration0):
    value = np.array([0.1, 0.5, 0.9])
    d = dist.Beta(concentration1, concentration0)
    expected = scipy.stats.beta(concentration1, concentration0).logpdf(value)
    assert_allclose(d.log_prob(value), expected, rtol=1e-5, atol=1e-5)


@pytest.mark.parametrize("concentration1, concentration0", [(2.0, 3.0), (0.5, 0.5)])
def test_cdf(concentration1, concentration0):
    value = np.array([0.1, 0.5, 0.9])
    d = dist.Beta(concentration1, concentration0)
    expected = scipy.stats.beta(concentration1, concentration0).cdf(value)
    assert_allclose(d.cdf(value), expected, rtol=1e-4, atol=1e-4)


def test_log_prob_out_of_support():
    d = dist.Beta(2.0, 2.0, validate_args=True)
    with pytest.warns(UserWarning, match="Out-of-support"):
        log_prob = d.log_prob(jnp.array([0.5, 1.5]))
    assert np.isfinite(log_prob[0])
    assert log_prob[1] == -np.inf


@pytest.mark.parametrize("sample_shape", [(), (5,), (2, 3)])
def test_sample_shape(sample_shape):
    d = dist.Beta(2.0, 5.0)
    samples = d.sample(random.PRNGKey(0), sample_shape)
    assert samples.shape == d.shape(sample_shape) == sample_shape


def test_sample_reproducible():
    d = dist.Beta(10.0, 3.0)
    x = d.sample(random.PRNGKey(3), (100,))
    y = d(rng_key=random.PRNGKey(3), sample_shape=(100,))
    z = d.sample(random.PRNGKey(4), (100,))
    assert_allclose(x, y)
    assert not np.allclose(x, z)


@pytest.mark.parametrize(
    "concentration1, concentration0",
    [
        # Jöhnk
        (0.45, 0.45),
        (0.15, 0.15),
        (0.2, 0.4),
        # Cheng BB
        (10.0, 3.0),
        (100.0, 30.0),
        (1000.0, 300.0),
        (10.0, 300.25),
        (200.0, 3500.0),
        # Cheng BC
        (10.0, 1.0),
        (1.0, 12.0),
        (0.6, 0.6),
        (0.75, 0.75),
        (0.3, 4.0),
    ],
)
def test_sample_stats(concentration1, concentration0):
    d = dist.Beta(concentration1, concentration0)
    samples = d.sample(random.PRNGKey(0), (20000,))
    assert jnp.all((samples >= 0) & (samples <= 1))

    empirical = dist.Empirical(np.asarray(samples))
    assert_allclose(empirical.mean, d.mean, atol=0.01)
    assert_allclose(empirical.variance, d.variance, atol=0.1)
    try:
        expected_median = d.median
    except UnsupportedStatisticError:
        expected_median = scipy.stats.beta(concentration1, concentration0).median()
    assert_allclose(empirical.median, expected_median, atol=0.1)

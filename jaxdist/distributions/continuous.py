# Copyright Contributors to the jaxdist project.
# SPDX-License-Identifier: Apache-2.0

import jax.numpy as jnp
from jax.scipy.special import betainc, betaln, xlog1py, xlogy

from jaxdist.distributions import constraints
from jaxdist.distributions.distribution import Distribution, validate_sample
from jaxdist.distributions.errors import UnsupportedStatisticError
from jaxdist.distributions.util import beta, format_beta_params
from jaxdist.util import is_prng_key


class Beta(Distribution):
    """
    Beta distribution on the unit interval with shape parameters
    ``concentration1`` (alpha) and ``concentration0`` (beta).

    Parameters are only checked lazily by default: an instance with a
    non-positive concentration can be built, but every statistic and
    :meth:`sample` raise :class:`~jaxdist.distributions.errors.InvalidParametersError`.
    Pass ``validate_args=True`` to fail at construction instead.

    :param float concentration1: the first shape parameter, alpha > 0.
    :param float concentration0: the second shape parameter, beta > 0.
    """

    arg_constraints = {
        "concentration1": constraints.positive,
        "concentration0": constraints.positive,
    }
    support = constraints.unit_interval

    def __init__(self, concentration1, concentration0, *, validate_args=None):
        if jnp.ndim(concentration1) or jnp.ndim(concentration0):
            raise ValueError("Beta distribution expects scalar concentrations.")
        self.concentration1 = concentration1
        self.concentration0 = concentration0
        super(Beta, self).__init__(batch_shape=(), validate_args=validate_args)

    def _invalid_params_message(self, param):
        return "Invalid Beta distribution: " + format_beta_params(
            self.concentration1, self.concentration0
        )

    def _unsupported(self, statistic):
        return UnsupportedStatisticError(
            "{} not supported for Beta distribution {}".format(
                statistic,
                format_beta_params(self.concentration1, self.concentration0),
            )
        )

    def sample(self, key, sample_shape=()):
        assert is_prng_key(key)
        self._check_params()
        return beta(
            key, self.concentration1, self.concentration0, self.shape(sample_shape)
        )

    @validate_sample
    def log_prob(self, value):
        self._check_params()
        return (
            xlogy(self.concentration1 - 1.0, value)
            + xlog1py(self.concentration0 - 1.0, -value)
            - betaln(self.concentration1, self.concentration0)
        )

    def cdf(self, value):
        self._check_params()
        return betainc(self.concentration1, self.concentration0, value)

    @property
    def mean(self):
        self._check_params()
        return self.concentration1 / (self.concentration1 + self.concentration0)

    @property
    def median(self):
        """
        There is no closed form for the median of a Beta distribution. Known
        special cases are returned exactly, the approximation of Kerman,
        "A closed-form approximation for the median of the beta
        distribution" (2011), is used elsewhere. Both concentrations below 1
        is only supported when they are equal.
        """
        self._check_params()
        a, b = self.concentration1, self.concentration0
        if a == 1:
            return 1.0 - 2.0 ** (-1.0 / b)
        elif b == 1:
            return 2.0 ** (-1.0 / a)
        elif a == 3 and b == 2:
            return 0.6142724318
        elif a == 2 and b == 3:
            return 0.3857275681

        if a == b:
            return 0.5
        elif a < 1 and b < 1:
            raise self._unsupported("Median")
        return (a - 1.0 / 3.0) / (a + b - 2.0 / 3.0)

    @property
    def mode(self):
        self._check_params()
        a, b = self.concentration1, self.concentration0
        if a <= 1 or b <= 1:
            raise self._unsupported("Mode")
        return (a - 1.0) / (a + b - 2.0)

    @property
    def variance(self):
        self._check_params()
        total = self.concentration1 + self.concentration0
        return self.concentration1 * self.concentration0 / (total**2 * (total + 1))

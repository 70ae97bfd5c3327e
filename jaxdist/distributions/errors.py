# Copyright Contributors to the jaxdist project.
# SPDX-License-Identifier: Apache-2.0


class DistributionError(Exception):
    """
    Base class for errors raised by jaxdist distributions. Every error is a
    caller-correctable precondition violation; none of them is transient.
    """


class InvalidParametersError(DistributionError, ValueError):
    """
    Raised when a distribution is queried or sampled with parameters outside
    of its ``arg_constraints``, e.g. a :class:`~jaxdist.distributions.Beta`
    with a non-positive concentration.
    """


class UnsupportedStatisticError(DistributionError, NotImplementedError):
    """
    Raised when a statistic is mathematically defined (or undefined) for the
    given parameters but has no implemented closed form.
    """


class EmptyDistributionError(DistributionError, ValueError):
    """
    Raised when a statistic or a draw is requested from an
    :class:`~jaxdist.distributions.Empirical` holding no observations.
    """

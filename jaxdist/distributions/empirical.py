# Copyright Contributors to the jaxdist project.
# SPDX-License-Identifier: Apache-2.0

import warnings

import numpy as np

from jax import random

from jaxdist.distributions import constraints
from jaxdist.distributions.distribution import Distribution
from jaxdist.distributions.errors import EmptyDistributionError
from jaxdist.util import find_stack_level, is_prng_key


class Empirical(Distribution):
    """
    Distribution of a growing collection of observed values.

    Mean and variance are maintained on every :meth:`add` with Welford's
    online algorithm, so querying them is O(1). Median and mode need a
    sorted view of the sample; they are memoized and only recomputed when a
    value different from the cached median (resp. mode) was added since the
    last computation. Adding copies of the current median or mode keeps the
    cache valid since it cannot change these statistics.

    The variance is the population variance (sum of squared deviations
    divided by ``n``).

    .. note:: Instances are mutable and not thread-safe; concurrent calls to
        :meth:`add` or to the memoized statistics must be serialized by the
        caller.

    **Example**

    .. doctest::

       >>> from jaxdist.distributions import Empirical
       >>> d = Empirical([1.5, 3.0, 3.0])
       >>> d.mean, d.median, d.mode
       (2.5, 3.0, 3.0)

    :param values: optional initial observations, added in order.
    """

    support = constraints.real

    def __init__(self, values=None, *, validate_args=None):
        self._sample = []
        self._mean = 0.0
        # sum of squared deviations from the running mean
        self._m2 = 0.0
        self._median = 0.0
        self._median_stale = False
        self._mode = 0.0
        self._mode_stale = False
        super(Empirical, self).__init__(batch_shape=(), validate_args=validate_args)
        if values is not None:
            self.add(*values)

    def __len__(self):
        return len(self._sample)

    def __repr__(self):
        return "{}(n={})".format(self.__class__.__name__, self.n)

    @property
    def n(self):
        """
        Number of observations added so far.
        """
        return len(self._sample)

    @property
    def values(self):
        """
        Observations in insertion order.

        :rtype: tuple
        """
        return tuple(self._sample)

    def add(self, *values):
        """
        Appends observations and updates the running statistics. Adding no
        value is a no-op.

        :return: this distribution, so that calls can be chained.
        """
        for v in values:
            v = float(v)
            if not self.support(v):
                warnings.warn(
                    "Non-finite value {} added to {} distribution.".format(
                        v, self.__class__.__name__
                    ),
                    stacklevel=find_stack_level(),
                )
            self._sample.append(v)
            n = len(self._sample)
            if n == 1:
                self._mean = self._median = self._mode = v
                self._median_stale = self._mode_stale = False
                continue

            mean = self._mean
            self._mean += (v - mean) / n
            self._m2 += (v - mean) * (v - self._mean)
            if v != self._median:
                self._median_stale = True
            if v != self._mode:
                self._mode_stale = True
        return self

    def _check_not_empty(self, statistic):
        if not self._sample:
            raise EmptyDistributionError(
                "{} cannot be calculated on empty distribution.".format(statistic)
            )

    def _sorted_sample(self):
        return np.sort(np.asarray(self._sample, dtype=np.float64))

    def sample(self, key, sample_shape=()):
        """
        Draws stored observations uniformly at random (with replacement).
        Every returned value is one of the observations, bit for bit.
        """
        assert is_prng_key(key)
        if not self._sample:
            raise EmptyDistributionError("cannot sample from empty distribution.")
        idx = random.randint(key, self.shape(sample_shape), 0, len(self._sample))
        return np.asarray(self._sample, dtype=np.float64)[np.asarray(idx)]

    @property
    def mean(self):
        self._check_not_empty("mean")
        return self._mean

    @property
    def variance(self):
        self._check_not_empty("variance")
        return self._m2 / len(self._sample)

    @property
    def median(self):
        """
        Median of the observations; the mean of the two middle values when
        the number of observations is even.
        """
        self._check_not_empty("median")
        if not self._median_stale:
            return self._median

        values = self._sorted_sample()
        mid = len(values) // 2
        if len(values) % 2 == 1:
            self._median = float(values[mid])
        else:
            self._median = float((values[mid - 1] + values[mid]) / 2.0)
        self._median_stale = False
        return self._median

    @property
    def mode(self):
        """
        Most frequent observation. For a multi-modal sample the smallest
        mode is returned.
        """
        self._check_not_empty("mode")
        if not self._mode_stale:
            return self._mode

        # unique values come out sorted and argmax picks the first maximum
        unique, counts = np.unique(self._sorted_sample(), return_counts=True)
        self._mode = float(unique[np.argmax(counts)])
        self._mode_stale = False
        return self._mode

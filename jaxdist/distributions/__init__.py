# Copyright Contributors to the jaxdist project.
# SPDX-License-Identifier: Apache-2.0

from jaxdist.distributions.continuous import Beta
from jaxdist.distributions.distribution import (
    Distribution,
    enable_validation,
    validation_enabled,
)
from jaxdist.distributions.empirical import Empirical
from jaxdist.distributions.errors import (
    DistributionError,
    EmptyDistributionError,
    InvalidParametersError,
    UnsupportedStatisticError,
)

from . import constraints

__all__ = [
    "Beta",
    "constraints",
    "Distribution",
    "DistributionError",
    "Empirical",
    "EmptyDistributionError",
    "enable_validation",
    "InvalidParametersError",
    "UnsupportedStatisticError",
    "validation_enabled",
]

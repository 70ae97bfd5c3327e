# Copyright Contributors to the jaxdist project.
# SPDX-License-Identifier: Apache-2.0

from jaxdist import distributions
from jaxdist.distributions.distribution import enable_validation, validation_enabled
from jaxdist.util import enable_x64, set_platform, set_rng_seed
from jaxdist.version import __version__

__all__ = [
    "__version__",
    "distributions",
    "enable_x64",
    "enable_validation",
    "set_platform",
    "set_rng_seed",
    "validation_enabled",
]

# Copyright Contributors to the jaxdist project.
# SPDX-License-Identifier: Apache-2.0

import os

from jaxdist.util import enable_x64, set_platform, set_rng_seed

set_platform("cpu")


def pytest_runtest_setup(item):
    if "JAX_ENABLE_X64" in os.environ:
        enable_x64()
    set_rng_seed(0)

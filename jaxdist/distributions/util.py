# Copyright Contributors to the jaxdist project.
# SPDX-License-Identifier: Apache-2.0

from functools import partial
import math

import jax
from jax import jit, lax, random, vmap
import jax.numpy as jnp

from jaxdist.distributions.errors import InvalidParametersError

# ln(4), as tabulated by Cheng (1978)
_LOG4 = 1.3862944
# 1 + ln(5), squeeze constant of algorithm BB
_ONE_PLUS_LOG5 = 2.609438


def _format_float(x):
    # shortest round-tripping repr, without the trailing ".0" of whole numbers
    s = repr(float(x))
    return s[:-2] if s.endswith(".0") else s


def format_beta_params(concentration1, concentration0):
    return "[α = {}, β = {}]".format(
        _format_float(concentration1), _format_float(concentration0)
    )


def _saturating_mul_exp(scale, v):
    """
    Computes ``scale * exp(v)``, replacing an overflow by the largest finite
    value of the dtype of `v` so that the acceptance tests downstream stay
    well defined.
    """
    finfo = jnp.finfo(jnp.result_type(v))
    # 709.78 for float64, 88.72 for float32
    log_max = math.log(float(finfo.max))
    w = jnp.where(v <= log_max, scale * jnp.exp(v), finfo.max)
    return jnp.where(jnp.isinf(w), finfo.max, w)


def _uniform(key, dtype):
    # open interval (0, 1): every trial takes the log of its uniforms
    return random.uniform(key, dtype=dtype, minval=jnp.finfo(dtype).tiny)


def _beta_johnk_one(key, concentration1, concentration0):
    """
    Jöhnk's algorithm as described by Dagpunar, "Principles of Random
    Variate Generation" (1988). Efficient when both concentrations are below
    0.5. Computed in log space since ``u ** (1 / concentration)`` underflows
    for small concentrations.

    A trial is only accepted when ``x + y <= 1``; without this step the
    variates would not follow a Beta distribution.
    """
    dtype = jnp.result_type(concentration1)

    def _johnk_body_fn(val):
        key, _, _ = val
        key, key_u, key_y = random.split(key, 3)
        log_x = jnp.log(_uniform(key_u, dtype)) / concentration1
        log_y = jnp.log(_uniform(key_y, dtype)) / concentration0
        log_sum = jnp.logaddexp(log_x, log_y)
        # accept when x + y <= 1
        return key, jnp.exp(log_x - log_sum), log_sum <= 0.0

    _, x, _ = lax.while_loop(
        lambda val: ~val[2],
        _johnk_body_fn,
        (key, jnp.zeros((), dtype=dtype), jnp.array(False)),
    )
    return x


def _beta_cheng_bc_one(key, concentration1, concentration0):
    """
    Algorithm BC from Cheng, "Generating beta variates with nonintegral shape
    parameters" (1978), for ``min(concentration1, concentration0) <= 1``.
    """
    dtype = jnp.result_type(concentration1)
    a = jnp.minimum(concentration1, concentration0)
    b = jnp.maximum(concentration1, concentration0)
    alpha = a + b
    beta = 1.0 / a
    delta = 1.0 + b - a
    k1 = delta * (0.0138889 + 0.0416667 * a) / (b * beta - 0.777778)
    k2 = 0.25 + (0.5 + 0.25 / delta) * a

    def _bc_body_fn(val):
        key, _, _ = val
        key, key_u1, key_u2 = random.split(key, 3)
        u1 = _uniform(key_u1, dtype)
        u2 = _uniform(key_u2, dtype)

        is_low = u1 < 0.5
        y = u1 * u2
        z = jnp.where(is_low, u1 * y, u1 * u1 * u2)
        early_accept = ~is_low & (z <= 0.25)
        early_reject = jnp.where(is_low, 0.25 * u2 + z - y >= k1, z >= k2)

        v = beta * jnp.log(u1 / (1.0 - u1))
        w = _saturating_mul_exp(b, v)
        accept = alpha * (jnp.log(alpha / (a + w)) + v) - _LOG4 >= jnp.log(z)
        return key, w, early_accept | (~early_reject & accept)

    _, w, _ = lax.while_loop(
        lambda val: ~val[2],
        _bc_body_fn,
        (key, jnp.zeros((), dtype=dtype), jnp.array(False)),
    )
    return jnp.where(concentration1 == a, a / (a + w), w / (a + w))


def _beta_cheng_bb_one(key, concentration1, concentration0):
    """
    Algorithm BB from Cheng, "Generating beta variates with nonintegral shape
    parameters" (1978), for concentrations both greater than 1.

    Each trial first tries the squeeze ``s + 1 + ln(5) >= 5z``, then the
    cheap bound ``s > ln(z)``, and finally the exact test
    ``r + alpha * ln(alpha / (b + w)) >= ln(z)`` before starting over.
    """
    dtype = jnp.result_type(concentration1)
    a = jnp.minimum(concentration1, concentration0)
    b = jnp.maximum(concentration1, concentration0)
    alpha = a + b
    beta = jnp.sqrt((alpha - 2.0) / (2.0 * a * b - alpha))
    gamma = a + 1.0 / beta

    def _bb_body_fn(val):
        key, _, _ = val
        key, key_u1, key_u2 = random.split(key, 3)
        u1 = _uniform(key_u1, dtype)
        u2 = _uniform(key_u2, dtype)

        v = beta * jnp.log(u1 / (1.0 - u1))
        w = _saturating_mul_exp(a, v)
        z = u1 * u1 * u2
        r = gamma * v - _LOG4
        s = a + r - w
        t = jnp.log(z)
        accept = (
            (s + _ONE_PLUS_LOG5 >= 5.0 * z)
            | (s > t)
            | (r + alpha * jnp.log(alpha / (b + w)) >= t)
        )
        return key, w, accept

    _, w, _ = lax.while_loop(
        lambda val: ~val[2],
        _bb_body_fn,
        (key, jnp.zeros((), dtype=dtype), jnp.array(False)),
    )
    return jnp.where(concentration1 == a, w / (b + w), b / (b + w))


_BETA_SAMPLERS = {
    "johnk": _beta_johnk_one,
    "cheng_bc": _beta_cheng_bc_one,
    "cheng_bb": _beta_cheng_bb_one,
}


def beta_regime(concentration1, concentration0):
    """
    Returns the name of the algorithm used to draw Beta variates for the
    given concentrations: ``"johnk"`` when both are below 0.5,
    ``"cheng_bc"`` when the smaller one is at most 1, ``"cheng_bb"``
    otherwise.
    """
    a = min(concentration1, concentration0)
    b = max(concentration1, concentration0)
    if b < 0.5:
        return "johnk"
    elif a <= 1.0:
        return "cheng_bc"
    return "cheng_bb"


@partial(jit, static_argnums=(3, 4, 5))
def _beta(key, concentration1, concentration0, shape, dtype, regime):
    concentration1 = lax.convert_element_type(concentration1, dtype)
    concentration0 = lax.convert_element_type(concentration0, dtype)
    sampler = _BETA_SAMPLERS[regime]
    keys = random.split(key, math.prod(shape))
    if jax.default_backend() == "cpu":
        ret = lax.map(lambda k: sampler(k, concentration1, concentration0), keys)
    else:
        ret = vmap(lambda k: sampler(k, concentration1, concentration0))(keys)
    return jnp.reshape(ret, shape)


def beta(key, concentration1, concentration0, shape=(), dtype=None):
    """
    Draws independent Beta variates by rejection sampling. The algorithm is
    picked once from the concentrations (see :func:`beta_regime`) and each
    variate uses its own key split from `key`.

    Concentrations must be concrete (not traced) scalars since they
    select the algorithm.

    :param key: random number generator key, the only source of randomness.
    :param concentration1: the first shape parameter (alpha).
    :param concentration0: the second shape parameter (beta).
    :param tuple shape: shape of samples.
    :param dtype: float dtype of samples; defaults to the canonical float
        dtype, i.e. float64 under :func:`~jaxdist.util.enable_x64`.
    :return: samples in the open interval (0, 1).
    """
    concentration1, concentration0 = float(concentration1), float(concentration0)
    if not (concentration1 > 0 and concentration0 > 0):
        raise InvalidParametersError(
            "Invalid Beta distribution: "
            + format_beta_params(concentration1, concentration0)
        )
    if dtype is None:
        dtype = jax.dtypes.canonicalize_dtype(jnp.float64)
    return _beta(
        key,
        concentration1,
        concentration0,
        tuple(shape),
        jnp.dtype(dtype),
        beta_regime(concentration1, concentration0),
    )

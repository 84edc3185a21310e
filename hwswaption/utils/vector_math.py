# -*- coding: utf-8 -*-
import math
import sys
import numpy as np
from numba import njit

LOG_MAX_FLOAT = math.log(sys.float_info.max)
LOG_MIN_FLOAT = math.log(sys.float_info.min)
MAX_FLOAT = sys.float_info.max


@njit(cache=True)
def _safe_exp_multiply(a, x, out):
    for k in range(a.shape[0]):
        if x[k] == 0.0:
            out[k] = 0.0
            continue
        e = a[k] + math.log(abs(x[k]))
        if e > LOG_MAX_FLOAT:
            out[k] = math.copysign(MAX_FLOAT, x[k])
        elif e < LOG_MIN_FLOAT:
            out[k] = 0.0
        else:
            out[k] = math.copysign(math.exp(e), x[k])
    return out


def safe_exp_multiply(a, x):
    """
    Computes x * exp(a) elementwise without overflowing to ±inf.

    The exponent is combined with log|x| so that large exponents paired with small multipliers stay finite.
    Results beyond the largest finite float are clamped to ±max float (preserving the sign of x),
    results below the smallest normal float are set to zero.

    Parameters
    ----------
    a : float or np.array
        Exponent.
    x : float or np.array
        Multiplier. Broadcast against 'a'.

    Returns
    -------
    np.array
        x * exp(a), with the broadcast shape of the inputs.
    """
    a, x = np.broadcast_arrays(np.asarray(a, dtype=np.float64), np.asarray(x, dtype=np.float64))
    shape = a.shape
    a_flat = np.ascontiguousarray(a).reshape(-1)
    x_flat = np.ascontiguousarray(x).reshape(-1)
    out = np.empty_like(a_flat)
    _safe_exp_multiply(a_flat, x_flat, out)
    return out.reshape(shape)


def as_batch(value, nb_scenarios: int) -> np.array:
    """Broadcast a scalar or per-scenario value to a (writeable) batched scenario array."""
    value = np.asarray(value, dtype=np.float64)
    if value.ndim > 1:
        raise ValueError(f"Expected a scalar or 1D batch, got shape {value.shape}")
    if value.ndim == 1 and value.shape[0] not in (1, nb_scenarios):
        raise ValueError(f"Batch of length {value.shape[0]} does not match {nb_scenarios} scenarios")
    return np.broadcast_to(value, (nb_scenarios,)).copy()

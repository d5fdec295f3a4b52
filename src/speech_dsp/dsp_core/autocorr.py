"""
Unnormalized autocorrelation.

Levinson-Durbin consumes the raw lag sums, so no normalization is applied.
Cost is O(n^2); frame long recordings before calling.
"""

import numpy as np
from numba import jit

from ..errors import EmptyInput


@jit(nopython=True, cache=True)
def _autocorr_jit(x: np.ndarray) -> np.ndarray:
    n = len(x)
    ac = np.empty(n, dtype=np.float64)
    for lag in range(n):
        s = 0.0
        for i in range(n - lag):
            s += x[i] * x[i + lag]
        ac[lag] = s
    return ac


def autocorrelate(signal: np.ndarray) -> np.ndarray:
    """
    ac[lag] = sum_{i=0}^{n-1-lag} signal[i] * signal[i + lag]

    Returns a float64 array with the same length as signal; ac[0] is the
    total energy.
    """
    x = np.asarray(signal, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    if len(x) == 0:
        raise EmptyInput("signal")
    return _autocorr_jit(np.ascontiguousarray(x))

"""
Linear prediction: Levinson-Durbin recursion, LPC analysis and the
all-pole synthesis filter.
"""

from typing import Tuple

import numpy as np
from numba import jit

from ..errors import EmptyInput, NumericalBreakdown
from .autocorr import autocorrelate


def levinson_durbin(R: np.ndarray, order: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Solve the Toeplitz normal equations for the LPC coefficients.

    Parameters
    ----------
    R : np.ndarray
        Autocorrelation vector, length >= order + 1
    order : int
        Prediction order

    Returns
    -------
    a : np.ndarray
        Filter coefficients [1, a1, ..., a_order] of the denominator
        A(z) = 1 + a1 z^-1 + ... + a_order z^-order
    e : np.ndarray
        Prediction-error energy after each order, e[0] = R[0]

    Raises
    ------
    NumericalBreakdown
        If the error energy is zero or negative before the requested
        order is reached, or goes negative at any step. The exception
        carries the failing order and the energy value.
    """
    R = np.asarray(R, dtype=np.float64)
    if R.ndim != 1:
        raise ValueError(f"Autocorrelation must be 1D, got shape {R.shape}")
    if len(R) == 0:
        raise EmptyInput("autocorrelation")
    if order < 1:
        raise ValueError(f"Order must be >= 1, got {order}")
    if len(R) < order + 1:
        raise ValueError(f"Need at least {order + 1} lags for order {order}, got {len(R)}")

    a = np.zeros(order + 1)
    e = np.zeros(order + 1)
    a[0] = 1.0
    e[0] = R[0]

    for m in range(1, order + 1):
        if e[m - 1] <= 0:
            raise NumericalBreakdown(m, float(e[m - 1]))

        # R[m] + sum_{j=1}^{m-1} a[j] * R[m-j]
        acc = R[m] + np.dot(a[1:m], R[m - 1:0:-1])
        k = -acc / e[m - 1]

        # a[j] and a[m-j] both change in this step, update from a snapshot
        prev = a.copy()
        a[1:m] = prev[1:m] + k * prev[m - 1:0:-1]
        a[m] = k

        e[m] = e[m - 1] * (1.0 - k * k)
        if e[m] < 0:
            raise NumericalBreakdown(m, float(e[m]))

    return a, e


def preemphasize(signal: np.ndarray, coefficient: float = 0.97) -> np.ndarray:
    """y[0] = x[0]; y[i] = x[i] - coefficient * x[i-1]. Passthrough copy if coefficient <= 0."""
    x = np.asarray(signal, dtype=np.float64)
    if len(x) == 0:
        raise EmptyInput("signal")
    if coefficient <= 0:
        return x.copy()
    return np.append(x[0], x[1:] - coefficient * x[:-1])


def lpc_analyze(signal: np.ndarray, order: int = 12, preemphasis: float = 0.97) -> np.ndarray:
    """
    LPC coefficients of a single frame.

    Pre-emphasis -> autocorrelation truncated to order + 1 lags ->
    Levinson-Durbin.

    Examples
    --------
    >>> import numpy as np
    >>> t = np.arange(512) / 8000
    >>> a = lpc_analyze(np.sin(2 * np.pi * 500 * t), order=2, preemphasis=0.0)
    >>> a.shape
    (3,)
    """
    x = np.asarray(signal, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    if len(x) == 0:
        raise EmptyInput("signal")
    if len(x) < order + 1:
        raise ValueError(f"Signal of length {len(x)} is too short for order {order}")

    y = preemphasize(x, preemphasis)
    R = autocorrelate(y)[:order + 1]
    a, _ = levinson_durbin(R, order)
    return a


@jit(nopython=True, cache=True)
def _iir_jit(x: np.ndarray, coeffs: np.ndarray, gain: float) -> np.ndarray:
    n = len(x)
    order = len(coeffs) - 1
    y = np.empty(n, dtype=np.float64)
    # state[j] holds y[i-1-j]
    state = np.zeros(order, dtype=np.float64)

    for i in range(n):
        acc = gain * x[i]
        for j in range(1, order + 1):
            acc -= coeffs[j] * state[j - 1]
        y[i] = acc

        for j in range(order - 1, 0, -1):
            state[j] = state[j - 1]
        if order > 0:
            state[0] = acc

    return y


def iir_synthesize(excitation: np.ndarray, coeffs: np.ndarray, gain: float = 1.0) -> np.ndarray:
    """
    All-pole synthesis filter.

    y[i] = gain * x[i] - sum_{j=1}^{order} coeffs[j] * y[i-j]

    coeffs[0] is taken to be 1 and is not used. Equivalent to
    scipy.signal.lfilter([gain], coeffs, excitation) for such coeffs.
    """
    x = np.asarray(excitation, dtype=np.float64)
    c = np.asarray(coeffs, dtype=np.float64)
    if x.ndim != 1 or c.ndim != 1:
        raise ValueError("Excitation and coefficients must be 1D")
    if len(x) == 0:
        raise EmptyInput("excitation")
    if len(c) == 0:
        raise EmptyInput("coefficients")
    return _iir_jit(np.ascontiguousarray(x), np.ascontiguousarray(c), float(gain))

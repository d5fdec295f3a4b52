"""
Radix-2 FFT using Numba JIT

This module implements the Cooley-Tukey FFT for power-of-two lengths.
Optimizations:
1. Numba JIT compilation (nopython mode)
2. Iterative (non-recursive) implementation - no recursion depth limit
3. Bit-reversal permutation followed by in-place butterflies
4. Cache compiled functions

A plain recursive version built on the Complex type is kept as
`fft_recursive`; it is slow and only meant as a reference.
"""

import math
from typing import List, Sequence

import numpy as np
from numba import jit

from ..errors import InvalidLength
from .complex import Complex


def _check_length(n: int) -> None:
    if n < 1 or n & (n - 1) != 0:
        raise InvalidLength(n)


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _fft_radix2_iter(x: np.ndarray) -> np.ndarray:
    """
    Iterative Cooley-Tukey radix-2 DIT FFT (Numba JIT).

    Equivalent to the even/odd recursive split: the bit-reversal
    permutation lays out the leaves of the recursion, then each stage
    combines pairs of half-size transforms with twiddles exp(-2*pi*i*k/N).
    """
    N = len(x)
    n_bits = 0
    while (1 << n_bits) < N:
        n_bits += 1

    # Bit-reversal permutation
    X = np.empty(N, dtype=np.complex128)
    for i in range(N):
        X[_bit_reverse(i, n_bits)] = x[i]

    # Process stages: size 2, 4, 8, ..., N
    stage_size = 2
    while stage_size <= N:
        half_size = stage_size // 2
        # Twiddles computed directly rather than by repeated multiplication
        twiddles = np.exp(-2j * np.pi * np.arange(half_size) / stage_size)

        for k in range(0, N, stage_size):
            for j in range(half_size):
                even_idx = k + j
                odd_idx = k + j + half_size

                even = X[even_idx]
                odd = X[odd_idx] * twiddles[j]

                X[even_idx] = even + odd
                X[odd_idx] = even - odd

        stage_size *= 2

    return X


def fft(x: np.ndarray, axis: int = -1, norm: str = "backward") -> np.ndarray:
    """
    Compute the 1-D discrete Fourier Transform using Cooley-Tukey FFT.

    Parameters
    ----------
    x : np.ndarray
        Input array (real input is treated as complex with zero imaginary part)
    axis : int
        Axis along which to compute the FFT (default: -1)
    norm : str
        Normalization mode: "backward", "ortho", or "forward"

    Returns
    -------
    np.ndarray
        The transformed array, complex128, same shape as x

    Raises
    ------
    InvalidLength
        If the length along axis is zero or not a power of two.

    Examples
    --------
    >>> import numpy as np
    >>> x = np.array([1.0, 2.0, 1.0, -1.0, 1.5, 1.0, 0.5, -0.5])
    >>> X = fft(x)
    >>> # Should match scipy.fft.fft(x)
    """
    x = np.asarray(x)
    if x.ndim == 0:
        raise InvalidLength(0, "Input must have at least one dimension")

    n = x.shape[axis]
    _check_length(n)

    # Move target axis to the last position
    x = np.moveaxis(x, axis, -1)

    original_shape = x.shape
    if x.ndim > 1:
        # Flatten to 2D, apply FFT to each row
        x_2d = x.reshape(-1, n)
        result_2d = np.empty(x_2d.shape, dtype=np.complex128)
        for i in range(x_2d.shape[0]):
            result_2d[i] = _fft_radix2_iter(x_2d[i].astype(np.complex128))
        result = result_2d.reshape(original_shape)
    else:
        result = _fft_radix2_iter(x.astype(np.complex128))

    if norm == "ortho":
        result = result / np.sqrt(n)
    elif norm == "forward":
        result = result / n
    elif norm != "backward":
        raise ValueError(f"Unknown norm mode: {norm}")

    return np.moveaxis(result, -1, axis)


def ifft(x: np.ndarray, axis: int = -1, norm: str = "backward") -> np.ndarray:
    """
    Compute the 1-D inverse discrete Fourier Transform.

    IFFT(x) = conj(FFT(conj(x))) / N
    """
    x_conj = np.conj(np.asarray(x))

    if norm == "backward":
        result = fft(x_conj, axis=axis, norm="forward")
    elif norm == "forward":
        result = fft(x_conj, axis=axis, norm="backward")
    else:
        result = fft(x_conj, axis=axis, norm="ortho")

    return np.conj(result)


def _fft_recursive(values: List[Complex]) -> List[Complex]:
    N = len(values)
    if N <= 1:
        return values

    half = N // 2
    even = _fft_recursive(values[0::2])
    odd = _fft_recursive(values[1::2])

    out = [Complex()] * N
    for k in range(half):
        t = Complex(0.0, -2.0 * math.pi * k / N).cexp() * odd[k]
        out[k] = even[k] + t
        out[k + half] = even[k] - t
    return out


def fft_recursive(x: Sequence) -> np.ndarray:
    """
    Recursive divide-and-conquer FFT on Complex values.

    Splits into even- and odd-indexed halves, transforms each and
    combines them with twiddle factors. Depth is log2(N).
    """
    values = [Complex.from_value(v) for v in x]
    _check_length(len(values))
    return np.array([complex(v) for v in _fft_recursive(values)], dtype=np.complex128)

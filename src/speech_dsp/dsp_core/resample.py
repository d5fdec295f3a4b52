"""
Linear-interpolation sample rate conversion.
"""

import math

import numpy as np

from ..errors import EmptyInput


def resample(signal: np.ndarray, old_rate: float, new_rate: float) -> np.ndarray:
    """
    Resample by linear interpolation.

    Output length is ceil(len(signal) / ratio) with ratio = old_rate / new_rate.
    Output sample i reads source position i * ratio, interpolating between
    floor(pos) and floor(pos) + 1; past the last sample it holds the last value.

    Rates only matter through their ratio, so sample counts can stand in
    for rates when the duration is fixed.
    """
    x = np.asarray(signal, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    if len(x) == 0:
        raise EmptyInput("signal")
    if old_rate <= 0 or new_rate <= 0:
        raise ValueError(f"Sample rates must be positive, got {old_rate} -> {new_rate}")

    n = len(x)
    ratio = old_rate / new_rate
    # Rounding keeps float noise such as 512.0000000001 from adding a sample
    new_length = math.ceil(round(n / ratio, 9))

    pos = np.arange(new_length) * ratio
    low = np.minimum(np.floor(pos).astype(np.int64), n - 1)
    frac = pos - low
    high = np.minimum(low + 1, n - 1)

    out = x[low] * (1.0 - frac) + x[high] * frac
    # At the boundary there is no right neighbour
    at_end = low + 1 >= n
    out[at_end] = x[low[at_end]]
    return out


def reduce_and_restore_bitrate(signal: np.ndarray, factor: float = 2) -> np.ndarray:
    """
    Downsample by factor, then upsample back to the original length.

    This is a lossy round trip; the result is not bit-exact.
    """
    x = np.asarray(signal, dtype=np.float64)
    if len(x) == 0:
        raise EmptyInput("signal")
    if factor <= 0:
        raise ValueError(f"Reduction factor must be positive, got {factor}")

    n = len(x)
    reduced = n / factor
    downsampled = resample(x, n, reduced)
    restored = resample(downsampled, reduced, n)
    # ceil() on the way down can leave a few extra samples on the way up
    if len(restored) >= n:
        return restored[:n]
    return np.append(restored, np.full(n - len(restored), restored[-1]))

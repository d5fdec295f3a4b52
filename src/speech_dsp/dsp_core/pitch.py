"""
Autocorrelation pitch detector.
"""

import math

import numpy as np

from ..errors import EmptyInput, InvalidRange
from .autocorr import autocorrelate

# Minimum normalized autocorrelation peak for a frame to count as voiced
VOICING_THRESHOLD = 0.5


def lag_window(fs: float, min_freq: float, max_freq: float, length: int):
    """Lag search window [floor(fs / max_freq), floor(fs / min_freq)) for a signal of given length."""
    if min_freq <= 0 or max_freq <= 0 or fs <= 0:
        raise InvalidRange(0, 0, length)
    min_lag = int(math.floor(fs / max_freq))
    max_lag = int(math.floor(fs / min_freq))
    if min_lag < 1 or max_lag <= min_lag or max_lag > length:
        raise InvalidRange(min_lag, max_lag, length)
    return min_lag, max_lag


def detect_pitch(
    signal: np.ndarray,
    fs: float = 16000,
    min_freq: float = 80.0,
    max_freq: float = 300.0
) -> float:
    """
    Estimate the fundamental frequency of a frame.

    Returns fs / peak_lag when the normalized autocorrelation peak inside
    the lag window reaches VOICING_THRESHOLD, else 0.0 (unvoiced). A
    silent signal also gives 0.0.

    Raises
    ------
    InvalidRange
        If the lag window derived from the frequency bounds is empty,
        non-positive, or longer than the signal.
    """
    x = np.asarray(signal, dtype=np.float64)
    if len(x) == 0:
        raise EmptyInput("signal")

    min_lag, max_lag = lag_window(fs, min_freq, max_freq, len(x))

    ac = autocorrelate(x)
    peak = ac.max()
    if peak == 0:
        return 0.0
    normalized = ac / peak

    # argmax keeps the first (shortest) lag on ties
    peak_lag = min_lag + int(np.argmax(normalized[min_lag:max_lag]))
    if normalized[peak_lag] < VOICING_THRESHOLD:
        return 0.0
    return fs / peak_lag

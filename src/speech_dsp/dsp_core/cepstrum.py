"""
Real cepstrum via the radix-2 FFT.
"""

import numpy as np

from ..errors import EmptyInput
from .fft import fft, ifft

# Floor added to |X|^2 before the log
LOG_EPS = 1e-10


def cepstrum(signal: np.ndarray, n_ceps: int = 13) -> np.ndarray:
    """
    Compute the first n_ceps real cepstral coefficients.

    FFT -> log(|X|^2 + eps) / 2 -> IFFT -> real part of the first n_ceps bins.

    Parameters
    ----------
    signal : np.ndarray
        One frame of shape (frame_length,) or a stack of frames of shape
        (n_frames, frame_length). frame_length must be a power of two.
    n_ceps : int
        Number of coefficients to keep

    Returns
    -------
    np.ndarray
        Shape (n_ceps,) or (n_frames, n_ceps)
    """
    x = np.asarray(signal, dtype=np.float64)
    if x.size == 0:
        raise EmptyInput("signal")
    if x.ndim not in (1, 2):
        raise ValueError(f"Input must be 1D or 2D, got shape {x.shape}")
    if n_ceps < 1:
        raise ValueError(f"n_ceps must be >= 1, got {n_ceps}")

    spectrum = fft(x, axis=-1)
    log_magnitude = np.log(spectrum.real ** 2 + spectrum.imag ** 2 + LOG_EPS) / 2
    ceps = ifft(log_magnitude.astype(np.complex128), axis=-1)
    return ceps[..., :n_ceps].real.copy()

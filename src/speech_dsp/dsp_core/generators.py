"""
Test signal generators.
"""

import numpy as np


def sine_wave(
    amplitude: float = 1.0,
    frequency: float = 100.0,
    duration: float = 1.0,
    fs: int = 16000
) -> np.ndarray:
    """amplitude * sin(2*pi*frequency*n/fs) for n in [0, floor(fs*duration))."""
    # Small offset so 0.064 * 16000 gives 1024 samples, not 1023
    n = np.arange(int(np.floor(fs * duration + 1e-9)))
    return amplitude * np.sin(2 * np.pi * frequency * n / fs)


def white_noise(n_samples: int, seed=None) -> np.ndarray:
    """Uniform noise in [-1, 1), the excitation used for unvoiced synthesis."""
    rng = np.random.default_rng(seed)
    return rng.uniform(-1.0, 1.0, n_samples)

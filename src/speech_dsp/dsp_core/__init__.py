"""
DSP Core Module - Hand-written Speech Processing Primitives

This module provides from-scratch implementations of the classic speech
analysis/synthesis chain: spectral transforms, linear prediction, pitch
detection and cepstral analysis.

Modules:
    - complex: Complex value type for the reference FFT
    - fft: Fast Fourier Transform (radix-2 Cooley-Tukey)
    - autocorr: Unnormalized autocorrelation
    - lpc: Levinson-Durbin, LPC analysis, all-pole synthesis filter
    - resample: Linear-interpolation resampler
    - cepstrum: Real cepstrum
    - pitch: Autocorrelation pitch detector
    - generators: Test signals
"""

from .complex import Complex
from .fft import fft, ifft, fft_recursive
from .autocorr import autocorrelate
from .lpc import levinson_durbin, preemphasize, lpc_analyze, iir_synthesize
from .resample import resample, reduce_and_restore_bitrate
from .cepstrum import cepstrum
from .pitch import detect_pitch, lag_window, VOICING_THRESHOLD
from .generators import sine_wave, white_noise

__all__ = [
    'Complex',
    # FFT functions
    'fft',
    'ifft',
    'fft_recursive',
    # Linear prediction
    'autocorrelate',
    'levinson_durbin',
    'preemphasize',
    'lpc_analyze',
    'iir_synthesize',
    # Resampling
    'resample',
    'reduce_and_restore_bitrate',
    # Cepstrum / pitch
    'cepstrum',
    'detect_pitch',
    'lag_window',
    'VOICING_THRESHOLD',
    # Signals
    'sine_wave',
    'white_noise',
]

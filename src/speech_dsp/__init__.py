"""
speech_dsp - a small digital speech processing toolkit.

Spectral transforms, linear-predictive analysis/synthesis, pitch
detection and vector quantization for speech feature coding.
"""

from .errors import (
    DSPError,
    InvalidLength,
    InvalidRange,
    NumericalBreakdown,
    DimensionMismatch,
    EmptyInput,
)
from .dsp_core import (
    Complex,
    fft,
    ifft,
    fft_recursive,
    autocorrelate,
    levinson_durbin,
    preemphasize,
    lpc_analyze,
    iir_synthesize,
    resample,
    reduce_and_restore_bitrate,
    cepstrum,
    detect_pitch,
    sine_wave,
    white_noise,
)
from .quantization import VectorQuantizer, train_codebook, quantize
from .config import AnalysisConfig, load_config
from .pipeline import SpeechAnalyzer, AnalysisResult, snr_db

__all__ = [
    # Errors
    'DSPError',
    'InvalidLength',
    'InvalidRange',
    'NumericalBreakdown',
    'DimensionMismatch',
    'EmptyInput',
    # Core
    'Complex',
    'fft',
    'ifft',
    'fft_recursive',
    'autocorrelate',
    'levinson_durbin',
    'preemphasize',
    'lpc_analyze',
    'iir_synthesize',
    'resample',
    'reduce_and_restore_bitrate',
    'cepstrum',
    'detect_pitch',
    'sine_wave',
    'white_noise',
    # Quantization
    'VectorQuantizer',
    'train_codebook',
    'quantize',
    # Pipeline
    'AnalysisConfig',
    'load_config',
    'SpeechAnalyzer',
    'AnalysisResult',
    'snr_db',
]

__version__ = '1.0.0'

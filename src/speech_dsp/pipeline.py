"""
Frame-by-frame speech analysis.

Runs the dsp_core primitives over a framed signal: LPC coefficients,
pitch track and cepstra per frame, a vector-quantization codebook over
the cepstra, and a reduced-bitrate waveform coding round trip.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .config import AnalysisConfig
from .dsp_core import (
    cepstrum,
    detect_pitch,
    iir_synthesize,
    lpc_analyze,
    reduce_and_restore_bitrate,
    white_noise,
)
from .errors import EmptyInput, NumericalBreakdown
from .quantization import VectorQuantizer
from .utils.audio import AudioProcessor
from .utils.logging import get_logger

logger = get_logger(__name__)


def snr_db(reference: np.ndarray, estimate: np.ndarray) -> float:
    """Signal-to-noise ratio of estimate against reference, in dB."""
    reference = np.asarray(reference, dtype=np.float64)
    estimate = np.asarray(estimate, dtype=np.float64)
    if reference.shape != estimate.shape:
        raise ValueError(f"Shape mismatch: {reference.shape} vs {estimate.shape}")
    noise = np.sum((reference - estimate) ** 2)
    signal = np.sum(reference ** 2)
    if noise == 0:
        return float('inf')
    if signal == 0:
        return float('-inf')
    return float(10 * np.log10(signal / noise))


@dataclass
class AnalysisResult:
    lpc: np.ndarray              # (n_frames, order + 1)
    lpc_orders: np.ndarray       # (n_frames,) order actually fitted per frame
    pitch: np.ndarray            # (n_frames,) Hz, 0 for unvoiced
    cepstra: np.ndarray          # (n_frames, n_ceps)
    codebook: np.ndarray         # (codebook_size, n_ceps)
    indices: np.ndarray          # (n_frames,)
    coded_signal: np.ndarray     # same length as the input
    coding_snr_db: float

    @property
    def n_frames(self) -> int:
        return len(self.pitch)

    def summary(self) -> Dict:
        voiced = self.pitch[self.pitch > 0]
        return {
            'n_frames': int(self.n_frames),
            'voiced_frames': int(len(voiced)),
            'mean_pitch_hz': float(voiced.mean()) if len(voiced) else 0.0,
            'reduced_order_frames': int(np.sum(self.lpc_orders < self.lpc.shape[1] - 1)),
            'codebook_size': int(self.codebook.shape[0]),
            'codewords_used': int(len(np.unique(self.indices))),
            'coding_snr_db': float(self.coding_snr_db),
        }


class SpeechAnalyzer:
    """
    Runs the analysis chain configured by an AnalysisConfig.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = (config or AnalysisConfig()).validate()

    def frame_lpc(self, frame: np.ndarray):
        """
        LPC coefficients of one frame, lowering the order on breakdown.

        Returns (coeffs, fitted_order); coeffs is always zero-padded to
        the configured order + 1. A frame that breaks down at order 1
        (silence) gives the identity filter [1, 0, ..., 0].
        """
        cfg = self.config
        order = cfg.lpc_order
        while True:
            try:
                a = lpc_analyze(frame, order=order, preemphasis=cfg.preemphasis)
                break
            except NumericalBreakdown as exc:
                # The fit up to exc.order - 1 is still exact
                order = exc.order - 1
                logger.warning(
                    f"LPC breakdown at order {exc.order} (energy {exc.energy:.3e}), "
                    f"falling back to order {order}"
                )
                if order < 1:
                    a = np.array([1.0])
                    order = 0
                    break

        coeffs = np.zeros(cfg.lpc_order + 1)
        coeffs[:len(a)] = a
        return coeffs, order

    def analyze(self, signal: np.ndarray) -> AnalysisResult:
        """Analyze a whole signal frame by frame."""
        cfg = self.config
        x = np.asarray(signal, dtype=np.float64)
        if len(x) == 0:
            raise EmptyInput("signal")

        frames = AudioProcessor.frame(x, cfg.frame_length, cfg.hop_length)
        logger.info(f"Analyzing {len(frames)} frames of {cfg.frame_length} samples")

        lpc = np.zeros((len(frames), cfg.lpc_order + 1))
        orders = np.zeros(len(frames), dtype=np.int64)
        pitch = np.zeros(len(frames))
        for i, frame in enumerate(frames):
            lpc[i], orders[i] = self.frame_lpc(frame)
            pitch[i] = detect_pitch(frame, cfg.sample_rate, cfg.min_freq, cfg.max_freq)

        cepstra = cepstrum(frames, n_ceps=cfg.n_ceps)

        vq = VectorQuantizer(
            n_clusters=cfg.codebook_size,
            max_iter=cfg.max_iter,
            tol=cfg.tol,
            random_state=cfg.seed,
            device=cfg.device
        ).fit(cepstra)
        indices = vq.predict(cepstra)
        logger.info(f"Codebook trained in {vq.n_iter_} iterations")

        coded = reduce_and_restore_bitrate(x, cfg.bitrate_factor)
        coding_snr = snr_db(x, coded)
        logger.info(f"Bitrate reduction x{cfg.bitrate_factor}: SNR {coding_snr:.2f} dB")

        return AnalysisResult(
            lpc=lpc,
            lpc_orders=orders,
            pitch=pitch,
            cepstra=cepstra,
            codebook=vq.codebook,
            indices=indices,
            coded_signal=coded,
            coding_snr_db=coding_snr,
        )

    @staticmethod
    def synthesize_from_lpc(
        coeffs: np.ndarray,
        n_samples: int = 512,
        gain: float = 1.0,
        seed: Optional[int] = None
    ) -> np.ndarray:
        """Filter uniform white noise through the all-pole LPC filter."""
        excitation = white_noise(n_samples, seed=seed)
        return iir_synthesize(excitation, coeffs, gain)

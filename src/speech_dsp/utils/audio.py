"""
Audio processing utilities.

Framing and level helpers used ahead of the per-frame analysis in
dsp_core.
"""

import numpy as np
import torch
from typing import Union

from ..errors import EmptyInput


class AudioProcessor:
    """
    Waveform helpers working on numpy arrays (and torch tensors where noted).
    """

    @staticmethod
    def normalize(
        waveform: Union[np.ndarray, torch.Tensor],
        method: str = 'peak'
    ) -> Union[np.ndarray, torch.Tensor]:
        """
        Normalize audio waveform.

        Args:
            waveform: Input waveform
            method: Normalization method ('peak', 'rms')

        Returns:
            Normalized waveform (silent input is returned unchanged)
        """
        is_torch = isinstance(waveform, torch.Tensor)

        if method == 'peak':
            if is_torch:
                max_val = torch.abs(waveform).max()
            else:
                max_val = np.abs(waveform).max()
            if max_val > 0:
                waveform = waveform / max_val

        elif method == 'rms':
            if is_torch:
                rms = torch.sqrt(torch.mean(waveform ** 2))
            else:
                rms = np.sqrt(np.mean(waveform ** 2))
            if rms > 0:
                waveform = waveform / rms

        else:
            raise ValueError(f"Unknown normalization method: {method}")

        return waveform

    @staticmethod
    def frame(
        waveform: np.ndarray,
        frame_length: int,
        hop_length: int,
        pad_end: bool = True
    ) -> np.ndarray:
        """
        Slice a waveform into overlapping frames.

        Args:
            waveform: Input waveform
            frame_length: Length of each frame in samples
            hop_length: Number of samples between frame starts
            pad_end: If True, zero-pad so the tail of the signal gets a frame
                (and so a signal shorter than one frame still gives one)

        Returns:
            Framed signal of shape (num_frames, frame_length)
        """
        waveform = np.asarray(waveform, dtype=np.float64)
        if waveform.ndim != 1:
            raise ValueError(f"Input must be 1D, got shape {waveform.shape}")
        if len(waveform) == 0:
            raise EmptyInput("signal")
        if frame_length < 1 or hop_length < 1:
            raise ValueError("frame_length and hop_length must be positive")

        num_samples = len(waveform)
        if pad_end:
            num_frames = 1 + max(0, int(np.ceil((num_samples - frame_length) / hop_length)))
            total = (num_frames - 1) * hop_length + frame_length
            waveform = np.pad(waveform, (0, total - num_samples), mode='constant')
        else:
            if num_samples < frame_length:
                raise ValueError(
                    f"Signal of length {num_samples} is shorter than one frame ({frame_length})"
                )
            num_frames = 1 + (num_samples - frame_length) // hop_length

        indices = np.arange(frame_length)[None, :] + \
                  np.arange(num_frames)[:, None] * hop_length
        return waveform[indices]

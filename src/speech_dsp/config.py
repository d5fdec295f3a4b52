"""
Analysis configuration loaded from YAML.

Layout of the YAML file (every key optional):

    seed: 42
    device: cpu
    signal:       {sample_rate, frequency, amplitude, duration}
    framing:      {frame_length, hop_length}
    lpc:          {order, preemphasis}
    cepstrum:     {n_ceps}
    pitch:        {min_freq, max_freq}
    quantization: {codebook_size, max_iter, tol}
    coding:       {bitrate_factor}
"""

from dataclasses import dataclass, asdict, fields
from typing import Dict, Optional

import yaml

from .dsp_core.pitch import lag_window
from .errors import InvalidRange

_SECTIONS = {
    'signal': ('sample_rate', 'frequency', 'amplitude', 'duration'),
    'framing': ('frame_length', 'hop_length'),
    'lpc': ('lpc_order', 'preemphasis'),
    'cepstrum': ('n_ceps',),
    'pitch': ('min_freq', 'max_freq'),
    'quantization': ('codebook_size', 'max_iter', 'tol'),
    'coding': ('bitrate_factor',),
}

# YAML key -> field name where they differ
_ALIASES = {('lpc', 'order'): 'lpc_order'}


@dataclass
class AnalysisConfig:
    """Parameters for a frame-by-frame speech analysis run."""
    sample_rate: int = 16000
    frequency: float = 150.0
    amplitude: float = 1.0
    duration: float = 0.5
    frame_length: int = 512
    hop_length: int = 256
    lpc_order: int = 12
    preemphasis: float = 0.97
    n_ceps: int = 13
    min_freq: float = 80.0
    max_freq: float = 300.0
    codebook_size: int = 16
    max_iter: int = 100
    tol: float = 1e-4
    bitrate_factor: float = 2.0
    seed: Optional[int] = 42
    device: str = 'cpu'

    def validate(self) -> 'AnalysisConfig':
        n = self.frame_length
        if n < 1 or n & (n - 1) != 0:
            raise ValueError(f"frame_length must be a power of two, got {n}")
        if self.hop_length < 1:
            raise ValueError(f"hop_length must be positive, got {self.hop_length}")
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if not 1 <= self.lpc_order < self.frame_length:
            raise ValueError(f"lpc_order must be in [1, frame_length), got {self.lpc_order}")
        if not 1 <= self.n_ceps <= self.frame_length:
            raise ValueError(f"n_ceps must be in [1, frame_length], got {self.n_ceps}")
        if not 0 < self.min_freq < self.max_freq:
            raise ValueError(f"Need 0 < min_freq < max_freq, got {self.min_freq}, {self.max_freq}")
        if self.max_freq >= self.sample_rate:
            raise ValueError(
                f"max_freq must be below sample_rate, got {self.max_freq} >= {self.sample_rate}"
            )
        # Same lag window detect_pitch will search in every frame
        try:
            lag_window(self.sample_rate, self.min_freq, self.max_freq, self.frame_length)
        except InvalidRange as exc:
            raise ValueError(
                f"Pitch range {self.min_freq}-{self.max_freq} Hz at {self.sample_rate} Hz "
                f"gives lag window [{exc.min_lag}, {exc.max_lag}), which does not fit "
                f"{self.frame_length}-sample frames"
            ) from exc
        if self.codebook_size < 1:
            raise ValueError(f"codebook_size must be >= 1, got {self.codebook_size}")
        if self.bitrate_factor <= 0:
            raise ValueError(f"bitrate_factor must be positive, got {self.bitrate_factor}")
        return self

    @classmethod
    def from_dict(cls, config: Dict) -> 'AnalysisConfig':
        """Build from the nested YAML layout (flat keys are accepted too)."""
        config = config or {}
        known = {f.name for f in fields(cls)}
        values = {}

        for key, value in config.items():
            if key in _SECTIONS and isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    name = _ALIASES.get((key, sub_key), sub_key)
                    if name not in _SECTIONS[key]:
                        raise ValueError(f"Unknown config key: {key}.{sub_key}")
                    values[name] = sub_value
            elif key in known:
                values[key] = value
            else:
                raise ValueError(f"Unknown config key: {key}")

        return cls(**values).validate()

    def to_dict(self) -> Dict:
        return asdict(self)


def load_config(config_path: str) -> AnalysisConfig:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return AnalysisConfig.from_dict(yaml.safe_load(f))

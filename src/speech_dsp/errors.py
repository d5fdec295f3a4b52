"""
Exception types raised by the speech_dsp library.

All of them derive from ValueError so callers that already guard numpy
style argument errors keep working.
"""

from typing import Optional


class DSPError(ValueError):
    """Base class for all speech_dsp errors."""


class InvalidLength(DSPError):
    """A transform was called with a zero or non-power-of-two length."""

    def __init__(self, length: int, message: Optional[str] = None):
        self.length = length
        if message is None:
            message = f"Transform length must be a power of two >= 1, got {length}"
        super().__init__(message)


class InvalidRange(DSPError):
    """The pitch lag window is empty, non-positive, or longer than the signal."""

    def __init__(self, min_lag: int, max_lag: int, length: int):
        self.min_lag = min_lag
        self.max_lag = max_lag
        self.length = length
        super().__init__(
            f"Invalid lag window [{min_lag}, {max_lag}) for signal of length {length}"
        )


class NumericalBreakdown(DSPError):
    """Levinson-Durbin hit a zero or negative prediction-error energy."""

    def __init__(self, order: int, energy: float):
        self.order = order
        self.energy = energy
        super().__init__(
            f"Prediction error energy {energy!r} is not usable at order {order}"
        )


class DimensionMismatch(DSPError):
    """Feature vectors of different dimensionality were mixed."""

    def __init__(self, expected: int, got: int):
        self.expected = expected
        self.got = got
        super().__init__(f"Expected feature dimension {expected}, got {got}")


class EmptyInput(DSPError):
    """A zero-length signal or an empty feature set was passed in."""

    def __init__(self, what: str = "input"):
        super().__init__(f"Empty {what}")

"""
Unit Tests for DSP Core Module

This test suite validates the hand-written FFT, autocorrelation, linear
prediction, resampling, cepstrum and pitch detection against standard
libraries (scipy, librosa) and against known signals.

Run:
    pytest tests/test_dsp_core.py -v
"""

import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import pytest
from scipy.fft import fft as scipy_fft
from scipy.linalg import solve_toeplitz
from scipy.signal import lfilter
import librosa

from speech_dsp.dsp_core import (
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
from speech_dsp.errors import EmptyInput, InvalidLength, InvalidRange, NumericalBreakdown


class TestComplex:
    """Test suite for the Complex value type."""

    def test_arithmetic(self):
        a = Complex(1.0, 2.0)
        b = Complex(3.0, -1.0)
        assert complex(a + b) == complex(1, 2) + complex(3, -1)
        assert complex(a - b) == complex(1, 2) - complex(3, -1)
        assert complex(a * b) == complex(1, 2) * complex(3, -1)
        assert a.conjugate() == Complex(1.0, -2.0)

    def test_cexp(self):
        z = Complex(0.5, np.pi / 3).cexp()
        expected = np.exp(0.5 + 1j * np.pi / 3)
        assert abs(complex(z) - expected) < 1e-12


class TestFFT:
    """Test suite for FFT implementation."""

    def test_fft_random_signal(self):
        """Test FFT on random signal."""
        x = np.random.randn(1024)
        X_ours = fft(x)
        X_scipy = scipy_fft(x)
        error = np.abs(X_ours - X_scipy)

        print(f"\n[FFT Random Signal]")
        print(f"  Max error: {error.max():.2e}")

        assert error.max() < 1e-10, f"FFT error too large: {error.max()}"

    def test_fft_power_of_2(self):
        """Test FFT on power-of-2 lengths, including the trivial ones."""
        for N in [1, 2, 4, 64, 128, 256, 512, 1024]:
            x = np.random.randn(N) + 1j * np.random.randn(N)
            error = np.abs(fft(x) - scipy_fft(x))
            assert error.max() < 1e-10, f"FFT failed for N={N}"

    def test_fft_rejects_bad_lengths(self):
        for N in [0, 3, 100, 1000]:
            with pytest.raises(InvalidLength):
                fft(np.zeros(N))
        with pytest.raises(InvalidLength):
            ifft(np.zeros(12))

    def test_fft_matches_recursive(self):
        """Iterative and recursive transforms agree."""
        x = np.random.randn(64) + 1j * np.random.randn(64)
        error = np.abs(fft(x) - fft_recursive(x))
        assert error.max() < 1e-10
        with pytest.raises(InvalidLength):
            fft_recursive([1.0, 2.0, 3.0])

    def test_fft_sine_wave(self):
        """A sine with an integer number of cycles lands in a single bin pair."""
        N = 256
        x = np.sin(2 * np.pi * 10 * np.arange(N) / N)
        magnitude = np.abs(fft(x))
        assert np.argmax(magnitude[:N // 2]) == 10
        assert magnitude[10] == pytest.approx(N / 2)

    def test_ifft_round_trip(self):
        for N in [8, 256, 4096]:
            x = np.random.randn(N) + 1j * np.random.randn(N)
            y = ifft(fft(x))
            assert np.abs(y - x).max() < 1e-9 * np.abs(x).max()

    def test_round_trip_large(self):
        """N = 2**20 runs without recursion limits."""
        x = np.random.randn(2 ** 20)
        y = ifft(fft(x))
        error = np.abs(y - x).max()
        print(f"\n[FFT 2^20 round trip] Max error: {error:.2e}")
        assert error < 1e-9 * np.abs(x).max()

    def test_input_preserved(self):
        x = np.random.randn(32) + 1j * np.random.randn(32)
        x_copy = x.copy()
        fft(x)
        ifft(x)
        assert np.array_equal(x, x_copy)

    def test_fft_rows(self):
        frames = np.random.randn(5, 128)
        X = fft(frames)
        assert X.shape == (5, 128)
        assert np.abs(X - scipy_fft(frames, axis=-1)).max() < 1e-10


class TestAutocorrelation:

    def test_matches_librosa(self):
        x = np.random.randn(400)
        ac_ours = autocorrelate(x)
        ac_librosa = librosa.autocorrelate(x)

        error = np.abs(ac_ours - ac_librosa).max()
        print(f"\n[Autocorrelation] Max error: {error:.2e}")

        assert len(ac_ours) == len(x)
        assert error < 1e-9 * ac_ours[0]

    def test_lag_zero_is_energy(self):
        x = np.array([1.0, -2.0, 3.0])
        ac = autocorrelate(x)
        assert np.allclose(ac, [14.0, -8.0, 3.0])

    def test_empty(self):
        with pytest.raises(EmptyInput):
            autocorrelate([])


class TestLinearPrediction:

    def test_levinson_matches_toeplitz_solve(self):
        x = np.random.randn(512)
        order = 10
        R = autocorrelate(x)[:order + 1]
        a, e = levinson_durbin(R, order)

        expected = solve_toeplitz((R[:order], R[:order]), -R[1:order + 1])
        error = np.abs(a[1:] - expected).max()
        print(f"\n[Levinson-Durbin] Max error vs solve_toeplitz: {error:.2e}")

        assert a[0] == 1.0
        assert e[0] == R[0]
        assert error < 1e-8

    def test_error_energy_non_increasing(self):
        for _ in range(5):
            x = np.random.randn(256)
            _, e = levinson_durbin(autocorrelate(x), 16)
            assert np.all(e >= 0)
            assert np.all(np.diff(e) <= 1e-12 * e[0])

    def test_breakdown_on_silence(self):
        with pytest.raises(NumericalBreakdown) as exc_info:
            levinson_durbin(np.zeros(5), 4)
        assert exc_info.value.order == 1
        assert exc_info.value.energy == 0.0

    def test_breakdown_reports_order(self):
        # Perfectly predictable at order 1, so order 2 cannot be reached
        with pytest.raises(NumericalBreakdown) as exc_info:
            levinson_durbin(np.array([1.0, 1.0, 1.0]), 2)
        assert exc_info.value.order == 2
        assert exc_info.value.energy == 0.0

    def test_breakdown_on_negative_energy(self):
        # Not a valid autocorrelation: |R[1]| > R[0]
        with pytest.raises(NumericalBreakdown) as exc_info:
            levinson_durbin(np.array([1.0, 2.0, 0.0]), 2)
        assert exc_info.value.order == 1
        assert exc_info.value.energy == pytest.approx(-3.0)

    def test_levinson_argument_checks(self):
        with pytest.raises(ValueError):
            levinson_durbin(np.ones(3), 5)
        with pytest.raises(ValueError):
            levinson_durbin(np.ones(3), 0)
        with pytest.raises(EmptyInput):
            levinson_durbin([], 2)

    def test_preemphasis(self):
        x = np.array([1.0, 2.0, 3.0])
        assert np.allclose(preemphasize(x, 0.5), [1.0, 1.5, 2.0])
        y = preemphasize(x, 0.0)
        assert np.array_equal(y, x) and y is not x

    def test_lpc_pole_at_sine_frequency(self):
        """The order-2 predictor of a sine resonates at the sine frequency."""
        fs, f = 8000, 500.0
        x = sine_wave(frequency=f, duration=1024 / fs, fs=fs)
        a = lpc_analyze(x, order=2, preemphasis=0.0)

        poles = np.roots(a)
        pole_freq = np.abs(np.angle(poles[0])) * fs / (2 * np.pi)
        print(f"\n[LPC sine] pole at {pole_freq:.1f} Hz, |p| = {np.abs(poles[0]):.4f}")

        assert pole_freq == pytest.approx(f, rel=0.02)

    def test_lpc_spectral_peak(self):
        fs, f = 16000, 1000.0
        rng = np.random.default_rng(0)
        x = sine_wave(frequency=f, duration=0.064, fs=fs) + 0.01 * rng.standard_normal(1024)
        a = lpc_analyze(x, order=8, preemphasis=0.0)

        n_fft = 4096
        padded = np.zeros(n_fft)
        padded[:len(a)] = a
        envelope = 1.0 / np.abs(fft(padded)[:n_fft // 2])
        peak_freq = np.argmax(envelope) * fs / n_fft

        assert peak_freq == pytest.approx(f, rel=0.05)

    def test_lpc_recovers_ar_process(self):
        coeffs = np.array([1.0, -1.6, 0.98])
        x = iir_synthesize(white_noise(8192, seed=1), coeffs)
        a = lpc_analyze(x, order=2, preemphasis=0.0)
        assert np.allclose(a, coeffs, atol=0.05)

    def test_lpc_short_or_empty_signal(self):
        with pytest.raises(ValueError):
            lpc_analyze(np.ones(5), order=12)
        with pytest.raises(EmptyInput):
            lpc_analyze([], order=2)

    def test_iir_matches_lfilter(self):
        x = np.random.randn(512)
        coeffs = np.array([1.0, -1.6, 0.98])
        y_ours = iir_synthesize(x, coeffs, gain=0.5)
        y_scipy = lfilter([0.5], coeffs, x)

        error = np.abs(y_ours - y_scipy).max()
        print(f"\n[IIR] Max error vs lfilter: {error:.2e}")
        assert error < 1e-10

    def test_iir_order_zero(self):
        x = np.random.randn(16)
        assert np.allclose(iir_synthesize(x, [1.0], gain=2.0), 2.0 * x)

    def test_iir_impulse_response(self):
        impulse = np.zeros(4)
        impulse[0] = 1.0
        # y[i] = x[i] + 0.5 y[i-1]
        assert np.allclose(iir_synthesize(impulse, [1.0, -0.5]), [1.0, 0.5, 0.25, 0.125])

    def test_iir_empty(self):
        with pytest.raises(EmptyInput):
            iir_synthesize([], [1.0, 0.5])


class TestResample:

    def test_output_length(self):
        x = np.random.randn(1000)
        assert len(resample(x, 16000, 8000)) == 500
        assert len(resample(x, 16000, 48000)) == 3000
        assert len(resample(x, 3, 1)) == 334

    def test_integer_decimation_picks_samples(self):
        x = np.random.randn(64)
        assert np.allclose(resample(x, 2, 1), x[::2])

    def test_upsample_interpolates(self):
        x = np.array([0.0, 2.0, 4.0])
        # Last position has no right neighbour and holds the last sample
        assert np.allclose(resample(x, 1, 2), [0.0, 1.0, 2.0, 3.0, 4.0, 4.0])

    def test_round_trip_energy(self):
        fs = 16000
        x = sine_wave(frequency=200, duration=0.064, fs=fs)
        y = resample(resample(x, fs, fs / 2), fs / 2, fs)

        assert len(y) == len(x)
        energy_ratio = np.sum(y ** 2) / np.sum(x ** 2)
        print(f"\n[Resample round trip] energy ratio {energy_ratio:.4f}")
        assert abs(energy_ratio - 1.0) < 0.1

    def test_reduce_and_restore(self):
        x = sine_wave(frequency=100, duration=1000 / 16000, fs=16000)
        for factor in [2, 3, 4]:
            y = reduce_and_restore_bitrate(x, factor)
            assert len(y) == len(x)
            # Lossy, but close for a slow sine; the last few samples are held
            assert np.abs(y - x)[:-factor].max() < 0.05

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            resample(np.ones(4), 0, 8000)
        with pytest.raises(EmptyInput):
            resample([], 16000, 8000)
        with pytest.raises(EmptyInput):
            reduce_and_restore_bitrate([], 2)


class TestCepstrum:

    def test_matches_numpy_reference(self):
        x = np.random.randn(512)
        expected = np.fft.ifft(np.log(np.abs(np.fft.fft(x)) ** 2 + 1e-10) / 2).real[:13]
        error = np.abs(cepstrum(x, 13) - expected).max()
        print(f"\n[Cepstrum] Max error: {error:.2e}")
        assert error < 1e-9

    def test_frames(self):
        frames = np.random.randn(4, 256)
        ceps = cepstrum(frames, n_ceps=20)
        assert ceps.shape == (4, 20)
        for i in range(4):
            assert np.allclose(ceps[i], cepstrum(frames[i], n_ceps=20))

    def test_silence_is_finite(self):
        ceps = cepstrum(np.zeros(64), 8)
        assert np.all(np.isfinite(ceps))
        assert ceps[0] == pytest.approx(np.log(1e-10) / 2)

    def test_invalid_input(self):
        with pytest.raises(InvalidLength):
            cepstrum(np.random.randn(100))
        with pytest.raises(EmptyInput):
            cepstrum([])


class TestPitch:

    def test_sine_150hz(self):
        fs = 16000
        x = sine_wave(frequency=150, duration=2048 / fs, fs=fs)
        f0 = detect_pitch(x, fs=fs, min_freq=80, max_freq=300)
        print(f"\n[Pitch] detected {f0:.2f} Hz")
        assert abs(f0 - 150) <= 2

    @pytest.mark.parametrize("freq", [100, 220, 280])
    def test_sine_frequencies(self, freq):
        fs = 16000
        x = sine_wave(frequency=freq, duration=0.128, fs=fs)
        assert detect_pitch(x, fs=fs) == pytest.approx(freq, rel=0.02)

    def test_silence_is_unvoiced(self):
        assert detect_pitch(np.zeros(1024)) == 0.0

    def test_noise_is_unvoiced(self):
        assert detect_pitch(white_noise(2048, seed=3)) == 0.0

    def test_invalid_range(self):
        x = np.random.randn(100)
        # Window ends at lag 200, past the signal
        with pytest.raises(InvalidRange):
            detect_pitch(x, fs=16000, min_freq=80, max_freq=300)
        # Empty window
        with pytest.raises(InvalidRange):
            detect_pitch(np.random.randn(1024), fs=16000, min_freq=300, max_freq=80)
        # Window starting at lag 0
        with pytest.raises(InvalidRange):
            detect_pitch(np.random.randn(1024), fs=16000, min_freq=80, max_freq=20000)

    def test_empty(self):
        with pytest.raises(EmptyInput):
            detect_pitch([])

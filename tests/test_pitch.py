"""Tests for spectrum reduction and peak-bin pitch detection."""

import numpy as np
import pytest

from whistlybird.pitch import PitchDetector, byte_spectrum
from whistlybird.settings import Settings

RATE = 44100.0
FFT = 4096
# Spacing the detector assumes, half the real spacing of an FFT-sized window
BIN_HZ = RATE / (FFT * 2)
WINDOW_BIN_HZ = RATE / FFT


class FakeSource:
    sample_rate = RATE

    def __init__(self, *frames):
        self._frames = list(frames)

    def spectrum(self):
        return self._frames.pop(0) if self._frames else None


def _peak(index, magnitude):
    data = np.full(FFT // 2, 10, dtype=np.uint8)
    data[index] = magnitude
    return data


def test_bin_index_to_hz():
    detector = PitchDetector(FakeSource(), fft_size=FFT)
    assert detector.bin_to_hz(82) == pytest.approx(82 * BIN_HZ)


def test_loud_in_range_peak_is_accepted():
    detector = PitchDetector(FakeSource(_peak(100, 200)), fft_size=FFT)
    assert detector.sample() == pytest.approx(100 * BIN_HZ)
    assert detector.current_frequency == pytest.approx(100 * BIN_HZ)


def test_weak_peak_decays_last_frequency():
    detector = PitchDetector(FakeSource(_peak(100, 200), _peak(100, 80)), fft_size=FFT)
    first = detector.sample()
    # Magnitude must exceed the noise floor, not just reach it
    assert detector.sample() == pytest.approx(first * 0.95)


def test_out_of_range_peak_decays():
    detector = PitchDetector(FakeSource(_peak(100, 200), _peak(10, 255)), fft_size=FFT)
    first = detector.sample()
    assert detector.sample() == pytest.approx(first * 0.95)


def test_missing_spectrum_keeps_decaying_toward_zero():
    detector = PitchDetector(FakeSource(_peak(100, 200)), fft_size=FFT)
    first = detector.sample()
    values = [detector.sample() for _ in range(3)]
    assert values == pytest.approx([first * 0.95, first * 0.95 ** 2, first * 0.95 ** 3])


def test_no_source_means_no_signal():
    detector = PitchDetector(None)
    assert detector.sample() == 0.0


def test_configure_changes_accepted_range():
    detector = PitchDetector(FakeSource(_peak(100, 200)), fft_size=FFT)
    detector.configure(Settings(min_freq=600.0, max_freq=900.0))
    assert detector.sample() == 0.0


def test_byte_spectrum_peaks_at_tone_bin():
    t = np.arange(FFT) / RATE
    # Quiet enough that the main lobe stays below the top of the dB range
    samples = 0.05 * np.sin(2 * np.pi * 100 * WINDOW_BIN_HZ * t)
    data, magnitudes = byte_spectrum(samples)
    assert data.dtype == np.uint8
    assert len(data) == FFT // 2
    assert int(np.argmax(data)) == 100
    assert data[100] > 200
    assert magnitudes.shape == (FFT // 2,)


def test_whistle_reads_an_octave_low():
    t = np.arange(FFT) / RATE
    data, _ = byte_spectrum(0.05 * np.sin(2 * np.pi * 1000.0 * t))
    detector = PitchDetector(FakeSource(data), fft_size=FFT)
    frequency = detector.sample()
    assert frequency == pytest.approx(500.0, abs=BIN_HZ)
    assert 440.0 <= frequency <= 830.61


def test_byte_spectrum_of_silence_is_zero():
    data, _ = byte_spectrum(np.zeros(FFT))
    assert not data.any()


def test_byte_spectrum_smooths_over_time():
    n = FFT
    t = np.arange(n) / RATE
    tone = 0.5 * np.sin(2 * np.pi * 100 * WINDOW_BIN_HZ * t)
    _, loud = byte_spectrum(tone)
    _, smoothed = byte_spectrum(np.zeros(n), previous=loud)
    assert smoothed[100] == pytest.approx(0.8 * loud[100])

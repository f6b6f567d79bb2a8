"""Tests for microphone capture against a fake input stream."""

import numpy as np
import pytest

try:
    import sounddevice as sd
except OSError:
    pytest.skip("PortAudio library not available", allow_module_level=True)

from whistlybird.microphone import MicrophoneError, MicrophoneInput
from whistlybird.pitch import PitchDetector

RATE = 44100.0
FFT = 4096
BLOCK = 1024


class FakeStream:
    def __init__(self, **kwargs):
        self.samplerate = kwargs["samplerate"]
        self.callback = kwargs["callback"]
        self.started = False
        self.closed = False

    def start(self):
        self.started = True

    def stop(self):
        self.started = False

    def close(self):
        self.closed = True


class BrokenStream:
    def __init__(self, **kwargs):
        raise sd.PortAudioError("Error querying device -1")


@pytest.fixture
def mic(monkeypatch):
    monkeypatch.setattr(sd, "InputStream", FakeStream)
    return MicrophoneInput(sample_rate=RATE, fft_size=FFT, blocksize=BLOCK)


def _feed(mic, samples):
    for start in range(0, len(samples), BLOCK):
        block = samples[start:start + BLOCK].astype(np.float32).reshape(-1, 1)
        mic._callback(block, len(block), None, None)


def test_no_spectrum_before_open(mic):
    assert not mic.is_open
    assert mic.spectrum() is None


def test_partial_window_gives_no_spectrum(mic):
    mic.open()
    _feed(mic, np.zeros(FFT - BLOCK))
    assert mic.spectrum() is None


def test_full_window_gives_byte_spectrum(mic):
    mic.open()
    _feed(mic, np.zeros(FFT))
    data = mic.spectrum()
    assert data is not None
    assert data.dtype == np.uint8
    assert len(data) == FFT // 2


def test_no_spectrum_after_close(mic):
    mic.open()
    stream = mic._stream
    _feed(mic, np.zeros(FFT))
    mic.close()
    assert stream.closed
    assert not mic.is_open
    assert mic.spectrum() is None


def test_device_failure_raises_microphone_error(monkeypatch):
    monkeypatch.setattr(sd, "InputStream", BrokenStream)
    mic = MicrophoneInput(sample_rate=RATE, fft_size=FFT, blocksize=BLOCK)
    with pytest.raises(MicrophoneError):
        mic.open()
    assert mic.spectrum() is None


def test_physical_whistle_steers_inside_the_note_band(mic):
    mic.open()
    t = np.arange(FFT) / RATE
    _feed(mic, 0.05 * np.sin(2 * np.pi * 1000.0 * t))
    detector = PitchDetector(mic, fft_size=FFT)
    assert detector.sample() == pytest.approx(500.0, abs=RATE / (FFT * 2))

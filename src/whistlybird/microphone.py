"""Real-time microphone capture via sounddevice."""

from __future__ import annotations

import logging
import threading
from collections import deque

import numpy as np
import numpy.typing as npt
import sounddevice as sd

from whistlybird.config import FFT_SIZE, SAMPLE_RATE
from whistlybird.pitch import byte_spectrum

logger = logging.getLogger(__name__)


class MicrophoneError(Exception):
    """Raised when no input device is available or access fails."""


class MicrophoneInput:
    """Captures mono audio and serves Web-Audio-style byte spectra.

    The stream callback runs on PortAudio's thread and only appends blocks to a
    bounded deque. ``spectrum()`` is polled from the game loop and never blocks;
    it returns None until the device is open and a full window has arrived.

    The window is ``fft_size`` samples, giving ``fft_size // 2`` bins that are
    ``sample_rate / fft_size`` apart. The detector reads them at half that
    spacing, so a whistle reports an octave below its physical pitch.
    """

    def __init__(
        self,
        device: int | None = None,
        sample_rate: float = SAMPLE_RATE,
        fft_size: int = FFT_SIZE,
        blocksize: int = 1024,
    ) -> None:
        self.device = device
        self.sample_rate = float(sample_rate)
        self.fft_size = fft_size
        self.blocksize = blocksize
        self._window = fft_size
        self._lock = threading.Lock()
        self._blocks: deque[npt.NDArray[np.float32]] = deque(
            maxlen=self._window // blocksize + 1
        )
        self._smoothed: npt.NDArray[np.floating] | None = None
        self._stream: sd.InputStream | None = None

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    @staticmethod
    def list_devices() -> list[tuple[int, str]]:
        """(index, name) of every device with at least one input channel."""
        return [
            (i, d["name"]) for i, d in enumerate(sd.query_devices()) if d["max_input_channels"] > 0
        ]

    def open(self) -> None:
        """Acquire the input device. Must succeed before spectra are produced."""
        if self._stream is not None:
            return
        logger.info("Requesting microphone access...")
        try:
            stream = sd.InputStream(
                device=self.device,
                channels=1,
                samplerate=self.sample_rate,
                blocksize=self.blocksize,
                dtype="float32",
                callback=self._callback,
                latency="low",
            )
            stream.start()
        except (sd.PortAudioError, ValueError) as exc:
            raise MicrophoneError(f"Microphone error: {exc}") from exc

        self._stream = stream
        self.sample_rate = float(stream.samplerate)
        logger.info("Microphone access granted, sample rate: %.0f Hz", self.sample_rate)

    def _callback(self, indata, frames, time_info, status) -> None:
        if status:
            logger.warning("Input stream status: %s", status)
        block = indata[:, 0].copy()
        with self._lock:
            self._blocks.append(block)

    def spectrum(self) -> npt.NDArray[np.uint8] | None:
        """Latest byte spectrum, or None if the device is not ready yet."""
        if self._stream is None:
            return None
        with self._lock:
            blocks = list(self._blocks)
        if not blocks:
            return None
        samples = np.concatenate(blocks)
        if len(samples) < self._window:
            return None
        data, self._smoothed = byte_spectrum(samples[-self._window:], self._smoothed)
        return data

    def close(self) -> None:
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
            logger.info("Microphone closed")
        with self._lock:
            self._blocks.clear()
        self._smoothed = None

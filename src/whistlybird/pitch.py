"""Peak-bin pitch detection from a magnitude spectrum."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

from whistlybird.config import (
    FFT_SIZE,
    FREQUENCY_DECAY,
    NOISE_FLOOR,
    SAMPLE_RATE,
    SPECTRUM_MAX_DB,
    SPECTRUM_MIN_DB,
    SPECTRUM_SMOOTHING,
)
from whistlybird.settings import Settings


@runtime_checkable
class SpectrumSource(Protocol):
    """Anything that can hand out the latest byte-scaled magnitude spectrum."""

    sample_rate: float

    def spectrum(self) -> npt.NDArray[np.uint8] | None: ...


def byte_spectrum(
    samples: npt.NDArray[np.floating],
    previous: npt.NDArray[np.floating] | None = None,
    smoothing: float = SPECTRUM_SMOOTHING,
    min_db: float = SPECTRUM_MIN_DB,
    max_db: float = SPECTRUM_MAX_DB,
) -> tuple[npt.NDArray[np.uint8], npt.NDArray[np.floating]]:
    """Turn a window of samples into a 0-255 magnitude spectrum.

    Blackman-windowed FFT, magnitudes smoothed over time with ``previous``, then
    mapped from the [min_db, max_db] decibel range onto bytes. Returns
    ``len(samples) // 2`` bins plus the smoothed linear magnitudes to feed back in
    as ``previous`` on the next call.
    """
    n = len(samples)
    windowed = samples * np.blackman(n)
    magnitudes = np.abs(np.fft.rfft(windowed))[: n // 2] / n

    if previous is not None and previous.shape == magnitudes.shape:
        magnitudes = smoothing * previous + (1.0 - smoothing) * magnitudes

    with np.errstate(divide="ignore"):
        db = 20.0 * np.log10(magnitudes)
    scaled = (db - min_db) * (255.0 / (max_db - min_db))
    return np.clip(np.nan_to_num(scaled, neginf=0.0), 0, 255).astype(np.uint8), magnitudes


class PitchDetector:
    """Reduces each spectrum snapshot to one dominant frequency, with decay.

    A peak is accepted when it lies inside the configured range and is louder
    than the noise floor. Otherwise the last confident frequency decays by 5%
    per sample, so the bird eases down instead of dropping on a missed frame.
    """

    def __init__(
        self,
        source: SpectrumSource | None = None,
        fft_size: int = FFT_SIZE,
        noise_floor: int = NOISE_FLOOR,
        settings: Settings | None = None,
    ) -> None:
        self.source = source
        self.fft_size = fft_size
        self.noise_floor = noise_floor
        self.current_frequency = 0.0
        self.min_freq = 0.0
        self.max_freq = 0.0
        self.configure(settings or Settings())

    def configure(self, settings: Settings) -> None:
        self.min_freq = settings.min_freq
        self.max_freq = settings.max_freq

    @property
    def sample_rate(self) -> float:
        return self.source.sample_rate if self.source is not None else SAMPLE_RATE

    def bin_to_hz(self, index: int) -> float:
        return index * self.sample_rate / (self.fft_size * 2)

    def sample(self) -> float:
        """Read one spectrum snapshot and return the frequency estimate in Hz."""
        data = self.source.spectrum() if self.source is not None else None
        if data is None or len(data) == 0:
            return self._decay()

        peak_index = int(np.argmax(data))
        peak_value = int(data[peak_index])
        frequency = self.bin_to_hz(peak_index)

        if self.min_freq <= frequency <= self.max_freq and peak_value > self.noise_floor:
            self.current_frequency = frequency
            return frequency
        return self._decay()

    def reset(self) -> None:
        self.current_frequency = 0.0

    def _decay(self) -> float:
        self.current_frequency *= FREQUENCY_DECAY
        return self.current_frequency

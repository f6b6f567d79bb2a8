"""Reward tone synthesis via numpy + pygame.mixer."""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt
import pygame

from whistlybird.config import SAMPLE_RATE, TONE_RELEASE_LEVEL, TONE_VOLUME

logger = logging.getLogger(__name__)


def synth_tone(
    frequency: float,
    duration: float,
    sample_rate: int = SAMPLE_RATE,
    volume: float = TONE_VOLUME,
    release_level: float = TONE_RELEASE_LEVEL,
) -> npt.NDArray[np.int16]:
    """Sine tone with an exponential fade from ``volume`` to ``release_level``."""
    n_samples = max(1, int(sample_rate * duration))
    t = np.arange(n_samples) / sample_rate
    envelope = volume * (release_level / volume) ** (t / duration)
    wave = np.sin(2 * np.pi * frequency * t) * envelope
    return (wave * 32767).astype(np.int16)


class ToneEngine:
    """Plays short sine tones, fire-and-forget."""

    def __init__(self, sample_rate: int = SAMPLE_RATE) -> None:
        if not pygame.mixer.get_init():
            pygame.mixer.init(frequency=sample_rate, size=-16, channels=2)
        self.sample_rate, _size, self.channels = pygame.mixer.get_init()

    def play_tone(self, frequency: float, duration: float = 0.2) -> None:
        try:
            samples = synth_tone(frequency, duration, self.sample_rate)
            if self.channels > 1:
                samples = np.repeat(samples[:, np.newaxis], self.channels, axis=1)
            pygame.sndarray.make_sound(np.ascontiguousarray(samples)).play()
            logger.debug("Playing tone: %.2f Hz for %ss", frequency, duration)
        except pygame.error as exc:
            logger.warning("Error playing tone: %s", exc)

    def stop(self) -> None:
        pygame.mixer.stop()

    def shutdown(self) -> None:
        self.stop()
        pygame.mixer.quit()

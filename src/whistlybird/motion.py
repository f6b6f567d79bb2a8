"""Bird motion: pitch-to-height mapping, smoothing, gliding and input lock."""

from __future__ import annotations

import logging
import math

from whistlybird.config import PITCH_MARGIN
from whistlybird.models import Bird

logger = logging.getLogger(__name__)


def pitch_to_y(
    frequency: float,
    min_freq: float,
    max_freq: float,
    bird_height: float,
    canvas_height: float,
) -> float:
    """Map a frequency to a bird center y on a log scale.

    ``min_freq`` lands at the bottom of the usable band and ``max_freq`` at the
    top; the band leaves a PITCH_MARGIN share of the bird's range free at each end.
    """
    normalized = (math.log(frequency) - math.log(min_freq)) / (
        math.log(max_freq) - math.log(min_freq)
    )

    bird_min_y = bird_height / 2
    bird_max_y = canvas_height - bird_height / 2
    full_range = bird_max_y - bird_min_y

    margin = full_range * PITCH_MARGIN
    usable_range = full_range - 2 * margin
    center_y = (bird_min_y + bird_max_y) / 2

    return center_y + usable_range / 2 - normalized * usable_range


class MotionController:
    """Drives a Bird from the detected pitch.

    Each frame runs in two halves: ``read_input`` latches the pitch (ignored
    while locked), then ``step`` releases an expired lock and moves the bird.
    """

    def __init__(self, min_freq: float, max_freq: float, canvas_height: float) -> None:
        self.min_freq = min_freq
        self.max_freq = max_freq
        self.canvas_height = canvas_height

    def target_for(self, bird: Bird, frequency: float) -> float:
        return pitch_to_y(frequency, self.min_freq, self.max_freq, bird.height, self.canvas_height)

    def read_input(self, bird: Bird, frequency: float) -> None:
        if bird.is_locked:
            bird.is_whistling = False
            return

        if self.min_freq <= frequency <= self.max_freq:
            bird.is_whistling = True
            bird.target_y = self.target_for(bird, frequency)
            bird.velocity = 0.0
        else:
            bird.is_whistling = False

    def step(self, bird: Bird, frame: int) -> None:
        if bird.is_locked and frame >= bird.lock_end_frame:
            bird.is_locked = False
            logger.debug("Bird unlocked at frame %d, whistle input resumed", frame)

        if bird.is_whistling:
            bird.y += (bird.target_y - bird.y) * bird.smoothing
            bird.velocity = 0.0
        else:
            bird.y += bird.glide_speed
            bird.velocity = bird.glide_speed

        self.clamp(bird)

    def clamp(self, bird: Bird) -> None:
        lo = bird.height / 2
        hi = self.canvas_height - bird.height / 2
        bird.y = max(lo, min(hi, bird.y))
        if bird.y <= lo or bird.y >= hi:
            bird.velocity = 0.0

    @staticmethod
    def lock(bird: Bird, frame: int, lock_frames: int) -> None:
        bird.is_locked = True
        bird.is_whistling = False
        bird.lock_end_frame = frame + lock_frames

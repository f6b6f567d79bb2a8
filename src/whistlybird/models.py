"""Core data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from whistlybird.config import BIRD_HEIGHT, BIRD_SMOOTHING, BIRD_WIDTH, BIRD_X, DEFAULT_GLIDE_SPEED


class BirdMode(Enum):
    WHISTLING = auto()
    GLIDING = auto()
    LOCKED = auto()


@dataclass(frozen=True)
class Note:
    """A named pitch on the note grid."""

    name: str  # e.g. "A4", "C#5"
    freq: float  # Hz

    @property
    def is_natural(self) -> bool:
        return "#" not in self.name


@dataclass
class Bird:
    """The player-controlled object. Positions are centers, in pixels."""

    y: float
    target_y: float
    x: float = BIRD_X
    width: float = BIRD_WIDTH
    height: float = BIRD_HEIGHT
    velocity: float = 0.0
    smoothing: float = BIRD_SMOOTHING
    glide_speed: float = DEFAULT_GLIDE_SPEED
    is_whistling: bool = False
    is_locked: bool = False
    lock_end_frame: int = 0

    @property
    def mode(self) -> BirdMode:
        if self.is_locked:
            return BirdMode.LOCKED
        return BirdMode.WHISTLING if self.is_whistling else BirdMode.GLIDING

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2


@dataclass
class Pipe:
    """A pair of pipes with a gap. gap_size is frozen at spawn time."""

    x: float
    gap_y: float  # top of the gap
    gap_center_y: float
    gap_size: float
    target_note: str
    target_freq: float
    passed: bool = False

    @property
    def gap_bottom(self) -> float:
        return self.gap_y + self.gap_size


@dataclass(frozen=True)
class PassEvent:
    """Emitted when the bird clears a pipe."""

    note: str
    freq: float
    frame: int

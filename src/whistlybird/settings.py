"""Game settings: immutable snapshots and the store that owns them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace

from whistlybird.config import (
    DEFAULT_DIFFICULTY,
    DEFAULT_GAP_MULTIPLIER,
    DEFAULT_GLIDE_SPEED,
    DEFAULT_MAX_FREQ,
    DEFAULT_MIN_FREQ,
    DEFAULT_PIPE_SPEED,
    DIFFICULTIES,
    GAP_MULTIPLIER_RANGE,
    GLIDE_SPEED_RANGE,
    PIPE_SPEED_RANGE,
)

logger = logging.getLogger(__name__)


class SettingsError(ValueError):
    """Raised when a setting key or value is rejected."""


@dataclass(frozen=True)
class Settings:
    """A snapshot of the tunables the core reads. Never mutated in place."""

    min_freq: float = DEFAULT_MIN_FREQ
    max_freq: float = DEFAULT_MAX_FREQ
    gap_multiplier: float = DEFAULT_GAP_MULTIPLIER
    pipe_speed: float = DEFAULT_PIPE_SPEED
    glide_speed: float = DEFAULT_GLIDE_SPEED
    difficulty: str = DEFAULT_DIFFICULTY
    pipe_spawn_interval: int = DIFFICULTIES[DEFAULT_DIFFICULTY]


_RANGES: dict[str, tuple[float, float]] = {
    "gap_multiplier": GAP_MULTIPLIER_RANGE,
    "pipe_speed": PIPE_SPEED_RANGE,
    "glide_speed": GLIDE_SPEED_RANGE,
}

_FIELD_NAMES = {f.name for f in fields(Settings)}


def _validate(settings: Settings) -> None:
    for key, (lo, hi) in _RANGES.items():
        value = getattr(settings, key)
        if not lo <= value <= hi:
            raise SettingsError(f"{key} must be between {lo} and {hi}, got {value}")
    if settings.min_freq <= 0 or settings.max_freq <= settings.min_freq:
        raise SettingsError(
            f"Invalid frequency range: {settings.min_freq} - {settings.max_freq} Hz"
        )
    if settings.pipe_spawn_interval <= 0:
        raise SettingsError(f"pipe_spawn_interval must be positive, got {settings.pipe_spawn_interval}")


class SettingsStore:
    """Single owner of the current settings snapshot.

    The UI mutates settings through this store; every change produces a fresh
    ``Settings`` value. Rejected changes leave the current snapshot untouched.
    """

    def __init__(self, initial: Settings | None = None) -> None:
        self._current = initial or Settings()
        _validate(self._current)
        logger.info("Settings initialized: %s", self._current)

    @property
    def current(self) -> Settings:
        return self._current

    def set(self, key: str, value: float | str) -> Settings:
        """Update a single numeric setting and return the new snapshot."""
        if key == "difficulty":
            return self.set_difficulty(str(value))
        if key == "pipe_spawn_interval" or key not in _FIELD_NAMES:
            logger.error("Invalid setting: %s", key)
            raise SettingsError(f"Unknown setting: {key}")

        candidate = replace(self._current, **{key: float(value)})
        try:
            _validate(candidate)
        except SettingsError as exc:
            logger.error("Rejected %s = %s: %s", key, value, exc)
            raise
        self._current = candidate
        logger.info("Setting updated: %s = %s", key, value)
        return self._current

    def set_difficulty(self, level: str) -> Settings:
        """Select a difficulty preset, which also sets the pipe spawn interval."""
        if level not in DIFFICULTIES:
            logger.error("Invalid difficulty: %s", level)
            raise SettingsError(f"Invalid difficulty: {level}")
        self._current = replace(
            self._current, difficulty=level, pipe_spawn_interval=DIFFICULTIES[level]
        )
        logger.info("Difficulty set to %s: %d frames", level, DIFFICULTIES[level])
        return self._current

    def reset(self) -> Settings:
        self._current = Settings()
        logger.info("Settings reset to defaults")
        return self._current

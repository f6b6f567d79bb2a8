"""World state — pipes, spawning, scoring and the per-frame update."""

from __future__ import annotations

import logging
import math
import random
from typing import Protocol, runtime_checkable

from whistlybird.collision import collides
from whistlybird.config import FPS, PIPE_WIDTH, TONE_DURATION, WINDOW_HEIGHT, WINDOW_WIDTH
from whistlybird.models import Bird, Note, PassEvent, Pipe
from whistlybird.motion import MotionController
from whistlybird.notes import build_grid, closest_note, natural_notes
from whistlybird.settings import Settings

logger = logging.getLogger(__name__)


@runtime_checkable
class ToneSink(Protocol):
    """Receives fire-and-forget requests to play a reward tone."""

    def play_tone(self, frequency: float, duration: float) -> None: ...


def lock_frames_for(duration: float, fps: int = FPS) -> int:
    """Frames the bird stays locked while a tone of ``duration`` seconds plays."""
    return math.ceil(duration * fps)


class World:
    """Owns the bird, the pipes and the score for one run.

    ``advance`` is called once per rendered frame. All timing is in frames, so
    the game plays the same regardless of the actual frame pacing.
    """

    def __init__(
        self,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        settings: Settings | None = None,
        tone_sink: ToneSink | None = None,
        rng: random.Random | None = None,
        pipe_width: int = PIPE_WIDTH,
        tone_duration: float = TONE_DURATION,
    ) -> None:
        self.width = width
        self.height = height
        self.pipe_width = pipe_width
        self.tone_duration = tone_duration
        self.tone_sink = tone_sink
        self._rng = rng or random.Random()

        self.is_playing = False
        self.game_over = False
        self.score = 0
        self.frame = 0
        self.frequency = 0.0

        self.bird = Bird(y=height / 2, target_y=height / 2)
        self.pipes: list[Pipe] = []
        self.pipe_spawn_timer = 0

        self.settings = settings or Settings()
        self.notes: list[Note] = []
        self.pipe_gap = 0.0
        self.pipe_speed = 0.0
        self.pipe_spawn_interval = 0
        self.motion = MotionController(self.settings.min_freq, self.settings.max_freq, height)
        self.apply_settings(self.settings)

    def apply_settings(self, settings: Settings) -> None:
        """Recompute derived values from a settings snapshot without resetting the run."""
        self.settings = settings
        self.bird.glide_speed = settings.glide_speed
        self.pipe_gap = self.bird.height * settings.gap_multiplier
        self.pipe_speed = settings.pipe_speed
        self.pipe_spawn_interval = settings.pipe_spawn_interval
        self.motion.min_freq = settings.min_freq
        self.motion.max_freq = settings.max_freq
        self.notes = build_grid(settings.min_freq, settings.max_freq)

    def start(self, settings: Settings | None = None) -> None:
        """Reset all run state and begin playing."""
        self.is_playing = True
        self.game_over = False
        self.score = 0
        self.frame = 0
        self.frequency = 0.0
        self.bird = Bird(y=self.height / 2, target_y=self.height / 2)
        self.pipes = []
        self.pipe_spawn_timer = 0
        self.apply_settings(settings or self.settings)

    def pitch_to_y(self, frequency: float) -> float:
        return self.motion.target_for(self.bird, frequency)

    @property
    def current_note(self) -> str | None:
        """Nearest grid note to the last detected frequency, if any."""
        if self.frequency <= 0 or not self.notes:
            return None
        return closest_note(self.notes, self.frequency)

    def advance(self, frequency: float) -> list[PassEvent]:
        """Run one frame. Returns the pipes passed during it."""
        if not self.is_playing or self.game_over:
            return []

        self.frequency = frequency
        self.motion.read_input(self.bird, frequency)
        self.frame += 1
        self.motion.step(self.bird, self.frame)

        events = self._move_pipes()

        self.pipes = [p for p in self.pipes if p.x > -self.pipe_width]

        self.pipe_spawn_timer += 1
        if self.pipe_spawn_timer >= self.pipe_spawn_interval:
            self.spawn_pipe()
            self.pipe_spawn_timer = 0

        if collides(self.bird, self.pipes, self.pipe_width):
            self.game_over = True
            logger.info("Game over at frame %d, score %d", self.frame, self.score)

        return events

    def _move_pipes(self) -> list[PassEvent]:
        events: list[PassEvent] = []
        for pipe in self.pipes:
            pipe.x -= self.pipe_speed

            if not pipe.passed and pipe.x + self.pipe_width < self.bird.x:
                pipe.passed = True
                self.score += 1
                events.append(PassEvent(note=pipe.target_note, freq=pipe.target_freq, frame=self.frame))

                if self.tone_sink is not None:
                    self.tone_sink.play_tone(pipe.target_freq, self.tone_duration)

                lock_frames = lock_frames_for(self.tone_duration)
                self.motion.lock(self.bird, self.frame, lock_frames)
                logger.debug(
                    "Passed pipe %s (%.2f Hz); bird locked for %d frames (until frame %d)",
                    pipe.target_note, pipe.target_freq, lock_frames, self.bird.lock_end_frame,
                )
        return events

    def spawn_pipe(self) -> Pipe:
        """Add a pipe at the right edge whose gap is centred on a random natural note."""
        candidates = natural_notes(self.notes)
        if not candidates:
            raise RuntimeError("Note grid has no natural notes; apply settings before spawning")

        note = self._rng.choice(candidates)
        gap_center_y = self.pitch_to_y(note.freq)
        pipe = Pipe(
            x=self.width,
            gap_y=gap_center_y - self.pipe_gap / 2,
            gap_center_y=gap_center_y,
            gap_size=self.pipe_gap,
            target_note=note.name,
            target_freq=note.freq,
        )
        self.pipes.append(pipe)
        return pipe

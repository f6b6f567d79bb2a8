"""Tests for the per-frame world update: spawning, scoring, locking, game over."""

import random

import pytest

from whistlybird.models import BirdMode, Pipe
from whistlybird.settings import Settings
from whistlybird.world import World, lock_frames_for


class RecordingSink:
    def __init__(self):
        self.calls = []

    def play_tone(self, frequency, duration):
        self.calls.append((frequency, duration))


def _world(settings=None, sink=None):
    world = World(480, 640, settings=settings or Settings(), tone_sink=sink, rng=random.Random(0))
    world.start()
    return world


def _open_pipe(x):
    """A pipe whose gap spans the whole screen, so it can never be hit."""
    return Pipe(x=x, gap_y=0.0, gap_center_y=320.0, gap_size=640.0,
                target_note="C5", target_freq=523.25)


def test_advance_is_noop_until_started():
    world = World(480, 640, rng=random.Random(0))
    assert world.advance(600.0) == []
    assert world.frame == 0


def test_lock_frames_from_tone_duration():
    assert lock_frames_for(0.45) == 27
    assert lock_frames_for(0.2) == 12


def test_bird_converges_on_held_note():
    world = _world()
    target = world.pitch_to_y(440.0)
    errors = []
    for _ in range(60):
        world.advance(440.0)
        errors.append(abs(world.bird.y - target))
    assert all(a > b for a, b in zip(errors, errors[1:]))
    assert errors[-1] < 0.5
    assert world.current_note == "A4"


def test_first_pipe_spawns_after_interval():
    world = _world(Settings(difficulty="easy", pipe_spawn_interval=150))
    for _ in range(149):
        world.advance(0.0)
    assert world.pipes == []

    world.advance(0.0)
    assert len(world.pipes) == 1
    pipe = world.pipes[0]
    assert pipe.x == 480
    assert pipe.target_note in {"A4", "B4", "C5", "D5", "E5", "F5", "G5"}
    assert pipe.gap_center_y == pytest.approx(world.pitch_to_y(pipe.target_freq))
    assert pipe.gap_y == pytest.approx(pipe.gap_center_y - 36.0)
    assert pipe.gap_size == 72.0


def test_passing_a_pipe_scores_plays_tone_and_locks():
    sink = RecordingSink()
    world = _world(sink=sink)
    pipe = _open_pipe(x=29.0)  # trailing edge moves from 81 to 79, past the bird at x=80
    world.pipes.append(pipe)

    events = world.advance(600.0)

    assert world.score == 1
    assert pipe.passed
    assert [e.note for e in events] == ["C5"]
    assert sink.calls == [(523.25, 0.45)]
    assert world.bird.is_locked
    assert world.bird.lock_end_frame == world.frame + 27

    # Already-passed pipes never score twice
    world.advance(600.0)
    assert world.score == 1


def test_pitch_ignored_for_exactly_lock_window_after_pass():
    world = _world(sink=RecordingSink())
    world.pipes.append(_open_pipe(x=29.0))
    world.advance(600.0)

    ignored = 0
    while True:
        world.advance(600.0)
        if world.bird.is_whistling:
            break
        ignored += 1
        assert ignored <= 27
    assert ignored == 27
    assert world.bird.mode is BirdMode.WHISTLING


def test_pass_locks_even_without_tone_sink():
    world = _world()
    world.pipes.append(_open_pipe(x=29.0))
    world.advance(0.0)
    assert world.score == 1
    assert world.bird.is_locked


def test_silence_after_whistling_glides_down():
    world = _world()
    for _ in range(30):
        world.advance(600.0)
    assert world.bird.is_whistling

    for _ in range(20):
        before = world.bird.y
        world.advance(0.0)
        assert world.bird.mode is BirdMode.GLIDING
        assert world.bird.y == pytest.approx(before + 1.5)


def test_decaying_pitch_glides_once_below_range():
    world = _world()
    for _ in range(30):
        world.advance(600.0)

    modes = []
    for n in range(1, 12):
        world.advance(600.0 * 0.95 ** n)
        modes.append(world.bird.mode)
    # 600 * 0.95**6 is just above 440 Hz, 600 * 0.95**7 is below it
    assert modes[:6] == [BirdMode.WHISTLING] * 6
    assert modes[6:] == [BirdMode.GLIDING] * 5

    before = world.bird.y
    world.advance(600.0 * 0.95 ** 12)
    assert world.bird.y == pytest.approx(before + 1.5)


def test_offscreen_pipes_are_removed():
    world = _world()
    world.pipes.append(_open_pipe(x=-50.0))
    world.advance(0.0)
    assert world.pipes == []


def test_collision_ends_the_game():
    world = _world()
    world.pipes.append(Pipe(x=70.0, gap_y=0.0, gap_center_y=25.0, gap_size=50.0,
                            target_note="G5", target_freq=783.99))
    world.advance(0.0)
    assert world.game_over

    frame = world.frame
    world.advance(600.0)
    assert world.frame == frame


def test_start_resets_the_run():
    world = _world()
    world.pipes.append(_open_pipe(x=29.0))
    world.advance(0.0)
    world.start()
    assert world.score == 0
    assert world.frame == 0
    assert world.pipes == []
    assert not world.bird.is_locked
    assert world.bird.y == 320


def test_apply_settings_is_idempotent():
    world = _world()
    settings = Settings(gap_multiplier=4.0, pipe_speed=3.0)
    world.apply_settings(settings)
    first = (list(world.notes), world.pipe_gap, world.pipe_speed, world.pipe_spawn_interval)
    world.apply_settings(settings)
    second = (list(world.notes), world.pipe_gap, world.pipe_speed, world.pipe_spawn_interval)
    assert first == second
    assert world.pipe_gap == 96.0


def test_live_settings_do_not_change_existing_pipes():
    world = _world()
    old = world.spawn_pipe()
    world.apply_settings(Settings(gap_multiplier=5.0))
    new = world.spawn_pipe()
    assert old.gap_size == 72.0
    assert new.gap_size == 120.0


def test_spawn_requires_natural_notes():
    world = _world()
    world.notes = []
    with pytest.raises(RuntimeError):
        world.spawn_pipe()

"""Note grid — the chromatic octave used for pipe targets and pitch labels."""

from __future__ import annotations

import math

from whistlybird.models import Note

# One chromatic octave, A4 upward
_CHROMATIC_OCTAVE: tuple[tuple[str, float], ...] = (
    ("A4", 440.00),
    ("A#4", 466.16),
    ("B4", 493.88),
    ("C5", 523.25),
    ("C#5", 554.37),
    ("D5", 587.33),
    ("D#5", 622.25),
    ("E5", 659.25),
    ("F5", 698.46),
    ("F#5", 739.99),
    ("G5", 783.99),
    ("G#5", 830.61),
)


def build_grid(min_freq: float, max_freq: float) -> list[Note]:
    """Build the note grid for a frequency range.

    The grid is currently the same octave whatever the range; notes outside
    ``[min_freq, max_freq]`` are kept.
    """
    return [Note(name, freq) for name, freq in _CHROMATIC_OCTAVE]


def closest_note(notes: list[Note], frequency: float) -> str:
    """Name of the grid note nearest to ``frequency`` in log-frequency distance.

    Ties go to the earliest note in grid order.
    """
    if not notes:
        raise ValueError("Note grid is empty")
    if frequency <= 0:
        raise ValueError(f"Frequency must be positive, got {frequency}")

    log_freq = math.log(frequency)
    best = notes[0]
    best_diff = abs(log_freq - math.log(best.freq))
    for note in notes:
        diff = abs(log_freq - math.log(note.freq))
        if diff < best_diff:
            best_diff = diff
            best = note
    return best.name


def natural_notes(notes: list[Note]) -> list[Note]:
    """Grid notes without sharps, in grid order."""
    return [n for n in notes if n.is_natural]

"""Bird/pipe collision test."""

from __future__ import annotations

from collections.abc import Iterable

from whistlybird.models import Bird, Pipe


def collides(bird: Bird, pipes: Iterable[Pipe], pipe_width: float) -> bool:
    """True if the bird overlaps the solid part of any pipe.

    Only pipes horizontally overlapping the bird are checked, each against its
    own frozen gap. Touching a gap edge exactly is not a collision.
    """
    half_w = bird.width / 2
    for pipe in pipes:
        if bird.x + half_w > pipe.x and bird.x - half_w < pipe.x + pipe_width:
            if bird.top < pipe.gap_y or bird.bottom > pipe.gap_bottom:
                return True
    return False

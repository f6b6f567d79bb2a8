"""Draw the playfield: background, note grid, pipes and bird."""

from __future__ import annotations

import pygame

from whistlybird.models import Bird, Pipe
from whistlybird.notes import natural_notes
from whistlybird.renderer.colors import (
    BIRD,
    BIRD_LOCKED,
    GRID_LABEL,
    GRID_LINE,
    LABEL_BG,
    LABEL_TEXT,
    PIPE,
    SKY,
)
from whistlybird.renderer.sprites import Sprite, SpriteReady
from whistlybird.world import World

_FALLBACK_BIRD_RADIUS = 12


def render_scene(
    surface: pygame.Surface,
    world: World,
    sprites: dict[str, Sprite],
    label_font: pygame.font.Font,
    grid_font: pygame.font.Font,
) -> None:
    _draw_background(surface, sprites.get("background-day"))
    _draw_note_grid(surface, world, grid_font)
    for pipe in world.pipes:
        _draw_pipe(surface, pipe, world.pipe_width, sprites.get("pipe-green"), label_font)
    _draw_bird(surface, world.bird, sprites.get("bluebird-midflap"))


def _draw_background(surface: pygame.Surface, sprite: Sprite | None) -> None:
    if isinstance(sprite, SpriteReady):
        surface.blit(pygame.transform.scale(sprite.surface, surface.get_size()), (0, 0))
    else:
        surface.fill(SKY)


def _draw_note_grid(surface: pygame.Surface, world: World, font: pygame.font.Font) -> None:
    """Horizontal guide lines for natural notes only."""
    w, h = surface.get_size()
    overlay = pygame.Surface((w, h), pygame.SRCALPHA)
    for note in natural_notes(world.notes):
        y = int(world.pitch_to_y(note.freq))
        pygame.draw.line(overlay, GRID_LINE, (0, y), (w, y), 1)
        label = font.render(note.name, True, GRID_LABEL)
        overlay.blit(label, (5, y - label.get_height() // 2))
    surface.blit(overlay, (0, 0))


def _draw_pipe(
    surface: pygame.Surface,
    pipe: Pipe,
    pipe_width: int,
    sprite: Sprite | None,
    font: pygame.font.Font,
) -> None:
    h = surface.get_height()
    x = int(pipe.x)
    top_h = max(0, int(pipe.gap_y))
    bottom_y = int(pipe.gap_bottom)
    bottom_h = max(0, h - bottom_y)

    if isinstance(sprite, SpriteReady):
        if top_h:
            top = pygame.transform.flip(
                pygame.transform.scale(sprite.surface, (pipe_width, top_h)), False, True
            )
            surface.blit(top, (x, 0))
        if bottom_h:
            surface.blit(pygame.transform.scale(sprite.surface, (pipe_width, bottom_h)), (x, bottom_y))
    else:
        pygame.draw.rect(surface, PIPE, pygame.Rect(x, 0, pipe_width, top_h))
        pygame.draw.rect(surface, PIPE, pygame.Rect(x, bottom_y, pipe_width, bottom_h))

    # Target note label in the middle of the gap
    text = font.render(pipe.target_note, True, LABEL_TEXT)
    padding = 6
    bg = pygame.Surface((text.get_width() + padding * 2, 28), pygame.SRCALPHA)
    bg.fill(LABEL_BG)
    cx = x + pipe_width // 2
    cy = int(pipe.gap_center_y)
    surface.blit(bg, (cx - bg.get_width() // 2, cy - bg.get_height() // 2))
    surface.blit(text, (cx - text.get_width() // 2, cy - text.get_height() // 2))


def _draw_bird(surface: pygame.Surface, bird: Bird, sprite: Sprite | None) -> None:
    rect = pygame.Rect(
        int(bird.x - bird.width / 2), int(bird.top), int(bird.width), int(bird.height)
    )
    if isinstance(sprite, SpriteReady):
        surface.blit(pygame.transform.scale(sprite.surface, rect.size), rect.topleft)
        if bird.is_locked:
            pygame.draw.rect(surface, BIRD_LOCKED, rect.inflate(4, 4), width=3)
    else:
        color = BIRD_LOCKED if bird.is_locked else BIRD
        pygame.draw.circle(surface, color, (int(bird.x), int(bird.y)), _FALLBACK_BIRD_RADIUS)

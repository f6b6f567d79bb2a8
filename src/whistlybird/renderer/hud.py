"""Heads-up display — score, detected pitch, lock status."""

from __future__ import annotations

import pygame

from whistlybird.renderer.colors import BIRD_LOCKED, HUD_SHADOW, HUD_TEXT
from whistlybird.world import World


def _shadowed(surface: pygame.Surface, font: pygame.font.Font, text: str, pos: tuple[int, int], color) -> None:
    surface.blit(font.render(text, True, HUD_SHADOW), (pos[0] + 2, pos[1] + 2))
    surface.blit(font.render(text, True, color), pos)


def render_hud(surface: pygame.Surface, world: World) -> None:
    font = pygame.font.SysFont("monospace", 20, bold=True)
    w = surface.get_width()

    score = f"Score: {world.score}"
    _shadowed(surface, font, score, (w // 2 - font.size(score)[0] // 2, 10), HUD_TEXT)

    note = world.current_note
    pitch = f"{round(world.frequency)} Hz" + (f"  {note}" if note else "")
    _shadowed(surface, font, pitch, (w - font.size(pitch)[0] - 10, 40), HUD_TEXT)

    if world.bird.is_locked:
        _shadowed(surface, font, "LOCKED", (10, 40), BIRD_LOCKED)

"""Sprite loading. A sprite is either ready to blit or pending (draw a fallback)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pygame

logger = logging.getLogger(__name__)

SPRITE_NAMES = ("background-day", "bluebird-midflap", "pipe-green")


@dataclass(frozen=True)
class SpriteReady:
    name: str
    surface: pygame.Surface


@dataclass(frozen=True)
class SpritePending:
    name: str


Sprite = SpriteReady | SpritePending


def load_sprite(name: str, sprites_dir: str | Path | None) -> Sprite:
    if not sprites_dir:
        return SpritePending(name)
    path = Path(sprites_dir) / f"{name}.png"
    if not path.is_file():
        return SpritePending(name)
    try:
        surface = pygame.image.load(str(path))
    except (pygame.error, OSError) as exc:
        logger.warning("Failed to load sprite %s: %s", path, exc)
        return SpritePending(name)
    if pygame.display.get_surface() is not None:
        surface = surface.convert_alpha()
    return SpriteReady(name, surface)


def load_sprites(sprites_dir: str | Path | None) -> dict[str, Sprite]:
    sprites = {name: load_sprite(name, sprites_dir) for name in SPRITE_NAMES}
    missing = [name for name, s in sprites.items() if isinstance(s, SpritePending)]
    if sprites_dir and missing:
        logger.warning("Sprites not found in %s: %s", sprites_dir, ", ".join(missing))
    return sprites

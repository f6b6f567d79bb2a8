"""Gameplay view: polls pitch, advances the world, draws the scene."""

from __future__ import annotations

import pygame

from whistlybird.pitch import PitchDetector
from whistlybird.renderer.colors import HUD_TEXT, OVERLAY, TITLE
from whistlybird.renderer.hud import render_hud
from whistlybird.renderer.scene import render_scene
from whistlybird.settings import Settings
from whistlybird.views.base import ViewAction, ViewContext
from whistlybird.views.settings_panel import SettingsPanel
from whistlybird.world import World


class GameView:
    name = "game"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._world: World | None = None
        self._detector: PitchDetector | None = None
        self._panel: SettingsPanel | None = None
        self._font: pygame.font.Font | None = None
        self._label_font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 14)
        self._label_font = pygame.font.SysFont("arial", 20, bold=True)
        self._big_font = pygame.font.SysFont("monospace", 36, bold=True)

        w, h = context.screen_size
        settings = context.settings.current
        self._world = World(w, h, settings=settings, tone_sink=context.audio)
        self._detector = PitchDetector(context.microphone, settings=settings)
        self._panel = SettingsPanel(context.settings, on_change=self._apply_settings)
        self._panel.layout(pygame.Rect(20, 80, w - 40, 260))
        self._restart()

    def on_exit(self) -> None:
        if self._context and self._context.audio:
            self._context.audio.stop()

    def _restart(self) -> None:
        if self._world and self._detector and self._context:
            self._detector.reset()
            self._world.start(self._context.settings.current)

    def _apply_settings(self, settings: Settings) -> None:
        if self._world:
            self._world.apply_settings(settings)
        if self._detector:
            self._detector.configure(settings)

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None

        if event.key == pygame.K_TAB and self._panel:
            self._panel.toggle()
            return None
        if self._panel and self._panel.visible:
            if event.key == pygame.K_ESCAPE:
                self._panel.toggle()
            else:
                self._panel.handle_event(event)
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="pop")
        if self._world and self._world.game_over and event.key in (pygame.K_RETURN, pygame.K_r):
            self._restart()
        return None

    def update(self, dt: float) -> ViewAction | None:
        # Gameplay is counted in frames; dt is not used
        world, detector = self._world, self._detector
        if world is None or detector is None:
            return None
        frequency = detector.sample()
        world.advance(frequency)
        return None

    def draw(self, surface: pygame.Surface) -> None:
        world = self._world
        if world is None or self._context is None or not self._font or not self._label_font:
            return

        render_scene(surface, world, self._context.sprites, self._label_font, self._font)
        render_hud(surface, world)

        if world.game_over and self._big_font:
            self._draw_game_over(surface, world.score)

        if self._panel:
            self._panel.draw(surface)

    def _draw_game_over(self, surface: pygame.Surface, score: int) -> None:
        w, h = surface.get_size()
        shade = pygame.Surface((w, h), pygame.SRCALPHA)
        shade.fill(OVERLAY)
        surface.blit(shade, (0, 0))

        title = self._big_font.render("Game Over", True, TITLE)
        surface.blit(title, (w // 2 - title.get_width() // 2, h // 2 - 80))
        final = self._label_font.render(f"Final score: {score}", True, HUD_TEXT)
        surface.blit(final, (w // 2 - final.get_width() // 2, h // 2 - 20))
        hint = self._font.render("Enter: restart | Esc: menu", True, HUD_TEXT)
        surface.blit(hint, (w // 2 - hint.get_width() // 2, h // 2 + 20))

"""Top-level application: initializes pygame, manages screens, and runs the game loop."""

from __future__ import annotations

import logging

import pygame

from whistlybird.config import FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from whistlybird.renderer.sprites import load_sprites
from whistlybird.settings import Settings, SettingsStore
from whistlybird.views.base import ViewContext, ViewManager
from whistlybird.views.game_view import GameView
from whistlybird.views.menu_view import MenuView

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        settings: Settings | None = None,
        sprites_dir: str = "",
        device: int | None = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        # Optional subsystems degrade to None; the menu refuses to start without a microphone
        self._microphone = self._try_microphone(device)
        self._audio = self._try_audio()

        context = ViewContext(
            screen_size=(WINDOW_WIDTH, WINDOW_HEIGHT),
            microphone=self._microphone,
            audio=self._audio,
            settings=SettingsStore(settings),
            sprites=load_sprites(sprites_dir),
        )

        self.views = ViewManager(context)
        self.views.register(MenuView)
        self.views.register(GameView)
        self.views.push("menu")

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif not self.views.handle_event(event):
                    running = False
            if running:
                if not self.views.update(dt):
                    running = False
            self.views.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _cleanup(self) -> None:
        while self.views.active_view:
            self.views.pop()
        if self._microphone is not None:
            self._microphone.close()
        if self._audio is not None:
            self._audio.shutdown()

    @staticmethod
    def _try_microphone(device: int | None):
        try:
            from whistlybird.microphone import MicrophoneInput
            return MicrophoneInput(device=device)
        except (ImportError, OSError) as exc:
            logger.error("Audio input unavailable: %s", exc)
            return None

    @staticmethod
    def _try_audio():
        try:
            from whistlybird.audio import ToneEngine
            return ToneEngine()
        except pygame.error as exc:
            logger.warning("Tone playback unavailable: %s", exc)
            return None

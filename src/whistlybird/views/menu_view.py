"""Title screen: acquires the microphone before a run can start."""

from __future__ import annotations

import logging

import pygame

from whistlybird.microphone import MicrophoneError
from whistlybird.renderer.colors import ERROR_TEXT, PANEL_TEXT, SKY, TITLE
from whistlybird.views.base import ViewAction, ViewContext
from whistlybird.views.settings_panel import SettingsPanel

logger = logging.getLogger(__name__)

_INSTRUCTIONS = [
    "Whistle to fly: higher pitch, higher bird.",
    "Fly through the gap at the labelled note.",
    "",
    "Enter: start | Tab: settings | Esc: quit",
]


class MenuView:
    name = "menu"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._error: str | None = None
        self._panel: SettingsPanel | None = None
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 18)
        self._title_font = pygame.font.SysFont("monospace", 40, bold=True)
        self._panel = SettingsPanel(context.settings)
        w, h = context.screen_size
        self._panel.layout(pygame.Rect(20, h // 2 - 40, w - 40, 260))

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None

        if event.key == pygame.K_ESCAPE:
            if self._panel and self._panel.visible:
                self._panel.toggle()
                return None
            return ViewAction(kind="quit")
        if event.key == pygame.K_TAB and self._panel:
            self._panel.toggle()
            return None
        if self._panel and self._panel.visible:
            self._panel.handle_event(event)
            return None
        if event.key == pygame.K_RETURN:
            return self._launch()
        return None

    def _launch(self) -> ViewAction | None:
        """Open the microphone; the run only starts once input is available."""
        mic = self._context.microphone if self._context else None
        if mic is None:
            self._error = "No audio input available (is PortAudio installed?)"
            logger.error("Cannot start: no audio input")
            return None
        try:
            mic.open()
        except MicrophoneError as exc:
            self._error = str(exc)
            logger.error("Audio initialization failed: %s", exc)
            return None
        self._error = None
        return ViewAction(kind="push", target="game")

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if not self._font or not self._title_font:
            return

        surface.fill(SKY)
        w, h = surface.get_size()

        title = self._title_font.render("Whistly Bird", True, TITLE)
        surface.blit(title, (w // 2 - title.get_width() // 2, 60))

        y = 150
        for line in _INSTRUCTIONS:
            text = self._font.render(line, True, PANEL_TEXT)
            surface.blit(text, (w // 2 - text.get_width() // 2, y))
            y += 26

        if self._error:
            err = self._font.render(self._error, True, ERROR_TEXT)
            surface.blit(err, (w // 2 - err.get_width() // 2, h - 60))

        if self._panel:
            self._panel.draw(surface)

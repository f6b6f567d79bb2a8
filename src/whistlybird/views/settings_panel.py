"""Settings overlay: keyboard-driven sliders over the live settings store."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import pygame

from whistlybird.config import DIFFICULTIES, GAP_MULTIPLIER_RANGE, GLIDE_SPEED_RANGE, PIPE_SPEED_RANGE
from whistlybird.renderer.colors import ERROR_TEXT, PANEL_BG, PANEL_SELECTED, PANEL_TEXT
from whistlybird.settings import Settings, SettingsError, SettingsStore


_DIFFICULTY_ORDER = list(DIFFICULTIES)


@dataclass(frozen=True)
class _Slider:
    key: str
    label: str
    bounds: tuple[float, float]
    step: float


_SLIDERS = [
    _Slider("gap_multiplier", "Gap size", GAP_MULTIPLIER_RANGE, 0.5),
    _Slider("pipe_speed", "Pipe speed", PIPE_SPEED_RANGE, 0.5),
    _Slider("glide_speed", "Glide speed", GLIDE_SPEED_RANGE, 0.25),
]


class SettingsPanel:
    """Up/Down selects a row, Left/Right adjusts it, Backspace restores defaults.

    Every accepted change is reported through ``on_change`` with the new snapshot.
    """

    def __init__(self, store: SettingsStore, on_change: Callable[[Settings], None] | None = None) -> None:
        self._store = store
        self._on_change = on_change
        self._rect = pygame.Rect(0, 0, 0, 0)
        self._selected = 0
        self._error: str | None = None
        self._font: pygame.font.Font | None = None
        self.visible = False

    @property
    def row_count(self) -> int:
        return len(_SLIDERS) + 1

    def toggle(self) -> None:
        self.visible = not self.visible
        self._error = None

    def layout(self, rect: pygame.Rect) -> None:
        self._rect = rect

    def handle_event(self, event: pygame.event.Event) -> None:
        if not self.visible or event.type != pygame.KEYDOWN:
            return

        if event.key == pygame.K_UP:
            self._selected = (self._selected - 1) % self.row_count
        elif event.key == pygame.K_DOWN:
            self._selected = (self._selected + 1) % self.row_count
        elif event.key == pygame.K_LEFT:
            self.adjust(-1)
        elif event.key == pygame.K_RIGHT:
            self.adjust(1)
        elif event.key == pygame.K_BACKSPACE:
            self._changed(self._store.reset())

    def adjust(self, direction: int) -> None:
        """Move the selected row one step in ``direction`` (-1 or +1)."""
        current = self._store.current
        try:
            if self._selected < len(_SLIDERS):
                slider = _SLIDERS[self._selected]
                lo, hi = slider.bounds
                value = getattr(current, slider.key) + direction * slider.step
                new = self._store.set(slider.key, max(lo, min(hi, value)))
            else:
                idx = _DIFFICULTY_ORDER.index(current.difficulty) + direction
                new = self._store.set_difficulty(_DIFFICULTY_ORDER[max(0, min(len(_DIFFICULTY_ORDER) - 1, idx))])
        except SettingsError as exc:
            self._error = str(exc)
            return
        self._changed(new)

    def _changed(self, settings: Settings) -> None:
        self._error = None
        if self._on_change is not None:
            self._on_change(settings)

    def update(self, dt: float) -> None:
        pass

    def draw(self, surface: pygame.Surface) -> None:
        if not self.visible:
            return
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 18)

        bg = pygame.Surface(self._rect.size, pygame.SRCALPHA)
        bg.fill(PANEL_BG)
        surface.blit(bg, self._rect.topleft)

        current = self._store.current
        rows = [f"{s.label}: {getattr(current, s.key):g}" for s in _SLIDERS]
        rows.append(f"Difficulty: {current.difficulty}")

        x = self._rect.x + 16
        y = self._rect.y + 16
        title = self._font.render("Settings", True, PANEL_SELECTED)
        surface.blit(title, (x, y))
        y += 36
        for i, row in enumerate(rows):
            selected = i == self._selected
            color = PANEL_SELECTED if selected else PANEL_TEXT
            text = self._font.render(("> " if selected else "  ") + row, True, color)
            surface.blit(text, (x, y))
            y += 28

        hint = self._font.render("Arrows: adjust | Bksp: defaults", True, PANEL_TEXT)
        surface.blit(hint, (x, self._rect.bottom - 56))
        if self._error:
            err = self._font.render(self._error, True, ERROR_TEXT)
            surface.blit(err, (x, self._rect.bottom - 30))

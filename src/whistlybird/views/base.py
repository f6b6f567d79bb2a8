"""View protocol, ViewContext, ViewAction, and ViewManager."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

import pygame

from whistlybird.settings import SettingsStore

if TYPE_CHECKING:
    from whistlybird.audio import ToneEngine
    from whistlybird.microphone import MicrophoneInput
    from whistlybird.renderer.sprites import Sprite


@dataclass
class ViewContext:
    """Shared state passed to views on entry."""

    screen_size: tuple[int, int]
    microphone: MicrophoneInput | None
    audio: ToneEngine | None
    settings: SettingsStore = field(default_factory=SettingsStore)
    sprites: dict[str, Sprite] = field(default_factory=dict)


@dataclass
class ViewAction:
    """Navigation command returned by views."""

    kind: Literal["push", "pop", "quit"]
    target: str | None = None


@runtime_checkable
class Panel(Protocol):
    """A composable sub-region within a view (reusable across views)."""

    def layout(self, rect: pygame.Rect) -> None: ...
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> None: ...
    def draw(self, surface: pygame.Surface) -> None: ...


@runtime_checkable
class View(Protocol):
    """A full-screen game state."""

    name: str

    def on_enter(self, context: ViewContext) -> None: ...
    def on_exit(self) -> None: ...
    def handle_event(self, event: pygame.event.Event) -> ViewAction | None: ...
    def update(self, dt: float) -> ViewAction | None: ...
    def draw(self, surface: pygame.Surface) -> None: ...


class ViewManager:
    """Owns the view stack and dispatches the game loop to the active view."""

    def __init__(self, context: ViewContext) -> None:
        self._registry: dict[str, type] = {}
        self._stack: list[View] = []
        self._context = context

    def register(self, view_cls: type) -> None:
        instance = view_cls()
        self._registry[instance.name] = view_cls

    def push(self, view_name: str) -> None:
        if self._stack:
            self._stack[-1].on_exit()
        view = self._registry[view_name]()
        view.on_enter(self._context)
        self._stack.append(view)

    def pop(self) -> None:
        if self._stack:
            self._stack.pop().on_exit()
        if self._stack:
            self._stack[-1].on_enter(self._context)

    @property
    def active_view(self) -> View | None:
        return self._stack[-1] if self._stack else None

    def handle_event(self, event: pygame.event.Event) -> bool:
        if (view := self.active_view) is None:
            return False
        action = view.handle_event(event)
        return self._process_action(action)

    def update(self, dt: float) -> bool:
        if (view := self.active_view) is None:
            return False
        action = view.update(dt)
        return self._process_action(action)

    def draw(self, surface: pygame.Surface) -> None:
        if (view := self.active_view) is not None:
            view.draw(surface)

    def _process_action(self, action: ViewAction | None) -> bool:
        if action is None:
            return True
        if action.kind == "quit":
            return False
        elif action.kind == "push":
            self.push(action.target)
        elif action.kind == "pop":
            self.pop()
        return True

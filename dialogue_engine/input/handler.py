"""
Keyboard input handler with action-based abstraction.

Collects pygame key events between ticks and exposes, for the current
fixed step, which semantic Actions were just pressed.

Usage:
    for event in pygame.event.get():
        input_handler.process_event(event)
    input_handler.update()

    if input_handler.is_action_just_pressed(Action.PROCEED):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import pygame

from dialogue_engine.core.actions import Action, DEFAULT_KEY_BINDINGS
from dialogue_engine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"
    ACTION_RELEASED = "input.action_released"


@dataclass
class InputState:
    """Action state for the current tick."""
    actions_pressed: set[Action] = field(default_factory=set)
    actions_just_pressed: set[Action] = field(default_factory=set)
    actions_just_released: set[Action] = field(default_factory=set)
    keys_pressed: set[int] = field(default_factory=set)


class InputHandler:
    """
    Translates key edges into semantic Actions.

    A key pressed and released between two ticks still counts as just
    pressed on the next tick.
    """

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        key_bindings: Optional[dict[Action, list[int]]] = None,
    ):
        self.event_bus = event_bus

        self._state = InputState()
        self._prev_actions: set[Action] = set()
        self._tapped: set[Action] = set()

        self._key_bindings = {
            action: list(keys)
            for action, keys in (key_bindings or DEFAULT_KEY_BINDINGS).items()
        }
        self._reverse_key_bindings: dict[int, list[Action]] = {}
        self._rebuild_reverse_bindings()

    def _rebuild_reverse_bindings(self) -> None:
        self._reverse_key_bindings.clear()
        for action, keys in self._key_bindings.items():
            for key in keys:
                self._reverse_key_bindings.setdefault(key, []).append(action)

    # Queries

    def is_action_pressed(self, action: Action) -> bool:
        """Check if an action is currently held down."""
        return action in self._state.actions_pressed

    def is_action_just_pressed(self, action: Action) -> bool:
        """Check if an action went down during the last tick."""
        return action in self._state.actions_just_pressed

    def is_action_just_released(self, action: Action) -> bool:
        return action in self._state.actions_just_released

    # Bindings

    def bind_key(self, action: Action, key: int) -> None:
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)
        self._rebuild_reverse_bindings()

    def unbind_key(self, action: Action, key: int) -> None:
        keys = self._key_bindings.get(action, [])
        if key in keys:
            keys.remove(key)
        self._rebuild_reverse_bindings()

    def get_bindings(self, action: Action) -> list[int]:
        return list(self._key_bindings.get(action, []))

    # Feeding input

    def process_event(self, event: pygame.event.Event) -> None:
        """Process a pygame event; non-keyboard events are ignored."""
        if event.type == pygame.KEYDOWN:
            self.press_key(event.key)
        elif event.type == pygame.KEYUP:
            self.release_key(event.key)

    def press_key(self, key: int) -> None:
        self._state.keys_pressed.add(key)
        for action in self._reverse_key_bindings.get(key, []):
            self._state.actions_pressed.add(action)
            self._tapped.add(action)

    def release_key(self, key: int) -> None:
        self._state.keys_pressed.discard(key)
        for action in self._reverse_key_bindings.get(key, []):
            still_pressed = any(
                other in self._state.keys_pressed
                for other in self._key_bindings.get(action, [])
            )
            if not still_pressed:
                self._state.actions_pressed.discard(action)

    def update(self) -> None:
        """
        Latch edges for the new tick.

        Call once at the start of each fixed update.
        """
        pressed = self._state.actions_pressed
        self._state.actions_just_pressed = (pressed - self._prev_actions) | self._tapped
        self._state.actions_just_released = self._prev_actions - pressed

        if self.event_bus:
            for action in self._state.actions_just_pressed:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
            for action in self._state.actions_just_released:
                self.event_bus.publish(InputEvent.ACTION_RELEASED, action=action)

        self._prev_actions = set(pressed)
        self._tapped.clear()

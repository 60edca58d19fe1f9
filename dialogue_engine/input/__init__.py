"""Input handling module."""

from dialogue_engine.input.handler import InputHandler, InputState, InputEvent

__all__ = [
    "InputHandler",
    "InputState",
    "InputEvent",
]

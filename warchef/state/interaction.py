"""
Interaction priority between dialogue and the rest of the game.

Modes are ordered; a mode may react to the player only when no earlier
mode wants interaction. Dialogue comes first, so clicks and keys go to
the dialogue box while it is up.
"""

from __future__ import annotations

from enum import Enum, auto


class InteractionMode(Enum):
    """Declaration order is priority order."""
    DIALOGUE = auto()
    GAME = auto()


class InteractionStack:
    """Tracks which modes currently want the player's input."""

    def __init__(self):
        self._wants_interaction: dict[InteractionMode, bool] = {mode: True for mode in InteractionMode}

    def set_wants_interaction(self, mode: InteractionMode, wants_interaction: bool) -> None:
        self._wants_interaction[mode] = wants_interaction

    def wants_interaction(self, mode: InteractionMode) -> bool:
        return self._wants_interaction[mode]

    def can_interact(self, mode: InteractionMode) -> bool:
        for other in InteractionMode:
            if other is mode:
                return self._wants_interaction[mode]
            if self._wants_interaction[other]:
                return False
        return False

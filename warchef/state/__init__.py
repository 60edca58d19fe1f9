"""
Campaign state and the listeners that mutate it.
"""

from warchef.state.game_state import GameState, Intel, Inventory, UnitComposition
from warchef.state.effects import GameStateListener, apply_effect
from warchef.state.interaction import InteractionMode, InteractionStack

__all__ = [
    "GameState",
    "Intel",
    "Inventory",
    "UnitComposition",
    "GameStateListener",
    "apply_effect",
    "InteractionMode",
    "InteractionStack",
]

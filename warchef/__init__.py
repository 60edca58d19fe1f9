"""
War Chef narrative layer.

Builds the game's dialogue on top of dialogue_engine:
- Content tables (speakers, units, items)
- articy export loading and expression parsing
- Graph lowering and the dialogue runtime
- Campaign state and the listeners that apply dialogue effects
- Campaign progression (which dialogue plays when)
"""

from warchef.content import Item, Speaker, UnitKind
from warchef.dialogue import (
    Articy,
    ArticyLoader,
    Choice,
    Dialogue,
    DialogueSignal,
    DialogueState,
    Line,
    Script,
    load_articy,
)
from warchef.state import GameState, GameStateListener, InteractionMode, InteractionStack
from warchef.progression import Quest, queue_intermission
from warchef.systems import DialogueSystem
from warchef.session import NarrativeSession

__all__ = [
    "Item",
    "Speaker",
    "UnitKind",
    "Articy",
    "ArticyLoader",
    "Choice",
    "Dialogue",
    "DialogueSignal",
    "DialogueState",
    "Line",
    "Script",
    "load_articy",
    "GameState",
    "GameStateListener",
    "InteractionMode",
    "InteractionStack",
    "Quest",
    "queue_intermission",
    "DialogueSystem",
    "NarrativeSession",
]

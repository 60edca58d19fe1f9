"""
Applies dialogue events to the campaign state.

The runtime only publishes events; this listener is what turns an
authored AddFood(10) into ten more food.
"""

from __future__ import annotations

import logging

from dialogue_engine.core.events import Event, EventBus
from warchef.dialogue.events import AddUnitsEvent, ApplyInstruction, Context, DialogueSignal, GainIntel
from warchef.dialogue.graph import (
    AddFood,
    AddItem,
    AddUnits,
    InstructionEffect,
    SetGlobalVariable,
    SubtractFood,
    SubtractUnits,
)
from warchef.state.game_state import GameState

logger = logging.getLogger(__name__)


def apply_effect(state: GameState, effect: InstructionEffect) -> None:
    """Apply one instruction effect to the state."""
    if isinstance(effect, AddUnits):
        state.add_units(effect.kind, effect.amount)
    elif isinstance(effect, SubtractUnits):
        state.subtract_units(effect.kind, effect.amount)
    elif isinstance(effect, AddFood):
        state.add_food(effect.amount)
    elif isinstance(effect, SubtractFood):
        state.subtract_food(effect.amount)
    elif isinstance(effect, AddItem):
        state.add_item(effect.item)
    elif isinstance(effect, SetGlobalVariable):
        state.set_variable(effect.name, effect.value)
    else:
        raise TypeError(f"unknown instruction effect {effect!r}")


class GameStateListener:
    """
    Subscribes to DialogueSignal.EVENT and mutates a GameState.

    Usage:
        listener = GameStateListener(state)
        listener.attach(bus)
    """

    def __init__(self, state: GameState):
        self.state = state

    def attach(self, event_bus: EventBus, priority: int = 100) -> None:
        # Runs ahead of presentation listeners so they see the new state
        event_bus.subscribe(DialogueSignal.EVENT, self.on_dialogue_event, priority=priority)

    def detach(self, event_bus: EventBus) -> None:
        event_bus.unsubscribe(DialogueSignal.EVENT, self.on_dialogue_event)

    def on_dialogue_event(self, event: Event) -> None:
        dialogue_event = event["event"]
        if isinstance(dialogue_event, ApplyInstruction):
            apply_effect(self.state, dialogue_event.effect)
            logger.debug("Applied %r", dialogue_event.effect)
        elif isinstance(dialogue_event, AddUnitsEvent):
            self.state.add_units(dialogue_event.kind, dialogue_event.count)
        elif isinstance(dialogue_event, GainIntel):
            self.state.intel.reveal(dialogue_event.kind)
        elif isinstance(dialogue_event, Context):
            # Presentation only
            pass

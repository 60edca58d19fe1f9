"""
Dialogue events - side effects attached to lines and choices.

An event fires when the line carrying it becomes current, or when the
choice carrying it is picked. NoEvent and Composite are structural; every
other event is published on the event bus for listeners (game state,
presentation) to act on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Union

from warchef.content import UnitKind
from warchef.dialogue.graph import InstructionEffect


class DialogueSignal(Enum):
    """Event bus signals published by the dialogue runtime."""
    EVENT = auto()          # A dialogue event fired (data: event)
    LINE_SHOWN = auto()     # A line became current (data: line)
    CHOICES_SHOWN = auto()  # The current line waits for a choice (data: line, choices)
    STARTED = auto()        # Runtime left the idle state
    ENDED = auto()          # Last queued line was advanced past
    CLEARED = auto()        # clear() dropped the queue


@dataclass(frozen=True)
class NoEvent:
    pass


@dataclass(frozen=True)
class Context:
    """Free-form tag for presentation listeners."""
    tag: str


@dataclass(frozen=True)
class AddUnitsEvent:
    kind: UnitKind
    count: int


@dataclass(frozen=True)
class GainIntel:
    kind: UnitKind


@dataclass(frozen=True)
class ApplyInstruction:
    """An authored Instruction effect to apply to game state."""
    effect: InstructionEffect


@dataclass(frozen=True)
class Composite:
    events: tuple[DialogueEvent, ...] = ()


DialogueEvent = Union[NoEvent, Context, AddUnitsEvent, GainIntel, ApplyInstruction, Composite]

NO_EVENT = NoEvent()


def combine(events: Iterable[DialogueEvent]) -> DialogueEvent:
    """Fold events into one, dropping no-ops."""
    members = tuple(e for e in events if not isinstance(e, NoEvent))
    if not members:
        return NO_EVENT
    if len(members) == 1:
        return members[0]
    return Composite(members)


def from_effects(effects: Iterable[InstructionEffect]) -> DialogueEvent:
    return combine(ApplyInstruction(effect) for effect in effects)


def flatten(event: DialogueEvent) -> list[DialogueEvent]:
    """Leaf events in firing order."""
    if isinstance(event, NoEvent):
        return []
    if isinstance(event, Composite):
        return [leaf for member in event.events for leaf in flatten(member)]
    return [event]

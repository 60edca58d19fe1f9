"""
Typed dialogue graph.

A DialogueGraph is an immutable table of nodes keyed by ArticyId. Node
payloads and instruction effects are small frozen dataclasses, one per
authored construct.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union

from dialogue_engine.resources.identifier import ArticyId
from warchef.content import Item, Speaker, UnitKind


# Instruction effects

@dataclass(frozen=True)
class AddUnits:
    kind: UnitKind
    amount: int


@dataclass(frozen=True)
class SubtractUnits:
    kind: UnitKind
    amount: int


@dataclass(frozen=True)
class AddFood:
    amount: int


@dataclass(frozen=True)
class SubtractFood:
    amount: int


@dataclass(frozen=True)
class AddItem:
    item: Item


@dataclass(frozen=True)
class SetGlobalVariable:
    name: str
    value: bool


InstructionEffect = Union[AddUnits, SubtractUnits, AddFood, SubtractFood, AddItem, SetGlobalVariable]


# Node payloads

@dataclass(frozen=True)
class Message:
    speaker: Speaker
    text: str


@dataclass(frozen=True)
class Instruction:
    effects: tuple[InstructionEffect, ...] = ()


@dataclass(frozen=True)
class Condition:
    variable: str
    expected: bool


@dataclass(frozen=True)
class Hub:
    pass


@dataclass(frozen=True)
class Jump:
    target: ArticyId


NodeKind = Union[Message, Instruction, Condition, Hub, Jump]


@dataclass(frozen=True)
class DialogueNode:
    """
    A resolved flow node.

    Attributes:
        id: Node identifier
        kind: Typed payload
        pins: Output pins in authored order, each the ordered targets of
            its connections. A Jump has a single pin holding its target.
    """
    id: ArticyId
    kind: NodeKind
    pins: tuple[tuple[ArticyId, ...], ...] = ()

    @property
    def children(self) -> tuple[ArticyId, ...]:
        """All continuations, flattened in pin order."""
        return tuple(target for pin in self.pins for target in pin)

    def pin(self, index: int) -> tuple[ArticyId, ...]:
        """Targets of one output pin; empty when the pin does not exist."""
        if 0 <= index < len(self.pins):
            return self.pins[index]
        return ()


@dataclass(frozen=True)
class DialogueGraph:
    """A named, read-only dialogue."""
    technical_name: str
    entries: tuple[ArticyId, ...]
    nodes: Mapping[ArticyId, DialogueNode] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    def __getitem__(self, node_id: ArticyId) -> DialogueNode:
        return self.nodes[node_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class Articy:
    """Everything loaded from one export."""
    dialogues: Mapping[str, DialogueGraph] = field(default_factory=dict)
    global_variables: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "dialogues", MappingProxyType(dict(self.dialogues)))
        object.__setattr__(self, "global_variables", MappingProxyType(dict(self.global_variables)))

    def dialogue(self, technical_name: str) -> DialogueGraph:
        return self.dialogues[technical_name]

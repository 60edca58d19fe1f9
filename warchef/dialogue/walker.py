"""
Graph walker - lowers a DialogueGraph into presentable lines.

The walker follows one path at a time from a list of continuations:

- Message emits a line and continues with its children
- Instruction queues its effects for the next line (or choice)
- Hub and Jump pass straight through
- Condition picks output pin 0 when the variable matches, pin 1 otherwise

A continuation list with more than one target is a choice point. Each
option is followed to its first Message, whose text becomes the choice
label; the rest of the branch is only lowered once that option is picked.

A node met twice on one path ends the walk. Picking a choice starts a new
path, so menus that loop back through a Hub or Jump keep working.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from typing import Mapping, Optional, Protocol, Sequence

from dialogue_engine.resources.identifier import ArticyId
from warchef.content import Speaker
from warchef.dialogue.events import DialogueEvent, from_effects
from warchef.dialogue.graph import (
    Condition,
    DialogueGraph,
    Instruction,
    InstructionEffect,
    Message,
    SetGlobalVariable,
)
from warchef.dialogue.script import Choice, Line

logger = logging.getLogger(__name__)


class VariableSource(Protocol):
    """Live lookup of global variables (usually the GameState)."""

    def get_variable(self, name: str) -> Optional[bool]:
        ...


class GraphWalker:
    """
    Lowers one dialogue graph.

    Args:
        graph: Graph to walk
        variables: Live variable values, read when a walk runs
        defaults: Authored defaults for variables the live source lacks
        max_choices: Options beyond this count are dropped
    """

    def __init__(
        self,
        graph: DialogueGraph,
        variables: VariableSource,
        defaults: Optional[Mapping[str, bool]] = None,
        max_choices: Optional[int] = None,
    ):
        self.graph = graph
        self.variables = variables
        self.defaults = dict(defaults or {})
        self.max_choices = max_choices

    def lower(self) -> tuple[list[Line], DialogueEvent]:
        """Lower the trunk, starting at the graph's entries."""
        return self.walk(self.graph.entries, frozenset(), {})

    def value(self, name: str, overlay: Optional[Mapping[str, bool]] = None) -> bool:
        """Current value of a variable as seen by a walk."""
        if overlay and name in overlay:
            return overlay[name]
        live = self.variables.get_variable(name)
        if live is not None:
            return live
        if name in self.defaults:
            return self.defaults[name]
        logger.warning("%s: unknown variable %r, treating it as false", self.graph.technical_name, name)
        return False

    def walk(
        self,
        targets: Sequence[ArticyId],
        path: frozenset[ArticyId],
        overlay: dict[str, bool],
    ) -> tuple[list[Line], DialogueEvent]:
        """
        Lower everything reachable from a continuation list.

        Args:
            targets: Continuations to start from
            path: Nodes already on the path leading here
            overlay: Variables set earlier on this path

        Returns:
            (lines, effects left over after the last line)
        """
        lines: list[Line] = []
        pending: list[InstructionEffect] = []
        visited = set(path)
        overlay = dict(overlay)

        while targets:
            if len(targets) > 1:
                choices = self._choices(targets, frozenset(visited), overlay, pending)
                if choices:
                    pending = []
                    if lines:
                        lines[-1] = replace(lines[-1], choices=choices)
                    else:
                        lines.append(Line(Speaker.PLAYER, "", choices=choices))
                break

            node_id = targets[0]
            if not self._enter(node_id, visited):
                break

            node = self.graph[node_id]
            kind = node.kind
            if isinstance(kind, Message):
                lines.append(Line(kind.speaker, kind.text, from_effects(pending)))
                pending = []
                targets = node.children
            elif isinstance(kind, Instruction):
                pending.extend(kind.effects)
                _apply_overlay(overlay, kind.effects)
                targets = node.children
            elif isinstance(kind, Condition):
                targets = node.pin(0 if self.value(kind.variable, overlay) == kind.expected else 1)
            else:
                targets = node.children

        return lines, from_effects(pending)

    def _enter(self, node_id: ArticyId, visited: set[ArticyId]) -> bool:
        if node_id in visited:
            logger.warning(
                "%s: node %s re-entered on the same path, ending the walk",
                self.graph.technical_name,
                node_id,
            )
            return False
        if node_id not in self.graph:
            logger.warning("%s: node %s is not part of the graph", self.graph.technical_name, node_id)
            return False
        visited.add(node_id)
        return True

    def _choices(
        self,
        targets: Sequence[ArticyId],
        path: frozenset[ArticyId],
        overlay: dict[str, bool],
        pending: list[InstructionEffect],
    ) -> tuple[Choice, ...]:
        choices = []
        for target in targets:
            choice = self._option(target, path, overlay, pending)
            if choice is not None:
                choices.append(choice)

        if self.max_choices is not None and len(choices) > self.max_choices:
            logger.warning(
                "%s: %d options offered, keeping the first %d",
                self.graph.technical_name,
                len(choices),
                self.max_choices,
            )
            choices = choices[:self.max_choices]
        return tuple(choices)

    def _option(
        self,
        target: ArticyId,
        path: frozenset[ArticyId],
        overlay: dict[str, bool],
        pending: list[InstructionEffect],
    ) -> Optional[Choice]:
        """
        Follow one option to its first Message; None drops the option.

        The branch behind the label starts a fresh path holding only this
        route, so a reply that leads back to the choice point offers the
        choices again.
        """
        visited = set(path)
        route: set[ArticyId] = set()
        overlay = dict(overlay)
        effects = list(pending)
        targets: Sequence[ArticyId] = (target,)

        while len(targets) == 1:
            node_id = targets[0]
            if not self._enter(node_id, visited):
                return None
            route.add(node_id)

            node = self.graph[node_id]
            kind = node.kind
            if isinstance(kind, Message):
                expand = partial(self.walk, node.children, frozenset(route), overlay)
                return Choice(from_effects(effects), kind.text, expand=expand)
            if isinstance(kind, Instruction):
                effects.extend(kind.effects)
                _apply_overlay(overlay, kind.effects)
                targets = node.children
            elif isinstance(kind, Condition):
                targets = node.pin(0 if self.value(kind.variable, overlay) == kind.expected else 1)
            else:
                targets = node.children

        if targets:
            logger.warning(
                "%s: option %s fans out again before any line, dropping it",
                self.graph.technical_name,
                target,
            )
        return None


def _apply_overlay(overlay: dict[str, bool], effects: Sequence[InstructionEffect]) -> None:
    for effect in effects:
        if isinstance(effect, SetGlobalVariable):
            overlay[effect.name] = effect.value

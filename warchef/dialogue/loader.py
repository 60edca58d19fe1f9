"""
Graph loader - turns an articy:draft export into typed dialogue graphs.

Only default packages are read. Every "Dialogue" model becomes a
DialogueGraph keyed by its technical name; its nodes are resolved from
the first input pin outwards. Problems are collected and reported
together through ArticyLoadError.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from dialogue_engine.resources.document import DocumentReader, ExportDocument, Model
from dialogue_engine.resources.errors import DiagnosticCollector
from dialogue_engine.resources.identifier import NOBODY, ArticyId
from warchef.content import Speaker
from warchef.dialogue.expressions import ExpressionError, parse_condition, parse_instructions
from warchef.dialogue.graph import (
    Articy,
    Condition,
    DialogueGraph,
    DialogueNode,
    Hub,
    Instruction,
    Jump,
    Message,
    NodeKind,
    SetGlobalVariable,
)

DIALOGUE_TYPE = "Dialogue"
GAME_NAMESPACE = "Game"
BOOLEAN_TYPE = "Boolean"

logger = logging.getLogger(__name__)


class ArticyLoader:
    """
    Loads articy exports.

    Usage:
        articy = ArticyLoader().load("game/data/articy.json")
        graph = articy.dialogue("WC1B1")
    """

    def __init__(self, reader: Optional[DocumentReader] = None, namespace: str = GAME_NAMESPACE):
        self.reader = reader or DocumentReader()
        self.namespace = namespace

    def load(self, path: str | Path) -> Articy:
        diagnostics = DiagnosticCollector()
        document = self.reader.read_file(path, diagnostics)
        return self._finish(document, diagnostics, str(path))

    def loads(self, text: str) -> Articy:
        diagnostics = DiagnosticCollector()
        document = self.reader.read_text(text, diagnostics)
        return self._finish(document, diagnostics, "<string>")

    def load_document(self, data: Any) -> Articy:
        diagnostics = DiagnosticCollector()
        document = self.reader.read(data, diagnostics)
        return self._finish(document, diagnostics, "<document>")

    def _finish(self, document: Optional[ExportDocument], diagnostics: DiagnosticCollector, origin: str) -> Articy:
        articy = None
        if document is not None:
            articy = self.build(document, diagnostics)

        for diagnostic in diagnostics.diagnostics:
            logger.error("%s: %s", origin, diagnostic)
        diagnostics.raise_if_any()

        logger.info(
            "Loaded %d dialogues and %d global variables from %s",
            len(articy.dialogues),
            len(articy.global_variables),
            origin,
        )
        return articy

    def build(self, document: ExportDocument, diagnostics: DiagnosticCollector) -> Articy:
        """Resolve a validated document; problems go to diagnostics."""
        entry_points: list[Model] = []
        models: dict[ArticyId, Model] = {}
        for model in document.default_models():
            if model.type == DIALOGUE_TYPE:
                entry_points.append(model)
            else:
                models[ArticyId.from_string(model.id)] = model

        declared = {
            variable.name
            for group in document.global_variables
            if group.namespace == self.namespace
            for variable in group.variables
        }

        dialogues: dict[str, DialogueGraph] = {}
        names: set[str] = set()
        for model in entry_points:
            name = model.get("TechnicalName")
            if name in names:
                diagnostics.add("duplicate dialogue technical name", model.id, name)
                continue
            names.add(name)
            graph = _GraphBuilder(name, models, declared, diagnostics).build(model)
            if graph is not None:
                dialogues[name] = graph

        return Articy(
            dialogues=dialogues,
            global_variables=self._global_variables(document, diagnostics),
        )

    def _global_variables(self, document: ExportDocument, diagnostics: DiagnosticCollector) -> dict[str, bool]:
        variables: dict[str, bool] = {}
        for group in document.global_variables:
            if group.namespace != self.namespace:
                continue
            for variable in group.variables:
                qualified = f"{group.namespace}.{variable.name}"
                if variable.type != BOOLEAN_TYPE:
                    diagnostics.add(f"unsupported variable type {variable.type!r}", text=qualified)
                    continue
                value = variable.value.lower()
                if value not in ("true", "false"):
                    diagnostics.add(
                        f"unsupported boolean variable value {variable.value!r}", text=qualified
                    )
                    continue
                variables[variable.name] = value == "true"
        return variables


class _GraphBuilder:
    """Resolves the nodes reachable from one Dialogue model."""

    def __init__(
        self,
        technical_name: str,
        models: dict[ArticyId, Model],
        declared: set[str],
        diagnostics: DiagnosticCollector,
    ):
        self.technical_name = technical_name
        self.models = models
        self.declared = declared
        self.diagnostics = diagnostics
        self.nodes: dict[ArticyId, DialogueNode] = {}

    def _error(self, message: str, node_id: Optional[str] = None, text: Optional[str] = None) -> None:
        self.diagnostics.add(message, node_id, self.technical_name, text)

    def build(self, dialogue: Model) -> Optional[DialogueGraph]:
        input_pins = dialogue.input_pins
        if not input_pins:
            self._error("expected an input pin", dialogue.id)
            return None

        entries = tuple(ArticyId.from_string(target) for target in input_pins[0])
        before = len(self.diagnostics.diagnostics)

        # Depth-first over an explicit stack; a node already resolved (or
        # already found missing) is never visited twice.
        seen: set[ArticyId] = set()
        stack = list(reversed(entries))
        while stack:
            node_id = stack.pop()
            if node_id in seen:
                continue
            seen.add(node_id)

            model = self.models.get(node_id)
            if model is None:
                self._error("reference to a node that does not exist", node_id.source)
                continue

            kind = self._kind(model)
            pins = self._pins(model, kind)
            if kind is not None:
                self.nodes[node_id] = DialogueNode(node_id, kind, pins)
            # Keep going past a broken node so everything behind it is checked too
            stack.extend(reversed([target for pin in pins for target in pin]))

        if len(self.diagnostics.diagnostics) > before:
            return None
        return DialogueGraph(self.technical_name, entries, self.nodes)

    @staticmethod
    def _pins(model: Model, kind: Optional[NodeKind]) -> tuple[tuple[ArticyId, ...], ...]:
        if isinstance(kind, Jump):
            return ((kind.target,),)
        return tuple(
            tuple(ArticyId.from_string(target) for target in pin)
            for pin in model.output_pins
        )

    def _kind(self, model: Model) -> Optional[NodeKind]:
        if model.type == "DialogueFragment":
            speaker = self._speaker(model)
            if speaker is None:
                return None
            return Message(speaker, model.get("Text"))

        if model.type == "Instruction":
            expression = model.get("Expression")
            try:
                effects = tuple(parse_instructions(expression))
            except ExpressionError as e:
                self._error(f"invalid instruction: {e}", model.id, expression)
                return None
            for effect in effects:
                if isinstance(effect, SetGlobalVariable):
                    self._check_declared(effect.name, model, expression)
            return Instruction(effects)

        if model.type == "Condition":
            expression = model.get("Expression")
            try:
                variable, expected = parse_condition(expression)
            except ExpressionError as e:
                self._error(f"invalid condition: {e}", model.id, expression)
                return None
            self._check_declared(variable, model, expression)
            return Condition(variable, expected)

        if model.type == "Hub":
            return Hub()

        if model.type == "Jump":
            return Jump(ArticyId.from_string(model.get("Target")))

        self._error(f"unknown articy type {model.type!r}", model.id)
        return None

    def _check_declared(self, name: str, model: Model, expression: str) -> None:
        if name not in self.declared:
            self._error(f"undeclared global variable {name!r}", model.id, expression)

    def _speaker(self, model: Model) -> Optional[Speaker]:
        reference = model.get("Speaker")
        if reference == NOBODY:
            return Speaker.NO_ONE

        character = self.models.get(ArticyId.from_string(reference))
        if character is None:
            self._error("speaker does not exist", model.id, reference)
            return None

        display_name = character.get("DisplayName")
        speaker = Speaker.from_display_name(display_name) if isinstance(display_name, str) else None
        if speaker is None:
            self._error("unknown speaker", model.id, str(display_name))
        return speaker


def load_articy(path: str | Path) -> Articy:
    """Load an export file with the default loader."""
    return ArticyLoader().load(path)

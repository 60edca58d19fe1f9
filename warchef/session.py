"""
Narrative session - the dialogue half of the game, wired together.

A session owns the event bus, the input handler, the campaign state and
the dialogue runtime. The host loop feeds it pygame events and calls
tick() once per fixed step; rendering subscribes to DialogueSignal on
session.event_bus.
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from dialogue_engine.core.config import NarrativeConfig
from dialogue_engine.core.events import EventBus
from dialogue_engine.core.system import System, run_systems
from dialogue_engine.input.handler import InputHandler
from warchef.dialogue.graph import Articy
from warchef.dialogue.loader import ArticyLoader
from warchef.dialogue.runtime import Dialogue
from warchef.dialogue.script import Script
from warchef.progression.quests import queue_intermission
from warchef.state.effects import GameStateListener
from warchef.state.game_state import GameState
from warchef.state.interaction import InteractionStack
from warchef.systems.dialogue import DialogueSystem

logger = logging.getLogger(__name__)


class NarrativeSession:
    """
    Usage:
        session = NarrativeSession(NarrativeConfig(articy_path="game/data/articy.json"))
        session.load()
        session.new_campaign()
        session.play("Tutorial")

        # every fixed step
        for event in pygame.event.get():
            session.handle_event(event)
        session.tick(dt)
    """

    def __init__(self, config: Optional[NarrativeConfig] = None, articy: Optional[Articy] = None):
        self.config = config or NarrativeConfig()
        self.articy = articy

        self.event_bus = EventBus()
        self.input = InputHandler(self.event_bus, self.config.key_bindings)
        self.state = GameState()
        self.interaction = InteractionStack()
        self.dialogue = Dialogue(self.event_bus)

        self._listener = GameStateListener(self.state)
        self._listener.attach(self.event_bus)
        self.systems: list[System] = [
            DialogueSystem(self.dialogue, self.input, self.interaction, self.config.max_choices),
        ]

    def load(self) -> Articy:
        """Load the configured export (raises ArticyLoadError)."""
        loader = ArticyLoader(namespace=self.config.default_namespace)
        self.articy = loader.load(self.config.articy_path)
        return self.articy

    def new_campaign(self) -> None:
        """Fresh campaign state, flags reset to their authored defaults."""
        self._listener.detach(self.event_bus)
        self.dialogue.clear()
        self.state = GameState()
        self.state.seed_variables(self._require_articy().global_variables)
        self._listener = GameStateListener(self.state)
        self._listener.attach(self.event_bus)

    def script(self, technical_name: str) -> Script:
        """A playable script for one dialogue of the export."""
        articy = self._require_articy()
        return Script.from_graph(
            articy.dialogue(technical_name),
            self.state,
            articy.global_variables,
            self.config.max_choices,
        )

    def play(self, technical_name: str) -> None:
        self.dialogue.queue(self.script(technical_name))

    def intermission(self) -> None:
        queue_intermission(self.dialogue, self.state, self._require_articy())

    def handle_event(self, event: pygame.event.Event) -> None:
        self.input.process_event(event)

    def tick(self, dt: float) -> None:
        self.input.update()
        run_systems(self.systems, dt)

    def _require_articy(self) -> Articy:
        if self.articy is None:
            raise RuntimeError("no articy export loaded, call load() first")
        return self.articy

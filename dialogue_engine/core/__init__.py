"""
Core module.

Exports:
- EventBus, Event: Event system
- Action: Input actions
- System: Tick-driven system base
- Component: Validated state records
- NarrativeConfig: Configuration
"""

from dialogue_engine.core.events import EventBus, Event, EventHandler
from dialogue_engine.core.actions import Action, CHOICE_ACTIONS, DEFAULT_KEY_BINDINGS
from dialogue_engine.core.system import System, run_systems
from dialogue_engine.core.component import Component
from dialogue_engine.core.config import NarrativeConfig, configure_logging

__all__ = [
    "EventBus",
    "Event",
    "EventHandler",
    "Action",
    "CHOICE_ACTIONS",
    "DEFAULT_KEY_BINDINGS",
    "System",
    "run_systems",
    "Component",
    "NarrativeConfig",
    "configure_logging",
]

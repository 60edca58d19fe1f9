"""
Dialogue Engine

Game-agnostic plumbing for the narrative runtime: event bus, input
actions, tick-driven systems and articy:draft export reading.

Quick Start:
    from dialogue_engine import EventBus, DocumentReader, DiagnosticCollector

    diagnostics = DiagnosticCollector()
    document = DocumentReader().read_file("articy.json", diagnostics)
    diagnostics.raise_if_any()
"""

__version__ = "0.1.0"

from dialogue_engine.core import (
    EventBus,
    Event,
    Action,
    System,
    NarrativeConfig,
    configure_logging,
)
from dialogue_engine.input import InputHandler
from dialogue_engine.resources import (
    ArticyId,
    ArticyLoadError,
    DiagnosticCollector,
    DocumentReader,
    LoadDiagnostic,
)

__all__ = [
    "EventBus",
    "Event",
    "Action",
    "System",
    "NarrativeConfig",
    "configure_logging",
    "InputHandler",
    "ArticyId",
    "ArticyLoadError",
    "DiagnosticCollector",
    "DocumentReader",
    "LoadDiagnostic",
]

"""
System base class for tick-driven logic.

Systems hold the logic that runs once per fixed update step. The host
loop calls update() on every enabled system in priority order; nothing
runs between ticks.

Usage:
    class DialogueSystem(System):
        priority = 10

        def update(self, dt: float) -> None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Iterable


class System(ABC):
    """
    Base class for all systems.

    Override update() to define the per-tick logic.
    """

    # Priority for execution order (higher = earlier)
    priority: ClassVar[int] = 0

    def __init__(self):
        self.enabled = True

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance this system by one fixed step."""


def run_systems(systems: Iterable[System], dt: float) -> None:
    """Update every enabled system once, highest priority first."""
    for system in sorted(systems, key=lambda s: s.priority, reverse=True):
        if system.enabled:
            system.update(dt)

"""
Runtime configuration for the narrative layer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dialogue_engine.core.actions import Action, DEFAULT_KEY_BINDINGS


class NarrativeConfig:
    """Configuration for loading and running dialogue."""

    def __init__(
        self,
        articy_path: str | Path = "game/data/articy.json",
        default_namespace: str = "Game",
        max_choices: int = 4,
        log_level: int | str = logging.INFO,
        key_bindings: Optional[dict[Action, list[int]]] = None,
    ):
        self.articy_path = Path(articy_path)
        self.default_namespace = default_namespace
        self.max_choices = max_choices
        self.log_level = log_level
        self.key_bindings = dict(key_bindings or DEFAULT_KEY_BINDINGS)


def configure_logging(config: NarrativeConfig) -> None:
    """Install a root handler at the configured level."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

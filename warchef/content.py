"""
Closed content tables: speakers, unit kinds and items.

Authored text refers to these by display name; lookups go through the
from_* helpers, which return None for unknown names.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class Speaker(Enum):
    """Who says a dialogue line."""
    NO_ONE = auto()
    PLAYER = auto()
    GENERAL = auto()
    WAR_CHEF_1 = auto()
    WAR_CHEF_2 = auto()
    WAR_CHEF_3 = auto()
    WAR_CHEF_4 = auto()
    WAR_CHEF_5 = auto()
    MOBLING = auto()
    STABBY_RAT = auto()
    SHOOTY_RAT = auto()
    SCOUTLING = auto()
    DESERTER = auto()
    BLASTY_RAT = auto()
    NARRATOR = auto()

    @classmethod
    def from_display_name(cls, name: str) -> Optional[Speaker]:
        return _SPEAKERS_BY_NAME.get(name)

    @property
    def display_name(self) -> str:
        return _SPEAKER_NAMES.get(self, "")


_SPEAKER_NAMES: dict[Speaker, str] = {
    Speaker.PLAYER: "War Chef",
    Speaker.GENERAL: "General Ratso",
    Speaker.WAR_CHEF_1: "Glut Rattan",
    Speaker.WAR_CHEF_2: "Field Marshal Toothsy",
    Speaker.WAR_CHEF_3: "Rattin Hood",
    Speaker.WAR_CHEF_4: "Archmage Ratus",
    Speaker.WAR_CHEF_5: "Chompers the Barbarian",
    Speaker.MOBLING: "Mobling",
    Speaker.STABBY_RAT: "Stabby-Rat",
    Speaker.SHOOTY_RAT: "Shooty-Rat",
    Speaker.SCOUTLING: "Scoutling",
    Speaker.DESERTER: "Deserter",
    Speaker.BLASTY_RAT: "Blasty-Rat",
    Speaker.NARRATOR: "Narrator",
}
_SPEAKERS_BY_NAME = {name: speaker for speaker, name in _SPEAKER_NAMES.items()}


class UnitKind(Enum):
    """Army unit kinds, keyed in authored text by their singular name."""
    PEASANT = "Peasant"
    WARRIOR = "Warrior"
    ARCHER = "Archer"
    MAGE = "Mage"
    BRUTE = "Brute"

    @classmethod
    def from_name(cls, name: str) -> Optional[UnitKind]:
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return self.value


class Item(Enum):
    """Consumable battle items, keyed in authored text by display name."""
    CRACKLING_MOSS = "Crackling Moss"
    SQUIRT_BLOP_BERRIES = "Squirt Blop-Berries"
    FIREMANDER_SALTS = "Firemander Salts"
    AXE_SHROOMS = "Axe Shrooms"
    BOG_HARD_WEEDS = "Bog Hard-Weeds"
    CELERY_QUARTZ = "Celery Quartz"
    FROSTY_WEB_STRANDS = "Frosty Web-Strands"

    @classmethod
    def from_name(cls, name: str) -> Optional[Item]:
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return self.value

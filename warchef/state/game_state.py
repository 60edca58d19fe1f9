"""
Campaign state - army, food, inventory, flags and intel.

GameState is the one object dialogue is allowed to mutate, and only
through the methods below. Counts never go negative: subtracting more
than is available leaves zero.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from pydantic import Field

from dialogue_engine.core.component import Component
from warchef.content import Item, UnitKind
from warchef.progression.quests import Quest

logger = logging.getLogger(__name__)


# UnitKind -> UnitComposition field
_UNIT_FIELDS: dict[UnitKind, str] = {
    UnitKind.PEASANT: "peasants",
    UnitKind.WARRIOR: "warriors",
    UnitKind.ARCHER: "archers",
    UnitKind.MAGE: "mages",
    UnitKind.BRUTE: "brutes",
}


class UnitComposition(Component):
    """Unit counts per kind."""
    peasants: int = Field(default=0, ge=0)
    warriors: int = Field(default=0, ge=0)
    archers: int = Field(default=0, ge=0)
    mages: int = Field(default=0, ge=0)
    brutes: int = Field(default=0, ge=0)

    @classmethod
    def empty(cls) -> UnitComposition:
        return cls()

    def get(self, kind: UnitKind) -> int:
        return getattr(self, _UNIT_FIELDS[kind])

    def mutate_count(self, kind: UnitKind, mutate: Callable[[int], int]) -> None:
        """Replace one count with mutate(count), clamped at zero."""
        setattr(self, _UNIT_FIELDS[kind], max(mutate(self.get(kind)), 0))

    def add_units(self, other: UnitComposition) -> None:
        for kind in UnitKind:
            self.mutate_count(kind, lambda count: count + other.get(kind))

    @property
    def total(self) -> int:
        return sum(self.get(kind) for kind in UnitKind)


def _starting_army() -> UnitComposition:
    return UnitComposition(peasants=100, warriors=20, archers=20, mages=20)


class Inventory(Component):
    """Battle items held, with counts."""
    items: dict[Item, int] = Field(default_factory=dict)

    def add(self, item: Item, count: int = 1) -> None:
        self.items[item] = self.items.get(item, 0) + count

    def remove(self, item: Item, count: int = 1) -> bool:
        """
        Take items out.

        Returns:
            False (and changes nothing) if fewer than count are held
        """
        held = self.items.get(item, 0)
        if held < count:
            return False
        if held == count:
            del self.items[item]
        else:
            self.items[item] = held - count
        return True

    def count(self, item: Item) -> int:
        return self.items.get(item, 0)

    def __contains__(self, item: object) -> bool:
        return item in self.items

    @property
    def is_empty(self) -> bool:
        return not self.items


class Intel(Component):
    """Enemy unit kinds the player has scouted."""
    revealed: set[UnitKind] = Field(default_factory=set)

    def reveal(self, kind: UnitKind) -> None:
        self.revealed.add(kind)

    def can_see(self, kind: UnitKind) -> bool:
        return kind in self.revealed


class GameState(Component):
    """
    Everything that persists between scenes.

    Attributes:
        food: Food in stock
        available_army: Units ready to be fed and deployed
        fed_army: Units fed for the next battle
        inventory: Items held
        global_variables: Live values of the authored Game.* flags
        intel: Scouted enemy kinds
        used_items: Items used in battle, in order of first use
        quest: Campaign progression
    """
    food: int = Field(default=0, ge=0)
    available_army: UnitComposition = Field(default_factory=_starting_army)
    fed_army: UnitComposition = Field(default_factory=UnitComposition)
    inventory: Inventory = Field(default_factory=Inventory)
    global_variables: dict[str, bool] = Field(default_factory=dict)
    intel: Intel = Field(default_factory=Intel)
    used_items: list[Item] = Field(default_factory=list)
    quest: Quest = Field(default_factory=Quest)

    # Dialogue-facing mutations

    def add_units(self, kind: UnitKind, amount: int) -> None:
        self.available_army.mutate_count(kind, lambda count: count + amount)

    def subtract_units(self, kind: UnitKind, amount: int) -> None:
        self.available_army.mutate_count(kind, lambda count: count - amount)

    def add_food(self, amount: int) -> None:
        self.food += amount

    def subtract_food(self, amount: int) -> None:
        self.food = max(self.food - amount, 0)

    def add_item(self, item: Item) -> None:
        self.inventory.add(item)

    def get_variable(self, name: str) -> Optional[bool]:
        """Live value of a flag, or None if it was never set or seeded."""
        return self.global_variables.get(name)

    def set_variable(self, name: str, value: bool) -> None:
        self.global_variables[name] = value

    def seed_variables(self, defaults: Mapping[str, bool]) -> None:
        """Reset every flag to its authored default (new campaign)."""
        self.global_variables.clear()
        self.global_variables.update(defaults)
        logger.debug("Seeded %d global variables", len(defaults))

    # Campaign bookkeeping

    def use_item(self, item: Item) -> bool:
        """Spend one item in battle; remembered for the next intermission."""
        if not self.inventory.remove(item):
            return False
        if item not in self.used_items:
            self.used_items.append(item)
        return True

    def get_and_reset_fed_army(self) -> UnitComposition:
        """Return the fed units to the available army and hand them out."""
        fed_army = self.fed_army
        self.fed_army = UnitComposition.empty()
        self.available_army.add_units(fed_army)
        return fed_army

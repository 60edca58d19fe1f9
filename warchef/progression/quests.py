"""
Campaign progression - which dialogue plays between battles.

The campaign is a fixed ladder of war chefs, each fought over a few
battles. Before every battle the pre-planning dialogue for that step
plays; the first time an item has been used, its item dialogue plays
before that.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from pydantic import Field

from dialogue_engine.core.component import Component
from warchef.content import Item
from warchef.dialogue.script import Script

if TYPE_CHECKING:
    from warchef.dialogue.graph import Articy
    from warchef.dialogue.runtime import Dialogue
    from warchef.dialogue.walker import VariableSource
    from warchef.state.game_state import GameState

logger = logging.getLogger(__name__)

# Food granted at the start of every intermission
INTERMISSION_FOOD = 20

# war chef index -> pre-planning dialogue per battle
PREPLANNING_DIALOGUES: dict[int, tuple[str, ...]] = {
    0: ("WC1B1", "WC1B2", "WC1B3"),
    1: ("WC2B1", "WC2B2", "WC2B3"),
    2: ("WC3B1", "WC3B2", "WC3B3", "WC3B4"),
}

ITEM_DIALOGUES: dict[Item, str] = {
    Item.BOG_HARD_WEEDS: "BogHardWeeds",
    Item.CELERY_QUARTZ: "CeleryQuartz",
    Item.CRACKLING_MOSS: "CracklingMoss",
    Item.AXE_SHROOMS: "AxeShrooms",
    Item.SQUIRT_BLOP_BERRIES: "SquirtBlopBerries",
    Item.FROSTY_WEB_STRANDS: "FrostyWebStrands",
}


class Quest(Component):
    """
    Position in the campaign.

    Attributes:
        war_chef: Index of the current war chef
        battle: Index of the battle against that war chef
        seen_item_dialogue: Items whose dialogue has already been offered
    """
    war_chef: int = Field(default=0, ge=0)
    battle: int = Field(default=0, ge=0)
    seen_item_dialogue: set[Item] = Field(default_factory=set)

    def next(self) -> None:
        """Advance to the next battle, moving on to the next war chef after the third."""
        self.battle += 1
        if self.war_chef in (0, 1) and self.battle == 3:
            self.war_chef += 1
            self.battle = 0

    def preplanning_name(self) -> Optional[str]:
        names = PREPLANNING_DIALOGUES.get(self.war_chef, ())
        if self.battle < len(names):
            return names[self.battle]
        return None

    def preplanning_script(self, articy: Articy, variables: VariableSource) -> Optional[Script]:
        """Pre-planning dialogue for the current battle, if there is one."""
        return _script(self.preplanning_name(), articy, variables)

    def item_script(self, item: Item, articy: Articy, variables: VariableSource) -> Optional[Script]:
        """
        First-use dialogue for an item.

        Each item is offered once; later calls return None. Bog Hard-Weeds
        stay silent in the third battle against the second war chef, where
        the pre-planning dialogue covers them.
        """
        if item in self.seen_item_dialogue:
            return None
        self.seen_item_dialogue.add(item)

        if item is Item.BOG_HARD_WEEDS and self.war_chef == 1 and self.battle == 2:
            return None
        return _script(ITEM_DIALOGUES.get(item), articy, variables)


def _script(name: Optional[str], articy: Articy, variables: VariableSource) -> Optional[Script]:
    if name is None:
        return None
    if name not in articy.dialogues:
        logger.warning("Dialogue %r is missing from the articy export", name)
        return None
    return Script.from_graph(articy.dialogue(name), variables, articy.global_variables)


def queue_intermission(dialogue: Dialogue, state: GameState, articy: Articy) -> None:
    """
    Set up the dialogue played between two battles.

    Grants the intermission food, then queues the dialogue of every item
    used so far (first use only) followed by the pre-planning dialogue.
    """
    state.add_food(INTERMISSION_FOOD)
    for item in list(state.used_items):
        script = state.quest.item_script(item, articy, state)
        if script is not None:
            dialogue.queue(script)

    script = state.quest.preplanning_script(articy, state)
    if script is not None:
        dialogue.queue(script)
    logger.info(
        "Intermission before war chef %d, battle %d", state.quest.war_chef + 1, state.quest.battle + 1
    )

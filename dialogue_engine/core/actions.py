"""
Input action definitions.

Actions abstract raw keys into semantic actions. Dialogue logic asks
whether an action was just pressed this tick and never looks at keys.

Usage:
    if input_handler.is_action_just_pressed(Action.PROCEED):
        dialogue.advance()
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """Semantic input actions consumed by the narrative runtime."""

    # Dialogue flow
    PROCEED = auto()
    CHOICE_1 = auto()
    CHOICE_2 = auto()
    CHOICE_3 = auto()
    CHOICE_4 = auto()

    # Scene
    MAIN_MENU = auto()


# Choice actions in presentation order (index 0 selects the first choice)
CHOICE_ACTIONS: tuple[Action, ...] = (
    Action.CHOICE_1,
    Action.CHOICE_2,
    Action.CHOICE_3,
    Action.CHOICE_4,
)


DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.PROCEED: [pygame.K_SPACE],
    Action.CHOICE_1: [pygame.K_1, pygame.K_KP1],
    Action.CHOICE_2: [pygame.K_2, pygame.K_KP2],
    Action.CHOICE_3: [pygame.K_3, pygame.K_KP3],
    Action.CHOICE_4: [pygame.K_4, pygame.K_KP4],
    Action.MAIN_MENU: [pygame.K_0],
}

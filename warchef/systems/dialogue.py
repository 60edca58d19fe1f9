"""
Dialogue system - drives the dialogue runtime from player input.

Once per tick, while a line is up:
- PROCEED advances past a plain line
- CHOICE_1..CHOICE_4 pick a choice on a line that offers them
- MAIN_MENU drops the running and queued scripts

It also keeps the interaction stack told whether dialogue wants input,
so lower priority modes stay quiet while the dialogue box is open.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from dialogue_engine.core.actions import Action, CHOICE_ACTIONS
from dialogue_engine.core.system import System
from warchef.dialogue.runtime import DialogueState
from warchef.state.interaction import InteractionMode

if TYPE_CHECKING:
    from dialogue_engine.input.handler import InputHandler
    from warchef.dialogue.runtime import Dialogue
    from warchef.state.interaction import InteractionStack


class DialogueSystem(System):
    """
    Routes input edges to a Dialogue.

    Usage:
        system = DialogueSystem(dialogue, input_handler, interaction_stack)

        # every fixed step
        input_handler.update()
        system.update(dt)
    """

    # Ahead of gameplay systems, which check the interaction stack
    priority = 100

    def __init__(
        self,
        dialogue: Dialogue,
        input_handler: InputHandler,
        interaction_stack: Optional[InteractionStack] = None,
        max_choices: int = len(CHOICE_ACTIONS),
    ):
        super().__init__()
        self.dialogue = dialogue
        self.input = input_handler
        self.interaction_stack = interaction_stack
        self.choice_actions = CHOICE_ACTIONS[:max_choices]

    def update(self, dt: float) -> None:
        state = self.dialogue.state
        if self.dialogue.active and self.input.is_action_just_pressed(Action.MAIN_MENU):
            self.dialogue.clear()
        elif state is DialogueState.PRESENTING:
            if self.input.is_action_just_pressed(Action.PROCEED):
                self.dialogue.advance()
        elif state is DialogueState.AWAITING_CHOICE:
            for index, action in enumerate(self.choice_actions):
                if self.input.is_action_just_pressed(action):
                    self.dialogue.choose(index)
                    break

        if self.interaction_stack is not None:
            self.interaction_stack.set_wants_interaction(InteractionMode.DIALOGUE, self.dialogue.active)

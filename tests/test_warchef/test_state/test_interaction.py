import pytest
from warchef.state.interaction import InteractionMode, InteractionStack

def test_everyone_wants_interaction_by_default():
    stack = InteractionStack()

    assert stack.wants_interaction(InteractionMode.GAME)
    assert stack.can_interact(InteractionMode.DIALOGUE)
    assert not stack.can_interact(InteractionMode.GAME)

def test_game_interacts_when_dialogue_steps_back():
    stack = InteractionStack()

    stack.set_wants_interaction(InteractionMode.DIALOGUE, False)

    assert stack.can_interact(InteractionMode.GAME)
    assert not stack.can_interact(InteractionMode.DIALOGUE)

def test_mode_that_does_not_want_interaction_cannot_interact():
    stack = InteractionStack()
    stack.set_wants_interaction(InteractionMode.DIALOGUE, False)
    stack.set_wants_interaction(InteractionMode.GAME, False)

    assert not stack.can_interact(InteractionMode.GAME)

import logging
import pytest
from warchef.content import Speaker, UnitKind
from warchef.dialogue.events import ApplyInstruction, Composite, NO_EVENT
from warchef.dialogue.graph import AddFood, AddUnits, SetGlobalVariable
from warchef.dialogue.walker import GraphWalker

def lower(articy, name, state, **kwargs):
    walker = GraphWalker(articy.dialogue(name), state, articy.global_variables, **kwargs)
    return walker.lower()

def texts(lines):
    return [line.text for line in lines]

def test_linear_chain_with_hub_and_jump(export, load, game_state):
    export.dialogue("Chain", ["0x01"])
    export.fragment("0x01", "one", ["0x02"])
    export.hub("0x02", ["0x03"])
    export.fragment("0x03", "two", ["0x04"])
    export.jump("0x04", "0x05")
    export.fragment("0x05", "three")

    lines, epilogue = lower(load(), "Chain", game_state)

    assert texts(lines) == ["one", "two", "three"]
    assert epilogue == NO_EVENT
    assert not any(line.has_choices for line in lines)

@pytest.mark.parametrize("value, expected", [
    ("True", ["met"]),
    ("False", ["stranger"]),
])
def test_condition_uses_pin_zero_when_equal(export, load, game_state, value, expected):
    export.variable("MetGeneral", value)
    export.dialogue("D", ["0x01"])
    export.condition("0x01", "Game.MetGeneral == true", ["0x02"], ["0x03"])
    export.fragment("0x02", "met")
    export.fragment("0x03", "stranger")

    lines, _ = lower(load(), "D", game_state)

    assert texts(lines) == expected

def test_live_value_shadows_default(export, load, game_state):
    export.variable("MetGeneral", "False")
    export.dialogue("D", ["0x01"])
    export.condition("0x01", "Game.MetGeneral == true", ["0x02"], ["0x03"])
    export.fragment("0x02", "met")
    export.fragment("0x03", "stranger")
    game_state.set_variable("MetGeneral", True)

    lines, _ = lower(load(), "D", game_state)

    assert texts(lines) == ["met"]

def test_unknown_variable_is_false(export, load, game_state, caplog):
    export.variable("Nowhere", "True")
    export.dialogue("D", ["0x01"])
    export.condition("0x01", "Game.Nowhere == false", ["0x02"], ["0x03"])
    export.fragment("0x02", "false")
    export.fragment("0x03", "true")
    articy = load()

    # Neither the state nor the defaults know the variable
    walker = GraphWalker(articy.dialogue("D"), game_state, {})
    with caplog.at_level(logging.WARNING):
        lines, _ = walker.lower()

    assert texts(lines) == ["false"]
    assert "Nowhere" in caplog.text

def test_missing_condition_pin_ends_walk(export, load, game_state):
    export.variable("Flag", "False")
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "before", ["0x02"])
    export.condition("0x02", "Game.Flag == true", ["0x03"], [])
    export.fragment("0x03", "after")

    lines, _ = lower(load(), "D", game_state)

    assert texts(lines) == ["before"]

def test_instruction_effects_attach_to_next_line(export, load, game_state):
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "first", ["0x02"])
    export.instruction("0x02", 'AddUnits("Peasant", 5); AddFood(3)', ["0x03"])
    export.fragment("0x03", "second")

    lines, epilogue = lower(load(), "D", game_state)

    assert lines[0].event == NO_EVENT
    assert lines[1].event == Composite((
        ApplyInstruction(AddUnits(UnitKind.PEASANT, 5)),
        ApplyInstruction(AddFood(3)),
    ))
    assert epilogue == NO_EVENT
    # Lowering never touches the state
    assert game_state.food == 0

def test_trailing_effects_become_epilogue(export, load, game_state):
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "only", ["0x02"])
    export.instruction("0x02", "AddFood(20)")

    lines, epilogue = lower(load(), "D", game_state)

    assert texts(lines) == ["only"]
    assert epilogue == ApplyInstruction(AddFood(20))

def test_assignment_is_visible_to_later_conditions(export, load, game_state):
    export.variable("Warned", "False")
    export.dialogue("D", ["0x01"])
    export.instruction("0x01", "Game.Warned = true", ["0x02"])
    export.condition("0x02", "Game.Warned == true", ["0x03"], ["0x04"])
    export.fragment("0x03", "warned")
    export.fragment("0x04", "not warned")

    lines, _ = lower(load(), "D", game_state)

    assert texts(lines) == ["warned"]
    assert lines[0].event == ApplyInstruction(SetGlobalVariable("Warned", True))
    assert game_state.get_variable("Warned") is None

def test_cycle_ends_walk(export, load, game_state, caplog):
    export.dialogue("Loop", ["0x01"])
    export.fragment("0x01", "again", ["0x02"])
    export.hub("0x02", ["0x03"])
    export.jump("0x03", "0x01")

    with caplog.at_level(logging.WARNING):
        lines, _ = lower(load(), "Loop", game_state)

    assert texts(lines) == ["again"]
    assert "re-entered" in caplog.text

def test_reply_can_loop_back_to_the_choices(export, load, game_state, caplog):
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "Questions?", ["0x02"])
    export.hub("0x02", ["0x03", "0x04"])
    export.fragment("0x03", "Ask", ["0x05"])
    export.fragment("0x04", "Leave")
    export.fragment("0x05", "Answer", ["0x06"])
    export.jump("0x06", "0x02")

    lines, _ = lower(load(), "D", game_state)

    with caplog.at_level(logging.WARNING):
        for _ in range(3):
            [answer], _ = lines[-1].choices[0].branch()
            assert answer.text == "Answer"
            assert [choice.label for choice in answer.choices] == ["Ask", "Leave"]
            lines = [answer]

    assert "re-entered" not in caplog.text

def test_cycle_inside_a_branch_ends_walk(export, load, game_state, caplog):
    export.dialogue("D", ["0x01", "0x02"])
    export.fragment("0x01", "Spin", ["0x03"])
    export.fragment("0x02", "Stop")
    export.fragment("0x03", "round", ["0x04"])
    export.jump("0x04", "0x03")

    lines, _ = lower(load(), "D", game_state)
    with caplog.at_level(logging.WARNING):
        branch, _ = lines[0].choices[0].branch()

    assert texts(branch) == ["round"]
    assert "re-entered" in caplog.text

def test_fan_out_becomes_choices(export, load, game_state):
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "Which way?", ["0x02", "0x03"], speaker="0x0000000000000000")
    export.fragment("0x02", "Left", ["0x04"])
    export.fragment("0x03", "Right", ["0x05"])
    export.fragment("0x04", "You went left.")
    export.fragment("0x05", "You went right.")

    lines, _ = lower(load(), "D", game_state)

    assert texts(lines) == ["Which way?"]
    prompt = lines[0]
    assert [choice.label for choice in prompt.choices] == ["Left", "Right"]
    branch, epilogue = prompt.choices[1].branch()
    assert texts(branch) == ["You went right."]
    assert epilogue == NO_EVENT

def test_fan_out_at_start_gets_an_empty_prompt(export, load, game_state):
    export.dialogue("D", ["0x01", "0x02"])
    export.fragment("0x01", "Yes")
    export.fragment("0x02", "No")

    lines, _ = lower(load(), "D", game_state)

    assert len(lines) == 1
    assert lines[0].speaker == Speaker.PLAYER
    assert lines[0].text == ""
    assert [choice.label for choice in lines[0].choices] == ["Yes", "No"]

def test_choice_route_effects_and_conditions(export, load, game_state):
    export.variable("HasSword", "False")
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "Pick", ["0x02", "0x03", "0x04"])
    export.instruction("0x02", "AddFood(5)", ["0x05"])
    export.condition("0x03", "Game.HasSword == true", ["0x06"], [])
    export.hub("0x04", [])
    export.fragment("0x05", "Eat")
    export.fragment("0x06", "Fight")

    lines, _ = lower(load(), "D", game_state)

    [eat] = lines[0].choices
    assert eat.label == "Eat"
    assert eat.event == ApplyInstruction(AddFood(5))

def test_pending_effects_join_every_choice(export, load, game_state):
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "Pick", ["0x02"])
    export.instruction("0x02", "AddFood(1)", ["0x03", "0x04"])
    export.fragment("0x03", "A")
    export.fragment("0x04", "B")

    lines, _ = lower(load(), "D", game_state)

    assert [choice.event for choice in lines[0].choices] == [ApplyInstruction(AddFood(1))] * 2

def test_branches_are_lowered_when_chosen(export, load, game_state):
    export.variable("Flag", "False")
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "Pick", ["0x02", "0x03"])
    export.fragment("0x02", "A", ["0x04"])
    export.fragment("0x03", "B")
    export.condition("0x04", "Game.Flag == true", ["0x05"], ["0x06"])
    export.fragment("0x05", "flag set")
    export.fragment("0x06", "flag clear")

    lines, _ = lower(load(), "D", game_state)
    game_state.set_variable("Flag", True)
    branch, _ = lines[0].choices[0].branch()

    assert texts(branch) == ["flag set"]

def test_max_choices(export, load, game_state):
    export.dialogue("D", ["0x01", "0x02", "0x03"])
    export.fragment("0x01", "A")
    export.fragment("0x02", "B")
    export.fragment("0x03", "C")

    lines, _ = lower(load(), "D", game_state, max_choices=2)

    assert [choice.label for choice in lines[0].choices] == ["A", "B"]

def test_no_options_left_ends_walk(export, load, game_state):
    export.dialogue("D", ["0x01"])
    export.fragment("0x01", "Nothing to say", ["0x02", "0x03"])
    export.hub("0x02")
    export.hub("0x03")

    lines, _ = lower(load(), "D", game_state)

    assert texts(lines) == ["Nothing to say"]
    assert not lines[0].has_choices

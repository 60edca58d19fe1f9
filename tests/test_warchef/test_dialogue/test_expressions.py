import pytest
from warchef.content import Item, UnitKind
from warchef.dialogue.expressions import ExpressionError, parse_arguments, parse_condition, parse_instructions
from warchef.dialogue.graph import (
    AddFood,
    AddItem,
    AddUnits,
    SetGlobalVariable,
    SubtractFood,
    SubtractUnits,
)

def test_add_units():
    assert parse_instructions('AddUnits("Peasant", 5)') == [AddUnits(UnitKind.PEASANT, 5)]

def test_assignment():
    assert parse_instructions("Game.Foo = true") == [SetGlobalVariable("Foo", True)]
    assert parse_instructions("Game.Foo=false;") == [SetGlobalVariable("Foo", False)]

def test_statements_keep_text_order():
    text = """
    SubtractUnits("Warrior", 2);
    AddFood(10);
    SubtractFood(+3);

    AddItem("Bog Hard-Weeds");
    Game.MetGeneral = true;
    """

    assert parse_instructions(text) == [
        SubtractUnits(UnitKind.WARRIOR, 2),
        AddFood(10),
        SubtractFood(3),
        AddItem(Item.BOG_HARD_WEEDS),
        SetGlobalVariable("MetGeneral", True),
    ]

def test_empty_instruction():
    assert parse_instructions("") == []
    assert parse_instructions(" ; ;") == []

@pytest.mark.parametrize("text", [
    'AddUnits(5)',                      # arity
    'AddUnits("Peasant")',
    'AddUnits("Peasant", 5, 6)',
    'AddUnits(5, "Peasant")',           # argument types
    'AddFood("ten")',
    'AddUnits("Dragon", 5)',            # closed tables
    'AddItem("Excalibur")',
    'AddFood(-1)',                      # negative amount
    'Teleport("Home")',                 # unknown function
    'AddFood(1',                        # syntax
    'AddFood(1) now',
    'AddFood(1,)',
    'AddFood(one)',
    'Game.Foo == true',                 # comparison is not an assignment
    'Game.Foo = maybe',
    'Game. = true',
    'Game.Foo',
    'just words',
])
def test_invalid_instructions_are_rejected(text):
    with pytest.raises(ExpressionError):
        parse_instructions(text)

def test_error_names_the_statement():
    with pytest.raises(ExpressionError) as info:
        parse_instructions('AddFood(1); AddUnits(5)')

    assert info.value.text == 'AddFood(1); AddUnits(5)'
    assert info.value.segment == 'AddUnits(5)'
    assert "AddUnits expects (string, integer)" in str(info.value)

def test_expression_error_is_value_error():
    with pytest.raises(ValueError):
        parse_condition("Foo == true")

def test_parse_arguments():
    assert parse_arguments('"a, b", -4 , "c"') == ["a, b", -4, "c"]
    assert parse_arguments("   ") == []

@pytest.mark.parametrize("text, expected", [
    ("Game.Bar==false", ("Bar", False)),
    ("Game.Bar==false;", ("Bar", False)),
    ("Game.Bar == true", ("Bar", True)),
    ("  Game.Bar == true;  ", ("Bar", True)),
])
def test_condition(text, expected):
    assert parse_condition(text) == expected

@pytest.mark.parametrize("text", [
    "Bar == true",
    "Other.Bar == true",
    "Game.Bar = true",
    "Game.Bar == true == false",
    "Game.Bar == yes",
    "Game.Bar == true;;",
    "Game. == true",
])
def test_invalid_conditions_are_rejected(text):
    with pytest.raises(ExpressionError):
        parse_condition(text)

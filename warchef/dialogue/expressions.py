"""
Parsers for the script snippets articy stores in Instruction and
Condition nodes.

Instruction text is a ';' separated list of statements:

```
AddUnits("Peasant", 5);
AddItem("Celery Quartz");
Game.MetGeneral = true;
```

Condition text is a single comparison of a Game variable with a literal:

```
Game.MetGeneral == false;
```
"""

from __future__ import annotations

import re
from typing import Callable, Optional, Union

from warchef.content import Item, UnitKind
from warchef.dialogue.graph import (
    AddFood,
    AddItem,
    AddUnits,
    InstructionEffect,
    SetGlobalVariable,
    SubtractFood,
    SubtractUnits,
)

NAMESPACE = "Game"

IDENT_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
ARG_PATTERN = re.compile(r'\s*(?:"([^"]*)"|([+-]?\d+))\s*(,|$)')

Argument = Union[str, int]


class ExpressionError(ValueError):
    """A Condition or Instruction expression that cannot be parsed."""

    def __init__(self, message: str, text: str, segment: Optional[str] = None):
        self.text = text
        self.segment = segment
        detail = f" in {segment!r}" if segment is not None and segment != text else ""
        super().__init__(f"{message}{detail}")


def _unit(name: str) -> UnitKind:
    kind = UnitKind.from_name(name)
    if kind is None:
        raise LookupError(f"unknown unit kind {name!r}")
    return kind


def _item(name: str) -> Item:
    item = Item.from_name(name)
    if item is None:
        raise LookupError(f"unknown item {name!r}")
    return item


def _amount(value: int) -> int:
    if value < 0:
        raise LookupError(f"amount must not be negative, got {value}")
    return value


# name -> (argument types, builder)
FUNCTIONS: dict[str, tuple[tuple[type, ...], Callable[..., InstructionEffect]]] = {
    "AddUnits": ((str, int), lambda kind, amount: AddUnits(_unit(kind), _amount(amount))),
    "SubtractUnits": ((str, int), lambda kind, amount: SubtractUnits(_unit(kind), _amount(amount))),
    "AddFood": ((int,), lambda amount: AddFood(_amount(amount))),
    "SubtractFood": ((int,), lambda amount: SubtractFood(_amount(amount))),
    "AddItem": ((str,), lambda name: AddItem(_item(name))),
}


def _type_name(kind: type) -> str:
    return "string" if kind is str else "integer"


def parse_arguments(text: str) -> list[Argument]:
    """Parse a comma separated list of string and integer literals."""
    args: list[Argument] = []
    if not text.strip():
        return args

    pos = 0
    while pos < len(text):
        match = ARG_PATTERN.match(text, pos)
        if not match or match.end() == pos:
            raise ValueError(f"invalid argument {text[pos:].strip()!r}")
        string, number, separator = match.groups()
        args.append(string if string is not None else int(number))
        pos = match.end()
        if separator == ",":
            if pos >= len(text):
                raise ValueError("trailing ','")
        else:
            break
    return args


def _parse_call(segment: str, text: str) -> InstructionEffect:
    open_paren = segment.index("(")
    close_paren = segment.rfind(")")
    if close_paren < open_paren:
        raise ExpressionError("expected ')'", text, segment)
    if segment[close_paren + 1:].strip():
        raise ExpressionError("unexpected text after ')'", text, segment)

    name = segment[:open_paren].strip()
    if name not in FUNCTIONS:
        raise ExpressionError(f"unknown function {name!r}", text, segment)

    try:
        args = parse_arguments(segment[open_paren + 1:close_paren])
    except ValueError as e:
        raise ExpressionError(str(e), text, segment) from e

    signature, build = FUNCTIONS[name]
    if len(args) != len(signature) or any(
        not isinstance(arg, expected) for arg, expected in zip(args, signature)
    ):
        expected = ", ".join(_type_name(t) for t in signature)
        raise ExpressionError(f"{name} expects ({expected})", text, segment)

    try:
        return build(*args)
    except LookupError as e:
        raise ExpressionError(str(e.args[0]), text, segment) from e


def _parse_bool(value: str) -> Optional[bool]:
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def _parse_assignment(segment: str, text: str) -> SetGlobalVariable:
    period = segment.index(".")
    assignment = segment[period + 1:]
    if "=" not in assignment or "==" in assignment:
        raise ExpressionError("expected an assignment 'Game.Name = true|false'", text, segment)

    name, _, value = assignment.partition("=")
    name = name.strip()
    if not IDENT_PATTERN.match(name):
        raise ExpressionError(f"invalid variable name {name!r}", text, segment)

    parsed = _parse_bool(value.strip())
    if parsed is None:
        raise ExpressionError(f"invalid variable assignment value {value.strip()!r}", text, segment)
    return SetGlobalVariable(name, parsed)


def parse_instructions(text: str) -> list[InstructionEffect]:
    """
    Parse an Instruction node's expression.

    Args:
        text: Raw expression text

    Returns:
        Effects in the order they appear

    Raises:
        ExpressionError: If any statement is malformed
    """
    effects: list[InstructionEffect] = []
    for raw_segment in text.split(";"):
        segment = raw_segment.strip()
        if not segment:
            continue

        if segment.startswith(f"{NAMESPACE}."):
            effects.append(_parse_assignment(segment, text))
        elif "(" in segment:
            effects.append(_parse_call(segment, text))
        else:
            raise ExpressionError("invalid statement", text, segment)
    return effects


def parse_condition(text: str) -> tuple[str, bool]:
    """
    Parse a Condition node's expression.

    Returns:
        (variable name, expected value)

    Raises:
        ExpressionError: If the text is not 'Game.Name == true|false'
    """
    condition = text.strip()
    if not condition.startswith(f"{NAMESPACE}."):
        raise ExpressionError(f"condition must start with '{NAMESPACE}.'", text)

    sides = condition[len(NAMESPACE) + 1:].split("==")
    if len(sides) != 2:
        raise ExpressionError("expected exactly one '=='", text)

    name = sides[0].strip()
    if not IDENT_PATTERN.match(name):
        raise ExpressionError(f"invalid variable name {name!r}", text)

    value = sides[1].strip()
    if value.endswith(";"):
        value = value[:-1]
    expected = _parse_bool(value)
    if expected is None:
        raise ExpressionError(f"invalid condition value {sides[1].strip()!r}", text)
    return name, expected

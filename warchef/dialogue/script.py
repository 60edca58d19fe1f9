"""
Scripts - presentable line sequences with optional choice branches.

A Script is what the runtime plays. Authors can build one by hand from
Lines and Choices, or lower a DialogueGraph into one with
Script.from_graph(), in which case the lines are produced lazily: the
trunk when the script becomes active, each branch when it is chosen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Mapping, Optional, Sequence

from warchef.content import Speaker
from warchef.dialogue.events import NO_EVENT, DialogueEvent, combine

if TYPE_CHECKING:
    from warchef.dialogue.graph import DialogueGraph
    from warchef.dialogue.walker import VariableSource


@dataclass(frozen=True)
class Choice:
    """
    One option of a choice point.

    Attributes:
        event: Fired once when this option is picked
        label: Text shown for the option
        lines: Branch played after picking (hand-built scripts)
        expand: Produces (branch, epilogue) on demand (graph scripts)
    """
    event: DialogueEvent
    label: str
    lines: tuple[Line, ...] = ()
    expand: Optional[Callable[[], tuple[Sequence[Line], DialogueEvent]]] = field(default=None, compare=False)

    def branch(self) -> tuple[list[Line], DialogueEvent]:
        if self.expand is not None:
            lines, epilogue = self.expand()
            return list(lines), epilogue
        return list(self.lines), NO_EVENT


@dataclass(frozen=True)
class Line:
    """A single presentable line."""
    speaker: Speaker
    text: str
    event: DialogueEvent = NO_EVENT
    choices: tuple[Choice, ...] = ()

    @property
    def has_choices(self) -> bool:
        return len(self.choices) > 0


class Script:
    """
    A cursor over a sequence of lines.

    Args:
        lines: Lines to play, or None when a source is given
        name: Label for logging
        source: Called once, when the script becomes active, to produce
            (lines, epilogue)
        epilogue: Fired once when the last line is left behind
    """

    def __init__(
        self,
        lines: Optional[Sequence[Line]] = None,
        *,
        name: str = "",
        source: Optional[Callable[[], tuple[Sequence[Line], DialogueEvent]]] = None,
        epilogue: DialogueEvent = NO_EVENT,
    ):
        self.name = name
        self._lines: Optional[list[Line]] = list(lines) if lines is not None else None
        self._source = source
        self.epilogue = epilogue
        self._cursor = 0
        if self._lines is None and self._source is None:
            self._lines = []

    @classmethod
    def from_graph(
        cls,
        graph: DialogueGraph,
        variables: VariableSource,
        defaults: Optional[Mapping[str, bool]] = None,
        max_choices: Optional[int] = None,
    ) -> Script:
        """Lower a dialogue graph; conditions read `variables` when played."""
        from warchef.dialogue.walker import GraphWalker

        walker = GraphWalker(graph, variables, defaults, max_choices)
        return cls(name=graph.technical_name, source=walker.lower)

    @property
    def started(self) -> bool:
        return self._lines is not None

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Optional[Line]:
        if self._lines is None or self._cursor >= len(self._lines):
            return None
        return self._lines[self._cursor]

    @property
    def remaining(self) -> list[Line]:
        """Lines from the current one onwards."""
        if self._lines is None:
            return []
        return self._lines[self._cursor:]

    def begin(self) -> Optional[Line]:
        """Materialize the lines (if lazy) and return the first one."""
        if self._lines is None:
            lines, epilogue = self._source()
            self._lines = list(lines)
            self.epilogue = epilogue
        self._cursor = 0
        return self.current

    def next_line(self) -> Optional[Line]:
        """Move past the current line; None when exhausted."""
        if self._lines is not None and self._cursor < len(self._lines):
            self._cursor += 1
        return self.current

    def choose(self, choice: Choice) -> Optional[Line]:
        """Replace the remaining lines with a choice's branch."""
        self._lines, epilogue = choice.branch()
        self.epilogue = combine((self.epilogue, epilogue))
        self._cursor = 0
        return self.current

    def __repr__(self) -> str:
        size = "lazy" if self._lines is None else len(self._lines)
        return f"Script({self.name!r}, lines={size}, cursor={self._cursor})"

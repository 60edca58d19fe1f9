"""
Dialogue runtime - plays queued scripts one line at a time.

The runtime is an explicit context object created at startup and handed
to whatever needs it. It is idle, presenting a line, or waiting for the
player to pick a choice:

    IDLE --queue--> PRESENTING --advance--> PRESENTING | IDLE
                    AWAITING_CHOICE --choose--> PRESENTING | IDLE

Events attached to lines fire once, when the line becomes current;
events attached to choices fire once, when the choice is picked.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum, auto
from typing import Optional

from dialogue_engine.core.events import EventBus
from warchef.dialogue.events import Composite, DialogueEvent, DialogueSignal, NoEvent
from warchef.dialogue.script import Line, Script

logger = logging.getLogger(__name__)


class DialogueState(Enum):
    IDLE = auto()
    PRESENTING = auto()
    AWAITING_CHOICE = auto()


class Dialogue:
    """
    Queue of scripts plus the line currently on screen.

    Args:
        event_bus: Bus that receives DialogueSignal notifications
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.events = event_bus or EventBus()
        self._scripts: deque[Script] = deque()
        self._line: Optional[Line] = None

    @property
    def state(self) -> DialogueState:
        if self._line is None:
            return DialogueState.IDLE
        if self._line.has_choices:
            return DialogueState.AWAITING_CHOICE
        return DialogueState.PRESENTING

    @property
    def active(self) -> bool:
        """True while a line is on screen; input goes to dialogue first."""
        return self._line is not None

    @property
    def current_line(self) -> Optional[Line]:
        return self._line

    @property
    def current_script(self) -> Optional[Script]:
        return self._scripts[0] if self._line is not None else None

    @property
    def queued(self) -> int:
        """Scripts waiting behind the active one."""
        return max(len(self._scripts) - 1, 0) if self._line is not None else len(self._scripts)

    def queue(self, script: Script) -> None:
        """Append a script; an idle runtime starts it at once."""
        self._scripts.append(script)
        logger.debug("Queued %r", script)
        if self._line is None:
            self._activate_next()

    def advance(self) -> bool:
        """
        Move past the current line.

        Returns:
            False if nothing was presented (idle or waiting for a choice)
        """
        if self.state is not DialogueState.PRESENTING:
            logger.debug("advance() ignored while %s", self.state.name)
            return False

        line = self._scripts[0].next_line()
        if line is not None:
            self._present(line)
        else:
            self._finish_script()
        return True

    def choose(self, index: int) -> bool:
        """
        Pick one of the current line's choices.

        Args:
            index: Zero-based choice index

        Returns:
            False if there was no choice to make or the index is out of range
        """
        if self.state is not DialogueState.AWAITING_CHOICE:
            logger.debug("choose(%d) ignored while %s", index, self.state.name)
            return False

        choices = self._line.choices
        if not 0 <= index < len(choices):
            logger.debug("choose(%d) ignored, %d choices offered", index, len(choices))
            return False

        choice = choices[index]
        self._fire(choice.event)
        line = self._scripts[0].choose(choice)
        if line is not None:
            self._present(line)
        else:
            self._finish_script()
        return True

    def clear(self) -> None:
        """Drop the queue and the current line without firing anything."""
        dropped = len(self._scripts)
        self._scripts.clear()
        self._line = None
        logger.debug("Cleared dialogue, dropped %d scripts", dropped)
        self.events.publish(DialogueSignal.CLEARED)

    def _present(self, line: Line) -> None:
        starting = self._line is None
        self._line = line
        if starting:
            self.events.publish(DialogueSignal.STARTED, script=self._scripts[0])
        self._fire(line.event)
        self.events.publish(DialogueSignal.LINE_SHOWN, line=line)
        if line.has_choices:
            self.events.publish(DialogueSignal.CHOICES_SHOWN, line=line, choices=line.choices)

    def _finish_script(self) -> None:
        script = self._scripts.popleft()
        self._fire(script.epilogue)
        logger.debug("Finished %r", script)
        if not self._activate_next():
            self._line = None
            self.events.publish(DialogueSignal.ENDED)

    def _activate_next(self) -> bool:
        """Start the first queued script that has a line; False if none."""
        while self._scripts:
            script = self._scripts[0]
            line = script.begin()
            if line is not None:
                self._present(line)
                return True
            # Nothing to show, but effects authored in it still apply
            self._scripts.popleft()
            self._fire(script.epilogue)
            logger.debug("Skipped empty %r", script)
        return False

    def _fire(self, event: DialogueEvent) -> None:
        if isinstance(event, NoEvent):
            return
        if isinstance(event, Composite):
            for member in event.events:
                self._fire(member)
            return
        self.events.publish(DialogueSignal.EVENT, event=event)

"""
Typed event bus for decoupled communication.

Event types are Enum members, so listeners subscribe to a closed set of
signals instead of magic strings.

Usage:
    class DialogueSignal(Enum):
        EVENT = auto()
        LINE_SHOWN = auto()

    bus.subscribe(DialogueSignal.LINE_SHOWN, on_line_shown)
    bus.publish(DialogueSignal.LINE_SHOWN, line=line)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Keyword payload given to publish()
        consumed: Whether a handler stopped propagation
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop propagation to lower priority handlers."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class _Subscription:
    priority: int
    target: Any
    one_shot: bool

    def resolve(self) -> EventHandler | None:
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


class EventBus:
    """
    Central publish/subscribe hub.

    Features:
    - Enum keyed event types
    - Priority ordering (higher first, ties keep subscription order)
    - Optional weak references
    - One-shot handlers
    - Event consumption
    - Events published from inside a handler are queued and dispatched
      after the current dispatch finishes
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = False,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback receiving the Event
            priority: Higher priority handlers are called first
            one_shot: Remove the handler after its first call
            weak: Hold the handler weakly (bound methods use WeakMethod)
        """
        if weak:
            target: Any = WeakMethod(handler) if hasattr(handler, "__self__") else ref(handler)
        else:
            target = handler

        subscriptions = self._subscriptions.setdefault(event_type, [])
        index = len(subscriptions)
        for i, existing in enumerate(subscriptions):
            if priority > existing.priority:
                index = i
                break
        subscriptions.insert(index, _Subscription(priority, target, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subscriptions = self._subscriptions.get(event_type)
        if not subscriptions:
            return
        self._subscriptions[event_type] = [
            s for s in subscriptions if s.resolve() != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        if self._dispatching:
            self._pending.append(event)
        else:
            self._dispatch(event)

    def has_subscribers(self, event_type: Enum) -> bool:
        return bool(self._subscriptions.get(event_type))

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop every handler, or only those of one event type."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        self._dispatching = True
        try:
            subscriptions = self._subscriptions.get(event.type, [])
            dead: list[_Subscription] = []

            for subscription in list(subscriptions):
                handler = subscription.resolve()
                if handler is None:
                    dead.append(subscription)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception("Error in event handler for %s", event.type)

                if subscription.one_shot:
                    dead.append(subscription)
                if event.consumed:
                    break

            for subscription in dead:
                if subscription in subscriptions:
                    subscriptions.remove(subscription)
        finally:
            self._dispatching = False

        while self._pending:
            self._dispatch(self._pending.pop(0))

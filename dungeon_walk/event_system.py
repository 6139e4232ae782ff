"""
Event bus for dungeon generation and play.

Generation phases announce their completion here, and agents report moves,
attacks and the player reaching the exit. Hosts subscribe to whatever they
need to render or react to.
"""

import sys
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, DefaultDict, Dict, List, Optional


class Event(Enum):
    """Event types raised while building and playing a dungeon."""

    # Generation phases
    FLOOR_COMPLETE = auto()  # kwargs: floor_count
    CLASSIFICATION_COMPLETE = auto()  # kwargs: wall_count
    POPULATION_COMPLETE = auto()  # kwargs: exit, placement_count

    # Level lifecycle
    LEVEL_START = auto()
    LEVEL_END = auto()  # kwargs: agent_id, exit

    # Agents
    AGENT_ADDED = auto()  # kwargs: agent_id
    AGENT_REMOVED = auto()  # kwargs: agent_id
    AGENT_MOVED = auto()  # kwargs: agent_id, start, end
    ENEMY_ATTACK = auto()  # kwargs: agent_id, target_id, hit, damage


@dataclass
class EventData:
    """One emitted event and its keyword payload."""

    event: Event
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.kwargs[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.kwargs.get(key, default)

    def __repr__(self) -> str:
        parts = [self.event.name] + [f"{k}={v}" for k, v in self.kwargs.items()]
        return f"EventData({', '.join(parts)})"


EventHandler = Callable[[EventData], None]


class EventBus:
    """
    Publish/subscribe hub for dungeon events.

    Handlers run synchronously: first those subscribed to the specific event,
    then those subscribed to every event, each group in subscription order.
    A failing handler is reported on stderr and the rest still run, unless
    debug is on, in which case the error propagates to the emitter.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[Event, List[EventHandler]] = defaultdict(list)
        self._catch_all: List[EventHandler] = []
        self._debug: bool = False

    def set_debug(self, debug: bool) -> None:
        """Print every emitted event and stop swallowing handler errors."""
        self._debug = debug

    def subscribe(self, event: Event, handler: EventHandler) -> Callable[[], None]:
        """Register a handler. Returns a callable that unsubscribes it again."""
        self._handlers[event].append(handler)
        return lambda: self.unsubscribe(event, handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler for every event, e.g. a recorder or logger."""
        self._catch_all.append(handler)

    def unsubscribe(self, event: Event, handler: EventHandler) -> None:
        """
        Raises:
            ValueError: If handler was not subscribed to this event
        """
        handlers = self._handlers.get(event)
        if not handlers or handler not in handlers:
            raise ValueError(f"Handler not subscribed to event {event}")
        handlers.remove(handler)

    def emit(self, event: Event, **kwargs: Any) -> None:
        event_data = EventData(event=event, kwargs=kwargs)

        if self._debug:
            print(f"[EventBus] {event_data}", file=sys.stderr)

        # Copy so handlers may unsubscribe themselves mid-dispatch
        for handler in list(self._handlers.get(event, ())) + list(self._catch_all):
            try:
                handler(event_data)
            except Exception as e:
                print(f"[EventBus] {event.name} handler failed: {e!r}", file=sys.stderr)
                if self._debug:
                    raise

    def clear(self) -> None:
        self._handlers.clear()
        self._catch_all.clear()

    def handler_count(self, event: Optional[Event] = None) -> int:
        """Handlers for one event, or across all events when event is None."""
        if event is not None:
            return len(self._handlers.get(event, ()))
        return sum(len(h) for h in self._handlers.values()) + len(self._catch_all)

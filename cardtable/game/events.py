"""Table events: the engine's record of everything that happens."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of table events."""

    # Game flow
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()
    GAME_ENDED = auto()

    # Betting
    BETTING_OPENED = auto()
    CHIP_ADDED = auto()
    BET_CLAMPED = auto()
    BET_PLACED = auto()

    # Cards
    DECK_SHUFFLED = auto()
    DEAL_ABORTED = auto()
    CARD_DEALT = auto()

    # Player moves
    PLAYER_HIT = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_STAND = auto()
    PLAYER_BUSTS = auto()
    PLAYER_BLACKJACK = auto()

    # Dealer
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Settlement
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()
    PLAYER_BANKRUPT = auto()

    # Rejected input
    INVALID_ACTION = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable table event.

    Events are how the engine tells a presentation layer what happened; the
    engine itself never formats output.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Event emitter with a history log.

    Handlers subscribe to one event type, or to every event with None.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[GameEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        self._event_history.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)

        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """
        Create and emit a new event.

        Args:
            event_type: Type of event
            **data: Event data

        Returns:
            The created event
        """
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        return self._event_history.copy()

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        """Return the logged events of one type, oldest first."""
        return [e for e in self._event_history if e.event_type == event_type]

    def clear_history(self) -> None:
        self._event_history.clear()

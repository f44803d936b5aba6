"""Table engine and round state management."""

from cardtable.game.events import EventEmitter, EventType, GameEvent
from cardtable.game.state import RoundState
from cardtable.game.results import (
    FinalStanding,
    Outcome,
    PlayerResult,
    RoundResult,
    TableView,
)
from cardtable.game.resolution import dealer_logic, is_soft, settle_hand
from cardtable.game.engine import BlackjackTable, Move, Player, game_over

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "RoundState",
    "FinalStanding",
    "Outcome",
    "PlayerResult",
    "RoundResult",
    "TableView",
    "dealer_logic",
    "is_soft",
    "settle_hand",
    "BlackjackTable",
    "Move",
    "Player",
    "game_over",
]

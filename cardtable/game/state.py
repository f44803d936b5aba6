"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Table state machine states.

    Flow: BETTING → DEALING → PLAYER_TURNS → DEALER_TURN → PAYOUT → DONE
    """

    # Active players place bets in id order
    BETTING = auto()

    # Deck rebuilt and initial cards dealt
    DEALING = auto()

    # Each active player plays their hand
    PLAYER_TURNS = auto()

    # Hole card revealed, dealer draws
    DEALER_TURN = auto()

    # Bets settled against the dealer's final hand
    PAYOUT = auto()

    # Round finished, results available
    DONE = auto()

    # Every player bankrupt, or the table quit
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


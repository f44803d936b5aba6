"""Structured round results and table views handed to the presentation layer."""

from dataclasses import dataclass, replace
from enum import Enum, auto

from cardtable.cards import Card
from cardtable.hand import Hand


class Outcome(Enum):
    """How a player's bet was settled."""

    BUST = auto()
    DEALER_BUST = auto()
    BLACKJACK = auto()
    WIN = auto()
    LOSS = auto()
    PUSH = auto()

    @property
    def is_win(self) -> bool:
        return self in (Outcome.DEALER_BUST, Outcome.BLACKJACK, Outcome.WIN)

    @property
    def is_loss(self) -> bool:
        return self in (Outcome.BUST, Outcome.LOSS)


@dataclass(frozen=True)
class PlayerResult:
    """One player's settlement for a round."""

    player_id: int
    outcome: Outcome
    bet: int
    delta: int  # change applied to the balance
    balance: int  # balance after settlement
    bankrupt: bool = False


@dataclass(frozen=True)
class HandView:
    """Snapshot of a hand. Hidden cards keep their ``hidden`` flag."""

    cards: tuple[Card, ...]
    busted: bool

    @classmethod
    def of(cls, hand: Hand) -> "HandView":
        return cls(tuple(replace(card) for card in hand.cards), hand.busted)

    @property
    def visible_cards(self) -> tuple[Card, ...]:
        return tuple(card for card in self.cards if not card.hidden)


@dataclass(frozen=True)
class RoundResult:
    """Everything the caller needs to report a finished round."""

    round_number: int
    dealer: HandView
    dealer_total: int
    dealer_busted: bool
    players: tuple[PlayerResult, ...]

    def for_player(self, player_id: int) -> PlayerResult | None:
        for result in self.players:
            if result.player_id == player_id:
                return result
        return None


@dataclass(frozen=True)
class PlayerView:
    player_id: int
    balance: int
    bet: int
    active: bool
    hand: HandView | None


@dataclass(frozen=True)
class TableView:
    """Current table contents, safe to render at any point in a round."""

    round_number: int
    state: str
    dealer: HandView
    players: tuple[PlayerView, ...]
    current_player: int | None


@dataclass(frozen=True)
class FinalStanding:
    """End-of-game report line for one player."""

    player_id: int
    balance: int
    net: int  # balance minus the starting balance
    bankrupt: bool

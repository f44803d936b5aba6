"""Multi-player blackjack table engine with a round state machine."""

from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import Callable

from transitions import Machine

from cardtable.cards import Card, Deck
from cardtable.chips import Balance, Bet, Chip
from cardtable.errors import EmptyDeck, ErrorWhileBetting
from cardtable.game.events import EventEmitter, EventType, GameEvent
from cardtable.game.resolution import dealer_logic, settle_hand
from cardtable.game.results import (
    FinalStanding,
    HandView,
    PlayerResult,
    PlayerView,
    RoundResult,
    TableView,
)
from cardtable.game.state import RoundState
from cardtable.hand import Hand, busting_probability
from config import GameConfig

CARDS_PER_SET = 52


class Move(Enum):
    """Moves a player can make on their turn."""

    HIT = auto()
    DOUBLE_DOWN = auto()
    STAND = auto()


@dataclass
class Player:
    """A seat at the table. Balances persist across rounds."""

    id: int
    balance: Balance = field(default_factory=Balance)
    bet: Bet = field(default_factory=Bet)
    active: bool = True

    @property
    def bankroll(self) -> int:
        return self.balance.sum()

    def mark_bankrupt(self) -> None:
        self.active = False


def game_over(players: list[Player]) -> bool:
    """The game is over once no player is active."""
    return all(not player.active for player in players)


class BlackjackTable:
    """
    Blackjack table engine using a state machine.

    Drives betting, dealing, player turns, dealer play and payout for any
    number of players against one dealer. UI-agnostic: callers feed
    enumerated inputs and read results, views and events.
    """

    STATES = [s.name.lower() for s in RoundState]

    TRANSITIONS = [
        {"trigger": "close_betting", "source": "betting", "dest": "dealing"},
        {"trigger": "abort_deal", "source": "dealing", "dest": "betting"},
        {"trigger": "finish_dealing", "source": "dealing", "dest": "player_turns"},
        {"trigger": "finish_player_turns", "source": "player_turns", "dest": "dealer_turn"},
        {"trigger": "finish_dealer_turn", "source": "dealer_turn", "dest": "payout"},
        {"trigger": "finish_payout", "source": "payout", "dest": "done"},
        {"trigger": "reopen_betting", "source": "done", "dest": "betting"},
        {"trigger": "end_game", "source": "*", "dest": "game_over"},
    ]

    def __init__(
        self,
        num_players: int,
        config: GameConfig | None = None,
        deck: Deck | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Seat the players and open betting for the first round.

        Args:
            num_players: Number of players (at least 1)
            config: Table configuration (environment defaults if not provided)
            deck: Deck to deal from; rebuilt at the start of every round
            rng: Random number generator for reproducible shuffles
        """
        if num_players < 1:
            raise ValueError("A table needs at least one player")

        self.config = config or GameConfig()
        if num_players * 2 + 2 > CARDS_PER_SET * self.config.deck_multiplier:
            raise ValueError(
                f"{num_players} players need more cards than "
                f"{self.config.deck_multiplier} deck(s) hold"
            )
        self.deck = deck if deck is not None else Deck(rng=rng)
        self.players = [
            Player(id=i, balance=self.config.starting_balance())
            for i in range(num_players)
        ]
        self._starting_amounts = [p.bankroll for p in self.players]

        # Indexed by player id; None for players sitting the round out
        self.hands: list[Hand | None] = [None] * num_players
        self.dealer_hand = Hand()

        self.round_number = 1
        self.last_result: RoundResult | None = None
        self._bettor_index: int | None = None
        self._turn_index: int | None = None
        self._moves_taken = 0

        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="betting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )
        self._open_betting()

    @property
    def state(self) -> RoundState:
        """Get current table state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    @property
    def is_finished(self) -> bool:
        return self.state == RoundState.GAME_OVER or game_over(self.players)

    @property
    def hands_played(self) -> int:
        return self.round_number - 1

    def get_player(self, player_id: int) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    # Betting

    def _open_betting(self) -> None:
        for player in self.players:
            player.bet = Bet()
        self._bettor_index = self._next_active(-1)
        self.events.emit_new(
            EventType.BETTING_OPENED,
            round=self.round_number,
            bettor=self._bettor_index,
        )

    def _next_active(self, after: int) -> int | None:
        for player in self.players[after + 1:]:
            if player.active:
                return player.id
        return None

    @property
    def current_bettor(self) -> Player | None:
        """The player whose bet is being placed, if betting is open."""
        if self.state != RoundState.BETTING or self._bettor_index is None:
            return None
        return self.players[self._bettor_index]

    def _require_bettor(self) -> Player | None:
        if self.state != RoundState.BETTING:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot bet in current state",
                state=self.state.name,
            )
            return None

        player = self.current_bettor
        if player is None or not player.active:
            raise ErrorWhileBetting(
                f"No active player is waiting to bet in round {self.round_number}"
            )
        return player

    def add_chip(self, chip: Chip) -> bool:
        """
        Add one chip to the current bettor's stake.

        A stake above the balance is cut back to the balance; a stake equal
        to the balance is placed at once.

        Returns:
            True if the chip was accepted
        """
        player = self._require_bettor()
        if player is None:
            return False

        player.bet.add(chip)
        self.events.emit_new(
            EventType.CHIP_ADDED,
            player=player.id,
            chip=chip.value,
            bet=player.bet.sum(),
        )

        if player.bet.sum() > player.bankroll:
            player.bet = Bet.from_amount(player.bankroll)
            self.events.emit_new(
                EventType.BET_CLAMPED,
                player=player.id,
                bet=player.bet.sum(),
            )
        elif player.bet.sum() == player.bankroll:
            self._place_bet(player)

        return True

    def all_in(self) -> bool:
        """Bet the current bettor's whole balance."""
        player = self._require_bettor()
        if player is None:
            return False

        player.bet = Bet.from_amount(player.bankroll)
        self._place_bet(player)
        return True

    def confirm_bet(self) -> bool:
        """Place the current bettor's stake; an empty stake is refused."""
        player = self._require_bettor()
        if player is None:
            return False

        if player.bet.sum() == 0:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="A bet must be placed",
                player=player.id,
            )
            return False

        self._place_bet(player)
        return True

    def _place_bet(self, player: Player) -> None:
        self.events.emit_new(
            EventType.BET_PLACED,
            player=player.id,
            amount=player.bet.sum(),
        )
        self._bettor_index = self._next_active(player.id)
        if self._bettor_index is None:
            self.close_betting()
            try:
                self._deal_round()
            except EmptyDeck:
                self._rollback_deal()
                raise

    def _rollback_deal(self) -> None:
        """Return to betting so the caller can rebuild the deck and retry."""
        self.dealer_hand = Hand()
        self.hands = [None] * len(self.players)
        self.abort_deal()
        self.events.emit_new(EventType.DEAL_ABORTED, round=self.round_number)
        self._open_betting()

    # Dealing

    def _deal_round(self) -> None:
        self.deck.reshuffle(self.config.deck_multiplier)
        self.events.emit_new(EventType.DECK_SHUFFLED, cards=self.deck.total_cards)

        self.dealer_hand = Hand()
        self.hands = [None] * len(self.players)

        self._emit_card(self.dealer_hand.draw_from(self.deck), "dealer")
        self._emit_card(self.dealer_hand.draw_from_hidden(self.deck), "dealer")

        for player in self.players:
            if not player.active:
                continue
            hand = self.deck.deal_hand(2)
            self.hands[player.id] = hand
            for card in hand:
                self._emit_card(card, player.id)
            if hand.is_blackjack:
                self.events.emit_new(EventType.PLAYER_BLACKJACK, player=player.id)

        self.events.emit_new(EventType.ROUND_STARTED, round=self.round_number)
        self.finish_dealing()
        self._start_turn(self._next_active(-1))

    def _emit_card(self, card: Card, hand: int | str) -> None:
        self.events.emit_new(
            EventType.CARD_DEALT,
            card="??" if card.hidden else str(card),
            hand=hand,
        )

    # Player turns

    @property
    def current_player(self) -> Player | None:
        """The player whose turn it is, if players are still acting."""
        if self.state != RoundState.PLAYER_TURNS or self._turn_index is None:
            return None
        return self.players[self._turn_index]

    @property
    def current_hand(self) -> Hand | None:
        player = self.current_player
        return None if player is None else self.hands[player.id]

    @property
    def can_double(self) -> bool:
        """Doubling down is only allowed as the first move of a turn."""
        return self.current_player is not None and self._moves_taken == 0

    def _start_turn(self, player_id: int | None) -> None:
        self._turn_index = player_id
        self._moves_taken = 0
        if player_id is None:
            self.finish_player_turns()
            self._play_dealer()

    def apply_move(self, move: Move) -> bool:
        """
        Apply a move for the current player.

        Returns:
            True if the move was legal and applied
        """
        player = self.current_player
        hand = self.current_hand
        if player is None or hand is None:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="No player turn in progress",
                state=self.state.name,
            )
            return False

        if move == Move.DOUBLE_DOWN and not self.can_double:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Can only double down as the first move",
                player=player.id,
            )
            return False

        if move == Move.STAND:
            self._moves_taken += 1
            self.events.emit_new(EventType.PLAYER_STAND, player=player.id, total=hand.sum())
            self._end_turn(player)
            return True

        card = hand.draw_from(self.deck)
        self._moves_taken += 1
        self._emit_card(card, player.id)
        resolved = hand.check()

        event_type = EventType.PLAYER_HIT if move == Move.HIT else EventType.PLAYER_DOUBLE
        self.events.emit_new(event_type, player=player.id, total=hand.level_off_ace())

        if hand.busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, player=player.id)

        if resolved or move == Move.DOUBLE_DOWN:
            self._end_turn(player)
        return True

    def _end_turn(self, player: Player) -> None:
        self._start_turn(self._next_active(player.id))

    def current_bust_probability(self) -> float | None:
        """Chance the current player's next card busts them."""
        hand = self.current_hand
        if hand is None:
            return None
        return busting_probability(self.deck, hand)

    # Dealer turn and payout

    def _play_dealer(self) -> None:
        for card in self.dealer_hand.reveal_all():
            self.events.emit_new(
                EventType.DEALER_REVEALS,
                card=str(card),
                total=self.dealer_hand.sum(),
            )

        drawn_before = len(self.dealer_hand)
        dealer_logic(self.deck, self.dealer_hand, self.config.dealer_hits_soft_17)
        for card in self.dealer_hand.cards[drawn_before:]:
            self.events.emit_new(EventType.DEALER_HITS, card=str(card))

        if self.dealer_hand.busted:
            self.events.emit_new(EventType.DEALER_BUSTS, total=self.dealer_hand.sum())
        else:
            self.events.emit_new(EventType.DEALER_STANDS, total=self.dealer_hand.sum())

        self.finish_dealer_turn()
        self._resolve_round()

    def _resolve_round(self) -> None:
        """Settle every active player's bet, then retire bankrupt players."""
        results: list[PlayerResult] = []

        for player in self.players:
            hand = self.hands[player.id]
            if not player.active or hand is None:
                continue

            bet = player.bet.sum()
            outcome, delta = settle_hand(bet, hand, self.dealer_hand)
            player.balance = Balance.from_amount(max(player.bankroll + delta, 0))

            if outcome.is_win:
                self.events.emit_new(
                    EventType.PLAYER_WINS, player=player.id, outcome=outcome.name, amount=delta
                )
            elif outcome.is_loss:
                self.events.emit_new(
                    EventType.PLAYER_LOSES, player=player.id, outcome=outcome.name, amount=-delta
                )
            else:
                self.events.emit_new(EventType.PUSH, player=player.id, amount=bet)

            bankrupt = player.bankroll <= 0
            if bankrupt:
                player.mark_bankrupt()
                self.events.emit_new(EventType.PLAYER_BANKRUPT, player=player.id)

            results.append(
                PlayerResult(
                    player_id=player.id,
                    outcome=outcome,
                    bet=bet,
                    delta=delta,
                    balance=player.bankroll,
                    bankrupt=bankrupt,
                )
            )

        self.last_result = RoundResult(
            round_number=self.round_number,
            dealer=HandView.of(self.dealer_hand),
            dealer_total=self.dealer_hand.sum(),
            dealer_busted=self.dealer_hand.busted,
            players=tuple(results),
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            round=self.round_number,
            balances={r.player_id: r.balance for r in results},
        )

        self.round_number += 1
        self.finish_payout()

    # Between rounds

    def next_round(self) -> bool:
        """
        Return to betting for another round.

        Returns:
            True if betting reopened, False if the game is over
        """
        if self.state != RoundState.DONE:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Round still in progress",
                state=self.state.name,
            )
            return False

        if game_over(self.players):
            self.events.emit_new(EventType.GAME_ENDED, reason="bankrupt")
            self.end_game()
            return False

        self.reopen_betting()
        self._open_betting()
        return True

    def quit(self) -> list[FinalStanding]:
        """End the game and return the final standings."""
        if self.state != RoundState.GAME_OVER:
            self.events.emit_new(EventType.GAME_ENDED, reason="quit")
            self.end_game()
        return self.final_results()

    def final_results(self) -> list[FinalStanding]:
        return [
            FinalStanding(
                player_id=player.id,
                balance=player.bankroll,
                net=player.bankroll - self._starting_amounts[player.id],
                bankrupt=not player.active,
            )
            for player in self.players
        ]

    def snapshot(self) -> TableView:
        """Structured view of every hand; the hole card stays flagged hidden."""
        return TableView(
            round_number=self.round_number,
            state=self.state.name,
            dealer=HandView.of(self.dealer_hand),
            players=tuple(
                PlayerView(
                    player_id=player.id,
                    balance=player.bankroll,
                    bet=player.bet.sum(),
                    active=player.active,
                    hand=None if self.hands[player.id] is None else HandView.of(self.hands[player.id]),
                )
                for player in self.players
            ),
            current_player=self._turn_index if self.state == RoundState.PLAYER_TURNS else None,
        )

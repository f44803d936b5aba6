"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator

from cardtable.cards import Card, Deck, Rank
from cardtable.errors import EmptyDeck

BLACKJACK = 21
ACE_ADJUSTMENT = 10


@dataclass
class Hand:
    """
    Cards held by one party for one round, plus a terminal bust flag.

    Totals are computed from the hard sum (every Ace = 11). Bust detection
    levels off a single Ace; comparison between hands uses the hard sum.
    """

    cards: list[Card] = field(default_factory=list)
    busted: bool = False

    def draw_from(self, deck: Deck) -> Card:
        """Draw a face-up card from ``deck`` into the hand."""
        card = deck.draw()
        self.cards.append(card)
        return card

    def draw_from_hidden(self, deck: Deck) -> Card:
        """Draw a face-down card (the dealer's hole card)."""
        card = deck.draw()
        card.hide()
        self.cards.append(card)
        return card

    def last(self) -> Card:
        """Return the most recently drawn card."""
        if not self.cards:
            raise EmptyDeck()
        return self.cards[-1]

    def reveal_all(self) -> list[Card]:
        """Turn every hidden card face up, returning the ones revealed."""
        return [card.reveal() for card in self.cards if card.hidden]

    def sum(self) -> int:
        """Hard total: every Ace counts 11."""
        return sum(card.value for card in self.cards)

    def level_off_ace(self) -> int:
        """
        Total with one Ace counted as 1 when the hard total busts.

        Only one Ace is ever adjusted, however many the hand holds.
        """
        total = self.sum()
        if self.is_bust(total) and self.contains(Rank.ACE):
            return total - ACE_ADJUSTMENT
        return total

    @staticmethod
    def is_bust(total: int) -> bool:
        return total > BLACKJACK

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with 2 cards)."""
        return len(self.cards) == 2 and self.sum() == BLACKJACK

    def contains(self, rank: Rank) -> bool:
        return any(card.rank == rank for card in self.cards)

    def check(self) -> bool:
        """
        Evaluate whether the hand is resolved for this turn.

        Returns:
            True for a blackjack (hand unchanged) or a bust (hand marked
            busted), False while the hand is still live
        """
        if self.is_blackjack:
            return True
        if self.is_bust(self.level_off_ace()):
            self.busted = True
            return True
        return False

    def compare_to(self, other: "Hand") -> int:
        """
        Order two hands by hard total.

        Returns:
            1 if this hand is higher, -1 if lower, 0 if equal
        """
        mine, theirs = self.sum(), other.sum()
        return (mine > theirs) - (mine < theirs)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        flag = ", busted" if self.busted else ""
        return f"Hand({self.cards!r}, sum={self.sum()}{flag})"


def busting_probability(deck: Deck, hand: Hand) -> float:
    """
    Chance that the next card from ``deck`` busts ``hand``.

    The candidate total is leveled by 10 when the hand holds an Ace.
    """
    hand_value = hand.level_off_ace()
    if hand.is_bust(hand_value):
        return 1.0
    if not deck.total_cards:
        raise EmptyDeck()

    has_ace = hand.contains(Rank.ACE)
    busting_cards = 0
    for card in deck:
        potential = hand_value + card.value
        if has_ace and potential > BLACKJACK:
            potential -= ACE_ADJUSTMENT
        if hand.is_bust(potential):
            busting_cards += 1

    return busting_cards / deck.total_cards

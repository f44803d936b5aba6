"""Pytest fixtures for table engine tests."""

import pytest
from random import Random

from cardtable.cards import Card, Deck, Rank, Suit
from cardtable.hand import Hand
from config import GameConfig


class StackedDeck(Deck):
    """A deck that deals a fixed card order and ignores reshuffles."""

    def __init__(self, draw_order: list[Card]) -> None:
        super().__init__(list(reversed(draw_order)))

    def reshuffle(self, multiplier: int) -> None:
        pass


def card(rank: Rank, suit: Suit = Suit.SPADES) -> Card:
    return Card(rank, suit)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled single deck."""
    d = Deck.build(1, rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def make_hand():
    """Factory for hands built from ranks."""

    def _make(*ranks: Rank) -> Hand:
        return Hand([card(rank) for rank in ranks])

    return _make


@pytest.fixture
def stacked_deck():
    """Factory for a deck that deals the given ranks in order."""

    def _make(*ranks: Rank) -> StackedDeck:
        return StackedDeck([card(rank) for rank in ranks])

    return _make


@pytest.fixture
def blackjack_hand(make_hand):
    """A natural blackjack hand."""
    return make_hand(Rank.ACE, Rank.KING)


@pytest.fixture
def soft_17_hand(make_hand):
    """A soft 17 hand (A-6)."""
    return make_hand(Rank.ACE, Rank.SIX)


@pytest.fixture
def hard_17_hand(make_hand):
    """A hard 17 hand (10-7)."""
    return make_hand(Rank.TEN, Rank.SEVEN)


@pytest.fixture
def bust_hand(make_hand):
    """A busted hand."""
    hand = make_hand(Rank.TEN, Rank.SIX, Rank.KING)
    hand.check()
    return hand


@pytest.fixture
def table_config():
    """Two decks, dealer hits soft 17, 100-credit starting stacks."""
    return GameConfig(deck_multiplier=2, dealer_hits_soft_17=True, starting_amount=100)

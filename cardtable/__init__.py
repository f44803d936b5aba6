"""Blackjack table rules engine - 100% UI-agnostic."""

from cardtable.cards import Card, Deck, Rank, Suit
from cardtable.chips import Balance, Bet, Chip, Loadout, into_chips
from cardtable.errors import DeckError, EmptyDeck, ErrorWhileBetting
from cardtable.hand import Hand, busting_probability

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
    "busting_probability",
    "Chip",
    "Balance",
    "Bet",
    "Loadout",
    "into_chips",
    "DeckError",
    "EmptyDeck",
    "ErrorWhileBetting",
]

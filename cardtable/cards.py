"""Card and Deck classes."""

from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import TYPE_CHECKING, Iterator, Sequence

from cardtable.errors import EmptyDeck

if TYPE_CHECKING:
    from cardtable.hand import Hand


class Suit(Enum):
    """Card suits, in deck build order."""

    DIAMONDS = auto()
    HEARTS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        return self == Rank.ACE


@dataclass(slots=True)
class Card:
    """
    A playing card.

    Rank and suit never change once dealt. ``hidden`` is a presentation flag
    for the dealer's hole card and takes no part in equality or value.
    """

    rank: Rank
    suit: Suit
    hidden: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        state = ", hidden" if self.hidden else ""
        return f"Card({self.rank.name}, {self.suit.name}{state})"

    @property
    def value(self) -> int:
        """Return the blackjack point value, hidden or not."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @property
    def identity(self) -> tuple[Suit, Rank]:
        """The (suit, rank) pair that is unique within one 52-card set."""
        return (self.suit, self.rank)

    def hide(self) -> None:
        """Turn the card face down."""
        self.hidden = True

    def reveal(self) -> "Card":
        """Turn the card face up and return it."""
        self.hidden = False
        return self


class Deck:
    """
    An ordered stack of cards; the end of the list is the top.

    A table deals from one Deck per round, rebuilding it with
    :meth:`reshuffle` before the deal rather than running it down.
    """

    def __init__(
        self,
        cards: Sequence[Card] | None = None,
        rng: Random | None = None,
    ) -> None:
        self._rng = rng or Random()
        self._cards: list[Card] = list(cards) if cards is not None else []

    @classmethod
    def build(cls, multiplier: int = 1, rng: Random | None = None) -> "Deck":
        """
        Build an unshuffled deck of ``multiplier`` full 52-card sets.

        Args:
            multiplier: Number of 52-card sets (at least 1)
            rng: Random number generator used by later shuffles
        """
        return cls(cls._fresh_cards(multiplier), rng=rng)

    @staticmethod
    def _fresh_cards(multiplier: int) -> list[Card]:
        if multiplier < 1:
            raise ValueError("Deck must contain at least one 52-card set")
        return [
            Card(rank, suit)
            for _ in range(multiplier)
            for suit in Suit
            for rank in Rank
        ]

    def shuffle(self) -> None:
        """Fisher-Yates shuffle in place."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def reshuffle(self, multiplier: int) -> None:
        """Discard the remaining cards, rebuild, and shuffle."""
        self._cards = self._fresh_cards(multiplier)
        self.shuffle()

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise EmptyDeck()
        return self._cards.pop()

    def deal_hand(self, n: int) -> "Hand":
        """
        Pop ``n`` cards into a new hand, in the order drawn.

        Cards popped before the deck runs out are not put back; rebuild the
        deck before dealing instead of recovering mid-deal.
        """
        from cardtable.hand import Hand

        hand = Hand()
        for drawn in range(n):
            if not self._cards:
                raise EmptyDeck(requested=n, remaining=drawn)
            hand.cards.append(self._cards.pop())
        return hand

    @property
    def cards(self) -> tuple[Card, ...]:
        """Read-only view of the remaining cards, bottom first."""
        return tuple(self._cards)

    @property
    def total_cards(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

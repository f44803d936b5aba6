"""Error taxonomy for the table engine."""


class DeckError(Exception):
    """Base class for engine errors surfaced to the caller."""


class EmptyDeck(DeckError, IndexError):
    """Raised when a draw or deal needs more cards than the deck holds."""

    def __init__(self, requested: int = 1, remaining: int = 0) -> None:
        self.requested = requested
        self.remaining = remaining
        super().__init__(
            f"Cannot draw {requested} card(s), {remaining} remaining in deck"
        )


class ErrorWhileBetting(DeckError):
    """Raised when the betting phase cannot find a player to act for."""

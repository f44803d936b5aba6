"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

from cardtable.chips import Balance, Loadout, starting_balance


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _parse_starting_balance() -> int | None:
    """Parse CARDTABLE_STARTING_BALANCE; unset means the Euro5 loadout."""
    raw = os.getenv("CARDTABLE_STARTING_BALANCE", "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class GameConfig:
    """Table configuration."""

    deck_multiplier: int = field(
        default_factory=lambda: int(os.getenv("CARDTABLE_DECK_MULTIPLIER", "2"))
    )
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: _env_bool("CARDTABLE_DEALER_HITS_SOFT_17", "true")
    )
    starting_amount: int | None = field(default_factory=_parse_starting_balance)
    loadout: Loadout = Loadout.EURO5

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.deck_multiplier < 1:
            raise ValueError("deck_multiplier must be at least 1")
        if self.starting_amount is not None and self.starting_amount <= 0:
            raise ValueError("starting_amount must be positive")

    def starting_balance(self) -> Balance:
        """Fresh starting stack for one player."""
        if self.starting_amount is not None:
            return starting_balance(self.starting_amount)
        return starting_balance(self.loadout)


# Global configuration instance
config = GameConfig()

"""Chip denominations and the balances and bets built from them."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class Chip(Enum):
    """Chip denominations, valued in credits."""

    C1 = 1
    C5 = 5
    C10 = 10
    C25 = 25
    C100 = 100
    C500 = 500
    C1000 = 1000

    @classmethod
    def largest_first(cls) -> list["Chip"]:
        return sorted(cls, key=lambda chip: chip.value, reverse=True)


def into_chips(amount: int) -> list[Chip]:
    """
    Break ``amount`` into chips, largest denomination first.

    The denomination set is canonical, so the greedy split also uses the
    fewest chips.
    """
    if amount < 0:
        raise ValueError(f"Cannot convert a negative amount to chips: {amount}")

    remaining = amount
    chips: list[Chip] = []
    for chip in Chip.largest_first():
        count, remaining = divmod(remaining, chip.value)
        chips.extend([chip] * count)
    return chips


def chips_total(chips: Iterable[Chip]) -> int:
    return sum(chip.value for chip in chips)


@dataclass
class Balance:
    """A player's stack of chips."""

    chips: list[Chip] = field(default_factory=list)

    @classmethod
    def from_amount(cls, amount: int) -> "Balance":
        return cls(into_chips(amount))

    def sum(self) -> int:
        return chips_total(self.chips)


@dataclass
class Bet:
    """Chips a player has put forward for the current round."""

    chips: list[Chip] = field(default_factory=list)

    @classmethod
    def from_amount(cls, amount: int) -> "Bet":
        return cls(into_chips(amount))

    def add(self, chip: Chip) -> None:
        self.chips.append(chip)

    def sum(self) -> int:
        return chips_total(self.chips)


class Loadout(Enum):
    """Preset starting stacks."""

    EURO5 = (
        (Chip.C100,) * 4
        + (Chip.C10,) * 6
        + (Chip.C5,) * 8
    )

    def balance(self) -> Balance:
        return Balance(list(self.value))


def starting_balance(loadout: Loadout | Iterable[Chip] | int) -> Balance:
    """
    Build a starting balance from a preset, a custom chip list, or an amount.
    """
    if isinstance(loadout, Loadout):
        return loadout.balance()
    if isinstance(loadout, int):
        return Balance.from_amount(loadout)
    return Balance(list(loadout))

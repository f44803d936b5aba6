"""Tests for chip conversion, balances and bets."""

import pytest
from hypothesis import given, strategies as st

from cardtable.chips import (
    Balance,
    Bet,
    Chip,
    Loadout,
    chips_total,
    into_chips,
    starting_balance,
)


class TestIntoChips:
    """Tests for greedy chip conversion."""

    def test_zero(self):
        assert into_chips(0) == []

    def test_greedy_form(self):
        chips = into_chips(1786)
        assert [chip.value for chip in chips] == [1000, 500, 100, 100, 25, 25, 25, 10, 1]

    def test_largest_first(self):
        values = [chip.value for chip in into_chips(2999)]
        assert values == sorted(values, reverse=True)

    @given(st.integers(min_value=0, max_value=1_000_000))
    def test_sum_matches_amount(self, amount):
        assert chips_total(into_chips(amount)) == amount

    def test_negative_amount_raises(self):
        with pytest.raises(ValueError):
            into_chips(-1)


class TestBalanceAndBet:
    """Tests for chip stacks."""

    def test_sum_ignores_order(self):
        a = Balance([Chip.C5, Chip.C100, Chip.C1])
        b = Balance([Chip.C1, Chip.C5, Chip.C100])
        assert a.sum() == b.sum() == 106

    def test_from_amount(self):
        assert Balance.from_amount(735).sum() == 735
        assert Bet.from_amount(40).sum() == 40

    def test_bet_add(self):
        bet = Bet()
        bet.add(Chip.C25)
        bet.add(Chip.C5)
        assert bet.sum() == 30

    def test_euro5_loadout(self):
        balance = Loadout.EURO5.balance()
        assert balance.sum() == 500
        assert len(balance.chips) == 18

    def test_starting_balance_sources(self):
        assert starting_balance(Loadout.EURO5).sum() == 500
        assert starting_balance(260).sum() == 260
        assert starting_balance([Chip.C1000, Chip.C10]).sum() == 1010

"""Tests for dealer play and bet settlement."""

import pytest

from cardtable.cards import Rank
from cardtable.errors import EmptyDeck
from cardtable.game.resolution import dealer_logic, dealer_should_hit, is_soft, settle_hand
from cardtable.game.results import Outcome


class TestSoftHands:
    """Tests for soft hand detection."""

    def test_ace_six_is_soft(self, soft_17_hand):
        assert is_soft(soft_17_hand)

    def test_no_ace_is_hard(self, hard_17_hand):
        assert not is_soft(hard_17_hand)

    def test_ace_king_is_soft(self, blackjack_hand):
        assert is_soft(blackjack_hand)


class TestDealerLogic:
    """Tests for the dealer drawing policy."""

    def test_hard_17_stands(self, hard_17_hand, stacked_deck):
        deck = stacked_deck(Rank.FIVE)
        dealer_logic(deck, hard_17_hand, hit_on_soft_17=True)
        assert len(hard_17_hand) == 2
        assert not hard_17_hand.busted
        assert len(deck) == 1

    def test_soft_17_hits_when_configured(self, soft_17_hand, stacked_deck):
        deck = stacked_deck(Rank.TWO)
        dealer_logic(deck, soft_17_hand, hit_on_soft_17=True)
        assert len(soft_17_hand) == 3
        assert soft_17_hand.sum() == 19

    def test_soft_17_stands_when_not_configured(self, soft_17_hand, stacked_deck):
        deck = stacked_deck(Rank.TWO)
        dealer_logic(deck, soft_17_hand, hit_on_soft_17=False)
        assert len(soft_17_hand) == 2

    def test_draws_below_17(self, make_hand, stacked_deck):
        hand = make_hand(Rank.TEN, Rank.TWO)
        deck = stacked_deck(Rank.THREE, Rank.TWO, Rank.NINE)
        dealer_logic(deck, hand, hit_on_soft_17=True)
        assert hand.sum() == 17
        assert len(deck) == 1

    def test_stands_above_17(self, make_hand, stacked_deck):
        hand = make_hand(Rank.TEN, Rank.EIGHT)
        dealer_logic(stacked_deck(Rank.TWO), hand, hit_on_soft_17=True)
        assert len(hand) == 2

    def test_busts(self, make_hand, stacked_deck):
        hand = make_hand(Rank.TEN, Rank.SIX)
        dealer_logic(stacked_deck(Rank.KING), hand, hit_on_soft_17=True)
        assert hand.busted
        assert hand.sum() == 26

    def test_busts_on_hard_total_with_ace(self, soft_17_hand, stacked_deck):
        """The dealer counts every Ace as 11."""
        dealer_logic(stacked_deck(Rank.FIVE), soft_17_hand, hit_on_soft_17=True)
        assert soft_17_hand.busted

    def test_empty_deck_propagates(self, make_hand, stacked_deck):
        with pytest.raises(EmptyDeck):
            dealer_logic(stacked_deck(), make_hand(Rank.TEN, Rank.TWO), hit_on_soft_17=True)

    def test_should_hit(self, make_hand):
        assert dealer_should_hit(make_hand(Rank.TEN, Rank.SIX), hit_on_soft_17=False)
        assert not dealer_should_hit(make_hand(Rank.TEN, Rank.SEVEN), hit_on_soft_17=True)


class TestSettleHand:
    """Tests for payouts against the dealer's final hand."""

    def test_player_bust_loses_bet(self, bust_hand, hard_17_hand):
        assert settle_hand(100, bust_hand, hard_17_hand) == (Outcome.BUST, -100)

    def test_player_bust_loses_even_if_dealer_busts(self, bust_hand, make_hand):
        dealer = make_hand(Rank.TEN, Rank.SIX, Rank.QUEEN)
        dealer.busted = True
        assert settle_hand(100, bust_hand, dealer) == (Outcome.BUST, -100)

    def test_dealer_bust_pays_double(self, hard_17_hand, make_hand):
        dealer = make_hand(Rank.TEN, Rank.SIX, Rank.QUEEN)
        dealer.busted = True
        assert settle_hand(100, hard_17_hand, dealer) == (Outcome.DEALER_BUST, 200)

    def test_blackjack_pays_double(self, blackjack_hand, make_hand):
        dealer = make_hand(Rank.TEN, Rank.QUEEN)
        assert settle_hand(100, blackjack_hand, dealer) == (Outcome.BLACKJACK, 200)

    def test_blackjack_beats_dealer_blackjack(self, blackjack_hand, make_hand):
        dealer = make_hand(Rank.ACE, Rank.QUEEN)
        assert settle_hand(100, blackjack_hand, dealer) == (Outcome.BLACKJACK, 200)

    def test_dealer_higher(self, make_hand):
        player = make_hand(Rank.TEN, Rank.EIGHT)
        dealer = make_hand(Rank.TEN, Rank.QUEEN)
        assert settle_hand(100, player, dealer) == (Outcome.LOSS, -100)

    def test_player_higher(self, make_hand):
        player = make_hand(Rank.TEN, Rank.QUEEN)
        dealer = make_hand(Rank.TEN, Rank.EIGHT)
        assert settle_hand(100, player, dealer) == (Outcome.WIN, 200)

    def test_push(self, make_hand):
        player = make_hand(Rank.TEN, Rank.EIGHT)
        dealer = make_hand(Rank.NINE, Rank.NINE)
        assert settle_hand(100, player, dealer) == (Outcome.PUSH, 0)

    def test_compares_hard_totals(self, make_hand):
        """A-K-2 plays as 13 but is compared as 23."""
        player = make_hand(Rank.ACE, Rank.KING, Rank.TWO)
        dealer = make_hand(Rank.TEN, Rank.NINE)
        assert settle_hand(100, player, dealer) == (Outcome.WIN, 200)

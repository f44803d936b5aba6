"""Dealer play policy and bet settlement."""

from cardtable.cards import Deck, Rank
from cardtable.game.results import Outcome
from cardtable.hand import ACE_ADJUSTMENT, BLACKJACK, Hand

DEALER_STANDS_ON = 17


def is_soft(hand: Hand) -> bool:
    """
    Check if the hand is soft (an Ace could count as 1 instead of 11).

    Decided on the hard total: the hand holds an Ace and the total less 10
    stays within 1..21.
    """
    if not hand.contains(Rank.ACE):
        return False
    return 1 <= hand.sum() - ACE_ADJUSTMENT <= BLACKJACK


def dealer_should_hit(hand: Hand, hit_on_soft_17: bool) -> bool:
    """Determine if the dealer draws on this (hard, non-bust) total."""
    total = hand.sum()
    if total < DEALER_STANDS_ON:
        return True
    if total == DEALER_STANDS_ON and hit_on_soft_17 and is_soft(hand):
        return True
    return False


def dealer_logic(deck: Deck, dealer_hand: Hand, hit_on_soft_17: bool) -> Hand:
    """
    Play out the dealer's hand.

    The dealer works from the hard total: over 21 marks the hand busted,
    otherwise it draws below 17 (and on soft 17 when ``hit_on_soft_17``).

    Raises:
        EmptyDeck: if the dealer needs a card the deck cannot supply
    """
    while True:
        if dealer_hand.is_bust(dealer_hand.sum()):
            dealer_hand.busted = True
            break
        if not dealer_should_hit(dealer_hand, hit_on_soft_17):
            break
        dealer_hand.draw_from(deck)

    return dealer_hand


def settle_hand(bet: int, player_hand: Hand, dealer_hand: Hand) -> tuple[Outcome, int]:
    """
    Settle one bet against the dealer's final hand.

    Returns:
        The outcome and the signed change to the player's balance. Wins pay
        twice the bet; blackjack always wins; ties on hard total push.
    """
    if player_hand.busted:
        return Outcome.BUST, -bet

    if dealer_hand.busted:
        return Outcome.DEALER_BUST, bet * 2

    if player_hand.is_blackjack:
        return Outcome.BLACKJACK, bet * 2

    comparison = dealer_hand.compare_to(player_hand)
    if comparison > 0:
        return Outcome.LOSS, -bet
    if comparison < 0:
        return Outcome.WIN, bet * 2
    return Outcome.PUSH, 0

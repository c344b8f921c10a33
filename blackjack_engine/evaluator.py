"""Compares hands and determines round outcomes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from blackjack_engine.hand import Hand


class Outcome(Enum):
    """Result of one player hand against the dealer."""

    WIN = "WIN"  # 1:1
    BLACKJACK = "BLACKJACK"  # natural, 3:2 by default
    LOSE = "LOSE"
    PUSH = "PUSH"  # wager returned
    DEALER_BUST = "DEALER_BUST"  # 1:1

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RoundResult:
    """Settlement of one player hand."""

    hand: Hand = field(compare=False)
    outcome: Outcome
    payout: float
    net: float


def compare_hands(
    player_hand: Hand,
    dealer_hand: Hand,
    blackjack_payout: float = 1.5,
) -> tuple[Outcome, float]:
    """
    Compare a player hand against the dealer hand.

    Returns:
        The outcome and its payout multiplier: blackjack_payout for a
        natural, 1 for a win or dealer bust, 0 for a push, -1 for a loss
    """
    # Player busts always loses, even if the dealer busts too
    if player_hand.is_busted:
        return Outcome.LOSE, -1

    if player_hand.is_blackjack:
        if dealer_hand.is_blackjack:
            return Outcome.PUSH, 0
        # A dealer 21 with 3+ cards is not a natural
        return Outcome.BLACKJACK, blackjack_payout

    if dealer_hand.is_busted:
        return Outcome.DEALER_BUST, 1

    player_total = player_hand.total
    dealer_total = dealer_hand.total
    if player_total > dealer_total:
        return Outcome.WIN, 1
    if player_total < dealer_total:
        return Outcome.LOSE, -1
    return Outcome.PUSH, 0


def settle_round(
    player_hands: Iterable[Hand],
    dealer_hand: Hand,
    blackjack_payout: float = 1.5,
) -> list[RoundResult]:
    """Settle every player hand against the dealer hand."""
    results = []
    for hand in player_hands:
        outcome, payout = compare_hands(hand, dealer_hand, blackjack_payout)
        results.append(
            RoundResult(hand=hand, outcome=outcome, payout=payout, net=hand.bet * payout)
        )
    return results

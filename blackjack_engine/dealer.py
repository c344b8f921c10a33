"""Casino-rules dealer service: owns the shoe, deals, and plays the house hand."""

import logging
from random import Random
from typing import Iterable, Sequence

from blackjack_engine.cards import Card, Shoe
from blackjack_engine.config import GameConfig
from blackjack_engine.hand import Hand

logger = logging.getLogger(__name__)


class Dealer:
    """
    Deals from a shoe and plays the dealer hand by house rules.

    The dealer hits below 17 and stands on 17 or more; soft 17 is hit only
    when the table is configured H17.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: Random | None = None,
        shoe: Shoe | None = None,
    ) -> None:
        """
        Initialize the dealer.

        Args:
            config: Table rules (environment defaults if not provided)
            rng: Random source for the shoe; built from config.seed if omitted
            shoe: Prepared shoe to deal from instead of building one
        """
        self.config = config or GameConfig()
        if shoe is None:
            rng = rng or Random(self.config.seed)
            shoe = Shoe(
                num_decks=self.config.num_decks,
                penetration=self.config.penetration,
                rng=rng,
            )
        self.shoe = shoe

    # Shoe helpers

    def burn_card(self) -> list[Card]:
        """Burn the top card before a round."""
        return self.shoe.burn(1)

    @property
    def remaining(self) -> int:
        return self.shoe.cards_remaining

    def reshuffle(self) -> None:
        """Rebuild and shuffle the whole shoe."""
        self.shoe.reset()

    def discard_cards(self, cards: Iterable[Card]) -> None:
        """Return used cards to the discard tray."""
        self.shoe.discard(cards)

    # Dealing

    def deal_initial(
        self,
        num_players: int,
        bets: Sequence[float] = (),
    ) -> tuple[list[Hand], Hand]:
        """
        Deal the opening hands for a round.

        Burns one card, then deals two passes: one card to each player hand
        in seat order, then one to the dealer.

        Args:
            num_players: Number of player seats
            bets: Wager for each seat, in seat order (missing seats bet 0)

        Returns:
            The player hands and the dealer hand
        """
        self.burn_card()

        player_hands = [
            Hand(bet=bets[i] if i < len(bets) else 0) for i in range(num_players)
        ]
        dealer_hand = Hand(is_dealer_hand=True)

        for _ in range(2):
            for hand in player_hands:
                hand.add_cards(*self.shoe.draw(1))
            dealer_hand.add_cards(*self.shoe.draw(1))

        logger.debug(
            "Dealt %d player hands, dealer shows %s",
            num_players,
            dealer_hand.cards[0] if dealer_hand.cards else None,
        )
        return player_hands, dealer_hand

    def hit(self, hand: Hand) -> Card | None:
        """
        Give a hand one card from the shoe.

        Returns:
            The card drawn, or None if the shoe is empty (hand unchanged)
        """
        drawn = self.shoe.draw(1)
        if not drawn:
            return None
        card = drawn[0]
        hand.add_card(card)
        return card

    # Dealer policy

    def should_hit(self, hand: Hand) -> bool:
        """Determine whether the dealer must take another card."""
        total, soft = hand.evaluation
        if total < 17:
            return True
        if total == 17 and soft and self.config.dealer_hits_soft_17:
            return True
        return False

    def play_dealer_hand(self, hand: Hand) -> int:
        """
        Play out the dealer hand and settle it.

        Returns:
            The final hand total
        """
        while self.should_hit(hand):
            if self.hit(hand) is None:
                logger.warning("Dealer stopped drawing at %d: shoe is empty", hand.total)
                break
        hand.settle()
        logger.debug("Dealer finished with %s", hand)
        return hand.total

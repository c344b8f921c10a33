"""Blackjack round engine with state machine."""

import logging
from random import Random
from typing import Iterable

from transitions import Machine

from blackjack_engine.cards import Shoe
from blackjack_engine.config import GameConfig
from blackjack_engine.dealer import Dealer
from blackjack_engine.errors import InvalidOperationError, InvalidTransitionError
from blackjack_engine.evaluator import RoundResult, settle_round
from blackjack_engine.game.events import EventEmitter, EventHandler, EventType
from blackjack_engine.game.state import TRIGGERS, RoundState
from blackjack_engine.hand import Hand

logger = logging.getLogger(__name__)


class RoundEngine:
    """
    One table's round lifecycle, driven by a state machine.

    The engine owns the dealer (and through it the shoe), the player hands
    and the dealer hand. It is UI-agnostic: callers drive it through the
    action methods and observe it through events and read accessors.
    Invalid actions raise without changing any state.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": trigger, "source": source.name.lower(), "dest": dest.name.lower()}
        for trigger, source, dest in TRIGGERS
    ]

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: Random | None = None,
        shoe: Shoe | None = None,
    ) -> None:
        """
        Initialize a round engine.

        Args:
            config: Table rules (environment defaults if not provided)
            rng: Random number generator for reproducible shuffles
            shoe: Prepared shoe, mainly for tests
        """
        self.config = config or GameConfig()
        self.dealer = Dealer(self.config, rng=rng, shoe=shoe)
        self.events = EventEmitter()

        self._player_hands: list[Hand] = []
        self._dealer_hand: Hand | None = None
        self._active_hand_index = 0
        self._results: list[RoundResult] = []

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="betting",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_on_state_change",
        )

    # Accessors

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def player_hands(self) -> tuple[Hand, ...]:
        return tuple(self._player_hands)

    @property
    def dealer_hand(self) -> Hand | None:
        return self._dealer_hand

    @property
    def active_hand_index(self) -> int:
        return self._active_hand_index

    @property
    def active_hand(self) -> Hand | None:
        """Get the hand currently acting, if any."""
        if 0 <= self._active_hand_index < len(self._player_hands):
            return self._player_hands[self._active_hand_index]
        return None

    @property
    def results(self) -> tuple[RoundResult, ...]:
        """Results of the last settlement."""
        return tuple(self._results)

    @property
    def shoe(self) -> Shoe:
        return self.dealer.shoe

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    def unsubscribe(self, handler: EventHandler, event_type: EventType | None = None) -> bool:
        return self.events.unsubscribe(handler, event_type)

    # Betting

    def place_bets(self, bets: Iterable[float]) -> None:
        """
        Take one wager per seat and deal the round.

        Lands in PLAYER_TURN, or straight in GAME_OVER (via SETTLEMENT) when
        the dealer has a natural or every player hand is a natural.

        Raises:
            InvalidTransitionError: if not in BETTING
            InvalidOperationError: if there are no bets or a bet is negative
        """
        self._require_state(RoundState.BETTING, "place bets")
        bets = list(bets)
        if not bets:
            raise InvalidOperationError("At least one bet required")
        if any(bet < 0 for bet in bets):
            raise InvalidOperationError("Bets must be non-negative")

        self.start_deal()
        self._player_hands, self._dealer_hand = self.dealer.deal_initial(len(bets), bets)
        self._active_hand_index = 0
        self._results = []
        self.events.emit_new(
            EventType.DEALT,
            player_hands=self.player_hands,
            dealer_hand=self._dealer_hand,
        )

        # No player turn against a dealer natural
        if self._dealer_hand.is_blackjack or all(h.is_blackjack for h in self._player_hands):
            self._dealer_hand.settle()
            self.skip_to_settlement()
            self._settle()
            return

        self.begin_player_turn()
        self._skip_settled_hands()

    # Player actions

    def player_hit(self) -> None:
        """Give the active hand one card; a bust settles it and play moves on."""
        hand = self._require_active_hand("hit")
        card = self.dealer.hit(hand)
        self.events.emit_new(
            EventType.PLAYER_HIT,
            hand_index=self._active_hand_index,
            card=card,
            hand=hand,
        )

        if hand.is_busted:
            hand.settle()
            self.events.emit_new(EventType.PLAYER_BUST, hand_index=self._active_hand_index, hand=hand)
            self._advance_hand()

    def player_stand(self) -> None:
        """Settle the active hand and move on."""
        hand = self._require_active_hand("stand")
        hand.settle()
        self.events.emit_new(EventType.PLAYER_STAND, hand_index=self._active_hand_index, hand=hand)
        self._advance_hand()

    def player_double_down(self) -> None:
        """
        Double the active hand's bet, deal it exactly one card and settle it.

        Raises:
            InvalidOperationError: if the hand does not hold exactly two cards
        """
        hand = self._require_active_hand("double down")
        if not hand.can_double_down:
            raise InvalidOperationError("Double down not allowed")

        hand.double_bet()
        card = self.dealer.hit(hand)
        hand.settle()
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_index=self._active_hand_index,
            card=card,
            hand=hand,
        )

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUST, hand_index=self._active_hand_index, hand=hand)
        self._advance_hand()

    def player_split(self) -> None:
        """
        Split the active pair into two hands, one extra card each.

        The new hands take the original's seat in order and are played
        in turn like any other hand.

        Raises:
            InvalidOperationError: if the active hand is not a pair
        """
        hand = self._require_active_hand("split")
        first, second = hand.split()
        self.dealer.hit(first)
        self.dealer.hit(second)

        index = self._active_hand_index
        self._player_hands[index : index + 1] = [first, second]
        self.events.emit_new(EventType.PLAYER_SPLIT, hand_index=index, hands=(first, second))

        self._skip_settled_hands()

    def new_round(self) -> None:
        """Clear the table and go back to BETTING."""
        self._require_state(RoundState.GAME_OVER, "start a new round")
        self._player_hands = []
        self._dealer_hand = None
        self._active_hand_index = 0
        self._results = []
        self.events.clear_history()
        self.reset_round()

    # Eligibility helpers

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        hand = self.active_hand
        return self.state == RoundState.PLAYER_TURN and hand is not None and not hand.is_settled

    @property
    def can_stand(self) -> bool:
        return self.can_hit

    @property
    def can_double(self) -> bool:
        """Check if doubling is allowed."""
        return self.can_hit and self.active_hand.can_double_down  # type: ignore[union-attr]

    @property
    def can_split(self) -> bool:
        """Check if splitting is allowed."""
        return self.can_hit and self.active_hand.can_split  # type: ignore[union-attr]

    # Internal helpers

    def _require_state(self, state: RoundState, action: str) -> None:
        if self.state != state:
            raise InvalidTransitionError(action, self.state)

    def _require_active_hand(self, action: str) -> Hand:
        self._require_state(RoundState.PLAYER_TURN, action)
        hand = self.active_hand
        if hand is None:
            raise InvalidOperationError(f"No active hand to {action}")
        return hand

    def _on_state_change(self) -> None:
        logger.debug("Round state -> %s", self.state.name)
        self.events.emit_new(EventType.STATE_CHANGE, state=self.state)

    def _advance_hand(self) -> None:
        """Move past the current hand."""
        self._active_hand_index += 1
        self._skip_settled_hands()

    def _skip_settled_hands(self) -> None:
        """Find the next hand that can act, or hand over to the dealer."""
        while (
            self._active_hand_index < len(self._player_hands)
            and self._player_hands[self._active_hand_index].is_settled
        ):
            # Naturals and busts are settled without an explicit action
            self._player_hands[self._active_hand_index].settle()
            self._active_hand_index += 1

        if self._active_hand_index >= len(self._player_hands):
            self._play_dealer()
        else:
            self.events.emit_new(EventType.ACTIVE_HAND_CHANGE, hand_index=self._active_hand_index)

    def _play_dealer(self) -> None:
        """Dealer turn, then settlement."""
        dealer_hand = self._dealer_hand
        all_busted = all(h.is_busted for h in self._player_hands)

        self.begin_dealer_turn()
        if all_busted:
            # Dead table: the dealer draws nothing
            dealer_hand.settle()
        else:
            self.events.emit_new(EventType.DEALER_REVEAL, dealer_hand=dealer_hand)
            self.dealer.play_dealer_hand(dealer_hand)
            self.events.emit_new(EventType.DEALER_DONE, dealer_hand=dealer_hand)

        self.begin_settlement()
        self._settle()

    def _settle(self) -> None:
        """Compare all hands, clear the table into the discard tray and end the round."""
        dealer_hand = self._dealer_hand
        self._results = settle_round(
            self._player_hands,
            dealer_hand,
            blackjack_payout=self.config.blackjack_payout,
        )
        self.events.emit_new(EventType.SETTLEMENT, results=self.results, dealer_hand=dealer_hand)
        logger.info(
            "Round settled: %s (net %s)",
            ", ".join(str(r.outcome) for r in self._results),
            sum(r.net for r in self._results),
        )

        for hand in self._player_hands:
            self.dealer.discard_cards(hand.cards)
        self.dealer.discard_cards(dealer_hand.cards)

        self.finish_round()

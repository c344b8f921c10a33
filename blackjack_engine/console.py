"""Console view: renders round events as text. Never mutates what it is given."""

import sys
from typing import Sequence, TextIO

from blackjack_engine.evaluator import Outcome, RoundResult
from blackjack_engine.game.engine import RoundEngine
from blackjack_engine.game.events import EventType, GameEvent
from blackjack_engine.hand import Hand

LINE = "─" * 44
DOUBLE_LINE = "═" * 44

OUTCOME_TAGS = {
    Outcome.BLACKJACK: "★ BLACKJACK!",
    Outcome.WIN: "✔ WIN",
    Outcome.DEALER_BUST: "✔ WIN (dealer bust)",
    Outcome.PUSH: "⇄ PUSH",
    Outcome.LOSE: "✘ LOSE",
}


class ConsoleView:
    """Prints a running commentary of a round to a text stream."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out or sys.stdout
        self._handlers = {
            EventType.DEALT: self._on_dealt,
            EventType.PLAYER_HIT: self._on_player_hit,
            EventType.PLAYER_STAND: self._on_player_stand,
            EventType.PLAYER_DOUBLE: self._on_player_double,
            EventType.PLAYER_SPLIT: self._on_player_split,
            EventType.PLAYER_BUST: self._on_player_bust,
            EventType.ACTIVE_HAND_CHANGE: self._on_active_hand_change,
            EventType.DEALER_REVEAL: self._on_dealer_reveal,
            EventType.DEALER_DONE: self._on_dealer_done,
            EventType.SETTLEMENT: self._on_settlement,
        }

    def attach(self, engine: RoundEngine) -> None:
        """Subscribe to every event the view renders."""
        for event_type, handler in self._handlers.items():
            engine.subscribe(handler, event_type)

    def detach(self, engine: RoundEngine) -> None:
        for event_type, handler in self._handlers.items():
            engine.unsubscribe(handler, event_type)

    # Output helpers

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def banner(self, text: str) -> None:
        self._print()
        self._print(DOUBLE_LINE)
        self._print(f"  {text}")
        self._print(DOUBLE_LINE)

    def divider(self) -> None:
        self._print(LINE)

    # Renderers

    def show_deal(self, player_hands: Sequence[Hand], dealer_hand: Hand) -> None:
        self.banner("CARDS DEALT")
        self._print(f"  Dealer: {dealer_hand.display(hide_hole=True)}")
        self.divider()
        for i, hand in enumerate(player_hands):
            self._print(f"  Player {i + 1}: {hand}")
        self._print()

    def show_settlement(self, results: Sequence[RoundResult], dealer_hand: Hand) -> None:
        self.banner("RESULTS")
        self._print(f"  Dealer: {dealer_hand}")
        self.divider()
        for i, result in enumerate(results):
            sign = "+" if result.net >= 0 else ""
            self._print(
                f"  Player {i + 1}: {result.hand}  →  {OUTCOME_TAGS[result.outcome]}"
                f"  ({sign}{result.net:g})"
            )
        self._print()

    # Event handlers

    def _on_dealt(self, event: GameEvent) -> None:
        self.show_deal(event.data["player_hands"], event.data["dealer_hand"])

    def _on_player_hit(self, event: GameEvent) -> None:
        card = event.data["card"]
        drawn = str(card) if card is not None else "(shoe empty)"
        self._print(f"  Player {event.data['hand_index'] + 1} hits → {drawn}   Hand: {event.data['hand']}")

    def _on_player_stand(self, event: GameEvent) -> None:
        self._print(f"  Player {event.data['hand_index'] + 1} stands.  {event.data['hand']}")

    def _on_player_double(self, event: GameEvent) -> None:
        card = event.data["card"]
        drawn = str(card) if card is not None else "(shoe empty)"
        self._print(
            f"  Player {event.data['hand_index'] + 1} doubles → {drawn}"
            f"   Hand: {event.data['hand']}  (bet doubled)"
        )

    def _on_player_split(self, event: GameEvent) -> None:
        self._print(f"  Player {event.data['hand_index'] + 1} splits!")

    def _on_player_bust(self, event: GameEvent) -> None:
        self._print(f"  Player {event.data['hand_index'] + 1} BUSTS! {event.data['hand']}")

    def _on_active_hand_change(self, event: GameEvent) -> None:
        self._print()
        self._print(f"  → Player {event.data['hand_index'] + 1}'s turn (hit / stand / double / split)")

    def _on_dealer_reveal(self, event: GameEvent) -> None:
        self.banner("DEALER REVEALS")
        self._print(f"  Dealer: {event.data['dealer_hand']}")

    def _on_dealer_done(self, event: GameEvent) -> None:
        dealer_hand = event.data["dealer_hand"]
        self._print(f"  Dealer final: {dealer_hand}")
        if dealer_hand.is_busted:
            self._print("  Dealer BUSTS!")

    def _on_settlement(self, event: GameEvent) -> None:
        self.show_settlement(event.data["results"], event.data["dealer_hand"])

"""Blackjack round engine - 100% UI-agnostic."""

from blackjack_engine.cards import Card, Shoe, Rank, Suit
from blackjack_engine.config import GameConfig
from blackjack_engine.dealer import Dealer
from blackjack_engine.errors import (
    BlackjackError,
    InvalidOperationError,
    InvalidTransitionError,
)
from blackjack_engine.evaluator import Outcome, RoundResult, compare_hands, settle_round
from blackjack_engine.hand import Hand, HandValue, evaluate

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "GameConfig",
    "Dealer",
    "BlackjackError",
    "InvalidOperationError",
    "InvalidTransitionError",
    "Outcome",
    "RoundResult",
    "compare_hands",
    "settle_round",
    "Hand",
    "HandValue",
    "evaluate",
]

"""Round engine and state management."""

from blackjack_engine.game.events import EventEmitter, EventType, GameEvent
from blackjack_engine.game.state import RoundState
from blackjack_engine.game.engine import RoundEngine

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "RoundState",
    "RoundEngine",
]

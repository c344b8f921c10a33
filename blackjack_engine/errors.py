"""Exceptions raised by the round engine."""

from typing import Any


class BlackjackError(Exception):
    """Base class for round engine failures."""


class InvalidTransitionError(BlackjackError):
    """An action was invoked while the round is in a state that forbids it."""

    def __init__(self, action: str, state: Any) -> None:
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} in state {state}")


class InvalidOperationError(BlackjackError):
    """An action's precondition does not hold (e.g. splitting a non-pair)."""

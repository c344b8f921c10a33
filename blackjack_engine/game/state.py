"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: BETTING → DEALING → PLAYER_TURN → DEALER_TURN → SETTLEMENT → GAME_OVER,
    and GAME_OVER → BETTING on a new round.
    """

    # Collecting wagers
    BETTING = auto()

    # Burn card and initial two passes
    DEALING = auto()

    # Player hands act in seat order
    PLAYER_TURN = auto()

    # Dealer plays house rules
    DEALER_TURN = auto()

    # Comparing hands and clearing the table
    SETTLEMENT = auto()

    # Round finished, results available
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Machine triggers: (trigger, source, dest)
TRIGGERS: list[tuple[str, RoundState, RoundState]] = [
    ("start_deal", RoundState.BETTING, RoundState.DEALING),
    ("begin_player_turn", RoundState.DEALING, RoundState.PLAYER_TURN),
    ("skip_to_settlement", RoundState.DEALING, RoundState.SETTLEMENT),  # on a natural
    ("begin_dealer_turn", RoundState.PLAYER_TURN, RoundState.DEALER_TURN),
    ("begin_settlement", RoundState.DEALER_TURN, RoundState.SETTLEMENT),
    ("finish_round", RoundState.SETTLEMENT, RoundState.GAME_OVER),
    ("reset_round", RoundState.GAME_OVER, RoundState.BETTING),
]

# Valid state transitions
VALID_TRANSITIONS: dict[RoundState, list[RoundState]] = {
    state: [dest for _, source, dest in TRIGGERS if source == state] for state in RoundState
}


def is_valid_transition(from_state: RoundState, to_state: RoundState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])

"""Tests for the event emitter and round states."""

import pytest

from blackjack_engine.game.events import EventEmitter, EventType, GameEvent
from blackjack_engine.game.state import RoundState, VALID_TRANSITIONS, is_valid_transition


@pytest.fixture
def emitter():
    return EventEmitter()


class TestEventEmitter:
    """Tests for subscription and dispatch."""

    def test_typed_subscriber_only_sees_its_type(self, emitter):
        seen = []
        emitter.subscribe(seen.append, EventType.PLAYER_HIT)

        emitter.emit_new(EventType.PLAYER_STAND, hand_index=0)
        emitter.emit_new(EventType.PLAYER_HIT, hand_index=1)

        assert [e.event_type for e in seen] == [EventType.PLAYER_HIT]
        assert seen[0].data == {"hand_index": 1}

    def test_catch_all_subscriber(self, emitter):
        seen = []
        emitter.subscribe(seen.append)

        emitter.emit_new(EventType.DEALT)
        emitter.emit_new(EventType.SETTLEMENT)

        assert [e.event_type for e in seen] == [EventType.DEALT, EventType.SETTLEMENT]

    def test_typed_handlers_run_before_catch_all(self, emitter):
        order = []
        emitter.subscribe(lambda e: order.append("all"))
        emitter.subscribe(lambda e: order.append("typed"), EventType.DEALT)

        emitter.emit_new(EventType.DEALT)

        assert order == ["typed", "all"]

    def test_unsubscribe(self, emitter):
        seen = []
        emitter.subscribe(seen.append, EventType.DEALT)

        assert emitter.unsubscribe(seen.append, EventType.DEALT)
        assert not emitter.unsubscribe(seen.append, EventType.DEALT)
        emitter.emit_new(EventType.DEALT)

        assert seen == []

    def test_handler_errors_propagate(self, emitter):
        def boom(event):
            raise RuntimeError("view failed")

        emitter.subscribe(boom)
        with pytest.raises(RuntimeError):
            emitter.emit_new(EventType.DEALT)

    def test_history(self, emitter):
        event = emitter.emit_new(EventType.DEALER_DONE, dealer_hand=None)
        assert emitter.history == [event]

        emitter.history.clear()
        assert len(emitter.history) == 1

        emitter.clear_history()
        assert emitter.history == []

    def test_events_are_immutable(self):
        event = GameEvent(EventType.DEALT)
        with pytest.raises(AttributeError):
            event.event_type = EventType.SETTLEMENT
        assert str(event) == "DEALT: {}"


class TestRoundState:
    """Tests for the state table."""

    def test_happy_path_is_valid(self):
        path = [
            RoundState.BETTING,
            RoundState.DEALING,
            RoundState.PLAYER_TURN,
            RoundState.DEALER_TURN,
            RoundState.SETTLEMENT,
            RoundState.GAME_OVER,
            RoundState.BETTING,
        ]
        for current, following in zip(path, path[1:]):
            assert is_valid_transition(current, following)

    def test_natural_shortcut(self):
        assert is_valid_transition(RoundState.DEALING, RoundState.SETTLEMENT)

    def test_invalid_transitions(self):
        assert not is_valid_transition(RoundState.BETTING, RoundState.PLAYER_TURN)
        assert not is_valid_transition(RoundState.PLAYER_TURN, RoundState.BETTING)
        assert not is_valid_transition(RoundState.SETTLEMENT, RoundState.BETTING)

    def test_every_state_has_an_exit(self):
        assert set(VALID_TRANSITIONS) == set(RoundState)
        assert all(VALID_TRANSITIONS[state] for state in RoundState)

    def test_str(self):
        assert str(RoundState.PLAYER_TURN) == "Player Turn"

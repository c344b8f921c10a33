"""Pytest fixtures for round engine tests."""

import pytest
from random import Random

from blackjack_engine.cards import Card, Shoe
from blackjack_engine.config import GameConfig
from blackjack_engine.dealer import Dealer
from blackjack_engine.game import RoundEngine
from blackjack_engine.hand import Hand


class StackedRandom(Random):
    """
    Seeded Random whose first shuffle brings the given cards to the top.

    Cards land at the front of the shoe in the order given; the rest keep
    the seeded shuffle order. Later shuffles are ordinary.
    """

    def __init__(self, seed: int = 0) -> None:
        super().__init__(seed)
        self.top: list[Card] = []

    def shuffle(self, x) -> None:
        super().shuffle(x)
        for i, card in enumerate(self.top):
            j = x.index(card, i)
            x[i], x[j] = x[j], x[i]
        self.top = []


def parse_cards(*specs: str) -> list[Card]:
    return [Card.from_string(s) for s in specs]


def stacked_random(*specs: str) -> StackedRandom:
    rng = StackedRandom()
    rng.top = parse_cards(*specs)
    return rng


def table_config(**overrides) -> GameConfig:
    """Single-deck S17 rules, independent of the environment."""
    settings = {
        "num_decks": 1,
        "penetration": 0.75,
        "dealer_hits_soft_17": False,
        "seed": 0,
    }
    settings.update(overrides)
    return GameConfig(**settings)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled single-deck shoe."""
    return Shoe(num_decks=1, penetration=0.75, rng=rng)


@pytest.fixture
def make_hand():
    """Build a hand from card strings, e.g. make_hand("AS", "KH", bet=10)."""

    def _make(*specs: str, bet: float = 0, is_dealer_hand: bool = False) -> Hand:
        return Hand(cards=parse_cards(*specs), bet=bet, is_dealer_hand=is_dealer_hand)

    return _make


@pytest.fixture
def stacked_dealer():
    """Build a dealer whose shoe starts with the given cards."""

    def _make(*specs: str, **overrides) -> Dealer:
        return Dealer(table_config(**overrides), rng=stacked_random(*specs))

    return _make


@pytest.fixture
def stacked_engine():
    """
    Build a round engine whose shoe starts with the given cards.

    The first card is the burn card; the rest follow the deal order.
    """

    def _make(*specs: str, **overrides) -> RoundEngine:
        return RoundEngine(table_config(**overrides), rng=stacked_random(*specs))

    return _make


@pytest.fixture
def engine(rng):
    """A new engine on a seeded single-deck shoe."""
    return RoundEngine(table_config(), rng=rng)


@pytest.fixture
def blackjack_hand(make_hand):
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand(make_hand):
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand(make_hand):
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def pair_8s_hand(make_hand):
    """A pair of 8s hand."""
    return make_hand("8S", "8H", bet=100)


@pytest.fixture
def bust_hand(make_hand):
    """A busted hand."""
    return make_hand("10S", "6H", "KC")

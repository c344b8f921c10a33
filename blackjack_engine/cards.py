"""Card and Shoe classes - immutable cards and a burn/discard/reshuffle shoe."""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52


class Suit(Enum):
    """Card suits."""

    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Card ranks keyed by their display symbol."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self is Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self is Rank.ACE


_RANK_ALIASES = {"T": Rank.TEN, **{rank.value: rank for rank in Rank}}

_SUIT_ALIASES = {
    "H": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "S": Suit.SPADES,
    **{suit.value: suit for suit in Suit},
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the base blackjack value, counting an Ace as 11."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'AS', '10h' or 'K♥'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = s[:-1], s[-1]
        if rank_str not in _RANK_ALIASES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_ALIASES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_ALIASES[rank_str], _SUIT_ALIASES[suit_str])


def build_deck() -> list[Card]:
    """Return one ordered 52-card deck."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


class Shoe:
    """
    A multi-deck shoe with a discard tray.

    Cards are drawn from the front of the live sequence. Burned and
    discarded cards go to the tray until the penetration threshold forces
    a reshuffle, which merges the tray back into the live cards.
    """

    def __init__(
        self,
        num_decks: int = 1,
        penetration: float = 0.75,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize and shuffle a shoe.

        Args:
            num_decks: Number of 52-card decks in the shoe
            penetration: Fraction of the shoe dealt before a reshuffle, in [0, 1)
            rng: Random source used for every shuffle
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if not 0.0 <= penetration < 1.0:
            raise ValueError("Penetration must be in [0, 1)")

        self._num_decks = num_decks
        self._penetration = penetration
        self._rng = rng or Random()
        self._live: list[Card] = []
        self._discard: list[Card] = []
        self._total_cards = 0
        self.reset()

    def reset(self) -> None:
        """Rebuild every deck, empty the tray and shuffle."""
        self._live = [card for _ in range(self._num_decks) for card in build_deck()]
        self._discard = []
        self._total_cards = len(self._live)
        self._rng.shuffle(self._live)
        logger.debug("Shoe reset: %d cards", self._total_cards)

    def reshuffle(self) -> None:
        """Merge the discard tray into the live cards and shuffle."""
        self._live.extend(self._discard)
        self._discard = []
        self._total_cards = len(self._live)
        self._rng.shuffle(self._live)
        logger.info("Shoe reshuffled: %d cards live", self._total_cards)

    def burn(self, count: int = 1) -> list[Card]:
        """Move cards from the front of the shoe to the tray unseen."""
        burned = self._live[:count]
        del self._live[:count]
        self._discard.extend(burned)
        return burned

    def draw(self, count: int = 1) -> list[Card]:
        """
        Draw up to `count` cards from the front of the shoe.

        Reshuffles first when the penetration threshold has been reached.
        Returns fewer cards (possibly none) when the shoe runs out.
        """
        if self.needs_reshuffle:
            self.reshuffle()

        drawn = self._live[:count]
        del self._live[:count]
        if len(drawn) < count:
            logger.warning("Shoe exhausted: requested %d, drew %d", count, len(drawn))
        return drawn

    def discard(self, cards: Iterable[Card]) -> None:
        """Put used cards in the tray."""
        self._discard.extend(cards)

    @property
    def needs_reshuffle(self) -> bool:
        """Check if the live count has fallen to the penetration threshold."""
        threshold = math.floor(self._total_cards * (1 - self._penetration))
        return len(self._live) <= threshold

    @property
    def live(self) -> tuple[Card, ...]:
        """Live cards in draw order."""
        return tuple(self._live)

    @property
    def discarded(self) -> tuple[Card, ...]:
        """Cards in the discard tray."""
        return tuple(self._discard)

    @property
    def cards_remaining(self) -> int:
        """Return the number of live cards."""
        return len(self._live)

    @property
    def discard_count(self) -> int:
        return len(self._discard)

    @property
    def total_cards(self) -> int:
        """Return the live size at the last build or reshuffle."""
        return self._total_cards

    @property
    def num_decks(self) -> int:
        return self._num_decks

    @property
    def penetration(self) -> float:
        return self._penetration

    @property
    def decks_remaining(self) -> float:
        """Return the estimated number of decks remaining."""
        return len(self._live) / CARDS_PER_DECK

    def __len__(self) -> int:
        return len(self._live)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._live)

"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, NamedTuple

from blackjack_engine.cards import Card
from blackjack_engine.errors import InvalidOperationError


class HandValue(NamedTuple):
    """Best total for a set of cards and whether an Ace still counts as 11."""

    total: int
    soft: bool


def evaluate(cards: Iterable[Card]) -> HandValue:
    """
    Calculate the best blackjack value for a set of cards.

    Aces start at 11 and are reduced to 1, one at a time, while the total
    is over 21. The result is the highest value that doesn't bust, or the
    lowest bust value.
    """
    total = 0
    aces = 0

    for card in cards:
        total += card.value
        if card.is_ace:
            aces += 1

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return HandValue(total, aces > 0)


@dataclass
class Hand:
    """A blackjack hand with its wager."""

    cards: list[Card] = field(default_factory=list)
    bet: float = 0
    is_dealer_hand: bool = False
    settled: bool = False
    is_doubled: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def add_cards(self, *cards: Card) -> None:
        self.cards.extend(cards)

    @property
    def evaluation(self) -> HandValue:
        return evaluate(self.cards)

    @property
    def total(self) -> int:
        """Best total; recomputed from the cards on every call."""
        return self.evaluation.total

    @property
    def is_soft(self) -> bool:
        """Check if an Ace is still counted as 11."""
        return self.evaluation.soft

    @property
    def is_busted(self) -> bool:
        return self.total > 21

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with exactly 2 cards)."""
        return len(self.cards) == 2 and self.total == 21

    @property
    def can_split(self) -> bool:
        """Check if the hand is a pair (two cards of same rank)."""
        return len(self.cards) == 2 and self.cards[0].rank == self.cards[1].rank

    @property
    def can_double_down(self) -> bool:
        return len(self.cards) == 2

    @property
    def is_settled(self) -> bool:
        """Check if the hand takes no more actions (stood, busted or natural)."""
        return self.settled or self.is_busted or self.is_blackjack

    def settle(self) -> None:
        """Lock the hand after stand, bust or double."""
        self.settled = True

    def double_bet(self) -> None:
        """Double the wager; a hand can only be doubled once."""
        if self.is_doubled:
            raise InvalidOperationError("Hand has already been doubled")
        self.bet *= 2
        self.is_doubled = True

    def split(self) -> tuple["Hand", "Hand"]:
        """
        Split a pair into two new one-card hands.

        Each new hand carries the original bet. The original hand is left
        untouched; the caller replaces it.

        Raises:
            InvalidOperationError: if the hand is not a two-card pair
        """
        if not self.can_split:
            raise InvalidOperationError("Hand cannot be split")
        first, second = self.cards
        return Hand(cards=[first], bet=self.bet), Hand(cards=[second], bet=self.bet)

    def display(self, hide_hole: bool = False) -> str:
        """Render the hand, e.g. "A♠ K♥  (21 soft)" or "A♠ [??]" for a hidden hole card."""
        if hide_hole and self.is_dealer_hand and len(self.cards) >= 2:
            return f"{self.cards[0]} [??]"
        cards_str = " ".join(str(card) for card in self.cards)
        total, soft = self.evaluation
        soft_label = " soft" if soft else ""
        return f"{cards_str}  ({total}{soft_label})"

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, total={self.total}, bet={self.bet})"

"""
Card, hand and deal models.

Shape tuples always follow suit order [spades, hearts, diamonds, clubs].
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ..auction.models import Seat, Strain, Vulnerability
from ..errors import InvalidHandError


class Suit(str, Enum):
    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"

    @property
    def index(self) -> int:
        """Position in a shape tuple."""
        return SUIT_ORDER.index(self)

    @property
    def strain(self) -> Strain:
        return Strain(self.value)

    @property
    def display_name(self) -> str:
        return self.name.lower()


# Shape tuple ordering
SUIT_ORDER: tuple[Suit, ...] = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


RANK_ORDER: tuple[Rank, ...] = tuple(Rank)

HCP_VALUES: dict[Rank, int] = {
    Rank.JACK: 1,
    Rank.QUEEN: 2,
    Rank.KING: 3,
    Rank.ACE: 4,
}


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank

    def __str__(self) -> str:
        return f"{self.suit.value}{self.rank.value}"


def create_deck() -> list[Card]:
    """Standard 52-card deck."""
    return [Card(suit, rank) for suit in SUIT_ORDER for rank in RANK_ORDER]


@dataclass(frozen=True)
class Hand:
    """Thirteen unique cards."""
    cards: tuple[Card, ...]

    def __post_init__(self):
        cards = tuple(self.cards)
        if len(cards) != 13:
            raise InvalidHandError(
                f"Hand must have exactly 13 cards, got {len(cards)}",
                card_count=len(cards)
            )
        if len(set(cards)) != 13:
            duplicates = sorted({str(c) for c in cards if cards.count(c) > 1})
            raise InvalidHandError(
                f"Duplicate card in hand: {', '.join(duplicates)}",
                card_count=len(cards)
            )
        object.__setattr__(self, "cards", cards)

    def cards_in_suit(self, suit: Suit) -> list[Card]:
        return [card for card in self.cards if card.suit == suit]

    def count_rank(self, rank: Rank) -> int:
        return sum(1 for card in self.cards if card.rank == rank)

    def __str__(self) -> str:
        groups = []
        for suit in SUIT_ORDER:
            ranks = sorted(
                (card.rank for card in self.cards if card.suit == suit),
                key=RANK_ORDER.index,
                reverse=True,
            )
            groups.append(suit.value + "".join(r.value for r in ranks))
        return " ".join(groups)


@dataclass(frozen=True)
class Deal:
    """Four hands plus dealer and vulnerability. Never mutated once dealt."""
    hands: Mapping[Seat, Hand]
    dealer: Seat = Seat.NORTH
    vulnerability: Vulnerability = Vulnerability.NONE

    def __post_init__(self):
        object.__setattr__(self, "hands", MappingProxyType(dict(self.hands)))

    def __hash__(self) -> int:
        return hash((frozenset(self.hands.items()), self.dealer, self.vulnerability))


@dataclass(frozen=True)
class DistributionPoints:
    shortness: int
    length: int
    total: int


@dataclass(frozen=True)
class HandEvaluation:
    """Derived view of a hand; recomputed on demand, never cached."""
    hcp: int
    shape: tuple[int, int, int, int]
    distribution: DistributionPoints
    total_points: int
    strategy: str = "HCP"


@dataclass(frozen=True)
class SeatConstraint:
    """Declarative constraints on one seat's hand for the deal generator."""
    seat: Seat
    min_hcp: Optional[int] = None
    max_hcp: Optional[int] = None
    balanced: Optional[bool] = None
    min_length: dict[Suit, int] = field(default_factory=dict)
    max_length: dict[Suit, int] = field(default_factory=dict)
    # At least one listed suit meets its minimum
    min_length_any: dict[Suit, int] = field(default_factory=dict)
    # Runs last, after all other checks pass
    custom_check: Optional[Callable[[Hand], bool]] = None


@dataclass(frozen=True)
class DealConstraints:
    seats: tuple[SeatConstraint, ...] = ()
    dealer: Seat = Seat.NORTH
    vulnerability: Vulnerability = Vulnerability.NONE
    max_attempts: Optional[int] = None

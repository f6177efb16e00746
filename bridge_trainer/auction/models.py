"""
Auction data models.

Calls, auction entries, auctions and contracts are immutable values. An
auction grows only through ``machine.add_call``, which returns a new value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Seat(str, Enum):
    """The four seats, in clockwise rotation order."""
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    def next(self) -> "Seat":
        """Seat to the left (next to call)."""
        return SEAT_ORDER[(SEAT_ORDER.index(self) + 1) % 4]

    def partner(self) -> "Seat":
        """Seat opposite, two seats away."""
        return SEAT_ORDER[(SEAT_ORDER.index(self) + 2) % 4]

    def same_side(self, other: "Seat") -> bool:
        """True when both seats belong to the same partnership."""
        return other == self or other == self.partner()


SEAT_ORDER: tuple[Seat, ...] = (Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST)


class Strain(str, Enum):
    """Bid denominations. Declaration order is bid ranking order."""
    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"
    NOTRUMP = "NT"

    @property
    def rank(self) -> int:
        """Ranking used for bid comparison: clubs lowest, notrump highest."""
        return STRAIN_ORDER.index(self)

    @property
    def is_major(self) -> bool:
        return self in (Strain.HEARTS, Strain.SPADES)

    @property
    def is_minor(self) -> bool:
        return self in (Strain.CLUBS, Strain.DIAMONDS)


STRAIN_ORDER: tuple[Strain, ...] = (
    Strain.CLUBS, Strain.DIAMONDS, Strain.HEARTS, Strain.SPADES, Strain.NOTRUMP,
)


class Vulnerability(str, Enum):
    """Vulnerability of a deal."""
    NONE = "None"
    NORTH_SOUTH = "NS"
    EAST_WEST = "EW"
    BOTH = "Both"


@dataclass(frozen=True)
class ContractBid:
    """A bid of level 1-7 in a strain."""
    level: int
    strain: Strain

    def __post_init__(self):
        if not isinstance(self.level, int) or not 1 <= self.level <= 7:
            raise ValueError(f"Bid level must be 1-7, got {self.level!r}")
        if not isinstance(self.strain, Strain):
            object.__setattr__(self, "strain", Strain(self.strain))

    def __str__(self) -> str:
        return f"{self.level}{self.strain.value}"


@dataclass(frozen=True)
class Pass:
    def __str__(self) -> str:
        return "P"


@dataclass(frozen=True)
class Double:
    def __str__(self) -> str:
        return "X"


@dataclass(frozen=True)
class Redouble:
    def __str__(self) -> str:
        return "XX"


Call = Union[ContractBid, Pass, Double, Redouble]

PASS = Pass()
DOUBLE = Double()
REDOUBLE = Redouble()


@dataclass(frozen=True)
class AuctionEntry:
    """A single call made by a seat."""
    seat: Seat
    call: Call


@dataclass(frozen=True)
class Auction:
    """
    Append-only sequence of auction entries.

    ``dealer`` fixes the first seat to call; when it is None the first entry
    decides. ``is_complete`` is derived by the state machine on every append.
    """
    entries: tuple[AuctionEntry, ...] = ()
    dealer: Optional[Seat] = None
    is_complete: bool = False

    @classmethod
    def empty(cls, dealer: Optional[Seat] = None) -> "Auction":
        """Create an auction with no calls."""
        return cls(entries=(), dealer=dealer, is_complete=False)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def calls(self) -> tuple[Call, ...]:
        return tuple(entry.call for entry in self.entries)

    def __str__(self) -> str:
        return " - ".join(str(entry.call) for entry in self.entries)


@dataclass(frozen=True)
class Contract:
    """Final contract derived from a completed auction."""
    level: int
    strain: Strain
    doubled: bool
    redoubled: bool
    declarer: Seat

    def __str__(self) -> str:
        suffix = "XX" if self.redoubled else ("X" if self.doubled else "")
        return f"{self.level}{self.strain.value}{suffix} by {self.declarer.value}"

"""Call notation parsing and auction query helpers."""

import re
from typing import Optional, Sequence

from ..errors import CallParseError
from .machine import add_call
from .models import (
    Auction,
    AuctionEntry,
    Call,
    ContractBid,
    DOUBLE,
    PASS,
    REDOUBLE,
    Seat,
    Strain,
)

_BID_PATTERN = re.compile(r"^([1-7])(C|D|H|S|NT|N)$")

_STRAIN_MAP = {
    "C": Strain.CLUBS,
    "D": Strain.DIAMONDS,
    "H": Strain.HEARTS,
    "S": Strain.SPADES,
    "NT": Strain.NOTRUMP,
    "N": Strain.NOTRUMP,
}


def parse_call(raw: str) -> Call:
    """Parse ``"1C"``-``"7NT"``, ``"P"``/``"PASS"``, ``"X"``/``"DOUBLE"``, ``"XX"``/``"REDOUBLE"``."""
    if not isinstance(raw, str):
        raise CallParseError(f"Call notation must be a string, got {type(raw).__name__}", raw=repr(raw))

    text = raw.strip().upper()
    if text in ("P", "PASS"):
        return PASS
    if text in ("X", "DOUBLE"):
        return DOUBLE
    if text in ("XX", "REDOUBLE"):
        return REDOUBLE

    match = _BID_PATTERN.match(text)
    if not match:
        raise CallParseError(f'Invalid call notation: "{raw}"', raw=raw)
    return ContractBid(int(match.group(1)), _STRAIN_MAP[match.group(2)])


def format_call(call: Call) -> str:
    """Inverse of ``parse_call`` (canonical notation)."""
    return str(call)


def calls_match(a: Call, b: Call) -> bool:
    """Same call type, and for bids the same level and strain."""
    return a == b


def build_auction(dealer: Seat, calls: Sequence[str]) -> Auction:
    """Build an auction from call notation, rotating seats from the dealer."""
    auction = Auction.empty(dealer)
    seat = dealer
    for raw in calls:
        auction = add_call(auction, AuctionEntry(seat=seat, call=parse_call(raw)))
        seat = seat.next()
    return auction


def auction_matches_exact(auction: Auction, pattern: Sequence[str]) -> bool:
    """True when the auction holds exactly the calls in ``pattern``, in order."""
    if len(auction.entries) != len(pattern):
        return False
    return all(
        calls_match(entry.call, parse_call(expected))
        for entry, expected in zip(auction.entries, pattern)
    )


def last_contract_bid(auction: Auction) -> Optional[ContractBid]:
    """Most recent contract bid, or None."""
    for entry in reversed(auction.entries):
        if isinstance(entry.call, ContractBid):
            return entry.call
    return None


def bids_in_sequence(auction: Auction) -> list[ContractBid]:
    """All contract bids in auction order."""
    return [entry.call for entry in auction.entries if isinstance(entry.call, ContractBid)]


def seat_call_count(auction: Auction, seat: Seat) -> int:
    """Number of calls (of any kind) made by ``seat``."""
    return sum(1 for entry in auction.entries if entry.seat == seat)

"""
Core auction legality state machine.

Pure functions over an immutable ``Auction``: bid comparison, call legality,
completion detection, contract and declarer derivation, and enumeration of
legal calls. Illegal calls always raise; nothing is silently corrected.
"""

from typing import Optional

from ..errors import AuctionCompleteError, IllegalCallError
from ..logging.config import get_auction_logger, log_auction_transition
from .models import (
    STRAIN_ORDER,
    Auction,
    AuctionEntry,
    Call,
    Contract,
    ContractBid,
    Double,
    DOUBLE,
    Pass,
    PASS,
    Redouble,
    REDOUBLE,
    Seat,
)

auction_logger = get_auction_logger(__name__)

# All 35 contract bids in ascending order
ALL_BIDS: tuple[ContractBid, ...] = tuple(
    ContractBid(level, strain)
    for level in range(1, 8)
    for strain in STRAIN_ORDER
)


def compare_bids(a: ContractBid, b: ContractBid) -> int:
    """
    Compare two contract bids.

    Returns:
        Negative if a < b, 0 if equal, positive if a > b. Level is the
        primary key, strain rank the secondary key.
    """
    if a.level != b.level:
        return a.level - b.level
    return a.strain.rank - b.strain.rank


def last_non_pass_entry(auction: Auction) -> Optional[AuctionEntry]:
    """Most recent entry that is not a pass, or None."""
    for entry in reversed(auction.entries):
        if not isinstance(entry.call, Pass):
            return entry
    return None


def last_bid_entry(auction: Auction) -> Optional[AuctionEntry]:
    """Most recent contract bid entry, or None."""
    for entry in reversed(auction.entries):
        if isinstance(entry.call, ContractBid):
            return entry
    return None


def seat_to_act(auction: Auction) -> Optional[Seat]:
    """Seat whose turn it is, or None when no dealer is known and nobody has called."""
    if auction.entries:
        return auction.entries[-1].seat.next()
    return auction.dealer


def is_legal_call(auction: Auction, call: Call, seat: Seat) -> bool:
    """
    Check whether ``seat`` may make ``call`` in ``auction``.

    Turn order is not considered here; ``add_call`` enforces rotation.
    """
    if auction.is_complete:
        return False

    if isinstance(call, Pass):
        return True

    if isinstance(call, ContractBid):
        last = last_bid_entry(auction)
        if last is None:
            return True
        return compare_bids(call, last.call) > 0

    if isinstance(call, Double):
        last = last_non_pass_entry(auction)
        if last is None or not isinstance(last.call, ContractBid):
            return False
        return not last.seat.same_side(seat)

    if isinstance(call, Redouble):
        last = last_non_pass_entry(auction)
        if last is None or not isinstance(last.call, Double):
            return False
        # A double is only legal against the other side's bid, so an
        # opposing doubler means the doubled bid belongs to this side.
        return not last.seat.same_side(seat)

    raise TypeError(f"Unhandled call type: {type(call).__name__}")


def is_auction_complete(auction: Auction) -> bool:
    """
    Completion test.

    Complete when the auction opens with four passes (passout), or when a
    non-pass call is followed by exactly three consecutive passes.
    """
    entries = auction.entries
    if len(entries) < 4:
        return False

    if not all(isinstance(entry.call, Pass) for entry in entries[-3:]):
        return False

    if len(entries) == 4 and isinstance(entries[0].call, Pass):
        return True

    return any(not isinstance(entry.call, Pass) for entry in entries[:-3])


def add_call(auction: Auction, entry: AuctionEntry) -> Auction:
    """
    Append a call to the auction.

    Args:
        auction: Current auction (never mutated)
        entry: Seat and call to append

    Returns:
        New auction with ``is_complete`` recomputed

    Raises:
        AuctionCompleteError: The auction has already ended
        IllegalCallError: The call is illegal or made out of turn
    """
    if auction.is_complete:
        raise AuctionCompleteError(
            f"Cannot add {entry.call} by {entry.seat.value}: auction is complete",
            call=entry.call,
            seat=entry.seat,
            context={"auction": str(auction)}
        )

    expected_seat = seat_to_act(auction)
    if expected_seat is not None and entry.seat != expected_seat:
        auction_logger.warning(
            "Call out of turn rejected",
            seat=entry.seat.value,
            expected_seat=expected_seat.value,
            call=str(entry.call)
        )
        raise IllegalCallError(
            f"{entry.seat.value} cannot call out of turn; {expected_seat.value} is to act",
            call=entry.call,
            seat=entry.seat,
            context={"auction": str(auction), "expected_seat": expected_seat.value}
        )

    if not is_legal_call(auction, entry.call, entry.seat):
        auction_logger.warning(
            "Illegal call rejected",
            seat=entry.seat.value,
            call=str(entry.call),
            auction=str(auction)
        )
        raise IllegalCallError(
            f"Illegal call: {entry.call} by {entry.seat.value}",
            call=entry.call,
            seat=entry.seat,
            context={"auction": str(auction)}
        )

    entries = auction.entries + (entry,)
    dealer = auction.dealer if auction.dealer is not None else entry.seat
    new_auction = Auction(
        entries=entries,
        dealer=dealer,
        is_complete=is_auction_complete(Auction(entries=entries, dealer=dealer)),
    )

    log_auction_transition(
        auction_logger,
        seat=entry.seat.value,
        call=str(entry.call),
        entry_count=len(new_auction.entries),
        is_complete=new_auction.is_complete,
    )
    return new_auction


def get_declarer(auction: Auction) -> Optional[Seat]:
    """
    Seat that first named the final strain on the declaring side.

    Scans the whole auction, so the final bidder is not necessarily declarer.
    """
    last = last_bid_entry(auction)
    if last is None:
        return None

    final_strain = last.call.strain
    for entry in auction.entries:
        if (
            isinstance(entry.call, ContractBid)
            and entry.call.strain == final_strain
            and entry.seat.same_side(last.seat)
        ):
            return entry.seat
    return last.seat


def get_contract(auction: Auction) -> Optional[Contract]:
    """Derive the contract, or None for a passed-out auction."""
    last = last_bid_entry(auction)
    if last is None:
        return None

    last_action = last_non_pass_entry(auction)
    doubled = last_action is not None and isinstance(last_action.call, Double)
    redoubled = last_action is not None and isinstance(last_action.call, Redouble)

    return Contract(
        level=last.call.level,
        strain=last.call.strain,
        doubled=doubled,
        redoubled=redoubled,
        declarer=get_declarer(auction),
    )


def get_legal_calls(auction: Auction, seat: Seat) -> list[Call]:
    """Every call ``seat`` may currently make: pass, bids ascending, double, redouble."""
    if auction.is_complete:
        return []

    candidates: list[Call] = [PASS, *ALL_BIDS, DOUBLE, REDOUBLE]
    return [call for call in candidates if is_legal_call(auction, call, seat)]

"""Unit tests for the auction legality state machine."""

import pytest

from bridge_trainer.auction.helpers import build_auction, parse_call
from bridge_trainer.auction.machine import (
    ALL_BIDS,
    add_call,
    compare_bids,
    get_contract,
    get_declarer,
    get_legal_calls,
    is_auction_complete,
    is_legal_call,
    seat_to_act,
)
from bridge_trainer.auction.models import (
    DOUBLE,
    PASS,
    REDOUBLE,
    Auction,
    AuctionEntry,
    ContractBid,
    Seat,
    Strain,
)
from bridge_trainer.errors import AuctionCompleteError, IllegalCallError


class TestCompareBids:
    """Test suite for bid ordering."""

    def test_level_is_primary_key(self) -> None:
        assert compare_bids(ContractBid(2, Strain.CLUBS), ContractBid(1, Strain.NOTRUMP)) > 0

    def test_strain_breaks_ties(self) -> None:
        assert compare_bids(ContractBid(1, Strain.SPADES), ContractBid(1, Strain.HEARTS)) > 0
        assert compare_bids(ContractBid(1, Strain.CLUBS), ContractBid(1, Strain.DIAMONDS)) < 0

    def test_equal_bids(self) -> None:
        assert compare_bids(ContractBid(3, Strain.NOTRUMP), ContractBid(3, Strain.NOTRUMP)) == 0

    def test_all_bids_ascending(self) -> None:
        """ALL_BIDS holds 35 bids in strictly ascending order."""
        assert len(ALL_BIDS) == 35
        for lower, higher in zip(ALL_BIDS, ALL_BIDS[1:]):
            assert compare_bids(lower, higher) < 0

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValueError):
            ContractBid(8, Strain.CLUBS)


class TestLegality:
    """Test suite for call legality."""

    def test_empty_auction_has_36_legal_calls(self, empty_auction: Auction) -> None:
        """Pass plus every contract bid; no double or redouble."""
        legal = get_legal_calls(empty_auction, Seat.NORTH)
        assert len(legal) == 36
        assert legal[0] == PASS
        assert DOUBLE not in legal
        assert REDOUBLE not in legal

    def test_opponent_may_double_opening(self) -> None:
        auction = build_auction(Seat.NORTH, ["1C"])
        assert is_legal_call(auction, DOUBLE, Seat.EAST)

    def test_partner_may_not_double_own_side(self) -> None:
        """After N 1C and E pass, South cannot double partner's bid."""
        auction = build_auction(Seat.NORTH, ["1C", "P"])
        assert not is_legal_call(auction, DOUBLE, Seat.SOUTH)

    def test_double_skips_trailing_passes(self) -> None:
        """West may still double 1C after two passes."""
        auction = build_auction(Seat.NORTH, ["1C", "P", "P"])
        assert is_legal_call(auction, DOUBLE, Seat.WEST)

    def test_no_double_of_double(self) -> None:
        auction = build_auction(Seat.NORTH, ["1C", "X"])
        assert not is_legal_call(auction, DOUBLE, Seat.SOUTH)

    def test_redouble_by_doubled_side(self) -> None:
        auction = build_auction(Seat.NORTH, ["1C", "X"])
        assert is_legal_call(auction, REDOUBLE, Seat.SOUTH)

    def test_redouble_not_by_doubling_side(self) -> None:
        auction = build_auction(Seat.NORTH, ["1C", "X", "P"])
        assert not is_legal_call(auction, REDOUBLE, Seat.WEST)

    def test_redouble_needs_double(self) -> None:
        auction = build_auction(Seat.NORTH, ["1C"])
        assert not is_legal_call(auction, REDOUBLE, Seat.EAST)

    def test_bid_must_outrank_last_bid(self) -> None:
        auction = build_auction(Seat.NORTH, ["1D"])
        assert not is_legal_call(auction, parse_call("1C"), Seat.EAST)
        assert not is_legal_call(auction, parse_call("1D"), Seat.EAST)
        assert is_legal_call(auction, parse_call("1H"), Seat.EAST)

    def test_legal_calls_after_opening(self) -> None:
        """After 1S: pass, 31 higher bids and double."""
        auction = build_auction(Seat.NORTH, ["1S"])
        legal = get_legal_calls(auction, Seat.EAST)
        assert len(legal) == 1 + 31 + 1
        assert legal[-1] == DOUBLE

    def test_nothing_legal_after_completion(self) -> None:
        auction = build_auction(Seat.NORTH, ["1C", "P", "P", "P"])
        assert get_legal_calls(auction, Seat.NORTH) == []
        assert not is_legal_call(auction, PASS, Seat.NORTH)


class TestAddCall:
    """Test suite for appending calls."""

    def test_add_call_returns_new_auction(self, empty_auction: Auction) -> None:
        updated = add_call(empty_auction, AuctionEntry(seat=Seat.NORTH, call=parse_call("1NT")))
        assert len(updated) == 1
        assert len(empty_auction) == 0
        assert seat_to_act(updated) == Seat.EAST

    def test_illegal_bid_raises(self) -> None:
        auction = build_auction(Seat.NORTH, ["1D"])
        with pytest.raises(IllegalCallError) as exc_info:
            add_call(auction, AuctionEntry(seat=Seat.EAST, call=parse_call("1C")))
        assert exc_info.value.seat == Seat.EAST
        assert exc_info.value.recoverable is True

    def test_out_of_turn_raises(self) -> None:
        auction = build_auction(Seat.NORTH, ["1D"])
        with pytest.raises(IllegalCallError):
            add_call(auction, AuctionEntry(seat=Seat.SOUTH, call=PASS))

    def test_call_after_completion_raises(self) -> None:
        auction = build_auction(Seat.NORTH, ["P", "P", "P", "P"])
        with pytest.raises(AuctionCompleteError):
            add_call(auction, AuctionEntry(seat=Seat.NORTH, call=parse_call("1C")))

    def test_first_entry_sets_missing_dealer(self) -> None:
        updated = add_call(Auction(), AuctionEntry(seat=Seat.WEST, call=PASS))
        assert updated.dealer == Seat.WEST


class TestCompletion:
    """Test suite for completion detection."""

    def test_passout_is_complete(self) -> None:
        assert build_auction(Seat.NORTH, ["P", "P", "P", "P"]).is_complete

    def test_three_passes_after_bid(self) -> None:
        assert build_auction(Seat.NORTH, ["1C", "P", "P", "P"]).is_complete

    def test_three_opening_passes_not_complete(self) -> None:
        auction = build_auction(Seat.NORTH, ["P", "P", "P"])
        assert not auction.is_complete
        assert not is_auction_complete(auction)

    def test_two_passes_after_bid_not_complete(self) -> None:
        assert not build_auction(Seat.NORTH, ["1C", "P", "P"]).is_complete

    def test_late_opening_needs_three_more_passes(self) -> None:
        auction = build_auction(Seat.NORTH, ["P", "P", "P", "1H", "P", "P"])
        assert not auction.is_complete


class TestContract:
    """Test suite for contract and declarer derivation."""

    def test_passout_has_no_contract(self) -> None:
        auction = build_auction(Seat.NORTH, ["P", "P", "P", "P"])
        assert get_contract(auction) is None
        assert get_declarer(auction) is None

    def test_declarer_first_named_strain(self) -> None:
        """South named hearts first, so South declares although North bid 2H."""
        auction = build_auction(Seat.NORTH, ["1C", "P", "1H", "P", "2H", "P", "P", "P"])
        contract = get_contract(auction)
        assert contract is not None
        assert contract.level == 2
        assert contract.strain == Strain.HEARTS
        assert contract.declarer == Seat.SOUTH
        assert not contract.doubled

    def test_doubled_contract(self) -> None:
        auction = build_auction(Seat.NORTH, ["1NT", "X", "P", "P", "P"])
        contract = get_contract(auction)
        assert contract.doubled
        assert not contract.redoubled
        assert contract.declarer == Seat.NORTH
        assert str(contract) == "1NTX by N"

    def test_redoubled_contract(self) -> None:
        auction = build_auction(Seat.NORTH, ["1S", "X", "XX", "P", "P", "P"])
        contract = get_contract(auction)
        assert contract.redoubled
        assert not contract.doubled

    def test_double_cleared_by_later_bid(self) -> None:
        auction = build_auction(Seat.NORTH, ["1S", "X", "2S", "P", "P", "P"])
        contract = get_contract(auction)
        assert not contract.doubled
        assert contract.level == 2

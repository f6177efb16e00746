"""Unit tests for auction condition factories."""

from bridge_trainer.auction.models import Seat, Strain
from bridge_trainer.conventions.conditions import (
    auction_matches,
    auction_matches_any,
    bidding_round,
    is_opener,
    is_responder,
    no_prior_bid,
    opponent_acted,
    opponent_bid,
    partner_bid_at,
    partner_bid_suit,
    partner_opened,
    partner_opened_at,
    partner_opened_major,
    partner_opened_minor,
    partner_raised_opening,
    seat_has_bid,
)

HAND = "KJ72.Q853.Q4.962"


class TestAuctionMatches:
    """Test suite for exact auction patterns."""

    def test_exact_match(self, make_context) -> None:
        condition = auction_matches(["1NT", "P"])
        ctx = make_context(HAND, ["1NT", "P"])
        assert condition.is_auction
        assert condition.inference is None
        assert condition.test(ctx)
        assert condition.describe(ctx) == "After 1NT - P"

    def test_prefix_does_not_match(self, make_context) -> None:
        condition = auction_matches(["1NT"])
        ctx = make_context(HAND, ["1NT", "P"])
        assert not condition.test(ctx)
        assert condition.describe(ctx) == "Auction does not match 1NT"

    def test_match_any(self, make_context) -> None:
        condition = auction_matches_any([["1NT", "P"], ["2NT", "P"]])
        ctx = make_context(HAND, ["2NT", "P"])
        assert condition.test(ctx)
        assert condition.describe(ctx) == "After 2NT - P"
        assert not condition.test(make_context(HAND, ["1C", "P"]))


class TestSeatRoles:
    """Test suite for opener and responder detection."""

    def test_opener_when_nobody_bid(self, make_context) -> None:
        ctx = make_context(HAND, [])
        assert is_opener().test(ctx)
        assert no_prior_bid().test(ctx)
        assert not is_responder().test(ctx)

    def test_responder_after_partner_opens(self, make_context) -> None:
        ctx = make_context(HAND, ["1C", "P"])
        assert ctx.seat == Seat.SOUTH
        assert is_responder().test(ctx)
        assert not is_opener().test(ctx)
        assert not no_prior_bid().test(ctx)

    def test_partner_opened(self, make_context) -> None:
        ctx = make_context(HAND, ["1NT", "P"])
        assert partner_opened().test(ctx)
        assert partner_opened(Strain.NOTRUMP).test(ctx)
        assert not partner_opened(Strain.CLUBS).test(ctx)
        assert partner_opened(Strain.CLUBS).describe(ctx) == "Partner opened NT, not C"
        assert partner_opened_at(1, Strain.NOTRUMP).test(ctx)
        assert not partner_opened_at(2, Strain.NOTRUMP).test(ctx)

    def test_partner_opened_major_minor(self, make_context) -> None:
        ctx = make_context(HAND, ["1H", "P"])
        assert partner_opened_major().test(ctx)
        assert not partner_opened_minor().test(ctx)
        ctx = make_context(HAND, ["1D", "P"])
        assert partner_opened_minor().test(ctx)

    def test_partner_bid_later(self, make_context) -> None:
        ctx = make_context(HAND, ["1C", "P", "1H", "P", "2H", "P"])
        assert ctx.seat == Seat.SOUTH
        assert partner_bid_at(2, Strain.HEARTS).test(ctx)
        assert partner_bid_suit(Strain.CLUBS).test(ctx)
        assert not partner_bid_suit(Strain.SPADES).test(ctx)


class TestOpponentsAndRounds:
    """Test suite for opponent activity and bidding rounds."""

    def test_opponent_opened(self, make_context) -> None:
        ctx = make_context(HAND, ["1NT"], dealer=Seat.EAST)
        assert ctx.seat == Seat.SOUTH
        assert opponent_bid().test(ctx)
        assert opponent_acted().test(ctx)

    def test_double_is_action_not_bid(self, make_context) -> None:
        ctx = make_context(HAND, ["1C", "X"])
        assert not opponent_bid().test(ctx)
        assert opponent_acted().test(ctx)
        assert opponent_acted().describe(ctx) == "Opponent (E) acted"

    def test_bidding_round(self, make_context) -> None:
        first = make_context(HAND, ["1NT", "P"])
        assert bidding_round(0).test(first)
        assert not seat_has_bid().test(first)

        second = make_context(HAND, ["1NT", "P", "2C", "P", "2H", "P"])
        assert bidding_round(1).test(second)
        assert seat_has_bid().test(second)
        assert bidding_round(1).describe(second) == "Seat has made 1 prior bid (round 1)"


class TestOpenerRebidPosition:
    """Test suite for the opener's view of partner's response."""

    def test_partner_raised_major(self, make_context) -> None:
        ctx = make_context(HAND, ["1H", "P", "2H", "P"])
        assert ctx.seat == Seat.NORTH
        assert partner_raised_opening().test(ctx)
        assert partner_raised_opening().describe(ctx) == "Partner raised H"

    def test_new_suit_is_not_a_raise(self, make_context) -> None:
        ctx = make_context(HAND, ["1H", "P", "1S", "P"])
        assert not partner_raised_opening().test(ctx)
        assert partner_raised_opening().describe(ctx) == "Partner did not raise H"

    def test_minor_opening_never_raised(self, make_context) -> None:
        ctx = make_context(HAND, ["1D", "P", "2D", "P"])
        assert not partner_raised_opening().test(ctx)
        assert partner_raised_opening().describe(ctx) == "This seat did not open a major"

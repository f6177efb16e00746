"""Pytest configuration and shared fixtures."""

import random
from typing import Callable, Optional, Sequence

import pytest

from bridge_trainer.auction.helpers import build_auction
from bridge_trainer.auction.machine import seat_to_act
from bridge_trainer.auction.models import Auction, Seat
from bridge_trainer.conventions.models import BiddingContext, create_bidding_context
from bridge_trainer.conventions.registry import ConventionRegistry, create_default_registry
from bridge_trainer.hands.models import Hand
from bridge_trainer.hands.notation import parse_hand


@pytest.fixture
def stayman_responder_hand() -> Hand:
    """8 HCP, 4-4 in the majors."""
    return parse_hand("KJ72.Q853.Q4.962")


@pytest.fixture
def weak_responder_hand() -> Hand:
    """7 HCP, 4-4 in the majors."""
    return parse_hand("KJ72.J853.Q4.962")


@pytest.fixture
def balanced_opener_hand() -> Hand:
    """17 HCP, 3-4-3-3 with four hearts."""
    return parse_hand("AQ5.KJ84.K72.A93")


@pytest.fixture
def empty_auction() -> Auction:
    return Auction.empty(Seat.NORTH)


@pytest.fixture
def after_1nt_pass() -> Auction:
    """North opened 1NT, East passed; South to act."""
    return build_auction(Seat.NORTH, ["1NT", "P"])


@pytest.fixture
def make_context() -> Callable[..., BiddingContext]:
    """
    Build a context from hand notation and call notation.

    The seat defaults to whoever is next to call.
    """
    def _make(
        hand: str,
        calls: Sequence[str] = (),
        dealer: Seat = Seat.NORTH,
        seat: Optional[Seat] = None,
    ) -> BiddingContext:
        auction = build_auction(dealer, list(calls))
        return create_bidding_context(
            parse_hand(hand),
            auction,
            seat or seat_to_act(auction) or dealer,
        )

    return _make


@pytest.fixture
def registry() -> ConventionRegistry:
    return create_default_registry()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)

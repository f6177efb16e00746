"""Unit tests for constrained deal generation."""

import random
from unittest.mock import patch

import pytest

from bridge_trainer.auction.models import Seat, Vulnerability
from bridge_trainer.errors import DealGenerationError
from bridge_trainer.hands.deal_generator import (
    check_constraints,
    check_seat_constraint,
    generate_deal,
)
from bridge_trainer.hands.evaluator import calculate_hcp, get_suit_lengths, is_balanced_shape
from bridge_trainer.hands.models import Deal, DealConstraints, SeatConstraint, Suit
from bridge_trainer.hands.notation import parse_hand


class TestSeatConstraint:
    """Test suite for single-seat constraint checks."""

    def test_hcp_bounds(self) -> None:
        hand = parse_hand("AQ5.KJ84.K72.A93")
        assert check_seat_constraint(hand, SeatConstraint(seat=Seat.NORTH, min_hcp=15, max_hcp=17))
        assert not check_seat_constraint(hand, SeatConstraint(seat=Seat.NORTH, max_hcp=15))

    def test_length_bounds(self) -> None:
        hand = parse_hand("KJ72.Q853.Q4.962")
        assert check_seat_constraint(hand, SeatConstraint(seat=Seat.SOUTH, min_length={Suit.SPADES: 4}))
        assert not check_seat_constraint(hand, SeatConstraint(seat=Seat.SOUTH, max_length={Suit.HEARTS: 3}))

    def test_min_length_any(self) -> None:
        hand = parse_hand("KJ7.Q853.Q42.962")
        constraint = SeatConstraint(seat=Seat.SOUTH, min_length_any={Suit.SPADES: 4, Suit.HEARTS: 4})
        assert check_seat_constraint(hand, constraint)
        assert not check_seat_constraint(
            hand, SeatConstraint(seat=Seat.SOUTH, min_length_any={Suit.SPADES: 4, Suit.CLUBS: 4})
        )

    def test_custom_check_runs(self) -> None:
        hand = parse_hand("KJ72.Q853.Q4.962")
        assert not check_seat_constraint(hand, SeatConstraint(seat=Seat.SOUTH, custom_check=lambda h: False))


class TestGenerateDeal:
    """Test suite for rejection sampling."""

    def test_unconstrained_deal(self, seeded_rng: random.Random) -> None:
        result = generate_deal(DealConstraints(), rng=seeded_rng)
        assert result.iterations == 1
        cards = [card for hand in result.deal.hands.values() for card in hand.cards]
        assert len(cards) == 52
        assert len(set(cards)) == 52

    def test_constraints_satisfied(self, seeded_rng: random.Random) -> None:
        constraints = DealConstraints(
            seats=(SeatConstraint(seat=Seat.NORTH, min_hcp=15, max_hcp=17, balanced=True),),
            dealer=Seat.EAST,
            vulnerability=Vulnerability.BOTH,
        )
        result = generate_deal(constraints, rng=seeded_rng)
        north = result.deal.hands[Seat.NORTH]
        assert 15 <= calculate_hcp(north) <= 17
        assert is_balanced_shape(get_suit_lengths(north))
        assert result.deal.dealer == Seat.EAST
        assert result.deal.vulnerability == Vulnerability.BOTH
        assert check_constraints(result.deal, constraints)

    def test_same_seed_same_deal(self) -> None:
        constraints = DealConstraints(seats=(SeatConstraint(seat=Seat.SOUTH, min_hcp=10),))
        first = generate_deal(constraints, rng=random.Random(7))
        second = generate_deal(constraints, rng=random.Random(7))
        assert first.deal.hands == second.deal.hands
        assert first.iterations == second.iterations

    def test_impossible_constraints_exhaust(self, seeded_rng: random.Random) -> None:
        constraints = DealConstraints(seats=(SeatConstraint(seat=Seat.NORTH, min_hcp=38),))
        with patch("bridge_trainer.hands.deal_generator.logger") as mock_logger:
            with pytest.raises(DealGenerationError) as exc_info:
                generate_deal(constraints, rng=seeded_rng, max_attempts=25)
            mock_logger.warning.assert_called_once()
        assert exc_info.value.attempts == 25
        assert exc_info.value.recoverable is True

    def test_constraint_budget_used(self, seeded_rng: random.Random) -> None:
        constraints = DealConstraints(seats=(SeatConstraint(seat=Seat.NORTH, min_hcp=38),), max_attempts=5)
        with pytest.raises(DealGenerationError) as exc_info:
            generate_deal(constraints, rng=seeded_rng)
        assert exc_info.value.attempts == 5


class TestDealImmutability:
    """A dealt hand set cannot be changed after the deal."""

    def test_hands_are_read_only(self, seeded_rng: random.Random) -> None:
        deal = generate_deal(DealConstraints(), rng=seeded_rng).deal
        with pytest.raises(TypeError):
            deal.hands[Seat.NORTH] = parse_hand("KJ72.Q853.Q4.962")

    def test_caller_dict_is_copied(self) -> None:
        hands = {Seat.SOUTH: parse_hand("KJ72.Q853.Q4.962")}
        deal = Deal(hands=hands)
        hands[Seat.NORTH] = parse_hand("AQ5.KJ84.K72.A93")
        assert list(deal.hands) == [Seat.SOUTH]

    def test_deals_are_hashable(self) -> None:
        first = Deal(hands={Seat.SOUTH: parse_hand("KJ72.Q853.Q4.962")}, vulnerability=Vulnerability.NORTH_SOUTH)
        second = Deal(hands={Seat.SOUTH: parse_hand("KJ72.Q853.Q4.962")}, vulnerability=Vulnerability.NORTH_SOUTH)
        assert first == second
        assert len({first, second}) == 1

"""Unit tests for hand models, notation and evaluation."""

import pytest

from bridge_trainer.errors import InvalidHandError
from bridge_trainer.hands.evaluator import (
    calculate_distribution_points,
    calculate_hcp,
    count_aces,
    count_kings,
    evaluate_hand,
    get_suit_lengths,
    is_balanced_shape,
)
from bridge_trainer.hands.models import Card, Hand, Rank, Suit, create_deck
from bridge_trainer.hands.notation import parse_card, parse_hand


class TestNotation:
    """Test suite for card and hand notation."""

    def test_parse_card(self) -> None:
        assert parse_card("SA") == Card(Suit.SPADES, Rank.ACE)
        assert parse_card("ht") == Card(Suit.HEARTS, Rank.TEN)

    @pytest.mark.parametrize("raw", ["S", "SAK", "ZA", "S1"])
    def test_parse_card_invalid(self, raw: str) -> None:
        with pytest.raises(InvalidHandError):
            parse_card(raw)

    def test_parse_dotted_hand(self) -> None:
        hand = parse_hand("AKQ2.J53.T98.642")
        assert len(hand.cards) == 13
        assert str(hand) == "SAKQ2 HJ53 DT98 C642"

    def test_parse_hand_with_void(self) -> None:
        hand = parse_hand("AKQJT98.65432.-.2")
        assert get_suit_lengths(hand) == (7, 5, 0, 1)

    def test_parse_card_list(self) -> None:
        codes = ["SA", "SK", "SQ", "SJ", "HA", "HK", "HQ", "DA", "DK", "DQ", "CA", "CK", "CQ"]
        assert calculate_hcp(parse_hand(codes)) == 37

    def test_wrong_group_count(self) -> None:
        with pytest.raises(InvalidHandError):
            parse_hand("AKQ2.J53.T98")


class TestHandModel:
    """Test suite for the hand invariant."""

    def test_deck_has_52_unique_cards(self) -> None:
        deck = create_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_twelve_cards_rejected(self) -> None:
        with pytest.raises(InvalidHandError) as exc_info:
            Hand(tuple(create_deck()[:12]))
        assert exc_info.value.card_count == 12

    def test_duplicate_card_rejected(self) -> None:
        cards = tuple(create_deck()[:12]) + (create_deck()[0],)
        with pytest.raises(InvalidHandError):
            Hand(cards)


class TestEvaluator:
    """Test suite for hand evaluation."""

    def test_hcp(self) -> None:
        assert calculate_hcp(parse_hand("AKQ2.J53.T98.642")) == 10
        assert calculate_hcp(parse_hand("KJ72.Q853.Q4.962")) == 8

    def test_shape_order(self) -> None:
        assert get_suit_lengths(parse_hand("KJ72.Q853.Q4.962")) == (4, 4, 2, 3)

    @pytest.mark.parametrize("shape,expected", [
        ((4, 3, 3, 3), True),
        ((4, 4, 3, 2), True),
        ((5, 3, 3, 2), True),
        ((4, 4, 4, 1), False),
        ((5, 4, 2, 2), False),
        ((7, 6, 0, 0), False),
    ])
    def test_balanced(self, shape, expected: bool) -> None:
        assert is_balanced_shape(shape) is expected

    def test_distribution_points(self) -> None:
        points = calculate_distribution_points((6, 5, 2, 0))
        assert points.shortness == 4
        assert points.length == 3
        assert points.total == 7

    def test_aces_and_kings(self) -> None:
        hand = parse_hand("AK72.A853.K4.962")
        assert count_aces(hand) == 2
        assert count_kings(hand) == 2

    def test_evaluate_hand(self) -> None:
        evaluation = evaluate_hand(parse_hand("AQ5.KJ84.K72.A93"))
        assert evaluation.hcp == 17
        assert evaluation.shape == (3, 4, 3, 3)
        assert evaluation.distribution.total == 0
        assert evaluation.total_points == 17
        assert evaluation.strategy == "HCP"

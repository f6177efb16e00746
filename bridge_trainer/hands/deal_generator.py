"""
Constrained deal generator.

Rejection sampling: shuffle a full deck, deal 13 cards to each seat starting
with North, and accept the deal once every seat constraint holds.
"""

import random
from dataclasses import dataclass
from typing import Optional

from ..auction.models import SEAT_ORDER
from ..errors import DealGenerationError
from ..logging.config import get_logger
from .evaluator import calculate_hcp, get_suit_lengths, is_balanced_shape
from .models import Deal, DealConstraints, Hand, SeatConstraint, create_deck

logger = get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 10000

_STANDARD_DECK = tuple(create_deck())


@dataclass(frozen=True)
class DealGeneratorResult:
    deal: Deal
    iterations: int


def check_seat_constraint(hand: Hand, constraint: SeatConstraint) -> bool:
    """Check one hand against one seat constraint."""
    if constraint.min_hcp is not None or constraint.max_hcp is not None:
        hcp = calculate_hcp(hand)
        if constraint.min_hcp is not None and hcp < constraint.min_hcp:
            return False
        if constraint.max_hcp is not None and hcp > constraint.max_hcp:
            return False

    shape = get_suit_lengths(hand)

    if constraint.balanced is not None and constraint.balanced != is_balanced_shape(shape):
        return False

    for suit, minimum in constraint.min_length.items():
        if shape[suit.index] < minimum:
            return False

    for suit, maximum in constraint.max_length.items():
        if shape[suit.index] > maximum:
            return False

    if constraint.min_length_any:
        if not any(shape[suit.index] >= minimum for suit, minimum in constraint.min_length_any.items()):
            return False

    if constraint.custom_check is not None and not constraint.custom_check(hand):
        return False

    return True


def check_constraints(deal: Deal, constraints: DealConstraints) -> bool:
    return all(
        check_seat_constraint(deal.hands[seat_constraint.seat], seat_constraint)
        for seat_constraint in constraints.seats
    )


def _deal_from_shuffled(cards: list, constraints: DealConstraints) -> Deal:
    hands = {
        seat: Hand(tuple(cards[i * 13:(i + 1) * 13]))
        for i, seat in enumerate(SEAT_ORDER)
    }
    return Deal(hands=hands, dealer=constraints.dealer, vulnerability=constraints.vulnerability)


def generate_deal(
    constraints: DealConstraints,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
) -> DealGeneratorResult:
    """
    Generate a deal satisfying all seat constraints.

    Args:
        constraints: Per-seat constraints plus dealer and vulnerability
        rng: Random source; pass a seeded ``random.Random`` for reproducible deals
        max_attempts: Attempt budget; falls back to ``constraints.max_attempts``
            and then to ``DEFAULT_MAX_ATTEMPTS``

    Returns:
        DealGeneratorResult with the deal and the number of shuffles used

    Raises:
        DealGenerationError: No satisfying deal within the attempt budget
    """
    rng = rng or random.Random()
    budget = max_attempts or constraints.max_attempts or DEFAULT_MAX_ATTEMPTS
    cards = list(_STANDARD_DECK)

    for attempt in range(1, budget + 1):
        rng.shuffle(cards)
        deal = _deal_from_shuffled(cards, constraints)
        if check_constraints(deal, constraints):
            logger.debug("Deal generated", iterations=attempt, dealer=constraints.dealer.value)
            return DealGeneratorResult(deal=deal, iterations=attempt)

    logger.warning("Deal generation exhausted attempts", max_attempts=budget)
    raise DealGenerationError(
        f"Failed to generate deal after {budget} attempts",
        attempts=budget,
        context={"seats": [c.seat.value for c in constraints.seats]}
    )

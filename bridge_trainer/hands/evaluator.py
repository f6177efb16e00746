"""
Hand evaluator.

Pure arithmetic over a hand: HCP by the 4-3-2-1 table, shape by suit counts,
distribution points for shortness and length.
"""

from .models import HCP_VALUES, SUIT_ORDER, DistributionPoints, Hand, HandEvaluation, Rank


def calculate_hcp(hand: Hand) -> int:
    return sum(HCP_VALUES.get(card.rank, 0) for card in hand.cards)


def get_suit_lengths(hand: Hand) -> tuple[int, int, int, int]:
    """Suit lengths as [spades, hearts, diamonds, clubs]."""
    counts = [0, 0, 0, 0]
    for card in hand.cards:
        counts[SUIT_ORDER.index(card.suit)] += 1
    return tuple(counts)  # type: ignore[return-value]


def is_balanced_shape(shape: tuple[int, ...]) -> bool:
    """No void, no singleton, at most one doubleton."""
    return min(shape) >= 2 and sum(1 for n in shape if n == 2) <= 1


def calculate_distribution_points(shape: tuple[int, ...]) -> DistributionPoints:
    shortness = 0
    length = 0
    for count in shape:
        if count == 0:
            shortness += 3
        elif count == 1:
            shortness += 2
        elif count == 2:
            shortness += 1
        if count > 4:
            length += count - 4
    return DistributionPoints(shortness=shortness, length=length, total=shortness + length)


def count_aces(hand: Hand) -> int:
    return hand.count_rank(Rank.ACE)


def count_kings(hand: Hand) -> int:
    return hand.count_rank(Rank.KING)


def evaluate_hand(hand: Hand) -> HandEvaluation:
    """Evaluate a hand with the HCP strategy."""
    hcp = calculate_hcp(hand)
    shape = get_suit_lengths(hand)
    distribution = calculate_distribution_points(shape)
    return HandEvaluation(
        hcp=hcp,
        shape=shape,
        distribution=distribution,
        total_points=hcp + distribution.total,
        strategy="HCP",
    )

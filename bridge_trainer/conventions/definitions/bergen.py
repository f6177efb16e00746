"""
Bergen raises.

Coded jump responses to a 1H/1S opening with four-card support:
3C constructive (7-9), 3D limit (10-12), 3M preemptive (0-6) and 4M game.
"""

from typing import Optional

from ...auction.helpers import build_auction, parse_call
from ...auction.models import Auction, Call, ContractBid, Seat, Strain
from ...hands.evaluator import get_suit_lengths
from ...hands.models import Deal, DealConstraints, SeatConstraint, Suit
from ...hands.notation import parse_hand
from ..conditions import auction_matches_any, hcp_min, hcp_range, major_support
from ..flatten import flatten_tree
from ..models import BiddingContext, ConventionCategory, ConventionConfig, ExampleHand
from ..rule_tree import RuleNode, bid, decision, fallback, fixed_call


def bergen_deal_constraints() -> DealConstraints:
    """Opener 12-21 with a five-card major; responder 6-12 with a four-card major."""
    return DealConstraints(
        seats=(
            SeatConstraint(
                seat=Seat.NORTH,
                min_hcp=12,
                max_hcp=21,
                min_length_any={Suit.SPADES: 5, Suit.HEARTS: 5},
            ),
            SeatConstraint(
                seat=Seat.SOUTH,
                min_hcp=6,
                max_hcp=12,
                min_length_any={Suit.SPADES: 4, Suit.HEARTS: 4},
            ),
        ),
        dealer=Seat.NORTH,
    )


def _opened_strain(ctx: BiddingContext) -> Strain:
    opening = ctx.auction.entries[0].call
    if not isinstance(opening, ContractBid) or not opening.strain.is_major:
        raise ValueError(f"Expected a 1H or 1S opening, got {opening}")
    return opening.strain


def raise_major(level: int):
    """Call function bidding opener's major at ``level``."""
    def call(ctx: BiddingContext) -> Call:
        return ContractBid(level, _opened_strain(ctx))

    return call


def build_bergen_tree() -> RuleNode:
    return decision(
        "after-1m-p",
        auction_matches_any([["1H", "P"], ["1S", "P"]]),
        decision(
            "support-4-plus",
            major_support(4, or_more=True),
            decision(
                "game-values",
                hcp_min(13),
                bid("bergen-game-raise", raise_major(4), "Game raise: 13+ HCP with four-card support"),
                decision(
                    "limit-values",
                    hcp_range(10, 12),
                    bid("bergen-limit-raise", fixed_call("3D"), "Limit raise: 10-12 HCP with four-card support"),
                    decision(
                        "constructive-values",
                        hcp_range(7, 9),
                        bid(
                            "bergen-constructive-raise",
                            fixed_call("3C"),
                            "Constructive raise: 7-9 HCP with four-card support",
                        ),
                        bid(
                            "bergen-preemptive-raise",
                            raise_major(3),
                            "Preemptive raise: 0-6 HCP with four-card support",
                        ),
                    ),
                ),
            ),
            fallback("no-four-card-support"),
        ),
        fallback("not-major-opening"),
    )


def bergen_default_auction(seat: Seat, deal: Optional[Deal] = None) -> Optional[Auction]:
    """North opens the longer major (1S with 5-5); East passes."""
    if seat != Seat.SOUTH:
        return None
    if deal is None:
        return build_auction(Seat.NORTH, ["1H", "P"])
    spades, hearts, _, _ = get_suit_lengths(deal.hands[Seat.NORTH])
    opening = "1S" if spades >= 5 and spades >= hearts else "1H"
    return build_auction(Seat.NORTH, [opening, "P"])


def _examples() -> tuple[ExampleHand, ...]:
    after_hearts = build_auction(Seat.NORTH, ["1H", "P"])
    return (
        ExampleHand(
            description="15 HCP with four hearts raises to game",
            hand=parse_hand("K2.AQ73.KJ84.Q92"),
            auction=after_hearts,
            expected_call=parse_call("4H"),
            rule_name="bergen-game-raise",
        ),
        ExampleHand(
            description="11 HCP with four hearts shows a limit raise",
            hand=parse_hand("K2.Q873.KJ84.Q92"),
            auction=after_hearts,
            expected_call=parse_call("3D"),
            rule_name="bergen-limit-raise",
        ),
        ExampleHand(
            description="8 HCP with four hearts shows a constructive raise",
            hand=parse_hand("82.Q873.KJ84.Q92"),
            auction=after_hearts,
            expected_call=parse_call("3C"),
            rule_name="bergen-constructive-raise",
        ),
        ExampleHand(
            description="3 HCP with four spades preempts in spades",
            hand=parse_hand("Q873.82.J8742.92"),
            auction=build_auction(Seat.NORTH, ["1S", "P"]),
            expected_call=parse_call("3S"),
            rule_name="bergen-preemptive-raise",
        ),
    )


def build_bergen_config() -> ConventionConfig:
    tree = build_bergen_tree()
    return ConventionConfig(
        id="bergen-raises",
        name="Bergen Raises",
        description="Bergen Raises: coded responses to 1M opening showing support and strength",
        category=ConventionCategory.CONSTRUCTIVE,
        deal_constraints=bergen_deal_constraints(),
        rule_tree=tree,
        bidding_rules=tuple(flatten_tree(tree)),
        examples=_examples(),
        default_auction=bergen_default_auction,
    )

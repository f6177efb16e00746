"""
Landy.

A 2C overcall of the opponents' 1NT shows both majors, at least 5-4.
Advancer picks a major, relays with 2D, passes with long clubs or asks
with 2NT; after 2NT the overcaller describes shape and strength.
"""

from typing import Optional

from ...auction.helpers import build_auction, parse_call
from ...auction.models import Auction, Seat
from ...hands.evaluator import get_suit_lengths
from ...hands.models import Deal, DealConstraints, Hand, SeatConstraint, Suit
from ...hands.notation import parse_hand
from ..conditions import and_, auction_matches, both_majors, hcp_min, hcp_range, suit_min
from ..flatten import flatten_tree
from ..models import ConventionCategory, ConventionConfig, ExampleHand
from ..rule_tree import RuleNode, bid, decision, fallback, fixed_call


def _has_both_majors(hand: Hand) -> bool:
    spades, hearts, _, _ = get_suit_lengths(hand)
    return (spades >= 5 and hearts >= 4) or (hearts >= 5 and spades >= 4)


def landy_deal_constraints() -> DealConstraints:
    """East opens 1NT (15-17 balanced); South holds 10+ with 5-4 or better in the majors."""
    return DealConstraints(
        seats=(
            SeatConstraint(seat=Seat.EAST, min_hcp=15, max_hcp=17, balanced=True),
            SeatConstraint(seat=Seat.SOUTH, min_hcp=10, custom_check=_has_both_majors),
        ),
        dealer=Seat.EAST,
    )


def _overcaller_after_2nt() -> RuleNode:
    return decision(
        "5-5-majors",
        and_(suit_min(Suit.SPADES, 5), suit_min(Suit.HEARTS, 5)),
        decision(
            "max-12-plus",
            hcp_min(12),
            bid("landy-rebid-3nt", fixed_call("3NT"), "5-5 in the majors, maximum"),
            bid("landy-rebid-3s", fixed_call("3S"), "5-5 in the majors, medium"),
        ),
        decision(
            "max-12-plus-54",
            hcp_min(12),
            bid("landy-rebid-3d", fixed_call("3D"), "5-4 in the majors, maximum"),
            bid("landy-rebid-3c", fixed_call("3C"), "5-4 in the majors, medium"),
        ),
    )


def _responder() -> RuleNode:
    return decision(
        "has-12-plus",
        hcp_min(12),
        bid("landy-response-2nt", fixed_call("2NT"), "Game interest, asks overcaller to describe"),
        decision(
            "invite-3h",
            and_(hcp_range(10, 12), suit_min(Suit.HEARTS, 4)),
            bid("landy-response-3h", fixed_call("3H"), "Invitational with four hearts"),
            decision(
                "invite-3s",
                and_(hcp_range(10, 12), suit_min(Suit.SPADES, 4)),
                bid("landy-response-3s", fixed_call("3S"), "Invitational with four spades"),
                decision(
                    "has-5-clubs",
                    suit_min(Suit.CLUBS, 5),
                    bid("landy-response-pass", fixed_call("P"), "Long clubs, happy to play 2C"),
                    decision(
                        "has-4-hearts",
                        suit_min(Suit.HEARTS, 4),
                        bid("landy-response-2h", fixed_call("2H"), "Natural signoff in hearts"),
                        decision(
                            "has-4-spades",
                            suit_min(Suit.SPADES, 4),
                            bid("landy-response-2s", fixed_call("2S"), "Natural signoff in spades"),
                            bid("landy-response-2d", fixed_call("2D"), "Relay: no preference, asks for the longer major"),
                        ),
                    ),
                ),
            ),
        ),
    )


def build_landy_tree() -> RuleNode:
    return decision(
        "after-1nt",
        auction_matches(["1NT"]),
        decision(
            "both-majors",
            both_majors(),
            bid("landy-2c", fixed_call("2C"), "Shows both majors, at least 5-4"),
            fallback("not-suited"),
        ),
        decision(
            "after-1nt-2c-p-2nt-p",
            auction_matches(["1NT", "2C", "P", "2NT", "P"]),
            _overcaller_after_2nt(),
            decision(
                "after-1nt-2c-p",
                auction_matches(["1NT", "2C", "P"]),
                _responder(),
                fallback("not-landy-auction"),
            ),
        ),
    )


def landy_default_auction(seat: Seat, deal: Optional[Deal] = None) -> Optional[Auction]:
    """Overcaller acts directly after East's 1NT."""
    if seat != Seat.SOUTH:
        return None
    return build_auction(Seat.EAST, ["1NT"])


def _examples() -> tuple[ExampleHand, ...]:
    return (
        ExampleHand(
            description="Five spades and four hearts overcalls 2C",
            hand=parse_hand("KQ852.AJ74.5.Q93"),
            auction=build_auction(Seat.EAST, ["1NT"]),
            expected_call=parse_call("2C"),
            rule_name="landy-2c",
        ),
        ExampleHand(
            description="Advancer with four hearts signs off in 2H",
            hand=parse_hand("982.Q873.K84.J92"),
            auction=build_auction(Seat.EAST, ["1NT", "2C", "P"]),
            expected_call=parse_call("2H"),
            rule_name="landy-response-2h",
        ),
    )


def build_landy_config() -> ConventionConfig:
    tree = build_landy_tree()
    return ConventionConfig(
        id="landy",
        name="Landy",
        description="Landy: 2C overcall over opponent's 1NT showing both major suits (5-4+)",
        category=ConventionCategory.DEFENSIVE,
        deal_constraints=landy_deal_constraints(),
        rule_tree=tree,
        bidding_rules=tuple(flatten_tree(tree)),
        examples=_examples(),
        default_auction=landy_default_auction,
    )

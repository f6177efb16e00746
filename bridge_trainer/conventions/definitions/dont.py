"""
DONT (Disturbing Opponents' No Trump).

Over the opponents' 1NT: 2H both majors, 2D diamonds and a major, 2C clubs
and a higher suit, 2S natural, and double for a one-suiter. Advancer passes
with support or bids the next step; after a double advancer relays 2C and
the doubler passes or corrects to the long suit.
"""

from typing import Optional

from ...auction.helpers import build_auction, parse_call
from ...auction.models import Auction, Seat
from ...hands.evaluator import get_suit_lengths
from ...hands.models import Deal, DealConstraints, Hand, SeatConstraint, Suit
from ...hands.notation import parse_hand
from ..conditions import (
    advance_support_for,
    auction_matches,
    both_majors,
    clubs_plus_higher,
    diamonds_plus_major,
    has_single_long_suit,
    suit_min,
)
from ..flatten import flatten_tree
from ..models import ConventionCategory, ConventionConfig, ExampleHand
from ..rule_tree import RuleNode, bid, decision, fallback, fixed_call


def _has_dont_shape(hand: Hand) -> bool:
    longest, second = sorted(get_suit_lengths(hand), reverse=True)[:2]
    return longest >= 6 or (longest >= 5 and second >= 4)


def dont_deal_constraints() -> DealConstraints:
    """East opens 1NT (15-17 balanced); South holds 8-15 with a six-card suit or 5-4 shape."""
    return DealConstraints(
        seats=(
            SeatConstraint(seat=Seat.EAST, min_hcp=15, max_hcp=17, balanced=True),
            SeatConstraint(seat=Seat.SOUTH, min_hcp=8, max_hcp=15, custom_check=_has_dont_shape),
        ),
        dealer=Seat.EAST,
    )


def _overcall() -> RuleNode:
    return decision(
        "both-majors",
        both_majors(),
        bid("dont-2h", fixed_call("2H"), "2H showing both majors"),
        decision(
            "diamonds-and-major",
            diamonds_plus_major(),
            bid("dont-2d", fixed_call("2D"), "2D showing diamonds and a major"),
            decision(
                "clubs-and-higher",
                clubs_plus_higher(),
                bid("dont-2c", fixed_call("2C"), "2C showing clubs and a higher-ranking suit"),
                decision(
                    "six-spades",
                    suit_min(Suit.SPADES, 6),
                    bid("dont-2s", fixed_call("2S"), "2S natural showing 6+ spades"),
                    decision(
                        "single-suited",
                        has_single_long_suit(),
                        bid("dont-double", fixed_call("X"), "Double showing a one-suiter other than spades"),
                        fallback("no-dont-shape"),
                    ),
                ),
            ),
        ),
    )


def _advance(overcall: str, suit: Suit, min_support: int, next_step: Optional[str]) -> RuleNode:
    pattern = ["1NT", overcall, "P"]
    letter = suit.value.lower()
    if next_step is None:
        otherwise: RuleNode = fallback(f"no-{suit.display_name}-tolerance")
    else:
        otherwise = bid(
            f"dont-advance-next-step-{letter}",
            fixed_call(next_step),
            f"Next step {next_step}, asks for partner's other suit",
        )
    return decision(
        f"{suit.display_name}-support",
        advance_support_for(pattern, suit, min_support),
        bid(f"dont-advance-pass-{letter}", fixed_call("P"), f"Pass with {min_support}+ {suit.display_name}"),
        otherwise,
    )


def _doubler_rebid() -> RuleNode:
    return decision(
        "six-clubs",
        suit_min(Suit.CLUBS, 6),
        bid("dont-rebid-pass", fixed_call("P"), "Long suit is clubs, pass the relay"),
        decision(
            "six-hearts",
            suit_min(Suit.HEARTS, 6),
            bid("dont-rebid-2h", fixed_call("2H"), "Long suit is hearts"),
            decision(
                "six-diamonds",
                suit_min(Suit.DIAMONDS, 6),
                bid("dont-rebid-2d", fixed_call("2D"), "Long suit is diamonds"),
                fallback("no-long-suit"),
            ),
        ),
    )


def build_dont_tree() -> RuleNode:
    return decision(
        "after-1nt",
        auction_matches(["1NT"]),
        _overcall(),
        decision(
            "after-1nt-2h-p",
            auction_matches(["1NT", "2H", "P"]),
            _advance("2H", Suit.HEARTS, 3, "2S"),
            decision(
                "after-1nt-2s-p",
                auction_matches(["1NT", "2S", "P"]),
                _advance("2S", Suit.SPADES, 2, None),
                decision(
                    "after-1nt-2d-p",
                    auction_matches(["1NT", "2D", "P"]),
                    _advance("2D", Suit.DIAMONDS, 3, "2H"),
                    decision(
                        "after-1nt-2c-p",
                        auction_matches(["1NT", "2C", "P"]),
                        _advance("2C", Suit.CLUBS, 3, "2D"),
                        decision(
                            "after-1nt-x-p",
                            auction_matches(["1NT", "X", "P"]),
                            bid("dont-advance-relay", fixed_call("2C"), "Relay 2C, asks for partner's suit"),
                            decision(
                                "after-1nt-x-p-2c-p",
                                auction_matches(["1NT", "X", "P", "2C", "P"]),
                                _doubler_rebid(),
                                fallback("not-dont-auction"),
                            ),
                        ),
                    ),
                ),
            ),
        ),
    )


def dont_default_auction(seat: Seat, deal: Optional[Deal] = None) -> Optional[Auction]:
    """Overcaller acts directly after East's 1NT."""
    if seat != Seat.SOUTH:
        return None
    return build_auction(Seat.EAST, ["1NT"])


def _examples() -> tuple[ExampleHand, ...]:
    after_1nt = build_auction(Seat.EAST, ["1NT"])
    return (
        ExampleHand(
            description="Five spades and four hearts overcalls 2H",
            hand=parse_hand("KQ852.AJ74.5.Q93"),
            auction=after_1nt,
            expected_call=parse_call("2H"),
            rule_name="dont-2h",
        ),
        ExampleHand(
            description="Six diamonds and nothing else doubles",
            hand=parse_hand("82.K4.AQJ874.K93"),
            auction=after_1nt,
            expected_call=parse_call("X"),
            rule_name="dont-double",
        ),
        ExampleHand(
            description="Doubler with six diamonds corrects the relay to 2D",
            hand=parse_hand("82.K4.AQJ874.K93"),
            auction=build_auction(Seat.EAST, ["1NT", "X", "P", "2C", "P"]),
            expected_call=parse_call("2D"),
            rule_name="dont-rebid-2d",
        ),
    )


def build_dont_config() -> ConventionConfig:
    tree = build_dont_tree()
    return ConventionConfig(
        id="dont",
        name="DONT",
        description="DONT (Disturbing Opponent's No Trump): overcalls against 1NT openings",
        category=ConventionCategory.DEFENSIVE,
        deal_constraints=dont_deal_constraints(),
        rule_tree=tree,
        bidding_rules=tuple(flatten_tree(tree)),
        examples=_examples(),
        default_auction=dont_default_auction,
    )

"""
Stayman.

Responder's 2C (3C over 2NT) asks a notrump opener for a four-card major.
Opener answers 2H, 2S or 2D (denial); responder then places the contract,
using Smolen to show 5-4 in the majors after a denial.
"""

from typing import Optional

from ...auction.helpers import build_auction, parse_call
from ...auction.models import Auction, Seat
from ...hands.models import Deal, DealConstraints, SeatConstraint, Suit
from ...hands.notation import parse_hand
from ..conditions import and_, any_suit_min, auction_matches, hcp_min, suit_min
from ..flatten import flatten_tree
from ..models import ConventionCategory, ConventionConfig, ExampleHand
from ..rule_tree import RuleNode, bid, decision, fallback, fixed_call

_MAJORS = (Suit.SPADES, Suit.HEARTS)


def stayman_deal_constraints() -> DealConstraints:
    """Opener 15-17 balanced without a five-card major; responder 8+ with a four-card major."""
    return DealConstraints(
        seats=(
            SeatConstraint(
                seat=Seat.NORTH,
                min_hcp=15,
                max_hcp=17,
                balanced=True,
                max_length={Suit.SPADES: 4, Suit.HEARTS: 4},
            ),
            SeatConstraint(
                seat=Seat.SOUTH,
                min_hcp=8,
                min_length_any={Suit.SPADES: 4, Suit.HEARTS: 4},
            ),
        ),
        dealer=Seat.NORTH,
    )


def _ask(suffix: str, call: str) -> RuleNode:
    return decision(
        f"hcp-8-plus{suffix}",
        hcp_min(8),
        decision(
            f"has-4-card-major{suffix}",
            any_suit_min(_MAJORS, 4),
            bid("stayman-ask", fixed_call(call), "Asks opener for a four-card major"),
            fallback(f"no-major{suffix}"),
        ),
        fallback(f"too-weak{suffix}"),
    )


def _response(suffix: str, level: int) -> RuleNode:
    return decision(
        f"has-4-hearts{suffix}",
        suit_min(Suit.HEARTS, 4),
        bid("stayman-response-hearts", fixed_call(f"{level}H"), "Shows four hearts"),
        decision(
            f"has-4-spades{suffix}",
            suit_min(Suit.SPADES, 4),
            bid("stayman-response-spades", fixed_call(f"{level}S"), "Shows four spades, denies four hearts"),
            bid("stayman-response-denial", fixed_call(f"{level}D"), "Denies a four-card major"),
        ),
    )


def _no_fit(name: str) -> RuleNode:
    return decision(
        name,
        hcp_min(10),
        bid("stayman-rebid-no-fit", fixed_call("3NT"), "No major fit, game values"),
        bid("stayman-rebid-no-fit-invite", fixed_call("2NT"), "No major fit, invitational"),
    )


def _rebid_after_major(suit: Suit) -> RuleNode:
    letter = suit.value
    return decision(
        f"fit-{suit.display_name}",
        suit_min(suit, 4),
        decision(
            f"game-hcp-fit-{letter.lower()}",
            hcp_min(10),
            bid("stayman-rebid-major-fit", fixed_call(f"4{letter}"), "Major fit, game values"),
            bid("stayman-rebid-major-fit-invite", fixed_call(f"3{letter}"), "Major fit, invitational"),
        ),
        _no_fit(f"game-hcp-nofit-{letter.lower()}"),
    )


def _rebid_after_denial() -> RuleNode:
    return decision(
        "smolen-hearts",
        and_(hcp_min(10), suit_min(Suit.SPADES, 4), suit_min(Suit.HEARTS, 5)),
        bid("stayman-rebid-smolen-hearts", fixed_call("3H"), "Smolen: four spades and five hearts, game forcing"),
        decision(
            "smolen-spades",
            and_(hcp_min(10), suit_min(Suit.SPADES, 5), suit_min(Suit.HEARTS, 4)),
            bid("stayman-rebid-smolen-spades", fixed_call("3S"), "Smolen: five spades and four hearts, game forcing"),
            _no_fit("game-hcp-denial"),
        ),
    )


def build_stayman_tree() -> RuleNode:
    return decision(
        "after-1nt-p",
        auction_matches(["1NT", "P"]),
        _ask("", "2C"),
        decision(
            "after-2nt-p",
            auction_matches(["2NT", "P"]),
            _ask("-2nt", "3C"),
            decision(
                "after-1nt-p-2c-p",
                auction_matches(["1NT", "P", "2C", "P"]),
                _response("", 2),
                decision(
                    "after-2nt-p-3c-p",
                    auction_matches(["2NT", "P", "3C", "P"]),
                    _response("-2nt", 3),
                    decision(
                        "after-2h-response",
                        auction_matches(["1NT", "P", "2C", "P", "2H", "P"]),
                        _rebid_after_major(Suit.HEARTS),
                        decision(
                            "after-2s-response",
                            auction_matches(["1NT", "P", "2C", "P", "2S", "P"]),
                            _rebid_after_major(Suit.SPADES),
                            decision(
                                "after-2d-denial",
                                auction_matches(["1NT", "P", "2C", "P", "2D", "P"]),
                                _rebid_after_denial(),
                                fallback("not-stayman-auction"),
                            ),
                        ),
                    ),
                ),
            ),
        ),
    )


def stayman_default_auction(seat: Seat, deal: Optional[Deal] = None) -> Optional[Auction]:
    """
    North opens 1NT and East passes.

    South drills the responses. East sits as a defender and is on bid once
    South, West and North have called.
    """
    if seat not in (Seat.SOUTH, Seat.EAST):
        return None
    return build_auction(Seat.NORTH, ["1NT", "P"])


def _examples() -> tuple[ExampleHand, ...]:
    return (
        ExampleHand(
            description="8 HCP with four spades and four hearts asks with 2C",
            hand=parse_hand("KJ72.Q853.Q4.962"),
            auction=build_auction(Seat.NORTH, ["1NT", "P"]),
            expected_call=parse_call("2C"),
            rule_name="stayman-ask",
        ),
        ExampleHand(
            description="Opener with four hearts shows them first",
            hand=parse_hand("AQ5.KJ84.K72.A93"),
            auction=build_auction(Seat.NORTH, ["1NT", "P", "2C", "P"]),
            expected_call=parse_call("2H"),
            rule_name="stayman-response-hearts",
        ),
        ExampleHand(
            description="Heart fit with 10 HCP bids game",
            hand=parse_hand("K972.AQ53.J4.962"),
            auction=build_auction(Seat.NORTH, ["1NT", "P", "2C", "P", "2H", "P"]),
            expected_call=parse_call("4H"),
            rule_name="stayman-rebid-major-fit",
        ),
        ExampleHand(
            description="Four spades and five hearts after a denial jumps to 3H (Smolen)",
            hand=parse_hand("AJ72.KQ853.4.962"),
            auction=build_auction(Seat.NORTH, ["1NT", "P", "2C", "P", "2D", "P"]),
            expected_call=parse_call("3H"),
            rule_name="stayman-rebid-smolen-hearts",
        ),
    )


def build_stayman_config() -> ConventionConfig:
    tree = build_stayman_tree()
    return ConventionConfig(
        id="stayman",
        name="Stayman",
        description="Stayman convention: 2C response to 1NT asking for 4-card majors",
        category=ConventionCategory.ASKING,
        deal_constraints=stayman_deal_constraints(),
        rule_tree=tree,
        bidding_rules=tuple(flatten_tree(tree)),
        examples=_examples(),
        default_auction=stayman_default_auction,
    )

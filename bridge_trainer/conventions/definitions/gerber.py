"""
Gerber.

A 4C jump over a notrump opening asks for aces; 5C then asks for kings.
Opener answers in steps (D = 0 or 4, H = 1, S = 2, NT = 3) and responder
signs off in notrump according to the partnership's total.
"""

from typing import Optional

from ...auction.helpers import build_auction, parse_call
from ...auction.models import Auction, Call, ContractBid, Seat, Strain
from ...hands.evaluator import count_aces, count_kings
from ...hands.models import Deal, DealConstraints, SeatConstraint
from ...hands.notation import parse_hand
from ..conditions import (
    ace_count,
    and_,
    auction_matches_any,
    gerber_king_ask,
    gerber_signoff,
    hcp_min,
    king_count,
    no_void,
)
from ..conditions.hand_conditions import (
    gerber_ace_response_patterns,
    gerber_king_ask_patterns,
    gerber_king_response_patterns,
    infer_opener_aces,
    infer_opener_kings,
)
from ..flatten import flatten_tree
from ..models import BiddingContext, ConventionCategory, ConventionConfig, ExampleHand
from ..rule_tree import RuleNode, bid, decision, fallback, fixed_call


def gerber_deal_constraints() -> DealConstraints:
    """Opener 15-17 balanced; responder 16+."""
    return DealConstraints(
        seats=(
            SeatConstraint(seat=Seat.NORTH, min_hcp=15, max_hcp=17, balanced=True),
            SeatConstraint(seat=Seat.SOUTH, min_hcp=16),
        ),
        dealer=Seat.NORTH,
    )


def _notrump(level: int) -> Call:
    return ContractBid(level, Strain.NOTRUMP)


def signoff_after_aces(ctx: BiddingContext) -> Call:
    """Place the contract knowing only the ace total."""
    total_aces = count_aces(ctx.hand) + infer_opener_aces(ctx)
    if total_aces == 4:
        return _notrump(7)
    if total_aces >= 3:
        return _notrump(6)
    # 4NT is below 4S, so a 4S response forces 5NT
    if ctx.auction.entries[4].call == ContractBid(4, Strain.SPADES):
        return _notrump(5)
    return _notrump(4)


def signoff_after_kings(ctx: BiddingContext) -> Call:
    """Place the contract knowing ace and king totals."""
    total_aces = count_aces(ctx.hand) + infer_opener_aces(ctx)
    total_kings = count_kings(ctx.hand) + infer_opener_kings(ctx)
    if total_aces >= 4 and total_kings >= 3:
        return _notrump(7)
    if total_aces >= 3:
        return _notrump(6)
    return _notrump(5)


def _step_responses(prefix: str, level: int, counter, noun: str) -> RuleNode:
    return decision(
        f"{noun}-3",
        counter(3),
        bid(f"{prefix}-three", fixed_call(f"{level}NT"), f"Shows three {noun}s"),
        decision(
            f"{noun}-2",
            counter(2),
            bid(f"{prefix}-two", fixed_call(f"{level}S"), f"Shows two {noun}s"),
            decision(
                f"{noun}-1",
                counter(1),
                bid(f"{prefix}-one", fixed_call(f"{level}H"), f"Shows one {noun}"),
                bid(f"{prefix}-zero-four", fixed_call(f"{level}D"), f"Shows zero or four {noun}s"),
            ),
        ),
    )


def build_gerber_tree() -> RuleNode:
    ask_positions = [["1NT", "P", "4C", "P"], ["2NT", "P", "4C", "P"]]
    return decision(
        "after-nt-opening",
        auction_matches_any([["1NT", "P"], ["2NT", "P"]]),
        decision(
            "hcp-and-no-void",
            and_(hcp_min(16), no_void()),
            bid("gerber-ask", fixed_call("4C"), "Asks opener for aces"),
            fallback("not-slam-values"),
        ),
        decision(
            "after-ace-ask",
            auction_matches_any(ask_positions),
            _step_responses("gerber-response", 4, ace_count, "ace"),
            decision(
                "after-king-ask",
                auction_matches_any(gerber_king_ask_patterns()),
                _step_responses("gerber-king-response", 5, king_count, "king"),
                decision(
                    "after-ace-response",
                    auction_matches_any(gerber_ace_response_patterns()),
                    decision(
                        "king-ask-check",
                        gerber_king_ask(),
                        bid("gerber-king-ask", fixed_call("5C"), "Partnership holds 3+ aces; asks for kings"),
                        decision(
                            "signoff-check",
                            gerber_signoff(),
                            bid("gerber-signoff", signoff_after_aces, "Places the contract after the ace response"),
                            fallback(),
                        ),
                    ),
                    decision(
                        "after-king-response",
                        auction_matches_any(gerber_king_response_patterns()),
                        decision(
                            "slam-signoff-check",
                            gerber_signoff(),
                            bid("gerber-slam-signoff", signoff_after_kings, "Places the slam after the king response"),
                            fallback(),
                        ),
                        fallback("not-gerber-auction"),
                    ),
                ),
            ),
        ),
    )


def gerber_default_auction(seat: Seat, deal: Optional[Deal] = None) -> Optional[Auction]:
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
            description="22 HCP opposite a 1NT opening asks for aces",
            hand=parse_hand("AKQ2.KQ3.AJ4.K92"),
            auction=build_auction(Seat.NORTH, ["1NT", "P"]),
            expected_call=parse_call("4C"),
            rule_name="gerber-ask",
        ),
        ExampleHand(
            description="Opener with two aces answers 4S",
            hand=parse_hand("AQ5.KJ84.K72.A93"),
            auction=build_auction(Seat.NORTH, ["1NT", "P", "4C", "P"]),
            expected_call=parse_call("4S"),
            rule_name="gerber-response-two",
        ),
    )


def build_gerber_config() -> ConventionConfig:
    tree = build_gerber_tree()
    return ConventionConfig(
        id="gerber",
        name="Gerber",
        description="Gerber convention: 4C response to NT opening asking for aces, then 5C for kings",
        category=ConventionCategory.ASKING,
        deal_constraints=gerber_deal_constraints(),
        rule_tree=tree,
        bidding_rules=tuple(flatten_tree(tree)),
        examples=_examples(),
        default_auction=gerber_default_auction,
    )

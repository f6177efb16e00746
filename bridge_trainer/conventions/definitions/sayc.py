"""
Standard American Yellow Card natural bidding.

A base system rather than a single convention: openings, responses to one of
a suit and 1NT, opener's rebid and simple overcalls. Partnerships layer
conventions such as Stayman in front of it, so it only has to produce a
sensible natural call when no convention applies.

Auction position is decided first (opening, opener's rebid, responding,
competing); every branch below that looks at the hand alone.
"""

from typing import Callable, Optional

from ...auction.helpers import build_auction, parse_call
from ...auction.models import Auction, Call, ContractBid, Seat, Strain
from ...hands.models import Deal, DealConstraints, Suit
from ...hands.notation import parse_hand
from ..conditions import (
    and_,
    balanced,
    biddable_suit,
    has_four_card_major,
    hcp_min,
    hcp_range,
    is_opener,
    is_responder,
    longer_major,
    longest_biddable_suit,
    no_five_card_major,
    no_prior_bid,
    opened_suit_min,
    opponent_bid,
    or_,
    partner_major_support,
    partner_opened_at,
    partner_raised_opening,
    partner_suit_support,
    seat_has_bid,
    suit_below,
    suit_min,
)
from ..conditions.auction_conditions import partner_last_strain, partner_opening_strain, seat_opening_strain
from ..flatten import flatten_tree
from ..models import BiddingContext, ConventionCategory, ConventionConfig, ExampleHand
from ..rule_tree import RuleNode, bid, decision, fallback, fixed_call

CallFn = Callable[[BiddingContext], Call]


def _in_partner_opening(level: int) -> CallFn:
    return lambda ctx: ContractBid(level, partner_opening_strain(ctx))


def _in_own_opening(level: int) -> CallFn:
    return lambda ctx: ContractBid(level, seat_opening_strain(ctx))


def _in_partner_last(level: int) -> CallFn:
    return lambda ctx: ContractBid(level, partner_last_strain(ctx))


def _overcall(level: int) -> CallFn:
    def call(ctx: BiddingContext) -> Call:
        suit = longest_biddable_suit(ctx, level)
        if suit is None:
            raise ValueError(f"No suit to overcall at the {level}-level")
        return ContractBid(level, suit.strain)
    return call


# ─── Opening ─────────────────────────────────────────────────


def _weak_two(suit: Suit, otherwise: RuleNode) -> RuleNode:
    name = suit.display_name
    return decision(
        f"weak-two-{name}",
        and_(hcp_range(5, 11), suit_min(suit, 6)),
        bid(f"sayc-open-weak-2{suit.value.lower()}", fixed_call(f"2{suit.value}"), f"Weak two: six {name}, 5-11 HCP"),
        otherwise,
    )


def _one_of_a_suit() -> RuleNode:
    return decision(
        "five-spades",
        longer_major(Suit.SPADES),
        bid("sayc-open-1s", fixed_call("1S"), "Five or more spades, at least as many as hearts"),
        decision(
            "five-hearts",
            suit_min(Suit.HEARTS, 5),
            bid("sayc-open-1h", fixed_call("1H"), "Five or more hearts"),
            decision(
                "clubs-not-diamonds",
                and_(suit_min(Suit.CLUBS, 3), suit_below(Suit.DIAMONDS, 4)),
                bid("sayc-open-1c", fixed_call("1C"), "No five-card major, better minor is clubs"),
                bid("sayc-open-1d", fixed_call("1D"), "No five-card major, four or more diamonds"),
            ),
        ),
    )


def _opening() -> RuleNode:
    return decision(
        "strong-2c",
        hcp_min(22),
        bid("sayc-open-2c", fixed_call("2C"), "Strong, artificial and forcing"),
        decision(
            "open-2nt",
            and_(hcp_range(20, 21), balanced()),
            bid("sayc-open-2nt", fixed_call("2NT"), "20-21 HCP, balanced"),
            decision(
                "open-1nt",
                and_(hcp_range(15, 17), balanced(), no_five_card_major()),
                bid("sayc-open-1nt", fixed_call("1NT"), "15-17 HCP, balanced, no five-card major"),
                decision(
                    "opening-values",
                    hcp_min(12),
                    _one_of_a_suit(),
                    _weak_two(
                        Suit.HEARTS,
                        _weak_two(
                            Suit.SPADES,
                            _weak_two(
                                Suit.DIAMONDS,
                                bid("sayc-pass-opening", fixed_call("P"), "Not enough to open"),
                            ),
                        ),
                    ),
                ),
            ),
        ),
    )


# ─── Opener's rebid ──────────────────────────────────────────


def _rebid() -> RuleNode:
    return decision(
        "partner-raised",
        partner_raised_opening(),
        decision(
            "raise-to-game",
            hcp_min(19),
            bid("sayc-rebid-major-game", _in_own_opening(4), "Game in the agreed major"),
            decision(
                "raise-invite",
                hcp_range(17, 18),
                bid("sayc-rebid-major-invite", _in_own_opening(3), "Invites game in the agreed major"),
                bid("sayc-rebid-pass-after-raise", fixed_call("P"), "Minimum, no interest in game"),
            ),
        ),
        decision(
            "support-partner-major",
            and_(hcp_range(12, 16), partner_major_support(4)),
            bid("sayc-rebid-raise-response", _in_partner_last(2), "Four-card support for partner's major"),
            decision(
                "rebid-own-suit",
                and_(hcp_range(12, 17), opened_suit_min(6)),
                bid("sayc-rebid-own-suit", _in_own_opening(2), "Six-card suit, minimum"),
                decision(
                    "rebid-1nt",
                    and_(hcp_range(12, 14), balanced()),
                    bid("sayc-rebid-1nt", fixed_call("1NT"), "12-14 HCP, balanced"),
                    decision(
                        "rebid-2nt",
                        and_(hcp_range(18, 19), balanced()),
                        bid("sayc-rebid-2nt", fixed_call("2NT"), "18-19 HCP, balanced"),
                        fallback("no-natural-rebid"),
                    ),
                ),
            ),
        ),
    )


# ─── Responding ──────────────────────────────────────────────


def _respond_to_1nt() -> RuleNode:
    return decision(
        "nt-response-values",
        hcp_min(8),
        decision(
            "nt-four-card-major",
            has_four_card_major(),
            bid("sayc-respond-1nt-stayman", fixed_call("2C"), "Stayman: asks for a four-card major"),
            decision(
                "nt-game-values",
                hcp_min(10),
                bid("sayc-respond-1nt-3nt", fixed_call("3NT"), "Game values, no four-card major"),
                bid("sayc-respond-1nt-2nt", fixed_call("2NT"), "Invitational, no four-card major"),
            ),
        ),
        bid("sayc-respond-1nt-pass", fixed_call("P"), "Fewer than 8 HCP"),
    )


def _respond_to_major() -> RuleNode:
    # Support was checked first, so four spades here means partner opened 1H
    new_suit = decision(
        "four-spades-over-1h",
        suit_min(Suit.SPADES, 4),
        bid("sayc-respond-1s-over-1h", fixed_call("1S"), "Four or more spades, forcing"),
        decision(
            "two-over-one-values",
            hcp_min(12),
            decision(
                "four-clubs",
                suit_min(Suit.CLUBS, 4),
                bid("sayc-respond-2c-over-major", fixed_call("2C"), "Two-over-one in clubs"),
                decision(
                    "four-diamonds",
                    suit_min(Suit.DIAMONDS, 4),
                    bid("sayc-respond-2d-over-major", fixed_call("2D"), "Two-over-one in diamonds"),
                    fallback("no-two-over-one-suit"),
                ),
            ),
            decision(
                "major-1nt-range",
                hcp_range(6, 10),
                bid("sayc-respond-1nt-over-major", fixed_call("1NT"), "6-10 HCP, no fit"),
                fallback("major-response-gap"),
            ),
        ),
    )
    return decision(
        "major-response-values",
        hcp_min(6),
        decision(
            "simple-raise",
            and_(hcp_range(6, 10), partner_suit_support(3)),
            bid("sayc-respond-simple-raise", _in_partner_opening(2), "Three-card support, 6-10 HCP"),
            decision(
                "limit-raise",
                and_(hcp_range(10, 12), partner_suit_support(4)),
                bid("sayc-respond-limit-raise", _in_partner_opening(3), "Four-card support, invitational"),
                decision(
                    "game-raise",
                    and_(hcp_min(13), partner_suit_support(4)),
                    bid("sayc-respond-game-raise", _in_partner_opening(4), "Four-card support, game values"),
                    new_suit,
                ),
            ),
        ),
        bid("sayc-respond-pass-major", fixed_call("P"), "Fewer than 6 HCP"),
    )


def _respond_to_minor() -> RuleNode:
    return decision(
        "minor-response-values",
        hcp_min(6),
        decision(
            "minor-four-hearts",
            suit_min(Suit.HEARTS, 4),
            bid("sayc-respond-1h-over-minor", fixed_call("1H"), "Four or more hearts, forcing"),
            decision(
                "minor-four-spades",
                suit_min(Suit.SPADES, 4),
                bid("sayc-respond-1s-over-minor", fixed_call("1S"), "Four or more spades, forcing"),
                decision(
                    "minor-1nt-range",
                    hcp_range(6, 10),
                    bid("sayc-respond-1nt-over-minor", fixed_call("1NT"), "6-10 HCP, no four-card major"),
                    decision(
                        "minor-2nt-range",
                        and_(hcp_range(13, 15), balanced()),
                        bid("sayc-respond-2nt-over-minor", fixed_call("2NT"), "13-15 HCP, balanced"),
                        decision(
                            "minor-3nt-range",
                            and_(hcp_range(16, 18), balanced()),
                            bid("sayc-respond-3nt-over-minor", fixed_call("3NT"), "16-18 HCP, balanced"),
                            fallback("minor-response-gap"),
                        ),
                    ),
                ),
            ),
        ),
        bid("sayc-respond-pass-minor", fixed_call("P"), "Fewer than 6 HCP"),
    )


def _responding() -> RuleNode:
    return decision(
        "responder-has-bid",
        seat_has_bid(),
        fallback("responder-rebid"),
        decision(
            "partner-opened-1nt",
            partner_opened_at(1, Strain.NOTRUMP),
            _respond_to_1nt(),
            decision(
                "partner-opened-1-major",
                or_(partner_opened_at(1, Strain.HEARTS), partner_opened_at(1, Strain.SPADES)),
                _respond_to_major(),
                decision(
                    "partner-opened-1-minor",
                    or_(partner_opened_at(1, Strain.CLUBS), partner_opened_at(1, Strain.DIAMONDS)),
                    _respond_to_minor(),
                    fallback("partner-opening-not-covered"),
                ),
            ),
        ),
    )


# ─── Competing ───────────────────────────────────────────────


def _competing() -> RuleNode:
    return decision(
        "overcall-1nt",
        and_(hcp_range(15, 18), balanced()),
        bid("sayc-overcall-1nt", fixed_call("1NT"), "15-18 HCP, balanced, stopper assumed"),
        decision(
            "overcall-one-level",
            and_(hcp_range(8, 16), biddable_suit(1)),
            bid("sayc-overcall-1-level", _overcall(1), "Five-card suit at the one level"),
            decision(
                "overcall-two-level",
                and_(hcp_range(10, 16), biddable_suit(2)),
                bid("sayc-overcall-2-level", _overcall(2), "Five-card suit at the two level"),
                bid("sayc-pass-competitive", fixed_call("P"), "No suitable overcall"),
            ),
        ),
    )


def build_sayc_tree() -> RuleNode:
    return decision(
        "no-bids-yet",
        no_prior_bid(),
        _opening(),
        decision(
            "is-opener",
            is_opener(),
            _rebid(),
            decision(
                "is-responder",
                is_responder(),
                _responding(),
                decision(
                    "opponent-opened",
                    opponent_bid(),
                    decision(
                        "overcaller-has-bid",
                        seat_has_bid(),
                        bid("sayc-pass-after-overcall", fixed_call("P"), "Already described the hand"),
                        _competing(),
                    ),
                    fallback("no-natural-action"),
                ),
            ),
        ),
    )


def sayc_default_auction(seat: Seat, deal: Optional[Deal] = None) -> Optional[Auction]:
    """The trainee deals, so every drill starts with an opening decision."""
    return Auction.empty(seat)


def _examples() -> tuple[ExampleHand, ...]:
    return (
        ExampleHand(
            description="15-17 balanced in second seat opens 1NT",
            hand=parse_hand("AQ5.KJ84.K72.A93"),
            auction=build_auction(Seat.NORTH, ["P"]),
            expected_call=parse_call("1NT"),
            rule_name="sayc-open-1nt",
        ),
        ExampleHand(
            description="7 HCP passes partner's 1NT",
            hand=parse_hand("KJ72.J853.Q4.962"),
            auction=build_auction(Seat.NORTH, ["1NT", "P"]),
            expected_call=parse_call("P"),
            rule_name="sayc-respond-1nt-pass",
        ),
        ExampleHand(
            description="Heart support and 6 HCP raise 1H to 2H",
            hand=parse_hand("K72.Q853.J42.962"),
            auction=build_auction(Seat.NORTH, ["1H", "P"]),
            expected_call=parse_call("2H"),
            rule_name="sayc-respond-simple-raise",
        ),
        ExampleHand(
            description="Five good spades overcall 1H",
            hand=parse_hand("KQJ72.83.Q4.9632"),
            auction=build_auction(Seat.EAST, ["1H"]),
            expected_call=parse_call("1S"),
            rule_name="sayc-overcall-1-level",
        ),
    )


def build_sayc_config() -> ConventionConfig:
    tree = build_sayc_tree()
    return ConventionConfig(
        id="sayc",
        name="SAYC",
        description="Standard American Yellow Card natural bidding system",
        category=ConventionCategory.CONSTRUCTIVE,
        deal_constraints=DealConstraints(dealer=Seat.NORTH),
        rule_tree=tree,
        bidding_rules=tuple(flatten_tree(tree)),
        examples=_examples(),
        default_auction=sayc_default_auction,
    )

"""
Auction condition factories.

Auction conditions read only the auction and the seat; they never carry
inference metadata.
"""

from typing import Optional, Sequence

from ...auction.helpers import parse_call
from ...auction.models import AuctionEntry, ContractBid, Pass, Strain
from ..models import AUCTION, BiddingContext, RuleCondition


def _pattern_label(pattern: Sequence[str]) -> str:
    return " - ".join(pattern)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def first_bid_entry(context: BiddingContext) -> Optional[AuctionEntry]:
    """The opening bid, or None when nobody has bid."""
    for entry in context.auction.entries:
        if isinstance(entry.call, ContractBid):
            return entry
    return None


def partner_opening_strain(context: BiddingContext) -> Optional[Strain]:
    """Strain of partner's first contract bid."""
    partner = context.seat.partner()
    for entry in context.auction.entries:
        if isinstance(entry.call, ContractBid) and entry.seat == partner:
            return entry.call.strain
    return None


def seat_opening_strain(context: BiddingContext) -> Optional[Strain]:
    """Strain of this seat's first contract bid."""
    for entry in context.auction.entries:
        if isinstance(entry.call, ContractBid) and entry.seat == context.seat:
            return entry.call.strain
    return None


def partner_last_strain(context: BiddingContext) -> Optional[Strain]:
    """Strain of partner's most recent contract bid."""
    partner = context.seat.partner()
    for entry in reversed(context.auction.entries):
        if isinstance(entry.call, ContractBid) and entry.seat == partner:
            return entry.call.strain
    return None


def seat_bid_count(context: BiddingContext) -> int:
    """Number of contract bids this seat has made."""
    return sum(
        1 for entry in context.auction.entries
        if isinstance(entry.call, ContractBid) and entry.seat == context.seat
    )


def _is_opponent(context: BiddingContext, entry: AuctionEntry) -> bool:
    return not entry.seat.same_side(context.seat)


def auction_matches(pattern: Sequence[str]) -> RuleCondition:
    """The auction holds exactly ``pattern``."""
    expected = tuple(parse_call(raw) for raw in pattern)
    label = _pattern_label(pattern)

    def test(ctx: BiddingContext) -> bool:
        return ctx.auction.calls == expected

    def describe(ctx: BiddingContext) -> str:
        return f"After {label}" if test(ctx) else f"Auction does not match {label}"

    return RuleCondition(
        name="auction",
        label=f"After {label}",
        category=AUCTION,
        test_fn=test,
        describe_fn=describe,
    )


def auction_matches_any(patterns: Sequence[Sequence[str]]) -> RuleCondition:
    """The auction holds exactly one of ``patterns``."""
    expected = [(tuple(parse_call(raw) for raw in p), _pattern_label(p)) for p in patterns]
    labels = " or ".join(label for _, label in expected)

    def matched_label(ctx: BiddingContext) -> Optional[str]:
        calls = ctx.auction.calls
        for calls_expected, label in expected:
            if calls == calls_expected:
                return label
        return None

    def describe(ctx: BiddingContext) -> str:
        label = matched_label(ctx)
        return f"After {label}" if label else f"Auction does not match {labels}"

    return RuleCondition(
        name="auction",
        label=f"After {labels}",
        category=AUCTION,
        test_fn=lambda ctx: matched_label(ctx) is not None,
        describe_fn=describe,
    )


def is_opener() -> RuleCondition:
    """This seat made the opening bid, or nobody has bid yet."""
    def test(ctx: BiddingContext) -> bool:
        opening = first_bid_entry(ctx)
        return opening is None or opening.seat == ctx.seat

    def describe(ctx: BiddingContext) -> str:
        opening = first_bid_entry(ctx)
        if opening is None:
            return "No bids yet, opening position"
        if opening.seat == ctx.seat:
            return "This seat opened the bidding"
        return "This seat did not open the bidding"

    return RuleCondition(
        name="is-opener",
        label="Opening bidder",
        category=AUCTION,
        test_fn=test,
        describe_fn=describe,
    )


def is_responder() -> RuleCondition:
    """Partner made the opening bid."""
    def test(ctx: BiddingContext) -> bool:
        opening = first_bid_entry(ctx)
        return opening is not None and opening.seat == ctx.seat.partner()

    def describe(ctx: BiddingContext) -> str:
        opening = first_bid_entry(ctx)
        if opening is None:
            return "No bids yet, not in responding position"
        if opening.seat == ctx.seat.partner():
            return "Partner opened, responding position"
        return "Partner did not open"

    return RuleCondition(
        name="is-responder",
        label="Responding to partner's opening",
        category=AUCTION,
        test_fn=test,
        describe_fn=describe,
    )


def partner_opened(strain: Optional[Strain] = None) -> RuleCondition:
    """Partner made the opening bid, optionally in ``strain``."""
    def test(ctx: BiddingContext) -> bool:
        opening = first_bid_entry(ctx)
        if opening is None or opening.seat != ctx.seat.partner():
            return False
        return strain is None or opening.call.strain == strain

    def describe(ctx: BiddingContext) -> str:
        opening = first_bid_entry(ctx)
        if opening is None:
            return "No opening bid found"
        if opening.seat != ctx.seat.partner():
            return f"Partner did not open ({opening.seat.value} opened)"
        if strain is not None and opening.call.strain != strain:
            return f"Partner opened {opening.call.strain.value}, not {strain.value}"
        return f"Partner opened {opening.call.strain.value}"

    return RuleCondition(
        name=f"partner-opened-{strain.value}" if strain else "partner-opened",
        label=f"Partner opened {strain.value}" if strain else "Partner opened",
        category=AUCTION,
        test_fn=test,
        describe_fn=describe,
    )


def partner_opened_at(level: int, strain: Strain) -> RuleCondition:
    """Partner's opening bid was exactly ``level``/``strain``."""
    target = ContractBid(level, strain)

    def test(ctx: BiddingContext) -> bool:
        opening = first_bid_entry(ctx)
        return opening is not None and opening.seat == ctx.seat.partner() and opening.call == target

    def describe(ctx: BiddingContext) -> str:
        opening = first_bid_entry(ctx)
        if opening is None:
            return "No opening bid found"
        if opening.seat != ctx.seat.partner():
            return "Partner did not open"
        if opening.call != target:
            return f"Partner opened {opening.call}, not {target}"
        return f"Partner opened {target}"

    return RuleCondition(
        name=f"partner-opened-{target}",
        label=f"Partner opened {target}",
        category=AUCTION,
        test_fn=test,
        describe_fn=describe,
    )


def partner_bid_at(level: int, strain: Strain) -> RuleCondition:
    """Partner bid ``level``/``strain`` at any point."""
    target = ContractBid(level, strain)

    def test(ctx: BiddingContext) -> bool:
        partner = ctx.seat.partner()
        return any(e.seat == partner and e.call == target for e in ctx.auction.entries)

    return RuleCondition(
        name=f"partner-bid-{target}",
        label=f"Partner bid {target}",
        category=AUCTION,
        test_fn=test,
        describe_fn=lambda ctx: f"Partner bid {target}" if test(ctx) else f"Partner has not bid {target}",
    )


def partner_bid_suit(strain: Strain) -> RuleCondition:
    """Partner bid ``strain`` at any level."""
    def test(ctx: BiddingContext) -> bool:
        partner = ctx.seat.partner()
        return any(
            e.seat == partner and isinstance(e.call, ContractBid) and e.call.strain == strain
            for e in ctx.auction.entries
        )

    return RuleCondition(
        name=f"partner-bid-suit-{strain.value}",
        label=f"Partner bid {strain.value}",
        category=AUCTION,
        test_fn=test,
        describe_fn=lambda ctx: (
            f"Partner bid {strain.value}" if test(ctx) else f"Partner has not bid {strain.value}"
        ),
    )


def opponent_bid() -> RuleCondition:
    """An opponent has made a contract bid."""
    def found(ctx: BiddingContext) -> Optional[AuctionEntry]:
        for entry in ctx.auction.entries:
            if isinstance(entry.call, ContractBid) and _is_opponent(ctx, entry):
                return entry
        return None

    def describe(ctx: BiddingContext) -> str:
        entry = found(ctx)
        return f"Opponent ({entry.seat.value}) bid" if entry else "No opponent bids"

    return RuleCondition(
        name="opponent-bid",
        label="Opponent has bid",
        category=AUCTION,
        test_fn=lambda ctx: found(ctx) is not None,
        describe_fn=describe,
    )


def opponent_acted() -> RuleCondition:
    """An opponent has bid, doubled or redoubled."""
    def found(ctx: BiddingContext) -> Optional[AuctionEntry]:
        for entry in ctx.auction.entries:
            if not isinstance(entry.call, Pass) and _is_opponent(ctx, entry):
                return entry
        return None

    def describe(ctx: BiddingContext) -> str:
        entry = found(ctx)
        return f"Opponent ({entry.seat.value}) acted" if entry else "No opponent action"

    return RuleCondition(
        name="opponent-acted",
        label="Opponent acted (bid/double/redouble)",
        category=AUCTION,
        test_fn=lambda ctx: found(ctx) is not None,
        describe_fn=describe,
    )


def seat_has_bid() -> RuleCondition:
    """This seat has made at least one contract bid."""
    def test(ctx: BiddingContext) -> bool:
        return seat_bid_count(ctx) > 0

    return RuleCondition(
        name="seat-has-bid",
        label="Has previously bid",
        category=AUCTION,
        test_fn=test,
        describe_fn=lambda ctx: (
            "This seat has previously bid" if test(ctx) else "This seat has not bid yet"
        ),
    )


def no_prior_bid() -> RuleCondition:
    """Nobody has made a contract bid yet."""
    def test(ctx: BiddingContext) -> bool:
        return first_bid_entry(ctx) is None

    return RuleCondition(
        name="no-prior-bid",
        label="No prior contract bids",
        category=AUCTION,
        test_fn=test,
        describe_fn=lambda ctx: "No prior contract bids" if test(ctx) else "Prior contract bid exists",
    )


def bidding_round(n: int) -> RuleCondition:
    """This seat is about to make its contract bid number ``n`` (0 = first bid)."""
    def describe(ctx: BiddingContext) -> str:
        count = seat_bid_count(ctx)
        if count == n:
            return f"Seat has made {_plural(n, 'prior bid')} (round {n})"
        return f"Seat has made {_plural(count, 'prior bid')} (need round {n})"

    return RuleCondition(
        name="bidding-round",
        label=f"Bidding round {n}",
        category=AUCTION,
        test_fn=lambda ctx: seat_bid_count(ctx) == n,
        describe_fn=describe,
    )


def partner_opened_major() -> RuleCondition:
    def describe(ctx: BiddingContext) -> str:
        strain = partner_opening_strain(ctx)
        if strain is not None and strain.is_major:
            return f"Partner opened {strain.value}"
        return "Partner did not open a major"

    return RuleCondition(
        name="partner-opened-major",
        label="Partner opened a major suit",
        category=AUCTION,
        test_fn=lambda ctx: (partner_opening_strain(ctx) or Strain.NOTRUMP).is_major,
        describe_fn=describe,
    )


def partner_opened_minor() -> RuleCondition:
    def describe(ctx: BiddingContext) -> str:
        strain = partner_opening_strain(ctx)
        if strain is not None and strain.is_minor:
            return f"Partner opened {strain.value}"
        return "Partner did not open a minor"

    return RuleCondition(
        name="partner-opened-minor",
        label="Partner opened a minor suit",
        category=AUCTION,
        test_fn=lambda ctx: (partner_opening_strain(ctx) or Strain.NOTRUMP).is_minor,
        describe_fn=describe,
    )


def partner_raised_opening() -> RuleCondition:
    """This seat opened a major and partner's latest bid is in that major."""
    def test(ctx: BiddingContext) -> bool:
        own = seat_opening_strain(ctx)
        return own is not None and own.is_major and partner_last_strain(ctx) == own

    def describe(ctx: BiddingContext) -> str:
        own = seat_opening_strain(ctx)
        if test(ctx):
            return f"Partner raised {own.value}"
        if own is None or not own.is_major:
            return "This seat did not open a major"
        return f"Partner did not raise {own.value}"

    return RuleCondition(
        name="partner-raised-major",
        label="Partner raised our major",
        category=AUCTION,
        test_fn=test,
        describe_fn=describe,
    )

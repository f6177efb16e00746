"""
Hand condition factories.

Hand conditions gate on the hand and its evaluation. A few read the auction
to decide which suit to look at (``major_support``) or to recognise a slam
asking position; their outcome is still a property of the hand.

Inference metadata is attached only where the gate is a fixed hand property.
"""

from typing import Callable, Optional, Sequence

from ...auction.helpers import last_contract_bid
from ...auction.machine import compare_bids
from ...auction.models import Auction, ContractBid, Pass, Strain
from ...hands.evaluator import count_aces, count_kings, is_balanced_shape
from ...hands.models import SUIT_ORDER, Suit
from ..models import HAND, BiddingContext, ConditionInference, RuleCondition
from .auction_conditions import (
    auction_matches_any,
    partner_last_strain,
    partner_opening_strain,
    seat_opening_strain,
)
from .combinators import and_, or_

_NT_OPENINGS = ("1NT", "2NT")
_ACE_RESPONSES = ("4D", "4H", "4S", "4NT")
_KING_RESPONSES = ("5D", "5H", "5S", "5NT")

# Ace response sits at index 4 of {NT}-P-4C-P-{response}
_ACE_RESPONSE_INDEX = 4
# King response sits at index 8 of {NT}-P-4C-P-{ace}-P-5C-P-{response}
_KING_RESPONSE_INDEX = 8


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _shape_text(shape: Sequence[int]) -> str:
    return "-".join(str(n) for n in shape)


def _length(ctx: BiddingContext, suit: Suit) -> int:
    return ctx.evaluation.shape[suit.index]


# ─── HCP ─────────────────────────────────────────────────────


def hcp_min(minimum: int) -> RuleCondition:
    def describe(ctx: BiddingContext) -> str:
        hcp = ctx.evaluation.hcp
        if hcp >= minimum:
            return f"{hcp} HCP ({minimum}+ required)"
        return f"Only {hcp} HCP (need {minimum}+)"

    return RuleCondition(
        name="hcp-min",
        label=f"{minimum}+ HCP",
        category=HAND,
        test_fn=lambda ctx: ctx.evaluation.hcp >= minimum,
        describe_fn=describe,
        inference=ConditionInference("hcp-min", {"min": minimum}),
    )


def hcp_max(maximum: int) -> RuleCondition:
    def describe(ctx: BiddingContext) -> str:
        hcp = ctx.evaluation.hcp
        if hcp <= maximum:
            return f"{hcp} HCP ({maximum} max)"
        return f"{hcp} HCP ({maximum} max exceeded)"

    return RuleCondition(
        name="hcp-max",
        label=f"{maximum} max HCP",
        category=HAND,
        test_fn=lambda ctx: ctx.evaluation.hcp <= maximum,
        describe_fn=describe,
        inference=ConditionInference("hcp-max", {"max": maximum}),
    )


def hcp_range(minimum: int, maximum: int) -> RuleCondition:
    """Inclusive HCP range."""
    def test(ctx: BiddingContext) -> bool:
        return minimum <= ctx.evaluation.hcp <= maximum

    def describe(ctx: BiddingContext) -> str:
        hcp = ctx.evaluation.hcp
        if test(ctx):
            return f"{hcp} HCP ({minimum}-{maximum} range)"
        return f"{hcp} HCP (need {minimum}-{maximum})"

    return RuleCondition(
        name="hcp-range",
        label=f"{minimum}-{maximum} HCP",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
        inference=ConditionInference("hcp-range", {"min": minimum, "max": maximum}),
    )


# ─── Suit length ─────────────────────────────────────────────


def suit_min(suit: Suit, minimum: int) -> RuleCondition:
    name = suit.display_name

    def describe(ctx: BiddingContext) -> str:
        length = _length(ctx, suit)
        if length >= minimum:
            return f"{length} {name} ({minimum}+ required)"
        return f"Only {length} {name} (need {minimum}+)"

    return RuleCondition(
        name=f"{name}-min",
        label=f"{minimum}+ {name}",
        category=HAND,
        test_fn=lambda ctx: _length(ctx, suit) >= minimum,
        describe_fn=describe,
        inference=ConditionInference("suit-min", {"suit": suit.value, "min": minimum}),
    )


def suit_below(suit: Suit, threshold: int) -> RuleCondition:
    """Strictly fewer than ``threshold`` cards in ``suit``."""
    name = suit.display_name

    def describe(ctx: BiddingContext) -> str:
        length = _length(ctx, suit)
        if length < threshold:
            return f"{length} {name} (fewer than {threshold})"
        return f"{length} {name} (need fewer than {threshold})"

    return RuleCondition(
        name=f"{name}-below",
        label=f"Fewer than {threshold} {name}",
        category=HAND,
        test_fn=lambda ctx: _length(ctx, suit) < threshold,
        describe_fn=describe,
        inference=ConditionInference("suit-max", {"suit": suit.value, "max": threshold - 1}),
    )


def any_suit_min(suits: Sequence[Suit], minimum: int) -> RuleCondition:
    """At least one of ``suits`` holds ``minimum`` or more cards."""
    names = "/".join(s.display_name for s in suits)

    def describe(ctx: BiddingContext) -> str:
        for suit in suits:
            length = _length(ctx, suit)
            if length >= minimum:
                return f"{length} {suit.display_name} ({minimum}+ in {names})"
        counts = ", ".join(f"{_length(ctx, s)} {s.display_name}" for s in suits)
        return f"Only {counts} (need {minimum}+ in {names})"

    return RuleCondition(
        name=f"any-{names}-min",
        label=f"{minimum}+ in {names}",
        category=HAND,
        test_fn=lambda ctx: any(_length(ctx, s) >= minimum for s in suits),
        describe_fn=describe,
    )


# ─── Honour counts ───────────────────────────────────────────


def ace_count(count: int) -> RuleCondition:
    def describe(ctx: BiddingContext) -> str:
        aces = count_aces(ctx.hand)
        if aces == count:
            return _plural(aces, "ace")
        return f"{_plural(aces, 'ace')} (need exactly {count})"

    return RuleCondition(
        name="ace-count",
        label=f"Exactly {_plural(count, 'ace')}",
        category=HAND,
        test_fn=lambda ctx: count_aces(ctx.hand) == count,
        describe_fn=describe,
        inference=ConditionInference("ace-count", {"count": count}),
    )


def ace_count_any(counts: Sequence[int]) -> RuleCondition:
    counts_label = " or ".join(str(c) for c in counts)

    def describe(ctx: BiddingContext) -> str:
        aces = count_aces(ctx.hand)
        if aces in counts:
            return f"{_plural(aces, 'ace')} ({counts_label})"
        return f"{_plural(aces, 'ace')} (need {counts_label})"

    return RuleCondition(
        name="ace-count-any",
        label=f"{counts_label} aces",
        category=HAND,
        test_fn=lambda ctx: count_aces(ctx.hand) in counts,
        describe_fn=describe,
    )


def king_count(count: int) -> RuleCondition:
    def describe(ctx: BiddingContext) -> str:
        kings = count_kings(ctx.hand)
        if kings == count:
            return _plural(kings, "king")
        return f"{_plural(kings, 'king')} (need exactly {count})"

    return RuleCondition(
        name="king-count",
        label=f"Exactly {_plural(count, 'king')}",
        category=HAND,
        test_fn=lambda ctx: count_kings(ctx.hand) == count,
        describe_fn=describe,
        inference=ConditionInference("king-count", {"count": count}),
    )


def king_count_any(counts: Sequence[int]) -> RuleCondition:
    counts_label = " or ".join(str(c) for c in counts)

    def describe(ctx: BiddingContext) -> str:
        kings = count_kings(ctx.hand)
        if kings in counts:
            return f"{_plural(kings, 'king')} ({counts_label})"
        return f"{_plural(kings, 'king')} (need {counts_label})"

    return RuleCondition(
        name="king-count-any",
        label=f"{counts_label} kings",
        category=HAND,
        test_fn=lambda ctx: count_kings(ctx.hand) in counts,
        describe_fn=describe,
    )


# ─── Shape ───────────────────────────────────────────────────


def balanced() -> RuleCondition:
    """No void, no singleton, at most one doubleton."""
    def describe(ctx: BiddingContext) -> str:
        shape = ctx.evaluation.shape
        text = _shape_text(shape)
        if is_balanced_shape(shape):
            return f"Balanced hand ({text})"
        if 0 in shape:
            return f"Unbalanced, has void ({text})"
        if 1 in shape:
            return f"Unbalanced, has singleton ({text})"
        return f"Unbalanced, {shape.count(2)} doubletons ({text})"

    return RuleCondition(
        name="balanced",
        label="Balanced hand",
        category=HAND,
        test_fn=lambda ctx: is_balanced_shape(ctx.evaluation.shape),
        describe_fn=describe,
        inference=ConditionInference("balanced", {"balanced": True}),
    )


def no_void() -> RuleCondition:
    def describe(ctx: BiddingContext) -> str:
        shape = ctx.evaluation.shape
        if 0 in shape:
            return f"Has void ({_shape_text(shape)})"
        return f"No void suit ({_shape_text(shape)})"

    return RuleCondition(
        name="no-void",
        label="No void suit",
        category=HAND,
        test_fn=lambda ctx: 0 not in ctx.evaluation.shape,
        describe_fn=describe,
    )


def has_shortage() -> RuleCondition:
    """A singleton or void somewhere."""
    def describe(ctx: BiddingContext) -> str:
        shape = ctx.evaluation.shape
        shorts = [
            f"{n} {suit.display_name}" for suit, n in zip(SUIT_ORDER, shape) if n <= 1
        ]
        if shorts:
            return f"Has shortage: {', '.join(shorts)} ({_shape_text(shape)})"
        return f"No shortage ({_shape_text(shape)})"

    return RuleCondition(
        name="has-shortage",
        label="Has singleton or void",
        category=HAND,
        test_fn=lambda ctx: min(ctx.evaluation.shape) <= 1,
        describe_fn=describe,
        inference=ConditionInference("balanced", {"balanced": False}),
    )


def no_five_card_major() -> RuleCondition:
    def describe(ctx: BiddingContext) -> str:
        spades = _length(ctx, Suit.SPADES)
        hearts = _length(ctx, Suit.HEARTS)
        if spades < 5 and hearts < 5:
            return f"No 5-card major ({spades} spades, {hearts} hearts)"
        if spades >= 5:
            return f"Has 5+ spades ({spades})"
        return f"Has 5+ hearts ({hearts})"

    return RuleCondition(
        name="no-5-card-major",
        label="No 5-card major",
        category=HAND,
        test_fn=lambda ctx: _length(ctx, Suit.SPADES) < 5 and _length(ctx, Suit.HEARTS) < 5,
        describe_fn=describe,
    )


def longer_major(suit: Suit) -> RuleCondition:
    """Five or more cards in ``suit``, at least as long as the other major."""
    if suit not in (Suit.SPADES, Suit.HEARTS):
        raise ValueError(f"longer_major() needs a major suit, got {suit.display_name}")
    other = Suit.HEARTS if suit == Suit.SPADES else Suit.SPADES
    name = suit.display_name

    def test(ctx: BiddingContext) -> bool:
        length = _length(ctx, suit)
        return length >= 5 and length >= _length(ctx, other)

    def describe(ctx: BiddingContext) -> str:
        length = _length(ctx, suit)
        other_length = _length(ctx, other)
        if test(ctx):
            return f"{length} {name} (longer/equal major vs {other_length} {other.display_name})"
        if length < 5:
            return f"Only {length} {name} (need 5+)"
        return f"{length} {name} shorter than {other_length} {other.display_name}"

    return RuleCondition(
        name=f"longer-major-{name}",
        label=f"5+ {name} (longer/equal major)",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
        inference=ConditionInference("suit-min", {"suit": suit.value, "min": 5}),
    )


def has_four_card_major() -> RuleCondition:
    def test(ctx: BiddingContext) -> bool:
        return _length(ctx, Suit.SPADES) >= 4 or _length(ctx, Suit.HEARTS) >= 4

    def describe(ctx: BiddingContext) -> str:
        spades = _length(ctx, Suit.SPADES)
        hearts = _length(ctx, Suit.HEARTS)
        prefix = "Has" if test(ctx) else "No"
        return f"{prefix} 4-card major ({spades}S, {hearts}H)"

    return RuleCondition(
        name="has-4-card-major",
        label="Has 4+ card major",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
    )


def _opened_major(auction: Auction) -> Optional[Suit]:
    """Major opened in a 1M-P auction, or None."""
    calls = auction.calls
    if len(calls) != 2 or not isinstance(calls[0], ContractBid) or not isinstance(calls[1], Pass):
        return None
    opening = calls[0]
    if opening.level != 1 or not opening.strain.is_major:
        return None
    return Suit(opening.strain.value)


def major_support(count: int = 4, or_more: bool = False) -> RuleCondition:
    """
    Support for partner's 1H/1S opening.

    Reads the auction only to decide which major to count.
    """
    suffix = f"{count}+ support" if or_more else f"exactly {count}"

    def check(length: int) -> bool:
        return length >= count if or_more else length == count

    def test(ctx: BiddingContext) -> bool:
        major = _opened_major(ctx.auction)
        return major is not None and check(_length(ctx, major))

    def describe(ctx: BiddingContext) -> str:
        major = _opened_major(ctx.auction)
        if major is None:
            return "No major opening detected"
        length = _length(ctx, major)
        if check(length):
            return f"{length} {major.display_name} ({suffix})"
        return f"{length} {major.display_name} (need {suffix})"

    return RuleCondition(
        name="major-support",
        label=f"{count}+ cards in opened major" if or_more else f"Exactly {count} cards in opened major",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
    )


def has_single_long_suit() -> RuleCondition:
    """Six or more cards in one non-spade suit and no other four-card suit."""
    def test(ctx: BiddingContext) -> bool:
        spades, hearts, diamonds, clubs = ctx.evaluation.shape
        if spades >= 6:
            return False
        long_suit = hearts >= 6 or diamonds >= 6 or clubs >= 6
        four_plus = sum(1 for n in ctx.evaluation.shape if n >= 4)
        return long_suit and four_plus <= 1

    def describe(ctx: BiddingContext) -> str:
        shape = ctx.evaluation.shape
        longest = max(shape)
        if test(ctx):
            return f"{longest} {SUIT_ORDER[shape.index(longest)].display_name}, single-suited"
        if shape[0] >= 6:
            return f"{shape[0]} spades (use 2S natural instead)"
        if sum(1 for n in shape if n >= 4) > 1:
            return "Two suits with 4+ cards (not single-suited)"
        return f"Longest suit only {longest} (need 6+ single-suited)"

    return RuleCondition(
        name="single-long-suit",
        label="Single long suit (6+, non-spades)",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
    )


def is_two_suited(min_long: int, min_short: int) -> RuleCondition:
    """Longest suit ``min_long``+ and second suit ``min_short``+."""
    def ranked(ctx: BiddingContext) -> list[tuple[int, Suit]]:
        return sorted(zip(ctx.evaluation.shape, SUIT_ORDER), key=lambda pair: -pair[0])

    def test(ctx: BiddingContext) -> bool:
        first, second = ranked(ctx)[:2]
        return first[0] >= min_long and second[0] >= min_short

    def describe(ctx: BiddingContext) -> str:
        first, second = ranked(ctx)[:2]
        if test(ctx):
            return (
                f"{first[0]} {first[1].display_name} + {second[0]} {second[1].display_name} "
                f"({min_long}-{min_short}+ two-suited)"
            )
        return f"Not {min_long}-{min_short}+ two-suited (longest: {first[0]}, second: {second[0]})"

    return RuleCondition(
        name="two-suited",
        label=f"Two-suited ({min_long}-{min_short}+)",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
        inference=ConditionInference("two-suited", {"min_long": min_long, "min_short": min_short}),
    )


# ─── Natural bidding ─────────────────────────────────────────


def _suit_of(strain: Optional[Strain]) -> Optional[Suit]:
    if strain is None or strain == Strain.NOTRUMP:
        return None
    return Suit(strain.value)


def _fit(
    name: str,
    label: str,
    locate: Callable[[BiddingContext], Optional[Suit]],
    minimum: int,
    missing: str,
) -> RuleCondition:
    """``minimum``+ cards in the suit ``locate`` picks from the auction."""
    def test(ctx: BiddingContext) -> bool:
        suit = locate(ctx)
        return suit is not None and _length(ctx, suit) >= minimum

    def describe(ctx: BiddingContext) -> str:
        suit = locate(ctx)
        if suit is None:
            return missing
        length = _length(ctx, suit)
        if length >= minimum:
            return f"{length} {suit.display_name} ({minimum}+ required)"
        return f"Only {length} {suit.display_name} (need {minimum}+)"

    return RuleCondition(
        name=name,
        label=label,
        category=HAND,
        test_fn=test,
        describe_fn=describe,
    )


def partner_suit_support(minimum: int) -> RuleCondition:
    """Support for the suit partner opened."""
    return _fit(
        "partner-suit-support",
        f"{minimum}+ cards in partner's suit",
        lambda ctx: _suit_of(partner_opening_strain(ctx)),
        minimum,
        "Partner has not opened a suit",
    )


def partner_major_support(minimum: int) -> RuleCondition:
    """Support for the major partner bid most recently."""
    def locate(ctx: BiddingContext) -> Optional[Suit]:
        strain = partner_last_strain(ctx)
        return _suit_of(strain) if strain is not None and strain.is_major else None

    return _fit(
        "partner-major-support",
        f"{minimum}+ cards in partner's major",
        locate,
        minimum,
        "Partner's last bid is not a major",
    )


def opened_suit_min(minimum: int) -> RuleCondition:
    """Length in the suit this seat opened."""
    return _fit(
        "opened-suit-min",
        f"{minimum}+ cards in own opened suit",
        lambda ctx: _suit_of(seat_opening_strain(ctx)),
        minimum,
        "This seat did not open a suit",
    )


def longest_biddable_suit(ctx: BiddingContext, level: int, minimum: int = 5) -> Optional[Suit]:
    """
    Longest suit of ``minimum``+ cards that can still be bid at ``level``.

    The higher-ranking suit wins ties.
    """
    last = last_contract_bid(ctx.auction)
    best = None
    for suit in SUIT_ORDER:
        length = _length(ctx, suit)
        if length < minimum:
            continue
        if last is not None and compare_bids(ContractBid(level, suit.strain), last) <= 0:
            continue
        if best is None or length > _length(ctx, best):
            best = suit
    return best


def biddable_suit(level: int, minimum: int = 5) -> RuleCondition:
    """A ``minimum``+ card suit that is a legal bid at ``level``."""
    def describe(ctx: BiddingContext) -> str:
        suit = longest_biddable_suit(ctx, level, minimum)
        if suit is not None:
            return f"{_length(ctx, suit)} {suit.display_name} biddable at the {level}-level"
        return f"No {minimum}+ card suit biddable at the {level}-level"

    return RuleCondition(
        name=f"biddable-suit-level-{level}",
        label=f"{minimum}+ card suit biddable at the {level}-level",
        category=HAND,
        test_fn=lambda ctx: longest_biddable_suit(ctx, level, minimum) is not None,
        describe_fn=describe,
    )


# ─── Gerber ──────────────────────────────────────────────────


def gerber_ace_response_patterns() -> list[list[str]]:
    """{NT}-P-4C-P-{ace response}-P for 1NT and 2NT openings."""
    return [
        [opening, "P", "4C", "P", response, "P"]
        for opening in _NT_OPENINGS
        for response in _ACE_RESPONSES
    ]


def gerber_king_ask_patterns() -> list[list[str]]:
    """{NT}-P-4C-P-{ace response}-P-5C-P."""
    return [pattern + ["5C", "P"] for pattern in gerber_ace_response_patterns()]


def gerber_king_response_patterns() -> list[list[str]]:
    """{NT}-P-4C-P-{ace response}-P-5C-P-{king response}-P."""
    return [
        pattern + [response, "P"]
        for pattern in gerber_king_ask_patterns()
        for response in _KING_RESPONSES
    ]


def _response_at(auction: Auction, index: int, level: int) -> Optional[ContractBid]:
    if len(auction.entries) <= index:
        return None
    call = auction.entries[index].call
    if not isinstance(call, ContractBid) or call.level != level:
        return None
    return call


def _step_count(response: ContractBid, own_count: int) -> int:
    """Decode a step response: D = 0 or 4, H = 1, S = 2, NT = 3."""
    if response.strain == Strain.DIAMONDS:
        # Responder holding none means opener holds all four
        return 4 if own_count == 0 else 0
    return {Strain.HEARTS: 1, Strain.SPADES: 2, Strain.NOTRUMP: 3}.get(response.strain, 0)


def infer_opener_aces(ctx: BiddingContext) -> int:
    """Aces opener showed in reply to the 4C ask."""
    response = _response_at(ctx.auction, _ACE_RESPONSE_INDEX, 4)
    if response is None:
        return 0
    return _step_count(response, count_aces(ctx.hand))


def infer_opener_kings(ctx: BiddingContext) -> int:
    """Kings opener showed in reply to the 5C ask."""
    response = _response_at(ctx.auction, _KING_RESPONSE_INDEX, 5)
    if response is None:
        return 0
    return _step_count(response, count_kings(ctx.hand))


def gerber_king_ask() -> RuleCondition:
    """After the ace response, the partnership holds three or more aces."""
    position = auction_matches_any(gerber_ace_response_patterns())

    def total_aces(ctx: BiddingContext) -> int:
        return count_aces(ctx.hand) + infer_opener_aces(ctx)

    def test(ctx: BiddingContext) -> bool:
        return position.test(ctx) and total_aces(ctx) >= 3

    def describe(ctx: BiddingContext) -> str:
        if not position.test(ctx):
            return "Not in Gerber king-ask position"
        total = total_aces(ctx)
        if total >= 3:
            return f"{total} total aces (3+ needed), ask for kings"
        return f"Only {total} total aces (need 3+ to ask for kings)"

    return RuleCondition(
        name="gerber-king-ask",
        label="In Gerber king-ask position (3+ total aces after ace response)",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
    )


def gerber_signoff() -> RuleCondition:
    """Responder has heard an ace or king response and must place the contract."""
    after_aces = auction_matches_any(gerber_ace_response_patterns())
    after_kings = auction_matches_any(gerber_king_response_patterns())

    def describe(ctx: BiddingContext) -> str:
        if not (after_aces.test(ctx) or after_kings.test(ctx)):
            return "Not in Gerber signoff position"
        own_aces = count_aces(ctx.hand)
        opener_aces = infer_opener_aces(ctx)
        total = own_aces + opener_aces
        if after_kings.test(ctx):
            total_kings = count_kings(ctx.hand) + infer_opener_kings(ctx)
            return f"Total {total} aces, {total_kings} kings (after king response)"
        return f"Total {total} aces ({own_aces} yours + {opener_aces} opener's)"

    return RuleCondition(
        name="gerber-signoff",
        label="In Gerber signoff position (after ace or king response)",
        category=HAND,
        test_fn=lambda ctx: after_aces.test(ctx) or after_kings.test(ctx),
        describe_fn=describe,
    )


# ─── Two-suited overcalls ────────────────────────────────────


def both_majors() -> RuleCondition:
    """Five of one major and four of the other."""
    return or_(
        and_(suit_min(Suit.HEARTS, 5), suit_min(Suit.SPADES, 4)),
        and_(suit_min(Suit.SPADES, 5), suit_min(Suit.HEARTS, 4)),
    )


def diamonds_plus_major() -> RuleCondition:
    """Diamonds and a major, 5-4 either way."""
    majors = (Suit.SPADES, Suit.HEARTS)
    return or_(
        and_(suit_min(Suit.DIAMONDS, 5), any_suit_min(majors, 4)),
        and_(suit_min(Suit.DIAMONDS, 4), any_suit_min(majors, 5)),
    )


def clubs_plus_higher() -> RuleCondition:
    """Clubs and a higher-ranking suit, 5-4 either way."""
    higher = (Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES)
    return or_(
        and_(suit_min(Suit.CLUBS, 5), any_suit_min(higher, 4)),
        and_(suit_min(Suit.CLUBS, 4), any_suit_min(higher, 5)),
    )


# ─── Advancing a two-suited overcall ─────────────────────────


def advance_support_for(pattern: Sequence[str], suit: Suit, min_support: int) -> RuleCondition:
    """``min_support``+ cards in ``suit`` after the auction ``pattern``."""
    position = auction_matches_any([pattern])
    label = " - ".join(pattern)
    name = suit.display_name

    def test(ctx: BiddingContext) -> bool:
        return position.test(ctx) and _length(ctx, suit) >= min_support

    def describe(ctx: BiddingContext) -> str:
        if not position.test(ctx):
            return f"Not after {label}"
        length = _length(ctx, suit)
        if length >= min_support:
            return f"{length} {name} ({min_support}+ support)"
        return f"Only {length} {name} (need {min_support}+ support)"

    return RuleCondition(
        name=f"advance-support-{name}",
        label=f"{min_support}+ {name} support after {label}",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
    )


def advance_lack_support(pattern: Sequence[str], suit: Suit, threshold: int) -> RuleCondition:
    """Fewer than ``threshold`` cards in ``suit`` after the auction ``pattern``."""
    position = auction_matches_any([pattern])
    label = " - ".join(pattern)
    name = suit.display_name

    def test(ctx: BiddingContext) -> bool:
        return position.test(ctx) and _length(ctx, suit) < threshold

    def describe(ctx: BiddingContext) -> str:
        if not position.test(ctx):
            return f"Not after {label}"
        length = _length(ctx, suit)
        if length < threshold:
            return f"Only {length} {name} (under {threshold}, ask for other suit)"
        return f"{length} {name} ({threshold}+ support, no need to ask)"

    return RuleCondition(
        name=f"advance-lack-{name}",
        label=f"Fewer than {threshold} {name} after {label}",
        category=HAND,
        test_fn=test,
        describe_fn=describe,
    )

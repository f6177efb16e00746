"""
Condition library.

Auction conditions, hand conditions and combinators, plus the
conditioned-rule factory used by the flattened rule view.
"""

from .auction_conditions import (
    auction_matches,
    auction_matches_any,
    bidding_round,
    is_opener,
    is_responder,
    no_prior_bid,
    opponent_acted,
    opponent_bid,
    partner_bid_at,
    partner_bid_suit,
    partner_opened,
    partner_opened_at,
    partner_opened_major,
    partner_opened_minor,
    partner_raised_opening,
    seat_has_bid,
)
from .combinators import (
    and_,
    best_branch_index,
    build_explanation,
    conditioned_rule,
    evaluate_conditions,
    invert_inference,
    not_,
    or_,
)
from .hand_conditions import (
    ace_count,
    ace_count_any,
    advance_lack_support,
    advance_support_for,
    any_suit_min,
    biddable_suit,
    balanced,
    both_majors,
    clubs_plus_higher,
    diamonds_plus_major,
    gerber_king_ask,
    gerber_signoff,
    has_four_card_major,
    has_shortage,
    has_single_long_suit,
    hcp_max,
    hcp_min,
    hcp_range,
    is_two_suited,
    king_count,
    king_count_any,
    longer_major,
    longest_biddable_suit,
    major_support,
    no_five_card_major,
    no_void,
    opened_suit_min,
    partner_major_support,
    partner_suit_support,
    suit_below,
    suit_min,
)

__all__ = [
    # Auction conditions
    "auction_matches",
    "auction_matches_any",
    "bidding_round",
    "is_opener",
    "is_responder",
    "no_prior_bid",
    "opponent_acted",
    "opponent_bid",
    "partner_bid_at",
    "partner_bid_suit",
    "partner_opened",
    "partner_opened_at",
    "partner_opened_major",
    "partner_opened_minor",
    "partner_raised_opening",
    "seat_has_bid",
    # Combinators
    "and_",
    "best_branch_index",
    "build_explanation",
    "conditioned_rule",
    "evaluate_conditions",
    "invert_inference",
    "not_",
    "or_",
    # Hand conditions
    "ace_count",
    "ace_count_any",
    "advance_lack_support",
    "advance_support_for",
    "any_suit_min",
    "biddable_suit",
    "balanced",
    "both_majors",
    "clubs_plus_higher",
    "diamonds_plus_major",
    "gerber_king_ask",
    "gerber_signoff",
    "has_four_card_major",
    "has_shortage",
    "has_single_long_suit",
    "hcp_max",
    "hcp_min",
    "hcp_range",
    "is_two_suited",
    "king_count",
    "king_count_any",
    "longer_major",
    "longest_biddable_suit",
    "major_support",
    "no_five_card_major",
    "no_void",
    "opened_suit_min",
    "partner_major_support",
    "partner_suit_support",
    "suit_below",
    "suit_min",
]

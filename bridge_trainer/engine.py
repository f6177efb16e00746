"""
Drill coordinator.

Ties the pieces together for a training session: deals a hand that fits a
convention, sets up the auction up to the trainee's turn, and grades the
trainee's call against the convention's rule tree.
"""

import random
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Sequence, Union

import structlog

from .auction.helpers import calls_match, parse_call
from .auction.machine import add_call, is_legal_call, seat_to_act
from .auction.models import PASS, Auction, AuctionEntry, Call, Seat, Vulnerability
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .conventions.evaluator import ForkPoint, PathEntry, TreeEvalResult, evaluate_tree
from .conventions.models import BiddingContext, ConventionConfig, create_bidding_context
from .conventions.registry import (
    BiddingRuleResult,
    ConventionRegistry,
    create_default_registry,
    evaluate_bidding_rules,
)
from .conventions.siblings import SiblingBid, find_sibling_bids
from .errors import ConfigurationError, IllegalCallError
from .hands.deal_generator import generate_deal
from .hands.models import Deal, Hand

logger = structlog.get_logger(__name__)

NO_RULE_EXPLANATION = "No convention bid applies - pass"


@dataclass(frozen=True)
class Drill:
    """One dealt hand waiting for the trainee's call."""
    convention_id: str
    deal: Deal
    seat: Seat
    auction: Auction
    iterations: int
    settings: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def hand(self) -> Hand:
        return self.deal.hands[self.seat]

    @property
    def on_bid(self) -> bool:
        """True when the trainee is the seat to act."""
        return seat_to_act(self.auction) == self.seat


@dataclass(frozen=True)
class BidFeedback:
    """Grading of one trainee call."""
    correct: bool
    user_call: Call
    expected_call: Call
    rule_name: Optional[str]
    meaning: Optional[str]
    explanation: str
    visited: tuple[PathEntry, ...]
    fork_point: Optional[ForkPoint]
    siblings: tuple[SiblingBid, ...]
    legal: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "correct": self.correct,
            "user_call": str(self.user_call),
            "expected_call": str(self.expected_call),
            "rule_name": self.rule_name,
            "meaning": self.meaning,
            "explanation": self.explanation,
            "visited": [entry.to_dict() for entry in self.visited],
            "fork_point": self.fork_point.to_dict() if self.fork_point else None,
            "siblings": [sibling.to_dict() for sibling in self.siblings],
            "legal": self.legal,
        }


class BiddingTrainer:
    """
    Coordinator for convention drills.

    Holds a convention registry and the layered configuration; every drill
    it produces is an immutable value.
    """

    def __init__(
        self,
        registry: Optional[ConventionRegistry] = None,
        config_dir: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.logger = logger
        self.registry = registry if registry is not None else create_default_registry()
        self.config_loader = ConfigLoader.create(config_dir)
        self.rng = rng or random.Random()

        self.logger.info("Bidding trainer initialized", conventions=self.registry.list_ids())

    def load_settings(self, convention_id: str, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merged configuration for a convention.

        Raises:
            ConfigurationError: The merged configuration fails validation
        """
        settings = self.config_loader.merge_config(convention_id, overrides)
        validation_errors = ConfigValidator.validate_config(settings)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error(
                "Configuration validation failed",
                convention_id=convention_id,
                errors=error_msgs
            )
            raise ConfigurationError(
                f"Invalid configuration for {convention_id}: {'; '.join(error_msgs)}",
                errors=validation_errors,
                context={"convention_id": convention_id}
            )
        return settings

    def start_drill(
        self,
        convention_id: str,
        seat: Optional[Seat] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> Drill:
        """
        Deal a hand for ``convention_id`` and set up the auction.

        Raises:
            UnknownConventionIdError: The convention is not registered
            ConfigurationError: The merged configuration is invalid
            DealGenerationError: No fitting deal within the attempt budget
        """
        convention = self.registry.get(convention_id)
        settings = self.load_settings(convention_id, overrides)

        trainer_params = settings["trainer"]
        deal_params = settings["deal"]
        seat = seat or Seat(trainer_params["trainee_seat"])

        rng = self.rng if deal_params.get("seed") is None else random.Random(deal_params["seed"])
        constraints = replace(
            convention.deal_constraints,
            vulnerability=Vulnerability(trainer_params["vulnerability"]),
        )
        result = generate_deal(constraints, rng=rng, max_attempts=deal_params["max_attempts"])

        auction = None
        if convention.default_auction is not None:
            auction = convention.default_auction(seat, result.deal)
        if auction is None:
            auction = Auction.empty(constraints.dealer)

        self.logger.info(
            "Drill started",
            convention_id=convention_id,
            seat=seat.value,
            auction=str(auction),
            iterations=result.iterations
        )
        return Drill(
            convention_id=convention_id,
            deal=result.deal,
            seat=seat,
            auction=auction,
            iterations=result.iterations,
            settings=settings,
        )

    def context_for(self, drill: Drill) -> BiddingContext:
        return create_bidding_context(
            drill.hand,
            drill.auction,
            drill.seat,
            vulnerability=drill.deal.vulnerability,
            dealer=drill.auction.dealer,
        )

    def _skip_illegal(self, drill: Drill) -> bool:
        return drill.settings.get("evaluation", {}).get("skip_illegal_calls", True)

    def expected_call(self, drill: Drill) -> Optional[BiddingRuleResult]:
        """The convention's call for the drill, or None when no rule applies."""
        convention = self.registry.get(drill.convention_id)
        return evaluate_bidding_rules(
            self.context_for(drill),
            convention,
            skip_illegal_calls=self._skip_illegal(drill),
        )

    def check_call(self, drill: Drill, call: Union[Call, str]) -> BidFeedback:
        """
        Grade the trainee's call.

        When no rule applies the expected call is a pass.

        Raises:
            IllegalCallError: ``call`` is not legal in the drill's auction
        """
        if isinstance(call, str):
            call = parse_call(call)

        if not is_legal_call(drill.auction, call, drill.seat):
            self.logger.warning(
                "Trainee call is illegal",
                convention_id=drill.convention_id,
                seat=drill.seat.value,
                call=str(call),
                auction=str(drill.auction)
            )
            raise IllegalCallError(
                f"Illegal call: {call} by {drill.seat.value}",
                call=call,
                seat=drill.seat,
                context={"auction": str(drill.auction)}
            )

        convention = self.registry.get(drill.convention_id)
        context = self.context_for(drill)
        expected = evaluate_bidding_rules(context, convention, skip_illegal_calls=self._skip_illegal(drill))
        tree_result: TreeEvalResult = (
            expected.tree_result if expected is not None else evaluate_tree(convention.rule_tree, context)
        )

        expected_call = expected.call if expected is not None else PASS
        correct = calls_match(call, expected_call)
        siblings = find_sibling_bids(convention.rule_tree, tree_result.matched, context)

        feedback = BidFeedback(
            correct=correct,
            user_call=call,
            expected_call=expected_call,
            rule_name=expected.rule_name if expected is not None else None,
            meaning=expected.meaning if expected is not None else None,
            explanation=expected.explanation if expected is not None else NO_RULE_EXPLANATION,
            visited=tree_result.visited,
            fork_point=tree_result.fork_point,
            siblings=tuple(siblings),
        )

        self.logger.info(
            "Trainee call checked",
            convention_id=drill.convention_id,
            user_call=str(call),
            expected_call=str(expected_call),
            correct=correct,
            rule_name=feedback.rule_name
        )
        return feedback

    def apply_call(self, drill: Drill, call: Union[Call, str]) -> Drill:
        """
        Drill with ``call`` appended for the seat to act.

        Raises:
            IllegalCallError: The call is illegal
            AuctionCompleteError: The auction has already ended
        """
        if isinstance(call, str):
            call = parse_call(call)
        acting = seat_to_act(drill.auction) or drill.seat
        auction = add_call(drill.auction, AuctionEntry(seat=acting, call=call))
        return replace(drill, auction=auction)

    def suggest(self, context: BiddingContext, convention_ids: Sequence[str]) -> Optional[BiddingRuleResult]:
        """
        First result among ``convention_ids``, each evaluated independently.

        Conventions are tried in the given order, so list the partnership's
        conventions before its base system. Returns None when ``context.seat``
        is not the seat on bid.
        """
        on_bid = seat_to_act(context.auction)
        if on_bid is not None and on_bid != context.seat:
            self.logger.debug("Seat is not on bid", seat=context.seat.value, seat_to_act=on_bid.value)
            return None

        for convention_id in convention_ids:
            convention: ConventionConfig = self.registry.get(convention_id)
            result = evaluate_bidding_rules(context, convention)
            if result is not None:
                self.logger.debug("Suggestion found", convention_id=convention_id, rule_name=result.rule_name)
                return result
        return None

    def suggest_next_call(
        self,
        deal: Deal,
        auction: Auction,
        systems: Mapping[Seat, Sequence[str]],
    ) -> Optional[BiddingRuleResult]:
        """
        Suggestion for whichever seat is on bid.

        ``systems`` maps a seat to its partnership's conventions in priority
        order; either member of a partnership may serve as the key. Returns
        None once the auction is over or when the partnership has no call.
        """
        seat = seat_to_act(auction)
        if auction.is_complete or seat is None:
            return None

        convention_ids = systems.get(seat) or systems.get(seat.partner())
        if not convention_ids:
            return None

        context = create_bidding_context(
            deal.hands[seat],
            auction,
            seat,
            vulnerability=deal.vulnerability,
            dealer=auction.dealer,
        )
        return self.suggest(context, convention_ids)

"""
Convention data models.

Conditions are small frozen value objects wrapping closures built by the
factory functions in ``conditions``. Results are plain frozen dataclasses
with ``to_dict()`` for display.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from ..auction.models import Auction, Call, Seat, Vulnerability
from ..hands.evaluator import evaluate_hand
from ..hands.models import Deal, DealConstraints, Hand, HandEvaluation

if TYPE_CHECKING:
    from .rule_tree import RuleNode

logger = structlog.get_logger(__name__)


AUCTION = "auction"
HAND = "hand"


class ConventionCategory(str, Enum):
    ASKING = "Asking"
    DEFENSIVE = "Defensive"
    CONSTRUCTIVE = "Constructive"
    COMPETITIVE = "Competitive"


@dataclass(frozen=True)
class BiddingContext:
    """Everything a condition may look at: the hand, its evaluation and the auction so far."""
    hand: Hand
    auction: Auction
    seat: Seat
    evaluation: HandEvaluation
    vulnerability: Vulnerability = Vulnerability.NONE
    dealer: Seat = Seat.NORTH


def create_bidding_context(
    hand: Hand,
    auction: Auction,
    seat: Seat,
    evaluation: Optional[HandEvaluation] = None,
    vulnerability: Vulnerability = Vulnerability.NONE,
    dealer: Optional[Seat] = None,
) -> BiddingContext:
    """
    Build a bidding context.

    The hand is evaluated when no evaluation is supplied. The dealer defaults
    to the auction's dealer, then North.
    """
    if dealer is None:
        dealer = auction.dealer if auction.dealer is not None else Seat.NORTH
    return BiddingContext(
        hand=hand,
        auction=auction,
        seat=seat,
        evaluation=evaluation if evaluation is not None else evaluate_hand(hand),
        vulnerability=vulnerability,
        dealer=dealer,
    )


@dataclass(frozen=True)
class ConditionInference:
    """Structured description of the hand property a condition gates on."""
    type: str
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "params": dict(self.params)}


@dataclass(frozen=True)
class ConditionResult:
    condition: "RuleCondition"
    passed: bool
    description: str
    branches: Optional[tuple["ConditionBranch", ...]] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.condition.name,
            "passed": self.passed,
            "description": self.description,
        }
        if self.branches:
            data["branches"] = [branch.to_dict() for branch in self.branches]
        return data


@dataclass(frozen=True)
class ConditionBranch:
    """One alternative of a compound condition with each child's result."""
    results: tuple[ConditionResult, ...]
    passed: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "results": [result.to_dict() for result in self.results],
        }


@dataclass(frozen=True, eq=False)
class RuleCondition:
    """
    A named predicate over a bidding context.

    ``label`` is context-free; ``describe`` explains the outcome using the
    actual hand and auction. Compound conditions keep their children so the
    evaluator can report per-branch results.
    """
    name: str
    label: str
    category: str
    test_fn: Callable[[BiddingContext], bool]
    describe_fn: Callable[[BiddingContext], str]
    inference: Optional[ConditionInference] = None
    children: tuple["RuleCondition", ...] = ()
    children_fn: Optional[Callable[[BiddingContext], list[ConditionBranch]]] = None

    @property
    def is_auction(self) -> bool:
        return self.category == AUCTION

    def test(self, context: BiddingContext) -> bool:
        return bool(self.test_fn(context))

    def describe(self, context: BiddingContext) -> str:
        return self.describe_fn(context)

    def evaluate_children(self, context: BiddingContext) -> Optional[list[ConditionBranch]]:
        """Per-branch results for compound conditions, None for leaves."""
        if self.children_fn is None:
            return None
        return self.children_fn(context)

    def __repr__(self) -> str:
        return f"RuleCondition(name={self.name!r}, category={self.category!r})"


@dataclass(frozen=True, eq=False)
class ConditionedBiddingRule:
    """
    A bidding rule whose match is the conjunction of its conditions.

    Auction conditions are always tested before hand conditions.
    """
    name: str
    auction_conditions: tuple[RuleCondition, ...]
    hand_conditions: tuple[RuleCondition, ...]
    call_fn: Callable[[BiddingContext], Call]
    explanation: str = ""

    @property
    def conditions(self) -> tuple[RuleCondition, ...]:
        return self.auction_conditions + self.hand_conditions

    def matches(self, context: BiddingContext) -> bool:
        """True when every condition passes; a raising condition fails the rule."""
        for condition in self.conditions:
            try:
                passed = condition.test(context)
            except Exception as e:
                logger.warning(
                    "Condition raised during rule match",
                    rule_name=self.name,
                    condition_name=condition.name,
                    error=str(e)
                )
                return False
            if not passed:
                return False
        return True

    def call(self, context: BiddingContext) -> Call:
        return self.call_fn(context)


@dataclass(frozen=True)
class ExampleHand:
    description: str
    hand: Hand
    auction: Auction
    expected_call: Call
    rule_name: str


@dataclass(frozen=True, eq=False)
class ConventionConfig:
    """
    A registered convention.

    ``bidding_rules`` is the flattened view of ``rule_tree``; builders set it
    with ``flatten_tree(rule_tree)``.
    """
    id: str
    name: str
    description: str
    category: ConventionCategory
    deal_constraints: DealConstraints
    rule_tree: "RuleNode"
    bidding_rules: tuple[ConditionedBiddingRule, ...] = ()
    examples: tuple[ExampleHand, ...] = ()
    default_auction: Optional[Callable[[Seat, Optional[Deal]], Optional[Auction]]] = None

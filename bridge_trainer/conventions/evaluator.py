"""
Rule tree evaluator.

Pure recursive descent: every decision node visited on the way down is
recorded as a ``PathEntry`` and the trace is assembled from return values.
A condition that raises is recorded as failed and evaluation continues
down its ``no`` branch.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..auction.models import Call
from ..logging.config import get_decision_logger, log_condition_decision
from .models import BiddingContext, RuleCondition
from .rule_tree import BidNode, DecisionNode, FallbackNode, RuleNode, collect_bid_nodes

logger = get_decision_logger(__name__)


@dataclass(frozen=True)
class PathEntry:
    """One visited decision node."""
    node_name: str
    passed: bool
    description: str
    depth: int
    parent_node_name: Optional[str]
    condition: RuleCondition
    node: DecisionNode
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_name": self.node_name,
            "passed": self.passed,
            "description": self.description,
            "depth": self.depth,
            "parent_node_name": self.parent_node_name,
            "condition": self.condition.name,
            "error": self.error,
        }


@dataclass(frozen=True)
class ForkPoint:
    """
    Nearest visited decision whose untaken branch also leads to a bid.

    ``alternatives`` names the bids reachable down that untaken branch.
    """
    entry: PathEntry
    taken_branch: str
    alternatives: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_name": self.entry.node_name,
            "taken_branch": self.taken_branch,
            "description": self.entry.description,
            "alternatives": list(self.alternatives),
        }


@dataclass(frozen=True)
class TreeEvalResult:
    matched: Optional[BidNode]
    call: Optional[Call]
    rule_name: Optional[str]
    meaning: Optional[str]
    fallback_reason: Optional[str]
    visited: tuple[PathEntry, ...]

    @property
    def path(self) -> tuple[PathEntry, ...]:
        """Visited entries that passed."""
        return tuple(entry for entry in self.visited if entry.passed)

    @property
    def rejected(self) -> tuple[PathEntry, ...]:
        """Visited entries that failed."""
        return tuple(entry for entry in self.visited if not entry.passed)

    @property
    def fork_point(self) -> Optional[ForkPoint]:
        return extract_fork_point(self.visited)

    def to_dict(self) -> dict[str, Any]:
        fork = self.fork_point
        return {
            "matched": self.rule_name,
            "call": str(self.call) if self.call is not None else None,
            "meaning": self.meaning,
            "fallback_reason": self.fallback_reason,
            "visited": [entry.to_dict() for entry in self.visited],
            "fork_point": fork.to_dict() if fork else None,
        }


def _evaluate_decision(
    node: DecisionNode,
    context: BiddingContext,
    depth: int,
    parent_name: Optional[str],
) -> PathEntry:
    try:
        passed = node.condition.test(context)
        description = node.condition.describe(context)
        error = None
    except Exception as e:
        logger.warning(
            "Condition raised during evaluation",
            node_name=node.name,
            condition_name=node.condition.name,
            error=str(e),
            exc_info=True
        )
        passed = False
        description = f"Condition '{node.condition.name}' failed: {e}"
        error = str(e)

    log_condition_decision(
        logger,
        node_name=node.name,
        condition_name=node.condition.name,
        passed=passed,
        description=description,
    )
    return PathEntry(
        node_name=node.name,
        passed=passed,
        description=description,
        depth=depth,
        parent_node_name=parent_name,
        condition=node.condition,
        node=node,
        error=error,
    )


def _descend(
    node: RuleNode,
    context: BiddingContext,
    depth: int,
    parent_name: Optional[str],
) -> TreeEvalResult:
    if isinstance(node, DecisionNode):
        entry = _evaluate_decision(node, context, depth, parent_name)
        below = _descend(node.yes if entry.passed else node.no, context, depth + 1, node.name)
        return TreeEvalResult(
            matched=below.matched,
            call=below.call,
            rule_name=below.rule_name,
            meaning=below.meaning,
            fallback_reason=below.fallback_reason,
            visited=(entry,) + below.visited,
        )

    if isinstance(node, BidNode):
        try:
            call = node.call(context)
        except Exception as e:
            logger.warning(
                "Bid node call raised during evaluation",
                node_name=node.name,
                error=str(e),
                exc_info=True
            )
            return TreeEvalResult(
                matched=None,
                call=None,
                rule_name=None,
                meaning=None,
                fallback_reason=f"Bid '{node.name}' failed: {e}",
                visited=(),
            )
        return TreeEvalResult(
            matched=node,
            call=call,
            rule_name=node.name,
            meaning=node.meaning,
            fallback_reason=None,
            visited=(),
        )

    if isinstance(node, FallbackNode):
        return TreeEvalResult(
            matched=None,
            call=None,
            rule_name=None,
            meaning=None,
            fallback_reason=node.reason,
            visited=(),
        )

    raise TypeError(f"Unhandled rule node type: {type(node).__name__}")


def evaluate_tree(tree: RuleNode, context: BiddingContext) -> TreeEvalResult:
    """
    Evaluate a rule tree against a bidding context.

    Args:
        tree: Root node
        context: Hand, auction and seat being evaluated

    Returns:
        TreeEvalResult with the matched bid (if any) and every visited
        decision in traversal order
    """
    return _descend(tree, context, 0, None)


def extract_fork_point(visited: tuple[PathEntry, ...]) -> Optional[ForkPoint]:
    """
    Nearest ancestor decision whose untaken branch leads to a producible bid.

    Scans the visited decisions from the deepest up; None when every untaken
    branch ends only in fallbacks.
    """
    for entry in reversed(visited):
        untaken = entry.node.no if entry.passed else entry.node.yes
        alternatives = collect_bid_nodes(untaken)
        if alternatives:
            return ForkPoint(
                entry=entry,
                taken_branch="yes" if entry.passed else "no",
                alternatives=tuple(bid_node.name for bid_node in alternatives),
            )
    return None

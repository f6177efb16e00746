"""
Sibling bid discovery.

Given the bid a hand matched, list the other bids available in the same
auction position and, for each, the hand conditions that would have to come
out differently to reach it.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..auction.models import Call
from ..errors import TreeStructureError
from ..logging.config import get_decision_logger
from .models import BiddingContext, RuleCondition
from .rule_tree import BidNode, DecisionNode, FallbackNode, RuleNode

logger = get_decision_logger(__name__)


@dataclass(frozen=True)
class SiblingConditionDetail:
    """A condition on the sibling's path that the hand does not satisfy in the required direction."""
    name: str
    description: str
    required_result: bool
    actual_result: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "required_result": self.required_result,
            "actual_result": self.actual_result,
        }


@dataclass(frozen=True)
class SiblingBid:
    bid_name: str
    meaning: str
    call: Call
    failed_conditions: tuple[SiblingConditionDetail, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "bid_name": self.bid_name,
            "meaning": self.meaning,
            "call": str(self.call),
            "failed_conditions": [d.to_dict() for d in self.failed_conditions],
        }


def _check(condition: RuleCondition, context: BiddingContext) -> tuple[bool, str]:
    """Test and describe a condition; a raising condition counts as failed."""
    try:
        return condition.test(context), condition.describe(context)
    except Exception as e:
        logger.warning(
            "Condition raised during sibling search",
            condition_name=condition.name,
            error=str(e),
            exc_info=True
        )
        return False, f"Condition '{condition.name}' failed: {e}"


def find_hand_subtree_root(tree: RuleNode, context: BiddingContext) -> RuleNode:
    """Follow auction decisions as the context dictates; stop at the first hand decision or leaf."""
    node = tree
    while isinstance(node, DecisionNode) and node.condition.is_auction:
        passed, _ = _check(node.condition, context)
        node = node.yes if passed else node.no
    return node


def _collect(
    node: RuleNode,
    matched: Optional[BidNode],
    context: BiddingContext,
    path: tuple[tuple[RuleCondition, bool], ...],
    results: list[SiblingBid],
) -> None:
    if isinstance(node, FallbackNode):
        return

    if isinstance(node, BidNode):
        if node is matched:
            return
        try:
            call = node.call(context)
        except Exception as e:
            logger.warning("Sibling bid call raised; skipping", bid_name=node.name, error=str(e))
            return

        failed = []
        for condition, required in path:
            actual, description = _check(condition, context)
            if actual != required:
                failed.append(SiblingConditionDetail(
                    name=condition.name,
                    description=description,
                    required_result=required,
                    actual_result=actual,
                ))
        results.append(SiblingBid(
            bid_name=node.name,
            meaning=node.meaning,
            call=call,
            failed_conditions=tuple(failed),
        ))
        return

    if isinstance(node, DecisionNode):
        if node.condition.is_auction:
            raise TreeStructureError(
                f"Auction condition '{node.condition.name}' at '{node.name}' found inside hand subtree",
                node_name=node.name
            )
        _collect(node.yes, matched, context, path + ((node.condition, True),), results)
        _collect(node.no, matched, context, path + ((node.condition, False),), results)
        return

    raise TypeError(f"Unhandled rule node type: {type(node).__name__}")


def find_sibling_bids(
    tree: RuleNode,
    matched: Optional[BidNode],
    context: BiddingContext,
) -> list[SiblingBid]:
    """
    Alternative bids reachable in the same auction position.

    Args:
        tree: Convention rule tree
        matched: Bid node the hand reached, excluded from the result; None
            when evaluation ended at a fallback
        context: Context the tree was evaluated against

    Returns:
        Sibling bids in tree order with the conditions each would need flipped

    Raises:
        TreeStructureError: An auction condition appears inside the hand subtree
    """
    root = find_hand_subtree_root(tree, context)
    if not isinstance(root, DecisionNode):
        return []

    results: list[SiblingBid] = []
    _collect(root, matched, context, (), results)
    return results

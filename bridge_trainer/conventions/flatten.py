"""
Flattened view of a rule tree.

Each root-to-bid path becomes one conditioned rule. A ``no`` branch
contributes the negation of its decision's condition, so scanning the rules
in order and taking the first match reproduces tree evaluation.
"""

from ..errors import TreeStructureError
from .conditions.combinators import conditioned_rule, not_
from .models import ConditionedBiddingRule, RuleCondition
from .rule_tree import BidNode, DecisionNode, FallbackNode, RuleNode


def flatten_tree(tree: RuleNode) -> list[ConditionedBiddingRule]:
    """
    One rule per path to a bid node, in tree order.

    Raises:
        TreeStructureError: A node object appears in more than one position
    """
    rules: list[ConditionedBiddingRule] = []
    seen: set[int] = set()

    def walk(node: RuleNode, conditions: tuple[RuleCondition, ...]) -> None:
        if id(node) in seen:
            name = getattr(node, "name", None) or "fallback"
            raise TreeStructureError(
                f"Rule node '{name}' is shared between branches; flattening needs a strict tree",
                node_name=name
            )
        seen.add(id(node))

        if isinstance(node, FallbackNode):
            return

        if isinstance(node, BidNode):
            rules.append(conditioned_rule(
                name=node.name,
                auction_conditions=[c for c in conditions if c.is_auction],
                hand_conditions=[c for c in conditions if not c.is_auction],
                call=node.call_fn,
                explanation=node.meaning,
            ))
            return

        if isinstance(node, DecisionNode):
            walk(node.yes, conditions + (node.condition,))
            walk(node.no, conditions + (not_(node.condition),))
            return

        raise TypeError(f"Unhandled rule node type: {type(node).__name__}")

    walk(tree, ())
    return rules

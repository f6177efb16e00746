"""
Rule tree nodes and builders.

A tree is a binary decision structure: decision nodes test one condition
and continue down ``yes`` or ``no``; leaves are bids or fallbacks. Nodes
compare by identity, so the same node object must never appear twice.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..auction.helpers import parse_call
from ..auction.models import Call
from ..errors import TreeStructureError
from .models import BiddingContext, RuleCondition


@dataclass(frozen=True, eq=False)
class DecisionNode:
    name: str
    condition: RuleCondition
    yes: "RuleNode"
    no: "RuleNode"
    description: Optional[str] = None


@dataclass(frozen=True, eq=False)
class BidNode:
    name: str
    call_fn: Callable[[BiddingContext], Call]
    meaning: str = ""

    def call(self, context: BiddingContext) -> Call:
        return self.call_fn(context)


@dataclass(frozen=True, eq=False)
class FallbackNode:
    """Dead end: the convention has no call here."""
    reason: Optional[str] = None


RuleNode = Union[DecisionNode, BidNode, FallbackNode]


def decision(
    name: str,
    condition: RuleCondition,
    yes: RuleNode,
    no: RuleNode,
    description: Optional[str] = None,
) -> DecisionNode:
    return DecisionNode(name=name, condition=condition, yes=yes, no=no, description=description)


def bid(name: str, call_fn: Callable[[BiddingContext], Call], meaning: str = "") -> BidNode:
    return BidNode(name=name, call_fn=call_fn, meaning=meaning)


def fallback(reason: Optional[str] = None) -> FallbackNode:
    return FallbackNode(reason=reason)


def fixed_call(notation: str) -> Callable[[BiddingContext], Call]:
    """Call function that always returns the call written as ``notation``."""
    call = parse_call(notation)
    return lambda _context: call


def _children(node: RuleNode) -> tuple[RuleNode, ...]:
    if isinstance(node, DecisionNode):
        return (node.yes, node.no)
    if isinstance(node, (BidNode, FallbackNode)):
        return ()
    raise TypeError(f"Unhandled rule node type: {type(node).__name__}")


def _node_label(node: RuleNode) -> str:
    if isinstance(node, FallbackNode):
        return f"fallback({node.reason or ''})"
    return node.name


def validate_tree(tree: RuleNode) -> None:
    """
    Check structural constraints.

    Raises:
        TreeStructureError: A node is reachable from two positions, or an
            auction condition sits below a hand condition on some path
    """
    seen: set[int] = set()

    def walk(node: RuleNode, below_hand: Optional[DecisionNode]) -> None:
        if id(node) in seen:
            raise TreeStructureError(
                f"Rule node '{_node_label(node)}' is reachable from more than one position",
                node_name=_node_label(node)
            )
        seen.add(id(node))

        if isinstance(node, DecisionNode):
            if node.condition.is_auction and below_hand is not None:
                raise TreeStructureError(
                    f"Auction condition at '{node.name}' appears below hand condition at '{below_hand.name}'",
                    node_name=node.name,
                    context={"hand_node": below_hand.name}
                )
            if below_hand is None and not node.condition.is_auction:
                below_hand = node

        for child in _children(node):
            walk(child, below_hand)

    walk(tree, None)


def collect_bid_nodes(tree: RuleNode) -> list[BidNode]:
    """Every bid node, yes branches before no branches."""
    found: list[BidNode] = []

    def walk(node: RuleNode) -> None:
        if isinstance(node, BidNode):
            found.append(node)
        for child in _children(node):
            walk(child)

    walk(tree)
    return found

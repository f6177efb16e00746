"""
Convention registry and rule dispatch.

The registry is the only mutable state in the engine. Register every
convention before evaluating concurrently.
"""

from dataclasses import dataclass
from typing import Any, Optional

import structlog

from ..auction.machine import is_legal_call
from ..auction.models import Call
from ..errors import DuplicateConventionIdError, TreeStructureError, UnknownConventionIdError
from .conditions.combinators import build_explanation, evaluate_conditions
from .definitions import BUILTIN_CONVENTIONS
from .evaluator import TreeEvalResult, evaluate_tree
from .models import BiddingContext, ConditionBranch, ConditionResult, ConventionConfig, RuleCondition
from .rule_tree import collect_bid_nodes, validate_tree

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BiddingRuleResult:
    call: Call
    rule_name: str
    meaning: str
    explanation: str
    condition_results: tuple[ConditionResult, ...]
    tree_result: TreeEvalResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "call": str(self.call),
            "rule_name": self.rule_name,
            "meaning": self.meaning,
            "explanation": self.explanation,
            "conditions": [r.to_dict() for r in self.condition_results],
            "tree": self.tree_result.to_dict(),
        }


@dataclass(frozen=True)
class DebugRuleResult:
    """Outcome of one flattened rule, evaluated regardless of earlier matches."""
    rule_name: str
    matched: bool
    is_legal: bool
    call: Optional[Call]
    condition_results: tuple[ConditionResult, ...]


class ConventionRegistry:
    """Catalog of conventions keyed by id."""

    def __init__(self) -> None:
        self.logger = logger
        self._conventions: dict[str, ConventionConfig] = {}

    def register(self, config: ConventionConfig) -> None:
        """
        Register a convention.

        Raises:
            DuplicateConventionIdError: The id is already registered
            TreeStructureError: The rule tree is malformed, or the flattened
                rule list was left empty for a tree that has bids
        """
        if config.id in self._conventions:
            raise DuplicateConventionIdError(
                f'Convention "{config.id}" is already registered',
                convention_id=config.id,
                registered_ids=self.list_ids()
            )

        validate_tree(config.rule_tree)
        if not config.bidding_rules and collect_bid_nodes(config.rule_tree):
            raise TreeStructureError(
                f'Convention "{config.id}" has bids in its tree but no flattened rules',
                node_name=config.id
            )

        self._conventions[config.id] = config
        self.logger.info(
            "Convention registered",
            convention_id=config.id,
            rule_count=len(config.bidding_rules)
        )

    def get(self, convention_id: str) -> ConventionConfig:
        """
        Look up a convention.

        Raises:
            UnknownConventionIdError: Nothing is registered under the id
        """
        config = self._conventions.get(convention_id)
        if config is None:
            available = ", ".join(self.list_ids()) or "(none)"
            raise UnknownConventionIdError(
                f'Unknown convention "{convention_id}". Available: {available}',
                convention_id=convention_id,
                registered_ids=self.list_ids()
            )
        return config

    def list_conventions(self) -> list[ConventionConfig]:
        return list(self._conventions.values())

    def list_ids(self) -> list[str]:
        return list(self._conventions)

    def clear(self) -> None:
        count = len(self._conventions)
        self._conventions.clear()
        self.logger.info("Convention registry cleared", removed=count)

    def __contains__(self, convention_id: object) -> bool:
        return convention_id in self._conventions

    def __len__(self) -> int:
        return len(self._conventions)


def _branches_or_none(condition: RuleCondition, context: BiddingContext) -> Optional[tuple[ConditionBranch, ...]]:
    branches = condition.evaluate_children(context)
    return tuple(branches) if branches else None


def evaluate_bidding_rules(
    context: BiddingContext,
    convention: ConventionConfig,
    skip_illegal_calls: bool = True,
) -> Optional[BiddingRuleResult]:
    """
    Evaluate a convention's rule tree for the context.

    Returns:
        The matched call with its explanation, or None at a fallback. With
        ``skip_illegal_calls`` a matched call that is illegal in the current
        auction is also reported as None.
    """
    tree_result = evaluate_tree(convention.rule_tree, context)
    if tree_result.matched is None or tree_result.call is None:
        logger.debug(
            "No rule applies",
            convention_id=convention.id,
            fallback_reason=tree_result.fallback_reason
        )
        return None

    if skip_illegal_calls and not is_legal_call(context.auction, tree_result.call, context.seat):
        logger.warning(
            "Matched call is illegal in the current auction",
            convention_id=convention.id,
            rule_name=tree_result.rule_name,
            call=str(tree_result.call),
            auction=str(context.auction)
        )
        return None

    condition_results = tuple(
        ConditionResult(
            condition=entry.condition,
            passed=entry.passed,
            description=entry.description,
            branches=_branches_or_none(entry.condition, context) if entry.error is None else None,
        )
        for entry in tree_result.visited
    )

    return BiddingRuleResult(
        call=tree_result.call,
        rule_name=tree_result.rule_name or "",
        meaning=tree_result.meaning or "",
        explanation=build_explanation(condition_results),
        condition_results=condition_results,
        tree_result=tree_result,
    )


def evaluate_all_rules(context: BiddingContext, convention: ConventionConfig) -> list[DebugRuleResult]:
    """Evaluate every flattened rule, not just the first match."""
    results = []
    for rule in convention.bidding_rules:
        matched = rule.matches(context)
        call = rule.call(context) if matched else None
        results.append(DebugRuleResult(
            rule_name=rule.name,
            matched=matched,
            is_legal=call is not None and is_legal_call(context.auction, call, context.seat),
            call=call,
            condition_results=tuple(evaluate_conditions(rule, context)),
        ))
    return results


def create_default_registry() -> ConventionRegistry:
    """Registry holding the built-in conventions."""
    registry = ConventionRegistry()
    for builder in BUILTIN_CONVENTIONS:
        registry.register(builder())
    return registry

"""
Condition combinators and the conditioned-rule factory.

``or_`` always evaluates every branch so the display layer can highlight the
best branch, even when an earlier one already passed.
"""

from typing import Callable, Optional, Sequence

import structlog

from ...auction.models import Call
from ...config.defaults import EVALUATION_DEFAULTS
from ...errors import ConditionDefinitionError
from ..models import (
    AUCTION,
    HAND,
    BiddingContext,
    ConditionBranch,
    ConditionedBiddingRule,
    ConditionInference,
    ConditionResult,
    RuleCondition,
)

logger = structlog.get_logger(__name__)


def _compound_category(conditions: Sequence[RuleCondition]) -> str:
    return AUCTION if all(c.is_auction for c in conditions) else HAND


def _or_depth(condition: RuleCondition) -> int:
    """Deepest chain of nested ``or_`` conditions, counting this one."""
    inner = max((_or_depth(child) for child in condition.children), default=0)
    return inner + 1 if condition.name == "or" else inner


def _child_result(condition: RuleCondition, context: BiddingContext) -> ConditionResult:
    branches = condition.evaluate_children(context)
    return ConditionResult(
        condition=condition,
        passed=condition.test(context),
        description=condition.describe(context),
        branches=tuple(branches) if branches else None,
    )


def invert_inference(inference: Optional[ConditionInference]) -> Optional[ConditionInference]:
    """
    Inference for the negation of a condition.

    Only single-bound inferences invert cleanly; anything else is dropped.
    """
    if inference is None:
        return None

    params = inference.params
    if inference.type == "hcp-min":
        return ConditionInference("hcp-max", {"max": params["min"] - 1})
    if inference.type == "hcp-max":
        return ConditionInference("hcp-min", {"min": params["max"] + 1})
    if inference.type == "suit-min":
        return ConditionInference("suit-max", {"suit": params["suit"], "max": params["min"] - 1})
    if inference.type == "suit-max":
        return ConditionInference("suit-min", {"suit": params["suit"], "min": params["max"] + 1})
    if inference.type == "balanced":
        return ConditionInference("balanced", {"balanced": not params.get("balanced", True)})
    return None


def not_(condition: RuleCondition) -> RuleCondition:
    """Negate a condition, keeping its category."""
    return RuleCondition(
        name=f"not-{condition.name}",
        label=f"Not: {condition.label}",
        category=condition.category,
        test_fn=lambda ctx: not condition.test(ctx),
        describe_fn=lambda ctx: f"Not: {condition.describe(ctx)}",
        inference=invert_inference(condition.inference),
        children=(condition,),
    )


def and_(*conditions: RuleCondition) -> RuleCondition:
    """All conditions must pass."""
    if not conditions:
        raise ConditionDefinitionError("and_() needs at least one condition", condition_name="and")

    def evaluate_children(ctx: BiddingContext) -> list[ConditionBranch]:
        results = tuple(_child_result(c, ctx) for c in conditions)
        return [ConditionBranch(results=results, passed=all(r.passed for r in results))]

    return RuleCondition(
        name="and",
        label="; ".join(c.label for c in conditions),
        category=_compound_category(conditions),
        test_fn=lambda ctx: all(c.test(ctx) for c in conditions),
        describe_fn=lambda ctx: "; ".join(c.describe(ctx) for c in conditions),
        children=tuple(conditions),
        children_fn=evaluate_children,
    )


def or_(*conditions: RuleCondition) -> RuleCondition:
    """
    At least one condition must pass.

    Raises:
        ConditionDefinitionError: More branches than allowed, or ``or_``
            nested deeper than allowed
    """
    max_branches = EVALUATION_DEFAULTS.max_or_branches
    max_depth = EVALUATION_DEFAULTS.max_or_depth

    if not conditions:
        raise ConditionDefinitionError("or_() needs at least one condition", condition_name="or")
    if len(conditions) > max_branches:
        raise ConditionDefinitionError(
            f"or_() supports at most {max_branches} branches, got {len(conditions)}",
            condition_name="or"
        )
    depth = 1 + max(_or_depth(c) for c in conditions)
    if depth > max_depth:
        raise ConditionDefinitionError(
            f"or_() nesting depth {depth} exceeds {max_depth}",
            condition_name="or"
        )

    def test(ctx: BiddingContext) -> bool:
        outcomes = [c.test(ctx) for c in conditions]
        return any(outcomes)

    def describe(ctx: BiddingContext) -> str:
        described = [(c.test(ctx), c.describe(ctx)) for c in conditions]
        for passed, description in described:
            if passed:
                return description
        return " or ".join(description for _, description in described)

    def evaluate_children(ctx: BiddingContext) -> list[ConditionBranch]:
        branches = []
        for condition in conditions:
            child_branches = condition.evaluate_children(ctx)
            if child_branches is not None:
                # and_() yields a single branch; use its results directly
                results = tuple(r for branch in child_branches for r in branch.results)
            else:
                results = (_child_result(condition, ctx),)
            branches.append(ConditionBranch(results=results, passed=condition.test(ctx)))
        return branches

    return RuleCondition(
        name="or",
        label=" or ".join(c.label for c in conditions),
        category=_compound_category(conditions),
        test_fn=test,
        describe_fn=describe,
        children=tuple(conditions),
        children_fn=evaluate_children,
    )


def conditioned_rule(
    name: str,
    auction_conditions: Sequence[RuleCondition],
    hand_conditions: Sequence[RuleCondition],
    call: Callable[[BiddingContext], Call],
    explanation: str = "",
) -> ConditionedBiddingRule:
    """
    Build a rule that matches when every condition passes.

    Raises:
        ConditionDefinitionError: An auction condition carries inference metadata
    """
    for condition in auction_conditions:
        if condition.inference is not None:
            raise ConditionDefinitionError(
                f"Auction condition '{condition.name}' in rule '{name}' must not carry inference",
                condition_name=condition.name,
                context={"rule": name, "inference": condition.inference.to_dict()}
            )

    return ConditionedBiddingRule(
        name=name,
        auction_conditions=tuple(auction_conditions),
        hand_conditions=tuple(hand_conditions),
        call_fn=call,
        explanation=explanation,
    )


def evaluate_conditions(rule: ConditionedBiddingRule, context: BiddingContext) -> list[ConditionResult]:
    """
    Per-condition results for a rule, including branch data for compounds.

    A condition that raises is reported as failed with the error in its
    description; the remaining conditions are still evaluated.
    """
    results = []
    for condition in rule.conditions:
        try:
            results.append(_child_result(condition, context))
        except Exception as e:
            logger.warning(
                "Condition raised during rule evaluation",
                rule_name=rule.name,
                condition_name=condition.name,
                error=str(e)
            )
            results.append(ConditionResult(
                condition=condition,
                passed=False,
                description=f"Condition '{condition.name}' failed: {e}",
            ))
    return results


def build_explanation(results: Sequence[ConditionResult]) -> str:
    """Join results as ``"✓ passed; ✗ failed"``."""
    return "; ".join(f"{'✓' if r.passed else '✗'} {r.description}" for r in results)


def best_branch_index(branches: Sequence[ConditionBranch]) -> Optional[int]:
    """
    Index of the branch with the most passing results.

    The first branch wins ties; None when no branch has a passing result.
    """
    best_index = None
    best_count = 0
    for index, branch in enumerate(branches):
        passing = sum(1 for r in branch.results if r.passed)
        if passing > best_count:
            best_count = passing
            best_index = index
    return best_index

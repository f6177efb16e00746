"""Unit tests for flattening a rule tree into conditioned rules."""

from unittest.mock import patch

import pytest

from bridge_trainer.conventions.conditions import hcp_min, suit_min
from bridge_trainer.conventions.definitions.stayman import build_stayman_tree
from bridge_trainer.conventions.evaluator import evaluate_tree
from bridge_trainer.conventions.flatten import flatten_tree
from bridge_trainer.conventions.models import HAND, RuleCondition
from bridge_trainer.conventions.rule_tree import bid, collect_bid_nodes, decision, fallback, fixed_call
from bridge_trainer.errors import TreeStructureError
from bridge_trainer.hands.models import Suit


def _first_match(rules, ctx):
    for rule in rules:
        if rule.matches(ctx):
            return rule
    return None


class TestFlattenTree:
    """Test suite for flatten_tree."""

    def test_one_rule_per_bid_node(self) -> None:
        tree = build_stayman_tree()
        rules = flatten_tree(tree)
        assert [rule.name for rule in rules] == [node.name for node in collect_bid_nodes(tree)]

    def test_no_branch_negates_condition(self) -> None:
        tree = decision(
            "strong",
            hcp_min(10),
            bid("game", fixed_call("3NT")),
            decision("spades", suit_min(Suit.SPADES, 4), bid("two-spades", fixed_call("2S")), fallback()),
        )
        rules = flatten_tree(tree)
        assert [rule.name for rule in rules] == ["game", "two-spades"]
        assert [c.name for c in rules[1].hand_conditions] == ["not-hcp-min", "spades-min"]

    def test_auction_conditions_precede_hand_conditions(self) -> None:
        rules = flatten_tree(build_stayman_tree())
        ask_2nt = rules[1]
        assert ask_2nt.name == "stayman-ask"
        assert [c.name for c in ask_2nt.auction_conditions] == ["not-auction", "auction"]
        assert [c.name for c in ask_2nt.hand_conditions] == ["hcp-min", "any-spades/hearts-min"]
        assert ask_2nt.conditions == ask_2nt.auction_conditions + ask_2nt.hand_conditions

    def test_explanation_is_bid_meaning(self) -> None:
        rules = flatten_tree(build_stayman_tree())
        assert rules[0].explanation == "Asks opener for a four-card major"

    @pytest.mark.parametrize("hand,calls", [
        ("KJ72.Q853.Q4.962", ["1NT", "P"]),
        ("KJ72.J853.Q4.962", ["1NT", "P"]),
        ("KJ72.Q853.Q4.962", ["2NT", "P"]),
        ("AQ5.KJ84.K72.A93", ["1NT", "P", "2C", "P"]),
        ("AQ5.KJ8.K742.A93", ["2NT", "P", "3C", "P"]),
        ("K972.Q853.Q4.962", ["1NT", "P", "2C", "P", "2S", "P"]),
        ("AJ732.KQ85.4.962", ["1NT", "P", "2C", "P", "2D", "P"]),
        ("KJ72.Q853.Q4.962", ["1C", "P"]),
    ])
    def test_first_match_agrees_with_tree(self, make_context, hand, calls) -> None:
        tree = build_stayman_tree()
        rules = flatten_tree(tree)
        ctx = make_context(hand, calls)

        tree_result = evaluate_tree(tree, ctx)
        rule = _first_match(rules, ctx)

        if tree_result.matched is None:
            assert rule is None
        else:
            assert rule is not None
            assert rule.name == tree_result.rule_name
            assert rule.call(ctx) == tree_result.call

    def test_shared_node_rejected(self) -> None:
        shared = bid("shared", fixed_call("2C"))
        tree = decision("root", hcp_min(8), shared, shared)
        with pytest.raises(TreeStructureError):
            flatten_tree(tree)

    def test_fallback_only_tree(self) -> None:
        assert flatten_tree(fallback("nothing")) == []

    def test_raising_condition_fails_rule(self, make_context) -> None:
        def test_fn(ctx):
            raise RuntimeError("provider down")

        boom = RuleCondition(name="boom", label="boom", category=HAND, test_fn=test_fn, describe_fn=str)
        tree = decision(
            "hcp-8-plus",
            hcp_min(8),
            decision("flaky", boom, bid("ask-a", fixed_call("2C")), bid("ask-b", fixed_call("2D"))),
            bid("weak", fixed_call("2S")),
        )
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])

        with patch("bridge_trainer.conventions.models.logger") as mock_logger:
            assert [rule.matches(ctx) for rule in flatten_tree(tree)] == [False, False, False]
            assert mock_logger.warning.call_count == 2
        assert mock_logger.warning.call_args.kwargs["rule_name"] == "ask-b"

"""Unit tests for sibling bid discovery."""

from unittest.mock import patch

import pytest

from bridge_trainer.conventions.conditions import auction_matches, hcp_min, suit_min
from bridge_trainer.conventions.definitions.stayman import build_stayman_tree
from bridge_trainer.conventions.evaluator import evaluate_tree
from bridge_trainer.conventions.models import AUCTION, HAND, RuleCondition
from bridge_trainer.conventions.rule_tree import bid, decision, fallback, fixed_call
from bridge_trainer.conventions.siblings import find_hand_subtree_root, find_sibling_bids
from bridge_trainer.errors import TreeStructureError
from bridge_trainer.hands.models import Suit


class TestFindHandSubtreeRoot:
    """Test suite for locating the hand subtree."""

    def test_follows_auction_decisions(self, make_context) -> None:
        ctx = make_context("AQ5.KJ84.K72.A93", ["1NT", "P", "2C", "P"])
        root = find_hand_subtree_root(build_stayman_tree(), ctx)
        assert root.name == "has-4-hearts"

    def test_stops_at_leaf(self, make_context) -> None:
        tree = decision("after-1nt", auction_matches(["1NT", "P"]), bid("ask", fixed_call("2C")), fallback("other"))
        ctx = make_context("KJ72.Q853.Q4.962", ["1C", "P"])
        root = find_hand_subtree_root(tree, ctx)
        assert root.reason == "other"


class TestFindSiblingBids:
    """Test suite for sibling bids and their failed conditions."""

    def test_opener_response_siblings(self, make_context) -> None:
        tree = build_stayman_tree()
        ctx = make_context("AQ5.KJ84.K72.A93", ["1NT", "P", "2C", "P"])
        matched = evaluate_tree(tree, ctx).matched
        assert matched.name == "stayman-response-hearts"

        siblings = find_sibling_bids(tree, matched, ctx)
        assert [s.bid_name for s in siblings] == ["stayman-response-spades", "stayman-response-denial"]

        spades = siblings[0]
        assert str(spades.call) == "2S"
        assert [(d.name, d.required_result, d.actual_result) for d in spades.failed_conditions] == [
            ("hearts-min", False, True),
            ("spades-min", True, False),
        ]

        denial = siblings[1]
        assert [d.name for d in denial.failed_conditions] == ["hearts-min"]

    def test_siblings_when_nothing_matched(self, make_context) -> None:
        tree = build_stayman_tree()
        ctx = make_context("KJ72.J853.Q4.962", ["1NT", "P"])
        siblings = find_sibling_bids(tree, None, ctx)
        assert [s.bid_name for s in siblings] == ["stayman-ask"]
        failed = siblings[0].failed_conditions
        assert [d.name for d in failed] == ["hcp-min"]
        assert failed[0].description == "Only 7 HCP (need 8+)"

    def test_leaf_root_has_no_siblings(self, make_context) -> None:
        tree = decision("after-1nt", auction_matches(["1NT", "P"]), bid("ask", fixed_call("2C")), fallback())
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])
        matched = evaluate_tree(tree, ctx).matched
        assert find_sibling_bids(tree, matched, ctx) == []

    def test_auction_condition_in_hand_subtree_rejected(self, make_context) -> None:
        tree = decision(
            "strong",
            hcp_min(8),
            decision("after-1nt", auction_matches(["1NT", "P"]), bid("ask", fixed_call("2C")), fallback()),
            fallback(),
        )
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])
        with pytest.raises(TreeStructureError):
            find_sibling_bids(tree, None, ctx)

    def test_sibling_with_raising_call_skipped(self, make_context) -> None:
        def explode(ctx):
            raise ValueError("no opening")

        tree = decision(
            "spades",
            suit_min(Suit.SPADES, 4),
            bid("two-spades", fixed_call("2S")),
            bid("boom", explode),
        )
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])
        matched = evaluate_tree(tree, ctx).matched
        with patch("bridge_trainer.conventions.siblings.logger") as mock_logger:
            assert find_sibling_bids(tree, matched, ctx) == []
            mock_logger.warning.assert_called_once()

    def test_to_dict(self, make_context) -> None:
        tree = build_stayman_tree()
        ctx = make_context("KJ72.J853.Q4.962", ["1NT", "P"])
        data = find_sibling_bids(tree, None, ctx)[0].to_dict()
        assert data["call"] == "2C"
        assert data["failed_conditions"][0]["required_result"] is True


def _raising(name: str, category: str = HAND) -> RuleCondition:
    def test_fn(ctx):
        raise RuntimeError("provider down")

    return RuleCondition(name=name, label=name, category=category, test_fn=test_fn, describe_fn=str)


class TestRaisingConditions:
    """A condition that raises is treated as failed instead of aborting the search."""

    def test_raising_hand_condition_reported_as_failed(self, make_context) -> None:
        tree = decision(
            "after-1nt-p",
            auction_matches(["1NT", "P"]),
            decision(
                "hcp-8-plus",
                hcp_min(8),
                decision("flaky", _raising("boom"), bid("ask-a", fixed_call("2C")), bid("ask-b", fixed_call("2D"))),
                fallback("too-weak"),
            ),
            fallback("not-after-1nt"),
        )
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])
        matched = evaluate_tree(tree, ctx).matched
        assert matched.name == "ask-b"

        with patch("bridge_trainer.conventions.siblings.logger") as mock_logger:
            siblings = find_sibling_bids(tree, matched, ctx)
            assert mock_logger.warning.call_args.kwargs["condition_name"] == "boom"

        assert [s.bid_name for s in siblings] == ["ask-a"]
        failed = siblings[0].failed_conditions
        assert [(d.name, d.required_result, d.actual_result) for d in failed] == [("boom", True, False)]
        assert "provider down" in failed[0].description

    def test_raising_auction_condition_follows_no_branch(self, make_context) -> None:
        tree = decision(
            "flaky-auction",
            _raising("boom", category=AUCTION),
            bid("ask", fixed_call("2C")),
            decision("hcp-8-plus", hcp_min(8), bid("invite", fixed_call("2NT")), fallback()),
        )
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])
        with patch("bridge_trainer.conventions.siblings.logger"):
            root = find_hand_subtree_root(tree, ctx)
        assert root.name == "hcp-8-plus"

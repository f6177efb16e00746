"""Unit tests for the convention registry and rule dispatch."""

from unittest.mock import patch

import pytest

from bridge_trainer.auction.models import ContractBid, Strain
from bridge_trainer.conventions.conditions import auction_matches, or_, suit_min
from bridge_trainer.conventions.definitions.stayman import build_stayman_config, stayman_deal_constraints
from bridge_trainer.conventions.flatten import flatten_tree
from bridge_trainer.conventions.models import ConventionCategory, ConventionConfig
from bridge_trainer.conventions.registry import (
    ConventionRegistry,
    evaluate_all_rules,
    evaluate_bidding_rules,
)
from bridge_trainer.conventions.rule_tree import bid, decision, fallback, fixed_call
from bridge_trainer.errors import (
    DuplicateConventionIdError,
    TreeStructureError,
    UnknownConventionIdError,
)
from bridge_trainer.hands.models import Suit


def _convention(convention_id: str, tree, flatten: bool = True) -> ConventionConfig:
    return ConventionConfig(
        id=convention_id,
        name=convention_id.title(),
        description="Test convention",
        category=ConventionCategory.CONSTRUCTIVE,
        deal_constraints=stayman_deal_constraints(),
        rule_tree=tree,
        bidding_rules=tuple(flatten_tree(tree)) if flatten else (),
    )


class TestConventionRegistry:
    """Test suite for ConventionRegistry."""

    def test_default_registry_contents(self, registry) -> None:
        assert registry.list_ids() == ["stayman", "gerber", "bergen-raises", "landy", "dont", "sayc"]
        assert len(registry) == 6
        assert "stayman" in registry
        assert registry.get("landy").category == ConventionCategory.DEFENSIVE

    def test_register_logs(self) -> None:
        with patch("bridge_trainer.conventions.registry.logger") as mock_logger:
            registry = ConventionRegistry()
            registry.register(build_stayman_config())
            mock_logger.info.assert_called_once()
            assert mock_logger.info.call_args.kwargs["convention_id"] == "stayman"

    def test_duplicate_id_rejected(self) -> None:
        registry = ConventionRegistry()
        registry.register(build_stayman_config())
        with pytest.raises(DuplicateConventionIdError) as exc_info:
            registry.register(build_stayman_config())
        assert exc_info.value.convention_id == "stayman"
        assert exc_info.value.registered_ids == ["stayman"]
        assert exc_info.value.recoverable is False

    def test_unknown_id_lists_available(self, registry) -> None:
        with pytest.raises(UnknownConventionIdError) as exc_info:
            registry.get("jacoby")
        assert "stayman" in str(exc_info.value)
        assert exc_info.value.convention_id == "jacoby"

    def test_unknown_id_on_empty_registry(self) -> None:
        with pytest.raises(UnknownConventionIdError) as exc_info:
            ConventionRegistry().get("stayman")
        assert "(none)" in str(exc_info.value)

    def test_clear(self, registry) -> None:
        registry.clear()
        assert registry.list_ids() == []
        assert registry.list_conventions() == []

    def test_malformed_tree_rejected(self) -> None:
        shared = bid("shared", fixed_call("2C"))
        tree = decision("root", suit_min(Suit.SPADES, 4), shared, shared)
        with pytest.raises(TreeStructureError):
            ConventionRegistry().register(_convention("broken", tree, flatten=False))

    def test_missing_flattened_rules_rejected(self) -> None:
        tree = decision("spades", suit_min(Suit.SPADES, 4), bid("two-spades", fixed_call("2S")), fallback())
        with pytest.raises(TreeStructureError):
            ConventionRegistry().register(_convention("unflattened", tree, flatten=False))


class TestEvaluateBiddingRules:
    """Test suite for evaluate_bidding_rules."""

    def test_stayman_ask_with_8_hcp(self, make_context, registry) -> None:
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])
        result = evaluate_bidding_rules(ctx, registry.get("stayman"))
        assert result is not None
        assert result.call == ContractBid(2, Strain.CLUBS)
        assert result.rule_name == "stayman-ask"
        assert result.meaning == "Asks opener for a four-card major"
        assert len(result.condition_results) == 3
        assert result.explanation.startswith("✓ After 1NT - P")
        assert "✗" not in result.explanation

    def test_no_rule_with_7_hcp(self, make_context, registry) -> None:
        ctx = make_context("KJ72.J853.Q4.962", ["1NT", "P"])
        assert evaluate_bidding_rules(ctx, registry.get("stayman")) is None

    def test_illegal_match_skipped(self, make_context) -> None:
        tree = decision("after-1nt", auction_matches(["1NT", "P"]), bid("one-club", fixed_call("1C")), fallback())
        convention = _convention("underbid", tree)
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])

        with patch("bridge_trainer.conventions.registry.logger") as mock_logger:
            assert evaluate_bidding_rules(ctx, convention) is None
            mock_logger.warning.assert_called_once()

        result = evaluate_bidding_rules(ctx, convention, skip_illegal_calls=False)
        assert result is not None
        assert result.rule_name == "one-club"

    def test_compound_condition_branches(self, make_context) -> None:
        tree = decision(
            "five-card-major",
            or_(suit_min(Suit.SPADES, 5), suit_min(Suit.HEARTS, 5)),
            bid("major", fixed_call("2D")),
            fallback(),
        )
        ctx = make_context("AJ72.KQ853.4.962", ["1NT", "P"])
        result = evaluate_bidding_rules(ctx, _convention("either-major", tree))
        branches = result.condition_results[0].branches
        assert branches is not None
        assert [branch.passed for branch in branches] == [False, True]
        assert "branches" in result.to_dict()["conditions"][0]

    def test_to_dict(self, make_context, registry) -> None:
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])
        data = evaluate_bidding_rules(ctx, registry.get("stayman")).to_dict()
        assert data["call"] == "2C"
        assert data["tree"]["matched"] == "stayman-ask"


class TestEvaluateAllRules:
    """Test suite for the debug evaluation of every rule."""

    def test_reports_every_rule(self, make_context, registry) -> None:
        convention = registry.get("stayman")
        ctx = make_context("KJ72.Q853.Q4.962", ["1NT", "P"])
        results = evaluate_all_rules(ctx, convention)
        assert len(results) == len(convention.bidding_rules)

        matched = [r for r in results if r.matched]
        assert [r.rule_name for r in matched] == ["stayman-ask"]
        assert matched[0].is_legal is True
        assert matched[0].call == ContractBid(2, Strain.CLUBS)

        unmatched = results[-1]
        assert unmatched.call is None
        assert unmatched.is_legal is False
        assert len(unmatched.condition_results) == len(convention.bidding_rules[-1].conditions)

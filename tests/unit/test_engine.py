"""
End-to-end tests for the batch scoring pipeline.
"""
import json

import pytest

from supplier_scoring.core.models import SupplierTier
from supplier_scoring.core.rules import ScoringRules
from supplier_scoring.scoring.aggregator import aggregate_by_supplier
from supplier_scoring.scoring.engine import (
    ScoringRun,
    calculate_all_scores,
    derive_fields,
    score_line_items,
)


class TestCalculateAllScores:

    def test_full_batch(self, sample_batch, default_rules):
        result = calculate_all_scores(aggregate_by_supplier(sample_batch), default_rules)

        assert [s.supplier_id for s in result] == ["BIG", "MID", "TAIL"]

        big, mid, tail = result
        assert big.total_score == 10.0
        assert big.diagnosis == "Strong supplier"
        assert big.action.startswith("SCALE:")

        assert (mid.sales_score, mid.assortment_score, mid.efficiency_score, mid.margin_score) == (0.18, 0.4, 0.6, 1)
        assert mid.total_score == 2.2
        assert mid.diagnosis == "Sales not top-tier, Low absolute revenue, Low breadth, Weak efficiency"
        assert mid.action.startswith("PAUSE:")

        assert tail.margin_score == 0
        assert tail.action.startswith("PAUSE:")

    def test_single_dominant_supplier_crosses_a_cut(self, sample_batch, default_rules):
        # BIG alone holds ~94% of revenue, so its accumulated share is past 80%
        result = calculate_all_scores(aggregate_by_supplier(sample_batch), default_rules)
        assert [s.tier for s in result] == [SupplierTier.B, SupplierTier.C, SupplierTier.C]

    def test_pareto_tiers(self, make_aggregate, default_rules):
        batch = [
            make_aggregate("C", total_revenue=100_000),
            make_aggregate("A", total_revenue=500_000),
            make_aggregate("D", total_revenue=100_000),
            make_aggregate("B", total_revenue=300_000),
        ]
        result = calculate_all_scores(batch, default_rules)

        assert [s.supplier_id for s in result] == ["A", "B", "C", "D"]
        assert [s.tier for s in result] == [SupplierTier.A, SupplierTier.A, SupplierTier.B, SupplierTier.C]

    def test_every_record_is_complete(self, sample_batch, default_rules):
        for s in calculate_all_scores(aggregate_by_supplier(sample_batch), default_rules):
            assert s.tier is not None
            assert s.tier_label
            assert s.profile
            assert s.action
            assert 0 <= s.total_score <= default_rules.max_total_score

    def test_empty(self):
        assert calculate_all_scores([]) == []

    def test_deterministic(self, sample_batch, default_rules):
        aggregates = aggregate_by_supplier(sample_batch)
        assert calculate_all_scores(aggregates, default_rules) == calculate_all_scores(aggregates, default_rules)


class TestDeriveFields:

    @pytest.mark.parametrize("total, tier", [(8.5, SupplierTier.A), (6.0, SupplierTier.B), (3.0, SupplierTier.C)])
    def test_tier_from_score(self, make_scored, total, tier):
        result = derive_fields(make_scored(total=total), ScoringRules())
        assert result.tier == tier
        assert result.tier_label == f"{tier.value}-tier"
        assert result.action

    def test_keeps_existing_values(self, make_scored):
        supplier = make_scored(total=3.0, tier=SupplierTier.A, tier_label="custom",
                               diagnosis="Manual note", action="PAUSE: deprioritize")
        result = derive_fields(supplier, ScoringRules())

        assert result.tier == SupplierTier.A
        assert result.tier_label == "custom"
        assert result.diagnosis == "Manual note"
        assert result.action == "PAUSE: deprioritize"


class TestScoreLineItems:

    def test_run_summary(self, sample_batch, default_rules):
        run = score_line_items(sample_batch, default_rules)

        assert run.line_items == len(sample_batch)
        assert run.total_revenue == 533_000
        assert run.tier_counts == {"A": 0, "B": 1, "C": 2}

    def test_to_dict_is_json_safe(self, sample_batch, default_rules):
        data = score_line_items(sample_batch, default_rules).to_dict()
        encoded = json.loads(json.dumps(data))

        assert encoded["supplier_count"] == 3
        assert encoded["suppliers"][0]["tier"] == "B"
        assert encoded["suppliers"][0]["supplier_id"] == "BIG"

    def test_empty_run(self):
        run = score_line_items([])
        assert isinstance(run, ScoringRun)
        assert run.suppliers == []
        assert run.tier_counts == {"A": 0, "B": 0, "C": 0}

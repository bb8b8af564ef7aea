"""
Unit tests for read-time score adjustments and the validated adjustment inputs.
"""
import pytest
from pydantic import ValidationError

from supplier_scoring.core.rules import FactorLimits, ScoringRules
from supplier_scoring.core.schemas import BonusAdjustment, CustomFactor
from supplier_scoring.scoring.adjustments import AdjustmentCalculator, calculate_adjusted_values


def factor(supplier_id="S1", value=1.0, weight=None, name="Delivery"):
    return CustomFactor(supplier_id=supplier_id, author_id="u1", name=name, value=value, weight=weight)


class TestCalculateAdjustedValues:

    def test_bonus_raises_margin_score(self):
        values = calculate_adjusted_values(20_000, 100_000, 15_000, None, 1.0, 1.0, 1.0)

        assert values.adjusted_gross_profit == 35_000
        assert values.adjusted_margin == pytest.approx(35.0)
        assert values.adjusted_margin_score == 2
        assert values.adjusted_total_score == 5.0

    def test_bonus_and_tender_support_add_up(self):
        values = calculate_adjusted_values(10_000, 100_000, 5_000, 5_000, 0.5, 0.5, 0.5)
        assert values.adjusted_gross_profit == 20_000
        assert values.adjusted_margin_score == 1

    def test_no_adjustment(self):
        values = calculate_adjusted_values(25_000, 100_000, None, None, 1.0, 1.0, 1.0)
        assert values.adjusted_margin == pytest.approx(25.0)
        assert values.adjusted_total_score == 4.0

    def test_zero_revenue(self):
        values = calculate_adjusted_values(0, 0, 1_000, None, 0, 0, 0)
        assert values.adjusted_margin == 0.0
        assert values.adjusted_margin_score == 0

    def test_adjusted_total_rounds_half_up(self):
        values = calculate_adjusted_values(40_000, 100_000, None, None, 1.0, 1.0, 0.25)
        assert values.adjusted_margin_score == 3
        assert values.adjusted_total_score == 5.3


class TestAdjustmentCalculator:
    """Test suite for AdjustmentCalculator."""

    def setup_method(self):
        self.calculator = AdjustmentCalculator(ScoringRules())

    def test_without_adjustments_matches_base(self, make_scored):
        supplier = make_scored(total=5.0, sales=1.0, assortment=1.0, efficiency=1.0, margin=2,
                               revenue=100_000, total_gross_profit=30_000)
        view = self.calculator.adjust(supplier)

        assert view.adjusted_total_score == 5.0
        assert view.final_adjusted_total_score == 5.0
        assert view.score_delta == 0

    def test_bonus_and_factors(self, make_scored):
        supplier = make_scored(total=4.0, sales=1.0, assortment=1.0, efficiency=1.0, margin=1,
                               revenue=100_000, total_gross_profit=25_000)
        bonus = BonusAdjustment(supplier_id="S1", bonus_amount=10_000)
        factors = [factor(value=2.0, weight=0.5), factor(value=-1.0)]

        view = self.calculator.adjust(supplier, bonus=bonus, factors=factors)

        assert view.adjusted_margin_score == 2
        assert view.adjusted_total_score == 5.0
        assert view.custom_factor_total == pytest.approx(0.0)
        assert view.final_adjusted_total_score == pytest.approx(5.0)
        assert view.base_total_score == 4.0
        assert view.to_dict()["score_delta"] == 1.0

    def test_final_score_is_unbounded(self, make_scored):
        supplier = make_scored(total=10.0, sales=3.0, assortment=2.0, efficiency=2.0, margin=3,
                               revenue=100_000, total_gross_profit=50_000)
        view = self.calculator.adjust(supplier, factors=[factor(value=3.0), factor(value=3.0)])
        assert view.final_adjusted_total_score == pytest.approx(16.0)

    def test_idempotent_and_non_mutating(self, make_scored):
        supplier = make_scored(revenue=100_000, total_gross_profit=25_000)
        bonus = BonusAdjustment(supplier_id="S1", bonus_amount=20_000)

        first = self.calculator.adjust(supplier, bonus=bonus)
        second = self.calculator.adjust(supplier, bonus=bonus)

        assert first == second
        assert supplier.total_gross_profit == 25_000
        assert supplier.total_score == 5.0

    def test_other_supplier_adjustments_ignored(self, make_scored):
        supplier = make_scored(revenue=100_000, total_gross_profit=25_000)
        view = self.calculator.adjust(
            supplier,
            bonus=BonusAdjustment(supplier_id="OTHER", bonus_amount=50_000),
            factors=[factor(supplier_id="OTHER", value=3.0)],
        )
        assert view.adjusted_gross_profit == 25_000
        assert view.custom_factor_total == 0.0


class TestAdjustmentSchemas:

    def test_default_weight(self):
        assert factor(value=2.0).weight == 1.0
        assert factor(value=2.0).contribution == 2.0

    @pytest.mark.parametrize("value, weight", [(3.5, None), (-4.0, None), (1.0, 1.5), (1.0, -0.1)])
    def test_out_of_range(self, value, weight):
        with pytest.raises(ValidationError):
            factor(value=value, weight=weight)

    def test_non_finite_value_rejected(self):
        with pytest.raises(ValidationError):
            factor(value=float("nan"))

    def test_deployment_limits_from_context(self):
        limits = FactorLimits(value_min=-100, value_max=100, weight_min=0, weight_max=10, default_weight=1)
        data = {"supplier_id": "S1", "author_id": "u1", "name": "Strategic", "value": 50, "weight": 5}

        f = CustomFactor.model_validate(data, context={"limits": limits})

        assert f.contribution == 250
        with pytest.raises(ValidationError):
            CustomFactor.model_validate(data)

    def test_negative_bonus_rejected(self):
        with pytest.raises(ValidationError):
            BonusAdjustment(supplier_id="S1", bonus_amount=-1)

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            CustomFactor(supplier_id="", author_id="u1", name="x", value=1)

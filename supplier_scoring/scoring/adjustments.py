"""
Score Adjustments.

Projects a stored ScoredSupplier plus the adjustments that currently exist
for it (bonus, tender support, custom factors) into a transient
AdjustedView. The stored score is never modified; deleting a factor or
clearing a bonus reverts the view on the next read.

    adjusted TB     = TB + bonus + tender support
    adjusted TG     = adjusted TB / revenue * 100
    adjusted total  = sales + assortment + efficiency + margin_score(adjusted TG)
    final           = adjusted total + sum(value * weight)   (unbounded)
"""
import logging
from typing import Iterable, Optional

from supplier_scoring.core.data_types import AdjustedValues, AdjustedView, ScoredSupplier
from supplier_scoring.core.rules import ScoringRules, get_rules
from supplier_scoring.core.schemas import BonusAdjustment, CustomFactor
from supplier_scoring.scoring.relative_scorer import margin_score, total_score

logger = logging.getLogger(__name__)


def calculate_adjusted_values(
    total_gross_profit: float,
    total_revenue: float,
    bonus_amount: Optional[float],
    tender_support: Optional[float],
    sales_score: float,
    assortment_score: float,
    efficiency_score: float,
    scoring_rules: Optional[ScoringRules] = None,
) -> AdjustedValues:
    """Recompute margin and total score with bonus/tender support added to gross profit."""
    r = scoring_rules or get_rules()
    adjusted_gross_profit = total_gross_profit + (bonus_amount or 0) + (tender_support or 0)
    adjusted_margin = adjusted_gross_profit / total_revenue * 100 if total_revenue > 0 else 0.0
    adjusted_margin_score = margin_score(adjusted_margin, r.margin_bands)

    return AdjustedValues(
        adjusted_gross_profit=adjusted_gross_profit,
        adjusted_margin=adjusted_margin,
        adjusted_margin_score=adjusted_margin_score,
        adjusted_total_score=total_score(
            sales_score, assortment_score, efficiency_score, adjusted_margin_score, r.scale.total_digits
        ),
    )


class AdjustmentCalculator:
    """Stateless read-time projection. Safe to call concurrently."""

    def __init__(self, scoring_rules: Optional[ScoringRules] = None):
        self.rules = scoring_rules or get_rules()

    def adjust(
        self,
        supplier: ScoredSupplier,
        bonus: Optional[BonusAdjustment] = None,
        factors: Iterable[CustomFactor] = (),
    ) -> AdjustedView:
        if bonus is not None and bonus.supplier_id != supplier.supplier_id:
            logger.warning(f"Ignoring bonus for supplier {bonus.supplier_id} when adjusting {supplier.supplier_id}")
            bonus = None

        values = calculate_adjusted_values(
            supplier.total_gross_profit,
            supplier.total_revenue,
            bonus.bonus_amount if bonus else None,
            bonus.tender_support if bonus else None,
            supplier.sales_score,
            supplier.assortment_score,
            supplier.efficiency_score,
            scoring_rules=self.rules,
        )

        factor_total = 0.0
        for factor in factors:
            if factor.supplier_id != supplier.supplier_id:
                logger.warning(
                    f"Ignoring factor '{factor.name}' for supplier {factor.supplier_id} "
                    f"when adjusting {supplier.supplier_id}"
                )
                continue
            factor_total += factor.contribution

        return AdjustedView(
            adjusted_gross_profit=values.adjusted_gross_profit,
            adjusted_margin=values.adjusted_margin,
            adjusted_margin_score=values.adjusted_margin_score,
            adjusted_total_score=values.adjusted_total_score,
            supplier_id=supplier.supplier_id,
            base_total_score=supplier.total_score,
            custom_factor_total=factor_total,
            final_adjusted_total_score=values.adjusted_total_score + factor_total,
        )

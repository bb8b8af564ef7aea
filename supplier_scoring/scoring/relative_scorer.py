"""
Relative Scoring Algorithm.

Scores every supplier against the maxima of the current batch:
  - Sales (0-3):      share of the largest supplier revenue
  - Assortment (0-2): share of the widest supplier (line count)
  - Efficiency (0-2): revenue per line against the best revenue per line
  - Margin (0-3):     stepped on average margin (TG)

Scores are comparative, not absolute: scoring a different population changes
every score. Scoring runs in two passes, reduce the batch to
PopulationMaxima first, then map each supplier to its scores.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from supplier_scoring.core.data_types import AggregatedSupplier, ScoredSupplier
from supplier_scoring.core.rules import MarginBands, ScoringRules, get_rules
from supplier_scoring.scoring.numbers import round_half_up

logger = logging.getLogger(__name__)


def margin_score(avg_margin: float, bands: Optional[MarginBands] = None) -> int:
    """<20 -> 0, <30 -> 1, <40 -> 2, >=40 -> 3. Non-finite margins score 0."""
    if avg_margin is None or not math.isfinite(avg_margin):
        return 0
    thresholds = (bands or get_rules().margin_bands).thresholds
    return sum(1 for t in thresholds if avg_margin >= t)


def total_score(sales: float, assortment: float, efficiency: float, margin: float, digits: int = 1) -> float:
    return round_half_up(sales + assortment + efficiency + margin, digits)


def _relative(value: float, maximum: float, scale: float, digits: int) -> float:
    if maximum <= 0:
        return 0.0
    return round_half_up(scale * value / maximum, digits)


@dataclass(frozen=True)
class PopulationMaxima:
    """Batch-wide maxima every relative score depends on."""
    max_revenue: float = 0.0
    max_lines: int = 0
    max_efficiency: float = 0.0

    @classmethod
    def from_aggregates(cls, aggregates: Sequence[AggregatedSupplier]) -> "PopulationMaxima":
        if not aggregates:
            return cls()
        with_lines = [a for a in aggregates if a.line_count > 0]
        return cls(
            max_revenue=max(a.total_revenue for a in aggregates),
            max_lines=max(a.line_count for a in aggregates),
            max_efficiency=max((a.revenue_per_line for a in with_lines), default=0.0),
        )


class RelativeScorer:
    """Maps aggregates to sub-scores and a total relative to the batch."""

    def __init__(self, scoring_rules: Optional[ScoringRules] = None):
        self.rules = scoring_rules or get_rules()

    def score_one(self, aggregate: AggregatedSupplier, maxima: PopulationMaxima) -> ScoredSupplier:
        scale = self.rules.scale
        digits = scale.sub_score_digits

        sales = _relative(aggregate.total_revenue, maxima.max_revenue, scale.sales_max, digits)
        assortment = _relative(aggregate.line_count, maxima.max_lines, scale.assortment_max, digits)
        if aggregate.line_count > 0:
            efficiency = _relative(aggregate.revenue_per_line, maxima.max_efficiency, scale.efficiency_max, digits)
        else:
            efficiency = 0.0
        margin = margin_score(aggregate.avg_margin_percent, self.rules.margin_bands)

        return ScoredSupplier(
            supplier_id=aggregate.supplier_id,
            name=aggregate.name,
            line_count=aggregate.line_count,
            total_quantity=aggregate.total_quantity,
            total_revenue=aggregate.total_revenue,
            total_gross_profit=aggregate.total_gross_profit,
            avg_margin_percent=aggregate.avg_margin_percent,
            sales_score=sales,
            assortment_score=assortment,
            efficiency_score=efficiency,
            margin_score=margin,
            total_score=total_score(sales, assortment, efficiency, margin, scale.total_digits),
        )

    def score(self, aggregates: Sequence[AggregatedSupplier]) -> List[ScoredSupplier]:
        maxima = PopulationMaxima.from_aggregates(aggregates)
        logger.debug(
            f"Population maxima: revenue={maxima.max_revenue:,.2f} "
            f"lines={maxima.max_lines} efficiency={maxima.max_efficiency:,.2f}"
        )
        return [self.score_one(a, maxima) for a in aggregates]

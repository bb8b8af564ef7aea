"""
Scoring Engine.

Composes the batch passes:

    line items -> aggregate_by_supplier -> RelativeScorer (maxima barrier)
               -> TierClassifier (sort barrier) -> DiagnosisEngine (per record)

Every import recomputes the whole batch. Either the full result is
returned or an exception propagates; partial batches are never emitted.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from supplier_scoring.core.data_types import AggregatedSupplier, RawLineItem, ScoredSupplier
from supplier_scoring.core.models import SupplierTier
from supplier_scoring.core.rules import ScoringRules, get_rules
from supplier_scoring.scoring.aggregator import aggregate_by_supplier
from supplier_scoring.scoring.classifier import TierClassifier
from supplier_scoring.scoring.diagnosis import DiagnosisEngine
from supplier_scoring.scoring.relative_scorer import RelativeScorer

logger = logging.getLogger(__name__)


def calculate_all_scores(
    aggregates: Sequence[AggregatedSupplier],
    scoring_rules: Optional[ScoringRules] = None,
) -> List[ScoredSupplier]:
    """Score, tier and diagnose a batch. Output is sorted by revenue, descending."""
    if not aggregates:
        return []

    r = scoring_rules or get_rules()
    scored = RelativeScorer(r).score(aggregates)
    classified = TierClassifier(r).classify(scored)

    engine = DiagnosisEngine(r)
    result = []
    for supplier in classified:
        d = engine.diagnose(supplier)
        result.append(replace(supplier, diagnosis=d.diagnosis, action=d.action))
    return result


def derive_fields(supplier: ScoredSupplier, scoring_rules: Optional[ScoringRules] = None) -> ScoredSupplier:
    """
    Fill diagnosis, action and tier for a record imported with precomputed
    scores. Values already present are kept. Without an accumulated share the
    tier falls back to the total score.
    """
    r = scoring_rules or get_rules()
    d = DiagnosisEngine(r).diagnose(supplier)

    tier = supplier.tier
    tier_label = supplier.tier_label
    if tier is None:
        if supplier.total_score >= r.tiers.score_a_min:
            tier = SupplierTier.A
        elif supplier.total_score >= r.tiers.score_b_min:
            tier = SupplierTier.B
        else:
            tier = SupplierTier.C
        tier_label = f"{tier.value}-tier"

    return replace(
        supplier,
        diagnosis=supplier.diagnosis or d.diagnosis,
        action=supplier.action or d.action,
        tier=tier,
        tier_label=tier_label,
    )


@dataclass
class ScoringRun:
    """Summary of one import run."""
    suppliers: List[ScoredSupplier] = field(default_factory=list)
    line_items: int = 0
    run_timestamp: datetime = field(default_factory=datetime.now)

    @property
    def total_revenue(self) -> float:
        return sum(s.total_revenue for s in self.suppliers)

    @property
    def tier_counts(self) -> Dict[str, int]:
        counts = Counter(s.tier.value for s in self.suppliers if s.tier is not None)
        return {tier.value: counts.get(tier.value, 0) for tier in SupplierTier}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_timestamp": self.run_timestamp.isoformat(),
            "line_items": self.line_items,
            "supplier_count": len(self.suppliers),
            "total_revenue": self.total_revenue,
            "tier_counts": self.tier_counts,
            "suppliers": [s.to_dict() for s in self.suppliers],
        }


def score_line_items(
    lines: Iterable[RawLineItem],
    scoring_rules: Optional[ScoringRules] = None,
) -> ScoringRun:
    """Run the full pipeline from raw line items."""
    lines = list(lines)
    aggregates = aggregate_by_supplier(lines)
    run = ScoringRun(
        suppliers=calculate_all_scores(aggregates, scoring_rules),
        line_items=len(lines),
    )
    logger.info(
        f"Scored {len(run.suppliers)} suppliers from {run.line_items} line items "
        f"(revenue {run.total_revenue:,.2f}, tiers {run.tier_counts})"
    )
    return run

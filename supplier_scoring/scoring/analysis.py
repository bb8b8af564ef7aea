"""
Rule-based supplier analysis.

Produces the longer-form analysis (issues, opportunities, priority) shown
next to the short diagnosis. An external LLM enrichment layer may replace
it; this is what callers get when that layer is unavailable.
"""
from typing import List, Optional

from supplier_scoring.core.data_types import ScoredSupplier, SupplierAnalysis
from supplier_scoring.core.models import Priority, SupplierTier
from supplier_scoring.core.rules import ScoringRules, get_rules

RULE_BASED_CONFIDENCE = 60


def fallback_analysis(supplier: ScoredSupplier, scoring_rules: Optional[ScoringRules] = None) -> SupplierAnalysis:
    """Explain a scored supplier without an LLM."""
    t = (scoring_rules or get_rules()).diagnosis
    issues: List[str] = []
    opportunities: List[str] = []

    if supplier.sales_score < t.sales_ok:
        issues.append("low relative revenue")
    if supplier.assortment_score < t.breadth_low:
        issues.append("narrow assortment")
        opportunities.append("Broaden the assortment with more articles from this supplier.")
    if supplier.efficiency_score < t.efficiency_ok:
        issues.append("low revenue per article")
        opportunities.append("Optimize the current assortment and focus on top sellers.")
    if supplier.margin_score < t.margin_ok:
        issues.append("low margin")

    if supplier.total_score >= t.strong_total:
        diagnosis = (
            "Strong supplier performing well on every measure. "
            f"Accounts for {supplier.revenue_share * 100:.1f}% of total sales."
        )
    elif issues:
        diagnosis = f"The supplier struggles with {', '.join(issues)}. This pulls down the total score."
    else:
        diagnosis = "The supplier performs at an average level without clear weaknesses or strengths."

    priority = Priority.MEDIUM
    if supplier.tier == SupplierTier.A and supplier.assortment_score < t.priority_breadth:
        # Large supplier with a narrow range, biggest upside
        priority = Priority.HIGH
    elif supplier.tier == SupplierTier.C:
        priority = Priority.LOW

    narrow = supplier.assortment_score < t.breadth_low
    efficient = supplier.efficiency_score >= t.efficiency_ok
    if narrow and efficient:
        action = "Expand the assortment - existing articles sell well, there is likely demand for more."
    elif not efficient and not narrow:
        action = "Optimize the current assortment - prune weak articles and promote top sellers."
    elif supplier.total_score >= t.strong_total:
        action = "Scale up - broaden aggressively with more articles and categories from this supplier."
    elif supplier.total_score < t.selective_total:
        action = "Pause - do not spend time here now, focus on stronger suppliers."
    else:
        action = "Evaluate manually - analyze top articles and complementary products."

    return SupplierAnalysis(
        diagnosis=diagnosis,
        opportunities=" ".join(opportunities) or "Requires manual analysis to identify specific opportunities.",
        action=action,
        priority=priority,
        confidence=RULE_BASED_CONFIDENCE,
    )

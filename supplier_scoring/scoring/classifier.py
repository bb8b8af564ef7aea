"""
ABC Tier Classifier.

Ranks suppliers by revenue, accumulates revenue share and assigns a Pareto
tier: A up to 80% of accumulated revenue, B up to 95%, C for the tail.
Tiers depend on revenue only. Assortment breadth only changes the profile
text attached to a tier.
"""
import logging
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from supplier_scoring.core.data_types import (
    ArticleDistribution,
    ArticleSummary,
    RawLineItem,
    ScoredSupplier,
)
from supplier_scoring.core.models import SupplierTier
from supplier_scoring.core.rules import ScoringRules, get_rules

logger = logging.getLogger(__name__)

TIER_LABELS: Dict[SupplierTier, str] = {
    SupplierTier.A: "A-tier - Core supplier (top 80%)",
    SupplierTier.B: "B-tier - Important (next 15%)",
    SupplierTier.C: "C-tier - Tail (last 5%)",
}


class TierClassifier:
    """Revenue share, accumulated share, tier and profile for a scored batch."""

    def __init__(self, scoring_rules: Optional[ScoringRules] = None):
        self.rules = scoring_rules or get_rules()

    def tier_for_share(self, accumulated_share: float) -> SupplierTier:
        t = self.rules.tiers
        if accumulated_share <= t.a_max_share + t.tolerance:
            return SupplierTier.A
        if accumulated_share <= t.b_max_share + t.tolerance:
            return SupplierTier.B
        return SupplierTier.C

    def profile(self, tier: SupplierTier, assortment_score: float) -> str:
        low_breadth = assortment_score < self.rules.diagnosis.breadth_low
        if tier == SupplierTier.A:
            if low_breadth:
                return "A-tier. Large supplier. Low breadth -> broaden assortment."
            return "A-tier. Core supplier -> optimize and defend."
        if tier == SupplierTier.B:
            if low_breadth:
                return "B-tier. Potential -> selective breadth."
            return "B-tier. Keep, follow up."
        return "C-tier. Tail -> pause or test very selectively."

    def classify(self, scored: Sequence[ScoredSupplier]) -> List[ScoredSupplier]:
        """Return new records sorted by revenue (descending, stable) with tiers attached."""
        total_revenue = sum(s.total_revenue for s in scored)
        ranked = sorted(scored, key=lambda s: s.total_revenue, reverse=True)

        accumulated = 0.0
        result = []
        for supplier in ranked:
            share = supplier.total_revenue / total_revenue if total_revenue > 0 else 0.0
            accumulated += share
            tier = self.tier_for_share(accumulated)
            result.append(replace(
                supplier,
                revenue_share=share,
                accumulated_share=accumulated,
                tier=tier,
                tier_label=TIER_LABELS[tier],
                profile=self.profile(tier, supplier.assortment_score),
            ))

        counts = Counter(s.tier.value for s in result)
        logger.debug(f"Tier split: A={counts['A']} B={counts['B']} C={counts['C']}")
        return result

    def article_distribution(self, articles: Sequence[RawLineItem]) -> ArticleDistribution:
        """ABC split of one supplier's articles by revenue, with the strongest B articles."""
        if not articles:
            return ArticleDistribution()

        total_revenue = sum(max(0.0, a.revenue) for a in articles)
        ranked = sorted(articles, key=lambda a: a.revenue, reverse=True)

        counts = Counter()
        top_b = []
        accumulated = 0.0
        for article in ranked:
            share = max(0.0, article.revenue) / total_revenue if total_revenue > 0 else 0.0
            accumulated += share
            tier = self.tier_for_share(accumulated) if total_revenue > 0 else SupplierTier.C
            counts[tier] += 1
            if tier == SupplierTier.B and len(top_b) < self.rules.top_b_articles:
                top_b.append(ArticleSummary(
                    article_id=article.article_id,
                    description=article.description,
                    revenue=article.revenue,
                    quantity=article.quantity,
                    revenue_share=share,
                    margin_percent=article.margin_percent,
                ))

        return ArticleDistribution(
            total_articles=len(articles),
            a_articles=counts[SupplierTier.A],
            b_articles=counts[SupplierTier.B],
            c_articles=counts[SupplierTier.C],
            a_article_percentage=counts[SupplierTier.A] / len(articles) * 100,
            top_b_articles=top_b,
        )

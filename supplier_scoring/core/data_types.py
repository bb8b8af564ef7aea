"""
Core lightweight data types for the supplier scoring engine.

These are transfer objects (Dataclasses), NOT persistence models.
User-entered adjustment records live in supplier_scoring/core/schemas.py
because they are validated on creation.
"""
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from supplier_scoring.core.models import Priority, SupplierTier


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


@dataclass
class RawLineItem:
    """One decoded transaction/article row from an import file"""
    article_id: str = ""
    description: str = ""
    quantity: float = 0.0
    supplier_id: str = ""
    supplier_name: str = ""
    margin_percent: float = 0.0  # TG
    revenue: float = 0.0
    gross_profit: Optional[float] = None  # TB, derived from margin when missing


@dataclass
class AggregatedSupplier:
    """Per-supplier totals folded from raw line items"""
    supplier_id: str
    name: str
    line_count: int = 0
    total_quantity: float = 0.0
    total_revenue: float = 0.0
    total_gross_profit: float = 0.0
    avg_margin_percent: float = 0.0  # total TB / total revenue * 100

    @property
    def revenue_per_line(self) -> float:
        if self.line_count <= 0:
            return 0.0
        return self.total_revenue / self.line_count


@dataclass
class ScoredSupplier(AggregatedSupplier):
    """Aggregate plus relative scores, tier and rule-based diagnosis"""
    sales_score: float = 0.0        # 0-3
    assortment_score: float = 0.0   # 0-2
    efficiency_score: float = 0.0   # 0-2
    margin_score: int = 0           # 0-3
    total_score: float = 0.0        # 0-10
    revenue_share: float = 0.0
    accumulated_share: float = 0.0
    tier: Optional[SupplierTier] = None
    tier_label: str = ""
    profile: str = ""
    diagnosis: str = ""
    action: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class Diagnosis:
    """Explanation and recommended action for one supplier"""
    diagnosis: str
    action: str


@dataclass
class AdjustedValues:
    adjusted_gross_profit: float
    adjusted_margin: float
    adjusted_margin_score: int
    adjusted_total_score: float


@dataclass
class AdjustedView(AdjustedValues):
    """Read-time projection of a stored score plus current adjustments"""
    supplier_id: str = ""
    base_total_score: float = 0.0
    custom_factor_total: float = 0.0
    final_adjusted_total_score: float = 0.0

    @property
    def score_delta(self) -> float:
        return self.final_adjusted_total_score - self.base_total_score

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["score_delta"] = round(self.score_delta, 2)
        return data


@dataclass
class ArticleSummary:
    article_id: str
    description: str
    revenue: float
    quantity: float
    revenue_share: float
    margin_percent: Optional[float] = None


@dataclass
class ArticleDistribution:
    """ABC breakdown of one supplier's articles by revenue"""
    total_articles: int = 0
    a_articles: int = 0
    b_articles: int = 0
    c_articles: int = 0
    a_article_percentage: float = 0.0
    top_b_articles: List[ArticleSummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SupplierAnalysis:
    """Rule-based analysis, replaceable by an external LLM enrichment"""
    diagnosis: str
    opportunities: str
    action: str
    priority: Priority = Priority.MEDIUM
    confidence: int = 60  # 0-100

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))

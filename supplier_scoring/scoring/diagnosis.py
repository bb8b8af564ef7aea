"""
Diagnosis Engine.

Deterministic rule tables that explain a supplier's score ("why") and
recommend an action ("what next"). Thresholds come from the active rule
table (rules.diagnosis); the rule ORDER lives here as data:

    REASON_RULES    independent checks, every match adds a reason
    ACTION_RULES    first match wins
    EVALUATE_RULES  first match picks the EVALUATE sub-category

All functions are pure. A non-finite total score yields an empty diagnosis
and action.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional

from supplier_scoring.core.data_types import Diagnosis, ScoredSupplier
from supplier_scoring.core.models import ActionCategory, EvaluateReason
from supplier_scoring.core.rules import DiagnosisThresholds, ScoringRules, get_rules

logger = logging.getLogger(__name__)

STRONG_SUPPLIER = "Strong supplier"


def _ok(value: float, threshold: float) -> bool:
    return math.isfinite(value) and value >= threshold


def _low(value: float, threshold: float) -> bool:
    return not math.isfinite(value) or value < threshold


@dataclass(frozen=True)
class Signals:
    """Boolean view of one supplier's scores, evaluated once against the thresholds."""
    total: float
    strong: bool
    breadth_band: bool       # total >= breadth_total
    selective_band: bool     # selective_total <= total < breadth_total
    below_selective: bool    # total < selective_total
    low_sales: bool
    low_breadth: bool
    low_efficiency: bool
    low_margin: bool
    low_revenue: bool        # 0 < revenue < revenue_low
    weak_revenue: bool       # revenue missing or < revenue_low
    demand_ok: bool
    low_data: bool
    mixed_signal: bool
    potential: bool

    @property
    def high_breadth(self) -> bool:
        return not self.low_breadth

    @classmethod
    def build(
        cls,
        t: DiagnosisThresholds,
        total: float,
        sales: float,
        assortment: float,
        efficiency: float,
        margin: float,
        revenue: float,
        lines: int,
    ) -> "Signals":
        low_sales = _low(sales, t.sales_ok)
        low_efficiency = _low(efficiency, t.efficiency_ok)
        revenue_known = math.isfinite(revenue)

        return cls(
            total=total,
            strong=total >= t.strong_total,
            breadth_band=total >= t.breadth_total,
            selective_band=t.selective_total <= total < t.breadth_total,
            below_selective=total < t.selective_total,
            low_sales=low_sales,
            low_breadth=_low(assortment, t.breadth_low),
            low_efficiency=low_efficiency,
            low_margin=_low(margin, t.margin_ok),
            low_revenue=revenue_known and 0 < revenue < t.revenue_low,
            weak_revenue=_low(revenue, t.revenue_low),
            demand_ok=(
                _ok(sales, t.sales_ok)
                or _ok(efficiency, t.efficiency_ok)
                or _ok(revenue, t.revenue_ok)
            ),
            low_data=lines < t.rows_min_activity or _low(revenue, t.low_data_revenue),
            mixed_signal=(
                (_ok(sales, t.sales_ok) and low_efficiency)
                or (_ok(efficiency, t.efficiency_ok) and low_sales)
                or (_ok(margin, t.mixed_margin_score) and (low_sales or low_efficiency))
            ),
            potential=(
                _ok(sales, t.potential_score)
                or _ok(efficiency, t.potential_score)
                or (revenue_known and t.potential_revenue <= revenue < t.revenue_ok)
            ),
        )


class Rule(NamedTuple):
    name: str
    predicate: Callable[[Signals], bool]
    outcome: str


# =============================================================================
# RULE TABLES
# =============================================================================

REASON_RULES: List[Rule] = [
    Rule("sales", lambda s: s.low_sales, "Sales not top-tier"),
    Rule("revenue", lambda s: s.low_revenue, "Low absolute revenue"),
    Rule("breadth", lambda s: s.low_breadth, "Low breadth"),
    Rule("efficiency", lambda s: s.low_efficiency, "Weak efficiency"),
    Rule("margin", lambda s: s.low_margin, "Low margin"),
]

ACTION_RULES: List[Rule] = [
    Rule(
        ActionCategory.SCALE.value,
        lambda s: s.strong,
        "SCALE: broaden assortment (high priority)",
    ),
    Rule(
        ActionCategory.BREADTH.value,
        lambda s: s.breadth_band and s.low_breadth and s.demand_ok,
        "BREADTH: add articles",
    ),
    Rule(
        ActionCategory.SELECTIVE_BREADTH.value,
        lambda s: s.selective_band and s.low_breadth and s.demand_ok,
        "SELECTIVE BREADTH: add only safe articles",
    ),
    Rule(
        ActionCategory.OPTIMIZE.value,
        lambda s: s.high_breadth and (s.low_sales or s.low_efficiency),
        "OPTIMIZE: prune, keep top sellers",
    ),
    Rule(
        ActionCategory.PAUSE.value,
        lambda s: s.below_selective and s.low_sales and s.low_efficiency and s.weak_revenue,
        "PAUSE: deprioritize",
    ),
]

EVALUATE_HINTS: Dict[EvaluateReason, str] = {
    EvaluateReason.LOW_DATA: (
        "Too few articles/transactions for a confident assessment. "
        "Test more products or wait for more data."
    ),
    EvaluateReason.MIXED_SIGNAL: (
        "Good in some areas, weak in others. Analyze top articles and identify patterns."
    ),
    EvaluateReason.POTENTIAL: (
        "Could be interesting but uncertain. Check search trends and market opportunities."
    ),
    EvaluateReason.CONFLICT: (
        "The signals disagree. Requires manual review of top articles and complementary products."
    ),
}

EVALUATE_RULES: List[Rule] = [
    Rule(reason.value, predicate, f"{ActionCategory.EVALUATE.value}: {reason.value} - {EVALUATE_HINTS[reason]}")
    for reason, predicate in (
        (EvaluateReason.LOW_DATA, lambda s: s.low_data),
        (EvaluateReason.MIXED_SIGNAL, lambda s: s.mixed_signal),
        (EvaluateReason.POTENTIAL, lambda s: s.potential),
        (EvaluateReason.CONFLICT, lambda s: True),
    )
]

EVALUATE_CHECKLISTS: Dict[EvaluateReason, List[str]] = {
    EvaluateReason.LOW_DATA: [
        "Fewer than 5 articles? -> Test more products",
        "Low revenue? -> Wait for more data or test marketing",
        "Too few transactions? -> Increase exposure or wait",
    ],
    EvaluateReason.MIXED_SIGNAL: [
        "Analyze top articles - what works?",
        "Identify patterns - why are some strong and others weak?",
        "Check search trends for the categories that perform well",
        "Consider focusing on strengths and minimizing weaknesses",
    ],
    EvaluateReason.POTENTIAL: [
        "Check search trends for market opportunities",
        "Analyze competitors - what are they doing?",
        "Test selective broadening with 'safe' products",
        "Monitor development over time",
    ],
    EvaluateReason.CONFLICT: [
        "Manual review required - check top articles",
        "Analyze complementary product opportunities",
        "Compare with similar suppliers",
        "Consider an AI analysis for deeper insight",
    ],
}

GENERIC_EVALUATE_CHECKLIST: List[str] = [
    "Analyze top articles and identify patterns",
    "Check search trends for market opportunities",
    "Compare with similar suppliers",
    "Consider an AI analysis for deeper insight",
]


def _first_match(table: List[Rule], signals: Signals) -> Optional[Rule]:
    for rule in table:
        if rule.predicate(signals):
            return rule
    return None


class DiagnosisEngine:
    """Evaluates the reason and action tables for scored suppliers."""

    def __init__(self, scoring_rules: Optional[ScoringRules] = None):
        self.rules = scoring_rules or get_rules()

    def signals(
        self,
        total: float,
        sales: float,
        assortment: float,
        efficiency: float,
        margin: float,
        revenue: float,
        lines: int,
    ) -> Signals:
        return Signals.build(self.rules.diagnosis, total, sales, assortment, efficiency, margin, revenue, lines)

    def diagnosis_text(self, signals: Signals) -> str:
        if signals.strong:
            return STRONG_SUPPLIER
        return ", ".join(rule.outcome for rule in REASON_RULES if rule.predicate(signals))

    def action_text(self, signals: Signals) -> str:
        rule = _first_match(ACTION_RULES, signals) or _first_match(EVALUATE_RULES, signals)
        return rule.outcome

    def diagnose_scores(
        self,
        total: float,
        sales: float,
        assortment: float,
        efficiency: float,
        margin: float,
        revenue: float,
        lines: int,
    ) -> Diagnosis:
        if total is None or not math.isfinite(total):
            return Diagnosis(diagnosis="", action="")
        signals = self.signals(total, sales, assortment, efficiency, margin, revenue, lines)
        return Diagnosis(diagnosis=self.diagnosis_text(signals), action=self.action_text(signals))

    def diagnose(self, supplier: ScoredSupplier) -> Diagnosis:
        return self.diagnose_scores(
            supplier.total_score,
            supplier.sales_score,
            supplier.assortment_score,
            supplier.efficiency_score,
            supplier.margin_score,
            supplier.total_revenue,
            supplier.line_count,
        )


# =============================================================================
# ACTION STRING HELPERS
# =============================================================================

def action_category(action: Optional[str]) -> Optional[ActionCategory]:
    """Recover the category from a stored action string ("OPTIMIZE: ..." -> OPTIMIZE)."""
    if not action:
        return None
    upper = action.strip().upper()
    for category in sorted(ActionCategory, key=lambda c: len(c.value), reverse=True):
        if upper.startswith(category.value):
            return category
    return None


@dataclass(frozen=True)
class EvaluateChecklist:
    category: str
    checklist: List[str]


def evaluate_checklist(action: Optional[str]) -> Optional[EvaluateChecklist]:
    """Follow-up checklist for an EVALUATE action, None for any other action."""
    if action_category(action) != ActionCategory.EVALUATE:
        return None
    upper = action.upper()
    for reason, checklist in EVALUATE_CHECKLISTS.items():
        if reason.value in upper:
            return EvaluateChecklist(category=reason.value, checklist=list(checklist))
    return EvaluateChecklist(category=ActionCategory.EVALUATE.value, checklist=list(GENERIC_EVALUATE_CHECKLIST))

"""
Scoring Module - Supplier Scoring Engine.
"""

from supplier_scoring.scoring.numbers import parse_number
from supplier_scoring.scoring.importer import import_rows, ImportLimitError
from supplier_scoring.scoring.aggregator import aggregate_by_supplier
from supplier_scoring.scoring.relative_scorer import RelativeScorer, margin_score
from supplier_scoring.scoring.classifier import TierClassifier
from supplier_scoring.scoring.diagnosis import DiagnosisEngine, evaluate_checklist
from supplier_scoring.scoring.analysis import fallback_analysis
from supplier_scoring.scoring.adjustments import AdjustmentCalculator, calculate_adjusted_values
from supplier_scoring.scoring.engine import calculate_all_scores, derive_fields, score_line_items

__all__ = [
    "parse_number",
    "import_rows",
    "ImportLimitError",
    "aggregate_by_supplier",
    "RelativeScorer",
    "margin_score",
    "TierClassifier",
    "DiagnosisEngine",
    "evaluate_checklist",
    "fallback_analysis",
    "AdjustmentCalculator",
    "calculate_adjusted_values",
    "calculate_all_scores",
    "derive_fields",
    "score_line_items"
]

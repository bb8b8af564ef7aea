"""
Core Module - Shared Infrastructure.
"""

from supplier_scoring.core.config import settings, Settings
from supplier_scoring.core.rules import get_rules, ScoringRules
from supplier_scoring.core.models import SupplierTier, ActionCategory, EvaluateReason, Priority

__all__ = [
    "settings",
    "Settings",
    "get_rules",
    "ScoringRules",
    "SupplierTier",
    "ActionCategory",
    "EvaluateReason",
    "Priority"
]

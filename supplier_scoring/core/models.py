"""
Core enums for the supplier scoring engine.

NOTE: These are NOT persistence models. The engine emits plain records
(see supplier_scoring/core/data_types.py) and callers store them however they like.

The enums below are shared across the scoring modules so that tier letters,
action categories and priorities keep consistent values in output records.
"""
from enum import Enum


class SupplierTier(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class ActionCategory(str, Enum):
    SCALE = "SCALE"
    BREADTH = "BREADTH"
    SELECTIVE_BREADTH = "SELECTIVE BREADTH"
    OPTIMIZE = "OPTIMIZE"
    PAUSE = "PAUSE"
    EVALUATE = "EVALUATE"


class EvaluateReason(str, Enum):
    LOW_DATA = "LOW DATA"
    MIXED_SIGNAL = "MIXED SIGNAL"
    POTENTIAL = "POTENTIAL"
    CONFLICT = "CONFLICT"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

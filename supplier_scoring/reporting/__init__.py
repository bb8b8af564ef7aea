"""
Reporting Module - console output for scored batches.
"""

from supplier_scoring.reporting.table import ScoreTableReport

__all__ = [
    "ScoreTableReport",
]

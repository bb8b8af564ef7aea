"""
Supplier Scoring Engine.

Ranks suppliers from transactional line items: relative sub-scores,
ABC tiers, rule-based diagnosis and read-time score adjustments.
"""

__version__ = "0.1.0"

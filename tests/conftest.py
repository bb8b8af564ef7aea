"""
Shared pytest fixtures for the supplier scoring test suite.
"""
import pytest

from supplier_scoring.core.data_types import AggregatedSupplier, RawLineItem, ScoredSupplier
from supplier_scoring.core.rules import ScoringRules


# --- Rule Fixtures ---

@pytest.fixture
def default_rules():
    """Built-in rule table, independent of any YAML on disk."""
    return ScoringRules()


# --- Data Factories ---

@pytest.fixture
def make_line():
    """Factory for RawLineItem with sensible defaults."""
    def _make(supplier_id="S1", supplier_name="Supplier One", revenue=1000.0,
              margin_percent=25.0, quantity=1.0, article_id="A1", description="Article",
              gross_profit=None):
        return RawLineItem(
            article_id=article_id,
            description=description,
            quantity=quantity,
            supplier_id=supplier_id,
            supplier_name=supplier_name,
            margin_percent=margin_percent,
            revenue=revenue,
            gross_profit=gross_profit,
        )
    return _make


@pytest.fixture
def make_aggregate():
    def _make(supplier_id="S1", name=None, line_count=10, total_revenue=100_000.0,
              avg_margin_percent=25.0, total_gross_profit=None):
        if total_gross_profit is None:
            total_gross_profit = total_revenue * avg_margin_percent / 100
        return AggregatedSupplier(
            supplier_id=supplier_id,
            name=name or f"Supplier {supplier_id}",
            line_count=line_count,
            total_quantity=float(line_count),
            total_revenue=total_revenue,
            total_gross_profit=total_gross_profit,
            avg_margin_percent=avg_margin_percent,
        )
    return _make


@pytest.fixture
def make_scored():
    """Factory for ScoredSupplier with explicit sub-scores."""
    def _make(total=5.0, sales=1.0, assortment=1.0, efficiency=1.0, margin=2,
              revenue=200_000.0, lines=20, supplier_id="S1", tier=None, **kwargs):
        return ScoredSupplier(
            supplier_id=supplier_id,
            name=kwargs.pop("name", f"Supplier {supplier_id}"),
            line_count=lines,
            total_revenue=revenue,
            total_gross_profit=kwargs.pop("total_gross_profit", revenue * 0.25),
            avg_margin_percent=kwargs.pop("avg_margin_percent", 25.0),
            sales_score=sales,
            assortment_score=assortment,
            efficiency_score=efficiency,
            margin_score=margin,
            total_score=total,
            tier=tier,
            **kwargs,
        )
    return _make


@pytest.fixture
def sample_batch(make_line):
    """Three suppliers with clearly separated revenue."""
    lines = []
    for i in range(50):
        lines.append(make_line("BIG", "Big Co", revenue=10_000.0, margin_percent=42.0, article_id=f"B{i}"))
    for i in range(10):
        lines.append(make_line("MID", "Mid Co", revenue=3_000.0, margin_percent=25.0, article_id=f"M{i}"))
    for i in range(3):
        lines.append(make_line("TAIL", "Tail Co", revenue=1_000.0, margin_percent=10.0, article_id=f"T{i}"))
    return lines

"""
Supplier Aggregator.

Folds raw line items into one AggregatedSupplier per supplier id.
Margin (TG) is computed from summed gross profit over summed revenue,
never as an average of per-line margins.
"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List

from supplier_scoring.core.data_types import AggregatedSupplier, RawLineItem
from supplier_scoring.scoring.numbers import clamp

logger = logging.getLogger(__name__)


def _finite(value: float) -> float:
    return value if value is not None and math.isfinite(value) else 0.0


@dataclass
class _Totals:
    supplier_id: str
    name: str
    lines: int = 0
    quantity: float = 0.0
    revenue: float = 0.0
    gross_profit: float = 0.0

    def add(self, item: RawLineItem) -> None:
        revenue = max(0.0, _finite(item.revenue))
        margin = clamp(_finite(item.margin_percent), -100.0, 100.0)
        gross_profit = item.gross_profit
        if gross_profit is None or not math.isfinite(gross_profit):
            gross_profit = revenue * margin / 100

        self.lines += 1
        self.quantity += max(0.0, _finite(item.quantity))
        self.revenue += revenue
        self.gross_profit += gross_profit

    def to_aggregate(self) -> AggregatedSupplier:
        avg_margin = self.gross_profit / self.revenue * 100 if self.revenue > 0 else 0.0
        return AggregatedSupplier(
            supplier_id=self.supplier_id,
            name=self.name,
            line_count=self.lines,
            total_quantity=self.quantity,
            total_revenue=self.revenue,
            total_gross_profit=self.gross_profit,
            avg_margin_percent=avg_margin,
        )


def aggregate_by_supplier(lines: Iterable[RawLineItem]) -> List[AggregatedSupplier]:
    """Group line items by trimmed supplier id. Rows without id or name are dropped."""
    groups: Dict[str, _Totals] = {}
    dropped = 0

    for item in lines:
        key = (item.supplier_id or "").strip()
        name = (item.supplier_name or "").strip()
        if not key or not name:
            dropped += 1
            continue
        totals = groups.get(key)
        if totals is None:
            totals = groups[key] = _Totals(supplier_id=key, name=name)
        totals.add(item)

    if dropped:
        logger.warning(f"Dropped {dropped} line items without supplier id or name")
    logger.debug(f"Aggregated {len(groups)} suppliers")
    return [totals.to_aggregate() for totals in groups.values()]

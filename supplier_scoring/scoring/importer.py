"""
Line-item import from decoded rows.

Turns rows that an external reader already decoded (dicts keyed by the
file's column headers) into RawLineItems, using a caller-supplied
ColumnMapping. Applies field defaults and defensive clamping; rows without
supplier id or name are skipped, not reported as errors.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from supplier_scoring.core.config import settings
from supplier_scoring.core.data_types import RawLineItem
from supplier_scoring.core.schemas import ColumnMapping
from supplier_scoring.scoring.numbers import clamp, number_or, parse_number

logger = logging.getLogger(__name__)

# Max stored lengths per text field
ARTICLE_ID_MAX = 100
DESCRIPTION_MAX = 500
SUPPLIER_ID_MAX = 50
SUPPLIER_NAME_MAX = 200


class ImportLimitError(ValueError):
    """Raised when an import run exceeds the configured row limit."""


@dataclass
class ImportResult:
    items: List[RawLineItem] = field(default_factory=list)
    skipped_rows: int = 0

    @property
    def total_revenue(self) -> float:
        return sum(item.revenue for item in self.items)


def _text(row: Mapping[str, Any], column: Optional[str], max_len: int) -> str:
    if not column:
        return ""
    value = row.get(column)
    if value is None:
        return ""
    return str(value).strip()[:max_len]


def line_item_from_row(row: Mapping[str, Any], mapping: ColumnMapping) -> Optional[RawLineItem]:
    """Build one RawLineItem, or None when supplier id/name are blank."""
    supplier_id = _text(row, mapping.supplier_id, SUPPLIER_ID_MAX)
    supplier_name = _text(row, mapping.supplier_name, SUPPLIER_NAME_MAX)
    if not supplier_id or not supplier_name:
        return None

    quantity = number_or(row.get(mapping.quantity), 1.0) if mapping.quantity else 1.0
    margin = number_or(row.get(mapping.margin_percent), 0.0) if mapping.margin_percent else 0.0
    revenue = number_or(row.get(mapping.revenue), 0.0)

    gross_profit = None
    if mapping.gross_profit:
        parsed = parse_number(row.get(mapping.gross_profit))
        if not math.isnan(parsed):
            gross_profit = max(0.0, parsed)

    return RawLineItem(
        article_id=_text(row, mapping.article_id, ARTICLE_ID_MAX),
        description=_text(row, mapping.description, DESCRIPTION_MAX),
        quantity=max(0.0, quantity),
        supplier_id=supplier_id,
        supplier_name=supplier_name,
        margin_percent=clamp(margin, -100.0, 100.0),
        revenue=max(0.0, revenue),
        gross_profit=gross_profit,
    )


def import_rows(
    rows: Iterable[Mapping[str, Any]],
    mapping: ColumnMapping,
    max_rows: Optional[int] = None,
) -> ImportResult:
    """Map decoded rows to line items. Raises ImportLimitError past max_rows."""
    limit = max_rows if max_rows is not None else settings.max_import_rows
    result = ImportResult()

    for index, row in enumerate(rows):
        if index >= limit:
            raise ImportLimitError(f"Import exceeds the row limit of {limit:,} rows")
        item = line_item_from_row(row, mapping)
        if item is None:
            result.skipped_rows += 1
            continue
        result.items.append(item)

    if result.skipped_rows:
        logger.warning(f"Skipped {result.skipped_rows} rows without supplier id or name")
    logger.info(f"Imported {len(result.items)} line items, total revenue {result.total_revenue:,.2f}")
    return result

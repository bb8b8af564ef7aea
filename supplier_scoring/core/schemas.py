"""
Validated input records created by users or callers.

Custom factors and bonus adjustments are entered by users and combined with
a stored score at read time, so they are validated once on creation.
Pass ``context={"limits": FactorLimits(...)}`` to ``model_validate`` to apply
a deployment's factor ranges; the active rule table is used otherwise.
"""
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from supplier_scoring.core.rules import FactorLimits, get_rules


def _limits(info: ValidationInfo) -> FactorLimits:
    context = info.context or {}
    return context.get("limits") or get_rules().factor_limits


class CustomFactor(BaseModel):
    """User-entered score factor. Contributes value * weight to the adjusted score."""
    supplier_id: str = Field(min_length=1)
    author_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=200)
    value: float = Field(allow_inf_nan=False)
    weight: Optional[float] = Field(default=None, allow_inf_nan=False, validate_default=True)
    comment: Optional[str] = None

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: float, info: ValidationInfo) -> float:
        limits = _limits(info)
        if not limits.value_min <= v <= limits.value_max:
            raise ValueError(f"value must be between {limits.value_min} and {limits.value_max}")
        return v

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: Optional[float], info: ValidationInfo) -> float:
        limits = _limits(info)
        if v is None:
            return limits.default_weight
        if not limits.weight_min <= v <= limits.weight_max:
            raise ValueError(f"weight must be between {limits.weight_min} and {limits.weight_max}")
        return v

    @property
    def contribution(self) -> float:
        return self.value * self.weight


class BonusAdjustment(BaseModel):
    """Supplier bonus and tender support, both added to gross profit."""
    supplier_id: str = Field(min_length=1)
    bonus_amount: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    tender_support: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    comment: Optional[str] = None


class ColumnMapping(BaseModel):
    """Caller column names for each line-item field. Unmapped optional fields use defaults."""
    supplier_id: str = Field(min_length=1)
    supplier_name: str = Field(min_length=1)
    revenue: str = Field(min_length=1)
    article_id: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[str] = None
    margin_percent: Optional[str] = None
    gross_profit: Optional[str] = None

"""
Scoring Rule Configuration.

Loads the scoring rule table from YAML. The table drives:
- Sub-score scale (maximum points per factor, rounding)
- Margin (TG) bands for the stepped margin score
- ABC tier cut points on accumulated revenue share
- Diagnosis/action thresholds
- Allowed ranges for user-entered custom factors

Usage:
    from supplier_scoring.core.rules import get_rules

    rules = get_rules()
    rules.scale.sales_max                   # 3.0
    rules.margin_bands.thresholds           # [20.0, 30.0, 40.0]
    rules.tiers.a_max_share                 # 0.80
    rules.diagnosis.strong_total            # 8.0
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from supplier_scoring.core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA
# =============================================================================

class ScoreScale(BaseModel):
    """Maximum points per relative sub-score."""
    sales_max: float = Field(default=3.0, gt=0)
    assortment_max: float = Field(default=2.0, gt=0)
    efficiency_max: float = Field(default=2.0, gt=0)
    sub_score_digits: int = Field(default=2, ge=0)
    total_digits: int = Field(default=1, ge=0)


class MarginBands(BaseModel):
    """
    Margin (TG %) thresholds. The margin score is the number of thresholds
    the margin reaches: <20 -> 0, <30 -> 1, <40 -> 2, >=40 -> 3.
    """
    thresholds: List[float] = Field(default_factory=lambda: [20.0, 30.0, 40.0])

    @field_validator("thresholds")
    @classmethod
    def validate_ascending(cls, v: List[float]) -> List[float]:
        if not v:
            raise ValueError("At least one margin threshold is required")
        if any(b <= a for a, b in zip(v, v[1:])):
            raise ValueError(f"Margin thresholds must be strictly ascending, got {v}")
        return v

    @property
    def max_score(self) -> int:
        return len(self.thresholds)


class TierCutoffs(BaseModel):
    """Accumulated revenue share cut points (ABC / Pareto)."""
    a_max_share: float = Field(default=0.80, gt=0, le=1)
    b_max_share: float = Field(default=0.95, gt=0, le=1)
    # Absorbs float drift when shares sum exactly onto a cut point
    tolerance: float = Field(default=1e-9, ge=0)
    # Score-based fallback for records without accumulated share (manual imports)
    score_a_min: float = 8.0
    score_b_min: float = 5.0

    @model_validator(mode="after")
    def validate_order(self):
        if self.b_max_share < self.a_max_share:
            raise ValueError(
                f"b_max_share ({self.b_max_share}) must be >= a_max_share ({self.a_max_share})"
            )
        return self


class DiagnosisThresholds(BaseModel):
    """Thresholds used by the diagnosis/action decision table."""
    strong_total: float = 8.0          # total >= 8 -> strong supplier
    breadth_total: float = 6.0         # BREADTH rule lower bound
    selective_total: float = 4.0       # SELECTIVE BREADTH lower bound, PAUSE upper bound
    sales_ok: float = 1.0              # sales >= 1 -> "top-ish" relative revenue
    breadth_low: float = 0.7           # assortment < 0.7 -> low breadth
    efficiency_ok: float = 0.7         # efficiency >= 0.7 -> ok efficiency
    margin_ok: int = 1                 # margin score < 1 -> low margin
    revenue_ok: float = 100_000        # absolute revenue that counts as demand
    revenue_low: float = 50_000        # low absolute revenue
    rows_min_activity: int = 5         # fewer lines -> LOW DATA
    low_data_revenue: float = 20_000   # less revenue -> LOW DATA
    potential_score: float = 0.5
    potential_revenue: float = 30_000
    mixed_margin_score: int = 2
    priority_breadth: float = 1.0      # A-tier below this -> high priority analysis


class FactorLimits(BaseModel):
    """Allowed ranges for user-entered custom factors (deployment specific)."""
    value_min: float = -3.0
    value_max: float = 3.0
    weight_min: float = 0.0
    weight_max: float = 1.0
    default_weight: float = 1.0

    @model_validator(mode="after")
    def validate_ranges(self):
        if self.value_max < self.value_min:
            raise ValueError("value_max must be >= value_min")
        if self.weight_max < self.weight_min:
            raise ValueError("weight_max must be >= weight_min")
        if not self.weight_min <= self.default_weight <= self.weight_max:
            raise ValueError("default_weight must lie within the weight range")
        return self


class ScoringRules(BaseModel):
    """
    Complete scoring rule table.

    Load from YAML with ScoringRules.from_yaml(path).
    """
    # --- Metadata ---
    name: str = "Default Rules"
    version: str = "1.0"
    description: str = ""

    scale: ScoreScale = Field(default_factory=ScoreScale)
    margin_bands: MarginBands = Field(default_factory=MarginBands)
    tiers: TierCutoffs = Field(default_factory=TierCutoffs)
    diagnosis: DiagnosisThresholds = Field(default_factory=DiagnosisThresholds)
    factor_limits: FactorLimits = Field(default_factory=FactorLimits)
    top_b_articles: int = Field(default=5, ge=0)

    @property
    def max_total_score(self) -> float:
        s = self.scale
        return s.sales_max + s.assortment_max + s.efficiency_max + self.margin_bands.max_score

    # =================================================================
    # LOADERS
    # =================================================================

    @classmethod
    def from_yaml(cls, path: Path) -> "ScoringRules":
        """Load a rule table from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Scoring rules not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        return cls(**raw)

    @classmethod
    def load(cls, config_dir: Optional[Path] = None, rules_file: Optional[Path] = None) -> "ScoringRules":
        """
        Load rules with fallback chain:
          0. explicit rules_file (must exist)
          1. config/scoring.yaml (local, gitignored)
          2. config/scoring.example.yaml (committed)
          3. Built-in defaults
        """
        if rules_file is not None:
            logger.info(f"Loading scoring rules from {rules_file}")
            return cls.from_yaml(rules_file)

        if config_dir is None:
            config_dir = settings.config_dir

        local = config_dir / "scoring.yaml"
        example = config_dir / "scoring.example.yaml"

        if local.exists():
            logger.info(f"Loading scoring rules from {local}")
            return cls.from_yaml(local)
        elif example.exists():
            logger.info(f"No scoring.yaml found, falling back to {example}")
            return cls.from_yaml(example)
        else:
            logger.warning("No scoring rules found, using built-in defaults")
            return cls()

    def to_summary(self) -> dict:
        """Return a JSON-safe summary of the active rule table."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "max_total_score": self.max_total_score,
            "scale": self.scale.model_dump(),
            "margin_bands": self.margin_bands.thresholds,
            "tiers": self.tiers.model_dump(exclude={"tolerance"}),
            "factor_limits": self.factor_limits.model_dump(),
        }


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

@lru_cache(maxsize=1)
def get_rules() -> ScoringRules:
    """Active rule table, loaded and cached on first use."""
    return ScoringRules.load(rules_file=settings.rules_file)

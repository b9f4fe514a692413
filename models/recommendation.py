"""
Reorder recommendation schemas.

Provides "how much to reorder" per SKU, plus the budget-constrained
reorder plan built on top of it.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime
from enum import Enum

from models.base import BaseSchema, ResultSchema


class RiskLevel(str, Enum):
    """Stockout risk based on current days of coverage."""
    HIGH = "high"      # Coverage within lead time
    MEDIUM = "medium"  # Coverage within lead time + safety stock
    LOW = "low"


class InventoryRecommendation(ResultSchema):
    """Reorder recommendation for a single SKU."""

    sku: str
    asin: Optional[str] = None

    # Levels
    current_level: int = Field(..., description="On-hand units")
    recommended_level: int = Field(..., description="Units needed for target + lead time + safety stock")
    reorder_quantity: int = Field(..., ge=0)

    confidence: float = Field(..., ge=0, le=1)

    # Coverage
    days_of_coverage_at_current_level: float
    days_of_coverage_at_recommended_level: float

    # Risk
    risk_level: RiskLevel
    estimated_stockout_date: Optional[datetime] = None
    estimated_lost_sales: float = Field(default=0.0, ge=0)

    recommendation_reason: str = Field(..., description="Why this recommendation")


class ReorderPlan(BaseSchema):
    """Reorder plan response with totals."""

    recommendations: list[InventoryRecommendation]
    budget_applied: bool = Field(..., description="True if the budget optimizer ran")
    total_units: int
    estimated_spend: float = Field(..., description="Units × cost, unknown cost at the sentinel rate")
    max_budget: Optional[float] = None
    max_units: Optional[int] = None

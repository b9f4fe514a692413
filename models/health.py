"""
Inventory health schemas.
"""

from pydantic import Field
from typing import Optional
from enum import Enum

from models.base import ResultSchema


class InventoryHealthStatus(str, Enum):
    """Health classification, first matching rule wins."""
    HEALTHY = "healthy"
    EXCESS = "excess"
    LOW = "low"
    OUT_OF_STOCK = "outOfStock"
    OVERAGED = "overaged"
    SLOW_MOVING = "slowMoving"
    STRANDED = "stranded"


class InventoryHealthAssessment(ResultSchema):
    """Health assessment for a single SKU."""

    sku: str
    asin: Optional[str] = None

    health_status: InventoryHealthStatus
    inventory_age_days: int
    at_risk_of_long_term_storage_fee: bool

    # Only populated when there are excess units
    excess_inventory_percent: Optional[float] = None
    excess_inventory_cost: Optional[float] = Field(
        default=None,
        description="Excess units × cost; omitted when cost is unknown"
    )

    monthly_storage_cost: float
    sell_through_rate: float = Field(..., description="Units sold in 30 days per unit on hand")
    recommended_actions: list[str] = Field(default_factory=list)

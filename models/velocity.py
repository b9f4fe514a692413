"""
Sales velocity schemas.
"""

from pydantic import Field
from typing import Optional
from enum import Enum

from models.base import ResultSchema


class SalesTrend(str, Enum):
    """Direction of recent sales vs. the preceding period."""
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class SalesVelocityMetrics(ResultSchema):
    """Velocity, trend and forecast for a single SKU."""

    sku: str
    asin: Optional[str] = None

    # Rolling sums over the normalized history
    units_sold_7_days: float
    units_sold_30_days: float
    units_sold_60_days: float
    units_sold_90_days: float

    average_daily_sales: float = Field(..., description="units_sold_30_days / 30")
    average_weekly_sales: float = Field(..., description="units_sold_30_days / 4.29")

    sales_trend: SalesTrend
    seasonality_factor: float = Field(..., description="1.0 is average")
    growth_factor: float = Field(..., description="Recent 30 days vs. prior 30 days")

    # Rounded unit forecasts
    sales_forecast_30_days: int
    sales_forecast_60_days: int
    sales_forecast_90_days: int

"""
Sales velocity service.

Turns a raw daily sales history into rolling sums, a trend
classification, seasonality and growth factors, and a forward
daily-sales forecast.

All calculations run on the normalized (fixed-window) history, so
every rolling sum has the same length regardless of how much data
the item actually has.
"""

from typing import Optional, Sequence
import math
import structlog

from config.planning import (
    DEFAULT_DAY_RANGE,
    AVERAGE_WINDOW_DAYS,
    WEEKS_PER_30_DAYS,
    TREND_WINDOW_DAYS,
    TREND_INCREASING_RATIO,
    TREND_DECREASING_RATIO,
    SEASONALITY_MIN_HISTORY_DAYS,
    SEASONALITY_MIN,
    SEASONALITY_MAX,
    GROWTH_WINDOW_DAYS,
    GROWTH_MIN_HISTORY_DAYS,
    GROWTH_MIN,
    GROWTH_MAX,
)
from models.inventory import InventoryItem
from models.velocity import SalesTrend, SalesVelocityMetrics
from utils.sales_history import normalize_sales_history, sum_recent_days, clamp

logger = structlog.get_logger(__name__)


# ===================
# CALCULATIONS
# ===================

def classify_sales_trend(history: Sequence[float]) -> SalesTrend:
    """
    Compare the most recent 15 days against the 15 days before them.

    ratio > 1.2 → INCREASING, ratio < 0.8 → DECREASING, else STABLE.
    With no sales in the earlier window the ratio is taken as 1.
    """
    recent = sum_recent_days(history, TREND_WINDOW_DAYS)
    previous = sum_recent_days(history[TREND_WINDOW_DAYS:], TREND_WINDOW_DAYS)

    ratio = recent / previous if previous > 0 else 1.0

    if ratio > TREND_INCREASING_RATIO:
        return SalesTrend.INCREASING
    if ratio < TREND_DECREASING_RATIO:
        return SalesTrend.DECREASING
    return SalesTrend.STABLE


def calculate_seasonality_factor(history: Sequence[float], observed_days: int) -> float:
    """
    Recent 15-day daily average relative to the full-period daily average.

    Clamped to [0.5, 2.0]. Returns 1.0 with fewer than 30 observed days
    or when the full period has no sales.
    """
    if observed_days < SEASONALITY_MIN_HISTORY_DAYS or not history:
        return 1.0

    recent_daily = sum_recent_days(history, TREND_WINDOW_DAYS) / TREND_WINDOW_DAYS
    full_daily = sum(history) / len(history)

    if full_daily <= 0:
        return 1.0
    return clamp(recent_daily / full_daily, SEASONALITY_MIN, SEASONALITY_MAX)


def calculate_growth_factor(history: Sequence[float], observed_days: int) -> float:
    """
    Most recent 30 days relative to the prior 30 days.

    Clamped to [0.7, 1.5]. Returns 1.0 with fewer than 60 observed days
    or when the prior window has no sales.
    """
    if observed_days < GROWTH_MIN_HISTORY_DAYS:
        return 1.0

    recent = sum_recent_days(history, GROWTH_WINDOW_DAYS)
    previous = sum_recent_days(history[GROWTH_WINDOW_DAYS:], GROWTH_WINDOW_DAYS)

    if previous <= 0:
        return 1.0
    return clamp(recent / previous, GROWTH_MIN, GROWTH_MAX)


def round_units(value: float) -> int:
    """Round to the nearest whole unit, halves up."""
    return int(math.floor(value + 0.5))


class VelocityService:
    """
    Sales velocity analysis.

    Stateless: every call recomputes from the item's current history.
    """

    def analyze(
        self,
        item: InventoryItem,
        day_range: int = DEFAULT_DAY_RANGE
    ) -> SalesVelocityMetrics:
        """
        Calculate velocity metrics for one item.

        Args:
            item: Inventory item with daily sales history
            day_range: Days of history to consider

        Returns:
            SalesVelocityMetrics for the item
        """
        history = normalize_sales_history(item.daily_sales_history, day_range)
        observed_days = min(len(item.daily_sales_history), day_range)

        units_30 = sum_recent_days(history, 30)
        average_daily = units_30 / AVERAGE_WINDOW_DAYS

        seasonality = calculate_seasonality_factor(history, observed_days)
        growth = calculate_growth_factor(history, observed_days)
        forecast_daily = average_daily * growth * seasonality

        return SalesVelocityMetrics(
            sku=item.sku,
            asin=item.asin,
            units_sold_7_days=sum_recent_days(history, 7),
            units_sold_30_days=units_30,
            units_sold_60_days=sum_recent_days(history, 60),
            units_sold_90_days=sum_recent_days(history, 90),
            average_daily_sales=average_daily,
            average_weekly_sales=units_30 / WEEKS_PER_30_DAYS,
            sales_trend=classify_sales_trend(history),
            seasonality_factor=seasonality,
            growth_factor=growth,
            sales_forecast_30_days=round_units(forecast_daily * 30),
            sales_forecast_60_days=round_units(forecast_daily * 60),
            sales_forecast_90_days=round_units(forecast_daily * 90),
        )

    def analyze_or_degrade(
        self,
        item: InventoryItem,
        day_range: int = DEFAULT_DAY_RANGE
    ) -> SalesVelocityMetrics:
        """
        Calculate velocity metrics without letting one item fail a batch.

        A history whose totals overflow is treated as missing, so the
        item reports zero sales instead of raising.
        """
        try:
            return self.analyze(item, day_range)
        except (ArithmeticError, ValueError) as e:
            logger.debug("sales_history_unusable", sku=item.sku, error=str(e))
            return self.analyze(item.without_sales_history(), day_range)

    def analyze_all(
        self,
        items: list[InventoryItem],
        day_range: int = DEFAULT_DAY_RANGE
    ) -> list[SalesVelocityMetrics]:
        """Calculate velocity metrics for every item, in input order."""
        metrics = [self.analyze_or_degrade(item, day_range) for item in items]

        logger.info(
            "velocity_metrics_calculated",
            count=len(metrics),
            day_range=day_range
        )

        return metrics


# Singleton instance
_velocity_service: Optional[VelocityService] = None


def get_velocity_service() -> VelocityService:
    """Get or create VelocityService singleton instance."""
    global _velocity_service
    if _velocity_service is None:
        _velocity_service = VelocityService()
    return _velocity_service

"""
Recommendation service: core "how much to reorder" business logic.

Combines velocity metrics with current stock (on-hand, reserved,
inbound) and the run's planning parameters to produce a target level,
reorder quantity, risk level, confidence and projected stockout per SKU.

Every item is independent of its peers; the only batch-wide step
(budget optimization) lives in the reorder optimizer service.
"""

from typing import Optional, Sequence
from datetime import datetime, timedelta, timezone
import math
import structlog

from config.planning import (
    NO_SALES_COVERAGE_DAYS,
    EXCESS_LEVEL_MULTIPLIER,
    CONFIDENCE_BASE,
    CONFIDENCE_FULL_HISTORY_DAYS,
)
from models.inventory import InventoryItem
from models.planning import PlanningParameters
from models.recommendation import InventoryRecommendation, RiskLevel
from models.velocity import SalesVelocityMetrics
from services.velocity_service import get_velocity_service
from utils.sales_history import coefficient_of_variation

logger = structlog.get_logger(__name__)


REASON_IMMINENT_STOCKOUT = "Imminent stockout risk based on sales velocity."
REASON_BELOW_SAFETY_STOCK = "Inventory below safety stock level."
REASON_RESTOCK = "Restock to maintain optimal inventory level."
REASON_EXCESS = "Excess inventory based on current sales velocity."
REASON_OPTIMAL = "Inventory levels within optimal range."


# ===================
# CALCULATIONS
# ===================

def calculate_confidence_score(sales_history: Sequence[float]) -> float:
    """
    Confidence (0.3 - 1.0) in a recommendation built from this history.

    confidence = 0.3 + 0.7 × data_points_factor × variance_factor

        data_points_factor = min(1, days / 60)     more history → higher ceiling
        variance_factor    = max(0, 1 - min(1, CV)) steadier sales → higher score

    An empty history is a flat 0.3.
    """
    if not sales_history:
        return CONFIDENCE_BASE

    data_points_factor = min(1.0, len(sales_history) / CONFIDENCE_FULL_HISTORY_DAYS)
    variance_factor = max(0.0, 1.0 - min(1.0, coefficient_of_variation(sales_history)))

    score = CONFIDENCE_BASE + (1 - CONFIDENCE_BASE) * data_points_factor * variance_factor
    return min(1.0, score)


def classify_risk(days_of_coverage: float, params: PlanningParameters) -> RiskLevel:
    """
    Risk level from current days of coverage.

    <= lead time → HIGH, <= lead time + safety stock → MEDIUM, else LOW.
    """
    if days_of_coverage <= params.lead_time_days:
        return RiskLevel.HIGH
    if days_of_coverage <= params.lead_time_days + params.safety_stock_days:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def clamp_reorder_quantity(quantity: int, params: PlanningParameters) -> int:
    """
    Apply reorder bounds.

    A non-zero quantity is raised to the minimum reorder quantity;
    every quantity is capped at the maximum.
    """
    if quantity > 0:
        quantity = max(quantity, params.minimum_reorder_quantity)
    return max(0, min(quantity, params.maximum_reorder_quantity))


def build_recommendation_reason(
    reorder_quantity: int,
    risk_level: RiskLevel,
    current_level: int,
    recommended_level: int,
) -> str:
    """Pick the human-readable reason, first match wins."""
    if reorder_quantity > 0:
        if risk_level == RiskLevel.HIGH:
            return REASON_IMMINENT_STOCKOUT
        if risk_level == RiskLevel.MEDIUM:
            return REASON_BELOW_SAFETY_STOCK
        return REASON_RESTOCK
    if current_level > recommended_level * EXCESS_LEVEL_MULTIPLIER:
        return REASON_EXCESS
    return REASON_OPTIMAL


class RecommendationService:
    """
    Reorder recommendation business logic.

    Calculates per SKU:
    1. Target (recommended) stock level for the coverage horizon
    2. Reorder quantity against available inventory
    3. Risk level, projected stockout and lost sales
    """

    def __init__(self):
        self.velocity_service = get_velocity_service()

    def recommend_item(
        self,
        item: InventoryItem,
        metrics: SalesVelocityMetrics,
        params: PlanningParameters,
        now: Optional[datetime] = None,
    ) -> InventoryRecommendation:
        """
        Build the recommendation for one item.

        Args:
            item: Inventory item (stock + history)
            metrics: Velocity metrics for the same item
            params: Resolved planning parameters
            now: Reference time for the stockout date (defaults to UTC now)

        Returns:
            InventoryRecommendation
        """
        now = now or datetime.now(timezone.utc)

        # Run-level factors override the item's computed ones
        adjusted_daily_sales = (
            metrics.average_daily_sales
            * params.sales_growth_factor
            * params.seasonality_factor
        )
        has_sales = adjusted_daily_sales > 0

        if has_sales:
            current_coverage = item.quantity / adjusted_daily_sales
        else:
            current_coverage = float(NO_SALES_COVERAGE_DAYS) if item.quantity > 0 else 0.0

        recommended_level = math.ceil(adjusted_daily_sales * params.coverage_horizon_days)

        available = max(0, item.quantity - item.reserved_quantity - item.inbound_quantity)
        reorder_quantity = clamp_reorder_quantity(
            max(0, recommended_level - available),
            params,
        )

        recommended_coverage = (
            recommended_level / adjusted_daily_sales
            if has_sales
            else float(NO_SALES_COVERAGE_DAYS)
        )

        risk_level = classify_risk(current_coverage, params)

        stockout_date = None
        if has_sales and item.quantity > 0:
            stockout_date = now + timedelta(days=current_coverage)

        lost_sales = 0.0
        if has_sales:
            lost_sales = max(0.0, adjusted_daily_sales * params.target_days_of_coverage - item.quantity)

        return InventoryRecommendation(
            sku=item.sku,
            asin=item.asin,
            current_level=item.quantity,
            recommended_level=recommended_level,
            reorder_quantity=reorder_quantity,
            confidence=calculate_confidence_score(item.daily_sales_history),
            days_of_coverage_at_current_level=current_coverage,
            days_of_coverage_at_recommended_level=recommended_coverage,
            risk_level=risk_level,
            estimated_stockout_date=stockout_date,
            estimated_lost_sales=lost_sales,
            recommendation_reason=build_recommendation_reason(
                reorder_quantity, risk_level, item.quantity, recommended_level
            ),
        )

    def _recommend_isolated(
        self,
        item: InventoryItem,
        metrics: SalesVelocityMetrics,
        params: PlanningParameters,
        now: datetime,
    ) -> InventoryRecommendation:
        """Recommend one item; an unusable history is treated as missing."""
        try:
            return self.recommend_item(item, metrics, params, now)
        except (ArithmeticError, ValueError) as e:
            logger.debug("sales_history_unusable", sku=item.sku, error=str(e))
            degraded = item.without_sales_history()
            return self.recommend_item(
                degraded, self.velocity_service.analyze(degraded), params, now
            )

    def recommend(
        self,
        items: list[InventoryItem],
        params: PlanningParameters,
        metrics: Optional[list[SalesVelocityMetrics]] = None,
    ) -> list[InventoryRecommendation]:
        """
        Build recommendations for every item, in input order.

        Args:
            items: Inventory items
            params: Resolved planning parameters
            metrics: Precomputed velocity metrics; calculated when omitted

        Returns:
            One InventoryRecommendation per item
        """
        logger.info(
            "generating_inventory_recommendations",
            items=len(items),
            lead_time_days=params.lead_time_days,
            target_days_of_coverage=params.target_days_of_coverage,
        )

        metrics_by_sku = {m.sku: m for m in metrics or []}
        now = datetime.now(timezone.utc)

        recommendations = []
        for item in items:
            item_metrics = metrics_by_sku.get(item.sku) or self.velocity_service.analyze_or_degrade(item)
            recommendations.append(self._recommend_isolated(item, item_metrics, params, now))

        logger.info(
            "recommendations_calculated",
            count=len(recommendations),
            reorder_count=sum(1 for r in recommendations if r.reorder_quantity > 0),
            high_risk_count=sum(1 for r in recommendations if r.risk_level == RiskLevel.HIGH),
        )

        return recommendations


# Singleton instance
_recommendation_service: Optional[RecommendationService] = None


def get_recommendation_service() -> RecommendationService:
    """Get or create RecommendationService singleton instance."""
    global _recommendation_service
    if _recommendation_service is None:
        _recommendation_service = RecommendationService()
    return _recommendation_service

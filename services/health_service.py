"""
Inventory health service.

Classifies each item's stock health, sizes excess inventory and
storage cost, and attaches a fixed list of recommended actions.
"""

from typing import Optional
from collections import defaultdict
import math
import structlog

from config.planning import (
    LOW_COVERAGE_DAYS,
    EXCESS_COVERAGE_DAYS,
    EXCESS_TARGET_DAYS,
    OVERAGED_AGE_DAYS,
    LTSF_RISK_AGE_DAYS,
    MONTHLY_STORAGE_FEE_PER_UNIT,
)
from models.health import InventoryHealthAssessment, InventoryHealthStatus
from models.inventory import InventoryItem
from models.velocity import SalesVelocityMetrics
from services.velocity_service import get_velocity_service

logger = structlog.get_logger(__name__)


# Static, auditable action policy per status
RECOMMENDED_ACTIONS: dict[InventoryHealthStatus, tuple[str, ...]] = {
    InventoryHealthStatus.EXCESS: (
        "Consider running a promotion to reduce excess inventory.",
        "Evaluate pricing strategy to increase sales velocity.",
    ),
    InventoryHealthStatus.LOW: (
        "Restock soon to avoid stockouts.",
        "Consider expedited shipping for next inventory order.",
    ),
    InventoryHealthStatus.OUT_OF_STOCK: (
        "Restock immediately to minimize lost sales.",
        "Review purchasing process to prevent future stockouts.",
    ),
    InventoryHealthStatus.SLOW_MOVING: (
        "Consider marketing efforts to increase demand.",
        "Evaluate pricing strategy or consider liquidation.",
    ),
    InventoryHealthStatus.OVERAGED: (
        "Consider removing inventory to avoid long-term storage fees.",
        "Run promotions to clear aging inventory.",
    ),
    InventoryHealthStatus.HEALTHY: (),
    InventoryHealthStatus.STRANDED: (),
}


def classify_health(
    quantity: int,
    average_daily_sales: float,
    inventory_age_days: int,
) -> InventoryHealthStatus:
    """
    Classify health. Rules are checked in order, first match wins:

    1. no stock                  → OUT_OF_STOCK
    2. no sales                  → SLOW_MOVING
    3. older than 365 days       → OVERAGED
    4. under 15 days of coverage → LOW
    5. over 120 days of coverage → EXCESS
    6. otherwise                 → HEALTHY
    """
    if quantity == 0:
        return InventoryHealthStatus.OUT_OF_STOCK
    if average_daily_sales == 0:
        return InventoryHealthStatus.SLOW_MOVING
    if inventory_age_days > OVERAGED_AGE_DAYS:
        return InventoryHealthStatus.OVERAGED
    if average_daily_sales * LOW_COVERAGE_DAYS > quantity:
        return InventoryHealthStatus.LOW
    if average_daily_sales * EXCESS_COVERAGE_DAYS < quantity:
        return InventoryHealthStatus.EXCESS
    return InventoryHealthStatus.HEALTHY


class HealthService:
    """Inventory health business logic."""

    def __init__(self):
        self.velocity_service = get_velocity_service()

    def assess_item(
        self,
        item: InventoryItem,
        metrics: SalesVelocityMetrics,
    ) -> InventoryHealthAssessment:
        """Assess one item against its velocity metrics."""
        quantity = item.quantity
        age = item.inventory_age

        status = classify_health(quantity, metrics.average_daily_sales, age)

        sell_through = metrics.units_sold_30_days / quantity if quantity > 0 else 0.0

        target_units = math.ceil(metrics.average_daily_sales * EXCESS_TARGET_DAYS)
        excess_units = max(0, quantity - target_units)

        excess_percent = None
        excess_cost = None
        if excess_units > 0:
            excess_percent = excess_units / quantity * 100
            if item.cost is not None:
                excess_cost = excess_units * item.cost

        return InventoryHealthAssessment(
            sku=item.sku,
            asin=item.asin,
            health_status=status,
            inventory_age_days=age,
            at_risk_of_long_term_storage_fee=age > LTSF_RISK_AGE_DAYS,
            excess_inventory_percent=excess_percent,
            excess_inventory_cost=excess_cost,
            monthly_storage_cost=MONTHLY_STORAGE_FEE_PER_UNIT * quantity,
            sell_through_rate=sell_through,
            recommended_actions=list(RECOMMENDED_ACTIONS[status]),
        )

    def _assess_isolated(
        self,
        item: InventoryItem,
        metrics: SalesVelocityMetrics,
    ) -> InventoryHealthAssessment:
        """Assess one item; an unusable history is treated as missing."""
        try:
            return self.assess_item(item, metrics)
        except (ArithmeticError, ValueError) as e:
            logger.debug("sales_history_unusable", sku=item.sku, error=str(e))
            degraded = item.without_sales_history()
            return self.assess_item(degraded, self.velocity_service.analyze(degraded))

    def assess(
        self,
        items: list[InventoryItem],
        metrics: Optional[list[SalesVelocityMetrics]] = None,
    ) -> list[InventoryHealthAssessment]:
        """
        Assess every item, in input order.

        Metrics are matched to items by SKU; an item without metrics
        gets them calculated on the spot.
        """
        metrics_by_sku = {m.sku: m for m in metrics or []}

        assessments = [
            self._assess_isolated(
                item,
                metrics_by_sku.get(item.sku) or self.velocity_service.analyze_or_degrade(item),
            )
            for item in items
        ]

        counts: dict[str, int] = defaultdict(int)
        for assessment in assessments:
            counts[assessment.health_status.value] += 1

        logger.info(
            "inventory_health_assessed",
            count=len(assessments),
            by_status=dict(counts),
        )

        return assessments


# Singleton instance
_health_service: Optional[HealthService] = None


def get_health_service() -> HealthService:
    """Get or create HealthService singleton instance."""
    global _health_service
    if _health_service is None:
        _health_service = HealthService()
    return _health_service

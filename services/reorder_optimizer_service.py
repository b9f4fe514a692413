"""
Reorder optimizer service.

Re-allocates reorder quantities across a whole batch so the plan stays
inside a spend budget and an optional unit cap. Greedy, single pass:
the most urgent items are funded first.
"""

from typing import Optional
import math
import structlog

from config.planning import UNKNOWN_UNIT_COST, RISK_PRIORITY
from models.inventory import InventoryItem
from models.recommendation import InventoryRecommendation

logger = structlog.get_logger(__name__)


def resolve_unit_cost(item: Optional[InventoryItem]) -> float:
    """Unit cost for budgeting. Unknown cost uses the sentinel rate."""
    if item is None or item.cost is None:
        return UNKNOWN_UNIT_COST
    return item.cost


def priority_key(recommendation: InventoryRecommendation) -> tuple[int, float]:
    """Sort key: risk severity first, then fewest days of coverage."""
    return (
        RISK_PRIORITY[recommendation.risk_level.value],
        recommendation.days_of_coverage_at_current_level,
    )


def calculate_spend(
    recommendations: list[InventoryRecommendation],
    items: list[InventoryItem],
) -> float:
    """Total cost of a set of reorders."""
    items_by_sku = {item.sku: item for item in items}
    return sum(
        r.reorder_quantity * resolve_unit_cost(items_by_sku.get(r.sku))
        for r in recommendations
    )


class ReorderOptimizerService:
    """Budget-constrained reorder allocation."""

    def optimize_for_budget(
        self,
        recommendations: list[InventoryRecommendation],
        items: list[InventoryItem],
        max_budget: float,
        max_units: Optional[int] = None,
    ) -> list[InventoryRecommendation]:
        """
        Fit reorder quantities inside a budget (and unit cap).

        Each item in priority order is either kept in full, reduced to
        what the remaining resources can buy, or zeroed. Input records
        are never modified; adjusted ones are copies.

        Args:
            recommendations: Per-item recommendations
            items: Inventory items, used for unit cost
            max_budget: Spend limit
            max_units: Unit limit (None = unbounded)

        Returns:
            Recommendations in priority order (not input order)
        """
        items_by_sku = {item.sku: item for item in items}

        remaining_budget = float(max_budget)
        remaining_units = math.inf if max_units is None else max_units

        optimized = []
        reduced_count = 0
        zeroed_count = 0

        for recommendation in sorted(recommendations, key=priority_key):
            quantity = recommendation.reorder_quantity
            unit_cost = resolve_unit_cost(items_by_sku.get(recommendation.sku))
            total_cost = unit_cost * quantity

            if total_cost <= remaining_budget and quantity <= remaining_units:
                remaining_budget -= total_cost
                remaining_units -= quantity
                optimized.append(recommendation)
                continue

            affordable = 0
            if remaining_budget > 0 and remaining_units > 0:
                affordable = min(math.floor(remaining_budget / unit_cost), remaining_units)
                # Float division can land one unit over the remaining budget
                while affordable > 0 and affordable * unit_cost > remaining_budget:
                    affordable -= 1

            if affordable > 0:
                remaining_budget -= affordable * unit_cost
                remaining_units -= affordable
                reduced_count += 1
                optimized.append(recommendation.model_copy(update={
                    "reorder_quantity": int(affordable),
                    "recommendation_reason": (
                        f"Reduced order quantity from {quantity} to {int(affordable)} "
                        "due to budget constraints."
                    ),
                }))
            else:
                zeroed_count += 1
                optimized.append(recommendation.model_copy(update={
                    "reorder_quantity": 0,
                    "recommendation_reason": "No reorder due to budget constraints.",
                }))

        logger.info(
            "reorder_budget_applied",
            items=len(optimized),
            max_budget=max_budget,
            max_units=max_units,
            remaining_budget=round(remaining_budget, 2),
            reduced=reduced_count,
            zeroed=zeroed_count,
        )

        return optimized


# Singleton instance
_reorder_optimizer_service: Optional[ReorderOptimizerService] = None


def get_reorder_optimizer_service() -> ReorderOptimizerService:
    """Get or create ReorderOptimizerService singleton instance."""
    global _reorder_optimizer_service
    if _reorder_optimizer_service is None:
        _reorder_optimizer_service = ReorderOptimizerService()
    return _reorder_optimizer_service

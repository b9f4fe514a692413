"""
Inventory planning service: entry points of the planning engine.

Validates input, fetches inventory through the configured fetcher,
and runs the per-item components (velocity, recommendation, health,
fees) before the batch-wide budget optimizer.

Error policy:
    - invalid input is rejected before anything is fetched
    - a failing fetcher aborts the call with UpstreamUnavailableError
    - per-item gaps (no cost, no history) are absorbed into the results
"""

from typing import Optional, Union
import structlog

from config.settings import settings
from exceptions import (
    AppError,
    ValidationError,
    InvalidPlanningParametersError,
    InvalidSKUListError,
    InvalidDayRangeError,
    UpstreamUnavailableError,
)
from models.fees import FbaFeeEstimate
from models.health import InventoryHealthAssessment, InventoryHealthStatus
from models.inventory import InventoryItem
from models.planning import PlanningParameters, PlanningParametersInput
from models.recommendation import InventoryRecommendation, ReorderPlan
from models.velocity import SalesVelocityMetrics
from services.velocity_service import get_velocity_service
from services.recommendation_service import get_recommendation_service
from services.health_service import get_health_service
from services.fee_service import get_fee_service
from services.reorder_optimizer_service import (
    get_reorder_optimizer_service,
    calculate_spend,
)
from services.inventory_data_service import InventoryFetcher, get_inventory_data_service

logger = structlog.get_logger(__name__)


ParametersArg = Optional[Union[PlanningParameters, PlanningParametersInput]]


class InventoryPlanningService:
    """
    Inventory planning facade.

    Every entry point accepts a list of SKUs; an empty list means
    "all known items" and is resolved by the fetcher.
    """

    def __init__(
        self,
        fetcher: Optional[InventoryFetcher] = None,
        default_params: Optional[PlanningParameters] = None,
    ):
        self._fetcher = fetcher
        self.default_params = default_params or PlanningParameters.from_settings(settings)

        self.velocity_service = get_velocity_service()
        self.recommendation_service = get_recommendation_service()
        self.health_service = get_health_service()
        self.fee_service = get_fee_service()
        self.optimizer = get_reorder_optimizer_service()

    # ===================
    # INPUT
    # ===================

    def resolve_parameters(self, params: ParametersArg = None) -> PlanningParameters:
        """
        Resolve a run's parameters and validate them.

        Raises:
            InvalidPlanningParametersError: If any field is out of range
        """
        if isinstance(params, PlanningParameters):
            resolved = params
        else:
            resolved = PlanningParameters.resolve(self.default_params, params)

        errors = resolved.range_errors()
        if errors:
            logger.warning("invalid_planning_parameters", errors=errors)
            raise InvalidPlanningParametersError(errors)

        return resolved

    def _normalize_skus(self, operation: str, skus: Optional[list[str]]) -> list[str]:
        """Strip and de-duplicate SKUs, keeping first-seen order."""
        skus = list(skus or [])

        invalid = [s for s in skus if not isinstance(s, str) or not s.strip()]
        if invalid:
            raise InvalidSKUListError(operation, invalid)

        return list(dict.fromkeys(s.strip() for s in skus))

    # ===================
    # DATA ACCESS
    # ===================

    def _fetch(self, operation: str, skus: list[str]) -> list[InventoryItem]:
        """
        Fetch items, wrapping any fetcher failure.

        Raises:
            UpstreamUnavailableError: If the fetcher (or its client) fails
        """
        try:
            fetcher = self._fetcher or get_inventory_data_service().fetch_inventory_items
            return list(fetcher(skus))

        except Exception as e:
            message = e.message if isinstance(e, AppError) else str(e)
            logger.error(
                "inventory_fetch_failed",
                operation=operation,
                error=message,
                error_type=type(e).__name__,
            )
            raise UpstreamUnavailableError(operation, message) from e

    # ===================
    # ENTRY POINTS
    # ===================

    def get_sales_velocity_metrics(
        self,
        skus: Optional[list[str]] = None,
        day_range: Optional[int] = None,
    ) -> list[SalesVelocityMetrics]:
        """
        Sales velocity metrics per item.

        Args:
            skus: SKUs to analyse (empty = all)
            day_range: Days of history to consider (default from settings)

        Raises:
            InvalidDayRangeError: If day_range < 1
            UpstreamUnavailableError: If inventory cannot be fetched
        """
        operation = "get sales velocity metrics"

        if day_range is None:
            day_range = settings.velocity_day_range
        if day_range < 1:
            raise InvalidDayRangeError(day_range)

        skus = self._normalize_skus(operation, skus)
        items = self._fetch(operation, skus)

        return self.velocity_service.analyze_all(items, day_range)

    def get_inventory_recommendations(
        self,
        skus: Optional[list[str]] = None,
        params: ParametersArg = None,
    ) -> list[InventoryRecommendation]:
        """
        Reorder recommendations per item, without budget optimization.

        Raises:
            InvalidPlanningParametersError: If params are out of range
            UpstreamUnavailableError: If inventory cannot be fetched
        """
        operation = "get inventory recommendations"

        resolved = self.resolve_parameters(params)
        skus = self._normalize_skus(operation, skus)
        items = self._fetch(operation, skus)

        return self._recommend(items, resolved)

    def assess_inventory_health(
        self,
        skus: Optional[list[str]] = None,
    ) -> list[InventoryHealthAssessment]:
        """Health assessment per item."""
        operation = "assess inventory health"

        skus = self._normalize_skus(operation, skus)
        items = self._fetch(operation, skus)

        return self._assess(items)

    def get_fba_fee_estimates(
        self,
        skus: Optional[list[str]] = None,
    ) -> list[FbaFeeEstimate]:
        """Simplified per-unit FBA fee estimate per item."""
        operation = "get FBA fee estimates"

        skus = self._normalize_skus(operation, skus)
        items = self._fetch(operation, skus)

        return self.fee_service.estimate_all(items)

    def get_optimal_reorder_plan(
        self,
        params: ParametersArg = None,
    ) -> list[InventoryRecommendation]:
        """
        Recommendations for every item, fitted to the budget when one applies.

        With a budget the result is in priority order; otherwise it
        follows the fetcher's order.
        """
        plan = self.build_reorder_plan(params)
        return plan.recommendations

    def build_reorder_plan(self, params: ParametersArg = None) -> ReorderPlan:
        """Reorder plan over all items, with unit and spend totals."""
        operation = "get optimal reorder plan"

        resolved = self.resolve_parameters(params)
        items = self._fetch(operation, [])

        recommendations = self._recommend(items, resolved)

        budget_applied = resolved.budget_limited
        if budget_applied:
            recommendations = self.optimizer.optimize_for_budget(
                recommendations,
                items,
                resolved.max_budget,
                resolved.max_units,
            )

        return ReorderPlan(
            recommendations=recommendations,
            budget_applied=budget_applied,
            total_units=sum(r.reorder_quantity for r in recommendations),
            estimated_spend=calculate_spend(recommendations, items),
            max_budget=resolved.max_budget,
            max_units=resolved.max_units,
        )

    # ===================
    # REPORTS
    # ===================

    def get_low_inventory_report(
        self,
        threshold_days: Optional[float] = None,
    ) -> list[InventoryRecommendation]:
        """
        Items with fewer than `threshold_days` of coverage at current stock.

        Raises:
            ValidationError: If threshold_days is negative
        """
        operation = "get low inventory report"

        if threshold_days is None:
            threshold_days = settings.low_inventory_threshold_days
        if threshold_days < 0:
            raise ValidationError(
                message="Coverage threshold must be zero or more days",
                details={"threshold_days": threshold_days},
            )

        params = self.resolve_parameters()
        items = self._fetch(operation, [])

        low = [
            r for r in self._recommend(items, params)
            if r.days_of_coverage_at_current_level < threshold_days
        ]

        logger.info(
            "low_inventory_report_generated",
            threshold_days=threshold_days,
            items=len(items),
            low_count=len(low),
        )

        return low

    def get_excess_inventory_report(self) -> list[InventoryHealthAssessment]:
        """Items whose health status is EXCESS."""
        operation = "get excess inventory report"

        items = self._fetch(operation, [])

        excess = [
            a for a in self._assess(items)
            if a.health_status == InventoryHealthStatus.EXCESS
        ]

        logger.info(
            "excess_inventory_report_generated",
            items=len(items),
            excess_count=len(excess),
        )

        return excess

    # ===================
    # HELPERS
    # ===================

    def _recommend(
        self,
        items: list[InventoryItem],
        params: PlanningParameters,
    ) -> list[InventoryRecommendation]:
        metrics = self.velocity_service.analyze_all(items, settings.velocity_day_range)
        return self.recommendation_service.recommend(items, params, metrics)

    def _assess(self, items: list[InventoryItem]) -> list[InventoryHealthAssessment]:
        metrics = self.velocity_service.analyze_all(items, settings.velocity_day_range)
        return self.health_service.assess(items, metrics)


# Singleton instance
_planning_service: Optional[InventoryPlanningService] = None


def get_planning_service() -> InventoryPlanningService:
    """Get or create InventoryPlanningService singleton instance."""
    global _planning_service
    if _planning_service is None:
        _planning_service = InventoryPlanningService()
    return _planning_service

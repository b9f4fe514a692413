"""
Inventory planning API routes.

Thin wrappers over InventoryPlanningService. SKUs are passed as
repeated `sku` query parameters; none means all items.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.fees import FbaFeeEstimate
from models.health import InventoryHealthAssessment
from models.planning import PlanningParametersInput
from models.recommendation import InventoryRecommendation, ReorderPlan
from models.velocity import SalesVelocityMetrics
from services.planning_service import get_planning_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# PER-SKU ROUTES
# ===================

@router.get("/velocity", response_model=list[SalesVelocityMetrics])
async def get_sales_velocity(
    sku: list[str] = Query(default=[], description="SKUs to analyse (none = all)"),
    day_range: Optional[int] = Query(None, description="Days of sales history"),
):
    """
    Get sales velocity metrics.

    Rolling 7/30/60/90-day sums, trend, seasonality and growth
    factors, and 30/60/90-day forecasts per SKU.
    """
    try:
        service = get_planning_service()
        return service.get_sales_velocity_metrics(sku, day_range)

    except Exception as e:
        return handle_error(e)


@router.get("/recommendations", response_model=list[InventoryRecommendation])
async def get_recommendations(
    sku: list[str] = Query(default=[], description="SKUs to plan (none = all)"),
):
    """
    Get reorder recommendations with the configured default parameters.

    No budget is applied here; use POST /reorder-plan for that.
    POST the same route to override planning parameters.
    """
    try:
        service = get_planning_service()
        return service.get_inventory_recommendations(sku)

    except Exception as e:
        return handle_error(e)


@router.post("/recommendations", response_model=list[InventoryRecommendation])
async def create_recommendations(
    params: Optional[PlanningParametersInput] = None,
    sku: list[str] = Query(default=[], description="SKUs to plan (none = all)"),
):
    """
    Get reorder recommendations with parameter overrides.

    Unset parameters fall back to configured defaults. Budget fields
    are accepted but only applied by POST /reorder-plan.
    """
    try:
        service = get_planning_service()
        return service.get_inventory_recommendations(sku, params)

    except Exception as e:
        return handle_error(e)


@router.get("/health", response_model=list[InventoryHealthAssessment])
async def get_inventory_health(
    sku: list[str] = Query(default=[], description="SKUs to assess (none = all)"),
):
    """Get inventory health assessments."""
    try:
        service = get_planning_service()
        return service.assess_inventory_health(sku)

    except Exception as e:
        return handle_error(e)


@router.get("/fees", response_model=list[FbaFeeEstimate])
async def get_fee_estimates(
    sku: list[str] = Query(default=[], description="SKUs to estimate (none = all)"),
):
    """Get simplified per-unit FBA fee estimates."""
    try:
        service = get_planning_service()
        return service.get_fba_fee_estimates(sku)

    except Exception as e:
        return handle_error(e)


# ===================
# PLAN ROUTES
# ===================

@router.post("/reorder-plan", response_model=ReorderPlan)
async def create_reorder_plan(params: Optional[PlanningParametersInput] = None):
    """
    Build a reorder plan over all items.

    Unset parameters fall back to configured defaults. With
    apply_budget_constraints and max_budget set, quantities are
    fitted to the budget, most urgent items first.
    """
    try:
        service = get_planning_service()
        plan = service.build_reorder_plan(params)

        logger.info(
            "reorder_plan_built",
            items=len(plan.recommendations),
            total_units=plan.total_units,
            budget_applied=plan.budget_applied,
        )

        return plan

    except Exception as e:
        return handle_error(e)


# ===================
# REPORT ROUTES
# ===================

@router.get("/reports/low-inventory", response_model=list[InventoryRecommendation])
async def get_low_inventory_report(
    threshold_days: Optional[float] = Query(None, description="Coverage days threshold"),
):
    """Items with fewer days of coverage than the threshold."""
    try:
        service = get_planning_service()
        return service.get_low_inventory_report(threshold_days)

    except Exception as e:
        return handle_error(e)


@router.get("/reports/excess-inventory", response_model=list[InventoryHealthAssessment])
async def get_excess_inventory_report():
    """Items currently holding excess inventory."""
    try:
        service = get_planning_service()
        return service.get_excess_inventory_report()

    except Exception as e:
        return handle_error(e)

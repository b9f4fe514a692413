"""
Business logic services.

Each service handles one planning component; InventoryPlanningService
ties them together behind the public entry points.
"""

from services.velocity_service import VelocityService, get_velocity_service
from services.recommendation_service import RecommendationService, get_recommendation_service
from services.health_service import HealthService, get_health_service
from services.fee_service import FeeService, get_fee_service
from services.reorder_optimizer_service import (
    ReorderOptimizerService,
    get_reorder_optimizer_service,
)
from services.inventory_data_service import (
    InventoryFetcher,
    InventoryDataService,
    get_inventory_data_service,
)
from services.planning_service import InventoryPlanningService, get_planning_service

__all__ = [
    "VelocityService",
    "get_velocity_service",
    "RecommendationService",
    "get_recommendation_service",
    "HealthService",
    "get_health_service",
    "FeeService",
    "get_fee_service",
    "ReorderOptimizerService",
    "get_reorder_optimizer_service",
    "InventoryFetcher",
    "InventoryDataService",
    "get_inventory_data_service",
    "InventoryPlanningService",
    "get_planning_service",
]

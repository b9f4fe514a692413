"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
    ResultSchema,
)
from models.inventory import (
    FulfillmentChannel,
    InventoryItem,
)
from models.planning import (
    PlanningParameters,
    PlanningParametersInput,
)
from models.velocity import (
    SalesTrend,
    SalesVelocityMetrics,
)
from models.recommendation import (
    RiskLevel,
    InventoryRecommendation,
    ReorderPlan,
)
from models.health import (
    InventoryHealthStatus,
    InventoryHealthAssessment,
)
from models.fees import (
    FbaFeeEstimate,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",
    "ResultSchema",

    # Inventory
    "FulfillmentChannel",
    "InventoryItem",

    # Planning
    "PlanningParameters",
    "PlanningParametersInput",

    # Velocity
    "SalesTrend",
    "SalesVelocityMetrics",

    # Recommendations
    "RiskLevel",
    "InventoryRecommendation",
    "ReorderPlan",

    # Health
    "InventoryHealthStatus",
    "InventoryHealthAssessment",

    # Fees
    "FbaFeeEstimate",
]

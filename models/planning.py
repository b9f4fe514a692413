"""
Planning parameter schemas.

One PlanningParameters set applies to a whole planning run. Callers
supply a partial PlanningParametersInput; anything left unset falls
back to the configured defaults.
"""

from pydantic import Field
from typing import Optional
import math

from models.base import BaseSchema, FrozenSchema


class PlanningParametersInput(BaseSchema):
    """Caller-supplied overrides. Unset fields use configured defaults."""

    target_days_of_coverage: Optional[int] = None
    safety_stock_days: Optional[int] = None
    minimum_reorder_quantity: Optional[int] = None
    maximum_reorder_quantity: Optional[int] = None
    lead_time_days: Optional[int] = None
    seasonality_factor: Optional[float] = Field(
        default=None,
        description="Blanket seasonal multiplier applied to every SKU"
    )
    sales_growth_factor: Optional[float] = Field(
        default=None,
        description="Blanket growth multiplier applied to every SKU"
    )
    apply_budget_constraints: Optional[bool] = None
    max_budget: Optional[float] = Field(default=None, description="Spend cap; unset = unbounded")
    max_units: Optional[int] = Field(default=None, description="Unit cap; unset = unbounded")


class PlanningParameters(FrozenSchema):
    """Fully resolved parameters for a planning run."""

    target_days_of_coverage: int = 60
    safety_stock_days: int = 14
    minimum_reorder_quantity: int = 1
    maximum_reorder_quantity: int = 10000
    lead_time_days: int = 30
    seasonality_factor: float = 1.0
    sales_growth_factor: float = 1.0
    apply_budget_constraints: bool = False
    max_budget: Optional[float] = None
    max_units: Optional[int] = None

    @classmethod
    def resolve(
        cls,
        defaults: "PlanningParameters",
        overrides: Optional[PlanningParametersInput] = None,
    ) -> "PlanningParameters":
        """Merge caller overrides on top of a default parameter set."""
        if overrides is None:
            return defaults
        return defaults.model_copy(update=overrides.model_dump(exclude_none=True))

    @classmethod
    def from_settings(
        cls,
        settings,
        overrides: Optional[PlanningParametersInput] = None,
    ) -> "PlanningParameters":
        """Configured defaults with caller overrides applied."""
        defaults = cls(
            target_days_of_coverage=settings.default_target_days_of_coverage,
            safety_stock_days=settings.default_safety_stock_days,
            minimum_reorder_quantity=settings.default_minimum_reorder_quantity,
            maximum_reorder_quantity=settings.default_maximum_reorder_quantity,
            lead_time_days=settings.default_lead_time_days,
        )
        return cls.resolve(defaults, overrides)

    @property
    def coverage_horizon_days(self) -> int:
        """Days of demand the recommended level must cover."""
        return self.target_days_of_coverage + self.lead_time_days + self.safety_stock_days

    @property
    def budget_limited(self) -> bool:
        """True when the optimizer should run for this parameter set."""
        return (
            self.apply_budget_constraints
            and self.max_budget is not None
            and math.isfinite(self.max_budget)
        )

    def range_errors(self) -> list[dict]:
        """
        List every field outside its allowed range.

        Day and quantity fields must be >= 0, factors > 0, caps >= 0.
        Returns an empty list when the set is valid.
        """
        errors = []

        for field in (
            "target_days_of_coverage",
            "safety_stock_days",
            "minimum_reorder_quantity",
            "maximum_reorder_quantity",
            "lead_time_days",
        ):
            value = getattr(self, field)
            if value < 0:
                errors.append({"field": field, "value": value, "rule": ">= 0"})

        for field in ("seasonality_factor", "sales_growth_factor"):
            value = getattr(self, field)
            if not value > 0 or not math.isfinite(value):
                errors.append({"field": field, "value": value, "rule": "> 0"})

        for field in ("max_budget", "max_units"):
            value = getattr(self, field)
            if value is not None and value < 0:
                errors.append({"field": field, "value": value, "rule": ">= 0"})

        return errors

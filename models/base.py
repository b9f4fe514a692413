"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class FrozenSchema(BaseSchema):
    """
    Base for immutable records.

    Inputs handed to the engine and every derived result are frozen;
    a changed value means a new record via model_copy(update=...).
    """
    model_config = ConfigDict(frozen=True)


class ResultSchema(FrozenSchema):
    """Base for computed results. Non-finite numbers are rejected."""
    model_config = ConfigDict(allow_inf_nan=False)

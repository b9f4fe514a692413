"""
FBA fee estimate schemas.
"""

from pydantic import Field
from typing import Optional

from models.base import ResultSchema


class FbaFeeEstimate(ResultSchema):
    """Simplified per-unit fulfillment and storage cost estimate."""

    sku: str
    asin: Optional[str] = None

    fulfillment_fee_per_unit: float
    monthly_storage_fee_per_unit: float
    long_term_storage_fee_per_unit: Optional[float] = Field(
        default=None,
        description="Only set for inventory older than a year"
    )
    estimated_storage_days: int
    total_fba_fees_per_unit: float
    referral_fee_percent: float
    currency_code: str

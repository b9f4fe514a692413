"""
FBA fee estimate service.

A simplified, table-driven per-unit fee estimate. No external fee
API is called; rates live in config.planning.
"""

from typing import Optional
import structlog

from config.settings import settings
from config.planning import (
    FULFILLMENT_FEE_PER_UNIT,
    MONTHLY_STORAGE_FEE_PER_UNIT,
    LONG_TERM_STORAGE_FEE_PER_UNIT,
    LONG_TERM_STORAGE_AGE_DAYS,
    REFERRAL_FEE_PERCENT,
    FEE_NO_HISTORY_DAILY_SALES,
    MAX_STORAGE_DAYS,
)
from models.fees import FbaFeeEstimate
from models.inventory import InventoryItem
from services.velocity_service import round_units

logger = structlog.get_logger(__name__)


def estimate_storage_days(item: InventoryItem) -> int:
    """
    Days the current stock will sit in storage, capped at a year.

    Uses the mean of the raw sales history (0.1/day when there is none).
    """
    history = item.daily_sales_history
    average_daily = sum(history) / len(history) if history else FEE_NO_HISTORY_DAILY_SALES

    if average_daily <= 0:
        return MAX_STORAGE_DAYS
    return min(MAX_STORAGE_DAYS, round_units(item.quantity / average_daily))


class FeeService:
    """Per-unit fulfillment and storage fee estimates."""

    def __init__(self, currency_code: Optional[str] = None):
        self.currency_code = currency_code or settings.default_currency_code

    def estimate(self, item: InventoryItem) -> FbaFeeEstimate:
        storage_days = estimate_storage_days(item)

        long_term_fee = None
        if item.inventory_age > LONG_TERM_STORAGE_AGE_DAYS:
            long_term_fee = LONG_TERM_STORAGE_FEE_PER_UNIT

        total = (
            FULFILLMENT_FEE_PER_UNIT
            + MONTHLY_STORAGE_FEE_PER_UNIT * storage_days / 30
            + (long_term_fee or 0.0)
        )

        return FbaFeeEstimate(
            sku=item.sku,
            asin=item.asin,
            fulfillment_fee_per_unit=FULFILLMENT_FEE_PER_UNIT,
            monthly_storage_fee_per_unit=MONTHLY_STORAGE_FEE_PER_UNIT,
            long_term_storage_fee_per_unit=long_term_fee,
            estimated_storage_days=storage_days,
            total_fba_fees_per_unit=total,
            referral_fee_percent=REFERRAL_FEE_PERCENT,
            currency_code=self.currency_code,
        )

    def estimate_all(self, items: list[InventoryItem]) -> list[FbaFeeEstimate]:
        """Fee estimates for every item, in input order."""
        estimates = [self.estimate(item) for item in items]

        logger.info(
            "fba_fees_estimated",
            count=len(estimates),
            long_term_count=sum(1 for e in estimates if e.long_term_storage_fee_per_unit),
        )

        return estimates


# Singleton instance
_fee_service: Optional[FeeService] = None


def get_fee_service() -> FeeService:
    """Get or create FeeService singleton instance."""
    global _fee_service
    if _fee_service is None:
        _fee_service = FeeService()
    return _fee_service

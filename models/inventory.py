"""
Inventory item schema consumed by the planning engine.

Items are owned by the caller (or the inventory data fetcher) and are
read-only to every planning component.
"""

from pydantic import Field
from typing import Annotated, Any, Optional
from enum import Enum
import math

from models.base import FrozenSchema


class FulfillmentChannel(str, Enum):
    """Who ships the item to the customer."""
    AMAZON = "AMAZON"
    MERCHANT = "MERCHANT"


def _positive_or_none(value: Any) -> Optional[float]:
    """Money fields: anything missing, non-positive or non-finite is unknown."""
    if value is None:
        return None
    amount = float(value)
    return amount if math.isfinite(amount) and amount > 0 else None


def _units_sold(value: Any) -> float:
    """History entries: negative or non-finite counts become 0."""
    units = float(value)
    return units if math.isfinite(units) and units > 0 else 0.0


# One day of sales
DailyUnits = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class InventoryItem(FrozenSchema):
    """Current stock and sales history for a single SKU."""

    sku: str = Field(..., min_length=1)
    asin: Optional[str] = None
    product_name: Optional[str] = None
    fulfilled_by: FulfillmentChannel = FulfillmentChannel.MERCHANT

    # Stock
    quantity: int = Field(..., ge=0, description="On-hand units")
    reserved_quantity: int = Field(default=0, ge=0)
    inbound_quantity: int = Field(default=0, ge=0)

    # Most-recent-first, one entry per day
    daily_sales_history: list[DailyUnits] = Field(default_factory=list)

    # Money (unknown when None)
    price: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    cost: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)

    inventory_age: int = Field(default=0, ge=0, description="Age of inventory in days")

    @classmethod
    def from_record(cls, record: dict) -> "InventoryItem":
        """
        Build an item from a raw data row.

        This is the single place where item defaults are resolved:
            - missing quantities and age → 0
            - missing history → []; None entries dropped, negative or
              non-finite entries → 0
            - missing, non-positive or non-finite price/cost → None
            - fulfillment channel "AMAZON"/"AFN" → AMAZON, anything else → MERCHANT

        Raises:
            ValueError: If the row cannot be turned into a valid item
                (no SKU, negative stock, non-numeric values)
        """
        history = [
            _units_sold(units)
            for units in (record.get("daily_sales_history") or [])
            if units is not None
        ]

        channel = str(record.get("fulfilled_by") or "").upper()

        return cls(
            sku=str(record.get("sku") or ""),
            asin=record.get("asin") or None,
            product_name=record.get("product_name") or None,
            fulfilled_by=(
                FulfillmentChannel.AMAZON
                if channel in ("AMAZON", "AFN")
                else FulfillmentChannel.MERCHANT
            ),
            quantity=int(record.get("quantity") or 0),
            reserved_quantity=int(record.get("reserved_quantity") or 0),
            inbound_quantity=int(record.get("inbound_quantity") or 0),
            daily_sales_history=history,
            price=_positive_or_none(record.get("price")),
            cost=_positive_or_none(record.get("cost")),
            inventory_age=int(record.get("inventory_age") or 0),
        )

    def without_sales_history(self) -> "InventoryItem":
        """Copy of the item with its history treated as missing."""
        return self.model_copy(update={"daily_sales_history": []})

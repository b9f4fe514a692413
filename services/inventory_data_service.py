"""
Inventory data service: the default inventory fetcher.

Reads per-SKU stock and daily sales history from Supabase and turns
each row into an InventoryItem. Any callable with the same signature
can stand in for it (see InventoryFetcher).
"""

from typing import Callable, Optional
import structlog

from config import get_supabase_client, settings
from exceptions import DatabaseError
from models.inventory import InventoryItem

logger = structlog.get_logger(__name__)


# fetch(skus) -> items; an empty SKU list means every known item
InventoryFetcher = Callable[[list[str]], list[InventoryItem]]

INVENTORY_COLUMNS = (
    "sku, asin, product_name, quantity, reserved_quantity, inbound_quantity, "
    "daily_sales_history, price, cost, inventory_age, fulfilled_by"
)


class InventoryDataService:
    """
    Inventory data access.

    Read-only; the planning engine never writes inventory back.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = settings.inventory_table

    def fetch_inventory_items(self, skus: list[str]) -> list[InventoryItem]:
        """
        Fetch inventory items by SKU.

        Args:
            skus: SKUs to fetch (empty = all rows)

        Returns:
            One item per valid row. Unknown SKUs are simply absent.

        Raises:
            DatabaseError: If the query fails
        """
        logger.debug("fetching_inventory_items", sku_count=len(skus))

        try:
            query = self.db.table(self.table).select(INVENTORY_COLUMNS)

            if skus:
                query = query.in_("sku", skus)

            result = query.order("sku").execute()

        except Exception as e:
            logger.error("fetch_inventory_items_failed", error=str(e))
            raise DatabaseError("select", str(e))

        items = []
        for row in result.data or []:
            try:
                items.append(InventoryItem.from_record(row))
            except (ValueError, TypeError) as e:
                # One bad row never fails the batch
                logger.warning(
                    "inventory_row_skipped",
                    sku=row.get("sku"),
                    error=str(e),
                )

        logger.info(
            "inventory_items_fetched",
            requested=len(skus),
            returned=len(items),
        )

        return items


# Singleton instance
_inventory_data_service: Optional[InventoryDataService] = None


def get_inventory_data_service() -> InventoryDataService:
    """Get or create InventoryDataService singleton instance."""
    global _inventory_data_service
    if _inventory_data_service is None:
        _inventory_data_service = InventoryDataService()
    return _inventory_data_service

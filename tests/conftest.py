"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import patch
from typing import Generator

from models.inventory import InventoryItem
from models.planning import PlanningParameters


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data or []
        self._count = count

    def select(self, *args, **kwargs):
        return self

    def in_(self, column, values):
        self._data = [row for row in self._data if row.get(column) in values]
        return self

    def eq(self, column, value):
        self._data = [row for row in self._data if row.get(column) == value]
        return self

    def order(self, column, **kwargs):
        return self

    def execute(self) -> MockSupabaseResponse:
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data or []
        self._count = count

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self._data.copy(), self._count)


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables = {}

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count}

    def table(self, name: str) -> MockSupabaseTable:
        config = self._tables.get(name, {"data": [], "count": None})
        return MockSupabaseTable(config["data"], config["count"])


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("inventory_items", [
                {"sku": "SKU-1", "quantity": 10, ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """Patch the Supabase client used by the inventory data service."""
    import services.inventory_data_service as module
    module._inventory_data_service = None

    with patch("services.inventory_data_service.get_supabase_client", return_value=mock_supabase):
        yield mock_supabase

    module._inventory_data_service = None


# ===================
# SAMPLE DATA
# ===================

def make_item(
    sku: str = "SKU-1",
    quantity: int = 100,
    history: list = None,
    **overrides,
) -> InventoryItem:
    """Build an InventoryItem with sensible defaults."""
    return InventoryItem(
        sku=sku,
        asin=overrides.pop("asin", f"ASIN-{sku}"),
        quantity=quantity,
        daily_sales_history=history if history is not None else [],
        **overrides,
    )


@pytest.fixture
def item_factory():
    """Factory fixture for InventoryItem."""
    return make_item


@pytest.fixture
def steady_seller() -> InventoryItem:
    """90 days of 10 units/day, 100 on hand."""
    return make_item("STEADY", quantity=100, history=[10.0] * 90, cost=5.0)


@pytest.fixture
def empty_item() -> InventoryItem:
    """No stock, no sales history."""
    return make_item("EMPTY", quantity=0, history=[])


@pytest.fixture
def default_params() -> PlanningParameters:
    """Planning parameters with every default."""
    return PlanningParameters()


# ===================
# PLANNING SERVICE
# ===================

class InMemoryFetcher:
    """Inventory fetcher over a fixed list of items; records calls."""

    def __init__(self, items: list[InventoryItem]):
        self.items = items
        self.calls: list[list[str]] = []

    def __call__(self, skus: list[str]) -> list[InventoryItem]:
        self.calls.append(list(skus))
        if not skus:
            return list(self.items)
        return [item for item in self.items if item.sku in skus]


@pytest.fixture
def sample_inventory(item_factory) -> list[InventoryItem]:
    """A small mixed catalogue."""
    return [
        # 10/day, 100 on hand: high risk, low health
        item_factory("FAST", quantity=100, history=[10.0] * 90, cost=5.0),
        # 1/day, 500 on hand: excess
        item_factory("SLOW", quantity=500, history=[1.0] * 90, cost=2.0),
        # No sales at all
        item_factory("DEAD", quantity=40, history=[0.0] * 90),
        # Out of stock, no history
        item_factory("GONE", quantity=0, history=[]),
    ]


@pytest.fixture
def in_memory_fetcher(sample_inventory) -> InMemoryFetcher:
    return InMemoryFetcher(sample_inventory)


@pytest.fixture
def planning_service(in_memory_fetcher):
    """InventoryPlanningService backed by the in-memory fetcher."""
    from services.planning_service import InventoryPlanningService
    return InventoryPlanningService(fetcher=in_memory_fetcher)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(planning_service):
    """
    FastAPI test client with the planning service backed by sample data.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/planning/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    with patch("routes.planning.get_planning_service", return_value=planning_service):
        yield TestClient(app)

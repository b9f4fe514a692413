"""
Unit tests for the planning API routes.
"""

from unittest.mock import patch


# ===================
# PER-SKU ROUTES
# ===================

class TestVelocityRoute:

    def test_all_items(self, test_client):
        response = test_client.get("/api/planning/velocity")

        assert response.status_code == 200
        assert [m["sku"] for m in response.json()] == ["FAST", "SLOW", "DEAD", "GONE"]

    def test_repeated_sku_params(self, test_client):
        response = test_client.get("/api/planning/velocity?sku=FAST&sku=DEAD")

        assert response.status_code == 200
        assert [m["sku"] for m in response.json()] == ["FAST", "DEAD"]

    def test_invalid_day_range(self, test_client):
        response = test_client.get("/api/planning/velocity?day_range=0")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_DAY_RANGE"


class TestRecommendationsRoute:

    def test_recommendation_fields(self, test_client):
        response = test_client.get("/api/planning/recommendations?sku=FAST")

        assert response.status_code == 200
        [rec] = response.json()
        assert rec["reorder_quantity"] == 940
        assert rec["risk_level"] == "high"
        assert rec["estimated_stockout_date"] is not None

    def test_blank_sku(self, test_client):
        response = test_client.get("/api/planning/recommendations?sku=")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_SKU_LIST"

    def test_post_with_parameter_overrides(self, test_client):
        response = test_client.post(
            "/api/planning/recommendations?sku=FAST",
            json={"maximum_reorder_quantity": 300},
        )

        assert response.status_code == 200
        [rec] = response.json()
        assert rec["reorder_quantity"] == 300

    def test_post_without_body_uses_defaults(self, test_client):
        response = test_client.post("/api/planning/recommendations?sku=FAST")

        assert response.status_code == 200
        assert response.json()[0]["reorder_quantity"] == 940

    def test_post_invalid_parameters(self, test_client):
        response = test_client.post("/api/planning/recommendations", json={"seasonality_factor": 0})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_PLANNING_PARAMETERS"

class TestHealthAndFeeRoutes:

    def test_health_statuses(self, test_client):
        response = test_client.get("/api/planning/health")

        assert response.status_code == 200
        statuses = {a["sku"]: a["health_status"] for a in response.json()}
        assert statuses == {
            "FAST": "low",
            "SLOW": "excess",
            "DEAD": "slowMoving",
            "GONE": "outOfStock",
        }

    def test_fees(self, test_client):
        response = test_client.get("/api/planning/fees?sku=FAST")

        assert response.status_code == 200
        assert response.json()[0]["currency_code"] == "USD"

# ===================
# PLAN ROUTES
# ===================

class TestReorderPlanRoute:

    def test_default_parameters(self, test_client):
        response = test_client.post("/api/planning/reorder-plan", json={})

        assert response.status_code == 200
        body = response.json()
        assert body["budget_applied"] is False
        assert body["total_units"] == 940

    def test_with_budget(self, test_client):
        response = test_client.post(
            "/api/planning/reorder-plan",
            json={"apply_budget_constraints": True, "max_budget": 1000},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["budget_applied"] is True
        assert body["total_units"] == 200
        assert body["estimated_spend"] == 1000

    def test_invalid_parameters(self, test_client):
        response = test_client.post("/api/planning/reorder-plan", json={"lead_time_days": -1})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_PLANNING_PARAMETERS"
        assert error["details"]["errors"][0]["field"] == "lead_time_days"

# ===================
# REPORT ROUTES
# ===================

class TestReportRoutes:

    def test_low_inventory(self, test_client):
        response = test_client.get("/api/planning/reports/low-inventory?threshold_days=14")

        assert response.status_code == 200
        assert sorted(r["sku"] for r in response.json()) == ["FAST", "GONE"]

    def test_excess_inventory(self, test_client):
        response = test_client.get("/api/planning/reports/excess-inventory")

        assert response.status_code == 200
        assert [a["sku"] for a in response.json()] == ["SLOW"]

class TestErrors:

    def test_upstream_failure_is_503(self, test_client, planning_service):
        with patch.object(planning_service, "_fetcher", side_effect=RuntimeError("down")):
            response = test_client.get("/api/planning/health")

        assert response.status_code == 503
        error = response.json()["error"]
        assert error["code"] == "INVENTORY_DATA_ERROR"
        assert error["details"]["operation"] == "assess inventory health"

    def test_unexpected_error_is_500(self, test_client, planning_service):
        with patch.object(planning_service, "assess_inventory_health", side_effect=KeyError("x")):
            response = test_client.get("/api/planning/health")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"

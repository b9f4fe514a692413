"""
Unit tests for the FBA fee estimate service.
"""

import pytest

from services.fee_service import FeeService, estimate_storage_days


@pytest.fixture
def fee_service():
    return FeeService(currency_code="USD")


# ===================
# STORAGE DAYS
# ===================

class TestEstimateStorageDays:

    def test_quantity_over_mean_daily_sales(self, item_factory):
        assert estimate_storage_days(item_factory(quantity=100, history=[10.0] * 90)) == 10

    def test_rounds_half_up(self, item_factory):
        # 25 / 10 = 2.5
        assert estimate_storage_days(item_factory(quantity=25, history=[10.0] * 5)) == 3

    def test_uses_raw_history_mean(self, item_factory):
        """Mean of the actual entries, not of a padded window."""
        assert estimate_storage_days(item_factory(quantity=40, history=[4.0] * 5)) == 10

    def test_capped_at_a_year(self, item_factory):
        assert estimate_storage_days(item_factory(quantity=10000, history=[1.0] * 90)) == 365

    def test_no_history_assumes_trickle(self, item_factory):
        # 30 / 0.1 = 300 days
        assert estimate_storage_days(item_factory(quantity=30, history=[])) == 300

    def test_zero_sales(self, item_factory):
        assert estimate_storage_days(item_factory(quantity=30, history=[0.0] * 30)) == 365


# ===================
# ESTIMATES
# ===================

class TestEstimate:

    def test_fresh_inventory(self, fee_service, steady_seller):
        estimate = fee_service.estimate(steady_seller)

        assert estimate.sku == "STEADY"
        assert estimate.fulfillment_fee_per_unit == 3.5
        assert estimate.monthly_storage_fee_per_unit == 0.75
        assert estimate.long_term_storage_fee_per_unit is None
        assert estimate.estimated_storage_days == 10
        assert estimate.total_fba_fees_per_unit == pytest.approx(3.5 + 0.75 * 10 / 30)
        assert estimate.referral_fee_percent == 0.15
        assert estimate.currency_code == "USD"

    @pytest.mark.parametrize("age,fee", [(365, None), (366, 1.5)])
    def test_long_term_storage_fee(self, fee_service, item_factory, age, fee):
        item = item_factory(quantity=100, history=[10.0] * 90, inventory_age=age)

        estimate = fee_service.estimate(item)

        assert estimate.long_term_storage_fee_per_unit == fee
        assert estimate.total_fba_fees_per_unit == pytest.approx(3.5 + 0.25 + (fee or 0))

    def test_currency_from_constructor(self, steady_seller):
        assert FeeService(currency_code="EUR").estimate(steady_seller).currency_code == "EUR"

    def test_estimate_all_keeps_order(self, fee_service, sample_inventory):
        estimates = fee_service.estimate_all(sample_inventory)

        assert [e.sku for e in estimates] == ["FAST", "SLOW", "DEAD", "GONE"]

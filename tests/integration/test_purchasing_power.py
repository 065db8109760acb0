"""Integration tests for the purchasing power calculation."""

import pytest

from simulimmo.application.services.purchasing_power import calculate_purchasing_power, compare_cities
from simulimmo.domain.calculator.capacity import calculate_borrowing_capacity
from simulimmo.domain.models import PropertyType, PurchasingPowerInputs, PurchasingPowerResult


@pytest.fixture
def result(sample_purchasing_inputs, city_repository):
    return calculate_purchasing_power(sample_purchasing_inputs, city_repository)


class TestCalculatePurchasingPower:
    """End-to-end checks of calculate_purchasing_power."""

    def test_returns_result(self, result):
        assert isinstance(result, PurchasingPowerResult)
        assert result.total_monthly_income == 4_500

    def test_capacity_uses_defaults(self, result):
        """Insurance 0.36% and a 1 050 € living floor."""
        expected = calculate_borrowing_capacity(4_500, 200, 35, 3.5, 20, 0.36, 1_050)
        assert result.borrowing_capacity == expected
        assert result.capacity.converged
        assert result.capacity.max_monthly_payment == pytest.approx(4_500 * 0.35 - 200)

    def test_budget(self, result):
        """Gross = capacity + contribution; net removes notary and application fees."""
        gross = result.borrowing_capacity + 30_000
        assert result.gross_budget == pytest.approx(gross)
        assert result.notary_fees == pytest.approx(gross * 0.08)
        assert result.application_fees == 1_000
        assert result.net_budget == pytest.approx(gross * 0.92 - 1_000)

    def test_debt_ratio(self, result):
        """Actual ratio includes existing debts and stays near the target."""
        expected = (result.payment.total_payment + 200) / 4_500
        assert result.debt_ratio_actual == pytest.approx(expected)
        assert result.debt_ratio_actual == pytest.approx(0.35, abs=0.001)

    def test_accessible_surfaces(self, result):
        """Net budget over each typed price."""
        surfaces = result.accessible_surfaces
        assert set(surfaces) == {"apartment", "house", "studio"}
        assert surfaces["apartment"] == pytest.approx(result.net_budget / 4_200)
        assert surfaces["house"] > surfaces["apartment"] > surfaces["studio"]

    def test_city_comparison(self, result):
        """Cheapest city buys the most space."""
        names = [c.name for c in result.city_comparison]
        assert names == ["Petiteville", "Testville"]
        surfaces = [c.accessible_surface for c in result.city_comparison]
        assert surfaces == sorted(surfaces, reverse=True)

    def test_advice(self, result):
        """Healthy profile at 35%: debt ratio advice only."""
        assert [a.title for a in result.advice] == ["Taux d'endettement"]

    def test_unknown_city(self, sample_purchasing_inputs, city_repository):
        """Unknown city: no surfaces, comparison still computed."""
        inputs = sample_purchasing_inputs.model_copy(update={"city": "Atlantis"})
        result = calculate_purchasing_power(inputs, city_repository)
        assert result.city is None
        assert all(v == 0.0 for v in result.accessible_surfaces.values())
        assert len(result.city_comparison) == 2

    def test_no_capacity(self, city_repository):
        """Debts above the ratio: nothing to borrow, zero payment."""
        inputs = PurchasingPowerInputs(
            monthly_income=2_000, current_debt=1_900, debt_ratio_pct=33, interest_rate_pct=3.0
        )
        result = calculate_purchasing_power(inputs, city_repository)
        assert result.borrowing_capacity == 0
        assert result.payment.total_payment == 0.0
        assert result.net_budget == 0.0
        assert result.city_comparison == []

    def test_bundled_top_ten(self, sample_purchasing_inputs, bundled_cities):
        """Bundled data: at most ten cities compared."""
        result = calculate_purchasing_power(sample_purchasing_inputs.model_copy(update={"city": "Paris"}), bundled_cities)
        assert 0 < len(result.city_comparison) <= 10
        assert result.city is not None


class TestCompareCities:
    """Tests for compare_cities."""

    def test_top_n(self, city_repository):
        assert len(compare_cities(city_repository, 200_000, PropertyType.HOUSE, top_n=1)) == 1

    def test_no_budget(self, city_repository):
        assert compare_cities(city_repository, 0, PropertyType.APARTMENT) == []

    def test_uses_type_price(self, city_repository):
        (first, _) = compare_cities(city_repository, 210_000, PropertyType.APARTMENT)
        assert first.name == "Petiteville"
        assert first.accessible_surface == pytest.approx(100.0)

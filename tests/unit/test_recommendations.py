"""Unit tests for the advisory rules."""

import dataclasses

import pytest

from simulimmo.application.services.recommendations import (
    InvestmentMetrics,
    investment_recommendations,
    optimization_scenarios,
    purchasing_power_advice,
)
from simulimmo.domain.models import FiscalRegime


@pytest.fixture
def healthy_metrics(sample_city):
    """An investment no rule complains about."""
    return InvestmentMetrics(
        purchase_price=200_000,
        area=50,
        monthly_rent=800,  # 16 €/m², above the 15 €/m² average
        monthly_cashflow=250,
        gross_yield=5.5,
        net_yield=3.5,
        regime=FiscalRegime.LMNP_MICRO_BIC,
        is_furnished=True,
        loan_duration_years=20,
        interest_rate_pct=3.5,
        down_payment=40_000,
        total_investment=216_000,
        management_fee_rate_pct=6.0,
        vacancy_rate_pct=2.0,
        maintenance_rate_pct=2.0,
        renovation_cost=15_000,
        city=sample_city,
    )


def titles(records):
    return [r.title for r in records]


class TestInvestmentRecommendations:
    """Tests for investment_recommendations."""

    def test_healthy_investment(self, healthy_metrics):
        """No rule fires."""
        assert investment_recommendations(healthy_metrics) == []

    def test_all_rules_in_order(self, sample_city):
        """Every rule fires, in declaration order."""
        m = InvestmentMetrics(
            purchase_price=300_000,      # 6 000 €/m² > 4 000 × 1.15
            area=50,
            monthly_rent=500,            # 10 €/m² < 15 × 0.85
            monthly_cashflow=-150,
            gross_yield=2.0,
            net_yield=1.0,
            regime=FiscalRegime.MICRO_FONCIER,
            is_furnished=False,
            loan_duration_years=25,
            interest_rate_pct=4.0,
            down_payment=0,
            total_investment=324_000,
            management_fee_rate_pct=9.0,
            vacancy_rate_pct=8.0,
            city=sample_city,
        )
        assert titles(investment_recommendations(m)) == [
            "Prix d'achat élevé",
            "Loyer potentiellement sous-évalué",
            "Cash-flow négatif",
            "Rentabilité brute faible",
            "Rentabilité nette faible",
            "Meublé vs Non meublé",
            "Durée de prêt élevée",
            "Apport personnel faible",
            "Vacance locative élevée",
            "Frais de gestion élevés",
        ]

    def test_low_cashflow(self, healthy_metrics):
        """Positive but under 100 €."""
        m = dataclasses.replace(healthy_metrics, monthly_cashflow=50)
        assert titles(investment_recommendations(m)) == ["Cash-flow faible"]

    def test_micro_foncier_above_ceiling(self, healthy_metrics):
        """Unfurnished micro-foncier above 15 000 €/year."""
        m = dataclasses.replace(
            healthy_metrics, regime=FiscalRegime.MICRO_FONCIER, is_furnished=False, monthly_rent=1_300
        )
        assert titles(investment_recommendations(m))[:2] == ["Optimisation fiscale possible", "Meublé vs Non meublé"]

    def test_real_below_ceiling(self, healthy_metrics):
        """Unfurnished réel below 15 000 €/year."""
        m = dataclasses.replace(healthy_metrics, regime=FiscalRegime.REAL, is_furnished=False)
        assert titles(investment_recommendations(m)) == ["Simplification fiscale possible", "Meublé vs Non meublé"]

    def test_unknown_city_skips_comparisons(self, healthy_metrics):
        """Without a city, price and rent are not compared."""
        m = dataclasses.replace(healthy_metrics, city=None, purchase_price=900_000, monthly_rent=100)
        found = titles(investment_recommendations(m))
        assert "Prix d'achat élevé" not in found
        assert "Loyer potentiellement sous-évalué" not in found

    def test_vacancy_impact(self, healthy_metrics):
        """Vacancy advice carries the yearly gain."""
        m = dataclasses.replace(healthy_metrics, vacancy_rate_pct=8.0)
        (rec,) = investment_recommendations(m)
        assert rec.impact == "+480 €/an de revenus supplémentaires"

    def test_deterministic(self, healthy_metrics):
        m = dataclasses.replace(healthy_metrics, monthly_cashflow=-10, gross_yield=1)
        assert investment_recommendations(m) == investment_recommendations(m)


class TestOptimizationScenarios:
    """Tests for optimization_scenarios."""

    def test_minimal_scenarios(self, healthy_metrics):
        """Only the rent increase applies to the healthy case."""
        m = dataclasses.replace(healthy_metrics, management_fee_rate_pct=0.0)
        scenarios = optimization_scenarios(m)
        assert [s.name for s in scenarios] == ["Augmentation du loyer de 40 €", "Renégociation du prêt"]
        assert scenarios[0].cashflow_delta == 40
        assert scenarios[0].easiness == "Moyenne"

    def test_all_scenarios_in_order(self, healthy_metrics):
        m = dataclasses.replace(
            healthy_metrics,
            monthly_rent=1_400,
            regime=FiscalRegime.MICRO_FONCIER,
            is_furnished=False,
            maintenance_rate_pct=5.0,
            renovation_cost=0.0,
        )
        scenarios = optimization_scenarios(m)
        assert [s.easiness for s in scenarios] == [
            "Moyenne", "Difficile", "Moyenne", "Complexe", "Variable", "Facile", "Moyenne",
        ]
        deltas = [s.cashflow_delta for s in scenarios]
        assert deltas == [70, 84, 210, None, 167, 28, 140]
        assert scenarios[3].cashflow_impact == "Variable"
        assert scenarios[6].yield_impact == "Variable"

    def test_yield_impact_text(self, healthy_metrics):
        """Yield impact is the delta × 12 over the price."""
        scenario = optimization_scenarios(healthy_metrics)[0]
        assert scenario.yield_impact == "+0,2 %"


class TestPurchasingPowerAdvice:
    """Tests for purchasing_power_advice."""

    def test_all_advice(self):
        advice = purchasing_power_advice(5_000, 200_000, 10, 0.36, 100_000, 3_000)
        assert titles(advice) == ["Apport personnel", "Durée du prêt", "Taux d'endettement", "Budget limité"]

    def test_long_term(self):
        advice = purchasing_power_advice(50_000, 200_000, 30, 0.2, 250_000, 5_000)
        assert titles(advice) == ["Durée du prêt"]

    def test_no_capacity_skips_contribution(self):
        """No capacity, no contribution ratio."""
        assert purchasing_power_advice(0, 0, 20, 0.1, 0, 1_000) == []

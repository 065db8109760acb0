"""Pytest fixtures for simulimmo tests."""

import os
import sys

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from simulimmo.application.services.city_data import CityRepository  # noqa: E402
from simulimmo.core.settings import get_settings  # noqa: E402
from simulimmo.domain.models import (  # noqa: E402
    CityMarketInfo,
    ExpenseProfile,
    FiscalProfile,
    FiscalRegime,
    InvestmentInputs,
    LoanTerms,
    PropertyType,
    PurchasingPowerInputs,
    RentalIncome,
    ValueEvolutionInputs,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_city():
    """A mid-priced city with round numbers."""
    return CityMarketInfo(
        name="Testville",
        region="Test",
        price_per_sqm=4000.0,
        apartment_price_per_sqm=4200.0,
        house_price_per_sqm=3600.0,
        studio_price_per_sqm=5000.0,
        annual_price_growth_pct=2.0,
        rent_per_sqm=15.0,
        property_tax_rate_pct=1.0,
        economic_dynamism=7.0,
        transport_quality=6.0,
        population_growth_pct=0.5,
    )


@pytest.fixture
def cheap_city():
    return CityMarketInfo(
        name="Petiteville",
        price_per_sqm=2000.0,
        apartment_price_per_sqm=2100.0,
        house_price_per_sqm=1800.0,
        studio_price_per_sqm=2500.0,
        annual_price_growth_pct=0.5,
        rent_per_sqm=10.0,
        property_tax_rate_pct=1.5,
        economic_dynamism=4.0,
        transport_quality=3.0,
        population_growth_pct=-0.2,
    )


@pytest.fixture
def city_repository(sample_city, cheap_city):
    """Repository over the two test cities."""
    return CityRepository([sample_city, cheap_city])


@pytest.fixture
def bundled_cities():
    """Repository over the bundled reference data."""
    return CityRepository()


@pytest.fixture
def sample_investment_inputs():
    """A typical leveraged apartment rented unfurnished under micro-foncier."""
    return InvestmentInputs(
        city="Testville",
        purchase_price=200_000.0,
        area=50.0,
        property_type=PropertyType.APARTMENT,
        renovation_cost=5_000.0,
        is_furnished=False,
        notary_fee_rate_pct=8.0,
        down_payment=20_000.0,
        loan=LoanTerms(principal=200_000.0, annual_rate_pct=3.5, term_years=20),
        rental=RentalIncome(
            gross_monthly_rent=900.0,
            vacancy_rate_pct=5.0,
            unpaid_rate_pct=2.0,
            management_fee_rate_pct=7.0,
            rent_increase_pct=1.0,
        ),
        expenses=ExpenseProfile(
            property_tax_annual=1_200.0,
            condo_fees_annual=600.0,
            maintenance_rate_pct=5.0,
        ),
        fiscal=FiscalProfile(regime=FiscalRegime.MICRO_FONCIER, marginal_tax_rate_pct=30.0),
    )


@pytest.fixture
def sample_value_inputs():
    return ValueEvolutionInputs(
        city="Testville",
        property_type=PropertyType.APARTMENT,
        area=60.0,
        rooms=3,
        property_age="recent",
        current_value=250_000.0,
        projection_years=10,
        renovation_budget=10_000.0,
    )


@pytest.fixture
def sample_purchasing_inputs():
    return PurchasingPowerInputs(
        city="Testville",
        monthly_income=4_000.0,
        additional_income=500.0,
        current_debt=200.0,
        personal_contribution=30_000.0,
        interest_rate_pct=3.5,
        loan_duration_years=20,
        debt_ratio_pct=35.0,
        notary_fee_rate_pct=8.0,
        property_type=PropertyType.APARTMENT,
    )


@pytest.fixture
def seeded_rng():
    """Deterministic generator for the value growth noise."""
    return np.random.default_rng(42)

"""Purchasing power calculation.

From income, debts and contribution: borrowing capacity, property budget,
surface reachable in the chosen city and the cities where the budget buys
the most space.
"""

from __future__ import annotations

from typing import Optional

from simulimmo.core.logging import get_logger
from simulimmo.core.settings import get_settings
from simulimmo.domain.calculator.capacity import SolverConfig, solve_borrowing_capacity
from simulimmo.domain.calculator.financial import calculate_total_loan_payment
from simulimmo.domain.calculator.yields import calculate_total_budget
from simulimmo.domain.models.city import PropertyType
from simulimmo.domain.models.inputs import PurchasingPowerInputs
from simulimmo.domain.models.results import CityComparison, PurchasingPowerResult

from .city_data import CityRepository
from .recommendations import purchasing_power_advice

log = get_logger(__name__)

SURFACE_PROPERTY_TYPES = (PropertyType.APARTMENT, PropertyType.HOUSE, PropertyType.STUDIO)


def compare_cities(
    cities: CityRepository,
    budget: float,
    property_type: PropertyType,
    top_n: Optional[int] = None,
) -> list[CityComparison]:
    """Cities ranked by the surface the budget buys, largest first.

    Cities where nothing is reachable are left out.
    """
    if budget <= 0:
        return []
    top_n = top_n if top_n is not None else get_settings().top_cities_count

    comparisons = []
    for city in cities:
        price = city.price_per_sqm_for(property_type)
        surface = budget / price if price > 0 else 0.0
        if surface > 0:
            comparisons.append(
                CityComparison(
                    name=city.name,
                    price_per_sqm=price,
                    accessible_surface=surface,
                    attractivity_index=city.attractivity_index,
                )
            )

    comparisons.sort(key=lambda c: c.accessible_surface, reverse=True)
    return comparisons[:top_n]


def calculate_purchasing_power(
    inputs: PurchasingPowerInputs,
    cities: Optional[CityRepository] = None,
    solver: Optional[SolverConfig] = None,
) -> PurchasingPowerResult:
    """Compute what a household can borrow and buy.

    Args:
        inputs: Parsed calculator inputs
        cities: City reference data (bundled data by default)
        solver: Borrowing capacity solver parameters

    Returns:
        PurchasingPowerResult
    """
    settings = get_settings()
    cities = cities if cities is not None else CityRepository()
    income = inputs.total_monthly_income
    insurance_rate = settings.default_insurance_rate_pct

    log.info(
        "purchasing_power_started",
        income=income,
        debt=inputs.current_debt,
        rate=inputs.interest_rate_pct,
        years=inputs.loan_duration_years,
    )

    capacity = solve_borrowing_capacity(
        income,
        inputs.current_debt,
        inputs.debt_ratio_pct,
        inputs.interest_rate_pct,
        inputs.loan_duration_years,
        insurance_rate_pct=insurance_rate,
        min_living_expense=settings.min_living_expense,
        config=solver,
    )

    budget = calculate_total_budget(
        capacity.amount,
        inputs.personal_contribution,
        inputs.notary_fee_rate_pct,
        settings.application_fees,
    )

    payment = calculate_total_loan_payment(
        capacity.amount, inputs.interest_rate_pct, inputs.loan_duration_years, insurance_rate
    )
    debt_ratio = (payment.total_payment + inputs.current_debt) / income if income > 0 else 0.0

    city = cities.find(inputs.city)
    if inputs.city and city is None:
        log.warning("city_not_found_using_default", city=inputs.city, field="accessible_surfaces")

    accessible_surfaces = {}
    for property_type in SURFACE_PROPERTY_TYPES:
        price = city.price_per_sqm_for(property_type) if city else 0.0
        accessible_surfaces[property_type.value] = budget.net_budget / price if price > 0 else 0.0

    advice = purchasing_power_advice(
        personal_contribution=inputs.personal_contribution,
        borrowing_capacity=capacity.amount,
        loan_duration_years=inputs.loan_duration_years,
        debt_ratio=debt_ratio,
        net_budget=budget.net_budget,
        monthly_income=income,
    )

    result = PurchasingPowerResult(
        total_monthly_income=income,
        current_debt=inputs.current_debt,
        personal_contribution=inputs.personal_contribution,
        capacity=capacity,
        gross_budget=budget.gross_budget,
        net_budget=budget.net_budget,
        notary_fees=budget.notary_fees,
        application_fees=budget.application_fees,
        interest_rate_pct=inputs.interest_rate_pct,
        loan_duration_years=inputs.loan_duration_years,
        payment=payment,
        debt_ratio_actual=debt_ratio,
        city=city,
        property_type=inputs.property_type,
        accessible_surfaces=accessible_surfaces,
        city_comparison=compare_cities(cities, budget.net_budget, inputs.property_type),
        advice=advice,
    )

    log.info(
        "purchasing_power_completed",
        capacity=capacity.amount,
        converged=capacity.converged,
        net_budget=round(budget.net_budget, 2),
        debt_ratio=round(debt_ratio, 3),
    )
    return result

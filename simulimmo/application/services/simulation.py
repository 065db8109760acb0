"""Rental investment simulation.

Combines loan math, expenses, tax, yields, the investment projection, the
performance index and the advisory rules into a SimulationResult.
"""

from __future__ import annotations

from typing import Optional

from simulimmo.core.logging import get_logger
from simulimmo.core.settings import get_settings
from simulimmo.domain.calculator.financial import (
    calculate_irr,
    calculate_total_interest,
    calculate_total_loan_payment,
)
from simulimmo.domain.calculator.scoring import calculate_performance_index
from simulimmo.domain.calculator.tax import calculate_tax
from simulimmo.domain.calculator.yields import (
    calculate_gross_yield,
    calculate_monthly_cashflow,
    calculate_net_yield,
    calculate_notary_fees,
    calculate_price_per_sqm,
)
from simulimmo.domain.models.inputs import InvestmentInputs
from simulimmo.domain.models.results import (
    ExpenseSummary,
    FinancingSummary,
    FiscalitySummary,
    PerformanceSummary,
    ProjectionSummary,
    PropertyDetails,
    RentalIncomeSummary,
    SimulationResult,
)

from .city_data import CityRepository
from .growth import ConstantGrowth
from .projection import ProjectionEngine, default_horizon
from .recommendations import InvestmentMetrics, investment_recommendations, optimization_scenarios

log = get_logger(__name__)


def simulate_investment(
    inputs: InvestmentInputs,
    cities: Optional[CityRepository] = None,
) -> SimulationResult:
    """Run a rental investment simulation.

    Args:
        inputs: Parsed simulator inputs
        cities: City reference data (bundled data by default)

    Returns:
        SimulationResult, built fresh for this run
    """
    settings = get_settings()
    cities = cities if cities is not None else CityRepository()

    city = cities.find(inputs.city)
    if inputs.city and city is None:
        log.warning("city_not_found_using_default", city=inputs.city, field="annual_price_growth_pct")

    log.info(
        "investment_simulation_started",
        city=inputs.city,
        price=inputs.purchase_price,
        loan=inputs.loan.principal,
        regime=inputs.fiscal.regime.value,
    )

    loan = inputs.loan
    rental = inputs.rental
    expenses = inputs.expenses
    fiscal = inputs.fiscal

    # 1. Acquisition
    notary_fees = calculate_notary_fees(inputs.purchase_price, inputs.notary_fee_rate_pct)
    total_investment = inputs.purchase_price + notary_fees + inputs.renovation_cost

    # 2. Loan
    payment = calculate_total_loan_payment(
        loan.principal, loan.annual_rate_pct, loan.term_years, loan.insurance_rate_pct
    )
    total_interest = calculate_total_interest(loan.principal, loan.annual_rate_pct, loan.term_years)

    # 3. Rent and operating expenses
    adjusted_rent = rental.adjusted_monthly_rent
    annual_rent = adjusted_rent * 12.0
    monthly_management = adjusted_rent * rental.management_fee_rate_pct / 100.0
    monthly_property_tax = expenses.property_tax_annual / 12.0
    monthly_condo = expenses.condo_fees_annual / 12.0
    monthly_maintenance = adjusted_rent * expenses.maintenance_rate_pct / 100.0
    expenses_without_loan = monthly_management + monthly_property_tax + monthly_condo + monthly_maintenance

    # 4. Tax (loan payment counted as deductible in the real regimes)
    deductible = expenses_without_loan * 12.0 + payment.loan_payment * 12.0
    annual_tax = calculate_tax(
        fiscal.regime,
        annual_rent,
        deductible,
        fiscal.marginal_tax_rate_pct,
        fiscal.social_tax_rate_pct,
    )
    monthly_tax = annual_tax / 12.0

    # 5. Cash-flow and yields
    monthly_cashflow = calculate_monthly_cashflow(
        adjusted_rent, payment.total_payment, expenses_without_loan, monthly_tax
    )
    total_monthly_expenses = payment.total_payment + expenses_without_loan + monthly_tax
    gross_yield = calculate_gross_yield(rental.gross_monthly_rent * 12.0, total_investment)
    net_yield = calculate_net_yield(
        rental.gross_monthly_rent * 12.0,
        total_investment,
        (expenses_without_loan + monthly_tax) * 12.0,
    )

    # 6. Projection
    growth_rate = city.annual_price_growth_pct if city else settings.default_price_growth_pct
    horizon = default_horizon(loan.term_years)
    engine = ProjectionEngine(ConstantGrowth(growth_rate), horizon)
    projection = engine.project_investment(
        inputs.purchase_price,
        loan,
        rental,
        expenses_without_loan,
        payment.total_payment,
    )
    final = projection[-1]

    equity = total_investment - loan.principal
    irr = calculate_irr(
        equity,
        [y.yearly_cashflow for y in projection[1:]],
        final.property_value - final.loan_balance,
    )

    # 7. Score
    loan_to_value = loan.principal / total_investment if total_investment > 0 else 0.0
    dscr = adjusted_rent / (payment.loan_payment or 1.0)
    performance_index, breakdown = calculate_performance_index(
        gross_yield, net_yield, monthly_cashflow, growth_rate, loan_to_value, dscr
    )

    # 8. Advice
    metrics = InvestmentMetrics(
        purchase_price=inputs.purchase_price,
        area=inputs.area,
        monthly_rent=rental.gross_monthly_rent,
        monthly_cashflow=monthly_cashflow,
        gross_yield=gross_yield,
        net_yield=net_yield,
        regime=fiscal.regime,
        is_furnished=inputs.is_furnished,
        loan_duration_years=loan.term_years,
        interest_rate_pct=loan.annual_rate_pct,
        down_payment=inputs.down_payment,
        total_investment=total_investment,
        management_fee_rate_pct=rental.management_fee_rate_pct,
        vacancy_rate_pct=rental.vacancy_rate_pct,
        maintenance_rate_pct=expenses.maintenance_rate_pct,
        renovation_cost=inputs.renovation_cost,
        city=city,
    )
    recommendations = investment_recommendations(metrics)
    scenarios = optimization_scenarios(metrics)

    result = SimulationResult(
        city=city,
        property=PropertyDetails(
            purchase_price=inputs.purchase_price,
            area=inputs.area,
            property_type=inputs.property_type,
            renovation_cost=inputs.renovation_cost,
            is_furnished=inputs.is_furnished,
            price_per_sqm=calculate_price_per_sqm(inputs.purchase_price, inputs.area),
        ),
        financing=FinancingSummary(
            down_payment=inputs.down_payment,
            loan_amount=loan.principal,
            interest_rate_pct=loan.annual_rate_pct,
            loan_duration_years=loan.term_years,
            monthly_loan_payment=payment.loan_payment,
            monthly_insurance=payment.insurance_payment,
            monthly_debt_service=payment.total_payment,
            total_interest=total_interest,
            notary_fees=notary_fees,
            total_investment=total_investment,
        ),
        rental_income=RentalIncomeSummary(
            monthly_rent=rental.gross_monthly_rent,
            adjusted_monthly_rent=adjusted_rent,
            annual_rent=annual_rent,
            vacancy_rate_pct=rental.vacancy_rate_pct,
            unpaid_rate_pct=rental.unpaid_rate_pct,
            rent_increase_pct=rental.rent_increase_pct,
        ),
        expenses=ExpenseSummary(
            monthly_management_fees=monthly_management,
            monthly_property_tax=monthly_property_tax,
            monthly_condo_fees=monthly_condo,
            monthly_maintenance_cost=monthly_maintenance,
            monthly_expenses_without_loan=expenses_without_loan,
            total_monthly_expenses=total_monthly_expenses,
        ),
        fiscality=FiscalitySummary(
            regime=fiscal.regime,
            marginal_tax_rate_pct=fiscal.marginal_tax_rate_pct,
            social_tax_rate_pct=fiscal.social_tax_rate_pct,
            annual_tax=annual_tax,
            monthly_tax=monthly_tax,
        ),
        performance=PerformanceSummary(
            gross_yield=gross_yield,
            net_yield=net_yield,
            monthly_cashflow=monthly_cashflow,
            annual_cashflow=monthly_cashflow * 12.0,
            performance_index=performance_index,
            score_breakdown=breakdown,
            irr_pct=irr,
        ),
        projection=ProjectionSummary(
            years=horizon,
            property_value_growth_rate_pct=growth_rate,
            financial_projection=projection,
            final_property_value=final.property_value,
            final_loan_balance=final.loan_balance,
            total_cashflow=final.cumulative_cashflow,
        ),
        recommendations=recommendations,
        optimization_scenarios=scenarios,
    )

    log.info(
        "investment_simulation_completed",
        gross_yield=round(gross_yield, 2),
        net_yield=round(net_yield, 2),
        monthly_cashflow=round(monthly_cashflow, 2),
        performance_index=round(performance_index, 1),
        recommendations=len(recommendations),
    )
    return result

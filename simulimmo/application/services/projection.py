"""Year-by-year projections.

Year 0 is the baseline at purchase: no growth applied, nothing collected
or paid yet. Years 1..H apply the growth model, rent indexation, expense
inflation and the loan service while the loan runs.
"""

from __future__ import annotations

from typing import Callable, Optional

import pandas as pd

from simulimmo.core.exceptions import InvalidParameterError
from simulimmo.core.logging import get_logger
from simulimmo.core.settings import get_settings
from simulimmo.domain.calculator.financial import generate_annual_amortization_schedule
from simulimmo.domain.models.loan import LoanTerms
from simulimmo.domain.models.rental import RentalIncome
from simulimmo.domain.models.results import ProjectionYear, ValueYear

from .growth import GrowthModel

log = get_logger(__name__)


def default_horizon(loan_term_years: int = 0) -> int:
    """Investment projection horizon: the default number of years, or the loan term if longer."""
    return max(get_settings().default_projection_years, loan_term_years)


class ProjectionEngine:
    """Projects property value, loan balance and cash-flows over a horizon."""

    def __init__(self, growth: GrowthModel, horizon_years: int):
        if horizon_years < 1:
            raise InvalidParameterError("horizon_years", horizon_years, "must be >= 1")
        self.growth = growth
        self.horizon_years = horizon_years

    def project_investment(
        self,
        purchase_price: float,
        loan: LoanTerms,
        rental: RentalIncome,
        monthly_expenses_without_loan: float,
        monthly_debt_service: float,
    ) -> list[ProjectionYear]:
        """Project a rental investment.

        Args:
            purchase_price: Price of the property in €
            loan: Loan terms; the balance follows its annual schedule
            rental: Rent, losses and yearly rent increase
            monthly_expenses_without_loan: Operating expenses at year 1 in €/month
            monthly_debt_service: Loan payment (incl. insurance) in €/month

        Returns:
            Entries for years 0..horizon
        """
        schedule = generate_annual_amortization_schedule(
            loan.principal, loan.annual_rate_pct, loan.term_years
        )
        rent_growth = rental.rent_increase_pct / 100.0
        # Expenses inflate at half the rent indexation
        expense_growth = rent_growth / 2.0

        value = purchase_price
        cumulative = 0.0
        years = [
            ProjectionYear(
                year=0,
                property_value=purchase_price,
                loan_balance=loan.principal,
                net_wealth=purchase_price - loan.principal,
            )
        ]

        for year in range(1, self.horizon_years + 1):
            value *= 1.0 + self.growth.rate_for_year(year) / 100.0

            yearly_rent = rental.adjusted_monthly_rent * 12.0 * (1.0 + rent_growth) ** (year - 1)
            yearly_expenses = monthly_expenses_without_loan * 12.0 * (1.0 + expense_growth) ** (year - 1)
            in_term = year <= loan.term_years
            yearly_loan = monthly_debt_service * 12.0 if in_term else 0.0

            cashflow = yearly_rent - yearly_expenses - yearly_loan
            cumulative += cashflow

            balance = 0.0
            if in_term and year <= len(schedule):
                balance = schedule[year - 1].remaining_principal

            years.append(
                ProjectionYear(
                    year=year,
                    property_value=value,
                    loan_balance=balance,
                    yearly_rent=yearly_rent,
                    yearly_expenses=yearly_expenses + yearly_loan,
                    yearly_cashflow=cashflow,
                    cumulative_cashflow=cumulative,
                    net_wealth=value - balance + cumulative,
                )
            )

        log.debug(
            "investment_projected",
            horizon=self.horizon_years,
            final_value=round(value, 2),
            total_cashflow=round(cumulative, 2),
        )
        return years

    def project_values(
        self,
        initial_value: float,
        extra_rate_for_year: Optional[Callable[[int], float]] = None,
    ) -> list[ValueYear]:
        """Project a property value alone.

        Args:
            initial_value: Value at year 0 in €
            extra_rate_for_year: Additional growth % per year (e.g. renovation)

        Returns:
            Entries for years 0..horizon; growth_rate_pct is the total rate applied
        """
        values = [ValueYear(year=0, value=initial_value, growth_rate_pct=0.0)]
        value = initial_value

        for year in range(1, self.horizon_years + 1):
            rate = self.growth.rate_for_year(year)
            if extra_rate_for_year is not None:
                rate += extra_rate_for_year(year)
            value *= 1.0 + rate / 100.0
            values.append(ValueYear(year=year, value=value, growth_rate_pct=rate))

        return values

    @staticmethod
    def to_frame(years: list[ProjectionYear]) -> pd.DataFrame:
        """Investment projection as a DataFrame indexed by year."""
        return pd.DataFrame([y.to_dict() for y in years]).set_index("Année")

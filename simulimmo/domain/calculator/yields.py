"""Yield, cash-flow and acquisition cost metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass


def _is_positive(*values: float) -> bool:
    return all(math.isfinite(v) and v > 0 for v in values)


@dataclass(frozen=True)
class BudgetBreakdown:
    """Property budget derived from borrowing capacity and contribution."""
    gross_budget: float
    net_budget: float
    notary_fees: float
    application_fees: float


def calculate_gross_yield(annual_rent: float, total_cost: float) -> float:
    """Gross yield % (annual rent / acquisition cost).

    Args:
        annual_rent: Yearly rent in €
        total_cost: Acquisition cost in €

    Returns:
        Gross yield percentage, 0.0 if rent or cost is not positive
    """
    if not _is_positive(annual_rent, total_cost):
        return 0.0
    return annual_rent / total_cost * 100.0


def calculate_net_yield(annual_rent: float, total_cost: float, annual_expenses: float) -> float:
    """Net yield % ((annual rent − expenses) / acquisition cost). Can be negative."""
    if not _is_positive(annual_rent, total_cost):
        return 0.0
    return (annual_rent - annual_expenses) / total_cost * 100.0


def calculate_notary_fees(price: float, rate_pct: float) -> float:
    if not _is_positive(price) or not math.isfinite(rate_pct):
        return 0.0
    return price * rate_pct / 100.0


def calculate_price_per_sqm(price: float, area: float) -> float:
    if not _is_positive(price, area):
        return 0.0
    return price / area


def estimate_property_tax(property_value: float, tax_rate_pct: float) -> float:
    """Yearly taxe foncière estimated as a flat % of the property value."""
    if not _is_positive(property_value, tax_rate_pct):
        return 0.0
    return property_value * tax_rate_pct / 100.0


def calculate_future_value(value: float, annual_growth_pct: float, years: int) -> float:
    """Compound a value over a number of years.

    Args:
        value: Current value in €
        annual_growth_pct: Yearly growth % (may be negative)
        years: Number of years

    Returns:
        Future value; the value itself if years <= 0 or value <= 0
    """
    if value <= 0 or years <= 0:
        return value
    return value * (1.0 + annual_growth_pct / 100.0) ** years


def calculate_monthly_cashflow(
    adjusted_rent: float,
    loan_payment: float,
    other_expenses: float,
    monthly_tax: float = 0.0,
) -> float:
    """Monthly cash-flow: collected rent − (loan service + expenses + tax)."""
    return adjusted_rent - (loan_payment + other_expenses + monthly_tax)


def calculate_total_budget(
    borrowing_capacity: float,
    personal_contribution: float,
    notary_fee_rate_pct: float,
    application_fees: float = 1000.0,
) -> BudgetBreakdown:
    """Budget available for the purchase itself.

    Notary fees are taken on the gross budget (loan + contribution); the
    net budget is floored at 0.

    Args:
        borrowing_capacity: Borrowable principal in €
        personal_contribution: Apport in €
        notary_fee_rate_pct: Notary fees %
        application_fees: Bank application fees in €

    Returns:
        BudgetBreakdown
    """
    gross = borrowing_capacity + personal_contribution
    notary = gross * notary_fee_rate_pct / 100.0
    net = max(0.0, gross - notary - application_fees)
    return BudgetBreakdown(
        gross_budget=gross,
        net_budget=net,
        notary_fees=notary,
        application_fees=application_fees,
    )


def calculate_loan_amount(
    purchase_price: float,
    notary_fees: float,
    renovation_cost: float,
    down_payment: float,
) -> float:
    """Amount to borrow once the contribution is applied, never negative."""
    return max(0.0, purchase_price + notary_fees + renovation_cost - down_payment)

"""Loan math.

Monthly annuity payment, amortization schedules, insurance and IRR.
Degenerate inputs (no principal, no duration, negative or non-finite
rates) yield zero amounts or empty schedules instead of raising.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import numpy_financial as npf
import pandas as pd

from simulimmo.domain.models.loan import AmortizationEntry, LoanPaymentBreakdown


def _is_positive(*values: float) -> bool:
    return all(math.isfinite(v) and v > 0 for v in values)


def _is_degenerate(principal: float, annual_rate_pct: float, years: float) -> bool:
    values = (principal, annual_rate_pct, years)
    if not all(math.isfinite(v) for v in values):
        return True
    return principal <= 0 or int(years * 12) < 1 or annual_rate_pct < 0


def calculate_monthly_payment(
    principal: float,
    annual_rate_pct: float,
    years: int,
) -> float:
    """Calculate monthly loan payment (principal + interest only).

    Args:
        principal: Loan amount in €
        annual_rate_pct: Annual interest rate as percentage (e.g., 3.5 for 3.5%)
        years: Loan term in years

    Returns:
        Monthly payment amount in €, 0.0 for a degenerate loan
    """
    if _is_degenerate(principal, annual_rate_pct, years):
        return 0.0

    months = int(years * 12)
    monthly_rate = (annual_rate_pct / 100.0) / 12.0

    if monthly_rate == 0:
        return principal / months

    return float(-npf.pmt(monthly_rate, months, principal))


def calculate_insurance(principal: float, annual_insurance_pct: float) -> float:
    """Calculate monthly borrower insurance, charged on the initial principal.

    Args:
        principal: Initial loan amount in €
        annual_insurance_pct: Annual insurance rate as percentage

    Returns:
        Monthly insurance amount in €
    """
    if not _is_positive(principal, annual_insurance_pct):
        return 0.0
    return (principal * (annual_insurance_pct / 100.0)) / 12.0


def calculate_total_loan_payment(
    principal: float,
    annual_rate_pct: float,
    years: int,
    annual_insurance_pct: float = 0.0,
) -> LoanPaymentBreakdown:
    """Monthly payment split between repayment and insurance."""
    return LoanPaymentBreakdown(
        loan_payment=calculate_monthly_payment(principal, annual_rate_pct, years),
        insurance_payment=calculate_insurance(principal, annual_insurance_pct),
    )


def generate_amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    years: int,
) -> list[AmortizationEntry]:
    """Generate the monthly amortization schedule.

    The last entry repays whatever balance is left so the schedule always
    ends at exactly 0.

    Args:
        principal: Loan amount in €
        annual_rate_pct: Annual interest rate %
        years: Loan term in years

    Returns:
        One AmortizationEntry per month, empty for a degenerate loan
    """
    if _is_degenerate(principal, annual_rate_pct, years):
        return []

    months = int(years * 12)
    monthly_rate = (annual_rate_pct / 100.0) / 12.0
    payment = calculate_monthly_payment(principal, annual_rate_pct, years)

    schedule: list[AmortizationEntry] = []
    balance = principal

    for month in range(1, months + 1):
        interest = balance * monthly_rate
        if month == months:
            principal_portion = balance
            period_payment = balance + interest
            balance = 0.0
        else:
            principal_portion = payment - interest
            period_payment = payment
            balance = max(0.0, balance - principal_portion)

        schedule.append(
            AmortizationEntry(
                period=month,
                payment=period_payment,
                principal_portion=principal_portion,
                interest_portion=interest,
                remaining_principal=balance,
            )
        )

    return schedule


def generate_annual_amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    years: int,
) -> list[AmortizationEntry]:
    """Group the monthly schedule into yearly entries.

    Each year's remaining principal is the one left after its last month.
    """
    monthly = generate_amortization_schedule(principal, annual_rate_pct, years)
    annual: list[AmortizationEntry] = []

    for start in range(0, len(monthly), 12):
        bucket = monthly[start:start + 12]
        annual.append(
            AmortizationEntry(
                period=start // 12 + 1,
                payment=sum(e.payment for e in bucket),
                principal_portion=sum(e.principal_portion for e in bucket),
                interest_portion=sum(e.interest_portion for e in bucket),
                remaining_principal=bucket[-1].remaining_principal,
            )
        )

    return annual


def calculate_total_interest(principal: float, annual_rate_pct: float, years: int) -> float:
    """Total interest paid over the life of the loan (payment × months − principal)."""
    if _is_degenerate(principal, annual_rate_pct, years):
        return 0.0
    payment = calculate_monthly_payment(principal, annual_rate_pct, years)
    return max(0.0, payment * int(years * 12) - principal)


def calculate_remaining_balance(
    principal: float,
    annual_rate_pct: float,
    years: int,
    months_paid: int,
) -> float:
    """Outstanding principal after a number of monthly payments.

    Args:
        principal: Loan amount in €
        annual_rate_pct: Annual interest rate %
        years: Loan term in years
        months_paid: Payments already made

    Returns:
        Remaining balance in €, the full principal before the first payment
        and 0.0 once the loan is repaid
    """
    if _is_degenerate(principal, annual_rate_pct, years):
        return 0.0
    if months_paid <= 0:
        return principal

    schedule = generate_amortization_schedule(principal, annual_rate_pct, years)
    if months_paid >= len(schedule):
        return 0.0
    return schedule[months_paid - 1].remaining_principal


def calculate_irr(
    initial_investment: float,
    cash_flows: Sequence[float],
    final_value: float = 0.0,
) -> float | None:
    """Internal rate of return of an investment, in %.

    Args:
        initial_investment: Cash put in at year 0 in € (positive)
        cash_flows: Yearly cash flows from year 1 in €
        final_value: Amount recovered at the end of the last year in €

    Returns:
        IRR percentage, or None when there is nothing to compute or
        numpy-financial finds no finite solution
    """
    if initial_investment <= 0 or len(cash_flows) == 0:
        return None

    flows = np.concatenate(([-initial_investment], np.asarray(cash_flows, dtype=float)))
    flows[-1] += final_value
    irr = npf.irr(flows)
    if irr is None or not np.isfinite(irr):
        return None
    return float(irr) * 100.0


def schedule_to_frame(schedule: list[AmortizationEntry]) -> pd.DataFrame:
    """Amortization schedule as a DataFrame (French column labels)."""
    columns = ["Période", "Mensualité", "Capital", "Intérêts", "Capital Restant Dû"]
    return pd.DataFrame(
        [
            (
                e.period,
                e.payment,
                e.principal_portion,
                e.interest_portion,
                e.remaining_principal,
            )
            for e in schedule
        ],
        columns=columns,
    )
